"""Supabase Auth client — password sign-in/sign-up, sign-out and auth-state events."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import httpx

from hotelscout.config import settings

logger = logging.getLogger(__name__)

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"

AuthListener = Callable[[str, "Session | None"], None]


class AuthError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass(frozen=True)
class Session:
    access_token: str
    refresh_token: str | None
    expires_at: datetime
    user_id: str
    email: str | None = None

    @property
    def is_expired(self) -> bool:
        return datetime.now(timezone.utc) >= self.expires_at

    @classmethod
    def from_payload(cls, data: dict) -> "Session":
        user = data.get("user") or {}
        if data.get("expires_at"):
            expires_at = datetime.fromtimestamp(int(data["expires_at"]), tz=timezone.utc)
        else:
            expires_at = datetime.now(timezone.utc) + timedelta(seconds=int(data.get("expires_in", 3600)))
        return cls(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            expires_at=expires_at,
            user_id=user.get("id", ""),
            email=user.get("email"),
        )


@dataclass(frozen=True)
class SignUpResult:
    user_id: str | None
    session: Session | None

    @property
    def needs_confirmation(self) -> bool:
        return self.session is None


def friendly_auth_error(message: str | None, signing_up: bool = False) -> str:
    """Map provider error text to the message shown on the login form."""
    message = message or ""
    if signing_up:
        if "already registered" in message or "already exists" in message:
            return "Email already registered. Please login instead."
        return message or "Signup failed. Please try again."
    if "Invalid login credentials" in message:
        return "Invalid email or password."
    if "Email not confirmed" in message:
        return "Please confirm your email before logging in."
    return message or "Login failed. Please try again."


class SupabaseAuth:
    """Holds the current session and notifies listeners on sign-in/sign-out."""

    def __init__(
        self,
        url: str | None = None,
        anon_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._url = (url or settings.supabase_url).rstrip("/")
        self._anon_key = anon_key if anon_key is not None else settings.supabase_anon_key
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._session: Session | None = None
        self._listeners: list[AuthListener] = []

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=f"{self._url}/auth/v1",
                timeout=30.0,
                headers={"apikey": self._anon_key},
                transport=self._transport,
            )
        return self._client

    async def _post(self, path: str, signing_up: bool = False, **kwargs) -> dict:
        client = await self._get_client()
        try:
            resp = await client.post(path, **kwargs)
        except httpx.RequestError as e:
            logger.error(f"Auth provider unreachable: {e}")
            raise AuthError("Authentication service unavailable") from e

        if resp.is_error:
            try:
                body = resp.json()
            except ValueError:
                body = {}
            if not isinstance(body, dict):
                body = {}
            raw = body.get("msg") or body.get("error_description") or body.get("message") or body.get("error")
            raise AuthError(friendly_auth_error(raw, signing_up), resp.status_code)

        return resp.json() if resp.content else {}

    # Subscription

    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]:
        """Register a listener; returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: str, session: Session | None) -> None:
        for listener in list(self._listeners):
            listener(event, session)

    # Session

    def get_session(self) -> Session | None:
        """Current session, or None when signed out or expired."""
        if self._session and self._session.is_expired:
            logger.info("Auth session expired")
            self._session = None
            self._emit(SIGNED_OUT, None)
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self.get_session() is not None

    @property
    def user_id(self) -> str | None:
        session = self.get_session()
        return session.user_id if session else None

    # Operations

    async def sign_in(self, email: str, password: str) -> Session:
        data = await self._post(
            "/token",
            params={"grant_type": "password"},
            json={"email": email.strip(), "password": password},
        )
        if not data.get("access_token"):
            raise AuthError("Please check your email to confirm your account before logging in.")
        self._session = Session.from_payload(data)
        logger.info(f"Signed in user {self._session.user_id}")
        self._emit(SIGNED_IN, self._session)
        return self._session

    async def sign_up(self, email: str, password: str, redirect_to: str | None = None) -> SignUpResult:
        params = {"redirect_to": redirect_to} if redirect_to else None
        data = await self._post(
            "/signup",
            signing_up=True,
            params=params,
            json={"email": email.strip(), "password": password},
        )
        if data.get("access_token"):
            self._session = Session.from_payload(data)
            self._emit(SIGNED_IN, self._session)
            return SignUpResult(user_id=self._session.user_id, session=self._session)

        # Email confirmation pending: the provider returns the bare user
        user = data.get("user") or data
        return SignUpResult(user_id=user.get("id"), session=None)

    async def sign_out(self) -> None:
        session = self._session
        self._session = None
        if session:
            try:
                await self._post("/logout", headers={"Authorization": f"Bearer {session.access_token}"})
            except AuthError as e:
                logger.warning(f"Sign-out request failed, local session cleared anyway: {e.message}")
        self._emit(SIGNED_OUT, None)

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None
