"""Hotel store — search results and the compare selection, updated through pure reducers.

The store is the single owner of shared client state. Every update goes
through a reducer that returns a new ``HotelState``; the store swaps it in and
persists the compare selection whenever that selection changes.

Searches are tagged with a generation number. A response is applied only if
its generation is still the latest, so a slow stale response can never
overwrite the results of a newer search.
"""

import json
import logging
from dataclasses import dataclass, replace

from pydantic import ValidationError

from hotelscout.client.storage import JsonFileStorage, KeyValueStorage
from hotelscout.config import settings
from hotelscout.schemas.hotel import HotelRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HotelState:
    results: tuple[HotelRecord, ...] = ()
    compare: tuple[HotelRecord, ...] = ()
    generation: int = 0
    loading: bool = False
    error: str | None = None
    has_searched: bool = False


# ─── Reducers ───

def begin_search(state: HotelState) -> HotelState:
    return replace(state, generation=state.generation + 1, loading=True, error=None)


def set_results(state: HotelState, hotels: list[HotelRecord]) -> HotelState:
    return replace(state, results=tuple(hotels), loading=False, error=None, has_searched=True)


def search_failed(state: HotelState, message: str) -> HotelState:
    return replace(state, results=(), loading=False, error=message, has_searched=True)


def add_to_compare(state: HotelState, hotel: HotelRecord) -> HotelState:
    if any(h.hotel_id == hotel.hotel_id for h in state.compare):
        return state
    return replace(state, compare=state.compare + (hotel,))


def remove_from_compare(state: HotelState, hotel_id: str) -> HotelState:
    return replace(state, compare=tuple(h for h in state.compare if h.hotel_id != hotel_id))


def clear_compare(state: HotelState) -> HotelState:
    return replace(state, compare=())


# ─── Persistence ───

def load_selection(storage: KeyValueStorage, key: str) -> list[HotelRecord]:
    """Persisted compare selection; empty when absent or unreadable."""
    raw = storage.get(key)
    if raw is None:
        return []
    try:
        items = json.loads(raw)
        if not isinstance(items, list):
            raise ValueError("compare selection is not a list")
        hotels = [HotelRecord.model_validate(item) for item in items]
    except (ValueError, ValidationError) as e:
        logger.warning(f"Discarding corrupt compare selection under '{key}': {e}")
        return []

    unique: dict[str, HotelRecord] = {}
    for h in hotels:
        unique.setdefault(h.hotel_id, h)
    return list(unique.values())


def save_selection(storage: KeyValueStorage, key: str, hotels: tuple[HotelRecord, ...]) -> None:
    storage.set(key, json.dumps([h.to_json() for h in hotels]))


class HotelStore:
    """Owns HotelState and persists the compare selection through a storage port."""

    def __init__(self, storage: KeyValueStorage | None = None, storage_key: str | None = None):
        self._storage = storage if storage is not None else JsonFileStorage(settings.compare_storage_path)
        self._key = storage_key or settings.compare_storage_key
        self._state = HotelState(compare=tuple(load_selection(self._storage, self._key)))

    @property
    def state(self) -> HotelState:
        return self._state

    @property
    def results(self) -> list[HotelRecord]:
        return list(self._state.results)

    @property
    def compare(self) -> list[HotelRecord]:
        return list(self._state.compare)

    # Search lifecycle

    def begin_search(self) -> int:
        """Start a search and return its generation token."""
        self._state = begin_search(self._state)
        return self._state.generation

    def is_current(self, generation: int) -> bool:
        return generation == self._state.generation

    def receive_results(self, generation: int, hotels: list[HotelRecord]) -> bool:
        if not self.is_current(generation):
            logger.debug(f"Dropping stale results for search #{generation}")
            return False
        self._state = set_results(self._state, hotels)
        return True

    def receive_error(self, generation: int, message: str) -> bool:
        if not self.is_current(generation):
            logger.debug(f"Dropping stale error for search #{generation}")
            return False
        self._state = search_failed(self._state, message)
        return True

    # Compare selection

    def is_selected(self, hotel_id: str) -> bool:
        return any(h.hotel_id == hotel_id for h in self._state.compare)

    def add_to_compare(self, hotel: HotelRecord) -> None:
        new_state = add_to_compare(self._state, hotel)
        if new_state is self._state:
            return
        self._state = new_state
        save_selection(self._storage, self._key, self._state.compare)

    def remove_from_compare(self, hotel_id: str) -> None:
        self._state = remove_from_compare(self._state, hotel_id)
        save_selection(self._storage, self._key, self._state.compare)

    def toggle_compare(self, hotel: HotelRecord) -> None:
        if self.is_selected(hotel.hotel_id):
            self.remove_from_compare(hotel.hotel_id)
        else:
            self.add_to_compare(hotel)

    def clear_compare(self) -> None:
        self._state = clear_compare(self._state)
        self._storage.remove(self._key)
