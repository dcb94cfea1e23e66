"""Search session — drives one hotel search view: form, criteria, reveal and compare panel."""

import logging
from dataclasses import dataclass, field, replace
from datetime import date

from hotelscout.client.api import HotelSearchClient, SearchError
from hotelscout.client.store import HotelStore
from hotelscout.config import settings
from hotelscout.data.city_codes import get_city_code
from hotelscout.schemas.hotel import HotelRecord
from hotelscout.services.comparison import CompareView, build_compare_view
from hotelscout.services.pipeline import (
    SORT_OPTIONS,
    FilterCriteria,
    PageState,
    PipelineResult,
    parse_price_range,
    run_pipeline,
)

logger = logging.getLogger(__name__)

STATUS_IDLE = "idle"
STATUS_LOADING = "loading"
STATUS_ERROR = "error"
STATUS_EMPTY = "empty"
STATUS_RESULTS = "results"


@dataclass(frozen=True)
class SearchParams:
    city: str
    check_in: str
    check_out: str
    adults: int = 2


@dataclass
class SearchView:
    status: str
    displayed: list[HotelRecord] = field(default_factory=list)
    has_more: bool = False
    total: int = 0
    message: str | None = None


def validate_search_params(params: SearchParams) -> SearchParams:
    """Normalized params (city resolved to a code); raises ValueError with a form message."""
    if not params.city.strip() or not params.check_in or not params.check_out:
        raise ValueError("Please fill in all fields")
    try:
        check_in = date.fromisoformat(params.check_in)
        check_out = date.fromisoformat(params.check_out)
    except ValueError:
        raise ValueError("Dates must be in YYYY-MM-DD format") from None
    if check_out <= check_in:
        raise ValueError("Check-out date must be after check-in date")
    if params.adults < 1:
        raise ValueError("At least one adult is required")
    return replace(params, city=get_city_code(params.city))


class SearchSession:
    def __init__(
        self,
        store: HotelStore,
        api: HotelSearchClient,
        page_size: int | None = None,
    ):
        self.store = store
        self.api = api
        self.criteria = FilterCriteria()
        self.page = PageState(page_size=page_size or settings.page_size)
        self.params: SearchParams | None = None

    async def search(self, params: SearchParams) -> bool:
        """Run a search; returns False when a newer search superseded this one."""
        params = validate_search_params(params)
        self.params = params
        generation = self.store.begin_search()
        logger.info(f"Search #{generation}: {params.city} {params.check_in}→{params.check_out}")

        try:
            hotels = await self.api.search_hotels(
                params.city, params.check_in, params.check_out, params.adults
            )
        except SearchError as e:
            applied = self.store.receive_error(generation, e.message)
        except Exception:
            self.store.receive_error(generation, "Failed to fetch hotels")
            raise
        else:
            applied = self.store.receive_results(generation, hotels)

        if applied:
            self.page = self.page.reset()
        return applied

    def set_criteria(self, **changes) -> None:
        """Update filter/sort criteria; the reveal boundary goes back to one page."""
        criteria = replace(self.criteria, **changes)
        if criteria.sort_by not in SORT_OPTIONS:
            raise ValueError(f"Unknown sort option: {criteria.sort_by!r}")
        parse_price_range(criteria.price_range)
        self.criteria = criteria
        self.page = self.page.reset()

    def result(self) -> PipelineResult:
        return run_pipeline(self.store.results, self.criteria, self.page)

    def load_more(self) -> bool:
        """Reveal one more page; a no-op once everything is shown."""
        if self.store.state.loading or not self.result().has_more:
            return False
        self.page = self.page.next()
        return True

    @property
    def view(self) -> SearchView:
        state = self.store.state
        if state.loading:
            return SearchView(status=STATUS_LOADING)
        if state.error:
            return SearchView(status=STATUS_ERROR, message=state.error)
        if not state.has_searched:
            return SearchView(status=STATUS_IDLE)
        if not state.results:
            return SearchView(status=STATUS_EMPTY, message="No hotels found for this search")

        result = self.result()
        if not result.total:
            return SearchView(status=STATUS_EMPTY, message="No hotels match your filters")
        return SearchView(
            status=STATUS_RESULTS,
            displayed=result.displayed,
            has_more=result.has_more,
            total=result.total,
        )

    @property
    def compare_view(self) -> CompareView:
        return build_compare_view(self.store.compare)
