"""Result pipeline — filters, sorts and progressively reveals a hotel result set."""

from dataclasses import dataclass, field, replace

from hotelscout.schemas.hotel import HotelRecord

MISSING_DISTANCE = 999

SORT_POPULARITY = "popularity"
SORT_PRICE_LOW = "price-low"
SORT_PRICE_HIGH = "price-high"
SORT_RATING = "rating"
SORT_DISTANCE = "distance"

SORT_OPTIONS = (SORT_POPULARITY, SORT_PRICE_LOW, SORT_PRICE_HIGH, SORT_RATING, SORT_DISTANCE)

PRICE_RANGE_ALL = "all"


@dataclass(frozen=True)
class FilterCriteria:
    search_term: str = ""
    price_range: str = PRICE_RANGE_ALL  # "all" or "min-max"
    min_rating: float = 0
    sort_by: str = SORT_POPULARITY


@dataclass(frozen=True)
class PageState:
    page: int = 1
    page_size: int = 10

    def next(self) -> "PageState":
        return replace(self, page=self.page + 1)

    def reset(self) -> "PageState":
        return replace(self, page=1)


@dataclass(frozen=True)
class PipelineResult:
    displayed: list[HotelRecord] = field(default_factory=list)
    has_more: bool = False
    total: int = 0


def parse_price_range(price_range: str) -> tuple[float, float] | None:
    """'75-150' -> (75.0, 150.0); 'all' -> None."""
    if not price_range or price_range == PRICE_RANGE_ALL:
        return None
    low, _, high = price_range.partition("-")
    try:
        return float(low), float(high)
    except ValueError:
        raise ValueError(f"Invalid price range: {price_range!r}") from None


def filter_hotels(hotels: list[HotelRecord], criteria: FilterCriteria) -> list[HotelRecord]:
    """Name match, then price bounds, then rating floor; a hotel must pass all three."""
    filtered = list(hotels)

    if criteria.search_term:
        term = criteria.search_term.lower()
        filtered = [h for h in filtered if h.name and term in h.name.lower()]

    bounds = parse_price_range(criteria.price_range)
    if bounds:
        low, high = bounds
        filtered = [h for h in filtered if low <= h.price <= high]

    if criteria.min_rating > 0:
        filtered = [h for h in filtered if h.rating >= criteria.min_rating]

    return filtered


def _distance_key(hotel: HotelRecord) -> float:
    return hotel.distance if hotel.distance is not None else MISSING_DISTANCE


def sort_hotels(hotels: list[HotelRecord], sort_by: str) -> list[HotelRecord]:
    """Stable sort; popularity (and anything unrecognized) keeps upstream order."""
    if sort_by == SORT_PRICE_LOW:
        return sorted(hotels, key=lambda h: h.price)
    if sort_by == SORT_PRICE_HIGH:
        return sorted(hotels, key=lambda h: h.price, reverse=True)
    if sort_by == SORT_RATING:
        return sorted(hotels, key=lambda h: h.rating, reverse=True)
    if sort_by == SORT_DISTANCE:
        return sorted(hotels, key=_distance_key)
    return list(hotels)


def paginate(hotels: list[HotelRecord], page: PageState) -> PipelineResult:
    """Cumulative reveal of the first page * page_size items."""
    end = page.page * page.page_size
    return PipelineResult(
        displayed=hotels[:end],
        has_more=end < len(hotels),
        total=len(hotels),
    )


def run_pipeline(
    hotels: list[HotelRecord],
    criteria: FilterCriteria,
    page: PageState,
) -> PipelineResult:
    filtered = filter_hotels(hotels, criteria)
    return paginate(sort_hotels(filtered, criteria.sort_by), page)
