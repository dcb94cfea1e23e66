"""Comparison engine — value scores, radar axes and summary picks for selected hotels."""

import math
from dataclasses import dataclass, field

from hotelscout.schemas.hotel import HotelRecord

MIN_COMPARE = 2

REVIEWS_FULL_SCALE = 500
AMENITIES_FULL_SCALE = 15
KM_PENALTY = 10             # location points lost per km
DEFAULT_DISTANCE_KM = 5     # location axis when distance is unknown
MISSING_DISTANCE = 999      # "most central" pick when distance is unknown
SHORT_NAME_LENGTH = 30

RADAR_AXES = ("Price", "Rating", "Reviews", "Location", "Amenities")

STATUS_EMPTY = "empty"
STATUS_NEEDS_MORE = "needs_more"
STATUS_READY = "ready"


@dataclass
class HotelMetrics:
    hotel_id: str
    label: str
    short_name: str
    value_score: int
    radar: dict[str, float]


@dataclass
class ComparisonResult:
    metrics: list[HotelMetrics]
    best_value: int
    highest_rated: int
    most_central: int

    def radar_rows(self) -> list[dict]:
        """One row per axis keyed Hotel1..HotelN, the shape radar charts consume."""
        return [
            {
                "axis": axis,
                **{f"Hotel{i + 1}": m.radar[axis] for i, m in enumerate(self.metrics)},
            }
            for axis in RADAR_AXES
        ]


@dataclass
class CompareView:
    status: str
    message: str | None = None
    result: ComparisonResult | None = None
    hotels: list[HotelRecord] = field(default_factory=list)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _price_inverse(price: float, max_price: float) -> float:
    if max_price <= 0:
        return 100.0
    return 100 - (price / max_price * 100)


def _rating_score(rating: float) -> float:
    return rating / 5 * 100


def value_score(hotel: HotelRecord, max_price: float) -> int:
    """Average of inverse-normalized price and normalized rating, 0-100."""
    return _round_half_up((_price_inverse(hotel.price, max_price) + _rating_score(hotel.rating)) / 2)


def radar_scores(hotel: HotelRecord, max_price: float) -> dict[str, float]:
    distance = hotel.distance if hotel.distance is not None else DEFAULT_DISTANCE_KM
    return {
        "Price": _price_inverse(hotel.price, max_price),
        "Rating": _rating_score(hotel.rating),
        "Reviews": min(hotel.review_count / REVIEWS_FULL_SCALE * 100, 100),
        "Location": max(0, 100 - distance * KM_PENALTY),
        "Amenities": min(len(hotel.amenities) / AMENITIES_FULL_SCALE * 100, 100),
    }


def _first_best(values: list[float], better) -> int:
    """Index of the best value; ties keep the lowest index."""
    best = 0
    for idx, value in enumerate(values):
        if better(value, values[best]):
            best = idx
    return best


def compare_hotels(hotels: list[HotelRecord]) -> ComparisonResult:
    """Derive per-hotel metrics across a selection of at least two hotels."""
    if len(hotels) < MIN_COMPARE:
        raise ValueError(f"At least {MIN_COMPARE} hotels are required for comparison")

    max_price = max(h.price for h in hotels)

    metrics = [
        HotelMetrics(
            hotel_id=h.hotel_id,
            label=f"Hotel {i + 1}",
            short_name=(h.name or "Unknown")[:SHORT_NAME_LENGTH],
            value_score=value_score(h, max_price),
            radar=radar_scores(h, max_price),
        )
        for i, h in enumerate(hotels)
    ]

    distances = [h.distance if h.distance is not None else MISSING_DISTANCE for h in hotels]

    return ComparisonResult(
        metrics=metrics,
        best_value=_first_best([m.value_score for m in metrics], lambda a, b: a > b),
        highest_rated=_first_best([h.rating for h in hotels], lambda a, b: a > b),
        most_central=_first_best(distances, lambda a, b: a < b),
    )


def build_compare_view(selection: list[HotelRecord]) -> CompareView:
    """Compare-panel state: empty, waiting for more hotels, or ready with metrics."""
    if not selection:
        return CompareView(
            status=STATUS_EMPTY,
            message="No hotels selected for comparison. Add hotels from the search results.",
        )

    if len(selection) < MIN_COMPARE:
        needed = MIN_COMPARE - len(selection)
        noun = "hotel" if needed == 1 else "hotels"
        return CompareView(
            status=STATUS_NEEDS_MORE,
            message=f"Select at least {needed} more {noun} to compare",
            hotels=list(selection),
        )

    return CompareView(
        status=STATUS_READY,
        message=f"Ready to compare {len(selection)} hotels",
        result=compare_hotels(selection),
        hotels=list(selection),
    )
