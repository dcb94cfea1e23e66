from __future__ import annotations

import pytest

from factories import build_hotel
from hotelscout.services.comparison import (
    build_compare_view,
    compare_hotels,
    radar_scores,
    value_score,
)


def test_cheaper_hotel_with_equal_rating_scores_higher():
    hotels = [build_hotel("a", price=100, rating=5.0), build_hotel("b", price=200, rating=5.0)]

    result = compare_hotels(hotels)

    assert [m.value_score for m in result.metrics] == [75, 50]
    assert result.best_value == 0


def test_value_score_rounds_half_up():
    # price inverse 25, rating 80 -> 52.5
    hotel = build_hotel("a", price=75, rating=4.0)

    assert value_score(hotel, max_price=100) == 53


def test_radar_axes():
    hotel = build_hotel(
        "a", price=50, rating=4.0, review_count=250, distance=2.5,
        amenities=["WiFi", "Pool", "Parking"],
    )

    radar = radar_scores(hotel, max_price=200)

    assert radar["Price"] == pytest.approx(75)
    assert radar["Rating"] == pytest.approx(80)
    assert radar["Reviews"] == pytest.approx(50)
    assert radar["Location"] == pytest.approx(75)
    assert radar["Amenities"] == pytest.approx(20)


def test_radar_axes_are_capped():
    hotel = build_hotel(
        "a", review_count=5000, distance=12, amenities=[f"tag{i}" for i in range(20)],
    )

    radar = radar_scores(hotel, max_price=100)

    assert radar["Reviews"] == 100
    assert radar["Location"] == 0
    assert radar["Amenities"] == 100


def test_unknown_distance_counts_as_five_km_on_location_axis():
    radar = radar_scores(build_hotel("a", distance=None), max_price=100)

    assert radar["Location"] == pytest.approx(50)


def test_summary_picks_break_ties_on_first_index():
    hotels = [
        build_hotel("a", price=100, rating=4.5, distance=None),
        build_hotel("b", price=100, rating=4.5, distance=2.0),
        build_hotel("c", price=100, rating=4.0, distance=2.0),
    ]

    result = compare_hotels(hotels)

    assert result.best_value == 0
    assert result.highest_rated == 0
    assert result.most_central == 1


def test_radar_rows_are_keyed_by_hotel_position():
    result = compare_hotels([build_hotel("a"), build_hotel("b")])

    rows = result.radar_rows()

    assert [r["axis"] for r in rows] == ["Price", "Rating", "Reviews", "Location", "Amenities"]
    assert set(rows[0]) == {"axis", "Hotel1", "Hotel2"}


def test_compare_requires_two_hotels():
    with pytest.raises(ValueError):
        compare_hotels([build_hotel("a")])


def test_compare_view_states():
    empty = build_compare_view([])
    one = build_compare_view([build_hotel("a")])
    two = build_compare_view([build_hotel("a"), build_hotel("b", name="A very long hotel name that goes on and on")])

    assert empty.status == "empty" and empty.result is None
    assert one.status == "needs_more"
    assert one.message == "Select at least 1 more hotel to compare"
    assert one.result is None
    assert two.status == "ready"
    assert len(two.result.metrics) == 2
    assert len(two.result.metrics[1].short_name) == 30
