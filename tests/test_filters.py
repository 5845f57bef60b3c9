"""Tests for the filter pipeline."""

import pytest

from journey_search.domain.models import QueryMode, TimeWindow
from journey_search.itinerary import (
    LOADING_PLACEHOLDER,
    FacetGroup,
    FacetSet,
    FilterCriteria,
    apply_filters,
    classify_itinerary,
    extract_facets,
    is_available,
)
from journey_search.itinerary.train_types import classify_letters


def criteria_for(results, mode=QueryMode.DIRECT, **kwargs) -> FilterCriteria:
    return FilterCriteria(facets=extract_facets(results, mode), mode=mode, **kwargs)


def test_fresh_facets_keep_everything(make_direct):
    results = [
        make_direct("G1", seats={"二等座": 0}),
        make_direct("K2", departure_station="北京西站"),
        make_direct("X9", departure="23:30"),
    ]

    assert apply_filters(results, criteria_for(results)) == results


def test_initial_placeholder_facets_keep_everything(make_direct):
    results = [make_direct("G1"), make_direct("D2")]

    assert apply_filters(results, FilterCriteria(facets=FacetSet.initial())) == results


def test_availability_requires_every_transfer_leg(make_direct, make_transfer):
    bookable = make_transfer(make_direct(seats={"硬座": 1}), make_direct(seats={"二等座": 2}))
    half_full = make_transfer(make_direct(seats={"硬座": 1}), make_direct(seats={"二等座": 0}))
    results = [bookable, half_full]

    assert is_available(bookable)
    assert not is_available(half_full)

    criteria = criteria_for(results, QueryMode.TRANSFER, available_only=True)
    assert apply_filters(results, criteria) == [bookable]


def test_availability_off_keeps_sold_out(make_direct):
    results = [make_direct(seats={"二等座": 0})]

    assert apply_filters(results, criteria_for(results, available_only=False)) == results


@pytest.mark.parametrize(
    "letters, expected",
    [
        (["G"], "G/C"),
        (["C"], "G/C"),
        (["D"], "D"),
        (["Z"], "Z"),
        (["X"], "其他"),
        (["G", "C"], "G/C"),
        (["G", "D"], "D"),
        (["D", "G"], "D"),
        (["G", "K"], "K"),
        (["T", "Z"], "Z"),
        (["G", "X"], "其他"),
    ],
)
def test_progressive_train_type_buckets(letters, expected):
    assert classify_letters(letters) == expected


def test_classify_transfer_uses_both_legs(make_direct, make_transfer):
    journey = make_transfer(make_direct("G1"), make_direct("D5"))

    assert classify_itinerary(journey) == "D"
    assert classify_itinerary(journey, other_label="Other") == "D"
    assert classify_itinerary(make_direct("")) == "其他"


def test_train_type_facet(make_direct):
    results = [make_direct("G1"), make_direct("D2"), make_direct("K3"), make_direct("Y4")]
    criteria = criteria_for(results)
    criteria.facets.train_types.set_checked(["D", "其他"])

    assert [item.train_number for item in apply_filters(results, criteria)] == ["D2", "Y4"]


def test_train_type_facet_for_transfers(make_direct, make_transfer):
    fast = make_transfer(make_direct("G1"), make_direct("C2"))
    mixed = make_transfer(make_direct("G3"), make_direct("D4"))
    results = [fast, mixed]
    criteria = criteria_for(results, QueryMode.TRANSFER)
    criteria.facets.train_types.toggle("D")

    assert apply_filters(results, criteria) == [fast]


def test_seat_type_matches_any_leg(make_direct, make_transfer):
    first_has_it = make_transfer(make_direct(seats={"硬卧": 1}), make_direct(seats={"二等座": 1}))
    second_has_it = make_transfer(make_direct(seats={"二等座": 1}), make_direct(seats={"硬卧": 0}))
    neither = make_transfer(make_direct(seats={"二等座": 1}), make_direct(seats={"一等座": 1}))
    results = [first_has_it, second_has_it, neither]
    criteria = criteria_for(results, QueryMode.TRANSFER)
    criteria.facets.seat_types.set_checked(["硬卧"])

    assert apply_filters(results, criteria) == [first_has_it, second_has_it]


def test_seat_type_ignores_availability(make_direct):
    sold_out = make_direct("G1", seats={"商务座": 0})
    other = make_direct("G2", seats={"二等座": 5})
    criteria = criteria_for([sold_out, other])
    criteria.facets.seat_types.set_checked(["商务座"])

    assert apply_filters([sold_out, other], criteria) == [sold_out]


def test_station_facets_for_direct(make_direct):
    south = make_direct("G1", departure_station="北京南站", arrival_station="上海虹桥站")
    west = make_direct("G2", departure_station="北京西站", arrival_station="上海站")
    results = [south, west]

    criteria = criteria_for(results)
    criteria.facets.departure_stations.set_checked(["北京西站"])
    assert apply_filters(results, criteria) == [west]

    criteria = criteria_for(results)
    criteria.facets.arrival_stations.set_checked(["上海虹桥站"])
    assert apply_filters(results, criteria) == [south]


def test_transfer_station_facet(make_direct, make_transfer):
    via_nanjing = make_transfer(
        make_direct(departure_station="A", arrival_station="南京南站"),
        make_direct(departure_station="南京南站", arrival_station="Z"),
    )
    via_jinan = make_transfer(
        make_direct(departure_station="A", arrival_station="济南西站"),
        make_direct(departure_station="济南西站", arrival_station="Z"),
    )
    results = [via_nanjing, via_jinan]
    criteria = criteria_for(results, QueryMode.TRANSFER)
    criteria.facets.transfer_stations.set_checked(["济南西站"])

    assert apply_filters(results, criteria) == [via_jinan]


def test_transfer_station_facet_ignored_in_direct_mode(make_direct):
    results = [make_direct("G1")]
    criteria = criteria_for(results)
    criteria.facets.transfer_stations = FacetGroup(options=["X"], checked=[])

    assert apply_filters(results, criteria) == results


def test_unchecking_everything_empties_the_list(make_direct):
    results = [make_direct("G1"), make_direct("G2")]
    criteria = criteria_for(results)
    criteria.facets.seat_types.toggle_all()

    assert apply_filters(results, criteria) == []


def test_placeholder_group_is_skipped(make_direct):
    results = [make_direct("G1", seats={"二等座": 1})]
    facets = FacetSet.initial()
    facets.seat_types = FacetGroup(options=[LOADING_PLACEHOLDER, "一等座"], checked=[LOADING_PLACEHOLDER])

    assert apply_filters(results, FilterCriteria(facets=facets)) == results


def test_departure_window_is_inclusive(make_direct):
    early = make_direct("G1", departure="06:59")
    edge_start = make_direct("G2", departure="07:00")
    edge_end = make_direct("G3", departure="09:00")
    late = make_direct("G4", departure="09:01")
    results = [early, edge_start, edge_end, late]

    criteria = criteria_for(results, departure_window=TimeWindow.from_clock("07:00", "09:00"))

    assert apply_filters(results, criteria) == [edge_start, edge_end]


def test_arrival_window_uses_final_leg(make_direct, make_transfer):
    journey = make_transfer(
        make_direct(departure="08:00", travel_minutes=60),
        make_direct(departure="10:00", travel_minutes=120),
    )

    inside = criteria_for([journey], QueryMode.TRANSFER, arrival_window=TimeWindow.from_clock("12:00", "12:00"))
    outside = criteria_for([journey], QueryMode.TRANSFER, arrival_window=TimeWindow.from_clock("09:00", "11:00"))

    assert apply_filters([journey], inside) == [journey]
    assert apply_filters([journey], outside) == []


def test_arrival_after_midnight_compares_clock_time_only(make_direct):
    overnight = make_direct("Z1", departure="23:00", travel_minutes=120)

    evening = criteria_for([overnight], arrival_window=TimeWindow.from_clock("22:00", "23:59"))
    small_hours = criteria_for([overnight], arrival_window=TimeWindow.from_clock("00:00", "01:00"))

    assert apply_filters([overnight], evening) == []
    assert apply_filters([overnight], small_hours) == [overnight]


def test_filters_combine_and_preserve_order(make_direct):
    a = make_direct("G1", departure="08:00", seats={"二等座": 1})
    b = make_direct("D2", departure="09:00", seats={"二等座": 0})
    c = make_direct("G3", departure="10:00", seats={"二等座": 2})
    d = make_direct("G4", departure="20:00", seats={"二等座": 2})
    results = [c, a, b, d]
    criteria = criteria_for(
        results,
        available_only=True,
        departure_window=TimeWindow.from_clock("07:00", "12:00"),
    )

    assert apply_filters(results, criteria) == [c, a]


def test_time_window_validation():
    with pytest.raises(ValueError):
        TimeWindow(600, 500)
    with pytest.raises(ValueError):
        TimeWindow(0, 1440)
    assert TimeWindow().is_full_day
