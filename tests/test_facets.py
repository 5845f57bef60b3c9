"""Tests for facet groups and facet extraction."""

import pytest

from journey_search.domain.models import QueryMode
from journey_search.itinerary import (
    LOADING_PLACEHOLDER,
    FacetGroup,
    FacetSet,
    extract_facets,
    train_type_labels,
)


def test_all_checked_group():
    group = FacetGroup.all_checked(["A", "B"])

    assert group.checked == ["A", "B"]
    assert group.check_all
    assert not group.indeterminate
    assert group.is_unfiltered


def test_toggle_maintains_check_all():
    group = FacetGroup.all_checked(["A", "B", "C"])

    group.toggle("B")
    assert group.checked == ["A", "C"]
    assert not group.check_all
    assert group.indeterminate

    group.toggle("B")
    assert group.checked == ["A", "B", "C"]
    assert group.check_all


def test_toggle_unknown_option_raises():
    group = FacetGroup.all_checked(["A"])

    with pytest.raises(KeyError):
        group.toggle("Z")


def test_toggle_all_flips_between_everything_and_nothing():
    group = FacetGroup.all_checked(["A", "B"])

    group.toggle_all()
    assert group.checked == []
    assert not group.check_all
    assert not group.indeterminate

    group.toggle_all()
    assert group.checked == ["A", "B"]
    assert group.check_all


def test_toggle_all_from_partial_selects_everything():
    group = FacetGroup.all_checked(["A", "B"])
    group.toggle("A")

    group.toggle_all()

    assert group.checked == ["A", "B"]


def test_set_checked_keeps_option_order_and_drops_unknown():
    group = FacetGroup.all_checked(["A", "B", "C"])

    group.set_checked(["C", "A", "Z"])

    assert group.checked == ["A", "C"]
    assert group.check_all is (len(group.checked) == len(group.options))


def test_initial_facets_hold_placeholders():
    facets = FacetSet.initial()

    assert facets.train_types.options == train_type_labels()
    assert facets.seat_types.options == [LOADING_PLACEHOLDER]
    assert facets.transfer_stations.options == [LOADING_PLACEHOLDER]


def test_direct_extraction(make_direct):
    results = [
        make_direct(departure_station="B站", arrival_station="Y站", seats={"二等座": 1, "一等座": 0}),
        make_direct(departure_station="A站", arrival_station="Y站", seats={"商务座": 2}),
    ]

    facets = extract_facets(results, QueryMode.DIRECT)

    assert facets.seat_types.options == sorted(["一等座", "二等座", "商务座"])
    assert facets.departure_stations.options == ["A站", "B站"]
    assert facets.arrival_stations.options == ["Y站"]
    assert facets.transfer_stations is None
    for group in (facets.seat_types, facets.departure_stations, facets.arrival_stations):
        assert group.checked == group.options
        assert group.check_all


def test_transfer_extraction(make_direct, make_transfer):
    results = [
        make_transfer(
            make_direct(departure_station="A", arrival_station="M", seats={"硬座": 1}),
            make_direct(departure_station="M", arrival_station="Z", seats={"二等座": 1}),
        ),
        make_transfer(
            make_direct(departure_station="B", arrival_station="N", seats={"硬座": 1}),
            make_direct(departure_station="N", arrival_station="Z", seats={"硬卧": 0}),
        ),
    ]

    facets = extract_facets(results, QueryMode.TRANSFER)

    assert facets.seat_types.options == sorted(["硬座", "二等座", "硬卧"])
    assert facets.departure_stations.options == ["A", "B"]
    assert facets.transfer_stations.options == ["M", "N"]
    assert facets.arrival_stations.options == ["Z"]


def test_missing_seat_data_contributes_nothing(make_direct):
    results = [make_direct(seats={}), make_direct(seats={"二等座": 3})]

    facets = extract_facets(results, QueryMode.DIRECT)

    assert facets.seat_types.options == ["二等座"]


def test_empty_batch_gives_empty_groups():
    facets = extract_facets([], QueryMode.DIRECT)

    assert facets.seat_types.options == []
    assert facets.seat_types.check_all


def test_extraction_discards_prior_narrowing_but_keeps_train_types(make_direct):
    results = [make_direct(departure_station="A"), make_direct(departure_station="B")]
    facets = extract_facets(results, QueryMode.DIRECT)
    facets.departure_stations.toggle("A")
    facets.train_types.toggle("K")

    rebuilt = extract_facets(results, QueryMode.DIRECT, train_types=facets.train_types)

    assert rebuilt.departure_stations.checked == ["A", "B"]
    assert "K" not in rebuilt.train_types.checked
    assert rebuilt.train_types is not facets.train_types
