import pytest

from mapping.route_builder import RouteGeometry, RouteUnavailable, build_route, placeholder_position
from mapping.trip_map import build_trip_map
from trips.models import TripResult, TripSegment
from trips.palette import NEUTRAL, marker_color


def segment(segment_type, sequence_number=1, location="", **extra):
    return TripSegment.from_dict({
        "segment_type": segment_type,
        "sequence_number": sequence_number,
        "start_time": "2025-03-24T08:00:00Z",
        "end_time": "2025-03-24T09:00:00Z",
        "duration_hours": 1.0,
        "distance_miles": 0,
        "location": location,
        **extra,
    })


def test_placeholder_interpolation_matches_index_in_full_list():
    segments = [segment("driving", 1), segment("fuel", 2), segment("driving", 3)]
    route = build_route((0, 0), (3, 7), (10, 10), segments)

    fuel = route.marker("segment-1")
    assert fuel.position == pytest.approx((5, 5))
    assert fuel.approximate
    assert placeholder_position((0, 0), (10, 10), 1, 3) == pytest.approx((5, 5))


def test_polyline_and_trip_point_markers():
    route = build_route((41.0, -87.0), (42.0, -83.0), (39.0, -104.0), [],
                        labels=("Chicago, IL", "Detroit, MI", "Denver, CO"))

    assert isinstance(route, RouteGeometry)
    assert route.polyline == ((41.0, -87.0), (42.0, -83.0), (39.0, -104.0))
    assert [m.key for m in route.markers] == ["current", "pickup", "dropoff"]
    assert route.marker("current").color == NEUTRAL
    assert route.marker("pickup").color == "#22c55e"
    assert route.marker("dropoff").color == "#16a34a"
    assert route.marker("pickup").subtitle == "Detroit, MI"
    assert route.center == (41.0, -87.0)


def test_only_stop_segments_get_markers():
    segments = [
        segment("driving", 1),
        segment("pickup", 2),
        segment("rest_break", 3),
        segment("fuel", 4),
        segment("sleeper_berth", 5),
        segment("dropoff", 6),
    ]
    route = build_route((0, 0), (1, 1), (7, 14), segments)

    keys = [m.key for m in route.markers]
    assert keys == ["current", "pickup", "dropoff", "segment-2", "segment-3", "segment-4"]
    assert route.marker("segment-2").position == pytest.approx((3, 6))
    assert route.marker("segment-3").color == marker_color("fuel")
    assert route.marker("segment-4").color == "#3b82f6"


def test_precise_coordinate_takes_precedence_over_placeholder():
    segments = [
        segment("fuel", 1, "Des Moines, IA", coords=[-93.6091, 41.6005]),
        segment("rest_break", 2, "Omaha, NE", latitude=41.2565, longitude=-95.9345),
    ]
    route = build_route((0, 0), (1, 1), (10, 10), segments)

    fuel = route.marker("segment-0")
    rest = route.marker("segment-1")
    assert fuel.position == (41.6005, -93.6091)
    assert rest.position == (41.2565, -95.9345)
    assert not fuel.approximate and not rest.approximate


@pytest.mark.parametrize("current, pickup, dropoff, missing", [
    (None, (1, 1), (2, 2), ("current",)),
    ((0, 0), None, (2, 2), ("pickup",)),
    ((0, 0), (1, 1), None, ("dropoff",)),
    (None, None, (2, 2), ("current", "pickup")),
])
def test_missing_trip_point_means_no_map(current, pickup, dropoff, missing):
    result = build_route(current, pickup, dropoff, [segment("fuel")])

    assert isinstance(result, RouteUnavailable)
    assert result.missing == missing
    assert "Unable to load map coordinates" in result.reason


def test_none_segments_is_treated_as_empty():
    route = build_route((0, 0), (1, 1), (2, 2), None)
    assert len(route.markers) == 3


def test_marker_keys_are_stable_across_rebuilds():
    segments = [segment("fuel", 1), segment("driving", 2), segment("sleeper_berth", 3)]
    first = build_route((0, 0), (1, 1), (4, 4), segments)
    second = build_route((0, 0), (1, 1), (4, 4), list(segments))
    assert [m.key for m in first.markers] == [m.key for m in second.markers]
    assert first == second


def test_popup_payload_flags_approximate_positions():
    stop = segment("fuel", 1, "I-80", segment_type_display="Fuel Stop",
                   formatted_start_time="10:00", formatted_end_time="10:30")
    route = build_route((0, 0), (1, 1), (2, 2), [stop])

    popup = route.marker("segment-0").popup()
    assert popup == {
        "title": "Fuel Stop",
        "location": "I-80",
        "duration_hours": 1.0,
        "time": "10:00 - 10:30",
        "approximate": True,
    }


def test_bounds_cover_all_positions():
    route = build_route((10, -20), (5, -10), (0, 0), [segment("fuel")])
    assert route.bounds() == ((0, -20), (10, 0))


def test_build_trip_map_uses_fallback_per_location(stub_client, location):
    trip = TripResult.from_dict({
        "id": 1,
        "current_location": "Chicago, IL",
        "pickup_location": "Detroit, MI",
        "dropoff_location": "Denver, CO",
        "segments": [{"segment_type": "fuel", "sequence_number": 1, "location": "I-80"}],
    })
    client = stub_client({"Detroit, MI": [location("Detroit, MI", -83.0458, 42.3314)]})

    route = build_trip_map(client, trip)

    assert route.polyline == (
        (41.8781, -87.6298),
        (42.3314, -83.0458),
        (39.7392, -104.9903),
    )
    assert route.marker("current").subtitle == "Chicago, IL"
    assert route.marker("segment-0").approximate
