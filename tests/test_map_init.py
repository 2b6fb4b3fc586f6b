from geocoding.fallback import DEFAULT_COORDINATES
from geocoding.geocode_client import GeocodeNetworkError, MalformedResponseError
from geocoding.map_init import PointSource, resolve_point, resolve_trip_points


def test_all_three_points_geocoded(stub_client, location):
    client = stub_client({
        "Springfield, IL": [location("Springfield, IL", -89.6501, 39.7817)],
        "Detroit, MI": [location("Detroit, MI", -83.0458, 42.3314)],
        "Denver, CO": [location("Denver, CO", -104.9903, 39.7392)],
    })
    points = resolve_trip_points(client, "Springfield, IL", "Detroit, MI", "Denver, CO")

    assert points.current.position == (39.7817, -89.6501)
    assert points.pickup.position == (42.3314, -83.0458)
    assert points.dropoff.position == (39.7392, -104.9903)
    assert all(p.source == PointSource.GEOCODED for p in (points.current, points.pickup, points.dropoff))
    assert sorted(client.queries) == ["Denver, CO", "Detroit, MI", "Springfield, IL"]


def test_failure_of_one_location_falls_back_for_that_location_only(stub_client, location):
    client = stub_client({
        "Chicago, IL": GeocodeNetworkError("API error: 500"),
        "Detroit, MI": [location("Detroit, MI", -83.0458, 42.3314)],
        "Denver, CO": [location("Denver, CO", -104.9903, 39.7392)],
    })
    points = resolve_trip_points(client, "Chicago, IL", "Detroit, MI", "Denver, CO")

    assert points.current.is_fallback
    assert points.current.position == (41.8781, -87.6298)
    assert not points.pickup.is_fallback
    assert not points.dropoff.is_fallback


def test_empty_and_malformed_answers_use_fallback(stub_client):
    client = stub_client({
        "Gotham": [],
        "Houston": MalformedResponseError("Response has no 'features' list"),
    })

    gotham = resolve_point(client, "Gotham")
    houston = resolve_point(client, "Houston")

    assert gotham.source == PointSource.FALLBACK
    assert gotham.position == DEFAULT_COORDINATES
    assert houston.position == (29.7604, -95.3698)


def test_positions_keep_trip_order(stub_client):
    points = resolve_trip_points(stub_client(), "Seattle", "Phoenix", "Miami")
    assert points.positions() == (
        (47.6062, -122.3321),
        (33.4484, -112.074),
        (25.7617, -80.1918),
    )
