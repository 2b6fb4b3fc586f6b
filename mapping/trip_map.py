#Purpose: Glue between a TripResult and the route builder.
#Resolves the three echoed trip labels (with per-location fallback) and builds the geometry.
#Kept separate so route_builder stays free of HTTP calls.

from __future__ import annotations

from typing import Optional

from geocoding.geocode_client import GeocodeClient
from geocoding.map_init import TripPoints, resolve_trip_points
from geocoding.policy import ResolverPolicy
from trips.models import TripResult
from .route_builder import RouteResult, build_route


def build_trip_map(
    client: GeocodeClient,
    trip: TripResult,
    *,
    policy: Optional[ResolverPolicy] = None,
) -> RouteResult:
    points: TripPoints = resolve_trip_points(
        client,
        trip.current_location,
        trip.pickup_location,
        trip.dropoff_location,
        policy=policy,
    )
    current, pickup, dropoff = points.positions()
    return build_route(
        current,
        pickup,
        dropoff,
        trip.segments,
        labels=(trip.current_location, trip.pickup_location, trip.dropoff_location),
    )
