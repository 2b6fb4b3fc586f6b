#Expose the map geometry pieces:
#Route builder (polyline + markers, placeholder placement)
#Trip map glue (geocode the echoed labels, then build)

from .route_builder import (
    MapMarker,
    RouteGeometry,
    RouteUnavailable,
    build_route,
    placeholder_position,
)
from .trip_map import build_trip_map

__all__ = [
    "MapMarker",
    "RouteGeometry",
    "RouteUnavailable",
    "build_route",
    "placeholder_position",
    "build_trip_map",
]
