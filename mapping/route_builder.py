"""
Purpose: Map geometry for a planned trip.
What it does:
Given the three trip points (current, pickup, dropoff) and the backend's
segment list, builds:
- the route polyline [current, pickup, dropoff]
- one marker per trip point, with fixed semantic colours
- one marker per fuel / rest_break / sleeper_berth segment

Segment placement policy:
- a segment that carries its own precise coordinate is drawn there
- otherwise it gets a placeholder by linear interpolation on the
  current -> dropoff line: current + (dropoff - current) * (i+1)/(N+1),
  with i the segment's index in the FULL segment list and N its length.
  Placeholders encode ordering, not geography; they are flagged
  `approximate=True` so consumers can say so.

If any trip point is missing the result is RouteUnavailable; we never draw
a partial map.

Rule: No HTTP calls. Geocoding/fallback happens before this module.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from geocoding.models import LatLon
from trips.models import SegmentType, TripSegment
from trips.palette import NEUTRAL, marker_color

# Segment types that get their own map marker
STOP_MARKER_TYPES = (
    SegmentType.FUEL.value,
    SegmentType.REST_BREAK.value,
    SegmentType.SLEEPER_BERTH.value,
)

POLYLINE_COLOR = "#3b82f6"


@dataclass(frozen=True)
class MapMarker:
    """
    A renderable map pin. `key` is stable across re-renders
    (role name for trip points, "segment-<index>" for stops).
    """
    key: str
    position: LatLon
    color: str
    title: str
    subtitle: str = ""
    approximate: bool = False
    segment: Optional[TripSegment] = None

    def popup(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"title": self.title, "location": self.subtitle}
        if self.segment is not None:
            payload["duration_hours"] = self.segment.duration_hours
            if self.segment.formatted_start_time:
                payload["time"] = f"{self.segment.formatted_start_time} - {self.segment.formatted_end_time or ''}"
        if self.approximate:
            payload["approximate"] = True
        return payload


@dataclass(frozen=True)
class RouteGeometry:
    polyline: Tuple[LatLon, ...]
    markers: Tuple[MapMarker, ...]
    polyline_color: str = POLYLINE_COLOR

    @property
    def center(self) -> LatLon:
        # initial view is centred on the driver's current position
        return self.polyline[0]

    def bounds(self) -> Tuple[LatLon, LatLon]:
        """((south, west), (north, east)) over every drawn position."""
        points = list(self.polyline) + [m.position for m in self.markers]
        lats = [p[0] for p in points]
        lons = [p[1] for p in points]
        return ((min(lats), min(lons)), (max(lats), max(lons)))

    def marker(self, key: str) -> Optional[MapMarker]:
        for m in self.markers:
            if m.key == key:
                return m
        return None


@dataclass(frozen=True)
class RouteUnavailable:
    """No map: at least one trip point has no coordinate."""
    missing: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def reason(self) -> str:
        return "Unable to load map coordinates for: " + ", ".join(self.missing)


RouteResult = Union[RouteGeometry, RouteUnavailable]


def interpolate(start: LatLon, end: LatLon, fraction: float) -> LatLon:
    return (
        start[0] + (end[0] - start[0]) * fraction,
        start[1] + (end[1] - start[1]) * fraction,
    )


def placeholder_position(current: LatLon, dropoff: LatLon, index: int, total: int) -> LatLon:
    """Approximate position of segment `index` out of `total` (ordering only)."""
    return interpolate(current, dropoff, (index + 1) / (total + 1))


def segment_marker(segment: TripSegment, index: int, total: int,
                   current: LatLon, dropoff: LatLon) -> MapMarker:
    if segment.has_precise_coordinates:
        position = segment.coordinates
        approximate = False
    else:
        position = placeholder_position(current, dropoff, index, total)
        approximate = True

    return MapMarker(
        key=f"segment-{index}",
        position=position,
        color=marker_color(segment.segment_type),
        title=segment.display_name,
        subtitle=segment.location,
        approximate=approximate,
        segment=segment,
    )


def build_route(
    current: Optional[LatLon],
    pickup: Optional[LatLon],
    dropoff: Optional[LatLon],
    segments: Optional[Sequence[TripSegment]] = None,
    *,
    labels: Optional[Tuple[str, str, str]] = None,
) -> RouteResult:
    """
    Build map geometry for one trip.

    Args:
        current, pickup, dropoff: (lat, lon) or None when unresolved
        segments: the backend's complete, ordered segment list (None == empty)
        labels: display labels for the three trip points (popups)

    Returns:
        RouteGeometry, or RouteUnavailable if any trip point is None.
    """
    points = {"current": current, "pickup": pickup, "dropoff": dropoff}
    missing = tuple(role for role, position in points.items() if position is None)
    if missing:
        return RouteUnavailable(missing=missing)

    current_label, pickup_label, dropoff_label = labels or ("", "", "")

    markers: List[MapMarker] = [
        MapMarker(key="current", position=current, color=NEUTRAL,
                  title="Current Location", subtitle=current_label),
        MapMarker(key="pickup", position=pickup, color=marker_color(SegmentType.PICKUP),
                  title="Pickup Location", subtitle=pickup_label),
        MapMarker(key="dropoff", position=dropoff, color=marker_color(SegmentType.DROPOFF),
                  title="Dropoff Location", subtitle=dropoff_label),
    ]

    segments = list(segments or [])
    total = len(segments)
    for index, segment in enumerate(segments):
        if segment.type_value not in STOP_MARKER_TYPES:
            continue
        markers.append(segment_marker(segment, index, total, current, dropoff))

    return RouteGeometry(polyline=(current, pickup, dropoff), markers=tuple(markers))
