"""
Purpose: Domain models for the trip data returned by the planning backend.
What it does:
- Defines the read-only structures the visualization layer consumes:
- TripSegment (one leg or stop of the planned trip)
- DailyLog + LogEntry (per-day duty status records)
- RouteSummary, TripResult (the full POST /trips/ response)
- TripRequest (the body we send to POST /trips/)

Defines enums:
- SegmentType = driving | fuel | pickup | dropoff | sleeper_berth | rest_break
- DutyStatus = off_duty | sleeper_berth | driving | on_duty_not_driving

Parsing is permissive: the backend has already validated this data, so
missing optional collections become empty tuples instead of errors.

Rule: No HTTP calls, no grid/map logic. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from geocoding.models import LatLon, Location


class SegmentType(str, Enum):
    DRIVING = "driving"
    FUEL = "fuel"
    PICKUP = "pickup"
    DROPOFF = "dropoff"
    SLEEPER_BERTH = "sleeper_berth"
    REST_BREAK = "rest_break"


class DutyStatus(str, Enum):
    OFF_DUTY = "off_duty"
    SLEEPER_BERTH = "sleeper_berth"
    DRIVING = "driving"
    ON_DUTY_NOT_DRIVING = "on_duty_not_driving"


def _to_float(value: Any, default: float = 0.0) -> float:
    # DRF serializes DecimalFields as strings ("1234.50")
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _to_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _segment_type(raw: Any) -> SegmentType | str:
    """Known types become SegmentType; unknown ones are kept as raw strings."""
    try:
        return SegmentType(raw)
    except ValueError:
        return str(raw or "")


def _precise_coordinates(data: Dict[str, Any]) -> Optional[LatLon]:
    """
    Backend segments may carry their own position, either as
    `coords: [lon, lat]` (same order as the geocoder) or as
    separate `latitude` / `longitude` fields.
    """
    coords = data.get("coords")
    if isinstance(coords, (list, tuple)) and len(coords) == 2:
        try:
            lon, lat = float(coords[0]), float(coords[1])
            return (lat, lon)
        except (TypeError, ValueError):
            return None

    lat = data.get("latitude")
    lon = data.get("longitude")
    if lat is None or lon is None:
        return None
    try:
        return (float(lat), float(lon))
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class TripSegment:
    """
    A backend-computed leg of the planned trip (driving, fuel stop, rest break...).
    Never mutated here; the map only derives display positions from it.
    """
    segment_type: SegmentType | str
    sequence_number: int
    start_time: str
    end_time: str
    duration_hours: float
    distance_miles: float
    location: str

    segment_type_display: Optional[str] = None
    formatted_start_time: Optional[str] = None
    formatted_end_time: Optional[str] = None

    # (lat, lon) when the backend knows exactly where this stop happens
    coordinates: Optional[LatLon] = None

    @property
    def has_precise_coordinates(self) -> bool:
        return self.coordinates is not None

    @property
    def type_value(self) -> str:
        if isinstance(self.segment_type, SegmentType):
            return self.segment_type.value
        return self.segment_type

    @property
    def display_name(self) -> str:
        return self.segment_type_display or self.type_value

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TripSegment:
        return cls(
            segment_type=_segment_type(data.get("segment_type")),
            sequence_number=_to_int(data.get("sequence_number")),
            start_time=data.get("start_time") or "",
            end_time=data.get("end_time") or "",
            duration_hours=_to_float(data.get("duration_hours")),
            distance_miles=_to_float(data.get("distance_miles")),
            location=data.get("location") or "",
            segment_type_display=data.get("segment_type_display"),
            formatted_start_time=data.get("formatted_start_time"),
            formatted_end_time=data.get("formatted_end_time"),
            coordinates=_precise_coordinates(data),
        )


@dataclass(frozen=True)
class LogEntry:
    """
    One duty-status interval inside a day, in fractional hours.
    0 <= start_hour < end_hour <= 24 is expected but not enforced;
    entries may overlap.
    """
    duty_status: DutyStatus | str
    start_hour: float
    end_hour: float
    location: str = ""
    duty_status_display: Optional[str] = None

    @property
    def status_value(self) -> str:
        if isinstance(self.duty_status, DutyStatus):
            return self.duty_status.value
        return self.duty_status

    @property
    def display_name(self) -> str:
        return self.duty_status_display or self.status_value.replace("_", " ")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> LogEntry:
        raw_status = data.get("duty_status") or ""
        try:
            status: DutyStatus | str = DutyStatus(raw_status)
        except ValueError:
            status = str(raw_status)

        return cls(
            duty_status=status,
            start_hour=_to_float(data.get("start_hour")),
            end_hour=_to_float(data.get("end_hour")),
            location=data.get("location") or "",
            duty_status_display=data.get("duty_status_display"),
        )


@dataclass(frozen=True)
class DailyLog:
    """
    One ELD day as computed by the backend.
    The per-category hour totals are authoritative; the grid never recomputes them.
    """
    log_date: str
    day_number: int
    total_miles: float = 0.0
    off_duty_hours: float = 0.0
    sleeper_berth_hours: float = 0.0
    driving_hours: float = 0.0
    on_duty_hours: float = 0.0
    entries: Tuple[LogEntry, ...] = ()
    formatted_date: Optional[str] = None

    @property
    def date_label(self) -> str:
        return self.formatted_date or self.log_date

    def totals(self) -> Dict[DutyStatus, float]:
        return {
            DutyStatus.OFF_DUTY: self.off_duty_hours,
            DutyStatus.SLEEPER_BERTH: self.sleeper_berth_hours,
            DutyStatus.DRIVING: self.driving_hours,
            DutyStatus.ON_DUTY_NOT_DRIVING: self.on_duty_hours,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> DailyLog:
        return cls(
            log_date=data.get("log_date") or "",
            day_number=_to_int(data.get("day_number")),
            total_miles=_to_float(data.get("total_miles")),
            off_duty_hours=_to_float(data.get("off_duty_hours")),
            sleeper_berth_hours=_to_float(data.get("sleeper_berth_hours")),
            driving_hours=_to_float(data.get("driving_hours")),
            on_duty_hours=_to_float(data.get("on_duty_hours")),
            entries=tuple(LogEntry.from_dict(e) for e in data.get("entries") or []),
            formatted_date=data.get("formatted_date"),
        )


@dataclass(frozen=True)
class RouteSummary:
    origin: str = ""
    destination: str = ""
    waypoints: Tuple[str, ...] = ()
    total_distance_miles: float = 0.0
    estimated_duration_hours: float = 0.0
    fuel_stops_needed: int = 0
    rest_stops_needed: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> RouteSummary:
        return cls(
            origin=data.get("origin") or "",
            destination=data.get("destination") or "",
            waypoints=tuple(data.get("waypoints") or []),
            total_distance_miles=_to_float(data.get("total_distance_miles")),
            estimated_duration_hours=_to_float(data.get("estimated_duration_hours")),
            fuel_stops_needed=_to_int(data.get("fuel_stops_needed")),
            rest_stops_needed=_to_int(data.get("rest_stops_needed")),
        )


@dataclass(frozen=True)
class TripResult:
    """
    Output of POST /trips/ (route + ELD logs already computed by the backend).
    """
    id: int
    current_location: str
    pickup_location: str
    dropoff_location: str
    current_cycle_used: float = 0.0
    total_distance: float = 0.0
    total_duration: float = 0.0
    fuel_stops: int = 0
    required_rest_stops: int = 0
    segments: Tuple[TripSegment, ...] = ()
    daily_logs: Tuple[DailyLog, ...] = ()
    route_summary: Optional[RouteSummary] = None
    created_at: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TripResult:
        summary = data.get("route_summary")
        return cls(
            id=_to_int(data.get("id")),
            current_location=_location_label(data.get("current_location")),
            pickup_location=_location_label(data.get("pickup_location")),
            dropoff_location=_location_label(data.get("dropoff_location")),
            current_cycle_used=_to_float(data.get("current_cycle_used")),
            total_distance=_to_float(data.get("total_distance")),
            total_duration=_to_float(data.get("total_duration")),
            fuel_stops=_to_int(data.get("fuel_stops")),
            required_rest_stops=_to_int(data.get("required_rest_stops")),
            segments=tuple(TripSegment.from_dict(s) for s in data.get("segments") or []),
            daily_logs=tuple(DailyLog.from_dict(d) for d in data.get("daily_logs") or []),
            route_summary=RouteSummary.from_dict(summary) if isinstance(summary, dict) else None,
            created_at=data.get("created_at") or "",
        )


def _location_label(value: Any) -> str:
    # the backend echoes whatever shape it stored; we only need the label
    if isinstance(value, dict):
        return value.get("name") or ""
    return value or ""


MAX_CYCLE_HOURS = 70.0


@dataclass(frozen=True)
class TripRequest:
    """
    Body for POST /trips/.

    Canonical wire shape: every location is sent as the object form
    {"name": <display name>, "coords": [lon, lat]}. The plain-string form
    is never produced.
    """
    current_location: Location
    pickup_location: Location
    dropoff_location: Location
    current_cycle_used: float = 0.0

    def validate(self) -> None:
        for label, loc in (
            ("current_location", self.current_location),
            ("pickup_location", self.pickup_location),
            ("dropoff_location", self.dropoff_location),
        ):
            if loc is None:
                raise ValueError(f"{label} must be a resolved location")

        if not (0.0 <= self.current_cycle_used <= MAX_CYCLE_HOURS):
            raise ValueError(f"current_cycle_used must be between 0 and {MAX_CYCLE_HOURS:g}")

    def to_payload(self) -> Dict[str, Any]:
        return {
            "current_location": self.current_location.to_wire(),
            "pickup_location": self.pickup_location.to_wire(),
            "dropoff_location": self.dropoff_location.to_wire(),
            "current_cycle_used": self.current_cycle_used,
        }
