"""
Purpose: Data structures shared by the geocoding capability.
What it does:
- Defines Location (a resolved, selectable place) and SearchResult.
- Owns the display-name priority chain used for autocomplete candidates.

Coordinate conventions:
- LonLat is the wire order used by the geocoding service (GeoJSON).
- LatLon is the map order used by everything that draws.
Location keeps the wire order; conversion happens at the map boundary via `lat_lon`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

LonLat = Tuple[float, float]
LatLon = Tuple[float, float]

UNKNOWN_LOCATION = "Unknown location"
DEFAULT_COUNTRY = "US"


def display_name_for(properties: Dict[str, Any]) -> str:
    """
    Fixed priority chain:
    label -> "locality, region" -> "name, region" -> name -> "Unknown location"
    """
    label = properties.get("label")
    if label:
        return label

    locality = properties.get("locality")
    region = properties.get("region")
    name = properties.get("name")

    if locality and region:
        return f"{locality}, {region}"
    if name and region:
        return f"{name}, {region}"
    if name:
        return name
    return UNKNOWN_LOCATION


@dataclass(frozen=True)
class Location:
    """
    A fully resolved place. There is no partially-resolved Location:
    if we don't have coordinates we don't build one.
    """
    id: str
    name: str
    coords: LonLat
    locality: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = None

    @property
    def lat_lon(self) -> LatLon:
        lon, lat = self.coords
        return (lat, lon)

    def describe(self) -> str:
        """Label used in the "Selected: ..." line, e.g. `Chicago, IL (41.8781, -87.6298)`."""
        lat, lon = self.lat_lon
        return f"{self.name} ({lat:.4f}, {lon:.4f})"

    def to_wire(self) -> Dict[str, Any]:
        return {"name": self.name, "coords": [self.coords[0], self.coords[1]]}

    @classmethod
    def from_feature(cls, feature: Dict[str, Any]) -> Optional[Location]:
        """
        Build a Location from one GeoJSON-ish autocomplete feature.
        Returns None when the feature has no usable coordinates.
        """
        props = feature.get("properties") or {}
        geometry = feature.get("geometry") or {}
        coordinates = geometry.get("coordinates")

        if not isinstance(coordinates, (list, tuple)) or len(coordinates) < 2:
            return None
        try:
            lon, lat = float(coordinates[0]), float(coordinates[1])
        except (TypeError, ValueError):
            return None

        feature_id = feature.get("id") or props.get("id") or f"{lon},{lat}"

        return cls(
            id=str(feature_id),
            name=display_name_for(props),
            coords=(lon, lat),
            locality=props.get("locality"),
            region=props.get("region"),
            country=props.get("country") or DEFAULT_COUNTRY,
        )


@dataclass(frozen=True)
class SearchResult:
    """
    A well-formed autocomplete answer. An empty `candidates` tuple is the
    EmptyResult outcome; transport and format problems are raised instead.
    """
    query: str
    candidates: Tuple[Location, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.candidates
