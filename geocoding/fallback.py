#Purpose: Offline text -> coordinate guess.
#Used when the geocoder is unreachable or returns nothing during map initialisation,
#so the map never blocks on a network failure.
#Total and pure: same text, same coordinate (snapshot tests rely on it).
#Match order is part of the contract: the table is an ordered tuple, first match wins.

from __future__ import annotations

from typing import Callable, Tuple

from .models import LatLon

# Geographic centre of the contiguous United States
DEFAULT_COORDINATES: LatLon = (39.8283, -98.5795)

Predicate = Callable[[str], bool]


def city_matcher(city_key: str) -> Predicate:
    """
    Loose two-way substring match against already-lowercased text:
    "chicago, il" contains "chicago", and "chicago" contains "chic".
    """
    def matches(text: str) -> bool:
        return city_key in text or text in city_key
    return matches


def _city(key: str, lat: float, lon: float) -> Tuple[str, Predicate, LatLon]:
    return (key, city_matcher(key), (lat, lon))


# (key, predicate, (lat, lon)) in fixed declaration order
FALLBACK_TABLE: Tuple[Tuple[str, Predicate, LatLon], ...] = (
    _city("chicago", 41.8781, -87.6298),
    _city("detroit", 42.3314, -83.0458),
    _city("denver", 39.7392, -104.9903),
    _city("los angeles", 34.0522, -118.2437),
    _city("new york", 40.7128, -74.006),
    _city("miami", 25.7617, -80.1918),
    _city("houston", 29.7604, -95.3698),
    _city("seattle", 47.6062, -122.3321),
    _city("phoenix", 33.4484, -112.074),
    _city("dallas", 32.7767, -96.797),
)


def fallback_coordinates(text: str) -> LatLon:
    """
    Returns the (lat, lon) of the first table entry matching `text`,
    or DEFAULT_COORDINATES when nothing matches.
    Empty text never matches (it would otherwise be "contained" in every key).
    The text is lowercased but not trimmed: "york " does not match "new york".
    """
    normalized = (text or "").lower()
    if not normalized:
        return DEFAULT_COORDINATES

    for _key, predicate, coordinates in FALLBACK_TABLE:
        if predicate(normalized):
            return coordinates

    return DEFAULT_COORDINATES
