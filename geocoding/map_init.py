"""
Purpose: Coordinates for the three trip points when the map first opens.
What it does:
Takes the current / pickup / dropoff labels echoed by the trip service,
geocodes them concurrently and substitutes the offline fallback for any
location whose own lookup fails or comes back empty.

Failure of one lookup never blocks or invalidates the other two
(per-location fallback, not all-or-nothing). This is the only path that
is allowed to turn a geocoding failure into a coordinate.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .fallback import fallback_coordinates
from .geocode_client import GeocodeClient, GeocodeError
from .models import LatLon
from .policy import ResolverPolicy, default_resolver_policy

logger = logging.getLogger(__name__)


class PointSource(str, Enum):
    GEOCODED = "geocoded"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class ResolvedPoint:
    label: str
    position: LatLon
    source: PointSource

    @property
    def is_fallback(self) -> bool:
        return self.source == PointSource.FALLBACK


@dataclass(frozen=True)
class TripPoints:
    current: ResolvedPoint
    pickup: ResolvedPoint
    dropoff: ResolvedPoint

    def positions(self) -> Tuple[LatLon, LatLon, LatLon]:
        return (self.current.position, self.pickup.position, self.dropoff.position)


def resolve_point(client: GeocodeClient, label: str) -> ResolvedPoint:
    """
    First autocomplete feature for `label`, else the fallback table.
    """
    reason: Optional[str] = None
    try:
        location = client.first_match(label)
    except GeocodeError as e:
        location = None
        reason = str(e)
    else:
        if location is None:
            reason = "no candidates"

    if location is not None:
        return ResolvedPoint(label=label, position=location.lat_lon, source=PointSource.GEOCODED)

    position = fallback_coordinates(label)
    logger.info("Using fallback coordinates %s for %r (%s)", position, label, reason)
    return ResolvedPoint(label=label, position=position, source=PointSource.FALLBACK)


def resolve_trip_points(
    client: GeocodeClient,
    current: str,
    pickup: str,
    dropoff: str,
    *,
    policy: Optional[ResolverPolicy] = None,
) -> TripPoints:
    """
    Geocode the three labels in parallel. Always returns a position for each.
    """
    policy = policy or default_resolver_policy()

    with ThreadPoolExecutor(max_workers=policy.map_init_workers) as executor:
        futures = [executor.submit(resolve_point, client, label)
                   for label in (current, pickup, dropoff)]
        current_point, pickup_point, dropoff_point = [f.result() for f in futures]

    return TripPoints(current=current_point, pickup=pickup_point, dropoff=dropoff_point)
