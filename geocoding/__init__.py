#Marks geocoding as a package.
#Re-exports the public API (GeocodeClient, LocationResolver, fallback_coordinates,
#resolve_trip_points) so other modules import from geocoding without knowing internal file names.
#No business logic.

from .models import Location, LatLon, LonLat, SearchResult, display_name_for
from .fallback import DEFAULT_COORDINATES, fallback_coordinates
from .geocode_client import GeocodeClient, GeocodeError, GeocodeNetworkError, MalformedResponseError
from .policy import ResolverPolicy, default_resolver_policy
from .debounce import Debouncer, ThreadingScheduler
from .resolver import LocationResolver, ResolverState, ResolutionStatus, ErrorKind
from .map_init import PointSource, ResolvedPoint, TripPoints, resolve_trip_points

__all__ = [
           "Location",
           "LatLon",
           "LonLat",
           "SearchResult",
           "display_name_for",
           "DEFAULT_COORDINATES",
           "fallback_coordinates",
           "GeocodeClient",
           "GeocodeError",
           "GeocodeNetworkError",
           "MalformedResponseError",
           "ResolverPolicy",
           "default_resolver_policy",
           "Debouncer",
           "ThreadingScheduler",
           "LocationResolver",
           "ResolverState",
           "ResolutionStatus",
           "ErrorKind",
           "PointSource",
           "ResolvedPoint",
           "TripPoints",
           "resolve_trip_points",
           ]
