#Purpose: The geocoding “adapter/client”.
#Sole responsibility: talk to the backend autocomplete endpoint via HTTP and return normalized outputs.
#Encapsulates service-specific details:
#URL construction (/geocode/autocomplete/?q=...)
#timeouts/error handling (no retries)
#parsing response JSON into Location candidates
#It should not contain debounce, selection or fallback rules.


from dotenv import load_dotenv
import logging
import os
from typing import Any, Dict, List, Optional
import requests

from .models import Location, SearchResult
from .policy import ResolverPolicy

# Read the trip planner API base URL from environment
# Example in .env:
# API_BASE_URL=http://localhost:8000/api
load_dotenv()
API_BASE_URL = os.getenv("API_BASE_URL")
GEOCODE_TIMEOUT = float(os.getenv("GEOCODE_TIMEOUT", "5"))

AUTOCOMPLETE_PATH = "/geocode/autocomplete/"

logger = logging.getLogger(__name__)


class GeocodeError(Exception):
    """Base class for geocoding client errors."""
    pass

class GeocodeNetworkError(GeocodeError):
    """Transport/HTTP failure, or the service answered with an {"error": ...} body."""
    pass

class MalformedResponseError(GeocodeError):
    """The service answered, but not in the expected {features: [...]} shape."""
    pass


class GeocodeClient:
    """
    Geocoding Adapter / Client

    Sole responsibility:
    - Talk to GET /geocode/autocomplete/ via HTTP
    - Keep coordinates in the service order (lon, lat)
    - Return normalized outputs (SearchResult) or raise a GeocodeError

    """
    def __init__(self, base_url: Optional[str] = None, timeout: float = GEOCODE_TIMEOUT,
                 session: Optional[requests.Session] = None):
        self.base_url = (base_url or API_BASE_URL or "").rstrip("/")
        self.timeout = timeout #seconds to wait for the service before giving up
        self.session = session or requests.Session()

        if not self.base_url:
            raise ValueError("API base URL not set. Please set API_BASE_URL in the .env file.")

    @classmethod
    def from_policy(cls, policy: ResolverPolicy, base_url: Optional[str] = None,
                    session: Optional[requests.Session] = None) -> "GeocodeClient":
        """Client whose request timeout comes from the resolver policy instead of GEOCODE_TIMEOUT."""
        policy.validate()
        return cls(base_url=base_url, timeout=policy.request_timeout, session=session)

        #----------------
        # Internal helpers
        #----------------
    def autocomplete_url(self) -> str:
        return f"{self.base_url}{AUTOCOMPLETE_PATH}"

    def fetch_features(self, query: str) -> List[Dict[str, Any]]:
        """
        calls the autocomplete endpoint and returns the raw feature list.

        Raises:
            GeocodeNetworkError: connection problems, non-2xx status, or {"error": "..."} body
            MalformedResponseError: body is not JSON or has no "features" list
        """
        try:
            response = self.session.get(
                self.autocomplete_url(),
                params={"q": query},
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise GeocodeNetworkError(str(e)) from e

        if not response.ok:
            raise GeocodeNetworkError(f"API error: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError("Response is not valid JSON") from e

        if not isinstance(data, dict):
            raise MalformedResponseError(f"Unexpected response type: {type(data).__name__}")

        #the service reports its own failures in-band
        if data.get("error"):
            raise GeocodeNetworkError(str(data["error"]))

        features = data.get("features")
        if not isinstance(features, list):
            raise MalformedResponseError("Response has no 'features' list")

        return features

        #----------------
        # Public methods
        #----------------
    def search(self, query: str) -> SearchResult:
        """
            Resolve free text into selectable candidates, in service order.

            Returns:
                SearchResult with zero or more Location candidates.
                Zero candidates means a well-formed but empty answer.
        """
        features = self.fetch_features(query)

        candidates = []
        for feature in features:
            if not isinstance(feature, dict):
                logger.warning("Skipping non-object feature for %r", query)
                continue
            location = Location.from_feature(feature)
            if location is None:
                #no partially-resolved locations: drop features without coordinates
                logger.warning("Skipping feature without coordinates for %r", query)
                continue
            candidates.append(location)

        logger.debug("Autocomplete %r -> %d candidate(s)", query, len(candidates))
        return SearchResult(query=query, candidates=tuple(candidates))

    def first_match(self, query: str) -> Optional[Location]:
        """Best candidate for `query`, or None for an empty answer."""
        result = self.search(query)
        return result.candidates[0] if result.candidates else None
