#Purpose: HTTP adapter for the trip planning service (POST /trips/).
#Sends a TripRequest in the canonical object shape and parses the TripResult.
#Route planning and HOS computation happen on the backend; nothing here recomputes them.

from __future__ import annotations

import logging
from typing import Optional

import requests

from geocoding.geocode_client import API_BASE_URL
from .models import TripRequest, TripResult

TRIPS_PATH = "/trips/"
DEFAULT_ERROR = "Failed to create trip"

logger = logging.getLogger(__name__)


class TripServiceError(Exception):
    """Raised when the trip service cannot be reached or rejects the request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TripServiceClient:
    def __init__(self, base_url: Optional[str] = None, timeout: float = 30,
                 session: Optional[requests.Session] = None):
        self.base_url = (base_url or API_BASE_URL or "").rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

        if not self.base_url:
            raise ValueError("API base URL not set. Please set API_BASE_URL in the .env file.")

    def create_trip(self, request: TripRequest) -> TripResult:
        """
        Submit the trip and return the backend's computed segments and daily logs.
        No retries: a failed submission needs a fresh user action.
        """
        request.validate()

        try:
            response = self.session.post(
                f"{self.base_url}{TRIPS_PATH}",
                json=request.to_payload(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TripServiceError(str(e)) from e

        if not response.ok:
            raise TripServiceError(_error_message(response), status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise TripServiceError("Trip service returned invalid JSON",
                                   status_code=response.status_code) from e

        if not isinstance(data, dict):
            raise TripServiceError("Trip service returned an unexpected payload",
                                   status_code=response.status_code)

        result = TripResult.from_dict(data)
        logger.info("Trip %s created: %d segment(s), %d daily log(s)",
                    result.id, len(result.segments), len(result.daily_logs))
        return result


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return DEFAULT_ERROR
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return DEFAULT_ERROR
