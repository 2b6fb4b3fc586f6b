"""
Purpose: Central configuration for location search and resolution.
What it does:

Stores all tunable thresholds for the autocomplete pipeline:

DEBOUNCE_SECONDS = 0.5
MIN_QUERY_LENGTH = 3
REQUEST_TIMEOUT = 5
MAP_INIT_WORKERS = 3

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class ResolverPolicy:
    """
    Central configuration for the LocationResolver and the map initialisation path.
    """

    # --- Debounce ---
    # Quiet period after the last keystroke before a search is issued.
    debounce_seconds: float = 0.5

    # --- Query gate ---
    # Shorter (trimmed) queries never reach the network.
    min_query_length: int = 3

    # --- Transport ---
    # Seconds requests waits on the geocoding service. No retries are made.
    request_timeout: float = 5

    # --- Map initialisation ---
    # One worker per location (current, pickup, dropoff).
    map_init_workers: int = 3

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if self.debounce_seconds < 0:
            raise ValueError("debounce_seconds must be >= 0")

        if self.min_query_length < 1:
            raise ValueError("min_query_length must be >= 1")

        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be > 0")

        if self.map_init_workers < 1:
            raise ValueError("map_init_workers must be >= 1")


def default_resolver_policy() -> ResolverPolicy:
    """
    Convenience factory for the default policy.
    """
    p = ResolverPolicy()
    p.validate()
    return p
