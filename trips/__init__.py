"""
Purpose: Package entry + stable exports.
What it does:

Marks trips as a Python package.

Re-exports the public API so other modules can do:

from trips import TripResult, TripSegment, DailyLog

Should not contain business logic.

Trips domain package.

Public API:
- Domain models: TripSegment, DailyLog, LogEntry, TripResult, TripRequest
- Enums: SegmentType, DutyStatus
- Service adapter: TripServiceClient
"""
from .models import (
    DailyLog,
    DutyStatus,
    LogEntry,
    RouteSummary,
    SegmentType,
    TripRequest,
    TripResult,
    TripSegment,
)
from .trip_client import TripServiceClient, TripServiceError

__all__ = ["TripSegment",
           "DailyLog",
             "LogEntry",
               "RouteSummary",
               "TripResult",
               "TripRequest",
               "SegmentType",
               "DutyStatus",
               "TripServiceClient",
               "TripServiceError",
               ]
