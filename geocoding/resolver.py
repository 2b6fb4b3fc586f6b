"""
Purpose: Autocomplete state machine for one location field (current / pickup / dropoff).
What it does:
- ResolverState is an explicit, immutable value: query text, candidate list,
  confirmed selection, resolution status and the sequence-token bookkeeping.
- Pure transition functions map (state, event) -> state. They never touch the
  network or timers, so they can be tested without any rendering layer.
- LocationResolver wires those transitions to a Debouncer (500ms window) and an
  Executor for the HTTP call, and applies responses only for the awaited token.

Outcomes are surfaced separately: RESULTS, EMPTY, ERROR (network, malformed or unexpected).
This path never substitutes a fallback coordinate.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass, replace
from enum import Enum
from functools import partial
from typing import Callable, Optional, Tuple, Union

from .debounce import Debouncer, Scheduler, ThreadingScheduler
from .geocode_client import GeocodeClient, GeocodeError, MalformedResponseError
from .models import Location, SearchResult
from .policy import ResolverPolicy, default_resolver_policy

logger = logging.getLogger(__name__)

EMPTY_RESULT_MESSAGE = "No locations found. Try a different search."

# default pool size, so a hung request never delays the next one
SEARCH_WORKERS = 4


class ResolutionStatus(str, Enum):
    IDLE = "idle"                  # nothing to search for
    DEBOUNCING = "debouncing"      # waiting for the quiet period to end
    SEARCHING = "searching"        # request issued, awaiting its token
    RESULTS = "results"            # candidates available
    EMPTY = "empty"                # well-formed answer with zero candidates
    ERROR = "error"                # see error_kind
    SELECTED = "selected"          # a candidate has been confirmed


class ErrorKind(str, Enum):
    NETWORK = "network"
    MALFORMED = "malformed"
    UNEXPECTED = "unexpected"      # the client itself raised something else


@dataclass(frozen=True)
class ResolverState:
    query: str = ""
    candidates: Tuple[Location, ...] = ()
    selection: Optional[Location] = None
    status: ResolutionStatus = ResolutionStatus.IDLE
    message: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    # last token handed out (monotonic) and the one whose response we accept
    last_token: int = 0
    awaiting_token: Optional[int] = None

    @property
    def loading(self) -> bool:
        return self.awaiting_token is not None

    @property
    def selection_label(self) -> Optional[str]:
        if self.selection is None:
            return None
        return f"Selected: {self.selection.describe()}"


# --- Events ---

@dataclass(frozen=True)
class QueryEdited:
    text: str

@dataclass(frozen=True)
class SearchIssued:
    query: str

@dataclass(frozen=True)
class SearchSucceeded:
    token: int
    result: SearchResult

@dataclass(frozen=True)
class SearchFailed:
    token: int
    detail: str
    kind: ErrorKind = ErrorKind.NETWORK

@dataclass(frozen=True)
class CandidateSelected:
    location: Location

@dataclass(frozen=True)
class SelectionCleared:
    pass


ResolverEvent = Union[QueryEdited, SearchIssued, SearchSucceeded, SearchFailed,
                      CandidateSelected, SelectionCleared]


# --- Pure transitions ---

def is_searchable(text: str, min_query_length: int) -> bool:
    return len(text.strip()) >= min_query_length


def on_query_edited(state: ResolverState, text: str, min_query_length: int = 3) -> ResolverState:
    """
    Any edit that differs from the selected display name drops the selection.
    Short queries resolve immediately to "nothing" and retire any in-flight request.
    """
    selection = state.selection
    if selection is not None:
        if text == selection.name:
            return replace(state, query=text)
        selection = None

    if not is_searchable(text, min_query_length):
        return replace(
            state,
            query=text,
            candidates=(),
            selection=None,
            status=ResolutionStatus.IDLE,
            message=None,
            error_kind=None,
            awaiting_token=None,
        )

    # previous candidates stay visible until the next answer replaces them;
    # the answer for the older text is stale from now on
    return replace(
        state,
        query=text,
        selection=None,
        status=ResolutionStatus.DEBOUNCING,
        message=None,
        error_kind=None,
        awaiting_token=None,
    )


def on_search_issued(state: ResolverState, query: str) -> ResolverState:
    """
    Hands out the next token. A timer that fires for a query the user has
    since abandoned (selection, clear, different text) is ignored.
    """
    if state.query != query or state.selection is not None:
        return state
    if state.status == ResolutionStatus.IDLE:
        return state

    token = state.last_token + 1
    return replace(state, status=ResolutionStatus.SEARCHING,
                   last_token=token, awaiting_token=token)


def on_search_succeeded(state: ResolverState, token: int, result: SearchResult) -> ResolverState:
    if token != state.awaiting_token:
        return state

    if result.is_empty:
        return replace(
            state,
            candidates=(),
            status=ResolutionStatus.EMPTY,
            message=EMPTY_RESULT_MESSAGE,
            error_kind=None,
            awaiting_token=None,
        )

    return replace(
        state,
        candidates=result.candidates,
        status=ResolutionStatus.RESULTS,
        message=None,
        error_kind=None,
        awaiting_token=None,
    )


def on_search_failed(state: ResolverState, token: int, detail: str,
                     kind: ErrorKind = ErrorKind.NETWORK) -> ResolverState:
    if token != state.awaiting_token:
        return state

    return replace(
        state,
        candidates=(),
        status=ResolutionStatus.ERROR,
        message=f"Search error: {detail}",
        error_kind=kind,
        awaiting_token=None,
    )


def on_candidate_selected(state: ResolverState, location: Location) -> ResolverState:
    return replace(
        state,
        query=location.name,
        candidates=(),
        selection=location,
        status=ResolutionStatus.SELECTED,
        message=None,
        error_kind=None,
        awaiting_token=None,
    )


def on_selection_cleared(state: ResolverState) -> ResolverState:
    # tokens keep counting so late answers to old requests stay stale
    return ResolverState(last_token=state.last_token)


def apply_event(state: ResolverState, event: ResolverEvent,
                policy: Optional[ResolverPolicy] = None) -> ResolverState:
    policy = policy or default_resolver_policy()

    if isinstance(event, QueryEdited):
        return on_query_edited(state, event.text, policy.min_query_length)
    if isinstance(event, SearchIssued):
        return on_search_issued(state, event.query)
    if isinstance(event, SearchSucceeded):
        return on_search_succeeded(state, event.token, event.result)
    if isinstance(event, SearchFailed):
        return on_search_failed(state, event.token, event.detail, event.kind)
    if isinstance(event, CandidateSelected):
        return on_candidate_selected(state, event.location)
    if isinstance(event, SelectionCleared):
        return on_selection_cleared(state)
    raise TypeError(f"Unknown resolver event: {event!r}")


# --- Runtime wiring ---

class LocationResolver:
    """
    Debounced, cancel-on-supersede search for a single location field.

    - edit(text): user typed; restarts the debounce window when searchable
    - select(location): confirm a candidate
    - clear(): reset the field
    - state: the current ResolverState (also pushed to `on_change`)
    """
    def __init__(
        self,
        client: GeocodeClient,
        *,
        policy: Optional[ResolverPolicy] = None,
        scheduler: Optional[Scheduler] = None,
        executor: Optional[Executor] = None,
        on_change: Optional[Callable[[ResolverState], None]] = None,
    ):
        self.client = client
        self.policy = policy or default_resolver_policy()
        self.debouncer = Debouncer(scheduler or ThreadingScheduler(), self.policy.debounce_seconds)
        self.executor = executor or ThreadPoolExecutor(max_workers=SEARCH_WORKERS, thread_name_prefix="geocode")
        self.on_change = on_change
        self._state = ResolverState()
        self._lock = threading.RLock()

    @property
    def state(self) -> ResolverState:
        return self._state

    @property
    def selection(self) -> Optional[Location]:
        return self._state.selection

    def search(self, query: str) -> SearchResult:
        """
        Direct, undebounced lookup: short input yields an empty result with
        no network call; otherwise the client's answer (or its GeocodeError).
        """
        if not is_searchable(query, self.policy.min_query_length):
            return SearchResult(query=query)
        return self.client.search(query)

    def edit(self, text: str) -> ResolverState:
        state = self._dispatch(QueryEdited(text))
        if state.status == ResolutionStatus.DEBOUNCING:
            self.debouncer.trigger(partial(self._on_timer, text))
        else:
            self.debouncer.cancel()
        return state

    def select(self, location: Location) -> ResolverState:
        self.debouncer.cancel()
        return self._dispatch(CandidateSelected(location))

    def clear(self) -> ResolverState:
        self.debouncer.cancel()
        return self._dispatch(SelectionCleared())

    def close(self) -> None:
        self.debouncer.cancel()
        self.executor.shutdown(wait=False)

    # --- internals ---

    def _dispatch(self, event: ResolverEvent) -> ResolverState:
        with self._lock:
            before = self._state
            after = apply_event(before, event, self.policy)
            self._state = after
            if after is not before and self.on_change is not None:
                self.on_change(after)
            return after

    def _on_timer(self, query: str) -> None:
        with self._lock:
            before = self._state
            after = self._dispatch(SearchIssued(query))
            if after.awaiting_token == before.awaiting_token:
                return
            token = after.awaiting_token

        logger.debug("Issuing autocomplete #%d for %r", token, query)
        future = self.executor.submit(self.client.search, query)
        future.add_done_callback(partial(self._on_response, token))

    def _on_response(self, token: int, future: Future) -> None:
        try:
            result = future.result()
        except MalformedResponseError as e:
            logger.warning("Malformed autocomplete response #%d: %s", token, e)
            event: ResolverEvent = SearchFailed(token, str(e), ErrorKind.MALFORMED)
        except GeocodeError as e:
            logger.warning("Autocomplete #%d failed: %s", token, e)
            event = SearchFailed(token, str(e), ErrorKind.NETWORK)
        except Exception as e:
            logger.exception("Autocomplete #%d raised unexpectedly", token)
            event = SearchFailed(token, str(e) or type(e).__name__, ErrorKind.UNEXPECTED)
        else:
            event = SearchSucceeded(token, result)

        with self._lock:
            if token != self._state.awaiting_token:
                logger.debug("Discarding stale autocomplete response #%d", token)
                return
            self._dispatch(event)
