import pytest
from concurrent.futures import Executor, Future
from typing import Any, Callable, Dict, List, Optional

from geocoding.models import Location, SearchResult


def make_feature(lon: float, lat: float, feature_id: Optional[str] = None, **properties) -> Dict[str, Any]:
    feature: Dict[str, Any] = {
        "geometry": {"coordinates": [lon, lat]},
        "properties": properties,
    }
    if feature_id is not None:
        feature["id"] = feature_id
    return feature


def make_location(name: str, lon: float, lat: float) -> Location:
    return Location(id=name.lower(), name=name, coords=(lon, lat), country="US")


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, invalid_json: bool = False):
        self.status_code = status_code
        self._payload = payload
        self._invalid_json = invalid_json

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        if self._invalid_json:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    """Stands in for requests.Session; replays queued responses (or raises queued exceptions)."""
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def _next(self, method: str, url: str, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url, **kwargs):
        return self._next("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._next("POST", url, **kwargs)


class StubGeocodeClient:
    """
    In-memory GeocodeClient: answers by query text.
    Values may be a SearchResult, a list of Locations, or an exception to raise.
    """
    def __init__(self, answers: Optional[Dict[str, Any]] = None):
        self.answers = answers or {}
        self.queries: List[str] = []

    def search(self, query: str) -> SearchResult:
        self.queries.append(query)
        answer = self.answers.get(query, [])
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, SearchResult):
            return answer
        return SearchResult(query=query, candidates=tuple(answer))

    def first_match(self, query: str) -> Optional[Location]:
        result = self.search(query)
        return result.candidates[0] if result.candidates else None


class FakeTimer:
    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Virtual clock: timers only fire when the test calls advance()."""
    def __init__(self):
        self.now = 0.0
        self.timers: List[FakeTimer] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def active(self) -> List[FakeTimer]:
        return [t for t in self.timers if not t.cancelled]

    def advance(self, seconds: float) -> None:
        self.now += seconds
        due = sorted((t for t in self.active if t.due <= self.now), key=lambda t: t.due)
        self.timers = [t for t in self.active if t not in due]
        for timer in due:
            timer.callback()


class FakeExecutor(Executor):
    """Holds submitted calls until the test decides when (and in which order) they complete."""
    def __init__(self):
        self.pending: List[tuple] = []

    def submit(self, fn, *args, **kwargs) -> Future:
        future: Future = Future()
        self.pending.append((future, fn, args, kwargs))
        return future

    def complete(self, index: int = 0) -> None:
        future, fn, args, kwargs = self.pending.pop(index)
        try:
            result = fn(*args, **kwargs)
        except Exception as e:
            future.set_exception(e)
        else:
            future.set_result(result)

    def complete_all(self) -> None:
        while self.pending:
            self.complete(0)

    def shutdown(self, wait=True, **kwargs) -> None:
        pass


@pytest.fixture
def feature():
    return make_feature


@pytest.fixture
def location():
    return make_location


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def executor():
    return FakeExecutor()


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def stub_client():
    return StubGeocodeClient
