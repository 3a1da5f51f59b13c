import json
import os
import tempfile

os.environ.setdefault("KOGO_LOG_DIR", tempfile.mkdtemp(prefix="kogo-logs-"))

import pytest
from fastapi.testclient import TestClient

from app.agents.map_agent import MapAgent
from app.api.deps import get_exchange_rate_service, get_map_agent, get_plan_store
from app.db.plan_store import PlanStore
from app.db.kv_store import InMemoryKeyValueStore
from app.services.naver_map_service import NaverMapService


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        # like requests: decode the body when no payload was given
        if self._payload is None:
            return json.loads(self.text)
        return self._payload


class FakeSession:
    """Stands in for requests.Session; replays queued responses in order."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def directions_payload(duration_ms=930000, distance_m=3200, guide=None):
    route = {"summary": {"duration": duration_ms, "distance": distance_m}}
    if guide is not None:
        route["guide"] = guide
    return {"code": 0, "route": {"traoptimal": [route]}}


def search_payload(*items):
    return {"total": len(items), "items": list(items)}


@pytest.fixture
def kv():
    return InMemoryKeyValueStore()


@pytest.fixture
def store(kv):
    return PlanStore(kv)


@pytest.fixture
def make_map_service():
    def _make(*responses, client_id="test-id", client_secret="test-secret"):
        session = FakeSession(*responses)
        return NaverMapService(client_id=client_id, client_secret=client_secret, timeout=5, session=session), session
    return _make


@pytest.fixture
def client(store):
    from main import app

    app.dependency_overrides[get_plan_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def use_map_service(make_map_service):
    """Route the API's map agent through a fake Naver session."""
    from main import app

    def _use(*responses, **kwargs):
        service, session = make_map_service(*responses, **kwargs)
        app.dependency_overrides[get_map_agent] = lambda: MapAgent(service)
        return session
    return _use


@pytest.fixture
def use_rate_service():
    from main import app

    def _use(service):
        app.dependency_overrides[get_exchange_rate_service] = lambda: service
    return _use
