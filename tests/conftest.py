"""Shared fixtures: an in-memory gateway behind httpx.MockTransport."""

import httpx
import pytest

import gateway_client.base as gateway_base
from app.repositories.common import CacheRepository
from app.repositories.db import close_db
from app.services.sync import EventBus, SyncEngine
from app.state import AppState
from gateway_client import ElectionClient

GATEWAY_URL = "https://gateway.test/exec"
GATEWAY_TOKEN = "sheet-token"


def make_students() -> list[dict]:
    return [
        {"carnet": "2023001", "nombre": "Juan Pérez", "curso": "11-A", "habilitado": True},
        {"carnet": "2023002", "nombre": "María García", "curso": "11-B", "habilitado": True},
        {"carnet": 2023003, "nombre": "Carlos López", "curso": "10-A", "habilitado": True},
        {"carnet": "2023009", "nombre": "Pedro Ruiz", "curso": "9-B", "habilitado": False},
    ]


def make_candidates() -> list[dict]:
    return [
        {"id": 1, "nombre": "Sofía Hernández", "sigla": "SH", "foto": "", "propuestas": "Deportes"},
        {"id": 2, "nombre": "Diego Morales", "sigla": "DM", "foto": "", "propuestas": "Tecnología"},
    ]


class FakeGateway:
    """Spreadsheet gateway double that keeps its own state and records requests."""

    def __init__(self):
        self.students = make_students()
        self.candidates = make_candidates()
        self.config = {"isActive": True, "isEnded": False, "startTime": "", "endTime": ""}
        self.tally: dict[str, int] = {"1": 0, "2": 0}
        self.voted: list[str] = []
        self.requests: list[dict] = []
        self.status = 200
        self.down = False

    def actions(self) -> list[str]:
        return [r["action"] for r in self.requests]

    def votes(self) -> dict:
        return {"votes": dict(self.tally), "votedStudents": list(self.voted)}

    def _ok(self, data) -> httpx.Response:
        return httpx.Response(200, json={"success": True, "data": data})

    def _fail(self, error: str) -> httpx.Response:
        return httpx.Response(200, json={"success": False, "error": error})

    def handler(self, request: httpx.Request) -> httpx.Response:
        params = dict(request.url.params)
        self.requests.append(params)
        if self.down:
            raise httpx.ConnectError("gateway unreachable", request=request)
        if self.status != 200:
            return httpx.Response(self.status, text="error")

        action = params.get("action")
        if action == "getBoth":
            return self._ok(
                {
                    "students": self.students,
                    "candidates": self.candidates,
                    "config": self.config,
                    "votes": self.votes(),
                }
            )
        if action == "getStudents":
            return self._ok(self.students)
        if action == "getCandidates":
            return self._ok(self.candidates)
        if action == "getConfig":
            return self._ok(self.config)
        if action == "getVotes":
            return self._ok(self.votes())
        if action == "setConfig":
            if "isActive" in params:
                self.config["isActive"] = params["isActive"] == "true"
            if "startTime" in params:
                self.config["startTime"] = params["startTime"]
            if "endTime" in params:
                self.config["endTime"] = params["endTime"]
            return self._ok(self.config)
        if action == "addVote":
            student_id = params["studentId"]
            if student_id in self.voted:
                return self._fail("Student already voted")
            self.voted.append(student_id)
            key = params["candidateId"]
            self.tally[key] = self.tally.get(key, 0) + 1
            return self._ok({"message": "Vote recorded"})
        if action == "clearVotes":
            self.tally = {str(c["id"]): 0 for c in self.candidates}
            self.voted = []
            return self._ok({"message": "Votes cleared"})
        return self._fail(f"Unknown action: {action}")


@pytest.fixture(autouse=True)
def single_read_attempt(monkeypatch):
    """No retry backoff in unit tests."""
    monkeypatch.setattr(gateway_base, "READ_ATTEMPTS", 1)


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def client(gateway):
    http = httpx.AsyncClient(transport=httpx.MockTransport(gateway.handler))
    return ElectionClient(base_url=GATEWAY_URL, token=GATEWAY_TOKEN, client=http)


@pytest.fixture
def cache(tmp_path):
    path = str(tmp_path / "cache.duckdb")
    repo = CacheRepository(path)
    yield repo
    close_db(path)


@pytest.fixture
def state():
    return AppState()


@pytest.fixture
def events():
    return EventBus()


@pytest.fixture
def engine(client, cache, state, events):
    return SyncEngine(
        client=client,
        cache=cache,
        state=state,
        events=events,
        sync_interval=10,
        admin_interval=5,
        reconcile_delay=0,
    )
