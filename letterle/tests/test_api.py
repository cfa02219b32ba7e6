"""
Tests for API layer.

Tests:
- API service methods
- HTTP endpoints
- Error responses
"""

import pytest
from fastapi.testclient import TestClient

from ..api.app import app as module_app, create_app
from ..api.schemas import ErrorCode, SessionStatus, ThemeName, TileFeedback
from ..api.service import APIService
from ..config import Settings
from ..errors import WindowNotComplete
from ..session import SessionStore
from .conftest import SequenceRandom


@pytest.fixture
def service(storage, clock):
    """An API service over in-memory storage whose answer is 'm'."""
    return APIService(
        store_factory=lambda: SessionStore(storage, clock=clock, rng=SequenceRandom("mq"))
    )


@pytest.fixture
def client(service):
    app = create_app(service=service, settings=Settings(env="test"))
    return TestClient(app)


class TestAPIService:
    """Tests for APIService."""

    def test_get_session(self, service):
        response = service.get_session()

        assert response.status == SessionStatus.LOADED
        assert response.attempts == 0
        assert response.first_run
        assert response.answer is None
        assert len(response.tiles) == 26

    def test_guess_normalized(self, service):
        response = service.guess(" L ")

        assert response.accepted
        assert response.value == "l"
        assert response.feedback == TileFeedback.CLOSE
        assert response.session.options == ["l"]

    def test_ignored_guess(self, service):
        service.guess("a")
        response = service.guess("a")

        assert not response.accepted
        assert response.feedback is None
        assert response.session.attempts == 1

    def test_winning_guess_reveals_answer(self, service):
        response = service.guess("m")

        assert response.accepted
        assert response.complete
        assert response.feedback == TileFeedback.CORRECT
        assert response.session.answer == "m"

    def test_toggle_theme(self, service):
        assert service.set_theme().theme == ThemeName.DARK
        assert service.set_theme().theme == ThemeName.LIGHT
        assert service.set_theme(ThemeName.DARK).theme == ThemeName.DARK

    def test_share_requires_completion(self, service):
        with pytest.raises(WindowNotComplete):
            service.get_share()

    def test_share_after_completion(self, service):
        service.guess("m")
        assert service.get_share().text.startswith("Find Phunk  #1  1/26")

    def test_refresh_resumes(self, service):
        service.guess("a")
        response = service.refresh()
        assert response.options == ["a"]
        assert not response.first_run

    def test_refresh_after_midnight(self, service, clock):
        service.guess("m")
        clock.advance(days=1)

        response = service.refresh()

        assert response.status == SessionStatus.LOADED
        assert response.attempts == 0
        assert service.get_statistics().played == 1


class TestEndpoints:
    """Tests for the HTTP endpoints."""

    def test_health(self, client):
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.json()["env"] == "test"

    def test_session(self, client):
        data = client.get("/api/v1/session").json()
        assert data["status"] == "loaded"
        assert data["answer"] is None
        assert data["countdown"] == "13:29:59"

    def test_play_through(self, client):
        for letter in "abc":
            assert client.post("/api/v1/guess", json={"value": letter}).json()["accepted"]

        data = client.post("/api/v1/guess", json={"value": "m"}).json()
        assert data["complete"]
        assert data["session"]["status"] == "complete"
        assert data["session"]["answer"] == "m"

        stats = client.get("/api/v1/stats").json()
        assert stats["played"] == 1
        assert stats["best"] == 4
        assert stats["average"] == 4
        assert stats["distribution"] == {"4": 1}

        share = client.get("/api/v1/share").json()
        assert share["text"].startswith("Find Phunk  #1  4/26\n")

    def test_guess_out_of_alphabet(self, client):
        data = client.post("/api/v1/guess", json={"value": "7"}).json()
        assert not data["accepted"]
        assert data["session"]["attempts"] == 0

    def test_guess_validation_error(self, client):
        response = client.post("/api/v1/guess", json={})
        assert response.status_code == 422
        assert response.json()["error_code"] == ErrorCode.VALIDATION_ERROR.value

    def test_theme_toggle_without_body(self, client):
        assert client.post("/api/v1/theme").json()["theme"] == "dark"

    def test_theme_set(self, client):
        response = client.post("/api/v1/theme", json={"theme": "light"})
        assert response.json()["theme"] == "light"

    def test_theme_invalid(self, client):
        response = client.post("/api/v1/theme", json={"theme": "sepia"})
        assert response.status_code == 422

    def test_share_before_completion(self, client):
        response = client.get("/api/v1/share")
        assert response.status_code == 409
        assert response.json()["error_code"] == "WINDOW_NOT_COMPLETE"

    def test_stats_empty(self, client):
        stats = client.get("/api/v1/stats").json()
        assert stats["played"] == 0
        assert stats["best"] is None
        assert stats["average"] is None

    def test_openapi_schema(self, client):
        schema = client.get("/openapi.json").json()
        schemas = schema["components"]["schemas"]
        for name in ["SessionResponse", "GuessResponse", "StatisticsResponse", "ErrorResponse"]:
            assert name in schemas

    def test_module_level_app(self):
        """The importable app serves the same routes without touching storage."""
        assert module_app is not None
        paths = {route.path for route in module_app.routes}
        assert {"/api/v1/health", "/api/v1/session", "/api/v1/guess", "/api/v1/share"} <= paths
