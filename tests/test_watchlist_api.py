from __future__ import annotations

from typing import Optional

from fastapi.testclient import TestClient

from salesboard.api.dependencies import get_reseed_service, get_watchlist_service
from salesboard.core.errors import ConflictError, InternalError, UnauthorizedError, ValidationError
from salesboard.schemas.admin import ReseedResult, ReseedStats
from salesboard.schemas.watchlist import (
    WatchlistAddRequest,
    WatchlistMutationResult,
    WatchlistResponse,
)


class FakeWatchlistService:
    def __init__(self) -> None:
        self.added: Optional[WatchlistAddRequest] = None
        self.removed: Optional[tuple] = None

    def list_watchlist(self, user_id: Optional[str]) -> WatchlistResponse:
        if not user_id:
            raise ValidationError("user_id is required")
        return WatchlistResponse(watchlist=[], count=0, milestone_count=0)

    def add(self, request: WatchlistAddRequest) -> WatchlistMutationResult:
        self.added = request
        if request.watched_user_id == "u2":
            raise ConflictError("User already on watchlist")
        return WatchlistMutationResult(success=True, message="Cara added to watchlist")

    def remove(self, user_id, watched_user_id) -> WatchlistMutationResult:
        self.removed = (user_id, watched_user_id)
        return WatchlistMutationResult(success=True, message="Removed from watchlist")


class FakeReseedService:
    def reseed(self, password: Optional[str]) -> ReseedResult:
        if password == "boom":
            raise InternalError("Failed to reseed database")
        if password != "open-sesame":
            raise UnauthorizedError("Unauthorized")
        return ReseedResult(
            success=True,
            message="Database reseeded successfully",
            stats=ReseedStats(users=2, sales=40, commissions=20, withholding_limits=2),
        )


def test_watchlist_requires_user(client: TestClient) -> None:
    client.app.dependency_overrides[get_watchlist_service] = FakeWatchlistService
    assert client.get("/api/v1/watchlist").status_code == 400
    response = client.get("/api/v1/watchlist", params={"user_id": "u1"})
    assert response.status_code == 200
    assert response.json()["data"] == {"watchlist": [], "count": 0, "milestoneCount": 0}


def test_watchlist_add_accepts_camel_case_body(client: TestClient) -> None:
    fake = FakeWatchlistService()
    client.app.dependency_overrides[get_watchlist_service] = lambda: fake
    response = client.post("/api/v1/watchlist", json={"userId": "u1", "watchedUserId": "u3"})
    assert response.status_code == 200
    assert fake.added is not None
    assert fake.added.watched_user_id == "u3"
    assert response.json()["data"]["message"] == "Cara added to watchlist"


def test_watchlist_duplicate_is_conflict(client: TestClient) -> None:
    client.app.dependency_overrides[get_watchlist_service] = FakeWatchlistService
    response = client.post("/api/v1/watchlist", json={"userId": "u1", "watchedUserId": "u2"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "conflict"


def test_watchlist_delete(client: TestClient) -> None:
    fake = FakeWatchlistService()
    client.app.dependency_overrides[get_watchlist_service] = lambda: fake
    response = client.delete("/api/v1/watchlist", params={"user_id": "u1", "watched_user_id": "u3"})
    assert response.status_code == 200
    assert fake.removed == ("u1", "u3")


def test_reseed_endpoint(client: TestClient) -> None:
    client.app.dependency_overrides[get_reseed_service] = FakeReseedService
    denied = client.post("/api/v1/admin/reseed", json={"password": "nope"})
    assert denied.status_code == 401
    assert denied.json()["error"]["code"] == "unauthorized"

    failed = client.post("/api/v1/admin/reseed", json={"password": "boom"})
    assert failed.status_code == 500
    assert failed.json()["error"]["code"] == "internal_error"

    response = client.post("/api/v1/admin/reseed", json={"password": "open-sesame"})
    assert response.status_code == 200
    assert response.json()["data"]["stats"]["withholdingLimits"] == 2
