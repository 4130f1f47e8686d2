"""
Pytest configuration for the storefront client.

Provides fixtures for:
- Settings with test-friendly overrides (no retry backoff)
- An in-memory fake backend served through httpx.MockTransport
- ApiClient construction against that backend
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from storefront.config import Settings, get_settings
from storefront.infrastructure.api_client import ApiClient


@dataclass
class _Route:
    status: int = 200
    json: Any = None
    content: Optional[bytes] = None
    error: Optional[Callable[[httpx.Request], Exception]] = None


class FakeBackend:
    """
    Path-keyed canned responses. Unknown paths answer 404.
    """

    def __init__(self) -> None:
        self.routes: Dict[str, _Route] = {}
        self.calls: List[str] = []
        self.requests: List[httpx.Request] = []

    def add(
        self,
        path: str,
        json: Any = None,
        status: int = 200,
        content: Optional[bytes] = None,
    ) -> "FakeBackend":
        self.routes[path] = _Route(status=status, json=json, content=content)
        return self

    def fail_connect(self, path: str) -> "FakeBackend":
        self.routes[path] = _Route(
            error=lambda request: httpx.ConnectError("connection refused", request=request)
        )
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request.url.path)
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"message": "Not found"})
        if route.error is not None:
            raise route.error(request)
        if route.content is not None:
            return httpx.Response(route.status, content=route.content)
        return httpx.Response(route.status, json=route.json)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture(autouse=True)
def _fresh_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.
    """
    return Settings(
        api_base_url="http://backend.test",
        request_retry_attempts=2,
        request_retry_wait_seconds=0.0,
        log_level="DEBUG",
        countdown_days=0,
        countdown_hours=0,
        countdown_minutes=0,
        countdown_seconds=3,
        tick_interval_seconds=0.01,
    )


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def make_client(backend: FakeBackend, test_settings: Settings) -> Callable[[], ApiClient]:
    """
    Factory for ApiClients wired to the fake backend. Use with ``async with``.
    """

    def factory() -> ApiClient:
        return ApiClient.from_settings(test_settings, transport=backend.transport)

    return factory


@pytest.fixture
def sample_users() -> List[Dict[str, Any]]:
    return [
        {
            "id": "1",
            "name": "Ana Garcia",
            "email": "ana.garcia@example.com",
            "phone": "+1-555-0101",
            "createdAt": "2026-10-10T08:00:00Z",
            "status": "active",
        },
        {
            "id": 2,
            "name": "Bruno Diaz",
            "email": "   ",
            "createdAt": "2026-01-01T00:00:00Z",
            "status": "inactive",
        },
        {
            "id": "3",
            "name": "Carla Perez",
            "email": "carla@example.com",
            "phone": "555-0199",
            "createdAt": "not-a-date",
        },
        {"id": "4", "name": None, "role": "admin"},
    ]


@pytest.fixture
def sample_products() -> List[Dict[str, Any]]:
    return [
        {
            "productId": "P1",
            "productName": "Phone",
            "originalPrice": 100,
            "finalPrice": 80,
            "rating": "4.5",
            "inStock": True,
            "availability": "In Stock",
            "brand": {"brandName": "Acme", "shortName": "ACM"},
            "category": {"categoryName": "Phones"},
            "discount": {"enabled": True, "type": "percentage", "amount": "20"},
            "featured": True,
        },
        {
            "productId": "P2",
            "productName": "Laptop",
            "originalPrice": 1000,
            "finalPrice": 1000,
            "rating": "3.9",
            "inStock": False,
            "availability": "Out of Stock",
        },
        {
            "productId": "P3",
            "productName": "Headphones",
            "originalPrice": 50,
            "finalPrice": 0,
            "rating": "4.0",
            "inStock": True,
        },
        {
            "productId": "P4",
            "productName": "Camera",
            "originalPrice": 300,
            "finalPrice": 250,
            "rating": "n/a",
        },
    ]
