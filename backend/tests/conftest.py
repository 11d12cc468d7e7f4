"""Shared test fixtures for the property lookup test suite."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Sequence

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from property_lookup.main import app
from property_lookup.modules.lookup.providers.base import BaseProvider
from property_lookup.modules.lookup.schemas import ProviderResult

Outcome = ProviderResult | Exception | None


class FakeProvider(BaseProvider):
    """Provider that replays scripted outcomes (results, None, or exceptions)."""

    def __init__(
        self,
        outcomes: Sequence[Outcome] = (),
        *,
        name: str = "Fake",
        configured: bool = True,
    ) -> None:
        super().__init__("test-key" if configured else "")
        self.name = name
        self.outcomes = list(outcomes)
        self.calls: list[str] = []

    async def lookup(self, address: str, client: httpx.AsyncClient) -> ProviderResult | None:
        self.calls.append(address)
        index = len(self.calls) - 1
        outcome = self.outcomes[index] if index < len(self.outcomes) else None
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class SleepRecorder:
    """Stand-in for asyncio.sleep that records delays instead of waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def make_provider() -> type[FakeProvider]:
    return FakeProvider


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client that talks directly to the FastAPI ASGI app."""
    transport = ASGITransport(app=app)  # type: ignore[arg-type]
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
