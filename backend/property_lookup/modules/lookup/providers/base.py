from __future__ import annotations

from abc import ABC, abstractmethod

import httpx

from property_lookup.core.config import is_configured_key
from property_lookup.modules.lookup.schemas import ProviderResult


class ProviderError(Exception):
    """Raised when a provider answers with a non-success HTTP status."""

    def __init__(self, provider: str, status_code: int, body: str = "") -> None:
        self.provider = provider
        self.status_code = status_code
        self.body = body
        message = f"{provider} API {status_code}"
        if body:
            message = f"{message}: {body}"
        super().__init__(message)

    @classmethod
    def from_response(cls, provider: str, response: httpx.Response) -> ProviderError:
        return cls(provider, response.status_code, response.text)


class BaseProvider(ABC):
    """Abstract base class for property-data providers."""

    name: str = "base"

    def __init__(self, api_key: str | None) -> None:
        self.api_key = api_key or ""

    @property
    def is_configured(self) -> bool:
        return is_configured_key(self.api_key)

    @abstractmethod
    async def lookup(self, address: str, client: httpx.AsyncClient) -> ProviderResult | None:
        """Look up one address. Returns None when not configured or nothing was found."""
        ...
