from __future__ import annotations

from typing import Any

import httpx
import structlog

from property_lookup.core.config import settings
from property_lookup.modules.lookup.providers.base import BaseProvider, ProviderError
from property_lookup.modules.lookup.providers.sanitizer import (
    sanitize_baths,
    sanitize_beds,
    sanitize_sqft,
)
from property_lookup.modules.lookup.schemas import ProviderResult

logger = structlog.get_logger()

RENTCAST_SOURCE = "rentcast.io"


class RentcastProvider(BaseProvider):
    """Primary provider: Rentcast structured property records."""

    name = "Rentcast"

    def __init__(self, api_key: str | None = None, base_url: str | None = None) -> None:
        super().__init__(settings.rentcast_api_key if api_key is None else api_key)
        self.base_url = (base_url or settings.rentcast_base_url).rstrip("/")

    async def lookup(self, address: str, client: httpx.AsyncClient) -> ProviderResult | None:
        if not self.is_configured:
            logger.info("rentcast_skipped", reason="No API key configured (RENTCAST_API_KEY)")
            return None

        resp = await client.get(
            f"{self.base_url}/properties",
            params={"address": address, "limit": 1},
            headers={"X-Api-Key": self.api_key, "Accept": "application/json"},
        )
        if not resp.is_success:
            raise ProviderError.from_response(self.name, resp)

        try:
            data = resp.json()
        except ValueError:
            logger.warning("rentcast_invalid_json", status=resp.status_code, body=resp.text[:200])
            return None

        record = _first_record(data)
        if record is None:
            return None

        beds = sanitize_beds(record.get("bedrooms"))
        baths = sanitize_baths(record.get("bathrooms"))
        sqft = sanitize_sqft(record.get("squareFootage"))

        # A record with no usable fields counts as not found
        if beds is None and baths is None and sqft is None:
            return None

        return ProviderResult(beds=beds, baths=baths, sqft=sqft, source=RENTCAST_SOURCE)


def _first_record(data: Any) -> dict | None:
    """Rentcast answers with either a list of records or a single record."""
    if isinstance(data, list):
        data = data[0] if data else None
    return data if isinstance(data, dict) else None
