"""Property Lookup Orchestrator — merges primary and fallback provider data.

Pure Python controller. Sequence per lookup:

  START -> Primary (Rentcast, once) -> Fallback (Perplexity, 0..N) -> DONE

Merge Strategy:
  - A field set by an earlier stage is never overwritten, only gaps are filled.
  - Source attributions are concatenated with " + ".
  - Overall confidence is derived from how many of beds/baths/sqft were found.

Provider failures are logged and treated as "contributed nothing"; they never
abort the lookup.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable

import httpx
import structlog

from property_lookup.core.config import settings
from property_lookup.modules.lookup.providers.base import BaseProvider
from property_lookup.modules.lookup.providers.perplexity import PerplexityProvider
from property_lookup.modules.lookup.providers.rentcast import RentcastProvider
from property_lookup.modules.lookup.schemas import (
    FIELD_NAMES,
    MergedResult,
    OverallConfidence,
    ProviderResult,
)

logger = structlog.get_logger()

SOURCE_SEPARATOR = " + "


def compute_confidence(merged: MergedResult) -> OverallConfidence:
    found = len(merged.populated_fields())
    if found == len(FIELD_NAMES):
        return "high"
    if found >= 1:
        return "medium"
    return "none"


def merge_source(existing: str | None, new: str | None) -> str | None:
    if not existing:
        return new
    if new and new != existing:
        return f"{existing}{SOURCE_SEPARATOR}{new}"
    return existing


def fill_missing(merged: MergedResult, result: ProviderResult) -> list[str]:
    """Copy fields from ``result`` into ``merged`` where ``merged`` has none.

    Returns the names of the fields that were filled.
    """
    filled = []
    for name in FIELD_NAMES:
        value = getattr(result, name)
        if value is not None and getattr(merged, name) is None:
            setattr(merged, name, value)
            filled.append(name)
    return filled


class LookupOrchestrator:
    """Coordinates one address lookup across the primary and fallback providers.

    Holds no per-lookup state; a single instance may serve concurrent lookups.
    """

    def __init__(
        self,
        primary: BaseProvider | None = None,
        fallback: BaseProvider | None = None,
        *,
        max_fallback_attempts: int | None = None,
        retry_delay_seconds: float | None = None,
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.primary = primary if primary is not None else RentcastProvider()
        self.fallback = fallback if fallback is not None else PerplexityProvider()
        self.max_fallback_attempts = (
            settings.lookup_max_fallback_attempts
            if max_fallback_attempts is None
            else max_fallback_attempts
        )
        self.retry_delay_seconds = (
            settings.lookup_retry_delay_seconds
            if retry_delay_seconds is None
            else retry_delay_seconds
        )
        self.timeout_seconds = (
            settings.http_timeout_seconds if timeout_seconds is None else timeout_seconds
        )
        self._transport = transport
        self._sleep = sleep

    async def lookup(self, address: str) -> MergedResult:
        """Look up beds / baths / sqft for ``address``. Never raises for provider failures."""
        start = time.time()
        log = logger.bind(address=address)
        log.info(
            "lookup_started",
            primary_configured=self.primary.is_configured,
            fallback_configured=self.fallback.is_configured,
        )

        merged = MergedResult.empty()

        async with httpx.AsyncClient(
            timeout=self.timeout_seconds, transport=self._transport
        ) as client:
            await self._run_primary(address, client, merged, log)
            await self._run_fallback(address, client, merged, log)

        merged.confidence = compute_confidence(merged)

        log.info(
            "lookup_finished",
            beds=merged.beds,
            baths=merged.baths,
            sqft=merged.sqft,
            source=merged.source,
            confidence=merged.confidence,
            duration_ms=int((time.time() - start) * 1000),
        )
        return merged

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    async def _run_primary(
        self,
        address: str,
        client: httpx.AsyncClient,
        merged: MergedResult,
        log: structlog.typing.FilteringBoundLogger,
    ) -> None:
        if not self.primary.is_configured:
            return

        try:
            result = await self.primary.lookup(address, client)
        except Exception as e:
            log.warning("primary_lookup_failed", provider=self.primary.name, error=str(e))
            return

        if result is None:
            log.info("primary_no_results", provider=self.primary.name)
            return

        filled = fill_missing(merged, result)
        merged.source = result.source
        log.info("primary_found", provider=self.primary.name, fields=filled)

    async def _run_fallback(
        self,
        address: str,
        client: httpx.AsyncClient,
        merged: MergedResult,
        log: structlog.typing.FilteringBoundLogger,
    ) -> None:
        if not self.fallback.is_configured:
            return

        total = self.max_fallback_attempts
        for attempt in range(1, total + 1):
            if not merged.missing_fields():
                break

            log.info(f"fallback attempt [{attempt}/{total}]", provider=self.fallback.name)
            try:
                result = await self.fallback.lookup(address, client)
            except Exception as e:
                log.warning(
                    "fallback_lookup_failed",
                    provider=self.fallback.name,
                    attempt=attempt,
                    error=str(e),
                )
                result = None
            else:
                if result is None:
                    log.info("fallback_no_results", provider=self.fallback.name, attempt=attempt)

            if result is not None:
                filled = fill_missing(merged, result)
                merged.source = merge_source(merged.source, result.source)
                log.info(
                    "fallback_found",
                    provider=self.fallback.name,
                    attempt=attempt,
                    fields=filled,
                    provider_confidence=result.confidence,
                )
                # beds + baths drive pricing; sqft alone is not worth another call
                if merged.beds is not None and merged.baths is not None:
                    break

            if attempt < total and (merged.beds is None or merged.baths is None):
                await self._sleep(self.retry_delay_seconds)
