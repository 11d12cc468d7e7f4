from __future__ import annotations

import structlog

from property_lookup.modules.lookup.orchestrator import LookupOrchestrator
from property_lookup.modules.lookup.schemas import LookupResponse

logger = structlog.get_logger()

FAILURE_MESSAGE = "Could not verify property details."


async def lookup_property(
    address: str,
    orchestrator: LookupOrchestrator | None = None,
) -> LookupResponse:
    """Run one lookup and always return a valid response.

    Anything escaping the orchestrator is logged and replaced by an all-empty
    result with confidence "none".
    """
    orchestrator = orchestrator or LookupOrchestrator()
    try:
        merged = await orchestrator.lookup(address)
    except Exception:
        logger.exception("lookup_failed", address=address)
        return LookupResponse(message=FAILURE_MESSAGE)
    return LookupResponse(**merged.model_dump())
