from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from property_lookup.modules.lookup import service
from property_lookup.modules.lookup.orchestrator import LookupOrchestrator
from property_lookup.modules.lookup.schemas import LookupRequest, LookupResponse

router = APIRouter(tags=["lookup"])


def get_orchestrator() -> LookupOrchestrator:
    return LookupOrchestrator()


@router.post("/lookup", response_model=LookupResponse)
async def lookup(
    body: LookupRequest,
    orchestrator: LookupOrchestrator = Depends(get_orchestrator),
) -> LookupResponse:
    if not body.is_valid:
        raise HTTPException(status_code=400, detail="Address is required")
    return await service.lookup_property(body.address, orchestrator)
