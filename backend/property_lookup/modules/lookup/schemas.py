"""Property Lookup Contracts — Pydantic models passed between lookup stages.

  Provider adapters -> Orchestrator:  ProviderResult
  Orchestrator      -> transports:    MergedResult
  HTTP client       -> router:        LookupRequest
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

MIN_ADDRESS_LENGTH = 5

FIELD_NAMES = ("beds", "baths", "sqft")


ProviderConfidence = Literal["medium", "low"]
OverallConfidence = Literal["none", "medium", "high"]


# ---------------------------------------------------------------------------
# Field values shared by every stage
# ---------------------------------------------------------------------------


class FieldSet(BaseModel):
    """Bedroom / bathroom / square-footage counts. None means unknown."""

    beds: int | None = Field(None, ge=1, le=10)
    baths: int | None = Field(None, ge=1, le=10)
    sqft: int | None = Field(None, ge=100, le=50000)

    def populated_fields(self) -> list[str]:
        return [name for name in FIELD_NAMES if getattr(self, name) is not None]

    def missing_fields(self) -> list[str]:
        return [name for name in FIELD_NAMES if getattr(self, name) is None]


# ---------------------------------------------------------------------------
# Provider adapter output
# ---------------------------------------------------------------------------


class ProviderResult(FieldSet):
    """Output of a single provider call.

    ``confidence`` is only set by the fallback provider and is informational;
    the orchestrator computes its own overall confidence.
    """

    model_config = {"frozen": True}

    source: str = Field(..., description="Attribution, usually a domain name")
    confidence: ProviderConfidence | None = None


# ---------------------------------------------------------------------------
# Orchestrator output
# ---------------------------------------------------------------------------


class MergedResult(FieldSet):
    """Best-effort lookup answer returned to callers."""

    source: str | None = Field(
        None, description="Provider attributions joined by ' + '"
    )
    confidence: OverallConfidence = "none"

    @classmethod
    def empty(cls) -> MergedResult:
        return cls()


class LookupResponse(MergedResult):
    """MergedResult as served over HTTP, plus an optional user-facing message."""

    message: str | None = None


# ---------------------------------------------------------------------------
# Inbound request
# ---------------------------------------------------------------------------


class LookupRequest(BaseModel):
    address: str | None = None

    @field_validator("address")
    @classmethod
    def strip_address(cls, value: str | None) -> str | None:
        return value.strip() if isinstance(value, str) else value

    @property
    def is_valid(self) -> bool:
        return bool(self.address) and len(self.address) >= MIN_ADDRESS_LENGTH
