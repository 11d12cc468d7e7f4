"""Fallback provider: Perplexity chat completions with live web search.

The model is asked for a bare ``{"beds":N,"baths":N,"sqft":N}`` object but does
not always comply, so the reply is parsed in two tiers:

  1. The first ``{...}`` object anywhere in the text, decoded as JSON.
  2. For any field still missing, pattern matching over the raw text
     ("3 bedrooms", "2.5 baths", "1,850 sq ft", or "Beds: 3" label style).
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Callable
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

SYSTEM_PROMPT = (
    "You are a property data assistant. "
    "Return ONLY a JSON object with numeric values, nothing else."
)

USER_PROMPT_TEMPLATE = (
    "How many bedrooms, bathrooms, and square feet is the home at {address}? "
    "Search Zillow, Realtor.com, Redfin, county tax records, or any real estate site. "
    'Reply ONLY with: {{"beds":NUMBER,"baths":NUMBER,"sqft":NUMBER}}'
)

# Non-greedy: first "{" up to the nearest "}"
_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*?\}")

# Number first: "3 bedrooms", "3br", "2.5 baths", "1,850 sq ft"
_BEDS_RE = re.compile(r"(\d+)\s*(?:bed|br\b|bedroom)", re.IGNORECASE)
_BATHS_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(?:bath|ba\b|bathroom)", re.IGNORECASE)
_SQFT_RE = re.compile(r"([\d,]+)\s*(?:sq|sqft|square)", re.IGNORECASE)

# Label first: "Beds: 3", "Bathrooms - 2.5", "Sqft: 1,850", also quoted keys of broken JSON
_BEDS_LABEL_RE = re.compile(r'\b(?:bedrooms?|beds?|br)\b"?\s*[:=\-]?\s*"?(\d+)', re.IGNORECASE)
_BATHS_LABEL_RE = re.compile(
    r'\b(?:bathrooms?|baths?|ba)\b"?\s*[:=\-]?\s*"?(\d+(?:\.\d+)?)', re.IGNORECASE
)
_SQFT_LABEL_RE = re.compile(
    r'\b(?:square\s+(?:feet|footage)|sq\.?\s*ft\.?|sqft)"?\s*[:=\-]?\s*"?(\d[\d,]*)',
    re.IGNORECASE,
)


class PerplexityProvider(BaseProvider):
    """Fallback provider: free-text AI search, parsed defensively."""

    name = "Perplexity"

    def __init__(
        self,
        api_key: str | None = None,
        url: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        default_source: str | None = None,
    ) -> None:
        super().__init__(settings.perplexity_api_key if api_key is None else api_key)
        self.url = url or settings.perplexity_url
        self.model = model or settings.perplexity_model
        self.max_tokens = max_tokens or settings.perplexity_max_tokens
        self.default_source = default_source or settings.perplexity_default_source

    async def lookup(self, address: str, client: httpx.AsyncClient) -> ProviderResult | None:
        if not self.is_configured:
            logger.info("perplexity_skipped", reason="No API key configured (PERPLEXITY_API_KEY)")
            return None

        resp = await client.post(
            self.url,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            json={
                "model": self.model,
                "messages": [
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": USER_PROMPT_TEMPLATE.format(address=address)},
                ],
                "max_tokens": self.max_tokens,
            },
        )
        logger.debug("perplexity_response", status=resp.status_code)
        if not resp.is_success:
            raise ProviderError.from_response(self.name, resp)

        try:
            data = resp.json()
        except ValueError:
            logger.warning("perplexity_invalid_json", status=resp.status_code, body=resp.text[:200])
            return None

        content = _completion_content(data)
        logger.debug("perplexity_content", content=content)
        return parse_completion_text(content, default_source=self.default_source)


def _completion_content(data: Any) -> str:
    """Pull ``choices[0].message.content`` out of a chat completion, or ""."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return ""
    return content if isinstance(content, str) else ""


def _round_half_up(value: float) -> int | None:
    if math.isnan(value) or math.isinf(value):
        return None
    return int(math.floor(value + 0.5))


def _sanitize_text_baths(raw: str) -> int | None:
    return sanitize_baths(_round_half_up(float(raw)))


def _sanitize_text_sqft(raw: str) -> int | None:
    return sanitize_sqft(raw.replace(",", ""))


def _mine(
    patterns: tuple[re.Pattern[str], ...],
    text: str,
    convert: Callable[[str], int | None],
) -> int | None:
    """First match across ``patterns`` (in order) that converts to a usable value."""
    for pattern in patterns:
        for match in pattern.finditer(text):
            value = convert(match.group(1))
            if value is not None:
                return value
    return None


def parse_completion_text(content: str, default_source: str | None = None) -> ProviderResult:
    """Mine beds / baths / sqft out of a model reply.

    Never raises on malformed content; unrecoverable fields are left as None.
    """
    beds: int | None = None
    baths: int | None = None
    sqft: int | None = None
    source = default_source or settings.perplexity_default_source

    # Tier 1: embedded JSON object
    json_match = _JSON_OBJECT_RE.search(content)
    if json_match:
        try:
            parsed = json.loads(json_match.group(0))
        except ValueError:
            # JSONDecodeError, or an integer literal over the conversion limit
            parsed = None
        if isinstance(parsed, dict):
            beds = sanitize_beds(parsed.get("beds"))
            baths = sanitize_baths(parsed.get("baths"))
            sqft = sanitize_sqft(parsed.get("sqft"))
            if isinstance(parsed.get("source"), str):
                source = parsed["source"]

    # Tier 2: free-text patterns for whatever is still missing
    if beds is None:
        beds = _mine((_BEDS_RE, _BEDS_LABEL_RE), content, sanitize_beds)
    if baths is None:
        baths = _mine((_BATHS_RE, _BATHS_LABEL_RE), content, _sanitize_text_baths)
    if sqft is None:
        sqft = _mine((_SQFT_RE, _SQFT_LABEL_RE), content, _sanitize_text_sqft)

    confidence = "medium" if beds is not None and baths is not None else "low"
    return ProviderResult(beds=beds, baths=baths, sqft=sqft, source=source, confidence=confidence)
