#!/usr/bin/env python3
"""Look up beds / baths / sqft for one address from the command line.

Runs the same orchestrator as the HTTP endpoint.

Usage:
    python -m scripts.lookup_property "123 Main St, Springfield, IL 62701"
    python -m scripts.lookup_property "123 Main St, Springfield, IL 62701" --json
"""
from __future__ import annotations

import argparse
import asyncio
import sys

import structlog

from property_lookup.modules.lookup.schemas import LookupRequest, LookupResponse
from property_lookup.modules.lookup.service import lookup_property

logger = structlog.get_logger()


def format_summary(result: LookupResponse) -> str:
    def show(value: int | None) -> str:
        return "?" if value is None else str(value)

    lines = [
        f"Beds:       {show(result.beds)}",
        f"Baths:      {show(result.baths)}",
        f"Sqft:       {show(result.sqft)}",
        f"Source:     {result.source or '-'}",
        f"Confidence: {result.confidence}",
    ]
    if result.message:
        lines.append(result.message)
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Property data lookup")
    parser.add_argument("address", help="Free-text US street address")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    args = parser.parse_args(argv)

    request = LookupRequest(address=args.address)
    if not request.is_valid:
        logger.error("invalid_address", address=args.address)
        return 2

    result = asyncio.run(lookup_property(request.address))

    if args.json:
        print(result.model_dump_json(exclude_none=False, indent=2))
    else:
        print(format_summary(result))

    return 0 if result.populated_fields() else 1


if __name__ == "__main__":
    # Keep stdout clean for the result itself
    structlog.configure(logger_factory=structlog.PrintLoggerFactory(file=sys.stderr))
    sys.exit(main())
