"""Unit tests for the command-line lookup script."""

from __future__ import annotations

import json

import pytest

from property_lookup.modules.lookup.schemas import LookupResponse
from scripts import lookup_property as cli


@pytest.fixture
def fake_lookup(monkeypatch: pytest.MonkeyPatch):
    calls: list[str] = []

    def _install(result: LookupResponse) -> list[str]:
        async def _lookup(address: str) -> LookupResponse:
            calls.append(address)
            return result

        monkeypatch.setattr(cli, "lookup_property", _lookup)
        return calls

    return _install


def test_summary_output(fake_lookup, capsys: pytest.CaptureFixture[str]) -> None:
    calls = fake_lookup(LookupResponse(beds=3, baths=2, source="rentcast.io", confidence="medium"))

    exit_code = cli.main(["42 Elm St, Austin, TX"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert calls == ["42 Elm St, Austin, TX"]
    assert "Beds:       3" in out
    assert "Sqft:       ?" in out
    assert "Confidence: medium" in out


def test_json_output(fake_lookup, capsys: pytest.CaptureFixture[str]) -> None:
    fake_lookup(LookupResponse(beds=3, baths=2, sqft=1400, source="rentcast.io", confidence="high"))

    exit_code = cli.main(["42 Elm St, Austin, TX", "--json"])

    data = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert data["sqft"] == 1400
    assert data["confidence"] == "high"


def test_nothing_found_exits_1(fake_lookup) -> None:
    fake_lookup(LookupResponse())
    assert cli.main(["42 Elm St, Austin, TX"]) == 1


def test_short_address_exits_2(fake_lookup) -> None:
    calls = fake_lookup(LookupResponse())
    assert cli.main(["12 A"]) == 2
    assert calls == []
