"""Integration tests for the text extraction runner.

These tests exercise the full path a converted SDS takes (text file or
stdin -> orchestrator -> JSON on stdout) through ``scripts.extract_text``,
with real settings, real patterns and real thread pools.

Unlike the unit tests, these verify:

  - One JSON document per input, in input order
  - The camelCase and legacy (German-keyed) shapes
  - Diagnostics output for partially extractable documents
  - CLI flags overriding the extraction settings
  - Exit code 1 for unreadable inputs
"""

from __future__ import annotations

import io
import json
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

from scripts.extract_text import main


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


def _documents(out: str) -> list[dict]:
    return [json.loads(line) for line in out.splitlines() if line.strip()]


# ---------------------------------------------------------------------------
# Output shapes
# ---------------------------------------------------------------------------


def test_single_file_camel_case(
    tmp_path: Path, sample_sds_text: str, capsys: pytest.CaptureFixture[str]
) -> None:
    """One file gives one camelCase JSON document."""
    sds = tmp_path / "aceton.txt"
    sds.write_text(sample_sds_text, encoding="utf-8")

    assert main([str(sds)]) == 0

    docs = _documents(capsys.readouterr().out)
    assert len(docs) == 1
    assert docs[0]["source"] == str(sds)
    assert docs[0]["result"] == {
        "name": "aceton technisch",
        "signalWord": "Danger",
        "storageClass": "3",
        "hStatements": ["EUH066", "H225", "H319", "H336"],
        "pStatements": ["P210", "P233", "P305+P351+P338"],
        "ghsCodes": ["GHS02", "GHS07"],
        "waterHazardClass": "1",
    }
    assert "diagnostics" not in docs[0]


def test_legacy_shape(
    tmp_path: Path, sample_sds_text: str, capsys: pytest.CaptureFixture[str]
) -> None:
    """--legacy renders the German-keyed shape."""
    sds = tmp_path / "aceton.txt"
    sds.write_text(sample_sds_text, encoding="utf-8")

    assert main(["--legacy", str(sds)]) == 0

    result = _documents(capsys.readouterr().out)[0]["result"]
    assert result["bezeichnung"] == "aceton technisch"
    assert result["signalwort"] == "Gefahr"
    assert result["lagerklasse"] == "3"
    assert result["hSaezte"] == ["EUH066", "H225", "H319", "H336"]
    assert result["wgk"] == "1"


def test_multiple_files_keep_input_order(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Documents are written in input order."""
    first = tmp_path / "a.txt"
    second = tmp_path / "b.txt"
    first.write_text("Lagerklasse 10-13\n", encoding="utf-8")
    second.write_text("Lagerklasse (TRGS 510): 6.1D\n", encoding="utf-8")

    assert main([str(first), str(second)]) == 0

    docs = _documents(capsys.readouterr().out)
    assert [d["result"]["storageClass"] for d in docs] == ["10-13", "6.1D"]


def test_stdin_input(capsys: pytest.CaptureFixture[str]) -> None:
    """Without paths the text is read from stdin."""
    stdin = io.StringIO("Handelsname\nFoo\nSignalwort\nAchtung\n")

    assert main([], stdin=stdin) == 0

    doc = _documents(capsys.readouterr().out)[0]
    assert doc["source"] == "<stdin>"
    assert doc["result"]["name"] == "foo"
    assert doc["result"]["signalWord"] == "Warning"


# ---------------------------------------------------------------------------
# Diagnostics + flags
# ---------------------------------------------------------------------------


def test_diagnostics_for_partial_document(capsys: pytest.CaptureFixture[str]) -> None:
    """--diagnostics adds the failed fields and timing."""
    stdin = io.StringIO("GHS07 GHS08 GHS07\nWGK 1\nWGK 2\n")

    assert main(["--diagnostics"], stdin=stdin) == 0

    doc = _documents(capsys.readouterr().out)[0]
    assert doc["result"]["ghsCodes"] == ["GHS07", "GHS08", "GHS07"]
    assert doc["result"]["waterHazardClass"] == "2"
    assert doc["missingFields"] == [
        "name",
        "signal_word",
        "storage_class",
        "h_statements",
        "p_statements",
    ]
    assert [d["kind"] for d in doc["diagnostics"]] == ["not_found"] * 4
    assert doc["processingTimeMs"] >= 0


def test_flags_override_settings(capsys: pytest.CaptureFixture[str]) -> None:
    """CLI flags override the extraction settings."""
    stdin = io.StringIO("GHS07 GHS08 GHS07\nWGK 1\nWGK 2\n")

    assert main(["--ghs-dedupe", "--wgk-policy", "first"], stdin=stdin) == 0

    result = _documents(capsys.readouterr().out)[0]["result"]
    assert result["ghsCodes"] == ["GHS07", "GHS08"]
    assert result["waterHazardClass"] == "1"


def test_empty_document_is_not_an_error(capsys: pytest.CaptureFixture[str]) -> None:
    """An empty document exits 0 with an empty record."""
    assert main([], stdin=io.StringIO("")) == 0

    result = _documents(capsys.readouterr().out)[0]["result"]
    assert result["name"] is None
    assert result["hStatements"] == []


def test_unreadable_file_returns_1(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """A missing file exits 1 without output."""
    assert main([str(tmp_path / "missing.txt")]) == 1
    assert capsys.readouterr().out == ""


def test_unknown_log_level_is_a_usage_error(capsys: pytest.CaptureFixture[str]) -> None:
    """argparse rejects an unknown --log-level before any extraction runs."""
    with pytest.raises(SystemExit) as exc_info:
        main(["--log-level", "verbose"], stdin=io.StringIO("WGK 1\n"))

    assert exc_info.value.code == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "invalid choice" in captured.err


def test_log_level_is_case_insensitive(capsys: pytest.CaptureFixture[str]) -> None:
    """A lower-case --log-level is accepted."""
    assert main(["--log-level", "debug"], stdin=io.StringIO("WGK 1\n")) == 0
    assert _documents(capsys.readouterr().out)[0]["result"]["waterHazardClass"] == "1"
