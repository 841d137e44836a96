from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from libcat import cli
from libcat.models import Title
from libcat.services.catalog import IndexedCatalog

runner = CliRunner()


@pytest.fixture(autouse=True)
def _quiet_env(monkeypatch) -> None:
    monkeypatch.setenv("LIBCAT_LOG_LEVEL", "WARNING")
    monkeypatch.delenv("LIBCAT_STOP_WORDS", raising=False)
    monkeypatch.delenv("LIBCAT_STRICT", raising=False)


@pytest.fixture
def demo_seed(tmp_path: Path) -> Path:
    path = tmp_path / "demo.json"
    result = runner.invoke(cli.app, ["demo", "--output", str(path)])
    assert result.exit_code == 0
    return path


def test_config_json_flag(monkeypatch) -> None:
    monkeypatch.setenv("LIBCAT_STOP_WORDS", "the,of")
    monkeypatch.setenv("LIBCAT_RESULT_LIMIT", "7")

    result = runner.invoke(cli.app, ["config", "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout.strip())
    assert sorted(payload["stop_words"]) == ["of", "the"]
    assert payload["result_limit"] == 7
    assert payload["log_level"] == "WARNING"


def test_doctor_passes() -> None:
    result = runner.invoke(cli.app, ["doctor"])
    assert result.exit_code == 0
    assert "Doctor checks passed" in result.stdout


def test_search_json_ranks_results(demo_seed: Path) -> None:
    result = runner.invoke(cli.app, ["search", str(demo_seed), "Harry Potter", "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert [item["year"] for item in payload] == [2007, 2005, 1997]


def test_search_exact_phrase(demo_seed: Path) -> None:
    query = '"Harry Potter and the Half-Blood Prince"'
    result = runner.invoke(cli.app, ["search", str(demo_seed), query, "--json"])

    payload = json.loads(result.stdout)
    assert [item["title"] for item in payload] == ["Harry Potter and the Half-Blood Prince"]
    assert payload[0]["weight"] == 10


def test_search_respects_limit(demo_seed: Path) -> None:
    result = runner.invoke(cli.app, ["search", str(demo_seed), "rowling", "--limit", "1", "--json"])
    assert len(json.loads(result.stdout)) == 1


def test_search_without_matches(demo_seed: Path) -> None:
    result = runner.invoke(cli.app, ["search", str(demo_seed), "the of a"])
    assert result.exit_code == 0
    assert "No matches" in result.stdout


def test_search_table_output(demo_seed: Path) -> None:
    result = runner.invoke(cli.app, ["search", str(demo_seed), "Dickens", "--scores"])
    assert result.exit_code == 0
    assert "Search Results" in result.stdout
    assert "11859" in result.stdout


def test_search_reports_bad_seed(tmp_path: Path) -> None:
    result = runner.invoke(cli.app, ["search", str(tmp_path / "missing.json"), "anything"])
    assert result.exit_code == 1
    assert "not found" in result.stdout


def test_inventory_lists_titles(demo_seed: Path) -> None:
    result = runner.invoke(cli.app, ["inventory", str(demo_seed)])
    assert result.exit_code == 0
    assert "Inventory" in result.stdout
    assert "Quixote" in result.stdout


def test_verify_reports_consistent_catalog(demo_seed: Path) -> None:
    result = runner.invoke(cli.app, ["verify", str(demo_seed)])
    assert result.exit_code == 0
    assert "Catalog consistent" in result.stdout


def test_export_csv_to_file(demo_seed: Path, tmp_path: Path) -> None:
    destination = tmp_path / "out" / "inventory.csv"
    result = runner.invoke(
        cli.app,
        ["export", str(demo_seed), "--format", "csv", "--output", str(destination)],
    )
    assert result.exit_code == 0
    content = destination.read_text(encoding="utf-8")
    assert content.startswith("title,authors,year,copies,available,checked_out,lost")
    assert "Don Quixote,Miguel de Cervantes,1612,2,1,1,0" in content


def test_export_rejects_unknown_format(demo_seed: Path) -> None:
    result = runner.invoke(cli.app, ["export", str(demo_seed), "--format", "xml"])
    assert result.exit_code != 0


def test_search_limit_zero_returns_nothing(demo_seed: Path) -> None:
    result = runner.invoke(cli.app, ["search", str(demo_seed), "rowling", "--limit", "0", "--json"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == []


def test_catalog_logs_after_cli_run(tmp_path: Path) -> None:
    result = runner.invoke(cli.app, ["demo", "--output", str(tmp_path / "seed.json")])
    assert result.exit_code == 0

    catalog = IndexedCatalog()
    copy = catalog.purchase(Title("Dune", ["Frank Herbert"], 1965))

    assert catalog.checkout(copy)
    assert not catalog.checkout(copy)
    assert catalog.lose(copy)
