from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from glossmatch.cli import app

FIXTURES = Path(__file__).parent / "fixtures"
GLOSSARY = str(FIXTURES / "glossary_sample.csv")

runner = CliRunner()


def test_search_json_output():
    result = runner.invoke(app, ["search", "avatar performance rank", "--glossary", GLOSSARY, "--json"])
    assert result.exit_code == 0, result.stdout
    data = json.loads(result.stdout)
    assert data[0]["source"] == "Avatar Performance Rank"
    assert data[0]["score"] == 1.0


def test_search_without_matches():
    result = runner.invoke(app, ["search", "zzzzqqq", "--glossary", GLOSSARY])
    assert result.exit_code == 0
    assert "No matches." in result.stdout


def test_search_missing_glossary(tmp_path):
    result = runner.invoke(app, ["search", "avatar", "--glossary", str(tmp_path / "missing.csv")])
    assert result.exit_code != 0


def test_scan_text_file(tmp_path):
    text_file = tmp_path / "context.txt"
    text_file.write_text("Open the avatar performance rank panel", encoding="utf-8")
    result = runner.invoke(app, ["scan", str(text_file), "--glossary", GLOSSARY])
    assert result.exit_code == 0
    assert "Avatar Performance Rank" in result.stdout
