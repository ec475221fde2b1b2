"""Tests for the command-line interface."""

import csv
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from recipe_scan.cli.main import cli
from recipe_scan.config import get_settings
from recipe_scan.service.client import RecipeServiceClient
from conftest import FakeClient


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestGroupsCommand:
    """Tests for the grouping preview."""

    def test_lists_groups(self, photo_dir: Path) -> None:
        result = CliRunner().invoke(cli, ["groups", str(photo_dir)])
        assert result.exit_code == 0
        assert "2 groups from 4 photos" in result.output

    def test_threshold_option(self, photo_dir: Path) -> None:
        result = CliRunner().invoke(cli, ["groups", str(photo_dir), "--threshold", "60"])
        assert result.exit_code == 0
        assert "1 groups from 4 photos" in result.output

    def test_empty_directory_exits_nonzero(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(cli, ["groups", str(tmp_path)])
        assert result.exit_code == 1
        assert "No images found" in result.output


class TestScanCommand:
    """Tests for the full scan command with the service replaced."""

    def test_scan_writes_csv_and_text(self, photo_dir: Path, tmp_path: Path) -> None:
        fake = FakeClient(
            texts={"IMG_20240131_184530.jpg": "", "IMG_20240131_184535.jpg": ""}
        )
        output = tmp_path / "out.csv"
        text_dir = tmp_path / "txt"

        with patch.object(RecipeServiceClient, "from_settings", return_value=fake):
            result = CliRunner().invoke(
                cli,
                [
                    "scan", str(photo_dir),
                    "--output", str(output),
                    "--text-dir", str(text_dir),
                    "--workers", "2",
                    "--tag", "family",
                ],
            )

        assert result.exit_code == 0, result.output
        with output.open(newline="", encoding="utf-8") as fh:
            rows = list(csv.DictReader(fh))
        assert len(rows) == 1
        assert rows[0]["Title"] == "Chicken Soup 🍲"
        assert rows[0]["Tags"] == "soup, family"
        assert rows[0]["Calories"] == "250"
        assert len(list(text_dir.glob("*.txt"))) == 1
        assert "Skipped groups" in result.output
        assert "no text could be extracted" in result.output

    def test_scan_without_credentials(self, photo_dir: Path, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setenv("GEMINI_API_KEY", "")
        result = CliRunner().invoke(cli, ["scan", str(photo_dir), "--output", str(tmp_path / "x.csv")])
        assert result.exit_code == 1
        assert "GEMINI_API_KEY" in result.output
