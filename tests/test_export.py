"""Tests for CSV and plain-text export."""

import csv
from pathlib import Path

from recipe_scan.export import CSV_COLUMNS, safe_filename, write_csv, write_text_files
from recipe_scan.schema import DISPLAY_NAMES, RecipeField, RecipeRecord


class TestCsvWriter:
    """Tests for write_csv."""

    def test_header_follows_schema_order(self) -> None:
        assert CSV_COLUMNS == [DISPLAY_NAMES[f] for f in RecipeField]
        assert len(CSV_COLUMNS) == 29

    def test_rows_round_trip_through_csv_reader(self, tmp_path: Path) -> None:
        records = [
            RecipeRecord(title="Soup 🍲", ingredients="1 onion\n2 carrots", tags="soup, easy"),
            RecipeRecord(title="Pie", yield_="1 pie"),
        ]
        path = tmp_path / "out" / "recipes.csv"
        assert write_csv(records, path) == 2

        with path.open(newline="", encoding="utf-8") as fh:
            rows = list(csv.DictReader(fh))
        assert rows[0]["Title"] == "Soup 🍲"
        assert rows[0]["Ingredients"] == "1 onion\n2 carrots"
        assert rows[0]["Tags"] == "soup, easy"
        assert rows[1]["Yield"] == "1 pie"
        assert rows[1]["Calories"] == ""

    def test_empty_batch_writes_header_only(self, tmp_path: Path) -> None:
        path = tmp_path / "recipes.csv"
        assert write_csv([], path) == 0
        assert path.read_text(encoding="utf-8").splitlines() == [",".join(CSV_COLUMNS)]


class TestTextWriter:
    """Tests for write_text_files."""

    def test_safe_filename(self) -> None:
        assert safe_filename('Mac & "Cheese": v2/3?') == "Mac & _Cheese__ v2_3_"
        assert safe_filename("  ...  ") == "untitled"
        assert safe_filename("Soup 🍲") == "Soup 🍲"

    def test_one_file_per_record_with_collisions(self, tmp_path: Path) -> None:
        records = [
            RecipeRecord(title="Soup", ingredients="water", directions="Boil.", course="Main Dish"),
            RecipeRecord(title="Soup"),
            RecipeRecord(title=""),
        ]
        paths = write_text_files(records, tmp_path)
        assert [p.name for p in paths] == ["Soup.txt", "Soup (2).txt", "untitled.txt"]

        content = paths[0].read_text(encoding="utf-8")
        assert content.startswith("Soup\n")
        assert "Course: Main Dish" in content
        assert "INGREDIENTS\nwater" in content
        assert "DIRECTIONS\nBoil." in content
