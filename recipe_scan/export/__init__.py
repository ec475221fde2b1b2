"""Record export module."""

from recipe_scan.export.csv_writer import CSV_COLUMNS, write_csv
from recipe_scan.export.text_writer import safe_filename, write_text_files

__all__ = ["CSV_COLUMNS", "write_csv", "safe_filename", "write_text_files"]
