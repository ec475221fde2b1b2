"""CSV export of recipe records."""

import csv
from pathlib import Path
from typing import Iterable, List, Union
import structlog

from recipe_scan.schema import DISPLAY_NAMES, RecipeField, RecipeRecord

logger = structlog.get_logger(__name__)

CSV_COLUMNS: List[str] = [DISPLAY_NAMES[f] for f in RecipeField]


def write_csv(records: Iterable[RecipeRecord], path: Union[str, Path]) -> int:
    """
    Write records to a CSV file with one column per RecipeField.

    Args:
        records: Final records
        path: Output file, overwritten if it exists

    Returns:
        Number of data rows written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh, quoting=csv.QUOTE_MINIMAL)
        writer.writerow(CSV_COLUMNS)
        for record in records:
            writer.writerow([record.get(f) for f in RecipeField])
            count += 1

    logger.info("csv_written", path=str(path), rows=count)
    return count
