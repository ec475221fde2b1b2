"""Plain-text export, one file per recipe."""

import re
from pathlib import Path
from typing import Iterable, List, Union
import structlog

from recipe_scan.schema import DISPLAY_NAMES, RecipeField, RecipeRecord

logger = structlog.get_logger(__name__)

_INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
MAX_STEM_LENGTH = 120

# Multi-line fields get their own section after the scalar fields
_SECTIONS = (RecipeField.INGREDIENTS, RecipeField.DIRECTIONS, RecipeField.NOTES)


def safe_filename(title: str) -> str:
    """File stem derived from a title, valid on common filesystems."""
    stem = _INVALID_FILENAME_CHARS.sub("_", title.replace("\n", " ")).strip()
    stem = stem[:MAX_STEM_LENGTH].rstrip(". ")
    return stem or "untitled"


def _unique_path(directory: Path, stem: str, taken: set) -> Path:
    candidate = directory / f"{stem}.txt"
    n = 2
    while candidate.name.lower() in taken or candidate.exists():
        candidate = directory / f"{stem} ({n}).txt"
        n += 1
    taken.add(candidate.name.lower())
    return candidate


def render_text(record: RecipeRecord) -> str:
    lines = [record.title or "Untitled", ""]
    for field in RecipeField:
        if field is RecipeField.TITLE or field in _SECTIONS:
            continue
        value = record.get(field)
        if value:
            lines.append(f"{DISPLAY_NAMES[field]}: {value}")

    for field in _SECTIONS:
        value = record.get(field)
        if value:
            lines.extend(["", DISPLAY_NAMES[field].upper(), value])

    return "\n".join(lines) + "\n"


def write_text_files(records: Iterable[RecipeRecord], directory: Union[str, Path]) -> List[Path]:
    """
    Write one .txt file per record.

    Returns:
        Paths written, in record order
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    taken: set = set()
    written = []
    for record in records:
        path = _unique_path(directory, safe_filename(record.title), taken)
        path.write_text(render_text(record), encoding="utf-8")
        written.append(path)

    logger.info("text_files_written", directory=str(directory), files=len(written))
    return written
