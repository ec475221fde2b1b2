"""
Input discovery: photographed pages on disk and their capture times.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Union
import structlog

from recipe_scan.config import get_settings
from recipe_scan.errors import EmptyInputError, ItemReadError

logger = structlog.get_logger(__name__)

# Camera and phone naming schemes, most specific first
_NAME_PATTERNS = [
    # IMG_20240131_184502.jpg, PXL_20240131_184502123.jpg, 20240131_184502.jpg
    re.compile(r"(?P<date>\d{8})[_-](?P<time>\d{6})"),
    # 2024-01-31 18.45.02.jpg, 2024-01-31_18-45-02.png
    re.compile(
        r"(?P<y>\d{4})-(?P<m>\d{2})-(?P<d>\d{2})[ _T](?P<H>\d{2})[.:-](?P<M>\d{2})[.:-](?P<S>\d{2})"
    ),
]


def timestamp_from_name(name: str) -> Optional[datetime]:
    """Parse a capture time embedded in a file name, if there is one."""
    for pattern in _NAME_PATTERNS:
        for match in pattern.finditer(name):
            groups = match.groupdict()
            try:
                if "date" in groups:
                    return datetime.strptime(groups["date"] + groups["time"], "%Y%m%d%H%M%S")
                return datetime(
                    int(groups["y"]), int(groups["m"]), int(groups["d"]),
                    int(groups["H"]), int(groups["M"]), int(groups["S"])
                )
            except ValueError:
                continue
    return None


def timestamp_from_filesystem(path: Path) -> datetime:
    """Creation time where the platform records it, otherwise modification time."""
    stat = path.stat()
    created = getattr(stat, "st_birthtime", None)
    return datetime.fromtimestamp(created if created is not None else stat.st_mtime)


def derive_timestamp(path: Path) -> datetime:
    return timestamp_from_name(path.name) or timestamp_from_filesystem(path)


@dataclass(frozen=True)
class InputItem:
    """One photographed page."""
    path: Path
    timestamp: datetime
    name: str = field(default="")

    def __post_init__(self):
        if not self.name:
            object.__setattr__(self, "name", self.path.name)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "InputItem":
        path = Path(path)
        return cls(path=path, timestamp=derive_timestamp(path))

    def read_bytes(self) -> bytes:
        try:
            return self.path.read_bytes()
        except OSError as e:
            raise ItemReadError(
                f"Failed to read {self.name}: {e}",
                {"path": str(self.path)}
            )


def discover_items(
    directory: Union[str, Path],
    extensions: Iterable[str] = None
) -> List[InputItem]:
    """
    Find image files in a directory, ordered by capture time.

    Args:
        directory: Directory to scan (not recursive)
        extensions: Accepted suffixes (defaults to configured image extensions)

    Returns:
        InputItems sorted by timestamp, ties kept in name order

    Raises:
        EmptyInputError: If no image files are found
    """
    directory = Path(directory)
    accepted = {e.lower() for e in (extensions or get_settings().image.extensions)}

    if not directory.is_dir():
        raise EmptyInputError(str(directory))

    paths = sorted(
        (p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in accepted),
        key=lambda p: p.name
    )
    if not paths:
        raise EmptyInputError(str(directory))

    items = []
    for path in paths:
        try:
            items.append(InputItem.from_path(path))
        except OSError as e:
            logger.warning("input_item_unreadable", name=path.name, error=str(e))

    if not items:
        raise EmptyInputError(str(directory))

    items.sort(key=lambda item: item.timestamp)
    logger.info(
        "inputs_discovered",
        directory=str(directory),
        count=len(items),
        skipped=len(paths) - len(items)
    )
    return items
