"""
Temporal grouping of input items.

Pages of one recipe are usually photographed seconds apart, so a recipe is
approximated as a run of shots whose consecutive gaps stay within a threshold.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple
import structlog

from recipe_scan.inputs import InputItem

logger = structlog.get_logger(__name__)

DEFAULT_THRESHOLD_SECONDS = 7.5


@dataclass(frozen=True)
class Group:
    """Chronologically contiguous, non-empty run of input items."""
    items: Tuple[InputItem, ...]

    def __post_init__(self):
        if not self.items:
            raise ValueError("A group needs at least one item")

    @property
    def names(self) -> List[str]:
        return [item.name for item in self.items]

    @property
    def label(self) -> str:
        return ", ".join(self.names)

    def __len__(self) -> int:
        return len(self.items)


def group_by_time(
    items: Sequence[InputItem],
    threshold_seconds: float = DEFAULT_THRESHOLD_SECONDS
) -> List[Group]:
    """
    Partition items into groups of closely spaced shots.

    A candidate joins the open group when 0 < gap <= threshold, where gap is
    measured from the group's last item. Identical timestamps (gap == 0) start
    a new group.

    Args:
        items: Input items; sorted by timestamp here, ties keep their order
        threshold_seconds: Largest gap that still joins a group

    Returns:
        Groups covering every item exactly once, in chronological order
    """
    ordered = sorted(items, key=lambda item: item.timestamp)
    groups: List[Group] = []
    current: List[InputItem] = []

    for item in ordered:
        if current:
            gap = (item.timestamp - current[-1].timestamp).total_seconds()
            if 0 < gap <= threshold_seconds:
                current.append(item)
                continue
            groups.append(Group(tuple(current)))
        current = [item]

    if current:
        groups.append(Group(tuple(current)))

    logger.info(
        "items_grouped",
        items=len(ordered),
        groups=len(groups),
        threshold_seconds=threshold_seconds
    )
    return groups
