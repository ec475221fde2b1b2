"""Collects group outcomes into export and report inputs."""

from dataclasses import dataclass, field
from typing import Iterable, List

from recipe_scan.pipeline.outcome import Outcome, Skipped, Success
from recipe_scan.schema import RecipeRecord


@dataclass(frozen=True)
class SkipEntry:
    group_label: str
    reason: str


@dataclass
class BatchResult:
    records: List[RecipeRecord] = field(default_factory=list)
    skipped: List[SkipEntry] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.records)

    @property
    def skip_count(self) -> int:
        return len(self.skipped)

    @property
    def total(self) -> int:
        return self.success_count + self.skip_count


def aggregate(outcomes: Iterable[Outcome]) -> BatchResult:
    """Split outcomes into successful records and skip entries, keeping their order."""
    result = BatchResult()
    for outcome in outcomes:
        if isinstance(outcome, Success):
            result.records.append(outcome.record)
        elif isinstance(outcome, Skipped):
            result.skipped.append(SkipEntry(outcome.group_label, outcome.reason))
        else:
            raise TypeError(f"Not an outcome: {outcome!r}")
    return result
