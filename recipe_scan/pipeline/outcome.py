"""Terminal outcomes of a group's pipeline run."""

from dataclasses import dataclass
from typing import Union

from recipe_scan.schema import RecipeRecord


@dataclass(frozen=True)
class Success:
    group_label: str
    record: RecipeRecord


@dataclass(frozen=True)
class Skipped:
    group_label: str
    reason: str


Outcome = Union[Success, Skipped]
