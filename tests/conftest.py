"""Shared test fixtures for the recipe scan test suite."""

from datetime import datetime, timedelta
from pathlib import Path
from typing import Dict, List, Optional

import pytest
from PIL import Image

from recipe_scan.errors import ClientError, ItemReadError
from recipe_scan.grouping import Group
from recipe_scan.inputs import InputItem
from recipe_scan.preprocessing.encoder import EncodedImage
from recipe_scan.schema import RecipeRecord

BASE_TIME = datetime(2024, 1, 31, 18, 45, 0)


def make_item(name: str, seconds: float = 0.0) -> InputItem:
    """InputItem at BASE_TIME + seconds; the path is never read."""
    return InputItem(
        path=Path("/nonexistent") / name,
        timestamp=BASE_TIME + timedelta(seconds=seconds),
        name=name,
    )


def make_group(*names: str) -> Group:
    return Group(tuple(make_item(name, i) for i, name in enumerate(names)))


class FakeEncoder:
    """Encodes an item as its name, or fails for names listed in `unreadable`."""

    def __init__(self, unreadable=()):
        self.unreadable = set(unreadable)

    def encode_item(self, item: InputItem) -> EncodedImage:
        if item.name in self.unreadable:
            raise ItemReadError(f"Failed to read {item.name}")
        return EncodedImage(data=item.name.encode(), mime_type="image/jpeg", source_name=item.name)


class FakeClient:
    """
    Scripted stand-in for RecipeServiceClient that records every call.

    texts maps item name to transcription (an Exception value raises).
    verdicts is consumed in order, one entry per classify call.
    """

    def __init__(
        self,
        texts: Optional[Dict[str, object]] = None,
        verdicts: Optional[List[object]] = None,
        record: object = None,
        nutrition: object = None,
    ):
        self.texts = texts or {}
        self.verdicts = list(verdicts or [(True, "has ingredients and steps")])
        self.record = record if record is not None else RecipeRecord(
            title="Chicken Soup 🍲",
            ingredients="1 chicken\n2 carrots",
            servings="6",
            tags="soup",
        )
        self.nutrition = nutrition if nutrition is not None else {"calories": "250", "protein": "20g"}
        self.calls: List[tuple] = []

    @staticmethod
    def _resolve(value):
        if isinstance(value, Exception):
            raise value
        return value

    def extract_text(self, image: EncodedImage) -> str:
        self.calls.append(("extract_text", image.source_name))
        return self._resolve(self.texts.get(image.source_name, f"text of {image.source_name}"))

    def classify(self, text: str, strict: bool = False):
        self.calls.append(("classify", strict))
        return self._resolve(self.verdicts.pop(0))

    def structure(self, text: str) -> RecipeRecord:
        self.calls.append(("structure", text))
        record = self._resolve(self.record)
        return record.model_copy()

    def estimate_nutrition(self, ingredients: str, servings: str):
        self.calls.append(("estimate_nutrition", servings))
        return dict(self._resolve(self.nutrition))

    def names(self) -> List[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def fake_encoder() -> FakeEncoder:
    return FakeEncoder()


@pytest.fixture
def service_failure() -> ClientError:
    return ClientError(500)


@pytest.fixture
def photo_dir(tmp_path: Path) -> Path:
    """Directory with four small JPEGs named by capture time: two recipes."""
    names = [
        "IMG_20240131_184500.jpg",
        "IMG_20240131_184503.jpg",
        "IMG_20240131_184530.jpg",
        "IMG_20240131_184535.jpg",
    ]
    for name in names:
        Image.new("RGB", (64, 48), (255, 255, 255)).save(tmp_path / name, format="JPEG")
    (tmp_path / "notes.txt").write_text("not an image")
    return tmp_path
