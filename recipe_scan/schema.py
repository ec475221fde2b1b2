"""
Recipe record schema.

RecipeField is the single source of truth for the exported columns. The
structuring prompt, the record model and the CSV header are all derived from
it, so they cannot drift apart.
"""

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, model_validator


class RecipeField(str, Enum):
    """Fields of a structured recipe record, in export order."""

    TITLE = "title"
    COURSE = "course"
    CUISINE = "cuisine"
    MAIN_INGREDIENT = "main_ingredient"
    DESCRIPTION = "description"
    SOURCE = "source"
    URL = "url"
    SOURCE_AUTHOR = "source_author"
    PREP_TIME = "prep_time"
    COOK_TIME = "cook_time"
    TOTAL_TIME = "total_time"
    SERVINGS = "servings"
    YIELD = "yield"
    INGREDIENTS = "ingredients"
    DIRECTIONS = "directions"
    NOTES = "notes"
    TAGS = "tags"
    RATING = "rating"
    CALORIES = "calories"
    TOTAL_FAT = "total_fat"
    SATURATED_FAT = "saturated_fat"
    CHOLESTEROL = "cholesterol"
    SODIUM = "sodium"
    CARBOHYDRATES = "carbohydrates"
    FIBER = "fiber"
    SUGAR = "sugar"
    PROTEIN = "protein"
    HEALTH_SCORE = "health_score"
    COST = "cost"


DISPLAY_NAMES: Dict[RecipeField, str] = {
    RecipeField.TITLE: "Title",
    RecipeField.COURSE: "Course",
    RecipeField.CUISINE: "Cuisine",
    RecipeField.MAIN_INGREDIENT: "Main Ingredient",
    RecipeField.DESCRIPTION: "Description",
    RecipeField.SOURCE: "Source",
    RecipeField.URL: "URL",
    RecipeField.SOURCE_AUTHOR: "Author",
    RecipeField.PREP_TIME: "Prep Time",
    RecipeField.COOK_TIME: "Cook Time",
    RecipeField.TOTAL_TIME: "Total Time",
    RecipeField.SERVINGS: "Servings",
    RecipeField.YIELD: "Yield",
    RecipeField.INGREDIENTS: "Ingredients",
    RecipeField.DIRECTIONS: "Directions",
    RecipeField.NOTES: "Notes",
    RecipeField.TAGS: "Tags",
    RecipeField.RATING: "Rating",
    RecipeField.CALORIES: "Calories",
    RecipeField.TOTAL_FAT: "Total Fat",
    RecipeField.SATURATED_FAT: "Saturated Fat",
    RecipeField.CHOLESTEROL: "Cholesterol",
    RecipeField.SODIUM: "Sodium",
    RecipeField.CARBOHYDRATES: "Carbohydrates",
    RecipeField.FIBER: "Fiber",
    RecipeField.SUGAR: "Sugar",
    RecipeField.PROTEIN: "Protein",
    RecipeField.HEALTH_SCORE: "Health Score",
    RecipeField.COST: "Cost",
}

NUTRITION_FIELDS: List[RecipeField] = [
    RecipeField.CALORIES,
    RecipeField.TOTAL_FAT,
    RecipeField.SATURATED_FAT,
    RecipeField.CHOLESTEROL,
    RecipeField.SODIUM,
    RecipeField.CARBOHYDRATES,
    RecipeField.FIBER,
    RecipeField.SUGAR,
    RecipeField.PROTEIN,
    RecipeField.HEALTH_SCORE,
]

FIELD_NAMES: List[str] = [f.value for f in RecipeField]
NUTRITION_FIELD_NAMES: List[str] = [f.value for f in NUTRITION_FIELDS]


def _as_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, (list, tuple)):
        return ", ".join(_as_text(v) for v in value if v is not None)
    return str(value)


class RecipeRecord(BaseModel):
    """A recipe over exactly the RecipeField set. Every value is a string."""

    model_config = ConfigDict(extra="ignore")

    title: str = ""
    course: str = ""
    cuisine: str = ""
    main_ingredient: str = ""
    description: str = ""
    source: str = ""
    url: str = ""
    source_author: str = ""
    prep_time: str = ""
    cook_time: str = ""
    total_time: str = ""
    servings: str = ""
    # "yield" is a keyword, so the attribute is aliased
    yield_: str = ""
    ingredients: str = ""
    directions: str = ""
    notes: str = ""
    tags: str = ""
    rating: str = ""
    calories: str = ""
    total_fat: str = ""
    saturated_fat: str = ""
    cholesterol: str = ""
    sodium: str = ""
    carbohydrates: str = ""
    fiber: str = ""
    sugar: str = ""
    protein: str = ""
    health_score: str = ""
    cost: str = ""

    @model_validator(mode="before")
    @classmethod
    def coerce_values(cls, data):
        if not isinstance(data, dict):
            return data
        coerced = {}
        for key, value in data.items():
            name = "yield_" if key == "yield" else key
            if name in cls.model_fields:
                coerced[name] = _as_text(value)
        return coerced

    def get(self, field: RecipeField) -> str:
        return getattr(self, _attr(field))

    def set(self, field: RecipeField, value: str):
        setattr(self, _attr(field), value)

    def to_row(self) -> Dict[str, str]:
        """Field-name keyed mapping in schema order."""
        return {f.value: self.get(f) for f in RecipeField}


def _attr(field: RecipeField) -> str:
    return "yield_" if field is RecipeField.YIELD else field.value
