"""
Prompt text and response schemas for the four service operations.
"""

from typing import Dict, Iterable

from recipe_scan.schema import NUTRITION_FIELDS, RecipeField

FIELD_GUIDANCE: Dict[RecipeField, str] = {
    RecipeField.TITLE: (
        "Recipe name, copied verbatim from the text when present, invented from the dish "
        "otherwise. Always end it with exactly one food emoji that fits the dish, "
        "separated by a space."
    ),
    RecipeField.COURSE: "One course, e.g. Main Dish, Dessert, Side Dish, Breakfast. A single value.",
    RecipeField.CUISINE: "One cuisine, e.g. Italian, Mexican, American. A single value.",
    RecipeField.MAIN_INGREDIENT: (
        "The single most important ingredient, e.g. Chicken. Never a list, no commas or slashes."
    ),
    RecipeField.DESCRIPTION: "One or two sentences describing the dish.",
    RecipeField.SOURCE: "Book, magazine or website the recipe comes from, if shown.",
    RecipeField.URL: "Web address printed on the page, if any.",
    RecipeField.SOURCE_AUTHOR: "Author or chef, if shown.",
    RecipeField.PREP_TIME: "Preparation time, e.g. 15 min.",
    RecipeField.COOK_TIME: "Cooking time, e.g. 1 hr 10 min.",
    RecipeField.TOTAL_TIME: "Total time, e.g. 1 hr 25 min.",
    RecipeField.SERVINGS: "Number of servings as a number, e.g. 4.",
    RecipeField.YIELD: "Yield if stated, e.g. 24 cookies.",
    RecipeField.INGREDIENTS: (
        "Every ingredient with its quantity, one ingredient per line, separated by newline characters."
    ),
    RecipeField.DIRECTIONS: "Every step in order, one step per line, separated by newline characters.",
    RecipeField.NOTES: "Tips, variations or storage notes printed with the recipe.",
    RecipeField.TAGS: "Comma-separated keywords, e.g. quick, vegetarian, grilling.",
    RecipeField.RATING: "Always an empty string.",
    RecipeField.CALORIES: "Calories per serving if printed, e.g. 320.",
    RecipeField.TOTAL_FAT: "Total fat per serving if printed, e.g. 10g.",
    RecipeField.SATURATED_FAT: "Saturated fat per serving if printed, e.g. 3g.",
    RecipeField.CHOLESTEROL: "Cholesterol per serving if printed, e.g. 45mg.",
    RecipeField.SODIUM: "Sodium per serving if printed, e.g. 600mg.",
    RecipeField.CARBOHYDRATES: "Carbohydrates per serving if printed, e.g. 30g.",
    RecipeField.FIBER: "Fiber per serving if printed, e.g. 4g.",
    RecipeField.SUGAR: "Sugar per serving if printed, e.g. 8g.",
    RecipeField.PROTEIN: "Protein per serving if printed, e.g. 22g.",
    RecipeField.HEALTH_SCORE: "Healthiness score out of 10, e.g. 7/10.",
    RecipeField.COST: "Estimated cost of the whole recipe, e.g. $12.",
}

TEXT_EXTRACTION_PROMPT = (
    "Transcribe all text visible in this photo of a recipe page. Keep the reading order, "
    "keep line breaks between lines, and do not add commentary, headings or formatting "
    "that is not on the page. If there is no readable text, reply with nothing."
)

_CLASSIFY_PROMPT = (
    "Below is text transcribed from one or more photos. Decide whether it contains a cooking "
    "or drink recipe, meaning a dish name together with ingredients or preparation steps.\n"
    "Reply with JSON: {{\"isRecipe\": true|false, \"reason\": \"one short sentence\"}}.\n\n"
    "TEXT:\n{text}"
)

_CLASSIFY_STRICT_PROMPT = (
    "A first review said the text below is probably not a recipe. Look again closely. "
    "OCR text is often fragmented: a partial ingredient list, numbered steps, oven "
    "temperatures, cooking times or quantities like cups and grams all count as evidence "
    "of a recipe even when the title is missing.\n"
    "Reply with JSON: {{\"isRecipe\": true|false, \"reason\": \"one short sentence\"}}.\n\n"
    "TEXT:\n{text}"
)

_STRUCTURE_PROMPT = (
    "Extract the recipe in the text below into a single JSON object with exactly these "
    "string fields:\n{fields}\n\n"
    "Rules:\n"
    "- Every field is a string. Use an empty string when the value is unknown.\n"
    "- Use plain ASCII punctuation in prose; spell out special symbols.\n"
    "- Do not wrap the JSON in markdown.\n\n"
    "TEXT:\n{text}"
)

_ENRICH_PROMPT = (
    "Estimate nutrition per serving for the recipe below, which makes {servings} servings.\n"
    "Return a JSON object with these string fields:\n{fields}\n\n"
    "Use units like \"10g\" or \"450mg\", calories as a plain number, and the health score "
    "as \"n/10\". Use an empty string for any value you cannot estimate.\n\n"
    "INGREDIENTS:\n{ingredients}"
)


def _field_lines(fields: Iterable[RecipeField]) -> str:
    return "\n".join(f"- {f.value}: {FIELD_GUIDANCE[f]}" for f in fields)


def _object_schema(properties: Dict[str, dict], required: Iterable[str]) -> dict:
    return {
        "type": "OBJECT",
        "properties": properties,
        "required": list(required),
        "propertyOrdering": list(properties),
    }


VERDICT_SCHEMA = _object_schema(
    {"isRecipe": {"type": "BOOLEAN"}, "reason": {"type": "STRING"}},
    ["isRecipe", "reason"],
)

RECORD_SCHEMA = _object_schema(
    {f.value: {"type": "STRING"} for f in RecipeField},
    [f.value for f in RecipeField],
)

NUTRITION_SCHEMA = _object_schema(
    {f.value: {"type": "STRING"} for f in NUTRITION_FIELDS},
    [f.value for f in NUTRITION_FIELDS],
)


def classification_prompt(text: str, strict: bool = False) -> str:
    template = _CLASSIFY_STRICT_PROMPT if strict else _CLASSIFY_PROMPT
    return template.format(text=text)


def structuring_prompt(text: str) -> str:
    return _STRUCTURE_PROMPT.format(fields=_field_lines(RecipeField), text=text)


def enrichment_prompt(ingredients: str, servings: str) -> str:
    return _ENRICH_PROMPT.format(
        servings=servings,
        fields=_field_lines(NUTRITION_FIELDS),
        ingredients=ingredients,
    )
