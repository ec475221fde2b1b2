"""
Parse Gemini generateContent responses into pipeline data.
"""

import json
from json import JSONDecodeError
from typing import Any, Dict, Tuple

from pydantic import ValidationError

from recipe_scan.errors import ResponseParseError, SchemaError
from recipe_scan.schema import FIELD_NAMES, NUTRITION_FIELD_NAMES, RecipeRecord


def response_text(body: Any) -> str:
    """
    Concatenate the text parts of the first candidate.

    Raises:
        ResponseParseError: If the body is missing or not a JSON object
        SchemaError: If the body has no candidate text
    """
    if not isinstance(body, dict):
        raise ResponseParseError("Service response body is not a JSON object")

    block_reason = (body.get("promptFeedback") or {}).get("blockReason")
    if block_reason:
        raise SchemaError(f"Request blocked by service: {block_reason}")

    try:
        parts = body["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError):
        raise SchemaError("Unexpected service response shape: no candidate content")

    return "".join(part.get("text", "") for part in parts if isinstance(part, dict))


def parse_json_object(content: str) -> Dict[str, Any]:
    """Parse possibly noisy model output into a JSON object."""
    try:
        parsed = json.loads(content)
    except JSONDecodeError:
        parsed = _extract_first_json_object(content)

    if not isinstance(parsed, dict):
        raise ResponseParseError("Expected a JSON object from the service")
    return parsed


def _extract_first_json_object(content: str) -> Dict[str, Any]:
    """Extract the first decodable JSON object from an arbitrary string."""
    decoder = json.JSONDecoder()
    for index, char in enumerate(content):
        if char != "{":
            continue
        try:
            candidate, _ = decoder.raw_decode(content[index:])
        except JSONDecodeError:
            continue
        if isinstance(candidate, dict):
            return candidate
    raise ResponseParseError("Could not extract a JSON object from the service output")


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "yes"):
        return True
    if isinstance(value, str) and value.strip().lower() in ("false", "no"):
        return False
    raise SchemaError(f"isRecipe is not a boolean: {value!r}")


def parse_verdict(data: Dict[str, Any]) -> Tuple[bool, str]:
    """Read {isRecipe, reason} from a classification response."""
    if "isRecipe" not in data:
        raise SchemaError("Classification response has no isRecipe field")
    reason = data.get("reason")
    return _as_bool(data["isRecipe"]), str(reason).strip() if reason is not None else ""


def parse_record(data: Dict[str, Any]) -> RecipeRecord:
    """
    Build a RecipeRecord from a structuring response.

    A response nested one level deep (e.g. {"recipe": {...}}) is unwrapped.
    """
    if not any(name in data for name in FIELD_NAMES):
        nested = [v for v in data.values() if isinstance(v, dict)]
        if len(nested) == 1:
            data = nested[0]
    if not any(name in data for name in FIELD_NAMES):
        raise SchemaError("Structuring response has none of the recipe fields")

    try:
        return RecipeRecord.model_validate(data)
    except ValidationError as e:
        raise SchemaError(f"Structuring response does not fit the recipe schema: {e}")


def parse_nutrition(data: Dict[str, Any]) -> Dict[str, str]:
    """Keep only nutrition fields, as strings."""
    values = {}
    for name in NUTRITION_FIELD_NAMES:
        if name in data:
            value = data[name]
            values[name] = "" if value is None else str(value).strip()
    if not values:
        raise SchemaError("Enrichment response has none of the nutrition fields")
    return values
