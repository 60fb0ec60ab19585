# -*- coding: utf-8 -*-
"""Suggestions — tolerant parsing of model output.

Model replies are loosely shaped: JSON wrapped in prose or code fences, trailing
commas, numbers as strings ("120 kcal"), alternate key names. Everything here
is best-effort; entries that cannot be salvaged are dropped.
"""

from __future__ import annotations

import ast
import json
import re
from typing import Any, Dict, List, Optional

from ..journal.models import ExerciseType
from .models import ExerciseSuggestion, FoodSuggestion


_TRAILING_COMMA = re.compile(r",(\s*[}\]])")
_DECODER = json.JSONDecoder()


def _strip_fences(text: str) -> str:
    cleaned = text.strip()
    cleaned = re.sub(r"^```(?:json)?\s*", "", cleaned, flags=re.IGNORECASE)
    return re.sub(r"\s*```$", "", cleaned)


def _sanitize_json_like(text: str) -> str:
    cleaned = text.replace("“", "\"").replace("”", "\"").replace("‘", "'").replace("’", "'")
    cleaned = _TRAILING_COMMA.sub(r"\1", cleaned)
    cleaned = re.sub(r"\bNaN\b", "null", cleaned, flags=re.IGNORECASE)
    return re.sub(r"-?\bInfinity\b", "null", cleaned, flags=re.IGNORECASE)


def _decode_object_at(text: str, start: int) -> Optional[Dict[str, Any]]:
    try:
        parsed, _ = _DECODER.raw_decode(text, start)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


def _literal_object(text: str) -> Optional[Dict[str, Any]]:
    """Read ``{...}`` written as a Python literal (single quotes, None/True/False)."""
    start, end = text.find("{"), text.rfind("}")
    if start == -1 or end < start:
        return None
    py = re.sub(r"\bnull\b", "None", text[start : end + 1], flags=re.IGNORECASE)
    py = re.sub(r"\btrue\b", "True", py, flags=re.IGNORECASE)
    py = re.sub(r"\bfalse\b", "False", py, flags=re.IGNORECASE)
    try:
        parsed = ast.literal_eval(py)
    except (ValueError, SyntaxError):
        return None
    return parsed if isinstance(parsed, dict) else None


def parse_model_json(content: str) -> Dict[str, Any]:
    """Return the first JSON object found in ``content``; ``ValueError`` if none parses."""
    text = _strip_fences(content or "")
    sanitized = _sanitize_json_like(text)
    if text.startswith("["):
        # A bare list is treated as the item list.
        try:
            parsed = json.loads(sanitized)
        except ValueError:
            parsed = None
        if isinstance(parsed, list):
            return {"items": parsed}

    for source in (text, sanitized):
        first = source.find("{")
        if first != -1 and (parsed := _decode_object_at(source, first)) is not None:
            return parsed

    parsed = _literal_object(sanitized)
    if parsed is not None:
        return parsed

    # Prose with a stray brace before the real object: try every later opening brace.
    pos = sanitized.find("{", sanitized.find("{") + 1)
    while pos != -1:
        parsed = _decode_object_at(sanitized, pos)
        if parsed is not None:
            return parsed
        pos = sanitized.find("{", pos + 1)

    raise ValueError("Failed to parse model JSON: no JSON object found")


def extract_completion_text(data: object) -> str:
    """Concatenate message contents from an OpenAI-compatible chat completion."""
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list):
        return ""
    out: list[str] = []
    for choice in choices:
        if not isinstance(choice, dict):
            continue
        msg = choice.get("message")
        if isinstance(msg, dict):
            maybe = msg.get("content")
            if isinstance(maybe, str) and maybe:
                out.append(maybe)
                continue
        maybe_text = choice.get("text")
        if isinstance(maybe_text, str) and maybe_text:
            out.append(maybe_text)
    return "".join(out).strip()


_NUM_RE = re.compile(r"-?\d+(?:\.\d+)?")


def _coerce_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        m = _NUM_RE.search(value.replace(",", ""))
        return float(m.group(0)) if m else None
    return None


def _first_present(obj: Dict[str, Any], keys: List[str]) -> Any:
    for k in keys:
        if k in obj:
            return obj.get(k)
    return None


def _pick_num(raw: Dict[str, Any], keys: List[str]) -> Optional[float]:
    for k in keys:
        if k in raw:
            val = _coerce_float(raw.get(k))
            if val is not None:
                return val
    return None


def _name_of(raw: Dict[str, Any]) -> str:
    name = _first_present(raw, ["name", "food", "item", "dish", "exercise", "title"])
    if name is None:
        return ""
    return (name if isinstance(name, str) else str(name)).strip()


def _items_of(parsed: Dict[str, Any], keys: List[str]) -> List[Any]:
    for k in keys:
        value = parsed.get(k)
        if isinstance(value, list):
            return value
    return []


def normalize_food_items(parsed: Dict[str, Any]) -> List[FoodSuggestion]:
    out: List[FoodSuggestion] = []
    for raw in _items_of(parsed, ["items", "foods", "food"]):
        if not isinstance(raw, dict):
            continue
        name = _name_of(raw)
        if not name:
            continue
        out.append(
            FoodSuggestion(
                name=name,
                calories=max(0.0, _pick_num(raw, ["calories", "calories_kcal", "kcal", "energy_kcal", "energy"]) or 0.0),
                protein=max(0.0, _pick_num(raw, ["protein", "protein_g"]) or 0.0),
                carbs=max(0.0, _pick_num(raw, ["carbs", "carbs_g", "carbohydrates", "carb"]) or 0.0),
                fat=max(0.0, _pick_num(raw, ["fat", "fat_g", "lipid"]) or 0.0),
            )
        )
    return out


def _exercise_type(value: Any) -> ExerciseType:
    if isinstance(value, str):
        try:
            return ExerciseType(value.strip().lower())
        except ValueError:
            pass
    return ExerciseType.other


def normalize_exercises(parsed: Dict[str, Any]) -> List[ExerciseSuggestion]:
    out: List[ExerciseSuggestion] = []
    for raw in _items_of(parsed, ["exercises", "items", "routines"]):
        if not isinstance(raw, dict):
            continue
        name = _name_of(raw)
        if not name:
            continue
        description = _first_present(raw, ["description", "details", "how", "notes"])
        out.append(
            ExerciseSuggestion(
                name=name,
                duration_minutes=max(0.0, _pick_num(raw, ["durationMinutes", "duration_minutes", "duration", "minutes"]) or 0.0),
                type=_exercise_type(raw.get("type")),
                description=description.strip() if isinstance(description, str) else "",
            )
        )
    return out
