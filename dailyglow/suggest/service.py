# -*- coding: utf-8 -*-
"""Suggestions — food analysis, exercise ideas and free-text advice.

Nothing here touches the journal. A failed or unusable model call yields an
empty list or a fixed fallback text; callers add accepted items to the journal
through the regular mutations.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

import httpx

from ..journal.models import DietPhase, DietType, Profile
from ..journal.summary import calculate_age
from .client import AISettings, ChatClient, SuggestionUnavailable, resolve_ai_settings
from .models import ExerciseSuggestion, FoodSuggestion
from .parsing import normalize_exercises, normalize_food_items, parse_model_json

log = logging.getLogger(__name__)

SKIN_CARE_FALLBACK = "Drink plenty of water and don't forget your sunscreen!"
DIET_FALLBACK = "Meal suggestions are unavailable right now."

_JSON_SYSTEM_PROMPT = (
    "You are a nutrition and fitness assistant. Return STRICT JSON only. "
    "Do NOT wrap in markdown or code fences. "
    "Use double quotes for all keys/strings and no trailing commas."
)


def _age_or_none(birth_date: str) -> Optional[int]:
    try:
        return calculate_age(birth_date)
    except ValueError:
        return None


def _age_text(birth_date: str) -> str:
    age = _age_or_none(birth_date)
    return f"{age} years old" if age is not None else "of unknown age"


class SuggestionService:
    def __init__(
        self,
        cfg: Optional[AISettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.client = ChatClient(cfg or resolve_ai_settings(), transport=transport)

    @property
    def model(self) -> str:
        return self.client.cfg.model

    async def _ask(self, messages: List[Dict[str, str]], *, json_mode: bool) -> Optional[str]:
        try:
            return await self.client.complete(messages, json_mode=json_mode)
        except SuggestionUnavailable as exc:
            log.warning("suggestion call failed: %s", exc)
            return None

    async def analyze_food(self, text: str) -> Tuple[List[FoodSuggestion], List[str]]:
        user_prompt = (
            "Analyze the following food input and estimate the nutritional values. "
            "If the quantity is not specified, assume a standard serving size.\n"
            f'Input: "{text}"\n'
            "Output JSON schema:\n"
            '{"items": [{"name": "string", "calories": number, "protein": number, "carbs": number, "fat": number}]}'
        )
        content = await self._ask(
            [{"role": "system", "content": _JSON_SYSTEM_PROMPT}, {"role": "user", "content": user_prompt}],
            json_mode=True,
        )
        if content is None:
            return [], ["AI analysis failed. Please try again later."]
        try:
            items = normalize_food_items(parse_model_json(content))
        except ValueError as exc:
            log.warning("food analysis output parse failed: %s", exc)
            return [], ["AI output could not be read. Please try again."]
        if not items:
            return [], ["No food could be recognized in the description."]
        return items, []

    async def suggest_exercises(self, text: str, birth_date: str) -> Tuple[List[ExerciseSuggestion], List[str]]:
        user_prompt = (
            f'Suggest 3 exercises based on this user request: "{text}".\n'
            f"User is {_age_text(birth_date)}.\n"
            "Focus on health, posture, or weight loss suitable for this age group.\n"
            "Output JSON schema:\n"
            '{"exercises": [{"name": "string", "durationMinutes": number, '
            '"type": "cardio|strength|stretch|other", "description": "string"}]}'
        )
        content = await self._ask(
            [{"role": "system", "content": _JSON_SYSTEM_PROMPT}, {"role": "user", "content": user_prompt}],
            json_mode=True,
        )
        if content is None:
            return [], ["AI suggestions are unavailable right now."]
        try:
            items = normalize_exercises(parse_model_json(content))
        except ValueError as exc:
            log.warning("exercise suggestion output parse failed: %s", exc)
            return [], ["AI output could not be read. Please try again."]
        return items, [] if items else ["No exercises were suggested."]

    async def skin_care_advice(self, skin_type: str, concerns: str, weather: str, birth_date: str) -> Tuple[str, bool]:
        prompt = (
            "You are a professional dermatologist and esthetician. Provide a brief, daily skincare tip.\n"
            f"User profile: {_age_text(birth_date)}, skin type: {skin_type}, concerns: {concerns}.\n"
            f"Current context: weather is {weather}.\n"
            "Consider the user's age group for specific anti-aging or maintenance advice.\n"
            "Keep it under 3 sentences and encouraging."
        )
        content = await self._ask([{"role": "user", "content": prompt}], json_mode=False)
        if content is None:
            return SKIN_CARE_FALLBACK, True
        return content, False

    async def diet_suggestion(self, profile: Profile, current_calories: float) -> Tuple[str, bool]:
        phase = "weight loss phase" if profile.diet_phase == DietPhase.loss else "maintenance phase"
        meal_style = "strict diet meals" if profile.diet_type == DietType.strict else "regular meals"
        prompt = (
            "User profile:\n"
            f"- Age: {_age_text(profile.birth_date)}\n"
            f"- Goal: {phase}\n"
            f"- Meal preference: {meal_style}\n"
            f"- Target weight: {profile.target_weight}kg\n"
            f"- Calories eaten today so far: {round(current_calories)}kcal\n"
        )
        if profile.medication_start_date:
            prompt += f"- Taking a weekly GLP-1 injection since {profile.medication_start_date}\n"
        prompt += (
            "\nTask: Suggest a specific menu for the next meal (e.g. lunch or dinner). "
            "Include rough calories. Explain why it fits their current phase, meal preference and age group "
            "(e.g. metabolism, digestion). If they are on medication, mention hydration or light protein "
            "where relevant. Keep it concise."
        )
        content = await self._ask([{"role": "user", "content": prompt}], json_mode=False)
        if content is None:
            return DIET_FALLBACK, True
        return content, False
