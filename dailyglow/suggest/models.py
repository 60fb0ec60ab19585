# -*- coding: utf-8 -*-
"""Suggestions — Pydantic models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ..journal.models import DateKeyStr, ExerciseType, MealType


class FoodSuggestion(BaseModel):
    name: str = Field(..., min_length=1)
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0


class ExerciseSuggestion(BaseModel):
    name: str = Field(..., min_length=1)
    duration_minutes: float = 0.0
    type: ExerciseType = ExerciseType.other
    description: str = ""


class FoodAnalysisRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=2000, description="Free-text meal description")
    date: Optional[DateKeyStr] = Field(None, description="Add the result to this day")
    meal_type: MealType = MealType.breakfast


class FoodAnalysisResponse(BaseModel):
    items: List[FoodSuggestion] = []
    added_to: Optional[str] = None
    warnings: List[str] = []


class ExerciseSuggestionRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=2000)
    date: Optional[DateKeyStr] = None


class ExerciseSuggestionResponse(BaseModel):
    items: List[ExerciseSuggestion] = []
    added_to: Optional[str] = None
    warnings: List[str] = []


class SkinCareAdviceRequest(BaseModel):
    skin_type: str = Field("combination", max_length=200)
    concerns: str = Field("dryness, breakouts", max_length=500)
    weather: str = Field("clear", max_length=200)


class DietSuggestionRequest(BaseModel):
    date: Optional[DateKeyStr] = Field(None, description="Day whose calories are counted; defaults to the cursor")


class AdviceResponse(BaseModel):
    advice: str
    fallback: bool = False
