# -*- coding: utf-8 -*-
"""Suggestions — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from ..journal.api import apply_or_http_error, get_journal
from ..journal.models import ExerciseItem, FoodItem
from ..journal.session import JournalStore
from ..journal.store import add_exercise, add_food
from ..journal.summary import day_totals
from .models import (
    AdviceResponse,
    DietSuggestionRequest,
    ExerciseSuggestionRequest,
    ExerciseSuggestionResponse,
    FoodAnalysisRequest,
    FoodAnalysisResponse,
    SkinCareAdviceRequest,
)
from .service import SuggestionService

router = APIRouter(prefix="/api/suggest", tags=["Suggestions"])


def get_suggestions(request: Request) -> SuggestionService:
    return request.app.state.suggestions


@router.post("/foods", response_model=FoodAnalysisResponse, summary="Estimate nutrition from a meal description")
async def analyze_foods(
    request: FoodAnalysisRequest,
    journal: JournalStore = Depends(get_journal),
    service: SuggestionService = Depends(get_suggestions),
):
    items, warnings = await service.analyze_food(request.text)
    added_to = None
    if request.date and items:
        foods = [FoodItem(meal_type=request.meal_type, **item.model_dump()) for item in items]
        apply_or_http_error(journal, add_food, request.date, foods)
        added_to = request.date
    return FoodAnalysisResponse(items=items, added_to=added_to, warnings=warnings)


@router.post("/exercises", response_model=ExerciseSuggestionResponse, summary="Exercise ideas for a request")
async def suggest_exercises(
    request: ExerciseSuggestionRequest,
    journal: JournalStore = Depends(get_journal),
    service: SuggestionService = Depends(get_suggestions),
):
    items, warnings = await service.suggest_exercises(request.text, journal.document.profile.birth_date)
    added_to = None
    if request.date and items:
        for item in items:
            exercise = ExerciseItem(name=item.name, duration_minutes=item.duration_minutes, type=item.type)
            apply_or_http_error(journal, add_exercise, request.date, exercise)
        added_to = request.date
    return ExerciseSuggestionResponse(items=items, added_to=added_to, warnings=warnings)


@router.post("/skincare", response_model=AdviceResponse, summary="Daily skincare tip")
async def skin_care_advice(
    request: SkinCareAdviceRequest,
    journal: JournalStore = Depends(get_journal),
    service: SuggestionService = Depends(get_suggestions),
):
    advice, fallback = await service.skin_care_advice(
        request.skin_type,
        request.concerns,
        request.weather,
        journal.document.profile.birth_date,
    )
    return AdviceResponse(advice=advice, fallback=fallback)


@router.post("/diet", response_model=AdviceResponse, summary="Next-meal suggestion")
async def diet_suggestion(
    request: DietSuggestionRequest,
    journal: JournalStore = Depends(get_journal),
    service: SuggestionService = Depends(get_suggestions),
):
    calories = day_totals(journal.day_log(request.date)).calories
    advice, fallback = await service.diet_suggestion(journal.document.profile, calories)
    return AdviceResponse(advice=advice, fallback=fallback)
