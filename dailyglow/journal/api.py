# -*- coding: utf-8 -*-
"""Journal — API endpoints."""

from __future__ import annotations

from datetime import date as calendar_date
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi import Path as PathParam

from .models import (
    DATE_KEY_PATTERN,
    AddFoodRequest,
    AppDocument,
    CursorResponse,
    CursorSelectRequest,
    CursorShiftRequest,
    DailyLog,
    DailyLogPatch,
    DayLogResponse,
    ExerciseItem,
    MedicationHistoryResponse,
    Profile,
    ProfilePatch,
    SkinCarePatch,
    WeightTrendResponse,
)
from .session import JournalStore, Mutation
from .storage import DocumentWriteError
from .store import (
    DuplicateItemError,
    add_exercise,
    add_food,
    remove_food,
    seed_default_routines,
    toggle_exercise,
    update_day_log,
    update_profile,
    update_skin_care,
)
from .summary import describe_day, medication_history, weight_trend

router = APIRouter(prefix="/api", tags=["Journal"])

def valid_date_key(date: str = PathParam(..., pattern=DATE_KEY_PATTERN, description="YYYY-MM-DD")) -> str:
    try:
        calendar_date.fromisoformat(date)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=f"Invalid date: {date}") from exc
    return date


def get_journal(request: Request) -> JournalStore:
    return request.app.state.journal


def apply_or_http_error(journal: JournalStore, mutation: Mutation, *args: Any) -> AppDocument:
    try:
        return journal.apply(mutation, *args)
    except DuplicateItemError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except DocumentWriteError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


def _day(journal: JournalStore, date: str) -> DayLogResponse:
    return describe_day(journal.day_log(date), persisted=journal.is_persisted(date))


@router.get("/profile", response_model=Profile, summary="Current profile")
def get_profile(journal: JournalStore = Depends(get_journal)):
    return journal.document.profile


@router.patch("/profile", response_model=Profile, summary="Update profile fields")
def patch_profile(request: ProfilePatch, journal: JournalStore = Depends(get_journal)):
    doc = apply_or_http_error(journal, update_profile, request)
    return doc.profile


@router.get("/logs", response_model=Dict[str, DailyLog], summary="All stored day logs")
def list_logs(journal: JournalStore = Depends(get_journal)):
    return journal.document.logs


@router.get("/logs/{date}", response_model=DayLogResponse, summary="Day log (template when nothing is stored)")
def get_log(date: str = Depends(valid_date_key), journal: JournalStore = Depends(get_journal)):
    return _day(journal, date)


@router.patch("/logs/{date}", response_model=DayLogResponse, summary="Update day fields")
def patch_log(request: DailyLogPatch, date: str = Depends(valid_date_key), journal: JournalStore = Depends(get_journal)):
    apply_or_http_error(journal, update_day_log, date, request)
    return _day(journal, date)


@router.patch("/logs/{date}/skincare", response_model=DayLogResponse, summary="Update skincare checklist fields")
def patch_skin_care(request: SkinCarePatch, date: str = Depends(valid_date_key), journal: JournalStore = Depends(get_journal)):
    apply_or_http_error(journal, update_skin_care, date, request)
    return _day(journal, date)


@router.post("/logs/{date}/foods", response_model=DayLogResponse, summary="Append food items")
def post_foods(request: AddFoodRequest, date: str = Depends(valid_date_key), journal: JournalStore = Depends(get_journal)):
    apply_or_http_error(journal, add_food, date, request.items)
    return _day(journal, date)


@router.delete("/logs/{date}/foods/{food_id}", response_model=DayLogResponse, summary="Remove a food item")
def delete_food(food_id: str, date: str = Depends(valid_date_key), journal: JournalStore = Depends(get_journal)):
    apply_or_http_error(journal, remove_food, date, food_id)
    return _day(journal, date)


@router.post("/logs/{date}/exercises", response_model=DayLogResponse, summary="Append an exercise")
def post_exercise(request: ExerciseItem, date: str = Depends(valid_date_key), journal: JournalStore = Depends(get_journal)):
    apply_or_http_error(journal, add_exercise, date, request)
    return _day(journal, date)


@router.post("/logs/{date}/exercises/defaults", response_model=DayLogResponse, summary="Add default routines to an empty day")
def post_default_routines(date: str = Depends(valid_date_key), journal: JournalStore = Depends(get_journal)):
    apply_or_http_error(journal, seed_default_routines, date)
    return _day(journal, date)


@router.post("/logs/{date}/exercises/{exercise_id}/toggle", response_model=DayLogResponse, summary="Flip completion")
def post_toggle_exercise(exercise_id: str, date: str = Depends(valid_date_key), journal: JournalStore = Depends(get_journal)):
    apply_or_http_error(journal, toggle_exercise, date, exercise_id)
    return _day(journal, date)


@router.get("/cursor", response_model=CursorResponse, summary="Selected date and its log")
def get_cursor(journal: JournalStore = Depends(get_journal)):
    key = journal.cursor.key
    return CursorResponse(selected_date=key, **_day(journal, key).model_dump())


@router.post("/cursor/shift", response_model=CursorResponse, summary="Move the selected date by N days")
def shift_cursor(request: CursorShiftRequest, journal: JournalStore = Depends(get_journal)):
    try:
        journal.cursor.shift(request.offset_days)
    except OverflowError as exc:
        raise HTTPException(status_code=400, detail=f"Date out of range: {exc}") from exc
    return get_cursor(journal)


@router.put("/cursor", response_model=CursorResponse, summary="Select a date")
def select_cursor(request: CursorSelectRequest, journal: JournalStore = Depends(get_journal)):
    journal.cursor.select(request.date)
    return get_cursor(journal)


@router.get("/summary/weight", response_model=WeightTrendResponse, summary="Weight trend over recent logged days")
def get_weight_trend(
    days: int = Query(default=14, ge=1, le=366),
    journal: JournalStore = Depends(get_journal),
):
    return weight_trend(journal.document, days=days)


@router.get("/summary/medication", response_model=MedicationHistoryResponse, summary="Medication doses")
def get_medication_history(journal: JournalStore = Depends(get_journal)):
    return medication_history(journal.document)
