# -*- coding: utf-8 -*-
"""Journal — derived day and trend values."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from .models import (
    AppDocument,
    DailyLog,
    DayLogResponse,
    DayTotals,
    MealCalories,
    MealType,
    MedicationDose,
    MedicationHistoryResponse,
    WeightPoint,
    WeightTrendResponse,
)


def day_totals(log: DailyLog) -> DayTotals:
    calories = 0.0
    protein = 0.0
    carbs = 0.0
    fat = 0.0
    for item in log.foods:
        calories += item.calories
        protein += item.protein
        carbs += item.carbs
        fat += item.fat
    minutes = sum(e.duration_minutes for e in log.exercises if e.completed)
    return DayTotals(
        calories=round(calories, 1),
        protein=round(protein, 1),
        carbs=round(carbs, 1),
        fat=round(fat, 1),
        completed_exercise_minutes=round(minutes, 1),
        food_count=len(log.foods),
        exercise_count=len(log.exercises),
    )


def calories_by_meal(log: DailyLog) -> List[MealCalories]:
    out: List[MealCalories] = []
    for meal in MealType:
        foods = [f for f in log.foods if f.meal_type == meal]
        out.append(
            MealCalories(
                meal_type=meal,
                calories=round(sum(f.calories for f in foods), 1),
                food_count=len(foods),
            )
        )
    return out


def describe_day(log: DailyLog, *, persisted: bool) -> DayLogResponse:
    return DayLogResponse(log=log, persisted=persisted, totals=day_totals(log), meals=calories_by_meal(log))


def bmi(weight: float, height_cm: float) -> Optional[float]:
    if weight <= 0 or height_cm <= 0:
        return None
    return round(weight / ((height_cm / 100) ** 2), 1)


def bmi_status(value: Optional[float]) -> Optional[str]:
    # Asia-Pacific cut-offs.
    if value is None:
        return None
    if value < 18.5:
        return "underweight"
    if value < 23:
        return "normal"
    if value < 25:
        return "overweight"
    return "obese"


def weight_trend(document: AppDocument, days: int = 14) -> WeightTrendResponse:
    """Weight series over the last ``days`` logged dates (not calendar days)."""
    keys = sorted(document.logs.keys())[-days:] if days > 0 else []
    points: List[WeightPoint] = []
    for key in keys:
        log = document.logs[key]
        points.append(
            WeightPoint(
                date=key,
                weight=log.weight,
                medication_weight=log.weight if log.medication_dose else None,
            )
        )

    latest = next((p.weight for p in reversed(points) if p.weight), None)
    value = bmi(latest or 0.0, document.profile.height)
    return WeightTrendResponse(
        days=days,
        points=points,
        latest_weight=latest,
        target_weight=document.profile.target_weight,
        bmi=value,
        bmi_status=bmi_status(value),
    )


def medication_history(document: AppDocument, today: Optional[date] = None) -> MedicationHistoryResponse:
    doses = [
        MedicationDose(date=key, dose_mg=float(log.medication_dose))
        for key, log in sorted(document.logs.items())
        if log.medication_dose
    ]
    start = document.profile.medication_start_date
    days_since: Optional[int] = None
    if start:
        try:
            days_since = ((today or date.today()) - date.fromisoformat(start)).days
        except ValueError:
            days_since = None
    return MedicationHistoryResponse(
        start_date=start,
        days_since_start=days_since,
        doses=doses,
        total_mg=round(sum(d.dose_mg for d in doses), 2),
    )


def calculate_age(birth_date: str, today: Optional[date] = None) -> int:
    born = date.fromisoformat(birth_date)
    now = today or date.today()
    age = now.year - born.year
    if (now.month, now.day) < (born.month, born.day):
        age -= 1
    return age
