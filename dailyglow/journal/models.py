# -*- coding: utf-8 -*-
"""Journal — Pydantic models."""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum
from typing import Annotated, ClassVar, Dict, FrozenSet, List, Optional
from uuid import uuid4

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StringConstraints, field_validator

DATE_KEY_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
MAX_SHIFT_DAYS = 36500


def check_date_key(value: str) -> str:
    """Reject well-formed keys that are not calendar dates (e.g. 2023-02-29)."""
    date.fromisoformat(value)
    return value


DateKeyStr = Annotated[str, StringConstraints(pattern=DATE_KEY_PATTERN), AfterValidator(check_date_key)]


def new_item_id() -> str:
    return uuid4().hex


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class Gender(str, Enum):
    male = "male"
    female = "female"
    other = "other"


class DietPhase(str, Enum):
    loss = "loss"
    maintenance = "maintenance"


class DietType(str, Enum):
    strict = "strict"
    general = "general"


class MealType(str, Enum):
    breakfast = "breakfast"
    lunch = "lunch"
    dinner = "dinner"
    snack = "snack"


class ExerciseType(str, Enum):
    cardio = "cardio"
    strength = "strength"
    stretch = "stretch"
    other = "other"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Profile(_Frozen):
    name: str = "User"
    height: float = Field(170.0, description="cm")
    target_weight: float = Field(60.0, description="kg")
    gender: Gender = Gender.other
    birth_date: str = Field("1990-01-01", description="YYYY-MM-DD")
    diet_phase: DietPhase = DietPhase.loss
    diet_type: DietType = DietType.strict
    medication_start_date: Optional[str] = Field(None, description="YYYY-MM-DD")


class FoodItem(_Frozen):
    id: str = Field(default_factory=new_item_id)
    name: str
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    # Entries saved before meal tagging existed are read as breakfast.
    meal_type: MealType = MealType.breakfast
    timestamp: str = Field(default_factory=utc_timestamp)


class ExerciseItem(_Frozen):
    id: str = Field(default_factory=new_item_id)
    name: str
    duration_minutes: float = 0.0
    reps: Optional[int] = None
    completed: bool = False
    type: ExerciseType = ExerciseType.other
    timestamp: str = Field(default_factory=utc_timestamp)


class SkinCareRoutine(_Frozen):
    morning_wash: bool = False
    morning_hair: bool = False
    evening_shower: bool = False
    evening_wash: bool = False
    evening_hair: bool = False
    notes: str = ""


class DailyLog(_Frozen):
    date: str = Field(..., description="YYYY-MM-DD")
    weight: float = Field(0.0, description="kg, 0 = not recorded")
    sleep_hours: float = 0.0
    foods: List[FoodItem] = Field(default_factory=list)
    exercises: List[ExerciseItem] = Field(default_factory=list)
    skin_care: SkinCareRoutine = Field(default_factory=SkinCareRoutine)
    body_check_image: Optional[str] = Field(None, description="Encoded image, stored as given")
    medication_dose: Optional[float] = Field(0.0, description="mg, 0 or null = not taken")


class AppDocument(_Frozen):
    profile: Profile = Field(default_factory=Profile)
    logs: Dict[str, DailyLog] = Field(default_factory=dict)


# ---- Request / response shapes ----


class ProfilePatch(BaseModel):
    # Fields where an explicit null is stored instead of meaning "leave as is".
    clearable: ClassVar[FrozenSet[str]] = frozenset({"medication_start_date"})

    name: Optional[str] = None
    height: Optional[float] = None
    target_weight: Optional[float] = None
    gender: Optional[Gender] = None
    birth_date: Optional[DateKeyStr] = None
    diet_phase: Optional[DietPhase] = None
    diet_type: Optional[DietType] = None
    medication_start_date: Optional[DateKeyStr] = Field(None, description="YYYY-MM-DD; null or \"\" clears it")

    @field_validator("medication_start_date", mode="before")
    @classmethod
    def _blank_start_date(cls, value: object) -> object:
        return None if value == "" else value


class SkinCarePatch(BaseModel):
    morning_wash: Optional[bool] = None
    morning_hair: Optional[bool] = None
    evening_shower: Optional[bool] = None
    evening_wash: Optional[bool] = None
    evening_hair: Optional[bool] = None
    notes: Optional[str] = None


class DailyLogPatch(BaseModel):
    clearable: ClassVar[FrozenSet[str]] = frozenset({"body_check_image", "medication_dose"})

    weight: Optional[float] = None
    sleep_hours: Optional[float] = None
    skin_care: Optional[SkinCareRoutine] = None
    body_check_image: Optional[str] = None
    medication_dose: Optional[float] = None


class AddFoodRequest(BaseModel):
    items: List[FoodItem] = Field(..., min_length=1)


class CursorShiftRequest(BaseModel):
    offset_days: int = Field(..., ge=-MAX_SHIFT_DAYS, le=MAX_SHIFT_DAYS, description="Calendar days to move; negative goes back")


class CursorSelectRequest(BaseModel):
    date: DateKeyStr


class DayTotals(BaseModel):
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    completed_exercise_minutes: float = 0.0
    food_count: int = 0
    exercise_count: int = 0


class MealCalories(BaseModel):
    meal_type: MealType
    calories: float = 0.0
    food_count: int = 0


class DayLogResponse(BaseModel):
    log: DailyLog
    persisted: bool = Field(..., description="False when the log is a display-only template")
    totals: DayTotals
    meals: List[MealCalories]


class CursorResponse(DayLogResponse):
    selected_date: str


class WeightPoint(BaseModel):
    date: str
    weight: float
    medication_weight: Optional[float] = Field(None, description="Weight repeated on dosed days")


class WeightTrendResponse(BaseModel):
    days: int
    points: List[WeightPoint]
    latest_weight: Optional[float] = None
    target_weight: float
    bmi: Optional[float] = None
    bmi_status: Optional[str] = None


class MedicationDose(BaseModel):
    date: str
    dose_mg: float


class MedicationHistoryResponse(BaseModel):
    start_date: Optional[str] = None
    days_since_start: Optional[int] = None
    doses: List[MedicationDose] = Field(default_factory=list)
    total_mg: float = 0.0
