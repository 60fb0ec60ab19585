# -*- coding: utf-8 -*-
"""Journal — day-log resolution and document mutations.

Every mutation takes an ``AppDocument`` and returns a new one. Containers are
rebuilt from the changed leaf up to the root; the input document is never
modified. Lookups by id tolerate unknown ids and leave the data as it was.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

from pydantic import BaseModel

from .models import AppDocument, DailyLog, ExerciseItem, ExerciseType, FoodItem, Profile, SkinCareRoutine

# (name, duration_minutes, type) added to a day that has no exercises yet.
DEFAULT_ROUTINES: Sequence[tuple[str, float, ExerciseType]] = (
    ("Morning wake-up stretch", 10, ExerciseType.stretch),
    ("Relaxing stretch before bed", 15, ExerciseType.stretch),
    ("Lower back strengthening (McKenzie)", 10, ExerciseType.strength),
)


class DuplicateItemError(ValueError):
    """An item id is already used by another item of the same day."""

    def __init__(self, kind: str, item_id: str, date: str) -> None:
        super().__init__(f"{kind} id {item_id!r} already exists on {date}")
        self.kind = kind
        self.item_id = item_id
        self.date = date


def empty_day_log(date: str, *, weight: float = 0.0) -> DailyLog:
    return DailyLog(date=date, weight=weight)


def resolve_day_log(document: AppDocument, date: str) -> DailyLog:
    """Return the stored log for ``date`` or an unsaved empty template."""
    existing = document.logs.get(date)
    if existing is not None:
        return existing
    return empty_day_log(date)


def _plain(updates: Mapping[str, Any] | BaseModel) -> dict[str, Any]:
    if isinstance(updates, BaseModel):
        # Patch models: only fields the caller sent; null means "leave as is"
        # except on the model's clearable fields, where it is stored.
        clearable = getattr(updates, "clearable", frozenset())
        sent = updates.model_dump(exclude_unset=True)
        return {k: v for k, v in sent.items() if v is not None or k in clearable}
    return dict(updates)


def _with_log(document: AppDocument, date: str, log: DailyLog) -> AppDocument:
    logs = dict(document.logs)
    logs[date] = log
    return document.model_copy(update={"logs": logs})


def _ensure_unique(existing: Iterable[str], new_ids: Iterable[str], *, kind: str, date: str) -> None:
    seen = set(existing)
    for item_id in new_ids:
        if item_id in seen:
            raise DuplicateItemError(kind, item_id, date)
        seen.add(item_id)


def seed_weight(document: AppDocument, date: str) -> float:
    """Initial weight for a log created at ``date``.

    Uses the latest log dated before ``date`` when it has a weight, otherwise the
    profile's target weight. YYYY-MM-DD keys sort chronologically as strings.
    """
    prior = [key for key in document.logs if key < date]
    if prior:
        weight = document.logs[max(prior)].weight
        if weight:
            return weight
    return document.profile.target_weight


def update_day_log(document: AppDocument, date: str, updates: Mapping[str, Any] | BaseModel) -> AppDocument:
    current = document.logs.get(date)
    if current is None:
        current = empty_day_log(date, weight=seed_weight(document, date))
    merged = {**current.model_dump(), **_plain(updates), "date": date}
    return _with_log(document, date, DailyLog.model_validate(merged))


def update_skin_care(document: AppDocument, date: str, updates: Mapping[str, Any] | BaseModel) -> AppDocument:
    skin = resolve_day_log(document, date).skin_care
    routine = SkinCareRoutine.model_validate({**skin.model_dump(), **_plain(updates)})
    return update_day_log(document, date, {"skin_care": routine})


def add_food(document: AppDocument, date: str, items: Sequence[FoodItem]) -> AppDocument:
    log = resolve_day_log(document, date)
    _ensure_unique((f.id for f in log.foods), (f.id for f in items), kind="food", date=date)
    foods = [*log.foods, *items]
    return _with_log(document, date, log.model_copy(update={"foods": foods}))


def remove_food(document: AppDocument, date: str, food_id: str) -> AppDocument:
    log = document.logs.get(date)
    if log is None:
        return document
    foods = [f for f in log.foods if f.id != food_id]
    return _with_log(document, date, log.model_copy(update={"foods": foods}))


def add_exercise(document: AppDocument, date: str, item: ExerciseItem) -> AppDocument:
    log = resolve_day_log(document, date)
    _ensure_unique((e.id for e in log.exercises), [item.id], kind="exercise", date=date)
    exercises = [*log.exercises, item]
    return _with_log(document, date, log.model_copy(update={"exercises": exercises}))


def toggle_exercise(document: AppDocument, date: str, exercise_id: str) -> AppDocument:
    log = document.logs.get(date)
    if log is None:
        return document
    exercises = [
        e.model_copy(update={"completed": not e.completed}) if e.id == exercise_id else e
        for e in log.exercises
    ]
    return _with_log(document, date, log.model_copy(update={"exercises": exercises}))


def seed_default_routines(document: AppDocument, date: str) -> AppDocument:
    if resolve_day_log(document, date).exercises:
        return document
    for name, minutes, kind in DEFAULT_ROUTINES:
        document = add_exercise(document, date, ExerciseItem(name=name, duration_minutes=minutes, type=kind))
    return document


def update_profile(document: AppDocument, updates: Mapping[str, Any] | BaseModel) -> AppDocument:
    profile = Profile.model_validate({**document.profile.model_dump(), **_plain(updates)})
    return document.model_copy(update={"profile": profile})
