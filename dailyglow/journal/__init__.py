# -*- coding: utf-8 -*-
"""Journal domain: profile and per-day logs, persisted as one JSON document."""

from .cursor import DateCursor
from .models import AppDocument, DailyLog, ExerciseItem, FoodItem, Profile, SkinCareRoutine
from .session import JournalStore
from .storage import DocumentLoadError, DocumentStorage, DocumentWriteError
from .store import DuplicateItemError

__all__ = [
    "AppDocument",
    "DailyLog",
    "DateCursor",
    "DocumentLoadError",
    "DocumentStorage",
    "DocumentWriteError",
    "DuplicateItemError",
    "ExerciseItem",
    "FoodItem",
    "JournalStore",
    "Profile",
    "SkinCareRoutine",
]
