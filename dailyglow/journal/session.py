# -*- coding: utf-8 -*-
"""Journal — the store object shared by every consumer.

``JournalStore`` loads the document once, applies mutations from ``store`` and
writes the full document back after each change.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from .cursor import DateCursor
from .models import AppDocument, DailyLog
from .storage import DocumentStorage, default_storage
from .store import resolve_day_log

Mutation = Callable[..., AppDocument]


class JournalStore:
    def __init__(self, storage: DocumentStorage, cursor: Optional[DateCursor] = None) -> None:
        self.storage = storage
        self.cursor = cursor or DateCursor()
        self.document: AppDocument = storage.load()
        self.dirty = False

    def apply(self, mutation: Mutation, *args: Any) -> AppDocument:
        """Run ``mutation(document, *args)`` and persist the result.

        A failed write leaves the new document in memory, marks the store dirty
        and re-raises ``DocumentWriteError``.
        """
        updated = mutation(self.document, *args)
        if updated is self.document:
            return updated
        self.document = updated
        self.dirty = True
        self.flush()
        return updated

    def flush(self) -> None:
        if not self.dirty:
            return
        self.storage.save(self.document)
        self.dirty = False

    def day_log(self, date: Optional[str] = None) -> DailyLog:
        return resolve_day_log(self.document, date or self.cursor.key)

    def is_persisted(self, date: str) -> bool:
        return date in self.document.logs


def open_default_store() -> JournalStore:
    return JournalStore(default_storage())
