# -*- coding: utf-8 -*-
"""Journal — the currently viewed date."""

from __future__ import annotations

from datetime import date, timedelta


class DateCursor:
    def __init__(self, selected: date | str | None = None) -> None:
        self.selected: date = date.today()
        if selected is not None:
            self.select(selected)

    @property
    def key(self) -> str:
        return self.selected.isoformat()

    def select(self, value: date | str) -> str:
        self.selected = date.fromisoformat(value) if isinstance(value, str) else value
        return self.key

    def shift(self, offset_days: int) -> str:
        self.selected = self.selected + timedelta(days=offset_days)
        return self.key
