# -*- coding: utf-8 -*-
"""Journal — JSON file storage for the whole document (one file, rewritten on every change)."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError

from ..config import settings
from .models import AppDocument, Profile

log = logging.getLogger(__name__)


class DocumentLoadError(RuntimeError):
    """The stored document exists but cannot be read back."""


class DocumentWriteError(RuntimeError):
    """The document could not be written to disk."""


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def default_document() -> AppDocument:
    return AppDocument(profile=Profile(), logs={})


def _merge_profile(raw: Dict[str, Any]) -> Dict[str, Any]:
    # Profiles saved before a field existed pick up its default.
    stored = raw.get("profile")
    merged = Profile().model_dump(mode="json")
    if isinstance(stored, dict):
        merged.update(stored)
    return {**raw, "profile": merged}


class DocumentStorage:
    def __init__(self, path: Path, *, reset_on_corrupt: bool = False) -> None:
        self.path = path
        self.reset_on_corrupt = reset_on_corrupt

    def load(self) -> AppDocument:
        if not self.path.exists():
            return default_document()
        try:
            data = self.path.read_bytes()
        except OSError as exc:
            # Unreadable is not corrupt: never reset over a file we could not read.
            raise DocumentLoadError(f"Failed to read journal store {self.path}: {exc}") from exc
        try:
            raw = json.loads(data.decode("utf-8"))
            if not isinstance(raw, dict):
                raise ValueError(f"expected a JSON object, got {type(raw).__name__}")
            return AppDocument.model_validate(_merge_profile(raw))
        except (ValueError, ValidationError) as exc:
            if not self.reset_on_corrupt:
                raise DocumentLoadError(f"Stored journal at {self.path} is unreadable: {exc}") from exc
            backup = self.path.with_name(f"{self.path.name}.corrupt-{datetime.now():%Y%m%d%H%M%S}")
            self.path.rename(backup)
            log.warning("journal store unreadable, moved to %s and starting fresh: %s", backup, exc)
            return default_document()

    def save(self, document: AppDocument) -> None:
        payload = document.model_dump_json(indent=2)
        try:
            _ensure_dir(self.path.parent)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=self.path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            log.exception("failed to write journal store %s", self.path)
            raise DocumentWriteError(f"Failed to save journal: {exc}") from exc


def default_storage() -> DocumentStorage:
    return DocumentStorage(settings.store_path, reset_on_corrupt=settings.reset_on_corrupt)
