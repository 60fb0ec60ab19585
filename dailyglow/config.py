from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the journal service."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        self.data_root: Path = Path(
            os.environ.get("DAILYGLOW_DATA_ROOT") or data_root_default
        ).expanduser()
        self.store_path: Path = Path(
            os.environ.get("DAILYGLOW_STORE_PATH") or (self.data_root / "daily_health_glow_v1.json")
        ).expanduser()
        # Off by default: a store that fails to parse stops the load instead of being replaced.
        self.reset_on_corrupt: bool = (os.environ.get("DAILYGLOW_RESET_ON_CORRUPT") or "").strip() in {"1", "true", "True"}

        # ---- Suggestion service (OpenAI-compatible chat completions) ----
        self.ai_api_key: str | None = os.environ.get("DAILYGLOW_AI_API_KEY")
        self.ai_base_url: str = os.environ.get(
            "DAILYGLOW_AI_BASE_URL", "https://api.openai.com/v1"
        )
        self.ai_model: str = os.environ.get("DAILYGLOW_AI_MODEL", "gpt-4o-mini")
        self.ai_timeout: float = float(os.environ.get("DAILYGLOW_AI_TIMEOUT", "30"))
        self.ai_max_tokens: int = int(os.environ.get("DAILYGLOW_AI_MAX_TOKENS", "1024"))
        self.ai_temperature: float = float(os.environ.get("DAILYGLOW_AI_TEMPERATURE", "0.4"))

        cors = os.environ.get("DAILYGLOW_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
