# -*- coding: utf-8 -*-
"""Suggestions — OpenAI-compatible chat completions over httpx."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from ..config import settings
from .parsing import extract_completion_text


class SuggestionUnavailable(RuntimeError):
    """The model could not be reached or returned nothing usable."""


@dataclass(frozen=True)
class AISettings:
    base_url: str
    api_key: Optional[str]
    model: str
    timeout: float
    temperature: float
    max_tokens: int


def resolve_ai_settings() -> AISettings:
    return AISettings(
        base_url=settings.ai_base_url.rstrip("/"),
        api_key=settings.ai_api_key,
        model=settings.ai_model,
        timeout=settings.ai_timeout,
        temperature=settings.ai_temperature,
        max_tokens=settings.ai_max_tokens,
    )


class ChatClient:
    def __init__(self, cfg: AISettings, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.cfg = cfg
        self._transport = transport

    @property
    def url(self) -> str:
        base = self.cfg.base_url
        if base.endswith("/chat/completions"):
            return base
        return f"{base}/chat/completions"

    async def complete(self, messages: List[Dict[str, str]], *, json_mode: bool = False) -> str:
        if not self.cfg.api_key:
            raise SuggestionUnavailable("DAILYGLOW_AI_API_KEY not set")
        payload: Dict[str, Any] = {
            "model": self.cfg.model,
            "messages": messages,
            "temperature": self.cfg.temperature,
            "max_tokens": self.cfg.max_tokens,
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.cfg.api_key}",
        }
        try:
            async with httpx.AsyncClient(
                timeout=self.cfg.timeout, follow_redirects=True, transport=self._transport
            ) as client:
                resp = await client.post(self.url, headers=headers, json=payload)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as exc:
            raise SuggestionUnavailable(f"Model API error: {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise SuggestionUnavailable(f"Model API unreachable: {exc}") from exc
        except ValueError as exc:
            raise SuggestionUnavailable(f"Model API returned non-JSON response: {exc}") from exc

        text = extract_completion_text(data)
        if not text:
            raise SuggestionUnavailable("Model returned an empty answer")
        return text
