from __future__ import annotations

import json
import logging
import os
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any

from django.conf import settings

logger = logging.getLogger(__name__)

GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models"


class LLMNotConfiguredError(Exception):
    """Raised when an LLM client is enabled but missing configuration."""


@dataclass
class LLMConfig:
    provider: str = "gemini"
    model: str = "gemini-1.5-flash"
    api_key: str | None = None
    timeout: float = 15.0


class LLMClient:
    """Provider-agnostic interface for the idea assistants.

    Both methods return None on any provider or parsing failure; callers
    treat that as "no suggestion available".
    """

    def generate_json(self, prompt: str, system: str | None = None) -> Any | None:
        raise NotImplementedError

    def generate_text(self, prompt: str, system: str | None = None) -> str | None:
        raise NotImplementedError


class GeminiClient(LLMClient):
    """Minimal Gemini HTTP client over the REST API."""

    def __init__(self, cfg: LLMConfig):
        if not cfg.api_key:
            msg = "GEMINI_API_KEY missing"
            raise LLMNotConfiguredError(msg)
        self.cfg = cfg

    def _generate(
        self, prompt: str, system: str | None, *, json_mode: bool
    ) -> str | None:
        url = (
            f"{GEMINI_ENDPOINT}/{self.cfg.model}:generateContent"
            f"?key={self.cfg.api_key}"
        )
        contents: list[dict[str, Any]] = []
        if system:
            contents.append({"role": "user", "parts": [{"text": system}]})
        contents.append({"role": "user", "parts": [{"text": prompt}]})

        generation_config: dict[str, Any] = {"temperature": 0.2}
        if json_mode:
            generation_config["responseMimeType"] = "application/json"
        payload = {"contents": contents, "generationConfig": generation_config}
        req = urllib.request.Request(  # noqa: S310
            url,
            data=json.dumps(payload).encode("utf-8"),
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        try:
            with urllib.request.urlopen(req, timeout=self.cfg.timeout) as resp:  # noqa: S310
                obj = json.loads(resp.read().decode("utf-8"))
        except urllib.error.HTTPError as e:  # pragma: no cover - network
            logger.warning("Gemini HTTPError: %s", e.read().decode("utf-8", "ignore"))
            return None
        except Exception as e:  # noqa: BLE001 - catch-all for network/JSON
            logger.warning("Gemini request failed: %s", e)
            return None

        # candidates -> content -> parts -> text
        candidates = obj.get("candidates") if isinstance(obj, dict) else None
        if not candidates:
            return None
        parts = ((candidates[0] or {}).get("content") or {}).get("parts") or []
        if not parts:
            return None
        return parts[0].get("text") or None

    def generate_json(self, prompt: str, system: str | None = None) -> Any | None:
        text = self._generate(prompt, system, json_mode=True)
        if not text:
            return None
        try:
            return json.loads(text)
        except ValueError as e:
            logger.debug("Failed to parse Gemini JSON: %s", e)
            return None

    def generate_text(self, prompt: str, system: str | None = None) -> str | None:
        text = self._generate(prompt, system, json_mode=False)
        return text.strip() if text else None


def get_llm_client_from_settings() -> LLMClient | None:
    """Factory reading settings/env to return a configured LLM client.

    Returns None when disabled or misconfigured.
    """
    enabled = bool(getattr(settings, "LLM_ENABLED", False))
    if not enabled:
        return None

    cfg = LLMConfig(
        provider=getattr(settings, "LLM_PROVIDER", "gemini"),
        model=getattr(settings, "LLM_MODEL", "gemini-1.5-flash"),
        api_key=getattr(settings, "GEMINI_API_KEY", None)
        or os.environ.get("GEMINI_API_KEY"),
        timeout=float(getattr(settings, "LLM_TIMEOUT", 15.0)),
    )
    if cfg.provider == "gemini":
        try:
            return GeminiClient(cfg)
        except LLMNotConfiguredError:
            logger.info("LLM enabled but GEMINI_API_KEY missing; skipping LLM")
            return None
    logger.info("LLM provider '%s' not supported; skipping LLM", cfg.provider)
    return None
