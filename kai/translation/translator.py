from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol

import httpx

from kai.config import (
    KAI_API_KEY,
    KAI_TRANSLATION_TIMEOUT,
    KAI_TRANSLATION_URL,
    KAI_TRANSLATOR,
    OPENAI_API_KEY,
    TRANSLATION_LLM_MODEL,
    ConfigurationError,
)
from kai.nlu.schema import Language
from kai.translation.prompt_translation import TRANSLATION_SYSTEM_PROMPT

# Wire codes used by the translation API
_LANG_CODES = {Language.KRI: "kri", Language.EN: "en"}

# Field names seen in translation API responses, in preference order
_RESULT_KEYS = ("translated_text", "translation", "english_text", "text")


@dataclass
class TranslationResult:
    success: bool
    text: str = ""
    error: Optional[str] = None


class Translator(Protocol):
    def translate(self, text: str, source: Language, target: Language) -> TranslationResult:
        """Never raises; failures come back as success=False."""
        ...


def _extract_translation(data: Any) -> str:
    if isinstance(data, str):
        return data
    if isinstance(data, dict):
        for k in _RESULT_KEYS:
            v = data.get(k)
            if isinstance(v, str) and v.strip():
                return v
    return ""


class HttpTranslator:
    """POST {base_url}/api/v1/translate with an X-API-Key header."""

    def __init__(self, base_url: str, api_key: Optional[str] = None,
                 timeout: float = KAI_TRANSLATION_TIMEOUT, client: Optional[httpx.Client] = None):
        self.url = base_url.rstrip("/") + "/api/v1/translate"
        self.api_key = api_key
        self.timeout = timeout
        self._client = client

    def translate(self, text: str, source: Language, target: Language) -> TranslationResult:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["X-API-Key"] = self.api_key
        body = {"text": text, "source_lang": _LANG_CODES[source], "target_lang": _LANG_CODES[target]}
        try:
            if self._client is not None:
                r = self._client.post(self.url, json=body, headers=headers, timeout=self.timeout)
            else:
                r = httpx.post(self.url, json=body, headers=headers, timeout=self.timeout)
            r.raise_for_status()
            out = _extract_translation(r.json())
        except httpx.TimeoutException:
            return TranslationResult(False, error="timeout")
        except httpx.HTTPStatusError as e:
            return TranslationResult(False, error=f"http_{e.response.status_code}")
        except (httpx.HTTPError, ValueError) as e:
            return TranslationResult(False, error=f"{type(e).__name__}")
        if not out.strip():
            return TranslationResult(False, error="empty_translation")
        return TranslationResult(True, text=out.strip())


class LLMTranslator:
    def __init__(self, model: str = TRANSLATION_LLM_MODEL, api_key: Optional[str] = OPENAI_API_KEY,
                 timeout: float = KAI_TRANSLATION_TIMEOUT, base_url: Optional[str] = None):
        self.model = model
        self.api_key = api_key
        self.timeout = timeout
        self.base_url = base_url

    def translate(self, text: str, source: Language, target: Language) -> TranslationResult:
        if not self.api_key:
            return TranslationResult(False, error="missing_openai_key")
        # Lazy import; the HTTP backend does not need the SDK
        try:
            from openai import OpenAI
        except ImportError as e:
            return TranslationResult(False, error=f"openai_import_failed: {e}")

        # One attempt per message; the SDK would otherwise retry twice on timeout
        client = OpenAI(api_key=self.api_key, base_url=self.base_url,
                        max_retries=0, timeout=self.timeout)
        try:
            resp = client.chat.completions.create(
                model=self.model,
                temperature=0,
                timeout=self.timeout,
                messages=[
                    {"role": "system", "content": TRANSLATION_SYSTEM_PROMPT},
                    {"role": "user", "content": text},
                ],
            )
            content = resp.choices[0].message.content or ""
        except Exception as e:
            # Any SDK or transport error -> resolver falls through to keyword scan
            return TranslationResult(False, error=f"llm_call_failed: {type(e).__name__}")
        content = content.strip().strip('"').strip()
        if not content:
            return TranslationResult(False, error="empty_translation")
        return TranslationResult(True, text=content)


def build_translator(kind: Optional[str] = None) -> Optional[Translator]:
    """Translator selected by KAI_TRANSLATOR; None disables the fallback step."""
    kind = (kind or KAI_TRANSLATOR or "none").lower()
    if kind == "none":
        return None
    if kind == "http":
        if not KAI_TRANSLATION_URL:
            raise ConfigurationError("KAI_TRANSLATOR=http needs KAI_TRANSLATION_URL")
        return HttpTranslator(KAI_TRANSLATION_URL, api_key=KAI_API_KEY)
    if kind == "llm":
        return LLMTranslator()
    raise ConfigurationError(f"unknown KAI_TRANSLATOR '{kind}'")
