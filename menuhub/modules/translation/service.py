"""
Menu text translation.

Google Translate's free endpoint is tried first; MyMemory is the backup. Both
are keyless public APIs, so either may throttle or change shape without
notice.
"""

import logging
from typing import Optional

import httpx
from fastapi import HTTPException

from menuhub.config import settings
from menuhub.modules.translation.schemas import TranslationRequest, TranslationResponse

logger = logging.getLogger(__name__)

# Languages offered in the menu language switcher
LANGUAGE_MAP = {
    "sq": "sq",  # Albanian
    "it": "it",  # Italian
    "de": "de",  # German
    "fr": "fr",  # French
    "zh": "zh",  # Chinese
    "en": "en",  # English
}

BROWSER_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


class TranslationProviderError(RuntimeError):
    pass


class TranslationService:
    def __init__(self, http_client: httpx.AsyncClient):
        self.http = http_client

    async def translate_with_google(self, text: str, from_lang: str, to_lang: str) -> str:
        response = await self.http.get(
            settings.google_translate_url,
            params={"client": "gtx", "sl": from_lang, "tl": to_lang, "dt": "t", "q": text},
            headers={"User-Agent": BROWSER_USER_AGENT},
        )
        if response.status_code != 200:
            raise TranslationProviderError(f"Google Translate API error: {response.status_code}")

        data = response.json()
        # Shape: [[["translated", "original", ...], ...], ...]; one entry per sentence
        try:
            segments = [segment[0] for segment in data[0] if segment and segment[0]]
        except (TypeError, IndexError, KeyError) as e:
            raise TranslationProviderError("Invalid response format from Google Translate") from e
        if not segments:
            raise TranslationProviderError("Invalid response format from Google Translate")
        return "".join(segments)

    async def translate_with_mymemory(self, text: str, from_lang: str, to_lang: str) -> str:
        response = await self.http.get(
            settings.mymemory_url,
            params={"q": text, "langpair": f"{from_lang}|{to_lang}"},
        )
        if response.status_code != 200:
            raise TranslationProviderError(f"MyMemory API error: {response.status_code}")

        data = response.json()
        translated: Optional[str] = (data.get("responseData") or {}).get("translatedText") if isinstance(data, dict) else None
        if not translated:
            raise TranslationProviderError("Invalid response from MyMemory")
        return translated

    async def translate(self, request: TranslationRequest) -> TranslationResponse:
        if not request.text or not request.to_lang:
            raise HTTPException(status_code=400, detail="Text and target language are required")

        if request.from_lang == request.to_lang:
            return TranslationResponse(translated_text=request.text)

        source_lang = LANGUAGE_MAP.get(request.from_lang, "en")
        target_lang = LANGUAGE_MAP.get(request.to_lang)
        if target_lang is None:
            raise HTTPException(status_code=400, detail=f"Unsupported target language: {request.to_lang}")

        try:
            translated = await self.translate_with_google(request.text, source_lang, target_lang)
            return TranslationResponse(translated_text=translated, provider="google")
        except (httpx.HTTPError, ValueError, TranslationProviderError) as e:
            logger.warning(f"Google Translate failed, trying MyMemory as backup: {e}")

        try:
            translated = await self.translate_with_mymemory(request.text, source_lang, target_lang)
            return TranslationResponse(translated_text=translated, provider="mymemory")
        except (httpx.HTTPError, ValueError, TranslationProviderError) as e:
            logger.error(f"Both translation APIs failed: {e}")
            raise HTTPException(
                status_code=503,
                detail="Translation service temporarily unavailable. Please try again later."
            )
