"""
Tests for the auto-translate proxy.

Run with: pytest tests/test_translation.py -v
"""
import httpx
import pytest
from fastapi import HTTPException

from menuhub.modules.translation.schemas import TranslationRequest
from menuhub.modules.translation.service import TranslationService


GOOGLE_RESPONSE = [[["Ciao mondo. ", "Hello world. ", None], ["Buon appetito", "Enjoy your meal", None]], None, "en"]
MYMEMORY_RESPONSE = {"responseData": {"translatedText": "Bonjour"}, "responseStatus": 200}


def _service(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return TranslationService(client), client


def _request(**kwargs):
    return TranslationRequest.model_validate(kwargs)


@pytest.mark.asyncio
async def test_google_translation_joins_segments():
    seen = []

    def handler(request: httpx.Request):
        seen.append(request)
        return httpx.Response(200, json=GOOGLE_RESPONSE)

    service, client = _service(handler)
    async with client:
        result = await service.translate(_request(text="Hello world. Enjoy your meal", fromLang="en", toLang="it"))

    assert result.translated_text == "Ciao mondo. Buon appetito"
    assert result.provider == "google"
    assert seen[0].url.params["sl"] == "en"
    assert seen[0].url.params["tl"] == "it"


@pytest.mark.asyncio
async def test_falls_back_to_mymemory():
    def handler(request: httpx.Request):
        if "translate.googleapis.com" in request.url.host:
            return httpx.Response(429, text="Too Many Requests")
        assert request.url.params["langpair"] == "en|fr"
        return httpx.Response(200, json=MYMEMORY_RESPONSE)

    service, client = _service(handler)
    async with client:
        result = await service.translate(_request(text="Hello", toLang="fr"))

    assert result.translated_text == "Bonjour"
    assert result.provider == "mymemory"


@pytest.mark.asyncio
async def test_malformed_google_payload_falls_back():
    def handler(request: httpx.Request):
        if "translate.googleapis.com" in request.url.host:
            return httpx.Response(200, json={"unexpected": True})
        return httpx.Response(200, json=MYMEMORY_RESPONSE)

    service, client = _service(handler)
    async with client:
        result = await service.translate(_request(text="Hello", toLang="fr"))

    assert result.provider == "mymemory"


@pytest.mark.asyncio
async def test_both_providers_down_is_503():
    def handler(request: httpx.Request):
        raise httpx.ConnectError("unreachable", request=request)

    service, client = _service(handler)
    async with client:
        with pytest.raises(HTTPException) as exc_info:
            await service.translate(_request(text="Hello", toLang="de"))

    assert exc_info.value.status_code == 503


@pytest.mark.asyncio
async def test_same_language_returns_original_without_calls():
    def handler(request: httpx.Request):
        raise AssertionError("no provider should be called")

    service, client = _service(handler)
    async with client:
        result = await service.translate(_request(text="Pizza", fromLang="it", toLang="it"))

    assert result.translated_text == "Pizza"
    assert result.provider is None


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{"toLang": "it"}, {"text": "Hello"}, {"text": "", "toLang": "it"}])
async def test_missing_fields_is_400(payload):
    service, client = _service(lambda request: httpx.Response(500))
    async with client:
        with pytest.raises(HTTPException) as exc_info:
            await service.translate(_request(**payload))

    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_unsupported_target_is_400():
    service, client = _service(lambda request: httpx.Response(500))
    async with client:
        with pytest.raises(HTTPException) as exc_info:
            await service.translate(_request(text="Hello", toLang="xx"))

    assert exc_info.value.status_code == 400
    assert "xx" in exc_info.value.detail


@pytest.mark.asyncio
async def test_unknown_source_language_defaults_to_english():
    seen = []

    def handler(request: httpx.Request):
        seen.append(request)
        return httpx.Response(200, json=GOOGLE_RESPONSE)

    service, client = _service(handler)
    async with client:
        await service.translate(_request(text="Hola", fromLang="es", toLang="it"))

    assert seen[0].url.params["sl"] == "en"
