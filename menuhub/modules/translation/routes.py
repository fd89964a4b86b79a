import httpx
from fastapi import APIRouter, Depends, Request
from menuhub.config import settings
from menuhub.core.dependencies import get_http_client
from menuhub.core.rate_limit import limiter
from menuhub.modules.translation.schemas import TranslationRequest, TranslationResponse
from menuhub.modules.translation.service import TranslationService

router = APIRouter(prefix="/auto-translate", tags=["translation"])


def get_translation_service(http_client: httpx.AsyncClient = Depends(get_http_client)) -> TranslationService:
    return TranslationService(http_client)


@router.post("", response_model=TranslationResponse)
@limiter.limit(settings.public_rate_limit)
async def auto_translate(
    request: Request,
    translation_data: TranslationRequest,
    service: TranslationService = Depends(get_translation_service)
):
    """Translate a menu string between the supported languages"""
    return await service.translate(translation_data)
