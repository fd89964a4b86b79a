import httpx
from fastapi import APIRouter, Depends, Request
from menuhub.config import settings
from menuhub.core.dependencies import get_http_client
from menuhub.core.rate_limit import limiter
from menuhub.database.supabase_client import get_service_supabase
from menuhub.modules.contact.schemas import ContactFormRequest, ContactFormResponse
from menuhub.modules.contact.service import ContactService
from supabase import Client

router = APIRouter(prefix="/contact", tags=["contact"])


def get_contact_service(
    supabase: Client = Depends(get_service_supabase),
    http_client: httpx.AsyncClient = Depends(get_http_client)
) -> ContactService:
    return ContactService(supabase, http_client)


@router.post("", response_model=ContactFormResponse)
@limiter.limit(settings.public_rate_limit)
async def submit_contact_form(
    request: Request,
    form: ContactFormRequest,
    service: ContactService = Depends(get_contact_service)
):
    """Submit the sales contact form from the marketing site"""
    return await service.submit(form)
