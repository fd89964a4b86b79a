"""
Core dependencies shared by the route modules
"""

from fastapi import Depends, HTTPException, Request, status
from menuhub.config import settings
from menuhub.modules.tenants.errors import NotAuthenticated
from menuhub.modules.tenants.service import TenantSessionManager
from typing import AsyncIterator
import httpx
import logging

logger = logging.getLogger(__name__)


def get_session_manager(request: Request) -> TenantSessionManager:
    """The process-wide session manager built at startup (see main.py)."""
    return request.app.state.session_manager


def require_tenant_client(
    sessions: TenantSessionManager = Depends(get_session_manager),
):
    """Resolve the active restaurant's client or answer 401 so the frontend redirects to login."""
    try:
        return sessions.resolve_client()
    except NotAuthenticated as e:
        logger.info(f"Rejected request without restaurant session: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e)
        )


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Outbound HTTP client for third-party APIs, closed when the request finishes."""
    async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
        yield client
