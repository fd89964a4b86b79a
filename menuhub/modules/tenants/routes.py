from fastapi import APIRouter, Depends, HTTPException
from menuhub.core.dependencies import get_session_manager, require_tenant_client
from menuhub.modules.tenants.schemas import SessionStatusResponse, RestaurantProfileResponse
from menuhub.modules.tenants.service import TenantSessionManager
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/restaurant", tags=["restaurant"])


@router.get("/session", response_model=SessionStatusResponse)
async def get_session_status(
    sessions: TenantSessionManager = Depends(get_session_manager)
):
    """Whether the stored restaurant login still has a live Supabase session"""
    if not await sessions.is_session_valid():
        return SessionStatusResponse(authenticated=False)
    credential = sessions.get_active_credential()
    if credential is None:
        return SessionStatusResponse(authenticated=False)
    return SessionStatusResponse(
        authenticated=True,
        restaurant_id=credential.id,
        restaurant_name=credential.name,
        keep_signed_in=credential.keep_signed_in
    )


@router.get("/profile", response_model=RestaurantProfileResponse)
def get_restaurant_profile(
    client=Depends(require_tenant_client),
    sessions: TenantSessionManager = Depends(get_session_manager)
):
    """Read the restaurant_profile row from the active restaurant's own project"""
    try:
        result = client.table("restaurant_profile")\
            .select("*")\
            .limit(1)\
            .execute()
    except Exception as e:
        logger.error(f"Error loading restaurant profile: {e}")
        raise HTTPException(status_code=502, detail="Could not reach the restaurant database")

    if not result.data:
        raise HTTPException(status_code=404, detail="Restaurant profile not found")

    credential = sessions.get_active_credential()
    return RestaurantProfileResponse(
        restaurant_id=credential.id if credential else None,
        profile=result.data[0]
    )
