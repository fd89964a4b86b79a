from fastapi import APIRouter, Depends
from menuhub.core.dependencies import get_session_manager
from menuhub.database.supabase_client import get_supabase
from menuhub.modules.auth.schemas import LoginRequest, LoginResponse, KeepSignedInPreference
from menuhub.modules.auth.service import RestaurantAuthService
from menuhub.modules.restaurants.service import RestaurantDirectoryService
from menuhub.modules.tenants.service import TenantSessionManager
from supabase import Client

router = APIRouter(prefix="/auth", tags=["auth"])


def get_auth_service(
    supabase: Client = Depends(get_supabase),
    sessions: TenantSessionManager = Depends(get_session_manager)
) -> RestaurantAuthService:
    return RestaurantAuthService(RestaurantDirectoryService(supabase), sessions)


@router.post("/restaurant-login", response_model=LoginResponse)
def restaurant_login(
    login_data: LoginRequest,
    service: RestaurantAuthService = Depends(get_auth_service)
):
    """Log in to whichever restaurant project owns this account"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
def logout(
    sessions: TenantSessionManager = Depends(get_session_manager)
):
    """Forget the stored restaurant session"""
    sessions.invalidate_session()
    return {"message": "Logged out successfully"}


@router.get("/preference", response_model=KeepSignedInPreference)
def get_keep_signed_in_preference(
    sessions: TenantSessionManager = Depends(get_session_manager)
):
    """Default for the login form's keep-me-signed-in checkbox"""
    return KeepSignedInPreference(keep_signed_in=sessions.keep_signed_in_preference())
