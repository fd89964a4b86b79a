from fastapi import APIRouter, Depends, Response
from menuhub.database.supabase_client import get_service_supabase
from menuhub.modules.keepalive.schemas import KeepAliveRequest, KeepAliveResponse
from menuhub.modules.keepalive.service import KeepAliveService
from menuhub.modules.restaurants.service import RestaurantDirectoryService
from supabase import Client

router = APIRouter(prefix="/keep-alive", tags=["keep-alive"])


def get_keepalive_service(supabase: Client = Depends(get_service_supabase)) -> KeepAliveService:
    return KeepAliveService(RestaurantDirectoryService(supabase))


@router.post("", response_model=KeepAliveResponse)
def keep_alive(
    ping_data: KeepAliveRequest,
    response: Response,
    service: KeepAliveService = Depends(get_keepalive_service)
):
    """Ping one restaurant database; answers 500 when the database did not respond"""
    result = service.ping(ping_data)
    if not result.success:
        response.status_code = 500
    return result
