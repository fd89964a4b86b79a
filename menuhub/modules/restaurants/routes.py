from fastapi import APIRouter, Depends
from menuhub.database.supabase_client import get_service_supabase
from menuhub.modules.restaurants.schemas import PingTargetsResponse
from menuhub.modules.restaurants.service import RestaurantDirectoryService
from supabase import Client

router = APIRouter(prefix="/restaurants", tags=["restaurants"])


def get_directory_service(supabase: Client = Depends(get_service_supabase)) -> RestaurantDirectoryService:
    return RestaurantDirectoryService(supabase)


@router.get("/ping-targets", response_model=PingTargetsResponse)
def list_ping_targets(
    service: RestaurantDirectoryService = Depends(get_directory_service)
):
    """Restaurants the scheduled keep-alive job should ping"""
    targets = service.list_ping_targets()
    return PingTargetsResponse(count=len(targets), restaurants=targets)
