import logging
from datetime import datetime, timezone
from typing import Callable, Tuple

from fastapi import HTTPException

from menuhub.modules.keepalive.schemas import KeepAliveRequest, KeepAliveResponse
from menuhub.modules.restaurants.service import RestaurantDirectoryService
from menuhub.modules.tenants.service import create_tenant_client

logger = logging.getLogger(__name__)


class KeepAliveService:
    """Touches a restaurant database so the hosting provider does not pause it for inactivity."""

    def __init__(self, directory: RestaurantDirectoryService, client_factory: Callable = create_tenant_client):
        self.directory = directory
        self.client_factory = client_factory

    def _probe(self, client) -> str:
        try:
            result = client.table("restaurant_profile")\
                .select("id")\
                .limit(1)\
                .execute()
            return f"Connected via restaurant_profile, found {len(result.data or [])} records"
        except Exception as e:
            logger.info(f"restaurant_profile not readable ({e}), trying basic connection test")
        client.rpc("version").execute()
        return "Connected via basic query"

    def _ping_database(self, request: KeepAliveRequest) -> Tuple[bool, str]:
        try:
            client = self.client_factory(request.supabase_url, request.supabase_key)
            return True, self._probe(client)
        except Exception as e:
            logger.error(f"Database ping failed for {request.restaurant_name}: {e}")
            return False, str(e)

    def ping(self, request: KeepAliveRequest) -> KeepAliveResponse:
        if not request.restaurant_id or not request.supabase_url or not request.supabase_key:
            raise HTTPException(status_code=400, detail="Missing required parameters")

        logger.info(f"Starting keep-alive ping for restaurant: {request.restaurant_name} ({request.restaurant_id})")
        success, details = self._ping_database(request)
        now = datetime.now(timezone.utc)
        self.directory.record_ping(request.restaurant_id, success, details, at=now)

        result = "success" if success else "failed"
        logger.info(f"Keep-alive ping completed for {request.restaurant_name}: {result}")
        return KeepAliveResponse(
            success=success,
            restaurant_id=request.restaurant_id,
            restaurant_name=request.restaurant_name,
            result=result,
            details=details,
            timestamp=now,
        )
