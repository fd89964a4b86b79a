import logging
import re
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import HTTPException
from supabase import Client

from menuhub.modules.restaurants.schemas import RestaurantRecord, PingTarget

logger = logging.getLogger(__name__)

PINGABLE_STATUSES = ["connected", "pending"]
_UNSAFE_NAME_CHARS = re.compile(r"[^a-zA-Z0-9]")


def sanitize_name(name: str) -> str:
    return _UNSAFE_NAME_CHARS.sub("_", name)


class RestaurantDirectoryService:
    """Reads and updates the restaurant list kept in the directory project."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_restaurants(self) -> List[RestaurantRecord]:
        try:
            result = self.supabase.table("restaurants")\
                .select("id, name, supabase_url, supabase_anon_key, connection_status")\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching restaurants: {e}")
            raise HTTPException(
                status_code=502,
                detail="Failed to fetch restaurant information. Please try again."
            )
        return [RestaurantRecord(**row) for row in (result.data or [])]

    def list_ping_targets(self) -> List[PingTarget]:
        """Connected or pending restaurants, shaped for the keep-alive job matrix."""
        try:
            result = self.supabase.table("restaurants")\
                .select("id, name, supabase_url, supabase_anon_key, connection_status")\
                .in_("connection_status", PINGABLE_STATUSES)\
                .order("name")\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching restaurants for ping: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        rows = result.data or []
        logger.info(f"Found {len(rows)} restaurants to ping")
        return [
            PingTarget(
                id=str(row["id"]),
                name=sanitize_name(row["name"]),
                url=row["supabase_url"],
                key=row["supabase_anon_key"],
                status=row.get("connection_status"),
            )
            for row in rows
        ]

    def record_ping(self, restaurant_id: str, success: bool, details: str, at: Optional[datetime] = None) -> None:
        """Store the ping outcome. Failures here are logged only; the ping result stands."""
        at = at or datetime.now(timezone.utc)
        try:
            self.supabase.table("restaurants")\
                .update({
                    "last_connected_at": at.isoformat(),
                    "connection_status": "connected" if success else "error"
                })\
                .eq("id", restaurant_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error updating last_connected_at for {restaurant_id}: {e}")

        try:
            self.supabase.table("activity_logs").insert({
                "restaurant_id": restaurant_id,
                "action": "keep_alive_ping",
                "details": {
                    "result": "success" if success else "failed",
                    "details": details,
                    "timestamp": at.isoformat()
                }
            }).execute()
        except Exception as e:
            logger.error(f"Error logging keep-alive activity for {restaurant_id}: {e}")
