from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime


class RestaurantRecord(BaseModel):
    id: str
    name: str
    supabase_url: str
    supabase_anon_key: str
    connection_status: Optional[str] = None
    last_connected_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PingTarget(BaseModel):
    id: str
    name: str  # sanitized for use as a CI matrix key
    url: str
    key: str
    status: Optional[str] = None


class PingTargetsResponse(BaseModel):
    success: bool = True
    count: int
    restaurants: List[PingTarget]
