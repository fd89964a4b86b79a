from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class KeepAliveRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    restaurant_id: Optional[str] = Field(default=None, alias="restaurantId")
    restaurant_name: Optional[str] = Field(default=None, alias="restaurantName")
    supabase_url: Optional[str] = Field(default=None, alias="supabaseUrl")
    supabase_key: Optional[str] = Field(default=None, alias="supabaseKey")


class KeepAliveResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    restaurant_id: str = Field(alias="restaurantId")
    restaurant_name: Optional[str] = Field(default=None, alias="restaurantName")
    result: str  # success | failed
    details: str
    timestamp: datetime
