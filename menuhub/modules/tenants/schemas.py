from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, Optional


class TenantCredential(BaseModel):
    """One restaurant's backend endpoint and anon key, as persisted by the login flow.

    Field aliases keep the stored JSON compatible with the dashboard's
    `restaurant_info` record.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    base_url: str = Field(alias="supabase_url")
    api_key: str = Field(alias="supabase_anon_key")
    keep_signed_in: bool = Field(default=False, alias="keepLoggedIn")
    id: Optional[str] = None
    name: Optional[str] = None
    user: Optional[Dict[str, Any]] = None

    @field_validator("base_url", "api_key")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("id", mode="before")
    @classmethod
    def id_as_str(cls, value: Any) -> Any:
        return str(value) if value is not None else None

    def to_record(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)


class SessionStatusResponse(BaseModel):
    authenticated: bool
    restaurant_id: Optional[str] = None
    restaurant_name: Optional[str] = None
    keep_signed_in: Optional[bool] = None


class RestaurantProfileResponse(BaseModel):
    restaurant_id: Optional[str] = None
    profile: Dict[str, Any]
