from pydantic import BaseModel, EmailStr
from typing import Optional


class LoginRequest(BaseModel):
    email: EmailStr
    password: str
    keep_signed_in: bool = False


class LoginResponse(BaseModel):
    restaurant_id: str
    restaurant_name: str
    user_id: str
    email: Optional[str] = None
    keep_signed_in: bool
    message: str


class KeepSignedInPreference(BaseModel):
    keep_signed_in: bool
