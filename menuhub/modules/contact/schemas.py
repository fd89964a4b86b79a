from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import List, Optional


class ContactFormRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    email: EmailStr
    phone: Optional[str] = None
    restaurant_name: str = Field(alias="restaurantName")
    budget: str
    number_of_tables: str = Field(alias="numberOfTables")
    current_menu_type: str = Field(alias="currentMenuType")
    features: List[str] = []
    additional_info: Optional[str] = Field(default=None, alias="additionalInfo")


class ContactFormResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    submission_id: str = Field(alias="submissionId")
