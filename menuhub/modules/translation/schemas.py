from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class TranslationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: Optional[str] = None
    from_lang: str = Field(default="en", alias="fromLang")
    to_lang: Optional[str] = Field(default=None, alias="toLang")


class TranslationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    translated_text: str = Field(alias="translatedText")
    provider: Optional[str] = None  # google | mymemory | None when no translation was needed
