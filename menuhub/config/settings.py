from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Directory project (lists every restaurant's own Supabase project)
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Required for keep-alive bookkeeping and contact submissions

    # Restaurant session persistence
    credential_storage_key: str = "restaurant_info"
    keep_signed_in_preference_key: str = "keep_logged_in_preference"
    durable_storage_path: str = "~/.menuhub/session.json"
    session_check_timeout_seconds: float = 5.0

    # Auto-translate providers
    google_translate_url: str = "https://translate.googleapis.com/translate_a/single"
    mymemory_url: str = "https://api.mymemory.translated.net/get"
    http_timeout_seconds: float = 10.0  # outbound calls to translation and e-mail APIs

    # Resend (contact form notifications)
    resend_api_key: Optional[str] = None
    resend_api_url: str = "https://api.resend.com/emails"
    contact_from_email: str = "Contact Form <onboarding@resend.dev>"

    # App
    app_name: str = "menuhub-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"
    public_rate_limit: str = "20/minute"  # translate and contact endpoints

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
