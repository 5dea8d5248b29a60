"""Application configuration"""
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Literal, Optional


class Settings(BaseSettings):
    """Application settings"""

    # Supabase (leave unset to run without persistence in demo mode)
    supabase_url: Optional[str] = None
    supabase_service_role_key: Optional[str] = None

    # Application
    environment: str = "development"
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"

    # "live" persists every turn to Supabase, "demo" runs the scripted in-memory responder
    conversation_mode: Literal["live", "demo"] = "live"

    # Documents
    form_type: str = "appearance_form"
    pdf_filename: str = "Appearance_Form.pdf"

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_role_key)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
