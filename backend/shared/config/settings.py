"""
Application settings loaded from environment variables.
Uses pydantic-settings for type-safe configuration.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with defaults for development."""

    # Hosted backend (REST + storage). Both are required to build a client.
    supabase_url: str = ""
    supabase_anon_key: str = ""

    # Object storage
    storage_bucket: str = "Media"
    storage_cache_control: str = "3600"

    # HTTP client
    backend_timeout: float = 5.0  # httpx default
    backend_max_connections: int = 10

    # Admin credentials checked by AdminSession.login()
    admin_email: str = ""
    admin_password: str = ""
    session_file: str = ".admin_session.json"

    # Environment
    environment: str = "development"
    debug: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    def validate_backend_config(self) -> list[str]:
        """
        Validate that the backend connection is configured.
        Returns a list of validation errors. Empty list means all checks pass.
        """
        errors = []

        if not self.supabase_url:
            errors.append("SUPABASE_URL must be set")
        elif not self.supabase_url.startswith(("http://", "https://")):
            errors.append("SUPABASE_URL must be an http(s) URL")

        if not self.supabase_anon_key:
            errors.append("SUPABASE_ANON_KEY must be set")

        if self.environment == "production":
            if self.debug:
                errors.append("DEBUG must be False in production")
            if self.supabase_url.startswith("http://"):
                errors.append("SUPABASE_URL must use https in production")

        return errors


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience exports
settings = get_settings()
