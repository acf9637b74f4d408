"""Admin service configuration from environment."""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./berry_admin.db"
    run_migrations: bool = True

    # Sessions
    session_ttl_hours: int = 24
    session_cookie_name: str = "admin_token"
    session_cookie_secure: bool = True
    session_cookie_samesite: str = "none"

    # Passwords / reset codes
    bcrypt_rounds: int = Field(12, ge=4, le=31)
    min_password_length: int = 8
    reset_code_ttl_minutes: int = 15
    expose_reset_code: bool = False  # dev/test only
    reset_code_webhook_url: str = ""

    # HTTP
    cors_origin_regex: str = ".*"
    log_level: str = "INFO"


settings = Settings()
