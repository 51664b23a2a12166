"""Application configuration via environment variables."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from .env or environment."""

    DATABASE_URL: str = "sqlite:///./clinic.db"
    CORS_ORIGINS: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    # Admin session
    SESSION_SECRET: str = "supersecretkey"
    SESSION_MAX_AGE: int = 60 * 60
    SESSION_HTTPS_ONLY: bool = False
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "password"
    ADMIN_LOGIN_URL: str = "/admin/admin-login.html"

    # Payment gateway (disabled while PAYMENT_MERCHANT_KEY is empty)
    PAYMENT_ENV: str = "staging"
    PAYMENT_MERCHANT_ID: str = ""
    PAYMENT_MERCHANT_KEY: str = ""
    PAYMENT_WEBSITE: str = "WEBSTAGING"
    PAYMENT_CALLBACK_URL: str = "http://localhost:3000/api/paytm/callback"

    class Config:
        env_file = ".env"


settings = Settings()
