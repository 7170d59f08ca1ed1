"""Application configuration with environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment ("dev", "test", "production")
    ENV: str = "dev"

    VERSION: str = "1.0.0"

    LOG_LEVEL: str = "INFO"

    # Database (optional - in-memory storage when empty)
    DATABASE_URL: str = ""

    # Session cookie signing (supports key rotation)
    SESSION_SECRET: str = ""
    SESSION_SECRET_PREVIOUS: str = ""  # Set during rotation, clear after
    SESSION_MAX_AGE_HOURS: int = 24
    SESSION_COOKIE_NAME: str = "sessionId"

    # CORS
    CORS_ORIGINS: str = "http://localhost:5173"

    # Sample buildings, residents and an admin account for local work
    SEED_DEMO_DATA: bool = True
    SEED_ADMIN_PASSWORD: str = "admin123"

    # Error Tracking (optional, set in production)
    SENTRY_DSN: str = ""

    # Rate Limiting (requests per minute)
    RATE_LIMIT_AUTH: int = 5  # Login and registration attempts
    RATE_LIMIT_API: int = 120  # General API

    # Shared rate-limit storage across workers (optional)
    REDIS_URL: str = ""

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list."""
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def session_secrets(self) -> list[str]:
        """Returns list of valid secrets (current first, then previous if set)."""
        secrets = [self.SESSION_SECRET]
        if self.SESSION_SECRET_PREVIOUS:
            secrets.append(self.SESSION_SECRET_PREVIOUS)
        return secrets

    @property
    def session_max_age_seconds(self) -> int:
        return self.SESSION_MAX_AGE_HOURS * 3600

    @property
    def cookie_secure(self) -> bool:
        """Secure cookies only in production (served over HTTPS)."""
        return self.is_production


settings = Settings()
