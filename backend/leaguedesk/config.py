from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    database_url: str = "sqlite:///./leaguedesk.db"
    secret_key: str = "dev-secret-key-change-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    refresh_token_expire_days: int = 14
    environment: str = "development"
    api_cors_origins: str = "http://localhost:3000"

    # Identity provider tokens exchanged at /auth/session
    identity_token_secret: str = "dev-identity-secret-change-in-production"
    identity_token_algorithm: str = "HS256"
    identity_token_audience: str | None = None
    creator_emails: str = ""

    league_timezone: str = "UTC"
    team_list_cache_ttl_hours: int = 24

    # Generative AI settings for team performance summaries
    genai_enabled: bool = True
    genai_api_key: str | None = None
    genai_model: str = "gemini-2.0-flash"
    genai_base_url: str = "https://generativelanguage.googleapis.com/v1beta"

    @property
    def cors_origins(self) -> list[str]:
        raw = self.api_cors_origins.strip()
        if not raw:
            return []
        return [origin.strip() for origin in raw.split(",") if origin.strip()]

    @property
    def creator_email_set(self) -> set[str]:
        return {email.strip().lower() for email in self.creator_emails.split(",") if email.strip()}

    class Config:
        env_file = ".env"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
