#config.py
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
from functools import lru_cache

STORE_BACKENDS = ("supabase", "sql")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")
    # Application Settings
    APP_NAME: str = "Student Registry API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # Credential store: "supabase" talks to PostgREST, "sql" uses SQLModel directly
    STORE_BACKEND: str = "supabase"
    SUPABASE_URL: str = ""
    SUPABASE_KEY: str = ""
    SUPABASE_TABLE: str = "students"
    DATABASE_URL: str = ""

    # Twilio Settings
    TWILIO_ACCOUNT_SID: str = Field(default="", validation_alias=AliasChoices("TWILIO_ACCOUNT_SID", "TWILIO_SID"))
    TWILIO_AUTH_TOKEN: str = ""
    TWILIO_PHONE_NUMBER: str = ""

    # Security Settings
    JWT_SECRET: str = Field(default="", validation_alias=AliasChoices("JWT_SECRET", "JWT_SECRET_KEY"))
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = 24

    # Outbound calls to Twilio and Supabase
    HTTP_TIMEOUT_SECONDS: float = 10.0

    # CORS Settings (comma-separated)
    ALLOWED_ORIGINS: str = "*"

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    def _split_csv(self, value: str) -> List[str]:
        if value is None:
            return []
        value = value.strip()
        if value == "":
            return []
        return [item.strip() for item in value.split(",")]

    @property
    def allowed_origins_list(self) -> List[str]:
        return self._split_csv(self.ALLOWED_ORIGINS)

    @property
    def store_backend(self) -> str:
        return self.STORE_BACKEND.strip().lower()


def check_startup(settings: Settings) -> List[str]:
    """Return every configuration problem that must stop the process from starting.

    An empty list means the process may start.
    """
    problems = []
    backend = settings.store_backend
    if backend not in STORE_BACKENDS:
        problems.append(f"STORE_BACKEND must be one of {', '.join(STORE_BACKENDS)} (got {settings.STORE_BACKEND!r})")
    elif backend == "supabase":
        if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
            problems.append("Supabase credentials are missing (SUPABASE_URL, SUPABASE_KEY)")
    elif not settings.DATABASE_URL:
        problems.append("DATABASE_URL is missing")

    if not settings.TWILIO_ACCOUNT_SID or not settings.TWILIO_AUTH_TOKEN or not settings.TWILIO_PHONE_NUMBER:
        problems.append("Twilio credentials are missing (TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN, TWILIO_PHONE_NUMBER)")

    if not settings.JWT_SECRET:
        problems.append("JWT secret is missing (JWT_SECRET)")

    return problems


@lru_cache()
def get_settings() -> Settings:
    return Settings()
