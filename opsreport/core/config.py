from pathlib import Path

from pydantic_settings import BaseSettings

# Resolve .env from project root (one level above the package)
_env_file = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    APP_NAME: str = "Operations Report Export"
    APP_ENV: str = "development"

    # Store location and privileged key; empty values surface as a store
    # error on the first query rather than at startup.
    SUPABASE_URL: str = ""
    SUPABASE_SERVICE_ROLE_KEY: str = ""
    STORE_TIMEOUT_SECONDS: float | None = None

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    model_config = {"env_file": str(_env_file), "extra": "ignore"}


settings = Settings()
