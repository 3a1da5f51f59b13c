# backend/app/core/config_loader.py

from datetime import datetime, timezone

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Naver Cloud map credentials. The client id is public (map widget),
    # the secret must stay on the server.
    NAVER_MAP_CLIENT_ID: str = ""
    NAVER_MAP_CLIENT_SECRET: str = ""

    APP_VERSION: str = "1.0.1"
    BUILD_TIME: str = datetime.now(timezone.utc).isoformat()

    DB_PATH: str = ""
    PLANS_STORAGE_KEY: str = "kogo_plans"

    EXCHANGE_API_BASE: str = "https://api.frankfurter.dev/v1"
    HTTP_TIMEOUT_SECONDS: float = 15.0

    # comma separated; "*" allows any origin
    CORS_ORIGINS: str = "*"

    environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
