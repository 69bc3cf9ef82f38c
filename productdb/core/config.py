from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite:///./productdb.sqlite3"

    # admin routes are open when no token is configured
    admin_token: Optional[str] = None

    # minimum trigram similarity for a text search match (pg_trgm default)
    similarity_threshold: float = 0.3
    max_query_limit: int = 100

    log_level: str = "INFO"
    sql_echo: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
