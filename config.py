from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./books.db"
    LOG_LEVEL: str = "INFO"
    DEFAULT_SORT: str = "recency"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
