from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized runtime configuration loaded from environment variables.
    """

    SUPABASE_URL: str
    SUPABASE_SERVICE_ROLE_KEY: str
    SUPABASE_ANON_KEY: str | None = None
    PRODUCTS_TABLE: str = "products"
    REVIEWS_TABLE: str = "reviews"
    API_PREFIX: str = "/api"
    APP_NAME: str = "Storefront"
    ALLOWED_ORIGINS: list[str] = ["*"]
    PAGE_SIZE: int = Field(20, ge=1)
    CATEGORIES: list[str] = ["Category1", "Category2"]
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
