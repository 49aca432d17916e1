from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Server
    port: int = 8000
    debug: bool = False

    # Supabase (schedule cache; disabled when unset)
    supabase_url: str = ""
    supabase_service_key: str = ""
    supabase_jwt_secret: str = ""

    # Location registry
    location_registry_url: str = ""
    location_registry_token: str = ""
    location_lookup_timeout_seconds: float = 5.0
    max_concurrent_location_lookups: int = 10
    location_lookup_retries: int = 2

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def cache_enabled(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_key)


@lru_cache
def get_settings() -> Settings:
    return Settings()
