from typing import Optional, List
from pydantic_settings import BaseSettings, SettingsConfigDict

from common.core.constants import CacheProvider, Environment, OpenEndedPolicy


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Environment Profile
    environment: Environment = Environment.LOCAL

    # API Settings
    app_name: str = "subsaggregator"
    api_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database Components
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "subscriptions"
    db_use_nullpool: bool = False
    db_pool_size: int = 10
    db_pool_overflow: int = 5

    @property
    def database_url(self) -> str:
        """Construct database URL from components."""
        return f"postgresql://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    # Redis
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: Optional[str] = None
    redis_db: int = 0

    # Caching
    cache_provider: CacheProvider = CacheProvider.REDIS
    subscription_cache_ttl: int = 180  # 3 minutes

    # Spend aggregation
    spend_open_ended_policy: OpenEndedPolicy = OpenEndedPolicy.EXCLUDE

    # OpenTelemetry
    otel_service_name: str = "subsaggregator"
    otel_service_version: str = "1.0.0"
    otel_exporter_endpoint: Optional[str] = None  # e.g. http://collector:4318/v1/traces

    @property
    def cors_allowed_origins(self) -> List[str]:
        """Auto-select CORS origins based on environment."""
        if self.environment == Environment.LOCAL:
            return [
                "http://localhost:3000",
                "http://localhost:8080",
            ]
        return []


settings = Settings()
