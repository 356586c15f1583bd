from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=True)

    ENVIRONMENT: str = "development"

    # Database settings (credentials MUST be provided via environment)
    DB_USER: str
    DB_PASSWORD: SecretStr
    DB_HOST: str = "postlist-db"
    DB_PORT: int = 5432
    DB_NAME: str = "postlist"
    DB_POOL_SIZE: int = 20
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True

    @property
    def DATABASE_URL(self) -> str:
        """Construct the database URL from individual components."""
        password = self.DB_PASSWORD.get_secret_value()
        return (
            f"postgresql+asyncpg://{self.DB_USER}:{password}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    # Redis settings (only used by the optional count cache)
    REDIS_IP: str = "localhost"
    REDIS_PORT: int = 6379
    MAIN_REDIS_DB: int = 1
    REDIS_MAX_CONNECTIONS: int = 50
    REDIS_SOCKET_TIMEOUT: int = 5
    REDIS_CONNECT_TIMEOUT: int = 5
    REDIS_HEALTH_CHECK_INTERVAL: int = 30
    REDIS_RETRY_ON_TIMEOUT: bool = True

    # Pagination defaults
    DEFAULT_PAGE_SIZE: int = 20

    # Count cache for offset pagination totals
    COUNT_CACHE_ENABLED: bool = False
    COUNT_CACHE_TTL: int = 300

    # Count estimation
    POST_TABLE_NAME: str = "post"
    ESTIMATE_MIN_TRUSTED_ROWS: int = 1000
    STATISTICS_TIMEOUT_SECONDS: float = 2.0

    # Full-text search configuration passed to to_tsvector/websearch_to_tsquery
    FULLTEXT_CONFIG: str = "simple"

    # Logging settings
    LOG_LEVEL: str = "INFO"
    LOG_FILE_PATH: str = "logs/logging_errors.log"


app_settings = Settings()
