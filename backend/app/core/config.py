"""Core configuration settings loaded from environment variables."""
from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Core
    APP_ENV: Literal["development", "staging", "production"] = "development"
    APP_NAME: str = "Subdomain Hub"
    API_V1_PREFIX: str = "/api/v1"
    DEBUG: bool = True
    SECRET_KEY: str = "change-me-in-production-use-openssl-rand-hex-32"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days

    # Secret for the DNS credential cipher. Changing it makes every stored
    # DNS account unreadable.
    ENCRYPTION_KEY: str = "change-me-32-char-encryption-key"

    # Database
    DB_TYPE: Literal["mysql", "sqlite"] = "sqlite"
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_NAME: str = "subdomain_hub"
    DB_USER: str = "subdomain_hub"
    DB_PASSWORD: str = "change_me"
    SQLITE_PATH: str = "./data/subdomain_hub.db"

    @property
    def DATABASE_URL(self) -> str:
        if self.DB_TYPE == "sqlite":
            return f"sqlite:///{self.SQLITE_PATH}"
        return f"mysql+pymysql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    # DNS providers
    DNS_PROVIDER_TIMEOUT: float = 15.0  # seconds, per provider HTTP call
    CLOUDFLARE_API_BASE: str = "https://api.cloudflare.com/client/v4"
    ALIYUN_DNS_ENDPOINT: str = "https://alidns.cn-hangzhou.aliyuncs.com"

    # Fallbacks used when the matching system setting row is missing
    DEFAULT_RECORD_TTL: int = 300
    DEFAULT_USER_QUOTA: int = 5
    DEFAULT_DOMAIN_STATUS: Literal["active", "pending"] = "active"

    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
