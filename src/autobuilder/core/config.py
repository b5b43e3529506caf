from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "BlockchainAI AutoBuilder API"
    app_version: str = "0.1.0"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True

    # Security
    trusted_proxy_ips: list[str] = []  # Peers allowed to set X-Forwarded-For
    admin_emails: list[str] = []
    csp_production: str = "default-src 'self'; frame-ancestors 'none'"

    # Database
    database_url: str
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Auth
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7
    argon2_time_cost: int = 3
    argon2_memory_cost: int = 65536
    argon2_parallelism: int = 1

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Metrics
    metrics_api_key: str | None = None  # If set, /metrics requires this key

    # Redis (optional - rate limiting falls back to in-process storage)
    redis_url: str | None = None
    redis_pool_size: int = 10

    # Rate limiting (global middleware, keyed by client IP)
    rate_limit_window_seconds: int = 900
    rate_limit_max_requests: int = 100
    rate_limit_allowlist: list[str] = []
    rate_limit_max_tracked_keys: int = 10_000

    # Rate limiting (AI endpoints, keyed by user when authenticated)
    ai_rate_limit_window_seconds: int = 60
    ai_rate_limit_max_requests: int = 10

    # AI (OpenAI-compatible chat completions)
    openai_api_key: str | None = None  # If not set, AI endpoints return 503
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4"
    ai_request_timeout_seconds: float = 60.0

    # Blockchain (MultiversX API)
    multiversx_api_url: str = "https://devnet-api.multiversx.com"
    multiversx_network: str = "devnet"
    blockchain_request_timeout_seconds: float = 10.0

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        if v in ("your-secret-key", "change-this-to-a-secure-random-string"):
            raise ValueError(
                "JWT_SECRET_KEY must be changed from default value. "
                "Generate a secure secret with: openssl rand -hex 32"
            )
        if len(v) < 32:
            raise ValueError("JWT_SECRET_KEY must be at least 32 characters")
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Reject wildcards, credentials are allowed on CORS requests."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @field_validator("admin_emails")
    @classmethod
    def normalize_admin_emails(cls, v: list[str]) -> list[str]:
        return [email.strip().lower() for email in v if email.strip()]

    @property
    def ai_configured(self) -> bool:
        return bool(self.openai_api_key)

    @property
    def is_testing(self) -> bool:
        return self.app_env == "testing"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()
