"""Application configuration via environment variables."""

from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings

LogLevel = Literal["debug", "info", "warn", "error"]
Transport = Literal["stdio", "streamable-http", "sse"]


class Settings(BaseSettings):
    app_name: str = "stripe-fraud-mcp"
    app_version: str = "0.1.0"
    app_url: str = "https://smithery.ai/"
    log_level: LogLevel = "info"

    # Stripe
    stripe_api_key: SecretStr = SecretStr("")
    # None uses the account default API version
    stripe_api_version: str | None = None
    # Used by stripe_raw_request when the caller omits stripe_account
    default_stripe_account: str | None = None

    # MCP transport
    transport: Transport = "stdio"
    host: str = "127.0.0.1"
    port: int = 8020

    model_config = {"env_prefix": "", "env_file": ".env", "extra": "ignore"}


settings = Settings()
