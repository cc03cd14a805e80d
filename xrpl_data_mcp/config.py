from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]

SUPPORTED_TRANSPORTS = ("stdio", "http")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Upstream services
    los_base_url: str = Field(
        default="https://los.prod.ripplex.io",
        description="Base URL of the LOS token/transaction indexing service",
    )
    data_xrpl_base_url: str = Field(
        default="https://data.xrpl.org",
        description="Base URL of the validator history service",
    )
    xrpl_rpc_url: str = Field(
        default="https://s1.ripple.com:51234",
        description="rippled/Clio JSON-RPC endpoint",
    )
    xrplmeta_base_url: str = Field(
        default="https://s1.xrplmeta.org",
        description="Base URL of the XRPLMeta metadata API",
    )
    request_timeout_seconds: float = Field(default=30.0, gt=0, description="Upstream request timeout")

    # MCP transport
    mcp_transport: str = Field(default="http", description="MCP transport: stdio or http")
    mcp_http_host: str = Field(
        default="0.0.0.0",
        description="Listen host for the HTTP transport",
        validation_alias=AliasChoices("mcp_http_host", "MCP_HTTP_HOST", "HOST"),
    )
    mcp_http_port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Listen port for the HTTP transport",
        validation_alias=AliasChoices("mcp_http_port", "MCP_HTTP_PORT", "PORT"),
    )
    mcp_http_path: str = Field(default="/mcp", description="Path serving MCP requests")

    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("mcp_transport")
    @classmethod
    def _check_transport(cls, value: str) -> str:
        transport = (value or "").strip().lower()
        if transport not in SUPPORTED_TRANSPORTS:
            raise ValueError(f"Unsupported MCP_TRANSPORT '{value}' (expected one of {', '.join(SUPPORTED_TRANSPORTS)})")
        return transport

    @field_validator("mcp_http_path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        path = (value or "").strip() or "/mcp"
        return path if path.startswith("/") else f"/{path}"


@lru_cache()
def get_settings() -> Settings:
    """Settings are read once per process; callers pass the instance down explicitly."""
    return Settings()
