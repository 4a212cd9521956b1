"""
Application configuration settings.

Central configuration module using Pydantic BaseSettings with environment variable support.
Loads from .env file and environment variables.
"""
import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Union

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file if it exists (python-dotenv)
env_path = Path(".env")
if env_path.exists():
    load_dotenv(dotenv_path=env_path)


@dataclass(frozen=True)
class IdRange:
    """Inclusive range of rule identifiers the provider accepts for one service."""
    minimum: int
    maximum: int

    def __contains__(self, value: int) -> bool:
        return self.minimum <= value <= self.maximum


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # App settings
    APP_NAME: str = "Edge NAT Compiler"
    APP_ENV: str = Field(default="local")
    DEBUG: bool = Field(default=False)

    # Firewall and NAT rule ids are disjoint slices of one gateway id space
    FIREWALL_RULE_ID_MIN: int = Field(default=1)
    FIREWALL_RULE_ID_MAX: int = Field(default=65536)
    NAT_RULE_ID_MIN: int = Field(
        default=65537,
        description="First identifier handed out to NAT rules without an explicit id",
    )
    NAT_RULE_ID_MAX: int = Field(default=131072)

    # Gateway directory backing the HTTP service
    GATEWAY_DIRECTORY_FILE: Optional[str] = Field(
        default=None,
        description="JSON file mapping gateway ids to their network interfaces",
    )

    # CORS settings
    CORS_ORIGINS: Union[str, List[str]] = Field(
        default='["http://localhost:3000", "http://localhost:8000"]',
    )

    @field_validator("CORS_ORIGINS")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from string or list."""
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                # If not JSON, treat as comma-separated
                return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # Logging
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    LOG_FILE: Optional[str] = Field(
        default=None,
        description="Optional path of a rotating log file; console only when unset",
    )

    def id_range(self, service: str) -> IdRange:
        """
        Get the identifier range for an edge gateway service.

        Args:
            service: Service name ("nat" or "firewall")

        Returns:
            IdRange for the service
        """
        ranges = {
            "nat": IdRange(self.NAT_RULE_ID_MIN, self.NAT_RULE_ID_MAX),
            "firewall": IdRange(self.FIREWALL_RULE_ID_MIN, self.FIREWALL_RULE_ID_MAX),
        }
        try:
            return ranges[service.lower()]
        except KeyError:
            raise ValueError(f"Unknown service for id range: {service}")


# Create global settings instance
@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

settings = get_settings()
