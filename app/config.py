"""
config.py -- Service configuration.

AppConfig.from_env() reads:
  FINCALC_HOST       (default 0.0.0.0)
  FINCALC_PORT       (default 5477)
  FINCALC_BASE_PATH  (default /financial/v1)
  FINCALC_RELOAD     (default false)
  LOG_LEVEL          (default INFO)
  LOG_FORMAT         (default standard; "standard" or "json")

The engine itself takes no configuration: every calculator receives its
inputs as plain arguments on each call.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field

from app.exceptions import ConfigurationError

LOG_FORMATS = ("standard", "json")


@dataclass
class ServerConfig:
    """uvicorn bind settings."""

    host: str = "0.0.0.0"
    port: int = 5477
    reload: bool = False


@dataclass
class LoggingConfig:
    level: str = "INFO"
    format_type: str = "standard"


@dataclass
class AppConfig:
    """Main configuration for the calculators service."""

    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    base_path: str = "/financial/v1"

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create config from environment variables."""
        port_str = os.getenv("FINCALC_PORT", "5477")
        try:
            port = int(port_str)
        except ValueError:
            raise ConfigurationError(f"FINCALC_PORT must be an integer, got {port_str!r}")
        if not 0 < port < 65536:
            raise ConfigurationError(f"FINCALC_PORT out of range: {port}")

        format_type = os.getenv("LOG_FORMAT", "standard").lower()
        if format_type not in LOG_FORMATS:
            raise ConfigurationError(
                f"LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}, got {format_type!r}"
            )

        base_path = os.getenv("FINCALC_BASE_PATH", "/financial/v1").rstrip("/")
        if base_path and not base_path.startswith("/"):
            base_path = "/" + base_path

        return cls(
            server=ServerConfig(
                host=os.getenv("FINCALC_HOST", "0.0.0.0"),
                port=port,
                reload=os.getenv("FINCALC_RELOAD", "false").lower() == "true",
            ),
            logging=LoggingConfig(
                level=os.getenv("LOG_LEVEL", "INFO"),
                format_type=format_type,
            ),
            base_path=base_path,
        )
