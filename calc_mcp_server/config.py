from __future__ import annotations

# =========================
# calc_mcp_server/config.py
# =========================
# - Loads environment variables (.env)
# - Configures logging (stderr, so stdio transport keeps stdout for JSON-RPC)
# - Exposes: SETTINGS (Settings), Settings.engine_limits() -> EngineLimits

import os
import logging
from dataclasses import dataclass, field

from dotenv import load_dotenv

from .engine.limits import MAX_EXPRESSION_LENGTH, EngineLimits

# -----------------------------
# Environment & base config
# -----------------------------
load_dotenv(override=True)

LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"
TRANSPORTS = ("stdio", "streamable-http", "sse")
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

logger = logging.getLogger("calc_mcp.config")


def _env(name: str, default: str):
    return field(default_factory=lambda: os.getenv(name, default))


def _env_int(name: str, default: int):
    def _read() -> int:
        raw = os.getenv(name, str(default))
        try:
            return int(raw)
        except ValueError:
            raise EnvironmentError(f"{name} must be an integer, got {raw!r}") from None
    return field(default_factory=_read)


# -----------------------------
# Settings (centralized env)
# -----------------------------
@dataclass
class Settings:
    # Name announced in the MCP initialize response
    server_name: str = _env("CALC_SERVER_NAME", "calc-mcp")

    # MCP transport: "stdio" | "streamable-http" | "sse"
    transport: str = _env("CALC_TRANSPORT", "stdio")

    log_level: str = _env("CALC_LOG_LEVEL", "INFO")

    # Only used by main_http / the HTTP transports
    http_host: str = _env("CALC_HTTP_HOST", "127.0.0.1")
    http_port: int = _env_int("CALC_HTTP_PORT", 8000)

    # Engine limits; the forbidden characters and function whitelist are fixed
    max_expression_length: int = _env_int("CALC_MAX_EXPRESSION_LENGTH", MAX_EXPRESSION_LENGTH)

    def validate(self) -> "Settings":
        if self.transport not in TRANSPORTS:
            raise EnvironmentError(
                f"Unknown CALC_TRANSPORT '{self.transport}'. Use: {' | '.join(TRANSPORTS)}"
            )
        if self.log_level.upper() not in LOG_LEVELS:
            raise EnvironmentError(
                f"Unknown CALC_LOG_LEVEL '{self.log_level}'. Use: {' | '.join(LOG_LEVELS)}"
            )
        if self.max_expression_length <= 0:
            raise EnvironmentError("CALC_MAX_EXPRESSION_LENGTH must be positive.")
        return self

    def engine_limits(self) -> EngineLimits:
        return EngineLimits(max_expression_length=self.max_expression_length)


def configure_logging(level: str = "INFO") -> None:
    """basicConfig on stderr; a no-op once the root logger has handlers."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("calc_mcp").setLevel(level.upper())


SETTINGS = Settings().validate()
