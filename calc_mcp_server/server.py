from __future__ import annotations
import logging
from mcp.server.fastmcp import FastMCP

from . import __version__
from .config import SETTINGS, configure_logging
from .tools.math_tools import register_math_tools

logger = logging.getLogger("calc_mcp")

INSTRUCTIONS = (
    "MCP server providing a calculator. Send an arithmetic expression to the "
    "`calculate` tool and it returns the computed result. Supports + - * / ^, "
    "parentheses, sqrt, abs, sin, cos, tan and ln."
)


def set_server_version(server: FastMCP, version: str) -> FastMCP:
    # FastMCP 1.x takes no version argument and otherwise announces the
    # installed mcp package version in its initialize response
    server._mcp_server.version = version
    return server


mcp = set_server_version(FastMCP(SETTINGS.server_name, instructions=INSTRUCTIONS), __version__)

# ---------- TOOLS ----------
register_math_tools(mcp, SETTINGS.engine_limits())


def main() -> None:
    configure_logging(SETTINGS.log_level)
    logger.info(
        "Starting %s %s (transport=%s, max_expression_length=%d)",
        SETTINGS.server_name, __version__, SETTINGS.transport, SETTINGS.max_expression_length,
    )
    if SETTINGS.transport != "stdio":
        mcp.settings.host = SETTINGS.http_host
        mcp.settings.port = SETTINGS.http_port
    mcp.run(transport=SETTINGS.transport)


if __name__ == "__main__":
    main()
