#!/usr/bin/env python3
"""
scripts/smoke_tools.py

Registers the math tools on a throwaway FastMCP server and calls `calculate`
through the server's own tool dispatch, printing each response or error.
"""

import sys
import asyncio
from pathlib import Path
from typing import Any

# ensure repo root is importable
sys.path.append(str(Path(__file__).resolve().parents[1]))

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from calc_mcp_server.tools.math_tools import register_math_tools

EXPRESSIONS = [
    "2 + 3 * 4",
    "(2 + 3) * 4",
    "2^3^2",
    "-2^2",
    "sqrt(25)",
    "3.14 * 2",
    "1 / 0",
    "sqrt(-1)",
    "foo(1)",
    "2 + 3; rm -rf /",
]


def build_mcp() -> FastMCP:
    mcp = FastMCP("tool-smoke")
    register_math_tools(mcp)
    return mcp


def _text(result: Any) -> str:
    # call_tool returns a content list, or (content, structured) on newer SDKs
    content = result[0] if isinstance(result, tuple) else result
    return "".join(getattr(c, "text", "") for c in content)


async def run_smoke():
    mcp = build_mcp()
    tools = await mcp.list_tools()
    print("tools:", [t.name for t in tools])

    for expr in EXPRESSIONS:
        try:
            out = _text(await mcp.call_tool("calculate", {"expression": expr}))
        except ToolError as e:
            out = f"[error] {e}"
        print(f"{expr!r:24} -> {out}")


def main():
    asyncio.run(run_smoke())


if __name__ == "__main__":
    main()
