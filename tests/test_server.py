import asyncio
import sys
from pathlib import Path

from mcp.server.fastmcp import FastMCP

from calc_mcp_server.server import INSTRUCTIONS, mcp, set_server_version

REPO_ROOT = Path(__file__).resolve().parents[1]


def test_server_info():
    options = mcp._mcp_server.create_initialization_options()
    assert options.server_name == "calc-mcp"
    assert options.server_version == "0.1.0"
    assert options.instructions == INSTRUCTIONS
    assert "calculator" in options.instructions
    assert options.capabilities.tools is not None


def test_set_server_version_on_fresh_server():
    server = set_server_version(FastMCP("other"), "9.8.7")
    options = server._mcp_server.create_initialization_options()
    assert options.server_name == "other"
    assert options.server_version == "9.8.7"


def test_exposes_single_calculate_tool():
    tools = asyncio.run(mcp.list_tools())
    assert len(tools) == 1
    assert tools[0].name == "calculate"
    assert "evaluate a mathematical expression" in tools[0].description


def test_http_app_answers_cors_preflight():
    from starlette.testclient import TestClient
    from calc_mcp_server.main_http import app

    client = TestClient(app)
    rsp = client.options(
        "/mcp",
        headers={"Origin": "http://example.com", "Access-Control-Request-Method": "POST"},
    )
    assert rsp.status_code == 200
    assert rsp.headers["access-control-allow-origin"] == "*"


# ---------- end to end over stdio ----------
async def _stdio_session():
    from mcp import ClientSession, StdioServerParameters
    from mcp.client.stdio import stdio_client

    params = StdioServerParameters(
        command=sys.executable,
        args=["-m", "calc_mcp_server"],
        cwd=str(REPO_ROOT),
        env={"CALC_TRANSPORT": "stdio", "CALC_LOG_LEVEL": "WARNING", "PYTHONPATH": str(REPO_ROOT)},
    )
    async with stdio_client(params) as (read, write):
        async with ClientSession(read, write) as session:
            init = await session.initialize()
            tools = await session.list_tools()
            ok = await session.call_tool("calculate", {"expression": "2 + 3 * 4"})
            bad = await session.call_tool("calculate", {"expression": "1 / 0"})
            return init, tools, ok, bad


def test_stdio_round_trip():
    init, tools, ok, bad = asyncio.run(asyncio.wait_for(_stdio_session(), timeout=30))

    assert init.serverInfo.name == "calc-mcp"
    assert init.serverInfo.version == "0.1.0"
    assert [t.name for t in tools.tools] == ["calculate"]

    assert not ok.isError
    assert ok.content[0].type == "text"
    assert ok.content[0].text == "Result: 14"

    assert bad.isError
    assert "Calculation error: division by zero" in bad.content[0].text
