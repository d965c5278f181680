from __future__ import annotations
import contextlib
import uvicorn
from starlette.applications import Starlette
from starlette.middleware.cors import CORSMiddleware
from starlette.routing import Mount

from .config import SETTINGS, configure_logging
from .server import mcp

starlette_app = mcp.streamable_http_app()


@contextlib.asynccontextmanager
async def lifespan(app: Starlette):
    # mounted apps don't get their own lifespan run
    async with mcp.session_manager.run():
        yield


app = Starlette(routes=[Mount("/", app=starlette_app)], lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET","POST","DELETE"],
    expose_headers=["Mcp-Session-Id"],
)


if __name__ == "__main__":
    configure_logging(SETTINGS.log_level)
    uvicorn.run(app, host=SETTINGS.http_host, port=SETTINGS.http_port)
