"""HTTP server for MCP with Streamable HTTP transport."""

import contextlib
import logging
import os
from collections.abc import AsyncIterator

from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from dns_lookup_mcp.server import NAMESPACE, TOOLS, create_server

logger = logging.getLogger(__name__)


class MCPEndpoint:
    """ASGI endpoint handing each request to the session manager."""

    def __init__(self, session_manager: StreamableHTTPSessionManager):
        self.session_manager = session_manager

    async def __call__(self, scope, receive, send):
        await self.session_manager.handle_request(scope, receive, send)


async def health(request: Request) -> JSONResponse:
    return JSONResponse({
        "status": "healthy",
        "namespace": NAMESPACE,
        "tools": [tool.name for tool in TOOLS],
    })


def create_http_server() -> Starlette:
    """Create the Starlette app serving the lookups over Streamable HTTP.

    Lookups hold no state between calls, so sessions are stateless.
    """
    session_manager = StreamableHTTPSessionManager(
        app=create_server(),
        json_response=False,  # Use SSE streaming
        stateless=True,
    )

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        async with session_manager.run():
            logger.info("MCP session manager started")
            yield
        logger.info("MCP session manager stopped")

    return Starlette(
        routes=[
            Route("/health", health, methods=["GET"]),
            Route("/mcp", MCPEndpoint(session_manager)),
        ],
        lifespan=lifespan,
    )


def main():
    """Run the HTTP server."""
    import uvicorn

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO"),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    host = os.getenv("MCP_HOST", "0.0.0.0")
    port = int(os.getenv("MCP_PORT", "8000"))

    logger.info(f"Starting DNS lookup MCP server on http://{host}:{port}/mcp")

    uvicorn.run(
        create_http_server(),
        host=host,
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
