"""FastAPI application exposing the Apple UI design tools over MCP."""

from __future__ import annotations

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from appleui_mcp.auth import AuthGate, build_validator
from appleui_mcp.config import SERVER_DESCRIPTION, ServerConfig, default_config
from appleui_mcp.metrics import default_metrics
from appleui_mcp.transports import ALLOWED_METHODS, SESSION_HEADER, SessionTransport, build_transport

logger = logging.getLogger(__name__)

LOG_EXTRAS = ("request_id", "method", "tool", "session_id", "error")
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": ALLOWED_METHODS,
    "Access-Control-Allow-Headers": f"Content-Type, Authorization, {SESSION_HEADER}",
    "Access-Control-Expose-Headers": SESSION_HEADER,
}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "message": record.getMessage(),
            "name": record.name,
        }
        for key in LOG_EXTRAS:
            if getattr(record, key, None) is not None:
                payload[key] = getattr(record, key)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(config: ServerConfig = default_config) -> None:
    level = getattr(logging, config.log_level.upper(), logging.INFO)
    if config.log_format.lower() == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        logging.basicConfig(level=level, handlers=[handler])
    else:
        logging.basicConfig(level=level)


configure_logging(default_config)


def create_app(
    config: ServerConfig = default_config,
    *,
    auth: Optional[AuthGate] = None,
    transport: Optional[SessionTransport] = None,
) -> FastAPI:
    auth_gate = auth or AuthGate(build_validator(config), required=config.require_api_key)
    mcp_transport = transport or build_transport(auth_gate, config)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        logger.info(
            "server starting transport=%s auth_required=%s",
            mcp_transport.name,
            auth_gate.required,
        )
        yield
        await mcp_transport.close()
        await auth_gate.aclose()

    app = FastAPI(
        title="Apple UI MCP Server",
        description=SERVER_DESCRIPTION,
        version=config.server_version,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.auth = auth_gate
    app.state.transport = mcp_transport

    @app.middleware("http")
    async def add_request_context(request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        start = time.time()
        default_metrics.incr_request()
        response = await call_next(request)
        duration_ms = (time.time() - start) * 1000
        default_metrics.record_duration(request_id, duration_ms)
        response.headers["X-Request-ID"] = request_id
        for header, value in CORS_HEADERS.items():
            response.headers[header] = value
        return response

    @app.get("/health")
    async def health() -> JSONResponse:
        """Lightweight health endpoint for monitoring."""
        return JSONResponse(content={"status": "ok", "name": config.server_name, "version": config.server_version})

    @app.get("/metrics")
    async def metrics() -> JSONResponse:
        """Return in-process metrics snapshot."""
        return JSONResponse(content=default_metrics.snapshot())

    @app.api_route("/mcp", methods=["GET", "POST", "DELETE", "OPTIONS", "PUT", "PATCH"])
    async def mcp_endpoint(request: Request) -> Response:
        return await mcp_transport.handle(request)

    return app


app = create_app(default_config)

# Run with: uvicorn appleui_mcp.server:app
