"""
HTTP session transports for the ``/mcp`` endpoint.

``StatelessTransport`` builds a fresh protocol server for every POST and tears
it down afterwards. ``StatefulTransport`` issues an ``mcp-session-id`` on a
successful ``initialize`` and keeps that connection alive until the client
deletes it, its event stream disconnects, or it sits idle past the TTL.
"""

from __future__ import annotations

import asyncio
import json
import logging
import uuid
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse, Response, StreamingResponse

from appleui_mcp.auth import AuthGate
from appleui_mcp.config import SERVER_DESCRIPTION, ServerConfig, default_config
from appleui_mcp.mcp import ServerConnection, create_server
from appleui_mcp.processor import Reply
from appleui_mcp.protocol import INTERNAL_ERROR, error_payload
from appleui_mcp.sessions import InMemorySessionStore, Session, SessionStore

logger = logging.getLogger(__name__)

SESSION_HEADER = "mcp-session-id"
ALLOWED_METHODS = "GET, POST, DELETE, OPTIONS"
NO_SESSION_EVENT = "event: error\ndata: No session\n\n"


class BodyParseError(Exception):
    """The request body is not valid JSON."""


async def read_json_body(request: Request) -> Any:
    raw = await request.body()
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise BodyParseError(str(exc)) from exc


def internal_error_response(message: str, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content=error_payload(None, INTERNAL_ERROR, message or "Internal error"),
        headers=headers,
    )


def reply_response(reply: Reply, headers: Optional[Dict[str, str]] = None) -> Response:
    if reply is None:
        return Response(status_code=204, headers=headers)
    return JSONResponse(content=reply, headers=headers)


class SessionTransport:
    """Verb routing shared by both transports; subclasses provide POST/GET/DELETE."""

    name = "base"

    def __init__(self, auth: AuthGate, config: ServerConfig = default_config) -> None:
        self.auth = auth
        self.config = config

    async def handle(self, request: Request) -> Response:
        verb = request.method.upper()
        if verb == "POST":
            return await self.handle_post(request)
        if verb == "GET":
            return await self.handle_get(request)
        if verb == "DELETE":
            return await self.handle_delete(request)
        if verb == "OPTIONS":
            return Response(status_code=204)
        return JSONResponse(status_code=405, content={"error": "Method not allowed"}, headers={"Allow": ALLOWED_METHODS})

    async def handle_post(self, request: Request) -> Response:
        raise NotImplementedError

    async def handle_get(self, request: Request) -> Response:
        raise NotImplementedError

    async def handle_delete(self, request: Request) -> Response:
        raise NotImplementedError

    async def close(self) -> None:
        return None

    async def _authorize_and_parse(self, request: Request) -> Any:
        """Return the decoded body, or the ``Response`` to send instead."""
        verdict = await self.auth.check(request)
        if isinstance(verdict, Response):
            return verdict
        try:
            return await read_json_body(request)
        except BodyParseError as exc:
            request_id = getattr(request.state, "request_id", None)
            logger.warning(
                "mcp outcome=parse_error error=%s request_id=%s",
                exc,
                request_id,
                extra={"request_id": request_id, "error": str(exc)},
            )
            return internal_error_response(str(exc))

    async def _run(self, connection: ServerConnection, body: Any, request: Request) -> Reply:
        request_id = getattr(request.state, "request_id", None)
        return await connection.handle(body, request_id=request_id)

    def _log_failure(self, request: Request, exc: Exception) -> None:
        request_id = getattr(request.state, "request_id", None)
        logger.exception(
            "mcp outcome=transport_error transport=%s request_id=%s",
            self.name,
            request_id,
            extra={"request_id": request_id, "error": str(exc)},
        )


class StatelessTransport(SessionTransport):
    name = "stateless"

    async def handle_post(self, request: Request) -> Response:
        body = await self._authorize_and_parse(request)
        if isinstance(body, Response):
            return body

        server = create_server(self.config)
        connection = server.connect()
        try:
            reply = await self._run(connection, body, request)
        except Exception as exc:
            self._log_failure(request, exc)
            return internal_error_response(str(exc))
        finally:
            connection.close()
            server.close()
        return reply_response(reply)

    async def handle_get(self, request: Request) -> Response:
        return JSONResponse(
            content={
                "name": self.config.server_name,
                "version": self.config.server_version,
                "description": SERVER_DESCRIPTION,
                "capabilities": ["tools", "resources", "prompts"],
            }
        )

    async def handle_delete(self, request: Request) -> Response:
        return JSONResponse(content={"success": True})


class StatefulTransport(SessionTransport):
    name = "stateful"

    def __init__(
        self,
        auth: AuthGate,
        config: ServerConfig = default_config,
        sessions: Optional[SessionStore] = None,
    ) -> None:
        super().__init__(auth, config)
        self.sessions: SessionStore = sessions if sessions is not None else InMemorySessionStore(config.session_ttl)

    def _register(self, session_id: str, connection: ServerConnection) -> None:
        self.sessions.put(Session(id=session_id, connection=connection))

    async def handle_post(self, request: Request) -> Response:
        body = await self._authorize_and_parse(request)
        if isinstance(body, Response):
            return body

        session_id = request.headers.get(SESSION_HEADER)
        session = self.sessions.get(session_id) if session_id else None
        if session is not None:
            connection = session.connection
            fresh = False
        else:
            server = create_server(self.config)
            connection = server.connect(
                session_id_generator=lambda: str(uuid.uuid4()),
                on_session_initialized=self._register,
            )
            fresh = True

        try:
            reply = await self._run(connection, body, request)
        except Exception as exc:
            self._log_failure(request, exc)
            return internal_error_response(str(exc))
        finally:
            # A new connection only survives the request if it completed the handshake.
            if fresh and connection.session_id is None:
                connection.close()
                connection.server.close()

        headers = {SESSION_HEADER: connection.session_id} if connection.session_id else None
        return reply_response(reply, headers)

    async def handle_get(self, request: Request) -> Response:
        session_id = request.headers.get(SESSION_HEADER)
        session = self.sessions.get(session_id) if session_id else None
        if session is None:
            return StreamingResponse(self._no_session_stream(), media_type="text/event-stream")
        return StreamingResponse(
            self.event_stream(request, session),
            media_type="text/event-stream",
            headers={"Cache-Control": "no-cache", SESSION_HEADER: session.id},
        )

    async def _no_session_stream(self) -> AsyncIterator[str]:
        yield NO_SESSION_EVENT

    async def event_stream(self, request: Request, session: Session) -> AsyncIterator[str]:
        """Hold the stream open with heartbeat comments; the session ends with it."""
        logger.info("mcp stream opened session_id=%s", session.id, extra={"session_id": session.id})
        try:
            yield ": connected\n\n"
            while not await request.is_disconnected():
                await asyncio.sleep(self.config.sse_heartbeat)
                # Lookup refreshes last_seen; a session deleted or expired elsewhere ends the stream.
                if self.sessions.get(session.id) is not session:
                    break
                yield ": heartbeat\n\n"
        finally:
            logger.info("mcp stream closed session_id=%s", session.id, extra={"session_id": session.id})
            if self.sessions.get(session.id) is session:
                self.sessions.delete(session.id)

    async def handle_delete(self, request: Request) -> Response:
        session_id = request.headers.get(SESSION_HEADER)
        if not session_id or self.sessions.delete(session_id) is None:
            return JSONResponse(status_code=404, content={"error": "Session not found"})
        logger.info("mcp session deleted session_id=%s", session_id, extra={"session_id": session_id})
        return JSONResponse(content={"success": True})

    async def close(self) -> None:
        for session_id, _session in self.sessions.items():
            self.sessions.delete(session_id)


def build_transport(auth: AuthGate, config: ServerConfig = default_config) -> SessionTransport:
    if config.stateful:
        return StatefulTransport(auth, config)
    return StatelessTransport(auth, config)
