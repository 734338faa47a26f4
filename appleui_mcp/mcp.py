"""
Protocol server instances and their client connections.

An ``McpServer`` wires the tool, resource and prompt catalogs into a
dispatcher and processor. Transports create servers and attach one
``ServerConnection`` per client; the stateful transport keeps connections
alive across requests, the stateless one throws both away after each POST.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from appleui_mcp.config import ServerConfig, default_config
from appleui_mcp.dispatcher import MethodDispatcher
from appleui_mcp.processor import Reply, RequestProcessor
from appleui_mcp.protocol import valid_id

logger = logging.getLogger(__name__)

SessionIdGenerator = Callable[[], str]
SessionInitializedCallback = Callable[[str, "ServerConnection"], None]


class ConnectionClosedError(RuntimeError):
    """Raised when a request reaches a connection that has already been closed."""


def _initialize_ids(body: Any) -> List[Any]:
    messages = body if isinstance(body, list) else [body]
    return [
        raw["id"]
        for raw in messages
        if isinstance(raw, dict) and raw.get("method") == "initialize" and "id" in raw and valid_id(raw["id"])
    ]


def _initialize_succeeded(body: Any, reply: Reply) -> bool:
    ids = _initialize_ids(body)
    if not ids or reply is None:
        return False
    replies = reply if isinstance(reply, list) else [reply]
    return any("result" in item and item.get("id") in ids for item in replies)


class ServerConnection:
    """One client attached to an ``McpServer``."""

    def __init__(
        self,
        server: "McpServer",
        *,
        session_id_generator: Optional[SessionIdGenerator] = None,
        on_session_initialized: Optional[SessionInitializedCallback] = None,
    ) -> None:
        self.server = server
        self.session_id: Optional[str] = None
        self.closed = False
        self._session_id_generator = session_id_generator
        self._on_session_initialized = on_session_initialized

    async def handle(self, body: Any, *, request_id: Optional[str] = None) -> Reply:
        if self.closed:
            raise ConnectionClosedError("Connection is closed")
        reply = await self.server.processor.process(body, request_id=request_id)
        if (
            self.session_id is None
            and self._session_id_generator is not None
            and _initialize_succeeded(body, reply)
        ):
            self.session_id = self._session_id_generator()
            logger.info(
                "mcp session initialized session_id=%s request_id=%s",
                self.session_id,
                request_id,
                extra={"request_id": request_id, "session_id": self.session_id},
            )
            if self._on_session_initialized is not None:
                self._on_session_initialized(self.session_id, self)
        return reply

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self.server.detach(self)
        logger.debug("mcp connection closed session_id=%s", self.session_id, extra={"session_id": self.session_id})


class McpServer:
    def __init__(self, config: ServerConfig = default_config, dispatcher: Optional[MethodDispatcher] = None) -> None:
        self.config = config
        self.dispatcher = dispatcher or MethodDispatcher(config=config)
        self.processor = RequestProcessor(self.dispatcher)
        self.closed = False
        self._connections: List[ServerConnection] = []

    def connect(
        self,
        *,
        session_id_generator: Optional[SessionIdGenerator] = None,
        on_session_initialized: Optional[SessionInitializedCallback] = None,
    ) -> ServerConnection:
        if self.closed:
            raise ConnectionClosedError("Server is closed")
        connection = ServerConnection(
            self,
            session_id_generator=session_id_generator,
            on_session_initialized=on_session_initialized,
        )
        self._connections.append(connection)
        return connection

    def detach(self, connection: ServerConnection) -> None:
        if connection in self._connections:
            self._connections.remove(connection)

    @property
    def connections(self) -> List[ServerConnection]:
        return list(self._connections)

    def close(self) -> None:
        """Close every attached connection; safe to call more than once."""
        if self.closed:
            return
        for connection in list(self._connections):
            connection.close()
        self.closed = True


def create_server(config: ServerConfig = default_config) -> McpServer:
    return McpServer(config)
