import pytest

from appleui_mcp.auth import AllowAllValidator, AuthGate
from appleui_mcp.dispatcher import MethodDispatcher
from appleui_mcp.mcp import create_server
from appleui_mcp.sessions import InMemorySessionStore, Session
from appleui_mcp.transports import StatefulTransport

from conftest import make_config

INIT = {
    "jsonrpc": "2.0",
    "method": "initialize",
    "params": {"protocolVersion": "2024-11-05", "clientInfo": {"name": "test", "version": "0"}},
    "id": 1,
}


def _store(app):
    return app.state.transport.sessions


def test_initialize_issues_session(stateful_client, stateful_app):
    resp = stateful_client.post("/mcp", json=INIT)
    assert resp.status_code == 200
    session_id = resp.headers["mcp-session-id"]
    assert _store(stateful_app).get(session_id) is not None


def test_session_is_reused(stateful_client, stateful_app):
    session_id = stateful_client.post("/mcp", json=INIT).headers["mcp-session-id"]
    connection = _store(stateful_app).get(session_id).connection
    resp = stateful_client.post(
        "/mcp", json={"jsonrpc": "2.0", "method": "tools/list", "id": 2}, headers={"mcp-session-id": session_id}
    )
    assert resp.status_code == 200
    assert resp.headers["mcp-session-id"] == session_id
    assert len(resp.json()["result"]["tools"]) == 3
    assert _store(stateful_app).get(session_id).connection is connection


def test_request_without_handshake_gets_no_session(stateful_client, stateful_app):
    resp = stateful_client.post("/mcp", json={"jsonrpc": "2.0", "method": "ping", "id": 1})
    assert resp.status_code == 200
    assert resp.json()["result"] == {}
    assert "mcp-session-id" not in resp.headers
    assert len(_store(stateful_app)) == 0


def test_unknown_session_id_gets_fresh_connection(stateful_client, stateful_app):
    resp = stateful_client.post("/mcp", json=INIT, headers={"mcp-session-id": "stale"})
    assert resp.headers["mcp-session-id"] != "stale"


def test_failed_initialize_issues_no_session(stateful_client, stateful_app, monkeypatch):
    def broken_initialize(self, params, request_id):
        raise ValueError("handshake failed")

    monkeypatch.setattr(MethodDispatcher, "_initialize", broken_initialize)
    resp = stateful_client.post("/mcp", json=INIT)
    assert resp.json()["error"]["code"] == -32603
    assert "mcp-session-id" not in resp.headers
    assert len(_store(stateful_app)) == 0


def test_delete_known_and_unknown(stateful_client, stateful_app):
    session_id = stateful_client.post("/mcp", json=INIT).headers["mcp-session-id"]
    session = _store(stateful_app).get(session_id)
    resp = stateful_client.delete("/mcp", headers={"mcp-session-id": session_id})
    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    assert session.connection.closed is True
    again = stateful_client.delete("/mcp", headers={"mcp-session-id": session_id})
    assert again.status_code == 404
    assert again.json() == {"error": "Session not found"}
    assert stateful_client.delete("/mcp").status_code == 404


def test_get_without_session_emits_error_event(stateful_client):
    resp = stateful_client.get("/mcp")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/event-stream")
    assert resp.text == "event: error\ndata: No session\n\n"
    unknown = stateful_client.get("/mcp", headers={"mcp-session-id": "nope"})
    assert unknown.text == "event: error\ndata: No session\n\n"


class FakeRequest:
    """Reports a disconnect after ``polls`` checks."""

    def __init__(self, polls: int) -> None:
        self.polls = polls

    async def is_disconnected(self) -> bool:
        self.polls -= 1
        return self.polls < 0


def _transport_with_session(session_id="sid", store=None):
    config = make_config(transport="stateful")
    store = store if store is not None else InMemorySessionStore()
    transport = StatefulTransport(AuthGate(AllowAllValidator(), required=False), config, store)
    server = create_server(config)
    session = Session(id=session_id, connection=server.connect())
    transport.sessions.put(session)
    return transport, session


@pytest.mark.asyncio
async def test_stream_heartbeats_until_disconnect_then_cleans_up():
    transport, session = _transport_with_session()
    chunks = [chunk async for chunk in transport.event_stream(FakeRequest(polls=2), session)]
    assert chunks == [": connected\n\n", ": heartbeat\n\n", ": heartbeat\n\n"]
    assert transport.sessions.get("sid") is None
    assert session.connection.closed is True


@pytest.mark.asyncio
async def test_stream_closed_early_still_cleans_up():
    transport, session = _transport_with_session()
    stream = transport.event_stream(FakeRequest(polls=100), session)
    assert await stream.__anext__() == ": connected\n\n"
    await stream.aclose()
    assert transport.sessions.get("sid") is None


@pytest.mark.asyncio
async def test_transport_close_releases_sessions():
    transport, session = _transport_with_session()
    await transport.close()
    assert len(transport.sessions) == 0
    assert session.connection.server.closed is True


@pytest.mark.parametrize("bad_id", [[1], {"n": 1}])
def test_initialize_with_unhashable_id_is_invalid_request(stateful_client, stateful_app, bad_id):
    resp = stateful_client.post("/mcp", json={"jsonrpc": "2.0", "method": "initialize", "id": bad_id})
    assert resp.status_code == 200
    assert resp.json() == {"jsonrpc": "2.0", "error": {"code": -32600, "message": "Invalid request"}, "id": None}
    assert "mcp-session-id" not in resp.headers
    assert len(_store(stateful_app)) == 0


def test_initialize_with_float_id_issues_session(stateful_client, stateful_app):
    resp = stateful_client.post("/mcp", json={**INIT, "id": 2.5})
    assert resp.json()["id"] == 2.5
    assert _store(stateful_app).get(resp.headers["mcp-session-id"]) is not None


class StepClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class ClockedRequest(FakeRequest):
    """Advances ``clock`` by ``step`` seconds on every disconnect check."""

    def __init__(self, polls: int, clock: StepClock, step: float) -> None:
        super().__init__(polls)
        self.clock = clock
        self.step = step

    async def is_disconnected(self) -> bool:
        self.clock.now += self.step
        return await super().is_disconnected()


@pytest.mark.asyncio
async def test_open_stream_keeps_session_alive_past_ttl():
    clock = StepClock()
    transport, session = _transport_with_session(store=InMemorySessionStore(ttl=100, clock=clock))
    request = ClockedRequest(polls=4, clock=clock, step=60)
    chunks = [chunk async for chunk in transport.event_stream(request, session)]
    # 240 idle-clock seconds elapsed against a 100 second TTL.
    assert chunks == [": connected\n\n"] + [": heartbeat\n\n"] * 4
    assert session.connection.closed is True


class DeletingRequest(FakeRequest):
    """Removes the session from the store on the second disconnect check."""

    def __init__(self, transport: StatefulTransport, session_id: str) -> None:
        super().__init__(polls=100)
        self.transport = transport
        self.session_id = session_id
        self.checks = 0

    async def is_disconnected(self) -> bool:
        self.checks += 1
        if self.checks == 2:
            self.transport.sessions.delete(self.session_id)
        return await super().is_disconnected()


@pytest.mark.asyncio
async def test_stream_ends_when_session_is_deleted():
    transport, session = _transport_with_session()
    request = DeletingRequest(transport, "sid")
    chunks = [chunk async for chunk in transport.event_stream(request, session)]
    assert chunks == [": connected\n\n", ": heartbeat\n\n"]
    assert request.checks == 2
    assert session.connection.closed is True
