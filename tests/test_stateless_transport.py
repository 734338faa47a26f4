from appleui_mcp import transports
from appleui_mcp.mcp import McpServer


def test_ping(stateless_client):
    resp = stateless_client.post("/mcp", json={"jsonrpc": "2.0", "method": "ping", "id": 1})
    assert resp.status_code == 200
    assert resp.json() == {"jsonrpc": "2.0", "result": {}, "id": 1}


def test_unknown_tool(stateless_client):
    resp = stateless_client.post(
        "/mcp", json={"jsonrpc": "2.0", "method": "tools/call", "params": {"name": "bogus"}, "id": 2}
    )
    body = resp.json()
    assert resp.status_code == 200
    assert body["id"] == 2
    assert body["error"]["code"] == -32601


def test_batch_with_notification(stateless_client):
    resp = stateless_client.post(
        "/mcp",
        json=[{"jsonrpc": "2.0", "method": "ping", "id": 1}, {"jsonrpc": "2.0", "method": "initialized"}],
    )
    assert resp.status_code == 200
    assert resp.json() == [{"jsonrpc": "2.0", "result": {}, "id": 1}]


def test_single_notification_is_204(stateless_client):
    resp = stateless_client.post("/mcp", json={"jsonrpc": "2.0", "method": "notifications/initialized"})
    assert resp.status_code == 204
    assert resp.content == b""


def test_malformed_json_is_500(stateless_client):
    resp = stateless_client.post("/mcp", content=b"{not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 500
    body = resp.json()
    assert body["error"]["code"] == -32603
    assert body["id"] is None


def test_session_header_is_ignored(stateless_client):
    resp = stateless_client.post(
        "/mcp",
        json={"jsonrpc": "2.0", "method": "initialize", "params": {"protocolVersion": "2024-11-05"}, "id": 1},
        headers={"mcp-session-id": "whatever"},
    )
    assert resp.status_code == 200
    assert "mcp-session-id" not in resp.headers


def test_get_returns_metadata(stateless_client):
    resp = stateless_client.get("/mcp")
    assert resp.json() == {
        "name": "appleui-mcp",
        "version": "1.0.0",
        "description": "Apple UI/UX Design Guidelines MCP Server",
        "capabilities": ["tools", "resources", "prompts"],
    }


def test_delete_is_success(stateless_client):
    assert stateless_client.delete("/mcp").json() == {"success": True}


def test_options_preflight(stateless_client):
    resp = stateless_client.options("/mcp")
    assert resp.status_code == 204
    assert resp.headers["Access-Control-Allow-Origin"] == "*"
    assert resp.headers["Access-Control-Allow-Methods"] == "GET, POST, DELETE, OPTIONS"


def test_unsupported_verb_is_405(stateless_client):
    resp = stateless_client.put("/mcp", json={})
    assert resp.status_code == 405
    assert resp.json() == {"error": "Method not allowed"}
    assert resp.headers["Allow"] == "GET, POST, DELETE, OPTIONS"


def test_server_torn_down_after_each_request(stateless_client, monkeypatch):
    created = []
    real_create_server = transports.create_server

    def tracking_create_server(config):
        server = real_create_server(config)
        created.append(server)
        return server

    monkeypatch.setattr(transports, "create_server", tracking_create_server)
    stateless_client.post("/mcp", json={"jsonrpc": "2.0", "method": "ping", "id": 1})
    stateless_client.post("/mcp", json={"jsonrpc": "2.0", "method": "ping", "id": 2})
    assert len(created) == 2
    assert all(isinstance(server, McpServer) and server.closed for server in created)


def test_escaped_exception_still_tears_down(stateless_client, monkeypatch):
    created = []
    real_create_server = transports.create_server

    def broken_create_server(config):
        server = real_create_server(config)
        created.append(server)

        async def explode(body, *, request_id=None):
            raise RuntimeError("processor crashed")

        server.processor.process = explode
        return server

    monkeypatch.setattr(transports, "create_server", broken_create_server)
    resp = stateless_client.post("/mcp", json={"jsonrpc": "2.0", "method": "ping", "id": 1})
    assert resp.status_code == 500
    assert resp.json() == {"jsonrpc": "2.0", "error": {"code": -32603, "message": "processor crashed"}, "id": None}
    assert created[0].closed is True
