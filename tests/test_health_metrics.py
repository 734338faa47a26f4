from appleui_mcp.metrics import MetricsRecorder, default_metrics


def test_health(stateless_client):
    resp = stateless_client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "name": "appleui-mcp", "version": "1.0.0"}


def test_request_id_and_cors_on_every_response(stateless_client):
    for resp in (
        stateless_client.get("/health"),
        stateless_client.post("/mcp", json={"jsonrpc": "2.0", "method": "ping", "id": 1}),
        stateless_client.put("/mcp"),
    ):
        assert resp.headers["X-Request-ID"]
        assert resp.headers["Access-Control-Allow-Origin"] == "*"
        assert resp.headers["Access-Control-Allow-Headers"] == "Content-Type, Authorization, mcp-session-id"
        assert resp.headers["Access-Control-Expose-Headers"] == "mcp-session-id"


def test_request_ids_are_unique(stateless_client):
    first = stateless_client.get("/health").headers["X-Request-ID"]
    second = stateless_client.get("/health").headers["X-Request-ID"]
    assert first != second


def test_metrics_snapshot(stateless_client):
    stateless_client.post(
        "/mcp",
        json={
            "jsonrpc": "2.0",
            "method": "tools/call",
            "params": {"name": "get_style_guide", "arguments": {"topic": "blur"}},
            "id": 1,
        },
    )
    data = stateless_client.get("/metrics").json()
    assert data["requests"] >= 1
    assert data["rpc_methods"]["tools/call"] == 1
    assert data["tool_success"] == {"get_style_guide": 1}
    assert data["recent_request_durations_ms"]


def test_metrics_reset():
    default_metrics.incr_auth_failure()
    default_metrics.reset()
    assert default_metrics.snapshot()["auth_failures"] == 0


def test_recent_durations_are_capped():
    recorder = MetricsRecorder(recent_limit=3)
    for index in range(5):
        recorder.record_duration(f"req-{index}", float(index))
    assert recorder.snapshot()["recent_request_durations_ms"] == {"req-2": 2.0, "req-3": 3.0, "req-4": 4.0}


def test_recent_durations_capped_through_app(stateless_client, monkeypatch):
    monkeypatch.setattr(default_metrics, "_recent_limit", 10)
    for index in range(25):
        stateless_client.post("/mcp", json={"jsonrpc": "2.0", "method": "ping", "id": index})
    assert len(default_metrics.snapshot()["recent_request_durations_ms"]) == 10
