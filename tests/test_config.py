from appleui_mcp.config import (
    ServerConfig,
    _load_bool,
    _load_float,
    _parse_versions,
    load_api_keys,
)


def test_load_float_invalid_env(monkeypatch):
    monkeypatch.setenv("APPLEUI_MCP_SESSION_TTL", "not-a-number")
    assert _load_float("APPLEUI_MCP_SESSION_TTL", 3600.0) == 3600.0  # falls back to default on parse error


def test_load_float_valid_env(monkeypatch):
    monkeypatch.setenv("APPLEUI_MCP_SESSION_TTL", "90.5")
    assert _load_float("APPLEUI_MCP_SESSION_TTL", 3600.0) == 90.5


def test_load_bool(monkeypatch):
    monkeypatch.setenv("APPLEUI_MCP_REQUIRE_API_KEY", "false")
    assert _load_bool("APPLEUI_MCP_REQUIRE_API_KEY", True) is False
    monkeypatch.setenv("APPLEUI_MCP_REQUIRE_API_KEY", "YES")
    assert _load_bool("APPLEUI_MCP_REQUIRE_API_KEY", False) is True
    monkeypatch.setenv("APPLEUI_MCP_REQUIRE_API_KEY", " ")
    assert _load_bool("APPLEUI_MCP_REQUIRE_API_KEY", True) is True


def test_parse_versions():
    assert _parse_versions(" 2024-11-05 , ,2024-10-07,") == ["2024-11-05", "2024-10-07"]
    assert _parse_versions(None) == []


def test_load_api_keys_env_over_file(monkeypatch, tmp_path):
    # Env var wins over file
    key_file = tmp_path / "apikeys.txt"
    key_file.write_text("appleui_sk_file\n", encoding="utf-8")
    monkeypatch.setenv("APPLEUI_API_KEYS", "appleui_sk_a, appleui_sk_b")
    monkeypatch.setenv("APPLEUI_API_KEYS_FILE", str(key_file))
    assert load_api_keys() == ["appleui_sk_a", "appleui_sk_b"]


def test_load_api_keys_from_file(monkeypatch, tmp_path):
    key_file = tmp_path / "apikeys.txt"
    key_file.write_text("# team keys\nappleui_sk_one\n\n  appleui_sk_two  \n", encoding="utf-8")
    monkeypatch.delenv("APPLEUI_API_KEYS", raising=False)
    monkeypatch.setenv("APPLEUI_API_KEYS_FILE", str(key_file))
    assert load_api_keys() == ["appleui_sk_one", "appleui_sk_two"]


def test_load_api_keys_missing_file(monkeypatch, tmp_path):
    monkeypatch.delenv("APPLEUI_API_KEYS", raising=False)
    monkeypatch.setenv("APPLEUI_API_KEYS_FILE", str(tmp_path / "absent.txt"))
    assert load_api_keys() == []


def test_server_config_defaults():
    cfg = ServerConfig(api_keys=[])
    assert cfg.protocol_version == "2024-11-05"
    assert "2024-10-07" in cfg.supported_versions
    assert cfg.server_name == "appleui-mcp"
    assert ServerConfig(transport="stateful", api_keys=[]).stateful is True
    assert ServerConfig(transport="stateless", api_keys=[]).stateful is False
