"""
Configuration helpers for the Apple UI MCP server.

This module centralizes transport selection, protocol version negotiation,
API key loading, session lifetime and logging settings. No secrets are stored
in the repository; API keys are read from environment or a local file if
present.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

SERVER_NAME = "appleui-mcp"
SERVER_VERSION = "1.0.0"
SERVER_DESCRIPTION = "Apple UI/UX Design Guidelines MCP Server"

TRANSPORT_STATELESS = "stateless"
TRANSPORT_STATEFUL = "stateful"

DEFAULT_TRANSPORT = os.getenv("APPLEUI_MCP_TRANSPORT", TRANSPORT_STATELESS).strip().lower()
DEFAULT_PROTOCOL_VERSION = os.getenv("APPLEUI_MCP_PROTOCOL_VERSION", "2024-11-05")


def _parse_versions(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _load_float(env_var: str, default: float) -> float:
    raw_value = os.getenv(env_var)
    if raw_value:
        try:
            return float(raw_value)
        except ValueError:
            return default
    return default


def _load_bool(env_var: str, default: bool) -> bool:
    raw_value = os.getenv(env_var)
    if raw_value is None or not raw_value.strip():
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "y", "on"}


SUPPORTED_PROTOCOL_VERSIONS = _parse_versions(os.getenv("APPLEUI_MCP_SUPPORTED_VERSIONS")) or [
    "2024-11-05",
    "2024-10-07",
]

# API key handling
API_KEY_PREFIX = "appleui_sk_"
API_KEYS_ENV_VAR = "APPLEUI_API_KEYS"
API_KEYS_FILE_ENV_VAR = "APPLEUI_API_KEYS_FILE"
DEFAULT_API_KEYS_FILE = "apikeys.txt"
AUTH_URL = os.getenv("APPLEUI_AUTH_URL")
DEFAULT_AUTH_TIMEOUT = _load_float("APPLEUI_AUTH_TIMEOUT", 5.0)
REQUIRE_API_KEY = _load_bool("APPLEUI_MCP_REQUIRE_API_KEY", True)

# Session limits
DEFAULT_SESSION_TTL = _load_float("APPLEUI_MCP_SESSION_TTL", 3600.0)
DEFAULT_SSE_HEARTBEAT = _load_float("APPLEUI_MCP_SSE_HEARTBEAT", 15.0)

LOG_LEVEL = os.getenv("APPLEUI_MCP_LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("APPLEUI_MCP_LOG_FORMAT", "json")  # json or plain


def load_api_keys() -> List[str]:
    """
    Load accepted API keys from environment or a local file.

    The environment variable holds a comma-separated list; the file holds one
    key per line. Blank lines and ``#`` comments are ignored. Keys are never
    logged.
    """
    env_keys = os.getenv(API_KEYS_ENV_VAR)
    if env_keys:
        return [key.strip() for key in env_keys.split(",") if key.strip()]

    key_path = os.getenv(API_KEYS_FILE_ENV_VAR, DEFAULT_API_KEYS_FILE)
    if key_path:
        path = Path(key_path)
        if path.is_file():
            lines = path.read_text(encoding="utf-8").splitlines()
            return [line.strip() for line in lines if line.strip() and not line.strip().startswith("#")]

    return []


@dataclass(slots=True)
class ServerConfig:
    """Runtime configuration for the MCP endpoint."""

    transport: str = DEFAULT_TRANSPORT
    protocol_version: str = DEFAULT_PROTOCOL_VERSION
    supported_versions: List[str] = field(default_factory=lambda: list(SUPPORTED_PROTOCOL_VERSIONS))
    server_name: str = SERVER_NAME
    server_version: str = SERVER_VERSION
    require_api_key: bool = REQUIRE_API_KEY
    api_keys: List[str] = field(default_factory=load_api_keys)
    auth_url: Optional[str] = AUTH_URL
    auth_timeout: float = DEFAULT_AUTH_TIMEOUT
    session_ttl: float = DEFAULT_SESSION_TTL
    sse_heartbeat: float = DEFAULT_SSE_HEARTBEAT
    log_level: str = LOG_LEVEL
    log_format: str = LOG_FORMAT

    @property
    def stateful(self) -> bool:
        return self.transport == TRANSPORT_STATEFUL


default_config = ServerConfig()
