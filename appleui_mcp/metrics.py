"""Minimal in-process metrics recorder (not suitable for multi-process aggregation)."""

from __future__ import annotations

from collections import Counter, OrderedDict
from threading import Lock
from typing import Dict

RECENT_DURATIONS_LIMIT = 200


class MetricsRecorder:
    def __init__(self, recent_limit: int = RECENT_DURATIONS_LIMIT) -> None:
        self._lock = Lock()
        self._requests = 0
        self._recent_limit = recent_limit
        self._request_durations_ms: OrderedDict[str, float] = OrderedDict()
        self._rpc_methods: Counter[str] = Counter()
        self._rpc_errors: Counter[str] = Counter()
        self._tool_success: Counter[str] = Counter()
        self._tool_error: Counter[str] = Counter()
        self._auth_failures = 0
        self._sessions_opened = 0
        self._sessions_closed = 0

    def incr_request(self) -> None:
        with self._lock:
            self._requests += 1

    def record_duration(self, request_id: str, duration_ms: float) -> None:
        with self._lock:
            self._request_durations_ms[request_id] = duration_ms
            while len(self._request_durations_ms) > self._recent_limit:
                self._request_durations_ms.popitem(last=False)

    def record_rpc(self, method: str, *, error_code: int | None = None) -> None:
        with self._lock:
            self._rpc_methods[method] += 1
            if error_code is not None:
                self._rpc_errors[str(error_code)] += 1

    def record_tool(self, tool: str, *, success: bool) -> None:
        with self._lock:
            if success:
                self._tool_success[tool] += 1
            else:
                self._tool_error[tool] += 1

    def incr_auth_failure(self) -> None:
        with self._lock:
            self._auth_failures += 1

    def incr_session_opened(self) -> None:
        with self._lock:
            self._sessions_opened += 1

    def incr_session_closed(self) -> None:
        with self._lock:
            self._sessions_closed += 1

    def snapshot(self) -> Dict[str, object]:
        with self._lock:
            return {
                "requests": self._requests,
                "rpc_methods": dict(self._rpc_methods),
                "rpc_errors": dict(self._rpc_errors),
                "tool_success": dict(self._tool_success),
                "tool_error": dict(self._tool_error),
                "auth_failures": self._auth_failures,
                "sessions_opened": self._sessions_opened,
                "sessions_closed": self._sessions_closed,
                "recent_request_durations_ms": dict(self._request_durations_ms),
            }

    def reset(self) -> None:
        with self._lock:
            self._requests = 0
            self._request_durations_ms.clear()
            self._rpc_methods.clear()
            self._rpc_errors.clear()
            self._tool_success.clear()
            self._tool_error.clear()
            self._auth_failures = 0
            self._sessions_opened = 0
            self._sessions_closed = 0


default_metrics = MetricsRecorder()
