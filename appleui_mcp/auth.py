"""
API key authentication for the MCP endpoint.

Keys are presented as ``Authorization: Bearer <key>``. Validation is delegated
to a pluggable validator: a static key list (hashed at load), an external HTTP
validation service, or allow-all when authentication is disabled. Usage
recording never blocks or fails a request.
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Protocol, Set, Union

import httpx
from fastapi import Request
from fastapi.responses import JSONResponse

from appleui_mcp.config import API_KEY_PREFIX, ServerConfig, default_config
from appleui_mcp.metrics import default_metrics
from appleui_mcp.protocol import INVALID_CREDENTIAL, MISSING_CREDENTIAL, error_payload

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "API key required. Include Authorization: Bearer YOUR_API_KEY header."
VALIDATION_FAILED_MESSAGE = "API key validation failed"
INVALID_KEY_MESSAGE = "Invalid or expired API key"


@dataclass(slots=True)
class ApiKeyValidationResult:
    valid: bool
    user_id: Optional[str] = None
    api_key_id: Optional[str] = None
    error: Optional[str] = None


class AuthValidationError(Exception):
    """The validator could not reach a verdict (as opposed to rejecting the key)."""


class KeyValidator(Protocol):
    async def validate(self, key: str) -> ApiKeyValidationResult:
        ...

    async def record_usage(self, api_key_id: str) -> None:
        ...


def hash_api_key(key: str) -> str:
    return hashlib.sha256(key.encode("utf-8")).hexdigest()


def extract_bearer(request: Request) -> Optional[str]:
    header = request.headers.get("authorization")
    if not header:
        return None
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    token = token.strip()
    return token or None


class AllowAllValidator:
    async def validate(self, key: str) -> ApiKeyValidationResult:
        return ApiKeyValidationResult(valid=True)

    async def record_usage(self, api_key_id: str) -> None:
        return None


class StaticKeyValidator:
    """Validate against a fixed key list; only SHA-256 hashes are kept in memory."""

    def __init__(self, keys: Iterable[str], *, prefix: str = API_KEY_PREFIX) -> None:
        self.prefix = prefix
        self._hashes: Set[str] = {hash_api_key(key) for key in keys if key}
        self.usage: Counter[str] = Counter()

    async def validate(self, key: str) -> ApiKeyValidationResult:
        if not key or not key.startswith(self.prefix):
            return ApiKeyValidationResult(valid=False, error="Invalid API key format")
        key_hash = hash_api_key(key)
        if key_hash not in self._hashes:
            return ApiKeyValidationResult(valid=False, error="API key not found or revoked")
        return ApiKeyValidationResult(valid=True, api_key_id=key_hash[:16])

    async def record_usage(self, api_key_id: str) -> None:
        self.usage[api_key_id] += 1


class HttpKeyValidator:
    """
    Validate keys against an external service.

    ``POST {auth_url}/validate`` with ``{"apiKey": key}`` must answer
    ``{"valid": bool, "userId"?, "apiKeyId"?, "error"?}``. Usage is reported to
    ``POST {auth_url}/usage``. Transport failures and 5xx answers raise
    ``AuthValidationError``.
    """

    def __init__(
        self,
        auth_url: str,
        *,
        timeout: float = 5.0,
        async_client: Optional[httpx.AsyncClient] = None,
        prefix: str = API_KEY_PREFIX,
    ) -> None:
        self.auth_url = auth_url.rstrip("/")
        self.timeout = timeout
        self.prefix = prefix
        self._client: Optional[httpx.AsyncClient] = async_client
        self._owns_client = async_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None

    async def validate(self, key: str) -> ApiKeyValidationResult:
        if not key or not key.startswith(self.prefix):
            return ApiKeyValidationResult(valid=False, error="Invalid API key format")
        client = await self._get_client()
        try:
            response = await client.post(f"{self.auth_url}/validate", json={"apiKey": key})
        except httpx.HTTPError as exc:
            raise AuthValidationError(f"Auth service unreachable: {type(exc).__name__}") from exc
        if response.status_code >= 500:
            raise AuthValidationError(f"Auth service returned {response.status_code}")
        try:
            body: Dict[str, Any] = response.json()
        except ValueError as exc:
            raise AuthValidationError("Auth service returned invalid JSON") from exc
        if not isinstance(body, dict):
            raise AuthValidationError("Auth service returned an unexpected payload")
        if response.status_code >= 400 or not body.get("valid"):
            return ApiKeyValidationResult(valid=False, error=body.get("error") or INVALID_KEY_MESSAGE)
        return ApiKeyValidationResult(valid=True, user_id=body.get("userId"), api_key_id=body.get("apiKeyId"))

    async def record_usage(self, api_key_id: str) -> None:
        client = await self._get_client()
        response = await client.post(f"{self.auth_url}/usage", json={"apiKeyId": api_key_id})
        response.raise_for_status()


def build_validator(config: ServerConfig = default_config) -> KeyValidator:
    if not config.require_api_key:
        return AllowAllValidator()
    if config.auth_url:
        return HttpKeyValidator(config.auth_url, timeout=config.auth_timeout)
    if not config.api_keys:
        logger.warning("auth enabled but no API keys configured; every request will be rejected")
    return StaticKeyValidator(config.api_keys)


def _auth_error(status_code: int, code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_payload(None, code, message))


class AuthGate:
    def __init__(self, validator: KeyValidator, *, required: bool = True) -> None:
        self.validator = validator
        self.required = required
        self._usage_tasks: Set["asyncio.Task[None]"] = set()

    async def check(self, request: Request) -> Union[JSONResponse, ApiKeyValidationResult]:
        """Return the validation result for an authorized request, or the error response to send."""
        request_id = getattr(request.state, "request_id", None)
        if not self.required:
            return ApiKeyValidationResult(valid=True)

        key = extract_bearer(request)
        if key is None:
            logger.info("auth outcome=missing request_id=%s", request_id, extra={"request_id": request_id})
            default_metrics.incr_auth_failure()
            return _auth_error(401, MISSING_CREDENTIAL, MISSING_KEY_MESSAGE)

        try:
            result = await self.validator.validate(key)
        except Exception as exc:
            logger.error(
                "auth outcome=validator_error error=%s request_id=%s",
                exc,
                request_id,
                extra={"request_id": request_id, "error": str(exc)},
            )
            default_metrics.incr_auth_failure()
            return _auth_error(500, INVALID_CREDENTIAL, VALIDATION_FAILED_MESSAGE)

        if not result.valid:
            logger.info(
                "auth outcome=rejected error=%s request_id=%s",
                result.error,
                request_id,
                extra={"request_id": request_id, "error": result.error},
            )
            default_metrics.incr_auth_failure()
            return _auth_error(403, INVALID_CREDENTIAL, result.error or INVALID_KEY_MESSAGE)

        if result.api_key_id:
            self._schedule_usage(result.api_key_id, request_id)
        return result

    def _schedule_usage(self, api_key_id: str, request_id: Optional[str]) -> None:
        task = asyncio.create_task(self.validator.record_usage(api_key_id))
        self._usage_tasks.add(task)

        def _done(finished: "asyncio.Task[None]") -> None:
            self._usage_tasks.discard(finished)
            if finished.cancelled():
                return
            exc = finished.exception()
            if exc is not None:
                logger.warning(
                    "auth usage_record_failed error=%s request_id=%s",
                    exc,
                    request_id,
                    extra={"request_id": request_id, "error": str(exc)},
                )

        task.add_done_callback(_done)

    async def drain(self) -> None:
        """Wait for pending usage recordings; used at shutdown and in tests."""
        if self._usage_tasks:
            await asyncio.gather(*list(self._usage_tasks), return_exceptions=True)

    async def aclose(self) -> None:
        await self.drain()
        closer = getattr(self.validator, "aclose", None)
        if closer is not None:
            await closer()
