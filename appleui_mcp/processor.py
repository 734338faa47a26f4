"""Single-message and batch processing on top of the method dispatcher."""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional, Union

from appleui_mcp.dispatcher import MethodDispatcher
from appleui_mcp.metrics import default_metrics
from appleui_mcp.protocol import (
    INTERNAL_ERROR,
    Call,
    InvalidMessageError,
    ProtocolError,
    error_payload,
    parse_message,
    success_payload,
)

logger = logging.getLogger(__name__)

Reply = Optional[Union[Dict[str, Any], List[Dict[str, Any]]]]


class RequestProcessor:
    def __init__(self, dispatcher: MethodDispatcher) -> None:
        self.dispatcher = dispatcher

    async def process(self, body: Any, *, request_id: Optional[str] = None) -> Reply:
        """
        Process a decoded request body.

        A list is treated as a batch: elements run in order and notifications
        are dropped from the reply, which may leave an empty list. A single
        message yields its response, or None for a notification.
        """
        if isinstance(body, list):
            replies = []
            for raw in body:
                reply = await self.process_message(raw, request_id=request_id)
                if reply is not None:
                    replies.append(reply)
            return replies
        return await self.process_message(body, request_id=request_id)

    async def process_message(self, raw: Any, *, request_id: Optional[str] = None) -> Optional[Dict[str, Any]]:
        start_time = time.time()
        try:
            message = parse_message(raw)
        except InvalidMessageError as exc:
            self._log(None, "invalid", start_time, request_id, error_code=exc.code)
            default_metrics.record_rpc("<invalid>", error_code=exc.code)
            if exc.is_notification:
                return None
            return error_payload(exc.rpc_id, exc.code, exc.message)

        is_call = isinstance(message, Call)
        try:
            result = await self.dispatcher.dispatch(message.method, message.params, request_id=request_id)
        except ProtocolError as exc:
            self._log(message.method, "error", start_time, request_id, error_code=exc.code)
            default_metrics.record_rpc(message.method, error_code=exc.code)
            if not is_call:
                return None
            return error_payload(message.id, exc.code, exc.message, exc.data)
        except Exception as exc:
            logger.exception(
                "mcp outcome=internal_error method=%s request_id=%s",
                message.method,
                request_id,
                extra={"request_id": request_id, "method": message.method, "error": str(exc)},
            )
            default_metrics.record_rpc(message.method, error_code=INTERNAL_ERROR)
            if not is_call:
                return None
            return error_payload(message.id, INTERNAL_ERROR, str(exc) or "Internal error")

        self._log(message.method, "success", start_time, request_id)
        default_metrics.record_rpc(message.method)
        if not is_call:
            return None
        return success_payload(message.id, result)

    @staticmethod
    def _log(
        method: Optional[str],
        outcome: str,
        start_time: float,
        request_id: Optional[str],
        *,
        error_code: Optional[int] = None,
    ) -> None:
        duration_ms = (time.time() - start_time) * 1000
        logger.debug(
            "mcp outcome=%s method=%s duration_ms=%.2f error_code=%s",
            outcome,
            method,
            duration_ms,
            error_code,
            extra={"request_id": request_id, "method": method, "error": error_code},
        )
