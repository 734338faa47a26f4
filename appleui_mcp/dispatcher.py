"""
Method routing for the MCP protocol surface.

Supported methods:
  - initialize, initialized / notifications/initialized, ping
  - tools/list, tools/call
  - resources/list, resources/templates/list, resources/read
  - prompts/list, prompts/get
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from appleui_mcp.config import ServerConfig, default_config
from appleui_mcp.prompts import PromptCatalog
from appleui_mcp.prompts import default_catalog as default_prompts
from appleui_mcp.protocol import INVALID_PARAMS, METHOD_NOT_FOUND, ProtocolError
from appleui_mcp.resources import ResourceCatalog
from appleui_mcp.resources import default_catalog as default_resources
from appleui_mcp.tools import ToolRegistry, default_registry

logger = logging.getLogger(__name__)

METHODS = frozenset(
    {
        "initialize",
        "initialized",
        "notifications/initialized",
        "ping",
        "tools/list",
        "tools/call",
        "resources/list",
        "resources/templates/list",
        "resources/read",
        "prompts/list",
        "prompts/get",
    }
)

MethodHandler = Callable[[Dict[str, Any], Optional[str]], Union[Any, Awaitable[Any]]]


class MethodDispatcher:
    """Lookup table from method name to handler, checked for completeness on construction."""

    def __init__(
        self,
        *,
        tools: ToolRegistry = default_registry,
        resources: ResourceCatalog = default_resources,
        prompts: PromptCatalog = default_prompts,
        config: ServerConfig = default_config,
    ) -> None:
        self.tools = tools
        self.resources = resources
        self.prompts = prompts
        self.config = config
        self._handlers: Dict[str, MethodHandler] = {
            "initialize": self._initialize,
            "initialized": self._empty,
            "notifications/initialized": self._empty,
            "ping": self._empty,
            "tools/list": self._list_tools,
            "tools/call": self._call_tool,
            "resources/list": self._list_resources,
            "resources/templates/list": self._list_resource_templates,
            "resources/read": self._read_resource,
            "prompts/list": self._list_prompts,
            "prompts/get": self._get_prompt,
        }
        _check_table(self._handlers)

    async def dispatch(self, method: str, params: Dict[str, Any], *, request_id: Optional[str] = None) -> Any:
        handler = self._handlers.get(method)
        if handler is None:
            raise ProtocolError(METHOD_NOT_FOUND, f"Method not found: {method}")
        result = handler(params, request_id)
        if inspect.isawaitable(result):
            result = await result
        return result

    def _initialize(self, params: Dict[str, Any], request_id: Optional[str]) -> Dict[str, Any]:
        requested = params.get("protocolVersion")
        if requested is not None and requested not in self.config.supported_versions:
            logger.warning(
                "mcp initialize unsupported_protocol=%s served=%s request_id=%s",
                requested,
                self.config.protocol_version,
                request_id,
                extra={"request_id": request_id, "method": "initialize"},
            )
        client_info = params.get("clientInfo") or {}
        logger.info(
            "mcp initialize client=%s protocol=%s request_id=%s",
            client_info.get("name") if isinstance(client_info, dict) else None,
            requested,
            request_id,
            extra={"request_id": request_id, "method": "initialize"},
        )
        return {
            "protocolVersion": self.config.protocol_version,
            "capabilities": {
                "tools": {"listChanged": False},
                "resources": {"subscribe": False, "listChanged": False},
                "prompts": {"listChanged": False},
            },
            "serverInfo": {"name": self.config.server_name, "version": self.config.server_version},
        }

    def _empty(self, _params: Dict[str, Any], _request_id: Optional[str]) -> Dict[str, Any]:
        return {}

    def _list_tools(self, _params: Dict[str, Any], _request_id: Optional[str]) -> Dict[str, Any]:
        return {"tools": self.tools.list_tools()}

    async def _call_tool(self, params: Dict[str, Any], request_id: Optional[str]) -> Dict[str, Any]:
        name = params.get("name")
        tool = self.tools.get(name)
        if tool is None:
            raise ProtocolError(METHOD_NOT_FOUND, f"Unknown tool: {name}")
        return await self.tools.call(tool, params.get("arguments"), request_id=request_id)

    def _list_resources(self, _params: Dict[str, Any], _request_id: Optional[str]) -> Dict[str, Any]:
        return {"resources": self.resources.list_resources()}

    def _list_resource_templates(self, _params: Dict[str, Any], _request_id: Optional[str]) -> Dict[str, Any]:
        return {"resourceTemplates": self.resources.list_templates()}

    def _read_resource(self, params: Dict[str, Any], _request_id: Optional[str]) -> Dict[str, Any]:
        uri = params.get("uri")
        content = self.resources.read(uri)
        if content is None:
            raise ProtocolError(INVALID_PARAMS, f"Resource not found: {uri}")
        return {"contents": [content]}

    def _list_prompts(self, _params: Dict[str, Any], _request_id: Optional[str]) -> Dict[str, Any]:
        return {"prompts": self.prompts.list_prompts()}

    def _get_prompt(self, params: Dict[str, Any], _request_id: Optional[str]) -> Dict[str, Any]:
        name = params.get("name")
        rendered = self.prompts.render(name, params.get("arguments"))
        if rendered is None:
            raise ProtocolError(INVALID_PARAMS, f"Prompt not found: {name}")
        return rendered


def _check_table(handlers: Dict[str, MethodHandler]) -> None:
    missing = METHODS - handlers.keys()
    extra = handlers.keys() - METHODS
    if missing or extra:
        raise RuntimeError(f"Method table mismatch: missing={sorted(missing)} extra={sorted(extra)}")
