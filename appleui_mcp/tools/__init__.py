"""
LLM-facing design tools and the registry that exposes them over MCP.

Each tool is a pydantic input model, a handler producing a structured result,
and a formatter that renders that result as markdown for the client.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError

from appleui_mcp.metrics import default_metrics
from .component_generator import ComponentGeneratorInput, format_component, generate_component
from .design_review import DesignReviewInput, format_review, review_design
from .style_guide import StyleGuideInput, format_style_guide, get_style_guide

logger = logging.getLogger(__name__)

ToolHandler = Callable[[Any], Any]
ToolFormatter = Callable[[Dict[str, Any]], str]


@dataclass(slots=True)
class ToolDefinition:
    name: str
    description: str
    input_model: Type[BaseModel]
    handler: ToolHandler
    formatter: ToolFormatter
    input_schema: Dict[str, Any] = field(init=False)

    def __post_init__(self) -> None:
        self.input_schema = self.input_model.model_json_schema()

    def describe(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "inputSchema": self.input_schema}


def text_content(text: str) -> Dict[str, Any]:
    return {"content": [{"type": "text", "text": text}]}


def error_content(message: str) -> Dict[str, Any]:
    """Tool failures are reported in-band so the model can read them."""
    # Clients check isError on the content block; the result-level flag is the MCP field.
    return {"content": [{"type": "text", "text": f"Error: {message}", "isError": True}], "isError": True}


def _log_tool_result(tool_name: str, error: Optional[str], request_id: Optional[str]) -> None:
    if error:
        logger.warning(
            "tool=%s outcome=error error=%s request_id=%s",
            tool_name,
            error,
            request_id,
            extra={"tool": tool_name, "request_id": request_id, "error": error},
        )
        default_metrics.record_tool(tool_name, success=False)
    else:
        logger.info(
            "tool=%s outcome=success request_id=%s",
            tool_name,
            request_id,
            extra={"tool": tool_name, "request_id": request_id},
        )
        default_metrics.record_tool(tool_name, success=True)


class ToolRegistry:
    def __init__(self, tools: List[ToolDefinition]) -> None:
        self._tools: Dict[str, ToolDefinition] = {tool.name: tool for tool in tools}

    def list_tools(self) -> List[Dict[str, Any]]:
        return [tool.describe() for tool in self._tools.values()]

    def get(self, name: Any) -> Optional[ToolDefinition]:
        if not isinstance(name, str):
            return None
        return self._tools.get(name)

    async def call(
        self, tool: ToolDefinition, arguments: Any = None, *, request_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """Validate ``arguments`` against the tool model and run it; never raises for tool failures."""
        try:
            params = tool.input_model.model_validate(arguments if arguments is not None else {})
            result = tool.handler(params)
            if inspect.isawaitable(result):
                result = await result
            text = tool.formatter(result)
        except ValidationError as exc:
            message = f"Invalid arguments for {tool.name}: {exc.error_count()} validation error(s). {exc}"
            _log_tool_result(tool.name, "validation_error", request_id)
            return error_content(message)
        except Exception as exc:
            _log_tool_result(tool.name, type(exc).__name__, request_id)
            return error_content(str(exc) or "Unknown error")
        _log_tool_result(tool.name, None, request_id)
        return text_content(text)


ALL_TOOLS: List[ToolDefinition] = [
    ToolDefinition(
        name="review_design",
        description=(
            "Review UI code for compliance with Apple Human Interface Guidelines. "
            "Returns a score, issues with fixes, positives and recommendations."
        ),
        input_model=DesignReviewInput,
        handler=review_design,
        formatter=format_review,
    ),
    ToolDefinition(
        name="generate_component",
        description=(
            "Generate an Apple-styled UI component for React, SwiftUI, React Native, "
            "Tailwind or plain CSS, with dark mode and accessibility built in."
        ),
        input_model=ComponentGeneratorInput,
        handler=generate_component,
        formatter=format_component,
    ),
    ToolDefinition(
        name="get_style_guide",
        description=(
            "Get Apple Human Interface Guidelines for a design topic, with principles, "
            "do/don't guidance, tokens and code examples."
        ),
        input_model=StyleGuideInput,
        handler=get_style_guide,
        formatter=format_style_guide,
    ),
]

default_registry = ToolRegistry(ALL_TOOLS)

__all__ = [
    "ALL_TOOLS",
    "ToolDefinition",
    "ToolRegistry",
    "default_registry",
    "error_content",
    "text_content",
]
