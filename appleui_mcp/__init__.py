"""
Apple UI/UX design guidelines MCP server package.

This package exposes design review, component generation and style guide
tools, plus design token resources and workflow prompts, over the MCP
JSON-RPC protocol. See DESIGN.md for full details.
"""

__all__ = ["config"]
