"""Minimal sanity checks for the Apple UI MCP protocol surface."""

from __future__ import annotations

import asyncio
import os
import sys

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from appleui_mcp.mcp import create_server  # noqa: E402

# Topic used for the style guide call; override via env.
SAMPLE_TOPIC = os.getenv("APPLEUI_SAMPLE_TOPIC", "colors")
SAMPLE_CODE = '<button style="color: #ff0000; font-size: 12px">Go</button>'


async def main() -> None:
    server = create_server()
    connection = server.connect()
    try:
        print("Initialize:", await connection.handle(
            {"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {"protocolVersion": "2024-11-05"}}
        ))
        tools = await connection.handle({"jsonrpc": "2.0", "id": 2, "method": "tools/list"})
        print("Tools:", [tool["name"] for tool in tools["result"]["tools"]])

        review = await connection.handle(
            {
                "jsonrpc": "2.0",
                "id": 3,
                "method": "tools/call",
                "params": {
                    "name": "review_design",
                    "arguments": {"code": SAMPLE_CODE, "codeType": "html", "platform": "web"},
                },
            }
        )
        print("Design review:\n", review["result"]["content"][0]["text"])

        guide = await connection.handle(
            {
                "jsonrpc": "2.0",
                "id": 4,
                "method": "tools/call",
                "params": {"name": "get_style_guide", "arguments": {"topic": SAMPLE_TOPIC, "format": "summary"}},
            }
        )
        print("Style guide:\n", guide["result"]["content"][0]["text"])

        resource = await connection.handle(
            {"jsonrpc": "2.0", "id": 5, "method": "resources/read", "params": {"uri": "appleui://shadows/css"}}
        )
        print("Shadows resource:", resource["result"]["contents"][0]["text"])
    finally:
        connection.close()
        server.close()


if __name__ == "__main__":
    asyncio.run(main())
