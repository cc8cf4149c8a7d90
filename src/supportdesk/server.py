# src/supportdesk/server.py
from typing import Any, Dict, List, Optional

from anyio import to_thread
import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server

from .endpoint import TOOL_NAME, TicketEndpoint
from .logger import get_logger
from .models import AppConfig
from .schema import input_json_schema
from .ui import RESOURCE_MIME_TYPE, RESOURCE_URI, render_app_html

logger = get_logger(__name__)

TOOL_DESCRIPTION = (
    "Submit a customer support ticket. Collects the customer's name, "
    "issue description, and optional metadata, then sends an email to "
    "the support team."
)


def build_tool(config: AppConfig) -> types.Tool:
    return types.Tool(
        name=TOOL_NAME,
        title=config.brand.name,
        description=TOOL_DESCRIPTION,
        inputSchema=input_json_schema(config),
        _meta={"ui": {"resourceUri": RESOURCE_URI}},
    )


def create_server(config: AppConfig, endpoint: Optional[TicketEndpoint] = None,
                  ui_dir: Optional[str] = None) -> Server:
    """
    MCP server exposing the customer_support tool and its UI resource.
    The tool schema is data-defined, so the low-level server API is used
    instead of signature-derived FastMCP tools.
    """
    endpoint = endpoint or TicketEndpoint(config)
    server = Server(f"{config.brand.name} MCP Server", version="1.0.0")
    tool = build_tool(config)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return [tool]

    # Input is validated by the endpoint so failures keep the ticket payload shape
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Dict[str, Any]) -> types.CallToolResult:
        if name != TOOL_NAME:
            raise ValueError(f"Unknown tool: {name}")
        response = await to_thread.run_sync(endpoint.submit, arguments or {})
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=response.text)],
            isError=response.is_error,
        )

    @server.list_resources()
    async def list_resources() -> List[types.Resource]:
        return [types.Resource(uri=RESOURCE_URI, name=RESOURCE_URI, mimeType=RESOURCE_MIME_TYPE)]

    @server.read_resource()
    async def read_resource(uri) -> List[ReadResourceContents]:
        if str(uri) != RESOURCE_URI:
            raise ValueError(f"Unknown resource: {uri}")
        return [ReadResourceContents(content=render_app_html(config, "mcp", ui_dir), mime_type=RESOURCE_MIME_TYPE)]

    return server


async def run_stdio(server: Server):
    """Serve over stdio. stdout belongs to the protocol from here on."""
    logger.info("🚀 Serving '%s' over stdio", server.name)
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
