"""
MCP Git Tools server.

Wires the tool registry and call handler into an ``mcp`` ``Server`` running
on stdio. stdout carries the protocol, so all logging goes to stderr.
"""

import asyncio
import logging
import sys
from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from .configuration import ServerConfig
from .core.handlers import CallToolHandler
from .error_handling import get_error_stats
from .git import GitProviderFactory

logger = logging.getLogger(__name__)


def create_server(config: ServerConfig, handler: Optional[CallToolHandler] = None) -> Server:
    """Build the MCP server with ``list_tools`` and ``call_tool`` registered."""
    if handler is None:
        handler = CallToolHandler(get_git=GitProviderFactory(config.repository))

    server = Server(config.server_name)
    tools = handler.registry.list_tools()

    @server.list_tools()
    async def list_tools() -> List[Tool]:
        """Return available git tools"""
        return tools

    # Arguments are validated by the router so bad input still gets an envelope
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
        return await handler.call_tool(name, arguments)

    return server


async def log_session_summary(handler: CallToolHandler) -> None:
    """Log call counts, average durations and fault counts for this session."""
    metrics = await handler.metrics.get_metrics()
    errors = get_error_stats()
    logger.info(
        f"📊 Session summary: {metrics['tool_calls']} tool call(s), "
        f"{sum(metrics['failures_by_tool'].values())} failure(s), "
        f"{errors['total_errors']} fault(s), "
        f"avg {metrics['avg_call_duration_ms']:.1f} ms"
    )


async def serve(config: ServerConfig, test_mode: bool = False) -> None:
    """Run the server on stdio until the client disconnects."""
    logger.info(f"🚀 Starting {config.server_name}")
    logger.info(f"Repository: {config.repository or '.'}")

    handler = CallToolHandler(get_git=GitProviderFactory(config.repository))
    server = create_server(config, handler)

    # Test mode for CI
    if test_mode:
        logger.info("🧪 Running in test mode - staying alive for CI testing")
        await asyncio.sleep(10)
        logger.info("🧪 Test mode completed successfully")
        return

    try:
        options = server.create_initialization_options()
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Server running. Waiting for requests...")
            await server.run(read_stream, write_stream, options)
    except Exception as e:
        logger.exception(f"Critical Error: Server stopped due to unhandled exception: {e}")
        sys.exit(1)
    finally:
        await log_session_summary(handler)
        logger.info(f"{config.server_name} shutting down.")
