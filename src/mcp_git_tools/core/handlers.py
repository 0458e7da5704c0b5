"""Tool call handlers for MCP Git Tools"""

import logging
import os
import time
from typing import Any, Dict, List, Optional

from mcp.types import TextContent

from ..git import get_git as default_get_git
from ..metrics import MetricsCollector, global_metrics_collector
from ..operations import build_operations
from ..protocols import GitProvider, ProviderFactory
from ..types import OperationResponse
from .tools import GitToolRouter, ToolRegistry

logger = logging.getLogger(__name__)


class CallToolHandler:
    """Centralized tool call handler using the router system"""

    def __init__(
        self,
        get_git: Optional[ProviderFactory[GitProvider]] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.get_git = get_git or default_get_git
        self.metrics = metrics or global_metrics_collector
        self.registry = ToolRegistry()
        self.router = GitToolRouter(self.registry)
        self._setup_handlers()

    def _setup_handlers(self):
        """Set up all tool handlers"""
        self.registry.initialize_default_tools()
        self.router.set_handlers(build_operations(self.get_git))

    async def execute(
        self, name: str, arguments: Optional[Dict[str, Any]] = None
    ) -> OperationResponse:
        """Run one tool call and return its envelope, with timing and metrics"""
        request_id = os.urandom(4).hex()
        context = {"request_id": request_id, "tool": name}
        logger.info(f"🔧 [{request_id}] Tool call: {name}", extra=context)
        logger.debug(f"🔧 [{request_id}] Arguments: {arguments}", extra=context)

        start_time = time.time()
        response = await self.router.route_tool_call(name, arguments)
        duration_ms = (time.time() - start_time) * 1000

        await self.metrics.record_tool_call(name, response.success, duration_ms)
        context["duration_ms"] = round(duration_ms, 2)
        if response.success:
            logger.info(
                f"✅ [{request_id}] Tool '{name}' completed in {duration_ms:.0f}ms",
                extra=context,
            )
        else:
            await self.metrics.record_error(name)
            logger.info(
                f"❌ [{request_id}] Tool '{name}' failed in {duration_ms:.0f}ms: "
                f"{response.message}",
                extra=context,
            )
        return response

    async def call_tool(
        self, name: str, arguments: Optional[Dict[str, Any]] = None
    ) -> List[TextContent]:
        """Main tool call entry point; the envelope is returned as JSON text"""
        response = await self.execute(name, arguments)
        return [TextContent(type="text", text=response.to_json())]
