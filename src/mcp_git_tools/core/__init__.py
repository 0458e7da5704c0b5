"""MCP Git Tools core components"""

from .handlers import CallToolHandler
from .tools import GitToolRouter, GitTools, ToolCategory, ToolDefinition, ToolRegistry

__all__ = [
    "CallToolHandler",
    "GitToolRouter",
    "GitTools",
    "ToolCategory",
    "ToolDefinition",
    "ToolRegistry",
]
