"""
Protocol definitions for MCP Git Tools component interfaces.

The provider contract is segregated by capability: each operation group
depends only on the protocol listing the primitives it calls, and the full
``GitProvider`` composes them all. This keeps operation groups testable with
small fakes and lets a binding be checked against exactly what a caller
needs.

Usage:
    >>> from mcp_git_tools.protocols import BranchCapable, ProviderFactory
    >>>
    >>> async def current_branch(get_git: ProviderFactory[BranchCapable]) -> str:
    ...     git = await get_git()
    ...     return (await git.list_branches()).current
"""

from .repository_protocol import (
    AdvancedCapable,
    BranchCapable,
    CommandOptions,
    CommitCapable,
    FileCapable,
    GitProvider,
    ProviderFactory,
    RemoteCapable,
    RepositoryCapable,
)

__all__ = [
    "AdvancedCapable",
    "BranchCapable",
    "CommandOptions",
    "CommitCapable",
    "FileCapable",
    "GitProvider",
    "ProviderFactory",
    "RemoteCapable",
    "RepositoryCapable",
]
