"""Type definitions for MCP Git Tools.

Key type categories:
    git_types: Snapshots of repository state produced by provider primitives
        (status, branches, commits, diffs, stashes, remotes)
    mcp_types: The response envelope returned by every tool

All models are pydantic ``BaseModel`` subclasses so they validate on
construction and serialize to JSON without extra glue.

Usage patterns:
    >>> from mcp_git_tools.types import OperationResponse, StatusSnapshot
    >>> OperationResponse.ok("Working tree clean").to_payload()
    {'success': True, 'message': 'Working tree clean'}
"""

from .git_types import (
    BranchInfo,
    BranchSummary,
    ChangeSummary,
    CommitInfo,
    CommitResult,
    DiffFileSummary,
    DiffSummary,
    FileStatus,
    LogResult,
    MergeResult,
    RemoteInfo,
    RemoteRefs,
    RenamedFile,
    StashEntry,
    StashList,
    StatusSnapshot,
)
from .mcp_types import OperationResponse

__all__ = [
    # Git types
    "BranchInfo",
    "BranchSummary",
    "ChangeSummary",
    "CommitInfo",
    "CommitResult",
    "DiffFileSummary",
    "DiffSummary",
    "FileStatus",
    "LogResult",
    "MergeResult",
    "RemoteInfo",
    "RemoteRefs",
    "RenamedFile",
    "StashEntry",
    "StashList",
    "StatusSnapshot",
    # MCP types
    "OperationResponse",
]
