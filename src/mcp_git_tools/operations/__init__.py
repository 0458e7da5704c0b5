"""Operation groups for MCP Git Tools.

Each group is constructed with a provider factory and exposes one coroutine
per tool. Every operation follows the same skeleton:

    1. Obtain a provider for the optional ``repo_path`` (the factory fails
       with ``NotAGitRepositoryError`` when the target must be a repository
       and is not).
    2. Call one or more provider primitives in sequence.
    3. Return ``OperationResponse.ok(...)`` with a summary message and
       optional data.

Any fault raised along the way is converted by ``operation_boundary`` into
``{"success": false, "message": "Failed to <action>: <fault>"}``; nothing is
re-raised and nothing is retried.

Groups:
    RepositoryOperations: status, init, clone
    BranchOperations: branch list/create/delete, checkout, merge
    FileOperations: diff, add, reset, restore
    CommitOperations: commit, log, show
    AdvancedOperations: rebase, stash push/pop/list/drop, cherry-pick,
        abort and continue of in-progress operations
    RemoteOperations: remote list/add/remove, fetch, pull, push

Example usage:
    >>> from mcp_git_tools.git import GitProviderFactory
    >>> from mcp_git_tools.operations import build_operations
    >>>
    >>> operations = build_operations(GitProviderFactory("/path/to/repo"))
    >>> response = await operations["git_status"]()
    >>> response.message
    'Working tree clean'
"""

from typing import Awaitable, Callable

from ..protocols import GitProvider, ProviderFactory
from ..types import OperationResponse
from .advanced import AdvancedOperations
from .branches import BranchOperations
from .commits import CommitOperations
from .files import FileOperations, build_diff_args
from .remotes import RemoteOperations
from .repository import RepositoryOperations, clone_target

Operation = Callable[..., Awaitable[OperationResponse]]

OPERATION_GROUPS = (
    RepositoryOperations,
    BranchOperations,
    FileOperations,
    CommitOperations,
    AdvancedOperations,
    RemoteOperations,
)


def build_operations(get_git: ProviderFactory[GitProvider]) -> dict[str, Operation]:
    """Instantiate every group against ``get_git`` and map tool names to operations."""
    operations: dict[str, Operation] = {}
    for group_cls in OPERATION_GROUPS:
        group = group_cls(get_git)
        for name in dir(group):
            if name.startswith("git_"):
                operations[name] = getattr(group, name)
    return operations


__all__ = [
    "AdvancedOperations",
    "BranchOperations",
    "CommitOperations",
    "FileOperations",
    "OPERATION_GROUPS",
    "Operation",
    "RemoteOperations",
    "RepositoryOperations",
    "build_diff_args",
    "build_operations",
    "clone_target",
]
