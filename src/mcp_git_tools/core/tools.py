"""Tool registry and routing system for MCP Git Tools"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Type

from mcp.types import Tool, ToolAnnotations
from pydantic import ValidationError

from ..error_handling import UnknownToolError
from ..git.models import (
    GitAbort,
    GitAdd,
    GitBranchCreate,
    GitBranchDelete,
    GitBranchList,
    GitCheckout,
    GitCherryPick,
    GitClone,
    GitCommit,
    GitContinue,
    GitDiff,
    GitFetch,
    GitInit,
    GitLog,
    GitMerge,
    GitPull,
    GitPush,
    GitRebase,
    GitRemoteAdd,
    GitRemoteList,
    GitRemoteRemove,
    GitRequest,
    GitReset,
    GitRestore,
    GitShow,
    GitStash,
    GitStashDrop,
    GitStashList,
    GitStashPop,
    GitStatus,
)
from ..operations import Operation
from ..types import OperationResponse

logger = logging.getLogger(__name__)


class GitTools(str, Enum):
    """Enumeration of all available Git tools"""

    # Repository management
    STATUS = "git_status"
    INIT = "git_init"
    CLONE = "git_clone"

    # Branches
    BRANCH_LIST = "git_branch_list"
    BRANCH_CREATE = "git_branch_create"
    BRANCH_DELETE = "git_branch_delete"
    CHECKOUT = "git_checkout"
    MERGE = "git_merge"

    # Files and staging
    DIFF = "git_diff"
    ADD = "git_add"
    RESET = "git_reset"
    RESTORE = "git_restore"

    # Commits and history
    COMMIT = "git_commit"
    LOG = "git_log"
    SHOW = "git_show"

    # Advanced
    REBASE = "git_rebase"
    STASH = "git_stash"
    STASH_POP = "git_stash_pop"
    STASH_LIST = "git_stash_list"
    STASH_DROP = "git_stash_drop"
    CHERRY_PICK = "git_cherry_pick"
    ABORT = "git_abort"
    CONTINUE = "git_continue"

    # Remotes
    REMOTE_LIST = "git_remote_list"
    REMOTE_ADD = "git_remote_add"
    REMOTE_REMOVE = "git_remote_remove"
    FETCH = "git_fetch"
    PULL = "git_pull"
    PUSH = "git_push"


class ToolCategory(str, Enum):
    """Tool categories matching the operation groups"""

    REPOSITORY = "repository"
    BRANCH = "branch"
    FILE = "file"
    COMMIT = "commit"
    ADVANCED = "advanced"
    REMOTE = "remote"


@dataclass
class ToolDefinition:
    """Complete tool definition with metadata"""

    name: str
    category: ToolCategory
    description: str
    schema: Type[GitRequest]
    handler: Optional[Operation] = None
    read_only: bool = False
    dangerous: bool = False
    requires_confirmation: bool = False

    def input_schema(self) -> Dict[str, Any]:
        return self.schema.model_json_schema(by_alias=True)

    def annotations(self) -> Dict[str, bool]:
        """Catalog annotations, only the flags that are set."""
        flags = {
            "readOnly": self.read_only,
            "dangerous": self.dangerous,
            "requiresConfirmation": self.requires_confirmation,
        }
        return {key: value for key, value in flags.items() if value}

    def to_mcp_tool(self) -> Tool:
        hints: Dict[str, Any] = {"readOnlyHint": self.read_only}
        if not self.read_only:
            hints["destructiveHint"] = self.dangerous
        if self.requires_confirmation:
            hints["requiresConfirmation"] = True
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema(),
            annotations=ToolAnnotations(**hints),
        )


# Dangerous tools always ask for confirmation
_DANGEROUS = {"dangerous": True, "requires_confirmation": True}

_DEFAULT_TOOLS = [
    # Repository management
    (GitTools.STATUS, ToolCategory.REPOSITORY, GitStatus,
     "Show the working tree status including modified, staged, and untracked files",
     {"read_only": True}),
    (GitTools.INIT, ToolCategory.REPOSITORY, GitInit,
     "Initialize a new git repository", {}),
    (GitTools.CLONE, ToolCategory.REPOSITORY, GitClone,
     "Clone a repository from a URL", {}),
    # Branches
    (GitTools.BRANCH_LIST, ToolCategory.BRANCH, GitBranchList,
     "List all branches in the repository", {"read_only": True}),
    (GitTools.BRANCH_CREATE, ToolCategory.BRANCH, GitBranchCreate,
     "Create a new branch", {}),
    (GitTools.BRANCH_DELETE, ToolCategory.BRANCH, GitBranchDelete,
     "Delete a branch", _DANGEROUS),
    (GitTools.CHECKOUT, ToolCategory.BRANCH, GitCheckout,
     "Switch branches or restore working tree files", {}),
    (GitTools.MERGE, ToolCategory.BRANCH, GitMerge,
     "Merge a branch into the current branch", {}),
    # Files and staging
    (GitTools.DIFF, ToolCategory.FILE, GitDiff,
     "Show changes between commits, commit and working tree, etc. "
     "Supports commit ranges like HEAD...origin/master",
     {"read_only": True}),
    (GitTools.ADD, ToolCategory.FILE, GitAdd,
     "Add file contents to the staging area", {}),
    (GitTools.RESET, ToolCategory.FILE, GitReset,
     "Unstage files or reset current HEAD to specified state", _DANGEROUS),
    (GitTools.RESTORE, ToolCategory.FILE, GitRestore,
     "Restore working tree files", _DANGEROUS),
    # Commits and history
    (GitTools.COMMIT, ToolCategory.COMMIT, GitCommit,
     "Record changes to the repository", {}),
    (GitTools.LOG, ToolCategory.COMMIT, GitLog,
     "Show commit logs", {"read_only": True}),
    (GitTools.SHOW, ToolCategory.COMMIT, GitShow,
     "Show details of a commit", {"read_only": True}),
    # Advanced
    (GitTools.REBASE, ToolCategory.ADVANCED, GitRebase,
     "Reapply commits on top of another base tip", _DANGEROUS),
    (GitTools.STASH, ToolCategory.ADVANCED, GitStash,
     "Stash the changes in a dirty working directory", {}),
    (GitTools.STASH_POP, ToolCategory.ADVANCED, GitStashPop,
     "Apply stashed changes and remove them from stash list", {}),
    (GitTools.STASH_LIST, ToolCategory.ADVANCED, GitStashList,
     "List all stashed changes", {"read_only": True}),
    (GitTools.STASH_DROP, ToolCategory.ADVANCED, GitStashDrop,
     "Discard a stash entry without applying it", _DANGEROUS),
    (GitTools.CHERRY_PICK, ToolCategory.ADVANCED, GitCherryPick,
     "Apply the changes introduced by an existing commit", {}),
    (GitTools.ABORT, ToolCategory.ADVANCED, GitAbort,
     "Abort an in-progress merge, rebase or cherry-pick", _DANGEROUS),
    (GitTools.CONTINUE, ToolCategory.ADVANCED, GitContinue,
     "Continue an in-progress merge, rebase or cherry-pick after resolving conflicts",
     {}),
    # Remotes
    (GitTools.REMOTE_LIST, ToolCategory.REMOTE, GitRemoteList,
     "List all configured remotes", {"read_only": True}),
    (GitTools.REMOTE_ADD, ToolCategory.REMOTE, GitRemoteAdd,
     "Add a new remote", {}),
    (GitTools.REMOTE_REMOVE, ToolCategory.REMOTE, GitRemoteRemove,
     "Remove a configured remote and its remote-tracking branches", _DANGEROUS),
    (GitTools.FETCH, ToolCategory.REMOTE, GitFetch,
     "Download objects and refs from another repository", {"read_only": True}),
    (GitTools.PULL, ToolCategory.REMOTE, GitPull,
     "Fetch from and integrate with another repository or local branch", {}),
    (GitTools.PUSH, ToolCategory.REMOTE, GitPush,
     "Update remote refs along with associated objects", _DANGEROUS),
]


class ToolRegistry:
    """Central registry for all MCP Git Tools tools"""

    def __init__(self):
        self.tools: Dict[str, ToolDefinition] = {}
        self._initialized = False

    def register(self, tool_def: ToolDefinition):
        """Register a tool in the registry"""
        self.tools[tool_def.name] = tool_def
        logger.debug(f"Registered tool: {tool_def.name} ({tool_def.category.value})")

    def get_tool(self, name: str) -> Optional[ToolDefinition]:
        """Get tool definition by name"""
        return self.tools.get(name)

    def list_tools(self) -> List[Tool]:
        """Get all tools as MCP Tool objects"""
        return [tool_def.to_mcp_tool() for tool_def in self.tools.values()]

    def catalog(self) -> List[Dict[str, Any]]:
        """Get all tools as plain catalog entries"""
        entries = []
        for tool_def in self.tools.values():
            entry: Dict[str, Any] = {
                "name": tool_def.name,
                "description": tool_def.description,
                "inputSchema": tool_def.input_schema(),
            }
            annotations = tool_def.annotations()
            if annotations:
                entry["annotations"] = annotations
            entries.append(entry)
        return entries

    def initialize_default_tools(self):
        """Initialize registry with the default Git tools"""
        if self._initialized:
            return

        for name, category, schema, description, flags in _DEFAULT_TOOLS:
            self.register(
                ToolDefinition(
                    name=name.value,
                    category=category,
                    description=description,
                    schema=schema,
                    **flags,
                )
            )

        self._initialized = True
        logger.info(f"Initialized tool registry with {len(self.tools)} tools")


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        parts.append(f"{location}: {item['msg']}" if location else item["msg"])
    return "; ".join(parts)


class GitToolRouter:
    """Router for dispatching tool calls to appropriate handlers"""

    def __init__(self, registry: ToolRegistry):
        self.registry = registry

    def set_handlers(self, operations: Dict[str, Operation]):
        """Attach operations to the registered tools by name"""
        for tool_name, handler in operations.items():
            tool_def = self.registry.get_tool(tool_name)
            if tool_def is not None:
                tool_def.handler = handler

        missing = [name for name, tool in self.registry.tools.items() if tool.handler is None]
        if missing:
            raise ValueError(f"No operation for tools: {', '.join(missing)}")

        logger.info("Tool handlers initialized")

    async def route_tool_call(
        self, name: str, arguments: Optional[Dict[str, Any]] = None
    ) -> OperationResponse:
        """Route a tool call to its operation and return the response envelope"""
        try:
            tool_def = self.registry.get_tool(name)
            if tool_def is None or tool_def.handler is None:
                raise UnknownToolError(name)

            try:
                request = tool_def.schema.model_validate(arguments or {})
            except ValidationError as e:
                return OperationResponse.failure(
                    f"Invalid arguments for {name}: {_format_validation_error(e)}"
                )

            return await tool_def.handler(**request.model_dump())

        except UnknownToolError as e:
            logger.warning(str(e))
            return OperationResponse.failure(str(e))
        except Exception as e:
            logger.error(f"Tool call failed for {name}: {e}", exc_info=True)
            return OperationResponse.failure(f"Error executing tool: {e}")
