"""Constants module for MCP Git Tools.

Constant values are grouped in small classes so related defaults stay
together and can be referenced by name instead of repeating literals across
the operation groups, the provider binding and the server wiring.

Constant categories:
    GitOperationDefaults: Default refs, remotes and modes used when a tool
        argument is omitted
    GitOutputMarkers: Fixed tokens that appear in git's porcelain output
    ServerDefaults: Server identity and logging defaults

Usage examples:
    >>> from mcp_git_tools.constants import GitOperationDefaults
    >>> GitOperationDefaults.DEFAULT_REMOTE
    'origin'
"""

from typing import Final


class GitOperationDefaults:
    """Defaults applied by operations when the caller leaves an argument out."""

    DEFAULT_REF: Final[str] = "HEAD"
    DEFAULT_REMOTE: Final[str] = "origin"
    DEFAULT_RESET_MODE: Final[str] = "mixed"
    TWO_DOT_RANGE: Final[str] = ".."
    THREE_DOT_RANGE: Final[str] = "..."
    PATHSPEC_SEPARATOR: Final[str] = "--"


class GitOutputMarkers:
    """Tokens recognised while parsing git command output."""

    # Porcelain v1 two-letter codes for unmerged paths
    CONFLICT_CODES: Final[frozenset[str]] = frozenset(
        {"DD", "AU", "UD", "UA", "DU", "AA", "UU"}
    )
    UNTRACKED_CODE: Final[str] = "??"
    IGNORED_CODE: Final[str] = "!!"
    DETACHED_HEAD: Final[str] = "HEAD (no branch)"
    NO_COMMITS_PREFIXES: Final[tuple[str, ...]] = ("No commits yet on ", "Initial commit on ")
    FIELD_SEPARATOR: Final[str] = "\x1f"
    RECORD_SEPARATOR: Final[str] = "\x1e"


class ServerDefaults:
    """Server identity and logging defaults."""

    SERVER_NAME: Final[str] = "mcp-git-tools"
    LOG_LEVEL: Final[str] = "INFO"
    LOG_DIR_NAME: Final[str] = "logs"
    LOG_FILE_PREFIX: Final[str] = "mcp_git_tools"
    ENV_PREFIX: Final[str] = "MCP_GIT_"


__all__ = [
    "GitOperationDefaults",
    "GitOutputMarkers",
    "ServerDefaults",
]
