"""
Repository protocol definitions for git provider primitives.

The full ``GitProvider`` contract is split into one capability protocol per
operation group so each group can declare exactly the primitives it calls.
``GitProvider`` composes all of them; any concrete binding to a git toolchain
must satisfy it.

Every primitive is a coroutine. It either returns a typed result or raises
``GitProviderError`` with the toolchain's own message; it never returns a
sentinel error value.
"""

from typing import Mapping, Optional, Protocol, Sequence, TypeVar, runtime_checkable

from ..types import (
    BranchSummary,
    CommitResult,
    DiffSummary,
    LogResult,
    MergeResult,
    RemoteInfo,
    StashList,
    StatusSnapshot,
)

# Flag -> value pairs; a value of None emits the bare flag
CommandOptions = Mapping[str, Optional[str]]


@runtime_checkable
class RepositoryCapable(Protocol):
    """Primitives needed for repository lifecycle operations."""

    async def is_repository(self) -> bool:
        """
        Check whether the bound root is inside a git work tree.

        Returns:
            True for a work tree, False otherwise. Never raises.
        """
        ...

    async def get_status(self) -> StatusSnapshot:
        """
        Get the working tree status.

        Returns:
            StatusSnapshot with per-category file lists, branch, upstream
            and ahead/behind counts.

        Example:
            >>> status = await provider.get_status()
            >>> if not status.is_clean():
            ...     print(status.modified)
        """
        ...

    async def initialize(self) -> None:
        """Create an empty repository at the bound root."""
        ...

    async def clone_from(self, url: str, target_path: str) -> None:
        """
        Clone ``url`` into ``target_path``.

        Args:
            url: Repository URL or local path to clone from
            target_path: Destination, relative paths resolve against the bound root
        """
        ...


@runtime_checkable
class BranchCapable(Protocol):
    """Primitives needed for branch operations."""

    async def list_branches(self) -> BranchSummary:
        """
        List local and remote-tracking branches.

        Returns:
            BranchSummary with the current branch, every branch name and a
            descriptor per branch.
        """
        ...

    async def mutate_branches(self, args: Sequence[str]) -> None:
        """
        Create, delete or rename branches.

        Args:
            args: Arguments passed verbatim after ``git branch``,
                e.g. ``["-d", "feature"]``
        """
        ...

    async def checkout(self, ref: str) -> None:
        """Switch the work tree to ``ref``."""
        ...

    async def checkout_new_branch(self, name: str, start_point: str) -> None:
        """Create branch ``name`` at ``start_point`` and switch to it."""
        ...

    async def merge(self, args: Sequence[str]) -> MergeResult:
        """
        Merge into the current branch.

        Args:
            args: Arguments passed verbatim after ``git merge``

        Returns:
            MergeResult with auto-merged files, conflicts and change counts
        """
        ...


@runtime_checkable
class FileCapable(Protocol):
    """Primitives needed for diff and staging operations."""

    async def diff(self, args: Sequence[str]) -> str:
        """Return the textual diff for ``git diff <args>``."""
        ...

    async def diff_summary(self, args: Sequence[str]) -> DiffSummary:
        """Return per-file and total change counts for ``git diff <args>``."""
        ...

    async def stage(self, files: Sequence[str]) -> None:
        """Add ``files`` to the index."""
        ...

    async def unstage_or_reset(self, args: Sequence[str]) -> None:
        """Run ``git reset <args>``."""
        ...

    async def invoke_raw(self, args: Sequence[str]) -> str:
        """
        Run an arbitrary git command.

        This is the escape hatch for actions without a dedicated primitive
        (restore, cherry-pick, abort/continue). The argument vector is passed
        as-is; getting its shape right is the caller's responsibility.

        Args:
            args: Full argument vector after ``git``, e.g. ``["restore", "a.py"]``

        Returns:
            The command's standard output
        """
        ...


@runtime_checkable
class CommitCapable(Protocol):
    """Primitives needed for commit and history operations."""

    async def stage(self, files: Sequence[str]) -> None:
        ...

    async def commit(
        self,
        message: str,
        files: Optional[Sequence[str]] = None,
        options: Optional[CommandOptions] = None,
    ) -> CommitResult:
        """
        Record a commit.

        Args:
            message: Commit message
            files: Optional pathspec limiting the commit to these files
            options: Extra flags, e.g. ``{"--amend": None}``

        Returns:
            CommitResult with the new commit id, branch and change counts
        """
        ...

    async def get_log(
        self, max_count: Optional[int] = None, file: Optional[str] = None
    ) -> LogResult:
        """
        Get commit history, most recent first.

        Args:
            max_count: Limit the number of commits
            file: Only commits touching this path
        """
        ...

    async def show(self, args: Sequence[str]) -> str:
        """Return the output of ``git show <args>``."""
        ...


@runtime_checkable
class AdvancedCapable(Protocol):
    """Primitives needed for rebase, stash and cherry-pick operations."""

    async def rebase(self, args: Sequence[str]) -> None:
        ...

    async def stash(self, args: Sequence[str]) -> None:
        """Run ``git stash <args>``, e.g. ``["push", "-u"]`` or ``["pop"]``."""
        ...

    async def list_stashes(self) -> StashList:
        ...

    async def invoke_raw(self, args: Sequence[str]) -> str:
        ...


@runtime_checkable
class RemoteCapable(Protocol):
    """Primitives needed for remote operations."""

    async def list_remotes(self, verbose: bool) -> list[RemoteInfo]:
        """
        List configured remotes.

        Args:
            verbose: Include fetch and push URLs
        """
        ...

    async def add_remote(self, name: str, url: str) -> None:
        ...

    async def fetch(
        self, remote: Optional[str] = None, branch: Optional[str] = None
    ) -> None:
        """Fetch from all remotes, one remote, or one branch of a remote."""
        ...

    async def pull(
        self,
        remote: Optional[str] = None,
        branch: Optional[str] = None,
        options: Optional[CommandOptions] = None,
    ) -> None:
        ...

    async def push(
        self,
        remote: Optional[str] = None,
        branch: Optional[str] = None,
        options: Optional[Sequence[str]] = None,
    ) -> None:
        ...

    async def invoke_raw(self, args: Sequence[str]) -> str:
        ...


@runtime_checkable
class GitProvider(
    RepositoryCapable,
    BranchCapable,
    FileCapable,
    CommitCapable,
    AdvancedCapable,
    RemoteCapable,
    Protocol,
):
    """The complete set of primitives a git binding must supply."""


P = TypeVar("P", covariant=True)


class ProviderFactory(Protocol[P]):
    """Obtain a provider bound to one repository root.

    The root is ``repo_path`` when given, otherwise the factory's default.
    When ``required`` is true and the root is not a repository the factory
    raises ``NotAGitRepositoryError`` before any primitive runs.
    """

    async def __call__(
        self, repo_path: Optional[str] = None, required: bool = True
    ) -> P:
        ...
