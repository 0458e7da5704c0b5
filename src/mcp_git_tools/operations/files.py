"""Diff and staging operations: diff, add, reset and restore."""

import logging
from typing import Optional, Sequence

from ..constants import GitOperationDefaults
from ..error_handling import operation_boundary
from ..protocols import FileCapable, ProviderFactory
from ..types import OperationResponse

logger = logging.getLogger(__name__)


def build_diff_args(
    files: Optional[Sequence[str]] = None,
    cached: bool = False,
    from_commit: Optional[str] = None,
    to_commit: Optional[str] = None,
    use_three_dot_range: bool = False,
) -> list[str]:
    """Build the ``git diff`` argument list for a diff request.

    Both commits produce a single range token (``a..b`` or ``a...b``). A lone
    commit is passed as a single ref, which diffs the working tree against
    it; that holds for ``to_commit`` as well, despite its name.

    Example:
        >>> build_diff_args(files=["a.py"], from_commit="main", to_commit="dev")
        ['main..dev', '--', 'a.py']
    """
    args: list[str] = []
    if cached:
        args.append("--cached")

    if from_commit and to_commit:
        args.append(f"{from_commit}{_range_operator(use_three_dot_range)}{to_commit}")
    elif from_commit:
        args.append(from_commit)
    elif to_commit:
        args.append(to_commit)

    if files:
        args.extend([GitOperationDefaults.PATHSPEC_SEPARATOR, *files])
    return args


def _range_operator(use_three_dot_range: bool) -> str:
    if use_three_dot_range:
        return GitOperationDefaults.THREE_DOT_RANGE
    return GitOperationDefaults.TWO_DOT_RANGE


def _diff_message(
    files: Optional[Sequence[str]],
    cached: bool,
    from_commit: Optional[str],
    to_commit: Optional[str],
    use_three_dot_range: bool,
) -> str:
    if from_commit and to_commit:
        return f"Diff for {from_commit}{_range_operator(use_three_dot_range)}{to_commit}"
    if from_commit:
        return f"Diff from {from_commit} to working tree"
    if to_commit:
        return f"Diff to {to_commit}"
    if cached:
        return "Diff for staged changes"
    return f"Diff for {len(files) if files else 'all'} file(s)"


class FileOperations:
    def __init__(self, get_git: ProviderFactory[FileCapable]):
        self.get_git = get_git

    @operation_boundary("get diff")
    async def git_diff(
        self,
        files: Optional[list[str]] = None,
        cached: bool = False,
        from_commit: Optional[str] = None,
        to_commit: Optional[str] = None,
        use_three_dot_range: bool = False,
        repo_path: Optional[str] = None,
    ) -> OperationResponse:
        git = await self.get_git(repo_path)
        args = build_diff_args(files, cached, from_commit, to_commit, use_three_dot_range)
        diff = await git.diff(args)

        # Same arguments, only the pathspec separator removed
        summary_args = [a for a in args if a != GitOperationDefaults.PATHSPEC_SEPARATOR]
        summary = await git.diff_summary(summary_args)

        return OperationResponse.ok(
            _diff_message(files, cached, from_commit, to_commit, use_three_dot_range),
            data={"summary": summary.model_dump(), "diff": diff},
        )

    @operation_boundary("stage files")
    async def git_add(self, files: list[str], repo_path: Optional[str] = None) -> OperationResponse:
        git = await self.get_git(repo_path)
        await git.stage(files)
        return OperationResponse.ok(f"Staged {len(files)} file(s): {', '.join(files)}")

    @operation_boundary("reset")
    async def git_reset(
        self,
        files: Optional[list[str]] = None,
        mode: Optional[str] = None,
        commit: Optional[str] = None,
        repo_path: Optional[str] = None,
    ) -> OperationResponse:
        git = await self.get_git(repo_path)
        target = commit or GitOperationDefaults.DEFAULT_REF

        if files:
            await git.unstage_or_reset([target, *files])
            return OperationResponse.ok(f"Unstaged {len(files)} file(s): {', '.join(files)}")

        mode = mode or GitOperationDefaults.DEFAULT_RESET_MODE
        await git.unstage_or_reset([f"--{mode}", target])
        if mode == "hard":
            logger.warning(f"Hard reset to {target}, uncommitted changes discarded")
        return OperationResponse.ok(f"Reset to {target} ({mode} mode)")

    @operation_boundary("restore files")
    async def git_restore(
        self, files: list[str], staged: bool = False, repo_path: Optional[str] = None
    ) -> OperationResponse:
        git = await self.get_git(repo_path)
        options = ["--staged", *files] if staged else list(files)
        await git.invoke_raw(["restore", *options])
        source = "staging" if staged else "HEAD"
        return OperationResponse.ok(f"Restored {len(files)} file(s) from {source}")
