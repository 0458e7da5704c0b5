"""Rebase, stash, cherry-pick and in-progress operation control."""

import logging
from typing import Optional

from ..error_handling import operation_boundary
from ..protocols import AdvancedCapable, ProviderFactory
from ..types import OperationResponse

logger = logging.getLogger(__name__)


def _stash_ref(index: int) -> str:
    return f"stash@{{{index}}}"


class AdvancedOperations:
    def __init__(self, get_git: ProviderFactory[AdvancedCapable]):
        self.get_git = get_git

    @operation_boundary("rebase")
    async def git_rebase(
        self, branch: str, interactive: bool = False, repo_path: Optional[str] = None
    ) -> OperationResponse:
        git = await self.get_git(repo_path)
        await git.rebase(["-i", branch] if interactive else [branch])
        return OperationResponse.ok(f"Rebased onto '{branch}'")

    @operation_boundary("stash")
    async def git_stash(
        self,
        message: Optional[str] = None,
        include_untracked: bool = False,
        repo_path: Optional[str] = None,
    ) -> OperationResponse:
        git = await self.get_git(repo_path)
        args = ["push"]
        if include_untracked:
            args.append("-u")
        if message:
            args.extend(["-m", message])
        await git.stash(args)
        return OperationResponse.ok(f"Stashed changes: {message}" if message else "Stashed changes")

    @operation_boundary("pop stash")
    async def git_stash_pop(
        self, index: Optional[int] = None, repo_path: Optional[str] = None
    ) -> OperationResponse:
        git = await self.get_git(repo_path)
        if index is None:
            await git.stash(["pop"])
            return OperationResponse.ok("Applied most recent stash")

        await git.stash(["pop", _stash_ref(index)])
        return OperationResponse.ok(f"Applied {_stash_ref(index)}")

    @operation_boundary("list stashes")
    async def git_stash_list(self, repo_path: Optional[str] = None) -> OperationResponse:
        git = await self.get_git(repo_path)
        stashes = await git.list_stashes()
        return OperationResponse.ok(
            f"Found {stashes.total} stash(es)",
            data=[entry.model_dump() for entry in stashes.all],
        )

    @operation_boundary("drop stash")
    async def git_stash_drop(
        self, index: Optional[int] = None, repo_path: Optional[str] = None
    ) -> OperationResponse:
        git = await self.get_git(repo_path)
        if index is None:
            await git.stash(["drop"])
            return OperationResponse.ok("Dropped most recent stash")

        await git.stash(["drop", _stash_ref(index)])
        return OperationResponse.ok(f"Dropped {_stash_ref(index)}")

    @operation_boundary("cherry-pick")
    async def git_cherry_pick(
        self, commit: str, repo_path: Optional[str] = None
    ) -> OperationResponse:
        git = await self.get_git(repo_path)
        await git.invoke_raw(["cherry-pick", commit])
        return OperationResponse.ok(f"Cherry-picked commit {commit}")

    @operation_boundary("abort {operation}")
    async def git_abort(
        self, operation: str, repo_path: Optional[str] = None
    ) -> OperationResponse:
        git = await self.get_git(repo_path)
        await git.invoke_raw([operation, "--abort"])
        logger.info(f"Aborted in-progress {operation}")
        return OperationResponse.ok(f"Aborted {operation}")

    @operation_boundary("continue {operation}")
    async def git_continue(
        self, operation: str, repo_path: Optional[str] = None
    ) -> OperationResponse:
        git = await self.get_git(repo_path)
        await git.invoke_raw([operation, "--continue"])
        return OperationResponse.ok(f"Continued {operation}")
