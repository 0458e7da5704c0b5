"""Branch operations: list, create, delete, checkout and merge."""

import logging
from typing import Optional

from ..constants import GitOperationDefaults
from ..error_handling import operation_boundary
from ..protocols import BranchCapable, ProviderFactory
from ..types import OperationResponse

logger = logging.getLogger(__name__)


class BranchOperations:
    def __init__(self, get_git: ProviderFactory[BranchCapable]):
        self.get_git = get_git

    @operation_boundary("list branches")
    async def git_branch_list(self, repo_path: Optional[str] = None) -> OperationResponse:
        git = await self.get_git(repo_path)
        summary = await git.list_branches()
        data = [
            {
                "name": name,
                "current": name == summary.current,
                "commit": summary.branches[name].commit if name in summary.branches else "",
            }
            for name in summary.all
        ]
        return OperationResponse.ok(f"Found {len(data)} branches", data=data)

    @operation_boundary("create branch")
    async def git_branch_create(
        self, branch_name: str, repo_path: Optional[str] = None
    ) -> OperationResponse:
        git = await self.get_git(repo_path)
        await git.mutate_branches([branch_name])
        return OperationResponse.ok(f"Created branch '{branch_name}'")

    @operation_boundary("delete branch")
    async def git_branch_delete(
        self, branch_name: str, force: bool = False, repo_path: Optional[str] = None
    ) -> OperationResponse:
        git = await self.get_git(repo_path)
        await git.mutate_branches(["-D" if force else "-d", branch_name])
        return OperationResponse.ok(f"Deleted branch '{branch_name}'")

    @operation_boundary("checkout")
    async def git_checkout(
        self, ref: str, create_branch: bool = False, repo_path: Optional[str] = None
    ) -> OperationResponse:
        git = await self.get_git(repo_path)
        if create_branch:
            await git.checkout_new_branch(ref, GitOperationDefaults.DEFAULT_REF)
            return OperationResponse.ok(f"Created and switched to branch '{ref}'")

        await git.checkout(ref)
        return OperationResponse.ok(f"Switched to '{ref}'")

    @operation_boundary("merge")
    async def git_merge(
        self, branch: str, no_fast_forward: bool = False, repo_path: Optional[str] = None
    ) -> OperationResponse:
        git = await self.get_git(repo_path)
        args = ["--no-ff", branch] if no_fast_forward else [branch]
        result = await git.merge(args)
        if result.conflicts:
            logger.warning(f"Merge of {branch} reported conflicts: {result.conflicts}")
        return OperationResponse.ok(f"Merged branch '{branch}'", data=result.model_dump())
