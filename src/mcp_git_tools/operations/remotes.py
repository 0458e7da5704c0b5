"""Remote operations: list, add, remove, fetch, pull and push."""

import logging
from typing import Optional

from ..constants import GitOperationDefaults
from ..error_handling import operation_boundary
from ..protocols import ProviderFactory, RemoteCapable
from ..types import OperationResponse

logger = logging.getLogger(__name__)


def _remote_label(remote: Optional[str], branch: Optional[str]) -> str:
    label = remote or GitOperationDefaults.DEFAULT_REMOTE
    return f"{label}/{branch}" if branch else label


class RemoteOperations:
    def __init__(self, get_git: ProviderFactory[RemoteCapable]):
        self.get_git = get_git

    @operation_boundary("list remotes")
    async def git_remote_list(self, repo_path: Optional[str] = None) -> OperationResponse:
        git = await self.get_git(repo_path)
        remotes = await git.list_remotes(True)
        data = [
            {"name": r.name, "refs": {"fetch": r.refs.fetch or "", "push": r.refs.push or ""}}
            for r in remotes
        ]
        return OperationResponse.ok(f"Found {len(data)} remote(s)", data=data)

    @operation_boundary("add remote")
    async def git_remote_add(
        self, name: str, url: str, repo_path: Optional[str] = None
    ) -> OperationResponse:
        git = await self.get_git(repo_path)
        await git.add_remote(name, url)
        return OperationResponse.ok(f"Added remote '{name}' ({url})")

    @operation_boundary("remove remote")
    async def git_remote_remove(
        self, name: str, repo_path: Optional[str] = None
    ) -> OperationResponse:
        git = await self.get_git(repo_path)
        await git.invoke_raw(["remote", "remove", name])
        return OperationResponse.ok(f"Removed remote '{name}'")

    @operation_boundary("fetch")
    async def git_fetch(
        self,
        remote: Optional[str] = None,
        branch: Optional[str] = None,
        repo_path: Optional[str] = None,
    ) -> OperationResponse:
        git = await self.get_git(repo_path)
        if remote and branch:
            await git.fetch(remote, branch)
            return OperationResponse.ok(f"Fetched from '{remote}' ({branch})")
        if remote:
            await git.fetch(remote)
            return OperationResponse.ok(f"Fetched from '{remote}'")

        await git.fetch()
        return OperationResponse.ok("Fetched from all remotes")

    @operation_boundary("pull")
    async def git_pull(
        self,
        remote: Optional[str] = None,
        branch: Optional[str] = None,
        rebase: bool = False,
        repo_path: Optional[str] = None,
    ) -> OperationResponse:
        git = await self.get_git(repo_path)
        options = {"--rebase": None} if rebase else {}
        await git.pull(remote, branch, options)
        return OperationResponse.ok(f"Pulled from {_remote_label(remote, branch)}")

    @operation_boundary("push")
    async def git_push(
        self,
        remote: Optional[str] = None,
        branch: Optional[str] = None,
        force: bool = False,
        set_upstream: bool = False,
        repo_path: Optional[str] = None,
    ) -> OperationResponse:
        git = await self.get_git(repo_path)
        options = []
        if force:
            options.append("--force")
        if set_upstream:
            options.append("--set-upstream")
        await git.push(remote, branch, options)
        if force:
            logger.warning(f"Force pushed to {_remote_label(remote, branch)}")
        return OperationResponse.ok(f"Pushed to {_remote_label(remote, branch)}")
