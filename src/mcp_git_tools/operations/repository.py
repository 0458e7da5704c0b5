"""Repository lifecycle operations: status, init and clone."""

import logging
import os
import posixpath
from typing import Optional

from ..error_handling import operation_boundary
from ..protocols import ProviderFactory, RepositoryCapable
from ..types import OperationResponse, StatusSnapshot

logger = logging.getLogger(__name__)


def _status_data(status: StatusSnapshot) -> dict:
    return {
        "modified": status.modified,
        "added": status.created,
        "deleted": status.deleted,
        "renamed": [str(entry) for entry in status.renamed],
        "conflicted": status.conflicted,
        "notAdded": status.not_added,
        "staged": status.staged,
        "current": status.current,
        "tracking": status.tracking,
        "ahead": status.ahead,
        "behind": status.behind,
        "isClean": status.is_clean(),
    }


def clone_target(url: str) -> str:
    """Default clone directory: the URL's last segment without ``.git``."""
    name = posixpath.basename(url.rstrip("/"))
    return name[: -len(".git")] if name.endswith(".git") else name


class RepositoryOperations:
    def __init__(self, get_git: ProviderFactory[RepositoryCapable]):
        self.get_git = get_git

    @operation_boundary("get status")
    async def git_status(self, repo_path: Optional[str] = None) -> OperationResponse:
        git = await self.get_git(repo_path)
        status = await git.get_status()
        return OperationResponse.ok(
            "Working tree clean" if status.is_clean() else "Working tree has changes",
            data=_status_data(status),
        )

    @operation_boundary("initialize repository")
    async def git_init(self, repo_path: Optional[str] = None) -> OperationResponse:
        git = await self.get_git(repo_path, required=False)
        await git.initialize()
        return OperationResponse.ok(
            f"Initialized empty Git repository in {repo_path or os.getcwd()}"
        )

    @operation_boundary("clone repository")
    async def git_clone(
        self,
        url: str,
        target_path: Optional[str] = None,
        repo_path: Optional[str] = None,
    ) -> OperationResponse:
        git = await self.get_git(repo_path, required=False)
        target = target_path or clone_target(url)
        await git.clone_from(url, target)
        logger.info(f"Cloned {url} into {target}")
        return OperationResponse.ok(f"Cloned repository from {url} to {target}")
