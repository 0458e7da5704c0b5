"""Commit and history operations: commit, log and show."""

import logging
from typing import Optional

from ..constants import GitOperationDefaults
from ..error_handling import operation_boundary
from ..protocols import CommitCapable, ProviderFactory
from ..types import OperationResponse

logger = logging.getLogger(__name__)

# Log entries are reported without body and refs
_LOG_FIELDS = {"hash", "date", "message", "author_name", "author_email"}


class CommitOperations:
    def __init__(self, get_git: ProviderFactory[CommitCapable]):
        self.get_git = get_git

    @operation_boundary("commit")
    async def git_commit(
        self,
        message: str,
        files: Optional[list[str]] = None,
        amend: bool = False,
        repo_path: Optional[str] = None,
    ) -> OperationResponse:
        git = await self.get_git(repo_path)
        options = {"--amend": None} if amend else {}

        if files:
            await git.stage(files)
        result = await git.commit(message, options=options)

        logger.info(f"Created commit {result.commit} on {result.branch or 'HEAD'}")
        return OperationResponse.ok(
            f"Committed changes: {result.commit}",
            data={"commit": result.commit, "summary": result.summary.model_dump()},
        )

    @operation_boundary("get log")
    async def git_log(
        self,
        max_count: Optional[int] = None,
        file: Optional[str] = None,
        repo_path: Optional[str] = None,
    ) -> OperationResponse:
        git = await self.get_git(repo_path)
        log = await git.get_log(max_count=max_count, file=file)
        commits = [entry.model_dump(include=_LOG_FIELDS) for entry in log.all]
        return OperationResponse.ok(f"Retrieved {len(commits)} commit(s)", data=commits)

    @operation_boundary("show commit")
    async def git_show(
        self, ref: Optional[str] = None, repo_path: Optional[str] = None
    ) -> OperationResponse:
        git = await self.get_git(repo_path)
        ref = ref or GitOperationDefaults.DEFAULT_REF
        return OperationResponse.ok(f"Details for {ref}", data=await git.show([ref]))
