"""Read-only projections of repository state returned by provider primitives.

Every model here is a snapshot taken at the instant of one primitive call.
Nothing is cached or mutated after construction; a new call produces a new
snapshot.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _Snapshot(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class FileStatus(_Snapshot):
    """One porcelain status entry."""

    path: str
    index: str = " "
    working_dir: str = " "


class RenamedFile(_Snapshot):
    from_path: str = Field(alias="from")
    to_path: str = Field(alias="to")

    def __str__(self) -> str:
        return f"{self.from_path} -> {self.to_path}"


class StatusSnapshot(_Snapshot):
    """Working tree status.

    ``current`` is ``None`` on a detached HEAD and ``tracking`` is ``None``
    when the branch has no upstream.
    """

    modified: list[str] = Field(default_factory=list)
    created: list[str] = Field(default_factory=list)
    deleted: list[str] = Field(default_factory=list)
    renamed: list[RenamedFile] = Field(default_factory=list)
    conflicted: list[str] = Field(default_factory=list)
    not_added: list[str] = Field(default_factory=list)
    staged: list[str] = Field(default_factory=list)
    files: list[FileStatus] = Field(default_factory=list)
    current: Optional[str] = None
    tracking: Optional[str] = None
    ahead: int = 0
    behind: int = 0

    def is_clean(self) -> bool:
        return not self.files


class BranchInfo(_Snapshot):
    name: str
    commit: str = ""
    label: str = ""
    current: bool = False


class BranchSummary(_Snapshot):
    detached: bool = False
    current: str = ""
    all: list[str] = Field(default_factory=list)
    branches: dict[str, BranchInfo] = Field(default_factory=dict)


class CommitInfo(_Snapshot):
    hash: str
    date: str
    message: str
    author_name: str
    author_email: str
    body: str = ""
    refs: str = ""


class LogResult(_Snapshot):
    """Commit history, most recent first."""

    all: list[CommitInfo] = Field(default_factory=list)
    total: int = 0
    latest: Optional[CommitInfo] = None


class DiffFileSummary(_Snapshot):
    file: str
    changes: int = 0
    insertions: int = 0
    deletions: int = 0
    binary: bool = False


class DiffSummary(_Snapshot):
    files: list[DiffFileSummary] = Field(default_factory=list)
    insertions: int = 0
    deletions: int = 0
    changed: int = 0


class ChangeSummary(_Snapshot):
    changes: int = 0
    insertions: int = 0
    deletions: int = 0


class CommitResult(_Snapshot):
    commit: str
    branch: str = ""
    author: Optional[str] = None
    summary: ChangeSummary = Field(default_factory=ChangeSummary)


class MergeResult(_Snapshot):
    merges: list[str] = Field(default_factory=list)
    conflicts: list[str] = Field(default_factory=list)
    result: str = "success"
    summary: ChangeSummary = Field(default_factory=ChangeSummary)


class StashEntry(_Snapshot):
    hash: str
    date: str
    message: str
    index: int


class StashList(_Snapshot):
    all: list[StashEntry] = Field(default_factory=list)
    total: int = 0
    latest: Optional[StashEntry] = None


class RemoteRefs(_Snapshot):
    fetch: str = ""
    push: str = ""


class RemoteInfo(_Snapshot):
    name: str
    refs: RemoteRefs = Field(default_factory=RemoteRefs)
