"""Parsers turning git command output into typed snapshots.

Each parser is a pure function over the text a single git command printed,
so they can be tested without a repository.
"""

import re
from typing import Optional

from ..constants import GitOutputMarkers
from ..types import (
    ChangeSummary,
    CommitResult,
    DiffFileSummary,
    DiffSummary,
    FileStatus,
    MergeResult,
    RenamedFile,
    StashEntry,
    StashList,
    StatusSnapshot,
)

FS = GitOutputMarkers.FIELD_SEPARATOR
RS = GitOutputMarkers.RECORD_SEPARATOR

# --format string matching parse_stash_list
STASH_FORMAT = f"%H{FS}%aI{FS}%gs{RS}"

_BRANCH_HEADER_RE = re.compile(
    r"^(?P<branch>.+?)(?:\.\.\.(?P<tracking>\S+))?(?: \[(?P<counts>[^\]]*)\])?$"
)
_AHEAD_RE = re.compile(r"ahead (\d+)")
_BEHIND_RE = re.compile(r"behind (\d+)")
_CHANGE_SUMMARY_RE = re.compile(
    r"(\d+) files? changed(?:, (\d+) insertions?\(\+\))?(?:, (\d+) deletions?\(-\))?"
)
_COMMIT_HEADER_RE = re.compile(
    r"^\[(?P<branch>.+?) (?:\(root-commit\) )?(?P<commit>[0-9a-f]+)\]", re.MULTILINE
)
_COMMIT_AUTHOR_RE = re.compile(r"^\s*Author:\s*(?P<author>.+)$", re.MULTILINE)
_MERGE_AUTO_RE = re.compile(r"^Auto-merging (?P<file>.+)$", re.MULTILINE)
_MERGE_CONFLICT_RE = re.compile(r"^CONFLICT \([^)]*\):.* in (?P<file>.+)$", re.MULTILINE)

_STAGED_INDEX_CODES = frozenset("MADRCT")


def _parse_branch_header(header: str) -> tuple[Optional[str], Optional[str], int, int]:
    """Split ``## main...origin/main [ahead 1, behind 2]`` into its parts."""
    text = header[3:] if header.startswith("## ") else header

    if text.startswith(GitOutputMarkers.DETACHED_HEAD):
        return None, None, 0, 0
    for prefix in GitOutputMarkers.NO_COMMITS_PREFIXES:
        if text.startswith(prefix):
            text = text[len(prefix):]
            break

    match = _BRANCH_HEADER_RE.match(text)
    if not match:
        return text, None, 0, 0

    counts = match.group("counts") or ""
    ahead = _AHEAD_RE.search(counts)
    behind = _BEHIND_RE.search(counts)
    return (
        match.group("branch"),
        match.group("tracking"),
        int(ahead.group(1)) if ahead else 0,
        int(behind.group(1)) if behind else 0,
    )


def parse_status(output: str) -> StatusSnapshot:
    """Parse ``git status --porcelain -b -z`` output."""
    modified: list[str] = []
    created: list[str] = []
    deleted: list[str] = []
    renamed: list[RenamedFile] = []
    conflicted: list[str] = []
    not_added: list[str] = []
    staged: list[str] = []
    files: list[FileStatus] = []
    current: Optional[str] = None
    tracking: Optional[str] = None
    ahead = behind = 0

    tokens = output.split("\0")
    i = 0
    while i < len(tokens):
        entry = tokens[i]
        i += 1
        if not entry:
            continue
        if entry.startswith("## "):
            current, tracking, ahead, behind = _parse_branch_header(entry)
            continue

        code, path = entry[:2], entry[3:]
        index, working_dir = code[0], code[1]

        if code == GitOutputMarkers.IGNORED_CODE:
            continue

        files.append(FileStatus(path=path, index=index, working_dir=working_dir))

        if code == GitOutputMarkers.UNTRACKED_CODE:
            not_added.append(path)
            continue
        if code in GitOutputMarkers.CONFLICT_CODES:
            conflicted.append(path)
            continue

        if index in "RC" or working_dir in "RC":
            # -z prints the destination first, then the original path
            original = tokens[i] if i < len(tokens) else ""
            i += 1
            if index == "R" or working_dir == "R":
                renamed.append(RenamedFile(from_path=original, to_path=path))
        if "M" in code:
            modified.append(path)
        if index == "A":
            created.append(path)
        if "D" in code:
            deleted.append(path)
        if index in _STAGED_INDEX_CODES:
            staged.append(path)

    return StatusSnapshot(
        modified=modified,
        created=created,
        deleted=deleted,
        renamed=renamed,
        conflicted=conflicted,
        not_added=not_added,
        staged=staged,
        files=files,
        current=current,
        tracking=tracking,
        ahead=ahead,
        behind=behind,
    )


def parse_change_summary(output: str) -> ChangeSummary:
    """Extract counts from ``N files changed, X insertions(+), Y deletions(-)``."""
    match = _CHANGE_SUMMARY_RE.search(output)
    if not match:
        return ChangeSummary()
    return ChangeSummary(
        changes=int(match.group(1)),
        insertions=int(match.group(2) or 0),
        deletions=int(match.group(3) or 0),
    )


def parse_commit(output: str) -> CommitResult:
    """Parse the output of ``git commit``."""
    header = _COMMIT_HEADER_RE.search(output)
    author = _COMMIT_AUTHOR_RE.search(output)
    return CommitResult(
        commit=header.group("commit") if header else "",
        branch=header.group("branch") if header else "",
        author=author.group("author").strip() if author else None,
        summary=parse_change_summary(output),
    )


def parse_merge(output: str) -> MergeResult:
    """Parse the output of ``git merge``."""
    conflicts = [m.group("file").strip() for m in _MERGE_CONFLICT_RE.finditer(output)]
    return MergeResult(
        merges=[m.group("file").strip() for m in _MERGE_AUTO_RE.finditer(output)],
        conflicts=conflicts,
        result="conflicts" if conflicts else "success",
        summary=parse_change_summary(output),
    )


def parse_numstat(output: str) -> DiffSummary:
    """Parse ``git diff --numstat``; binary files report ``-`` counts."""
    files: list[DiffFileSummary] = []
    insertions = deletions = 0

    for line in output.splitlines():
        parts = line.split("\t", 2)
        if len(parts) != 3:
            continue
        added, removed, path = parts
        if added == "-" and removed == "-":
            files.append(DiffFileSummary(file=path, binary=True))
            continue
        file_insertions, file_deletions = int(added), int(removed)
        insertions += file_insertions
        deletions += file_deletions
        files.append(
            DiffFileSummary(
                file=path,
                changes=file_insertions + file_deletions,
                insertions=file_insertions,
                deletions=file_deletions,
            )
        )

    return DiffSummary(
        files=files, insertions=insertions, deletions=deletions, changed=len(files)
    )


def parse_stash_list(output: str) -> StashList:
    """Parse ``git stash list`` printed with ``STASH_FORMAT``."""
    entries: list[StashEntry] = []
    for record in output.split(RS):
        record = record.strip("\n")
        if not record:
            continue
        fields = record.split(FS)
        if len(fields) < 3:
            continue
        entries.append(
            StashEntry(
                hash=fields[0], date=fields[1], message=fields[2], index=len(entries)
            )
        )
    return StashList(all=entries, total=len(entries), latest=entries[0] if entries else None)
