"""GitPython binding of the git provider protocol.

Mutating commands run through GitPython's ``git.cmd.Git`` with the resolved
repository root as working directory, so the same binding serves roots that
are not yet repositories (init, clone). Branches, remotes and history are read
from a ``git.Repo`` object model instead of parsed command output. Each
blocking call is moved off the event loop with ``asyncio.to_thread``.
"""

import asyncio
import logging
import os
import re
from pathlib import Path
from typing import Callable, Optional, Sequence, TypeVar

from git import Commit, Git, Head, Remote, RemoteReference, Repo, TagReference
from git.exc import (
    GitCommandError,
    GitCommandNotFound,
    InvalidGitRepositoryError,
    NoSuchPathError,
)

from ..error_handling import GitProviderError, NotAGitRepositoryError
from ..protocols import CommandOptions
from ..types import (
    BranchInfo,
    BranchSummary,
    CommitInfo,
    CommitResult,
    DiffSummary,
    LogResult,
    MergeResult,
    RemoteInfo,
    RemoteRefs,
    StashList,
    StatusSnapshot,
)
from . import parsers

logger = logging.getLogger(__name__)

T = TypeVar("T")

_STREAM_RE = re.compile(r"std(?:err|out): '(?P<text>.*)'", re.DOTALL)

# stdin is not a terminal, so no editor or credential prompt may block a call
_NON_INTERACTIVE_ENV = {"GIT_EDITOR": "true", "GIT_TERMINAL_PROMPT": "0"}


def _error_message(exc: GitCommandError) -> str:
    """Return git's own text without GitPython's command decoration.

    stderr is preferred. Some failures, such as "nothing to commit" or a
    conflicted merge, are reported on stdout only.
    """
    for stream in (exc.stderr, exc.stdout):
        match = _STREAM_RE.search(str(stream or ""))
        if match and match.group("text").strip():
            return match.group("text").strip()
    return str(exc)


def _provider_error(exc: GitCommandError) -> GitProviderError:
    command = exc.command if isinstance(exc.command, (list, tuple)) else [exc.command]
    return GitProviderError(_error_message(exc), command=[str(part) for part in command])


def _branch_summary(repo: Repo) -> BranchSummary:
    """Local heads first, then remote-tracking branches as ``remotes/<name>``."""
    if not repo.head.is_valid():
        return BranchSummary()

    detached = repo.head.is_detached
    if detached:
        current = f"(HEAD detached at {repo.head.commit.hexsha[:7]})"
        entries: list[tuple[str, Commit]] = [(current, repo.head.commit)]
    else:
        current = repo.active_branch.name
        entries = []
    entries.extend((head.name, head.commit) for head in repo.heads)
    for remote in repo.remotes:
        entries.extend(
            (f"remotes/{ref.name}", ref.commit)
            for ref in remote.refs
            if ref.remote_head != "HEAD"
        )

    branches = {
        name: BranchInfo(
            name=name, commit=commit.hexsha, label=commit.summary, current=name == current
        )
        for name, commit in entries
    }
    return BranchSummary(
        detached=detached, current=current, all=list(branches), branches=branches
    )


def _ref_labels(repo: Repo) -> dict[str, list[str]]:
    """Ref names per commit sha, in the form ``git log --format=%D`` prints."""
    active = None if repo.head.is_detached else repo.active_branch.name
    labels: dict[str, list[str]] = {}
    for ref in repo.refs:
        if isinstance(ref, RemoteReference) and ref.remote_head == "HEAD":
            continue
        if isinstance(ref, Head) and ref.name == active:
            continue
        label = f"tag: {ref.name}" if isinstance(ref, TagReference) else ref.name
        labels.setdefault(ref.commit.hexsha, []).append(label)

    head_label = "HEAD" if active is None else f"HEAD -> {active}"
    labels.setdefault(repo.head.commit.hexsha, []).insert(0, head_label)
    return labels


def _commit_info(commit: Commit, labels: dict[str, list[str]]) -> CommitInfo:
    _, _, body = str(commit.message).partition("\n")
    return CommitInfo(
        hash=commit.hexsha,
        date=commit.authored_datetime.isoformat(),
        message=commit.summary,
        refs=", ".join(labels.get(commit.hexsha, [])),
        body=body.strip(),
        author_name=commit.author.name or "",
        author_email=commit.author.email or "",
    )


def _remote_info(remote: Remote, verbose: bool) -> RemoteInfo:
    if not verbose:
        return RemoteInfo(name=remote.name)
    fetch_url = next(remote.urls, "")
    push_url = remote.config_reader.get_value("pushurl", fetch_url)
    return RemoteInfo(
        name=remote.name, refs=RemoteRefs(fetch=fetch_url, push=str(push_url))
    )


def _flatten_options(options: Optional[CommandOptions]) -> list[str]:
    args: list[str] = []
    for flag, value in (options or {}).items():
        args.append(flag)
        if value is not None:
            args.append(str(value))
    return args


def _remote_args(remote: Optional[str], branch: Optional[str]) -> list[str]:
    # A branch without a remote has no positional meaning to git
    if not remote:
        return []
    return [remote, branch] if branch else [remote]


class GitPythonProvider:
    """Provider bound to one repository root for the lifetime of one call."""

    def __init__(self, base_path: str | Path):
        self._base_path = str(base_path)
        self._git = Git(self._base_path)

    @property
    def base_path(self) -> str:
        return self._base_path

    def _execute(self, args: Sequence[str]) -> str:
        command = ["git", *args]
        logger.debug(f"Running {' '.join(command)} in {self._base_path}")
        try:
            return self._git.execute(command, env=_NON_INTERACTIVE_ENV)
        except GitCommandError as e:
            raise GitProviderError(_error_message(e), command=command) from e
        except GitCommandNotFound as e:
            raise GitProviderError(str(e), command=command) from e

    async def _run(self, *args: str) -> str:
        return await asyncio.to_thread(self._execute, list(args))

    def _open_repo(self) -> Repo:
        try:
            return Repo(self._base_path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise NotAGitRepositoryError(self._base_path) from e

    async def _read(self, reader: Callable[[Repo], T]) -> T:
        """Run ``reader`` against the repository object model off the event loop."""

        def run() -> T:
            repo = self._open_repo()
            try:
                return reader(repo)
            except GitCommandError as e:
                raise _provider_error(e) from e
            except ValueError as e:
                # GitPython reports missing or unborn refs as ValueError
                raise GitProviderError(str(e)) from e
            finally:
                repo.close()

        return await asyncio.to_thread(run)

    # Repository lifecycle

    async def is_repository(self) -> bool:
        try:
            output = await self._run("rev-parse", "--is-inside-work-tree")
        except GitProviderError:
            return False
        return output.strip() == "true"

    async def get_status(self) -> StatusSnapshot:
        output = await self._run("status", "--porcelain", "-b", "-z", "-uall")
        return parsers.parse_status(output)

    async def initialize(self) -> None:
        await asyncio.to_thread(os.makedirs, self._base_path, exist_ok=True)
        await self._run("init")

    async def clone_from(self, url: str, target_path: str) -> None:
        await asyncio.to_thread(os.makedirs, self._base_path, exist_ok=True)
        await self._run("clone", url, target_path)

    # Branches

    async def list_branches(self) -> BranchSummary:
        return await self._read(_branch_summary)

    async def mutate_branches(self, args: Sequence[str]) -> None:
        await self._run("branch", *args)

    async def checkout(self, ref: str) -> None:
        await self._run("checkout", ref)

    async def checkout_new_branch(self, name: str, start_point: str) -> None:
        await self._run("checkout", "-b", name, start_point)

    async def merge(self, args: Sequence[str]) -> MergeResult:
        output = await self._run("merge", *args)
        return parsers.parse_merge(output)

    # Files and staging

    async def diff(self, args: Sequence[str]) -> str:
        return await self._run("diff", *args)

    async def diff_summary(self, args: Sequence[str]) -> DiffSummary:
        output = await self._run("diff", "--numstat", *args)
        return parsers.parse_numstat(output)

    async def stage(self, files: Sequence[str]) -> None:
        await self._run("add", "--", *files)

    async def unstage_or_reset(self, args: Sequence[str]) -> None:
        await self._run("reset", *args)

    async def invoke_raw(self, args: Sequence[str]) -> str:
        return await self._run(*args)

    # Commits and history

    async def commit(
        self,
        message: str,
        files: Optional[Sequence[str]] = None,
        options: Optional[CommandOptions] = None,
    ) -> CommitResult:
        args = ["commit", "-m", message, *_flatten_options(options)]
        if files:
            args.extend(["--", *files])
        output = await self._run(*args)
        return parsers.parse_commit(output)

    async def get_log(
        self, max_count: Optional[int] = None, file: Optional[str] = None
    ) -> LogResult:
        kwargs: dict = {}
        if max_count:
            kwargs["max_count"] = max_count
        if file:
            kwargs["paths"] = file

        def read(repo: Repo) -> LogResult:
            commits = list(repo.iter_commits(**kwargs))
            labels = _ref_labels(repo) if commits else {}
            entries = [_commit_info(commit, labels) for commit in commits]
            return LogResult(
                all=entries, total=len(entries), latest=entries[0] if entries else None
            )

        return await self._read(read)

    async def show(self, args: Sequence[str]) -> str:
        return await self._run("show", *args)

    # Rebase and stash

    async def rebase(self, args: Sequence[str]) -> None:
        await self._run("rebase", *args)

    async def stash(self, args: Sequence[str]) -> None:
        await self._run("stash", *args)

    async def list_stashes(self) -> StashList:
        output = await self._run("stash", "list", f"--format={parsers.STASH_FORMAT}")
        return parsers.parse_stash_list(output)

    # Remotes

    async def list_remotes(self, verbose: bool) -> list[RemoteInfo]:
        return await self._read(
            lambda repo: [_remote_info(remote, verbose) for remote in repo.remotes]
        )

    async def add_remote(self, name: str, url: str) -> None:
        await self._run("remote", "add", name, url)

    async def fetch(
        self, remote: Optional[str] = None, branch: Optional[str] = None
    ) -> None:
        await self._run("fetch", *_remote_args(remote, branch))

    async def pull(
        self,
        remote: Optional[str] = None,
        branch: Optional[str] = None,
        options: Optional[CommandOptions] = None,
    ) -> None:
        await self._run("pull", *_flatten_options(options), *_remote_args(remote, branch))

    async def push(
        self,
        remote: Optional[str] = None,
        branch: Optional[str] = None,
        options: Optional[Sequence[str]] = None,
    ) -> None:
        await self._run("push", *(options or []), *_remote_args(remote, branch))


class GitProviderFactory:
    """Build a ``GitPythonProvider`` per call.

    The root is the explicit ``repo_path``, else ``default_path``, else the
    process working directory, resolved once when the provider is built.
    """

    def __init__(self, default_path: str | Path | None = None):
        self.default_path = str(default_path) if default_path else None

    def resolve(self, repo_path: Optional[str] = None) -> str:
        return repo_path or self.default_path or os.getcwd()

    async def __call__(
        self, repo_path: Optional[str] = None, required: bool = True
    ) -> GitPythonProvider:
        base_path = self.resolve(repo_path)
        provider = GitPythonProvider(base_path)
        if required and not await provider.is_repository():
            raise NotAGitRepositoryError(base_path)
        return provider


get_git = GitProviderFactory()
