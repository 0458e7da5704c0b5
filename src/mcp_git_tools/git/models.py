"""Pydantic request models for Git tools

Attribute names are snake_case; the wire names advertised in each tool's
input schema are camelCase aliases (``repoPath``, ``branchName``, ...).
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

REPO_PATH_DESCRIPTION = "Path to git repository (defaults to current directory)"


class GitRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    repo_path: Optional[str] = Field(None, description=REPO_PATH_DESCRIPTION)


# Repository management


class GitStatus(GitRequest):
    pass


class GitInit(GitRequest):
    repo_path: Optional[str] = Field(
        None,
        description="Path where to initialize the repository (defaults to current directory)",
    )


class GitClone(GitRequest):
    url: str = Field(description="The URL of the repository to clone")
    target_path: Optional[str] = Field(
        None, description="The path where to clone the repository"
    )
    repo_path: Optional[str] = Field(
        None, description="Base path for the clone operation (defaults to current directory)"
    )


# Branches


class GitBranchList(GitRequest):
    pass


class GitBranchCreate(GitRequest):
    branch_name: str = Field(description="Name of the branch to create")


class GitBranchDelete(GitRequest):
    branch_name: str = Field(description="Name of the branch to delete")
    force: bool = Field(
        False, description="Force delete the branch even if not fully merged"
    )


class GitCheckout(GitRequest):
    ref: str = Field(description="The branch name, tag, or commit to checkout")
    create_branch: bool = Field(False, description="Create a new branch before checking out")


class GitMerge(GitRequest):
    branch: str = Field(description="The branch to merge into the current branch")
    no_fast_forward: bool = Field(
        False,
        description="Create a merge commit even when the merge resolves as a fast-forward",
    )


# Files and staging


class GitDiff(GitRequest):
    files: Optional[list[str]] = Field(
        None, description="Specific files to show diff for (defaults to all files)"
    )
    cached: bool = Field(False, description="Show diff of staged changes")
    from_commit: Optional[str] = Field(
        None,
        description='Starting commit/branch for comparison (e.g., "HEAD", "main", commit hash)',
    )
    to_commit: Optional[str] = Field(
        None,
        description=(
            'Ending commit/branch for comparison (e.g., "origin/master", commit hash). '
            "Defaults to working tree if not specified"
        ),
    )
    use_three_dot_range: bool = Field(
        False,
        description=(
            "Use three-dot range (fromCommit...toCommit) to show changes on "
            "toCommit since it diverged from fromCommit"
        ),
    )


class GitAdd(GitRequest):
    files: list[str] = Field(description='Files to stage (use ["."] to stage all files)')


class GitReset(GitRequest):
    files: Optional[list[str]] = Field(
        None, description="Specific files to unstage (if not provided, resets to commit)"
    )
    mode: Optional[Literal["soft", "mixed", "hard"]] = Field(
        None,
        description=(
            "Reset mode: soft (keep changes staged), mixed (keep changes unstaged), "
            "hard (discard changes)"
        ),
    )
    commit: Optional[str] = Field(
        None, description="Commit hash or reference to reset to (defaults to HEAD)"
    )


class GitRestore(GitRequest):
    files: list[str] = Field(description="Files to restore")
    staged: bool = Field(False, description="Restore files in the staging area")


# Commits and history


class GitCommit(GitRequest):
    message: str = Field(description="Commit message")
    files: Optional[list[str]] = Field(
        None, description="Specific files to commit (will be staged automatically)"
    )
    amend: bool = Field(False, description="Amend the previous commit")


class GitLog(GitRequest):
    max_count: Optional[int] = Field(
        None, ge=1, description="Maximum number of commits to show"
    )
    file: Optional[str] = Field(None, description="Show commits for a specific file")


class GitShow(GitRequest):
    ref: Optional[str] = Field(
        None, description="The commit reference to show (defaults to HEAD)"
    )


# Rebase, stash and cherry-pick


class GitRebase(GitRequest):
    branch: str = Field(description="The branch to rebase onto")
    interactive: bool = Field(False, description="Start an interactive rebase")


class GitStash(GitRequest):
    message: Optional[str] = Field(None, description="Message to describe the stash")
    include_untracked: bool = Field(False, description="Include untracked files in the stash")


class GitStashPop(GitRequest):
    index: Optional[int] = Field(
        None, ge=0, description="Index of the stash to pop (defaults to most recent)"
    )


class GitStashList(GitRequest):
    pass


class GitStashDrop(GitRequest):
    index: Optional[int] = Field(
        None, ge=0, description="Index of the stash to drop (defaults to most recent)"
    )


class GitCherryPick(GitRequest):
    commit: str = Field(description="The commit hash to cherry-pick")


class GitAbort(GitRequest):
    operation: Literal["merge", "rebase", "cherry-pick"] = Field(
        description="The in-progress operation to abort"
    )


class GitContinue(GitRequest):
    operation: Literal["merge", "rebase", "cherry-pick"] = Field(
        description="The in-progress operation to continue after resolving conflicts"
    )


# Remotes


class GitRemoteList(GitRequest):
    pass


class GitRemoteAdd(GitRequest):
    name: str = Field(description="Name of the remote")
    url: str = Field(description="URL of the remote repository")


class GitRemoteRemove(GitRequest):
    name: str = Field(description="Name of the remote to remove")


class GitFetch(GitRequest):
    remote: Optional[str] = Field(None, description="Name of the remote to fetch from")
    branch: Optional[str] = Field(None, description="Specific branch to fetch")


class GitPull(GitRequest):
    remote: Optional[str] = Field(None, description="Name of the remote to pull from")
    branch: Optional[str] = Field(None, description="Branch to pull")
    rebase: bool = Field(False, description="Rebase instead of merge")


class GitPush(GitRequest):
    remote: Optional[str] = Field(None, description="Name of the remote to push to")
    branch: Optional[str] = Field(None, description="Branch to push")
    force: bool = Field(False, description="Force push")
    set_upstream: bool = Field(False, description="Set upstream tracking")
