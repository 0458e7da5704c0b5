"""Tests for repository lifecycle operations."""

import os

import pytest

from mcp_git_tools.operations import RepositoryOperations, clone_target
from mcp_git_tools.types import FileStatus, RenamedFile, StatusSnapshot


@pytest.fixture
def operations(mock_get_git):
    return RepositoryOperations(mock_get_git)


class TestGitStatus:
    @pytest.mark.asyncio
    async def test_clean_tree(self, operations):
        """A snapshot without file entries reports a clean tree."""
        result = await operations.git_status()

        assert result.success is True
        assert result.message == "Working tree clean"
        assert result.data["isClean"] is True
        assert result.data["current"] == "main"
        assert result.data["tracking"] == "origin/main"

    @pytest.mark.asyncio
    async def test_dirty_tree(self, operations, mock_provider):
        """Any file entry makes the tree dirty."""
        mock_provider.status = StatusSnapshot(
            modified=["file1.py"],
            not_added=["new.py"],
            files=[
                FileStatus(path="file1.py", working_dir="M"),
                FileStatus(path="new.py", index="?", working_dir="?"),
            ],
            current="main",
        )

        result = await operations.git_status()

        assert result.success is True
        assert result.message == "Working tree has changes"
        assert result.data["modified"] == ["file1.py"]
        assert result.data["notAdded"] == ["new.py"]
        assert result.data["isClean"] is False

    @pytest.mark.asyncio
    async def test_status_data_keys(self, operations, mock_provider):
        """Created files are reported as added, renames as 'from -> to'."""
        mock_provider.status = StatusSnapshot(
            created=["added.py"],
            renamed=[RenamedFile(from_path="old.py", to_path="new.py")],
            files=[FileStatus(path="added.py", index="A"), FileStatus(path="new.py", index="R")],
            current=None,
            ahead=2,
            behind=1,
        )

        result = await operations.git_status()

        assert result.data["added"] == ["added.py"]
        assert result.data["renamed"] == ["old.py -> new.py"]
        assert result.data["current"] is None
        assert result.data["ahead"] == 2
        assert result.data["behind"] == 1
        assert set(result.data) == {
            "modified", "added", "deleted", "renamed", "conflicted", "notAdded",
            "staged", "current", "tracking", "ahead", "behind", "isClean",
        }

    @pytest.mark.asyncio
    async def test_status_failure(self, operations, mock_provider):
        mock_provider.set_error("get_status", "fatal: bad index")

        result = await operations.git_status()

        assert result.success is False
        assert result.message == "Failed to get status: fatal: bad index"
        assert result.data is None

    @pytest.mark.asyncio
    async def test_not_a_repository(self, operations, mock_provider):
        """A required repository that is missing fails before any primitive runs."""
        mock_provider.is_repo = False

        result = await operations.git_status(repo_path="/not/a/repo")

        assert result.success is False
        assert result.message == "Failed to get status: Not a git repository: /not/a/repo"
        assert mock_provider.call_names() == ["is_repository"]

    @pytest.mark.asyncio
    async def test_repo_path_forwarded(self, operations, mock_get_git):
        await operations.git_status(repo_path="/some/repo")

        assert mock_get_git.requests == [("/some/repo", True)]


class TestGitInit:
    @pytest.mark.asyncio
    async def test_init_with_path(self, operations, mock_provider, mock_get_git):
        result = await operations.git_init(repo_path="/tmp/new-repo")

        assert result.success is True
        assert result.message == "Initialized empty Git repository in /tmp/new-repo"
        assert mock_provider.calls_to("initialize") == [()]
        assert mock_get_git.requests == [("/tmp/new-repo", False)]

    @pytest.mark.asyncio
    async def test_init_defaults_to_cwd(self, operations):
        result = await operations.git_init()

        assert result.message == f"Initialized empty Git repository in {os.getcwd()}"

    @pytest.mark.asyncio
    async def test_init_does_not_require_repository(self, operations, mock_provider):
        mock_provider.is_repo = False

        result = await operations.git_init(repo_path="/tmp/empty")

        assert result.success is True
        assert "is_repository" not in mock_provider.call_names()

    @pytest.mark.asyncio
    async def test_init_failure(self, operations, mock_provider):
        mock_provider.set_error("initialize", "permission denied")

        result = await operations.git_init()

        assert result.success is False
        assert result.message == "Failed to initialize repository: permission denied"


class TestGitClone:
    @pytest.mark.asyncio
    async def test_clone_with_target(self, operations, mock_provider):
        result = await operations.git_clone(
            url="https://github.com/user/repo.git", target_path="my-repo"
        )

        assert result.success is True
        assert result.message == (
            "Cloned repository from https://github.com/user/repo.git to my-repo"
        )
        assert mock_provider.calls_to("clone_from") == [
            ("https://github.com/user/repo.git", "my-repo")
        ]

    @pytest.mark.asyncio
    async def test_clone_default_target(self, operations, mock_provider):
        result = await operations.git_clone(url="https://github.com/user/repo.git")

        assert result.message.endswith(" to repo")
        assert mock_provider.calls_to("clone_from") == [
            ("https://github.com/user/repo.git", "repo")
        ]

    @pytest.mark.asyncio
    async def test_clone_failure(self, operations, mock_provider):
        mock_provider.set_error("clone_from", "repository not found")

        result = await operations.git_clone(url="https://github.com/user/missing.git")

        assert result.success is False
        assert result.message == "Failed to clone repository: repository not found"


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://github.com/user/repo.git", "repo"),
        ("https://github.com/user/repo", "repo"),
        ("git@github.com:user/tool.git", "tool"),
        ("/srv/git/project.git/", "project"),
    ],
)
def test_clone_target(url, expected):
    assert clone_target(url) == expected
