"""Tests for commit and history operations."""

import pytest

from mcp_git_tools.operations import CommitOperations


@pytest.fixture
def operations(mock_get_git):
    return CommitOperations(mock_get_git)


class TestGitCommit:
    @pytest.mark.asyncio
    async def test_commit(self, operations, mock_provider):
        result = await operations.git_commit(message="Test commit")

        assert result.success is True
        assert result.message == "Committed changes: def456"
        assert result.data["commit"] == "def456"
        assert result.data["summary"] == {"changes": 1, "insertions": 1, "deletions": 0}
        assert mock_provider.calls_to("commit") == [("Test commit", None, {})]
        assert mock_provider.calls_to("stage") == []

    @pytest.mark.asyncio
    async def test_stages_files_before_commit(self, operations, mock_provider):
        await operations.git_commit(message="msg", files=["a.py", "b.py"])

        names = [n for n in mock_provider.call_names() if n in ("stage", "commit")]
        assert names == ["stage", "commit"]
        assert mock_provider.calls_to("stage") == [(["a.py", "b.py"],)]

    @pytest.mark.asyncio
    async def test_amend(self, operations, mock_provider):
        await operations.git_commit(message="fixup", amend=True)

        assert mock_provider.calls_to("commit") == [("fixup", None, {"--amend": None})]

    @pytest.mark.asyncio
    async def test_stage_failure_skips_commit(self, operations, mock_provider):
        mock_provider.set_error("stage", "pathspec 'x' did not match any files")

        result = await operations.git_commit(message="msg", files=["x"])

        assert result.success is False
        assert result.message == "Failed to commit: pathspec 'x' did not match any files"
        assert mock_provider.calls_to("commit") == []

    @pytest.mark.asyncio
    async def test_nothing_to_commit(self, operations, mock_provider):
        mock_provider.set_error("commit", "nothing to commit, working tree clean")

        result = await operations.git_commit(message="msg")

        assert result.success is False
        assert result.message == "Failed to commit: nothing to commit, working tree clean"


class TestGitLog:
    @pytest.mark.asyncio
    async def test_log_drops_body_and_refs(self, operations):
        result = await operations.git_log()

        assert result.success is True
        assert result.message == "Retrieved 1 commit(s)"
        assert result.data == [
            {
                "hash": "abc123",
                "date": "2024-01-01T00:00:00+00:00",
                "message": "Initial commit",
                "author_name": "Test User",
                "author_email": "test@example.com",
            }
        ]

    @pytest.mark.asyncio
    async def test_log_forwards_limits(self, operations, mock_provider):
        await operations.git_log(max_count=5, file="src/app.py")

        assert mock_provider.calls_to("get_log") == [(5, "src/app.py")]

    @pytest.mark.asyncio
    async def test_log_empty(self, operations, mock_provider):
        mock_provider.commits = []

        result = await operations.git_log()

        assert result.message == "Retrieved 0 commit(s)"
        assert result.data == []

    @pytest.mark.asyncio
    async def test_log_failure(self, operations, mock_provider):
        mock_provider.set_error("get_log", "does not have any commits yet")

        result = await operations.git_log()

        assert result.success is False
        assert result.message == "Failed to get log: does not have any commits yet"


class TestGitShow:
    @pytest.mark.asyncio
    async def test_show_defaults_to_head(self, operations, mock_provider):
        result = await operations.git_show()

        assert result.message == "Details for HEAD"
        assert result.data == mock_provider.show_output
        assert mock_provider.calls_to("show") == [(["HEAD"],)]

    @pytest.mark.asyncio
    async def test_show_ref(self, operations, mock_provider):
        result = await operations.git_show(ref="abc123")

        assert result.message == "Details for abc123"
        assert mock_provider.calls_to("show") == [(["abc123"],)]

    @pytest.mark.asyncio
    async def test_show_failure(self, operations, mock_provider):
        mock_provider.set_error("show", "bad object nope")

        result = await operations.git_show(ref="nope")

        assert result.success is False
        assert result.message == "Failed to show commit: bad object nope"
