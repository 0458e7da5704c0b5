"""Tests for error classification and the operation fault boundary."""

import pytest

from mcp_git_tools.error_handling import (
    ErrorContext,
    ErrorSeverity,
    GitProviderError,
    NotAGitRepositoryError,
    UnknownToolError,
    classify_error,
    get_error_stats,
    operation_boundary,
    record_error_metric,
    reset_error_stats,
)
from mcp_git_tools.types import OperationResponse


class TestErrorTypes:
    def test_not_a_repository_message(self):
        error = NotAGitRepositoryError("/tmp/nowhere")

        assert str(error) == "Not a git repository: /tmp/nowhere"
        assert error.path == "/tmp/nowhere"

    def test_provider_error_keeps_command(self):
        error = GitProviderError("fatal: bad revision", ["git", "log", "nope"])

        assert str(error) == "fatal: bad revision"
        assert error.command == ["git", "log", "nope"]

    def test_unknown_tool_message(self):
        assert str(UnknownToolError("git_x")) == "Unknown tool: git_x"


class TestErrorContext:
    """Test ErrorContext functionality."""

    def test_error_context_defaults(self):
        """Test ErrorContext with default values."""
        error = RuntimeError("test error")
        context = ErrorContext(error)

        assert context.error == error
        assert context.severity == ErrorSeverity.MEDIUM
        assert context.operation == ""
        assert context.recoverable is True
        assert context.metadata == {}
        assert isinstance(context.error_time, float)


class TestErrorClassification:
    """Test error classification functionality."""

    @pytest.mark.parametrize(
        "error, severity, recoverable",
        [
            (KeyboardInterrupt(), ErrorSeverity.CRITICAL, False),
            (MemoryError(), ErrorSeverity.CRITICAL, False),
            (NotAGitRepositoryError("/x"), ErrorSeverity.HIGH, False),
            (PermissionError("denied"), ErrorSeverity.HIGH, False),
            (GitProviderError("rejected"), ErrorSeverity.MEDIUM, True),
            (UnknownToolError("git_x"), ErrorSeverity.LOW, True),
            (ValueError("bad"), ErrorSeverity.LOW, True),
            (RuntimeError("other"), ErrorSeverity.MEDIUM, True),
        ],
    )
    def test_classification(self, error, severity, recoverable):
        context = classify_error(error, operation="git_status")

        assert context.severity == severity
        assert context.recoverable is recoverable
        assert context.operation == "git_status"

    def test_provider_error_metadata(self):
        context = classify_error(GitProviderError("x", ["git", "push"]))

        assert context.metadata == {"command": ["git", "push"]}


class TestErrorMetrics:
    def test_record_and_reset(self):
        record_error_metric(classify_error(GitProviderError("x"), operation="git_push"))
        record_error_metric(classify_error(ValueError("y"), operation="git_push"))

        stats = get_error_stats()
        assert stats["total_errors"] == 2
        assert stats["errors_by_type"] == {"GitProviderError": 1, "ValueError": 1}
        assert stats["errors_by_severity"]["medium"] == 1
        assert stats["errors_by_severity"]["low"] == 1
        assert stats["errors_by_tool"] == {"git_push": 2}

        reset_error_stats()
        assert get_error_stats()["total_errors"] == 0

    def test_stats_are_copies(self):
        stats = get_error_stats()
        stats["errors_by_type"]["Fake"] = 99

        assert "Fake" not in get_error_stats()["errors_by_type"]


class TestOperationBoundary:
    @pytest.mark.asyncio
    async def test_success_passes_through(self):
        @operation_boundary("do things")
        async def op():
            return OperationResponse.ok("done", data={"x": 1})

        result = await op()

        assert result.success is True
        assert result.data == {"x": 1}
        assert get_error_stats()["total_errors"] == 0

    @pytest.mark.asyncio
    async def test_fault_becomes_failure(self):
        @operation_boundary("push")
        async def op():
            raise GitProviderError("rejected")

        result = await op()

        assert result.success is False
        assert result.message == "Failed to push: rejected"
        assert result.data is None
        assert get_error_stats()["errors_by_tool"] == {"op": 1}

    @pytest.mark.asyncio
    async def test_label_uses_arguments(self):
        class Group:
            @operation_boundary("abort {operation}")
            async def git_abort(self, operation, repo_path=None):
                raise GitProviderError("nothing to abort")

        result = await Group().git_abort("rebase")

        assert result.message == "Failed to abort rebase: nothing to abort"

    @pytest.mark.asyncio
    async def test_label_uses_keyword_arguments(self):
        class Group:
            @operation_boundary("continue {operation}")
            async def git_continue(self, operation, repo_path=None):
                raise GitProviderError("no merge in progress")

        result = await Group().git_continue(operation="merge", repo_path="/r")

        assert result.message == "Failed to continue merge: no merge in progress"

    @pytest.mark.asyncio
    async def test_unexpected_errors_are_contained(self):
        @operation_boundary("get status")
        async def op():
            raise KeyError("missing")

        result = await op()

        assert result.success is False
        assert result.message == "Failed to get status: 'missing'"

    def test_preserves_metadata(self):
        @operation_boundary("list remotes")
        async def git_remote_list(repo_path=None):
            """Docstring."""

        assert git_remote_list.__name__ == "git_remote_list"
        assert git_remote_list.__doc__ == "Docstring."
