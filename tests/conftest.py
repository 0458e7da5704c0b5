"""
Global pytest configuration and fixtures.

This file provides:
1. Operation groups wired to an in-memory ``MockGitProvider``
2. Real temporary repositories for tests that drive the git CLI
3. Isolation of process-wide state (error statistics, metrics, cwd)
"""

import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from fixtures.git_repos import GitRepositoryFactory
from fixtures.mock_provider import MockGitProvider, MockProviderFactory
from mcp_git_tools.error_handling import reset_error_stats
from mcp_git_tools.metrics import MetricsCollector


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture(autouse=True)
def clean_error_stats():
    reset_error_stats()
    yield
    reset_error_stats()


@pytest.fixture
def mock_provider() -> MockGitProvider:
    return MockGitProvider()


@pytest.fixture
def mock_get_git(mock_provider: MockGitProvider) -> MockProviderFactory:
    return MockProviderFactory(mock_provider)


@pytest.fixture
def metrics() -> MetricsCollector:
    return MetricsCollector()


@pytest.fixture
def git_repo_factory():
    """Provide access to GitRepositoryFactory."""
    return GitRepositoryFactory


@pytest.fixture
def clean_git_repo(temp_dir: Path) -> Path:
    """Create a clean git repository for testing."""
    return GitRepositoryFactory.create_clean_repo(temp_dir / "clean_repo")


@pytest.fixture
def dirty_git_repo(temp_dir: Path) -> Path:
    """Create a git repository with an untracked file."""
    return GitRepositoryFactory.create_dirty_repo(temp_dir / "dirty_repo")


@pytest.fixture
def multi_branch_repo(temp_dir: Path) -> Path:
    """Create a git repository with multiple branches."""
    return GitRepositoryFactory.create_repo_with_branches(
        temp_dir / "multi_branch_repo", ["feature-1", "feature-2"]
    )


@pytest.fixture
def bare_remote(temp_dir: Path) -> Path:
    """Create an empty bare repository to push to and fetch from."""
    return GitRepositoryFactory.create_bare_remote(temp_dir / "remote.git")


def pytest_collection_modifyitems(config, items):
    """Mark tests based on their location and fixtures."""
    for item in items:
        if "tests/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in str(item.fspath):
            item.add_marker(pytest.mark.integration)

        if {"clean_git_repo", "dirty_git_repo", "multi_branch_repo", "bare_remote"} & set(
            item.fixturenames
        ):
            item.add_marker(pytest.mark.requires_git)
