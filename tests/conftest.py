"""Pytest configuration and fixtures for diffguard tests."""

import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Dict, Generator, List, Optional, Tuple

import pytest

from diffguard.config import DiffConfig
from diffguard.vcs import DiffProvider


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp(prefix="diffguard_test_"))
    try:
        yield temp_path
    finally:
        if temp_path.exists():
            shutil.rmtree(temp_path, ignore_errors=True)


class GitRepoHelper:
    """Helper class for git repository operations in tests."""

    def __init__(self, repo_path: Path):
        self.repo_path = repo_path
        self.env = os.environ.copy()
        self.env.update({
            "GIT_AUTHOR_NAME": "Test User",
            "GIT_AUTHOR_EMAIL": "test@example.com",
            "GIT_COMMITTER_NAME": "Test User",
            "GIT_COMMITTER_EMAIL": "test@example.com",
        })

    def run_git(self, args: List[str]) -> subprocess.CompletedProcess:
        """Run git command in the repository."""
        return subprocess.run(
            ["git"] + args,
            cwd=self.repo_path,
            env=self.env,
            check=True,
            capture_output=True,
            text=True,
        )

    def create_file(self, path: str, content: str) -> None:
        """Create a file with content."""
        file_path = self.repo_path / path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content)

    def modify_file(self, path: str, content: str) -> None:
        """Modify an existing file."""
        self.create_file(path, content)

    def delete_file(self, path: str) -> None:
        """Delete a file."""
        file_path = self.repo_path / path
        if file_path.exists():
            file_path.unlink()

    def add_and_commit(self, message: str) -> str:
        """Stage everything, commit, and return the commit SHA."""
        self.run_git(["add", "-A"])
        self.run_git(["commit", "-m", message])
        return self.get_current_sha()

    def get_current_sha(self) -> str:
        """Get current commit SHA."""
        result = self.run_git(["rev-parse", "HEAD"])
        return result.stdout.strip()


@pytest.fixture
def git_repo(temp_dir: Path) -> Generator[Path, None, None]:
    """Create a temporary git repository with one commit."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    helper = GitRepoHelper(repo_path)
    helper.run_git(["init"])
    helper.run_git(["config", "user.name", "Test User"])
    helper.run_git(["config", "user.email", "test@example.com"])

    helper.create_file("README.md", "# Test Repository\n")
    helper.add_and_commit("Initial commit")

    yield repo_path


@pytest.fixture
def git_helper(git_repo: Path) -> GitRepoHelper:
    """Create a git repository helper."""
    return GitRepoHelper(git_repo)


@pytest.fixture
def repo_config(git_repo: Path) -> DiffConfig:
    """Configuration pointing at the temporary repository."""
    return DiffConfig(repo_root=str(git_repo))


class FakeDiffProvider(DiffProvider):
    """Returns canned diff text and records every request."""

    def __init__(self, diffs: Dict[str, str]):
        self.diffs = diffs
        self.calls: List[Tuple[str, str, str]] = []
        self.old_paths: List[Optional[str]] = []

    def fetch_diff(
        self, path: str, base_ref: str, head_ref: str, old_path: Optional[str] = None
    ) -> str:
        self.calls.append((path, base_ref, head_ref))
        self.old_paths.append(old_path)
        return self.diffs.get(path, "")


@pytest.fixture
def fake_provider() -> FakeDiffProvider:
    """A provider with one modified Go file."""
    return FakeDiffProvider({
        "main.go": (
            "diff --git a/main.go b/main.go\n"
            "--- a/main.go\n"
            "+++ b/main.go\n"
            "@@ -1 +1 @@\n"
            "-func old(){\n"
            "+func new(){\n"
        ),
    })
