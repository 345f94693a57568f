"""Pytest configuration and fixtures for diffnum tests."""

import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Callable, Generator, List

import pytest

from diffnum.config import AnnotateConfig
from diffnum.diffpack import DiffState, iter_records
from diffnum.emitter import Emitter

SIMPLE_DIFF = """\
diff --git a/f b/f
--- a/f
+++ b/f
@@ -1,2 +1,3 @@
 one
+two
 three
"""


def render(diff: str, *tokens: str) -> List[str]:
    """Annotate diff text and return the rendered output lines."""
    config = AnnotateConfig.from_tokens(tokens)
    emitter = Emitter(config)
    return [emitter.render(record) for record in iter_records(diff.splitlines(), config, DiffState())]


@pytest.fixture
def simple_diff() -> str:
    """The smallest single-file, single-hunk diff."""
    return SIMPLE_DIFF


@pytest.fixture
def annotate() -> Callable[..., List[str]]:
    """Return a helper that renders a diff with the given option tokens."""
    return render


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp(prefix="diffnum_test_"))
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
            "GIT_CONFIG_GLOBAL": os.devnull,
            "GIT_CONFIG_SYSTEM": os.devnull,
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

    def delete_file(self, path: str) -> None:
        """Delete a file."""
        file_path = self.repo_path / path
        if file_path.exists():
            file_path.unlink()

    def create_binary_file(self, path: str) -> None:
        """Create a binary file."""
        file_path = self.repo_path / path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        # PNG header
        binary_content = b'\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01'
        file_path.write_bytes(binary_content)

    def add_and_commit(self, message: str) -> str:
        """Stage everything and commit, return commit SHA."""
        self.run_git(["add", "-A"])
        self.run_git(["commit", "-m", message])
        return self.run_git(["rev-parse", "HEAD"]).stdout.strip()

    def diff(self, *args: str) -> str:
        """Return ``git diff`` output for the given arguments."""
        return self.run_git(["diff", "--no-ext-diff", *args]).stdout


@pytest.fixture
def git_helper(temp_dir: Path) -> GitRepoHelper:
    """Create a temporary git repository with one commit."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()
    helper = GitRepoHelper(repo_path)
    helper.run_git(["init"])
    helper.run_git(["config", "user.name", "Test User"])
    helper.run_git(["config", "user.email", "test@example.com"])
    helper.create_file("README.md", "# Test Repository\n")
    helper.add_and_commit("Initial commit")
    return helper
