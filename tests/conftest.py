"""Shared test fixtures and configuration."""

import subprocess
import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from specops.config import RepositoryContext, Settings
from specops.git import ChangedFile, ChangeType, FileDiff
from specops.templates import RunMetadata


def git_result(stdout: str = "") -> MagicMock:
    """Build a fake CompletedProcess for subprocess.run."""
    result = MagicMock()
    result.stdout = stdout
    result.returncode = 0
    return result


def git_failure(args, stderr: str = "fatal: bad revision 'HEAD~1'") -> subprocess.CalledProcessError:
    return subprocess.CalledProcessError(128, args, stderr=stderr)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_diff():
    """A small unified diff for a specification file."""
    return """diff --git a/docs/api-specification.md b/docs/api-specification.md
index 1234567..abcdefg 100644
--- a/docs/api-specification.md
+++ b/docs/api-specification.md
@@ -1,3 +1,3 @@
 # API
-The endpoint returns XML.
+The endpoint returns JSON."""


@pytest.fixture
def modified_file():
    return ChangedFile("docs/api-specification.md", ChangeType.MODIFIED)


@pytest.fixture
def file_diff(modified_file):
    return FileDiff(file=modified_file, diff="+added line\n-removed line", truncated=False, line_count=2)


@pytest.fixture
def metadata():
    """Run metadata as it would be built for a push event."""
    return RunMetadata(
        commit_sha="abc1234567890",
        commit_message="Update API spec",
        commit_date="2025-12-01",
        author="testuser",
        branch="main",
        server_url="https://github.com",
        repository="test-org/test-repo",
    )


@pytest.fixture
def push_context(temp_dir):
    return RepositoryContext(
        event_name="push",
        sha="abc1234567890",
        ref_name="main",
        repository="test-org/test-repo",
        actor="testuser",
        workspace=temp_dir,
    )


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def fake_git(mocker):
    """Patch subprocess.run with a scripted git.

    Returns a configure function taking name_status, diff, tracked and
    fail_name_status; the patched mock is returned for call inspection.
    """

    def configure(
        name_status: str = "",
        diff: str = "",
        tracked: str = "",
        fail_name_status: bool = False,
        fail_diff: bool = False,
        log: dict | None = None,
    ):
        log = log or {"%s": "Update spec", "%ci": "2025-12-01 10:00:00 +0000", "%an": "Jane Doe"}

        def run(args, **kwargs):
            command = args[1:]
            if command[0] == "fetch":
                return git_result("")
            if command[0] == "diff" and "--name-status" in command:
                if fail_name_status:
                    raise git_failure(args)
                return git_result(name_status)
            if command[0] == "diff":
                if fail_diff:
                    raise git_failure(args, stderr="fatal: ambiguous argument")
                return git_result(diff)
            if command[0] == "ls-files":
                return git_result(tracked)
            if command[0] == "log":
                return git_result(log[command[-1].split("=", 1)[1]])
            raise AssertionError(f"Unexpected git command: {args}")

        return mocker.patch("subprocess.run", side_effect=run)

    return configure
