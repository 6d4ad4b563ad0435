"""Tests for specops.git.diff module."""

import logging

import pytest

from specops.git import (
    NO_CHANGES_BLOCK,
    UNAVAILABLE_DIFF,
    ChangedFile,
    ChangeType,
    ComparisonBase,
    DiffOptions,
    GitOutputTooLargeError,
    format_diff_as_code_block,
    generate_diff,
    generate_diffs,
    truncate_diff,
)

from conftest import git_failure, git_result


@pytest.fixture
def spec_file():
    return ChangedFile("docs/x-specification.md", ChangeType.MODIFIED)


class TestTruncateDiff:
    """Tests for truncate_diff function."""

    def test_short_diff_is_unchanged(self, spec_file):
        raw = "line 1\nline 2\nline 3"

        result = truncate_diff(spec_file, raw, max_lines=3)

        assert result.diff == raw
        assert result.truncated is False
        assert result.line_count == 3

    def test_long_diff_is_truncated(self, spec_file):
        raw = "\n".join(f"line {i}" for i in range(1, 11))

        result = truncate_diff(spec_file, raw, max_lines=4)

        lines = result.diff.split("\n")
        assert lines[:4] == ["line 1", "line 2", "line 3", "line 4"]
        assert lines[4] == ""
        assert lines[5] == "... (diff truncated, 6 more lines)"
        assert len(lines) == 6
        assert result.truncated is True

    def test_line_count_reports_original_length(self, spec_file):
        raw = "\n".join(["x"] * 750)

        result = truncate_diff(spec_file, raw, max_lines=500)

        assert result.line_count == 750
        assert "250 more lines" in result.diff

    def test_empty_diff(self, spec_file):
        result = truncate_diff(spec_file, "", max_lines=10)

        assert result.diff == ""
        assert result.line_count == 0
        assert result.truncated is False


class TestDiffOptions:
    """Tests for DiffOptions validation."""

    def test_defaults(self):
        options = DiffOptions()
        assert options.context_lines == 3
        assert options.max_lines == 500

    def test_rejects_negative_context(self):
        with pytest.raises(ValueError):
            DiffOptions(context_lines=-1)

    def test_rejects_zero_max_lines(self):
        with pytest.raises(ValueError):
            DiffOptions(max_lines=0)


class TestGenerateDiff:
    """Tests for generate_diff function."""

    def test_modified_file(self, mocker, spec_file):
        mock_run = mocker.patch("subprocess.run", return_value=git_result("+new\n-old\n"))

        result = generate_diff(spec_file, ComparisonBase("HEAD~1"), DiffOptions(context_lines=5))

        assert mock_run.call_args.args[0] == [
            "git", "diff", "-U5", "HEAD~1", "HEAD", "--", "docs/x-specification.md",
        ]
        assert result.diff == "+new\n-old"
        assert result.line_count == 2
        assert result.file == spec_file

    def test_renamed_file_scopes_both_paths(self, mocker):
        mock_run = mocker.patch("subprocess.run", return_value=git_result("rename diff"))
        renamed = ChangedFile("new/spec.md", ChangeType.RENAMED, previous_path="old/spec.md")

        generate_diff(renamed, ComparisonBase("HEAD~1"), DiffOptions())

        assert mock_run.call_args.args[0][-3:] == ["--", "old/spec.md", "new/spec.md"]

    def test_pull_request_base_uses_merge_base(self, mocker, spec_file):
        mock_run = mocker.patch("subprocess.run", return_value=git_result("+x"))

        generate_diff(spec_file, ComparisonBase("origin/main", merge_base=True), DiffOptions())

        assert "origin/main...HEAD" in mock_run.call_args.args[0]

    def test_failure_gives_placeholder(self, fake_git, spec_file, caplog):
        fake_git(fail_diff=True)

        with caplog.at_level(logging.WARNING):
            result = generate_diff(spec_file, ComparisonBase("HEAD~1"), DiffOptions())

        assert result.diff == UNAVAILABLE_DIFF
        assert result.truncated is False
        assert result.line_count == 0
        assert "docs/x-specification.md" in caplog.text

    def test_oversized_output_gives_placeholder(self, mocker, spec_file):
        mocker.patch(
            "specops.git.diff._run_git_command",
            side_effect=GitOutputTooLargeError("Output of git diff exceeds 10 characters"),
        )

        result = generate_diff(spec_file, ComparisonBase("HEAD~1"), DiffOptions())

        assert result.diff == UNAVAILABLE_DIFF
        assert result.line_count == 0


class TestGenerateDiffs:
    """Tests for generate_diffs function."""

    def test_one_failure_does_not_abort_batch(self, mocker):
        files = [
            ChangedFile("a-specification.md", ChangeType.MODIFIED),
            ChangedFile("b-specification.md", ChangeType.DELETED),
        ]

        def run(args, **kwargs):
            if args[-1] == "a-specification.md":
                raise git_failure(args)
            return git_result("-removed")

        mocker.patch("subprocess.run", side_effect=run)

        results = generate_diffs(files, ComparisonBase("HEAD~1"), DiffOptions())

        assert [r.file for r in results] == files
        assert results[0].diff == UNAVAILABLE_DIFF
        assert results[1].diff == "-removed"


class TestFormatDiffAsCodeBlock:
    """Tests for format_diff_as_code_block function."""

    def test_wraps_in_diff_fence(self):
        assert format_diff_as_code_block("+a\n-b") == "```diff\n+a\n-b\n```"

    def test_empty_diff(self):
        assert format_diff_as_code_block("") == NO_CHANGES_BLOCK

    def test_whitespace_only_diff(self):
        assert format_diff_as_code_block("  \n\t") == "```\nNo changes detected.\n```"

    def test_preserves_content(self):
        diff = "@@ -1 +1 @@\n-<b>old</b>\n+<b>new</b>"
        assert diff in format_diff_as_code_block(diff)


class TestDiffContent:
    """Tests for diff text handling between git and truncation."""

    def test_trailing_blank_context_line_is_kept(self, mocker, spec_file):
        mocker.patch("subprocess.run", return_value=git_result("@@ -1,3 +1,3 @@\n-a\n+b\n \n"))

        result = generate_diff(spec_file, ComparisonBase("HEAD~1"), DiffOptions())

        assert result.diff == "@@ -1,3 +1,3 @@\n-a\n+b\n "
        assert result.line_count == 4

    def test_undecodable_bytes_do_not_abort_batch(self, mocker):
        """Test that a Latin-1 file still gets a diff and the batch completes."""
        files = [
            ChangedFile("latin1-specification.md", ChangeType.MODIFIED),
            ChangedFile("utf8-specification.md", ChangeType.MODIFIED),
        ]
        raw_output = {
            "latin1-specification.md": b"-cafe\n+caf\xe9\n",
            "utf8-specification.md": "-cafe\n+café\n".encode("utf-8"),
        }

        def run(args, **kwargs):
            return git_result(raw_output[args[-1]].decode(kwargs["encoding"], kwargs["errors"]))

        mocker.patch("subprocess.run", side_effect=run)

        results = generate_diffs(files, ComparisonBase("HEAD~1"), DiffOptions())

        assert results[0].diff == "-cafe\n+caf\ufffd"
        assert results[1].diff == "-cafe\n+café"
