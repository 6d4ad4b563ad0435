"""Tests for specops.templates.renderer module."""

import logging

import pytest

from specops.git import FileDiff
from specops.templates import (
    DEFAULT_BODY_TEMPLATE,
    RenderOptions,
    TemplateError,
    get_default_template,
    render_issue,
    resolve_body_template,
)

CHECKLIST = [
    "- [ ] Reviewed specification change",
    "- [ ] Determined if code changes are required",
    "- [ ] Implementation complete (or confirmed no changes needed)",
]


class TestResolveBodyTemplate:
    """Tests for resolve_body_template function."""

    def test_empty_uses_default(self, temp_dir):
        assert resolve_body_template("", temp_dir) == DEFAULT_BODY_TEMPLATE
        assert resolve_body_template(None, temp_dir) == DEFAULT_BODY_TEMPLATE
        assert resolve_body_template("   ", temp_dir) == DEFAULT_BODY_TEMPLATE

    def test_inline_template(self, temp_dir):
        inline = "Changed {{ file_path }}"
        assert resolve_body_template(inline, temp_dir) == inline

    def test_multi_line_inline_template(self, temp_dir):
        inline = "# {{ filename }}\n\nSee docs/guide.md"
        assert resolve_body_template(inline, temp_dir) == inline

    def test_file_inside_repository(self, temp_dir):
        (temp_dir / ".github").mkdir()
        (temp_dir / ".github" / "spec-issue.md").write_text("Custom: {{ filename }}")

        assert resolve_body_template(".github/spec-issue.md", temp_dir) == "Custom: {{ filename }}"

    def test_missing_file_uses_default(self, temp_dir, caplog):
        with caplog.at_level(logging.WARNING):
            result = resolve_body_template("templates/missing.md", temp_dir)

        assert result == DEFAULT_BODY_TEMPLATE
        assert "Template file not found" in caplog.text

    def test_relative_path_outside_repository_is_not_read(self, temp_dir, caplog):
        repo_root = temp_dir / "repo"
        repo_root.mkdir()
        (temp_dir / "outside.md").write_text("SECRET")

        with caplog.at_level(logging.WARNING):
            result = resolve_body_template("../outside.md", repo_root)

        assert result == DEFAULT_BODY_TEMPLATE
        assert "SECRET" not in result
        assert "outside repo root" in caplog.text

    def test_absolute_path_outside_repository_is_not_read(self, temp_dir):
        repo_root = temp_dir / "repo"
        repo_root.mkdir()
        secret = temp_dir / "secret.txt"
        secret.write_text("SECRET")

        assert resolve_body_template(str(secret), repo_root) == DEFAULT_BODY_TEMPLATE


class TestRenderIssue:
    """Tests for render_issue function."""

    def test_default_title(self, file_diff, metadata, temp_dir):
        issue = render_issue(file_diff, RenderOptions(), metadata, temp_dir)

        assert issue.title == "Specification Change: api-specification.md"

    def test_custom_title(self, file_diff, metadata, temp_dir):
        options = RenderOptions(title_template="[{{ change_type }}] {{ file_path }}")

        issue = render_issue(file_diff, options, metadata, temp_dir)

        assert issue.title == "[modified] docs/api-specification.md"

    def test_title_is_stripped(self, file_diff, metadata, temp_dir):
        options = RenderOptions(title_template="  {{ filename }}\n")

        assert render_issue(file_diff, options, metadata, temp_dir).title == "api-specification.md"

    def test_default_body(self, file_diff, metadata, temp_dir):
        body = render_issue(file_diff, RenderOptions(), metadata, temp_dir).body

        assert "**File:** docs/api-specification.md" in body
        assert "abc1234 (https://github.com/test-org/test-repo/commit/abc1234567890)" in body
        assert "@testuser" in body
        assert "**Date:** 2025-12-01" in body
        assert "```diff\n+added line\n-removed line\n```" in body
        assert "Pull Request" not in body
        for item in CHECKLIST:
            assert item in body

    def test_default_body_for_pull_request(self, file_diff, metadata, temp_dir):
        pr_metadata = metadata.model_copy(update={"pr_number": "7"})

        body = render_issue(file_diff, RenderOptions(), pr_metadata, temp_dir).body

        assert "**Pull Request:** https://github.com/test-org/test-repo/pull/7" in body

    def test_diff_markup_not_escaped(self, modified_file, metadata, temp_dir):
        diff = FileDiff(file=modified_file, diff="-<b>old</b> & co\n+<b>new</b>")

        body = render_issue(diff, RenderOptions(), metadata, temp_dir).body

        assert "-<b>old</b> & co\n+<b>new</b>" in body

    def test_template_file(self, file_diff, metadata, temp_dir):
        (temp_dir / "issue.md").write_text("Spec {{ filename }} changed by {{ author }}")
        options = RenderOptions(body_template="issue.md")

        body = render_issue(file_diff, options, metadata, temp_dir).body

        assert body == "Spec api-specification.md changed by testuser"

    def test_inline_body_template(self, file_diff, metadata, temp_dir):
        options = RenderOptions(body_template="{{#unless pull_request}}push{{/unless}}")

        assert render_issue(file_diff, options, metadata, temp_dir).body == "push"

    def test_escaped_template_path_renders_default(self, file_diff, metadata, temp_dir):
        repo_root = temp_dir / "repo"
        repo_root.mkdir()
        (temp_dir / "outside.md").write_text("SECRET")

        body = render_issue(file_diff, RenderOptions(body_template="../outside.md"), metadata, repo_root).body

        assert "SECRET" not in body
        for item in CHECKLIST:
            assert item in body

    def test_markdown_heading_id_in_body(self, file_diff, metadata, temp_dir):
        options = RenderOptions(body_template="## Changes {#changes}\n{{{ diff }}}")

        body = render_issue(file_diff, options, metadata, temp_dir).body

        assert body == "## Changes {#changes}\n```diff\n+added line\n-removed line\n```"

    def test_rendering_is_deterministic(self, file_diff, metadata, temp_dir):
        first = render_issue(file_diff, RenderOptions(), metadata, temp_dir)
        second = render_issue(file_diff, RenderOptions(), metadata, temp_dir)

        assert first == second

    def test_invalid_title_raises(self, file_diff, metadata, temp_dir):
        options = RenderOptions(title_template="{{#if pull_request}}open")

        with pytest.raises(TemplateError):
            render_issue(file_diff, options, metadata, temp_dir)

    def test_get_default_template(self):
        template = get_default_template()

        assert template == DEFAULT_BODY_TEMPLATE
        assert "{{{ diff }}}" in template
