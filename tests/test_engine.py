"""Tests for specops.templates.engine module."""

import pytest

from specops.templates import JinjaTemplateEngine, TemplateError, translate_template


def render(template, context, **engine_kwargs):
    engine = JinjaTemplateEngine(**engine_kwargs)
    return engine.render(engine.compile(template), context)


class TestTranslateTemplate:
    """Tests for translate_template function."""

    def test_plain_substitution_unchanged(self):
        assert translate_template("{{ filename }}") == "{{ filename }}"

    def test_triple_braces_become_safe(self):
        assert translate_template("{{{ diff }}}") == "{{ diff|safe }}"

    def test_if_block(self):
        assert translate_template("{{#if pull_request}}x{{/if}}") == "{% if pull_request %}x{% endif %}"

    def test_unless_and_else(self):
        result = translate_template("{{#unless a}}x{{else}}y{{/unless}}")
        assert result == "{% if not a %}x{% else %}y{% endif %}"

    def test_comments_removed(self):
        assert translate_template("a{{! note }}b{{!-- longer }} note --}}c") == "abc"

    def test_lone_brace_becomes_literal(self):
        assert translate_template("{#id}") == "{{ \"{\" }}#id}"


class TestJinjaTemplateEngine:
    """Tests for JinjaTemplateEngine."""

    def test_substitutes_variables(self):
        assert render("Specification Change: {{ filename }}", {"filename": "x.md"}) == (
            "Specification Change: x.md"
        )

    def test_escapes_by_default(self):
        assert render("{{ title }}", {"title": "<b>A & B</b>"}) == "&lt;b&gt;A &amp; B&lt;/b&gt;"

    def test_triple_braces_skip_escaping(self):
        assert render("{{{ title }}}", {"title": "<b>A & B</b>"}) == "<b>A & B</b>"

    def test_raw_fields_never_escaped(self):
        context = {"diff": "```diff\n-<old>\n+<new>\n```"}

        assert render("{{ diff }}", context) == context["diff"]
        assert render("{{{ diff }}}", context) == context["diff"]

    def test_raw_fields_are_configurable(self):
        assert render("{{ diff }}", {"diff": "<x>"}, raw_fields=()) == "&lt;x&gt;"

    def test_if_else(self):
        template = "{{#if pull_request}}PR{{else}}push{{/if}}"

        assert render(template, {"pull_request": True}) == "PR"
        assert render(template, {"pull_request": False}) == "push"

    def test_standalone_block_lines_removed(self):
        template = "a\n{{#if flag}}\nb\n{{/if}}\nc\n"

        assert render(template, {"flag": True}) == "a\nb\nc\n"
        assert render(template, {"flag": False}) == "a\nc\n"

    def test_booleans_render_lowercase(self):
        assert render("{{ pull_request }}", {"pull_request": True}) == "true"

    def test_missing_variable_renders_empty(self):
        assert render("[{{ nothing }}]", {}) == "[]"

    def test_unclosed_block_raises(self):
        engine = JinjaTemplateEngine()

        with pytest.raises(TemplateError):
            engine.compile("{{#if pull_request}}open")

    def test_jinja_syntax_in_text_is_literal(self):
        template = "## Changes {#changes}\n{% raw %} {{ not a name! }} {{{ diff }}}"

        result = render(template, {"diff": "+x"})

        assert result == "## Changes {#changes}\n{% raw %} {{ not a name! }} +x"

    def test_lone_braces_are_literal(self):
        assert render('{ "key": {{ filename }} }', {"filename": "x.md"}) == '{ "key": x.md }'

    def test_compiled_template_is_reusable(self):
        engine = JinjaTemplateEngine()
        compiled = engine.compile("{{ a }}")

        assert engine.render(compiled, {"a": "1"}) == "1"
        assert engine.render(compiled, {"a": "2"}) == "2"
