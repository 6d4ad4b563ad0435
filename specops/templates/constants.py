"""Constants for the specops templates package.

Contains:
- DEFAULT_TITLE_TEMPLATE: Issue title used when none is configured
- DEFAULT_BODY_TEMPLATE: Built-in issue body, always available as a fallback
- TEMPLATE_FILE_SUFFIXES: Suffixes that mark a body template value as a file path
- RAW_FIELDS: Context fields that hold pre-formatted markdown
"""

DEFAULT_TITLE_TEMPLATE = "Specification Change: {{ filename }}"

DEFAULT_BODY_TEMPLATE = """## Specification Changed

A specification file has been modified and may require implementation changes.

**File:** {{ file_path }}
**Changed in:** {{ commit_sha_short }} ({{ commit_link }})
{{#if pull_request}}
**Pull Request:** {{ pr_link }}
{{/if}}
**Author:** @{{ author }}
**Date:** {{ commit_date }}

## Changes

{{{ diff }}}

## Checklist

- [ ] Reviewed specification change
- [ ] Determined if code changes are required
- [ ] Implementation complete (or confirmed no changes needed)

---
*This issue was automatically created by specops*"""

TEMPLATE_FILE_SUFFIXES = (".md", ".markdown", ".txt", ".hbs", ".mustache", ".j2")

# The fenced diff block is built by specops itself, so it is never escaped
RAW_FIELDS = frozenset({"diff"})
