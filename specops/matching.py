"""File pattern matching for changed files.

Glob semantics:
- `*` matches within a single path segment
- `?` matches one character other than `/`
- `**` as a whole segment matches zero or more directories
- `[abc]` / `[!abc]` character classes and `{a,b}` alternatives

Names starting with a dot get no special treatment: `*` and `**` match them
like any other name, so `.github/x-specification.md` matches
`**/*specification*.md`. Exclude such directories explicitly, e.g. with
`.github/**`.
"""

import functools
import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from specops.git.models import ChangedFile, ChangeType

logger = logging.getLogger(__name__)

DEFAULT_PATTERNS = ["**/*specification*.md"]


def _translate(pattern: str) -> str:
    """Translate a glob pattern into an (unanchored) regular expression."""
    i, n = 0, len(pattern)
    out = []

    while i < n:
        c = pattern[i]
        if c == "*":
            segment_start = i == 0 or pattern[i - 1] == "/"
            if pattern.startswith("**", i) and segment_start:
                if pattern.startswith("**/", i):
                    out.append("(?:.*/)?")
                    i += 3
                    continue
                if i + 2 == n:
                    out.append(".*")
                    i += 2
                    continue
            # Consecutive stars inside a segment behave like one
            while i + 1 < n and pattern[i + 1] == "*":
                i += 1
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "[":
            end = pattern.find("]", i + 2)
            if end == -1:
                out.append(re.escape(c))
            else:
                body = pattern[i + 1:end]
                if body.startswith("!"):
                    body = "^" + body[1:]
                out.append("[" + body.replace("\\", "\\\\") + "]")
                i = end
        elif c == "{":
            end = pattern.find("}", i)
            if end == -1:
                out.append(re.escape(c))
            else:
                options = pattern[i + 1:end].split(",")
                out.append("(?:" + "|".join(_translate(o) for o in options) + ")")
                i = end
        else:
            out.append(re.escape(c))
        i += 1

    return "".join(out)


@functools.lru_cache(maxsize=256)
def compile_pattern(pattern: str, case_sensitive: bool = False) -> re.Pattern:
    """Compile a glob pattern to an anchored regular expression."""
    flags = 0 if case_sensitive else re.IGNORECASE
    return re.compile(r"\A" + _translate(pattern) + r"\Z", flags)


def matches_any(path: str, patterns: list[str], case_sensitive: bool = False) -> bool:
    """Check if a path matches at least one of the glob patterns.

    Args:
        path: Repository-relative, forward-slash path.
        patterns: Glob patterns to try.
        case_sensitive: Whether matching is case-sensitive.

    Returns:
        True if any pattern matches the whole path.
    """
    return any(compile_pattern(p, case_sensitive).match(path) for p in patterns)


@dataclass(frozen=True)
class MatchOptions:
    """Rules deciding which changed files are reported.

    Attributes:
        patterns: Include patterns; a file must match at least one.
        exclude_patterns: Exclude patterns; a file must match none.
        case_sensitive: Case sensitivity for both pattern lists.
        include_added: Whether added files are eligible.
        include_deleted: Whether deleted files are eligible.
    """

    patterns: list[str] = field(default_factory=lambda: DEFAULT_PATTERNS.copy())
    exclude_patterns: list[str] = field(default_factory=list)
    case_sensitive: bool = False
    include_added: bool = True
    include_deleted: bool = False

    def __post_init__(self):
        if not self.patterns:
            raise ValueError("At least one include pattern is required")


def filter_changed_files(files: list[ChangedFile], options: MatchOptions) -> list[ChangedFile]:
    """Reduce changed files to the ones matching the options.

    Checks run include -> exclude -> change type. The added/deleted toggles
    never affect modified or renamed files.

    Args:
        files: Detected changed files.
        options: Matching rules.

    Returns:
        Surviving files in input order.
    """
    result = []

    for file in files:
        if not matches_any(file.path, options.patterns, options.case_sensitive):
            continue
        if options.exclude_patterns and matches_any(
            file.path, options.exclude_patterns, options.case_sensitive
        ):
            logger.debug("File excluded by pattern: %s", file.path)
            continue
        if file.change_type == ChangeType.ADDED and not options.include_added:
            logger.debug("Skipping new file (create-on-new-files=false): %s", file.path)
            continue
        if file.change_type == ChangeType.DELETED and not options.include_deleted:
            logger.debug("Skipping deleted file (create-on-deleted-files=false): %s", file.path)
            continue
        result.append(file)

    logger.debug("After pattern filtering: %d files match", len(result))
    return result


def parse_patterns(single: Optional[str], multi: Optional[str]) -> list[str]:
    """Parse pattern inputs into a list.

    A multi-line value takes precedence over a single pattern. Lines are
    trimmed and blank lines dropped.

    Args:
        single: A single pattern.
        multi: Newline-separated patterns.

    Returns:
        List of patterns, possibly empty.
    """
    if multi and multi.strip():
        return [line.strip() for line in multi.split("\n") if line.strip()]
    if single and single.strip():
        return [single.strip()]
    return []
