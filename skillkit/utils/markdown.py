"""
Line-oriented Markdown scanning.

Only what the validator needs: headings (ATX and underlined), inline links
and link reference definitions, all ignored inside fenced code blocks.
Inline links inside code spans are ignored too.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

FENCE_PATTERN = re.compile(r"^ {0,3}(`{3,}|~{3,})")
HEADING_PATTERN = re.compile(r"^ {0,3}(#{1,6})[ \t]+(.*?)[ \t#]*$")
LINK_PATTERN = re.compile(r"!?\[([^\]]*)\]\(\s*(<[^>]*>|[^)\s]+)(?:\s+[\"'(][^)]*)?\)")
# `[label]: target "title"`; footnotes (`[^1]: ...`) are not links
DEFINITION_PATTERN = re.compile(r"^ {0,3}\[(?!\^)([^\]]+)\]:[ \t]*(<[^>]*>|\S+)")
SETEXT_PATTERN = re.compile(r"^ {0,3}(=+|-+)[ \t]*$")
CODE_SPAN_PATTERN = re.compile(r"(`+)(?:(?!\1).)+?\1")
TOC_PATTERN = re.compile(r"^(table of contents|contents|toc)$", re.IGNORECASE)


def count_lines(text: str) -> int:
    return len(text.splitlines())


def iter_prose_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield (1-based line number, line) for lines outside fenced code blocks."""
    fence: str | None = None
    for lineno, line in enumerate(text.splitlines(), start=1):
        match = FENCE_PATTERN.match(line)
        if fence is None:
            if match:
                fence = match.group(1)
                continue
            yield lineno, line
        elif match and match.group(1)[0] == fence[0] and len(match.group(1)) >= len(fence):
            # a closing fence carries no info string
            if not line.strip()[len(match.group(1)):].strip():
                fence = None


def extract_headings(text: str) -> list[str]:
    headings: list[str] = []
    previous: tuple[int, str] | None = None
    for lineno, line in iter_prose_lines(text):
        match = HEADING_PATTERN.match(line)
        if match:
            headings.append(match.group(2).strip())
            previous = None
            continue
        if (
            previous is not None
            and previous[0] == lineno - 1
            and previous[1].strip()
            and SETEXT_PATTERN.match(line)
        ):
            headings.append(previous[1].strip())
            previous = None
            continue
        previous = (lineno, line)
    return headings


def extract_links(text: str) -> list[tuple[str, str, int]]:
    """Return (link text, raw target, line number) for every link.

    Covers inline links and link reference definitions; for a definition
    the label stands in for the link text.
    """
    links: list[tuple[str, str, int]] = []
    for lineno, line in iter_prose_lines(text):
        definition = DEFINITION_PATTERN.match(line)
        if definition:
            links.append((definition.group(1), definition.group(2), lineno))
            continue
        stripped = CODE_SPAN_PATTERN.sub("", line)
        for match in LINK_PATTERN.finditer(stripped):
            links.append((match.group(1), match.group(2), lineno))
    return links


def has_toc_heading(headings: list[str] | tuple[str, ...]) -> bool:
    return any(TOC_PATTERN.match(h.strip().rstrip(":")) for h in headings)
