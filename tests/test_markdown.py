"""Tests for skillkit.utils.markdown."""

from skillkit.utils.markdown import (
    count_lines,
    extract_headings,
    extract_links,
    has_toc_heading,
    iter_prose_lines,
)

DOC = """\
# Title

Intro with [a link](references/a.md) and `[not a link](references/code.md)`.

```markdown
## Not a heading
[also not](references/fenced.md)
```

## Real heading ##

~~~
# fenced with tildes
~~~

See [b](./references/b.md "Title").
"""


def test_count_lines():
    assert count_lines("") == 0
    assert count_lines("a\nb\n") == 2
    assert count_lines("a\nb") == 2


def test_prose_lines_skip_fences():
    lines = [line for _, line in iter_prose_lines(DOC)]
    assert "## Not a heading" not in lines
    assert "# fenced with tildes" not in lines
    assert "## Real heading ##" in lines


def test_unclosed_fence_swallows_rest():
    text = "before\n```\ninside\n"
    assert [line for _, line in iter_prose_lines(text)] == ["before"]


def test_fence_with_info_string_does_not_close():
    text = "```\n```python\nstill code\n```\nafter\n"
    # the second line opens nothing: it is inside the first fence and not a bare closer
    assert [line for _, line in iter_prose_lines(text)] == ["after"]


def test_extract_headings():
    assert extract_headings(DOC) == ["Title", "Real heading"]


def test_extract_links_skips_code():
    links = extract_links(DOC)
    assert [(text, target) for text, target, _ in links] == [
        ("a link", "references/a.md"),
        ("b", "./references/b.md"),
    ]
    assert links[0][2] == 3
    assert links[1][2] == 16


def test_has_toc_heading():
    assert has_toc_heading(["Overview", "Table of Contents"])
    assert has_toc_heading(["contents"])
    assert has_toc_heading(["TOC:"])
    assert not has_toc_heading(["Overview", "Contents of the box"])


def test_extract_links_reads_reference_definitions():
    text = (
        "See the [API][api] docs.\n"
        "\n"
        "[api]: references/api.md\n"
        '  [gone]: <references/missing.md> "Missing"\n'
        "[^1]: a footnote, not a link\n"
        "```\n"
        "[fenced]: references/fenced.md\n"
        "```\n"
    )
    assert extract_links(text) == [
        ("api", "references/api.md", 3),
        ("gone", "<references/missing.md>", 4),
    ]


def test_extract_headings_underlined():
    text = "Contents\n========\n\nUsage\n-----\n\ntext\n\n---\n"
    assert extract_headings(text) == ["Contents", "Usage"]
    assert has_toc_heading(extract_headings(text))


def test_underline_after_fence_is_not_a_heading():
    text = "```\ncode\n```\n===\n"
    assert extract_headings(text) == []
