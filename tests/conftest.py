"""Shared fixtures: build skill folders on disk under tmp_path."""

from __future__ import annotations

from pathlib import Path

import pytest


def write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def skill_md(name: str, description: str = "Does a thing. Use when the user asks for it.", body: str = "") -> str:
    return f"---\nname: {name}\ndescription: {description}\n---\n\n{body}"


def long_doc(lines: int, toc: bool = False, title: str = "Reference") -> str:
    out = [f"# {title}", ""]
    if toc:
        out += ["## Table of Contents", "", "- [Section](#section)", ""]
    out += ["## Section", ""]
    out += [f"Line {i} of guidance." for i in range(lines)]
    return "\n".join(out) + "\n"


def rule_md(title: str = "Avoid waterfalls", impact: str = "HIGH", tags: str = "async, performance") -> str:
    return f"---\ntitle: {title}\nimpact: {impact}\ntags: {tags}\n---\n\n## {title}\n\nDo the right thing.\n"


@pytest.fixture
def skills_root(tmp_path):
    root = tmp_path / "skills"
    root.mkdir()
    return root


@pytest.fixture
def make_skill(skills_root):
    """Create a skill folder. Returns the folder path."""

    def _make(
        folder: str,
        *,
        content: str | None = None,
        name: str | None = None,
        body: str = "# Title\n\nInstructions.\n",
        references: dict[str, str] | None = None,
        rules: dict[str, str] | None = None,
    ) -> Path:
        skill_dir = skills_root / folder
        skill_dir.mkdir(parents=True, exist_ok=True)
        if content is None:
            content = skill_md(name or folder, body=body)
        write(skill_dir / "SKILL.md", content)
        for filename, text in (references or {}).items():
            write(skill_dir / "references" / filename, text)
        for filename, text in (rules or {}).items():
            write(skill_dir / "rules" / filename, text)
        return skill_dir

    return _make


@pytest.fixture
def sample_tree(make_skill):
    """The two skills of the reference scenario: both valid."""
    make_skill(
        "creating-presentations",
        body=(
            "# Creating Presentations\n\n"
            "Build slide decks.\n\n"
            "- Layout patterns: [patterns](references/patterns.md)\n"
        ),
        references={"patterns.md": long_doc(150, toc=True, title="Patterns")},
    )
    make_skill(
        "convex",
        body=(
            "# Convex\n\n"
            "See [filtering](references/filtering.md) and the [rules](rules/_sections.md).\n"
        ),
        references={"filtering.md": long_doc(220, toc=False, title="Filtering")},
        rules={
            "_sections.md": "# Sections\n\n1. **query** - queries\n",
            "_template.md": "---\ntitle: Template\nimpact: MEDIUM\n---\n",
            "query-use-indexes.md": rule_md("Use indexes", "CRITICAL", "query, index"),
        },
    )
    return make_skill
