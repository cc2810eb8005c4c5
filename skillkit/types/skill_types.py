"""
skillkit Skill Types (Pydantic v2)

Closed record shapes for the two kinds of frontmatter the tooling
understands, and the immutable SkillPackage built from a skill folder.

Usage:
    from skillkit.types.skill_types import SkillPackage, SkillFrontmatter, RuleFrontmatter
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

SKILL_FILE = "SKILL.md"
REFERENCES_DIR = "references"
RULES_DIR = "rules"


class Impact(str, Enum):
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


# ---------------------------------------------------------------------------
# Frontmatter records
# ---------------------------------------------------------------------------


class SkillFrontmatter(BaseModel):
    """Frontmatter of a SKILL.md. Only `name` and `description` are allowed."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: StrictStr = Field(description="Skill name (kebab-case, matches folder)")
    description: StrictStr = Field(description="What the skill does and when to use it")


class RuleFrontmatter(BaseModel):
    """Frontmatter of a rules/<section>-<name>.md file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    title: StrictStr
    impact: Impact
    tags: frozenset[str] = Field(default_factory=frozenset)

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tags(cls, value: Any) -> Any:
        # `tags: a, b` and `tags: [a, b]` are both common in the wild
        if value is None:
            return frozenset()
        if isinstance(value, str):
            return frozenset(t.strip() for t in value.split(",") if t.strip())
        if isinstance(value, (list, tuple, set, frozenset)):
            return frozenset(str(t).strip() for t in value if str(t).strip())
        return value


# ---------------------------------------------------------------------------
# Package contents
# ---------------------------------------------------------------------------


class Rule(BaseModel):
    """One enforcement pattern within a skill's rules/ folder."""

    model_config = ConfigDict(frozen=True)

    title: str
    impact: Impact
    tags: frozenset[str] = Field(default_factory=frozenset)
    path: str = Field(description="Skill-relative path, e.g. rules/async-parallel.md")


class ReferenceLink(BaseModel):
    """A Markdown link from the SKILL.md body into references/ or rules/."""

    model_config = ConfigDict(frozen=True)

    text: str
    target: str = Field(description="Normalised skill-relative target path")
    line: int = Field(description="1-based line number within SKILL.md")


class ReferenceDoc(BaseModel):
    """Facts about one file in references/ gathered at load time."""

    model_config = ConfigDict(frozen=True)

    path: str
    line_count: int
    has_toc: bool


class SkillPackage(BaseModel):
    """One skill folder, parsed. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    folder_name: str
    rel_path: str = Field(description="Skill folder relative to the scan root")
    directory: Path
    body_line_count: int
    headings: tuple[str, ...] = ()
    links: tuple[ReferenceLink, ...] = ()
    reference_files: frozenset[str] = Field(default_factory=frozenset)
    rule_files: frozenset[str] = Field(default_factory=frozenset)
    reference_docs: tuple[ReferenceDoc, ...] = ()
    rules: tuple[Rule, ...] = ()

    @property
    def skill_file(self) -> str:
        return f"{self.rel_path}/{SKILL_FILE}"

    def file_path(self, relative: str) -> str:
        """Scan-root-relative path for a skill-relative file."""
        return f"{self.rel_path}/{relative}"
