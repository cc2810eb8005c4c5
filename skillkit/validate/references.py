"""
Reference resolution.

Checks the links from a SKILL.md body into references/ and rules/ against
the files actually present one level deep in those folders, and finds
reference files nothing links to.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from urllib.parse import unquote

from skillkit.errors import BrokenReferenceError
from skillkit.types.skill_types import REFERENCES_DIR, RULES_DIR, SkillPackage

LINKABLE_DIRS = (f"{REFERENCES_DIR}/", f"{RULES_DIR}/")


def normalize_link_target(raw: str) -> str | None:
    """Normalise a Markdown link target to a skill-relative path.

    Returns None for targets that do not point at a .md file under
    references/ or rules/ (external URLs, anchors, other files).

    Examples:
        normalize_link_target("./references/api.md#setup") -> "references/api.md"
        normalize_link_target("https://example.com") -> None
    """
    target = raw.strip()
    if target.startswith("<") and target.endswith(">"):
        target = target[1:-1].strip()
    if not target or "://" in target or target.startswith(("mailto:", "#", "/")):
        return None

    target = target.split("#", 1)[0].split("?", 1)[0]
    target = unquote(target)
    if not target:
        return None

    target = posixpath.normpath(target)
    if not target.startswith(LINKABLE_DIRS) or not target.endswith(".md"):
        return None
    return target


@dataclass(frozen=True)
class ReferenceResolution:
    broken_links: frozenset[str] = field(default_factory=frozenset)
    orphan_files: frozenset[str] = field(default_factory=frozenset)
    skill_name: str = ""

    @property
    def ok(self) -> bool:
        return not self.broken_links

    def raise_for_broken(self) -> None:
        if self.broken_links:
            raise BrokenReferenceError(self.skill_name, self.broken_links)


def resolve_references(package: SkillPackage) -> ReferenceResolution:
    """Return the broken links and orphaned reference files of a package."""
    present = package.reference_files | package.rule_files
    linked = {link.target for link in package.links}

    broken = frozenset(t for t in linked if t not in present)
    orphans = frozenset(p for p in package.reference_files if p not in linked)
    return ReferenceResolution(broken_links=broken, orphan_files=orphans, skill_name=package.folder_name)
