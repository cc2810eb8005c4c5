"""
Skill folder discovery.

Enumerates the immediate subdirectories of a skills root. Each one is a
candidate skill; whether it actually holds a SKILL.md is recorded on the
candidate and reported by the loader, never raised here.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from skillkit.errors import InvalidRootError
from skillkit.types.skill_types import SKILL_FILE

log = logging.getLogger("skillkit.discovery")

SKIPPED_DIRS = {"__pycache__", "node_modules"}


@dataclass(frozen=True)
class SkillCandidate:
    path: Path
    skill_file: Path | None

    @property
    def folder_name(self) -> str:
        return self.path.name


def _is_candidate_dir(entry: Path) -> bool:
    return entry.is_dir() and not entry.name.startswith(".") and entry.name not in SKIPPED_DIRS


def discover_skills(root: Path | str) -> Iterator[SkillCandidate]:
    """Return a lazy iterator over the candidate skill folders under `root`.

    The root is checked eagerly so an invalid root fails before any
    iteration starts. Call again to restart the scan.
    """
    root = Path(root)
    if not root.exists():
        raise InvalidRootError(root, "path does not exist")
    if not root.is_dir():
        raise InvalidRootError(root, "not a directory")
    return _iter_candidates(root)


def _iter_candidates(root: Path) -> Iterator[SkillCandidate]:
    try:
        entries = sorted(root.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise InvalidRootError(root, f"cannot list directory ({exc})") from exc

    for entry in entries:
        if not _is_candidate_dir(entry):
            continue
        skill_file = entry / SKILL_FILE
        if skill_file.is_file():
            log.debug("Found skill folder %s", entry.name)
            yield SkillCandidate(path=entry, skill_file=skill_file)
        else:
            log.info("No %s in %s", SKILL_FILE, entry)
            yield SkillCandidate(path=entry, skill_file=None)
