"""
Explicit modification-time cache for loaded skills.

A SkillCache is owned by whoever creates it (a watch loop, a long-lived
editor integration, a test) and handed to validate_tree. Entries are
keyed by skill folder and reused only while every file the loader reads
keeps the same mtime and size.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from skillkit.config import ValidatorConfig
from skillkit.loader.discovery import SkillCandidate
from skillkit.loader.load import LoadResult, list_markdown, load_skill
from skillkit.types.skill_types import REFERENCES_DIR, RULES_DIR, SKILL_FILE

log = logging.getLogger("skillkit.cache")

Fingerprint = tuple[tuple[str, int, int], ...]


def skill_fingerprint(skill_dir: Path) -> Fingerprint:
    """(relative path, mtime_ns, size) for every file the loader would read."""
    files: list[Path] = []
    skill_file = skill_dir / SKILL_FILE
    if skill_file.is_file():
        files.append(skill_file)
    files.extend(list_markdown(skill_dir / REFERENCES_DIR))
    files.extend(list_markdown(skill_dir / RULES_DIR))

    entries: list[tuple[str, int, int]] = []
    for path in files:
        try:
            stat = path.stat()
        except OSError:
            continue
        entries.append((path.relative_to(skill_dir).as_posix(), stat.st_mtime_ns, stat.st_size))
    return tuple(entries)


class SkillCache:
    def __init__(self) -> None:
        self._entries: dict[tuple[Path, Path, ValidatorConfig], tuple[Fingerprint, LoadResult]] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def load(self, candidate: SkillCandidate, root: Path, config: ValidatorConfig) -> LoadResult:
        """Return a cached LoadResult, reloading when the folder changed."""
        key = (Path(root).resolve(), candidate.path.resolve(), config)
        fingerprint = skill_fingerprint(candidate.path)

        with self._lock:
            cached = self._entries.get(key)
            if cached is not None and cached[0] == fingerprint:
                self.hits += 1
                return cached[1]
            self.misses += 1

        log.debug("Cache miss for %s", candidate.path)
        result = load_skill(candidate, root, config)
        with self._lock:
            self._entries[key] = (fingerprint, result)
        return result
