"""
Exception hierarchy for skillkit.

FatalScanError subclasses abort a whole run. SkillFileError subclasses
(frontmatter problems, undecodable text) are per-file: the loader turns
them into findings and moves on.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from skillkit.types.finding_types import FindingKind


class SkillKitError(Exception):
    """Base class for all skillkit errors."""


# ---------------------------------------------------------------------------
# Fatal
# ---------------------------------------------------------------------------


class FatalScanError(SkillKitError):
    """The run cannot continue; no partial report is produced."""


class InvalidRootError(FatalScanError):
    def __init__(self, root: Path, reason: str) -> None:
        self.root = root
        self.reason = reason
        super().__init__(f"Invalid skills root {root}: {reason}")


class UnreadableFileError(FatalScanError):
    def __init__(self, path: Path, cause: Exception) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot read {path}: {cause}")


# ---------------------------------------------------------------------------
# Per-file errors
# ---------------------------------------------------------------------------


class SkillFileError(SkillKitError):
    """One file in a skill is unusable. Reported as a finding, never fatal."""

    kind: FindingKind = FindingKind.INVALID_FRONTMATTER

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


class UndecodableFileError(SkillFileError):
    kind = FindingKind.UNDECODABLE_FILE

    def __init__(self, path: Path, cause: UnicodeDecodeError) -> None:
        self.cause = cause
        super().__init__(
            path, f"file is not valid UTF-8 text (byte {cause.start}: {cause.reason})"
        )


class FrontmatterError(SkillFileError):
    kind = FindingKind.INVALID_FRONTMATTER


class MissingFrontmatterError(FrontmatterError):
    kind = FindingKind.MISSING_FRONTMATTER

    def __init__(self, path: Path) -> None:
        super().__init__(
            path,
            "no frontmatter block; the file must start with a '---' line and close "
            "the block with another '---' line",
        )


class InvalidFrontmatterError(FrontmatterError):
    kind = FindingKind.INVALID_FRONTMATTER


class UnrecognizedFieldError(FrontmatterError):
    kind = FindingKind.UNRECOGNIZED_FIELD

    def __init__(self, path: Path, fields: Iterable[str], allowed: Iterable[str]) -> None:
        self.fields = tuple(sorted(fields))
        allowed_list = ", ".join(allowed)
        super().__init__(
            path,
            f"unrecognized frontmatter field(s): {', '.join(self.fields)} (allowed: {allowed_list})",
        )


class MissingFieldError(FrontmatterError):
    kind = FindingKind.MISSING_FIELD

    def __init__(self, path: Path, fields: Iterable[str]) -> None:
        self.fields = tuple(sorted(fields))
        super().__init__(path, f"missing required frontmatter field(s): {', '.join(self.fields)}")


class DescriptionTooLongError(FrontmatterError):
    kind = FindingKind.DESCRIPTION_TOO_LONG

    def __init__(self, path: Path, length: int, limit: int) -> None:
        self.length = length
        self.limit = limit
        super().__init__(path, f"description is {length} characters; the limit is {limit}")


class InvalidImpactError(FrontmatterError):
    kind = FindingKind.INVALID_IMPACT

    def __init__(self, path: Path, value: object) -> None:
        self.value = value
        super().__init__(
            path, f'impact "{value}" is not one of CRITICAL, HIGH, MEDIUM, LOW'
        )


# ---------------------------------------------------------------------------
# References
# ---------------------------------------------------------------------------


class BrokenReferenceError(SkillKitError):
    def __init__(self, skill_name: str, targets: Iterable[str]) -> None:
        self.skill_name = skill_name
        self.targets = tuple(sorted(targets))
        super().__init__(f"{skill_name}: broken reference link(s): {', '.join(self.targets)}")
