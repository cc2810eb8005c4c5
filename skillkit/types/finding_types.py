"""
skillkit Finding Types (Pydantic v2)

Findings are the unit of output of a validation run: one record per
problem, attributed to a skill folder and the file that caused it.

Usage:
    from skillkit.types.finding_types import Finding, FindingKind, Severity
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class FindingKind(str, Enum):
    """Every distinct problem the loader and validator can report."""

    MISSING_SKILL_FILE = "MissingSkillFileWarning"
    MISSING_FRONTMATTER = "MissingFrontmatterError"
    INVALID_FRONTMATTER = "InvalidFrontmatterError"
    UNRECOGNIZED_FIELD = "UnrecognizedFieldError"
    MISSING_FIELD = "MissingFieldError"
    DESCRIPTION_TOO_LONG = "DescriptionTooLongError"
    INVALID_NAME_FORMAT = "InvalidNameFormatError"
    NAME_FOLDER_MISMATCH = "NameFolderMismatchError"
    BODY_TOO_LONG = "BodyTooLongWarning"
    REDUNDANT_SECTION = "RedundantSectionWarning"
    MISSING_TOC = "MissingTOCWarning"
    BROKEN_REFERENCE = "BrokenReferenceError"
    ORPHAN_FILE = "OrphanFileWarning"
    INVALID_IMPACT = "InvalidImpactError"
    UNDECODABLE_FILE = "UndecodableFileError"

    @property
    def severity(self) -> Severity:
        if self.value.endswith("Warning"):
            return Severity.WARNING
        return Severity.ERROR


# ---------------------------------------------------------------------------
# Finding
# ---------------------------------------------------------------------------


class Finding(BaseModel):
    """A single validation finding. Serialised with camelCase keys."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    skill_name: str = Field(alias="skillName")
    severity: Severity
    kind: FindingKind
    message: str
    file_path: str = Field(alias="filePath", description="POSIX path relative to the scan root")

    @classmethod
    def of(cls, kind: FindingKind, skill_name: str, message: str, file_path: str) -> Finding:
        return cls(
            skill_name=skill_name,
            severity=kind.severity,
            kind=kind,
            message=message,
            file_path=file_path,
        )

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def to_record(self) -> dict[str, str]:
        return self.model_dump(mode="json", by_alias=True)


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------


class ValidationReport(BaseModel):
    """Aggregated findings for one run over a skills root."""

    model_config = ConfigDict(frozen=True)

    root: Path
    skills_scanned: int
    findings: tuple[Finding, ...] = ()

    @property
    def error_count(self) -> int:
        return sum(1 for f in self.findings if f.is_error)

    @property
    def warning_count(self) -> int:
        return sum(1 for f in self.findings if not f.is_error)

    def failed(self, strict: bool = False) -> bool:
        if strict:
            return bool(self.findings)
        return self.error_count > 0

    def for_skill(self, skill_name: str) -> list[Finding]:
        return [f for f in self.findings if f.skill_name == skill_name]

    def of_kind(self, kind: FindingKind) -> list[Finding]:
        return [f for f in self.findings if f.kind is kind]
