"""
Rendering of validation reports, as console text or JSON.

Both renderings are deterministic for a given report: no timestamps, no
absolute paths beyond the root the caller passed in.
"""

from __future__ import annotations

import json
from typing import Any

from skillkit.types.finding_types import Finding, ValidationReport
from skillkit.utils.console import Palette


def _finding_line(f: Finding, palette: Palette) -> str:
    icon = palette.FAIL if f.is_error else palette.WARN
    return f"  {icon} {f.skill_name} [{f.severity.value}] {f.kind.value}: {f.message} ({f.file_path})"


def format_text(report: ValidationReport, palette: Palette | None = None, strict: bool = False) -> str:
    palette = palette or Palette()
    lines: list[str] = ["", palette.bold("Skills Validator"), ""]
    lines.append(f"  Scanned {report.skills_scanned} skill folder(s) in {report.root.as_posix()}.")
    lines.append("")

    if not report.findings:
        lines.append(f"  {palette.PASS} All checks passed")
    else:
        lines.extend(_finding_line(f, palette) for f in report.findings)
    lines.append("")

    failing = {f.skill_name for f in report.findings if f.is_error or strict}
    lines.append(palette.bold("Summary"))
    lines.append("")
    lines.append(f"  Skills:   {report.skills_scanned}")
    lines.append(f"  {palette.PASS} Passed:   {report.skills_scanned - len(failing)}")
    lines.append(f"  {palette.FAIL} Errors:   {report.error_count}")
    lines.append(f"  {palette.WARN} Warnings: {report.warning_count}")
    if strict and report.warning_count:
        lines.append("")
        lines.append("  Warnings are treated as errors (--strict).")
    lines.append("")
    return "\n".join(lines)


def report_payload(report: ValidationReport, strict: bool = False) -> dict[str, Any]:
    return {
        "root": report.root.as_posix(),
        "skillsScanned": report.skills_scanned,
        "strict": strict,
        "passed": not report.failed(strict),
        "findings": [f.to_record() for f in report.findings],
        "summary": {"errors": report.error_count, "warnings": report.warning_count},
    }


def format_json(report: ValidationReport, strict: bool = False) -> str:
    return json.dumps(report_payload(report, strict), indent=2, sort_keys=True) + "\n"
