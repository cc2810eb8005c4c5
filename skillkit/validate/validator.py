"""
Validate all skill packages under a skills root.

Discovers skill folders, parses each SKILL.md (and its references/ and
rules/ files) and applies the authoring conventions: naming, body length,
redundant sections, tables of contents and reference links.

Usage:
    validate-skills skills/ [--strict] [--json] [--jobs N] [--verbose]
    python -m skillkit.validate.validator skills/

Exit code 0 when there are no errors, 1 when any error is found (or any
warning with --strict), 2 when the run cannot start or read its files.
"""

from __future__ import annotations

import argparse
import logging
import re
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from skillkit.config import MAX_BODY_LINES, TOC_THRESHOLD_LINES, ValidatorConfig
from skillkit.errors import FatalScanError
from skillkit.loader.cache import SkillCache
from skillkit.loader.discovery import SkillCandidate, discover_skills
from skillkit.loader.load import load_skill
from skillkit.types.finding_types import Finding, FindingKind, ValidationReport
from skillkit.types.skill_types import REFERENCES_DIR, SkillPackage
from skillkit.utils.console import Palette
from skillkit.validate.references import resolve_references
from skillkit.validate.report import format_json, format_text

log = logging.getLogger("skillkit.validate")

NAME_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")
REDUNDANT_HEADING_PATTERN = re.compile(r"^when to use\b", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------


def name_format_problem(name: str, max_length: int) -> str | None:
    """Describe why `name` is not a valid skill name, or None if it is."""
    if not name:
        return "name is empty"
    if len(name) > max_length:
        return f"{len(name)} characters exceeds the {max_length} character limit"
    if "_" in name:
        return "underscores are not allowed, use hyphens"
    if name != name.lower():
        return "uppercase letters are not allowed"
    if not NAME_PATTERN.match(name):
        return "use lowercase letters, digits and single hyphens, not starting or ending with a hyphen"
    return None


def _check_name(package: SkillPackage, config: ValidatorConfig) -> list[Finding]:
    findings: list[Finding] = []

    problems: list[str] = []
    name_problem = name_format_problem(package.name, config.max_name_length)
    if name_problem:
        problems.append(f'name "{package.name}": {name_problem}')
    if package.folder_name != package.name:
        folder_problem = name_format_problem(package.folder_name, config.max_name_length)
        if folder_problem:
            problems.append(f'folder "{package.folder_name}": {folder_problem}')
    if problems:
        findings.append(
            Finding.of(
                FindingKind.INVALID_NAME_FORMAT,
                package.folder_name,
                "invalid skill name: " + "; ".join(problems),
                package.skill_file,
            )
        )

    if package.name != package.folder_name:
        findings.append(
            Finding.of(
                FindingKind.NAME_FOLDER_MISMATCH,
                package.folder_name,
                f'frontmatter name "{package.name}" does not match folder "{package.folder_name}"',
                package.skill_file,
            )
        )
    return findings


def _check_body(package: SkillPackage, config: ValidatorConfig) -> list[Finding]:
    findings: list[Finding] = []

    if package.body_line_count >= config.max_body_lines:
        findings.append(
            Finding.of(
                FindingKind.BODY_TOO_LONG,
                package.folder_name,
                f"SKILL.md body is {package.body_line_count} lines; keep it under "
                f"{config.max_body_lines} and move detail into {REFERENCES_DIR}/",
                package.skill_file,
            )
        )

    redundant = [h for h in package.headings if REDUNDANT_HEADING_PATTERN.match(h)]
    if redundant:
        findings.append(
            Finding.of(
                FindingKind.REDUNDANT_SECTION,
                package.folder_name,
                f'heading "{redundant[0]}" repeats the description; the description already '
                "says when the skill applies",
                package.skill_file,
            )
        )
    return findings


def _check_reference_docs(package: SkillPackage, config: ValidatorConfig) -> list[Finding]:
    findings: list[Finding] = []
    for doc in sorted(package.reference_docs, key=lambda d: d.path):
        if doc.line_count > config.toc_threshold_lines and not doc.has_toc:
            findings.append(
                Finding.of(
                    FindingKind.MISSING_TOC,
                    package.folder_name,
                    f"{doc.path} is {doc.line_count} lines but has no table of contents heading",
                    package.file_path(doc.path),
                )
            )
    return findings


def _check_references(package: SkillPackage) -> list[Finding]:
    findings: list[Finding] = []
    resolution = resolve_references(package)

    first_line = {}
    for link in package.links:
        first_line.setdefault(link.target, link.line)

    for target in sorted(resolution.broken_links):
        findings.append(
            Finding.of(
                FindingKind.BROKEN_REFERENCE,
                package.folder_name,
                f"link to {target} (line {first_line[target]}) does not resolve to a file in the skill",
                package.skill_file,
            )
        )
    for orphan in sorted(resolution.orphan_files):
        findings.append(
            Finding.of(
                FindingKind.ORPHAN_FILE,
                package.folder_name,
                f"{orphan} is not linked from SKILL.md and will never be loaded",
                package.file_path(orphan),
            )
        )
    return findings


def validate_skill(package: SkillPackage, config: ValidatorConfig | None = None) -> list[Finding]:
    """Apply every structural check to a parsed package. Performs no I/O."""
    config = config or ValidatorConfig()
    return [
        *_check_name(package, config),
        *_check_body(package, config),
        *_check_reference_docs(package, config),
        *_check_references(package),
    ]


# ---------------------------------------------------------------------------
# Tree validation
# ---------------------------------------------------------------------------


def _validate_candidate(
    candidate: SkillCandidate,
    root: Path,
    config: ValidatorConfig,
    cache: SkillCache | None,
) -> tuple[str, list[Finding]]:
    if cache is not None:
        result = cache.load(candidate, root, config)
    else:
        result = load_skill(candidate, root, config)

    findings = list(result.findings)
    if result.package is not None:
        findings.extend(validate_skill(result.package, config))
    log.debug("%s: %d finding(s)", candidate.folder_name, len(findings))
    return candidate.folder_name, findings


def validate_tree(
    root: Path | str,
    config: ValidatorConfig | None = None,
    cache: SkillCache | None = None,
) -> ValidationReport:
    """Validate every skill folder under `root`.

    Raises FatalScanError (InvalidRootError, UnreadableFileError) when the
    run cannot complete; one skill's findings never stop its siblings.
    """
    config = config or ValidatorConfig()
    root = Path(root)
    candidates = list(discover_skills(root))

    if config.jobs > 1 and len(candidates) > 1:
        with ThreadPoolExecutor(max_workers=config.jobs) as pool:
            results = list(
                pool.map(lambda c: _validate_candidate(c, root, config, cache), candidates)
            )
    else:
        results = [_validate_candidate(c, root, config, cache) for c in candidates]

    results.sort(key=lambda r: r[0])
    findings = tuple(f for _, skill_findings in results for f in skill_findings)
    return ValidationReport(root=root, skills_scanned=len(candidates), findings=findings)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="validate-skills",
        description="Validate skill packages (SKILL.md + references/ + rules/) under a root folder.",
    )
    parser.add_argument("root", type=Path, help="Folder whose subfolders are skills")
    parser.add_argument("--strict", action="store_true", help="Treat warnings as errors")
    parser.add_argument("--json", action="store_true", help="Print findings as JSON")
    parser.add_argument(
        "--jobs", "-j", type=int, default=1, help="Validate this many skills in parallel (default: 1)"
    )
    parser.add_argument(
        "--max-body-lines",
        type=int,
        default=MAX_BODY_LINES,
        help=f"SKILL.md body line limit (default: {MAX_BODY_LINES})",
    )
    parser.add_argument(
        "--toc-threshold",
        type=int,
        default=TOC_THRESHOLD_LINES,
        help=f"Reference length that requires a table of contents (default: {TOC_THRESHOLD_LINES})",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging on stderr")
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = ValidatorConfig(
            max_body_lines=args.max_body_lines,
            toc_threshold_lines=args.toc_threshold,
            strict=args.strict,
            jobs=args.jobs,
        )
    except ValueError as exc:
        parser.error(str(exc))

    try:
        report = validate_tree(args.root, config)
    except FatalScanError as exc:
        print(f"Fatal: {exc}", file=sys.stderr)
        return 2

    if args.json:
        sys.stdout.write(format_json(report, strict=config.strict))
    else:
        print(format_text(report, Palette.for_stream(sys.stdout), strict=config.strict))

    return 1 if report.failed(config.strict) else 0


if __name__ == "__main__":
    sys.exit(main())
