"""
Secret scanner for skill documents.

Skills are read by agents and copied into other projects, so a credential
pasted into an example snippet leaks everywhere the skill is installed.
This regex scanner checks SKILL.md, references/*.md and rules/*.md for:
- Hardcoded Bearer tokens and API key/secret assignments
- AWS access key IDs and GitHub tokens
- Private key blocks
- Long hex / base64 literals (warnings)

Usage:
    scan-skill-secrets skills/ [--verbose]
    scan-skill-secrets skills/my-skill

Exit code 1 if any errors found.
"""

from __future__ import annotations

import argparse
import logging
import re
import sys
from dataclasses import dataclass
from pathlib import Path

from skillkit.errors import FatalScanError, InvalidRootError, UndecodableFileError
from skillkit.loader.discovery import discover_skills
from skillkit.loader.load import list_markdown, read_text
from skillkit.types.skill_types import REFERENCES_DIR, RULES_DIR, SKILL_FILE
from skillkit.utils.console import Palette

log = logging.getLogger("skillkit.security")

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Pattern:
    name: str
    regex: re.Pattern[str]
    severity: str  # "error" | "warning"
    description: str


PATTERNS: list[Pattern] = [
    Pattern(
        name="bearer-token",
        regex=re.compile(r"""['"`]Bearer\s+[A-Za-z0-9\-._~+/]{16,}=*['"`]""", re.IGNORECASE),
        severity="error",
        description="Hardcoded Bearer token",
    ),
    Pattern(
        name="api-key-assignment",
        regex=re.compile(
            r"""(?:api[_-]?key|api[_-]?secret|auth[_-]?token|secret[_-]?key|access[_-]?token)\s*[:=]\s*['"`][^'"`\s]{12,}['"`]""",
            re.IGNORECASE,
        ),
        severity="error",
        description="Hardcoded API key/secret assignment",
    ),
    Pattern(
        name="aws-key",
        regex=re.compile(r"\bAKIA[0-9A-Z]{16}\b"),
        severity="error",
        description="AWS access key ID",
    ),
    Pattern(
        name="github-token",
        regex=re.compile(r"\b(?:ghp|gho|ghu|ghs)_[A-Za-z0-9]{36}\b|\bgithub_pat_[A-Za-z0-9_]{40,}\b"),
        severity="error",
        description="GitHub token",
    ),
    Pattern(
        name="private-key",
        regex=re.compile(r"-----BEGIN (?:RSA |EC |OPENSSH |DSA )?PRIVATE KEY-----"),
        severity="error",
        description="Private key block",
    ),
    Pattern(
        name="api-key-hex",
        regex=re.compile(r"""['"`][0-9a-f]{32,64}['"`]""", re.IGNORECASE),
        severity="warning",
        description="Possible hardcoded hex API key (32-64 chars)",
    ),
    Pattern(
        name="base64-long",
        regex=re.compile(r"""['"`][A-Za-z0-9+/]{40,}={0,2}['"`]"""),
        severity="warning",
        description="Long base64 string (possible encoded secret)",
    ),
]

PLACEHOLDER_PATTERN = re.compile(r"your[_-]|<[^>]+>|x{6,}|\.\.\.|example|placeholder", re.IGNORECASE)

# ---------------------------------------------------------------------------
# Scanner
# ---------------------------------------------------------------------------


@dataclass
class Finding:
    file: str
    line: int
    column: int
    pattern: str
    severity: str
    description: str
    snippet: str


def scan_content(content: str, file_path: str) -> list[Finding]:
    findings: list[Finding] = []
    lines = content.split("\n")

    for pattern in PATTERNS:
        for line_idx, line in enumerate(lines):
            # a placeholder anywhere on the line marks it as an example
            if PLACEHOLDER_PATTERN.search(line):
                continue
            trimmed = line.strip()
            for match in pattern.regex.finditer(line):
                findings.append(
                    Finding(
                        file=file_path,
                        line=line_idx + 1,
                        column=match.start() + 1,
                        pattern=pattern.name,
                        severity=pattern.severity,
                        description=pattern.description,
                        snippet=trimmed[:100],
                    )
                )

    findings.sort(key=lambda f: (f.line, f.column, f.pattern))
    return findings


# ---------------------------------------------------------------------------
# File collection
# ---------------------------------------------------------------------------


def skill_documents(skill_dir: Path) -> list[Path]:
    """SKILL.md plus every markdown file in references/ and rules/."""
    files: list[Path] = []
    if (skill_dir / SKILL_FILE).is_file():
        files.append(skill_dir / SKILL_FILE)
    files.extend(list_markdown(skill_dir / REFERENCES_DIR))
    files.extend(list_markdown(skill_dir / RULES_DIR))
    return files


def collect_files(target: Path) -> tuple[Path, list[Path]]:
    """Return (base for relative paths, files) for a skill folder or a skills root."""
    if (target / SKILL_FILE).is_file():
        return target.parent, skill_documents(target)
    files: list[Path] = []
    for candidate in discover_skills(target):
        files.extend(skill_documents(candidate.path))
    return target, files


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="scan-skill-secrets",
        description="Scan skill documents for hardcoded credentials.",
    )
    parser.add_argument("target", type=Path, help="Skills root or a single skill folder")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show the offending lines")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    palette = Palette.for_stream(sys.stdout)
    print()
    print(palette.bold("Skills Security Scanner"))
    print()

    try:
        if not args.target.is_dir():
            raise InvalidRootError(args.target, "not a directory")
        base, files = collect_files(args.target)
        contents: list[tuple[Path, str]] = []
        undecodable: list[Path] = []
        for path in files:
            try:
                contents.append((path, read_text(path)))
            except UndecodableFileError as exc:
                log.debug("Not scanning %s: %s", path, exc.message)
                undecodable.append(path)
    except FatalScanError as exc:
        print(f"  {palette.FAIL} {exc}", file=sys.stderr)
        return 2

    print(f"  Scanning {len(files)} file(s)...")
    print()

    total_errors = 0
    total_warnings = len(undecodable)

    for path in undecodable:
        print(f"  {palette.WARN} {path.relative_to(base).as_posix()}: not valid UTF-8, skipped")

    for path, content in contents:
        rel_path = path.relative_to(base).as_posix()
        findings = scan_content(content, rel_path)

        errors = [f for f in findings if f.severity == "error"]
        warnings = [f for f in findings if f.severity == "warning"]

        if not findings:
            if args.verbose:
                print(f"  {palette.PASS} {rel_path}: clean")
        else:
            icon = palette.FAIL if errors else palette.WARN
            print(f"  {icon} {rel_path}:")
            for f in findings:
                f_icon = palette.FAIL if f.severity == "error" else palette.WARN
                print(f"    {f_icon} L{f.line}:{f.column} [{f.pattern}] {f.description}")
                if args.verbose:
                    print(f"      {f.snippet}")

        total_errors += len(errors)
        total_warnings += len(warnings)

    log.debug("Scanned %d file(s)", len(files))
    print()
    print(palette.bold("Summary"))
    print(f"  Files scanned: {len(files)}")
    print(f"  {palette.FAIL} Errors:   {total_errors}")
    print(f"  {palette.WARN} Warnings: {total_warnings}")
    print()

    if total_errors > 0:
        print("  Errors must be resolved before publishing.")
        print()

    return 1 if total_errors > 0 else 0


if __name__ == "__main__":
    sys.exit(main())
