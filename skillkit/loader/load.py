"""
Build SkillPackages from skill folders.

The loader does all of the reading: SKILL.md, references/*.md and
rules/*.md. Problems confined to one file (bad frontmatter, text that is
not UTF-8) become findings on the LoadResult; files the filesystem refuses
to read raise UnreadableFileError and end the run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from skillkit.config import ValidatorConfig
from skillkit.errors import SkillFileError, UndecodableFileError, UnreadableFileError
from skillkit.loader.discovery import SkillCandidate
from skillkit.loader.frontmatter import parse_rule_frontmatter, parse_skill_frontmatter
from skillkit.types.finding_types import Finding, FindingKind
from skillkit.types.skill_types import (
    REFERENCES_DIR,
    RULES_DIR,
    SKILL_FILE,
    ReferenceDoc,
    ReferenceLink,
    Rule,
    SkillPackage,
)
from skillkit.utils.markdown import count_lines, extract_headings, extract_links, has_toc_heading
from skillkit.validate.references import normalize_link_target

log = logging.getLogger("skillkit.loader")


@dataclass(frozen=True)
class LoadResult:
    folder_name: str
    package: SkillPackage | None
    findings: tuple[Finding, ...] = ()


def read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise UndecodableFileError(path, exc) from exc
    except OSError as exc:
        raise UnreadableFileError(path, exc) from exc


def list_markdown(directory: Path) -> list[Path]:
    """Markdown files directly inside `directory`, sorted by name."""
    if not directory.is_dir():
        return []
    return sorted((p for p in directory.glob("*.md") if p.is_file()), key=lambda p: p.name)


def _error_finding(exc: SkillFileError, folder_name: str, root: Path) -> Finding:
    return Finding.of(exc.kind, folder_name, exc.message, _rel(exc.path, root))


def _rel(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def _collect_links(body: str, line_offset: int) -> tuple[ReferenceLink, ...]:
    links: list[ReferenceLink] = []
    for text, raw_target, lineno in extract_links(body):
        target = normalize_link_target(raw_target)
        if target is None:
            continue
        links.append(ReferenceLink(text=text, target=target, line=lineno + line_offset))
    return tuple(links)


def _load_reference_docs(
    skill_dir: Path, folder_name: str, root: Path
) -> tuple[tuple[ReferenceDoc, ...], list[Finding]]:
    docs: list[ReferenceDoc] = []
    findings: list[Finding] = []
    for path in list_markdown(skill_dir / REFERENCES_DIR):
        try:
            text = read_text(path)
        except UndecodableFileError as exc:
            findings.append(_error_finding(exc, folder_name, root))
            continue
        docs.append(
            ReferenceDoc(
                path=f"{REFERENCES_DIR}/{path.name}",
                line_count=count_lines(text),
                has_toc=has_toc_heading(extract_headings(text)),
            )
        )
    return tuple(docs), findings


def _load_rules(
    skill_dir: Path, folder_name: str, root: Path
) -> tuple[tuple[Rule, ...], list[Finding]]:
    rules: list[Rule] = []
    findings: list[Finding] = []
    for path in list_markdown(skill_dir / RULES_DIR):
        # _sections.md, _template.md and friends are not rules
        if path.name.startswith("_"):
            continue
        try:
            frontmatter = parse_rule_frontmatter(read_text(path), path)
        except SkillFileError as exc:
            log.debug("Rule %s rejected: %s", path, exc)
            findings.append(_error_finding(exc, folder_name, root))
            continue
        rules.append(
            Rule(
                title=frontmatter.title,
                impact=frontmatter.impact,
                tags=frontmatter.tags,
                path=f"{RULES_DIR}/{path.name}",
            )
        )
    return tuple(rules), findings


def load_skill(
    candidate: SkillCandidate,
    root: Path,
    config: ValidatorConfig | None = None,
) -> LoadResult:
    """Load one candidate folder into a SkillPackage plus load-time findings."""
    config = config or ValidatorConfig()
    root = Path(root)
    folder_name = candidate.folder_name
    rel_path = _rel(candidate.path, root)

    if candidate.skill_file is None:
        finding = Finding.of(
            FindingKind.MISSING_SKILL_FILE,
            folder_name,
            f"folder has no {SKILL_FILE}; it will not be recognised as a skill",
            rel_path,
        )
        return LoadResult(folder_name=folder_name, package=None, findings=(finding,))

    try:
        text = read_text(candidate.skill_file)
        frontmatter, body = parse_skill_frontmatter(
            text, candidate.skill_file, max_description_length=config.max_description_length
        )
    except SkillFileError as exc:
        log.info("Skipping %s: %s", rel_path, exc.message)
        return LoadResult(
            folder_name=folder_name,
            package=None,
            findings=(_error_finding(exc, folder_name, root),),
        )

    line_offset = count_lines(text[: len(text) - len(body)])
    rules, rule_findings = _load_rules(candidate.path, folder_name, root)
    reference_docs, reference_findings = _load_reference_docs(candidate.path, folder_name, root)

    package = SkillPackage(
        name=frontmatter.name,
        description=frontmatter.description,
        folder_name=folder_name,
        rel_path=rel_path,
        directory=candidate.path,
        body_line_count=count_lines(body),
        headings=tuple(extract_headings(body)),
        links=_collect_links(body, line_offset),
        reference_files=frozenset(
            f"{REFERENCES_DIR}/{p.name}" for p in list_markdown(candidate.path / REFERENCES_DIR)
        ),
        rule_files=frozenset(
            f"{RULES_DIR}/{p.name}" for p in list_markdown(candidate.path / RULES_DIR)
        ),
        reference_docs=reference_docs,
        rules=rules,
    )
    log.debug(
        "Loaded %s: %d body lines, %d links, %d references, %d rules",
        package.name,
        package.body_line_count,
        len(package.links),
        len(package.reference_files),
        len(package.rules),
    )
    return LoadResult(
        folder_name=folder_name,
        package=package,
        findings=tuple(reference_findings + rule_findings),
    )
