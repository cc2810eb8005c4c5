"""
Build a skills catalog JSON file.

Loads every skill folder under a skills root, skips the ones that fail to
load, and writes a catalog of names, descriptions, references and rules
that an installer can serve without re-reading each SKILL.md.

Usage:
    build-skills-catalog skills/ [-o skills-catalog.json]
    python -m skillkit.catalog.build_catalog skills/
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from skillkit.config import ValidatorConfig
from skillkit.errors import FatalScanError
from skillkit.loader.discovery import discover_skills
from skillkit.loader.load import load_skill
from skillkit.types.skill_types import SkillPackage
from skillkit.utils.console import Palette

log = logging.getLogger("skillkit.catalog")

CATALOG_VERSION = "1.0.0"


# ---------------------------------------------------------------------------
# Entries
# ---------------------------------------------------------------------------


def catalog_entry(package: SkillPackage) -> dict[str, Any]:
    return {
        "name": package.name,
        "description": package.description,
        "path": package.rel_path,
        "bodyLines": package.body_line_count,
        "references": sorted(package.reference_files),
        "rules": [
            {
                "title": rule.title,
                "impact": rule.impact.value,
                "tags": sorted(rule.tags),
                "path": rule.path,
            }
            for rule in sorted(package.rules, key=lambda r: r.path)
        ],
    }


def build_catalog(
    root: Path | str,
    config: ValidatorConfig | None = None,
    palette: Palette | None = None,
) -> tuple[dict[str, Any], int]:
    """Return (catalog, warning count) for every loadable skill under `root`.

    Progress lines go to stderr so stdout stays free for the catalog.
    """
    config = config or ValidatorConfig()
    palette = palette or Palette()
    root = Path(root)

    entries: list[dict[str, Any]] = []
    seen_names: set[str] = set()
    warnings = 0

    for candidate in discover_skills(root):
        result = load_skill(candidate, root, config)
        if result.package is None:
            reason = result.findings[0].message if result.findings else "not loadable"
            print(f"  {palette.WARN} Skipping {candidate.folder_name}: {reason}", file=sys.stderr)
            warnings += 1
            continue

        package = result.package
        if package.name in seen_names:
            print(f'  {palette.WARN} Duplicate skill name: "{package.name}" (in {package.rel_path})', file=sys.stderr)
            warnings += 1
        seen_names.add(package.name)

        if not package.description.strip():
            print(f"  {palette.WARN} No description found for {package.rel_path}", file=sys.stderr)
            warnings += 1

        entries.append(catalog_entry(package))
        print(f"  {palette.PASS} {package.name}", file=sys.stderr)

    entries.sort(key=lambda e: (e["name"], e["path"]))
    catalog = {
        "generatedAt": datetime.now(timezone.utc).isoformat(),
        "version": CATALOG_VERSION,
        "skills": entries,
    }
    log.info("Catalog built with %d skill(s), %d warning(s)", len(entries), warnings)
    return catalog, warnings


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="build-skills-catalog",
        description="Write a JSON catalog of the skills under a root folder.",
    )
    parser.add_argument("root", type=Path, help="Folder whose subfolders are skills")
    parser.add_argument(
        "--output", "-o", type=Path, default=Path("skills-catalog.json"), help="Catalog file to write"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging on stderr")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    palette = Palette.for_stream(sys.stderr)

    print(file=sys.stderr)
    print(palette.bold("Skills Catalog Builder"), file=sys.stderr)
    print(file=sys.stderr)

    try:
        catalog, warnings = build_catalog(args.root, palette=palette)
    except FatalScanError as exc:
        print(f"  {palette.FAIL} {exc}", file=sys.stderr)
        return 1

    args.output.write_text(json.dumps(catalog, indent=2) + "\n", encoding="utf-8")

    print(file=sys.stderr)
    print(palette.bold("Summary"), file=sys.stderr)
    print(file=sys.stderr)
    print(f"  Skills:   {len(catalog['skills'])}", file=sys.stderr)
    print(f"  {palette.WARN} Warnings: {warnings}", file=sys.stderr)
    print(f"  Output:   {args.output}", file=sys.stderr)
    print(file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
