"""
Skill scaffolder.

Creates a new skill folder with a SKILL.md that already passes the
validator, and optionally a references/ file and a rules/ skeleton.

Usage:
    new-skill [skill-name] [--root skills] [--description TEXT] [--references] [--rules]

Missing name or description are prompted for.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import yaml

from skillkit.config import MAX_DESCRIPTION_LENGTH, MAX_NAME_LENGTH
from skillkit.types.skill_types import REFERENCES_DIR, RULES_DIR, SKILL_FILE
from skillkit.utils.console import Palette
from skillkit.validate.validator import name_format_problem

# ---------------------------------------------------------------------------
# Prompt helpers
# ---------------------------------------------------------------------------


def ask(question: str) -> str:
    return input(question).strip()


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------


def _frontmatter(data: dict[str, str]) -> str:
    dumped = yaml.safe_dump(data, sort_keys=False, allow_unicode=True, width=10_000)
    return f"---\n{dumped}---\n"


def title_for(name: str) -> str:
    return " ".join(w.capitalize() for w in name.split("-"))


def generate_skill_md(name: str, description: str, *, references: bool = False) -> str:
    """Generate the content of a SKILL.md file."""
    parts: list[str] = [_frontmatter({"name": name, "description": description})]
    parts.append(f"# {title_for(name)}")
    parts.append("")
    parts.append(description)
    parts.append("")
    parts.append("## Instructions")
    parts.append("")
    parts.append("1. Describe the first step the agent should take.")
    parts.append("2. Keep this file short; put detail in reference files.")
    parts.append("")
    if references:
        parts.append("## References")
        parts.append("")
        parts.append(f"- [Overview]({REFERENCES_DIR}/overview.md): background loaded on demand")
        parts.append("")
    return "\n".join(parts)


def generate_reference_md(name: str) -> str:
    return "\n".join(
        [
            f"# {title_for(name)} Overview",
            "",
            "Detailed material the agent reads only when SKILL.md points here.",
            "Add a `## Contents` section once this file grows past 100 lines.",
            "",
        ]
    )


def generate_sections_md() -> str:
    return "\n".join(
        [
            "# Sections",
            "",
            "Rule files are named `<section>-<name>.md`. List sections in display order:",
            "",
            "1. **general** - rules that apply everywhere",
            "",
        ]
    )


def generate_rule_template_md() -> str:
    fm = _frontmatter({"title": "Rule title", "impact": "MEDIUM", "tags": ["tag-one", "tag-two"]})
    return "\n".join(
        [
            fm,
            "## Rule title",
            "",
            "**Incorrect:**",
            "",
            "```",
            "// what not to do",
            "```",
            "",
            "**Correct:**",
            "",
            "```",
            "// what to do instead",
            "```",
            "",
        ]
    )


def create_skill(
    root: Path,
    name: str,
    description: str,
    *,
    references: bool = False,
    rules: bool = False,
) -> list[Path]:
    """Write the skill folder and return the files created.

    Raises ValueError for an invalid name or description and
    FileExistsError when the folder already exists.
    """
    problem = name_format_problem(name, MAX_NAME_LENGTH)
    if problem:
        raise ValueError(f'"{name}" is not a valid skill name: {problem}')
    if not description.strip():
        raise ValueError("description is required")
    if len(description) > MAX_DESCRIPTION_LENGTH:
        raise ValueError(f"description is longer than {MAX_DESCRIPTION_LENGTH} characters")

    target_dir = root / name
    if target_dir.exists():
        raise FileExistsError(f'"{name}" already exists in {root}')

    created: list[Path] = []
    target_dir.mkdir(parents=True)
    skill_md = target_dir / SKILL_FILE
    skill_md.write_text(generate_skill_md(name, description, references=references), encoding="utf-8")
    created.append(skill_md)

    if references:
        (target_dir / REFERENCES_DIR).mkdir()
        overview = target_dir / REFERENCES_DIR / "overview.md"
        overview.write_text(generate_reference_md(name), encoding="utf-8")
        created.append(overview)

    if rules:
        rules_dir = target_dir / RULES_DIR
        rules_dir.mkdir()
        for filename, content in (
            ("_sections.md", generate_sections_md()),
            ("_template.md", generate_rule_template_md()),
        ):
            (rules_dir / filename).write_text(content, encoding="utf-8")
            created.append(rules_dir / filename)

    return created


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="new-skill", description="Scaffold a new skill folder.")
    parser.add_argument("name", nargs="?", help="Skill name (lowercase-hyphens)")
    parser.add_argument("--root", type=Path, default=Path("skills"), help="Skills root (default: skills)")
    parser.add_argument("--description", "-d", help="One or two sentences: what it does, when to use it")
    parser.add_argument("--references", action="store_true", help="Add references/overview.md")
    parser.add_argument("--rules", action="store_true", help="Add rules/_sections.md and _template.md")
    args = parser.parse_args(argv)

    palette = Palette.for_stream(sys.stdout)
    print()
    print(palette.bold("Skill Scaffolder"))
    print()

    try:
        name = args.name or ask("  Skill name (lowercase-hyphens): ")
        description = args.description or ask("  Description (what it does and when to use it): ")
        created = create_skill(
            args.root, name, description, references=args.references, rules=args.rules
        )
    except (KeyboardInterrupt, EOFError):
        print("\n  Cancelled.")
        return 1
    except (ValueError, FileExistsError) as exc:
        print(f"  Error: {exc}", file=sys.stderr)
        return 1

    print(f"  Creating {palette.bold(name)}...")
    for path in created:
        print(f"  {palette.green('✓')} {path.relative_to(args.root).as_posix()}")
    print()
    print(palette.green("  Done!"))
    print()
    print("  Next steps:")
    print(f"    1. Edit {palette.dim(f'{args.root.as_posix()}/{name}/{SKILL_FILE}')}")
    print(f"    2. Validate: {palette.dim(f'validate-skills {args.root.as_posix()}')}")
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
