"""Tests for skillkit.scaffold.new_skill."""

import pytest

from skillkit.loader.frontmatter import parse_skill_frontmatter
from skillkit.scaffold.new_skill import create_skill, main
from skillkit.validate.validator import validate_tree


def test_scaffolded_skill_validates_clean(skills_root):
    create_skill(skills_root, "release-notes", "Writes release notes. Use when preparing a release.")
    report = validate_tree(skills_root)
    assert report.findings == ()


def test_scaffold_with_references_and_rules(skills_root):
    created = create_skill(
        skills_root,
        "react-patterns",
        "React performance patterns: memoization, data fetching.",
        references=True,
        rules=True,
    )
    names = sorted(p.relative_to(skills_root).as_posix() for p in created)
    assert names == [
        "react-patterns/SKILL.md",
        "react-patterns/references/overview.md",
        "react-patterns/rules/_sections.md",
        "react-patterns/rules/_template.md",
    ]
    assert validate_tree(skills_root).findings == ()


def test_description_with_colon_is_quoted(skills_root):
    create_skill(skills_root, "demo", "Use when: the user asks")
    path = skills_root / "demo" / "SKILL.md"
    frontmatter, _ = parse_skill_frontmatter(path.read_text(encoding="utf-8"), path)
    assert frontmatter.description == "Use when: the user asks"


@pytest.mark.parametrize("name", ["My_Skill", "bad name", "-x"])
def test_invalid_name(skills_root, name):
    with pytest.raises(ValueError):
        create_skill(skills_root, name, "d")


def test_empty_description(skills_root):
    with pytest.raises(ValueError):
        create_skill(skills_root, "demo", "   ")


def test_existing_folder(skills_root):
    (skills_root / "demo").mkdir()
    with pytest.raises(FileExistsError):
        create_skill(skills_root, "demo", "d")


def test_main_non_interactive(skills_root, capsys):
    code = main(["demo", "--root", str(skills_root), "-d", "Demo skill.", "--references"])
    out = capsys.readouterr().out
    assert code == 0
    assert "demo/references/overview.md" in out
    assert (skills_root / "demo" / "SKILL.md").is_file()


def test_main_prompts_for_missing_values(skills_root, monkeypatch, capsys):
    answers = iter(["prompted", "Prompted skill."])
    monkeypatch.setattr("builtins.input", lambda _: next(answers))
    assert main(["--root", str(skills_root)]) == 0
    assert (skills_root / "prompted" / "SKILL.md").is_file()


def test_main_rejects_bad_name(skills_root, capsys):
    assert main(["Bad_Name", "--root", str(skills_root), "-d", "x"]) == 1
    assert "not a valid skill name" in capsys.readouterr().err
