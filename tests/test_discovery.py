"""Tests for skillkit.loader.discovery."""

import pytest

from skillkit.errors import FatalScanError, InvalidRootError
from skillkit.loader.discovery import discover_skills


def test_missing_root_fails_before_iteration(tmp_path):
    with pytest.raises(InvalidRootError) as exc_info:
        discover_skills(tmp_path / "nope")
    assert isinstance(exc_info.value, FatalScanError)


def test_file_root(tmp_path):
    target = tmp_path / "skills.md"
    target.write_text("x", encoding="utf-8")
    with pytest.raises(InvalidRootError):
        discover_skills(target)


def test_candidates_sorted_and_filtered(skills_root, make_skill):
    make_skill("zeta")
    make_skill("alpha")
    (skills_root / "no-skill-file").mkdir()
    (skills_root / ".hidden").mkdir()
    (skills_root / "__pycache__").mkdir()
    (skills_root / "README.md").write_text("# Skills\n", encoding="utf-8")

    candidates = list(discover_skills(skills_root))

    assert [c.folder_name for c in candidates] == ["alpha", "no-skill-file", "zeta"]
    by_name = {c.folder_name: c for c in candidates}
    assert by_name["alpha"].skill_file == skills_root / "alpha" / "SKILL.md"
    assert by_name["no-skill-file"].skill_file is None


def test_lazy_and_restartable(skills_root, make_skill):
    make_skill("alpha")
    make_skill("beta")

    first = discover_skills(skills_root)
    assert iter(first) is first
    assert next(first).folder_name == "alpha"

    again = [c.folder_name for c in discover_skills(skills_root)]
    assert again == ["alpha", "beta"]


def test_empty_root(skills_root):
    assert list(discover_skills(skills_root)) == []


def test_accepts_str_root(skills_root, make_skill):
    make_skill("alpha")
    assert [c.folder_name for c in discover_skills(str(skills_root))] == ["alpha"]
