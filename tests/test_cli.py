"""Tests for the validate-skills command line."""

import json

from skillkit.validate.validator import main


def test_valid_tree_exits_zero(skills_root, sample_tree, capsys):
    code = main([str(skills_root)])
    out = capsys.readouterr().out

    assert code == 0
    assert "Skills Validator" in out
    assert "convex [warning] MissingTOCWarning" in out
    assert "Errors:   0" in out
    assert "Warnings: 1" in out
    # captured output is not a terminal
    assert "\033[" not in out


def test_strict_fails_on_warnings(skills_root, sample_tree, capsys):
    assert main([str(skills_root), "--strict"]) == 1
    assert "--strict" in capsys.readouterr().out


def test_errors_exit_one(skills_root, make_skill, capsys):
    make_skill("My_Skill", name="my-skill")
    code = main([str(skills_root)])
    out = capsys.readouterr().out

    assert code == 1
    assert "My_Skill [error] InvalidNameFormatError" in out
    assert "My_Skill [error] NameFolderMismatchError" in out
    assert "(My_Skill/SKILL.md)" in out


def test_json_output(skills_root, make_skill, capsys):
    make_skill("demo", body="[x](references/missing.md)\n")
    code = main([str(skills_root), "--json"])
    payload = json.loads(capsys.readouterr().out)

    assert code == 1
    assert payload["skillsScanned"] == 1
    assert payload["passed"] is False
    assert payload["summary"] == {"errors": 1, "warnings": 0}
    assert payload["findings"] == [
        {
            "skillName": "demo",
            "severity": "error",
            "kind": "BrokenReferenceError",
            "message": "link to references/missing.md (line 6) does not resolve to a file in the skill",
            "filePath": "demo/SKILL.md",
        }
    ]


def test_output_is_idempotent(skills_root, sample_tree, make_skill, capsys):
    make_skill("My_Skill", name="my-skill")
    make_skill("orphaned", references={"extra.md": "# Extra\n"})

    for flags in ([], ["--json"], ["--jobs", "3"]):
        main([str(skills_root), *flags])
        first = capsys.readouterr().out
        main([str(skills_root), *flags])
        assert capsys.readouterr().out == first


def test_jobs_do_not_change_output(skills_root, sample_tree, make_skill, capsys):
    make_skill("orphaned", references={"extra.md": "# Extra\n"})
    main([str(skills_root), "--json"])
    sequential = capsys.readouterr().out
    main([str(skills_root), "--json", "--jobs", "4"])
    assert capsys.readouterr().out == sequential


def test_invalid_root_is_fatal(tmp_path, capsys):
    code = main([str(tmp_path / "missing")])
    captured = capsys.readouterr()
    assert code == 2
    assert captured.out == ""
    assert "Invalid skills root" in captured.err


def test_limit_flags(skills_root, make_skill, capsys):
    make_skill("demo", body="line\n" * 30)
    assert main([str(skills_root), "--max-body-lines", "10", "--strict"]) == 1
    assert "BodyTooLongWarning" in capsys.readouterr().out
