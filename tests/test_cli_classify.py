import json

from typer.testing import CliRunner

from revisionpack.cli.app import app


def test_cli_classify_text_output() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["classify", "--old", "a,b,c", "--new", "b, c, a"])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == [
        "a\tmovedDown",
        "b\tunchanged",
        "c\tunchanged",
        "a\tmovedHere",
    ]


def test_cli_classify_json_output() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["classify", "--old", "a,b", "--new", "b,c", "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout.strip())
    assert payload["status"] == "ok"
    assert payload["entries"] == [
        {"key": "a", "change_type": "removed"},
        {"key": "b", "change_type": "unchanged"},
        {"key": "c", "change_type": "added"},
    ]


def test_cli_classify_empty_sides() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["classify", "--old", "", "--new", "x", "--json"])

    assert result.exit_code == 0
    assert json.loads(result.stdout.strip())["entries"] == [{"key": "x", "change_type": "added"}]


def test_cli_classify_duplicate_keys_fail() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["classify", "--old", "a,a", "--new", "a", "--json"])

    assert result.exit_code == 1
    payload = json.loads(result.stdout.strip())
    assert payload["status"] == "error"
    assert payload["message"] == "classify failed: Duplicate old section keys: a"
