"""Tests for the ``tagbind`` command line."""

from __future__ import annotations

import json

import pytest

from tagbind.cli import run_cli


def _write_config(tmp_path) -> str:
    """Write one YAML tag helper config and return its path."""

    path = tmp_path / "helpers.yaml"
    path.write_text(
        "tag_helpers:\n"
        "  - id: anchor\n"
        "    targets:\n"
        "      - tag: a\n"
        "        attributes: asp-route-*\n"
        "      - tag: a\n"
        "        attributes: \"[href^='/']\"\n"
        "  - id: submit\n"
        "    targets:\n"
        "      - tag: button\n"
        "        attributes: \"[type=submit]\"\n",
        encoding="utf-8",
    )
    return str(path)


def test_parse_prints_requirements_and_writes_json(tmp_path, capsys) -> None:
    """Parse command should list requirements and export them."""

    code = run_cli(["parse", "route-*, [href^='/a b']", "--output-dir", str(tmp_path), "--prefix", "links"])

    assert code == 0
    output = capsys.readouterr().out
    assert "Parsed 2 required attribute(s)" in output
    assert "  route-* (plain)" in output
    assert '  [href^="/a b"] (css)' in output

    summary = json.loads((tmp_path / "links_requirements.json").read_text(encoding="utf-8"))
    assert summary["selector"] == "route-*, [href^='/a b']"
    assert [item["name"] for item in summary["requirements"]] == ["route-", "href"]
    assert summary["requirements"][1]["value"] == "/a b"
    assert summary["warnings"] == []


def test_parse_reports_trailing_comma_as_warning(capsys) -> None:
    """Non-fatal diagnostics should be printed without failing."""

    code = run_cli(["parse", "asp-for,"])

    assert code == 0
    output = capsys.readouterr().out
    assert "warning: offset 7:" in output
    assert "[trailing_comma_at_end]" in output
    assert "Parsed 1 required attribute(s)" in output


def test_parse_invalid_selector_returns_error_code(capsys) -> None:
    """Fatal diagnostics should be printed and yield exit code 1."""

    code = run_cli(["parse", "[key"])

    assert code == 1
    output = capsys.readouterr().out
    assert output.startswith("error: offset 0:")
    assert "Selector invalid: '[key'" in output


def test_check_summarizes_valid_config(tmp_path, capsys) -> None:
    """Check command should count helpers and targets."""

    code = run_cli(["check", "--config", _write_config(tmp_path)])

    assert code == 0
    assert "Config OK: 2 tag helper(s), 3 target(s)" in capsys.readouterr().out


def test_check_reports_invalid_config(tmp_path, capsys) -> None:
    """Check command should print every selector problem of a bad config."""

    path = tmp_path / "bad.json"
    path.write_text(
        json.dumps({"tag_helpers": [{"id": "bad", "targets": [{"tag": "a", "attributes": "k@y, [x"}]}]}),
        encoding="utf-8",
    )

    code = run_cli(["check", "--config", str(path)])

    assert code == 1
    output = capsys.readouterr().out
    assert f"Config invalid: {path}" in output
    assert "bad target 0:" in output


def test_match_lists_bound_helpers(tmp_path, capsys) -> None:
    """Match command should print ids of bound helpers."""

    config = _write_config(tmp_path)

    assert run_cli(["match", "--config", config, "--tag", "a", "--attribute", "asp-route-id=3"]) == 0
    assert "Bound to <a>: anchor" in capsys.readouterr().out

    assert run_cli(["match", "--config", config, "--tag", "button", "--attribute", "type=reset"]) == 0
    assert "No tag helpers bound to <button>" in capsys.readouterr().out


def test_match_accepts_valueless_attributes(tmp_path, capsys) -> None:
    """Bare ``--attribute NAME`` should satisfy plain requirements."""

    path = tmp_path / "helpers.json"
    path.write_text(
        json.dumps({"tag_helpers": [{"id": "disabled", "targets": [{"tag": "*", "attributes": "disabled"}]}]}),
        encoding="utf-8",
    )

    assert run_cli(["match", "--config", str(path), "--tag", "input", "--attribute", "disabled"]) == 0
    assert "Bound to <input>: disabled" in capsys.readouterr().out


def test_match_rejects_attribute_without_name(tmp_path) -> None:
    """Attribute arguments must start with a name."""

    with pytest.raises(SystemExit):
        run_cli(["match", "--config", _write_config(tmp_path), "--tag", "a", "--attribute", "=x"])


def test_check_reports_unparseable_yaml(tmp_path, capsys) -> None:
    """YAML syntax errors should be reported instead of escaping the CLI."""

    path = tmp_path / "broken.yaml"
    path.write_text("tag_helpers: [unclosed\n", encoding="utf-8")

    code = run_cli(["check", "--config", str(path)])

    assert code == 1
    output = capsys.readouterr().out
    assert f"Config invalid: {path}" in output
    assert "invalid YAML manifest" in output
