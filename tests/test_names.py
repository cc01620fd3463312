"""Tests for shared name validation."""

from __future__ import annotations

import pytest

from tagbind.selectors import DiagnosticBag, DiagnosticKind, invalid_name_characters, is_valid_name, validate_name


@pytest.mark.parametrize("name", [None, "", " ", "\t\n"])
def test_blank_names_record_one_diagnostic(name: str | None) -> None:
    """Null or whitespace names should yield a single blank-name diagnostic."""

    bag = DiagnosticBag()

    assert validate_name(name, sink=bag) is False
    assert bag.kinds() == (DiagnosticKind.BLANK_NAME,)
    assert bag.diagnostics[0].message == "Attribute name cannot be null or whitespace."


def test_target_label_appears_in_messages() -> None:
    """Messages should name what kind of name was invalid."""

    bag = DiagnosticBag()

    validate_name("", sink=bag, target="parent tag")
    validate_name("d/v", sink=bag, target="tag")

    assert bag.diagnostics[0].message.startswith("Parent tag name")
    assert "Invalid tag name 'd/v'" in bag.diagnostics[1].message


def test_each_forbidden_character_is_reported_with_offset() -> None:
    """Offsets should be relative to the given location."""

    bag = DiagnosticBag()

    assert validate_name("a b=c", sink=bag, location=10) is False
    assert [(item.character, item.location, item.length) for item in bag.diagnostics] == [
        (" ", 11, 1),
        ("=", 13, 1),
    ]


def test_valid_names_record_nothing() -> None:
    """Valid names should not touch the sink."""

    bag = DiagnosticBag()

    assert validate_name("data-role", sink=bag) is True
    assert bag.diagnostics == []
    assert bag.has_errors is False


def test_invalid_name_characters_lists_repeats() -> None:
    """Every occurrence should be listed in order."""

    assert invalid_name_characters("a<<b>") == ("<", "<", ">")
    assert invalid_name_characters("asp-for") == ()


def test_is_valid_name() -> None:
    """Boolean helper should mirror validation without diagnostics."""

    assert is_valid_name("class") is True
    assert is_valid_name("@click") is False
    assert is_valid_name("   ") is False
    assert is_valid_name(None) is False
