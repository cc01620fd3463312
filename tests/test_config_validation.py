"""Tests for strict manifest section validation helpers."""

from __future__ import annotations

import pytest

from tagbind.core import (
    optional_str,
    require_list,
    require_mapping,
    validate_allowed_keys,
    validate_required_keys,
)


def test_key_validation_helpers_report_sorted_keys() -> None:
    """Unknown and missing keys should be listed in sorted order."""

    with pytest.raises(ValueError, match=r"section has unknown keys: \['x', 'y'\]"):
        validate_allowed_keys({"y": 1, "x": 2, "id": 3}, field_name="section", allowed_keys=("id",))
    with pytest.raises(ValueError, match=r"section is missing required keys: \['id', 'tag'\]"):
        validate_required_keys({}, field_name="section", required_keys=("tag", "id"))


def test_key_validation_accepts_complete_sections() -> None:
    """Sections with only known keys and every required key pass silently."""

    section = {"id": "anchor", "targets": []}

    validate_allowed_keys(section, field_name="helper", allowed_keys=("id", "description", "targets"))
    validate_required_keys(section, field_name="helper", required_keys=("id", "targets"))


def test_typed_field_helpers() -> None:
    """Mapping, list and optional-string checks name the offending field."""

    assert require_mapping({"a": 1}, field_name="root") == {"a": 1}
    assert require_list(("a", "b"), field_name="items") == ["a", "b"]
    assert optional_str(None, field_name="tag") is None
    assert optional_str("a", field_name="tag") == "a"

    with pytest.raises(ValueError, match="root must be an object mapping"):
        require_mapping([1], field_name="root")
    with pytest.raises(ValueError, match="items must be a list"):
        require_list("ab", field_name="items")
    with pytest.raises(ValueError, match="tag must be a string or null"):
        optional_str(3, field_name="tag")
