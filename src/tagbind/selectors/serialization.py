"""Flat-record conversion for required-attribute descriptors.

Descriptors produced outside the selector parser (for example from host
metadata) arrive as flat records with ``name``, ``operator``, ``value`` and
``is_css_selector`` fields. This module converts between those records and the
descriptor types, rejecting combinations that have no descriptor.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from tagbind.core.config_validation import (
    require_mapping,
    validate_allowed_keys,
    validate_required_keys,
)

from .descriptors import (
    WILDCARD_SUFFIX,
    CssAttributeRequirement,
    CssValueOperator,
    PlainAttributeRequirement,
    RequiredAttribute,
)

RECORD_KEYS: tuple[str, ...] = ("name", "operator", "value", "is_css_selector")
_PLAIN_OPERATORS = ("", WILDCARD_SUFFIX)
_CSS_OPERATORS = tuple(operator.value for operator in CssValueOperator)


def requirement_to_dict(requirement: RequiredAttribute) -> dict[str, Any]:
    """Convert one descriptor to a JSON-serializable flat record."""

    return {
        "name": requirement.name,
        "operator": requirement.operator_symbol,
        "value": requirement.value,
        "is_css_selector": requirement.is_css_selector,
    }


def requirement_from_dict(record: Mapping[str, Any], *, field_name: str = "requirement") -> RequiredAttribute:
    """Build one descriptor from a flat record.

    Parameters
    ----------
    record : Mapping[str, Any]
        Flat record. ``operator`` defaults to ``""``, ``value`` to ``None``
        and ``is_css_selector`` to ``False``.
    field_name : str, optional
        Record path used in error messages.

    Returns
    -------
    RequiredAttribute
        Plain or CSS descriptor.

    Raises
    ------
    ValueError
        If keys are unknown/missing or the operator, value and selector mode
        do not form a legal descriptor.
    """

    record = require_mapping(record, field_name=field_name)
    validate_allowed_keys(record, field_name=field_name, allowed_keys=RECORD_KEYS)
    validate_required_keys(record, field_name=field_name, required_keys=("name",))

    name = record["name"]
    operator = record.get("operator") or ""
    value = record.get("value")
    is_css_selector = bool(record.get("is_css_selector", False))

    if not isinstance(operator, str):
        raise ValueError(f"{field_name}.operator must be a string")
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{field_name}.value must be a string or null")

    if not is_css_selector:
        if operator not in _PLAIN_OPERATORS:
            raise ValueError(
                f"{field_name}.operator {operator!r} is not valid for a plain requirement; "
                f"expected one of {list(_PLAIN_OPERATORS)}"
            )
        if value is not None:
            raise ValueError(f"{field_name}.value is only allowed for CSS selector requirements")
        return PlainAttributeRequirement(name=name, wildcard_prefix=operator == WILDCARD_SUFFIX)

    if operator not in _CSS_OPERATORS:
        raise ValueError(
            f"{field_name}.operator {operator!r} is not valid for a CSS selector requirement; "
            f"expected one of {list(_CSS_OPERATORS)}"
        )
    css_operator = CssValueOperator(operator)
    if css_operator is CssValueOperator.NONE:
        if value is not None:
            raise ValueError(f"{field_name}.value requires a CSS value operator")
        return CssAttributeRequirement(name=name)
    if value is None:
        raise ValueError(f"{field_name}.value is required for operator {css_operator.token!r}")
    return CssAttributeRequirement(name=name, operator=css_operator, value=value)


def requirements_to_json(requirements: Sequence[RequiredAttribute], *, indent: int | None = 2) -> str:
    """Serialize descriptors to a JSON array of flat records."""

    return json.dumps([requirement_to_dict(item) for item in requirements], indent=indent)


def requirements_from_json(payload: str) -> tuple[RequiredAttribute, ...]:
    """Parse a JSON array of flat records produced by :func:`requirements_to_json`."""

    raw = json.loads(payload)
    if not isinstance(raw, list):
        raise ValueError("requirements JSON root must be an array")
    return tuple(
        requirement_from_dict(item, field_name=f"requirements[{index}]")
        for index, item in enumerate(raw)
    )


__all__ = [
    "RECORD_KEYS",
    "requirement_from_dict",
    "requirement_to_dict",
    "requirements_from_json",
    "requirements_to_json",
]
