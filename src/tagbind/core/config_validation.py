"""Strict key checks for declarative manifest sections and flat records."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


def validate_allowed_keys(
    mapping: Mapping[str, Any],
    *,
    field_name: str,
    allowed_keys: Iterable[str],
) -> None:
    """Reject keys that a manifest section does not define.

    Parameters
    ----------
    mapping : Mapping[str, Any]
        Section to validate.
    field_name : str
        Dotted path of the section, used in error messages.
    allowed_keys : Iterable[str]
        Key names the section may contain.

    Raises
    ------
    ValueError
        If unknown keys are present.
    """

    allowed = {str(key) for key in allowed_keys}
    unknown = sorted(str(key) for key in mapping if str(key) not in allowed)
    if unknown:
        raise ValueError(f"{field_name} has unknown keys: {unknown}")


def validate_required_keys(
    mapping: Mapping[str, Any],
    *,
    field_name: str,
    required_keys: Iterable[str],
) -> None:
    """Reject a section that omits mandatory keys.

    Raises
    ------
    ValueError
        If required keys are missing.
    """

    missing = sorted(str(key) for key in required_keys if key not in mapping)
    if missing:
        raise ValueError(f"{field_name} is missing required keys: {missing}")


def require_mapping(value: Any, *, field_name: str) -> Mapping[str, Any]:
    """Return ``value`` if it is a mapping, else raise ``ValueError``."""

    if not isinstance(value, Mapping):
        raise ValueError(f"{field_name} must be an object mapping")
    return value


def require_list(value: Any, *, field_name: str) -> list[Any]:
    """Return ``value`` as a list if it is a JSON/YAML array."""

    if not isinstance(value, (list, tuple)):
        raise ValueError(f"{field_name} must be a list")
    return list(value)


def optional_str(value: Any, *, field_name: str) -> str | None:
    """Return ``value`` if it is ``None`` or a string."""

    if value is None or isinstance(value, str):
        return value
    raise ValueError(f"{field_name} must be a string or null")


__all__ = [
    "optional_str",
    "require_list",
    "require_mapping",
    "validate_allowed_keys",
    "validate_required_keys",
]
