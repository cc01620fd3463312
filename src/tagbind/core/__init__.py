"""Shared validation helpers for declarative manifest sections."""

from .config_validation import (
    optional_str,
    require_list,
    require_mapping,
    validate_allowed_keys,
    validate_required_keys,
)

__all__ = [
    "optional_str",
    "require_list",
    "require_mapping",
    "validate_allowed_keys",
    "validate_required_keys",
]
