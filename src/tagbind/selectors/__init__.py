"""Required-attribute selector language: descriptors, parser and matcher."""

from .descriptors import (
    FORBIDDEN_NAME_CHARACTERS,
    WILDCARD_SUFFIX,
    CssAttributeRequirement,
    CssValueOperator,
    PlainAttributeRequirement,
    RequiredAttribute,
    format_requirements,
)
from .diagnostics import (
    DiagnosticBag,
    DiagnosticKind,
    DiagnosticSink,
    SelectorDiagnostic,
    SelectorSyntaxError,
)
from .evaluation import (
    RequirementReport,
    assert_requirements_satisfied,
    attribute_pairs,
    check_requirements,
    match_matrix,
    satisfies,
)
from .matching import matches, names_equal
from .names import fold_name, invalid_name_characters, is_valid_name, validate_name
from .parser import (
    ParseResult,
    RequiredAttributeParser,
    parse_required_attributes,
    require_attributes,
)
from .serialization import (
    requirement_from_dict,
    requirement_to_dict,
    requirements_from_json,
    requirements_to_json,
)

__all__ = [
    "CssAttributeRequirement",
    "CssValueOperator",
    "DiagnosticBag",
    "DiagnosticKind",
    "DiagnosticSink",
    "FORBIDDEN_NAME_CHARACTERS",
    "ParseResult",
    "PlainAttributeRequirement",
    "RequiredAttribute",
    "RequiredAttributeParser",
    "RequirementReport",
    "SelectorDiagnostic",
    "SelectorSyntaxError",
    "WILDCARD_SUFFIX",
    "assert_requirements_satisfied",
    "attribute_pairs",
    "check_requirements",
    "fold_name",
    "format_requirements",
    "invalid_name_characters",
    "is_valid_name",
    "match_matrix",
    "matches",
    "names_equal",
    "parse_required_attributes",
    "require_attributes",
    "requirement_from_dict",
    "requirement_to_dict",
    "requirements_from_json",
    "requirements_to_json",
    "satisfies",
    "validate_name",
]
