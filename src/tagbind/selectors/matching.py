"""Evaluate one required-attribute descriptor against one HTML attribute."""

from __future__ import annotations

from .descriptors import CssAttributeRequirement, CssValueOperator, RequiredAttribute
from .names import fold_name


def names_equal(left: str, right: str) -> bool:
    """Ordinal case-insensitive attribute name comparison."""

    return fold_name(left) == fold_name(right)


def matches(
    requirement: RequiredAttribute,
    attribute_name: str,
    attribute_value: str | None = None,
) -> bool:
    """Return whether an attribute satisfies one requirement.

    Parameters
    ----------
    requirement : RequiredAttribute
        Descriptor to evaluate.
    attribute_name : str
        Candidate attribute name.
    attribute_value : str | None, optional
        Candidate attribute value. ``None`` (an attribute written without a
        value) compares as the empty string.

    Returns
    -------
    bool
        Match result.

    Notes
    -----
    Names compare case-insensitively and values compare ordinally. A wildcard
    prefix only matches names strictly longer than the prefix, so ``route-*``
    does not match ``route-`` itself.
    """

    if isinstance(requirement, CssAttributeRequirement):
        if not names_equal(requirement.name, attribute_name):
            return False
        return _value_matches(requirement, attribute_value or "")

    if requirement.wildcard_prefix:
        prefix = fold_name(requirement.name)
        folded = fold_name(attribute_name)
        return len(folded) > len(prefix) and folded.startswith(prefix)

    return names_equal(requirement.name, attribute_name)


def _value_matches(requirement: CssAttributeRequirement, attribute_value: str) -> bool:
    operator = requirement.operator
    if operator is CssValueOperator.EQUALS:
        return attribute_value == requirement.value
    if operator is CssValueOperator.PREFIX:
        return attribute_value.startswith(requirement.value or "")
    if operator is CssValueOperator.SUFFIX:
        return attribute_value.endswith(requirement.value or "")
    # Name presence alone satisfies an operator-less selector.
    return True


__all__ = ["matches", "names_equal"]
