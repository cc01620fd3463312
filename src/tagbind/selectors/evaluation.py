"""Requirement-set evaluation against an element's attributes.

An element satisfies a requirement set when every requirement is matched by
at least one of its attributes (AND across requirements, OR across
attributes). An empty requirement set is always satisfied.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Union

import numpy as np

from .descriptors import CssAttributeRequirement, CssValueOperator, RequiredAttribute
from .matching import matches

AttributePair = tuple[str, Union[str, None]]
AttributeInput = Union[Mapping[str, Union[str, None]], Iterable[AttributePair]]


def attribute_pairs(attributes: AttributeInput) -> tuple[AttributePair, ...]:
    """Normalize element attributes to ordered ``(name, value)`` pairs.

    Parameters
    ----------
    attributes : Mapping[str, str | None] | Iterable[tuple[str, str | None]]
        Attribute mapping, or pairs when an element repeats an attribute.

    Returns
    -------
    tuple[tuple[str, str | None], ...]
        Pairs in input order.
    """

    if isinstance(attributes, Mapping):
        return tuple((str(name), value) for name, value in attributes.items())

    pairs: list[AttributePair] = []
    for item in attributes:
        name, value = item
        pairs.append((str(name), value))
    return tuple(pairs)


def satisfies(requirements: Sequence[RequiredAttribute], attributes: AttributeInput) -> bool:
    """Return whether ``attributes`` satisfy every requirement.

    Parameters
    ----------
    requirements : Sequence[RequiredAttribute]
        Requirement set.
    attributes : AttributeInput
        Candidate element attributes.

    Returns
    -------
    bool
        ``True`` when each requirement matches some attribute.
    """

    pairs = attribute_pairs(attributes)
    return all(
        any(matches(requirement, name, value) for name, value in pairs)
        for requirement in requirements
    )


def match_matrix(requirements: Sequence[RequiredAttribute], attributes: AttributeInput) -> np.ndarray:
    """Build the pairwise requirement/attribute match table.

    Returns
    -------
    numpy.ndarray
        Boolean array with shape ``(len(requirements), n_attributes)``;
        entry ``[i, j]`` is ``matches(requirements[i], *attributes[j])``.
    """

    pairs = attribute_pairs(attributes)
    table = np.zeros((len(requirements), len(pairs)), dtype=bool)
    for row, requirement in enumerate(requirements):
        for column, (name, value) in enumerate(pairs):
            table[row, column] = matches(requirement, name, value)
    return table


@dataclass(frozen=True, slots=True)
class RequirementReport:
    """Requirement-set evaluation result.

    Parameters
    ----------
    is_satisfied : bool
        ``True`` when every requirement matched some attribute.
    unsatisfied : tuple[RequiredAttribute, ...]
        Requirements no attribute matched, in requirement order.
    matched_attributes : tuple[tuple[str, ...], ...]
        Per requirement, names of the attributes that matched it.
    issues : tuple[str, ...]
        Human-readable issue descriptions.
    """

    is_satisfied: bool
    unsatisfied: tuple[RequiredAttribute, ...]
    matched_attributes: tuple[tuple[str, ...], ...]
    issues: tuple[str, ...]


def check_requirements(
    requirements: Sequence[RequiredAttribute],
    attributes: AttributeInput,
) -> RequirementReport:
    """Evaluate every requirement and report which ones are unmet.

    Parameters
    ----------
    requirements : Sequence[RequiredAttribute]
        Requirement set.
    attributes : AttributeInput
        Candidate element attributes.

    Returns
    -------
    RequirementReport
        Evaluation outcome and issue list.
    """

    pairs = attribute_pairs(attributes)
    table = match_matrix(requirements, pairs)

    unsatisfied: list[RequiredAttribute] = []
    matched: list[tuple[str, ...]] = []
    issues: list[str] = []
    for row, requirement in enumerate(requirements):
        columns = np.flatnonzero(table[row])
        matched.append(tuple(pairs[int(column)][0] for column in columns))
        if columns.size == 0:
            unsatisfied.append(requirement)
            issues.append(f"no attribute satisfies required attribute {_describe(requirement)}")

    return RequirementReport(
        is_satisfied=not unsatisfied,
        unsatisfied=tuple(unsatisfied),
        matched_attributes=tuple(matched),
        issues=tuple(issues),
    )


def assert_requirements_satisfied(
    requirements: Sequence[RequiredAttribute],
    attributes: AttributeInput,
) -> None:
    """Raise ``ValueError`` if ``attributes`` do not satisfy ``requirements``."""

    report = check_requirements(requirements, attributes)
    if report.is_satisfied:
        return

    formatted = "\n".join(f"- {issue}" for issue in report.issues)
    raise ValueError(f"element does not satisfy required attributes:\n{formatted}")



def _describe(requirement: RequiredAttribute) -> str:
    # Values are repr-quoted; selector text cannot quote values holding both quotes.
    if isinstance(requirement, CssAttributeRequirement) and requirement.operator is not CssValueOperator.NONE:
        return f"[{requirement.name}{requirement.operator.token}{requirement.value!r}]"
    return requirement.to_selector()


__all__ = [
    "AttributeInput",
    "AttributePair",
    "RequirementReport",
    "assert_requirements_satisfied",
    "attribute_pairs",
    "check_requirements",
    "match_matrix",
    "satisfies",
]
