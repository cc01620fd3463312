"""Structured diagnostics recorded while parsing required-attribute selectors.

Diagnostics are pushed into a caller-supplied sink rather than raised, so one
parse can report every problem it finds. The sink is owned by the caller of a
single parse and is never shared through module state.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, runtime_checkable


class DiagnosticKind(str, Enum):
    """Categories of selector problems.

    Attributes
    ----------
    BLANK_NAME
        Name is empty or whitespace-only.
    INVALID_NAME_CHARACTER
        Name contains a forbidden character. Recorded once per character.
    UNTERMINATED_BRACKET
        A bracketed term is missing its closing ``]``.
    UNTERMINATED_QUOTED_VALUE
        A quoted value is missing its closing quote.
    MALFORMED_OPERATOR
        ``^`` or ``$`` is not immediately followed by ``=``.
    UNEXPECTED_TRAILING_CHARACTER
        A term is followed by something other than ``,`` or end of input.
    TRAILING_COMMA_AT_END
        Input ends right after a separating ``,``. Not fatal.
    """

    BLANK_NAME = "blank_name"
    INVALID_NAME_CHARACTER = "invalid_name_character"
    UNTERMINATED_BRACKET = "unterminated_bracket"
    UNTERMINATED_QUOTED_VALUE = "unterminated_quoted_value"
    MALFORMED_OPERATOR = "malformed_operator"
    UNEXPECTED_TRAILING_CHARACTER = "unexpected_trailing_character"
    TRAILING_COMMA_AT_END = "trailing_comma_at_end"


NON_FATAL_KINDS: frozenset[DiagnosticKind] = frozenset({DiagnosticKind.TRAILING_COMMA_AT_END})


@dataclass(frozen=True, slots=True)
class SelectorDiagnostic:
    """One recorded selector problem.

    Parameters
    ----------
    kind : DiagnosticKind
        Problem category.
    message : str
        Human-readable description.
    location : int
        Zero-based offset into the parsed text where the problem was found.
    length : int
        Number of characters covered by the problem (``0`` for positions).
    character : str | None, optional
        Offending character, when the problem is about one character.
    """

    kind: DiagnosticKind
    message: str
    location: int = 0
    length: int = 0
    character: str | None = None

    @property
    def is_fatal(self) -> bool:
        """Whether this diagnostic makes the enclosing parse fail."""

        return self.kind not in NON_FATAL_KINDS

    def format(self) -> str:
        """Render as ``offset N: message``."""

        return f"offset {self.location}: {self.message}"


@runtime_checkable
class DiagnosticSink(Protocol):
    """Receiver for diagnostics recorded during one parse call."""

    def on_error(self, diagnostic: SelectorDiagnostic) -> None:
        """Record one diagnostic."""


@dataclass(slots=True)
class DiagnosticBag:
    """List-backed :class:`DiagnosticSink`.

    Parameters
    ----------
    diagnostics : list[SelectorDiagnostic]
        Diagnostics in the order they were recorded.
    """

    diagnostics: list[SelectorDiagnostic] = field(default_factory=list)

    def on_error(self, diagnostic: SelectorDiagnostic) -> None:
        self.diagnostics.append(diagnostic)

    @property
    def has_errors(self) -> bool:
        """``True`` when at least one fatal diagnostic was recorded."""

        return any(item.is_fatal for item in self.diagnostics)

    def kinds(self) -> tuple[DiagnosticKind, ...]:
        """Return recorded kinds in order."""

        return tuple(item.kind for item in self.diagnostics)


class SelectorSyntaxError(ValueError):
    """Raised when a caller demands requirements from a failed parse.

    Parameters
    ----------
    diagnostics : Iterable[SelectorDiagnostic]
        Every diagnostic recorded for the failing input.
    context : str, optional
        Short description of what was being parsed.
    """

    def __init__(self, diagnostics: Iterable[SelectorDiagnostic], context: str = "selector") -> None:
        self.diagnostics: tuple[SelectorDiagnostic, ...] = tuple(diagnostics)
        formatted = "\n".join(f"- {item.format()}" for item in self.diagnostics)
        super().__init__(f"{context} is invalid:\n{formatted}")


__all__ = [
    "DiagnosticBag",
    "DiagnosticKind",
    "DiagnosticSink",
    "NON_FATAL_KINDS",
    "SelectorDiagnostic",
    "SelectorSyntaxError",
]
