"""Single-pass parser for required-attribute selector strings.

Selector strings list the attributes a tag helper target requires, e.g.
``"asp-route-*, [href^='/'], disabled"``. Two term forms exist:

- plain terms, a bare attribute name optionally followed by ``*`` to match any
  attribute name that strictly extends it;
- bracketed terms, ``[name]``, ``[name=value]``, ``[name^=value]`` or
  ``[name$=value]``, where values are bare tokens or quoted literally.

Terms are separated by commas and optional whitespace. Every parse builds its
own :class:`RequiredAttributeParser`, so parsers never share a cursor.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .descriptors import (
    WILDCARD_SUFFIX,
    CssAttributeRequirement,
    CssValueOperator,
    PlainAttributeRequirement,
    RequiredAttribute,
)
from .diagnostics import (
    DiagnosticKind,
    DiagnosticSink,
    SelectorDiagnostic,
    SelectorSyntaxError,
)
from .names import validate_name

_TERM_SEPARATOR = ","
_OPEN_BRACKET = "["
_CLOSE_BRACKET = "]"
_QUOTES = ("'", '"')
_PLAIN_NAME_TERMINATORS = frozenset({_TERM_SEPARATOR, WILDCARD_SUFFIX})
_CSS_NAME_TERMINATORS = frozenset({_CLOSE_BRACKET, "=", "^", "$"})
_PREFIXED_OPERATORS = {"^": CssValueOperator.PREFIX, "$": CssValueOperator.SUFFIX}


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Outcome of parsing one selector string.

    Parameters
    ----------
    success : bool
        ``False`` when a fatal diagnostic aborted the parse.
    requirements : tuple[RequiredAttribute, ...] | None
        Requirements in source order, or ``None`` when parsing failed.
    diagnostics : tuple[SelectorDiagnostic, ...], optional
        Every diagnostic recorded during the parse, fatal or not.
    source : str | None, optional
        Parsed text.
    """

    success: bool
    requirements: tuple[RequiredAttribute, ...] | None
    diagnostics: tuple[SelectorDiagnostic, ...] = ()
    source: str | None = None

    def unwrap(self) -> tuple[RequiredAttribute, ...]:
        """Return requirements, raising if the parse failed.

        Raises
        ------
        SelectorSyntaxError
            If ``success`` is ``False``.
        """

        if not self.success or self.requirements is None:
            raise SelectorSyntaxError(self.diagnostics, context=f"required attributes {self.source!r}")
        return self.requirements


@dataclass(slots=True)
class _RecordingSink:
    """Keep a per-parse copy of diagnostics while forwarding them."""

    target: DiagnosticSink | None
    recorded: list[SelectorDiagnostic] = field(default_factory=list)

    def on_error(self, diagnostic: SelectorDiagnostic) -> None:
        self.recorded.append(diagnostic)
        if self.target is not None:
            self.target.on_error(diagnostic)


class RequiredAttributeParser:
    """Cursor-driven parser over one selector string.

    Parameters
    ----------
    text : str | None
        Selector string. ``None`` and ``""`` parse to zero requirements.
    """

    def __init__(self, text: str | None) -> None:
        self._text = text or ""
        self._source = text
        self._index = 0
        self._sink = _RecordingSink(target=None)

    def parse(self, sink: DiagnosticSink | None = None) -> ParseResult:
        """Parse the whole string.

        Parameters
        ----------
        sink : DiagnosticSink | None, optional
            Receiver for diagnostics, in addition to the returned result.

        Returns
        -------
        ParseResult
            Requirements on success. On failure ``requirements`` is ``None``
            and ``diagnostics`` explains why.
        """

        self._index = 0
        self._sink = _RecordingSink(target=sink)

        requirements: list[RequiredAttribute] = []
        while not self._at_end:
            self._skip_whitespace()

            if self._at(_OPEN_BRACKET):
                requirement = self._parse_css_selector()
            else:
                requirement = self._parse_plain_selector()

            if requirement is None:
                return self._result(None)
            requirements.append(requirement)

            self._skip_whitespace()

            if self._at(_TERM_SEPARATOR):
                comma_index = self._index
                self._advance()
                self._skip_whitespace()
                if self._at_end:
                    self._report(
                        DiagnosticKind.TRAILING_COMMA_AT_END,
                        "Unexpected end of required attributes; expected an attribute after ','.",
                        location=comma_index,
                        length=1,
                        character=_TERM_SEPARATOR,
                    )
            elif not self._at_end:
                character = self._current
                self._report(
                    DiagnosticKind.UNEXPECTED_TRAILING_CHARACTER,
                    f"Invalid character {character!r} in required attributes; expected ','.",
                    length=1,
                    character=character,
                )
                return self._result(None)

        return self._result(tuple(requirements))

    def _parse_plain_selector(self) -> PlainAttributeRequirement | None:
        name_start = self._index
        while not self._at_end and not self._is_plain_name_terminator(self._current):
            self._advance()
        name = self._text[name_start:self._index]

        has_wildcard = self._at(WILDCARD_SUFFIX)
        if has_wildcard:
            self._advance()

        if not validate_name(name, sink=self._sink, location=name_start):
            return None
        return PlainAttributeRequirement(name=name, wildcard_prefix=has_wildcard)

    def _parse_css_selector(self) -> CssAttributeRequirement | None:
        bracket_index = self._index
        self._advance()
        self._skip_whitespace()

        name_start = self._index
        while not self._at_end and not self._is_css_name_terminator(self._current):
            self._advance()
        name = self._text[name_start:self._index]
        self._skip_whitespace()

        operator = CssValueOperator.NONE
        if self._at_end:
            self._report_unterminated_bracket(bracket_index)
            return None
        if self._current in _PREFIXED_OPERATORS:
            symbol = self._current
            if not self._next_is("="):
                self._report(
                    DiagnosticKind.MALFORMED_OPERATOR,
                    f"Invalid character {symbol!r} in required attribute; expected '{symbol}='.",
                    length=1,
                    character=symbol,
                )
                return None
            operator = _PREFIXED_OPERATORS[symbol]
            self._advance()
        elif not (self._at("=") or self._at(_CLOSE_BRACKET)):
            character = self._current
            self._report(
                DiagnosticKind.UNTERMINATED_BRACKET,
                f"Invalid character {character!r} in required attribute; expected ']'.",
                length=1,
                character=character,
            )
            return None

        if not validate_name(name, sink=self._sink, location=name_start):
            return None

        if self._at("="):
            if operator is CssValueOperator.NONE:
                operator = CssValueOperator.EQUALS
            self._advance()
            if self._at_end:
                self._report_unterminated_bracket(bracket_index)
                return None

        value = self._parse_css_value()
        if value is None:
            return None

        self._skip_whitespace()
        if not self._at(_CLOSE_BRACKET):
            self._report_unterminated_bracket(bracket_index)
            return None
        self._advance()

        if operator is CssValueOperator.NONE:
            return CssAttributeRequirement(name=name)
        return CssAttributeRequirement(name=name, operator=operator, value=value)

    def _parse_css_value(self) -> str | None:
        self._skip_whitespace()

        if self._at_end or self._current not in _QUOTES:
            value_start = self._index
            while not self._at_end and not self._current.isspace() and not self._at(_CLOSE_BRACKET):
                self._advance()
            return self._text[value_start:self._index]

        quote = self._current
        quote_index = self._index
        self._advance()
        value_start = self._index
        while not self._at(quote):
            if self._at_end:
                self._report(
                    DiagnosticKind.UNTERMINATED_QUOTED_VALUE,
                    f"Required attribute value is missing its closing {quote}.",
                    location=quote_index,
                    length=self._index - quote_index,
                    character=quote,
                )
                return None
            self._advance()
        value = self._text[value_start:self._index]
        self._advance()
        return value

    def _report_unterminated_bracket(self, bracket_index: int) -> None:
        self._report(
            DiagnosticKind.UNTERMINATED_BRACKET,
            "Could not find matching ']' for required attribute.",
            location=bracket_index,
            length=self._index - bracket_index,
        )

    def _report(
        self,
        kind: DiagnosticKind,
        message: str,
        *,
        location: int | None = None,
        length: int = 0,
        character: str | None = None,
    ) -> None:
        self._sink.on_error(
            SelectorDiagnostic(
                kind=kind,
                message=message,
                location=self._index if location is None else location,
                length=length,
                character=character,
            )
        )

    def _result(self, requirements: tuple[RequiredAttribute, ...] | None) -> ParseResult:
        return ParseResult(
            success=requirements is not None,
            requirements=requirements,
            diagnostics=tuple(self._sink.recorded),
            source=self._source,
        )

    @property
    def _at_end(self) -> bool:
        return self._index >= len(self._text)

    @property
    def _current(self) -> str:
        return self._text[self._index]

    def _at(self, character: str) -> bool:
        return not self._at_end and self._current == character

    def _next_is(self, character: str) -> bool:
        following = self._index + 1
        return following < len(self._text) and self._text[following] == character

    def _advance(self) -> None:
        self._index = min(self._index + 1, len(self._text))

    def _skip_whitespace(self) -> None:
        while not self._at_end and self._current.isspace():
            self._advance()

    @staticmethod
    def _is_plain_name_terminator(character: str) -> bool:
        return character.isspace() or character in _PLAIN_NAME_TERMINATORS

    @staticmethod
    def _is_css_name_terminator(character: str) -> bool:
        return character.isspace() or character in _CSS_NAME_TERMINATORS


def parse_required_attributes(
    text: str | None,
    sink: DiagnosticSink | None = None,
) -> ParseResult:
    """Parse one selector string with a fresh parser.

    Parameters
    ----------
    text : str | None
        Selector string.
    sink : DiagnosticSink | None, optional
        Receiver for diagnostics.

    Returns
    -------
    ParseResult
        Parse outcome.
    """

    return RequiredAttributeParser(text).parse(sink)


def require_attributes(text: str | None) -> tuple[RequiredAttribute, ...]:
    """Parse ``text`` or raise :class:`SelectorSyntaxError` listing every problem."""

    return parse_required_attributes(text).unwrap()


__all__ = [
    "ParseResult",
    "RequiredAttributeParser",
    "parse_required_attributes",
    "require_attributes",
]
