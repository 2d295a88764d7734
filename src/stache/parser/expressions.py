"""Expression parsing for Stache tags.

Grammar::

    expression := primary ( "." identifier | "(" expression ")" )*
    primary    := "." [ identifier ] | identifier

Identifiers are runs of characters other than whitespace, ``.``, ``(``,
``)`` and ``,``. Surrounding whitespace is ignored.

The parser distinguishes blank content from malformed content: the compiler
accepts a blank expression in a few places (``{{/}}``, ``{{^}}`` as an
"else"), and rejects malformed ones everywhere.
"""

from __future__ import annotations

from stache.nodes.expressions import Expression, Filtered, Identifier, ImplicitIterator, Scoped

_RESERVED = frozenset(".(),")


class ExpressionParseError(Exception):
    """Raised when tag content is not a valid expression.

    Attributes:
        message: Error description
        empty: True when the content was blank rather than malformed
    """

    def __init__(self, message: str, *, empty: bool = False):
        self.message = message
        self.empty = empty
        super().__init__(message)


def _is_identifier_char(char: str) -> bool:
    return not char.isspace() and char not in _RESERVED


class ExpressionParser:
    """Recursive-descent parser for tag expressions.

    A parser instance keeps its position while parsing, so share instances
    only within one thread. :func:`parse_expression` creates one per call.

    Example:
        >>> ExpressionParser().parse("user.name")
        Scoped(base=Identifier(name='user'), identifier='name')
        >>> ExpressionParser().parse("  ")
        Traceback (most recent call last):
        ...
        ExpressionParseError: Missing expression

    """

    __slots__ = ("_pos", "_source")

    def __init__(self) -> None:
        self._source = ""
        self._pos = 0

    def parse(self, source: str) -> Expression:
        """Parse ``source`` into an Expression.

        Raises:
            ExpressionParseError: If the source is blank (``empty=True``) or malformed
        """
        if not source.strip():
            raise ExpressionParseError("Missing expression", empty=True)

        self._source = source
        self._pos = 0
        self._skip_whitespace()
        expression = self._parse_expression()
        self._skip_whitespace()
        if self._pos < len(self._source):
            raise self._error(f"Unexpected character {self._current!r}")
        return expression

    @property
    def _current(self) -> str:
        return self._source[self._pos] if self._pos < len(self._source) else ""

    def _error(self, message: str) -> ExpressionParseError:
        return ExpressionParseError(f"{message} in expression {self._source.strip()!r}")

    def _skip_whitespace(self) -> None:
        while self._pos < len(self._source) and self._source[self._pos].isspace():
            self._pos += 1

    def _parse_identifier(self) -> str:
        start = self._pos
        while self._pos < len(self._source) and _is_identifier_char(self._source[self._pos]):
            self._pos += 1
        return self._source[start : self._pos]

    def _parse_primary(self) -> Expression:
        if self._current == ".":
            self._pos += 1
            name = self._parse_identifier()
            if name:
                return Scoped(ImplicitIterator(), name)
            return ImplicitIterator()

        name = self._parse_identifier()
        if not name:
            if not self._current:
                raise self._error("Unexpected end")
            raise self._error(f"Unexpected character {self._current!r}")
        return Identifier(name)

    def _parse_expression(self) -> Expression:
        expression = self._parse_primary()
        while self._pos < len(self._source):
            char = self._current
            if char == ".":
                self._pos += 1
                name = self._parse_identifier()
                if not name:
                    raise self._error("Missing identifier after '.'")
                expression = Scoped(expression, name)
            elif char == "(":
                self._pos += 1
                self._skip_whitespace()
                argument = self._parse_expression()
                self._skip_whitespace()
                if self._current != ")":
                    raise self._error("Missing closing parenthesis")
                self._pos += 1
                expression = Filtered(expression, argument)
            else:
                break
        return expression


def parse_expression(source: str) -> Expression:
    """Parse ``source`` with a fresh :class:`ExpressionParser`."""
    return ExpressionParser().parse(source)
