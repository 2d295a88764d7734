"""Token and content-type definitions shared across Stache.

Tokens are produced by an external tokenizer and consumed one at a time by
the compiler. They are read-only to this package.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Kinds of template tokens.

    Each member maps to one Mustache tag form:

        {{=<% %>=}}   SET_DELIMITERS
        {{! ... }}    COMMENT
        {{% ... }}    PRAGMA
        raw text      TEXT
        {{ x }}       ESCAPED_VARIABLE
        {{{ x }}}     UNESCAPED_VARIABLE (also {{& x }})
        {{# x }}      SECTION
        {{^ x }}      INVERTED_SECTION
        {{$ x }}      INHERITABLE_SECTION
        {{< x }}      INHERITABLE_PARTIAL
        {{/ x }}      CLOSE
        {{> x }}      PARTIAL
    """

    SET_DELIMITERS = "set_delimiters"
    COMMENT = "comment"
    PRAGMA = "pragma"
    TEXT = "text"
    ESCAPED_VARIABLE = "escaped_variable"
    UNESCAPED_VARIABLE = "unescaped_variable"
    SECTION = "section"
    INVERTED_SECTION = "inverted_section"
    INHERITABLE_SECTION = "inheritable_section"
    INHERITABLE_PARTIAL = "inheritable_partial"
    CLOSE = "close"
    PARTIAL = "partial"


class ContentType(Enum):
    """Content-escaping mode of a compiled template."""

    HTML = "html"
    TEXT = "text"


@dataclass(frozen=True, slots=True)
class TemplateToken:
    """A single token of template source.

    Attributes:
        type: Token kind
        content: Raw tag content (tag name, expression, or literal text)
        lineno: 1-based source line where the token starts
        template_id: Identity of the template the token comes from, if known
    """

    type: TokenType
    content: str
    lineno: int = 1
    template_id: str | None = None

    def __repr__(self) -> str:
        return f"TemplateToken({self.type.name}, {self.content!r}, line={self.lineno})"
