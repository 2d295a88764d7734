"""Exceptions for the Stache template system.

Exception Hierarchy:
TemplateError (base)
├── TemplateNotFoundError          # Name unknown to the token source
└── TemplateSyntaxError            # Compile-time error, carries a line
    ├── TokenizationError          # Token source failed
    ├── ExpressionSyntaxError      # Malformed tag expression
    ├── UnmatchedClosingTagError   # {{/x}} does not close the open tag
    ├── UnclosedTagError           # Input ended with a tag still open
    ├── InvalidNameError           # Blank or whitespace-containing name
    └── PartialResolutionError     # Repository could not provide a partial

Compilation is all-or-nothing: the first error is the one reported.
Context operations never raise; an unknown identifier is simply absent. Only
errors raised by user filter callables propagate out of `Context.evaluate`.

Example:
    ```
    Syntax Error: Unmatched closing tag
      --> users/list:4
    ```

"""

from __future__ import annotations

from enum import Enum

from stache.environment import terminal

# ---------------------------------------------------------------------------
# Error codes
# ---------------------------------------------------------------------------

_STACHE_DOCS_BASE = "https://stache.readthedocs.io/en/latest/errors"


class ErrorCode(Enum):
    """Searchable error codes for Stache errors.

    Format: S-{CATEGORY}-{NUMBER}
    Categories: LEX (token source), PAR (compiler), TPL (template repository)

    The code is the stable discriminator of an error's kind; messages may
    change between releases, codes do not.
    """

    TOKENIZATION_FAILURE = "S-LEX-001"

    EXPRESSION_SYNTAX_ERROR = "S-PAR-001"
    UNMATCHED_CLOSING_TAG = "S-PAR-002"
    UNCLOSED_TAG = "S-PAR-003"
    INVALID_NAME = "S-PAR-004"

    TEMPLATE_NOT_FOUND = "S-TPL-001"
    PARTIAL_RESOLUTION_ERROR = "S-TPL-002"

    @property
    def docs_url(self) -> str:
        """Documentation URL for this error code."""
        return f"{_STACHE_DOCS_BASE}/#{self.value.lower()}"

    @property
    def category(self) -> str:
        """Error category ('lexer', 'compiler' or 'template')."""
        prefix = self.value.split("-")[1]
        return {
            "LEX": "lexer",
            "PAR": "compiler",
            "TPL": "template",
        }.get(prefix, "unknown")

    @property
    def kind(self) -> str:
        """CamelCase kind name, e.g. ``UnmatchedClosingTag``."""
        return "".join(part.capitalize() for part in self.name.split("_"))


class TemplateError(Exception):
    """Base exception for all Stache template errors.

        >>> try:
        ...     repository.template("page")
        ... except TemplateError as e:
        ...     log.error(e.format_compact())

    Attributes:
        code: ErrorCode identifying the kind of error.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """Format error as a short diagnostic with its code and docs URL."""
        parts = [terminal.format_error_header(self.code.value if self.code else None, str(self).strip())]
        if self.code:
            parts.append(terminal.format_docs_line(self.code.docs_url))
        return "\n".join(parts)


class TemplateNotFoundError(TemplateError):
    """Template not found by the token source.

    Example:
            >>> repository.template("missing")
        TemplateNotFoundError: Template 'missing' not found

    """

    code: ErrorCode | None = ErrorCode.TEMPLATE_NOT_FOUND


class TemplateSyntaxError(TemplateError):
    """Compile-time error in a template.

    Attributes:
        message: Error description, without location
        lineno: 1-based line of the token the error is attributed to
        name: Identity of the template being compiled, if known
    """

    code: ErrorCode | None = None

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        name: str | None = None,
    ):
        self.message = message
        self.lineno = lineno
        self.name = name
        super().__init__(self._format_message())

    @property
    def location(self) -> str:
        location = self.name or "<template>"
        if self.lineno:
            location += f":{self.lineno}"
        return location

    def _format_message(self) -> str:
        return f"Syntax Error: {self.message}\n  --> {self.location}"

    def format_compact(self) -> str:
        """Format syntax error as structured terminal diagnostic."""
        parts: list[str] = [
            terminal.format_error_header(self.code.value if self.code else None, self.message),
            terminal.format_location_line(self.location),
        ]
        if self.code:
            parts.append(terminal.format_docs_line(self.code.docs_url))
        return "\n".join(parts)


class TokenizationError(TemplateSyntaxError):
    """The token source reported a fatal error."""

    code: ErrorCode | None = ErrorCode.TOKENIZATION_FAILURE


class ExpressionSyntaxError(TemplateSyntaxError):
    """A tag holds a malformed expression: {{ a..b }}"""

    code: ErrorCode | None = ErrorCode.EXPRESSION_SYNTAX_ERROR


class UnmatchedClosingTagError(TemplateSyntaxError):
    """A closing tag does not match the innermost open tag.

    Reported at the line of the closing tag.
    """

    code: ErrorCode | None = ErrorCode.UNMATCHED_CLOSING_TAG


class UnclosedTagError(TemplateSyntaxError):
    """The template ended while a tag was still open.

    Reported at the line of the innermost open tag's opening token.
    """

    code: ErrorCode | None = ErrorCode.UNCLOSED_TAG


class InvalidNameError(TemplateSyntaxError):
    """A partial or inheritable section name is blank or contains whitespace."""

    code: ErrorCode | None = ErrorCode.INVALID_NAME


class PartialResolutionError(TemplateSyntaxError):
    """The template repository could not provide a partial.

    The repository's own error is chained as ``__cause__``.
    """

    code: ErrorCode | None = ErrorCode.PARTIAL_RESOLUTION_ERROR
