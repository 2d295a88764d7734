"""Stache: compiler and context core of a Mustache template engine.

Stache compiles already-tokenized Mustache templates, with template
inheritance, into reusable trees, and resolves identifiers and inheritance
overrides at render time.

Quickstart:
    >>> from stache import TemplateToken, TokenType, compile_tokens
    >>> ast = compile_tokens([
    ...     TemplateToken(TokenType.SECTION, "user", 1),
    ...     TemplateToken(TokenType.TEXT, "Hi ", 1),
    ...     TemplateToken(TokenType.ESCAPED_VARIABLE, "name", 1),
    ...     TemplateToken(TokenType.CLOSE, "", 1),
    ... ])
    >>> section = ast.nodes[0]
    >>> section.body.nodes
    (Text(text='Hi '), Variable(expression=Identifier(name='name'), escape=True))

Named templates and partials:
    >>> from stache import DictTokenSource, TemplateRepository
    >>> repository = TemplateRepository(DictTokenSource(tokenized_templates))
    >>> ast = repository.template("users/list")

Architecture:
Tokens → TemplateCompiler → TemplateAST (cached by TemplateRepository)
TemplateAST + Context → renderer (not part of this package)

1. **Compiler**: consumes tokens one at a time on an explicit scope stack;
   fail-fast, all-or-nothing.
2. **Repository**: resolves partial names relative to the including
   template, compiles each template once, tolerates recursive partials.
3. **Context**: immutable chain of values and inheritable partials used by
   renderers for identifier lookup and override resolution.

Thread-Safety:
- Compilers own their state; independent compilations may run concurrently.
- Compiled TemplateASTs are shared read-only.
- Context chains are immutable and structurally shared.

"""

from stache._types import ContentType, TemplateToken, TokenType
from stache.compiler import TemplateCompiler, compile_tokens
from stache.context import Context, IdentifierLookup
from stache.environment import (
    DEFAULT_CONFIGURATION,
    Configuration,
    ErrorCode,
    ExpressionSyntaxError,
    InvalidNameError,
    PartialResolutionError,
    TemplateError,
    TemplateNotFoundError,
    TemplateSyntaxError,
    TokenizationError,
    UnclosedTagError,
    UnmatchedClosingTagError,
)
from stache.environment.repository import (
    ChoiceTokenSource,
    DictTokenSource,
    FunctionTokenSource,
    TemplateRepository,
    TokenSource,
    resolve_template_id,
)
from stache.nodes import (
    Expression,
    Filtered,
    Identifier,
    ImplicitIterator,
    InheritablePartial,
    InheritableSection,
    Node,
    Partial,
    Scoped,
    Section,
    TemplateAST,
    Text,
    Variable,
)
from stache.parser import ExpressionParseError, ExpressionParser, parse_expression

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIGURATION",
    "ChoiceTokenSource",
    "Configuration",
    "ContentType",
    "Context",
    "DictTokenSource",
    "ErrorCode",
    "Expression",
    "ExpressionParseError",
    "ExpressionParser",
    "ExpressionSyntaxError",
    "Filtered",
    "FunctionTokenSource",
    "Identifier",
    "IdentifierLookup",
    "ImplicitIterator",
    "InheritablePartial",
    "InheritableSection",
    "InvalidNameError",
    "Node",
    "Partial",
    "PartialResolutionError",
    "Scoped",
    "Section",
    "TemplateAST",
    "TemplateCompiler",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateRepository",
    "TemplateSyntaxError",
    "TemplateToken",
    "Text",
    "TokenSource",
    "TokenType",
    "TokenizationError",
    "UnclosedTagError",
    "UnmatchedClosingTagError",
    "Variable",
    "__version__",
    "compile_tokens",
    "parse_expression",
    "resolve_template_id",
]
