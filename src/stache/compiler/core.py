"""Stache compiler core.

Turns a stream of template tokens into a :class:`TemplateAST`.

The compiler is a two-state machine. While *compiling*, each token is fully
processed (node emitted, scope opened or closed) before the next one is
considered. The first error moves it to the *failed* state for good: later
tokens are ignored and :meth:`TemplateCompiler.finish` raises that error.
There is no partial result.

Open tags are tracked on an explicit scope stack, so that closing-tag
matching, "else" sections and override capture are all top-of-stack
operations, and an unclosed tag is reported at the line where it was opened.

Partials are resolved through the template repository as soon as they are
met. Their bodies are never deferred to render time.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Protocol, cast

from stache._types import ContentType, TemplateToken, TokenType
from stache.compiler.scope import CompilationState, Scope, ScopeKind
from stache.environment.exceptions import (
    ExpressionSyntaxError,
    InvalidNameError,
    PartialResolutionError,
    TemplateError,
    TemplateSyntaxError,
    TokenizationError,
    UnclosedTagError,
    UnmatchedClosingTagError,
)
from stache.nodes.expressions import Expression
from stache.nodes.tags import (
    InheritablePartial,
    InheritableSection,
    Partial,
    Section,
    Text,
    Variable,
)
from stache.nodes.template import TemplateAST
from stache.parser.expressions import ExpressionParseError, ExpressionParser
from stache.parser.names import (
    NameParseError,
    parse_inheritable_section_name,
    parse_template_name,
)

logger = logging.getLogger(__name__)


class TemplateASTResolver(Protocol):
    """What the compiler needs from a template repository."""

    def template_ast_named(self, name: str, relative_to: str | None = None) -> TemplateAST: ...


# Token type -> handler method name
_TOKEN_HANDLERS: dict[TokenType, str] = {
    TokenType.SET_DELIMITERS: "_handle_noop",
    TokenType.COMMENT: "_handle_noop",
    TokenType.PRAGMA: "_handle_noop",
    TokenType.TEXT: "_handle_text",
    TokenType.ESCAPED_VARIABLE: "_handle_variable",
    TokenType.UNESCAPED_VARIABLE: "_handle_variable",
    TokenType.SECTION: "_handle_section",
    TokenType.INVERTED_SECTION: "_handle_section",
    TokenType.INHERITABLE_SECTION: "_handle_inheritable_section",
    TokenType.INHERITABLE_PARTIAL: "_handle_inheritable_partial",
    TokenType.CLOSE: "_handle_close",
    TokenType.PARTIAL: "_handle_partial",
}

# Scope kind -> closing tag handler method name
_CLOSE_HANDLERS: dict[ScopeKind, str] = {
    ScopeKind.ROOT: "_close_root",
    ScopeKind.SECTION: "_close_section",
    ScopeKind.INVERTED_SECTION: "_close_section",
    ScopeKind.INHERITABLE_PARTIAL: "_close_inheritable_partial",
    ScopeKind.INHERITABLE_SECTION: "_close_inheritable_section",
}

# Section token type -> (scope kind it opens, scope kind it continues as an "else")
_SECTION_SCOPES: dict[TokenType, tuple[ScopeKind, ScopeKind]] = {
    TokenType.SECTION: (ScopeKind.SECTION, ScopeKind.INVERTED_SECTION),
    TokenType.INVERTED_SECTION: (ScopeKind.INVERTED_SECTION, ScopeKind.SECTION),
}


class TemplateCompiler:
    """Compile template tokens into a TemplateAST.

    Example:
            >>> compiler = TemplateCompiler()
            >>> compiler.feed(TemplateToken(TokenType.SECTION, "user", 1))
            True
            >>> compiler.feed(TemplateToken(TokenType.TEXT, "Hi ", 1))
            True
            >>> compiler.feed(TemplateToken(TokenType.CLOSE, "user", 1))
            True
            >>> compiler.finish().nodes
            (Section(expression=Identifier(name='user'), inverted=False, body=...),)

    Args:
        content_type: Content-escaping mode of the produced AST
        repository: Resolves partial names to compiled ASTs. Templates with
            partials fail to compile without one.
        template_id: Identity of the template being compiled. Partial names
            are resolved relative to it, and errors cite it.

    Thread-Safety:
        A compiler owns its scope stack; use one compiler per compilation.
        Independent compilations may run concurrently.
    """

    __slots__ = ("_expression_parser", "_repository", "_state", "_template_id")

    def __init__(
        self,
        content_type: ContentType = ContentType.HTML,
        repository: TemplateASTResolver | None = None,
        template_id: str | None = None,
    ):
        self._state: CompilationState | TemplateSyntaxError = CompilationState(content_type)
        self._repository = repository
        self._template_id = template_id
        self._expression_parser = ExpressionParser()

    @property
    def template_id(self) -> str | None:
        return self._template_id

    @property
    def is_failed(self) -> bool:
        return isinstance(self._state, TemplateSyntaxError)

    # -- Events -------------------------------------------------------------

    def feed(self, token: TemplateToken) -> bool:
        """Process one token.

        Returns:
            False once compilation has failed (the caller should stop feeding),
            True otherwise
        """
        state = self._state
        if isinstance(state, TemplateSyntaxError):
            return False

        handler = getattr(self, _TOKEN_HANDLERS[token.type])
        try:
            handler(state, token)
        except TemplateSyntaxError as error:
            self._enter_error(error)
            return False
        return True

    def fail(self, error: Exception) -> None:
        """Record a fatal error from the token source.

        Errors that are not TemplateSyntaxError are wrapped in a
        TokenizationError. Ignored when compilation already failed.
        """
        if self.is_failed:
            return
        if not isinstance(error, TemplateSyntaxError):
            wrapped = TokenizationError(str(error), name=self._template_id)
            wrapped.__cause__ = error
            error = wrapped
        self._enter_error(error)

    def finish(self) -> TemplateAST:
        """Finalize compilation.

        Returns:
            The compiled TemplateAST

        Raises:
            TemplateSyntaxError: The first error met, or UnclosedTagError if
                a tag is still open
        """
        state = self._state
        if isinstance(state, TemplateSyntaxError):
            raise state

        if state.depth > 1:
            opening_token = cast(TemplateToken, state.current_scope.opening_token)
            error = self._error(UnclosedTagError, "Unclosed Mustache tag", opening_token)
            self._enter_error(error)
            raise error

        return state.current_scope.to_ast(state.content_type)

    def compile(self, tokens: Iterable[TemplateToken]) -> TemplateAST:
        """Feed every token of ``tokens``, then finalize.

        A TokenizationError raised while iterating ``tokens`` is recorded as
        the compilation error.
        """
        iterator = iter(tokens)
        while True:
            try:
                token = next(iterator)
            except StopIteration:
                break
            except TokenizationError as error:
                self.fail(error)
                break
            if not self.feed(token):
                break
        return self.finish()

    # -- Helpers ------------------------------------------------------------

    def _enter_error(self, error: TemplateSyntaxError) -> None:
        logger.debug(
            "Compilation of %s failed (%s): %s",
            self._template_id or "<template>",
            error.code.kind if error.code else type(error).__name__,
            error.message,
        )
        self._state = error

    def _error(
        self,
        error_type: type[TemplateSyntaxError],
        message: str,
        token: TemplateToken,
    ) -> TemplateSyntaxError:
        return error_type(message, lineno=token.lineno, name=token.template_id or self._template_id)

    def _parse_expression(self, token: TemplateToken) -> Expression:
        try:
            return self._expression_parser.parse(token.content)
        except ExpressionParseError as exc:
            raise self._error(ExpressionSyntaxError, exc.message, token) from exc

    def _parse_optional_expression(self, token: TemplateToken) -> Expression | None:
        """Parse tag content that may be blank; None when it is."""
        try:
            return self._expression_parser.parse(token.content)
        except ExpressionParseError as exc:
            if exc.empty:
                return None
            raise self._error(ExpressionSyntaxError, exc.message, token) from exc

    def _parse_closing_name(self, token: TemplateToken, kind: ScopeKind) -> str | None:
        """Parse a closing tag's name; None when the content is blank."""
        parse = (
            parse_template_name
            if kind is ScopeKind.INHERITABLE_PARTIAL
            else parse_inheritable_section_name
        )
        try:
            return parse(token.content)
        except NameParseError as exc:
            if exc.empty:
                return None
            raise self._error(InvalidNameError, exc.message, token) from exc

    def _resolve_partial(self, name: str, token: TemplateToken) -> TemplateAST:
        if self._repository is None:
            raise self._error(
                PartialResolutionError,
                f"Cannot load partial '{name}': no template repository",
                token,
            )
        try:
            return self._repository.template_ast_named(name, relative_to=self._template_id)
        except TemplateSyntaxError as exc:
            raise self._error(
                PartialResolutionError,
                f"Cannot load partial '{name}': {exc.message} ({exc.location})",
                token,
            ) from exc
        except TemplateError as exc:
            raise self._error(
                PartialResolutionError,
                f"Cannot load partial '{name}': {exc}",
                token,
            ) from exc
        except Exception as exc:
            raise self._error(
                PartialResolutionError,
                f"Cannot load partial '{name}': {type(exc).__name__}: {exc}",
                token,
            ) from exc

    # -- Token handlers -----------------------------------------------------

    def _handle_noop(self, state: CompilationState, token: TemplateToken) -> None:
        pass

    def _handle_text(self, state: CompilationState, token: TemplateToken) -> None:
        state.current_scope.append(Text(token.content, lineno=token.lineno))

    def _handle_variable(self, state: CompilationState, token: TemplateToken) -> None:
        expression = self._parse_expression(token)
        escape = token.type is TokenType.ESCAPED_VARIABLE
        state.current_scope.append(Variable(expression, escape, lineno=token.lineno))

    def _handle_section(self, state: CompilationState, token: TemplateToken) -> None:
        """Open a section or inverted section.

        ``{{^}}`` (or ``{{^a}}``) directly inside ``{{#a}}`` closes the section
        and opens its inverted counterpart on the same expression, and
        symmetrically for ``{{#}}`` inside ``{{^a}}``. Different non-empty
        expressions simply nest.
        """
        kind, alternate_of = _SECTION_SCOPES[token.type]
        expression = self._parse_optional_expression(token)

        scope = state.current_scope
        if scope.kind is alternate_of and (expression is None or expression == scope.expression):
            state.pop_scope()
            state.current_scope.append(
                Section(
                    scope.expression,
                    scope.kind is ScopeKind.INVERTED_SECTION,
                    scope.to_ast(state.content_type),
                    lineno=scope.lineno,
                )
            )
            state.push_scope(Scope(kind, token, expression=scope.expression))
        elif expression is not None:
            state.push_scope(Scope(kind, token, expression=expression))
        else:
            raise self._error(ExpressionSyntaxError, "Missing expression", token)

    def _handle_inheritable_section(self, state: CompilationState, token: TemplateToken) -> None:
        try:
            name = parse_inheritable_section_name(token.content)
        except NameParseError as exc:
            raise self._error(InvalidNameError, exc.message, token) from exc
        state.push_scope(Scope(ScopeKind.INHERITABLE_SECTION, token, name=name))

    def _handle_inheritable_partial(self, state: CompilationState, token: TemplateToken) -> None:
        try:
            name = parse_template_name(token.content)
        except NameParseError as exc:
            raise self._error(InvalidNameError, exc.message, token) from exc
        state.push_scope(Scope(ScopeKind.INHERITABLE_PARTIAL, token, name=name))

    def _handle_partial(self, state: CompilationState, token: TemplateToken) -> None:
        try:
            name = parse_template_name(token.content)
        except NameParseError as exc:
            raise self._error(InvalidNameError, exc.message, token) from exc
        template_ast = self._resolve_partial(name, token)
        state.current_scope.append(Partial(name, template_ast, lineno=token.lineno))

    def _handle_close(self, state: CompilationState, token: TemplateToken) -> None:
        handler = getattr(self, _CLOSE_HANDLERS[state.current_scope.kind])
        handler(state, token)

    # -- Closing tag handlers -----------------------------------------------

    def _close_root(self, state: CompilationState, token: TemplateToken) -> None:
        raise self._error(UnmatchedClosingTagError, "Unmatched closing tag", token)

    def _close_section(self, state: CompilationState, token: TemplateToken) -> None:
        scope = state.current_scope
        expression = self._parse_optional_expression(token)
        if expression is not None and expression != scope.expression:
            raise self._error(UnmatchedClosingTagError, "Unmatched closing tag", token)

        state.pop_scope()
        state.current_scope.append(
            Section(
                cast(Expression, scope.expression),
                scope.kind is ScopeKind.INVERTED_SECTION,
                scope.to_ast(state.content_type),
                lineno=scope.lineno,
            )
        )

    def _close_inheritable_partial(self, state: CompilationState, token: TemplateToken) -> None:
        scope = state.current_scope
        name = self._parse_closing_name(token, scope.kind)
        if name is not None and name != scope.name:
            raise self._error(UnmatchedClosingTagError, "Unmatched closing tag", token)

        partial_name = cast(str, scope.name)
        template_ast = self._resolve_partial(partial_name, cast(TemplateToken, scope.opening_token))
        state.pop_scope()
        partial = Partial(partial_name, template_ast, lineno=scope.lineno)
        state.current_scope.append(
            InheritablePartial(partial, scope.to_ast(state.content_type), lineno=scope.lineno)
        )

    def _close_inheritable_section(self, state: CompilationState, token: TemplateToken) -> None:
        scope = state.current_scope
        name = self._parse_closing_name(token, scope.kind)
        if name is not None and name != scope.name:
            raise self._error(UnmatchedClosingTagError, "Unmatched closing tag", token)

        state.pop_scope()
        state.current_scope.append(
            InheritableSection(
                cast(str, scope.name),
                scope.to_ast(state.content_type),
                lineno=scope.lineno,
            )
        )


def compile_tokens(
    tokens: Iterable[TemplateToken],
    *,
    content_type: ContentType = ContentType.HTML,
    repository: TemplateASTResolver | None = None,
    template_id: str | None = None,
) -> TemplateAST:
    """Compile ``tokens`` into a TemplateAST.

    Example:
            >>> ast = compile_tokens([TemplateToken(TokenType.TEXT, "Hello", 1)])
            >>> ast.nodes
            (Text(text='Hello'),)

    Raises:
        TemplateSyntaxError: On the first compile error
    """
    compiler = TemplateCompiler(content_type, repository, template_id)
    return compiler.compile(tokens)
