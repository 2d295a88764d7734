"""Template repository for Stache.

The repository turns template names into compiled :class:`TemplateAST`
objects. It asks a token source for the tokens of a template, compiles them
once, caches the result, and resolves the partials of that template through
itself.

Token Sources:
- `DictTokenSource`: In-memory mapping of names to token sequences
- `FunctionTokenSource`: Wrap a callable as a token source
- `ChoiceTokenSource`: Try several token sources in order

Custom Token Sources:
Implement the TokenSource protocol:
    ```python
    class DatabaseTokenSource:
        def template_id(self, name: str, relative_to: str | None) -> str:
            return resolve_template_id(name, relative_to)

        def get_tokens(self, template_id: str) -> Iterable[TemplateToken]:
            row = db.query("SELECT source FROM templates WHERE name = ?", template_id)
            if not row:
                raise TemplateNotFoundError(f"Template '{template_id}' not found")
            return my_tokenizer(row.source, template_id)
    ```

Template Names:
Names are POSIX-like paths. A partial name is resolved relative to the
directory of the including template (``{{> item}}`` inside ``users/list``
means ``users/item``), unless it starts with ``/``, which makes it relative to
the root (``{{> /layouts/base}}``).

Thread-Safety:
`TemplateRepository` compiles each template once behind a re-entrant lock
and hands out the same `TemplateAST` to every caller. Token sources should be
safe for concurrent `get_tokens()` calls; the built-in ones are.

"""

from __future__ import annotations

import logging
import posixpath
import threading
from collections.abc import Callable, Iterable, Mapping, Sequence
from difflib import get_close_matches
from typing import Protocol

from stache._types import TemplateToken
from stache.compiler.core import TemplateCompiler
from stache.environment.config import DEFAULT_CONFIGURATION, Configuration
from stache.environment.exceptions import TemplateNotFoundError
from stache.nodes.template import TemplateAST

logger = logging.getLogger(__name__)


def resolve_template_id(name: str, relative_to: str | None = None) -> str:
    """Resolve a template name against the identity of the including template.

    Example:
            >>> resolve_template_id("item", "users/list")
            'users/item'
            >>> resolve_template_id("/layouts/base", "users/list")
            'layouts/base'
            >>> resolve_template_id("../shared/footer", "users/list")
            'shared/footer'

    """
    if name.startswith("/"):
        return posixpath.normpath(name).lstrip("/")
    if relative_to is None:
        return posixpath.normpath(name)
    return posixpath.normpath(posixpath.join(posixpath.dirname(relative_to), name))


class TokenSource(Protocol):
    """Provides the tokens of templates to a TemplateRepository."""

    def template_id(self, name: str, relative_to: str | None) -> str: ...

    def get_tokens(self, template_id: str) -> Iterable[TemplateToken]: ...


class DictTokenSource:
    """Serve templates from an in-memory mapping of names to tokens.

    Useful for testing, embedded templates, or templates tokenized ahead of
    time.

    Example:
            >>> source = DictTokenSource({
            ...     "greeting": [TemplateToken(TokenType.TEXT, "Hello", 1)],
            ... })
            >>> TemplateRepository(source).template("greeting").nodes
            (Text(text='Hello'),)

    Raises:
        TemplateNotFoundError: If the template id is not in the mapping

    """

    __slots__ = ("_mapping",)

    def __init__(self, mapping: Mapping[str, Sequence[TemplateToken]]):
        self._mapping = mapping

    def template_id(self, name: str, relative_to: str | None) -> str:
        return resolve_template_id(name, relative_to)

    def get_tokens(self, template_id: str) -> Sequence[TemplateToken]:
        if template_id not in self._mapping:
            available = sorted(self._mapping.keys())
            msg = f"Template '{template_id}' not found"
            matches = get_close_matches(template_id, available, n=1, cutoff=0.6)
            if matches:
                msg += f". Did you mean '{matches[0]}'?"
            elif available:
                msg += f". Available: {', '.join(available[:10])}"
                if len(available) > 10:
                    msg += f" ... ({len(available)} total)"
            raise TemplateNotFoundError(msg)
        return self._mapping[template_id]

    def list_templates(self) -> list[str]:
        return sorted(self._mapping.keys())


class FunctionTokenSource:
    """Wrap a callable as a token source.

    The callable takes a template id and returns its tokens, or ``None`` when
    the template does not exist.

    Example:
            >>> def load(template_id):
            ...     if template_id == "greeting":
            ...         return my_tokenizer("Hello, {{ name }}!", template_id)
            ...     return None
            >>> repository = TemplateRepository(FunctionTokenSource(load))

    Raises:
        TemplateNotFoundError: If ``load_func`` returns ``None``

    Thread-Safety:
        Safe if ``load_func`` is thread-safe.
    """

    __slots__ = ("_load_func",)

    def __init__(self, load_func: Callable[[str], Iterable[TemplateToken] | None]):
        self._load_func = load_func

    def template_id(self, name: str, relative_to: str | None) -> str:
        return resolve_template_id(name, relative_to)

    def get_tokens(self, template_id: str) -> Iterable[TemplateToken]:
        tokens = self._load_func(template_id)
        if tokens is None:
            raise TemplateNotFoundError(f"Template '{template_id}' not found")
        return tokens


class ChoiceTokenSource:
    """Try several token sources in order, returning the first match.

    Useful for theme fallback patterns where custom templates override a
    subset of the defaults. Template ids are computed by the first source.

    Raises:
        TemplateNotFoundError: If no source knows the template
    """

    __slots__ = ("_sources",)

    def __init__(self, sources: Sequence[TokenSource]):
        if not sources:
            raise ValueError("ChoiceTokenSource needs at least one token source")
        self._sources = sources

    def template_id(self, name: str, relative_to: str | None) -> str:
        return self._sources[0].template_id(name, relative_to)

    def get_tokens(self, template_id: str) -> Iterable[TemplateToken]:
        for source in self._sources:
            try:
                return source.get_tokens(template_id)
            except TemplateNotFoundError:
                continue
        raise TemplateNotFoundError(
            f"Template '{template_id}' not found in any of {len(self._sources)} token sources"
        )


class TemplateRepository:
    """Compile, cache and hand out templates by name.

    Each template id is compiled once. Partials of a template are resolved
    through the same repository, relative to the including template's id.

    A template is registered in the cache as an empty placeholder before its
    compilation starts, so a template that includes itself, directly or
    through other partials, compiles to a reference to its own (eventually
    filled) AST instead of recursing forever. If compilation fails, the
    template and every template first cached during its compilation are
    evicted, so no cached AST ever references a placeholder that will never
    be filled.

    Example:
            >>> repository = TemplateRepository(DictTokenSource(templates))
            >>> ast = repository.template("users/list")
            >>> ast is repository.template("users/list")
            True

    Thread-Safety:
        Compilation runs behind a re-entrant lock: concurrent callers get the
        same AST object, and nested partial resolution on the compiling thread
        proceeds without deadlock.
    """

    __slots__ = ("_cache", "_configuration", "_lock", "_source")

    def __init__(
        self,
        source: TokenSource,
        configuration: Configuration | None = None,
    ):
        self._source = source
        self._configuration = configuration or DEFAULT_CONFIGURATION
        self._cache: dict[str, TemplateAST] = {}
        self._lock = threading.RLock()

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    def template(self, name: str) -> TemplateAST:
        """Return the compiled AST of the template ``name``.

        Raises:
            TemplateNotFoundError: If the token source does not know the template
            TemplateSyntaxError: If the template does not compile
        """
        return self.template_ast_named(name)

    def template_ast_named(self, name: str, relative_to: str | None = None) -> TemplateAST:
        """Return the compiled AST of ``name``, resolved relative to ``relative_to``.

        May return a placeholder AST when called while that template is being
        compiled (recursive partials); it is filled once compilation succeeds.
        """
        template_id = self._source.template_id(name, relative_to)
        with self._lock:
            cached = self._cache.get(template_id)
            if cached is not None:
                if cached.is_placeholder:
                    logger.debug("Recursive reference to template %s", template_id)
                return cached

            logger.debug("Compiling template %s", template_id)
            placeholder = TemplateAST.placeholder(self._configuration.content_type)
            self._cache[template_id] = placeholder
            try:
                tokens = self._source.get_tokens(template_id)
                compiler = TemplateCompiler(
                    self._configuration.content_type,
                    repository=self,
                    template_id=template_id,
                )
                compiled = compiler.compile(tokens)
            except Exception:
                self._evict_from(template_id)
                raise
            placeholder.update_from(compiled)
            return placeholder

    def template_from_tokens(
        self,
        tokens: Iterable[TemplateToken],
        template_id: str | None = None,
    ) -> TemplateAST:
        """Compile an uncached template whose partials load from this repository.

        Raises:
            TemplateSyntaxError: If the tokens do not compile
        """
        compiler = TemplateCompiler(
            self._configuration.content_type,
            repository=self,
            template_id=template_id,
        )
        return compiler.compile(tokens)

    def cached_template_ids(self) -> list[str]:
        """Ids of the compiled templates, in the order their compilation started."""
        with self._lock:
            return [key for key, ast in self._cache.items() if not ast.is_placeholder]

    def clear_cache(self) -> None:
        """Forget every compiled template."""
        with self._lock:
            self._cache.clear()

    def _evict_from(self, template_id: str) -> None:
        keys = list(self._cache)
        evicted = keys[keys.index(template_id) :]
        for key in evicted:
            del self._cache[key]
        logger.debug("Evicted %d template(s) after %s failed to compile", len(evicted), template_id)
