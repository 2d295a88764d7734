"""Stache rendering context.

A Context is the chain of values and inheritable partials enclosing a point
of a template during rendering. Renderers thread it through their walk of a
TemplateAST:

- entering a section pushes the section's value,
- entering an inheritable partial pushes the partial node before rendering
  the partial's AST,
- variable and section tags look identifiers up,
- inheritable section placeholders ask for their override.

Chains are immutable. Pushing returns a new head that shares its parent with
every other chain built on it, so pushes are O(1) and a chain can be read and
extended from several threads without locking.

Example:
    >>> root = Context()
    >>> ctx = root.push({"name": "Arthur"}).push({"age": 36})
    >>> ctx.lookup("name")
    'Arthur'
    >>> root.lookup("name") is None
    True

"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from stache.nodes.base import Node
from stache.nodes.expressions import Expression, Filtered, Identifier, ImplicitIterator, Scoped
from stache.nodes.tags import InheritablePartial


@runtime_checkable
class IdentifierLookup(Protocol):
    """Values implementing this answer identifier lookups themselves.

    Return None when the identifier is unknown, so that enclosing values get
    a chance to answer.
    """

    def value_for_identifier(self, identifier: str) -> Any: ...


def value_for_identifier(value: Any, identifier: str) -> Any:
    """Ask a single bound value for ``identifier``.

    Values implementing :class:`IdentifierLookup` answer for themselves;
    mappings answer with ``.get()``. Anything else knows no identifier.
    """
    if isinstance(value, IdentifierLookup):
        return value.value_for_identifier(identifier)
    if isinstance(value, Mapping):
        return value.get(identifier)
    return None


@dataclass(frozen=True, slots=True, eq=False)
class Context:
    """Immutable frame of a context chain.

    A frame is one of:

    - the root (``Context()``): no value, no parent,
    - a value frame: ``value`` is set,
    - an inheritable partial frame: ``inheritable_partial`` is set.

    Frames are only created by :meth:`push` and
    :meth:`push_inheritable_partial`; build chains with those.
    """

    value: Any = None
    inheritable_partial: InheritablePartial | None = None
    parent: Context | None = None

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def push(self, value: Any) -> Context:
        """Return a chain with ``value`` on top.

        None denotes absence: the chain is returned unchanged.
        """
        if value is None:
            return self
        return Context(value=value, parent=self)

    def push_inheritable_partial(self, node: InheritablePartial) -> Context:
        """Return a chain whose override resolution sees ``node``'s overrides.

        Push the node right before rendering the AST of the partial it
        references.
        """
        return Context(inheritable_partial=node, parent=self)

    @property
    def top_value(self) -> Any:
        """Value of the nearest value frame, or None."""
        context: Context | None = self
        while context is not None:
            if context.value is not None:
                return context.value
            context = context.parent
        return None

    def lookup(self, identifier: str) -> Any:
        """Look ``identifier`` up, from the innermost value outwards.

        Nearer values shadow farther ones. Inheritable partial frames never
        answer. Returns None when no value knows the identifier.
        """
        context: Context | None = self
        while context is not None:
            if context.value is not None:
                found = value_for_identifier(context.value, identifier)
                if found is not None:
                    return found
            context = context.parent
        return None

    def evaluate(self, expression: Expression) -> Any:
        """Evaluate an identifier path against the chain.

        Only the first identifier of a path goes through the chain; the next
        ones are asked of the value found so far. Filters are applied when
        callable. Returns None when any step is missing.

        Raises:
            Whatever a filter raises: filters are user code and their errors
            propagate to the renderer unchanged.
        """
        if isinstance(expression, ImplicitIterator):
            return self.top_value
        if isinstance(expression, Identifier):
            return self.lookup(expression.name)
        if isinstance(expression, Scoped):
            base = self.evaluate(expression.base)
            if base is None:
                return None
            return value_for_identifier(base, expression.identifier)
        if isinstance(expression, Filtered):
            filter_value = self.evaluate(expression.filter)
            if not callable(filter_value):
                return None
            return filter_value(self.evaluate(expression.argument))
        raise TypeError(f"Unknown expression type: {type(expression).__name__}")

    def resolve_node(self, node: Node) -> Node:
        """Return the node that should be rendered in place of ``node``.

        Used for inheritable section placeholders met while rendering a
        partial's AST. Inheritable partial frames are consulted from the
        innermost outwards; each may replace the current candidate with one of
        its overrides, and outer frames then get to override that candidate in
        turn. Once a frame has supplied an override, later frames referencing
        the same partial AST are skipped, which keeps recursive partials from
        looping. Returns ``node`` itself when nothing overrides it, in which
        case the renderer uses the placeholder's default body.
        """
        used_ast_ids: set[int] = set()
        context: Context | None = self
        while context is not None:
            partial_node = context.inheritable_partial
            if partial_node is not None:
                template_ast = partial_node.partial.template_ast
                if id(template_ast) not in used_ast_ids:
                    resolved = partial_node.resolve(node)
                    if resolved is not node:
                        used_ast_ids.add(id(template_ast))
                    node = resolved
            context = context.parent
        return node

    def __iter__(self) -> Iterator[Context]:
        """Iterate over frames, innermost first."""
        context: Context | None = self
        while context is not None:
            yield context
            context = context.parent

    def __repr__(self) -> str:
        if self.parent is None:
            return "Context()"
        if self.inheritable_partial is not None:
            return f"Context(<{self.inheritable_partial.partial.name}>, depth={self._depth()})"
        return f"Context({self.value!r}, depth={self._depth()})"

    def _depth(self) -> int:
        return sum(1 for _ in self) - 1
