"""Compile-time scopes.

Every open tag (section, inverted section, inheritable section, inheritable
partial) owns a scope collecting the nodes of its body. Scopes live on an
explicit stack above a single root scope; a scope is popped when its closing
tag is consumed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from stache._types import ContentType, TemplateToken
from stache.nodes.base import Node
from stache.nodes.expressions import Expression
from stache.nodes.template import TemplateAST


class ScopeKind(Enum):
    ROOT = "root"
    SECTION = "section"
    INVERTED_SECTION = "inverted_section"
    INHERITABLE_PARTIAL = "inheritable_partial"
    INHERITABLE_SECTION = "inheritable_section"


@dataclass(slots=True)
class Scope:
    """An open tag and the nodes of its body so far.

    Attributes:
        kind: Which tag opened the scope
        opening_token: Token that opened the scope (None for the root)
        expression: Section expression (sections and inverted sections)
        name: Partial or inheritable section name (inheritable tags)
        nodes: Accumulated body nodes
    """

    kind: ScopeKind
    opening_token: TemplateToken | None = None
    expression: Expression | None = None
    name: str | None = None
    nodes: list[Node] = field(default_factory=list)

    @property
    def lineno(self) -> int:
        return self.opening_token.lineno if self.opening_token is not None else 0

    def append(self, node: Node) -> None:
        self.nodes.append(node)

    def to_ast(self, content_type: ContentType) -> TemplateAST:
        return TemplateAST(self.nodes, content_type)


class CompilationState:
    """Scope stack of a running compilation.

    The root scope sits at the bottom of the stack and is never popped.
    """

    __slots__ = ("_scopes", "content_type")

    def __init__(self, content_type: ContentType):
        self.content_type = content_type
        self._scopes: list[Scope] = [Scope(ScopeKind.ROOT)]

    @property
    def current_scope(self) -> Scope:
        return self._scopes[-1]

    @property
    def depth(self) -> int:
        return len(self._scopes)

    def push_scope(self, scope: Scope) -> None:
        self._scopes.append(scope)

    def pop_scope(self) -> Scope:
        """Pop the innermost scope and return it.

        Raises:
            RuntimeError: If only the root scope is left
        """
        if len(self._scopes) == 1:
            raise RuntimeError("The root scope cannot be popped")
        return self._scopes.pop()
