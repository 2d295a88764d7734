"""Compiled template tree."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING

from stache._types import ContentType

if TYPE_CHECKING:
    from stache.nodes.base import Node


class TemplateAST:
    """Ordered sequence of nodes plus a content-escaping mode.

    This is the unit cached by the template repository and referenced by
    partial nodes. Two ASTs are only ever equal when they are the same object:
    override resolution tracks consulted ASTs by identity.

    A repository compiling a template first registers an empty *placeholder*
    AST, so that a template which includes itself (directly or through other
    partials) compiles to a reference to that placeholder. Once compilation
    succeeds the placeholder is filled with :meth:`update_from`. Nothing else
    mutates an AST; in particular, inheritance overrides are never written into
    one.

    Example:
        >>> ast = TemplateAST([Text("Hello")])
        >>> ast.nodes
        (Text(text='Hello'),)

    """

    __slots__ = ("_content_type", "_nodes")

    def __init__(
        self,
        nodes: Sequence[Node] | None = None,
        content_type: ContentType = ContentType.HTML,
    ):
        self._nodes = tuple(nodes) if nodes is not None else None
        self._content_type = content_type

    @classmethod
    def placeholder(cls, content_type: ContentType = ContentType.HTML) -> TemplateAST:
        """Create an AST with no nodes yet, to be filled by :meth:`update_from`."""
        return cls(None, content_type)

    @property
    def is_placeholder(self) -> bool:
        return self._nodes is None

    @property
    def nodes(self) -> tuple[Node, ...]:
        # A placeholder reached before its compilation finished has no nodes.
        return self._nodes if self._nodes is not None else ()

    @property
    def content_type(self) -> ContentType:
        return self._content_type

    def update_from(self, other: TemplateAST) -> None:
        """Fill a placeholder with the nodes and content type of ``other``.

        Raises:
            ValueError: If this AST is not a placeholder
        """
        if self._nodes is not None:
            raise ValueError("Only a placeholder TemplateAST can be updated")
        self._content_type = other._content_type
        self._nodes = other.nodes

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __repr__(self) -> str:
        if self._nodes is None:
            return f"TemplateAST(<placeholder>, {self._content_type.name})"
        return f"TemplateAST({len(self._nodes)} nodes, {self._content_type.name})"
