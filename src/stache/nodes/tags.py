"""Tag nodes for the Stache AST."""

from __future__ import annotations

from dataclasses import dataclass

from stache.nodes.base import Node
from stache.nodes.expressions import Expression
from stache.nodes.template import TemplateAST


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Raw text between tags."""

    text: str


@dataclass(frozen=True, slots=True)
class Variable(Node):
    """Variable tag: {{ name }} (escaped) or {{{ name }}} (unescaped)."""

    expression: Expression
    escape: bool = True


@dataclass(frozen=True, slots=True)
class Section(Node):
    """Section tag: {{# name }}...{{/ name }} or inverted {{^ name }}...{{/ name }}."""

    expression: Expression
    inverted: bool
    body: TemplateAST


@dataclass(frozen=True, slots=True)
class Partial(Node):
    """Partial tag: {{> name }}

    The referenced AST is resolved when the including template is compiled.
    """

    name: str
    template_ast: TemplateAST


@dataclass(frozen=True, slots=True)
class InheritableSection(Node):
    """Overridable placeholder: {{$ name }}default{{/ name }}

    Inside a partial, the body is rendered unless an enclosing inheritable
    partial overrides the section. Inside an inheritable partial's body, the
    node is itself the override.
    """

    name: str
    body: TemplateAST


@dataclass(frozen=True, slots=True)
class InheritablePartial(Node):
    """Partial with overrides: {{< layout }}{{$ title }}Home{{/ title }}{{/ layout }}"""

    partial: Partial
    overriding_ast: TemplateAST

    def resolve(self, node: Node) -> Node:
        """Return the node that replaces ``node`` according to this partial's overrides.

        The override body is scanned in document order. An inheritable section
        with the same name as the node being resolved replaces it; a nested
        inheritable partial gets to resolve the current candidate in turn.
        Returns ``node`` itself when nothing applies.
        """
        resolved = node
        for overriding_node in self.overriding_ast.nodes:
            if isinstance(overriding_node, InheritableSection):
                if isinstance(resolved, InheritableSection) and resolved.name == overriding_node.name:
                    resolved = overriding_node
            elif isinstance(overriding_node, InheritablePartial):
                resolved = overriding_node.resolve(resolved)
        return resolved
