"""Minimal renderer used to exercise compiled templates in tests.

It walks a TemplateAST the way a real renderer threads a Context: sections
push their value, inheritable partials push themselves before their partial's
AST is rendered, and inheritable sections render whatever the context
resolves them to. No escaping is applied.
"""

from __future__ import annotations

from collections.abc import Sequence

from stache import (
    Context,
    InheritablePartial,
    InheritableSection,
    Partial,
    Section,
    TemplateAST,
    Text,
    Variable,
)


def render(ast: TemplateAST, context: Context | None = None) -> str:
    context = context if context is not None else Context()
    return "".join(_render_node(node, context) for node in ast.nodes)


def _render_node(node: object, context: Context) -> str:
    if isinstance(node, Text):
        return node.text
    if isinstance(node, Variable):
        value = context.evaluate(node.expression)
        return "" if value is None else str(value)
    if isinstance(node, Section):
        value = context.evaluate(node.expression)
        if node.inverted:
            return "" if value else render(node.body, context)
        if not value:
            return ""
        if isinstance(value, Sequence) and not isinstance(value, str):
            return "".join(render(node.body, context.push(item)) for item in value)
        return render(node.body, context.push(value))
    if isinstance(node, Partial):
        return render(node.template_ast, context)
    if isinstance(node, InheritablePartial):
        return render(node.partial.template_ast, context.push_inheritable_partial(node))
    if isinstance(node, InheritableSection):
        resolved = context.resolve_node(node)
        assert isinstance(resolved, InheritableSection)
        return render(resolved.body, context)
    raise TypeError(f"Unexpected node {node!r}")
