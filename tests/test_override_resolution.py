"""Tests for template inheritance: inheritable partials and override resolution."""

from __future__ import annotations

from stache import (
    Context,
    InheritablePartial,
    InheritableSection,
    Partial,
    TemplateAST,
    Text,
)

from .rendering import render
from .tokens import block, close, layout, section, text, var


def _section(name: str, content: str) -> InheritableSection:
    return InheritableSection(name, TemplateAST([Text(content)]))


def _inheritable(partial_ast: TemplateAST, *overrides: object, name: str = "layout") -> InheritablePartial:
    return InheritablePartial(Partial(name, partial_ast), TemplateAST(list(overrides)))


BASE = [text("<title>"), block("title"), text("Base"), close("title"), text("</title>")]
LAYOUT = [layout("base"), block("title"), text("Layout"), close("title"), close("base")]
PAGE = [layout("layout"), block("title"), text("Page"), close("title"), close("layout")]


class TestInheritablePartialResolve:
    def test_matching_override_replaces(self) -> None:
        override = _section("title", "Home")
        node = _inheritable(TemplateAST([]), override)
        assert node.resolve(_section("title", "default")) is override

    def test_non_matching_node_is_returned_unchanged(self) -> None:
        node = _inheritable(TemplateAST([]), _section("title", "Home"))
        placeholder = _section("body", "default")
        assert node.resolve(placeholder) is placeholder

    def test_last_override_in_document_order_wins(self) -> None:
        second = _section("title", "second")
        node = _inheritable(TemplateAST([]), _section("title", "first"), second)
        assert node.resolve(_section("title", "default")) is second

    def test_nested_inheritable_partial_contributes(self) -> None:
        nested_override = _section("title", "nested")
        nested = _inheritable(TemplateAST([]), nested_override, name="other")
        node = _inheritable(TemplateAST([]), Text("ignored"), nested)
        assert node.resolve(_section("title", "default")) is nested_override

    def test_non_section_nodes_are_ignored(self) -> None:
        placeholder = _section("title", "default")
        node = _inheritable(TemplateAST([]), Text("filler"))
        assert node.resolve(placeholder) is placeholder


class TestResolveNode:
    def test_no_inheritable_frames(self) -> None:
        placeholder = _section("title", "default")
        assert Context().push({"a": 1}).resolve_node(placeholder) is placeholder

    def test_single_frame(self) -> None:
        override = _section("title", "Home")
        ctx = Context().push_inheritable_partial(_inheritable(TemplateAST([]), override))
        assert ctx.resolve_node(_section("title", "default")) is override

    def test_outer_frame_refines_inner_result(self) -> None:
        """An outer inheritable partial of another template overrides the inner override."""
        base_ast = TemplateAST([])
        layout_ast = TemplateAST([])
        inner = _inheritable(base_ast, _section("title", "Layout"), name="base")
        outer_override = _section("title", "Page")
        outer = _inheritable(layout_ast, outer_override, name="layout")

        ctx = Context().push_inheritable_partial(outer).push({"x": 1}).push_inheritable_partial(inner)
        assert ctx.resolve_node(_section("title", "default")) is outer_override

    def test_same_partial_innermost_instantiation_wins(self) -> None:
        shared_ast = TemplateAST([])
        inner_override = _section("title", "inner")
        outer = _inheritable(shared_ast, _section("title", "outer"))
        inner = _inheritable(shared_ast, inner_override)

        ctx = Context().push_inheritable_partial(outer).push_inheritable_partial(inner)
        assert ctx.resolve_node(_section("title", "default")) is inner_override

    def test_frame_without_override_does_not_block_same_partial(self) -> None:
        shared_ast = TemplateAST([])
        outer_override = _section("title", "outer")
        outer = _inheritable(shared_ast, outer_override)
        inner = _inheritable(shared_ast, _section("other", "x"))

        ctx = Context().push_inheritable_partial(outer).push_inheritable_partial(inner)
        assert ctx.resolve_node(_section("title", "default")) is outer_override


class TestInheritanceRendering:
    def test_partial_defaults(self, make_repository) -> None:
        repository = make_repository({"base": BASE})
        assert render(repository.template("base")) == "<title>Base</title>"

    def test_override(self, make_repository) -> None:
        repository = make_repository({"base": BASE, "layout": LAYOUT})
        assert render(repository.template("layout")) == "<title>Layout</title>"

    def test_outermost_template_wins(self, make_repository) -> None:
        repository = make_repository({"base": BASE, "layout": LAYOUT, "page": PAGE})
        assert render(repository.template("page")) == "<title>Page</title>"
        assert render(repository.template("layout")) == "<title>Layout</title>"

    def test_default_when_not_overridden(self, make_repository) -> None:
        page = [layout("base"), block("footer"), text("x"), close("footer"), close("base")]
        repository = make_repository({"base": BASE, "page": page})
        assert render(repository.template("page")) == "<title>Base</title>"

    def test_override_body_is_not_rendered_in_place(self, make_repository) -> None:
        page = [text("["), layout("base"), text("ignored"), close("base"), text("]")]
        repository = make_repository({"base": BASE, "page": page})
        assert render(repository.template("page")) == "[<title>Base</title>]"

    def test_nested_placeholder_inside_override(self, make_repository) -> None:
        layout_tokens = [
            layout("base"),
            block("title"),
            text("Layout: "),
            block("subtitle"),
            text("none"),
            close("subtitle"),
            close("title"),
            close("base"),
        ]
        page = [layout("layout"), block("subtitle"), text("Sub"), close("subtitle"), close("layout")]
        repository = make_repository({"base": BASE, "layout": layout_tokens, "page": page})

        assert render(repository.template("layout")) == "<title>Layout: none</title>"
        assert render(repository.template("page")) == "<title>Layout: Sub</title>"

    def test_overrides_see_the_context(self, make_repository) -> None:
        page = [layout("base"), block("title"), var("name"), close("title"), close("base")]
        repository = make_repository({"base": BASE, "page": page})
        ctx = Context().push({"name": "Arthur"})
        assert render(repository.template("page"), ctx) == "<title>Arthur</title>"

    def test_same_partial_used_twice(self, make_repository) -> None:
        page = [
            layout("base"), block("title"), text("One"), close("title"), close("base"),
            layout("base"), block("title"), text("Two"), close("title"), close("base"),
        ]
        repository = make_repository({"base": BASE, "page": page})
        assert render(repository.template("page")) == "<title>One</title><title>Two</title>"

    def test_recursive_partial_innermost_instantiation_wins(self, make_repository) -> None:
        recursive = [
            block("a"), text("default"), close("a"),
            section("more"),
            layout("P"), block("a"), text("inner"), close("a"), close("P"),
            close("more"),
        ]
        page = [layout("P"), block("a"), text("outer"), close("a"), close("P")]
        repository = make_repository({"P": recursive, "page": page})

        ctx = Context().push({"more": {"more": False}})
        assert render(repository.template("page"), ctx) == "outerinner"

    def test_recursive_partial_shares_its_ast(self, make_repository) -> None:
        recursive = [section("more"), layout("P"), close("P"), close("more")]
        repository = make_repository({"P": recursive})

        ast = repository.template("P")
        nested = ast.nodes[0].body.nodes[0]
        assert isinstance(nested, InheritablePartial)
        assert nested.partial.template_ast is ast
        assert not ast.is_placeholder
