"""Tests for partial and inheritable section name validation."""

from __future__ import annotations

import pytest

from stache import (
    ErrorCode,
    InheritableSection,
    InvalidNameError,
    TemplateCompiler,
    UnmatchedClosingTagError,
)
from stache.parser import NameParseError, parse_inheritable_section_name, parse_template_name

from .tokens import block, close, layout, partial, text

INVALID_NAMES = ["", " ", "a b", "a\tb", "\n", "a\nb"]
VALID_NAMES = ["a.b", "section1", "layouts/base", "  padded  "]


class TestNameParsing:
    @pytest.mark.parametrize("content", INVALID_NAMES)
    def test_invalid_template_names(self, content: str) -> None:
        with pytest.raises(NameParseError):
            parse_template_name(content)

    @pytest.mark.parametrize("content", VALID_NAMES)
    def test_valid_template_names(self, content: str) -> None:
        assert parse_template_name(content) == content.strip()

    @pytest.mark.parametrize("content", ["", " ", "\t\n"])
    def test_blank_is_flagged_empty(self, content: str) -> None:
        with pytest.raises(NameParseError) as exc_info:
            parse_inheritable_section_name(content)
        assert exc_info.value.empty is True
        assert exc_info.value.message == "Missing inheritable section name"

    def test_internal_whitespace_is_not_empty(self) -> None:
        with pytest.raises(NameParseError) as exc_info:
            parse_template_name("a b")
        assert exc_info.value.empty is False
        assert exc_info.value.message == "Invalid template name"


class TestCompilerNameValidation:
    @pytest.mark.parametrize("content", ["", " ", "a b", "a\tb"])
    def test_inheritable_section_rejects(self, compiler: TemplateCompiler, content: str) -> None:
        with pytest.raises(InvalidNameError) as exc_info:
            compiler.compile([block(content, line=3)])
        assert exc_info.value.lineno == 3
        assert exc_info.value.code is ErrorCode.INVALID_NAME

    @pytest.mark.parametrize("content", ["", " ", "a b", "a\tb"])
    def test_inheritable_partial_rejects(self, compiler: TemplateCompiler, content: str) -> None:
        with pytest.raises(InvalidNameError):
            compiler.compile([layout(content)])

    @pytest.mark.parametrize("content", ["", " ", "a b", "a\tb"])
    def test_partial_rejects(self, compiler: TemplateCompiler, content: str) -> None:
        with pytest.raises(InvalidNameError):
            compiler.compile([partial(content)])

    @pytest.mark.parametrize("name", ["a.b", "section1"])
    def test_inheritable_section_accepts(self, compiler: TemplateCompiler, name: str) -> None:
        ast = compiler.compile([block(f" {name} "), text("default"), close(name)])

        node = ast.nodes[0]
        assert isinstance(node, InheritableSection)
        assert node.name == name
        assert node.body.nodes[0].text == "default"

    def test_inheritable_section_blank_close(self, compiler: TemplateCompiler) -> None:
        ast = compiler.compile([block("title"), close("")])
        assert ast.nodes[0].name == "title"

    def test_inheritable_section_mismatched_close(self, compiler: TemplateCompiler) -> None:
        with pytest.raises(UnmatchedClosingTagError):
            compiler.compile([block("title"), close("body")])

    def test_inheritable_section_invalid_close(self, compiler: TemplateCompiler) -> None:
        with pytest.raises(InvalidNameError):
            compiler.compile([block("title"), close("ti tle")])

    def test_inheritable_partial_invalid_close(self, compiler: TemplateCompiler) -> None:
        with pytest.raises(InvalidNameError):
            compiler.compile([layout("base"), close("ba se")])

    def test_inheritable_partial_mismatched_close(self, compiler: TemplateCompiler) -> None:
        with pytest.raises(UnmatchedClosingTagError):
            compiler.compile([layout("base"), close("other")])
