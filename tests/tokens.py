"""Token builders for Stache tests.

Each builder takes the tag content and an optional line number, mirroring
what a tokenizer would produce for the corresponding tag.
"""

from __future__ import annotations

from stache import TemplateToken, TokenType


def text(content: str, line: int = 1) -> TemplateToken:
    return TemplateToken(TokenType.TEXT, content, line)


def var(content: str, line: int = 1) -> TemplateToken:
    return TemplateToken(TokenType.ESCAPED_VARIABLE, content, line)


def raw(content: str, line: int = 1) -> TemplateToken:
    return TemplateToken(TokenType.UNESCAPED_VARIABLE, content, line)


def section(content: str, line: int = 1) -> TemplateToken:
    return TemplateToken(TokenType.SECTION, content, line)


def inverted(content: str, line: int = 1) -> TemplateToken:
    return TemplateToken(TokenType.INVERTED_SECTION, content, line)


def close(content: str = "", line: int = 1) -> TemplateToken:
    return TemplateToken(TokenType.CLOSE, content, line)


def partial(content: str, line: int = 1) -> TemplateToken:
    return TemplateToken(TokenType.PARTIAL, content, line)


def block(content: str, line: int = 1) -> TemplateToken:
    """Inheritable section: {{$ name }}"""
    return TemplateToken(TokenType.INHERITABLE_SECTION, content, line)


def layout(content: str, line: int = 1) -> TemplateToken:
    """Inheritable partial: {{< name }}"""
    return TemplateToken(TokenType.INHERITABLE_PARTIAL, content, line)


def comment(content: str = "", line: int = 1) -> TemplateToken:
    return TemplateToken(TokenType.COMMENT, content, line)
