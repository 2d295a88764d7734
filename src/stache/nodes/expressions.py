"""Expression nodes for the Stache AST.

Expressions are identifier paths fetched from the render-time context.
Equality is structural: the compiler relies on it to match closing tags with
their opening tags and to detect alternate sections (``{{^a}}`` after
``{{#a}}``).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Expression:
    """Base class for expressions."""


@dataclass(frozen=True, slots=True)
class ImplicitIterator(Expression):
    """The current context value: {{ . }}"""

    def __str__(self) -> str:
        return "."


@dataclass(frozen=True, slots=True)
class Identifier(Expression):
    """Bare identifier looked up through the whole context chain: {{ name }}"""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class Scoped(Expression):
    """Identifier looked up in the value of another expression: {{ user.name }}"""

    base: Expression
    identifier: str

    def __str__(self) -> str:
        if isinstance(self.base, ImplicitIterator):
            return f".{self.identifier}"
        return f"{self.base}.{self.identifier}"


@dataclass(frozen=True, slots=True)
class Filtered(Expression):
    """Filter applied to an argument: {{ uppercase(name) }}"""

    filter: Expression
    argument: Expression

    def __str__(self) -> str:
        return f"{self.filter}({self.argument})"
