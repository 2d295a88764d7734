"""Stache template AST.

Expression nodes describe identifier paths; tag nodes make up compiled
templates; :class:`TemplateAST` is the compiled, cacheable tree.
"""

from stache.nodes.base import Node
from stache.nodes.expressions import Expression, Filtered, Identifier, ImplicitIterator, Scoped
from stache.nodes.tags import (
    InheritablePartial,
    InheritableSection,
    Partial,
    Section,
    Text,
    Variable,
)
from stache.nodes.template import TemplateAST

__all__ = [
    "Expression",
    "Filtered",
    "Identifier",
    "ImplicitIterator",
    "InheritablePartial",
    "InheritableSection",
    "Node",
    "Partial",
    "Scoped",
    "Section",
    "TemplateAST",
    "Text",
    "Variable",
]
