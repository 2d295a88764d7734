"""Parsing of tag content: expressions and names."""

from stache.parser.expressions import ExpressionParseError, ExpressionParser, parse_expression
from stache.parser.names import NameParseError, parse_inheritable_section_name, parse_template_name

__all__ = [
    "ExpressionParseError",
    "ExpressionParser",
    "NameParseError",
    "parse_expression",
    "parse_inheritable_section_name",
    "parse_template_name",
]
