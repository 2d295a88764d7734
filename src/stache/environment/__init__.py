"""Stache environment: configuration, template repository and errors.

The repository names are loaded lazily: the compiler imports
``stache.environment.exceptions``, and the repository imports the compiler.
"""

from stache.environment.config import DEFAULT_CONFIGURATION, Configuration
from stache.environment.exceptions import (
    ErrorCode,
    ExpressionSyntaxError,
    InvalidNameError,
    PartialResolutionError,
    TemplateError,
    TemplateNotFoundError,
    TemplateSyntaxError,
    TokenizationError,
    UnclosedTagError,
    UnmatchedClosingTagError,
)

__all__ = [
    "DEFAULT_CONFIGURATION",
    "ChoiceTokenSource",
    "Configuration",
    "DictTokenSource",
    "ErrorCode",
    "ExpressionSyntaxError",
    "FunctionTokenSource",
    "InvalidNameError",
    "PartialResolutionError",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateRepository",
    "TemplateSyntaxError",
    "TokenSource",
    "TokenizationError",
    "UnclosedTagError",
    "UnmatchedClosingTagError",
    "resolve_template_id",
]

_LAZY_REPOSITORY = frozenset(
    {
        "ChoiceTokenSource",
        "DictTokenSource",
        "FunctionTokenSource",
        "TemplateRepository",
        "TokenSource",
        "resolve_template_id",
    }
)


def __getattr__(name: str) -> object:
    """Module-level getattr for lazy repository imports."""
    if name in _LAZY_REPOSITORY:
        from stache.environment import repository

        value = getattr(repository, name)
        globals()[name] = value
        return value
    raise AttributeError(f"module 'stache.environment' has no attribute {name!r}")
