"""Configuration for Stache repositories and renderers."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from stache._types import ContentType
from stache.context import Context


@dataclass(frozen=True, slots=True)
class Configuration:
    """Settings shared by every template of a repository.

    Attributes:
        content_type: Content-escaping mode templates are compiled with
        base_context: Context a renderer starts from; values pushed onto it
            are visible to every template

    Example:
            >>> config = Configuration(content_type=ContentType.TEXT)
            >>> config = config.extended({"site": "example.org"})
            >>> config.base_context.lookup("site")
            'example.org'

    """

    content_type: ContentType = ContentType.HTML
    base_context: Context = field(default_factory=Context)

    def extended(self, value: Any) -> Configuration:
        """Return a copy whose base context has ``value`` pushed on top."""
        return replace(self, base_context=self.base_context.push(value))


DEFAULT_CONFIGURATION = Configuration()
