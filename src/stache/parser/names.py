"""Validation of partial and inheritable section names.

Names are trimmed of surrounding whitespace and must not be blank or contain
whitespace afterwards. ``a.b`` and ``layouts/base`` are valid names; ``a b``
is not.
"""

from __future__ import annotations


class NameParseError(Exception):
    """Raised when tag content is not a valid name.

    Attributes:
        message: Error description
        empty: True when the content was blank rather than malformed
    """

    def __init__(self, message: str, *, empty: bool = False):
        self.message = message
        self.empty = empty
        super().__init__(message)


def _parse_name(content: str, kind: str) -> str:
    name = content.strip()
    if not name:
        raise NameParseError(f"Missing {kind} name", empty=True)
    if any(char.isspace() for char in name):
        raise NameParseError(f"Invalid {kind} name")
    return name


def parse_template_name(content: str) -> str:
    """Return the partial name held by ``content``.

    Raises:
        NameParseError: If the name is blank or contains whitespace
    """
    return _parse_name(content, "template")


def parse_inheritable_section_name(content: str) -> str:
    """Return the inheritable section name held by ``content``.

    Raises:
        NameParseError: If the name is blank or contains whitespace
    """
    return _parse_name(content, "inheritable section")
