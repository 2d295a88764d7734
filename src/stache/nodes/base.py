"""Base node class for the Stache template AST."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True, kw_only=True)
class Node:
    """Base class for all template AST nodes.

    Nodes track their source line for error reporting. The line does not take
    part in equality, so two nodes compiled from different lines compare equal
    when their content does. Nodes are immutable for thread-safety.

    """

    lineno: int = field(default=0, compare=False, repr=False)
