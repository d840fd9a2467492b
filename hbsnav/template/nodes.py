"""
Mustache syntax nodes.

A closed set of variants discriminated by MustacheKind, plus the block
structure needed to pair open and close tags. Pairing is a pure function
over the tree rather than a method on the nodes.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Union


class MustacheKind(enum.Enum):
    """Variants of {{ ... }} expressions."""
    OPEN_BLOCK = "open_block"    # {{#name}} / {{^name}}
    CLOSE_BLOCK = "close_block"  # {{/name}}
    PARTIAL = "partial"          # {{> path}}
    PLAIN = "plain"              # {{name}}, {{{name}}}, {{else}}
    COMMENT = "comment"          # {{! ...}} / {{!-- ... --}}


@dataclass(frozen=True)
class MustacheNode:
    """One mustache expression with its document offsets."""
    kind: MustacheKind
    start: int
    end: int        # Exclusive
    text: str
    name: str = ""  # Block/helper name or partial path

    def contains(self, offset: int) -> bool:
        return self.start <= offset <= self.end


@dataclass(eq=False)
class BlockStatement:
    """Open tag, inner statements and (when present) the close tag."""
    children: List["Statement"] = field(default_factory=list)

    @property
    def open(self) -> Optional[MustacheNode]:
        first = self.children[0] if self.children else None
        if isinstance(first, MustacheNode) and first.kind is MustacheKind.OPEN_BLOCK:
            return first
        return None


@dataclass(eq=False)
class Statements:
    """Root statement list of a template."""
    children: List["Statement"] = field(default_factory=list)


Statement = Union[MustacheNode, BlockStatement]
Container = Union[Statements, BlockStatement]


def iter_nodes(container: Container) -> Iterator[MustacheNode]:
    """All mustache nodes in document order."""
    for child in container.children:
        if isinstance(child, BlockStatement):
            yield from iter_nodes(child)
        else:
            yield child


def enclosing_container(tree: Container, node: MustacheNode) -> Optional[Container]:
    """Statement list that holds node as a direct child."""
    for child in tree.children:
        if child is node:
            return tree
        if isinstance(child, BlockStatement):
            found = enclosing_container(child, node)
            if found is not None:
                return found
    return None


def paired_element(tree: Statements, node: MustacheNode) -> Optional[MustacheNode]:
    """
    The complementary block tag of node.

    {{#foo}} -> {{/foo}} and back; None for partials, plain mustaches,
    comments and blocks that are not closed.
    """
    container = enclosing_container(tree, node)
    if not isinstance(container, BlockStatement):
        return None

    if node.kind is MustacheKind.OPEN_BLOCK:
        last = container.children[-1]
        if isinstance(last, MustacheNode) and last.kind is MustacheKind.CLOSE_BLOCK and last.name == node.name:
            return last
        return None

    if node.kind is MustacheKind.CLOSE_BLOCK:
        first = container.open
        if first is not None and first.name == node.name:
            return first
        return None

    return None


__all__ = [
    "MustacheKind",
    "MustacheNode",
    "BlockStatement",
    "Statements",
    "Statement",
    "iter_nodes",
    "enclosing_container",
    "paired_element",
]
