"""
Mustache scanner.

Splits template text into mustache nodes and groups block tags into a
tree. It recognises just enough syntax to find partials and pair blocks;
helper arguments, hashes and subexpressions are not parsed.
"""

from __future__ import annotations

import re
from typing import List, Optional

from .nodes import BlockStatement, MustacheKind, MustacheNode, Statements

_NAME = re.compile(r"[^\s}~]+")

_SIGILS = {
    "#": MustacheKind.OPEN_BLOCK,
    "^": MustacheKind.OPEN_BLOCK,
    "/": MustacheKind.CLOSE_BLOCK,
    ">": MustacheKind.PARTIAL,
    "!": MustacheKind.COMMENT,
}


def scan_mustaches(text: str) -> List[MustacheNode]:
    """
    All mustache expressions in text, in order.

    An unterminated '{{' ends the scan; the rest is plain text.
    """
    nodes: List[MustacheNode] = []
    pos = 0
    while True:
        start = text.find("{{", pos)
        if start < 0:
            break

        if text.startswith("{{!--", start):
            close = text.find("--}}", start + 5)
            end = close + 4 if close >= 0 else -1
        elif text.startswith("{{{", start):
            close = text.find("}}}", start + 3)
            end = close + 3 if close >= 0 else -1
        else:
            close = text.find("}}", start + 2)
            end = close + 2 if close >= 0 else -1
        if end < 0:
            break

        nodes.append(_make_node(text, start, end))
        pos = end
    return nodes


def _make_node(text: str, start: int, end: int) -> MustacheNode:
    raw = text[start:end]
    if raw.startswith("{{{"):
        body = raw[3:-3]
        return MustacheNode(MustacheKind.PLAIN, start, end, raw, _first_name(body) or "")

    body = raw[2:-2]
    if body.startswith("~"):
        body = body[1:]

    kind = _SIGILS.get(body[:1], MustacheKind.PLAIN)
    if kind is not MustacheKind.PLAIN:
        body = body[1:]

    if kind is MustacheKind.COMMENT:
        return MustacheNode(kind, start, end, raw)

    name = _first_name(body) or ""
    # {{^}} is the inverse section of the enclosing block, not a new block
    if kind is MustacheKind.OPEN_BLOCK and not name:
        kind = MustacheKind.PLAIN
    if kind is MustacheKind.PARTIAL:
        name = name.strip("'\"")
    return MustacheNode(kind, start, end, raw, name)


def _first_name(body: str) -> Optional[str]:
    match = _NAME.search(body)
    return match.group(0) if match else None


def build_tree(nodes: List[MustacheNode]) -> Statements:
    """
    Group open/close tags into BlockStatements.

    A close tag closes the nearest open block with the same name; blocks
    opened in between stay unclosed. A close tag with no matching open
    block is kept as an ordinary statement.
    """
    root = Statements()
    stack: List[BlockStatement] = []

    def current() -> List:
        return stack[-1].children if stack else root.children

    for node in nodes:
        if node.kind is MustacheKind.OPEN_BLOCK:
            stack.append(BlockStatement(children=[node]))
            continue

        if node.kind is MustacheKind.CLOSE_BLOCK:
            match_at = _find_open(stack, node.name)
            if match_at is None:
                current().append(node)
                continue
            while len(stack) > match_at + 1:
                unclosed = stack.pop()
                stack[-1].children.append(unclosed)
            block = stack.pop()
            block.children.append(node)
            current().append(block)
            continue

        current().append(node)

    # Unclosed blocks at end of text
    while stack:
        block = stack.pop()
        current().append(block)

    return root


def _find_open(stack: List[BlockStatement], name: str) -> Optional[int]:
    for i in range(len(stack) - 1, -1, -1):
        opener = stack[i].open
        if opener is not None and opener.name == name:
            return i
    return None


def parse_template(text: str) -> Statements:
    return build_tree(scan_mustaches(text))


def partial_at(text: str, offset: int) -> Optional[MustacheNode]:
    """Partial node whose text contains offset."""
    for node in scan_mustaches(text):
        if node.kind is MustacheKind.PARTIAL and node.contains(offset):
            return node
        if node.start > offset:
            break
    return None


__all__ = ["scan_mustaches", "build_tree", "parse_template", "partial_at"]
