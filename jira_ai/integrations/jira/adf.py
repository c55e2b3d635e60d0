"""Plain-text extraction from Jira rich-text documents.

Jira API v3 returns descriptions and comment bodies as Atlassian Document
Format (ADF) trees; v2 returns plain strings. Both are flattened to linear
text here. Formatting (marks, links, tables) is discarded on purpose: only
text leaves survive, in depth-first order, joined by single spaces.

Recognized node shapes:

- ``None``                     -> ""
- ``str``                      -> the string itself
- ``{"type": "text", ...}``    -> its ``text`` field ("" if absent)
- ``{"content": [...]}``       -> children joined with a space
- ``[...]``                    -> items joined with a space
- anything else                -> ""

Extraction is total: no input shape raises, including very deep trees.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any


class NodeKind(Enum):
    """Shape of a rich-text node."""

    PLAIN_TEXT = "plain_text"
    TEXT_LEAF = "text_leaf"
    COMPOSITE = "composite"
    NODE_LIST = "node_list"
    UNKNOWN = "unknown"


def classify_node(node: Any) -> NodeKind:
    """Classify a node into one of the recognized shapes.

    ``None`` and unrecognized shapes both classify as UNKNOWN, since both
    contribute no text.
    """
    if isinstance(node, str):
        return NodeKind.PLAIN_TEXT
    if isinstance(node, Mapping):
        if node.get("type") == "text":
            return NodeKind.TEXT_LEAF
        if isinstance(node.get("content"), list | tuple):
            return NodeKind.COMPOSITE
        return NodeKind.UNKNOWN
    if isinstance(node, list | tuple):
        return NodeKind.NODE_LIST
    return NodeKind.UNKNOWN


def _children(node: Any, kind: NodeKind) -> list[Any]:
    if kind is NodeKind.COMPOSITE:
        return list(node["content"])
    return list(node)


def extract_text(node: Any) -> str:
    """Flatten a rich-text node to plain text.

    The tree is walked with an explicit stack rather than recursion so a
    pathologically deep document cannot raise RecursionError.

    Args:
        node: A string, ADF node, list of nodes, None, or any other value

    Returns:
        The concatenated text, "" for unrecognized input
    """
    # Each frame holds the pieces collected so far and the children still
    # to visit; finished frames collapse into a single string for the parent.
    root: list[str] = []
    stack: list[tuple[list[str], list[Any]]] = [(root, [node])]

    while stack:
        pieces, pending = stack[-1]
        if not pending:
            stack.pop()
            if stack:
                stack[-1][0].append(" ".join(pieces))
            continue

        current = pending.pop(0)
        kind = classify_node(current)
        if kind is NodeKind.PLAIN_TEXT:
            pieces.append(current)
        elif kind is NodeKind.TEXT_LEAF:
            text = current.get("text")
            pieces.append(text if isinstance(text, str) else "")
        elif kind in (NodeKind.COMPOSITE, NodeKind.NODE_LIST):
            stack.append(([], _children(current, kind)))
        else:
            pieces.append("")

    return root[0] if root else ""


__all__ = [
    "NodeKind",
    "classify_node",
    "extract_text",
]
