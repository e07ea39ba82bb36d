"""Render node trees back into markup text.

The serializer is the structural inverse of the scanner: for well-formed
input, serializing the parsed nodes reproduces the document up to whitespace
between tags and attribute quoting style. Text is emitted verbatim, without
escaping.
"""

from typing import Any, FrozenSet, List, Optional

from markup_tree.shared.config import DEFAULT_VOID_ELEMENTS
from markup_tree.tree.nodes import CommentNode, ElementNode, TextNode


def serialize(nodes: Any, void_elements: Optional[FrozenSet[str]] = None) -> str:
    """Render a node or a sequence of nodes as markup text.

    Objects that are not nodes contribute an empty string, so this never
    raises for any input.

    Args:
        nodes: A single node, or a list/tuple of nodes
        void_elements: Tags rendered without children or closing tag

    Returns:
        Markup text
    """
    parts: List[str] = []
    _render(nodes, void_elements if void_elements is not None else DEFAULT_VOID_ELEMENTS, parts)
    return "".join(parts)


def serialize_start_tag(element: ElementNode) -> str:
    """Render the opening tag of an element, attributes in mapping order."""
    parts = ["<", element.tag_name]
    for key, value in element.attributes.items():
        if value == "":
            parts.extend([" ", key])
        else:
            parts.extend([" ", key, '="', value, '"'])
    parts.append(">")
    return "".join(parts)


def serialize_end_tag(tag_name: str) -> str:
    return f"</{tag_name}>"


class _EndTag(str):
    """Closing tag queued on the render stack."""


def _render(nodes: Any, void_elements: FrozenSet[str], parts: List[str]) -> None:
    # Explicit stack: tree depth is not bounded by the recursion limit
    stack: List[Any] = [nodes]
    while stack:
        item = stack.pop()
        if isinstance(item, _EndTag):
            parts.append(item)
        elif isinstance(item, (list, tuple)):
            stack.extend(reversed(item))
        elif isinstance(item, TextNode):
            parts.append(item.content)
        elif isinstance(item, CommentNode):
            parts.append(f"<!-- {item.content} -->")
        elif isinstance(item, ElementNode):
            parts.append(serialize_start_tag(item))
            if item.tag_name not in void_elements:
                stack.append(_EndTag(serialize_end_tag(item.tag_name)))
                stack.extend(reversed(item.children))
