"""JSON interchange format for node trees.

The dictionary form of a node is::

    {"type": "text", "content": "..."}
    {"type": "comment", "content": "..."}
    {"type": "element", "tagName": "div", "attributes": {...}, "children": [...]}

Entries with an unrecognized ``type`` are skipped when reading, the same way
the serializer ignores objects that are not nodes.
"""

import json
from typing import Any, Dict, List, Optional, Sequence

from markup_tree.tree.nodes import CommentNode, ElementNode, Node, TextNode


class NodeFormatError(ValueError):
    """Raised when a dictionary cannot be converted into a node."""


def node_to_dict(node: Node) -> Dict[str, Any]:
    """Convert a single node to its dictionary form."""
    if isinstance(node, TextNode):
        return {"type": "text", "content": node.content}
    if isinstance(node, CommentNode):
        return {"type": "comment", "content": node.content}
    if isinstance(node, ElementNode):
        return {
            "type": "element",
            "tagName": node.tag_name,
            "attributes": dict(node.attributes),
            "children": nodes_to_dicts(node.children),
        }
    raise NodeFormatError(f"Not a node: {type(node).__name__}")


def nodes_to_dicts(nodes: Sequence[Node]) -> List[Dict[str, Any]]:
    """Convert a node sequence to a list of dictionaries."""
    return [node_to_dict(node) for node in nodes]


def node_from_dict(data: Dict[str, Any]) -> Optional[Node]:
    """Convert a dictionary back into a node.

    Returns:
        The node, or None when ``type`` is not one of text/comment/element

    Raises:
        NodeFormatError: If a recognized entry is missing fields or has the
            wrong field types
    """
    if not isinstance(data, dict):
        raise NodeFormatError(f"Node entry must be an object, got {type(data).__name__}")

    node_type = data.get("type")
    if node_type in ("text", "comment"):
        content = data.get("content")
        if not isinstance(content, str):
            raise NodeFormatError(f"{node_type} node requires string 'content'")
        return TextNode(content) if node_type == "text" else CommentNode(content)

    if node_type == "element":
        tag_name = data.get("tagName")
        if not isinstance(tag_name, str):
            raise NodeFormatError("element node requires string 'tagName'")
        attributes = data.get("attributes", {})
        if not isinstance(attributes, dict) or not all(
            isinstance(key, str) and isinstance(value, str)
            for key, value in attributes.items()
        ):
            raise NodeFormatError(f"<{tag_name}> attributes must map strings to strings")
        children = data.get("children", [])
        if not isinstance(children, list):
            raise NodeFormatError(f"<{tag_name}> children must be a list")
        try:
            return ElementNode(tag_name, dict(attributes), tuple(nodes_from_dicts(children)))
        except ValueError as e:
            if isinstance(e, NodeFormatError):
                raise
            raise NodeFormatError(str(e)) from e

    return None


def nodes_from_dicts(entries: Sequence[Dict[str, Any]]) -> List[Node]:
    """Convert a list of dictionaries into nodes, skipping unknown types."""
    nodes = []
    for entry in entries:
        node = node_from_dict(entry)
        if node is not None:
            nodes.append(node)
    return nodes


def to_json(nodes: Sequence[Node], indent: Optional[int] = 2) -> str:
    """Serialize a node sequence to JSON text."""
    return json.dumps(nodes_to_dicts(nodes), indent=indent, ensure_ascii=False)


def from_json(json_text: str) -> List[Node]:
    """Read a node sequence from JSON text.

    A single top-level object is accepted as a one-node document.

    Raises:
        NodeFormatError: If the text is not valid JSON, not a node tree, or
            nested deeper than the recursion limit allows
    """
    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as e:
        raise NodeFormatError(f"Invalid JSON: {e}") from e
    except RecursionError as e:
        raise NodeFormatError("JSON document is nested too deeply") from e
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise NodeFormatError("JSON document must be a list of nodes")
    try:
        return nodes_from_dicts(data)
    except RecursionError as e:
        raise NodeFormatError("Node tree is nested too deeply") from e
