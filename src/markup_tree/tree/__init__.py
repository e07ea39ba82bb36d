"""Document tree for markup-tree.

Key Components:
    TextNode: Character data, or verbatim raw-text element content
    CommentNode: Comment content without delimiters
    ElementNode: Element with ordered attributes and immutable children
    Node: Union of the three node types
"""

from .nodes import (
    CommentNode,
    Document,
    ElementNode,
    Node,
    NodeType,
    TextNode,
    count_nodes,
    iter_nodes,
    max_depth,
)

__all__ = [
    "CommentNode",
    "Document",
    "ElementNode",
    "Node",
    "NodeType",
    "TextNode",
    "count_nodes",
    "iter_nodes",
    "max_depth",
]
