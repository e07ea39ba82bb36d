"""Node types produced by the scanner and consumed by the serializer.

A parsed document is a plain list of top-level nodes. Each node is one of
three frozen dataclasses: ``TextNode``, ``CommentNode`` or ``ElementNode``.
Element children are stored as tuples, so a tree cannot be modified after it
has been built; ownership is a strict tree with no parent references.
"""

import re
from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple, Union

TAG_NAME_PATTERN = re.compile(r"[a-zA-Z0-9_-]+")


class NodeType(Enum):
    """Kinds of nodes in a parsed document."""

    TEXT = auto()
    COMMENT = auto()
    ELEMENT = auto()


@dataclass(frozen=True)
class TextNode:
    """Character data between tags, or the verbatim body of a raw-text element."""

    content: str

    @property
    def node_type(self) -> NodeType:
        return NodeType.TEXT


@dataclass(frozen=True)
class CommentNode:
    """A ``<!-- ... -->`` comment; ``content`` excludes the delimiters."""

    content: str

    @property
    def node_type(self) -> NodeType:
        return NodeType.COMMENT


@dataclass(frozen=True)
class ElementNode:
    """An element with its attributes and child nodes.

    ``attributes`` preserves insertion order, which is also the order the
    serializer renders them in. It is stored as a read-only view, so a built
    tree cannot be changed in place.
    """

    tag_name: str
    attributes: Mapping[str, str] = field(default_factory=dict)
    children: Tuple["Node", ...] = ()

    def __post_init__(self) -> None:
        """Validate the tag name and freeze the children sequence."""
        if not self.tag_name:
            raise ValueError("Element tag name cannot be empty")
        if not TAG_NAME_PATTERN.fullmatch(self.tag_name):
            raise ValueError(f"Invalid element tag name: {self.tag_name!r}")
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    def __hash__(self) -> int:
        # attribute order does not take part in equality
        return hash((self.tag_name, frozenset(self.attributes.items()), self.children))

    @property
    def node_type(self) -> NodeType:
        return NodeType.ELEMENT

    @property
    def text(self) -> str:
        """Concatenated text of all descendant text nodes, space separated."""
        parts = []
        for node in iter_nodes(self.children):
            if isinstance(node, TextNode):
                parts.append(node.content)
        return " ".join(parts)

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get attribute value by name."""
        return self.attributes.get(name, default)

    def has_attribute(self, name: str) -> bool:
        """Check if attribute exists, including boolean attributes."""
        return name in self.attributes

    def find(self, tag_name: str) -> Optional["ElementNode"]:
        """Find the first descendant element with a matching tag name."""
        for node in iter_nodes(self.children):
            if isinstance(node, ElementNode) and node.tag_name == tag_name:
                return node
        return None

    def find_all(self, tag_name: str) -> List["ElementNode"]:
        """Find all descendant elements with a matching tag name, in document order."""
        return [
            node for node in iter_nodes(self.children)
            if isinstance(node, ElementNode) and node.tag_name == tag_name
        ]


Node = Union[TextNode, CommentNode, ElementNode]
Document = List[Node]


def iter_nodes(nodes: "Union[Node, Tuple[Node, ...], List[Node]]") -> Iterator[Node]:
    """Yield nodes depth-first in document order, parents before children."""
    if isinstance(nodes, (TextNode, CommentNode, ElementNode)):
        nodes = [nodes]
    stack = list(reversed(nodes))
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, ElementNode):
            stack.extend(reversed(node.children))


def count_nodes(nodes: "Union[Node, Tuple[Node, ...], List[Node]]") -> Dict[NodeType, int]:
    """Count nodes of each type in a document or subtree."""
    counts = {node_type: 0 for node_type in NodeType}
    for node in iter_nodes(nodes):
        counts[node.node_type] += 1
    return counts


def max_depth(nodes: "Union[Node, Tuple[Node, ...], List[Node]]") -> int:
    """Deepest element nesting level; top-level elements are at depth 1."""
    if isinstance(nodes, (TextNode, CommentNode, ElementNode)):
        nodes = [nodes]
    deepest = 0
    stack = [(node, 1) for node in nodes if isinstance(node, ElementNode)]
    while stack:
        node, depth = stack.pop()
        deepest = max(deepest, depth)
        stack.extend(
            (child, depth + 1) for child in node.children
            if isinstance(child, ElementNode)
        )
    return deepest
