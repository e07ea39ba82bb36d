"""Recursive descent scanner turning markup text into a node tree.

The scanner makes a single left-to-right pass over its input. Each helper
receives the text and an integer cursor and returns the node it produced (or
``None``) together with the new cursor, so no scan position is shared between
calls. Element content is scanned by a recursive call on the inner span.

Malformed markup never raises. Every best-effort decision is described by a
``Recovery`` appended to an optional list owned by the top-level call.

Known limitation: the closing tag of an element is the first ``</name>`` that
follows its opening tag, regardless of nesting. ``<a><a></a></a>`` therefore
pairs the outer ``<a>`` with the inner ``</a>``.
"""

import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional, Pattern, Tuple

from markup_tree.parsing.attributes import scan_attributes
from markup_tree.shared.config import ScanConfig
from markup_tree.shared.result import Recovery, RecoveryKind
from markup_tree.tree.nodes import TAG_NAME_PATTERN, CommentNode, ElementNode, Node, TextNode

COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"

logger = logging.getLogger(__name__)

_DEFAULT_SCAN_CONFIG = ScanConfig()


@dataclass
class ScanResult:
    """Nodes produced by one scan plus the recoveries applied on the way."""

    nodes: List[Node] = field(default_factory=list)
    recoveries: List[Recovery] = field(default_factory=list)

    @property
    def has_recoveries(self) -> bool:
        return len(self.recoveries) > 0


def parse(document: str, config: Optional[ScanConfig] = None) -> List[Node]:
    """Parse a markup document into its top-level nodes.

    Never raises for string input: malformed constructs are dropped, skipped
    or closed implicitly as described in ``RecoveryKind``.

    Args:
        document: Complete markup text
        config: Element sets and depth limit (defaults to ``ScanConfig()``)

    Returns:
        Top-level nodes in document order

    Examples:
        >>> parse('<!-- note --><p>hi</p>')
        [CommentNode(content='note'), ElementNode(tag_name='p', attributes=mappingproxy({}), children=(TextNode(content='hi'),))]
    """
    return _scan_nodes(document, 0, 0, config or _DEFAULT_SCAN_CONFIG, None)


def scan_document(document: str, config: Optional[ScanConfig] = None) -> ScanResult:
    """Parse a markup document and collect the recoveries applied.

    Args:
        document: Complete markup text
        config: Scanner configuration; recoveries are only collected when
            ``collect_diagnostics`` is enabled

    Returns:
        ScanResult with the top-level nodes and recovery events
    """
    config = config or _DEFAULT_SCAN_CONFIG
    recoveries: Optional[List[Recovery]] = [] if config.collect_diagnostics else None
    nodes = _scan_nodes(document, 0, 0, config, recoveries)
    return ScanResult(nodes=nodes, recoveries=recoveries or [])


def _scan_nodes(
    text: str,
    base: int,
    depth: int,
    config: ScanConfig,
    recoveries: Optional[List[Recovery]],
) -> List[Node]:
    """Scan ``text`` into sibling nodes.

    ``base`` is the offset of ``text`` within the top-level document and
    ``depth`` the number of elements enclosing it.
    """
    nodes: List[Node] = []
    length = len(text)
    pos = 0

    while pos < length:
        bracket = text.find("<", pos)
        if bracket == -1:
            _append_text(nodes, text[pos:])
            break

        _append_text(nodes, text[pos:bracket])
        pos = bracket

        if pos + 1 >= length:
            _record(recoveries, RecoveryKind.TRAILING_BRACKET,
                    "Document ends with '<'", base + pos)
            break

        node: Optional[Node]
        if text.startswith(COMMENT_OPEN, pos):
            node, pos = _scan_comment(text, pos, base, recoveries)
        elif text[pos + 1] != "/":
            node, pos = _scan_element(text, pos, base, depth, config, recoveries)
        else:
            _record(recoveries, RecoveryKind.STRAY_CLOSING_TAG,
                    "Closing tag without a matching opening tag", base + pos)
            node, pos = None, pos + 1

        if node is not None:
            nodes.append(node)

    return nodes


def _scan_comment(
    text: str,
    pos: int,
    base: int,
    recoveries: Optional[List[Recovery]],
) -> Tuple[Optional[CommentNode], int]:
    content_start = pos + len(COMMENT_OPEN)
    end = text.find(COMMENT_CLOSE, content_start)
    if end == -1:
        _record(recoveries, RecoveryKind.UNTERMINATED_COMMENT,
                "Comment is never closed; dropped", base + pos)
        return None, pos + 1
    return CommentNode(text[content_start:end].strip()), end + len(COMMENT_CLOSE)


def _scan_element(
    text: str,
    pos: int,
    base: int,
    depth: int,
    config: ScanConfig,
    recoveries: Optional[List[Recovery]],
) -> Tuple[Optional[ElementNode], int]:
    tag_end = text.find(">", pos)
    if tag_end == -1:
        _record(recoveries, RecoveryKind.UNTERMINATED_TAG,
                "Opening tag is never closed; rest of input dropped", base + pos)
        return None, len(text)

    interior = text[pos + 1:tag_end].strip()
    name_match = TAG_NAME_PATTERN.match(interior)
    if name_match is None:
        _record(recoveries, RecoveryKind.NAMELESS_TAG,
                "'<' is not followed by a tag name; skipped", base + pos)
        return None, pos + 1

    tag_name = name_match.group(0).lower()
    attributes, duplicates = scan_attributes(interior[name_match.end():])
    for name in duplicates:
        _record(recoveries, RecoveryKind.DUPLICATE_ATTRIBUTE,
                f"Attribute '{name}' repeated; last value kept", base + pos, tag_name)

    pos = tag_end + 1
    if interior.endswith("/") or tag_name in config.void_elements:
        return ElementNode(tag_name, attributes), pos

    closing = _closing_tag_pattern(tag_name).search(text, pos)
    if closing is None:
        _record(recoveries, RecoveryKind.MISSING_CLOSING_TAG,
                f"No closing tag for <{tag_name}>; treated as self-closing",
                base + pos, tag_name)
        return ElementNode(tag_name, attributes), pos

    inner = text[pos:closing.start()]
    if tag_name in config.raw_text_elements:
        children: List[Node] = _verbatim_children(inner)
    elif depth + 1 >= config.max_depth:
        _record(recoveries, RecoveryKind.DEPTH_LIMIT,
                f"Nesting deeper than {config.max_depth}; <{tag_name}> content kept as text",
                base + pos, tag_name)
        children = _verbatim_children(inner)
    else:
        children = _scan_nodes(inner, base + pos, depth + 1, config, recoveries)

    return ElementNode(tag_name, attributes, tuple(children)), closing.end()


@lru_cache(maxsize=256)
def _closing_tag_pattern(tag_name: str) -> Pattern[str]:
    return re.compile("</" + re.escape(tag_name) + ">", re.IGNORECASE)


def _verbatim_children(inner: str) -> List[Node]:
    return [TextNode(inner)] if inner.strip() else []


def _append_text(nodes: List[Node], raw: str) -> None:
    content = raw.strip()
    if content:
        nodes.append(TextNode(content))


def _record(
    recoveries: Optional[List[Recovery]],
    kind: RecoveryKind,
    message: str,
    offset: int,
    tag_name: Optional[str] = None,
) -> None:
    logger.debug("%s at offset %d: %s", kind.name, offset, message)
    if recoveries is not None:
        recoveries.append(Recovery(kind, message, offset, tag_name))
