"""API layer for markup-tree: parse results, JSON interchange and adapters."""

from .interchange import (
    NodeFormatError,
    from_json,
    node_from_dict,
    node_to_dict,
    nodes_from_dicts,
    nodes_to_dicts,
    to_json,
)
from .parser import (
    MarkupParser,
    StrictModeError,
    normalize_whitespace,
    parse_file,
    parse_string,
    structurally_equal,
)
from .result import ParseResult, RoundTripResult

__all__ = [
    "MarkupParser",
    "NodeFormatError",
    "ParseResult",
    "RoundTripResult",
    "StrictModeError",
    "from_json",
    "node_from_dict",
    "node_to_dict",
    "nodes_from_dicts",
    "nodes_to_dicts",
    "normalize_whitespace",
    "parse_file",
    "parse_string",
    "structurally_equal",
    "to_json",
]
