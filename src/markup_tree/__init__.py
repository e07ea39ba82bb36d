"""markup-tree.

Converts a relaxed HTML dialect into a tree of typed nodes and back.

Progressive API Disclosure:
- Level 0: Pure core functions - parse(), serialize(), extract_attributes()
- Level 1: Simple functions with diagnostics - parse_string(), parse_file()
- Level 2: Configured parser - MarkupParser class with ParserConfig
"""

__version__ = "0.1.0"
__author__ = "Markup Tree Team"

# Level 0: pure scanner and serializer
from .parsing import extract_attributes, parse, scan_document
from .serialization import serialize

# Level 1 and 2: API layer
from .api import (
    MarkupParser,
    ParseResult,
    StrictModeError,
    from_json,
    parse_file,
    parse_string,
    to_json,
)

# Configuration classes for advanced usage
from .shared.config import ParserConfig

# Node types
from .tree import CommentNode, ElementNode, Node, NodeType, TextNode

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 0: core functions
    "parse",
    "serialize",
    "extract_attributes",
    "scan_document",

    # Level 1: simple parsing functions
    "parse_string",
    "parse_file",

    # Level 2: configured parser
    "MarkupParser",
    "ParserConfig",
    "StrictModeError",

    # Results, nodes and interchange
    "ParseResult",
    "Node",
    "NodeType",
    "TextNode",
    "CommentNode",
    "ElementNode",
    "to_json",
    "from_json",
]
