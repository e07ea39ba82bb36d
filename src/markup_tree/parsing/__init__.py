"""Markup scanning for markup-tree.

This module provides the recursive descent scanner that turns markup text
into a list of nodes, and the attribute extractor it uses for opening tags.

Key Components:
    parse: Pure text-to-nodes function that never raises
    scan_document: Same scan, also returning the recoveries applied
    extract_attributes: Opening-tag attribute list to ordered mapping
"""

from .attributes import extract_attributes, scan_attributes
from .scanner import ScanResult, parse, scan_document

__all__ = [
    "ScanResult",
    "extract_attributes",
    "parse",
    "scan_attributes",
    "scan_document",
]
