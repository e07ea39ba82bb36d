"""Command-line interface module for markup-tree.

This module provides the ``markup-tree`` command for converting markup files
to JSON node trees, rendering JSON back to markup, and round-trip checks.
"""

from .main import main

__all__ = ["main"]
