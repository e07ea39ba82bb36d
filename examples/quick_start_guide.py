#!/usr/bin/env python3
"""
Quick Start Guide

Parses a small page, prints its JSON node tree, renders it back to markup
and checks the round trip. The last example shows how same-name nesting
pairs with the first closing tag.
"""

import sys
from pathlib import Path

# Add src to path for running examples directly
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from markup_tree import MarkupParser, ParserConfig, parse, serialize, to_json
from markup_tree.api.parser import StrictModeError, structurally_equal

SAMPLE_PAGE = (
    "<!-- This is a top-level comment about the structure -->"
    '<div id="main-container" class="layout-flex" disabled>'
    '<h1 class="title">My Sample Document</h1>'
    "<p>This is a paragraph with<strong>nested text</strong>and a line break."
    "<br>And here is the second line of text.</p>"
    "<!-- This is a script block for demonstration -->"
    '<script type="text/javascript">if (count < 3) { console.log("<ok>"); }</script>'
    '<input type="text" placeholder="Enter name" required>'
    "<!-- Empty section placeholder -->"
    '<section class="footer"></section>'
    "</div>"
)


def example_parse_and_render():
    """Example 1: The two core functions."""
    print("=== Example 1: Parse and Render ===")

    nodes = parse(SAMPLE_PAGE)
    print(to_json(nodes))
    print()

    rendered = serialize(nodes)
    print(rendered)
    print(f"Round trip matches: {structurally_equal(SAMPLE_PAGE, rendered)}")
    print()


def example_configured_parser():
    """Example 2: Diagnostics from the configured parser."""
    print("=== Example 2: Configured Parser ===")

    parser = MarkupParser(ParserConfig.default(), correlation_id="quick-start")
    result = parser.parse("<ul><li>one<li>two</li></ul></ol>")

    for key, value in result.summary().items():
        print(f"{key}: {value}")
    for diagnostic in result.diagnostics:
        print(f"  {diagnostic.severity.name} @ {diagnostic.position}: {diagnostic.message}")
    print()

    try:
        MarkupParser(ParserConfig.strict()).parse("<p>unclosed")
    except StrictModeError as e:
        print(f"Strict mode: {e}")
    print()


def example_same_name_nesting():
    """Example 3: Closing tags pair with the first match."""
    print("=== Example 3: Same-Name Nesting ===")

    report = MarkupParser().roundtrip("<div><div>inner</div></div>")
    print(f"Rendered: {report.rendered}")
    print(f"Round trip matches: {report.matches}")
    print()


if __name__ == "__main__":
    example_parse_and_render()
    example_configured_parser()
    example_same_name_nesting()
