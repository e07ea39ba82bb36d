"""Tests for the parser API with progressive disclosure.

Tests the module-level parse functions and the MarkupParser class, ensuring
the never-fail behavior in the default configuration and opt-in strict mode.
"""

import io

import pytest

from markup_tree.api.parser import (
    MarkupParser,
    StrictModeError,
    normalize_whitespace,
    parse_file,
    parse_string,
    structurally_equal,
)
from markup_tree.api.result import ParseResult, RoundTripResult
from markup_tree.shared import DiagnosticSeverity, ParserConfig, RecoveryKind
from markup_tree.tree import ElementNode, TextNode


class TestSimpleParsingFunctions:
    """Test Level 1: Simple module-level parsing functions."""

    def test_parse_string_basic(self):
        """Test basic string parsing functionality."""
        result = parse_string('<div id="main"><p>one</p><p>two</p></div>')

        assert isinstance(result, ParseResult)
        assert result.success is True
        assert result.nodes[0].tag_name == "div"
        assert len(result.nodes[0].find_all("p")) == 2
        assert result.nodes[0].get_attribute("id") == "main"
        assert result.recovery_count == 0
        assert result.diagnostics == []

    def test_parse_string_malformed(self):
        """Test string parsing with malformed markup."""
        result = parse_string("<p>unclosed")

        assert result.success is True  # Never-fail philosophy
        assert result.has_recoveries
        assert result.recovery_count == 1

        diagnostic = result.diagnostics[0]
        assert diagnostic.severity is DiagnosticSeverity.WARNING
        assert diagnostic.component == "scanner"
        assert diagnostic.position == {"offset": 3}
        assert diagnostic.details == {"kind": "MISSING_CLOSING_TAG", "tag_name": "p"}

    def test_parse_string_empty(self):
        """Test string parsing with empty input."""
        result = parse_string("")

        assert result.success is True
        assert result.nodes == []
        assert result.node_count == 0

    def test_parse_string_ignores_strict_mode(self):
        """Test that the module function never raises."""
        result = parse_string("<p>unclosed", config=ParserConfig.strict())

        assert result.success is True
        assert result.has_recoveries

    def test_diagnostics_can_be_disabled(self):
        """Test that recoveries are kept even without diagnostic entries."""
        config = ParserConfig().override(api__include_diagnostic_info=False)

        result = parse_string("<p>unclosed", config=config)

        assert result.diagnostics == []
        assert result.recoveries[0].kind is RecoveryKind.MISSING_CLOSING_TAG

    def test_correlation_id_propagates(self):
        """Test that the correlation ID reaches the result and diagnostics."""
        result = parse_string("<p>unclosed", correlation_id="req-1")

        assert result.correlation_id == "req-1"
        assert result.diagnostics[0].correlation_id == "req-1"

    def test_performance_metrics(self):
        """Test that performance figures are filled in."""
        markup = "<ul><li>a</li><li>b</li></ul>"

        result = parse_string(markup)

        assert result.performance.characters_processed == len(markup)
        assert result.performance.nodes_created == 5
        assert result.processing_time_ms >= 0


class TestParseFile:
    """Test file parsing."""

    def test_parse_file_basic(self, tmp_path):
        """Test parsing from a file."""
        path = tmp_path / "page.html"
        path.write_text("<p>é</p>", encoding="utf-8")

        result = parse_file(path)

        assert result.success is True
        assert result.nodes == [ElementNode("p", {}, (TextNode("é"),))]
        assert result.source == str(path)

    def test_parse_file_accepts_string_path(self, tmp_path):
        """Test parsing with a string path."""
        path = tmp_path / "page.html"
        path.write_text("<br>", encoding="utf-8")

        assert parse_file(str(path)).nodes == [ElementNode("br")]

    def test_parse_file_not_found(self, tmp_path):
        """Test missing file handling."""
        result = parse_file(tmp_path / "missing.html")

        assert result.success is False
        assert result.has_errors()
        critical = result.get_diagnostics_by_severity(DiagnosticSeverity.CRITICAL)
        assert "File not found" in critical[0].message
        assert critical[0].component == "api_parser"

    def test_parse_file_directory(self, tmp_path):
        """Test that a directory is not parsed."""
        result = parse_file(tmp_path)

        assert result.success is False
        assert "not a file" in result.diagnostics[0].message

    def test_parse_file_undecodable(self, tmp_path):
        """Test content that does not match the encoding."""
        path = tmp_path / "binary.html"
        path.write_bytes(b"\xff\xfe<p>x</p>")

        result = parse_file(path)

        assert result.success is False
        assert "Cannot decode" in result.diagnostics[0].message

    def test_parse_file_other_encoding(self, tmp_path):
        """Test an explicit encoding."""
        path = tmp_path / "latin.html"
        path.write_bytes("<p>café</p>".encode("latin-1"))

        result = parse_file(path, encoding="latin-1")

        assert result.nodes[0].text == "café"


class TestMarkupParser:
    """Test Level 2: the configured parser class."""

    def test_parse_string_input(self):
        """Test parsing a string."""
        result = MarkupParser().parse("<p>hi</p>")

        assert result.nodes == [ElementNode("p", {}, (TextNode("hi"),))]

    def test_parse_bytes_input(self):
        """Test parsing UTF-8 bytes."""
        result = MarkupParser().parse("<p>naïve</p>".encode("utf-8"))

        assert result.nodes[0].text == "naïve"

    def test_parse_invalid_bytes_are_replaced(self):
        """Test that undecodable bytes do not fail the parse."""
        result = MarkupParser().parse(b"<p>\xff</p>")

        assert result.success is True
        assert result.nodes[0].text == "�"

    def test_parse_file_like_input(self):
        """Test parsing from a file-like object."""
        result = MarkupParser().parse(io.StringIO("<em>x</em>"))

        assert result.nodes[0].tag_name == "em"

    def test_parse_path_input(self, tmp_path):
        """Test parsing a Path."""
        path = tmp_path / "doc.html"
        path.write_text("<hr>", encoding="utf-8")

        result = MarkupParser().parse(path)

        assert result.nodes == [ElementNode("hr")]
        assert result.source == str(path)

    def test_parse_unknown_type(self):
        """Test that other objects are converted with str()."""
        result = MarkupParser().parse(12345)

        assert result.nodes == [TextNode("12345")]

    def test_strict_mode_raises(self):
        """Test that strict mode rejects malformed markup."""
        parser = MarkupParser(ParserConfig.strict())

        with pytest.raises(StrictModeError) as exc_info:
            parser.parse("<p>unclosed")

        assert exc_info.value.recovery.kind is RecoveryKind.MISSING_CLOSING_TAG
        assert "MISSING_CLOSING_TAG at offset 3" in str(exc_info.value)

    def test_strict_mode_reports_all_recoveries(self):
        """Test that the error lists every recovery."""
        parser = MarkupParser(ParserConfig.strict())

        with pytest.raises(StrictModeError) as exc_info:
            parser.parse("<a><a></a></a>")

        assert len(exc_info.value.recoveries) == 2

    def test_strict_mode_accepts_well_formed(self):
        """Test that strict mode parses clean markup."""
        result = MarkupParser(ParserConfig.strict()).parse("<p>ok</p>")

        assert result.success is True

    def test_strict_mode_without_diagnostics_collection(self):
        """Test that strict mode still detects recoveries."""
        config = ParserConfig.strict().override(scan__collect_diagnostics=False)

        with pytest.raises(StrictModeError):
            MarkupParser(config).parse("</p>")

    def test_serialize_uses_configured_void_elements(self):
        """Test serialization with the parser configuration."""
        void_elements = frozenset({"x-icon"})
        config = ParserConfig().override(
            scan__void_elements=void_elements, serialize__void_elements=void_elements
        )

        rendered = MarkupParser(config).serialize([ElementNode("x-icon"), ElementNode("br")])

        assert rendered == "<x-icon><br></br>"

    def test_roundtrip_match(self):
        """Test round trip of well-formed markup."""
        markup = '<div class="a"><p>x<br>y</p><!-- c --></div>'

        report = MarkupParser().roundtrip(markup)

        assert isinstance(report, RoundTripResult)
        assert report.matches is True
        assert report.rendered == markup

    def test_roundtrip_mismatch(self):
        """Test that same-name nesting does not round-trip."""
        report = MarkupParser().roundtrip("<a><a></a></a>")

        assert report.matches is False
        assert report.rendered == "<a><a></a></a>/a>"
        assert report.parse_result.recovery_count == 2

    def test_statistics(self):
        """Test usage statistics."""
        parser = MarkupParser(correlation_id="stats")
        parser.parse("<p>a</p>")
        parser.parse("<p>b")

        stats = parser.statistics
        assert stats["total_parses"] == 2
        assert stats["total_recoveries"] == 1
        assert stats["correlation_id"] == "stats"
        assert stats["average_processing_time_ms"] >= 0

        parser.reset_statistics()
        assert parser.statistics["total_parses"] == 0
        assert parser.statistics["average_processing_time_ms"] == 0.0

    def test_correlation_tracking_disabled(self):
        """Test that correlation IDs are dropped when tracking is off."""
        config = ParserConfig().override(global___enable_correlation_tracking=False)

        parser = MarkupParser(config, correlation_id="ignored")

        assert parser.correlation_id is None

    def test_reconfigure(self):
        """Test replacing the configuration."""
        parser = MarkupParser()
        parser.reconfigure(ParserConfig.strict())

        with pytest.raises(StrictModeError):
            parser.parse("<p>")


class TestParseResult:
    """Test result helpers."""

    def test_summary(self):
        """Test the summary dictionary."""
        result = parse_string("<!-- c --><div><p>a<b>b</b></p></div><p>")
        result.source = "inline"

        summary = result.summary()

        assert summary["success"] is True
        assert summary["source"] == "inline"
        assert summary["top_level_nodes"] == 3
        assert summary["elements"] == 4
        assert summary["text_nodes"] == 2
        assert summary["comments"] == 1
        assert summary["max_depth"] == 3
        assert summary["recoveries"] == 1

    def test_to_html(self):
        """Test serializing a result."""
        assert parse_string("<p>a<br>b</p>").to_html() == "<p>a<br>b</p>"

    def test_to_dict(self):
        """Test dictionary conversion."""
        data = parse_string("<p>hi</p>").to_dict()

        assert data["success"] is True
        assert data["nodes"] == [{
            "type": "element",
            "tagName": "p",
            "attributes": {},
            "children": [{"type": "text", "content": "hi"}],
        }]
        assert data["diagnostics"] == []
        assert "summary" in data

    def test_to_dict_without_diagnostics(self):
        """Test compact dictionary conversion."""
        data = parse_string("<p>").to_dict(include_diagnostics=False)

        assert set(data) == {"success", "nodes"}


class TestWhitespaceComparison:
    """Test the round-trip comparison helpers."""

    def test_normalize_whitespace(self):
        """Test whitespace collapsing."""
        assert normalize_whitespace("  a \n\t b  ") == "a b"

    def test_structurally_equal(self):
        """Test comparison after normalization."""
        assert structurally_equal("<p>a  b</p>\n", "<p>a b</p>")
        assert not structurally_equal("<p> a</p>", "<p>a</p>")
