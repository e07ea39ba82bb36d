"""Tests for attribute extraction."""

from markup_tree.parsing import extract_attributes, scan_attributes


class TestExtractAttributes:
    """Test the attribute mapping built from a tag interior."""

    def test_double_and_single_quotes(self):
        """Test both quoting styles."""
        attributes = extract_attributes("""id="main" title='Hi there'""")

        assert attributes == {"id": "main", "title": "Hi there"}

    def test_boolean_attribute(self):
        """Test valueless attributes map to the empty string."""
        assert extract_attributes("disabled") == {"disabled": ""}

    def test_whitespace_around_equals(self):
        """Test that spaces around '=' are allowed."""
        assert extract_attributes('a = "1"') == {"a": "1"}

    def test_empty_interior(self):
        """Test that no attributes produce an empty mapping."""
        assert extract_attributes("") == {}
        assert extract_attributes("   ") == {}

    def test_empty_quoted_value(self):
        """Test that an explicitly empty value is kept as empty string."""
        assert extract_attributes('alt=""') == {"alt": ""}

    def test_value_with_slashes_and_spaces(self):
        """Test that quoted values are taken verbatim."""
        assert extract_attributes('href="/a/b c" class="x"') == {
            "href": "/a/b c",
            "class": "x",
        }

    def test_trailing_self_closing_slash_ignored(self):
        """Test that the self-closing slash is not an attribute."""
        assert extract_attributes('class="a" /') == {"class": "a"}

    def test_names_with_hyphen_and_underscore(self):
        """Test data attributes and underscores in names."""
        assert extract_attributes('data-id="7" x_y') == {"data-id": "7", "x_y": ""}

    def test_unquoted_value_is_not_a_value(self):
        """Test that unquoted values are read as separate boolean attributes."""
        assert extract_attributes("type=text") == {"type": "", "text": ""}

    def test_last_duplicate_wins(self):
        """Test that the last value of a repeated name wins."""
        assert extract_attributes('id="a" id="b"') == {"id": "b"}

    def test_duplicate_keeps_first_position(self):
        """Test insertion order after a repeated name."""
        attributes = extract_attributes('id="a" class="c" id="b"')

        assert list(attributes.items()) == [("id", "b"), ("class", "c")]


class TestScanAttributes:
    """Test duplicate reporting."""

    def test_reports_duplicates(self):
        """Test that overwritten names are listed in order."""
        attributes, duplicates = scan_attributes('a="1" b="2" a="3" b="4" a="5"')

        assert attributes == {"a": "5", "b": "4"}
        assert duplicates == ["a", "b", "a"]

    def test_no_duplicates(self):
        """Test that unique names report nothing."""
        _, duplicates = scan_attributes('a="1" b')

        assert duplicates == []
