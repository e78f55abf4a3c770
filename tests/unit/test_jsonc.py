"""
Tests for extended JSON reduction.
"""

import json

import pytest

from hother.configtemplate.core.exceptions import TemplateSyntaxError
from hother.configtemplate.jsonc import decode, reduce, strip_comments, strip_trailing_commas, sub_outside_literals, validate


class TestReduce:
    """Test reduction to strict JSON."""

    def test_strips_comments(self):
        """Test line and block comments are removed."""
        text = """{
  // transport settings
  "url": "http://example.com//path", /* inline */
  "a": 1
}"""
        assert json.loads(reduce(text)) == {"url": "http://example.com//path", "a": 1}

    def test_strips_trailing_commas(self):
        """Test trailing commas before closers are removed."""
        text = '{"a": [1, 2,], "b": {"c": 1,},}'
        assert json.loads(reduce(text)) == {"a": [1, 2], "b": {"c": 1}}

    def test_trailing_comma_before_comment(self):
        """Test a comment between comma and bracket does not hide the comma."""
        text = "[1, 2, // last\n]"
        assert json.loads(reduce(text)) == [1, 2]

    def test_string_contents_untouched(self):
        """Test comment and comma lookalikes inside strings survive."""
        text = '{"a": "x,]", "b": "/* not a comment */", "c": "\\"//"}'
        assert json.loads(reduce(text)) == {"a": "x,]", "b": "/* not a comment */", "c": '"//'}

    def test_returns_bytes(self):
        """Test the reducer produces bytes."""
        assert isinstance(reduce("{}"), bytes)

    def test_block_comment_keeps_lines(self):
        """Test multi-line block comments keep line breaks."""
        assert strip_comments("a/* x\ny */b").count("\n") == 1

    def test_strip_trailing_commas_only(self):
        """Test trailing comma removal leaves other commas."""
        assert strip_trailing_commas("[1, 2 ,\n ]") == "[1, 2 \n ]"


class TestValidate:
    """Test strict JSON validation."""

    def test_valid(self):
        """Test valid JSON passes."""
        validate(b'{"a": 1}')

    def test_invalid_reports_position(self):
        """Test invalid JSON raises with offset and excerpt."""
        with pytest.raises(TemplateSyntaxError) as exc_info:
            validate(b'{"a": }')

        assert exc_info.value.position == 6
        assert '{"a": }' in exc_info.value.excerpt

    def test_excerpt_is_bounded(self):
        """Test the excerpt never exceeds its bound plus ellipses."""
        data = ("[" + "1, " * 500 + "]").encode()
        with pytest.raises(TemplateSyntaxError) as exc_info:
            validate(data, excerpt_length=40)

        assert len(exc_info.value.excerpt) <= 46

    def test_decode_with_pairs_hook(self):
        """Test the pairs hook is forwarded."""
        assert decode(b'{"a": 1, "a": 2}', object_pairs_hook=list) == [("a", 1), ("a", 2)]


class TestSubOutsideLiterals:
    """Test literal-aware substitution."""

    def test_skips_strings(self):
        """Test strings are not rewritten."""
        assert sub_outside_literals(r",", ";", '"a,b", c') == '"a,b"; c'

    def test_skips_comments(self):
        """Test comments are not rewritten."""
        assert sub_outside_literals(r",", ";", "// a,b\n,") == "// a,b\n;"

    def test_named_group_template(self):
        """Test replacement templates see the pattern's named groups."""
        assert sub_outside_literals(r",(?P<close>\s*\])", r"\g<close>", "[1, ]") == "[1 ]"

    def test_callable_replacement(self):
        """Test a function replacement."""
        assert sub_outside_literals(r"\d", lambda m: str(int(m.group()) + 1), '[1, "1"]') == '[2, "1"]'
