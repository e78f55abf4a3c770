"""Tests for the parser configuration block parser."""

import pytest

from hother.configtemplate.blocks.parsers import ParserConfigParser
from hother.configtemplate.core.exceptions import ParserConfigError

CONTENT = """{
  "version": 2,
  "ParserConfig": {
    // subscriptions
    "proxies": [
      {"source": "https://example.com/sub?token=abc", "skip": [{"tag": "expired"}]},
    ],
    "outbounds": [
      {
        "tag": "proxy-out",
        "type": "selector",
        "options": {"interrupt_exist_connections": true},
        "outbounds": {"proxies": {"tag": "!/ru/i"}, "addOutbounds": ["direct-out"], "preferredDefault": {"tag": "nl"}},
        "comment": "main selector",
        "priority": 1
      }
    ]
  }
}"""


class TestParserConfigParser:
    """Test ParserConfigParser."""

    def test_parse_content(self):
        """Test decoding a full document."""
        parsed = ParserConfigParser().parse_content(CONTENT)

        assert parsed.version == 2
        assert parsed.parser_config.proxies[0].source == "https://example.com/sub?token=abc"
        assert parsed.parser_config.proxies[0].skip == [{"tag": "expired"}]
        outbound = parsed.parser_config.outbounds[0]
        assert outbound.tag == "proxy-out"
        assert outbound.outbounds.add_outbounds == ["direct-out"]
        assert outbound.outbounds.preferred_default == {"tag": "nl"}
        assert outbound.comment == "main selector"

    def test_unknown_keys_preserved(self):
        """Test keys outside the model are kept."""
        parsed = ParserConfigParser().parse_content(CONTENT)
        assert parsed.parser_config.outbounds[0].model_extra == {"priority": 1}

    def test_minimal_document(self):
        """Test an empty object gets defaults."""
        parsed = ParserConfigParser().parse_content("{}")
        assert parsed.version == 0
        assert parsed.parser_config.proxies == []

    def test_invalid_json(self):
        """Test malformed JSON raises ParserConfigError."""
        with pytest.raises(ParserConfigError):
            ParserConfigParser().parse_content('{"version": }')

    def test_schema_mismatch(self):
        """Test a source entry without 'source' raises ParserConfigError."""
        with pytest.raises(ParserConfigError) as exc_info:
            ParserConfigParser().parse_content('{"ParserConfig": {"proxies": [{"skip": []}]}}')

        assert "proxies" in exc_info.value.excerpt
