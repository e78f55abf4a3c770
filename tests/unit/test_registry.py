"""
Tests for the block registry.
"""

import logging

from hother.configtemplate.blocks.parsers import ParserConfigParser, SelectableRuleParser
from hother.configtemplate.blocks.registry import BlockRegistry
from hother.configtemplate.core.config import TemplateConfig


class TestBlockRegistry:
    """Test BlockRegistry functionality."""

    def test_create_default(self):
        """Test default markers are registered."""
        registry = BlockRegistry.create_default()

        assert registry.list_markers() == ["ParcerConfig", "SelectableRule"]
        assert isinstance(registry.get_parser("ParcerConfig"), ParserConfigParser)
        assert isinstance(registry.get_parser("SelectableRule"), SelectableRuleParser)

    def test_create_from_config(self):
        """Test markers and excerpt bound come from the configuration."""
        config = TemplateConfig(metadata_marker="Meta", rule_marker="Choice", excerpt_length=50)
        registry = BlockRegistry.create_default(config)

        assert registry.list_markers() == ["Choice", "Meta"]
        assert registry.get_parser("Choice").excerpt_length == 50

    def test_unknown_marker(self):
        """Test lookup of an unregistered marker."""
        assert BlockRegistry().get_parser("Nothing") is None

    def test_overwrite_warns(self, caplog):
        """Test re-registering a marker logs a warning."""
        registry = BlockRegistry.create_default()
        with caplog.at_level(logging.WARNING, logger="hother.configtemplate"):
            registry.register(SelectableRuleParser(description="replacement"))

        assert "Overwriting existing parser" in caplog.text
        assert registry.get_parser("SelectableRule").description == "replacement"
