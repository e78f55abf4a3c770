"""
Annotation marker registry.
"""

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from hother.configtemplate.utils.logging import get_logger

from .parsers.base import BlockParser

if TYPE_CHECKING:
    from hother.configtemplate.core.config import TemplateConfig

logger = get_logger(__name__)


class BlockRegistry(BaseModel):
    """Registry for annotation markers and their parsers."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    parsers: dict[str, BlockParser] = Field(default_factory=dict, description="Registered block parsers by marker")

    def register(self, parser: BlockParser) -> None:
        """
        Register a block parser.

        Args:
            parser: The parser to register
        """
        if parser.marker in self.parsers:
            logger.warning(f"Overwriting existing parser for marker: @{parser.marker}")
        self.parsers[parser.marker] = parser
        logger.debug(f"Registered parser for marker: @{parser.marker}")

    def get_parser(self, marker: str) -> BlockParser | None:
        """
        Get parser for a marker.

        Args:
            marker: The marker to look up

        Returns:
            Parser if found, None otherwise
        """
        return self.parsers.get(marker)

    def list_markers(self) -> list[str]:
        """Get list of registered markers."""
        return sorted(self.parsers.keys())

    @classmethod
    def create_default(cls, config: "TemplateConfig | None" = None) -> "BlockRegistry":
        """Create registry with the metadata and selectable rule parsers."""
        from hother.configtemplate.core.config import TemplateConfig

        from .parsers import ParserConfigParser, SelectableRuleParser

        config = config or TemplateConfig()
        registry = cls()
        registry.register(ParserConfigParser(marker=config.metadata_marker, excerpt_length=config.excerpt_length))
        registry.register(SelectableRuleParser(marker=config.rule_marker, excerpt_length=config.excerpt_length))
        return registry
