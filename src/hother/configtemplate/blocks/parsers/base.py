"""
Base interfaces for annotation block parsers.
"""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from hother.configtemplate.utils.logging import get_logger

logger = get_logger(__name__)


class BlockParser(BaseModel, ABC):
    """Base class for all annotation block parsers."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    marker: str = Field(..., description="Marker name this parser handles, without '@'")
    description: str = Field(default="", description="Human-readable description")
    excerpt_length: int = Field(default=200, ge=20, description="Maximum excerpt size in errors")

    @abstractmethod
    def parse_content(self, content: str, block_index: int = 1) -> Any:
        """
        Parse the block content.

        Args:
            content: Trimmed text between the marker and the closing delimiter
            block_index: 1-based position of the block among blocks with this marker

        Returns:
            Parsed content in appropriate format
        """
