"""Annotation block extraction and parsing."""

from .extraction import (
    extract_all_blocks,
    extract_all_named,
    extract_block,
    extract_optional_block,
    extract_required_block,
    find_blocks,
)
from .parsers.base import BlockParser
from .registry import BlockRegistry

__all__ = [
    # Extraction
    "find_blocks",
    "extract_block",
    "extract_required_block",
    "extract_optional_block",
    "extract_all_blocks",
    "extract_all_named",
    # Registry
    "BlockRegistry",
    # Parser base
    "BlockParser",
]
