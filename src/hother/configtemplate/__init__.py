"""
Configtemplate - Annotated JSON configuration template loader

Reads configuration templates written in JSON with comments and trailing
commas, cuts out the @ParcerConfig metadata block and @SelectableRule blocks,
and returns ordered sections plus a flat list of selectable rule variants.
"""

import importlib.metadata

from .blocks.extraction import extract_all_named, extract_block, extract_optional_block, extract_required_block
from .blocks.parsers import ParserConfig, ParserConfigParser, SelectableRuleParser
from .blocks.registry import BlockRegistry
from .core.config import DEFAULT_SECTION_ORDER, TemplateConfig
from .core.exceptions import (
    DuplicateSectionError,
    EmptyBlockError,
    MissingBlockError,
    ParserConfigError,
    RuleBlockError,
    RuleBlockSyntaxError,
    TemplateError,
    TemplateSyntaxError,
    UnterminatedBlockError,
)
from .core.models import AnnotationBlock, RuleNumbering, RuleVariant, SelectableRuleGroup, TemplateData
from .loader import TemplateLoader, extract_parser_config, load_template_data, load_template_text
from .sections import extract_default_final, order_sections, parse_sections
from .utils.logging import configure_logging, get_logger

try:
    __version__ = importlib.metadata.version("hother-configtemplate")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.0.0+dev"

__all__ = [
    # Models
    "AnnotationBlock",
    "RuleVariant",
    "SelectableRuleGroup",
    "RuleNumbering",
    "TemplateData",
    "ParserConfig",
    # Configuration
    "TemplateConfig",
    "DEFAULT_SECTION_ORDER",
    # Core
    "TemplateLoader",
    "BlockRegistry",
    "ParserConfigParser",
    "SelectableRuleParser",
    # Exceptions
    "TemplateError",
    "MissingBlockError",
    "TemplateSyntaxError",
    "DuplicateSectionError",
    "UnterminatedBlockError",
    "RuleBlockError",
    "EmptyBlockError",
    "RuleBlockSyntaxError",
    "ParserConfigError",
    # Pipeline stages
    "extract_block",
    "extract_required_block",
    "extract_optional_block",
    "extract_all_named",
    "parse_sections",
    "order_sections",
    "extract_default_final",
    # Entry points
    "load_template_text",
    "load_template_data",
    "extract_parser_config",
    # Utilities
    "configure_logging",
    "get_logger",
]
