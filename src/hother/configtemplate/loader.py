"""
Template loading pipeline.

Order matters: annotation blocks are cut out before comments are stripped,
since the reducer would otherwise discard them as ordinary comments.
"""

from pathlib import Path

import anyio

from hother.configtemplate import jsonc
from hother.configtemplate.blocks.extraction import extract_all_blocks, extract_optional_block, extract_required_block
from hother.configtemplate.blocks.parsers import ParserConfig, ParserConfigParser, SelectableRuleParser
from hother.configtemplate.blocks.registry import BlockRegistry
from hother.configtemplate.core.config import TemplateConfig
from hother.configtemplate.core.exceptions import ParserConfigError, TemplateError
from hother.configtemplate.core.models import AnnotationBlock, RuleNumbering, RuleVariant, TemplateData
from hother.configtemplate.sections import extract_default_final, order_sections, parse_sections
from hother.configtemplate.utils.logging import get_logger
from hother.configtemplate.utils.text import truncate

logger = get_logger(__name__)


class TemplateLoader:
    """Turns template text into TemplateData."""

    def __init__(self, config: TemplateConfig | None = None, registry: BlockRegistry | None = None, debug: bool = False):
        """
        Initialize template loader.

        Args:
            config: Loading settings, defaults when omitted
            registry: Marker parsers, built from config when omitted
            debug: Enable debug logging
        """
        self.config = config or TemplateConfig()
        self.registry = registry or BlockRegistry.create_default(self.config)
        self.debug = debug

    @property
    def rule_parser(self) -> SelectableRuleParser:
        parser = self.registry.get_parser(self.config.rule_marker)
        if not isinstance(parser, SelectableRuleParser):
            raise TypeError(f"No selectable rule parser registered for @{self.config.rule_marker}")
        return parser

    def load_text(self, text: str) -> TemplateData:
        """
        Run the whole pipeline over template text.

        Raises:
            TemplateError: On any malformed part; nothing partial is returned
        """
        try:
            data = self._load(text)
        except TemplateError as e:
            logger.warning(f"Template loading failed: {e}")
            raise

        logger.info(f"Loaded template with {len(data.sections)} sections and {len(data.selectable_rules)} selectable rules")
        return data

    def load_file(self, path: str | Path) -> TemplateData:
        """Read a template file and load it."""
        path = Path(path)
        if self.debug:
            logger.debug(f"Reading template from {path}")
        return self.load_text(path.read_text(encoding=self.config.encoding))

    async def aload_file(self, path: str | Path) -> TemplateData:
        """Read a template file without blocking the event loop, then load it."""
        text = await anyio.Path(path).read_text(encoding=self.config.encoding)
        return self.load_text(text)

    def parse_parser_config(self, content: str) -> ParserConfig | None:
        """
        Decode metadata block text into ParserConfig.

        Returns:
            None when content is empty (the template had no metadata block)
        """
        if not content:
            return None
        parser = self.registry.get_parser(self.config.metadata_marker)
        if not isinstance(parser, ParserConfigParser):
            raise TypeError(f"No parser configuration parser registered for @{self.config.metadata_marker}")
        return parser.parse_content(content)

    def _load(self, text: str) -> TemplateData:
        config = self.config
        parser_config, cleaned = extract_optional_block(text, config.metadata_marker)
        if self.debug:
            logger.debug(f"Metadata block: {len(parser_config)} chars, remaining document: {len(cleaned)} chars")

        rule_blocks, cleaned = extract_all_blocks(cleaned, config.rule_marker)
        if self.debug:
            logger.debug(f"Extracted {len(rule_blocks)} @{config.rule_marker} block(s), remaining document: {len(cleaned)} chars")
            for block in rule_blocks:
                logger.debug(f"{block}: {truncate(block.content, 100)}")

        json_bytes = jsonc.reduce(cleaned)
        sections = parse_sections(
            json_bytes,
            reject_duplicates=config.reject_duplicate_sections,
            excerpt_length=config.excerpt_length,
        )
        section_order = order_sections(sections, config.canonical_order)
        default_final = extract_default_final(sections)
        if self.debug:
            logger.debug(f"Section order: {section_order}, default final: {default_final!r}")

        selectable_rules = self._parse_rules(rule_blocks)

        return TemplateData(
            parser_config=parser_config,
            sections=sections,
            section_order=section_order,
            selectable_rules=selectable_rules,
            default_final=default_final,
        )

    def _parse_rules(self, blocks: list[AnnotationBlock]) -> list[RuleVariant]:
        parser = self.rule_parser
        numbering = RuleNumbering()
        variants: list[RuleVariant] = []
        for block in blocks:
            group_variants = parser.parse_group(block.content, block.index, numbering)
            if self.debug:
                logger.debug(f"{block} produced {len(group_variants)} variant(s)")
            variants.extend(group_variants)
        return variants


def load_template_text(text: str, config: TemplateConfig | None = None) -> TemplateData:
    """Load template data from text."""
    return TemplateLoader(config).load_text(text)


def load_template_data(exec_dir: str | Path, config: TemplateConfig | None = None) -> TemplateData:
    """
    Load the template shipped next to an executable.

    Args:
        exec_dir: Directory of the executable; the template sits at config.template_path below it
        config: Loading settings

    Returns:
        Parsed template; the metadata block is optional here
    """
    loader = TemplateLoader(config)
    return loader.load_file(Path(exec_dir) / loader.config.template_path)


def extract_parser_config(path: str | Path, config: TemplateConfig | None = None) -> ParserConfig:
    """
    Read the mandatory metadata block of a configuration file.

    Raises:
        MissingBlockError: If the file has no metadata block
        ParserConfigError: If the block does not decode into ParserConfig
    """
    loader = TemplateLoader(config)
    text = Path(path).read_text(encoding=loader.config.encoding)
    content, _ = extract_required_block(text, loader.config.metadata_marker)
    parsed = loader.parse_parser_config(content)
    if parsed is None:
        raise ParserConfigError("", message=f"@{loader.config.metadata_marker} block is empty")
    return parsed
