"""Annotation block parsers."""

from .base import BlockParser
from .parser_config import OutboundConfig, OutboundSelection, ParserConfig, ParserConfigBody, ParserConfigParser, ProxySource
from .selectable_rule import SelectableRuleParser, normalize_body, split_directives

__all__ = [
    "BlockParser",
    "ParserConfigParser",
    "SelectableRuleParser",
    "ParserConfig",
    "ParserConfigBody",
    "ProxySource",
    "OutboundConfig",
    "OutboundSelection",
    "normalize_body",
    "split_directives",
]
