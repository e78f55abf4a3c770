"""
Parser for selectable rule blocks.

A block holds optional ``@label`` / ``@description`` directive lines and
either one JSON object or an array of alternative objects::

    /** @SelectableRule
        @label Block ads
        @description Route ad domains
        [
          {"rule_set": "ads", "outbound": "block"},
          {"rule_set": "ads", "outbound": "direct"},
        ]
    */
"""

import re
from typing import Any

from hother.configtemplate.core.exceptions import EmptyBlockError, RuleBlockSyntaxError, TemplateSyntaxError
from hother.configtemplate.core.models import RuleNumbering, RuleVariant, SelectableRuleGroup
from hother.configtemplate.jsonc import decode, reduce
from hother.configtemplate.utils.logging import get_logger
from hother.configtemplate.utils.text import truncate

from .base import BlockParser

logger = get_logger(__name__)

_DIRECTIVE_RE = re.compile(r"@(?P<name>label|description)(?!\w)(?P<value>.*)\Z", re.DOTALL)


def split_directives(content: str) -> tuple[dict[str, str], str]:
    """
    Separate directive lines from the JSON body.

    Args:
        content: Raw block content

    Returns:
        (directive values by name, body with directive lines removed); a
        directive with an empty value is not recorded
    """
    directives: dict[str, str] = {}
    body_lines: list[str] = []

    for line in content.split("\n"):
        match = _DIRECTIVE_RE.match(line.strip())
        if match is None:
            body_lines.append(line)
            continue
        value = match.group("value").strip()
        if value:
            directives[match.group("name")] = value

    return directives, "\n".join(body_lines)


def normalize_body(body: str) -> str:
    """Trim the body and wrap a lone object into a one-element array."""
    trimmed = body.strip().rstrip(" \t\r\n,").strip()
    if not trimmed or trimmed.startswith("["):
        return trimmed
    return f"[{trimmed}]"


class SelectableRuleParser(BlockParser):
    """Parser for selectable rule blocks."""

    marker: str = "SelectableRule"
    description: str = "Mutually exclusive rule variants with @label/@description directives"

    def parse_content(self, content: str, block_index: int = 1) -> SelectableRuleGroup:
        """
        Read directives and records out of one block.

        Raises:
            EmptyBlockError: If no JSON remains once directives are removed
            RuleBlockSyntaxError: If the body is not a list of JSON objects
        """
        directives, body = split_directives(content)
        normalized = normalize_body(body)
        if not normalized:
            raise EmptyBlockError(block_index)

        logger.debug(f"Block {block_index} normalized body: {truncate(normalized, self.excerpt_length)}")

        try:
            items = decode(reduce(normalized), excerpt_length=self.excerpt_length)
        except TemplateSyntaxError as e:
            raise RuleBlockSyntaxError(block_index, truncate(normalized, self.excerpt_length)) from e

        if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
            raise RuleBlockSyntaxError(
                block_index,
                truncate(normalized, self.excerpt_length),
                message=f"Selectable rule block {block_index} must hold a JSON object or an array of objects",
            )

        return SelectableRuleGroup(
            index=block_index,
            label=directives.get("label"),
            description=directives.get("description"),
            records=items,
        )

    def build_variants(self, group: SelectableRuleGroup, numbering: RuleNumbering) -> list[RuleVariant]:
        """
        Turn a group's records into variants.

        The group @label wins over a record's own "label"; records with
        neither are called "Rule N", N being the variant's position across
        the whole document.
        """
        variants = []
        for record in group.records:
            position = numbering.advance()
            variants.append(
                RuleVariant(
                    label=self._resolve_label(group, record, position),
                    description=group.description or "",
                    raw=dict(record),
                    has_outbound="outbound" in record,
                    default_outbound=record["outbound"] if isinstance(record.get("outbound"), str) else None,
                )
            )
        return variants

    def parse_group(self, content: str, block_index: int, numbering: RuleNumbering) -> list[RuleVariant]:
        """Parse one block straight into variants."""
        return self.build_variants(self.parse_content(content, block_index), numbering)

    @staticmethod
    def _resolve_label(group: SelectableRuleGroup, record: dict[str, Any], position: int) -> str:
        if group.label:
            return group.label
        own_label = record.get("label")
        if isinstance(own_label, str) and own_label:
            return own_label
        return f"Rule {position}"
