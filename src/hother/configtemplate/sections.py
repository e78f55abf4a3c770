"""
Top-level sections of a template.

Sections are kept in a plain dict, whose iteration order is insertion
(source) order.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from hother.configtemplate.core.config import DEFAULT_SECTION_ORDER
from hother.configtemplate.core.exceptions import DuplicateSectionError, TemplateSyntaxError
from hother.configtemplate.jsonc import decode
from hother.configtemplate.utils.logging import get_logger
from hother.configtemplate.utils.text import truncate

logger = get_logger(__name__)


def parse_sections(data: bytes, reject_duplicates: bool = True, excerpt_length: int = 200) -> dict[str, Any]:
    """
    Decode strict JSON bytes into sections.

    Args:
        data: Strict JSON holding one top-level object
        reject_duplicates: Raise on a repeated section name instead of keeping the last
        excerpt_length: Maximum excerpt size in errors

    Returns:
        Section values by name, in source order

    Raises:
        TemplateSyntaxError: If data is not a JSON object
        DuplicateSectionError: If a section name repeats and reject_duplicates is set
    """
    # The outermost object is decoded last, so this ends up holding its pairs
    outermost: list[tuple[str, Any]] = []

    def _pairs_hook(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
        nonlocal outermost
        outermost = pairs
        return dict(pairs)

    decoded = decode(data, excerpt_length=excerpt_length, object_pairs_hook=_pairs_hook)
    if not isinstance(decoded, dict):
        raise TemplateSyntaxError(
            truncate(data.decode("utf-8").strip(), excerpt_length),
            message=f"Template must be a JSON object, got {type(decoded).__name__}",
        )

    seen: set[str] = set()
    for name, _ in outermost:
        if name in seen:
            if reject_duplicates:
                raise DuplicateSectionError(name)
            logger.warning(f"Section '{name}' repeats; keeping the last occurrence")
        seen.add(name)

    return decoded


def order_sections(sections: Mapping[str, Any], canonical_order: Iterable[str] = DEFAULT_SECTION_ORDER) -> list[str]:
    """
    Compute the serialization order of sections.

    Canonical sections come first in canonical order, then the rest in source order.
    """
    ordered = [name for name in dict.fromkeys(canonical_order) if name in sections]
    placed = set(ordered)
    ordered.extend(name for name in sections if name not in placed)
    return ordered


def extract_default_final(sections: Mapping[str, Any]) -> str:
    """Return route.final when it is a string, otherwise an empty string."""
    route = sections.get("route")
    if not isinstance(route, dict):
        return ""
    final = route.get("final")
    return final if isinstance(final, str) else ""
