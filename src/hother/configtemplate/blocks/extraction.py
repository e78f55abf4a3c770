"""
Extraction of annotation blocks from template text.

An annotation block is a comment of the form ``/** @Marker ... */``. Openers
inside string literals or other comments are ignored, and a ``*/`` inside a
double-quoted string in the block body does not close the block.
"""

import re
from functools import lru_cache

from hother.configtemplate.core.exceptions import MissingBlockError, UnterminatedBlockError
from hother.configtemplate.core.models import AnnotationBlock
from hother.configtemplate.jsonc import BLOCK_COMMENT, LINE_COMMENT, STRING_LITERAL, sub_outside_literals
from hother.configtemplate.utils.logging import get_logger
from hother.configtemplate.utils.text import excerpt_around

logger = get_logger(__name__)

# Inside a block body a stray quote (e.g. in a directive) only runs to end of line
_BODY_TOKEN_RE = re.compile(r'"(?:[^"\\\n]|\\.)*"?|\*/')


@lru_cache(maxsize=16)
def _scanner(marker: str, ignore_case: bool) -> re.Pattern[str]:
    flags = re.DOTALL | (re.IGNORECASE if ignore_case else 0)
    opener = rf"/\*\*\s*@{re.escape(marker)}(?!\w)"
    return re.compile(rf"(?P<opener>{opener})|{STRING_LITERAL}|{LINE_COMMENT}|{BLOCK_COMMENT}", flags)


def _find_block_end(text: str, pos: int) -> int:
    while True:
        token = _BODY_TOKEN_RE.search(text, pos)
        if token is None:
            return -1
        if token.group() == "*/":
            return token.start()
        pos = token.end()


def find_blocks(text: str, marker: str, ignore_case: bool = False, limit: int | None = None) -> list[AnnotationBlock]:
    """
    Locate annotation blocks carrying a marker, in document order.

    Args:
        text: Template text
        marker: Marker name without '@'
        ignore_case: Match the marker case-insensitively
        limit: Stop after this many blocks

    Returns:
        Blocks with trimmed content and source offsets

    Raises:
        UnterminatedBlockError: If a block opener is never closed
    """
    scanner = _scanner(marker, ignore_case)
    blocks: list[AnnotationBlock] = []
    pos = 0

    while limit is None or len(blocks) < limit:
        match = scanner.search(text, pos)
        if match is None:
            break
        if match.group("opener") is None:
            # String literal or ordinary comment
            pos = max(match.end(), match.start() + 1)
            continue

        body_start = match.end()
        body_end = _find_block_end(text, body_start)
        if body_end == -1:
            raise UnterminatedBlockError(marker, match.start(), excerpt=excerpt_around(text, match.start(), 80))

        blocks.append(
            AnnotationBlock(
                marker=marker,
                content=text[body_start:body_end].strip(),
                index=len(blocks) + 1,
                start=match.start(),
                end=body_end + 2,
            )
        )
        pos = body_end + 2

    return blocks


def extract_block(text: str, marker: str, strict: bool = False) -> tuple[str, str]:
    """
    Cut the first block carrying a marker out of the text.

    Later blocks with the same marker stay in place as ordinary comments.

    Args:
        text: Template text
        marker: Marker name without '@'
        strict: Raise instead of returning empty content when absent

    Returns:
        (trimmed block content, text without the block)

    Raises:
        MissingBlockError: In strict mode, if no block is present
    """
    blocks = find_blocks(text, marker, limit=1)
    if not blocks:
        if strict:
            raise MissingBlockError(marker)
        return "", text

    block = blocks[0]
    logger.debug(f"Extracted {block} ({len(block.content)} chars)")
    return block.content, text[: block.start] + text[block.end :]


def extract_required_block(text: str, marker: str) -> tuple[str, str]:
    """Cut out the first block carrying marker; its absence is an error."""
    return extract_block(text, marker, strict=True)


def extract_optional_block(text: str, marker: str) -> tuple[str, str]:
    """Cut out the first block carrying marker, if there is one."""
    return extract_block(text, marker, strict=False)


def _consume_separator(text: str, pos: int, floor: int, step: int) -> tuple[int, bool]:
    """Walk from pos over whitespace, at most one comma, then whitespace again."""
    limit = floor if step < 0 else len(text)

    def _at(i: int) -> str:
        return text[i - 1] if step < 0 else text[i]

    def _inside(i: int) -> bool:
        return i > limit if step < 0 else i < limit

    while _inside(pos) and _at(pos).isspace():
        pos += step
    had_comma = _inside(pos) and _at(pos) == ","
    if had_comma:
        pos += step
        while _inside(pos) and _at(pos).isspace():
            pos += step
    return pos, had_comma


def _clean_separators(text: str) -> str:
    text = "\n".join(line for line in text.split("\n") if line.strip())
    text = sub_outside_literals(r",(?:\s*,)+", ",", text)
    text = sub_outside_literals(r",(?P<close>\s*[\]}])", r"\g<close>", text)
    text = sub_outside_literals(r"(?P<open>[\[{])(?P<gap>\s*),", r"\g<open>\g<gap>", text)
    return text


def extract_all_blocks(text: str, marker: str, ignore_case: bool = True) -> tuple[list[AnnotationBlock], str]:
    """
    Cut every block carrying a marker out of the text.

    Each block takes the list separator and whitespace around it along, and a
    single separator is put back when one was taken, so a block between two
    array elements leaves exactly one comma. Afterwards blank lines are
    dropped, repeated separators collapsed, and separators next to brackets
    removed, in that order.

    Args:
        text: Template text
        marker: Marker name without '@'
        ignore_case: Match the marker case-insensitively

    Returns:
        (blocks in document order, cleaned text); text is returned untouched
        when there are no blocks
    """
    blocks = find_blocks(text, marker, ignore_case=ignore_case)
    logger.debug(f"Found {len(blocks)} @{marker} block(s)")
    if not blocks:
        return [], text

    pieces: list[str] = []
    cursor = 0
    for block in blocks:
        left, comma_before = _consume_separator(text, block.start, cursor, -1)
        right, comma_after = _consume_separator(text, block.end, cursor, 1)
        pieces.append(text[cursor:left])
        if comma_before or comma_after:
            pieces.append(",")
        if "\n" in text[left:block.start] or "\n" in text[block.end:right]:
            pieces.append("\n")
        cursor = right
    pieces.append(text[cursor:])

    return blocks, _clean_separators("".join(pieces))


def extract_all_named(text: str, marker: str, ignore_case: bool = True) -> tuple[list[str], str]:
    """Like extract_all_blocks, but returning only block contents."""
    blocks, cleaned = extract_all_blocks(text, marker, ignore_case=ignore_case)
    return [block.content for block in blocks], cleaned
