"""
Reduction of extended JSON (comments, trailing commas) to strict JSON.

Every rewrite here skips double-quoted string literals, so "//" inside a URL
or a comma inside a tag name is never touched. Strings never span lines.
"""

import json
import re
from collections.abc import Callable
from functools import lru_cache
from typing import Any

from hother.configtemplate.core.exceptions import TemplateSyntaxError
from hother.configtemplate.utils.logging import get_logger
from hother.configtemplate.utils.text import excerpt_around

logger = get_logger(__name__)

STRING_LITERAL = r'"(?:[^"\\\n]|\\.)*"'
LINE_COMMENT = r"//[^\n]*"
BLOCK_COMMENT = r"/\*.*?(?:\*/|\Z)"

_COMMENT_RE = re.compile(rf"(?P<string>{STRING_LITERAL})|(?P<line>{LINE_COMMENT})|(?P<block>{BLOCK_COMMENT})", re.DOTALL)
_TRAILING_COMMA_RE = re.compile(rf"(?P<string>{STRING_LITERAL})|,(?P<close>\s*[\]}}])", re.DOTALL)


@lru_cache(maxsize=32)
def _protected(pattern: str, flags: int) -> re.Pattern[str]:
    return re.compile(rf"(?P<_literal>{STRING_LITERAL}|{LINE_COMMENT}|{BLOCK_COMMENT})|(?:{pattern})", flags | re.DOTALL)


def sub_outside_literals(pattern: str, repl: str | Callable[[re.Match[str]], str], text: str, flags: int = 0) -> str:
    """
    Like re.sub, but string literals and comments are left as they are.

    Args:
        pattern: Regular expression to replace
        repl: Replacement template or function, applied to pattern matches only
        text: Text to rewrite
        flags: Extra re flags for pattern

    Returns:
        The rewritten text
    """
    compiled = _protected(pattern, flags)

    def _replace(match: re.Match[str]) -> str:
        if match.group("_literal") is not None:
            return match.group("_literal")
        if callable(repl):
            return repl(match)
        return match.expand(repl)

    return compiled.sub(_replace, text)


def strip_comments(text: str) -> str:
    """Remove line and block comments outside string literals."""

    def _replace(match: re.Match[str]) -> str:
        if match.group("string") is not None:
            return match.group("string")
        if match.group("line") is not None:
            return ""
        # Keep line structure so error offsets stay readable
        return " " + "\n" * match.group("block").count("\n")

    return _COMMENT_RE.sub(_replace, text)


def strip_trailing_commas(text: str) -> str:
    """Remove commas directly preceding a closing bracket or brace."""

    def _replace(match: re.Match[str]) -> str:
        if match.group("string") is not None:
            return match.group("string")
        return match.group("close")

    return _TRAILING_COMMA_RE.sub(_replace, text)


def reduce(text: str) -> bytes:
    """
    Convert extended JSON text into strict JSON bytes.

    Comments go first so that a comment sitting between a trailing comma and
    its closing bracket does not hide the comma.

    Args:
        text: Extended JSON with annotation blocks already extracted

    Returns:
        UTF-8 encoded strict JSON candidate (call validate() to check it)
    """
    return strip_trailing_commas(strip_comments(text)).encode("utf-8")


def validate(data: bytes, excerpt_length: int = 200) -> None:
    """
    Check that data is a complete JSON document.

    Raises:
        TemplateSyntaxError: With a bounded excerpt around the failure
    """
    decode(data, excerpt_length=excerpt_length)


def decode(data: bytes, excerpt_length: int = 200, object_pairs_hook: Callable[[list[tuple[str, Any]]], Any] | None = None) -> Any:
    """
    Decode strict JSON bytes.

    Raises:
        TemplateSyntaxError: With a bounded excerpt around the failure
    """
    text = data.decode("utf-8")
    try:
        return json.loads(text, object_pairs_hook=object_pairs_hook)
    except json.JSONDecodeError as e:
        excerpt = excerpt_around(text, e.pos, excerpt_length)
        logger.debug(f"JSON decode failed at {e.pos}: {e.msg}")
        raise TemplateSyntaxError(excerpt, position=e.pos, message=f"{e.msg} at offset {e.pos}: {excerpt}") from e
