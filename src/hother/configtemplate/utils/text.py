"""
Helpers for bounded text excerpts in logs and error messages.
"""


def truncate(text: str, max_length: int) -> str:
    """Cut text to max_length characters, marking the cut with '...'."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def excerpt_around(text: str, position: int, max_length: int) -> str:
    """
    Take a window of at most max_length characters centred on position.

    Args:
        text: Full text
        position: Character offset of interest (clamped into range)
        max_length: Window size

    Returns:
        The window, with '...' on each side that was cut
    """
    position = max(0, min(position, len(text)))
    half = max_length // 2
    start = max(0, position - half)
    end = min(len(text), start + max_length)
    start = max(0, end - max_length)

    window = text[start:end]
    if start > 0:
        window = "..." + window
    if end < len(text):
        window = window + "..."
    return window
