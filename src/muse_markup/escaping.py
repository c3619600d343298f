"""Escaping of the characters reserved by explicit link brackets."""

from typing import Optional


def escape_link_text(text: Optional[str]) -> str:
    """
    Encode ``[`` and ``]`` so the text can sit inside an explicit link.

    Not idempotent: text that already holds ``%5B``/``%5D`` cannot be told
    apart from escaped brackets afterwards.
    """
    if text is None:
        return ""
    return text.replace("[", "%5B").replace("]", "%5D")


def unescape_link_text(text: Optional[str]) -> str:
    """Decode ``%5B``/``%5D`` back into brackets."""
    if text is None:
        return ""
    return text.replace("%5B", "[").replace("%5D", "]")
