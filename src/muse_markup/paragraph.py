"""Paragraph boundary scanning."""

import logging
import re
from typing import Optional, Tuple, Union

from .document import Document
from .syntax import DEFAULT_SYNTAX, MuseSyntax, compile_fragment

logger = logging.getLogger(__name__)


def _boundary_pattern(stop_pattern: Union[str, re.Pattern, None], syntax: MuseSyntax) -> re.Pattern:
    if stop_pattern is None:
        return compile_fragment(f"^[{syntax.blank}]*(?:\n|\\Z)")
    if isinstance(stop_pattern, re.Pattern):
        return compile_fragment(
            f"^(?:{stop_pattern.pattern}|\n|\\Z)", stop_pattern.flags | re.MULTILINE
        )
    return compile_fragment(f"^(?:{stop_pattern}|\n|\\Z)")


def forward_paragraph(
    document: Document,
    cursor: int,
    stop_pattern: Union[str, re.Pattern, None] = None,
    syntax: Optional[MuseSyntax] = None,
) -> Tuple[int, Optional[re.Match]]:
    """
    Advance ``cursor`` to the start of the next paragraph break.

    The line the cursor starts on is never examined. With a stop pattern only
    truly empty lines count as blank; without one, whitespace-only lines do.

    Args:
        document: Document to scan
        cursor: Starting offset
        stop_pattern: Optional regex that also ends the paragraph when it
            matches at the start of a line
        syntax: Character classes (process-wide default if omitted)

    Returns:
        Tuple of (new cursor, boundary match). The match is None when the
        search ran off the end or was clamped to a list end.
    """
    pattern = _boundary_pattern(stop_pattern, syntax or DEFAULT_SYNTAX)

    if document.is_list_end(cursor):
        cursor = document.next_list_end_change(cursor) or document.end

    boundary_limit = document.next_list_end_change(cursor) or document.end

    cursor = document.forward_line(cursor)
    match = pattern.search(document.text, cursor)
    if match:
        cursor = match.start()
    else:
        cursor = document.end

    if cursor > boundary_limit:
        logger.debug(f"Paragraph scan clamped from {cursor} to list end at {boundary_limit}")
        return boundary_limit, None

    return cursor, match


def scan_to_next_paragraph(
    document: Document,
    cursor: int,
    stop_pattern: Union[str, re.Pattern, None] = None,
    syntax: Optional[MuseSyntax] = None,
) -> int:
    """Return the offset of the next paragraph boundary after ``cursor``."""
    return forward_paragraph(document, cursor, stop_pattern, syntax)[0]
