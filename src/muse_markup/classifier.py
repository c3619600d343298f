"""Classification of a single line as a list item."""

import re
from enum import Enum
from typing import Optional

from .syntax import DEFAULT_SYNTAX, MuseSyntax


class ListItemType(Enum):
    """Kind of list item a line starts."""

    UNORDERED = "ul"
    ORDERED = "ol"
    DEFINITION_TERM = "dl-term"
    DEFINITION_ENTRY = "dl-entry"
    NONE = "none"


def classify_list_line(line: Optional[str], syntax: Optional[MuseSyntax] = None) -> ListItemType:
    """
    Determine which kind of list item ``line`` begins.

    The line is judged in isolation. Definition terms have no marker of their
    own, so any line that is not an unordered, ordered or entry line is a
    term; callers only ask this about lines where a list item is expected.

    Args:
        line: One line of text without its trailing newline
        syntax: Character classes to use (process-wide default if omitted)

    Returns:
        The ListItemType for the line
    """
    if not line or len(line) < 2:
        return ListItemType.NONE

    blank = (syntax or DEFAULT_SYNTAX).blank

    if re.match(f"[{blank}]+-", line):
        return ListItemType.UNORDERED
    if re.match(f"[{blank}]*[0-9]+\\.", line):
        return ListItemType.ORDERED
    if not re.match(f"[{blank}]*::", line):
        return ListItemType.DEFINITION_TERM
    return ListItemType.DEFINITION_ENTRY
