"""Walking from one list item to the next item at the same level."""

import logging
import re
from typing import NamedTuple, Optional

from .classifier import ListItemType, classify_list_line
from .document import Document
from .paragraph import forward_paragraph
from .syntax import DEFAULT_SYNTAX, MuseSyntax, compile_fragment

logger = logging.getLogger(__name__)


class WalkResult(NamedTuple):
    """Outcome of one walker step."""

    cursor: int
    found: bool


class ListItemWalker:
    """Advances through the items of one list at one nesting level."""

    def __init__(self, document: Document, syntax: MuseSyntax = None):
        self.document = document
        self.syntax = syntax or DEFAULT_SYNTAX

    def advance(
        self,
        item_type: ListItemType,
        indent: str,
        cursor: int,
        skip_nested: bool = True,
    ) -> WalkResult:
        """
        Move to the next item of ``item_type`` sharing ``indent``.

        Args:
            item_type: Type of the list being enumerated
            indent: Regex fragment for the indentation of items at this level
            cursor: Offset of the current item
            skip_nested: Skip over nested sub-items and indented continuation
                text instead of stopping at them

        Returns:
            WalkResult. ``found`` is True only when the cursor sits on another
            item of the same type. When a different kind of item follows, the
            cursor is left on it with ``found`` False so the caller can switch
            walkers.
        """
        blank = self.syntax.blank
        empty_line = compile_fragment(self.syntax.empty_line_regexp())
        indented_line = compile_fragment(f"^{indent}[{blank}]")
        list_pattern = compile_fragment(
            f"(?:{self.syntax.empty_line_regexp()})?{self.syntax.list_item_regexp(indent)}"
        )

        while True:
            cursor, match = forward_paragraph(self.document, cursor, list_pattern, self.syntax)
            if self._at_boundary(cursor) or not skip_nested:
                break
            cursor, keep_going = self._skip_nested(item_type, match, cursor, empty_line, indented_line)
            if not keep_going:
                break

        if self._at_boundary(cursor):
            logger.debug(f"List of {item_type.value} exhausted at {cursor}")
            return WalkResult(cursor, False)

        if match is None or match.start("item") == -1:
            return WalkResult(cursor, False)

        line = self.document.line_at(match.start("marker"))
        cursor = match.start("item")
        if classify_list_line(line, self.syntax) == item_type:
            return WalkResult(cursor, True)

        logger.debug(f"Foreign list item at {cursor} while walking {item_type.value}")
        return WalkResult(cursor, False)

    def _at_boundary(self, cursor: int) -> bool:
        return self.document.is_list_end(cursor) or cursor >= self.document.end

    def _skip_nested(self, item_type, match: Optional[re.Match], cursor, empty_line, indented_line):
        """Decide whether the walk continues past the boundary at ``cursor``."""
        if match is not None and match.start("item") != -1:
            # Entries keep going past anything at this level that is not
            # another entry
            keep_going = (
                item_type == ListItemType.DEFINITION_ENTRY
                and self.document.text[match.start("marker")] != ":"
            )
            return cursor, keep_going

        # Blank line: continue only if indented text follows it
        next_line = self.document.forward_line(cursor)
        text = self.document.text
        if indented_line.match(text, next_line) and not empty_line.match(text, next_line):
            return next_line, True
        return cursor, False


def advance_to_next_item(
    document: Document,
    item_type: ListItemType,
    indent: str,
    cursor: int,
    skip_nested: bool = True,
    syntax: Optional[MuseSyntax] = None,
) -> WalkResult:
    """Functional form of ListItemWalker.advance."""
    return ListItemWalker(document, syntax).advance(item_type, indent, cursor, skip_nested)
