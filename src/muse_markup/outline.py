"""Paragraph and list outline of a Muse document."""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from .classifier import ListItemType, classify_list_line
from .document import Document
from .list_walker import ListItemWalker
from .paragraph import scan_to_next_paragraph
from .syntax import DEFAULT_SYNTAX, MuseSyntax, build_list_item_pattern

logger = logging.getLogger(__name__)


@dataclass
class Paragraph:
    """A run of text lines between paragraph boundaries."""

    start: int
    end: int
    text: str


@dataclass
class ListItem:
    """One list item with the blocks nested inside it."""

    item_type: ListItemType
    start: int
    end: int
    text: str  # First line with the marker removed
    term: Optional[str] = None  # Definition term, dl items only
    blocks: List[Union[Paragraph, "ListBlock"]] = field(default_factory=list)

    @property
    def children(self) -> List["ListBlock"]:
        return [block for block in self.blocks if isinstance(block, ListBlock)]


@dataclass
class ListBlock:
    """Consecutive items of one type at one indentation."""

    item_type: ListItemType
    indent: str
    start: int
    end: int
    items: List[ListItem] = field(default_factory=list)


@dataclass
class Outline:
    blocks: List[Union[Paragraph, ListBlock]]

    @property
    def paragraphs(self) -> List[Paragraph]:
        return [block for block in self.blocks if isinstance(block, Paragraph)]

    @property
    def lists(self) -> List[ListBlock]:
        return [block for block in self.blocks if isinstance(block, ListBlock)]

    def to_dict(self) -> dict:
        return {"blocks": [_block_to_dict(block) for block in self.blocks]}


def _block_to_dict(block: Union[Paragraph, ListBlock]) -> dict:
    if isinstance(block, Paragraph):
        return {"type": "paragraph", "start": block.start, "end": block.end, "text": block.text}
    return {
        "type": "list",
        "item_type": block.item_type.value,
        "start": block.start,
        "end": block.end,
        "items": [
            {
                "item_type": item.item_type.value,
                "start": item.start,
                "end": item.end,
                "text": item.text,
                "term": item.term,
                "blocks": [_block_to_dict(child) for child in item.blocks],
            }
            for item in block.items
        ],
    }


class OutlineBuilder:
    """Recovers paragraphs and nested lists using the list-item walker."""

    def __init__(self, syntax: MuseSyntax = None):
        self.syntax = syntax or DEFAULT_SYNTAX
        # Any indentation; the captured indent decides the nesting level
        self.item_pattern = build_list_item_pattern(f"[{self.syntax.blank}]*", self.syntax)
        self.blank_line = re.compile(f"[{self.syntax.blank}]*$")

    def build(self, document: Document) -> Outline:
        """
        Outline ``document``.

        List extents are annotated on the document first unless it already
        carries list-end annotations.
        """
        return Outline(blocks=self._build_blocks(document, base=0))

    def mark_list_extents(self, document: Document) -> int:
        """
        Annotate the end of every top-level list extent.

        A list ends at a blank line followed by text that is neither
        indented nor a list item.

        Returns:
            Number of list ends marked
        """
        text = document.text
        position = 0
        in_list = False
        gap_start = None
        marked = 0

        while position < document.end:
            line = document.line_at(position)
            if not in_list:
                in_list = bool(self.item_pattern.match(text, position))
            elif self._is_blank(line):
                if gap_start is None:
                    gap_start = position
            else:
                continues = self.item_pattern.match(text, position) or line[0] in self.syntax.blank_chars
                if gap_start is not None and not continues:
                    document.mark_list_end(gap_start)
                    marked += 1
                    in_list = False
                gap_start = None
            position = document.forward_line(position)

        return marked

    def _is_blank(self, line: str) -> bool:
        return bool(self.blank_line.match(line))

    def _build_blocks(self, document: Document, base: int) -> List[Union[Paragraph, ListBlock]]:
        if not document.list_ends:
            self.mark_list_extents(document)

        blocks = []
        position = 0
        while position < document.end:
            if self._is_blank(document.line_at(position)):
                position = document.forward_line(position)
                continue

            match = self.item_pattern.match(document.text, position)
            if match:
                block, position = self._read_list(document, match, base)
            else:
                block, position = self._read_paragraph(document, position, base)
            blocks.append(block)

        return blocks

    def _read_paragraph(self, document: Document, start: int, base: int) -> Tuple[Paragraph, int]:
        end = scan_to_next_paragraph(document, start, self.item_pattern, self.syntax)
        lines = [line.strip() for line in document.text[start:end].splitlines()]
        paragraph = Paragraph(start=start + base, end=end + base, text="\n".join(line for line in lines if line))
        return paragraph, end

    def _read_list(self, document: Document, match: re.Match, base: int) -> Tuple[ListBlock, int]:
        start = match.start("item")
        indent = document.text[start : match.start("marker")]
        item_type = classify_list_line(document.line_at(start), self.syntax)
        walker = ListItemWalker(document, self.syntax)

        block = ListBlock(item_type=item_type, indent=indent, start=start + base, end=start + base)
        cursor = start
        while True:
            result = walker.advance(item_type, re.escape(indent), cursor)
            block.items.append(self._read_item(document, item_type, cursor, result.cursor, base))
            if not result.found:
                break
            cursor = result.cursor

        block.end = result.cursor + base
        logger.debug(f"Read {item_type.value} list of {len(block.items)} items at {block.start}")
        return block, result.cursor

    def _read_item(
        self, document: Document, item_type: ListItemType, start: int, end: int, base: int
    ) -> ListItem:
        match = self.item_pattern.match(document.text, start)
        first_line_end = document.line_bounds(start)[1]
        term = match.group("term")

        item = ListItem(
            item_type=item_type,
            start=start + base,
            end=end + base,
            text=document.text[match.end() : first_line_end].strip(),
            term=term.strip() if term else None,
        )

        body_start = min(first_line_end + 1, end)
        body = document.text[body_start:end]
        if body.strip():
            item.blocks = self._build_blocks(Document(body), base + body_start)
        return item
