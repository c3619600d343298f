"""Character classes and regex builders for Muse markup."""

import re
from dataclasses import dataclass
from typing import List, Optional, Union

DEFAULT_BLANK_CHARS = " \t"

DEFAULT_URL_PROTOCOLS = [
    "info://",
    "https?:/?/?",
    "ftp://",
    "gopher://",
    "telnet://",
    "wais://",
    "file://",
    "news:",
    "snews:",
    "mailto:",
]

# [[target]] or [[target][description]]
EXPLICIT_LINK_PATTERN = re.compile(r"\[\[([^\[\]\n]+)\](?:\[([^\[\]\n]+)\])?\]")


class MarkupConfigError(ValueError):
    """Raised when a caller supplies an unusable pattern or syntax setting."""


@dataclass
class MuseSyntax:
    """Process-wide character class definitions used inside patterns."""

    blank_chars: str = DEFAULT_BLANK_CHARS
    url_protocols: List[str] = None

    def __post_init__(self):
        if self.url_protocols is None:
            self.url_protocols = list(DEFAULT_URL_PROTOCOLS)

        if not self.blank_chars:
            raise MarkupConfigError("blank_chars must contain at least one character")
        if "\n" in self.blank_chars:
            raise MarkupConfigError("blank_chars must not contain a newline")
        if not self.url_protocols:
            raise MarkupConfigError("url_protocols must not be empty")

    @property
    def blank(self) -> str:
        """Blank characters escaped for use inside a character class."""
        return "".join(re.escape(char) for char in self.blank_chars)

    def empty_line_regexp(self) -> str:
        return f"^[{self.blank}]*\n"

    def list_item_regexp(self, indent: str) -> str:
        """
        Build the item-marker regex for one nesting level.

        Args:
            indent: Regex fragment matching the indentation shared by items
                at this level (the blank that is part of every marker is not
                included)

        Returns:
            Regex source with named groups ``item``, ``marker`` and ``term``
        """
        blank = self.blank
        return (
            f"^(?P<item>{indent}"
            f"(?P<marker>(?:(?P<term>[^\n{blank}].*?)?::(?:[{blank}]+|$)"
            f"|[{blank}]-[{blank}]*"
            f"|[{blank}][0-9]+\\.[{blank}]*)))"
        )

    def url_regexp(self) -> str:
        blank = self.blank
        protocols = "|".join(self.url_protocols)
        return (
            f"\\b(?:{protocols})"
            f"[^\\[\\]{blank}\"'()<>^`{{}}\n]*"
            f"[^\\[\\]{blank}\"'()<>^`{{}}.,;\n]+"
        )


DEFAULT_SYNTAX = MuseSyntax()


def compile_fragment(source: Union[str, re.Pattern], flags: int = re.MULTILINE) -> re.Pattern:
    """Compile a caller-supplied regex, surfacing bad input as MarkupConfigError."""
    if isinstance(source, re.Pattern):
        return source
    try:
        return re.compile(source, flags)
    except re.error as e:
        raise MarkupConfigError(f"Invalid pattern {source!r}: {e}") from e


def build_list_item_pattern(indent: str, syntax: Optional[MuseSyntax] = None) -> re.Pattern:
    """Compile the list-item regex for ``indent``."""
    syntax = syntax or DEFAULT_SYNTAX
    return compile_fragment(syntax.list_item_regexp(indent))
