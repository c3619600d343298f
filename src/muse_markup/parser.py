"""Muse file parser for YAML front matter, #directives and content."""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Tuple, Union

import frontmatter

DIRECTIVE_PATTERN = re.compile(r"^#([A-Za-z][A-Za-z0-9_-]*)(?:[ \t]+(.*?))?[ \t]*$")


@dataclass
class ParseResult:
    """Result of parsing a Muse file."""

    success: bool
    frontmatter: Dict[str, Any] = None
    directives: Dict[str, str] = None
    content: str = None
    error: str = None
    has_frontmatter: bool = False
    has_directives: bool = False


class MuseParser:
    """Parses Muse files with optional YAML front matter and #directive headers."""

    def parse_file(self, file_path: Union[str, Path]) -> ParseResult:
        """
        Parse a Muse file.

        Args:
            file_path: Path to the Muse file

        Returns:
            ParseResult with front matter, directives, content, or error information
        """
        file_path = Path(file_path)

        if not file_path.exists():
            return ParseResult(success=False, error=f"File not found: {file_path}")

        if not file_path.is_file():
            return ParseResult(success=False, error=f"Path is not a file: {file_path}")

        try:
            content_text = file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            return ParseResult(success=False, error=f"Unable to read file as UTF-8: {e}")

        return self.parse_content(content_text)

    def parse_content(self, content_text: str) -> ParseResult:
        """
        Parse Muse content string.

        Args:
            content_text: Muse content as string

        Returns:
            ParseResult with front matter, directives, content, or error information
        """
        try:
            post = frontmatter.loads(content_text)
        except Exception as e:
            # Check if it's a YAML error by looking at the error message
            if "yaml" in str(e).lower() or "parser" in str(type(e).__name__).lower():
                return ParseResult(success=False, error=f"Invalid YAML front matter: {e}")
            return ParseResult(success=False, error=f"Error parsing content: {e}")

        frontmatter_data = post.metadata if post.metadata else {}
        body = post.content if frontmatter_data else content_text
        directives, content = self.split_directives(body)

        return ParseResult(
            success=True,
            frontmatter=frontmatter_data,
            directives=directives,
            content=content,
            has_frontmatter=bool(frontmatter_data),
            has_directives=bool(directives),
        )

    def split_directives(self, text: str) -> Tuple[Dict[str, str], str]:
        """
        Split leading ``#name value`` lines off ``text``.

        Blank lines between directives are allowed; the first other line
        starts the content. A repeated directive keeps its last value.

        Returns:
            Tuple of (directives, remaining content)
        """
        directives = {}
        lines = text.split("\n")
        index = 0

        while index < len(lines):
            line = lines[index]
            if not line.strip():
                index += 1
                continue
            match = DIRECTIVE_PATTERN.match(line)
            if not match:
                break
            directives[match.group(1).lower()] = (match.group(2) or "").strip()
            index += 1

        if not directives:
            return {}, text
        return directives, "\n".join(lines[index:])
