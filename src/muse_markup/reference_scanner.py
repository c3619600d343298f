"""Reference scanner for extracting explicit and implicit links from Muse content."""

import re
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urlparse

from .escaping import unescape_link_text
from .links import LinkResolver, MatchContext, current_link_description, default_resolver
from .syntax import EXPLICIT_LINK_PATTERN, compile_fragment

# Positions where a bare link may begin
WORD_START = re.compile(r"\b\w")
TOKEN_PATTERN = re.compile(r"\S+")


@dataclass
class LinkReference:
    """Represents a found link reference."""

    target: str  # Resolved link target
    description: Optional[str]  # Link description, None for bare links
    link_type: str  # "anchor", "cross_doc", "external"
    explicit: bool  # Written in [[...]] brackets
    line_number: int  # Line where link was found
    raw_match: str  # Original markup text


class ReferenceScanner:
    """Scans Muse content for explicit [[links]] and bare URLs."""

    def __init__(self, resolver: LinkResolver = None, page_extensions: List[str] = None):
        self.resolver = resolver or default_resolver()
        self.page_extensions = page_extensions or [".muse"]
        self.url_pattern = compile_fragment(self.resolver.syntax.url_regexp(), 0)

    def scan_references(self, content: str) -> dict:
        """
        Scan content for all types of references.

        Args:
            content: Muse content to scan

        Returns:
            Dictionary with LinkReference lists under ``explicit_links`` and
            ``implicit_links`` and de-duplicated targets per link type
        """
        explicit_links = []
        implicit_links = []

        for line_num, line in enumerate(content.split("\n"), 1):
            context = MatchContext(source=line)
            covered = []

            # Find explicit links [[target][description]]
            for match in EXPLICIT_LINK_PATTERN.finditer(line):
                context.match = match
                result = self.resolver.resolve_explicit_match(context)
                explicit_links.append(
                    LinkReference(
                        target=result.target,
                        description=result.description,
                        link_type=self._classify_link(result.target),
                        explicit=True,
                        line_number=line_num,
                        raw_match=match.group(0),
                    )
                )
                covered.append(match.span())

            # Offer every word start outside explicit links to the implicit chain
            position = 0
            while True:
                start_match = WORD_START.search(line, position)
                if not start_match:
                    break
                start = start_match.start()
                span = next(((s, e) for s, e in covered if s <= start < e), None)
                if span:
                    position = span[1]
                    continue

                context.position = start
                context.match = None
                target = self.resolver.resolve_implicit(context=context)
                if target is None:
                    position = start + 1
                    continue

                end = self._matched_end(line, start, context)
                implicit_links.append(
                    LinkReference(
                        target=target,
                        description=None,
                        link_type=self._classify_link(target),
                        explicit=False,
                        line_number=line_num,
                        raw_match=line[start:end],
                    )
                )
                position = end

        all_links = explicit_links + implicit_links
        return {
            "explicit_links": explicit_links,
            "implicit_links": implicit_links,
            "anchor_links": self._deduplicate_links(
                [link for link in all_links if link.link_type == "anchor"]
            ),
            "cross_doc_refs": self._deduplicate_links(
                [link for link in all_links if link.link_type == "cross_doc"]
            ),
            "external_links": self._deduplicate_links(
                [link for link in all_links if link.link_type == "external"]
            ),
            "all_links": self._deduplicate_links(all_links),
        }

    def _matched_end(self, line: str, start: int, context: MatchContext) -> int:
        """End offset of the bare link resolved at ``start``, independent of the target text."""
        match = context.match
        if match is not None and match.string is line and match.end() > start:
            return match.end()
        match = self.url_pattern.match(line, start) or TOKEN_PATTERN.match(line, start)
        return match.end()

    def _classify_link(self, target: str) -> str:
        """
        Classify a link target into type.

        Args:
            target: Resolved link target

        Returns:
            Link type: "anchor", "cross_doc", "external"
        """
        target = target.strip()

        # Anchors within the page (#name)
        if target.startswith("#"):
            return "anchor"

        parsed = urlparse(target)
        if parsed.scheme and parsed.scheme != "file":
            return "external"

        # Other pages, with or without an anchor
        path = parsed.path.split("#", 1)[0]
        if any(path.endswith(ext) for ext in self.page_extensions):
            return "cross_doc"

        # Bare page names like [[WikiPage]] or [[Other Page#section]]
        if not parsed.scheme and "." not in path:
            return "cross_doc"

        if parsed.scheme == "file" or "/" in path:
            return "cross_doc"

        return "external"

    def _deduplicate_links(self, links: List[LinkReference]) -> List[str]:
        """
        Remove duplicate links and return just the targets.

        Args:
            links: List of LinkReference objects

        Returns:
            List of unique targets in document order
        """
        seen_targets = set()
        unique_targets = []

        for link in links:
            if link.target not in seen_targets:
                seen_targets.add(link.target)
                unique_targets.append(link.target)

        return unique_targets

    def find_link_descriptions(self, content: str) -> List[str]:
        """
        Find the descriptions of explicit links in content.

        Args:
            content: Muse content

        Returns:
            Unescaped descriptions in document order
        """
        descriptions = []
        context = MatchContext(source=content)
        for match in EXPLICIT_LINK_PATTERN.finditer(content):
            context.match = match
            description = current_link_description(context)
            if description:
                descriptions.append(unescape_link_text(description))
        return descriptions
