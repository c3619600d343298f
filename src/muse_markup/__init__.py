"""Structural scanner for Muse markup: paragraphs, nested lists and links."""

from .classifier import ListItemType, classify_list_line
from .document import Document
from .escaping import escape_link_text, unescape_link_text
from .links import (
    LinkResolver,
    LinkResult,
    MatchContext,
    UrlHandler,
    current_link_description,
    current_link_target,
    default_resolver,
    register_explicit_handler,
    register_implicit_handler,
    resolve_explicit_link,
    resolve_implicit_link,
)
from .list_walker import ListItemWalker, WalkResult, advance_to_next_item
from .outline import ListBlock, ListItem, Outline, OutlineBuilder, Paragraph
from .paragraph import forward_paragraph, scan_to_next_paragraph
from .parser import MuseParser, ParseResult
from .processor import MuseProcessor, ScannerConfig, find_muse_files
from .reference_scanner import LinkReference, ReferenceScanner
from .syntax import MarkupConfigError, MuseSyntax, build_list_item_pattern

__all__ = [
    "ListItemType",
    "classify_list_line",
    "Document",
    "escape_link_text",
    "unescape_link_text",
    "LinkResolver",
    "LinkResult",
    "MatchContext",
    "UrlHandler",
    "current_link_description",
    "current_link_target",
    "default_resolver",
    "register_explicit_handler",
    "register_implicit_handler",
    "resolve_explicit_link",
    "resolve_implicit_link",
    "ListItemWalker",
    "WalkResult",
    "advance_to_next_item",
    "ListBlock",
    "ListItem",
    "Outline",
    "OutlineBuilder",
    "Paragraph",
    "forward_paragraph",
    "scan_to_next_paragraph",
    "MuseParser",
    "ParseResult",
    "MuseProcessor",
    "LinkReference",
    "ReferenceScanner",
    "ScannerConfig",
    "find_muse_files",
    "MarkupConfigError",
    "MuseSyntax",
    "build_list_item_pattern",
]
