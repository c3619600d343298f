"""Resolution of explicit and implicit links through pluggable handler chains."""

import logging
import re
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Callable, List, NamedTuple, Optional

from .escaping import unescape_link_text
from .syntax import DEFAULT_SYNTAX, MuseSyntax, compile_fragment

logger = logging.getLogger(__name__)


@dataclass
class MatchContext:
    """
    The text being scanned, the scan position and the most recent match.

    Handlers read and update this instead of shared global state; the
    resolver snapshots it so a declining handler leaves no trace.
    """

    source: str = ""
    position: int = 0
    match: Optional[re.Match] = None

    def snapshot(self) -> "MatchContext":
        return replace(self)

    def restore(self, snapshot: "MatchContext"):
        self.source = snapshot.source
        self.position = snapshot.position
        self.match = snapshot.match

    def looking_at(self, pattern: re.Pattern) -> Optional[re.Match]:
        """Match ``pattern`` at the current position, recording a success."""
        match = pattern.match(self.source, self.position)
        if match:
            self.match = match
        return match

    def string_match(self, pattern: re.Pattern, string: str) -> Optional[re.Match]:
        """Search ``string`` for ``pattern``, recording a success."""
        match = pattern.search(string)
        if match:
            self.match = match
        return match

    def group(self, index: int) -> Optional[str]:
        if self.match is None:
            return None
        try:
            return self.match.group(index)
        except IndexError:
            return None


class LinkResult(NamedTuple):
    """A resolved link target and its optional description."""

    target: str
    description: Optional[str] = None


# Handlers take the literal link text (None when resolving at the scan
# position) and return the resolved text, or None to decline.
LinkHandler = Callable[[Optional[str], MatchContext], Optional[str]]


class UrlHandler:
    """Implicit-link handler recognising bare URLs."""

    def __init__(self, syntax: MuseSyntax = None):
        self.syntax = syntax or DEFAULT_SYNTAX
        self.pattern = compile_fragment(self.syntax.url_regexp(), 0)

    def __call__(self, link: Optional[str], context: MatchContext) -> Optional[str]:
        if link is not None:
            match = context.string_match(self.pattern, link)
        else:
            match = context.looking_at(self.pattern)
        return match.group(0) if match else None

    def __repr__(self):
        return f"UrlHandler(protocols={len(self.syntax.url_protocols)})"


def current_link_target(context: MatchContext) -> Optional[str]:
    """Target (group 1) of the explicit link most recently matched in ``context``."""
    return context.group(1)


def current_link_description(context: MatchContext) -> Optional[str]:
    """Description (group 2) of the explicit link most recently matched in ``context``."""
    return context.group(2)


class LinkResolver:
    """
    Two ordered handler chains; the first handler to return a value wins.

    The chains are configuration: register handlers before resolving.
    Registering while a chain is being walked raises RuntimeError.
    """

    def __init__(
        self,
        syntax: MuseSyntax = None,
        implicit_handlers: List[LinkHandler] = None,
        explicit_handlers: List[LinkHandler] = None,
    ):
        self.syntax = syntax or DEFAULT_SYNTAX
        if implicit_handlers is None:
            implicit_handlers = [UrlHandler(self.syntax)]
        self.implicit_handlers = list(implicit_handlers)
        self.explicit_handlers = list(explicit_handlers or [])
        self._depth = 0

    @contextmanager
    def _walking_chain(self):
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1

    def _register(self, chain: List[LinkHandler], handler: LinkHandler, index: Optional[int]):
        if self._depth:
            raise RuntimeError("Cannot register a link handler while links are being resolved")
        if not callable(handler):
            raise TypeError(f"Link handler must be callable, got {handler!r}")
        if index is None:
            chain.append(handler)
        else:
            chain.insert(index, handler)

    def register_implicit_handler(self, handler: LinkHandler, index: Optional[int] = None):
        """Add ``handler`` to the implicit chain (appended unless ``index`` is given)."""
        self._register(self.implicit_handlers, handler, index)

    def register_explicit_handler(self, handler: LinkHandler, index: Optional[int] = None):
        """Add ``handler`` to the explicit chain (appended unless ``index`` is given)."""
        self._register(self.explicit_handlers, handler, index)

    def resolve_implicit(
        self, link: Optional[str] = None, context: Optional[MatchContext] = None
    ) -> Optional[str]:
        """
        Resolve a bare link.

        Args:
            link: Literal link text, or None to look at ``context.position``
            context: Scan state; a fresh one over ``link`` is used if omitted

        Returns:
            The first handler result, or None if every handler declined
        """
        if context is None:
            context = MatchContext(source=link or "")
        saved = context.snapshot()
        result = None

        with self._walking_chain():
            for handler in self.implicit_handlers:
                result = handler(link, context)
                if result is not None:
                    break
                # A literal link shares one session; restore once at the end
                if link is None:
                    context.restore(saved)

        if link is not None:
            context.restore(saved)

        logger.debug(f"Implicit link {link!r} resolved to {result!r}")
        return result

    def resolve_explicit(
        self, link: Optional[str] = None, context: Optional[MatchContext] = None
    ) -> str:
        """
        Resolve a bracketed link target.

        Args:
            link: Raw target text, or None to use group 1 of ``context.match``
            context: Scan state holding the explicit-link match

        Returns:
            The handler result, or the raw target if every handler declined,
            with escaped brackets decoded
        """
        if context is None:
            context = MatchContext(source=link or "")
        saved = context.snapshot()
        result = None

        with self._walking_chain():
            try:
                for handler in self.explicit_handlers:
                    result = handler(link, context)
                    if result is not None:
                        break
            finally:
                context.restore(saved)

        if result is None:
            result = link if link is not None else current_link_target(context)
        return unescape_link_text(result)

    def resolve_explicit_match(self, context: MatchContext) -> LinkResult:
        """Resolve the explicit link held in ``context.match`` into a LinkResult."""
        target = self.resolve_explicit(context=context)
        description = current_link_description(context)
        if description is not None:
            description = unescape_link_text(description)
        return LinkResult(target, description)

    def resolve_implicit_match(self, context: MatchContext) -> Optional[LinkResult]:
        """Resolve a bare link at ``context.position``; bare links carry no description."""
        target = self.resolve_implicit(context=context)
        if target is None:
            return None
        return LinkResult(target)


_default_resolver = LinkResolver()


def default_resolver() -> LinkResolver:
    """The process-wide resolver plugins register their handlers on."""
    return _default_resolver


def register_implicit_handler(handler: LinkHandler, index: Optional[int] = None):
    _default_resolver.register_implicit_handler(handler, index)


def register_explicit_handler(handler: LinkHandler, index: Optional[int] = None):
    _default_resolver.register_explicit_handler(handler, index)


def resolve_implicit_link(
    link: Optional[str] = None, context: Optional[MatchContext] = None
) -> Optional[str]:
    return _default_resolver.resolve_implicit(link, context)


def resolve_explicit_link(link: Optional[str] = None, context: Optional[MatchContext] = None) -> str:
    return _default_resolver.resolve_explicit(link, context)
