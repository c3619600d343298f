"""Tests for the link resolver and its handler chains."""

import pytest

from src.muse_markup import links
from src.muse_markup.links import (
    LinkResolver,
    LinkResult,
    MatchContext,
    UrlHandler,
    current_link_description,
    current_link_target,
    resolve_explicit_link,
    resolve_implicit_link,
)
from src.muse_markup.syntax import EXPLICIT_LINK_PATTERN, MuseSyntax


@pytest.fixture
def fresh_default_resolver(monkeypatch):
    """Replace the process-wide resolver for the duration of a test."""
    resolver = LinkResolver()
    monkeypatch.setattr(links, "_default_resolver", resolver)
    return resolver


def explicit_context(text: str) -> MatchContext:
    context = MatchContext(source=text)
    context.match = EXPLICIT_LINK_PATTERN.search(text)
    return context


class TestImplicitLinks:
    """Test implicit link resolution."""

    def test_bare_url(self, fresh_default_resolver):
        assert resolve_implicit_link("http://example.com") == "http://example.com"

    def test_not_a_url(self):
        assert LinkResolver().resolve_implicit("not a link") is None

    def test_trailing_punctuation_is_excluded(self):
        resolver = LinkResolver()

        assert resolver.resolve_implicit("see https://example.com/page.") == "https://example.com/page"
        assert resolver.resolve_implicit("mailto:someone@example.com;") == "mailto:someone@example.com"

    def test_resolves_at_scan_position(self):
        context = MatchContext(source="go to http://x.org now", position=6)

        assert LinkResolver().resolve_implicit(context=context) == "http://x.org"
        # A successful handler leaves its match in place
        assert context.match.group(0) == "http://x.org"

    def test_declining_handlers_see_a_clean_context(self):
        """Without literal text, state is restored between unsuccessful handlers."""
        seen = []

        def clobber(link, context):
            context.position = 99
            context.match = "garbage"
            return None

        def record(link, context):
            seen.append((context.position, context.match))
            return None

        resolver = LinkResolver(implicit_handlers=[clobber, record])
        context = MatchContext(source="text", position=2)

        assert resolver.resolve_implicit(context=context) is None
        assert seen == [(2, None)]
        assert (context.position, context.match) == (2, None)

    def test_literal_text_shares_one_session(self):
        """With literal text, handlers see each other's changes until the chain exits."""
        seen = []

        def move(link, context):
            context.position = 99
            return None

        def record(link, context):
            seen.append(context.position)
            return None

        resolver = LinkResolver(implicit_handlers=[move, record])
        context = MatchContext(source="text", position=2)

        assert resolver.resolve_implicit("text", context) is None
        assert seen == [99]
        assert context.position == 2

    def test_first_success_wins(self):
        resolver = LinkResolver(implicit_handlers=[])
        resolver.register_implicit_handler(lambda link, context: "a")
        resolver.register_implicit_handler(lambda link, context: "b")

        assert resolver.resolve_implicit("x") == "a"

    def test_register_at_front(self):
        resolver = LinkResolver()
        resolver.register_implicit_handler(lambda link, context: "override", index=0)

        assert resolver.resolve_implicit("http://example.com") == "override"

    def test_empty_string_is_a_result(self):
        resolver = LinkResolver(implicit_handlers=[lambda link, context: "", lambda link, context: "b"])

        assert resolver.resolve_implicit("x") == ""

    def test_custom_protocols(self):
        resolver = LinkResolver(MuseSyntax(url_protocols=["gemini://"]))

        assert resolver.resolve_implicit("gemini://example.org/page") == "gemini://example.org/page"
        assert resolver.resolve_implicit("http://example.org") is None

    def test_resolve_implicit_match(self):
        context = MatchContext(source="http://example.com")

        assert LinkResolver().resolve_implicit_match(context) == LinkResult("http://example.com")
        assert LinkResolver().resolve_implicit_match(MatchContext(source="nope")) is None

    def test_url_handler_repr(self):
        assert "protocols=" in repr(UrlHandler())


class TestExplicitLinks:
    """Test explicit link resolution."""

    def test_no_handlers_falls_back_to_unescaped_text(self, fresh_default_resolver):
        assert resolve_explicit_link("a%5Bb") == "a[b"

    def test_handler_result_is_unescaped(self):
        resolver = LinkResolver(explicit_handlers=[lambda link, context: "x%5Dy"])

        assert resolver.resolve_explicit("anything") == "x]y"

    def test_falls_back_to_matched_target(self):
        context = explicit_context("see [[Page%5B1%5D][Desc]] here")

        assert LinkResolver().resolve_explicit(context=context) == "Page[1]"

    def test_nothing_to_fall_back_to(self):
        assert LinkResolver().resolve_explicit() == ""

    def test_context_restored_after_chain(self):
        def clobber(link, context):
            context.match = None
            return None

        resolver = LinkResolver(explicit_handlers=[clobber])
        context = explicit_context("[[Target]]")

        assert resolver.resolve_explicit(context=context) == "Target"
        assert context.match is not None

    def test_chain_shares_one_snapshot(self):
        """A declining handler's changes are visible to the next handler until the chain ends."""
        other = EXPLICIT_LINK_PATTERN.search("[[Elsewhere]]")
        seen = []

        def move(link, context):
            context.position = 7
            context.match = other
            return None

        def record(link, context):
            seen.append((context.position, current_link_target(context)))
            return None

        resolver = LinkResolver(explicit_handlers=[move, record])
        context = explicit_context("[[Target]]")
        original = context.match

        assert resolver.resolve_explicit(context=context) == "Target"
        assert seen == [(7, "Elsewhere")]
        assert context.position == 0
        assert context.match is original

    def test_handlers_receive_the_match(self):
        def wiki(link, context):
            target = current_link_target(context)
            if target and target.startswith("Wiki"):
                return f"http://wiki.example.org/{target}"
            return None

        resolver = LinkResolver()
        resolver.register_explicit_handler(wiki)

        assert resolver.resolve_explicit(context=explicit_context("[[WikiHome]]")) == (
            "http://wiki.example.org/WikiHome"
        )
        assert resolver.resolve_explicit(context=explicit_context("[[Other]]")) == "Other"

    def test_resolve_explicit_match(self):
        resolver = LinkResolver()

        assert resolver.resolve_explicit_match(explicit_context("[[Page][A %5Bdraft%5D]]")) == (
            LinkResult("Page", "A [draft]")
        )
        assert resolver.resolve_explicit_match(explicit_context("[[Page]]")) == LinkResult("Page", None)


class TestCurrentLink:
    """Test the target/description accessors."""

    def test_target_and_description(self):
        context = explicit_context("[[http://example.com][Example]]")

        assert current_link_target(context) == "http://example.com"
        assert current_link_description(context) == "Example"

    def test_missing_description(self):
        context = explicit_context("[[Page]]")

        assert current_link_target(context) == "Page"
        assert current_link_description(context) is None

    def test_no_match(self):
        context = MatchContext(source="plain")

        assert current_link_target(context) is None
        assert current_link_description(context) is None


class TestHandlerRegistration:
    """Test registration rules."""

    def test_registering_during_resolution_is_rejected(self):
        resolver = LinkResolver(implicit_handlers=[])

        def sneaky(link, context):
            resolver.register_implicit_handler(lambda link, context: "late")
            return None

        resolver.register_implicit_handler(sneaky)

        with pytest.raises(RuntimeError):
            resolver.resolve_implicit("x")

        # Registration works again once the chain has exited
        resolver.register_explicit_handler(lambda link, context: None)
        assert len(resolver.explicit_handlers) == 1

    def test_handler_must_be_callable(self):
        with pytest.raises(TypeError):
            LinkResolver().register_explicit_handler("not callable")

    def test_module_level_registration(self, fresh_default_resolver):
        links.register_explicit_handler(lambda link, context: "resolved")
        links.register_implicit_handler(lambda link, context: "bare", index=0)

        assert resolve_explicit_link("x") == "resolved"
        assert resolve_implicit_link("http://example.com") == "bare"
        assert links.default_resolver() is fresh_default_resolver
