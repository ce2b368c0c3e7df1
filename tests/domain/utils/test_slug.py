"""Tests for slug helpers."""

import re

from app.domain.utils.slug import slugify, unique_slug, unique_token


class TestSlugify:
    def test_lowercases_and_hyphenates(self):
        assert slugify("Morning Flow: Sun Salutation") == "morning-flow-sun-salutation"

    def test_collapses_runs_and_trims(self):
        assert slugify("  --Yin   &&  Yang!!  ") == "yin-yang"

    def test_non_ascii_is_dropped(self):
        assert slugify("Détente") == "d-tente"

    def test_only_symbols_gives_empty(self):
        assert slugify("!!!") == ""


class TestUniqueSlug:
    def test_has_base_and_numeric_suffix(self):
        slug = unique_slug("Power Yoga")
        assert re.fullmatch(r"power-yoga-\d+", slug)

    def test_fallback_when_title_has_no_letters(self):
        assert unique_slug("???").startswith("session-")

    def test_same_title_twice_never_collides(self):
        slugs = {unique_slug("Same Title") for _ in range(50)}
        assert len(slugs) == 50

    def test_tokens_are_increasing(self):
        first = int(unique_token())
        second = int(unique_token())
        assert second > first
