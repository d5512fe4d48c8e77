"""Tests for keyword-based locale detection."""

import pytest

from src.conversation.locale_resolver import LocaleResolver
from src.schemas.session_schema import Locale, Session


class TestResolve:
    @pytest.mark.parametrize("text", [
        "Bună ziua, sunt nou aici",
        "Mulțumesc frumos",
        "multumesc",
        "da",
        "Nu, nu acum",
        "vreau sa ma pontez",
    ])
    def test_romanian_markers(self, locale_resolver, text):
        assert locale_resolver.resolve(text) == Locale.RO

    @pytest.mark.parametrize("text", [
        "clock in",
        "start onboarding",
        "I need the number for today",
        "What's the menu on Sunday?",
        "start kitchen checklist",
    ])
    def test_defaults_to_english(self, locale_resolver, text):
        assert locale_resolver.resolve(text) == Locale.EN

    def test_case_insensitive(self, locale_resolver):
        assert locale_resolver.resolve("BUNĂ") == Locale.RO

    def test_custom_marker_table(self):
        resolver = LocaleResolver(markers={Locale.RO: ("ciao",)})
        assert resolver.resolve("ciao a tutti") == Locale.RO
        assert resolver.resolve("bună") == Locale.EN


class TestApply:
    def test_sets_locale_when_unset(self, locale_resolver):
        session = Session()
        assert locale_resolver.apply(session, "mulțumesc") == Locale.RO
        assert session.locale == Locale.RO

    def test_locale_is_sticky(self, locale_resolver):
        session = Session(locale=Locale.RO)
        locale_resolver.apply(session, "clock in")
        assert session.locale == Locale.RO

    @pytest.mark.parametrize("greeting, turn_locale", [
        ("hi", Locale.EN),
        ("Hello!", Locale.EN),
        ("hey", Locale.EN),
        ("salut", Locale.RO),
        ("Bună!", Locale.RO),
    ])
    def test_greeting_sets_locale_for_its_turn(self, locale_resolver, greeting, turn_locale):
        session = Session(locale=Locale.RO if turn_locale == Locale.EN else Locale.EN)
        assert locale_resolver.apply(session, greeting) == turn_locale
        assert session.locale == turn_locale

    @pytest.mark.parametrize("greeting", ["hi", "Hello!", "salut", "buna"])
    def test_end_turn_clears_greeting_locale(self, locale_resolver, greeting):
        session = Session()
        locale_resolver.apply(session, greeting)
        locale_resolver.end_turn(session, greeting)
        assert session.locale is None

    def test_end_turn_keeps_resolved_locale(self, locale_resolver):
        session = Session()
        locale_resolver.apply(session, "mersi")
        locale_resolver.end_turn(session, "mersi")
        assert session.locale == Locale.RO

    def test_next_message_after_greeting_redetects(self, locale_resolver):
        session = Session(locale=Locale.EN)
        locale_resolver.apply(session, "hello")
        locale_resolver.end_turn(session, "hello")
        locale_resolver.apply(session, "bună, vreau să mă pontez")
        assert session.locale == Locale.RO
