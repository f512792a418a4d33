"""Unit tests for the configuration session."""

from __future__ import annotations

import pytest

from podscaffold.core.session import ConfigurationSession
from podscaffold.core.types import Variant
from podscaffold.core.values import ValueProvider


class ScriptedAsker:
    """Answers questions from fixed scripts and records what was asked."""

    def __init__(
        self, choices: list[str] | None = None, overrides: list[str | None] | None = None
    ) -> None:
        self.choices = list(choices or [])
        self.overrides = list(overrides or [])
        self.choice_questions: list[tuple[str, list[str]]] = []
        self.default_questions: list[tuple[str, str]] = []

    def ask_choice(self, question: str, answers: list[str]) -> str:
        self.choice_questions.append((question, answers))
        return self.choices.pop(0)

    def ask_with_default(self, question: str, default: str) -> str | None:
        self.default_questions.append((question, default))
        return self.overrides.pop(0) if self.overrides else None


def _confirmed(
    provider: ValueProvider, choices: list[str]
) -> tuple[ConfigurationSession, ScriptedAsker]:
    asker = ScriptedAsker(choices=choices)
    session = ConfigurationSession("MyLib", provider, asker)
    session.confirm_all()
    return session, asker


class TestConfirmAll:
    def test_asks_every_value_with_resolved_default(self, provider: ValueProvider) -> None:
        asker = ScriptedAsker()
        ConfigurationSession("MyLib", provider, asker).confirm_all()

        defaults = [default for _, default in asker.default_questions]
        assert defaults == [
            "Mona Lisa",
            "mona@example.com",
            "octocat",
            "Mona Lisa",
            "io.github.octocat",
        ]

    def test_non_null_answers_become_overrides(self, provider: ValueProvider) -> None:
        asker = ScriptedAsker(overrides=["Ada", None, "ada-l", None, None])
        session = ConfigurationSession("MyLib", provider, asker)
        session.confirm_all()
        values = session.values()

        assert values.user_name == "Ada"
        assert values.user_email == "mona@example.com"
        assert values.account_name == "ada-l"

    def test_later_defaults_see_earlier_overrides(self, provider: ValueProvider) -> None:
        asker = ScriptedAsker(overrides=["Ada", None, "ada-l"])
        ConfigurationSession("MyLib", provider, asker).confirm_all()

        defaults = [default for _, default in asker.default_questions]
        assert defaults[3] == "Ada"
        assert defaults[4] == "io.github.ada-l"

    def test_runs_once(self, provider: ValueProvider) -> None:
        session = ConfigurationSession("MyLib", provider, ScriptedAsker())
        session.confirm_all()

        with pytest.raises(RuntimeError, match="already been confirmed"):
            session.confirm_all()

    def test_blank_project_name_rejected(self, provider: ValueProvider) -> None:
        with pytest.raises(ValueError, match="project_name"):
            ConfigurationSession("  ", provider, ScriptedAsker())


class TestChooseVariant:
    def test_macos_never_asks_language(self, provider: ValueProvider) -> None:
        session, asker = _confirmed(provider, ["macos"])

        assert session.choose_variant() is Variant.MACOS
        assert len(asker.choice_questions) == 1
        assert session.side_effects.libs == []
        assert session.side_effects.test_fragment is not None
        assert session.side_effects.test_fragment.name == "xctest"

    def test_ios_always_asks_language(self, provider: ValueProvider) -> None:
        session, asker = _confirmed(provider, ["ios", "swift"])

        assert session.choose_variant() is Variant.IOS_SWIFT
        assert len(asker.choice_questions) == 2
        assert asker.choice_questions[0][1] == ["iOS", "macOS"]
        assert asker.choice_questions[1][1] == ["ObjC", "Swift"]
        assert session.side_effects.libs == ["Quick/Quick", "Quick/Nimble"]

    def test_ios_objc_accumulates_prefixes(self, provider: ValueProvider) -> None:
        session, _ = _confirmed(provider, ["ios", "objc"])

        assert session.choose_variant() is Variant.IOS_OBJC
        assert session.side_effects.prefixes == ["@import Specta;", "@import Expecta;"]
        assert session.declarations is not None
        assert session.declarations.subtree == "ios"

    def test_requires_confirmation_first(self, provider: ValueProvider) -> None:
        session = ConfigurationSession("MyLib", provider, ScriptedAsker(choices=["macos"]))

        with pytest.raises(RuntimeError, match="confirm_all"):
            session.choose_variant()

    def test_selection_is_irreversible(self, provider: ValueProvider) -> None:
        session, _ = _confirmed(provider, ["macos", "ios", "swift"])
        session.choose_variant()

        with pytest.raises(RuntimeError, match="already chosen"):
            session.choose_variant()


class TestValues:
    def test_freezes_provider(self, provider: ValueProvider) -> None:
        session, _ = _confirmed(provider, ["macos"])
        session.choose_variant()
        values = session.values()

        assert provider.frozen
        assert values.project_name == "MyLib"
        with pytest.raises(RuntimeError):
            provider.override("user_name", "Too Late")
