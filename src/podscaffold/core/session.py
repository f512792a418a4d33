"""Configuration session: confirms values and picks the template variant for one run."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Protocol

from podscaffold.core.types import Language, Platform, Variant
from podscaffold.core.values import (
    ACCOUNT_NAME,
    BUNDLE_IDENTIFIER_PREFIX,
    ORGANIZATION_NAME,
    OVERRIDABLE_NAMES,
    USER_EMAIL,
    USER_NAME,
    ConfigValues,
    ValueProvider,
)
from podscaffold.core.variants import TestFragment, VariantDeclarations, declarations_for

logger = logging.getLogger(__name__)

_CONFIRM_QUESTIONS: dict[str, str] = {
    USER_NAME: "Do you want to change the default value of `${USER_NAME}`",
    USER_EMAIL: "Do you want to change the default value of `${USER_EMAIL}`",
    ACCOUNT_NAME: "Do you want to change the default value of `${GITHUB_ACCOUNT_NAME}`",
    ORGANIZATION_NAME: "Do you want to change the default value of `Organization Name`",
    BUNDLE_IDENTIFIER_PREFIX: "Do you want to change the default value of `Bundle Identifier Prefix`",  # noqa: E501
}


class Asker(Protocol):
    """The interactive operations a session needs."""

    def ask_choice(self, question: str, answers: list[str]) -> str: ...

    def ask_with_default(self, question: str, default: str) -> str | None: ...


@dataclass
class SideEffectSet:
    """
    Deferred instructions gathered while configuring and applied once during
    materialization. Insertion order is kept and duplicates are preserved.
    """

    libs: list[str] = field(default_factory=list)
    pods: list[str] = field(default_factory=list)
    prefixes: list[str] = field(default_factory=list)
    test_fragment: TestFragment | None = None
    consumed: bool = False

    def add_lib(self, name: str) -> None:
        self.libs.append(name)

    def add_pod(self, name: str) -> None:
        self.pods.append(name)

    def add_prefix(self, line: str) -> None:
        self.prefixes.append(line)

    def set_test_fragment(self, fragment: TestFragment) -> None:
        if self.test_fragment is not None:
            raise RuntimeError(f"Test fragment already set to {self.test_fragment.filename!r}.")
        self.test_fragment = fragment

    def extend(self, declarations: VariantDeclarations) -> None:
        for lib in declarations.libs:
            self.add_lib(lib)
        for pod in declarations.pods:
            self.add_pod(pod)
        for line in declarations.prefixes:
            self.add_prefix(line)
        self.set_test_fragment(declarations.test_fragment)

    def consume(self) -> None:
        if self.consumed:
            raise RuntimeError("Side effects have already been applied.")
        self.consumed = True


class ConfigurationSession:
    """
    Owns every configuration value and the side-effect set of one run.

    `confirm_all` runs exactly once, then `choose_variant` runs exactly once.

    Args:
        project_name: Name of the library being created.
        provider: Resolves defaults and stores operator overrides.
        asker: Interactive boundary used for every question.
    """

    def __init__(self, project_name: str, provider: ValueProvider, asker: Asker) -> None:
        if not project_name.strip():
            raise ValueError("project_name must not be empty.")
        self.project_name = project_name.strip()
        self.provider = provider
        self.asker = asker
        self.side_effects = SideEffectSet()
        self.variant: Variant | None = None
        self.declarations: VariantDeclarations | None = None
        self._confirmed = False

    def confirm_all(self) -> None:
        if self._confirmed:
            raise RuntimeError("Values have already been confirmed.")
        for name in OVERRIDABLE_NAMES:
            default = self.provider.resolve(name)
            answer = self.asker.ask_with_default(_CONFIRM_QUESTIONS[name], default)
            if answer is not None:
                logger.debug("override %s=%r", name, answer)
                self.provider.override(name, answer)
        self._confirmed = True

    def choose_variant(self) -> Variant:
        if not self._confirmed:
            raise RuntimeError("confirm_all() must run before choose_variant().")
        if self.variant is not None:
            raise RuntimeError(f"Variant already chosen: {self.variant.value!r}.")

        platform = Platform(
            self.asker.ask_choice(
                "What platform do you want to use", [p.label for p in Platform]
            )
        )
        language: Language | None = None
        if platform.asks_language:
            language = Language(
                self.asker.ask_choice(
                    "What language do you want to use", [lang.label for lang in Language]
                )
            )

        variant = Variant.from_choices(platform, language)
        declarations = declarations_for(variant)
        self.side_effects.extend(declarations)
        self.variant = variant
        self.declarations = declarations
        logger.debug("variant %s -> %s", variant.value, declarations.subtree)
        return variant

    def values(self) -> ConfigValues:
        """Freeze the provider and return the values used for materialization."""
        self.provider.freeze()
        return ConfigValues.from_provider(self.project_name, self.provider)
