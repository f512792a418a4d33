"""Configuration resolution and template materialization."""

from podscaffold.core.actions import ExternalActions, run_command
from podscaffold.core.config import TemplateLayout
from podscaffold.core.errors import PromptAborted, ScaffoldError, UnknownVariantError
from podscaffold.core.materializer import TemplateMaterializer, replace_tokens
from podscaffold.core.session import ConfigurationSession, SideEffectSet
from podscaffold.core.types import Language, Platform, Variant
from podscaffold.core.values import (
    AmbientSource,
    ConfigValues,
    OrganizationSettings,
    SystemAmbientSource,
    ValueProvider,
)
from podscaffold.core.variants import TestFragment, VariantDeclarations, declarations_for

__all__ = [
    "AmbientSource",
    "ConfigValues",
    "ConfigurationSession",
    "ExternalActions",
    "Language",
    "OrganizationSettings",
    "Platform",
    "PromptAborted",
    "ScaffoldError",
    "SideEffectSet",
    "SystemAmbientSource",
    "TemplateLayout",
    "TemplateMaterializer",
    "TestFragment",
    "UnknownVariantError",
    "ValueProvider",
    "Variant",
    "VariantDeclarations",
    "declarations_for",
    "replace_tokens",
    "run_command",
]
