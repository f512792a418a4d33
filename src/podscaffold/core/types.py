"""Enums for platform, language and template variant choices."""

from __future__ import annotations

from enum import Enum


class Platform(str, Enum):
    """Target platform of the generated library."""

    IOS = "ios"
    MACOS = "macos"

    @property
    def label(self) -> str:
        labels: dict[Platform, str] = {
            Platform.IOS: "iOS",
            Platform.MACOS: "macOS",
        }
        return labels[self]

    @property
    def asks_language(self) -> bool:
        """Whether this platform needs a language decision."""
        return self is Platform.IOS


class Language(str, Enum):
    """Source language for iOS libraries."""

    OBJC = "objc"
    SWIFT = "swift"

    @property
    def label(self) -> str:
        labels: dict[Language, str] = {
            Language.OBJC: "ObjC",
            Language.SWIFT: "Swift",
        }
        return labels[self]


class Variant(str, Enum):
    """Mutually exclusive template variants. Exactly one is active per run."""

    MACOS = "macos"
    IOS_SWIFT = "ios-swift"
    IOS_OBJC = "ios-objc"

    @property
    def label(self) -> str:
        labels: dict[Variant, str] = {
            Variant.MACOS: "macOS (Swift)",
            Variant.IOS_SWIFT: "iOS (Swift)",
            Variant.IOS_OBJC: "iOS (Objective-C)",
        }
        return labels[self]

    @classmethod
    def from_choices(cls, platform: Platform, language: Language | None) -> Variant:
        """Map the operator's platform and language answers to a variant."""
        match platform, language:
            case Platform.MACOS, None:
                return cls.MACOS
            case Platform.IOS, Language.SWIFT:
                return cls.IOS_SWIFT
            case Platform.IOS, Language.OBJC:
                return cls.IOS_OBJC
            case _:
                raise ValueError(f"No variant for platform={platform!r}, language={language!r}.")
