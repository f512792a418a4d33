"""Per-variant declarations: template sub-tree, dependencies, prefix lines, test fragment."""

from __future__ import annotations

from dataclasses import dataclass

from podscaffold.core.errors import UnknownVariantError
from podscaffold.core.types import Variant


@dataclass(frozen=True)
class TestFragment:
    """A test-example snippet in the fragment library, addressed by name and extension."""

    __test__ = False

    name: str
    extension: str

    @property
    def filename(self) -> str:
        return f"{self.name}.{self.extension}"


@dataclass(frozen=True, kw_only=True)
class VariantDeclarations:
    """
    Everything a variant contributes to materialization.

    Attributes:
        subtree: Directory under the variants dir copied over the template root.
        libs: Carthage libraries, in declaration order.
        pods: CocoaPods dependencies, in declaration order.
        prefixes: Prefix-header lines, in declaration order.
        test_fragment: Test example spliced into the test stub.
    """

    subtree: str
    libs: tuple[str, ...] = ()
    pods: tuple[str, ...] = ()
    prefixes: tuple[str, ...] = ()
    test_fragment: TestFragment


_DECLARATIONS: dict[Variant, VariantDeclarations] = {
    Variant.IOS_OBJC: VariantDeclarations(
        subtree="ios",
        libs=("specta/specta", "specta/expecta"),
        pods=("Specta", "Expecta"),
        prefixes=("@import Specta;", "@import Expecta;"),
        test_fragment=TestFragment("specta", "m"),
    ),
    Variant.IOS_SWIFT: VariantDeclarations(
        subtree="swift",
        libs=("Quick/Quick", "Quick/Nimble"),
        pods=("Quick", "Nimble"),
        test_fragment=TestFragment("quick", "swift"),
    ),
    Variant.MACOS: VariantDeclarations(
        subtree="macos-swift",
        test_fragment=TestFragment("xctest", "swift"),
    ),
}


def declarations_for(variant: Variant) -> VariantDeclarations:
    """Return the declarations of *variant*. Unmapped variants are a programming error."""
    try:
        return _DECLARATIONS[variant]
    except KeyError:
        raise UnknownVariantError(f"No declarations registered for variant {variant!r}.") from None
