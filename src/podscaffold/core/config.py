"""Configuration dataclasses describing the template tree."""

from __future__ import annotations

from dataclasses import dataclass, field


def _default_substituted_files() -> list[str]:
    return ["POD_LICENSE", "POD_README.md", "NAME.podspec", ".travis.yml", "Example/Podfile"]


def _default_cleanup_paths() -> list[str]:
    return [
        "configure",
        "_CONFIGURE.rb",
        "README.md",
        "LICENSE",
        "templates",
        "setup",
        "CODE_OF_CONDUCT.md",
    ]


@dataclass(kw_only=True)
class TemplateLayout:
    """
    Paths inside a pod template, relative to the template root.

    Attributes:
        substituted_files: Files whose `${TOKEN}` placeholders are replaced.
        cleanup_paths: Template-only files and directories removed after substitution.
        cleanup_globs: Glob patterns of template-only files removed after substitution.
        renamed_files: Placeholder-named files and their final names. `{name}` is
            formatted with the project name.
        source_folder: Folder renamed to the project name.
        variants_dir: Directory holding one sub-tree per variant.
        fragments_dir: Directory holding the test-example fragments.
        cartfile: Carthage manifest receiving the declared libraries.
        podfile: CocoaPods manifest receiving the declared pods.
        prefix_header: Optional prefix header receiving the declared prefix lines.
            `{name}` is formatted with the project name.
        test_stub: Test file receiving the test-example fragment. `{ext}` is
            formatted with the fragment's extension.
        example_dir: Directory of the example application.
    """

    substituted_files: list[str] = field(default_factory=_default_substituted_files)
    cleanup_paths: list[str] = field(default_factory=_default_cleanup_paths)
    cleanup_globs: list[str] = field(default_factory=lambda: ["**/.gitkeep"])
    renamed_files: dict[str, str] = field(
        default_factory=lambda: {
            "POD_README.md": "README.md",
            "POD_LICENSE": "LICENSE",
            "NAME.podspec": "{name}.podspec",
        }
    )
    source_folder: str = "Pod"
    variants_dir: str = "templates"
    fragments_dir: str = "setup/test_examples"
    cartfile: str = "Cartfile.private"
    podfile: str = "Example/Podfile"
    prefix_header: str = "{name}Tests/Prefix.pch"
    test_stub: str = "Example/Tests/Tests.{ext}"
    example_dir: str = "Example"

    def __post_init__(self) -> None:
        if not self.source_folder:
            raise ValueError("source_folder must not be empty.")
        if "{ext}" not in self.test_stub:
            raise ValueError(f"test_stub must contain '{{ext}}', got {self.test_stub!r}.")
        for path in [*self.substituted_files, *self.cleanup_paths]:
            if path.startswith("/") or ".." in path.split("/"):
                raise ValueError(f"Template paths must stay inside the root, got {path!r}.")
