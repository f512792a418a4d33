"""Turns a pod template tree into a finished library skeleton on disk."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date
import logging
from pathlib import Path
import shutil

from podscaffold.core.config import TemplateLayout
from podscaffold.core.session import SideEffectSet
from podscaffold.core.values import ConfigValues
from podscaffold.core.variants import TestFragment, VariantDeclarations

logger = logging.getLogger(__name__)

LIBS_TOKEN = "${INCLUDED_LIBS}"
PODS_TOKEN = "${INCLUDED_PODS}"
PREFIXES_TOKEN = "${INCLUDED_PREFIXES}"
TEST_EXAMPLE_TOKEN = "${TEST_EXAMPLE}"


def replace_tokens(text: str, tokens: Mapping[str, str]) -> str:
    """Replace every occurrence of each token. Unknown `${...}` markers are left as is."""
    for token, value in tokens.items():
        text = text.replace(token, value)
    return text


def format_cartfile_entries(libs: Sequence[str]) -> str:
    return "\n".join(f'github "{lib}"' for lib in libs)


def format_podfile_entries(pods: Sequence[str]) -> str:
    return "\n    ".join(f"pod '{pod}'" for pod in pods)


def format_prefix_lines(prefixes: Sequence[str]) -> str:
    return "\n  ".join(prefixes)


def _rewrite(path: Path, tokens: Mapping[str, str]) -> None:
    text = path.read_text(encoding="utf-8")
    path.write_text(replace_tokens(text, tokens), encoding="utf-8")


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink(missing_ok=True)


class TemplateMaterializer:
    """
    Applies the template steps in a fixed order: activation, substitution,
    cleanup, renaming, dependency fold, prefix fold and test fold. Each step
    assumes the previous ones already ran.

    A required file missing at read time raises `FileNotFoundError`; steps
    already applied are not rolled back.

    Args:
        root: Template root, rewritten in place.
        layout: Paths inside the template.
        today: Date used for `${YEAR}` and `${DATE}`. Defaults to the current date.
    """

    def __init__(
        self,
        root: Path,
        layout: TemplateLayout | None = None,
        today: date | None = None,
    ) -> None:
        self.root = root
        self.layout = layout or TemplateLayout()
        self.today = today or date.today()

    def materialize(
        self,
        values: ConfigValues,
        declarations: VariantDeclarations,
        side_effects: SideEffectSet,
    ) -> None:
        """Run every step for one variant, consuming *side_effects*."""
        side_effects.consume()
        fragment = side_effects.test_fragment or declarations.test_fragment

        logger.info("activating template %s", declarations.subtree)
        example = self.activate(declarations.subtree, fragment)
        self.substitute(values)
        self.clean()
        self.rename(values.project_name)
        self.fold_libs(side_effects.libs)
        self.fold_pods(side_effects.pods)
        self.fold_prefixes(side_effects.prefixes, values.project_name)
        self.fold_test_example(example, fragment.extension)

    def activate(self, subtree: str, fragment: TestFragment) -> str:
        """
        Copy the variant's sub-tree over the root and return the test-example
        fragment, read now because cleanup removes the fragment library.
        """
        source = self.root / self.layout.variants_dir / subtree
        if not source.is_dir():
            raise FileNotFoundError(f"Template variant directory not found: {source}")
        shutil.copytree(source, self.root, dirs_exist_ok=True)
        return (self.root / self.layout.fragments_dir / fragment.filename).read_text(
            encoding="utf-8"
        )

    def substitute(self, values: ConfigValues) -> None:
        tokens = values.tokens(self.today)
        for name in self.layout.substituted_files:
            _rewrite(self.root / name, tokens)

    def clean(self) -> None:
        for pattern in self.layout.cleanup_globs:
            for path in list(self.root.glob(pattern)):
                _remove(path)
        for name in self.layout.cleanup_paths:
            _remove(self.root / name)

    def rename(self, project_name: str) -> None:
        for src, dst in self.layout.renamed_files.items():
            (self.root / src).rename(self.root / dst.format(name=project_name))
        (self.root / self.layout.source_folder).rename(self.root / project_name)

    def fold_libs(self, libs: Sequence[str]) -> None:
        _rewrite(self.root / self.layout.cartfile, {LIBS_TOKEN: format_cartfile_entries(libs)})

    def fold_pods(self, pods: Sequence[str]) -> None:
        _rewrite(self.root / self.layout.podfile, {PODS_TOKEN: format_podfile_entries(pods)})

    def fold_prefixes(self, prefixes: Sequence[str], project_name: str) -> None:
        path = self.root / self.layout.prefix_header.format(name=project_name)
        if not path.exists():
            logger.debug("no prefix header at %s", path)
            return
        _rewrite(path, {PREFIXES_TOKEN: format_prefix_lines(prefixes)})

    def fold_test_example(self, example: str, extension: str) -> None:
        path = self.root / self.layout.test_stub.format(ext=extension)
        _rewrite(path, {TEST_EXAMPLE_TOKEN: example})
