"""External commands run after the template is materialized."""

from __future__ import annotations

from collections.abc import Callable, Sequence
import logging
from pathlib import Path
import shutil
import subprocess

from podscaffold.core.config import TemplateLayout

logger = logging.getLogger(__name__)

CommandRunner = Callable[[Sequence[str], Path], object]


def run_command(args: Sequence[str], cwd: Path) -> object:
    """Run *args* to completion. The exit status is not inspected."""
    try:
        return subprocess.run(list(args), cwd=cwd, check=False)
    except FileNotFoundError:
        logger.warning("%s not found, skipping `%s`", args[0], " ".join(args))
        return None


class ExternalActions:
    """
    Source-control re-initialization and dependency-manager invocations.

    Args:
        root: Materialized project root.
        runner: Executes one command in a directory.
        layout: Template paths, used to locate the example application.
    """

    def __init__(
        self,
        root: Path,
        runner: CommandRunner = run_command,
        layout: TemplateLayout | None = None,
    ) -> None:
        self.root = root
        self.runner = runner
        self.layout = layout or TemplateLayout()

    def run_all(self, project_name: str) -> None:
        self.reinitialize_git_repo()
        self.run_carthage_update()
        self.run_pod_install(project_name)

    def reinitialize_git_repo(self) -> None:
        git_dir = self.root / ".git"
        if git_dir.exists():
            shutil.rmtree(git_dir)
        self.runner(["git", "init"], self.root)
        self.runner(["git", "add", "-A"], self.root)

    def run_carthage_update(self) -> None:
        self.runner(["carthage", "update"], self.root)

    def run_pod_install(self, project_name: str) -> None:
        example = self.layout.example_dir
        self.runner(["pod", "install"], self.root / example)
        pbxproj = f"{example}/{project_name}Example.xcodeproj/project.pbxproj"
        self.runner(["git", "add", pbxproj], self.root)
        self.runner(["git", "commit", "-m", "Initial commit"], self.root)
