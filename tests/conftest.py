"""Shared fixtures for the podscaffold test suite."""

from __future__ import annotations

from collections import Counter
from datetime import date
from pathlib import Path

import pytest

from podscaffold.core.values import OrganizationSettings, ValueProvider


class StaticAmbient:
    """Ambient source returning fixed values and counting every query."""

    def __init__(
        self,
        account: str = "",
        organization: OrganizationSettings | None = None,
        git: dict[str, str] | None = None,
    ) -> None:
        self.account = account
        self.organization = organization or OrganizationSettings()
        self.git = git or {}
        self.calls: Counter[str] = Counter()

    def query_account_name(self) -> str:
        self.calls["account"] += 1
        return self.account

    def query_organization_settings(self) -> OrganizationSettings:
        self.calls["organization"] += 1
        return self.organization

    def query_git_config(self, key: str) -> str:
        self.calls[f"git:{key}"] += 1
        return self.git.get(key, "")


PREFIX_HEADER = "#ifdef __OBJC__\n  ${INCLUDED_PREFIXES}\n#endif\n"

TEMPLATE_FILES: dict[str, str] = {
    "POD_LICENSE": "Copyright (c) ${YEAR} ${USER_NAME} <${USER_EMAIL}>\n",
    "POD_README.md": (
        "# ${POD_NAME}\n"
        "\n"
        "https://github.com/${GITHUB_ACCOUNT_NAME}/${REPO_NAME}\n"
        "Keep ${UNKNOWN_TOKEN} as is.\n"
    ),
    "NAME.podspec": (
        "Pod::Spec.new do |s|\n"
        "  s.name = '${POD_NAME}'\n"
        "  s.author = { '${USER_NAME}' => '${USER_EMAIL}' }\n"
        "  # Created ${DATE} for ${ORGANIZATION_NAME} (${BUNDLE_IDENTIFIER_PREFIX})\n"
        "end\n"
    ),
    ".travis.yml": "script: xcodebuild -workspace Example/${POD_NAME}.xcworkspace\n",
    "Cartfile.private": "# Test dependencies\n${INCLUDED_LIBS}\n# end\n",
    "README.md": "Template readme\n",
    "LICENSE": "Template license\n",
    "CODE_OF_CONDUCT.md": "Be nice\n",
    "configure": "#!/usr/bin/env ruby\n",
    "_CONFIGURE.rb": "# configure\n",
    "Pod/Classes/ReplaceMe.m": "// ${POD_NAME}\n",
    "Pod/Classes/.gitkeep": "",
    "Pod/Assets/.gitkeep": "",
    "setup/test_examples/specta.m": "describe(@\"specta\", ^{});",
    "setup/test_examples/quick.swift": "describe(\"quick\") {}",
    "setup/test_examples/xctest.swift": "func testExample() {}",
    "templates/ios/Example/Podfile": (
        "target '${POD_NAME}_Tests' do\n    ${INCLUDED_PODS}\nend\n"
    ),
    "templates/ios/Example/Tests/Tests.m": "// Tests\n${TEST_EXAMPLE}\n",
    "templates/swift/Example/Podfile": (
        "target '${POD_NAME}_Tests' do\n    ${INCLUDED_PODS}\nend\n"
    ),
    "templates/swift/Example/Tests/Tests.swift": "import XCTest\n${TEST_EXAMPLE}\n",
    "templates/macos-swift/Example/Podfile": "target '${POD_NAME}_Tests' do\nend\n",
    "templates/macos-swift/Example/Tests/Tests.swift": "import XCTest\n${TEST_EXAMPLE}\n",
}


def write_template(root: Path) -> Path:
    for name, content in TEMPLATE_FILES.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


def write_prefix_header(root: Path, project_name: str) -> Path:
    """Add the iOS prefix header, which lives in a folder named after the project."""
    path = root / "templates/ios" / f"{project_name}Tests" / "Prefix.pch"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(PREFIX_HEADER, encoding="utf-8")
    return path


@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    """A minimal pod template with one sub-tree per variant."""
    return write_template(tmp_path / "template")


@pytest.fixture
def today() -> date:
    return date(2024, 3, 7)


@pytest.fixture
def ambient() -> StaticAmbient:
    return StaticAmbient(
        account="octocat",
        organization=OrganizationSettings(),
        git={"user.name": "Mona Lisa", "user.email": "mona@example.com"},
    )


@pytest.fixture
def provider(ambient: StaticAmbient) -> ValueProvider:
    return ValueProvider(ambient, environ={})
