"""Resolution of configuration values from overrides, environment and ambient tools."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date
import logging
import re
import subprocess
from typing import Protocol

logger = logging.getLogger(__name__)

USER_NAME = "user_name"
USER_EMAIL = "user_email"
ACCOUNT_NAME = "account_name"
ORGANIZATION_NAME = "organization_name"
BUNDLE_IDENTIFIER_PREFIX = "bundle_identifier_prefix"

OVERRIDABLE_NAMES: tuple[str, ...] = (
    USER_NAME,
    USER_EMAIL,
    ACCOUNT_NAME,
    ORGANIZATION_NAME,
    BUNDLE_IDENTIFIER_PREFIX,
)

ENV_USER_NAME = "GIT_COMMITTER_NAME"
ENV_USER_EMAIL = "GIT_COMMITTER_EMAIL"
ENV_ACCOUNT_NAME = "GITHUB_ACCOUNT_NAME"

PLACEHOLDERS: dict[str, str] = {
    USER_NAME: "<GITHUB_USERNAME>",
    USER_EMAIL: "<USER_EMAIL>",
    ACCOUNT_NAME: "<GITHUB_ACCOUNT_NAME>",
}


@dataclass(frozen=True)
class OrganizationSettings:
    """Organization defaults stored by the IDE. Empty strings mean unset."""

    organization_name: str = ""
    bundle_identifier_prefix: str = ""


class AmbientSource(Protocol):
    """Already-configured values available on the current machine."""

    def query_account_name(self) -> str: ...

    def query_organization_settings(self) -> OrganizationSettings: ...

    def query_git_config(self, key: str) -> str: ...


def _run_query(args: list[str]) -> str:
    try:
        result = subprocess.run(args, capture_output=True, text=True, check=False)
    except (FileNotFoundError, PermissionError):
        logger.debug("%s is not available", args[0])
        return ""
    if result.returncode != 0:
        logger.debug("%s exited with %d", " ".join(args), result.returncode)
        return ""
    return result.stdout


_ACCOUNT_RE = re.compile(r'"acct"<blob>="([^"]*)"')
_DEFAULTS_RE = re.compile(r'^\s*(\w+)\s*=\s*"?(.*?)"?\s*;\s*$', re.MULTILINE)


class SystemAmbientSource:
    """Queries the keychain, the Xcode defaults domain and git."""

    def query_account_name(self) -> str:
        output = _run_query(["security", "find-internet-password", "-s", "github.com"])
        match = _ACCOUNT_RE.search(output)
        return match.group(1).strip() if match else ""

    def query_organization_settings(self) -> OrganizationSettings:
        output = _run_query(["defaults", "read", "-app", "Xcode", "IDETemplateOptions"])
        found = dict(_DEFAULTS_RE.findall(output))
        return OrganizationSettings(
            organization_name=found.get("organizationName", "").strip(),
            bundle_identifier_prefix=found.get("bundleIdentifierPrefix", "").strip(),
        )

    def query_git_config(self, key: str) -> str:
        return _run_query(["git", "config", key]).strip()


class ValueProvider:
    """
    Resolves configuration values by trying, in order, an explicit override,
    the environment, ambient queries and a literal placeholder.

    Every ambient query runs at most once per provider. Once frozen, the
    provider rejects further overrides.

    Args:
        ambient: Source of machine-level defaults.
        environ: Environment mapping consulted before ambient queries.
    """

    def __init__(self, ambient: AmbientSource, environ: Mapping[str, str] | None = None) -> None:
        self.ambient = ambient
        self.environ: Mapping[str, str] = environ if environ is not None else {}
        self._overrides: dict[str, str] = {}
        self._overridden: set[str] = set()
        self._queries: dict[str, str] = {}
        self._settings: OrganizationSettings | None = None
        self._frozen = False
        self._resolvers: dict[str, Callable[[], str]] = {
            USER_NAME: self._user_name,
            USER_EMAIL: self._user_email,
            ACCOUNT_NAME: self._account_name,
            ORGANIZATION_NAME: self._organization_name,
            BUNDLE_IDENTIFIER_PREFIX: self._bundle_identifier_prefix,
        }

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def override(self, name: str, value: str) -> None:
        """
        Record an operator-supplied value. Allowed once per name, before freezing.

        A blank value uses up the name too but is not stored, so resolution
        falls through to the other sources.
        """
        if name not in self._resolvers:
            raise KeyError(f"Unknown configuration value {name!r}.")
        if self._frozen:
            raise RuntimeError(f"Cannot override {name!r}: values are frozen.")
        if name in self._overridden:
            raise RuntimeError(f"{name!r} has already been overridden.")
        self._overridden.add(name)
        if value.strip():
            self._overrides[name] = value.strip()

    def resolve(self, name: str) -> str:
        if name not in self._resolvers:
            raise KeyError(f"Unknown configuration value {name!r}.")
        return self._resolvers[name]().strip()

    # ------------------------------------------------------------------

    def _first(self, *candidates: Callable[[], str | None]) -> str:
        for candidate in candidates:
            value = (candidate() or "").strip()
            if value:
                return value
        return ""

    def _cached(self, key: str, query: Callable[[], str]) -> str:
        if key not in self._queries:
            self._queries[key] = query()
        return self._queries[key]

    def _organization_settings(self) -> OrganizationSettings:
        if self._settings is None:
            self._settings = self.ambient.query_organization_settings()
        return self._settings

    def _keychain_account(self) -> str:
        account = self._cached("account", self.ambient.query_account_name).strip()
        # Keychain entries created with an email login are not account names.
        if not account or "@" in account:
            return ""
        return account

    def _git_config(self, key: str) -> str:
        return self._cached(f"git:{key}", lambda: self.ambient.query_git_config(key))

    def _user_name(self) -> str:
        return self._first(
            lambda: self._overrides.get(USER_NAME),
            lambda: self.environ.get(ENV_USER_NAME),
            lambda: self._git_config("user.name"),
            self._keychain_account,
            lambda: PLACEHOLDERS[USER_NAME],
        )

    def _user_email(self) -> str:
        return self._first(
            lambda: self._overrides.get(USER_EMAIL),
            lambda: self.environ.get(ENV_USER_EMAIL),
            lambda: self._git_config("user.email"),
            lambda: PLACEHOLDERS[USER_EMAIL],
        )

    def _account_name(self) -> str:
        return self._first(
            lambda: self._overrides.get(ACCOUNT_NAME),
            lambda: self.environ.get(ENV_ACCOUNT_NAME),
            self._keychain_account,
            lambda: PLACEHOLDERS[ACCOUNT_NAME],
        )

    def _organization_name(self) -> str:
        return self._first(
            lambda: self._overrides.get(ORGANIZATION_NAME),
            lambda: self._organization_settings().organization_name,
            self._user_name,
        )

    def _bundle_identifier_prefix(self) -> str:
        return self._first(
            lambda: self._overrides.get(BUNDLE_IDENTIFIER_PREFIX),
            lambda: self._organization_settings().bundle_identifier_prefix,
            lambda: f"io.github.{self._account_name()}",
        )


@dataclass(frozen=True, kw_only=True)
class ConfigValues:
    """
    Snapshot of every value a run substitutes into the template.

    Attributes:
        project_name: Name of the library being created.
        user_name: Author name.
        user_email: Author email.
        account_name: Hosting account that owns the repository.
        organization_name: Organization shown in file headers.
        bundle_identifier_prefix: Reverse-DNS prefix for bundle identifiers.
    """

    project_name: str
    user_name: str
    user_email: str
    account_name: str
    organization_name: str
    bundle_identifier_prefix: str

    def __post_init__(self) -> None:
        if not self.project_name.strip():
            raise ValueError("project_name must not be empty.")

    @property
    def repo_name(self) -> str:
        return self.project_name.replace("+", "-")

    @classmethod
    def from_provider(cls, project_name: str, provider: ValueProvider) -> ConfigValues:
        return cls(
            project_name=project_name,
            user_name=provider.resolve(USER_NAME),
            user_email=provider.resolve(USER_EMAIL),
            account_name=provider.resolve(ACCOUNT_NAME),
            organization_name=provider.resolve(ORGANIZATION_NAME),
            bundle_identifier_prefix=provider.resolve(BUNDLE_IDENTIFIER_PREFIX),
        )

    def tokens(self, today: date) -> dict[str, str]:
        """Placeholder tokens and their replacements."""
        return {
            "${POD_NAME}": self.project_name,
            "${REPO_NAME}": self.repo_name,
            "${GITHUB_ACCOUNT_NAME}": self.account_name,
            "${USER_NAME}": self.user_name,
            "${USER_EMAIL}": self.user_email,
            "${ORGANIZATION_NAME}": self.organization_name,
            "${BUNDLE_IDENTIFIER_PREFIX}": self.bundle_identifier_prefix,
            "${YEAR}": str(today.year),
            "${DATE}": today.strftime("%Y/%m/%d"),
        }
