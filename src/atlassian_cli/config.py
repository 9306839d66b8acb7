"""Configuration resolution for atlassian-cli.

Settings are merged from four tiers, highest priority first:

1. explicit CLI flags
2. environment variables
3. the project-local config file (``.atlassian.toml``)
4. the global config file (``~/.config/atlassian-cli/config.toml``)

Each setting is resolved on its own; a value found at a higher tier fully
shadows the lower tiers for that setting only.
"""

import logging
import os
import re
import stat
from collections.abc import Mapping
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path
from typing import Any, Protocol

import toml

from .exceptions import (
    ConfigError,
    InvalidDomainFormatError,
    InvalidEmailFormatError,
    InvalidSettingError,
    MissingCredentialError,
    ProfileNotFoundError,
)
from .utils.logging import log_config_param
from .utils.precedence import first_present, split_list, unique

logger = logging.getLogger("atlassian-cli.config")

DEFAULT_PROFILE = "default"
DEFAULT_TIMEOUT_MS = 30000
DEFAULT_RATE_LIMIT_DELAY_MS = 200
MIN_TIMEOUT_MS = 100
MAX_TIMEOUT_MS = 60000

GLOBAL_CONFIG_PATH = Path("~/.config/atlassian-cli/config.toml")
PROJECT_CONFIG_NAMES = (".atlassian.toml", ".atlassian/config.toml")

# Setting key -> value kind. Keys are dotted paths inside a profile table.
SETTINGS: dict[str, str] = {
    "domain": "str",
    "email": "str",
    "token": "str",
    "jira.projects_filter": "list",
    "jira.search_default_fields": "list",
    "jira.search_custom_fields": "list",
    "confluence.spaces_filter": "list",
    "confluence.custom_includes": "list",
    "optimization.response_exclude_fields": "list",
    "performance.request_timeout_ms": "int",
    "performance.rate_limit_delay_ms": "int",
}

ENV_VARS: dict[str, str] = {
    "domain": "ATLASSIAN_DOMAIN",
    "email": "ATLASSIAN_EMAIL",
    "token": "ATLASSIAN_API_TOKEN",
    "jira.projects_filter": "JIRA_PROJECTS_FILTER",
    "jira.search_default_fields": "JIRA_SEARCH_DEFAULT_FIELDS",
    "jira.search_custom_fields": "JIRA_SEARCH_CUSTOM_FIELDS",
    "confluence.spaces_filter": "CONFLUENCE_SPACES_FILTER",
    "confluence.custom_includes": "CONFLUENCE_CUSTOM_INCLUDES",
    "optimization.response_exclude_fields": "RESPONSE_EXCLUDE_FIELDS",
    "performance.request_timeout_ms": "REQUEST_TIMEOUT_MS",
    "performance.rate_limit_delay_ms": "RATE_LIMIT_DELAY_MS",
}

CONFIG_TEMPLATE = """[default]
domain = "company.atlassian.net"
email = "user@example.com"
# token = "..." # NOT recommended, use ATLASSIAN_API_TOKEN env var instead

[default.jira]
projects_filter = []
# search_default_fields = ["key", "summary", "status", "assignee"]
# search_custom_fields = ["customfield_10015"]

[default.confluence]
spaces_filter = []
# custom_includes = ["labels"]

[default.performance]
request_timeout_ms = 30000
rate_limit_delay_ms = 200

# [default.optimization]
# response_exclude_fields = ["avatarUrls", "iconUrl"]

# Additional profiles (multi-tenant support)
# [work]
# domain = "work.atlassian.net"
# email = "me@work.com"
"""

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+$")


class ConfigSource(Protocol):
    """A read-only tier of configuration values."""

    name: str

    def get(self, key: str, profile: str) -> Any:
        """Return the raw value stored under ``key`` or None."""
        ...


class EnvironmentSource:
    """Configuration tier backed by an environment mapping."""

    name = "environment"

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self.environ = dict(os.environ if environ is None else environ)

    def get(self, key: str, profile: str) -> str | None:
        env_var = ENV_VARS.get(key)
        if env_var is None:
            return None
        return self.environ.get(env_var)


class FileSource:
    """Configuration tier backed by a TOML file with profile tables."""

    def __init__(self, path: Path | None, name: str = "file") -> None:
        self.name = name
        self.path = path
        self._document: dict[str, Any] | None = None
        if path is not None and path.is_file():
            self._document = self._load(path)

    @property
    def exists(self) -> bool:
        return self._document is not None

    @staticmethod
    def _load(path: Path) -> dict[str, Any]:
        logger.debug(f"Loading config file: {path}")
        if os.name == "posix":
            mode = path.stat().st_mode
            if mode & (stat.S_IRWXG | stat.S_IRWXO):
                logger.warning(
                    f"Config file {path} has too permissive permissions: "
                    f"{stat.S_IMODE(mode):o}. Recommend: chmod 600 {path}"
                )
        try:
            return toml.load(path)
        except toml.TomlDecodeError as e:
            raise ConfigError(f"Failed to parse config file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to read config file {path}: {e}") from e

    def profile_table(self, profile: str) -> dict[str, Any]:
        """Return the table for a profile, or an empty dict if there is no file."""
        if self._document is None:
            return {}
        table = self._document.get(profile)
        if table is None:
            if profile != DEFAULT_PROFILE:
                raise ProfileNotFoundError(
                    f"Profile '{profile}' not found in {self.path}"
                )
            return {}
        if not isinstance(table, dict):
            raise ConfigError(f"Profile '{profile}' in {self.path} is not a table")
        return table

    def profiles(self) -> list[str]:
        """Names of the profile tables defined in the file."""
        if self._document is None:
            return []
        return [name for name, table in self._document.items() if isinstance(table, dict)]

    def get(self, key: str, profile: str) -> Any:
        node: Any = self.profile_table(profile)
        for part in key.split("."):
            if not isinstance(node, dict):
                return None
            node = node.get(part)
        return node


@dataclass(frozen=True)
class ResolvedConfig:
    """Immutable result of configuration resolution for one invocation."""

    domain: str | None
    email: str | None
    token: str | None
    profile_name: str = DEFAULT_PROFILE
    projects_filter: tuple[str, ...] = ()
    spaces_filter: tuple[str, ...] = ()
    search_default_fields: tuple[str, ...] | None = None
    search_custom_fields: tuple[str, ...] = ()
    confluence_custom_includes: tuple[str, ...] = ()
    response_exclude_fields: frozenset[str] = frozenset()
    request_timeout_ms: int = DEFAULT_TIMEOUT_MS
    rate_limit_delay_ms: int = DEFAULT_RATE_LIMIT_DELAY_MS

    @cached_property
    def base_url(self) -> str:
        """HTTPS base URL derived from the bare domain."""
        if not self.domain:
            return ""
        return f"https://{self.domain.rstrip('/')}"

    @property
    def wiki_url(self) -> str:
        return f"{self.base_url}/wiki"

    @property
    def timeout_seconds(self) -> float:
        return self.request_timeout_ms / 1000

    def validate(self) -> None:
        """Check credentials and numeric knobs.

        Raises:
            MissingCredentialError: If domain, email or token is missing
            InvalidDomainFormatError: If the domain carries a scheme or path
            InvalidEmailFormatError: If the email is malformed
            InvalidSettingError: If a numeric knob is out of range
        """
        for field in ("domain", "email", "token"):
            if not getattr(self, field):
                raise MissingCredentialError(field)

        domain = self.domain or ""
        if "://" in domain or re.match(r"^https?:", domain, re.IGNORECASE):
            raise InvalidDomainFormatError(
                f"Invalid Atlassian domain format: {domain}. "
                "Use a bare hostname such as company.atlassian.net"
            )
        if re.search(r"[\s/]", domain):
            raise InvalidDomainFormatError(
                f"Invalid Atlassian domain format: {domain}"
            )

        if not _EMAIL_RE.match(self.email or ""):
            raise InvalidEmailFormatError(f"Invalid email format: {self.email}")

        if not MIN_TIMEOUT_MS <= self.request_timeout_ms <= MAX_TIMEOUT_MS:
            raise InvalidSettingError(
                f"Request timeout must be between {MIN_TIMEOUT_MS}ms and {MAX_TIMEOUT_MS}ms"
            )
        if self.rate_limit_delay_ms < 0:
            raise InvalidSettingError("Rate limit delay must not be negative")


def _coerce(key: str, kind: str, value: Any) -> Any:
    if value is None:
        return None
    if kind == "list":
        if not isinstance(value, str | list | tuple):
            raise InvalidSettingError(f"Setting '{key}' must be a list of strings")
        return split_list(value)
    if kind == "int":
        try:
            return int(str(value).strip())
        except ValueError as e:
            env_var = ENV_VARS.get(key, key)
            raise InvalidSettingError(f"Invalid {env_var}: {value!r}") from e
    return str(value).strip() or None


class ConfigResolver:
    """Merges the configuration tiers into a ResolvedConfig."""

    def __init__(
        self,
        environment: ConfigSource,
        project_file: ConfigSource | None = None,
        global_file: ConfigSource | None = None,
    ) -> None:
        self.sources: list[ConfigSource] = [environment]
        if project_file is not None:
            self.sources.append(project_file)
        if global_file is not None:
            self.sources.append(global_file)

    def lookup(
        self, key: str, profile: str, overrides: Mapping[str, Any] | None = None
    ) -> Any:
        """Resolve one setting through the override/env/project/global chain."""
        kind = SETTINGS[key]
        candidates = [_coerce(key, kind, (overrides or {}).get(key))]
        candidates.extend(
            _coerce(key, kind, source.get(key, profile)) for source in self.sources
        )
        return first_present(*candidates)

    def resolve(
        self,
        overrides: Mapping[str, Any] | None = None,
        profile_name: str | None = None,
        validate: bool = True,
    ) -> ResolvedConfig:
        """
        Produce the resolved configuration for this invocation.

        Args:
            overrides: CLI-supplied values keyed by setting name
            profile_name: Profile table to read from config files
            validate: Whether to run credential and range validation

        Returns:
            The immutable ResolvedConfig

        Raises:
            ConfigError: If a file, value, or credential is invalid
        """
        profile = profile_name or DEFAULT_PROFILE

        def get(key: str) -> Any:
            return self.lookup(key, profile, overrides)

        def as_tuple(key: str) -> tuple[str, ...]:
            return tuple(unique(get(key) or []))

        default_fields = get("jira.search_default_fields")
        timeout = get("performance.request_timeout_ms")
        delay = get("performance.rate_limit_delay_ms")

        config = ResolvedConfig(
            domain=get("domain"),
            email=get("email"),
            token=get("token"),
            profile_name=profile,
            projects_filter=as_tuple("jira.projects_filter"),
            spaces_filter=as_tuple("confluence.spaces_filter"),
            search_default_fields=(
                tuple(default_fields) if default_fields is not None else None
            ),
            search_custom_fields=as_tuple("jira.search_custom_fields"),
            confluence_custom_includes=as_tuple("confluence.custom_includes"),
            response_exclude_fields=frozenset(
                get("optimization.response_exclude_fields") or []
            ),
            request_timeout_ms=DEFAULT_TIMEOUT_MS if timeout is None else timeout,
            rate_limit_delay_ms=(
                DEFAULT_RATE_LIMIT_DELAY_MS if delay is None else delay
            ),
        )

        log_config_param(logger, "profile", config.profile_name)
        log_config_param(logger, "domain", config.domain)
        log_config_param(logger, "email", config.email)
        log_config_param(logger, "token", config.token, sensitive=True)

        if validate:
            config.validate()
        return config


def global_config_path() -> Path:
    return GLOBAL_CONFIG_PATH.expanduser()


def project_config_path(start: Path | None = None) -> Path | None:
    """Walk up from ``start`` (default: cwd) looking for a project config file."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        for name in PROJECT_CONFIG_NAMES:
            candidate = directory / name
            if candidate.is_file():
                return candidate
    return None


def load_config(
    config_path: Path | None = None,
    profile: str | None = None,
    domain: str | None = None,
    email: str | None = None,
    token: str | None = None,
    validate: bool = True,
    environ: Mapping[str, str] | None = None,
) -> ResolvedConfig:
    """
    Build the standard resolver and resolve the configuration.

    ``config_path`` replaces the discovered project-local file.
    """
    project_path = config_path if config_path is not None else project_config_path()
    if config_path is not None and not config_path.is_file():
        raise ConfigError(f"Config file not found: {config_path}")

    resolver = ConfigResolver(
        EnvironmentSource(environ),
        FileSource(project_path, name="project"),
        FileSource(global_config_path(), name="global"),
    )
    return resolver.resolve(
        {"domain": domain, "email": email, "token": token},
        profile_name=profile,
        validate=validate,
    )


def init_config(global_: bool = False, directory: Path | None = None) -> Path:
    """Write the config template and restrict it to the owner.

    Raises:
        ConfigError: If the file already exists
    """
    if global_:
        path = global_config_path()
    else:
        path = (directory or Path.cwd()) / PROJECT_CONFIG_NAMES[0]

    if path.exists():
        raise ConfigError(f"Config file already exists: {path}")

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
    if os.name == "posix":
        path.chmod(0o600)
    logger.info(f"Created config file: {path}")
    return path
