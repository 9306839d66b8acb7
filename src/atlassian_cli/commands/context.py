"""Per-invocation state shared by the click commands."""

from dataclasses import dataclass, field
from pathlib import Path

import click

from ..config import ResolvedConfig, load_config
from ..confluence import ConfluenceFetcher
from ..jira import JiraFetcher


@dataclass
class CliContext:
    """Global options, with the configuration resolved on first use."""

    config_path: Path | None = None
    profile: str | None = None
    domain: str | None = None
    email: str | None = None
    token: str | None = None
    pretty: bool = False
    _config: ResolvedConfig | None = field(default=None, repr=False)

    def resolve(self, validate: bool = True) -> ResolvedConfig:
        """Resolve the configuration for this invocation.

        Raises:
            ConfigError: If a file is unreadable or a credential is invalid
        """
        if self._config is not None and validate:
            self._config.validate()
            return self._config
        config = load_config(
            config_path=self.config_path,
            profile=self.profile,
            domain=self.domain,
            email=self.email,
            token=self.token,
            validate=validate,
        )
        self._config = config
        return config

    def jira(self) -> JiraFetcher:
        return JiraFetcher(self.resolve())

    def confluence(self) -> ConfluenceFetcher:
        return ConfluenceFetcher(self.resolve())


pass_cli = click.make_pass_decorator(CliContext, ensure=True)
