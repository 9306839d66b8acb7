"""Exception hierarchy for atlassian-cli."""

from typing import Any


class AtlassianCLIError(Exception):
    """Base class for all errors raised by atlassian-cli."""


class ConfigError(AtlassianCLIError):
    """Raised when configuration cannot be resolved or is invalid."""


class MissingCredentialError(ConfigError):
    """Raised when a required credential is absent after merging all tiers."""

    ENV_VARS = {
        "domain": "ATLASSIAN_DOMAIN",
        "email": "ATLASSIAN_EMAIL",
        "token": "ATLASSIAN_API_TOKEN",
    }

    def __init__(self, field: str) -> None:
        self.field = field
        env_var = self.ENV_VARS.get(field, field.upper())
        super().__init__(
            f"{env_var} not configured. Set via:\n"
            f"  1. --{field} flag\n"
            f"  2. {env_var} env var\n"
            f"  3. Config file: atlassian-cli config init"
        )


class InvalidDomainFormatError(ConfigError):
    """Raised when the configured domain is not a bare hostname."""


class InvalidEmailFormatError(ConfigError):
    """Raised when the configured email is malformed."""


class InvalidSettingError(ConfigError):
    """Raised when a numeric or list setting cannot be parsed or is out of range."""


class ProfileNotFoundError(ConfigError):
    """Raised when a named profile is missing from a config file."""


class UsageError(AtlassianCLIError):
    """Raised on invalid flag combinations, before any network access."""


class ConversionError(AtlassianCLIError):
    """Raised when outbound document processing rejects its input."""


class InvalidDocumentShapeError(ConversionError):
    """Raised when an object input is not a top-level ADF document."""


class UnsupportedInputShapeError(ConversionError):
    """Raised when the input is neither text nor an ADF document."""


class TransportError(AtlassianCLIError):
    """Raised when an API call fails, carrying the request context."""

    def __init__(
        self,
        method: str,
        url: str,
        status: int | None = None,
        body: Any = None,
        message: str | None = None,
    ) -> None:
        self.method = method.upper()
        self.url = url
        self.status = status
        self.body = body
        status_part = f" ({status})" if status is not None else ""
        detail = message or (str(body) if body else "request failed")
        super().__init__(f"{self.method} {url} failed{status_part}: {detail}")


class AuthenticationError(TransportError):
    """Raised when the API rejects the credentials (401/403)."""
