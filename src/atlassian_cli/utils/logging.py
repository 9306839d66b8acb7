"""Logging utilities for atlassian-cli.

All diagnostics go to stderr so that stdout carries only JSON output.
"""

import logging
import os

TRUTHY_VALUES = ("true", "1", "yes")


def setup_logging(level: int = logging.WARNING) -> logging.Logger:
    """
    Configure atlassian-cli logging on stderr.

    Args:
        level: The minimum logging level to display (default: WARNING)

    Returns:
        The configured logger instance
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to prevent duplication
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    formatter = logging.Formatter("%(levelname)s - %(name)s - %(message)s")
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # The atlassian library logs every request at INFO
    logging.getLogger("atlassian").setLevel(max(level, logging.WARNING))

    logger = logging.getLogger("atlassian-cli")
    logger.setLevel(level)
    return logger


def level_from_verbosity(verbose: int) -> int:
    """Map a ``-v`` count (falling back to env flags) to a logging level."""
    if verbose == 1:
        return logging.INFO
    if verbose >= 2:
        return logging.DEBUG
    if os.getenv("ATLASSIAN_CLI_VERY_VERBOSE", "false").lower() in TRUTHY_VALUES:
        return logging.DEBUG
    if os.getenv("ATLASSIAN_CLI_VERBOSE", "false").lower() in TRUTHY_VALUES:
        return logging.INFO
    return logging.WARNING


def mask_sensitive(value: str | None, keep_chars: int = 4) -> str:
    """Masks sensitive strings for logging.

    Args:
        value: The string to mask
        keep_chars: Number of characters to keep visible at start and end

    Returns:
        Masked string with most characters replaced by asterisks
    """
    if not value:
        return "Not Provided"
    if len(value) <= keep_chars * 2:
        return "*" * len(value)
    return f"{value[:keep_chars]}{'*' * (len(value) - keep_chars * 2)}{value[-keep_chars:]}"


def log_config_param(
    logger: logging.Logger,
    param: str,
    value: str | None,
    sensitive: bool = False,
) -> None:
    """Logs a resolved configuration parameter, masking if sensitive."""
    display_value = mask_sensitive(value) if sensitive else (value or "Not Provided")
    logger.debug(f"Config {param}: {display_value}")
