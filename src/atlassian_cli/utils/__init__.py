"""
Utility functions for atlassian-cli.
"""

from .logging import (
    level_from_verbosity,
    log_config_param,
    mask_sensitive,
    setup_logging,
)
from .precedence import first_present, is_present, split_list, unique

__all__ = [
    "first_present",
    "is_present",
    "level_from_verbosity",
    "log_config_param",
    "mask_sensitive",
    "setup_logging",
    "split_list",
    "unique",
]
