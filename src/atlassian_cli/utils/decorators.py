import logging
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

import click

from ..exceptions import AtlassianCLIError, UsageError

logger = logging.getLogger("atlassian-cli")

F = TypeVar("F", bound=Callable[..., Any])


def handle_cli_errors(func: F) -> F:
    """
    Decorator for click commands that turns library errors into click errors.

    UsageError exits with status 2, every other AtlassianCLIError with 1.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except UsageError as e:
            raise click.UsageError(str(e)) from e
        except AtlassianCLIError as e:
            logger.debug(f"Command {func.__name__} failed", exc_info=True)
            raise click.ClickException(str(e)) from e

    return wrapper  # type: ignore
