"""Option decorators shared across command groups."""

import click

format_option = click.option(
    "--format",
    "output_format",
    type=click.Choice(["html", "markdown"]),
    default="html",
    show_default=True,
    help="Render document bodies as returned by the API or as Markdown",
)


def pagination_options(default_limit: int):
    """Add --limit, --all and --stream to a search command."""

    def decorator(func):
        func = click.option(
            "--stream",
            is_flag=True,
            help="With --all, write each result as a JSON line as pages arrive",
        )(func)
        func = click.option(
            "--all", "fetch_all", is_flag=True, help="Fetch every page of results"
        )(func)
        func = click.option(
            "--limit",
            type=click.IntRange(min=1),
            default=default_limit,
            show_default=True,
            help="Maximum results for a single page",
        )(func)
        return func

    return decorator
