"""formvalidate CLI entry point."""

import click


@click.group()
def cli():
    """formvalidate — declarative form field validation CLI."""
    pass


# Register subcommands
from formvalidate.cli.form_cmd import check, lint, types_cmd  # noqa: E402

cli.add_command(check)
cli.add_command(lint)
cli.add_command(types_cmd)
