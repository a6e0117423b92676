"""Form CLI commands — check, lint and types."""

import logging
from pathlib import Path

import click

from formvalidate.forms.headless import HeadlessRenderer, StaticLocator
from formvalidate.forms.loader import FormDefinitionLoader
from formvalidate.forms.schema import validate_form_file
from formvalidate.validation import (
    CheckRegistry,
    ConfigurationError,
    FieldState,
    FormValidator,
    TriggerKind,
    register_all_builtins,
)

_STATE_STYLE = {
    FieldState.VALID: ("✓", "green"),
    FieldState.INVALID: ("✗", "red"),
    FieldState.NEUTRAL: ("·", "yellow"),
    FieldState.UNVALIDATED: ("?", None),
}


def _bootstrap() -> None:
    """Register built-ins once per process."""
    if not CheckRegistry.has_check("required"):
        register_all_builtins()


@click.command()
@click.argument("form_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--trigger",
    type=click.Choice([k.value for k in TriggerKind]),
    default=TriggerKind.FORM_SUBMITTED.value,
    show_default=True,
    help="Trigger to validate every field with.",
)
@click.option("--summary", is_flag=True, default=False, help="Print the summary markup.")
@click.option("--debug", is_flag=True, default=False, help="Verbose validation diagnostics.")
def check(form_file: Path, trigger: str, summary: bool, debug: bool):
    """Validate the field values declared in a form definition."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    _bootstrap()

    issues = [i for i in validate_form_file(form_file) if i.severity == "error"]
    if issues:
        for issue in issues:
            click.echo(click.style(str(issue), fg="red"), err=True)
        click.echo(f"Error: {form_file} is not a valid form definition", err=True)
        raise SystemExit(2)

    try:
        form = FormDefinitionLoader(form_file).load_file(form_file)
    except ValueError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(2)
    if debug:
        form.settings.debug = True

    renderer = HeadlessRenderer()
    try:
        validator = FormValidator(form, StaticLocator(), renderer, settings=form.settings)
    except ConfigurationError as e:
        click.echo(click.style(f"Configuration error: {e}", fg="red"), err=True)
        raise SystemExit(2)

    kind = TriggerKind(trigger)
    result = None
    if kind is TriggerKind.FORM_SUBMITTED:
        result = validator.on_submit()
    else:
        for field_validator in validator.fields:
            validator.validate_field(field_validator.name, kind)

    click.echo(f"Form '{form.name}' ({len(validator.fields)} fields, trigger: {kind.value}):")
    for field_validator in validator.fields:
        symbol, colour = _STATE_STYLE[field_validator.state]
        line = f"  {symbol} {field_validator.name} [{field_validator.adapter.name}] {field_validator.state.value}"
        display = renderer.display(field_validator.name)
        if display.message is not None:
            line += f": {display.message.text}"
        click.echo(click.style(line, fg=colour))

    if result is not None and summary and result.rejected:
        click.echo(result.render_summary())

    invalid = [f for f in validator.fields if f.state is FieldState.INVALID]
    if invalid:
        click.echo(
            click.style(
                f"\n{len(invalid)} invalid field(s)"
                + ("; submission rejected" if result is not None else ""),
                fg="red",
                bold=True,
            )
        )
        raise SystemExit(1)

    if validator.is_valid:
        click.echo(click.style("\nAll fields are valid.", fg="green", bold=True))
    else:
        click.echo("\nNo errors surfaced yet.")


@click.command()
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
def lint(files: tuple[Path, ...]):
    """Validate form definition YAML files against the JSON Schema."""
    issues = []
    for path in files:
        issues.extend(validate_form_file(path))

    for issue in issues:
        colour = "red" if issue.severity == "error" else "yellow"
        click.echo(click.style(str(issue), fg=colour))

    errors = [i for i in issues if i.severity == "error"]
    if errors:
        click.echo(click.style(f"\n{len(errors)} schema error(s) found", fg="red", bold=True))
        raise SystemExit(1)

    click.echo(click.style(f"{len(files)} form definition(s) valid.", fg="green", bold=True))


@click.command("types")
def types_cmd():
    """List registered field types and checks."""
    _bootstrap()
    click.echo("Field types:")
    for name in CheckRegistry.list_field_types():
        click.echo(f"  {name}")
    click.echo("Checks:")
    for name in CheckRegistry.list_checks():
        click.echo(f"  {name}")
