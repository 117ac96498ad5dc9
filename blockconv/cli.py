"""blockconv CLI application with Typer."""

from pathlib import Path
from typing import Annotated

import typer

from blockconv import __version__
from blockconv.bootstrap import bootstrap_application
from blockconv.config import CopyOptions, get_settings
from blockconv.errors import BlockconvError, ConfigurationError, ValidationError
from blockconv.utils.cli_output import json_response
from blockconv.utils.logging import configure_logging

app = typer.Typer(
    name="blockconv",
    help="Copy a byte range from a file or stdin, applying UTF-8 aware text conversions",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"blockconv version {__version__}")
        raise typer.Exit()


@app.command()
def copy(
    from_path: Annotated[
        Path | None,
        typer.Option("--from", help="File to read. By default - stdin"),
    ] = None,
    to_path: Annotated[
        Path | None,
        typer.Option("--to", help="File to write; must not exist yet. By default - stdout"),
    ] = None,
    offset: Annotated[
        int,
        typer.Option("--offset", help="Number of bytes to skip from the beginning of the input"),
    ] = 0,
    limit: Annotated[
        int | None,
        typer.Option("--limit", help="Maximum number of bytes to read. By default - the whole input"),
    ] = None,
    block_size: Annotated[
        int | None,
        typer.Option(
            "--block-size",
            help="Size of a block read before any conversion and write. Default - 1024",
        ),
    ] = None,
    conv: Annotated[
        str | None,
        typer.Option(
            "--conv",
            help="Comma-separated conversions: upper_case, lower_case, trim_spaces",
        ),
    ] = None,
    report: Annotated[
        bool,
        typer.Option("--report", help="Print a JSON run summary to stderr when done"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log diagnostic details to stderr"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Stream the input to the output, converting text on the way."""

    settings = get_settings()
    configure_logging("DEBUG" if verbose else settings.log_level)

    try:
        options = CopyOptions.build(
            source_path=from_path,
            target_path=to_path,
            offset=offset,
            limit=limit,
            block_size=block_size if block_size is not None else settings.default_block_size,
            conversions=conv,
        )
        container = bootstrap_application(settings)
        job = container.build_job(options)
        stats = container.copy_service.run(job)
    except (ConfigurationError, ValidationError) as exc:
        typer.secho(f"Error validating input parameters: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=exc.exit_code) from exc
    except BlockconvError as exc:
        typer.secho(f"Unexpected error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=exc.exit_code) from exc

    if report:
        typer.echo(json_response("copy_report", 1, **stats.to_dict()), err=True)


if __name__ == "__main__":
    app()
