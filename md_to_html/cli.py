"""
Converts Markdown files (headers, paragraphs, inline links) to HTML.
Each input is written to a matching `.html` file, or to stdout with `--stdout`.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

import click
from .config import ConfigError, build_config
from .converter import ConvertFileError, convert_file
from .filesystem import (
    derive_output_path,
    get_max_file_size,
    get_max_line_length,
    normalize_filepath,
)

__all__ = ["cli"]


@click.command()
@click.version_option(package_name="md-to-html")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    help="Output file (single input only)",
)
@click.option(
    "--output-dir",
    type=click.Path(exists=True, file_okay=False, writable=True),
    help="Directory for generated HTML files",
)
@click.option("--stdout", "to_stdout", is_flag=True, help="Print HTML instead of writing files")
@click.option(
    "--strict/--lenient",
    "strict_links",
    default=None,
    help="Reject or tolerate out-of-order link markers",
)
@click.option("--fail-fast", is_flag=True, help="Abort on the first malformed line")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.argument("filepaths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
def cli(
    filepaths: tuple[str, ...],
    output: str | None = None,
    output_dir: str | None = None,
    to_stdout: bool = False,
    strict_links: bool | None = None,
    fail_fast: bool = False,
    verbose: bool = False,
):
    """
    Convert Markdown files to HTML.

    Args:
        filepaths: Paths to the Markdown files to convert.
        output: Explicit output path; only valid with a single input.
        output_dir: Directory receiving the generated files.
        to_stdout: Print HTML to stdout instead of writing files.
        strict_links: Override for the link policy; None keeps the configured one.
        fail_fast: Abort a file on its first malformed line.
        verbose: Enable debug logging on stderr.

    Returns:
        None.

    Raises:
        click.BadParameter: If CLI parameters reference invalid paths, conflict
            with each other, or contain invalid configuration values.
        click.ClickException: If conversion fails due to limits, malformed
            content, or filesystem errors.

    Examples:
        md-to-html README.md --lenient -o index.html
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if output is not None and len(filepaths) > 1:
        raise click.BadParameter("--output can only be used with a single input file")
    if to_stdout and (output is not None or output_dir is not None):
        raise click.BadParameter("--stdout cannot be combined with --output or --output-dir")

    for raw_path in filepaths:
        _convert_one(
            raw_path,
            output=output,
            output_dir=output_dir,
            to_stdout=to_stdout,
            strict_links=strict_links,
            fail_fast=fail_fast,
        )


def _convert_one(
    raw_path: str,
    output: str | None,
    output_dir: str | None,
    to_stdout: bool,
    strict_links: bool | None,
    fail_fast: bool,
) -> None:
    try:
        filepath = normalize_filepath(raw_path)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    try:
        config = build_config(
            filepath.parent,
            strict_links=strict_links,
            skip_malformed=False if fail_fast else None,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
        max_line_length = get_max_line_length(default=config.max_line_length)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    if to_stdout:
        output_path = None
    elif output is not None:
        output_path = Path(output)
    else:
        output_path = derive_output_path(
            filepath,
            Path(output_dir) if output_dir is not None else None,
            config.output_suffix,
        )

    config = replace(config, max_file_size=max_file_size, max_line_length=max_line_length)
    try:
        result = convert_file(
            filepath,
            output_path,
            config,
            warn=lambda message: click.echo(f"{filepath}: {message}", err=True),
        )
    except ConvertFileError as error:
        raise click.ClickException(str(error)) from error

    if output_path is None:
        click.echo(result.html, nl=False)
    else:
        click.echo(f"Converted {filepath} -> {output_path}")


if __name__ == "__main__":
    cli()
