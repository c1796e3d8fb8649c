"""
Renders Markdown files as styled terminal text or as a JSON block listing,
and lists the Markdown files of a directory.
"""

from __future__ import annotations

import json
from pathlib import Path

import click
from .config import ConfigError, build_config
from .exceptions import FilesystemError
from .filesystem import list_markdown_files, list_subdirectories
from .pipeline import render_file
from .renderers import TerminalRenderer, document_to_dict

__all__ = ["cli"]


def _warn(message: str) -> None:
    click.echo(message, err=True)


@click.group()
@click.version_option(package_name="styled-markdown")
def cli():
    """Render Markdown into styled documents."""


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--dark/--light", "dark_mode", default=None, help="Color mode")
@click.option("--json", "as_json", is_flag=True, help="Print blocks as JSON")
@click.option("--bullet-marker", help="Prefix for list items")
@click.option("--dark-code-style", help="Pygments style for code on dark backgrounds")
@click.option("--light-code-style", help="Pygments style for code on light backgrounds")
def render(
    filepath: Path,
    dark_mode: bool | None = None,
    as_json: bool = False,
    bullet_marker: str | None = None,
    dark_code_style: str | None = None,
    light_code_style: str | None = None,
):
    """
    Render a Markdown file.

    Args:
        filepath: Path to the Markdown file to render.
        dark_mode: Override for the configured color mode.
        as_json: Print the document blocks as JSON instead of styled text.
        bullet_marker: Override for the list item prefix.
        dark_code_style: Override for the dark code style.
        light_code_style: Override for the light code style.

    Raises:
        click.BadParameter: If the configuration is invalid.
        click.ClickException: If the file cannot be read.

    Examples:
        styled-markdown render README.md --dark
    """
    try:
        config = build_config(
            filepath.resolve().parent,
            dark_mode=dark_mode,
            bullet_marker=bullet_marker,
            dark_code_style=dark_code_style,
            light_code_style=light_code_style,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        document = render_file(filepath, config=config, warn=_warn)
    except FilesystemError as error:
        raise click.ClickException(str(error)) from error

    if as_json:
        click.echo(json.dumps(document_to_dict(document), indent=2, ensure_ascii=False))
    else:
        TerminalRenderer(is_dark_mode=config.dark_mode).draw(document)


@cli.command("ls")
@click.argument("directory", default=".", type=click.Path(path_type=Path))
def list_command(directory: Path):
    """
    List subdirectories and Markdown files of DIRECTORY.

    Subdirectories come first and end with a slash.

    Examples:
        styled-markdown ls docs
    """
    try:
        subdirectories = list_subdirectories(directory)
        markdown_files = list_markdown_files(directory)
    except FilesystemError as error:
        raise click.ClickException(str(error)) from error

    for name in subdirectories:
        click.echo(f"{name}/")
    for name in markdown_files:
        click.echo(name)


if __name__ == "__main__":
    cli()
