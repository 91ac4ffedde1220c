"""
Command line interface for tagdown.
Converts tagged Markdown to standard Markdown, re-indents it, and reports its
folding ranges and structure.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

import click

from .beautifier import beautify
from .config import ConfigError, TagdownConfig, build_config
from .filesystem import (
    collect_file_stat,
    enforce_file_size,
    ensure_file_unchanged,
    get_max_file_size,
    get_max_line_length,
    normalize_filepath,
    write_atomically,
    write_output,
)
from .folding import folding_ranges
from .parser import ParseFileError, parse_document, read_document
from .transformer import convert_to_markdown

__all__ = ["cli"]

logger = logging.getLogger(__name__)


@dataclass
class LoadedDocument:
    """A document read from disk along with the stats guarding its rewrite."""

    path: Path
    text: str
    config: TagdownConfig
    initial_stat: os.stat_result
    post_read_stat: os.stat_result


def _load_document(filepath: str, **overrides: object) -> LoadedDocument:
    """Resolve, configure, and read a document for any subcommand.

    Raises:
        click.BadParameter: If the path or configuration overrides are invalid.
        click.ClickException: If limits are exceeded or reading fails.
    """
    base_dir = Path.cwd().resolve()
    try:
        path = normalize_filepath(filepath, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    try:
        config = build_config(path.parent, **overrides)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
        max_line_length = get_max_line_length(default=config.max_line_length)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        initial_stat = collect_file_stat(path)
        enforce_file_size(initial_stat, max_file_size, path)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    try:
        text = read_document(path, max_line_length, config)
    except (ParseFileError, ConfigError) as error:
        raise click.ClickException(str(error)) from error

    try:
        post_read_stat = collect_file_stat(path)
        ensure_file_unchanged(initial_stat, post_read_stat, path)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    logger.debug("Loaded %s (%d characters)", path, len(text))
    return LoadedDocument(path, text, config, initial_stat, post_read_stat)


@click.group()
@click.version_option(package_name="tagdown")
@click.option("-v", "--verbose", is_flag=True, help="Log parsing details to stderr")
def cli(verbose: bool = False):
    """
    Work with Markdown documents structured by custom angle-bracket tags.

    Examples:
        tagdown convert CLAUDE.md --output preview.md
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    help="Write the Markdown to this file instead of stdout",
)
@click.option("--base-level", type=int, help="Header level for top-level tags")
@click.option("--max-level", type=int, help="Deepest header level to emit")
@click.option(
    "--escape-underscores/--no-escape-underscores",
    default=None,
    help="Escape underscores in tag and attribute names",
)
def convert(
    filepath: str,
    output: str | None = None,
    base_level: int | None = None,
    max_level: int | None = None,
    escape_underscores: bool | None = None,
):
    """
    Convert a tagged document to standard Markdown.

    Tags become headers whose level follows their nesting depth; closing tags
    become blank lines; fenced code is copied unchanged.

    Examples:
        tagdown convert CLAUDE.md --base-level 3
    """
    document = _load_document(
        filepath,
        base_header_level=base_level,
        max_header_level=max_level,
        escape_underscores=escape_underscores,
    )
    markdown = convert_to_markdown(document.text, document.config)

    if output is None:
        click.echo(markdown, nl=False)
        return

    try:
        write_output(Path(output), markdown)
    except IOError as error:
        raise click.ClickException(str(error)) from error


@cli.command(name="beautify")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
@click.option("-i", "--in-place", is_flag=True, help="Rewrite the file instead of printing")
@click.option("--check", is_flag=True, help="Exit with status 1 if the file would change")
@click.option("--indent-spaces", type=int, help="Spaces per nesting level")
def beautify_command(
    filepath: str,
    in_place: bool = False,
    check: bool = False,
    indent_spaces: int | None = None,
):
    """
    Indent tag bodies by nesting depth.

    Examples:
        tagdown beautify CLAUDE.md --in-place
    """
    if in_place and check:
        raise click.UsageError("--in-place and --check are mutually exclusive")

    document = _load_document(filepath, indent_spaces=indent_spaces)
    formatted = beautify(document.text, document.config)

    if check:
        if formatted != document.text:
            click.echo(f"{document.path} would be reformatted", err=True)
            raise SystemExit(1)
        return

    if not in_place:
        click.echo(formatted, nl=False)
        return

    if formatted == document.text:
        logger.debug("%s is already formatted", document.path)
        return

    try:
        write_atomically(
            document.path,
            formatted,
            document.post_read_stat,
            document.initial_stat,
            warn=lambda message: click.echo(message, err=True),
        )
    except IOError as error:
        raise click.ClickException(str(error)) from error


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
@click.option("--zero-based", is_flag=True, help="Report zero-based line numbers")
def folds(filepath: str, zero_based: bool = False):
    """
    List folding ranges as ``START-END KIND``, one per line.

    Examples:
        tagdown folds CLAUDE.md
    """
    document = _load_document(filepath)
    offset = 0 if zero_based else 1
    for fold in folding_ranges(parse_document(document.text)):
        click.echo(f"{fold.start + offset}-{fold.end + offset} {fold.kind.value}")


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def structure(filepath: str):
    """
    Print the tags, headers and horizontal rules of a document as JSON.

    Line numbers are zero-based.
    """
    document = _load_document(filepath)
    parsed = parse_document(document.text)
    payload = {
        "tags": [
            {
                "name": tag.name,
                "kind": tag.kind.value,
                "line": tag.line,
                "indent": tag.indent,
                "attributes": tag.attributes,
                "start": tag.start_offset,
                "end": tag.end_offset,
            }
            for tag in parsed.tags
        ],
        "headers": [
            {"level": header.level, "line": header.line, "text": header.text}
            for header in parsed.headers
        ],
        "horizontal_rules": sorted(parsed.horizontal_rules),
    }
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    cli()
