"""Command-line interface for inspecting TTLV data."""

from __future__ import annotations

import importlib
import logging
import sys
from enum import Enum
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from ttlv.proto.decoding import iter_decode, peek_length
from ttlv.proto.errors import DecodeError
from ttlv.proto.options import DEFAULT_MAX_DEPTH, DecodeOptions
from ttlv.proto.tags import RAW_TAGS, EnumTags, TagMap
from ttlv.tools.render import build_tree, summary_table


def _parse_hex(hex_data: str) -> bytes:
    cleaned = "".join(hex_data.split())
    if cleaned.lower().startswith("0x"):
        cleaned = cleaned[2:]
    try:
        return bytes.fromhex(cleaned)
    except ValueError as exc:
        raise click.BadParameter(f"not valid hex: {exc}", param_hint="--hex") from exc


def _read_input(input_file: str | None, hex_data: str | None) -> bytes:
    if (input_file is None) == (hex_data is None):
        raise click.UsageError("Pass exactly one of --input or --hex")
    if hex_data is not None:
        return _parse_hex(hex_data)
    return Path(input_file).read_bytes()  # type: ignore[arg-type]


def load_tags(enum_path: str | None) -> TagMap:
    """Load a tag enum given as ``package.module:EnumClass``."""
    if enum_path is None:
        return RAW_TAGS

    module_name, sep, attr = enum_path.partition(":")
    if not sep or not module_name or not attr:
        raise click.BadParameter("expected module:EnumClass", param_hint="--tags")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise click.BadParameter(f"cannot import {module_name}: {exc}", param_hint="--tags") from exc

    enum_cls = getattr(module, attr, None)
    if not isinstance(enum_cls, type) or not issubclass(enum_cls, Enum):
        raise click.BadParameter(f"{enum_path} is not an Enum class", param_hint="--tags")
    try:
        return EnumTags(enum_cls)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--tags") from exc


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """TTLV inspection tools."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option(
    "--input",
    "-i",
    "input_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Binary file holding TTLV items",
)
@click.option("--hex", "hex_data", default=None, help="TTLV items as a hex string")
@click.option("--strict", is_flag=True, default=False, help="Require zero padding")
@click.option(
    "--max-depth",
    type=click.IntRange(min=0),
    default=DEFAULT_MAX_DEPTH,
    show_default=True,
    help="Deepest structure nesting accepted",
)
@click.option("--tags", "tags_path", default=None, help="Tag enum as module:EnumClass")
def inspect(
    input_file: str | None,
    hex_data: str | None,
    strict: bool,
    max_depth: int,
    tags_path: str | None,
) -> None:
    """Decode TTLV items and display them as a tree."""
    data = _read_input(input_file, hex_data)
    tags = load_tags(tags_path)
    options = DecodeOptions(max_depth=max_depth, strict_padding=strict)
    console = Console()

    try:
        decoded = list(iter_decode(data, tags, options))
    except DecodeError as exc:
        console.print(f"[bold red]Decode error ({type(exc).__name__}):[/bold red] {escape(str(exc))}")
        sys.exit(1)

    if not decoded:
        console.print("[dim]No items[/dim]")
        return

    for item, _ in decoded:
        console.print(build_tree(item))
    console.print()
    console.print("[bold cyan]Items[/bold cyan]")
    console.print(summary_table(decoded))


@cli.command()
@click.option("--hex", "hex_data", required=True, help="At least the 8-byte item header, as hex")
def length(hex_data: str) -> None:
    """Print the full encoded size announced by an item header."""
    data = _parse_hex(hex_data)
    try:
        size = peek_length(data)
    except DecodeError as exc:
        print(f"Decode error: {exc}")
        sys.exit(1)
    print(size)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
