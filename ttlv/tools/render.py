"""Rich rendering of decoded item trees."""

from dataclasses import dataclass
from datetime import timedelta

from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from ttlv.proto.tags import UnknownTag, describe_tag
from ttlv.proto.values import (
    EPOCH,
    Boolean,
    ByteString,
    DateTime,
    Enumeration,
    Item,
    Structure,
    TextString,
    Value,
)

# Longest byte string shown in full, in bytes
MAX_BYTES_SHOWN = 32


@dataclass(frozen=True)
class ItemStats:
    """Shape of one top-level item."""

    items: int
    depth: int


def describe_value(value: Value) -> str:
    """Short human-readable rendering of a value."""
    if isinstance(value, Structure):
        count = len(value)
        return f"{count} item{'s' if count != 1 else ''}"
    if isinstance(value, Boolean):
        return "true" if value.value else "false"
    if isinstance(value, TextString):
        return repr(value.value)
    if isinstance(value, ByteString):
        raw = bytes(value.value)
        shown = raw[:MAX_BYTES_SHOWN].hex()
        suffix = f"... ({len(raw)} bytes)" if len(raw) > MAX_BYTES_SHOWN else ""
        return f"0x{shown}{suffix}"
    if isinstance(value, Enumeration):
        return f"{value.value} (0x{value.value:08X})"
    if isinstance(value, DateTime):
        try:
            return f"{(EPOCH + timedelta(seconds=value.value)).isoformat()} ({value.value})"
        except OverflowError:
            return str(value.value)
    return str(value.value)  # type: ignore[attr-defined]


def item_label(item: Item) -> Text:
    tag_style = "yellow" if isinstance(item.tag, UnknownTag) else "bold white"
    return Text.assemble(
        (describe_tag(item.tag), tag_style),
        " ",
        (item.item_type.name, "cyan"),
        " ",
        (describe_value(item.value), "green"),
    )


def build_tree(item: Item) -> Tree:
    """Build a rich Tree mirroring the item's nesting."""
    tree = Tree(item_label(item))
    _add_children(tree, item)
    return tree


def _add_children(node: Tree, item: Item) -> None:
    if not isinstance(item.value, Structure):
        return
    for child in item.value.items:
        _add_children(node.add(item_label(child)), child)


def item_stats(item: Item) -> ItemStats:
    """Count the items in a tree and measure its structure nesting."""
    if not isinstance(item.value, Structure):
        return ItemStats(items=1, depth=0)

    items = 1
    depth = 0
    for child in item.value.items:
        child_stats = item_stats(child)
        items += child_stats.items
        depth = max(depth, child_stats.depth)
    return ItemStats(items=items, depth=depth + 1)


def summary_table(decoded: list[tuple[Item, int]]) -> Table:
    """One row per top-level item: tag, type, wire size and shape."""
    table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    table.add_column("Offset", style="dim", justify="right")
    table.add_column("Tag", style="white")
    table.add_column("Type", style="cyan")
    table.add_column("Size", style="yellow", justify="right")
    table.add_column("Items", justify="right")
    table.add_column("Depth", justify="right")

    offset = 0
    for item, consumed in decoded:
        stats = item_stats(item)
        table.add_row(
            str(offset),
            describe_tag(item.tag),
            item.item_type.name,
            f"{consumed} bytes",
            str(stats.items),
            str(stats.depth),
        )
        offset += consumed
    return table
