"""Tests for tree rendering"""

# pylint: disable=unused-variable,expression-not-assigned

import io

from rich.console import Console

from ttlv.proto.tags import UnknownTag
from ttlv.proto.values import (
    BigInteger,
    Boolean,
    ByteString,
    DateTime,
    Enumeration,
    Integer,
    Item,
    Structure,
    TextString,
)
from ttlv.tests.sample_tags import Tag
from ttlv.tools import render
from ttlv.tools.render import (
    MAX_BYTES_SHOWN,
    ItemStats,
    build_tree,
    item_label,
    item_stats,
    summary_table,
)


def _render(renderable) -> str:
    output = io.StringIO()
    Console(file=output, width=120).print(renderable)
    return output.getvalue()


def describe_describe_value():
    def structure_counts_items(expect):
        expect(render.describe_value(Structure())) == "0 items"
        expect(render.describe_value(Structure([Item(Tag.BATCH_COUNT, Integer(1))]))) == "1 item"

    def scalars(expect):
        expect(render.describe_value(Integer(-3))) == "-3"
        expect(render.describe_value(BigInteger(2**70))) == str(2**70)
        expect(render.describe_value(Boolean(True))) == "true"
        expect(render.describe_value(TextString("hi"))) == "'hi'"
        expect(render.describe_value(Enumeration(255))) == "255 (0x000000FF)"

    def byte_string(expect):
        expect(render.describe_value(ByteString(b"\x01\xab"))) == "0x01ab"

    def long_byte_string_is_cut(expect):
        text = render.describe_value(ByteString(bytes(MAX_BYTES_SHOWN + 1)))
        expect(text.endswith(f"... ({MAX_BYTES_SHOWN + 1} bytes)")) == True

    def date_time(expect):
        expect(render.describe_value(DateTime(0x47DA67F8))) == "2008-03-14T11:56:40+00:00 (1205495800)"

    def date_time_beyond_calendar(expect):
        expect(render.describe_value(DateTime(2**62))) == str(2**62)


def describe_item_label():
    def names_tag_and_type(expect):
        label = item_label(Item(Tag.BATCH_COUNT, Integer(2)))
        expect(label.plain) == "BATCH_COUNT INTEGER 2"

    def unknown_tag(expect):
        label = item_label(Item(UnknownTag(0x540001), Boolean(False)))
        expect(label.plain) == "0x540001 BOOLEAN false"


def describe_tree():
    def nests_children(expect):
        item = Item(
            Tag.REQUEST_HEADER,
            Structure([Item(Tag.PROTOCOL_VERSION, Structure([Item(Tag.BATCH_COUNT, Integer(1))]))]),
        )
        output = _render(build_tree(item))
        lines = [line for line in output.splitlines() if line.strip()]
        expect(len(lines)) == 3
        expect("REQUEST_HEADER" in lines[0]) == True
        expect("BATCH_COUNT" in lines[2]) == True


def describe_stats():
    def leaf(expect):
        expect(item_stats(Item(Tag.BATCH_COUNT, Integer(1)))) == ItemStats(items=1, depth=0)

    def nested(expect):
        item = Item(
            Tag.REQUEST_MESSAGE,
            Structure(
                [
                    Item(Tag.REQUEST_HEADER, Structure([Item(Tag.BATCH_COUNT, Integer(1))])),
                    Item(Tag.BATCH_ITEM, Structure()),
                ]
            ),
        )
        expect(item_stats(item)) == ItemStats(items=4, depth=2)

    def summary_rows(expect):
        decoded = [
            (Item(Tag.REQUEST_HEADER, Structure([Item(Tag.BATCH_COUNT, Integer(1))])), 24),
            (Item(Tag.OPERATION, Enumeration(1)), 16),
        ]
        table = summary_table(decoded)
        expect(table.row_count) == 2

        output = _render(table)
        expect("24 bytes" in output) == True
        expect("OPERATION" in output) == True
