"""Tests for CLI interface."""

import os
import tempfile

from click.testing import CliRunner

from ttlv.tools.cli import cli

# RequestHeader holding ProtocolVersion = Integer(6)
HEADER_HEX = "420077010000001042006902000000040000000600000000"


def describe_inspect_command():
    def renders_raw_codes(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["inspect", "--hex", HEADER_HEX])
        expect(result.exit_code) == 0
        expect("0x420077" in result.output) == True
        expect("INTEGER" in result.output) == True
        expect("Items" in result.output) == True

    def renders_tag_names(expect):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["inspect", "--hex", HEADER_HEX, "--tags", "ttlv.tests.sample_tags:Tag"]
        )
        expect(result.exit_code) == 0
        expect("REQUEST_HEADER" in result.output) == True
        expect("PROTOCOL_VERSION" in result.output) == True

    def accepts_prefixed_spaced_hex(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["inspect", "--hex", "0x42007701 00000010 " + HEADER_HEX[16:]])
        expect(result.exit_code) == 0

    def reads_input_file(expect):
        runner = CliRunner()
        with tempfile.NamedTemporaryFile(suffix=".bin", delete=False) as f:
            f.write(bytes.fromhex(HEADER_HEX) * 2)
            input_file = f.name

        try:
            result = runner.invoke(cli, ["inspect", "-i", input_file])
            expect(result.exit_code) == 0
            expect(result.output.count("STRUCTURE")) == 4
        finally:
            os.unlink(input_file)

    def empty_input(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["inspect", "--hex", ""])
        expect(result.exit_code) == 0
        expect("No items" in result.output) == True

    def fails_on_truncated_data(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["inspect", "--hex", HEADER_HEX[:-8]])
        expect(result.exit_code) == 1
        expect("Decode error" in result.output) == True
        expect("BufferTooShort" in result.output) == True

    def strict_rejects_dirty_padding(expect):
        dirty = HEADER_HEX[:-2] + "ff"
        runner = CliRunner()
        expect(runner.invoke(cli, ["inspect", "--hex", dirty]).exit_code) == 0

        result = runner.invoke(cli, ["inspect", "--strict", "--hex", dirty])
        expect(result.exit_code) == 1
        expect("InvalidPadding" in result.output) == True

    def applies_max_depth(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["inspect", "--max-depth", "0", "--hex", HEADER_HEX])
        expect(result.exit_code) == 1
        expect("RecursionLimitExceeded" in result.output) == True

    def requires_one_input(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["inspect"])
        expect(result.exit_code) == 2
        expect("exactly one of --input or --hex" in result.output) == True

    def rejects_bad_hex(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["inspect", "--hex", "zz"])
        expect(result.exit_code) == 2
        expect("not valid hex" in result.output) == True

    def rejects_bad_tags(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["inspect", "--hex", HEADER_HEX, "--tags", "no_colon"])
        expect(result.exit_code) == 2

        result = runner.invoke(
            cli, ["inspect", "--hex", HEADER_HEX, "--tags", "ttlv.tests.sample_tags:Missing"]
        )
        expect(result.exit_code) == 2
        expect("not an Enum class" in result.output) == True


def describe_length_command():
    def prints_full_size(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["length", "--hex", HEADER_HEX[:16]])
        expect(result.exit_code) == 0
        expect(result.output.strip()) == "24"

    def fails_on_short_header(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["length", "--hex", "420077"])
        expect(result.exit_code) == 1
        expect("Decode error" in result.output) == True


def describe_help():
    def lists_commands(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        expect(result.exit_code) == 0
        expect("inspect" in result.output) == True
        expect("length" in result.output) == True
