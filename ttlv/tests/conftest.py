"""Unit tests configuration file."""

import pytest

from ttlv.proto.tags import EnumTags
from ttlv.tests.sample_tags import Tag


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


@pytest.fixture
def tags():
    return EnumTags(Tag)
