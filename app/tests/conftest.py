"""
Shared fixtures for the calculator tests.
"""

import io

import pytest
from rich.console import Console

from badcalc.config import Config
from badcalc.history import HistoryStore


def make_console() -> Console:
    """Plain-text console writing to an in-memory buffer."""
    return Console(
        file=io.StringIO(),
        color_system=None,
        markup=False,
        emoji=False,
        highlight=False,
        soft_wrap=True,
    )


@pytest.fixture
def config(tmp_path):
    """Config pointing at a temporary data directory."""
    return Config(data_dir=tmp_path / ".badcalc")


@pytest.fixture
def history(config):
    """History store with its directory already created."""
    config.data_dir.mkdir(parents=True)
    return HistoryStore(config.history_path)
