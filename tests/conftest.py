"""Shared fixtures for the nuclidesim test suite."""

import matplotlib

matplotlib.use("Agg")  # Non-interactive backend

import pytest

from nuclidesim.data.decay_table import load_decay_table
from nuclidesim.physics.engine import NuclideEngine


@pytest.fixture(scope="session")
def table():
    """Packaged decay table, built once."""
    return load_decay_table()


@pytest.fixture
def engine(table):
    """Engine over the packaged table with a fixed random stream."""
    return NuclideEngine(table, seed=1234)
