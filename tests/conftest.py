"""Pytest fixtures for p2dfit tests."""

import pytest

import numpy as np

from p2dfit.core.fitting.simulation import sample_p2d


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(42)


@pytest.fixture
def small_distances():
    """Five distances scattered around 6."""
    return np.array([5.0, 6.0, 7.0, 5.5, 6.5])


@pytest.fixture
def synthetic_distances(rng):
    """Distances drawn from p2d(r; mu=6, sigma=1.5)."""
    return sample_p2d(6.0, 1.5, 5000, rng)


@pytest.fixture
def sample_config_file(tmp_path):
    """Write a fixed-sigma configuration file and return its path."""
    config_content = """
mu_guess = 4.0
sigma_guess = 2.0

[mode]
kind = "fixed"
sigma = 2.0

[bounds]
lower = 0.0
upper = 50.0

[optimizer]
max_evaluations = 300
initial_step = 0.1

[interval]
residual = "linear"
split_at_peak = false
"""
    config_path = tmp_path / "p2dfit.toml"
    config_path.write_text(config_content)
    return config_path


@pytest.fixture
def clean_logging():
    """Make sure file/console logging is closed after the test."""
    from p2dfit.ui.logging import close_logging

    yield
    close_logging()
