"""Pytest configuration and shared fixtures."""

import os

import pytest
from hypothesis import Verbosity, settings

# Configure Hypothesis profiles
settings.register_profile("ci", max_examples=200, deadline=None)
settings.register_profile("dev", max_examples=50, deadline=None)
settings.register_profile("debug", max_examples=10, verbosity=Verbosity.verbose)

# Load profile from environment or default to "dev"
profile = os.environ.get("HYPOTHESIS_PROFILE", "dev")
settings.load_profile(profile)


@pytest.fixture
def controller():
    """Provide a fresh HistoryController."""
    from replaycalc import HistoryController

    return HistoryController()


@pytest.fixture
def sum_controller():
    """Provide a controller that has pressed 1 2 + 8 =."""
    from replaycalc import HistoryController, parse_keys

    controller = HistoryController()
    for event in parse_keys("12+8="):
        controller.apply(event)
    return controller


@pytest.fixture
def press():
    """Fold a key string from the initial brain state."""
    from replaycalc import fold, parse_keys

    def _press(keys: str):
        return fold(parse_keys(keys))

    return _press
