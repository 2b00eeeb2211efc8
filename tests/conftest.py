"""Shared fixtures for wayfinder tests."""

from datetime import datetime

import pytest

from wayfinder.core.config import Config
from wayfinder.behavior.store import BehaviorStore
from wayfinder.knowledge.defaults import default_knowledge
from wayfinder.predictor import ContextualPredictor

# Fixed instants (weekday numbering: Sunday = 0)
WEDNESDAY_10AM = datetime(2026, 10, 14, 10, 0)  # weekday 3, forenoon, autumn
TUESDAY_8PM = datetime(2026, 10, 13, 20, 0)  # weekday 2, evening, autumn
SATURDAY_SUMMER = datetime(2026, 7, 18, 15, 0)  # weekday 6, afternoon, summer
SUNDAY_DAWN = datetime(2026, 10, 18, 3, 0)  # weekday 0, dawn, autumn


@pytest.fixture
def config():
    """Config with a fake, platform-independent directory layout."""
    return Config(
        home_dir="/home/tester",
        project_dir="/work/my_app",
        games_dir="/games",
    )


@pytest.fixture
def knowledge(config):
    return default_knowledge(config)


@pytest.fixture
def store():
    """Provide a fresh BehaviorStore."""
    return BehaviorStore()


@pytest.fixture
def engine(config, store):
    """Provide a ContextualPredictor pinned to a fixed clock."""
    return ContextualPredictor(config=config, store=store, clock=lambda: WEDNESDAY_10AM)
