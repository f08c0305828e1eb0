"""
Shared pytest fixtures for autotile tests.
"""

import pytest
from pubsub import pub

from autotile.config import TilingConfig
from autotile.decoration import DecorationMetrics, DecorationStyle
from autotile.geometry import Box
from autotile.manager import ViewManager
from autotile.objects import Output, View
from autotile.rules import WindowRules


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without sockets or timing")


@pytest.fixture(autouse=True)
def clean_bus():
    """Drop all PyPubSub listeners between tests."""
    yield
    pub.unsubAll()


@pytest.fixture
def standard_area():
    """Standard 1920x1080 area for layout tests."""
    return Box(0, 0, 1920, 1080)


@pytest.fixture
def small_area():
    """Small 800x600 area for layout tests."""
    return Box(0, 0, 800, 600)


@pytest.fixture
def portrait_area():
    """Portrait 1080x1920 area for layout tests."""
    return Box(0, 0, 1080, 1920)


@pytest.fixture
def no_margins():
    """Margins lookup for views without decorations."""
    return DecorationMetrics(use_ssd=False).margins


@pytest.fixture
def make_view():
    """Factory fixture for creating views with sequential ids."""
    counter = {"next": 1}

    def factory(box=None, app_id="test_app", title="test", use_ssd=False, **flags):
        view = View(counter["next"], app_id=app_id, title=title, box=box, use_ssd=use_ssd)
        counter["next"] += 1
        for name, value in flags.items():
            setattr(view, name, value)
        return view

    return factory


@pytest.fixture
def output(standard_area):
    return Output(1, "DP-1", area=standard_area)


@pytest.fixture
def registry(output):
    """View registry with one 1920x1080 output."""
    manager = ViewManager(bus=pub, rules=WindowRules())
    manager.add_output(output)
    return manager


@pytest.fixture
def config():
    """Tiling config with gap 10 and no decorations."""
    return TilingConfig(gap=10, use_ssd=False, socket_path="/tmp/autotile-test.sock")


@pytest.fixture
def ssd_metrics():
    """Decorations: 2px border, 20px titlebar on top."""
    return DecorationMetrics(DecorationStyle(height=20, border_width=2))
