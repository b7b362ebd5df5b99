"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from adaptive_trainer.drill.drill_session import create_drill_session
from adaptive_trainer.drill.scenario_catalog import ScenarioCatalog, ScenarioRecord


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark based on test file location
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def t0():
    """A fixed, timezone-aware 'now'."""
    return datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def scenario_data(
    scenario_id: str,
    sport: str = "baseball",
    level: str = "12u",
    category: str = "baserunning",
    position: str | None = None,
    **overrides,
) -> dict:
    """Raw scenario dict as it would appear in a pack file."""
    data = {
        "id": scenario_id,
        "sport": sport,
        "level": level,
        "category": category,
        "position": position,
        "title": f"Scenario {scenario_id}",
        "description": "Runner on second, nobody out, ground ball to short.",
        "question": "What do you do?",
        "outs": 0,
        "runners": ["second"],
        "best": {
            "label": "Hold at second",
            "description": "Make them throw.",
            "coaching_cue": "Ball in front of you: freeze.",
        },
        "ok": {"label": "Take a few steps", "description": "Risky."},
        "bad": {"label": "Run to third", "description": "Easy out."},
    }
    data.update(overrides)
    return data


@pytest.fixture
def make_scenario():
    """Factory for validated ScenarioRecords."""
    def _make(scenario_id: str, **kwargs) -> ScenarioRecord:
        return ScenarioRecord.model_validate(scenario_data(scenario_id, **kwargs))
    return _make


@pytest.fixture
def catalog(make_scenario):
    """Three-scenario catalog: s1, s2, s3 in that order."""
    return ScenarioCatalog(
        [make_scenario("s1"), make_scenario("s2"), make_scenario("s3")],
        name="test pack",
    )


@pytest.fixture
def session(t0):
    """Fresh drill session created at t0."""
    return create_drill_session("test-session", now=t0)


@pytest.fixture
def raw_scenario():
    """Factory for raw scenario dicts (before validation)."""
    return scenario_data
