"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from pathfinder.roadmap.catalog import catalog_from_dict  # noqa: E402
from pathfinder.roadmap.inventory import InventoryStore  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def sample_roadmap():
    """Provide a small three-stage roadmap as raw data."""
    return {
        "skill_categories": [
            {
                "id": "basics",
                "title": "Basics",
                "skills": [
                    {"id": "A", "label": "Skill A"},
                    {"id": "B", "label": "Skill B"},
                    {"id": "C", "label": "Skill C"},
                ],
            },
            {
                "id": "advanced",
                "title": "Advanced",
                "skills": [
                    {"id": "D", "label": "Skill D"},
                    {"id": "E", "label": "Skill E"},
                ],
            },
        ],
        "stages": [
            {
                "id": "1",
                "title": "Stage One",
                "requires": ["A", "B", "C"],
                "project": {
                    "title": "Project One",
                    "goal": "Do the first thing",
                    "tasks": [
                        {"topic": "Setup", "task": "Install the thing"},
                        {"topic": "Run", "task": "Run the thing"},
                    ],
                },
            },
            {"id": "2", "title": "Stage Two", "requires": ["D"]},
            {"id": "3", "title": "Stage Three", "requires": ["D", "E"]},
        ],
        "capstone": {"title": "Final Project", "evaluation": ["Zero downtime"]},
    }


@pytest.fixture
def catalog(sample_roadmap):
    """Validated catalog built from the sample roadmap."""
    return catalog_from_dict(sample_roadmap)


@pytest.fixture
def progress_file(tmp_path):
    """Path of a progress file inside the test's temp directory."""
    return tmp_path / "progress.json"


@pytest.fixture
def store(progress_file):
    """Inventory store writing to a temp file."""
    return InventoryStore(progress_file)
