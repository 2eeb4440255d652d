"""
Shared pytest fixtures for schedule generation tests.

Running tests:
    pytest tests/
"""
import pytest
import sys
import os
from datetime import datetime

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from engine.models import Team, TournamentConfig, TournamentFormat


START_DATE = datetime(2026, 7, 1, 18, 0)


@pytest.fixture
def start_date():
    return START_DATE


@pytest.fixture
def make_teams():
    """Factory for numbered teams: T1 'Team 1', T2 'Team 2', ..."""
    def _make(count):
        return [Team(id=f"T{i + 1}", name=f"Team {i + 1}") for i in range(count)]
    return _make


@pytest.fixture
def lettered_teams():
    """Factory for teams whose id and name are single letters A, B, C..."""
    def _make(count):
        return [Team(id=chr(ord('A') + i), name=chr(ord('A') + i)) for i in range(count)]
    return _make


@pytest.fixture
def make_config():
    """Factory for tournament configs starting on START_DATE."""
    def _make(tournament_format=TournamentFormat.ROUND_ROBIN, **overrides):
        values = {
            'id': 'summer-cup',
            'format': tournament_format,
            'start_date': START_DATE,
            'location': 'Polideportivo Municipal',
        }
        values.update(overrides)
        return TournamentConfig(**values)
    return _make


@pytest.fixture
def tournament_yaml(tmp_path):
    """Write a tournament YAML file and return its path."""
    def _write(content, name="tournament.yaml"):
        path = tmp_path / name
        path.write_text(content, encoding='utf-8')
        return str(path)
    return _write
