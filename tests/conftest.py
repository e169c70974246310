"""
Shared pytest fixtures for bracket engine tests.

Running tests:
    pytest tests/                  - full suite
    pytest tests/ -m "not slow"   - skip the large bracket sweeps
"""
import pytest
import sys
import os

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))


@pytest.fixture
def client():
    """Create a Flask test client."""
    from app import app
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


@pytest.fixture
def four_players():
    return ["A", "B", "C", "D"]


@pytest.fixture
def eight_players():
    return [f"P{i}" for i in range(1, 9)]


@pytest.fixture
def participants_file(tmp_path):
    """Write a participants YAML file and return its path."""
    def _write(content):
        path = tmp_path / "participants.yaml"
        path.write_text(content, encoding='utf-8')
        return str(path)
    return _write


def feeders_of(matches):
    """Map each match index to the list of (source_index, 'winner'|'loser') feeding it."""
    feeders = {i: [] for i in range(len(matches))}
    for index, match in enumerate(matches):
        if match.next_match_index is not None:
            feeders[match.next_match_index].append((index, 'winner'))
        if match.loser_next_match_index is not None:
            feeders[match.loser_next_match_index].append((index, 'loser'))
    return feeders
