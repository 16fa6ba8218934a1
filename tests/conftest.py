"""
Pytest configuration and shared fixtures.

Provides:
- Team/player builders for valuation tests
- The built-in default teams
- A loguru sink that records log messages
- A JSON file store in a temporary directory
"""

import pytest
from loguru import logger

from trade_analyzer.models.defaults import default_teams
from trade_analyzer.models.player import Player
from trade_analyzer.models.team import Team
from trade_analyzer.storage.json_store import JsonFileStore


def make_player(player_id, to_team_id, sender_value=0, receiver_values=None, enabled=True, name=None):
    """Build a Player with sensible test defaults."""
    return Player(
        id=player_id,
        name=name or f"Player {player_id}",
        sender_value=sender_value,
        receiver_values=receiver_values or {},
        enabled=enabled,
        to_team_id=to_team_id,
    )


def make_team(team_id, *players, name=None):
    """Build a Team holding the given players."""
    return Team(id=team_id, name=name or f"Team {team_id}", players=list(players))


@pytest.fixture
def seed_teams():
    """Default two-team seed (A sends a1 to B, B sends b1 to A)."""
    return default_teams()


@pytest.fixture
def three_teams():
    """
    Three-way trade:
    - A sends a1 to B (A values 10, B values 12) and a2 to C (A 5, C 9)
    - B sends b1 to C (B 20, C 18)
    - C sends c1 to A (C 7, A 11), c2 disabled
    """
    return [
        make_team(
            "A",
            make_player("a1", "B", 10, {"B": 12}),
            make_player("a2", "C", 5, {"C": 9, "B": 100}),
        ),
        make_team("B", make_player("b1", "C", 20, {"C": 18})),
        make_team(
            "C",
            make_player("c1", "A", 7, {"A": 11}),
            make_player("c2", "B", 50, {"B": 60}, enabled=False),
        ),
    ]


@pytest.fixture
def log_messages():
    """
    Capture loguru output as a list of "LEVEL message" strings.

    Yields:
        List that fills up as the code under test logs
    """
    messages = []
    handler_id = logger.add(
        lambda m: messages.append(f"{m.record['level'].name} {m.record['message']}"),
        level="DEBUG",
    )
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def store(tmp_path):
    """JSON file store inside a temporary directory."""
    return JsonFileStore(tmp_path / "state.json")
