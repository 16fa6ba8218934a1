# src/trade_analyzer/models/defaults.py
from typing import List

from .player import Player
from .team import Team


def default_teams() -> List[Team]:
    """Built-in seed: two teams trading one player each, valued asymmetrically."""
    return [
        Team(
            id="A",
            name="Team A",
            players=[
                Player(
                    id="a1",
                    name="Player A1",
                    sender_value=32,
                    receiver_values={"B": 35},
                    enabled=True,
                    to_team_id="B",
                )
            ],
        ),
        Team(
            id="B",
            name="Team B",
            players=[
                Player(
                    id="b1",
                    name="Player B1",
                    sender_value=27,
                    receiver_values={"A": 31},
                    enabled=True,
                    to_team_id="A",
                )
            ],
        ),
    ]
