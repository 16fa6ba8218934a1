# src/trade_analyzer/models/summary.py
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import EntryDirection


class TradeEntry(BaseModel):
    """One appearance of a player in a team's incoming or outgoing list.

    The same player shows up at most twice (once outgoing for the sender, once
    incoming for the receiver) with different values, so ``row_key`` carries
    the direction and team to keep the two rows distinct.
    """

    model_config = ConfigDict(frozen=True)

    row_key: str
    direction: EntryDirection
    team_id: str  # Team whose list this entry belongs to
    player_id: Optional[str] = None
    name: str
    from_team_id: str
    to_team_id: str
    sender_value: float
    receiver_values: Dict[str, float] = Field(default_factory=dict)
    enabled: bool = True
    value: float


class TradeSummary(BaseModel):
    """Per-team incoming/outgoing entries and net balance, keyed by team id."""

    incoming_by_team: Dict[str, List[TradeEntry]] = Field(default_factory=dict)
    outgoing_by_team: Dict[str, List[TradeEntry]] = Field(default_factory=dict)
    net_by_team: Dict[str, float] = Field(default_factory=dict)

    def incoming_total(self, team_id: str) -> float:
        return sum(e.value for e in self.incoming_by_team.get(team_id, []))

    def outgoing_total(self, team_id: str) -> float:
        return sum(e.value for e in self.outgoing_by_team.get(team_id, []))
