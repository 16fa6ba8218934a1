# src/trade_analyzer/models/player.py
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from trade_analyzer.utils.misc_utils import num_or_zero, stored_number_or_zero

DEFAULT_PLAYER_NAME = "Player"
NEW_PLAYER_NAME = "New Player"


def _non_negative(value: float) -> float:
    return max(value, 0.0)


class Player(BaseModel):
    """An offerable asset with a sender-side value and per-destination receiver values."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = None
    name: str = DEFAULT_PLAYER_NAME
    sender_value: float = Field(0.0, alias="senderValue")
    # Keyed by destination team id; a missing entry means "not valued yet" and reads as 0.
    receiver_values: Dict[str, float] = Field(
        default_factory=dict, alias="receiverValues"
    )
    enabled: bool = True
    # Equal to the owning team's id when the player is not part of any trade.
    to_team_id: Optional[str] = Field(None, alias="toTeamId")

    @field_validator("sender_value", mode="before")
    @classmethod
    def _coerce_sender_value(cls, value: Any) -> float:
        return _non_negative(num_or_zero(value))

    @field_validator("receiver_values", mode="before")
    @classmethod
    def _coerce_receiver_values(cls, value: Any) -> Dict[str, float]:
        # Stored receiver values count only when they are real numbers;
        # numeric strings read as 0 like any other non-number.
        if not isinstance(value, dict):
            return {}
        return {
            str(k): _non_negative(stored_number_or_zero(v)) for k, v in value.items()
        }

    @field_validator("name", mode="before")
    @classmethod
    def _default_name(cls, value: Any) -> str:
        return DEFAULT_PLAYER_NAME if value is None else str(value)

    @field_validator("id", "to_team_id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Optional[str]:
        return None if value is None else str(value)

    def receiver_value_for(self, team_id: Optional[str]) -> float:
        """Value of this player to ``team_id``; unvalued or non-numeric entries count as 0."""
        if not team_id:
            return 0.0
        return stored_number_or_zero(self.receiver_values.get(team_id))

    @property
    def current_receiver_value(self) -> float:
        return self.receiver_value_for(self.to_team_id)
