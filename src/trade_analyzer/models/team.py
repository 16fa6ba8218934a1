# src/trade_analyzer/models/team.py
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .player import Player


class Team(BaseModel):
    """A trade participant and the players it is offering.

    Unknown fields found on saved records are kept as extras so they survive
    a load/save cycle untouched.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    name: str = ""
    players: List[Player] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> str:
        # Saved names may be null or non-strings; display falls back to the id.
        return "" if value is None else str(value)

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
