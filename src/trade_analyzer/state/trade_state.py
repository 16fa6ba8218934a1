# src/trade_analyzer/state/trade_state.py
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from loguru import logger
from pydantic import ValidationError

from trade_analyzer.calculation.valuation import compute_summary
from trade_analyzer.config.settings import settings
from trade_analyzer.models.defaults import default_teams
from trade_analyzer.models.player import NEW_PLAYER_NAME, Player
from trade_analyzer.models.summary import TradeSummary
from trade_analyzer.models.team import Team
from trade_analyzer.utils.misc_utils import (
    generate_player_id,
    num_or_zero,
    other_team_ids,
    suggest_team_id,
)

ChangeListener = Callable[[List[Team]], None]
PlayerTransform = Callable[[Player], Player]


class TradeStateError(Exception):
    """Custom exception for invalid teams collections."""

    pass


class DuplicateTeamError(TradeStateError):
    """Raised when a teams collection repeats a team id."""

    pass


def _check_unique_ids(teams: Sequence[Team]) -> None:
    seen = set()
    for team in teams:
        if team.id in seen:
            raise DuplicateTeamError(f"Duplicate team id: {team.id!r}")
        seen.add(team.id)


class TradeState:
    """Owns the canonical teams collection and is its only write surface.

    Mutations never edit Team or Player objects in place; each one swaps in
    rebuilt records, so anything holding an earlier collection or summary
    keeps seeing the old values. Listeners registered with ``on_change`` run
    after every mutation that changed something.
    """

    def __init__(
        self,
        teams: Optional[Sequence[Team]] = None,
        team_name_max_length: Optional[int] = None,
    ):
        initial = list(teams) if teams is not None else default_teams()
        _check_unique_ids(initial)
        self._teams: List[Team] = initial
        self._listeners: List[ChangeListener] = []
        self.team_name_max_length = (
            team_name_max_length or settings.team_name_max_length
        )

    @property
    def teams(self) -> List[Team]:
        return list(self._teams)

    @property
    def summary(self) -> TradeSummary:
        """Fresh summary of the current collection (recomputed on every access)."""
        return compute_summary(self._teams)

    def on_change(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def _commit(self, teams: List[Team], reason: str) -> None:
        self._teams = teams
        logger.debug(f"Teams updated ({reason}); {len(teams)} team(s).")
        for listener in self._listeners:
            listener(self.teams)

    def _team_index(self, team_id: str) -> Optional[int]:
        for i, team in enumerate(self._teams):
            if team.id == team_id:
                return i
        logger.warning(f"No team with id {team_id!r}; ignoring update.")
        return None

    def _replace_team(self, index: int, team: Team, reason: str) -> None:
        teams = list(self._teams)
        teams[index] = team
        self._commit(teams, reason)

    # --- Team operations ---

    def replace_teams(self, teams: Sequence[Team]) -> None:
        teams = list(teams)
        _check_unique_ids(teams)
        self._commit(teams, "replace")

    def reset(self) -> None:
        """Restores the built-in default teams."""
        self._commit(default_teams(), "reset")

    def add_team(self) -> Team:
        team_id = suggest_team_id(self._teams)
        team = Team(id=team_id, name=f"Team {team_id}", players=[])
        self._commit(self._teams + [team], f"add team {team_id}")
        return team

    def set_team_name(self, team_id: str, name: str) -> None:
        index = self._team_index(team_id)
        if index is None:
            return
        name = name[: self.team_name_max_length]
        team = self._teams[index].model_copy(update={"name": name})
        self._replace_team(index, team, f"rename team {team_id}")

    # --- Player operations ---

    def add_player(
        self, team_id: str, now: Optional[float] = None
    ) -> Optional[Player]:
        """Appends a new player, heading to the first other team (or nowhere if alone)."""
        index = self._team_index(team_id)
        if index is None:
            return None
        others = other_team_ids(team_id, self._teams)
        player = Player(
            id=generate_player_id(team_id, now),
            name=NEW_PLAYER_NAME,
            sender_value=0,
            receiver_values={},
            enabled=True,
            to_team_id=others[0] if others else team_id,
        )
        team = self._teams[index]
        updated = team.model_copy(update={"players": team.players + [player]})
        self._replace_team(index, updated, f"add player {player.id}")
        return player

    def delete_player(self, team_id: str, player_id: str) -> None:
        index = self._team_index(team_id)
        if index is None:
            return
        team = self._teams[index]
        players = [p for p in team.players if p.id != player_id]
        if len(players) == len(team.players):
            logger.warning(f"No player {player_id!r} on team {team_id!r}; nothing deleted.")
            return
        updated = team.model_copy(update={"players": players})
        self._replace_team(index, updated, f"delete player {player_id}")

    def apply_player_transform(
        self, team_id: str, player_id: str, transform: PlayerTransform
    ) -> None:
        """Replaces a player with ``transform(current_player)``."""
        index = self._team_index(team_id)
        if index is None:
            return
        team = self._teams[index]
        players = []
        found = False
        for player in team.players:
            if player.id == player_id:
                found = True
                player = transform(player.model_copy(deep=True))
            players.append(player)
        if not found:
            logger.warning(f"No player {player_id!r} on team {team_id!r}; nothing updated.")
            return
        updated = team.model_copy(update={"players": players})
        self._replace_team(index, updated, f"update player {player_id}")

    def apply_player_patch(
        self, team_id: str, player_id: str, patch: Mapping[str, Any]
    ) -> None:
        """Merges field values (snake_case or camelCase keys) into a player.

        The merged record is validated again, so numeric fields pass through
        the same zero-fallback coercion as loaded data. A patch that still does
        not validate is logged and leaves the player unchanged.
        """

        def merge(player: Player) -> Player:
            record: Dict[str, Any] = player.model_dump()
            record.update(patch)
            try:
                return Player.model_validate(_prefer_patch_keys(record, patch))
            except ValidationError as e:
                logger.warning(
                    f"Ignoring invalid patch {dict(patch)!r} for player {player_id!r}: {e}"
                )
                return player

        self.apply_player_transform(team_id, player_id, merge)

    def set_receiver_value(self, team_id: str, player_id: str, value: Any) -> None:
        """Sets the player's value to its current destination, keeping other destinations."""

        def update(player: Player) -> Player:
            if not player.to_team_id:
                return player
            receiver_values = dict(player.receiver_values)
            receiver_values[player.to_team_id] = num_or_zero(value)
            return Player.model_validate(
                {**player.model_dump(), "receiver_values": receiver_values}
            )

        self.apply_player_transform(team_id, player_id, update)


_ALIASES = {
    "senderValue": "sender_value",
    "receiverValues": "receiver_values",
    "toTeamId": "to_team_id",
}


def _prefer_patch_keys(
    record: Dict[str, Any], patch: Mapping[str, Any]
) -> Dict[str, Any]:
    # A camelCase key in the patch must win over the snake_case value from the dump.
    for alias, field_name in _ALIASES.items():
        if alias in patch:
            record[field_name] = record.pop(alias)
    return record
