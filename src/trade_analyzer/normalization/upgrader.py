# src/trade_analyzer/normalization/upgrader.py
"""Upgrades saved team/player records of any past shape into current models.

Saved data has gone through two shapes:

* v1 players carried a single symmetric ``value``.
* v2 players carry ``senderValue`` plus a per-destination ``receiverValues``
  mapping, an ``enabled`` flag and a ``toTeamId`` destination.

``upgrade_teams_schema`` maps either shape (or a mix) onto :class:`Team`
models. ``load_saved_teams`` wraps it for raw stored text and turns every
loading failure into ``None`` so callers can fall back to the defaults.
"""
import json
from collections.abc import Mapping, Sequence
from typing import Any, Dict, List, Optional

from loguru import logger
from pydantic import ValidationError

from trade_analyzer.models.player import DEFAULT_PLAYER_NAME, Player
from trade_analyzer.models.team import Team
from trade_analyzer.utils.misc_utils import is_number


class SchemaUpgradeError(Exception):
    """Raised when a saved record is too malformed to upgrade."""

    pass


def _is_record_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _upgrade_player(raw_player: Any, team_id: Any) -> Dict[str, Any]:
    if not isinstance(raw_player, Mapping):
        raise SchemaUpgradeError(
            f"Player record on team {team_id!r} is not a mapping: {raw_player!r}"
        )

    sender_value = raw_player.get("senderValue")
    if not is_number(sender_value):
        legacy_value = raw_player.get("value")
        sender_value = legacy_value if is_number(legacy_value) else 0

    receiver_values = raw_player.get("receiverValues")
    if not isinstance(receiver_values, Mapping):
        receiver_values = {}

    name = raw_player.get("name")
    player_id = raw_player.get("id")
    to_team_id = raw_player.get("toTeamId")
    if to_team_id is None:
        to_team_id = team_id

    return {
        "id": None if player_id is None else str(player_id),
        "name": DEFAULT_PLAYER_NAME if name is None else name,
        "senderValue": sender_value,
        "receiverValues": dict(receiver_values),
        "enabled": raw_player.get("enabled") is not False,
        "toTeamId": None if to_team_id is None else str(to_team_id),
    }


def _upgrade_team(raw_team: Any) -> Dict[str, Any]:
    if not isinstance(raw_team, Mapping):
        raise SchemaUpgradeError(f"Team record is not a mapping: {raw_team!r}")

    raw_players = raw_team.get("players") or []
    if not _is_record_sequence(raw_players):
        raise SchemaUpgradeError(
            f"Players of team {raw_team.get('id')!r} are not a list: {raw_players!r}"
        )

    # Every other team field passes through as-is.
    return {
        **raw_team,
        "players": [_upgrade_player(p, raw_team.get("id")) for p in raw_players],
    }


def upgrade_teams_schema(raw_teams: Any) -> Optional[List[Team]]:
    """Converts deserialized saved data into canonical teams.

    Returns ``None`` when ``raw_teams`` is not a list of team records, meaning
    there is no usable saved state and the caller should seed defaults.

    Raises:
        SchemaUpgradeError: a team or player record is not a mapping.
        ValidationError: an upgraded record still does not fit the models.
    """
    if not _is_record_sequence(raw_teams):
        return None
    return [Team.model_validate(_upgrade_team(t)) for t in raw_teams]


def load_saved_teams(raw_text: Optional[str]) -> Optional[List[Team]]:
    """Decodes and upgrades stored text; never raises, returns ``None`` on any failure."""
    if not raw_text:
        logger.debug("No saved teams found.")
        return None

    try:
        parsed = json.loads(raw_text)
        teams = upgrade_teams_schema(parsed)
    except (json.JSONDecodeError, SchemaUpgradeError, ValidationError) as e:
        logger.warning(f"Discarding unreadable saved teams: {e}")
        return None
    except Exception as e:
        logger.warning(f"Unexpected error loading saved teams, using defaults: {e}")
        return None

    if teams is None:
        logger.warning(
            f"Saved teams are not a list (got {type(parsed).__name__}), using defaults."
        )
        return None

    logger.debug(f"Loaded {len(teams)} saved team(s).")
    return teams
