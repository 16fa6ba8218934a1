# src/trade_analyzer/calculation/valuation.py
from typing import Dict, List, Sequence

from loguru import logger

from trade_analyzer.models.enums import EntryDirection
from trade_analyzer.models.player import Player
from trade_analyzer.models.summary import TradeEntry, TradeSummary
from trade_analyzer.models.team import Team
from trade_analyzer.utils.misc_utils import num_or_zero, stored_number_or_zero


def _make_entry(
    player: Player,
    direction: EntryDirection,
    list_team_id: str,
    from_team_id: str,
    value: float,
) -> TradeEntry:
    return TradeEntry(
        row_key=f"{player.id}-{direction.value}-{list_team_id}",
        direction=direction,
        team_id=list_team_id,
        player_id=player.id,
        name=player.name,
        from_team_id=from_team_id,
        to_team_id=player.to_team_id,
        sender_value=num_or_zero(player.sender_value),
        receiver_values={
            k: stored_number_or_zero(v) for k, v in player.receiver_values.items()
        },
        enabled=player.enabled,
        value=value,
    )


def compute_summary(teams: Sequence[Team]) -> TradeSummary:
    """
    Computes incoming, outgoing and net trade value for every team.

    Outgoing entries are valued from the sender's side (``sender_value``),
    incoming entries from the receiver's side (``receiver_values[to]``, 0 when
    that destination was never valued). Disabled players and players whose
    destination is their own team are left out. A player sent to a team id
    that is not in ``teams`` still counts as outgoing for the sender but
    lands in nobody's incoming list.

    Every numeric input goes through ``num_or_zero`` before it is used, so
    malformed values count as 0 instead of failing the computation.

    Args:
        teams: The canonical teams collection. It is only read, never modified.

    Returns:
        A TradeSummary with an entry in all three maps for every team id,
        lists kept in team order then player order.
    """
    incoming_by_team: Dict[str, List[TradeEntry]] = {}
    outgoing_by_team: Dict[str, List[TradeEntry]] = {}
    net_by_team: Dict[str, float] = {}

    for team in teams:
        incoming_by_team[team.id] = []
        outgoing_by_team[team.id] = []
        net_by_team[team.id] = 0.0

    for from_team in teams:
        for player in from_team.players:
            if not player.enabled:
                continue
            to = player.to_team_id
            if not to or to == from_team.id:
                continue

            outgoing_value = num_or_zero(player.sender_value)
            outgoing_by_team[from_team.id].append(
                _make_entry(
                    player,
                    EntryDirection.OUTGOING,
                    from_team.id,
                    from_team.id,
                    outgoing_value,
                )
            )

            if to not in incoming_by_team:
                logger.debug(
                    f"Player {player.id} on team {from_team.id} targets unknown team {to}; counted as outgoing only."
                )
                continue
            incoming_value = player.receiver_value_for(to)
            incoming_by_team[to].append(
                _make_entry(
                    player, EntryDirection.INCOMING, to, from_team.id, incoming_value
                )
            )

    for team in teams:
        incoming = sum(num_or_zero(e.value) for e in incoming_by_team[team.id])
        outgoing = sum(num_or_zero(e.value) for e in outgoing_by_team[team.id])
        net_by_team[team.id] = incoming - outgoing

    logger.debug(
        f"Trade summary recomputed for {len(net_by_team)} team(s): {net_by_team}"
    )
    return TradeSummary(
        incoming_by_team=incoming_by_team,
        outgoing_by_team=outgoing_by_team,
        net_by_team=net_by_team,
    )
