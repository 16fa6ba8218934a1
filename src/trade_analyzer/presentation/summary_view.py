# src/trade_analyzer/presentation/summary_view.py
from typing import List, Sequence, Tuple

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from trade_analyzer.models.summary import TradeSummary
from trade_analyzer.models.team import Team
from trade_analyzer.utils.misc_utils import (
    EMPTY_PLACEHOLDER,
    format_value,
    team_display_name,
)


def net_style(net: float) -> str:
    if net > 0:
        return "bold green"
    if net < 0:
        return "bold red"
    return "bold"


def _entries_table(title: str, rows: List[Tuple[str, float]]) -> Table:
    table = Table(
        title=title, title_justify="left", show_header=False, expand=True, box=None
    )
    table.add_column("Player", no_wrap=True)
    table.add_column("Value", justify="right")
    if not rows:
        table.add_row(Text(EMPTY_PLACEHOLDER, style="dim"), "")
    for label, value in rows:
        table.add_row(label, format_value(value))
    return table


def render_team(summary: TradeSummary, team: Team, teams: Sequence[Team]) -> Panel:
    net = summary.net_by_team.get(team.id, 0)
    incoming = [
        (f"{e.name} (from {team_display_name(e.from_team_id, teams)})", e.value)
        for e in summary.incoming_by_team.get(team.id, [])
    ]
    outgoing = [
        (f"{e.name} (to {team_display_name(e.to_team_id, teams)})", e.value)
        for e in summary.outgoing_by_team.get(team.id, [])
    ]
    body = Group(
        _entries_table("Incoming (their value to you)", incoming),
        _entries_table("Outgoing (your value)", outgoing),
    )
    return Panel(
        body,
        title=Text(team.name or team.id, style="bold"),
        subtitle=Text(f"Net {format_value(net)}", style=net_style(net)),
    )


def render_summary(summary: TradeSummary, teams: Sequence[Team]) -> Panel:
    """Builds the "Trade Summary" panel, one block per team in collection order."""
    blocks = [render_team(summary, team, teams) for team in teams]
    caption = Text(
        "Enabled players only. Net = incoming (their value to you) − outgoing (your value).",
        style="dim",
    )
    return Panel(Group(caption, *blocks), title="Trade Summary")
