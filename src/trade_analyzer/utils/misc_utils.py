# src/trade_analyzer/utils/misc_utils.py
import math
import string
import time
from typing import Any, Iterable, List, Optional

TEAM_ID_LETTERS = string.ascii_uppercase
EMPTY_PLACEHOLDER = "—"


def is_number(value: Any) -> bool:
    """True for real, finite ints/floats. Booleans and numeric strings are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def num_or_zero(value: Any) -> float:
    """Coerces user or stored input to a finite float, falling back to 0.

    Numeric strings are parsed (surrounding whitespace ignored). Booleans,
    None, blank strings, NaN/infinity and anything unparseable become 0.
    """
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _to_base36(number: int) -> str:
    digits = string.digits + string.ascii_lowercase
    if number == 0:
        return "0"
    out = []
    while number:
        number, rem = divmod(number, 36)
        out.append(digits[rem])
    return "".join(reversed(out))


def generate_player_id(team_id: str, now: Optional[float] = None) -> str:
    """Generates a player id from the owning team id and a base-36 millisecond timestamp."""
    if now is None:
        now = time.time()
    return f"{team_id}-{_to_base36(int(now * 1000))}"


def other_team_ids(current_id: str, teams: Iterable[Any]) -> List[str]:
    """Ids of every team except ``current_id``, in collection order."""
    return [t.id for t in teams if t.id != current_id]


def suggest_team_id(teams: Iterable[Any]) -> str:
    """Returns the first unused single letter A-Z, else ``T<count+1>``."""
    teams = list(teams)
    existing = {t.id for t in teams}
    for letter in TEAM_ID_LETTERS:
        if letter not in existing:
            return letter
    return f"T{len(teams) + 1}"


def team_display_name(team_id: Optional[str], teams: Iterable[Any]) -> str:
    for team in teams:
        if team.id == team_id:
            return team.name
    return team_id or EMPTY_PLACEHOLDER


def format_value(value: Any) -> str:
    """Rounds to two decimals and adds thousands separators, dropping trailing zeros."""
    rounded = round(num_or_zero(value), 2)
    if rounded == 0:
        return "0"
    text = f"{rounded:,.2f}".rstrip("0").rstrip(".")
    return text


def stored_number_or_zero(value: Any) -> float:
    """Like ``num_or_zero`` but for saved data: only real numbers count, strings read as 0."""
    return float(value) if is_number(value) else 0.0
