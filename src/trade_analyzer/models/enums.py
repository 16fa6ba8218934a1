from enum import Enum


class EntryDirection(str, Enum):
    """Which side of a trade a summary entry sits on, from the listed team's view."""

    OUTGOING = "out"
    INCOMING = "in"
