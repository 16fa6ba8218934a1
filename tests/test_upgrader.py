"""
Unit tests for the saved-data schema upgrader and loader.
"""

import json

import pytest

from trade_analyzer.models.player import DEFAULT_PLAYER_NAME
from trade_analyzer.normalization.upgrader import (
    SchemaUpgradeError,
    load_saved_teams,
    upgrade_teams_schema,
)


class TestUpgradeTeamsSchema:
    """Tests for upgrade_teams_schema."""

    @pytest.mark.parametrize("raw", [None, {"teams": []}, "A", 42])
    def test_non_list_means_no_data(self, raw):
        """Anything other than a list signals "use defaults"."""
        assert upgrade_teams_schema(raw) is None

    def test_empty_list_is_valid(self):
        """An empty list is a valid (empty) collection, not missing data."""
        assert upgrade_teams_schema([]) == []

    def test_legacy_value_migrates_to_sender_value(self):
        """A v1 player with a single value becomes sender value with no receiver values."""
        raw = [{"id": "A", "name": "Team A", "players": [{"id": "a1", "name": "Old", "value": 17}]}]

        player = upgrade_teams_schema(raw)[0].players[0]

        assert player.sender_value == 17
        assert player.receiver_values == {}
        assert player.enabled is True
        assert player.to_team_id == "A"

    def test_sender_value_wins_over_legacy_value(self):
        """An existing numeric senderValue takes priority."""
        raw = [{"id": "A", "players": [{"id": "a1", "senderValue": 5, "value": 17}]}]
        assert upgrade_teams_schema(raw)[0].players[0].sender_value == 5

    @pytest.mark.parametrize(
        "fields,expected",
        [
            ({"senderValue": "12", "value": 8}, 8),
            ({"senderValue": None, "value": "8"}, 0),
            ({}, 0),
            ({"senderValue": True}, 0),
        ],
    )
    def test_non_numeric_sender_value_falls_through(self, fields, expected):
        """Only real numbers are taken, in senderValue, value, 0 order."""
        raw = [{"id": "A", "players": [{"id": "a1", **fields}]}]
        assert upgrade_teams_schema(raw)[0].players[0].sender_value == expected

    @pytest.mark.parametrize("receiver_values", [None, [1, 2], "B:3", 7])
    def test_bad_receiver_values_become_empty(self, receiver_values):
        """Only mappings are kept as receiver values."""
        raw = [{"id": "A", "players": [{"id": "a1", "receiverValues": receiver_values}]}]
        assert upgrade_teams_schema(raw)[0].players[0].receiver_values == {}

    def test_receiver_values_kept(self):
        """A mapping of receiver values survives."""
        raw = [{"id": "A", "players": [{"id": "a1", "receiverValues": {"B": 4, "C": 6}}]}]
        assert upgrade_teams_schema(raw)[0].players[0].receiver_values == {"B": 4, "C": 6}

    def test_missing_name_defaults(self):
        """Absent or null names become the default player name."""
        raw = [{"id": "A", "players": [{"id": "a1"}, {"id": "a2", "name": None}]}]
        names = [p.name for p in upgrade_teams_schema(raw)[0].players]
        assert names == [DEFAULT_PLAYER_NAME, DEFAULT_PLAYER_NAME]

    @pytest.mark.parametrize(
        "enabled,expected",
        [(False, False), (True, True), (None, True), ("no", True), (0, True)],
    )
    def test_enabled_unless_strictly_false(self, enabled, expected):
        """Only a literal False disables a player."""
        raw = [{"id": "A", "players": [{"id": "a1", "enabled": enabled}]}]
        assert upgrade_teams_schema(raw)[0].players[0].enabled is expected

    def test_enabled_absent_defaults_true(self):
        raw = [{"id": "A", "players": [{"id": "a1"}]}]
        assert upgrade_teams_schema(raw)[0].players[0].enabled is True

    def test_destination_kept_or_defaults_to_own_team(self):
        """toTeamId falls back to the owning team id."""
        raw = [{"id": "A", "players": [{"id": "a1", "toTeamId": "B"}, {"id": "a2", "toTeamId": None}]}]
        players = upgrade_teams_schema(raw)[0].players
        assert [p.to_team_id for p in players] == ["B", "A"]

    def test_team_fields_pass_through(self):
        """Unknown team fields are kept untouched."""
        raw = [{"id": "A", "name": "Team A", "color": "red", "players": None}]
        team = upgrade_teams_schema(raw)[0]

        assert team.players == []
        assert team.to_record()["color"] == "red"

    def test_idempotent_on_canonical_data(self, seed_teams):
        """Upgrading already-current records gives an equivalent collection."""
        records = [t.to_record() for t in seed_teams]

        upgraded = upgrade_teams_schema(records)

        assert [t.to_record() for t in upgraded] == records
        again = upgrade_teams_schema([t.to_record() for t in upgraded])
        assert [t.to_record() for t in again] == records

    @pytest.mark.parametrize(
        "raw",
        [
            [5],
            [{"id": "A", "players": ["not a player"]}],
            [{"id": "A", "players": {"a1": {}}}],
        ],
    )
    def test_malformed_records_raise(self, raw):
        """Records that are not mappings can not be upgraded."""
        with pytest.raises(SchemaUpgradeError):
            upgrade_teams_schema(raw)

    @pytest.mark.parametrize("name,expected", [(None, ""), (7, "7"), ("Sharks", "Sharks")])
    def test_team_name_tolerated(self, name, expected):
        """Null or non-string team names are kept rather than rejected."""
        raw = [{"id": "A", "name": name, "players": []}]
        assert upgrade_teams_schema(raw)[0].name == expected

    def test_numeric_ids_stringified(self):
        """Numeric player ids and destinations become strings."""
        raw = [{"id": "A", "players": [{"id": 3, "toTeamId": 7}]}]
        player = upgrade_teams_schema(raw)[0].players[0]
        assert player.id == "3"
        assert player.to_team_id == "7"

    @pytest.mark.parametrize("stored,expected", [("12", 0), (None, 0), (True, 0), (12, 12), (4.5, 4.5)])
    def test_receiver_values_must_be_numbers(self, stored, expected):
        """Only real numbers count as stored receiver values."""
        raw = [{"id": "A", "players": [{"id": "a1", "receiverValues": {"B": stored}, "toTeamId": "B"}]}]
        player = upgrade_teams_schema(raw)[0].players[0]
        assert player.receiver_values == {"B": expected}
        assert player.current_receiver_value == expected

    def test_negative_values_clamped(self):
        """Values are non-negative; a saved negative reads as 0."""
        raw = [{"id": "A", "players": [{"id": "a1", "senderValue": -5, "receiverValues": {"B": -3}}]}]
        player = upgrade_teams_schema(raw)[0].players[0]
        assert player.sender_value == 0
        assert player.receiver_values == {"B": 0}


class TestLoadSavedTeams:
    """Tests for load_saved_teams."""

    def test_round_trip(self, seed_teams):
        """Serialized teams load back equal."""
        text = json.dumps([t.to_record() for t in seed_teams])
        assert load_saved_teams(text) == seed_teams

    @pytest.mark.parametrize("raw_text", [None, ""])
    def test_nothing_saved(self, raw_text):
        assert load_saved_teams(raw_text) is None

    @pytest.mark.parametrize(
        "raw_text",
        [
            "{not json",
            json.dumps({"teams": []}),
            json.dumps([7]),
            json.dumps([{"name": "no id", "players": []}]),
        ],
    )
    def test_failures_become_none(self, raw_text, log_messages):
        """Any loading failure is swallowed, logged and reported as no data."""
        assert load_saved_teams(raw_text) is None
        assert any(m.startswith("WARNING") for m in log_messages)

    def test_legacy_payload(self):
        """A v1 payload loads into the current model."""
        text = json.dumps(
            [
                {"id": "A", "name": "Team A", "players": [{"id": "a1", "name": "P", "value": 9, "toTeamId": "B"}]},
                {"id": "B", "name": "Team B", "players": []},
            ]
        )
        teams = load_saved_teams(text)

        assert [t.id for t in teams] == ["A", "B"]
        assert teams[0].players[0].sender_value == 9
        assert teams[0].players[0].receiver_values == {}

    def test_null_team_name_keeps_collection(self):
        """A team with a null name does not throw away the saved teams."""
        text = json.dumps(
            [
                {"id": "A", "name": None, "players": [{"id": "a1", "senderValue": 3, "toTeamId": "B"}]},
                {"id": "B", "name": 7, "players": []},
            ]
        )
        teams = load_saved_teams(text)

        assert [t.id for t in teams] == ["A", "B"]
        assert [t.name for t in teams] == ["", "7"]
        assert teams[0].players[0].sender_value == 3
