"""
Unit tests for the season loader and its utilities.

Tests cover:
- Timestamp parsing
- Region timezones and the price-change window
- Season export loading (dict, file, raw JSON)
- Malformed and incomplete exports
"""

import json
import pytest
from datetime import datetime, timezone

from fpl_wrapped.parsers.season_loader import SeasonLoader, load_season
from fpl_wrapped.utils.date_parser import (
    hours_between,
    is_late_night,
    parse_timestamp,
    parse_timestamp_safe,
    to_iso,
)
from fpl_wrapped.utils.timezones import is_price_rise_window, local_hour, timezone_for_region


def sample_export():
    """A two-gameweek export with one finished gameweek."""
    return {
        "bootstrap": {
            "total_players": 10_000_000,
            "events": [
                {
                    "id": 1,
                    "deadline_time": "2024-08-16T17:30:00Z",
                    "finished": True,
                    "average_entry_score": 54,
                    "most_captained": 10,
                    "chip_plays": [{"chip_name": "bboost", "num_played": 144_000}],
                },
                {
                    "id": 2,
                    "deadline_time": "2024-08-24T10:00:00Z",
                    "finished": False,
                    "average_entry_score": 0,
                    "most_captained": None,
                    "chip_plays": [],
                },
            ],
            "elements": [
                {"id": 10, "web_name": "Haaland", "element_type": 4, "team": 13,
                 "selected_by_percent": "55.0", "now_cost": 150},
                {"id": 11, "web_name": "Watkins", "element_type": 4, "team": 2,
                 "selected_by_percent": "14.2", "now_cost": 90},
                {"id": 16, "web_name": "Isak", "element_type": 4, "team": 15,
                 "selected_by_percent": "22.0", "now_cost": 85},
            ],
        },
        "entry": {
            "id": 1234,
            "name": "Wrapped XI",
            "player_first_name": "Sam",
            "player_last_name": "Reed",
            "player_region_name": "England",
        },
        "history": {
            "current": [
                {"event": 1, "points": 64, "total_points": 64, "rank": 2_100_000,
                 "overall_rank": 2_100_000, "bank": 5, "value": 1000,
                 "event_transfers": 0, "event_transfers_cost": 0, "points_on_bench": 6},
            ],
            "chips": [{"name": "bboost", "event": 1, "time": "2024-08-16T12:00:00Z"}],
        },
        "transfers": [
            {"element_in": 16, "element_out": 11, "event": 2,
             "element_in_cost": 85, "element_out_cost": 90, "time": "2024-08-20T21:15:00Z"},
        ],
        "picks": {
            "1": {
                "active_chip": "bboost",
                "picks": [
                    {"element": 10, "position": 1, "multiplier": 2, "is_captain": True,
                     "is_vice_captain": False},
                    {"element": 11, "position": 2, "multiplier": 1, "is_captain": False,
                     "is_vice_captain": True},
                ],
            },
        },
        "live": {
            "1": {"elements": [
                {"id": 10, "stats": {"total_points": 13}},
                {"id": 11, "stats": {"total_points": 2}},
            ]},
        },
    }


# =============================================================================
# Date Parser Tests
# =============================================================================

class TestDateParser:
    """Tests for timestamp parsing utility."""

    def test_parse_zulu(self):
        """Test parsing the API's trailing-Z format."""
        result = parse_timestamp("2024-08-16T17:30:00Z")
        assert result == datetime(2024, 8, 16, 17, 30, tzinfo=timezone.utc)

    def test_parse_offset_normalized_to_utc(self):
        """Test offsets are converted to UTC."""
        result = parse_timestamp("2024-08-16T18:30:00+01:00")
        assert result == datetime(2024, 8, 16, 17, 30, tzinfo=timezone.utc)

    def test_parse_naive_assumed_utc(self):
        """Test naive timestamps are treated as UTC."""
        result = parse_timestamp("2024-08-16T17:30:00")
        assert result.tzinfo == timezone.utc

    def test_parse_empty_raises(self):
        """Test empty string raises ValueError."""
        with pytest.raises(ValueError, match="cannot be empty"):
            parse_timestamp("   ")

    def test_parse_invalid_raises(self):
        """Test invalid format raises ValueError."""
        with pytest.raises(ValueError, match="Could not parse"):
            parse_timestamp("last Tuesday")

    def test_parse_safe_returns_default(self):
        """Test safe parser returns default on failure."""
        assert parse_timestamp_safe("last Tuesday") is None
        assert parse_timestamp_safe(None) is None

    def test_hours_between(self):
        """Test signed hour differences."""
        start = datetime(2024, 8, 16, 12, 0, tzinfo=timezone.utc)
        end = datetime(2024, 8, 16, 17, 30, tzinfo=timezone.utc)
        assert hours_between(start, end) == 5.5
        assert hours_between(end, start) == -5.5

    @pytest.mark.parametrize("hour, expected", [
        (23, True), (0, True), (5, True), (6, False), (22, False),
    ])
    def test_is_late_night(self, hour, expected):
        """Test the 23:00-05:59 window."""
        assert is_late_night(hour) is expected

    def test_to_iso(self):
        """Test formatting back to the API format."""
        assert to_iso(datetime(2024, 8, 16, 17, 30, tzinfo=timezone.utc)) == "2024-08-16T17:30:00Z"
        assert to_iso(None) is None


# =============================================================================
# Timezone Tests
# =============================================================================

class TestTimezones:
    """Tests for region timezones."""

    def test_known_region(self):
        """Test region lookup."""
        assert timezone_for_region("England").key == "Europe/London"
        assert timezone_for_region("Norway").key == "Europe/Oslo"

    def test_unknown_region_is_utc(self):
        """Test unknown and blank regions fall back to UTC."""
        assert timezone_for_region("Atlantis").key == "UTC"
        assert timezone_for_region("").key == "UTC"

    def test_local_hour_respects_dst(self):
        """Test midnight UTC in August is 1am in London."""
        moment = datetime(2024, 8, 24, 0, 0, tzinfo=timezone.utc)
        assert local_hour(moment, timezone_for_region("England")) == 1

    @pytest.mark.parametrize("utc_time, expected", [
        (datetime(2024, 8, 19, 23, 30, tzinfo=timezone.utc), True),   # 07:30 SGT
        (datetime(2024, 8, 20, 1, 30, tzinfo=timezone.utc), True),    # 09:30 SGT
        (datetime(2024, 8, 20, 1, 31, tzinfo=timezone.utc), False),
        (datetime(2024, 8, 20, 12, 0, tzinfo=timezone.utc), False),
    ])
    def test_price_rise_window(self, utc_time, expected):
        """Test the two hours before the 09:30 SGT price change."""
        assert is_price_rise_window(utc_time) is expected


# =============================================================================
# Season Loader Tests
# =============================================================================

class TestSeasonLoader:
    """Tests for SeasonLoader."""

    def test_load_from_dict(self):
        """Test loading an already-decoded export."""
        context = SeasonLoader().load(sample_export())

        assert context.manager.id == 1234
        assert context.manager.full_name == "Sam Reed"
        assert context.manager.region_name == "England"
        assert context.total_players == 10_000_000
        assert context.finished_gameweeks == (1,)

    def test_players_parsed(self):
        """Test catalog rows, including string ownership."""
        context = SeasonLoader().load(sample_export())
        haaland = context.player(10)

        assert haaland.web_name == "Haaland"
        assert haaland.position == "FWD"
        assert haaland.selected_by_percent == 55.0
        assert haaland.now_cost == 150

    def test_events_parsed(self):
        """Test deadlines, averages and chip plays."""
        context = SeasonLoader().load(sample_export())
        event = context.event(1)

        assert event.deadline_time == datetime(2024, 8, 16, 17, 30, tzinfo=timezone.utc)
        assert event.average_entry_score == 54
        assert event.most_captained == 10
        assert event.chip_plays == {"bboost": 144_000}
        assert context.event(2).finished is False

    def test_history_transfers_and_chips(self):
        """Test history rows, transfer log and chip plays."""
        context = SeasonLoader().load(sample_export())

        assert context.history[0].overall_rank == 2_100_000
        assert context.history[0].points_on_bench == 6
        assert context.total_points == 64

        [transfer] = context.transfers
        assert (transfer.element_in, transfer.element_out, transfer.event) == (16, 11, 2)
        assert transfer.time == datetime(2024, 8, 20, 21, 15, tzinfo=timezone.utc)

        assert context.chip_in(1) == "bboost"

    def test_picks_and_live_points(self):
        """Test picks keyed by gameweek and live points lookup."""
        context = SeasonLoader().load(sample_export())
        picks = context.picks(1)

        assert picks.active_chip == "bboost"
        assert picks.captain.element == 10
        assert picks.captain.multiplier == 2
        assert context.points(10, 1) == 13
        assert context.points(99, 1) == 0

    def test_missing_optional_history_values(self):
        """Test rows without a rank load with None."""
        export = sample_export()
        export["history"]["current"].append({"event": 2, "points": 40, "total_points": 104})
        context = SeasonLoader().load(export)

        assert context.history[1].overall_rank is None
        assert context.history[1].value == 0
        assert context.overall_rank == 9_999_999

    def test_empty_sections(self):
        """Test a pre-season export with nothing played."""
        export = sample_export()
        export["history"] = {"current": [], "chips": []}
        export["transfers"] = []
        export["picks"] = {}
        export["live"] = {}
        for event in export["bootstrap"]["events"]:
            event["finished"] = False

        context = SeasonLoader().load(export)

        assert context.finished_gameweeks == ()
        assert context.history == ()
        assert context.transfers == ()

    def test_load_from_file(self, tmp_path):
        """Test loading from a JSON file."""
        path = tmp_path / "season.json"
        path.write_text(json.dumps(sample_export()), encoding="utf-8")

        context = load_season(path)
        assert context.manager.name == "Wrapped XI"

    def test_loads_bytes(self):
        """Test loading raw JSON bytes from an upload."""
        context = SeasonLoader().loads(json.dumps(sample_export()).encode("utf-8"))
        assert context.manager.id == 1234

    def test_missing_file(self, tmp_path):
        """Test missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Season export not found"):
            SeasonLoader().load(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        """Test a corrupt file raises ValueError."""
        path = tmp_path / "season.json"
        path.write_text('{"bootstrap": ', encoding="utf-8")

        with pytest.raises(ValueError, match="not valid JSON"):
            SeasonLoader().load(path)

    def test_missing_section(self):
        """Test missing required section raises ValueError."""
        export = sample_export()
        del export["history"]

        with pytest.raises(ValueError, match="missing required sections"):
            SeasonLoader().load(export)

    def test_missing_column(self):
        """Test missing required column raises ValueError."""
        export = sample_export()
        export["transfers"] = [{"element_in": 16, "event": 2}]

        with pytest.raises(ValueError, match="Missing required columns for transfers"):
            SeasonLoader().load(export)

    def test_missing_manager_id(self):
        """Test the entry must identify the manager."""
        export = sample_export()
        del export["entry"]["id"]

        with pytest.raises(ValueError, match="manager id"):
            SeasonLoader().load(export)

    def test_malformed_transfer_skipped(self):
        """Test bad transfer rows are skipped with a warning."""
        export = sample_export()
        export["transfers"].append({"element_in": "abc", "element_out": 11, "event": 3})

        loader = SeasonLoader()
        context = loader.load(export)

        assert len(context.transfers) == 1
        assert len(loader.warnings) == 1
        assert loader.warnings[0].startswith("Transfer row 1: Skipping due to error")

    def test_warnings_reset_between_loads(self):
        """Test each load starts with a clean warning list."""
        bad = sample_export()
        bad["transfers"].append({"element_in": 16, "element_out": 11, "event": 0})

        loader = SeasonLoader()
        loader.load(bad)
        assert len(loader.warnings) == 1

        loader.load(sample_export())
        assert loader.warnings == []
