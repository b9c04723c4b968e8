"""
Unit tests for data models.

Tests cover:
- Pick / GameweekPicks: validation, ordering, single captain
- SeasonContext: validation, lookups, season aggregates
- PersonaMetrics: range validation, lookups, factories
- BehavioralSignals, ManagerSpectrums, analysis records
- SeasonSummary: validation and JSON serialization
"""

import pytest
from pydantic import ValidationError

from fpl_wrapped.models.analysis_results import (
    CaptaincyAnalysis,
    ChipPersonality,
    OwnershipSpan,
    PointsHistoryEntry,
    TransferTiming,
)
from fpl_wrapped.models.behavioral_signals import BehavioralSignals
from fpl_wrapped.models.persona import ManagerSpectrums, PersonaDefinition
from fpl_wrapped.models.persona_metrics import PersonaMetrics
from fpl_wrapped.models.season_context import (
    ChipPlay,
    GameweekHistory,
    GameweekPicks,
    ManagerInfo,
    Pick,
    SeasonContext,
    Transfer,
)
from fpl_wrapped.utils.constants import DEFAULT_SQUAD_VALUE, UNRANKED

from conftest import build_context, build_picks


# =============================================================================
# Pick / GameweekPicks Tests
# =============================================================================

class TestPicks:
    """Tests for squad picks."""

    def test_reject_position_below_one(self):
        """Test that slot 0 raises ValueError."""
        with pytest.raises(ValueError, match="position"):
            Pick(element=1, position=0, multiplier=1)

    def test_reject_invalid_multiplier(self):
        """Test that a multiplier of 4 raises ValueError."""
        with pytest.raises(ValueError, match="multiplier"):
            Pick(element=1, position=1, multiplier=4)

    def test_starter_and_bench_split(self):
        """Test that slots 1-11 start and 12-15 are benched."""
        picks = build_picks(1)
        assert [p.element for p in picks.starters] == list(range(1, 12))
        assert [p.element for p in picks.bench] == [12, 13, 14, 15]

    def test_picks_sorted_by_position(self):
        """Test that picks are stored in squad order."""
        picks = GameweekPicks(event=1, picks=(
            Pick(element=7, position=2, multiplier=1),
            Pick(element=3, position=1, multiplier=1),
        ))
        assert [p.element for p in picks.picks] == [3, 7]

    def test_reject_duplicate_positions(self):
        """Test that two picks in one slot raise ValueError."""
        with pytest.raises(ValueError, match="duplicate"):
            GameweekPicks(event=1, picks=(
                Pick(element=1, position=1, multiplier=1),
                Pick(element=2, position=1, multiplier=1),
            ))

    def test_reject_two_captains(self):
        """Test that more than one captain raises ValueError."""
        with pytest.raises(ValueError, match="one captain"):
            GameweekPicks(event=1, picks=(
                Pick(element=1, position=1, multiplier=2, is_captain=True),
                Pick(element=2, position=2, multiplier=2, is_captain=True),
            ))

    def test_reject_benched_captain_multiplier(self):
        """Test that a captain with multiplier 0 raises ValueError."""
        with pytest.raises(ValueError, match="captain multiplier"):
            GameweekPicks(event=1, picks=(
                Pick(element=1, position=12, multiplier=0, is_captain=True),
            ))

    def test_captain_lookup(self):
        """Test captain and membership helpers."""
        picks = build_picks(1, captain=6, captain_multiplier=3)
        assert picks.captain.element == 6
        assert picks.captain.multiplier == 3
        assert picks.contains(15)
        assert not picks.contains(16)


# =============================================================================
# SeasonContext Tests
# =============================================================================

class TestSeasonContext:
    """Tests for SeasonContext model."""

    def test_empty_context(self):
        """Test the pre-season factory."""
        context = SeasonContext.empty()
        assert context.finished_gameweeks == ()
        assert context.total_points == 0
        assert context.overall_rank == UNRANKED
        assert context.final_squad_value == DEFAULT_SQUAD_VALUE

    def test_reject_non_positive_total_players(self):
        """Test that total_players of 0 raises ValueError."""
        with pytest.raises(ValueError, match="total_players"):
            build_context(total_players=0)

    def test_reject_picks_under_wrong_gameweek(self):
        """Test that picks keyed under another gameweek raise ValueError."""
        with pytest.raises(ValueError, match="belong to GW2"):
            build_context(picks={1: build_picks(2)}, finished=[1])

    def test_history_and_chips_sorted(self):
        """Test that history rows and chips are ordered by gameweek."""
        context = build_context(
            history=[
                GameweekHistory(event=3, points=50, total_points=150),
                GameweekHistory(event=1, points=60, total_points=60),
            ],
            chips=[ChipPlay(name="bboost", event=9), ChipPlay(name="wildcard", event=4)],
        )
        assert [h.event for h in context.history] == [1, 3]
        assert [c.name for c in context.chips] == ["wildcard", "bboost"]
        assert context.total_points == 150

    def test_finished_gameweeks_deduplicated(self):
        """Test that finished gameweeks are sorted and unique."""
        context = build_context(finished=[3, 1, 3, 2])
        assert context.finished_gameweeks == (1, 2, 3)

    def test_missing_points_are_zero(self):
        """Test that unknown players and gameweeks score 0."""
        context = build_context(live={1: {10: 12}})
        assert context.points(10, 1) == 12
        assert context.points(99, 1) == 0
        assert context.points(10, 7) == 0

    def test_chip_lookups(self):
        """Test chip_in and chip by name."""
        context = build_context(chips=[ChipPlay(name="3xc", event=5)])
        assert context.chip_in(5) == "3xc"
        assert context.chip_in(6) is None
        assert context.chip("3xc").event == 5
        assert context.chip("freehit") is None

    def test_season_aggregates(self):
        """Test hit cost, rank and squad value from history."""
        context = build_context(history=[
            GameweekHistory(event=1, points=60, total_points=60, overall_rank=900_000,
                            value=1000, event_transfers_cost=0),
            GameweekHistory(event=2, points=72, total_points=132, overall_rank=450_000,
                            value=1006, event_transfers_cost=4),
            GameweekHistory(event=3, points=40, total_points=172, overall_rank=610_000,
                            value=1011, event_transfers_cost=8),
        ])
        assert context.total_hit_cost == 12
        assert context.overall_rank == 610_000
        assert context.final_squad_value == 1011

    def test_reject_negative_hit_cost(self):
        """Test that a negative transfer cost raises ValueError."""
        with pytest.raises(ValueError, match="event_transfers_cost"):
            GameweekHistory(event=1, points=50, total_points=50, event_transfers_cost=-4)

    def test_reject_transfer_in_gameweek_zero(self):
        """Test that a transfer before GW1 raises ValueError."""
        with pytest.raises(ValueError, match="transfer event"):
            Transfer(element_in=1, element_out=2, event=0)

    def test_manager_full_name(self):
        """Test first and last name joining."""
        assert ManagerInfo(id=1, first_name="Sam", last_name="Reed").full_name == "Sam Reed"
        assert ManagerInfo(id=1, first_name="Sam").full_name == "Sam"


# =============================================================================
# PersonaMetrics Tests
# =============================================================================

class TestPersonaMetrics:
    """Tests for PersonaMetrics model."""

    def test_reject_metric_above_one(self):
        """Test that a metric over 1 raises ValueError."""
        with pytest.raises(ValueError, match="chaos"):
            PersonaMetrics(activity=0.5, chaos=1.2, overthink=0.1, template=0.5,
                           efficiency=0.5, leadership=0.5, thrift=0.1)

    def test_reject_negative_metric(self):
        """Test that a negative metric raises ValueError."""
        with pytest.raises(ValueError, match="thrift"):
            PersonaMetrics(activity=0.5, chaos=0.2, overthink=0.1, template=0.5,
                           efficiency=0.5, leadership=0.5, thrift=-0.1)

    def test_optional_metrics_default_to_neutral(self):
        """Test that style metrics default to 0.5."""
        metrics = PersonaMetrics(activity=0.5, chaos=0.2, overthink=0.1, template=0.5,
                                 efficiency=0.5, leadership=0.5, thrift=0.1)
        assert metrics.patience == 0.5
        assert metrics.chip_risk == 0.5

    def test_get_unknown_metric(self):
        """Test that reading an unknown metric raises KeyError."""
        with pytest.raises(KeyError):
            PersonaMetrics.empty().get("roi")

    def test_from_dict_fills_missing(self):
        """Test that from_dict falls back to neutral values."""
        metrics = PersonaMetrics.from_dict({"activity": 0.9})
        assert metrics.activity == 0.9
        assert metrics.template == 0.5

    def test_empty_factory(self):
        """Test the no-gameweek factory."""
        metrics = PersonaMetrics.empty()
        assert metrics.activity == 0.0
        assert metrics.efficiency == 0.0
        assert metrics.timing == 0.5


# =============================================================================
# Signals and Persona Tests
# =============================================================================

class TestBehavioralSignals:
    """Tests for BehavioralSignals model."""

    def test_active_in_declaration_order(self):
        """Test that active lists fired signals in field order."""
        signals = BehavioralSignals(rotation_pain=True, hit_addict=True, fully_invested=True)
        assert signals.active == ["hit_addict", "rotation_pain", "fully_invested"]

    def test_no_signals(self):
        """Test that the default instance has no active signals."""
        assert BehavioralSignals().active == []


class TestManagerSpectrums:
    """Tests for the personality code."""

    def test_code_letters(self):
        """Test each axis maps to its letter."""
        spectrums = ManagerSpectrums(differential=0.7, analyzer=0.2, patient=0.5, cautious=0.3)
        assert spectrums.code == "DAPA"

    def test_template_intuitive_reactive_cautious(self):
        """Test the opposite letters."""
        spectrums = ManagerSpectrums(differential=0.1, analyzer=0.9, patient=0.2, cautious=0.8)
        assert spectrums.code == "TIRC"


class TestPersonaDefinition:
    """Tests for catalog entries."""

    def test_reject_unknown_metric_weight(self):
        """Test that a weight on an unknown metric raises ValueError."""
        with pytest.raises(ValueError, match="unknown metric"):
            PersonaDefinition(
                key="X", name="X", title="X", description="", color="#000000",
                traits=(), weights=(("roi", 0.5),),
            )


# =============================================================================
# Analysis Record Tests
# =============================================================================

class TestAnalysisRecords:
    """Tests for analyzer output records."""

    def test_reject_negative_points_left(self):
        """Test that captaincy can never gain from hindsight."""
        with pytest.raises(ValueError, match="points_left_on_table"):
            CaptaincyAnalysis(
                event=1, captain_id=10, captain_name="Haaland", captain_points=10,
                multiplier=2, multiplied_points=20, best_pick_id=6,
                best_pick_name="M.Salah", best_pick_points=6,
                points_left_on_table=-4, was_optimal=False,
            )

    def test_points_history_differential(self):
        """Test per-gameweek differential."""
        assert PointsHistoryEntry(event=3, points_in=2, points_out=9).differential == -7

    def test_ownership_span_held(self):
        """Test gameweeks held between purchase and sale."""
        assert OwnershipSpan(first_gw=4, last_gw=16).held == 12

    def test_timed_transfers_total(self):
        """Test that only deadline buckets count as timed."""
        timing = TransferTiming(panic_transfers=1, deadline_day_transfers=2,
                                midweek_transfers=3, early_strategic_transfers=4,
                                knee_jerk_transfers=5, late_night_transfers=6)
        assert timing.timed_transfers == 10

    def test_pending_chip_personality(self):
        """Test the neutral no-chip personality."""
        personality = ChipPersonality.pending()
        assert personality.effectiveness_score == 0.5
        assert personality.timing_profile == "Pending"
        assert personality.is_strategic is False


# =============================================================================
# SeasonSummary Tests
# =============================================================================

class TestSeasonSummary:
    """Tests for the SeasonSummary pydantic model."""

    @pytest.fixture
    def summary(self):
        from fpl_wrapped.scoring.summary_builder import build_season_summary
        return build_season_summary(SeasonContext.empty(ManagerInfo(id=77, name="Empty FC")))

    def test_model_dump_json_mode(self, summary):
        """Test JSON serialization of nested records."""
        data = summary.model_dump(mode='json')
        assert data["manager_id"] == 77
        assert data["team_name"] == "Empty FC"
        assert len(data["chips"]) == 4
        assert data["persona"]["key"] == "MOYES"
        assert isinstance(data["persona"]["trait_spectrum"], list)

    def test_summary_is_frozen(self, summary):
        """Test that the summary cannot be mutated."""
        with pytest.raises(ValidationError):
            summary.total_points = 100

    def test_reject_wrong_chip_count(self, summary):
        """Test that anything but four chip records is rejected."""
        data = dict(summary)
        data["chips"] = data["chips"][:3]
        with pytest.raises(ValidationError):
            type(summary)(**data)
