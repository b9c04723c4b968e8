"""
Season summary builder.

Runs the four analyzers and the transfer timing analysis over a season,
aggregates their outputs into totals, grades and squad insights, then
scores the manager's persona. The result is a single SeasonSummary.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Optional, Sequence

from fpl_wrapped.analysis import (
    BenchAnalyzer,
    CaptaincyAnalyzer,
    ChipAnalyzer,
    TransferAnalyzer,
    TransferTimingAnalyzer,
    average_bench_points,
)
from fpl_wrapped.config import PipelineConfig
from fpl_wrapped.models.analysis_results import ChipAnalysis
from fpl_wrapped.models.behavioral_signals import BehavioralSignals
from fpl_wrapped.models.season_context import SeasonContext
from fpl_wrapped.models.season_summary import (
    GameweekScore,
    PlayerContribution,
    PositionBreakdown,
    RankPoint,
    SeasonGrades,
    SeasonSummary,
    SquadValueTrend,
)
from fpl_wrapped.scoring.chip_personality import ChipPersonalityAnalyzer
from fpl_wrapped.scoring.metrics_normalizer import MetricsNormalizer
from fpl_wrapped.scoring.persona_detector import PersonaDetector, SeasonHighlights
from fpl_wrapped.scoring.signal_detector import BehavioralSignalDetector, analyze_captain_pattern
from fpl_wrapped.utils.constants import (
    BENCH_GRADE_PENALTY,
    BENCH_GRADE_THRESHOLDS,
    CAPTAINCY_GRADE_THRESHOLDS,
    DEFAULT_SQUAD_VALUE,
    GRADE_LETTERS,
    GRADE_POINTS,
    POSITION_ORDER,
    TOP_CONTRIBUTORS_LIMIT,
    TRANSFER_GRADE_THRESHOLDS,
    TREND_FALLING,
    TREND_FLAT,
    TREND_RISING,
    VALUE_ARCHETYPE_DEFAULT,
    VALUE_ARCHETYPES,
    VALUE_TREND_THRESHOLD,
)
from fpl_wrapped.utils.numbers import mean, round_half_up, round_int, safe_divide


logger = logging.getLogger(__name__)


class SeasonSummaryBuilder:
    """
    Builder for the complete season report.

    Pipeline:
    1. Transfers, captaincy, bench, then chips (using the bench analyses)
    2. Transfer timing
    3. Squad insights: template overlap, contributors, value trend
    4. Chip personality, signals, metrics and captain pattern
    5. Persona (the configured default when no gameweek has finished)

    Example usage:
        builder = SeasonSummaryBuilder()
        summary = builder.build(context)
        print(summary.persona.name, summary.grades.overall)
    """

    def __init__(self, config: Optional[PipelineConfig] = None) -> None:
        """
        Initialize builder.

        Args:
            config: Pipeline settings shared with the persona detector
        """
        self.config = config or PipelineConfig()
        self.persona_detector = PersonaDetector(self.config)

    def build(self, context: SeasonContext) -> SeasonSummary:
        """
        Build the season summary for one manager.

        Args:
            context: Season data for one manager

        Returns:
            SeasonSummary with every analysis, aggregate and the persona
        """
        transfers = TransferAnalyzer().analyze(context)
        captaincy = CaptaincyAnalyzer().analyze(context)
        bench = BenchAnalyzer().analyze(context)
        chips = ChipAnalyzer().analyze(context, bench_analyses=bench)
        timing = TransferTimingAnalyzer().analyze(context)

        overlap = template_overlap(context, self.config.template_ownership_threshold)
        contributors = player_contributions(context)

        # Transfers
        net_transfer_points = sum(t.points_gained for t in transfers)
        transfer_efficiency = net_transfer_points - context.total_hit_cost

        # Captaincy
        total_captain_points = sum(c.captain_points for c in captaincy)
        optimal_captain_points = sum(c.best_pick_points for c in captaincy)
        success_rate = safe_divide(
            sum(1 for c in captaincy if c.was_optimal), len(captaincy)
        ) * 100
        herd_factor = safe_divide(
            sum(1 for c in captaincy if c.was_most_captained_global), len(captaincy)
        ) * 100
        captaincy_efficiency = captain_efficiency(total_captain_points, optimal_captain_points)

        # Bench
        avg_bench = average_bench_points(bench)
        worst_bench = max(bench, key=lambda b: b.missed_points, default=None)
        if worst_bench is not None and not worst_bench.had_bench_regret:
            worst_bench = None

        # Behaviour
        chip_personality = ChipPersonalityAnalyzer().analyze(chips, context)
        signals = BehavioralSignalDetector().detect(context, timing, chip_personality, overlap)
        metrics = MetricsNormalizer().calculate(
            context,
            net_transfer_points=net_transfer_points,
            avg_bench_points=avg_bench,
            template_overlap=overlap,
            captaincy_success_rate=success_rate,
            timing=timing,
            chip_personality=chip_personality,
        )
        captain_pattern = analyze_captain_pattern(captaincy)

        highlights = SeasonHighlights(
            best_transfer=max(transfers, key=lambda t: t.points_gained, default=None),
            worst_transfer=min(transfers, key=lambda t: t.points_gained, default=None),
            best_captain=max(captaincy, key=lambda c: c.multiplied_points, default=None),
            worst_captain=max(captaincy, key=lambda c: c.points_left_on_table, default=None),
            worst_bench=worst_bench,
            best_chip=best_chip(chips),
        )

        if context.finished_gameweeks:
            persona = self.persona_detector.detect(
                metrics,
                signals,
                captain_pattern,
                rank=context.overall_rank,
                highlights=highlights,
                total_players=context.total_players,
            )
        else:
            logger.debug("No finished gameweeks, using default persona %s",
                         self.config.default_persona)
            persona = self.persona_detector.default_persona(metrics)

        grades = season_grades(transfer_efficiency, captaincy_efficiency, avg_bench)
        points = [GameweekScore(event=h.event, points=h.points) for h in context.history]

        return SeasonSummary(
            manager_id=context.manager.id,
            manager_name=context.manager.full_name,
            team_name=context.manager.name,
            region=context.manager.region_name,
            total_points=context.total_points,
            overall_rank=context.overall_rank,
            gameweeks_analyzed=len(context.finished_gameweeks),
            transfers=transfers,
            captaincy=captaincy,
            bench=bench,
            chips=chips,
            transfer_timing=timing,
            total_transfers=len(transfers),
            total_transfers_cost=context.total_hit_cost,
            net_transfer_points=net_transfer_points,
            transfer_efficiency=transfer_efficiency,
            best_transfer=highlights.best_transfer,
            worst_transfer=highlights.worst_transfer,
            total_captain_points=total_captain_points,
            optimal_captain_points=optimal_captain_points,
            captaincy_points_lost=sum(c.points_left_on_table for c in captaincy),
            captaincy_success_rate=round_half_up(success_rate, 1),
            captaincy_herd_factor=round_half_up(herd_factor, 1),
            captaincy_efficiency=round_half_up(captaincy_efficiency, 1),
            best_captain=highlights.best_captain,
            worst_captain=highlights.worst_captain,
            total_bench_points=sum(b.bench_points for b in bench),
            bench_regrets=sum(1 for b in bench if b.had_bench_regret),
            worst_bench_miss=worst_bench,
            avg_bench_per_gw=round_half_up(avg_bench, 1),
            grades=grades,
            top_contributors=contributors[:TOP_CONTRIBUTORS_LIMIT],
            mvp=contributors[0] if contributors else None,
            position_breakdown=position_breakdown(contributors),
            template_overlap=overlap,
            best_gameweek=max(points, key=lambda g: g.points, default=None),
            worst_gameweek=min(points, key=lambda g: g.points, default=None),
            rank_progression=[
                RankPoint(event=h.event, overall_rank=h.overall_rank)
                for h in context.history if h.overall_rank
            ],
            squad_value=squad_value_trend(context, signals),
            chips_used=[c.name for c in context.chips],
            metrics=metrics,
            signals=signals.active,
            chip_personality=chip_personality,
            captain_pattern=captain_pattern,
            persona=persona,
        )


# =============================================================================
# Grades
# =============================================================================

def calculate_grade(score: float, thresholds: Sequence[float]) -> str:
    """
    Letter grade for a score.

    Args:
        score: Value being graded
        thresholds: Minimum scores for A, B, C and D, descending

    Returns:
        "A" to "D" for the first floor reached, otherwise "F"

    Examples:
        >>> calculate_grade(30, (30, 10, -10, -30))
        'A'
        >>> calculate_grade(-31, (30, 10, -10, -30))
        'F'
    """
    for letter, floor in zip(GRADE_LETTERS, thresholds):
        if score >= floor:
            return letter
    return GRADE_LETTERS[-1]


def season_grades(
    transfer_efficiency: float,
    captaincy_efficiency: float,
    avg_bench_points: float,
) -> SeasonGrades:
    """Transfer, captaincy and bench grades plus their rounded average."""
    transfers = calculate_grade(transfer_efficiency, TRANSFER_GRADE_THRESHOLDS)
    captaincy = calculate_grade(captaincy_efficiency, CAPTAINCY_GRADE_THRESHOLDS)
    bench = calculate_grade(100 - avg_bench_points * BENCH_GRADE_PENALTY, BENCH_GRADE_THRESHOLDS)

    average = round_int(mean(GRADE_POINTS[g] for g in (transfers, captaincy, bench)))
    overall = next(letter for letter, value in GRADE_POINTS.items() if value == average)

    return SeasonGrades(transfers=transfers, captaincy=captaincy, bench=bench, overall=overall)


def captain_efficiency(captain_points: int, optimal_points: int) -> float:
    """Raw captain points as a share of the best available (100 when none were)."""
    if optimal_points == 0:
        return 100.0
    return captain_points / optimal_points * 100


# =============================================================================
# Squad insights
# =============================================================================

def template_overlap(context: SeasonContext, ownership_threshold: float) -> float:
    """
    Share of squad slots filled by template players.

    Counts every pick in every finished gameweek with recorded picks.
    Players missing from the catalog occupy a slot but are never template.

    Args:
        context: Season data
        ownership_threshold: selected_by_percent at which a player is template

    Returns:
        Percentage 0-100 (1 decimal), 0 when no picks were recorded
    """
    slots = 0
    template_slots = 0
    for gameweek in context.finished_gameweeks:
        picks = context.picks(gameweek)
        if picks is None:
            continue
        for pick in picks.picks:
            slots += 1
            player = context.player(pick.element)
            if player is not None and player.selected_by_percent >= ownership_threshold:
                template_slots += 1

    return round_half_up(safe_divide(template_slots, slots) * 100, 1)


def player_contributions(context: SeasonContext) -> List[PlayerContribution]:
    """
    Points each player delivered from the starting eleven, best first.

    Points include the captain multiplier. Unknown players and players who
    contributed nothing are left out; ties keep ascending player id.
    """
    totals: Dict[int, int] = defaultdict(int)
    for gameweek in context.finished_gameweeks:
        picks = context.picks(gameweek)
        if picks is None:
            continue
        for pick in picks.starters:
            totals[pick.element] += context.points(pick.element, gameweek) * pick.multiplier

    season_total = sum(totals.values())
    contributions = []
    for player_id in sorted(totals):
        player = context.player(player_id)
        points = totals[player_id]
        if player is None or points <= 0:
            continue
        contributions.append(PlayerContribution(
            player_id=player_id,
            name=player.web_name,
            position=player.position,
            points=points,
            percentage=round_int(safe_divide(points, season_total) * 100),
        ))

    contributions.sort(key=lambda c: c.points, reverse=True)
    return contributions


def position_breakdown(contributions: List[PlayerContribution]) -> List[PositionBreakdown]:
    """Points, share and player count per position, GKP to FWD."""
    season_total = sum(c.points for c in contributions)
    breakdown = []
    for position in POSITION_ORDER:
        players = [c for c in contributions if c.position == position]
        points = sum(c.points for c in players)
        breakdown.append(PositionBreakdown(
            position=position,
            points=points,
            percentage=round_int(safe_divide(points, season_total) * 100),
            player_count=len(players),
        ))
    return breakdown


def squad_value_trend(context: SeasonContext, signals: BehavioralSignals) -> SquadValueTrend:
    """Start, end and peak squad value with the bank habit archetype."""
    values = [h.value for h in context.history if h.value]
    if not values:
        values = [DEFAULT_SQUAD_VALUE]
    change = values[-1] - values[0]

    if change >= VALUE_TREND_THRESHOLD:
        trend = TREND_RISING
    elif change <= -VALUE_TREND_THRESHOLD:
        trend = TREND_FALLING
    else:
        trend = TREND_FLAT

    archetype = next(
        (label for signal, label in VALUE_ARCHETYPES if getattr(signals, signal)),
        VALUE_ARCHETYPE_DEFAULT,
    )

    return SquadValueTrend(
        start_value=values[0],
        end_value=values[-1],
        peak_value=max(values),
        change=change,
        avg_bank=round_half_up(mean(h.bank for h in context.history), 1),
        trend=trend,
        archetype=archetype,
    )


def best_chip(chips: List[ChipAnalysis]) -> Optional[ChipAnalysis]:
    """Highest-scoring excellent chip, None when no chip was excellent."""
    excellent = [c for c in chips if c.used and c.is_excellent]
    return max(excellent, key=lambda c: c.points_gained, default=None)


def build_season_summary(
    context: SeasonContext,
    config: Optional[PipelineConfig] = None,
) -> SeasonSummary:
    """
    Build a season summary.

    Convenience function using default builder.

    Args:
        context: Season data for one manager
        config: Pipeline settings (defaults when omitted)

    Returns:
        SeasonSummary
    """
    builder = SeasonSummaryBuilder(config)
    return builder.build(context)
