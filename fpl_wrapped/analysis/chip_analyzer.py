"""
Chip analyzer for judging the four one-time chips.

Every season report carries exactly four chip records (Triple Captain,
Bench Boost, Free Hit, Wildcard), used or not. Each used chip gets a points
figure from a chip-specific formula and a three-tier verdict.
"""

import logging
from typing import Any, Dict, List, Optional

from fpl_wrapped.analysis.bench_analyzer import BenchAnalyzer, average_bench_points
from fpl_wrapped.models.analysis_results import BenchAnalysis, ChipAnalysis
from fpl_wrapped.models.season_context import ChipPlay, SeasonContext
from fpl_wrapped.utils.constants import (
    CHIP_BENCH_BOOST,
    CHIP_DISPLAY_NAMES,
    CHIP_FREE_HIT,
    CHIP_ORDER,
    CHIP_PENDING_DETAILS,
    CHIP_PENDING_VERDICT,
    CHIP_TIER_THRESHOLDS,
    CHIP_TRIPLE_CAPTAIN,
    CHIP_VERDICT_LABELS,
    CHIP_WILDCARD,
    TIER_DECENT,
    TIER_EXCELLENT,
    TIER_WASTED,
    WILDCARD_WINDOW_GWS,
)
from fpl_wrapped.utils.numbers import mean, round_int


logger = logging.getLogger(__name__)


class ChipAnalyzer:
    """
    Analyzer for chip plays.

    Example usage:
        analyzer = ChipAnalyzer()
        chips = analyzer.analyze(context)
        assert [c.name for c in chips] == ['3xc', 'bboost', 'freehit', 'wildcard']
    """

    def analyze(
        self,
        context: SeasonContext,
        bench_analyses: Optional[List[BenchAnalysis]] = None,
    ) -> List[ChipAnalysis]:
        """
        Analyze all four chips.

        Args:
            context: Season data for one manager
            bench_analyses: Bench analyses for the season, used for the Bench
                Boost baseline (computed when not supplied)

        Returns:
            Exactly four ChipAnalysis records in fixed chip order
        """
        if bench_analyses is None:
            bench_analyses = BenchAnalyzer().analyze(context)

        analyses: List[ChipAnalysis] = []
        for name in CHIP_ORDER:
            chip = context.chip(name)
            if chip is None or not context.is_finished(chip.event):
                analyses.append(self._pending(name, chip.event if chip else 0))
                continue

            if name == CHIP_BENCH_BOOST:
                analyses.append(self._analyze_bench_boost(context, chip, bench_analyses))
            elif name == CHIP_TRIPLE_CAPTAIN:
                analyses.append(self._analyze_triple_captain(context, chip))
            elif name == CHIP_FREE_HIT:
                analyses.append(self._analyze_free_hit(context, chip))
            else:
                analyses.append(self._analyze_wildcard(context, chip))

        return analyses

    # -------------------------------------------------------------------------
    # Chip formulas
    # -------------------------------------------------------------------------

    def _analyze_bench_boost(
        self,
        context: SeasonContext,
        chip: ChipPlay,
        bench_analyses: List[BenchAnalysis],
    ) -> ChipAnalysis:
        """Bench Boost gain is the bench's own score that week."""
        picks = context.picks(chip.event)
        if picks is None:
            return self._unjudged(CHIP_BENCH_BOOST, chip.event)

        bench_players: List[Dict[str, Any]] = []
        points_gained = 0
        for pick in picks.bench:
            points = context.points(pick.element, chip.event)
            points_gained += points
            player = context.player(pick.element)
            if player is not None:
                bench_players.append({'name': player.web_name, 'points': points})

        season_average = average_bench_points(bench_analyses, exclude_gw=chip.event)
        differential = points_gained - season_average

        thresholds = CHIP_TIER_THRESHOLDS[CHIP_BENCH_BOOST]
        if (points_gained >= thresholds['excellent_points']
                or differential >= thresholds['excellent_differential']):
            tier = TIER_EXCELLENT
        elif (points_gained >= thresholds['decent_points']
                or differential >= thresholds['decent_differential']):
            tier = TIER_DECENT
        else:
            tier = TIER_WASTED

        return self._judged(
            CHIP_BENCH_BOOST,
            chip.event,
            points_gained,
            tier,
            details=f"Your bench delivered {points_gained} extra points.",
            metadata={
                'bench_players': bench_players,
                'season_average_bench': round(season_average, 1),
                'differential': round(differential, 1),
            },
        )

    def _analyze_triple_captain(self, context: SeasonContext, chip: ChipPlay) -> ChipAnalysis:
        """Triple Captain gain is one extra helping of the captain's raw score."""
        picks = context.picks(chip.event)
        captain = picks.captain if picks else None
        if captain is None:
            return self._unjudged(CHIP_TRIPLE_CAPTAIN, chip.event)

        base_points = context.points(captain.element, chip.event)
        player = context.player(captain.element)
        captain_name = player.web_name if player else 'Unknown'

        thresholds = CHIP_TIER_THRESHOLDS[CHIP_TRIPLE_CAPTAIN]
        if base_points >= thresholds['excellent']:
            tier = TIER_EXCELLENT
        elif base_points >= thresholds['decent']:
            tier = TIER_DECENT
        else:
            tier = TIER_WASTED

        return self._judged(
            CHIP_TRIPLE_CAPTAIN,
            chip.event,
            base_points,
            tier,
            details=f"{captain_name} added {base_points} net points.",
            metadata={
                'captain_name': captain_name,
                'captain_base_points': base_points,
                'captain_total_points': base_points * 3,
            },
        )

    def _analyze_free_hit(self, context: SeasonContext, chip: ChipPlay) -> ChipAnalysis:
        """Free Hit gain is the Free Hit score minus the old eleven's score that week."""
        current = context.picks(chip.event)
        previous = context.picks(chip.event - 1)
        if current is None or previous is None:
            return self._unjudged(CHIP_FREE_HIT, chip.event)

        history = context.history_for(chip.event)
        if history is not None:
            free_hit_points = history.points
        else:
            free_hit_points = sum(
                context.points(p.element, chip.event) * p.multiplier for p in current.picks
            )

        previous_points = 0
        previous_players: List[Dict[str, Any]] = []
        for pick in previous.starters:
            points = context.points(pick.element, chip.event)
            multiplier = 2 if pick.is_captain else 1
            previous_points += points * multiplier
            player = context.player(pick.element)
            if player is not None:
                previous_players.append({
                    'name': player.web_name, 'points': points, 'multiplier': multiplier,
                })

        points_gained = free_hit_points - previous_points

        thresholds = CHIP_TIER_THRESHOLDS[CHIP_FREE_HIT]
        if points_gained >= thresholds['excellent']:
            tier = TIER_EXCELLENT
        elif points_gained > thresholds['decent']:
            tier = TIER_DECENT
        else:
            tier = TIER_WASTED

        direction = 'Gained' if points_gained >= 0 else 'Lost'
        return self._judged(
            CHIP_FREE_HIT,
            chip.event,
            points_gained,
            tier,
            details=f"{direction} {abs(points_gained)} points vs your old team.",
            metadata={
                'free_hit_points': free_hit_points,
                'previous_team_points': previous_points,
                'previous_team_players': previous_players,
            },
        )

    def _analyze_wildcard(self, context: SeasonContext, chip: ChipPlay) -> ChipAnalysis:
        """
        Wildcard gain compares net form either side of the rebuild.

        Net form per gameweek is points minus hits minus the global average,
        averaged over up to four finished gameweeks on each side.
        """
        before = [
            gw for gw in context.finished_gameweeks
            if chip.event - WILDCARD_WINDOW_GWS <= gw < chip.event
        ]
        after = [
            gw for gw in context.finished_gameweeks
            if chip.event < gw <= chip.event + WILDCARD_WINDOW_GWS
        ]
        if not before or not after:
            return self._unjudged(
                CHIP_WILDCARD,
                chip.event,
                details="Not enough gameweeks either side of the wildcard to judge it yet.",
            )

        net_before = [self._net_form(context, gw) for gw in before]
        net_after = [self._net_form(context, gw) for gw in after]
        avg_before = mean(net_before)
        avg_after = mean(net_after)
        points_gained = round_int(avg_after - avg_before)

        thresholds = CHIP_TIER_THRESHOLDS[CHIP_WILDCARD]
        if points_gained >= thresholds['excellent']:
            tier = TIER_EXCELLENT
        elif points_gained >= thresholds['decent']:
            tier = TIER_DECENT
        else:
            tier = TIER_WASTED

        direction = 'Up' if points_gained >= 0 else 'Down'
        return self._judged(
            CHIP_WILDCARD,
            chip.event,
            points_gained,
            tier,
            details=f"{direction} {abs(points_gained)} pts/GW vs the average after the refresh.",
            metadata={
                'gameweeks_before': before,
                'net_before': net_before,
                'avg_before': round(avg_before, 1),
                'gameweeks_after': after,
                'net_after': net_after,
                'avg_after': round(avg_after, 1),
            },
        )

    @staticmethod
    def _net_form(context: SeasonContext, gameweek: int) -> int:
        """Points minus hit cost minus the gameweek's global average."""
        history = context.history_for(gameweek)
        event = context.event(gameweek)
        points = history.points if history else 0
        hits = history.event_transfers_cost if history else 0
        average = event.average_entry_score if event else 0
        return points - hits - average

    # -------------------------------------------------------------------------
    # Record builders
    # -------------------------------------------------------------------------

    @staticmethod
    def _pending(name: str, event: int) -> ChipAnalysis:
        """Record for a chip that has not been played in a finished gameweek."""
        return ChipAnalysis(
            name=name,
            display_name=CHIP_DISPLAY_NAMES[name],
            used=False,
            event=event,
            points_gained=0,
            verdict=CHIP_PENDING_VERDICT,
            details=CHIP_PENDING_DETAILS,
        )

    @staticmethod
    def _unjudged(name: str, event: int, details: str = "No squad data for this gameweek.") -> ChipAnalysis:
        """Record for a played chip that the data cannot evaluate."""
        logger.debug("%s in GW%s could not be evaluated", name, event)
        return ChipAnalysis(
            name=name,
            display_name=CHIP_DISPLAY_NAMES[name],
            used=True,
            event=event,
            points_gained=0,
            verdict=CHIP_PENDING_VERDICT,
            details=details,
        )

    @staticmethod
    def _judged(
        name: str,
        event: int,
        points_gained: int,
        tier: str,
        details: str,
        metadata: Dict[str, Any],
    ) -> ChipAnalysis:
        """Record for an evaluated chip."""
        return ChipAnalysis(
            name=name,
            display_name=CHIP_DISPLAY_NAMES[name],
            used=True,
            event=event,
            points_gained=points_gained,
            verdict=CHIP_VERDICT_LABELS[name][tier],
            tier=tier,
            is_excellent=tier == TIER_EXCELLENT,
            details=details,
            metadata=metadata,
        )


def analyze_chips(
    context: SeasonContext,
    bench_analyses: Optional[List[BenchAnalysis]] = None,
) -> List[ChipAnalysis]:
    """
    Analyze chips for a season.

    Convenience function using default analyzer.

    Args:
        context: Season data
        bench_analyses: Optional precomputed bench analyses

    Returns:
        Four ChipAnalysis records
    """
    analyzer = ChipAnalyzer()
    return analyzer.analyze(context, bench_analyses)
