"""
Chip personality analyzer.

Condenses the four chip verdicts into three scores: how well the chips
paid off, how much risk the manager took with them, and how closely their
timing followed the crowd.
"""

from typing import List

from fpl_wrapped.models.analysis_results import ChipAnalysis, ChipPersonality
from fpl_wrapped.models.season_context import SeasonContext
from fpl_wrapped.utils.constants import (
    BENCH_BOOST_GAMBLE_AVG,
    CHIP_BENCH_BOOST,
    CHIP_EFFECTIVENESS_SCALES,
    CHIP_POPULARITY_SCALE,
    CHIP_PROFILE_THRESHOLDS,
    CHIP_RISK_POINTS,
    CHIP_STRATEGIC_EFFECTIVENESS,
    CHIP_STRATEGIC_POPULARITY,
    CHIP_TRIPLE_CAPTAIN,
    EARLY_CHIP_GW,
    NEUTRAL_METRIC,
    SAFE_TRIPLE_CAPTAINS,
    VERY_EARLY_CHIP_GW,
)
from fpl_wrapped.utils.numbers import clamp01, mean, safe_divide


class ChipPersonalityAnalyzer:
    """
    Analyzer for chip-playing style.

    Example usage:
        chips = ChipAnalyzer().analyze(context)
        personality = ChipPersonalityAnalyzer().analyze(chips, context)
    """

    def analyze(self, chips: List[ChipAnalysis], context: SeasonContext) -> ChipPersonality:
        """
        Score the manager's chip usage.

        Args:
            chips: The four chip analyses
            context: Season data (for global chip-play counts)

        Returns:
            ChipPersonality; neutral "Pending" when no chip has been used
        """
        used = [c for c in chips if c.used]
        if not used:
            return ChipPersonality.pending()

        effectiveness = self._effectiveness_score(used)
        risk = self._risk_score(used)
        popularity = self._popularity_score(used, context)
        earliest = min(c.event for c in used)

        return ChipPersonality(
            effectiveness_score=effectiveness,
            risk_score=risk,
            popularity_score=popularity,
            is_strategic=(
                effectiveness > CHIP_STRATEGIC_EFFECTIVENESS
                and popularity > CHIP_STRATEGIC_POPULARITY
            ),
            timing_profile=self._timing_profile(earliest, popularity, effectiveness),
        )

    @staticmethod
    def _effectiveness_score(used: List[ChipAnalysis]) -> float:
        """Average of each chip's gain squashed onto 0-1 by chip type."""
        scores = []
        for chip in used:
            offset, span = CHIP_EFFECTIVENESS_SCALES.get(chip.name, (0, 0))
            if span == 0:
                scores.append(NEUTRAL_METRIC)
                continue
            scores.append(clamp01((chip.points_gained + offset) / span))
        return mean(scores, default=NEUTRAL_METRIC)

    @staticmethod
    def _risk_score(used: List[ChipAnalysis]) -> float:
        """
        Average risk across the factors that could be assessed.

        Factors:
        - Triple Captain on a non-premium player
        - Bench Boost with a strong (4+ per player) bench
        - Playing the first chip very early in the season (always assessed)
        """
        risk_points = 0.0
        risk_factors = 0

        triple_captain = next((c for c in used if c.name == CHIP_TRIPLE_CAPTAIN), None)
        if triple_captain is not None and triple_captain.metadata.get('captain_name'):
            if triple_captain.metadata['captain_name'] not in SAFE_TRIPLE_CAPTAINS:
                risk_points += CHIP_RISK_POINTS['differential_triple_captain']
            risk_factors += 1

        bench_boost = next((c for c in used if c.name == CHIP_BENCH_BOOST), None)
        if bench_boost is not None and bench_boost.metadata.get('bench_players'):
            bench_players = bench_boost.metadata['bench_players']
            avg_points = mean(p['points'] for p in bench_players)
            if avg_points >= BENCH_BOOST_GAMBLE_AVG:
                risk_points += CHIP_RISK_POINTS['bench_boost_gamble']
            risk_factors += 1

        earliest = min(c.event for c in used)
        if earliest <= VERY_EARLY_CHIP_GW:
            risk_points += CHIP_RISK_POINTS['very_early_chip']
        elif earliest <= EARLY_CHIP_GW:
            risk_points += CHIP_RISK_POINTS['early_chip']
        risk_factors += 1

        return safe_divide(risk_points, risk_factors, default=NEUTRAL_METRIC)

    @staticmethod
    def _popularity_score(used: List[ChipAnalysis], context: SeasonContext) -> float:
        """How mainstream the chip timing was: 10% of managers playing it scores 1.0."""
        rates = []
        for chip in used:
            event = context.event(chip.event)
            if event is None or not event.finished or chip.name not in event.chip_plays:
                continue
            usage = safe_divide(event.chip_plays[chip.name], context.total_players)
            rates.append(min(1.0, usage * CHIP_POPULARITY_SCALE))
        return mean(rates, default=NEUTRAL_METRIC)

    @staticmethod
    def _timing_profile(earliest: int, popularity: float, effectiveness: float) -> str:
        """Label the chip strategy; earlier rules take precedence."""
        t = CHIP_PROFILE_THRESHOLDS
        if earliest <= t['early_aggressor_gw']:
            return 'Early Aggressor'
        if earliest >= t['hoarder_gw']:
            return 'Hoarder'
        if popularity > t['template_popularity']:
            return 'Template Follower'
        if popularity < t['contrarian_popularity']:
            return 'Contrarian'
        if effectiveness > t['strategic_effectiveness']:
            return 'Strategic Planner'
        if effectiveness < t['reactive_effectiveness']:
            return 'Reactive'
        return 'Balanced'


def analyze_chip_personality(chips: List[ChipAnalysis], context: SeasonContext) -> ChipPersonality:
    """
    Analyze chip personality.

    Convenience function using default analyzer.
    """
    analyzer = ChipPersonalityAnalyzer()
    return analyzer.analyze(chips, context)
