"""
Metrics normalizer for persona scoring.

Reduces season aggregates to the eleven 0-1 PersonaMetrics that persona
weights are expressed against.
"""

from fpl_wrapped.models.analysis_results import ChipPersonality, TransferTiming
from fpl_wrapped.models.persona_metrics import PersonaMetrics
from fpl_wrapped.models.season_context import SeasonContext
from fpl_wrapped.scoring.signal_detector import (
    average_hold_length,
    build_ownership_arena,
    season_end,
)
from fpl_wrapped.utils.constants import (
    NEUTRAL_METRIC,
    NORMALIZATION,
    SIGNAL_THRESHOLDS,
    TIMING_KNEE_JERK_CAP,
    TIMING_KNEE_JERK_WEIGHT,
    TIMING_LATE_NIGHT_CAP,
    TIMING_LATE_NIGHT_WEIGHT,
)
from fpl_wrapped.utils.numbers import clamp01


class MetricsNormalizer:
    """
    Calculator for normalized persona metrics.

    Example usage:
        normalizer = MetricsNormalizer()
        metrics = normalizer.calculate(
            context,
            net_transfer_points=24,
            avg_bench_points=8.5,
            template_overlap=46,
            captaincy_success_rate=55.0,
            timing=timing,
            chip_personality=chip_personality,
        )
    """

    def calculate(
        self,
        context: SeasonContext,
        net_transfer_points: float,
        avg_bench_points: float,
        template_overlap: float,
        captaincy_success_rate: float,
        timing: TransferTiming,
        chip_personality: ChipPersonality,
    ) -> PersonaMetrics:
        """
        Calculate all eleven metrics.

        Args:
            context: Season data (transfer log, hit costs, squad value)
            net_transfer_points: Sum of points gained across analyzed transfers
            avg_bench_points: Average bench points per analyzed gameweek
            template_overlap: Template overlap percentage (0-100)
            captaincy_success_rate: Percentage of optimal captaincies (0-100)
            timing: Transfer timing analysis
            chip_personality: Chip personality scores

        Returns:
            PersonaMetrics with every value in [0, 1]
        """
        n = NORMALIZATION
        hit_cost = context.total_hit_cost

        return PersonaMetrics(
            activity=min(1.0, len(context.transfers) / n['transfers_max']),
            chaos=min(1.0, hit_cost / n['hit_cost_max']),
            overthink=clamp01(avg_bench_points / n['bench_points_max']),
            template=clamp01(template_overlap / 100),
            efficiency=clamp01((net_transfer_points - hit_cost) / n['efficiency_max']),
            leadership=clamp01(captaincy_success_rate / 100),
            thrift=clamp01((n['value_baseline'] - context.final_squad_value) / n['value_range']),
            patience=self._patience(context),
            timing=self._timing(timing),
            chip_mastery=clamp01(chip_personality.effectiveness_score),
            chip_risk=clamp01(chip_personality.risk_score),
        )

    @staticmethod
    def _patience(context: SeasonContext) -> float:
        """Blend of long-term holds and average hold length."""
        arena = build_ownership_arena(context.transfers, season_end(context))
        if not arena:
            return NEUTRAL_METRIC

        n = NORMALIZATION
        long_holds = sum(
            1 for span in arena.values()
            if span.held >= SIGNAL_THRESHOLDS['long_term_hold_gws']
        )
        holds_score = min(1.0, long_holds / n['long_holds_max'])
        length_score = min(1.0, average_hold_length(arena) / n['hold_length_max'])
        return (holds_score + length_score) / 2

    @staticmethod
    def _timing(timing: TransferTiming) -> float:
        """
        Share of deliberate transfers, less penalties for reactive habits.

        1.0 means early/midweek planning; 0.0 means deadline panic.
        """
        total = timing.timed_transfers
        if total == 0:
            return NEUTRAL_METRIC

        planned = (timing.midweek_transfers + timing.early_strategic_transfers) / total
        knee_jerk_penalty = min(
            TIMING_KNEE_JERK_CAP,
            timing.knee_jerk_transfers / total * TIMING_KNEE_JERK_WEIGHT,
        )
        late_night_penalty = min(
            TIMING_LATE_NIGHT_CAP,
            timing.late_night_transfers / total * TIMING_LATE_NIGHT_WEIGHT,
        )
        return clamp01(planned - knee_jerk_penalty - late_night_penalty)


def calculate_metrics(
    context: SeasonContext,
    net_transfer_points: float,
    avg_bench_points: float,
    template_overlap: float,
    captaincy_success_rate: float,
    timing: TransferTiming,
    chip_personality: ChipPersonality,
) -> PersonaMetrics:
    """
    Calculate persona metrics.

    Convenience function using default normalizer.
    """
    normalizer = MetricsNormalizer()
    return normalizer.calculate(
        context,
        net_transfer_points,
        avg_bench_points,
        template_overlap,
        captaincy_success_rate,
        timing,
        chip_personality,
    )
