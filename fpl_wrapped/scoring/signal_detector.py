"""
Behavioral signal detector.

Detects yes/no behavior patterns from a season: transfer activity, bench
management, long-term holding, chip timing, score volatility, transfer
timing, chip personality and squad value management. Each signal has a
single fixed rule; all thresholds live in SIGNAL_THRESHOLDS.
"""

from collections import Counter
from typing import Dict, Iterable, List

from fpl_wrapped.models.analysis_results import (
    CaptaincyAnalysis,
    CaptainPattern,
    ChipPersonality,
    OwnershipSpan,
    TransferTiming,
)
from fpl_wrapped.models.behavioral_signals import BehavioralSignals
from fpl_wrapped.models.season_context import GameweekHistory, SeasonContext, Transfer
from fpl_wrapped.utils.constants import (
    CAPTAIN_CHASER_UNIQUE,
    CAPTAIN_DIFFERENTIAL_MIN,
    CAPTAIN_LOYALTY_MIN,
    CAPTAIN_PATTERN_MIN_GWS,
    CAPTAIN_PATTERN_WINDOW,
    CAPTAIN_SAFE_MAX_UNIQUE,
    CHIP_WILDCARD,
    PREMIUM_CAPTAINS,
    SIGNAL_THRESHOLDS,
)
from fpl_wrapped.utils.numbers import mean, population_std_dev, safe_divide


class BehavioralSignalDetector:
    """
    Detector for behavioral signals.

    Example usage:
        detector = BehavioralSignalDetector()
        signals = detector.detect(context, timing, chip_personality, template_overlap=42)
        print(signals.active)
    """

    def __init__(self) -> None:
        """Initialize detector with default thresholds."""
        self.thresholds = SIGNAL_THRESHOLDS

    def detect(
        self,
        context: SeasonContext,
        timing: TransferTiming,
        chip_personality: ChipPersonality,
        template_overlap: float,
    ) -> BehavioralSignals:
        """
        Detect every behavioral signal for a season.

        Args:
            context: Season data for one manager
            timing: Transfer timing analysis
            chip_personality: Chip personality scores
            template_overlap: Template overlap percentage (0-100)

        Returns:
            BehavioralSignals with each flag set
        """
        history = list(context.history)
        chip_gameweeks = {c.event for c in context.chips}
        last_gameweek = season_end(context)

        flags: Dict[str, bool] = {}
        flags.update(self._activity_patterns(history, chip_gameweeks, context.total_hit_cost))
        flags.update(self._bench_patterns(history))
        flags['long_term_backer'] = self._long_term_backer(context.transfers, last_gameweek)
        flags.update(self._chip_timing_patterns(context))
        flags.update(self._performance_patterns(history))
        flags.update(self._timing_patterns(timing))
        flags.update(self._chip_personality_patterns(chip_personality))
        flags.update(self._squad_patterns(history, template_overlap))

        return BehavioralSignals(**flags)

    # -------------------------------------------------------------------------
    # Signal groups
    # -------------------------------------------------------------------------

    def _activity_patterns(
        self,
        history: List[GameweekHistory],
        chip_gameweeks: Iterable[int],
        total_hit_cost: int,
    ) -> Dict[str, bool]:
        """Tinkering, consecutive hits and discipline."""
        t = self.thresholds
        chip_gameweeks = set(chip_gameweeks)
        regular = [h for h in history if h.event not in chip_gameweeks]

        busy_gameweeks = sum(
            1 for h in regular if h.event_transfers >= t['tinkerer_transfers_per_gw']
        )

        streak = longest = 0
        for h in history:
            if h.event_transfers_cost > 0:
                streak += 1
                longest = max(longest, streak)
            else:
                streak = 0

        regular_transfers = sum(h.event_transfers for h in regular)

        return {
            'constant_tinkerer': busy_gameweeks >= t['constant_tinkerer_gws'],
            'hit_addict': longest >= t['consecutive_hits_min'],
            'disciplined': (
                total_hit_cost <= t['disciplined_max_hit_cost']
                and regular_transfers >= t['disciplined_min_transfers']
            ),
        }

    def _bench_patterns(self, history: List[GameweekHistory]) -> Dict[str, bool]:
        """Rotation pain and bench mastery (both off without history)."""
        if not history:
            return {'rotation_pain': False, 'bench_master': False}

        t = self.thresholds
        avg_bench = mean(h.points_on_bench for h in history)
        avg_value = mean(h.value for h in history)
        high_bench = sum(1 for h in history if h.points_on_bench >= t['high_bench_points'])

        return {
            'rotation_pain': (
                avg_value >= t['rotation_pain_min_value']
                and avg_bench >= t['rotation_pain_min_bench']
                and high_bench >= t['rotation_pain_min_high_gws']
            ),
            'bench_master': (
                avg_bench < t['bench_master_max_bench']
                and high_bench <= t['bench_master_max_high_gws']
            ),
        }

    def _long_term_backer(self, transfers: Iterable[Transfer], last_gameweek: int) -> bool:
        """At least three players held for ten or more gameweeks."""
        t = self.thresholds
        arena = build_ownership_arena(transfers, last_gameweek)
        long_holds = sum(1 for span in arena.values() if span.held >= t['long_term_hold_gws'])
        return long_holds >= t['long_term_hold_players']

    def _chip_timing_patterns(self, context: SeasonContext) -> Dict[str, bool]:
        """Early wildcard and late chip hoarding."""
        t = self.thresholds
        wildcard = context.chip(CHIP_WILDCARD)
        late = [c for c in context.chips if c.event > t['late_chips_gw']]

        return {
            'early_aggression': wildcard is not None and wildcard.event < t['early_wildcard_gw'],
            'chip_hoarder': (
                len(context.chips) >= t['chip_hoarder_min_chips']
                and len(late) == len(context.chips)
            ),
        }

    def _performance_patterns(self, history: List[GameweekHistory]) -> Dict[str, bool]:
        """Boom-bust and consistent scoring (needs ten gameweeks)."""
        t = self.thresholds
        if len(history) < t['performance_min_gws']:
            return {'boom_bust': False, 'consistent': False}

        points = [h.points for h in history]
        std_dev = population_std_dev(points)
        high = sum(1 for p in points if p >= t['high_score'])
        low = sum(1 for p in points if p < t['low_score'])

        return {
            'boom_bust': (
                std_dev > t['boom_bust_std_dev']
                and high >= t['boom_bust_min_gws']
                and low >= t['boom_bust_min_gws']
            ),
            'consistent': (
                std_dev < t['consistent_std_dev']
                and high <= t['consistent_max_gws']
                and low <= t['consistent_max_gws']
            ),
        }

    def _timing_patterns(self, timing: TransferTiming) -> Dict[str, bool]:
        """Deadline habits (needs ten timed transfers)."""
        t = self.thresholds
        total = timing.timed_transfers
        if total < t['min_transfers_for_timing']:
            return {
                'panic_buyer': False,
                'deadline_day_scrambler': False,
                'early_planner': False,
                'knee_jerker': False,
                'late_night_reactor': False,
            }

        def share(count: int, minimum: str, pct: str) -> bool:
            return count >= t[minimum] and count / total >= t[pct]

        return {
            'panic_buyer': share(timing.panic_transfers, 'panic_buyer_min', 'panic_buyer_pct'),
            'deadline_day_scrambler': share(
                timing.deadline_day_transfers, 'deadline_scrambler_min', 'deadline_scrambler_pct'
            ),
            'early_planner': share(
                timing.early_strategic_transfers, 'early_planner_min', 'early_planner_pct'
            ),
            'knee_jerker': share(timing.knee_jerk_transfers, 'knee_jerker_min', 'knee_jerker_pct'),
            'late_night_reactor': share(
                timing.late_night_transfers, 'late_night_min', 'late_night_pct'
            ),
        }

    def _chip_personality_patterns(self, chip_personality: ChipPersonality) -> Dict[str, bool]:
        t = self.thresholds
        return {
            'chip_master': chip_personality.effectiveness_score > t['chip_master'],
            'chip_gambler': chip_personality.risk_score > t['chip_gambler'],
            'strategic_chipper': chip_personality.is_strategic,
            'contrarian': chip_personality.popularity_score < t['chip_contrarian'],
            'template_chipper': chip_personality.popularity_score > t['chip_template'],
        }

    def _squad_patterns(
        self,
        history: List[GameweekHistory],
        template_overlap: float,
    ) -> Dict[str, bool]:
        """Template avoidance and squad value management."""
        t = self.thresholds
        flags = {
            'ultra_contrarian': template_overlap / 100 < t['ultra_contrarian_template'],
            'value_building_genius': False,
            'burning_value': False,
            'bank_hoarder': False,
            'fully_invested': False,
        }
        if len(history) < t['value_min_gws']:
            return flags

        value_change = history[-1].value - history[0].value
        avg_bank = mean(h.bank for h in history)
        flags.update({
            'value_building_genius': value_change >= t['value_growth_min'],
            'burning_value': value_change <= -t['value_burn_min'],
            'bank_hoarder': avg_bank > t['bank_hoarder_avg_bank'],
            'fully_invested': avg_bank < t['fully_invested_avg_bank'],
        })
        return flags


def season_end(context: SeasonContext) -> int:
    """Latest gameweek of the season so far (0 before the season starts)."""
    if context.history:
        return context.history[-1].event
    if context.finished_gameweeks:
        return context.finished_gameweeks[-1]
    return 0


def build_ownership_arena(transfers: Iterable[Transfer], last_gameweek: int) -> Dict[int, OwnershipSpan]:
    """
    Map each purchased player to their ownership span.

    The span runs from the first purchase to the last sale. Players never
    sold are held until the gameweek after last_gameweek.

    Args:
        transfers: Transfer log
        last_gameweek: Latest gameweek of the season

    Returns:
        Dictionary of player id -> OwnershipSpan, in first-purchase order
    """
    ordered = sorted(transfers, key=lambda t: t.event)

    first_bought: Dict[int, int] = {}
    last_sold: Dict[int, int] = {}
    for transfer in ordered:
        first_bought.setdefault(transfer.element_in, transfer.event)
        last_sold[transfer.element_out] = transfer.event

    return {
        player_id: OwnershipSpan(
            first_gw=bought,
            last_gw=last_sold.get(player_id, last_gameweek + 1),
        )
        for player_id, bought in first_bought.items()
    }


def analyze_captain_pattern(captaincy: List[CaptaincyAnalysis]) -> CaptainPattern:
    """
    Detect captain selection habits from the first twelve captaincies.

    Args:
        captaincy: Captaincy analyses in gameweek order

    Returns:
        CaptainPattern (all False with fewer than eight captaincies)
    """
    if len(captaincy) < CAPTAIN_PATTERN_MIN_GWS:
        return CaptainPattern()

    window = captaincy[:CAPTAIN_PATTERN_WINDOW]
    counts = Counter(c.captain_name for c in window)
    most_captained = max(counts.values())
    unique_captains = len(counts)
    non_premium = sum(1 for c in window if c.captain_name not in PREMIUM_CAPTAINS)

    return CaptainPattern(
        loyalty=most_captained >= CAPTAIN_LOYALTY_MIN,
        chaser=unique_captains >= CAPTAIN_CHASER_UNIQUE,
        differential=non_premium >= CAPTAIN_DIFFERENTIAL_MIN,
        safe_picker=non_premium == 0 and unique_captains <= CAPTAIN_SAFE_MAX_UNIQUE,
    )


def average_hold_length(arena: Dict[int, OwnershipSpan]) -> float:
    """Mean gameweeks held per purchased player (negative spans count as zero)."""
    return safe_divide(sum(max(0, s.held) for s in arena.values()), len(arena))


def detect_signals(
    context: SeasonContext,
    timing: TransferTiming,
    chip_personality: ChipPersonality,
    template_overlap: float,
) -> BehavioralSignals:
    """
    Detect behavioral signals.

    Convenience function using default detector.
    """
    detector = BehavioralSignalDetector()
    return detector.detect(context, timing, chip_personality, template_overlap)
