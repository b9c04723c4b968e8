"""
Transfer timing analyzer.

Buckets each deliberate (non-chip) transfer by how close to the deadline it
was made, and flags reactive habits: moves made within two days of the
previous deadline, moves made late at night in the manager's own timezone,
and moves made just before the daily price change.
"""

from typing import List

from fpl_wrapped.models.analysis_results import TransferTiming
from fpl_wrapped.models.season_context import SeasonContext, Transfer
from fpl_wrapped.utils.constants import (
    DEADLINE_DAY_HOURS,
    DEFAULT_LOCAL_HOUR,
    KNEE_JERK_HOURS,
    MIDWEEK_HOURS,
    PANIC_HOURS,
    SQUAD_RESET_CHIPS,
)
from fpl_wrapped.utils.date_parser import hours_between, is_late_night
from fpl_wrapped.utils.numbers import safe_divide
from fpl_wrapped.utils.timezones import is_price_rise_window, local_hour, timezone_for_region


class TransferTimingAnalyzer:
    """
    Analyzer for transfer timing habits.

    Example usage:
        timing = TransferTimingAnalyzer().analyze(context)
        print(timing.panic_transfers, timing.avg_hours_before_deadline)
    """

    def analyze(self, context: SeasonContext) -> TransferTiming:
        """
        Analyze when transfers were made.

        Transfers without a timestamp, in gameweeks without a known deadline,
        or made after the deadline are ignored.

        Args:
            context: Season data for one manager

        Returns:
            TransferTiming counts and averages
        """
        meaningful = meaningful_transfers(context)
        if not meaningful:
            return TransferTiming.empty()

        tz = timezone_for_region(context.manager.region_name)

        panic = deadline_day = midweek = early = 0
        knee_jerk = late_night = price_rise = 0
        total_hours = 0.0
        total_local_hour = 0
        valid = 0

        for transfer in meaningful:
            event = context.event(transfer.event)
            if event is None or event.deadline_time is None or transfer.time is None:
                continue

            hours_before = hours_between(transfer.time, event.deadline_time)
            if hours_before <= 0:
                continue

            hour = local_hour(transfer.time, tz)
            valid += 1
            total_hours += hours_before
            total_local_hour += hour

            previous = context.event(transfer.event - 1)
            if previous is not None and previous.deadline_time is not None:
                hours_after_previous = hours_between(previous.deadline_time, transfer.time)
                if 0 < hours_after_previous < KNEE_JERK_HOURS:
                    knee_jerk += 1

            if hours_before <= PANIC_HOURS:
                panic += 1
            elif hours_before <= DEADLINE_DAY_HOURS:
                deadline_day += 1
            elif hours_before <= MIDWEEK_HOURS:
                midweek += 1
            else:
                early += 1

            if is_late_night(hour):
                late_night += 1
            if is_price_rise_window(transfer.time):
                price_rise += 1

        return TransferTiming(
            panic_transfers=panic,
            deadline_day_transfers=deadline_day,
            midweek_transfers=midweek,
            early_strategic_transfers=early,
            knee_jerk_transfers=knee_jerk,
            late_night_transfers=late_night,
            price_rise_chasers=price_rise,
            avg_hours_before_deadline=safe_divide(total_hours, valid),
            avg_local_hour=safe_divide(total_local_hour, valid, default=DEFAULT_LOCAL_HOUR),
        )


def meaningful_transfers(context: SeasonContext) -> List[Transfer]:
    """Transfers made outside Wildcard and Free Hit gameweeks."""
    return [
        t for t in context.transfers
        if context.chip_in(t.event) not in SQUAD_RESET_CHIPS
    ]


def analyze_transfer_timing(context: SeasonContext) -> TransferTiming:
    """
    Analyze transfer timing for a season.

    Convenience function using default analyzer.

    Args:
        context: Season data

    Returns:
        TransferTiming
    """
    analyzer = TransferTimingAnalyzer()
    return analyzer.analyze(context)
