"""
Transfer analyzer for judging every player swap of the season.

Each transfer is scored against the path not taken: the points the incoming
player earned while staying in the squad, minus what the outgoing player
would have earned over the same gameweeks. Wildcard rebuilds are split into
synthetic same-position swaps so they can be judged the same way.
"""

import logging
from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from fpl_wrapped.models.analysis_results import PointsHistoryEntry, TransferAnalysis
from fpl_wrapped.models.season_context import Player, SeasonContext
from fpl_wrapped.utils.constants import (
    CHIP_WILDCARD,
    SQUAD_RESET_CHIPS,
    TRANSFER_VERDICT_FLOOR,
    TRANSFER_VERDICT_THRESHOLDS,
)
from fpl_wrapped.utils.numbers import round_half_up, round_int, safe_divide


logger = logging.getLogger(__name__)


class TransferAnalyzer:
    """
    Analyzer for transfer outcomes.

    Skips Free Hit transfers (the squad reverts the following week) and
    replaces Wildcard transfers with per-position swaps reconstructed from
    the squads either side of the wildcard.

    Example usage:
        analyzer = TransferAnalyzer()
        analyses = analyzer.analyze(context)
    """

    def analyze(self, context: SeasonContext) -> List[TransferAnalysis]:
        """
        Analyze every transfer leg of the season.

        Args:
            context: Season data for one manager

        Returns:
            Regular transfer analyses in log order, followed by wildcard legs
        """
        transfers_per_gw = self._count_regular_transfers(context)
        analyses: List[TransferAnalysis] = []

        for transfer in context.transfers:
            chip = context.chip_in(transfer.event)
            if chip in SQUAD_RESET_CHIPS:
                continue

            player_in = context.player(transfer.element_in)
            player_out = context.player(transfer.element_out)
            if player_in is None or player_out is None:
                logger.debug(
                    "GW%s: skipping transfer %s -> %s with unknown player",
                    transfer.event, transfer.element_out, transfer.element_in,
                )
                continue

            history = context.history_for(transfer.event)
            gw_cost = history.event_transfers_cost if history else 0
            hit_cost = safe_divide(gw_cost, transfers_per_gw.get(transfer.event, 1))

            analyses.append(self._analyze_leg(
                context,
                player_in=player_in,
                player_out=player_out,
                event=transfer.event,
                hit_cost=hit_cost,
                transfer_time=transfer.time,
            ))

        analyses.extend(self._analyze_wildcards(context))
        return analyses

    def _count_regular_transfers(self, context: SeasonContext) -> Dict[int, int]:
        """Count non-chip transfers per gameweek (hit cost is shared across them)."""
        counts: Dict[int, int] = defaultdict(int)
        for transfer in context.transfers:
            if context.chip_in(transfer.event) not in SQUAD_RESET_CHIPS:
                counts[transfer.event] += 1
        return dict(counts)

    def _analyze_leg(
        self,
        context: SeasonContext,
        player_in: Player,
        player_out: Player,
        event: int,
        hit_cost: float = 0.0,
        is_wildcard: bool = False,
        transfer_time: Optional[datetime] = None,
    ) -> TransferAnalysis:
        """
        Follow the incoming player through the season and score the swap.

        Args:
            context: Season data
            player_in: Player bought
            player_out: Player sold
            event: Gameweek the transfer took effect
            hit_cost: Share of the gameweek's transfer penalty
            is_wildcard: Whether the leg was reconstructed from a wildcard
            transfer_time: When the transfer was made

        Returns:
            TransferAnalysis for the leg
        """
        points_in = 0
        points_out = 0
        held = 0
        start_gw: Optional[int] = None
        end_gw: Optional[int] = None
        history: List[PointsHistoryEntry] = []

        for gameweek in context.finished_gameweeks:
            if gameweek < event:
                continue

            picks = context.picks(gameweek)
            if picks is None:
                continue

            if not picks.contains(player_in.id):
                # One-week gap: benched out by a Free Hit or re-bought next week
                next_picks = context.picks(gameweek + 1)
                if next_picks is not None and next_picks.contains(player_in.id):
                    continue
                break

            gw_in = context.points(player_in.id, gameweek)
            gw_out = context.points(player_out.id, gameweek)
            points_in += gw_in
            points_out += gw_out
            held += 1
            history.append(PointsHistoryEntry(event=gameweek, points_in=gw_in, points_out=gw_out))

            if start_gw is None:
                start_gw = gameweek
            end_gw = gameweek

        owned_range = (start_gw or event, end_gw or event)
        points_gained = points_in - points_out
        best_streak, worst_streak = self._calculate_streaks(history)
        wins = sum(1 for h in history if h.differential > 0)

        return TransferAnalysis(
            player_in=player_in,
            player_out=player_out,
            event=event,
            points_in=points_in,
            points_out=points_out,
            points_gained=points_gained,
            gameweeks_held=held,
            owned_range=owned_range,
            verdict=transfer_verdict(points_gained),
            points_history=tuple(history),
            ppg_differential=round_half_up(safe_divide(points_gained, held), 1),
            win_rate=round_int(safe_divide(wins * 100, len(history))),
            best_streak=best_streak,
            worst_streak=worst_streak,
            hit_cost=hit_cost,
            net_gain_after_hit=points_gained - hit_cost,
            is_wildcard=is_wildcard,
            gw_range=f"GW{owned_range[0]}-GW{owned_range[1]}" if is_wildcard else None,
            transfer_time=transfer_time,
        )

    @staticmethod
    def _calculate_streaks(history: List[PointsHistoryEntry]) -> Tuple[int, int]:
        """
        Longest consecutive win and loss runs. A draw resets both.

        Returns:
            Tuple of (best_streak, worst_streak)
        """
        best = worst = 0
        wins = losses = 0
        for entry in history:
            if entry.differential > 0:
                wins += 1
                losses = 0
            elif entry.differential < 0:
                losses += 1
                wins = 0
            else:
                wins = losses = 0
            best = max(best, wins)
            worst = max(worst, losses)
        return best, worst

    def _analyze_wildcards(self, context: SeasonContext) -> List[TransferAnalysis]:
        """
        Rebuild wildcard transfers as same-position swaps.

        Players who left and joined between GW-1 and the wildcard gameweek
        are grouped by position and paired in squad-slot order.
        """
        analyses: List[TransferAnalysis] = []

        for chip in context.chips:
            if chip.name != CHIP_WILDCARD or not context.is_finished(chip.event):
                continue

            current = context.picks(chip.event)
            previous = context.picks(chip.event - 1)
            if current is None or previous is None:
                continue

            previous_ids = previous.element_ids
            current_ids = current.element_ids
            incoming = [p.element for p in current.picks if p.element not in previous_ids]
            outgoing = [p.element for p in previous.picks if p.element not in current_ids]

            for player_in, player_out in self._pair_by_position(context, incoming, outgoing):
                analyses.append(self._analyze_leg(
                    context,
                    player_in=player_in,
                    player_out=player_out,
                    event=chip.event,
                    is_wildcard=True,
                ))

        return analyses

    @staticmethod
    def _pair_by_position(
        context: SeasonContext,
        incoming: List[int],
        outgoing: List[int],
    ) -> List[Tuple[Player, Player]]:
        """Pair the i-th incoming with the i-th outgoing player of each position."""
        by_position_in: Dict[int, List[Player]] = defaultdict(list)
        by_position_out: Dict[int, List[Player]] = defaultdict(list)

        for player_id in incoming:
            player = context.player(player_id)
            if player is not None:
                by_position_in[player.element_type].append(player)
        for player_id in outgoing:
            player = context.player(player_id)
            if player is not None:
                by_position_out[player.element_type].append(player)

        pairs: List[Tuple[Player, Player]] = []
        for element_type in sorted(by_position_in):
            pairs.extend(zip(by_position_in[element_type], by_position_out.get(element_type, [])))
        return pairs


def transfer_verdict(points_gained: float) -> str:
    """
    Map points gained to a qualitative verdict.

    Args:
        points_gained: Incoming minus outgoing points

    Returns:
        "excellent", "good", "neutral", "poor" or "terrible"
    """
    for minimum, verdict in TRANSFER_VERDICT_THRESHOLDS:
        if points_gained >= minimum:
            return verdict
    return TRANSFER_VERDICT_FLOOR


def analyze_transfers(context: SeasonContext) -> List[TransferAnalysis]:
    """
    Analyze transfers for a season.

    Convenience function using default analyzer.

    Args:
        context: Season data

    Returns:
        List of TransferAnalysis
    """
    analyzer = TransferAnalyzer()
    return analyzer.analyze(context)
