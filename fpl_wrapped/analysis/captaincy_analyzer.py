"""
Captaincy analyzer for judging each gameweek's armband choice.

Compares the captain's raw score with the best raw score in the starting
eleven and measures the points the multiplier could have earned elsewhere.
"""

import logging
from typing import List

from fpl_wrapped.models.analysis_results import CaptaincyAnalysis
from fpl_wrapped.models.season_context import SeasonContext


logger = logging.getLogger(__name__)


class CaptaincyAnalyzer:
    """
    Analyzer for captain picks.

    Example usage:
        analyzer = CaptaincyAnalyzer()
        analyses = analyzer.analyze(context)
        lost = sum(a.points_left_on_table for a in analyses)
    """

    def analyze(self, context: SeasonContext) -> List[CaptaincyAnalysis]:
        """
        Analyze the captain choice of every finished gameweek.

        Gameweeks without picks, without a flagged captain, or whose captain
        is missing from the player catalog are skipped.

        Args:
            context: Season data for one manager

        Returns:
            One CaptaincyAnalysis per analyzable gameweek, in gameweek order
        """
        analyses: List[CaptaincyAnalysis] = []

        for gameweek in context.finished_gameweeks:
            picks = context.picks(gameweek)
            if picks is None:
                continue

            captain_pick = picks.captain
            if captain_pick is None:
                logger.debug("GW%s: no captain flagged, skipping", gameweek)
                continue

            captain = context.player(captain_pick.element)
            if captain is None:
                continue

            captain_points = context.points(captain.id, gameweek)
            multiplier = captain_pick.multiplier

            # First strict improvement wins, so a tied captain stays optimal
            best_player = captain
            best_points = captain_points
            for pick in picks.starters:
                player = context.player(pick.element)
                if player is None:
                    continue
                points = context.points(player.id, gameweek)
                if points > best_points:
                    best_player = player
                    best_points = points

            event = context.event(gameweek)
            most_captained = event.most_captained if event else None

            analyses.append(CaptaincyAnalysis(
                event=gameweek,
                captain_id=captain.id,
                captain_name=captain.web_name,
                captain_points=captain_points,
                multiplier=multiplier,
                multiplied_points=captain_points * multiplier,
                best_pick_id=best_player.id,
                best_pick_name=best_player.web_name,
                best_pick_points=best_points,
                points_left_on_table=(multiplier - 1) * (best_points - captain_points),
                was_optimal=best_player.id == captain.id,
                was_most_captained_global=(
                    most_captained is not None and most_captained == captain.id
                ),
            ))

        return analyses


def analyze_captaincy(context: SeasonContext) -> List[CaptaincyAnalysis]:
    """
    Analyze captaincy for a season.

    Convenience function using default analyzer.

    Args:
        context: Season data

    Returns:
        List of CaptaincyAnalysis
    """
    analyzer = CaptaincyAnalyzer()
    return analyzer.analyze(context)
