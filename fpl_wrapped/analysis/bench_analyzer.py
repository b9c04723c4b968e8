"""
Bench analyzer for judging each gameweek's bench selection.

A bench decision is a regret when the best benched player outscored the
weakest starter by more than a few points.
"""

from typing import List, Optional

from fpl_wrapped.models.analysis_results import BenchAnalysis, BenchPlayer
from fpl_wrapped.models.season_context import SeasonContext
from fpl_wrapped.utils.constants import BENCH_REGRET_THRESHOLD
from fpl_wrapped.utils.numbers import mean


class BenchAnalyzer:
    """
    Analyzer for bench selections.

    Example usage:
        analyzer = BenchAnalyzer()
        analyses = analyzer.analyze(context)
        regrets = [a for a in analyses if a.had_bench_regret]
    """

    def analyze(self, context: SeasonContext) -> List[BenchAnalysis]:
        """
        Analyze the bench of every finished gameweek with recorded picks.

        Args:
            context: Season data for one manager

        Returns:
            One BenchAnalysis per gameweek, in gameweek order
        """
        analyses: List[BenchAnalysis] = []

        for gameweek in context.finished_gameweeks:
            picks = context.picks(gameweek)
            if picks is None:
                continue

            bench_players: List[BenchPlayer] = []
            for pick in picks.bench:
                player = context.player(pick.element)
                if player is None:
                    continue
                bench_players.append(BenchPlayer(
                    player_id=player.id,
                    name=player.web_name,
                    position=player.position,
                    points=context.points(player.id, gameweek),
                ))

            starter_scores = []
            for pick in picks.starters:
                player = context.player(pick.element)
                if player is None:
                    continue
                starter_scores.append((player.web_name, context.points(player.id, gameweek)))

            lowest_starter = min((points for _, points in starter_scores), default=0)

            best_bench: Optional[BenchPlayer] = None
            for bench_player in bench_players:
                if best_bench is None or bench_player.points > best_bench.points:
                    best_bench = bench_player

            missed = max(0, best_bench.points - lowest_starter) if best_bench else 0
            regret = missed > BENCH_REGRET_THRESHOLD

            analyses.append(BenchAnalysis(
                event=gameweek,
                bench_points=sum(p.points for p in bench_players),
                bench_players=tuple(bench_players),
                lowest_starter_points=lowest_starter,
                missed_points=missed,
                had_bench_regret=regret,
                error_position=best_bench.position if regret and best_bench else None,
                replaced_players=tuple(
                    name for name, points in starter_scores if points == lowest_starter
                ) if regret else (),
                replaced_player_points=lowest_starter if regret else None,
            ))

        return analyses


def average_bench_points(analyses: List[BenchAnalysis], exclude_gw: Optional[int] = None) -> float:
    """
    Average bench points per gameweek.

    Args:
        analyses: Bench analyses for the season
        exclude_gw: Gameweek to leave out (e.g. the Bench Boost week)

    Returns:
        Mean bench points, 0 when no gameweeks remain
    """
    return mean(a.bench_points for a in analyses if a.event != exclude_gw)


def analyze_bench(context: SeasonContext) -> List[BenchAnalysis]:
    """
    Analyze bench selections for a season.

    Convenience function using default analyzer.

    Args:
        context: Season data

    Returns:
        List of BenchAnalysis
    """
    analyzer = BenchAnalyzer()
    return analyzer.analyze(context)
