"""
Analysis result models - Per-decision outputs of the four analyzers.

Each record is immutable and serializes to plain JSON-friendly dicts. The
records also travel inside SeasonSummary, which serializes them through
pydantic.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from fpl_wrapped.models.season_context import Player


@dataclass(frozen=True)
class PointsHistoryEntry:
    """Incoming vs outgoing player points for one held gameweek."""

    event: int
    points_in: int
    points_out: int

    @property
    def differential(self) -> int:
        """Points the incoming player won by (negative when outscored)."""
        return self.points_in - self.points_out


@dataclass(frozen=True)
class TransferAnalysis:
    """
    The outcome of one transfer leg, judged against keeping the old player.

    Volume:
        points_in / points_out: Points each player scored while the incoming
            player was held
        gameweeks_held: Finished gameweeks the incoming player was owned
        owned_range: (first, last) gameweek of ownership

    Derived:
        ppg_differential: points_gained per held gameweek (1 decimal)
        win_rate: % of held gameweeks the incoming player outscored the other
        best_streak / worst_streak: Longest weekly win / loss runs
        hit_cost: This leg's share of the gameweek's transfer penalty
        net_gain_after_hit: points_gained - hit_cost
    """

    player_in: Player
    player_out: Player
    event: int
    points_in: int
    points_out: int
    points_gained: int
    gameweeks_held: int
    owned_range: Tuple[int, int]
    verdict: str
    points_history: Tuple[PointsHistoryEntry, ...] = ()
    ppg_differential: float = 0.0
    win_rate: int = 0
    best_streak: int = 0
    worst_streak: int = 0
    hit_cost: float = 0.0
    net_gain_after_hit: float = 0.0
    is_wildcard: bool = False
    gw_range: Optional[str] = None
    transfer_time: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for JSON output."""
        return {
            'player_in': self.player_in.web_name,
            'player_out': self.player_out.web_name,
            'event': self.event,
            'points_in': self.points_in,
            'points_out': self.points_out,
            'points_gained': self.points_gained,
            'gameweeks_held': self.gameweeks_held,
            'owned_range': list(self.owned_range),
            'verdict': self.verdict,
            'ppg_differential': self.ppg_differential,
            'win_rate': self.win_rate,
            'best_streak': self.best_streak,
            'worst_streak': self.worst_streak,
            'hit_cost': self.hit_cost,
            'net_gain_after_hit': self.net_gain_after_hit,
            'is_wildcard': self.is_wildcard,
            'gw_range': self.gw_range,
        }


@dataclass(frozen=True)
class CaptaincyAnalysis:
    """One gameweek's captain choice against the best starter."""

    event: int
    captain_id: int
    captain_name: str
    captain_points: int
    multiplier: int
    multiplied_points: int
    best_pick_id: int
    best_pick_name: str
    best_pick_points: int
    points_left_on_table: int
    was_optimal: bool
    was_most_captained_global: bool = False

    def __post_init__(self) -> None:
        """Validate that captaincy can never gain from hindsight."""
        if self.points_left_on_table < 0:
            raise ValueError(
                f"GW{self.event}: points_left_on_table cannot be negative: "
                f"{self.points_left_on_table}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for JSON output."""
        return {
            'event': self.event,
            'captain': self.captain_name,
            'captain_points': self.captain_points,
            'multiplier': self.multiplier,
            'multiplied_points': self.multiplied_points,
            'best_pick': self.best_pick_name,
            'best_pick_points': self.best_pick_points,
            'points_left_on_table': self.points_left_on_table,
            'was_optimal': self.was_optimal,
            'was_most_captained_global': self.was_most_captained_global,
        }


@dataclass(frozen=True)
class BenchPlayer:
    """A benched player and their score."""

    player_id: int
    name: str
    position: str
    points: int


@dataclass(frozen=True)
class BenchAnalysis:
    """One gameweek's bench selection against the weakest starter."""

    event: int
    bench_points: int
    bench_players: Tuple[BenchPlayer, ...]
    lowest_starter_points: int
    missed_points: int
    had_bench_regret: bool
    error_position: Optional[str] = None
    replaced_players: Tuple[str, ...] = ()
    replaced_player_points: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for JSON output."""
        return {
            'event': self.event,
            'bench_points': self.bench_points,
            'bench_players': [
                {'name': p.name, 'position': p.position, 'points': p.points}
                for p in self.bench_players
            ],
            'lowest_starter_points': self.lowest_starter_points,
            'missed_points': self.missed_points,
            'had_bench_regret': self.had_bench_regret,
            'error_position': self.error_position,
            'replaced_players': list(self.replaced_players),
        }


@dataclass(frozen=True)
class ChipAnalysis:
    """
    Verdict on one of the four chips.

    Unused chips are still reported, with verdict "Pending" and no tier.
    """

    name: str
    display_name: str
    used: bool
    event: int
    points_gained: int
    verdict: str
    tier: Optional[str] = None
    is_excellent: bool = False
    details: str = ''
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for JSON output."""
        return {
            'name': self.name,
            'display_name': self.display_name,
            'used': self.used,
            'event': self.event,
            'points_gained': self.points_gained,
            'verdict': self.verdict,
            'tier': self.tier,
            'is_excellent': self.is_excellent,
            'details': self.details,
            'metadata': dict(self.metadata),
        }


@dataclass(frozen=True)
class TransferTiming:
    """
    When transfers were made relative to deadlines and the manager's clock.

    Bucket counts only include non-chip transfers made before their
    gameweek's deadline.
    """

    panic_transfers: int = 0
    deadline_day_transfers: int = 0
    midweek_transfers: int = 0
    early_strategic_transfers: int = 0
    knee_jerk_transfers: int = 0
    late_night_transfers: int = 0
    price_rise_chasers: int = 0
    avg_hours_before_deadline: float = 0.0
    avg_local_hour: float = 12.0

    @property
    def timed_transfers(self) -> int:
        """Transfers that landed in one of the deadline buckets."""
        return (
            self.panic_transfers
            + self.deadline_day_transfers
            + self.midweek_transfers
            + self.early_strategic_transfers
        )

    @classmethod
    def empty(cls) -> 'TransferTiming':
        """Timing for a season without timed transfers."""
        return cls()


@dataclass(frozen=True)
class ChipPersonality:
    """How a manager plays chips: quality, risk appetite and herd-following."""

    effectiveness_score: float
    risk_score: float
    popularity_score: float
    is_strategic: bool
    timing_profile: str

    @classmethod
    def pending(cls) -> 'ChipPersonality':
        """Neutral personality for managers who have not used a chip."""
        return cls(
            effectiveness_score=0.5,
            risk_score=0.5,
            popularity_score=0.5,
            is_strategic=False,
            timing_profile='Pending',
        )


@dataclass(frozen=True)
class CaptainPattern:
    """Season-long captain selection habits."""

    loyalty: bool = False
    chaser: bool = False
    differential: bool = False
    safe_picker: bool = False


@dataclass(frozen=True)
class OwnershipSpan:
    """First purchase and last sale of a player (season end when unsold)."""

    first_gw: int
    last_gw: int

    @property
    def held(self) -> int:
        """Gameweeks between purchase and sale."""
        return self.last_gw - self.first_gw
