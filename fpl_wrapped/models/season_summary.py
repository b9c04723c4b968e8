"""
SeasonSummary model - The complete season report for one manager.

Uses Pydantic v2 for validation and JSON serialization. Nested analysis
records are plain dataclasses; pydantic serializes them field by field.
"""

from dataclasses import dataclass
from typing import List, Optional

from pydantic import BaseModel, Field

from .analysis_results import (
    BenchAnalysis,
    CaptaincyAnalysis,
    CaptainPattern,
    ChipAnalysis,
    ChipPersonality,
    TransferAnalysis,
    TransferTiming,
)
from .persona import ManagerPersona
from .persona_metrics import PersonaMetrics


@dataclass(frozen=True)
class PlayerContribution:
    """Points a player delivered from the starting eleven (multipliers applied)."""

    player_id: int
    name: str
    position: str
    points: int
    percentage: int


@dataclass(frozen=True)
class PositionBreakdown:
    """Points by position across the season."""

    position: str
    points: int
    percentage: int
    player_count: int


@dataclass(frozen=True)
class GameweekScore:
    """A single gameweek's score."""

    event: int
    points: int


@dataclass(frozen=True)
class RankPoint:
    """Overall rank after a gameweek."""

    event: int
    overall_rank: int


@dataclass(frozen=True)
class SquadValueTrend:
    """
    How the squad's value and bank moved across the season.

    Values are in tenths of a million (1000 = 100.0m).
    """

    start_value: int
    end_value: int
    peak_value: int
    change: int
    avg_bank: float
    trend: str
    archetype: str


@dataclass(frozen=True)
class SeasonGrades:
    """Letter grades (A-F) per decision area."""

    transfers: str
    captaincy: str
    bench: str
    overall: str


class SeasonSummary(BaseModel):
    """
    Complete season report: analyses, aggregates, grades and persona.
    Why: Single record handed to presentation and chat layers.
    """

    # Manager
    manager_id: int
    manager_name: str
    team_name: str
    region: str
    total_points: int = Field(ge=0)
    overall_rank: int = Field(ge=0)
    gameweeks_analyzed: int = Field(ge=0)

    # Per-decision analyses
    transfers: List[TransferAnalysis]
    captaincy: List[CaptaincyAnalysis]
    bench: List[BenchAnalysis]
    chips: List[ChipAnalysis] = Field(min_length=4, max_length=4)
    transfer_timing: TransferTiming

    # Transfers
    total_transfers: int = Field(ge=0)
    total_transfers_cost: int = Field(ge=0)
    net_transfer_points: int
    transfer_efficiency: int
    best_transfer: Optional[TransferAnalysis] = None
    worst_transfer: Optional[TransferAnalysis] = None

    # Captaincy
    total_captain_points: int = Field(ge=0)
    optimal_captain_points: int = Field(ge=0)
    captaincy_points_lost: int = Field(ge=0)
    captaincy_success_rate: float = Field(ge=0, le=100)
    captaincy_herd_factor: float = Field(ge=0, le=100)
    captaincy_efficiency: float = Field(ge=0)
    best_captain: Optional[CaptaincyAnalysis] = None
    worst_captain: Optional[CaptaincyAnalysis] = None

    # Bench
    total_bench_points: int = Field(ge=0)
    bench_regrets: int = Field(ge=0)
    worst_bench_miss: Optional[BenchAnalysis] = None
    avg_bench_per_gw: float = Field(ge=0)

    # Squad
    grades: SeasonGrades
    top_contributors: List[PlayerContribution]
    mvp: Optional[PlayerContribution] = None
    position_breakdown: List[PositionBreakdown]
    template_overlap: float = Field(ge=0, le=100)
    best_gameweek: Optional[GameweekScore] = None
    worst_gameweek: Optional[GameweekScore] = None
    rank_progression: List[RankPoint]
    squad_value: SquadValueTrend
    chips_used: List[str]

    # Persona
    metrics: PersonaMetrics
    signals: List[str]
    chip_personality: ChipPersonality
    captain_pattern: CaptainPattern
    persona: ManagerPersona

    model_config = {"frozen": True}
