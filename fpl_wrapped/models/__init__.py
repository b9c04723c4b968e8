"""Data models for FPL Wrapped."""

from .season_context import (
    ChipPlay,
    GameweekEvent,
    GameweekHistory,
    GameweekPicks,
    ManagerInfo,
    Pick,
    Player,
    SeasonContext,
    Transfer,
)
from .analysis_results import (
    BenchAnalysis,
    BenchPlayer,
    CaptaincyAnalysis,
    CaptainPattern,
    ChipAnalysis,
    ChipPersonality,
    OwnershipSpan,
    PointsHistoryEntry,
    TransferAnalysis,
    TransferTiming,
)
from .persona_metrics import PersonaMetrics
from .behavioral_signals import BehavioralSignals
from .persona import ManagerPersona, ManagerSpectrums, PersonaDefinition, TraitScore
from .season_summary import (
    GameweekScore,
    PlayerContribution,
    PositionBreakdown,
    RankPoint,
    SeasonGrades,
    SeasonSummary,
    SquadValueTrend,
)

__all__ = [
    'ChipPlay',
    'GameweekEvent',
    'GameweekHistory',
    'GameweekPicks',
    'ManagerInfo',
    'Pick',
    'Player',
    'SeasonContext',
    'Transfer',
    'BenchAnalysis',
    'BenchPlayer',
    'CaptaincyAnalysis',
    'CaptainPattern',
    'ChipAnalysis',
    'ChipPersonality',
    'OwnershipSpan',
    'PointsHistoryEntry',
    'TransferAnalysis',
    'TransferTiming',
    'PersonaMetrics',
    'BehavioralSignals',
    'ManagerPersona',
    'ManagerSpectrums',
    'PersonaDefinition',
    'TraitScore',
    'GameweekScore',
    'PlayerContribution',
    'PositionBreakdown',
    'RankPoint',
    'SeasonGrades',
    'SeasonSummary',
    'SquadValueTrend',
]
