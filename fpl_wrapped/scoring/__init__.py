"""Behavioral scoring, persona detection and season summary assembly."""

from .chip_personality import ChipPersonalityAnalyzer, analyze_chip_personality
from .signal_detector import BehavioralSignalDetector, analyze_captain_pattern, detect_signals
from .metrics_normalizer import MetricsNormalizer, calculate_metrics
from .persona_catalog import CATALOG, PERSONAS, ScoringInputs
from .boost_rules import BOOST_STAGES, apply_boosts
from .persona_detector import PersonaDetector, SeasonHighlights, detect_persona
from .summary_builder import SeasonSummaryBuilder, build_season_summary, calculate_grade

__all__ = [
    'ChipPersonalityAnalyzer',
    'analyze_chip_personality',
    'BehavioralSignalDetector',
    'analyze_captain_pattern',
    'detect_signals',
    'MetricsNormalizer',
    'calculate_metrics',
    'CATALOG',
    'PERSONAS',
    'ScoringInputs',
    'BOOST_STAGES',
    'apply_boosts',
    'PersonaDetector',
    'SeasonHighlights',
    'detect_persona',
    'SeasonSummaryBuilder',
    'build_season_summary',
    'calculate_grade',
]
