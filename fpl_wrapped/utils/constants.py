"""
Constants for FPL Wrapped.

This module contains all thresholds, labels, and tuning values used by the
analyzers, the signal detector, and the persona scorer. Centralizing these
makes the pipeline easier to tune without touching the algorithms.
"""

from typing import Dict, Tuple


# =============================================================================
# SQUAD LAYOUT
# =============================================================================

STARTING_SLOTS = 11          # Positions 1-11 start, 12-15 are the bench
SQUAD_SIZE = 15

POSITION_GKP = "GKP"
POSITION_DEF = "DEF"
POSITION_MID = "MID"
POSITION_FWD = "FWD"

# FPL element_type -> position code
POSITION_NAMES: Dict[int, str] = {
    1: POSITION_GKP,
    2: POSITION_DEF,
    3: POSITION_MID,
    4: POSITION_FWD,
}

POSITION_ORDER: Tuple[str, ...] = (POSITION_GKP, POSITION_DEF, POSITION_MID, POSITION_FWD)


# =============================================================================
# CHIPS
# =============================================================================

CHIP_TRIPLE_CAPTAIN = "3xc"
CHIP_BENCH_BOOST = "bboost"
CHIP_FREE_HIT = "freehit"
CHIP_WILDCARD = "wildcard"

# Every season summary reports these four, in this order
CHIP_ORDER: Tuple[str, ...] = (
    CHIP_TRIPLE_CAPTAIN,
    CHIP_BENCH_BOOST,
    CHIP_FREE_HIT,
    CHIP_WILDCARD,
)

CHIP_DISPLAY_NAMES: Dict[str, str] = {
    CHIP_TRIPLE_CAPTAIN: "Triple Captain",
    CHIP_BENCH_BOOST: "Bench Boost",
    CHIP_FREE_HIT: "Free Hit",
    CHIP_WILDCARD: "Wildcard",
}

# Chips whose gameweek transfers are not individual decisions
SQUAD_RESET_CHIPS = frozenset({CHIP_FREE_HIT, CHIP_WILDCARD})

CHIP_PENDING_VERDICT = "Pending"
CHIP_PENDING_DETAILS = "You haven't used this chip yet."

TIER_EXCELLENT = "excellent"
TIER_DECENT = "decent"
TIER_WASTED = "wasted"

# Tier thresholds per chip (points gained, or points/differential for bboost)
CHIP_TIER_THRESHOLDS: Dict[str, Dict[str, float]] = {
    CHIP_BENCH_BOOST: {
        'excellent_points': 15, 'excellent_differential': 10,
        'decent_points': 5, 'decent_differential': 3,
    },
    CHIP_TRIPLE_CAPTAIN: {'excellent': 12, 'decent': 4},
    CHIP_FREE_HIT: {'excellent': 10, 'decent': 0},        # decent is strictly above
    CHIP_WILDCARD: {'excellent': 5, 'decent': 0},
}

CHIP_VERDICT_LABELS: Dict[str, Dict[str, str]] = {
    CHIP_BENCH_BOOST: {TIER_EXCELLENT: "Masterstroke", TIER_DECENT: "Decent", TIER_WASTED: "Wasted"},
    CHIP_TRIPLE_CAPTAIN: {TIER_EXCELLENT: "Elite Timing", TIER_DECENT: "Solid", TIER_WASTED: "Unfortunate"},
    CHIP_FREE_HIT: {TIER_EXCELLENT: "Clutch", TIER_DECENT: "Effective", TIER_WASTED: "Backfired"},
    CHIP_WILDCARD: {TIER_EXCELLENT: "Transformed", TIER_DECENT: "Improved", TIER_WASTED: "Tough Run"},
}

WILDCARD_WINDOW_GWS = 4      # Gameweeks compared on each side of a wildcard


# =============================================================================
# TRANSFERS, CAPTAINCY, BENCH
# =============================================================================

# (minimum points gained, verdict), checked in order
TRANSFER_VERDICT_THRESHOLDS: Tuple[Tuple[int, str], ...] = (
    (20, "excellent"),
    (5, "good"),
    (-5, "neutral"),
    (-15, "poor"),
)
TRANSFER_VERDICT_FLOOR = "terrible"

HIT_COST = 4                 # Points per extra transfer
BENCH_REGRET_THRESHOLD = 3   # Missed points must exceed this to count


# =============================================================================
# SQUAD ANALYSIS
# =============================================================================

TEMPLATE_OWNERSHIP_THRESHOLD = 15.0   # selected_by_percent for a template player
TOP_CONTRIBUTORS_LIMIT = 5
DEFAULT_SQUAD_VALUE = 1000            # Tenths of a million

VALUE_TREND_THRESHOLD = 5             # +/- tenths for rising/falling
TREND_RISING = "rising"
TREND_FALLING = "falling"
TREND_FLAT = "flat"

# (signal, archetype), first active signal wins
VALUE_ARCHETYPES: Tuple[Tuple[str, str], ...] = (
    ("value_building_genius", "Value Builder"),
    ("burning_value", "Value Burner"),
    ("bank_hoarder", "Bank Hoarder"),
    ("fully_invested", "Fully Invested"),
)
VALUE_ARCHETYPE_DEFAULT = "Steady"


# =============================================================================
# GRADES
# =============================================================================

# Score floors for A, B, C, D (anything lower is F)
TRANSFER_GRADE_THRESHOLDS: Tuple[float, float, float, float] = (30, 10, -10, -30)
CAPTAINCY_GRADE_THRESHOLDS: Tuple[float, float, float, float] = (85, 75, 65, 55)
BENCH_GRADE_THRESHOLDS: Tuple[float, float, float, float] = (70, 50, 30, 10)

GRADE_LETTERS: Tuple[str, ...] = ("A", "B", "C", "D", "F")
GRADE_POINTS: Dict[str, int] = {"A": 4, "B": 3, "C": 2, "D": 1, "F": 0}

BENCH_GRADE_PENALTY = 5      # Grade score lost per average bench point


# =============================================================================
# METRIC NORMALIZATION
# =============================================================================

NORMALIZATION: Dict[str, float] = {
    'transfers_max': 80,       # Transfers for a full activity score
    'hit_cost_max': 30,        # Hit cost for a full chaos score
    'bench_points_max': 15,    # Avg bench points/GW for a full overthink score
    'efficiency_max': 15,      # Net transfer points for a full efficiency score
    'value_baseline': 1040,    # Squad value at which thrift is zero
    'value_range': 60,
    'long_holds_max': 5,       # Long-term holds for full patience
    'hold_length_max': 8,      # Average hold length for full patience
}

NEUTRAL_METRIC = 0.5

TIMING_KNEE_JERK_WEIGHT = 0.5
TIMING_KNEE_JERK_CAP = 0.3
TIMING_LATE_NIGHT_WEIGHT = 0.4
TIMING_LATE_NIGHT_CAP = 0.2


# =============================================================================
# BEHAVIORAL SIGNALS
# =============================================================================

SIGNAL_THRESHOLDS: Dict[str, float] = {
    'constant_tinkerer_gws': 8,        # GWs with 2+ non-chip transfers
    'tinkerer_transfers_per_gw': 2,
    'consecutive_hits_min': 3,
    'disciplined_max_hit_cost': 2,
    'disciplined_min_transfers': 20,

    'rotation_pain_min_value': 1020,
    'rotation_pain_min_bench': 9,
    'rotation_pain_min_high_gws': 5,
    'high_bench_points': 10,           # A "high bench" gameweek

    'bench_master_max_bench': 7,
    'bench_master_max_high_gws': 2,

    'long_term_hold_gws': 10,
    'long_term_hold_players': 3,

    'early_wildcard_gw': 12,           # Wildcard strictly before this GW
    'late_chips_gw': 25,               # Chips strictly after this GW
    'chip_hoarder_min_chips': 2,

    'performance_min_gws': 10,
    'boom_bust_std_dev': 18,
    'consistent_std_dev': 14,
    'high_score': 70,
    'low_score': 40,
    'boom_bust_min_gws': 3,
    'consistent_max_gws': 2,

    'min_transfers_for_timing': 10,
    'panic_buyer_pct': 0.20,
    'panic_buyer_min': 2,
    'deadline_scrambler_pct': 0.40,
    'deadline_scrambler_min': 4,
    'early_planner_pct': 0.35,
    'early_planner_min': 3,
    'knee_jerker_pct': 0.25,
    'knee_jerker_min': 3,
    'late_night_pct': 0.30,
    'late_night_min': 3,

    'chip_master': 0.7,
    'chip_gambler': 0.65,
    'chip_contrarian': 0.3,
    'chip_template': 0.7,

    'ultra_contrarian_template': 0.20,
    'value_min_gws': 5,
    'value_growth_min': 20,            # +2.0m over the season
    'value_burn_min': 10,              # -1.0m over the season
    'bank_hoarder_avg_bank': 15,
    'fully_invested_avg_bank': 5,
}


# =============================================================================
# TRANSFER TIMING
# =============================================================================

PANIC_HOURS = 3
DEADLINE_DAY_HOURS = 24
MIDWEEK_HOURS = 96
KNEE_JERK_HOURS = 48

LATE_NIGHT_START_HOUR = 23
LATE_NIGHT_END_HOUR = 5

PRICE_CHANGE_TIMEZONE = "Asia/Singapore"
PRICE_RISE_WINDOW_MINUTES: Tuple[int, int] = (7 * 60 + 30, 9 * 60 + 30)

DEFAULT_LOCAL_HOUR = 12.0


# =============================================================================
# CAPTAIN PATTERNS & CHIP PERSONALITY
# =============================================================================

PREMIUM_CAPTAINS: Tuple[str, ...] = ("Haaland", "M.Salah", "Palmer")
SAFE_TRIPLE_CAPTAINS: Tuple[str, ...] = ("Haaland", "M.Salah", "Palmer", "Son")

CAPTAIN_PATTERN_MIN_GWS = 8
CAPTAIN_PATTERN_WINDOW = 12
CAPTAIN_LOYALTY_MIN = 8
CAPTAIN_CHASER_UNIQUE = 5
CAPTAIN_DIFFERENTIAL_MIN = 3
CAPTAIN_SAFE_MAX_UNIQUE = 2

# (offset, range) used to squash each chip's gain onto 0-1
CHIP_EFFECTIVENESS_SCALES: Dict[str, Tuple[float, float]] = {
    CHIP_BENCH_BOOST: (5, 25),
    CHIP_TRIPLE_CAPTAIN: (2, 20),
    CHIP_FREE_HIT: (5, 20),
    CHIP_WILDCARD: (10, 25),
}

CHIP_RISK_POINTS: Dict[str, float] = {
    'differential_triple_captain': 1.0,
    'bench_boost_gamble': 0.7,
    'very_early_chip': 0.8,
    'early_chip': 0.4,
}
BENCH_BOOST_GAMBLE_AVG = 4           # Avg points per bench player
VERY_EARLY_CHIP_GW = 5
EARLY_CHIP_GW = 10
CHIP_POPULARITY_SCALE = 10

CHIP_STRATEGIC_EFFECTIVENESS = 0.6
CHIP_STRATEGIC_POPULARITY = 0.4

CHIP_PROFILE_PENDING = "Pending"

# (earliest GW, popularity, effectiveness) cut-offs for the chip timing profile
CHIP_PROFILE_THRESHOLDS: Dict[str, float] = {
    'early_aggressor_gw': 7,
    'hoarder_gw': 25,
    'template_popularity': 0.7,
    'contrarian_popularity': 0.3,
    'strategic_effectiveness': 0.7,
    'reactive_effectiveness': 0.4,
}


# =============================================================================
# RANKS
# =============================================================================

RANK_THRESHOLDS: Dict[str, int] = {
    'elite': 10_000,
    'top_25k': 25_000,
    'top_35k': 35_000,
    'top_50k': 50_000,
    'top_100k': 100_000,
    'top_150k': 150_000,
    'top_300k': 300_000,
}

TOTAL_PLAYERS = 12_742_297
UNRANKED = 9_999_999


# =============================================================================
# PERSONA SELECTION
# =============================================================================

METRIC_NAMES: Tuple[str, ...] = (
    'activity',
    'chaos',
    'overthink',
    'template',
    'efficiency',
    'leadership',
    'thrift',
    'patience',
    'timing',
    'chip_mastery',
    'chip_risk',
)

COMPETITIVE_THRESHOLD = 0.90
DEFAULT_PERSONA = "MOYES"

METRIC_TO_TRAIT: Dict[str, str] = {
    'chaos': "Hit Taker",
    'overthink': "Bench Regret",
    'template': "Template Follower",
    'efficiency': "Net Transfer Impact",
    'leadership': "Captain Accuracy",
    'thrift': "Budget Optimizer",
}

# (trait, metric it reads)
FALLBACK_TRAITS: Tuple[Tuple[str, str], ...] = (
    ("Template Loyalty", 'template'),
    ("Captain Accuracy", 'leadership'),
    ("Transfer Efficiency", 'efficiency'),
)

TRAIT_MIN_WEIGHT = 0.3
TRAIT_MIN_CONTRIBUTION = 0.1
TRAIT_SPECTRUM_SIZE = 4
TRAIT_SPECTRUM_MIN = 3
MAX_MEMORABLE_MOMENTS = 3

MOMENT_THRESHOLDS: Dict[str, int] = {
    'best_transfer': 10,
    'worst_bench': 15,
    'best_captain': 20,
    'worst_captain': 15,
    'best_chip': 15,
    'worst_transfer': -15,
}


# =============================================================================
# SEASON EXPORT
# =============================================================================

MAX_EXPORT_SIZE = 25 * 1024 * 1024   # 25MB
EXPORT_EXTENSION = ".json"

REQUIRED_SECTIONS: Tuple[str, ...] = ("bootstrap", "entry", "history")

# Columns each tabular section must carry
REQUIRED_COLUMNS: Dict[str, Tuple[str, ...]] = {
    "elements": ("id", "web_name", "element_type"),
    "history": ("event", "points", "total_points"),
    "transfers": ("element_in", "element_out", "event"),
}
