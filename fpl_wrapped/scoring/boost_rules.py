"""
Persona boost rules.

Ordered tables of tagged records. Each rule names a predicate over the
scoring inputs and the (persona, multiplier) pairs applied when it fires.
Stages run in BOOST_STAGES order and rules run in table order; later rules
multiply the already-boosted scores. Within the rank-tier stage only the
first matching tier applies.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

from fpl_wrapped.scoring.persona_catalog import ScoringInputs
from fpl_wrapped.utils.constants import RANK_THRESHOLDS


@dataclass(frozen=True)
class BoostRule:
    """A predicate and the persona multipliers it triggers."""

    name: str
    predicate: Callable[[ScoringInputs], bool]
    boosts: Tuple[Tuple[str, float], ...]

    def applies(self, inputs: ScoringInputs) -> bool:
        """Check whether the rule fires for these inputs."""
        return bool(self.predicate(inputs))


@dataclass(frozen=True)
class BoostStage:
    """A named group of rules; first_match_only stops after one hit."""

    name: str
    rules: Tuple[BoostRule, ...]
    first_match_only: bool = False


RANKS = RANK_THRESHOLDS


# =============================================================================
# BEHAVIORAL COMBINATIONS
# =============================================================================

BEHAVIORAL_RULES: Tuple[BoostRule, ...] = (
    BoostRule('long_term_backer_efficient',
              lambda i: i.signals.long_term_backer and i.metrics.efficiency > 0.6,
              (('AMORIM', 2.0),)),
    BoostRule('quiet_efficiency',
              lambda i: (i.metrics.efficiency > 0.55 and i.metrics.activity < 0.35
                         and i.metrics.chaos < 0.15),
              (('AMORIM', 2.2),)),
    BoostRule('hit_addict_tinkerer',
              lambda i: i.signals.hit_addict and i.signals.constant_tinkerer,
              (('REDKNAPP', 2.2), ('TENHAG', 1.7))),
    BoostRule('free_transfer_tinkerer',
              lambda i: i.signals.constant_tinkerer and not i.signals.hit_addict,
              (('TENHAG', 2.0), ('MARESCA', 1.6))),
    BoostRule('tactical_flexibility',
              lambda i: 0.4 < i.metrics.activity < 0.65 and 0.35 < i.metrics.overthink < 0.65,
              (('MARESCA', 2.3),)),
    BoostRule('rotation_with_returns',
              lambda i: 0.3 < i.metrics.overthink < 0.6 and i.metrics.efficiency > 0.5,
              (('MARESCA', 1.9),)),
    BoostRule('disciplined_efficient',
              lambda i: i.signals.disciplined and i.metrics.efficiency > 0.65,
              (('EMERY', 1.8), ('WENGER', 1.7))),
    BoostRule('disciplined_budget',
              lambda i: (i.signals.disciplined and i.metrics.thrift > 0.4
                         and i.metrics.chaos < 0.10),
              (('SIMEONE', 2.5),)),
    BoostRule('moderate_thrift_no_hits',
              lambda i: 0.35 < i.metrics.thrift < 0.65 and i.metrics.chaos < 0.15,
              (('SIMEONE', 1.7), ('ANCELOTTI', 1.6))),
    BoostRule('early_wildcard',
              lambda i: i.signals.early_aggression,
              (('POSTECOGLOU', 1.6), ('KLOPP', 1.4))),
    BoostRule('mid_season_chips',
              lambda i: not i.signals.early_aggression and not i.signals.chip_hoarder,
              (('KLOPP', 1.5), ('PEP', 1.6))),
    BoostRule('chip_hoarder_efficient',
              lambda i: i.signals.chip_hoarder and i.metrics.efficiency > 0.6,
              (('EMERY', 1.5), ('MOURINHO', 1.5), ('AMORIM', 1.7))),
    BoostRule('rotation_pain',
              lambda i: i.signals.rotation_pain,
              (('PEP', 2.0),)),
    BoostRule('knee_jerk_active',
              lambda i: i.signals.knee_jerker and i.metrics.activity > 0.6,
              (('KLOPP', 2.5), ('POSTECOGLOU', 2.2))),
    BoostRule('long_term_backer_elite',
              lambda i: i.signals.long_term_backer and i.metrics.efficiency > 0.75,
              (('AMORIM', 2.6),)),
    BoostRule('successful_contrarian',
              lambda i: i.signals.ultra_contrarian and i.metrics.leadership > 0.50,
              (('WENGER', 2.7),)),
    BoostRule('budget_mastery',
              lambda i: (i.metrics.thrift > 0.5 and i.metrics.efficiency > 0.5
                         and i.metrics.chaos < 0.2),
              (('MOURINHO', 2.4),)),
    BoostRule('defensive_grinder',
              lambda i: (i.metrics.thrift > 0.6 and i.metrics.chaos < 0.08
                         and i.metrics.template > 0.5),
              (('SIMEONE', 2.7),)),
    BoostRule('active_bench_master',
              lambda i: i.signals.bench_master and i.metrics.activity > 0.5,
              (('SLOT', 1.8), ('MARESCA', 1.8), ('FERGUSON', 1.6))),
    BoostRule('measured_rotation',
              lambda i: 0.3 < i.metrics.overthink < 0.55 and not i.signals.rotation_pain,
              (('ANCELOTTI', 2.0), ('MARESCA', 1.9))),
    BoostRule('boom_bust_differential',
              lambda i: i.signals.boom_bust and i.metrics.template < 0.35,
              (('KLOPP', 1.8), ('POSTECOGLOU', 1.6))),
    BoostRule('consistent_template',
              lambda i: i.signals.consistent and i.metrics.template > 0.55,
              (('MOYES', 1.9), ('ARTETA', 1.6), ('FERGUSON', 1.5))),
    BoostRule('consistent_budget',
              lambda i: i.signals.consistent and i.metrics.thrift > 0.4,
              (('SIMEONE', 2.1), ('MOURINHO', 1.9))),
    BoostRule('late_mover',
              lambda i: i.signals.panic_buyer or i.signals.deadline_day_scrambler,
              (('REDKNAPP', 2.2), ('MOURINHO', 2.0), ('TENHAG', 1.8),
               ('EMERY', 0.4), ('ARTETA', 0.4), ('WENGER', 0.5), ('SLOT', 0.6))),
    BoostRule('late_mover_special_one',
              lambda i: ((i.signals.panic_buyer or i.signals.deadline_day_scrambler)
                         and i.metrics.efficiency > 0.6 and i.metrics.chaos < 0.1),
              (('MOURINHO', 2.5),)),
    BoostRule('knee_jerker',
              lambda i: i.signals.knee_jerker,
              (('KLOPP', 2.2), ('POSTECOGLOU', 2.0), ('REDKNAPP', 1.8),
               ('EMERY', 0.5), ('ANCELOTTI', 0.6))),
    BoostRule('differential_hunter',
              lambda i: i.metrics.template < 0.4,
              (('KLOPP', 2.2), ('POSTECOGLOU', 2.5), ('WENGER', 2.0), ('REDKNAPP', 1.6))),
    BoostRule('deep_differential_hunter',
              lambda i: i.metrics.template < 0.25,
              (('POSTECOGLOU', 3.0), ('KLOPP', 2.5))),
    BoostRule('data_driven',
              lambda i: i.metrics.leadership > 0.6 and i.metrics.efficiency > 0.4,
              (('SLOT', 2.2),)),
    BoostRule('late_night_reactor',
              lambda i: i.signals.late_night_reactor,
              (('REDKNAPP', 1.9), ('TENHAG', 1.7), ('MOURINHO', 1.6))),
    BoostRule('calm_captaincy',
              lambda i: (i.metrics.leadership > 0.55 and i.metrics.chaos < 0.25
                         and i.metrics.template > 0.45),
              (('ANCELOTTI', 2.1),)),
    BoostRule('consistent_captaincy',
              lambda i: i.signals.consistent and i.metrics.leadership > 0.5,
              (('ANCELOTTI', 1.9),)),
    BoostRule('balanced_template',
              lambda i: (0.4 < i.metrics.template < 0.7 and i.metrics.efficiency > 0.45
                         and i.metrics.chaos < 0.2),
              (('ANCELOTTI', 1.8),)),
    BoostRule('steady_activity',
              lambda i: i.metrics.overthink < 0.5 and 0.35 < i.metrics.activity < 0.65,
              (('ANCELOTTI', 1.7),)),
    BoostRule('disciplined_moderate_efficiency',
              lambda i: i.signals.disciplined and 0.5 < i.metrics.efficiency < 0.75,
              (('ANCELOTTI', 1.8),)),
    BoostRule('active_dealer',
              lambda i: (i.metrics.activity > 0.55 and i.metrics.efficiency > 0.4
                         and i.metrics.chaos > 0.15),
              (('REDKNAPP', 1.9),)),
    BoostRule('efficient_tinkerer',
              lambda i: i.signals.constant_tinkerer and i.metrics.efficiency > 0.45,
              (('REDKNAPP', 1.8),)),
    BoostRule('value_building_genius',
              lambda i: i.signals.value_building_genius,
              (('AMORIM', 2.2), ('WENGER', 2.0), ('MOURINHO', 1.8), ('MARESCA', 1.6))),
    BoostRule('burning_value',
              lambda i: i.signals.burning_value,
              (('REDKNAPP', 2.0), ('TENHAG', 1.9), ('POSTECOGLOU', 1.7))),
    BoostRule('bank_hoarder',
              lambda i: i.signals.bank_hoarder,
              (('EMERY', 2.1), ('ANCELOTTI', 1.8), ('ARTETA', 1.6))),
    BoostRule('fully_invested',
              lambda i: i.signals.fully_invested,
              (('SLOT', 1.9), ('WENGER', 1.7), ('MARESCA', 1.6))),
    BoostRule('invested_value_builder',
              lambda i: (i.signals.value_building_genius and i.signals.fully_invested
                         and i.metrics.efficiency > 0.6),
              (('WENGER', 2.5), ('SLOT', 2.2))),
    BoostRule('invested_value_burner',
              lambda i: (i.signals.burning_value and i.signals.fully_invested
                         and i.metrics.chaos > 0.3),
              (('REDKNAPP', 2.3), ('TENHAG', 2.0))),
)


# =============================================================================
# RANK
# =============================================================================

# Checked in order; only the first matching tier applies
RANK_TIER_RULES: Tuple[BoostRule, ...] = (
    BoostRule('top_10k', lambda i: i.rank <= RANKS['elite'],
              (('FERGUSON', 10.0), ('SLOT', 2.2))),
    BoostRule('top_25k', lambda i: i.rank <= RANKS['top_25k'],
              (('FERGUSON', 9.0), ('SLOT', 3.5), ('EMERY', 3.0))),
    BoostRule('top_35k', lambda i: i.rank <= RANKS['top_35k'],
              (('FERGUSON', 8.5), ('SLOT', 3.2), ('EMERY', 2.8))),
    BoostRule('top_50k', lambda i: i.rank <= RANKS['top_50k'],
              (('FERGUSON', 8.0), ('SLOT', 3.0), ('EMERY', 2.5))),
    BoostRule('top_0_1_percent', lambda i: i.rank_percentile <= 0.1,
              (('FERGUSON', 7.0), ('SLOT', 2.6), ('EMERY', 2.2))),
    BoostRule('top_1_percent', lambda i: i.rank_percentile <= 1.0,
              (('SLOT', 2.8), ('FERGUSON', 5.0), ('EMERY', 2.5), ('AMORIM', 1.8))),
    BoostRule('top_10_percent', lambda i: i.rank_percentile <= 10.0,
              (('SLOT', 1.8), ('EMERY', 1.6), ('ARTETA', 1.6), ('MARESCA', 1.7))),
    BoostRule('top_25_percent', lambda i: i.rank_percentile <= 25.0,
              (('ARTETA', 1.7), ('MOURINHO', 1.8), ('SIMEONE', 1.9), ('MOYES', 1.7))),
    BoostRule('bottom_half', lambda i: i.rank_percentile > 50.0,
              (('SIMEONE', 2.3), ('MOURINHO', 2.0), ('TENHAG', 1.4), ('PEP', 1.6))),
)

RANK_DISCIPLINE_RULES: Tuple[BoostRule, ...] = (
    BoostRule('disciplined_near_elite',
              lambda i: (RANKS['top_50k'] < i.rank <= RANKS['top_150k']
                         and i.signals.disciplined),
              (('SLOT', 2.5), ('EMERY', 2.2), ('AMORIM', 1.9))),
)


# =============================================================================
# CAPTAIN PATTERN
# =============================================================================

CAPTAIN_PATTERN_RULES: Tuple[BoostRule, ...] = (
    BoostRule('differential_captain',
              lambda i: i.captain_pattern.differential and i.metrics.template < 0.30,
              (('POSTECOGLOU', 2.2), ('WENGER', 2.0))),
    BoostRule('loyal_captain',
              lambda i: i.captain_pattern.loyalty and i.metrics.leadership > 0.5,
              (('AMORIM', 2.0), ('FERGUSON', 1.7), ('MOYES', 1.6))),
    BoostRule('captain_chaser',
              lambda i: i.captain_pattern.chaser and i.metrics.leadership < 0.35,
              (('PEP', 2.3), ('TENHAG', 1.7), ('MOYES', 1.5))),
    BoostRule('safe_captain',
              lambda i: i.captain_pattern.safe_picker and i.metrics.template > 0.60,
              (('ARTETA', 1.8), ('MOYES', 1.6), ('SIMEONE', 1.7))),
)


# =============================================================================
# TRANSFER TIMING
# =============================================================================

TIMING_RULES: Tuple[BoostRule, ...] = (
    BoostRule('panic_buyer', lambda i: i.signals.panic_buyer,
              (('REDKNAPP', 2.0), ('TENHAG', 1.8), ('MOURINHO', 1.7))),
    BoostRule('deadline_day_scrambler', lambda i: i.signals.deadline_day_scrambler,
              (('MOYES', 1.8), ('TENHAG', 1.6), ('PEP', 1.5))),
    BoostRule('early_planner', lambda i: i.signals.early_planner,
              (('EMERY', 2.0), ('ARTETA', 2.0), ('SLOT', 1.6), ('WENGER', 1.7))),
    BoostRule('knee_jerker', lambda i: i.signals.knee_jerker,
              (('KLOPP', 2.1), ('POSTECOGLOU', 1.9), ('REDKNAPP', 1.8))),
    BoostRule('late_night_reactor', lambda i: i.signals.late_night_reactor,
              (('TENHAG', 1.7), ('KLOPP', 1.5), ('MOURINHO', 1.5))),
)


# =============================================================================
# EXTREME METRICS
# =============================================================================

EXTREME_METRIC_RULES: Tuple[BoostRule, ...] = (
    BoostRule('extreme_bench_regret',
              lambda i: i.metrics.overthink > 0.75 and i.signals.rotation_pain,
              (('PEP', 1.5),)),
    BoostRule('high_bench_regret',
              lambda i: 0.5 < i.metrics.overthink < 0.75 and not i.signals.rotation_pain,
              (('PEP', 1.8), ('MARESCA', 1.7))),
    BoostRule('active_overthinker',
              lambda i: i.metrics.activity > 0.5 and i.metrics.overthink > 0.6,
              (('PEP', 1.9),)),
    BoostRule('extreme_activity',
              lambda i: i.metrics.activity > 0.85 and i.signals.constant_tinkerer,
              (('TENHAG', 1.6), ('POSTECOGLOU', 1.4))),
    BoostRule('extreme_chaos',
              lambda i: i.metrics.chaos > 0.6,
              (('REDKNAPP', 1.7),)),
    BoostRule('high_chaos',
              lambda i: 0.35 < i.metrics.chaos <= 0.6,
              (('REDKNAPP', 1.9),)),
    BoostRule('active_hit_taker',
              lambda i: i.metrics.activity > 0.6 and i.metrics.chaos > 0.25,
              (('REDKNAPP', 1.8),)),
    BoostRule('ultra_contrarian',
              lambda i: i.metrics.template < 0.20,
              (('WENGER', 2.2), ('KLOPP', 2.0), ('POSTECOGLOU', 1.8))),
    BoostRule('strong_contrarian',
              lambda i: 0.20 <= i.metrics.template < 0.25,
              (('WENGER', 1.7), ('KLOPP', 1.6), ('POSTECOGLOU', 1.4))),
    BoostRule('efficient_contrarian',
              lambda i: 0.25 <= i.metrics.template < 0.40 and i.metrics.efficiency > 0.5,
              (('WENGER', 1.6), ('AMORIM', 1.7))),
    BoostRule('elite_captaincy',
              lambda i: i.metrics.leadership > 0.85,
              (('FERGUSON', 2.0), ('SLOT', 1.5))),
    BoostRule('strong_captaincy',
              lambda i: 0.7 < i.metrics.leadership <= 0.85 and i.metrics.chaos < 0.15,
              (('FERGUSON', 1.7), ('MOYES', 1.6), ('ARTETA', 1.5))),
    BoostRule('pure_template',
              lambda i: i.metrics.template > 0.8 and i.metrics.chaos < 0.08,
              (('MOYES', 1.9), ('ARTETA', 1.6))),
    BoostRule('efficient_template',
              lambda i: 0.65 < i.metrics.template <= 0.8 and i.metrics.efficiency > 0.55,
              (('ARTETA', 1.8), ('MOYES', 1.5))),
    BoostRule('extreme_budget',
              lambda i: i.metrics.thrift > 0.7,
              (('SIMEONE', 2.5), ('MOURINHO', 2.2), ('WENGER', 1.8))),
    BoostRule('quiet_moderate_efficiency',
              lambda i: 0.5 < i.metrics.efficiency <= 0.7 and i.metrics.activity < 0.4,
              (('AMORIM', 2.0), ('ANCELOTTI', 1.7))),
    BoostRule('system_builder',
              lambda i: 0.45 < i.metrics.activity < 0.7 and i.metrics.efficiency > 0.45,
              (('MARESCA', 1.8),)),
)


# =============================================================================
# CHIP PERSONALITY
# =============================================================================

CHIP_RULES: Tuple[BoostRule, ...] = (
    BoostRule('chip_master', lambda i: i.signals.chip_master and i.metrics.chip_mastery > 0.7,
              (('SLOT', 1.5),)),
    BoostRule('chip_gambler', lambda i: i.signals.chip_gambler and i.metrics.chip_risk > 0.65,
              (('KLOPP', 1.3),)),
    BoostRule('strategic_chipper', lambda i: i.signals.strategic_chipper,
              (('EMERY', 1.4),)),
    BoostRule('contrarian_chipper', lambda i: i.signals.contrarian and i.metrics.template < 0.25,
              (('WENGER', 1.4),)),
    BoostRule('template_chipper',
              lambda i: i.signals.template_chipper and i.metrics.template > 0.65,
              (('ARTETA', 1.4),)),
    BoostRule('chip_gambler_all_out',
              lambda i: i.signals.chip_gambler and i.metrics.chip_risk > 0.6,
              (('POSTECOGLOU', 1.3),)),
    BoostRule('calm_chip_master',
              lambda i: i.signals.chip_master and i.metrics.chip_mastery > 0.6,
              (('ANCELOTTI', 1.3),)),
    BoostRule('strategic_budget_chipper',
              lambda i: i.signals.strategic_chipper and i.metrics.thrift > 0.4,
              (('MOURINHO', 1.3),)),
    BoostRule('template_budget_chipper',
              lambda i: i.signals.template_chipper and i.metrics.thrift > 0.5,
              (('SIMEONE', 1.3),)),
)


BOOST_STAGES: Tuple[BoostStage, ...] = (
    BoostStage('behavioral', BEHAVIORAL_RULES),
    BoostStage('rank_tier', RANK_TIER_RULES, first_match_only=True),
    BoostStage('rank_discipline', RANK_DISCIPLINE_RULES),
    BoostStage('captain_pattern', CAPTAIN_PATTERN_RULES),
    BoostStage('transfer_timing', TIMING_RULES),
    BoostStage('extreme_metrics', EXTREME_METRIC_RULES),
    BoostStage('chip_personality', CHIP_RULES),
)


def apply_boosts(
    scores: Dict[str, float],
    inputs: ScoringInputs,
    stages: Tuple[BoostStage, ...] = BOOST_STAGES,
) -> List[str]:
    """
    Apply boost stages to scores in place.

    Args:
        scores: Persona key -> running score (modified in place)
        inputs: Metrics, signals, captain pattern and rank
        stages: Stages to apply, in order

    Returns:
        Names of the rules that fired, in application order
    """
    fired: List[str] = []
    for stage in stages:
        for rule in stage.rules:
            if not rule.applies(inputs):
                continue
            for key, multiplier in rule.boosts:
                scores[key] = scores.get(key, 0.0) * multiplier
            fired.append(f"{stage.name}.{rule.name}")
            if stage.first_match_only:
                break
    return fired
