"""
Persona catalog.

The sixteen manager personas in fixed catalog order, each with its weight
map over PersonaMetrics, plus the eligibility predicates and deal-breakers
that remove personas from contention. Catalog order is the final tie-break
everywhere a selection could otherwise depend on iteration order.
"""

from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Tuple

from fpl_wrapped.models.analysis_results import CaptainPattern
from fpl_wrapped.models.behavioral_signals import BehavioralSignals
from fpl_wrapped.models.persona import PersonaDefinition
from fpl_wrapped.models.persona_metrics import PersonaMetrics
from fpl_wrapped.utils.constants import RANK_THRESHOLDS, TOTAL_PLAYERS


@dataclass(frozen=True)
class ScoringInputs:
    """Everything persona rules may read."""

    metrics: PersonaMetrics
    signals: BehavioralSignals
    captain_pattern: CaptainPattern
    rank: int
    total_players: int = TOTAL_PLAYERS

    @property
    def rank_percentile(self) -> float:
        """Overall rank as a percentage of all managers (100 when unknown)."""
        if self.total_players <= 0:
            return 100.0
        return self.rank / self.total_players * 100


Predicate = Callable[[ScoringInputs], bool]


CATALOG: Tuple[PersonaDefinition, ...] = (
    PersonaDefinition(
        key='PEP',
        name='Pep Guardiola',
        title='The Bald Genius',
        description=(
            'You constantly rotate and leave hauls on the bench. '
            'But somehow, your tactical genius makes it work.'
        ),
        color='#6CABDD',
        traits=('Rotation Roulette', 'Bald Fraud Energy', 'Makes It Work Anyway'),
        weights=(
            ('overthink', 1.5), ('activity', 0.5), ('efficiency', 0.4),
            ('template', 0.3), ('chaos', -0.5),
        ),
    ),
    PersonaDefinition(
        key='MOYES',
        name='David Moyes',
        title='The Reliable',
        description=(
            'You trust the process, stick to the template, and rarely take hits. '
            'Consistency is your middle name.'
        ),
        color='#800000',
        traits=('Template King', 'Hit-Averse', 'Solid Foundation'),
        weights=(
            ('template', 1.2), ('chaos', -1.5), ('activity', -0.8),
            ('overthink', -0.6), ('thrift', 0.4),
        ),
    ),
    PersonaDefinition(
        key='REDKNAPP',
        name='Harry Redknapp',
        title='The Wheeler-Dealer',
        description=(
            "You love a deal. If there's a -4 to be taken, you're taking it. "
            "Somehow, your moves often work out."
        ),
        color='#0000FF',
        traits=('Hit Specialist', 'High Turnover', 'Deal Maker'),
        weights=(
            ('chaos', 1.5), ('activity', 1.2), ('efficiency', -0.3),
            ('overthink', 0.3), ('template', -0.4),
        ),
    ),
    PersonaDefinition(
        key='MOURINHO',
        name='Jose Mourinho',
        title='The Special One',
        description=(
            "You build from the back and prioritize clean sheets. "
            "You'd rather win 1-0 than 4-3."
        ),
        color='#132257',
        traits=('Defense First', 'Pragmatic Wins', 'Budget Warrior'),
        weights=(
            ('chaos', -1.2), ('efficiency', 0.7), ('thrift', 0.9),
            ('template', 0.5), ('overthink', -0.7),
        ),
    ),
    PersonaDefinition(
        key='KLOPP',
        name='Jurgen Klopp',
        title='Heavy Metal FPL',
        description=(
            'You ignore the template and chase the upside. '
            'When your differentials haul, the world knows it.'
        ),
        color='#C8102E',
        traits=('Differential Hunter', 'High Variance', 'Emotional Picks'),
        weights=(
            ('template', -1.5), ('leadership', 0.7), ('chaos', 0.6),
            ('activity', 0.8), ('efficiency', 0.2),
        ),
    ),
    PersonaDefinition(
        key='AMORIM',
        name='Ruben Amorim',
        title='The Stubborn One',
        description=(
            'You stick to your vision when others doubt. '
            'Every move you make seems to turn to gold.'
        ),
        color='#005CAB',
        traits=('Unwavering Vision', 'High ROI', 'Anti-Template Edge'),
        weights=(
            ('efficiency', 1.3), ('leadership', 0.6), ('template', -0.5),
            ('activity', 0.3), ('chaos', -0.4),
        ),
    ),
    PersonaDefinition(
        key='FERGUSON',
        name='Sir Alex Ferguson',
        title='The GOAT',
        description=(
            'You simply know how to win. '
            'Your captaincy picks are legendary and your rank reflects it.'
        ),
        color='#DA291C',
        traits=('Elite Captaincy', 'Serial Winner', 'Mental Toughness'),
        weights=(
            ('leadership', 1.5), ('efficiency', 1.0), ('overthink', -0.7),
            ('chaos', -0.5), ('template', 0.4),
        ),
    ),
    PersonaDefinition(
        key='POSTECOGLOU',
        name='Ange Postecoglou',
        title='The All-Outer',
        description=(
            'Attack is your only setting. You take big risks on differentials '
            'and never second-guess yourself. Mate...'
        ),
        color='#0B0E1E',
        traits=('All-Out Attack', 'Never Backs Down', 'Differential King'),
        weights=(
            ('chaos', 1.0), ('template', -1.8), ('activity', 1.3),
            ('overthink', -1.0), ('efficiency', -0.1),
        ),
    ),
    PersonaDefinition(
        key='EMERY',
        name='Unai Emery',
        title='The Methodical',
        description=(
            'Good ebening. Your preparation is unmatched. '
            'You think deeply about every transfer and rarely panic.'
        ),
        color='#7B003A',
        traits=('Deep Analysis', 'Efficiency Master', 'Calculated Moves'),
        weights=(
            ('efficiency', 1.3), ('overthink', 0.6), ('template', 0.4),
            ('chaos', -1.0), ('activity', -0.3),
        ),
    ),
    PersonaDefinition(
        key='WENGER',
        name='Arsene Wenger',
        title='The Professor',
        description=(
            "You hunt for the perfect differential. "
            "You'd rather find a 5.0m gem than follow the herd."
        ),
        color='#EF0107',
        traits=('Differential Scout', 'Beautiful FPL', 'Low Hits'),
        weights=(
            ('template', -1.8), ('efficiency', 1.0), ('chaos', -1.3),
            ('thrift', 0.8), ('activity', -0.2),
        ),
    ),
    PersonaDefinition(
        key='ANCELOTTI',
        name='Carlo Ancelotti',
        title='The Calm Conductor',
        description=(
            'You stay composed under pressure. Your squad rotates smoothly '
            'and you rarely panic. Experience is your edge.'
        ),
        color='#FFFFFF',
        traits=('Cool Under Pressure', 'Balanced Approach', 'Veteran Wisdom'),
        weights=(
            ('template', 0.8), ('chaos', -1.0), ('leadership', 1.0),
            ('overthink', -0.6), ('efficiency', 0.6),
        ),
    ),
    PersonaDefinition(
        key='MARESCA',
        name='Enzo Maresca',
        title='The System Builder',
        description=(
            'You trust young talent and rotate intelligently. '
            'Your squad depth is your weapon, and you adapt tactically.'
        ),
        color='#034694',
        traits=('Youth Over Experience', 'Tactical Flexibility', 'Smart Rotation'),
        weights=(
            ('activity', 1.0), ('overthink', 0.5), ('efficiency', 0.7),
            ('template', -0.3), ('chaos', 0.2),
        ),
    ),
    PersonaDefinition(
        key='ARTETA',
        name='Mikel Arteta',
        title='The Process Manager',
        description=(
            'You follow the plan religiously. '
            'You stick to the elite assets and rarely deviate from the template.'
        ),
        color='#EF0107',
        traits=('Trust the Process', 'Efficiency First', 'Elite Template'),
        weights=(
            ('efficiency', 1.0), ('template', 1.3), ('chaos', -1.2),
            ('activity', -0.3), ('leadership', 0.6),
        ),
    ),
    PersonaDefinition(
        key='SIMEONE',
        name='Diego Simeone',
        title='The Warrior',
        description=(
            'You grind out results with grit and determination. '
            'Defense is sacred, and you fight for every single point.'
        ),
        color='#CB3524',
        traits=('Never Surrender', 'Defensive Fortress', 'Budget Master'),
        weights=(
            ('template', 0.8), ('chaos', -1.5), ('leadership', 0.7),
            ('thrift', 1.2), ('overthink', -0.5),
        ),
    ),
    PersonaDefinition(
        key='SLOT',
        name='Arne Slot',
        title='The Optimizer',
        description=(
            "You're meticulous and data-driven. Every decision is backed by xG, xA, "
            "and underlying stats. You find smart differentials."
        ),
        color='#D00027',
        traits=('Data-Driven', 'Smart Differentials', 'High Efficiency'),
        weights=(
            ('efficiency', 1.4), ('leadership', 0.9), ('overthink', 0.3),
            ('chaos', -0.8), ('template', 0.2),
        ),
    ),
    PersonaDefinition(
        key='TENHAG',
        name='Erik ten Hag',
        title='The Rebuilder',
        description=(
            "You're always one gameweek away from a masterpiece. "
            "You tinker with the squad constantly."
        ),
        color='#DA291C',
        traits=('Constant Rebuild', 'High Potential', 'Inconsistent'),
        weights=(
            ('activity', 1.8), ('efficiency', -0.8), ('overthink', 0.6),
            ('chaos', 0.7), ('template', -0.2),
        ),
    ),
)

PERSONAS: Dict[str, PersonaDefinition] = {p.key: p for p in CATALOG}
CATALOG_ORDER: Dict[str, int] = {p.key: i for i, p in enumerate(CATALOG)}


# =============================================================================
# ELIGIBILITY
# =============================================================================

RANKS = RANK_THRESHOLDS

# Hard gates: a persona failing its predicate is out of contention
ELIGIBILITY: Tuple[Tuple[str, Predicate], ...] = (
    ('PEP', lambda i: i.metrics.overthink > 0.70 and i.metrics.efficiency < 0.95),
    ('MOYES', lambda i: i.metrics.chaos < 0.30 and i.metrics.activity < 0.70),
    ('REDKNAPP', lambda i: i.metrics.chaos > 0.25 or i.metrics.activity > 0.4),
    ('MOURINHO', lambda i: (
        (i.metrics.chaos < 0.35 and i.metrics.thrift > 0.20)
        or (i.metrics.chaos < 0.30 and i.metrics.template > 0.35)
    )),
    ('KLOPP', lambda i: (
        (i.metrics.template < 0.55 and i.metrics.activity > 0.30)
        or (i.signals.boom_bust and i.metrics.template < 0.60)
    )),
    ('AMORIM', lambda i: (
        (i.metrics.efficiency > 0.40 and i.signals.long_term_backer)
        or (i.metrics.efficiency > 0.45 and i.metrics.chaos < 0.30)
    )),
    ('FERGUSON', lambda i: (
        i.rank <= RANKS['elite']
        or (i.rank <= RANKS['top_50k'] and (i.metrics.efficiency > 0.55 or i.metrics.leadership > 0.55))
        or (i.rank <= RANKS['top_35k'] and (i.metrics.efficiency > 0.50 or i.metrics.leadership > 0.50))
    )),
    ('POSTECOGLOU', lambda i: (
        (i.metrics.template < 0.50 and i.metrics.activity > 0.40)
        or (i.signals.early_aggression and i.metrics.template < 0.60)
    )),
    ('EMERY', lambda i: (
        i.rank <= RANKS['top_300k']
        or i.signals.early_planner
        or i.signals.disciplined
        or i.metrics.efficiency > 0.50
    )),
    ('WENGER', lambda i: (
        (i.metrics.template < 0.65 and i.metrics.chaos < 0.35)
        or (i.metrics.template < 0.70 and i.signals.disciplined)
    )),
    ('ANCELOTTI', lambda i: (
        (i.metrics.chaos < 0.4 and i.metrics.leadership > 0.4)
        or (i.metrics.leadership > 0.50 and 0.35 < i.metrics.template < 0.80)
    )),
    ('MARESCA', lambda i: 0.25 < i.metrics.activity < 0.85),
    ('ARTETA', lambda i: i.metrics.template > 0.45 and i.metrics.efficiency > 0.3),
    ('SIMEONE', lambda i: i.metrics.chaos < 0.30 and i.metrics.thrift > 0.25),
    ('SLOT', lambda i: (
        i.rank <= RANKS['top_100k']
        and i.metrics.efficiency > 0.60
        and i.metrics.leadership > 0.55
    )),
    ('TENHAG', lambda i: (
        i.metrics.activity > 0.45
        or (i.metrics.activity > 0.35 and i.metrics.chaos > 0.15)
    )),
)

ELIGIBILITY_BY_KEY: Dict[str, Predicate] = dict(ELIGIBILITY)


# =============================================================================
# DEAL-BREAKERS
# =============================================================================

# (name, trigger, personas removed when it fires)
DEAL_BREAKERS: Tuple[Tuple[str, Predicate, FrozenSet[str]], ...] = (
    ('heavy_template', lambda i: i.metrics.template > 0.7,
     frozenset({'WENGER', 'KLOPP', 'POSTECOGLOU'})),
    ('no_hits', lambda i: i.metrics.chaos < 0.1,
     frozenset({'REDKNAPP', 'TENHAG'})),
    ('no_bench_regret', lambda i: i.metrics.overthink < 0.3,
     frozenset({'PEP'})),
    ('inactive', lambda i: i.metrics.activity < 0.25,
     frozenset({'REDKNAPP', 'TENHAG', 'POSTECOGLOU', 'MARESCA'})),
    ('anti_template', lambda i: i.metrics.template < 0.4,
     frozenset({'MOYES', 'ARTETA', 'SIMEONE'})),
)


def is_eligible(key: str, inputs: ScoringInputs) -> bool:
    """Check a persona's eligibility gate (personas without one pass)."""
    predicate = ELIGIBILITY_BY_KEY.get(key)
    return predicate is None or predicate(inputs)


def broken_deals(key: str, inputs: ScoringInputs) -> Tuple[str, ...]:
    """Names of the deal-breakers that remove a persona."""
    return tuple(
        name for name, trigger, removed in DEAL_BREAKERS
        if key in removed and trigger(inputs)
    )
