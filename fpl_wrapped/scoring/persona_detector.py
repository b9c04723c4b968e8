"""
Persona detector for selecting a manager's persona.

Scores the manager against every persona in the catalog, applies the boost
stages, removes ineligible personas and deal-breakers, then picks a winner
from the competitive set. The result is assembled with a trait spectrum,
memorable moments and the manager's personality spectrums.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from fpl_wrapped.config import PipelineConfig
from fpl_wrapped.models.analysis_results import (
    BenchAnalysis,
    CaptaincyAnalysis,
    CaptainPattern,
    ChipAnalysis,
    TransferAnalysis,
)
from fpl_wrapped.models.behavioral_signals import BehavioralSignals
from fpl_wrapped.models.persona import (
    ManagerPersona,
    ManagerSpectrums,
    PersonaDefinition,
    TraitScore,
)
from fpl_wrapped.models.persona_metrics import PersonaMetrics
from fpl_wrapped.scoring.boost_rules import apply_boosts
from fpl_wrapped.scoring.persona_catalog import (
    CATALOG,
    CATALOG_ORDER,
    PERSONAS,
    ScoringInputs,
    broken_deals,
    is_eligible,
)
from fpl_wrapped.utils.constants import (
    CHIP_DISPLAY_NAMES,
    FALLBACK_TRAITS,
    MAX_MEMORABLE_MOMENTS,
    METRIC_TO_TRAIT,
    MOMENT_THRESHOLDS,
    RANK_THRESHOLDS,
    TRAIT_MIN_CONTRIBUTION,
    TRAIT_MIN_WEIGHT,
    TRAIT_SPECTRUM_MIN,
    TRAIT_SPECTRUM_SIZE,
)
from fpl_wrapped.utils.numbers import round_int


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeasonHighlights:
    """Best and worst decisions, used for memorable moments."""

    best_transfer: Optional[TransferAnalysis] = None
    worst_transfer: Optional[TransferAnalysis] = None
    best_captain: Optional[CaptaincyAnalysis] = None
    worst_captain: Optional[CaptaincyAnalysis] = None
    worst_bench: Optional[BenchAnalysis] = None
    best_chip: Optional[ChipAnalysis] = None


# (persona, condition, points) summed into a persona's match strength
MatchRule = Tuple[str, Callable[[ScoringInputs], bool], int]

_TOP_50K = RANK_THRESHOLDS['top_50k']

MATCH_STRENGTH_RULES: Tuple[MatchRule, ...] = (
    # Strong behavioral matches
    ('FERGUSON', lambda i: i.rank <= _TOP_50K and i.metrics.efficiency > 0.65, 7),
    ('FERGUSON', lambda i: i.rank <= _TOP_50K and 0.55 < i.metrics.efficiency <= 0.65, 5),
    ('TENHAG', lambda i: i.signals.constant_tinkerer and i.metrics.activity > 0.75, 3),
    ('REDKNAPP', lambda i: i.signals.hit_addict and i.metrics.chaos > 0.4, 3),
    ('WENGER', lambda i: i.metrics.template < 0.20 and i.signals.disciplined, 3),
    ('KLOPP', lambda i: i.signals.boom_bust and i.metrics.template < 0.30, 3),
    ('PEP', lambda i: i.signals.rotation_pain and i.metrics.overthink > 0.70, 3),
    ('AMORIM', lambda i: i.signals.long_term_backer and i.metrics.efficiency > 0.85, 3),
    ('POSTECOGLOU', lambda i: i.signals.early_aggression and i.metrics.template < 0.35, 3),
    ('EMERY', lambda i: i.signals.disciplined and i.metrics.efficiency > 0.75, 3),
    ('SLOT', lambda i: i.signals.bench_master and i.metrics.leadership > 0.65, 3),
    ('MOYES', lambda i: i.signals.consistent and i.metrics.template > 0.60, 3),

    # Chip personality matches
    ('SLOT', lambda i: i.signals.chip_master and i.metrics.chip_mastery > 0.7, 3),
    ('KLOPP', lambda i: i.signals.chip_gambler and i.metrics.chip_risk > 0.65, 2),
    ('EMERY', lambda i: i.signals.strategic_chipper, 2),
    ('WENGER', lambda i: i.signals.contrarian and i.metrics.template < 0.25, 2),
    ('ARTETA', lambda i: i.signals.template_chipper and i.metrics.template > 0.65, 2),
    ('POSTECOGLOU', lambda i: i.signals.chip_gambler and i.metrics.chip_risk > 0.6, 2),
    ('ANCELOTTI', lambda i: i.signals.chip_master and i.metrics.chip_mastery > 0.6, 2),
    ('MOURINHO', lambda i: i.signals.strategic_chipper and i.metrics.thrift > 0.4, 2),
    ('SIMEONE', lambda i: i.signals.template_chipper and i.metrics.thrift > 0.5, 2),

    # Moderate matches
    ('MARESCA', lambda i: i.signals.constant_tinkerer and i.metrics.activity > 0.45, 2),
    ('ANCELOTTI', lambda i: i.signals.bench_master and i.metrics.chaos < 0.20, 2),
    ('ARTETA', lambda i: i.metrics.template > 0.65 and i.metrics.efficiency > 0.60, 2),
    ('MOURINHO', lambda i: i.metrics.chaos < 0.10 and i.metrics.thrift > 0.40, 2),

    # Uniqueness
    ('TENHAG', lambda i: i.metrics.activity > 0.80, 2),
    ('REDKNAPP', lambda i: i.metrics.chaos > 0.50, 2),
    ('WENGER', lambda i: i.metrics.template < 0.22, 2),
    ('PEP', lambda i: i.metrics.overthink > 0.75, 2),
)


class PersonaDetector:
    """
    Detector for the manager persona.

    Selection is staged and deterministic:
    1. Base score per persona: sum of metric * weight * 100
    2. Boost stages, applied multiplicatively in order
    3. Eligibility gates
    4. Deal-breakers (ignored if they would remove every persona)
    5. Competitive tie-break on match strength, then score, then catalog order

    Example usage:
        detector = PersonaDetector()
        persona = detector.detect(metrics, signals, captain_pattern, rank=85_000)
        print(persona.name, persona.personality_code)
    """

    def __init__(self, config: Optional[PipelineConfig] = None) -> None:
        """
        Initialize detector.

        Args:
            config: Pipeline settings (competitive threshold, default persona)

        Raises:
            ValueError: If the configured default persona is not in the catalog
        """
        self.config = config or PipelineConfig()
        if self.config.default_persona not in PERSONAS:
            raise ValueError(f"Unknown default persona: {self.config.default_persona}")

    def detect(
        self,
        metrics: PersonaMetrics,
        signals: BehavioralSignals,
        captain_pattern: CaptainPattern,
        rank: int,
        highlights: Optional[SeasonHighlights] = None,
        total_players: Optional[int] = None,
    ) -> ManagerPersona:
        """
        Select and assemble the manager's persona.

        Args:
            metrics: Normalized persona metrics
            signals: Detected behavioral signals
            captain_pattern: Captain selection habits
            rank: Current overall rank
            highlights: Best/worst decisions for memorable moments
            total_players: Entrant count for rank percentiles

        Returns:
            ManagerPersona for the winning persona
        """
        inputs = ScoringInputs(
            metrics=metrics,
            signals=signals,
            captain_pattern=captain_pattern,
            rank=rank,
            total_players=total_players or self.config.total_players,
        )

        scores = self.score(inputs)
        key = self.select(scores, inputs)
        return self.assemble(PERSONAS[key], metrics, highlights, score=scores[key])

    def default_persona(self, metrics: Optional[PersonaMetrics] = None) -> ManagerPersona:
        """
        Persona for a season with no finished gameweeks.

        Returns:
            The configured default persona with fallback traits and no moments
        """
        return self.assemble(
            PERSONAS[self.config.default_persona],
            metrics or PersonaMetrics.empty(),
            highlights=None,
        )

    # -------------------------------------------------------------------------
    # Scoring and selection
    # -------------------------------------------------------------------------

    def score(self, inputs: ScoringInputs) -> Dict[str, float]:
        """
        Base scores with every boost stage applied.

        Returns:
            Persona key -> boosted score, in catalog order
        """
        scores = {p.key: base_score(p, inputs.metrics) for p in CATALOG}
        fired = apply_boosts(scores, inputs)
        logger.debug("Boost rules fired: %s", fired)
        return scores

    def select(self, scores: Dict[str, float], inputs: ScoringInputs) -> str:
        """
        Pick the winning persona from boosted scores.

        Args:
            scores: Persona key -> boosted score
            inputs: Scoring inputs for gates and match strength

        Returns:
            Catalog key of the selected persona
        """
        eligible = [key for key in scores if is_eligible(key, inputs)]
        candidates = [key for key in eligible if not broken_deals(key, inputs)]
        if not candidates:
            logger.debug("No persona survived the gates; falling back to all personas")
            candidates = list(scores)

        ranked = sorted(candidates, key=lambda k: (-scores[k], CATALOG_ORDER[k]))
        competitive = self._competitive_set(ranked, scores)

        if len(competitive) == 1:
            winner = competitive[0]
        else:
            winner = min(
                competitive,
                key=lambda k: (-match_strength(k, inputs), -scores[k], CATALOG_ORDER[k]),
            )

        logger.debug(
            "Selected %s from competitive set %s",
            winner,
            [(k, round(scores[k], 1)) for k in competitive],
        )
        return winner

    def _competitive_set(self, ranked: List[str], scores: Dict[str, float]) -> List[str]:
        """Candidates within the competitive band of the top score."""
        top = scores[ranked[0]]
        band = top - abs(top) * (1 - self.config.competitive_threshold)
        return [key for key in ranked if scores[key] >= band]

    # -------------------------------------------------------------------------
    # Assembly
    # -------------------------------------------------------------------------

    def assemble(
        self,
        persona: PersonaDefinition,
        metrics: PersonaMetrics,
        highlights: Optional[SeasonHighlights],
        score: float = 0.0,
    ) -> ManagerPersona:
        """Build the output record for a selected persona."""
        spectrums = manager_spectrums(metrics)
        return ManagerPersona(
            key=persona.key,
            name=persona.name,
            title=persona.title,
            description=persona.description,
            color=persona.color,
            traits=persona.traits,
            trait_spectrum=trait_spectrum(persona, metrics),
            memorable_moments=memorable_moments(highlights) if highlights else (),
            spectrums=spectrums,
            personality_code=spectrums.code,
            score=score,
        )


def base_score(persona: PersonaDefinition, metrics: PersonaMetrics) -> float:
    """Sum of metric * weight * 100 over the persona's weights."""
    return sum(metrics.get(metric) * weight * 100 for metric, weight in persona.weights)


def match_strength(key: str, inputs: ScoringInputs) -> int:
    """Behavioral-pattern and uniqueness points for one persona."""
    return sum(
        points for persona, condition, points in MATCH_STRENGTH_RULES
        if persona == key and condition(inputs)
    )


def trait_spectrum(persona: PersonaDefinition, metrics: PersonaMetrics) -> Tuple[TraitScore, ...]:
    """
    Up to four trait bars from the persona's material weights.

    A weight is material when |weight| > 0.3 and metric * weight > 0.1.
    Activity is not shown as a trait. When fewer than three bars qualify the
    fallback traits are appended.
    """
    traits: List[TraitScore] = []
    for metric, weight in persona.weights:
        if metric == 'activity':
            continue
        value = metrics.get(metric)
        if abs(weight) > TRAIT_MIN_WEIGHT and value * weight > TRAIT_MIN_CONTRIBUTION:
            traits.append(TraitScore(
                trait=METRIC_TO_TRAIT.get(metric, metric),
                score=round_int(value * 100),
            ))

    traits.sort(key=lambda t: -t.score)
    traits = traits[:TRAIT_SPECTRUM_SIZE]

    if len(traits) < TRAIT_SPECTRUM_MIN:
        present = {t.trait for t in traits}
        for name, metric in FALLBACK_TRAITS:
            if name not in present:
                traits.append(TraitScore(trait=name, score=round_int(metrics.get(metric) * 100)))

    return tuple(traits[:TRAIT_SPECTRUM_SIZE])


def memorable_moments(highlights: SeasonHighlights) -> Tuple[str, ...]:
    """Up to three narrative lines from the season's standout decisions."""
    t = MOMENT_THRESHOLDS
    moments: List[str] = []

    transfer = highlights.best_transfer
    if transfer is not None and transfer.points_gained > t['best_transfer']:
        moments.append(
            f"GW{transfer.owned_range[0]}: Signed {transfer.player_in.web_name} "
            f"and gained {transfer.points_gained} points"
        )

    bench = highlights.worst_bench
    if bench is not None and bench.missed_points > t['worst_bench'] and bench.bench_players:
        benched = max(bench.bench_players, key=lambda p: p.points)
        moments.append(
            f"GW{bench.event}: Benched {benched.name} who scored {benched.points} points"
        )

    captain = highlights.best_captain
    if captain is not None and captain.multiplied_points > t['best_captain']:
        moments.append(
            f"GW{captain.event}: Captained {captain.captain_name} "
            f"for a {captain.multiplied_points}-point haul"
        )

    captain = highlights.worst_captain
    if captain is not None and captain.points_left_on_table > t['worst_captain']:
        moments.append(
            f"GW{captain.event}: Captained {captain.captain_name} ({captain.captain_points}pts) "
            f"but {captain.best_pick_name} had {captain.best_pick_points} points"
        )

    chip = highlights.best_chip
    if (chip is not None and chip.used and chip.is_excellent
            and chip.points_gained > t['best_chip']):
        moments.append(
            f"GW{chip.event}: Played {CHIP_DISPLAY_NAMES[chip.name]} "
            f"and gained {chip.points_gained} points"
        )

    transfer = highlights.worst_transfer
    if transfer is not None and transfer.points_gained < t['worst_transfer']:
        moments.append(
            f"GW{transfer.owned_range[0]}: Swapped {transfer.player_out.web_name} "
            f"for {transfer.player_in.web_name} and lost {abs(transfer.points_gained)} points"
        )

    return tuple(moments[:MAX_MEMORABLE_MOMENTS])


def manager_spectrums(metrics: PersonaMetrics) -> ManagerSpectrums:
    """
    Place the manager on the four personality axes.

    differential: (1 - template) ** 1.5, so ~35% template overlap is the midpoint
    analyzer: 1 - mean(efficiency, leadership), high means intuitive
    patient: mean of (1 - activity), patience and timing
    cautious: 1 - chaos
    """
    return ManagerSpectrums(
        differential=(1 - metrics.template) ** 1.5,
        analyzer=1 - (metrics.efficiency + metrics.leadership) / 2,
        patient=((1 - metrics.activity) + metrics.patience + metrics.timing) / 3,
        cautious=1 - metrics.chaos,
    )


def detect_persona(
    metrics: PersonaMetrics,
    signals: BehavioralSignals,
    captain_pattern: CaptainPattern,
    rank: int,
    highlights: Optional[SeasonHighlights] = None,
) -> ManagerPersona:
    """
    Detect the manager persona.

    Convenience function using default detector.
    """
    detector = PersonaDetector()
    return detector.detect(metrics, signals, captain_pattern, rank, highlights)
