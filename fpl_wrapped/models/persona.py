"""
Persona models - Catalog entries and the selected manager persona.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from fpl_wrapped.utils.constants import METRIC_NAMES


@dataclass(frozen=True)
class PersonaDefinition:
    """
    A static persona archetype from the catalog.

    Weights are an ordered tuple of (metric name, weight) pairs so that score
    and trait computations iterate in a fixed order.
    """

    key: str
    name: str
    title: str
    description: str
    color: str
    traits: Tuple[str, ...]
    weights: Tuple[Tuple[str, float], ...]

    def __post_init__(self) -> None:
        """Validate that weights only reference known metrics."""
        for metric, _ in self.weights:
            if metric not in METRIC_NAMES:
                raise ValueError(f"{self.key}: unknown metric in weights: {metric}")

    @property
    def weight_map(self) -> Dict[str, float]:
        """Weights as a dictionary."""
        return dict(self.weights)


@dataclass(frozen=True)
class TraitScore:
    """One bar of the persona's trait spectrum."""

    trait: str
    score: int
    max_score: int = 100


@dataclass(frozen=True)
class ManagerSpectrums:
    """
    Four 0-1 personality axes and the letter code derived from them.

    differential (D) vs template (T), intuitive (I) vs analyzer (A),
    patient (P) vs reactive (R), cautious (C) vs aggressive (A).
    """

    differential: float
    analyzer: float
    patient: float
    cautious: float

    @property
    def code(self) -> str:
        """Four-letter personality code."""
        return ''.join([
            'D' if self.differential >= 0.5 else 'T',
            'I' if self.analyzer >= 0.5 else 'A',
            'P' if self.patient >= 0.5 else 'R',
            'C' if self.cautious >= 0.5 else 'A',
        ])


@dataclass(frozen=True)
class ManagerPersona:
    """
    The selected persona plus the evidence shown alongside it.

    Example usage:
        persona = PersonaDetector().detect(metrics, signals, ...)
        print(persona.name, persona.trait_spectrum, persona.memorable_moments)
    """

    key: str
    name: str
    title: str
    description: str
    color: str
    traits: Tuple[str, ...]
    trait_spectrum: Tuple[TraitScore, ...]
    memorable_moments: Tuple[str, ...]
    spectrums: ManagerSpectrums
    personality_code: str
    score: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for JSON output."""
        return {
            'key': self.key,
            'name': self.name,
            'title': self.title,
            'description': self.description,
            'color': self.color,
            'traits': list(self.traits),
            'trait_spectrum': [
                {'trait': t.trait, 'score': t.score, 'max_score': t.max_score}
                for t in self.trait_spectrum
            ],
            'memorable_moments': list(self.memorable_moments),
            'personality_code': self.personality_code,
            'score': round(self.score, 2),
        }
