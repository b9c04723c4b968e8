"""
PersonaMetrics model - Normalized behavioral features for persona scoring.

Eleven features, each on a 0.0-1.0 scale, reduced from season aggregates and
the per-decision analyses. Persona weights are expressed against these names.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict

from fpl_wrapped.utils.constants import METRIC_NAMES, NEUTRAL_METRIC


@dataclass(frozen=True)
class PersonaMetrics:
    """
    Normalized season metrics (all 0.0 to 1.0).

    Decision Volume:
        activity: Transfer volume
        chaos: Transfer-cost penalties taken

    Decision Quality:
        overthink: Points left on the bench
        efficiency: Net transfer impact after hits
        leadership: Captaincy success rate

    Style:
        template: Share of squad slots filled by highly-owned players
        thrift: How far below the value ceiling the squad stayed
        patience: Long-term holding behavior
        timing: Deliberate (early/midweek) vs reactive transfers

    Chips:
        chip_mastery: Chip effectiveness
        chip_risk: Chip risk appetite
    """

    activity: float
    chaos: float
    overthink: float
    template: float
    efficiency: float
    leadership: float
    thrift: float
    patience: float = NEUTRAL_METRIC
    timing: float = NEUTRAL_METRIC
    chip_mastery: float = NEUTRAL_METRIC
    chip_risk: float = NEUTRAL_METRIC

    def __post_init__(self) -> None:
        """Validate every metric is in the 0-1 range."""
        for name in METRIC_NAMES:
            value = getattr(self, name)
            if value < 0.0 or value > 1.0:
                raise ValueError(f"{name} must be between 0 and 1, got: {value}")

    def get(self, name: str) -> float:
        """
        Read a metric by name.

        Raises:
            KeyError: If the name is not a persona metric
        """
        if name not in METRIC_NAMES:
            raise KeyError(f"Unknown metric: {name}")
        return getattr(self, name)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize metrics to a dictionary rounded for display."""
        return {name: round(value, 4) for name, value in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PersonaMetrics':
        """
        Create PersonaMetrics from a dictionary.

        Missing optional metrics fall back to the neutral 0.5.
        """
        return cls(**{
            name: float(data.get(name, NEUTRAL_METRIC))
            for name in METRIC_NAMES
        })

    @classmethod
    def empty(cls) -> 'PersonaMetrics':
        """
        Metrics for a season with no finished gameweeks.

        Returns:
            PersonaMetrics with zero decision metrics and neutral style metrics
        """
        return cls(
            activity=0.0,
            chaos=0.0,
            overthink=0.0,
            template=0.0,
            efficiency=0.0,
            leadership=0.0,
            thrift=0.0,
        )
