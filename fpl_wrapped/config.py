"""
Pipeline configuration.

The persona selector's competitive band and the rank denominator are tuned
values rather than derived ones, so they can be overridden per deployment
through FPL_WRAPPED_* environment variables.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from fpl_wrapped.utils.constants import (
    COMPETITIVE_THRESHOLD,
    DEFAULT_PERSONA,
    TEMPLATE_OWNERSHIP_THRESHOLD,
    TOTAL_PLAYERS,
)


@dataclass(frozen=True)
class PipelineConfig:
    """
    Tunable settings for the analysis pipeline.

    Attributes:
        competitive_threshold: Share of the top persona score a rival needs
            to enter the tie-break (0-1]
        total_players: Entrant count used for rank percentiles when the
            season export does not carry one
        template_ownership_threshold: selected_by_percent for a template player
        default_persona: Catalog key returned when no gameweek has finished

    Example usage:
        config = PipelineConfig.from_env()
        summary = build_season_summary(context, config=config)
    """

    competitive_threshold: float = COMPETITIVE_THRESHOLD
    total_players: int = TOTAL_PLAYERS
    template_ownership_threshold: float = TEMPLATE_OWNERSHIP_THRESHOLD
    default_persona: str = DEFAULT_PERSONA

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if not 0 < self.competitive_threshold <= 1:
            raise ValueError(
                f"competitive_threshold must be in (0, 1], got: {self.competitive_threshold}"
            )
        if self.total_players <= 0:
            raise ValueError(f"total_players must be positive, got: {self.total_players}")
        if self.template_ownership_threshold < 0:
            raise ValueError(
                "template_ownership_threshold cannot be negative: "
                f"{self.template_ownership_threshold}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'PipelineConfig':
        """
        Build a config from environment variables, falling back to defaults.

        Reads FPL_WRAPPED_COMPETITIVE_THRESHOLD, FPL_WRAPPED_TOTAL_PLAYERS,
        FPL_WRAPPED_TEMPLATE_THRESHOLD and FPL_WRAPPED_DEFAULT_PERSONA.

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            PipelineConfig instance

        Raises:
            ValueError: If a variable is set to an invalid value
        """
        env = os.environ if environ is None else environ
        return cls(
            competitive_threshold=float(
                env.get('FPL_WRAPPED_COMPETITIVE_THRESHOLD', COMPETITIVE_THRESHOLD)
            ),
            total_players=int(env.get('FPL_WRAPPED_TOTAL_PLAYERS', TOTAL_PLAYERS)),
            template_ownership_threshold=float(
                env.get('FPL_WRAPPED_TEMPLATE_THRESHOLD', TEMPLATE_OWNERSHIP_THRESHOLD)
            ),
            default_persona=env.get('FPL_WRAPPED_DEFAULT_PERSONA', DEFAULT_PERSONA).upper(),
        )
