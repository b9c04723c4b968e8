"""Loaders for FPL season exports."""

from .season_loader import SeasonLoader, load_season

__all__ = [
    'SeasonLoader',
    'load_season',
]
