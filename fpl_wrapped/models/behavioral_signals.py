"""
BehavioralSignals model - Boolean behavior patterns detected over a season.
"""

from dataclasses import dataclass, fields
from typing import Dict, List


@dataclass(frozen=True)
class BehavioralSignals:
    """
    Independent yes/no patterns, each with a fixed triggering rule.

    Transfers: constant_tinkerer, hit_addict, disciplined, long_term_backer
    Bench: rotation_pain, bench_master
    Chips: early_aggression, chip_hoarder, chip_master, chip_gambler,
        strategic_chipper, contrarian, template_chipper
    Performance: boom_bust, consistent
    Timing: panic_buyer, deadline_day_scrambler, early_planner, knee_jerker,
        late_night_reactor
    Squad: ultra_contrarian, value_building_genius, burning_value,
        bank_hoarder, fully_invested
    """

    constant_tinkerer: bool = False
    hit_addict: bool = False
    disciplined: bool = False
    rotation_pain: bool = False
    bench_master: bool = False
    long_term_backer: bool = False
    early_aggression: bool = False
    chip_hoarder: bool = False
    boom_bust: bool = False
    consistent: bool = False

    panic_buyer: bool = False
    deadline_day_scrambler: bool = False
    early_planner: bool = False
    knee_jerker: bool = False
    late_night_reactor: bool = False

    chip_master: bool = False
    chip_gambler: bool = False
    strategic_chipper: bool = False
    contrarian: bool = False
    template_chipper: bool = False

    ultra_contrarian: bool = False
    value_building_genius: bool = False
    burning_value: bool = False
    bank_hoarder: bool = False
    fully_invested: bool = False

    @property
    def active(self) -> List[str]:
        """Names of signals that fired, in declaration order."""
        return [f.name for f in fields(self) if getattr(self, f.name)]

    def to_dict(self) -> Dict[str, bool]:
        """Serialize all signals."""
        return {f.name: getattr(self, f.name) for f in fields(self)}
