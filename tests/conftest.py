"""
Shared builders for FPL Wrapped tests.

The default squad is players 1-15: 1-11 start (GKP, 4 DEF, 4 MID, 2 FWD),
12-15 sit on the bench. Haaland (10) wears the armband unless a test says
otherwise.
"""

from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import pytest

from fpl_wrapped.models.analysis_results import CaptainPattern
from fpl_wrapped.models.behavioral_signals import BehavioralSignals
from fpl_wrapped.models.persona_metrics import PersonaMetrics
from fpl_wrapped.models.season_context import (
    ChipPlay,
    GameweekEvent,
    GameweekHistory,
    GameweekPicks,
    ManagerInfo,
    Pick,
    Player,
    SeasonContext,
    Transfer,
)
from fpl_wrapped.scoring.persona_catalog import ScoringInputs
from fpl_wrapped.utils.constants import TOTAL_PLAYERS


# =============================================================================
# Catalog
# =============================================================================

PLAYERS: Dict[int, Player] = {
    p.id: p for p in [
        Player(id=1, web_name="Raya", element_type=1, selected_by_percent=30.0),
        Player(id=2, web_name="Saliba", element_type=2, selected_by_percent=35.0),
        Player(id=3, web_name="Gabriel", element_type=2, selected_by_percent=25.0),
        Player(id=4, web_name="Porro", element_type=2, selected_by_percent=12.0),
        Player(id=5, web_name="Gvardiol", element_type=2, selected_by_percent=10.0),
        Player(id=6, web_name="M.Salah", element_type=3, selected_by_percent=60.0),
        Player(id=7, web_name="Palmer", element_type=3, selected_by_percent=45.0),
        Player(id=8, web_name="Saka", element_type=3, selected_by_percent=30.0),
        Player(id=9, web_name="Mbeumo", element_type=3, selected_by_percent=8.0),
        Player(id=10, web_name="Haaland", element_type=4, selected_by_percent=55.0),
        Player(id=11, web_name="Watkins", element_type=4, selected_by_percent=14.0),
        Player(id=12, web_name="Flekken", element_type=1, selected_by_percent=5.0),
        Player(id=13, web_name="Robinson", element_type=2, selected_by_percent=6.0),
        Player(id=14, web_name="Kluivert", element_type=3, selected_by_percent=3.0),
        Player(id=15, web_name="Wissa", element_type=4, selected_by_percent=9.0),
        Player(id=16, web_name="Isak", element_type=4, selected_by_percent=22.0),
        Player(id=17, web_name="Semenyo", element_type=3, selected_by_percent=4.0),
        Player(id=18, web_name="Son", element_type=3, selected_by_percent=7.0),
    ]
}

DEFAULT_SQUAD: List[int] = list(range(1, 16))


def build_picks(
    event: int,
    elements: Optional[Sequence[int]] = None,
    captain: int = 10,
    captain_multiplier: int = 2,
    active_chip: Optional[str] = None,
) -> GameweekPicks:
    """Squad for a gameweek; the first eleven start, the rest are benched."""
    elements = list(elements or DEFAULT_SQUAD)
    bench_multiplier = 1 if active_chip == 'bboost' else 0
    picks = []
    for slot, element in enumerate(elements, start=1):
        is_captain = element == captain
        if is_captain:
            multiplier = captain_multiplier
        else:
            multiplier = 1 if slot <= 11 else bench_multiplier
        picks.append(Pick(
            element=element,
            position=slot,
            multiplier=multiplier,
            is_captain=is_captain,
        ))
    return GameweekPicks(event=event, picks=tuple(picks), active_chip=active_chip)


def build_context(
    picks: Optional[Mapping[int, GameweekPicks]] = None,
    live: Optional[Mapping[int, Mapping[int, int]]] = None,
    history: Iterable[GameweekHistory] = (),
    transfers: Iterable[Transfer] = (),
    chips: Iterable[ChipPlay] = (),
    events: Optional[Mapping[int, GameweekEvent]] = None,
    finished: Optional[Iterable[int]] = None,
    players: Optional[Mapping[int, Player]] = None,
    manager: Optional[ManagerInfo] = None,
    total_players: int = TOTAL_PLAYERS,
) -> SeasonContext:
    """
    Season context with sensible defaults.

    Finished gameweeks default to every gameweek with picks; events default
    to bare finished/unfinished records for the same gameweeks.
    """
    picks = dict(picks or {})
    finished = sorted(picks) if finished is None else sorted(finished)
    if events is None:
        events = {
            gw: GameweekEvent(id=gw, finished=gw in finished)
            for gw in set(finished) | set(picks)
        }
    return SeasonContext(
        manager=manager or ManagerInfo(
            id=1234, name="Wrapped XI", first_name="Sam", last_name="Reed",
            region_name="England",
        ),
        players=dict(PLAYERS if players is None else players),
        events=dict(events),
        history=tuple(history),
        transfers=tuple(transfers),
        chips=tuple(chips),
        picks_by_gameweek=picks,
        live_points={gw: dict(points) for gw, points in (live or {}).items()},
        finished_gameweeks=tuple(finished),
        total_players=total_players,
    )


def flat_points(points: int = 2, **overrides: int) -> Dict[int, int]:
    """Every catalog player scores `points`; keyword p<ID>=N overrides one player."""
    scores = {player_id: points for player_id in PLAYERS}
    for key, value in overrides.items():
        scores[int(key.lstrip('p'))] = value
    return scores


def build_metrics(**overrides: float) -> PersonaMetrics:
    """Middle-of-the-road metrics with selected overrides."""
    values = dict(
        activity=0.4, chaos=0.2, overthink=0.4, template=0.5, efficiency=0.5,
        leadership=0.5, thrift=0.3, patience=0.5, timing=0.5,
        chip_mastery=0.5, chip_risk=0.5,
    )
    values.update(overrides)
    return PersonaMetrics(**values)


def build_inputs(
    metrics: Optional[PersonaMetrics] = None,
    signals: Optional[BehavioralSignals] = None,
    captain_pattern: Optional[CaptainPattern] = None,
    rank: int = 2_000_000,
    total_players: int = TOTAL_PLAYERS,
) -> ScoringInputs:
    """Scoring inputs for persona rule tests."""
    return ScoringInputs(
        metrics=metrics or build_metrics(),
        signals=signals or BehavioralSignals(),
        captain_pattern=captain_pattern or CaptainPattern(),
        rank=rank,
        total_players=total_players,
    )


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def players() -> Dict[int, Player]:
    """The test player catalog."""
    return dict(PLAYERS)


@pytest.fixture
def make_picks():
    """Factory for GameweekPicks."""
    return build_picks


@pytest.fixture
def make_context():
    """Factory for SeasonContext."""
    return build_context


@pytest.fixture
def make_metrics():
    """Factory for PersonaMetrics."""
    return build_metrics


@pytest.fixture
def make_inputs():
    """Factory for ScoringInputs."""
    return build_inputs


@pytest.fixture
def points():
    """Factory for flat live-point maps."""
    return flat_points


@pytest.fixture
def fixtures_path() -> Path:
    """Directory holding test fixture files."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_export_path(fixtures_path) -> Path:
    """Path to the sample season export."""
    return fixtures_path / "sample_season.json"
