"""
SeasonContext model - Everything known about one manager's season.

The context is built once per invocation (usually by SeasonLoader) and is
treated as immutable by every analyzer. Lookups by player id and by
(player, gameweek) are served from dictionaries built at construction time
so analyzers never rescan the raw API payloads.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple

from fpl_wrapped.utils.constants import (
    DEFAULT_SQUAD_VALUE,
    POSITION_NAMES,
    STARTING_SLOTS,
    TOTAL_PLAYERS,
    UNRANKED,
)


VALID_MULTIPLIERS = frozenset({0, 1, 2, 3})
VALID_CAPTAIN_MULTIPLIERS = frozenset({1, 2, 3})


@dataclass(frozen=True)
class Player:
    """
    A player from the FPL catalog (bootstrap-static elements).

    Attributes:
        id: FPL element id
        web_name: Short display name ("M.Salah")
        element_type: 1=GKP, 2=DEF, 3=MID, 4=FWD
        team: FPL team id
        selected_by_percent: Global ownership percentage
        now_cost: Current price in tenths of a million
    """

    id: int
    web_name: str
    element_type: int
    team: int = 0
    selected_by_percent: float = 0.0
    now_cost: int = 0

    @property
    def position(self) -> str:
        """Position code (GKP/DEF/MID/FWD)."""
        return POSITION_NAMES.get(self.element_type, 'UNK')


@dataclass(frozen=True)
class Pick:
    """One squad slot in a gameweek."""

    element: int
    position: int
    multiplier: int
    is_captain: bool = False
    is_vice_captain: bool = False

    def __post_init__(self) -> None:
        """Validate slot and multiplier."""
        if self.position < 1:
            raise ValueError(f"pick position must be 1 or higher, got: {self.position}")
        if self.multiplier not in VALID_MULTIPLIERS:
            raise ValueError(
                f"pick multiplier must be one of {sorted(VALID_MULTIPLIERS)}, got: {self.multiplier}"
            )

    @property
    def is_starter(self) -> bool:
        """Check if the pick is in the starting eleven."""
        return self.position <= STARTING_SLOTS


@dataclass(frozen=True)
class GameweekPicks:
    """
    A manager's squad for one gameweek.

    Picks are stored sorted by squad position so iteration order always
    follows the team sheet (1-11 starters, 12-15 bench).
    """

    event: int
    picks: Tuple[Pick, ...]
    active_chip: Optional[str] = None

    def __post_init__(self) -> None:
        """Sort picks and check there is at most one captain."""
        ordered = tuple(sorted(self.picks, key=lambda p: p.position))
        object.__setattr__(self, 'picks', ordered)

        positions = [p.position for p in ordered]
        if len(positions) != len(set(positions)):
            raise ValueError(f"GW{self.event}: duplicate pick positions {positions}")

        captains = [p for p in ordered if p.is_captain]
        if len(captains) > 1:
            raise ValueError(
                f"GW{self.event}: expected one captain, found {len(captains)}"
            )
        if captains and captains[0].multiplier not in VALID_CAPTAIN_MULTIPLIERS:
            raise ValueError(
                f"GW{self.event}: captain multiplier must be 1, 2 or 3, "
                f"got: {captains[0].multiplier}"
            )

    @property
    def starters(self) -> Tuple[Pick, ...]:
        """Starting eleven in position order."""
        return tuple(p for p in self.picks if p.is_starter)

    @property
    def bench(self) -> Tuple[Pick, ...]:
        """Bench picks in position order."""
        return tuple(p for p in self.picks if not p.is_starter)

    @property
    def captain(self) -> Optional[Pick]:
        """The captain's pick, if one is flagged."""
        for pick in self.picks:
            if pick.is_captain:
                return pick
        return None

    @property
    def element_ids(self) -> FrozenSet[int]:
        """Ids of every player in the squad."""
        return frozenset(p.element for p in self.picks)

    def contains(self, player_id: int) -> bool:
        """Check whether a player is anywhere in the squad."""
        return any(p.element == player_id for p in self.picks)


@dataclass(frozen=True)
class GameweekHistory:
    """One row of the manager's season history (entry/{id}/history current)."""

    event: int
    points: int
    total_points: int = 0
    rank: Optional[int] = None
    overall_rank: Optional[int] = None
    bank: int = 0
    value: int = 0
    event_transfers: int = 0
    event_transfers_cost: int = 0
    points_on_bench: int = 0

    def __post_init__(self) -> None:
        """Validate history row."""
        if self.event < 1:
            raise ValueError(f"history event must be 1 or higher, got: {self.event}")
        if self.event_transfers_cost < 0:
            raise ValueError(
                f"GW{self.event}: event_transfers_cost cannot be negative: "
                f"{self.event_transfers_cost}"
            )


@dataclass(frozen=True)
class Transfer:
    """A single logged transfer."""

    element_in: int
    element_out: int
    event: int
    element_in_cost: int = 0
    element_out_cost: int = 0
    time: Optional[datetime] = None

    def __post_init__(self) -> None:
        """Validate transfer."""
        if self.event < 1:
            raise ValueError(f"transfer event must be 1 or higher, got: {self.event}")


@dataclass(frozen=True)
class ChipPlay:
    """A chip activation from the manager's history."""

    name: str
    event: int
    time: Optional[datetime] = None


@dataclass(frozen=True)
class GameweekEvent:
    """
    Global gameweek data from bootstrap-static events.

    Attributes:
        id: Gameweek number
        deadline_time: Transfer deadline (aware UTC)
        average_entry_score: Global average score
        finished: Whether all fixtures are complete
        most_captained: Player id with the most armbands that week
        chip_plays: chip name -> number of managers who played it
    """

    id: int
    deadline_time: Optional[datetime] = None
    average_entry_score: int = 0
    finished: bool = False
    most_captained: Optional[int] = None
    chip_plays: Mapping[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class ManagerInfo:
    """The manager behind the team."""

    id: int
    name: str = ''
    first_name: str = ''
    last_name: str = ''
    region_name: str = ''

    @property
    def full_name(self) -> str:
        """First and last name joined."""
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class SeasonContext:
    """
    Immutable per-manager season data consumed by every analyzer.

    Example usage:
        context = SeasonLoader().load("season.json")
        player = context.player(328)
        points = context.points(328, gameweek=5)
    """

    manager: ManagerInfo
    players: Mapping[int, Player]
    events: Mapping[int, GameweekEvent]
    history: Tuple[GameweekHistory, ...] = ()
    transfers: Tuple[Transfer, ...] = ()
    chips: Tuple[ChipPlay, ...] = ()
    picks_by_gameweek: Mapping[int, GameweekPicks] = field(default_factory=dict)
    live_points: Mapping[int, Mapping[int, int]] = field(default_factory=dict)
    finished_gameweeks: Tuple[int, ...] = ()
    total_players: int = TOTAL_PLAYERS

    _history_by_event: Dict[int, GameweekHistory] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )
    _chip_by_event: Dict[int, str] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        """Normalize ordering and build lookup indexes."""
        object.__setattr__(self, 'finished_gameweeks', tuple(sorted(set(self.finished_gameweeks))))
        object.__setattr__(self, 'history', tuple(sorted(self.history, key=lambda h: h.event)))
        object.__setattr__(self, 'transfers', tuple(self.transfers))
        object.__setattr__(self, 'chips', tuple(sorted(self.chips, key=lambda c: c.event)))

        if self.total_players <= 0:
            raise ValueError(f"total_players must be positive, got: {self.total_players}")

        for gameweek, picks in self.picks_by_gameweek.items():
            if picks.event != gameweek:
                raise ValueError(
                    f"picks keyed under GW{gameweek} belong to GW{picks.event}"
                )

        self._history_by_event.update({h.event: h for h in self.history})
        for chip in self.chips:
            self._chip_by_event.setdefault(chip.event, chip.name)

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def player(self, player_id: int) -> Optional[Player]:
        """Player by id, None when absent from the catalog."""
        return self.players.get(player_id)

    def points(self, player_id: int, gameweek: int) -> int:
        """Raw points a player scored in a gameweek (0 when unknown)."""
        return self.live_points.get(gameweek, {}).get(player_id, 0)

    def picks(self, gameweek: int) -> Optional[GameweekPicks]:
        """Squad for a gameweek, None when not recorded."""
        return self.picks_by_gameweek.get(gameweek)

    def history_for(self, gameweek: int) -> Optional[GameweekHistory]:
        """History row for a gameweek."""
        return self._history_by_event.get(gameweek)

    def event(self, gameweek: int) -> Optional[GameweekEvent]:
        """Global event data for a gameweek."""
        return self.events.get(gameweek)

    def chip_in(self, gameweek: int) -> Optional[str]:
        """Name of the chip played in a gameweek, if any."""
        return self._chip_by_event.get(gameweek)

    def chip(self, name: str) -> Optional[ChipPlay]:
        """First activation of a chip by name."""
        for chip in self.chips:
            if chip.name == name:
                return chip
        return None

    def is_finished(self, gameweek: int) -> bool:
        """Check whether a gameweek is in the finished list."""
        return gameweek in self.finished_gameweeks

    # -------------------------------------------------------------------------
    # Season aggregates
    # -------------------------------------------------------------------------

    @property
    def total_points(self) -> int:
        """Season total from the last history row."""
        return self.history[-1].total_points if self.history else 0

    @property
    def overall_rank(self) -> int:
        """Latest overall rank, UNRANKED when unknown."""
        if self.history and self.history[-1].overall_rank:
            return self.history[-1].overall_rank
        return UNRANKED

    @property
    def final_squad_value(self) -> int:
        """Latest squad value in tenths, 1000 (100.0m) when unknown."""
        if self.history and self.history[-1].value:
            return self.history[-1].value
        return DEFAULT_SQUAD_VALUE

    @property
    def total_hit_cost(self) -> int:
        """Sum of transfer-cost penalties across the season."""
        return sum(h.event_transfers_cost for h in self.history)

    @classmethod
    def empty(cls, manager: Optional[ManagerInfo] = None) -> 'SeasonContext':
        """
        Create a context with no gameweeks for edge cases (pre-season).

        Returns:
            SeasonContext with no players, events or history
        """
        return cls(
            manager=manager or ManagerInfo(id=0),
            players={},
            events={},
        )

    def to_dict(self) -> Dict[str, Any]:
        """Summary of the context's size for logging and API output."""
        return {
            'manager_id': self.manager.id,
            'players': len(self.players),
            'events': len(self.events),
            'history_rows': len(self.history),
            'transfers': len(self.transfers),
            'chips': [c.name for c in self.chips],
            'gameweeks_with_picks': len(self.picks_by_gameweek),
            'finished_gameweeks': list(self.finished_gameweeks),
        }
