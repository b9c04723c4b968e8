"""
Season loader for FPL season exports.

A season export is one JSON document holding the public FPL API payloads
for a manager: bootstrap-static, entry, entry history, transfers, and the
per-gameweek picks and live points. The loader validates it and builds an
immutable SeasonContext.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import pandas as pd

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
from fpl_wrapped.utils.constants import TOTAL_PLAYERS
from fpl_wrapped.utils.date_parser import parse_timestamp, parse_timestamp_safe
from fpl_wrapped.utils.export_validator import ExportValidator


logger = logging.getLogger(__name__)

ExportSource = Union[str, Path, Dict[str, Any]]


class SeasonLoader:
    """
    Loader for season exports.

    Tabular sections (players, history, transfers) go through pandas so
    column checks and missing values are handled in one place. Malformed
    transfer rows are skipped and recorded in `warnings`; anything else
    malformed raises ValueError.

    Example usage:
        loader = SeasonLoader()
        context = loader.load("exports/season.json")
        for warning in loader.warnings:
            print(warning)
    """

    def __init__(self) -> None:
        """Initialize loader with empty warning list."""
        self.warnings: List[str] = []
        self.validator = ExportValidator()

    def load(self, source: ExportSource) -> SeasonContext:
        """
        Load a season export into a SeasonContext.

        Args:
            source: Path to a JSON export, or an already-decoded export dict

        Returns:
            SeasonContext for the export's manager

        Raises:
            ValueError: If the export is too large, not valid JSON, or
                missing a required section or column
            FileNotFoundError: If the file path doesn't exist
        """
        self.warnings = []  # Reset warnings
        data = source if isinstance(source, dict) else self._read_json(source)
        return self._build(data)

    def loads(self, content: Union[str, bytes]) -> SeasonContext:
        """
        Load a season export from raw JSON text (e.g. an upload).

        Raises:
            ValueError: If the content is too large or malformed
        """
        self.warnings = []
        self.validator.validate_size(content)
        return self._build(self._decode(content))

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    def _read_json(self, source: Union[str, Path]) -> Dict[str, Any]:
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Season export not found: {path}")

        size = path.stat().st_size
        if size > self.validator.MAX_FILE_SIZE:
            raise ValueError(f"Season export exceeds 25MB limit ({size / 1024 / 1024:.1f}MB)")

        return self._decode(path.read_text(encoding='utf-8-sig'))

    @staticmethod
    def _decode(content: Union[str, bytes]) -> Dict[str, Any]:
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise ValueError(f"Season export is not valid JSON: {e}")

    # -------------------------------------------------------------------------
    # Building
    # -------------------------------------------------------------------------

    def _build(self, data: Dict[str, Any]) -> SeasonContext:
        self.validator.validate_sections(data)

        bootstrap = data['bootstrap'] or {}
        history = data['history'] or {}

        events = self._parse_events(bootstrap.get('events') or [])
        context = SeasonContext(
            manager=self._parse_manager(data['entry'] or {}),
            players=self._parse_players(bootstrap.get('elements') or []),
            events=events,
            history=self._parse_history(history.get('current') or []),
            transfers=self._parse_transfers(data.get('transfers') or []),
            chips=self._parse_chips(history.get('chips') or []),
            picks_by_gameweek=self._parse_picks(data.get('picks') or {}),
            live_points=self._parse_live(data.get('live') or {}),
            finished_gameweeks=tuple(e.id for e in events.values() if e.finished),
            total_players=int(bootstrap.get('total_players') or TOTAL_PLAYERS),
        )

        logger.info(
            "Loaded season for manager %s: %s",
            context.manager.id,
            self.validator.describe(data),
        )
        if self.warnings:
            logger.info("Skipped %d malformed rows", len(self.warnings))
        return context

    @staticmethod
    def _parse_manager(entry: Mapping[str, Any]) -> ManagerInfo:
        if 'id' not in entry:
            raise ValueError("Season export entry is missing the manager id")
        return ManagerInfo(
            id=int(entry['id']),
            name=str(entry.get('name') or ''),
            first_name=str(entry.get('player_first_name') or ''),
            last_name=str(entry.get('player_last_name') or ''),
            region_name=str(entry.get('player_region_name') or ''),
        )

    def _parse_players(self, elements: List[Dict[str, Any]]) -> Dict[int, Player]:
        df = pd.DataFrame(elements)
        self.validator.validate_columns(df, 'elements')

        players: Dict[int, Player] = {}
        for _, row in df.iterrows():
            player = Player(
                id=int(row['id']),
                web_name=str(row['web_name']),
                element_type=int(row['element_type']),
                team=_int(row.get('team')),
                selected_by_percent=_float(row.get('selected_by_percent')),
                now_cost=_int(row.get('now_cost')),
            )
            players[player.id] = player
        return players

    @staticmethod
    def _parse_events(events: List[Dict[str, Any]]) -> Dict[int, GameweekEvent]:
        parsed: Dict[int, GameweekEvent] = {}
        for event in events:
            chip_plays = {
                play['chip_name']: int(play['num_played'])
                for play in event.get('chip_plays') or []
            }
            gameweek = GameweekEvent(
                id=int(event['id']),
                deadline_time=parse_timestamp_safe(event.get('deadline_time')),
                average_entry_score=int(event.get('average_entry_score') or 0),
                finished=bool(event.get('finished')),
                most_captained=event.get('most_captained'),
                chip_plays=chip_plays,
            )
            parsed[gameweek.id] = gameweek
        return parsed

    def _parse_history(self, rows: List[Dict[str, Any]]) -> Tuple[GameweekHistory, ...]:
        df = pd.DataFrame(rows)
        self.validator.validate_columns(df, 'history')

        return tuple(
            GameweekHistory(
                event=int(row['event']),
                points=int(row['points']),
                total_points=int(row['total_points']),
                rank=_optional_int(row.get('rank')),
                overall_rank=_optional_int(row.get('overall_rank')),
                bank=_int(row.get('bank')),
                value=_int(row.get('value')),
                event_transfers=_int(row.get('event_transfers')),
                event_transfers_cost=_int(row.get('event_transfers_cost')),
                points_on_bench=_int(row.get('points_on_bench')),
            )
            for _, row in df.iterrows()
        )

    def _parse_transfers(self, rows: List[Dict[str, Any]]) -> Tuple[Transfer, ...]:
        """Parse the transfer log, skipping malformed rows."""
        df = pd.DataFrame(rows)
        self.validator.validate_columns(df, 'transfers')

        transfers: List[Transfer] = []
        for idx, row in df.iterrows():
            try:
                transfers.append(Transfer(
                    element_in=int(row['element_in']),
                    element_out=int(row['element_out']),
                    event=int(row['event']),
                    element_in_cost=_int(row.get('element_in_cost')),
                    element_out_cost=_int(row.get('element_out_cost')),
                    time=_timestamp(row.get('time')),
                ))
            except (TypeError, ValueError) as e:
                warning = f"Transfer row {idx}: Skipping due to error - {e}"
                self.warnings.append(warning)
                logger.warning(warning)
        return tuple(transfers)

    @staticmethod
    def _parse_chips(rows: List[Dict[str, Any]]) -> Tuple[ChipPlay, ...]:
        return tuple(
            ChipPlay(
                name=str(row['name']),
                event=int(row['event']),
                time=parse_timestamp_safe(row.get('time')),
            )
            for row in rows
        )

    @staticmethod
    def _parse_picks(payloads: Mapping[str, Any]) -> Dict[int, GameweekPicks]:
        """Picks keyed by gameweek (JSON object keys arrive as strings)."""
        picks_by_gameweek: Dict[int, GameweekPicks] = {}
        for key, payload in payloads.items():
            gameweek = int(key)
            picks_by_gameweek[gameweek] = GameweekPicks(
                event=gameweek,
                picks=tuple(
                    Pick(
                        element=int(p['element']),
                        position=int(p['position']),
                        multiplier=int(p['multiplier']),
                        is_captain=bool(p.get('is_captain')),
                        is_vice_captain=bool(p.get('is_vice_captain')),
                    )
                    for p in payload.get('picks') or []
                ),
                active_chip=payload.get('active_chip'),
            )
        return picks_by_gameweek

    @staticmethod
    def _parse_live(payloads: Mapping[str, Any]) -> Dict[int, Dict[int, int]]:
        """Player id -> total_points per gameweek."""
        return {
            int(key): {
                int(element['id']): int((element.get('stats') or {}).get('total_points') or 0)
                for element in payload.get('elements') or []
            }
            for key, payload in payloads.items()
        }


def _int(value: Any, default: int = 0) -> int:
    """Convert a cell to int, treating missing values as default."""
    if value is None or pd.isna(value):
        return default
    return int(value)


def _optional_int(value: Any) -> Optional[int]:
    if value is None or pd.isna(value):
        return None
    return int(value)


def _float(value: Any, default: float = 0.0) -> float:
    """Convert a cell to float; the API sends ownership as a string."""
    if value is None or pd.isna(value):
        return default
    text = str(value).strip()
    return float(text) if text else default


def _timestamp(value: Any) -> Optional[datetime]:
    if value is None or pd.isna(value):
        return None
    return parse_timestamp(str(value))


def load_season(source: ExportSource) -> SeasonContext:
    """
    Load a season export.

    Convenience function using default loader.

    Args:
        source: Path to a JSON export, or an already-decoded export dict

    Returns:
        SeasonContext
    """
    loader = SeasonLoader()
    return loader.load(source)
