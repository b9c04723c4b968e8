"""
Export validator for FPL season exports.

Validates file size, extension, top-level sections and table columns.
"""

from typing import Any, Dict, Union

import pandas as pd

from .constants import EXPORT_EXTENSION, MAX_EXPORT_SIZE, REQUIRED_COLUMNS, REQUIRED_SECTIONS


class ExportValidator:
    """Validate season export payloads"""

    MAX_FILE_SIZE = MAX_EXPORT_SIZE

    def validate_size(self, content: Union[str, bytes]) -> None:
        """Ensure export is under size limit"""
        size = len(content.encode('utf-8')) if isinstance(content, str) else len(content)
        if size > self.MAX_FILE_SIZE:
            raise ValueError(f"Season export exceeds 25MB limit ({size / 1024 / 1024:.1f}MB)")

    def validate_extension(self, filename: str) -> bool:
        """Only accept .json files"""
        return filename.lower().endswith(EXPORT_EXTENSION)

    def validate_sections(self, data: Any) -> None:
        """Ensure the top-level sections are present"""
        if not isinstance(data, dict):
            raise ValueError(f"Season export must be a JSON object, got: {type(data).__name__}")

        missing = [s for s in REQUIRED_SECTIONS if s not in data]
        if missing:
            raise ValueError(f"Season export missing required sections: {missing}")

    def validate_columns(self, df: pd.DataFrame, table: str) -> None:
        """
        Ensure a tabular section carries its required columns.

        Empty tables pass; there is nothing to convert.

        Raises:
            ValueError: If required columns are missing
        """
        if df.empty:
            return
        missing = set(REQUIRED_COLUMNS[table]) - set(df.columns)
        if missing:
            raise ValueError(f"Missing required columns for {table}: {sorted(missing)}")

    def describe(self, data: Dict[str, Any]) -> Dict[str, int]:
        """Count rows per section for logging"""
        history = data.get('history') or {}
        return {
            'elements': len((data.get('bootstrap') or {}).get('elements') or []),
            'history': len(history.get('current') or []),
            'chips': len(history.get('chips') or []),
            'transfers': len(data.get('transfers') or []),
            'picks': len(data.get('picks') or {}),
            'live': len(data.get('live') or {}),
        }
