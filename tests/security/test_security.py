"""
Security tests for FPL Wrapped.

Tests cover:
- File size validation
- Extension validation
- Export shape validation
- Untrusted text in player and manager names
"""

import json

import pandas as pd
import pytest

from fpl_wrapped.parsers.season_loader import SeasonLoader
from fpl_wrapped.scoring.summary_builder import build_season_summary
from fpl_wrapped.utils.export_validator import ExportValidator


class TestFileSizeLimit:
    """Test file size validation."""

    def test_reject_exports_over_25mb(self):
        """Reject exports over 25MB."""
        validator = ExportValidator()

        large_export = "x" * (26 * 1024 * 1024)  # 26MB

        with pytest.raises(ValueError, match="exceeds 25MB"):
            validator.validate_size(large_export)

    def test_accept_exports_under_25mb(self):
        """Accept exports under 25MB."""
        validator = ExportValidator()

        # Should not raise
        validator.validate_size('{"bootstrap": {}}')

    def test_bytes_measured_directly(self):
        """Raw upload bytes are measured without decoding."""
        validator = ExportValidator()
        validator.MAX_FILE_SIZE = 10

        with pytest.raises(ValueError, match="exceeds 25MB"):
            validator.validate_size(b"x" * 11)

    def test_loader_rejects_oversized_upload_before_decoding(self):
        """Oversized uploads fail on size, not on JSON decoding."""
        loader = SeasonLoader()
        loader.validator.MAX_FILE_SIZE = 10

        with pytest.raises(ValueError, match="exceeds 25MB"):
            loader.loads("not json at all")

    def test_loader_rejects_oversized_file(self, tmp_path):
        """Oversized files are rejected from their size on disk."""
        path = tmp_path / "season.json"
        path.write_text("{}" * 20, encoding="utf-8")

        loader = SeasonLoader()
        loader.validator.MAX_FILE_SIZE = 10

        with pytest.raises(ValueError, match="exceeds 25MB"):
            loader.load(path)


class TestExtensionValidation:
    """Test file extension validation."""

    def test_accept_json_extension(self):
        """Accept .json files."""
        validator = ExportValidator()

        assert validator.validate_extension("season.json") is True
        assert validator.validate_extension("SEASON.JSON") is True

    def test_reject_other_extensions(self):
        """Reject non-JSON files."""
        validator = ExportValidator()

        assert validator.validate_extension("season.csv") is False
        assert validator.validate_extension("season.exe") is False
        assert validator.validate_extension("season.json.exe") is False


class TestExportShape:
    """Test export structure validation."""

    def test_reject_non_object(self):
        """Top-level JSON must be an object."""
        validator = ExportValidator()

        with pytest.raises(ValueError, match="must be a JSON object, got: list"):
            validator.validate_sections([1, 2, 3])

    def test_reject_missing_sections(self):
        """Every required section must be present."""
        validator = ExportValidator()

        with pytest.raises(ValueError, match="missing required sections"):
            validator.validate_sections({"bootstrap": {}})

    def test_reject_missing_columns(self):
        """Tables must carry their required columns."""
        validator = ExportValidator()
        df = pd.DataFrame([{"element_in": 16}])

        with pytest.raises(ValueError, match="Missing required columns for transfers"):
            validator.validate_columns(df, "transfers")

    def test_empty_table_passes(self):
        """Empty tables have nothing to convert."""
        validator = ExportValidator()

        # Should not raise
        validator.validate_columns(pd.DataFrame([]), "transfers")

    def test_reject_invalid_json(self):
        """Corrupt uploads raise ValueError, not a decoder error."""
        with pytest.raises(ValueError, match="not valid JSON"):
            SeasonLoader().loads(b'{"bootstrap": [')

    def test_reject_json_array_upload(self):
        """A JSON array upload is rejected."""
        with pytest.raises(ValueError, match="must be a JSON object"):
            SeasonLoader().loads(b"[]")


class TestUntrustedText:
    """Test names from the export are carried as plain data."""

    def test_script_in_names_passes_through(self, sample_export_path):
        """Markup in names is stored verbatim, never interpreted."""
        export = json.loads(sample_export_path.read_text(encoding="utf-8"))
        export["entry"]["name"] = "<script>alert(1)</script>"
        export["bootstrap"]["elements"][9]["web_name"] = "'; DROP TABLE players; --"

        summary = build_season_summary(SeasonLoader().load(export))

        assert summary.team_name == "<script>alert(1)</script>"
        assert summary.mvp.name == "'; DROP TABLE players; --"
