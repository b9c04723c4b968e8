"""Shared constants, validation, date, timezone and number helpers."""
