"""FPL Wrapped - season decision analysis and manager persona detection."""

__version__ = '1.0.0'
