"""Per-decision analyzers: transfers, captaincy, bench, chips and timing."""

from .transfer_analyzer import TransferAnalyzer, analyze_transfers, transfer_verdict
from .captaincy_analyzer import CaptaincyAnalyzer, analyze_captaincy
from .bench_analyzer import BenchAnalyzer, analyze_bench, average_bench_points
from .chip_analyzer import ChipAnalyzer, analyze_chips
from .transfer_timing import TransferTimingAnalyzer, analyze_transfer_timing, meaningful_transfers

__all__ = [
    'TransferAnalyzer',
    'analyze_transfers',
    'transfer_verdict',
    'CaptaincyAnalyzer',
    'analyze_captaincy',
    'BenchAnalyzer',
    'analyze_bench',
    'average_bench_points',
    'ChipAnalyzer',
    'analyze_chips',
    'TransferTimingAnalyzer',
    'analyze_transfer_timing',
    'meaningful_transfers',
]
