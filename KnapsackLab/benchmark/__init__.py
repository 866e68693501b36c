"""
Benchmark harness: CLI argument builders, timed solver runs and reports.
"""

from .runner import BenchmarkRecord, format_report, plot_convergence, run_benchmark

__all__ = ['BenchmarkRecord', 'run_benchmark', 'format_report', 'plot_convergence']
