"""
dartqc.report summarizes a locus metric and tabulates how many loci a range of
thresholds would retain.
"""
from ._report import by_metric, rdepth, repeatability
from ._sweep import SweepRow, MetricSummary, summarize, threshold_sweep

__all__ = [
    "by_metric",
    "rdepth",
    "repeatability",
    "SweepRow",
    "MetricSummary",
    "summarize",
    "threshold_sweep",
]
