import numpy as np
from typing import List, NamedTuple
from .._config import N_SWEEP_STEP


class SweepRow(NamedTuple):
    """Effect of filtering at one candidate threshold."""

    threshold: float
    retained: int
    retained_pct: float
    filtered: int
    filtered_pct: float


class MetricSummary(NamedTuple):
    n: int
    min: float
    max: float
    mean: float


def summarize(values) -> MetricSummary:
    """Number of non-missing values, minimum, maximum and mean of a metric."""
    values = np.asarray(values, dtype=float)
    values = values[~np.isnan(values)]
    if len(values) == 0:
        raise ValueError("No non-missing values to summarize")
    return MetricSummary(
        n=len(values),
        min=float(values.min()),
        max=float(values.max()),
        mean=float(values.mean()),
    )


def threshold_sweep(
    values, low: float, high: float, n_step: int = N_SWEEP_STEP
) -> List[SweepRow]:
    """Tabulate retained and filtered loci against candidate thresholds

    Thresholds are `n_step` points evenly spaced between `low` and `high`
    (both included). When `low` and `high` coincide a single row is returned,
    so thresholds are always strictly decreasing. A locus is retained at threshold t if its value is >= t;
    missing values are never retained but count towards the total.

    Parameters
    ----------
    values : np.ndarray
        per-locus metric
    low : float
        one end of the threshold range
    high : float
        other end of the threshold range
    n_step : int
        number of thresholds, by default 21

    Returns
    -------
    List[SweepRow]
        rows ordered by strictly decreasing threshold
    """
    values = np.asarray(values, dtype=float)
    n_total = len(values)
    assert n_total > 0, "values must not be empty"
    assert n_step >= 2, "n_step must be at least 2"

    low, high = sorted([low, high])
    rows = []
    for t in np.unique(np.linspace(low, high, n_step))[::-1]:
        retained = int(np.sum(values >= t))
        retained_pct = round(retained * 100 / n_total, 1)
        rows.append(
            SweepRow(
                threshold=float(t),
                retained=retained,
                retained_pct=retained_pct,
                filtered=n_total - retained,
                filtered_pct=round(100 - retained_pct, 1),
            )
        )
    return rows
