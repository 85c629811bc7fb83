"""
Summaries of DArT locus metrics to help choose a filtering threshold.

Reports are read-only: the dataset is not modified and no history is recorded.
Plots are drawn only on request and a failure to draw never affects the
returned table.
"""
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from typing import Callable, List, Optional, Tuple, Union
from .._config import Verbosity, check_verbosity, log_at, log_start, log_end
from .._errors import InvalidDatasetError
from .._logging import logger
from ..dataset import Dataset, Kind, check_dataset, get_metric
from .. import plot as _plot
from ._sweep import SweepRow, MetricSummary, summarize, threshold_sweep


def _population(dset: Dataset, verbose: Verbosity) -> pd.Series:
    pop = dset.pop
    if pop is None:
        log_at(
            verbose,
            Verbosity.PROGRESS,
            "  Population assignments not detected, individuals assigned "
            "to a single population labelled 'pop1'",
        )
        pop = pd.Series("pop1", index=dset.indiv.index, name="pop")
    return pop


def _overview(
    dset: Dataset, metric: str, label: str, verbose: Verbosity
) -> Tuple[Kind, np.ndarray, MetricSummary]:
    kind = check_dataset(dset)
    log_at(verbose, Verbosity.PROGRESS, f"  Processing {kind.description}")
    values = get_metric(dset, metric)
    if dset.n_loc == 0:
        raise InvalidDatasetError("Dataset has no loci to report on")
    try:
        summary = summarize(values)
    except ValueError:
        raise InvalidDatasetError(f"All values of '{metric}' are missing")

    pop = _population(dset, verbose)
    pop_counts = pop.value_counts(dropna=True).sort_index()
    log_at(
        verbose,
        Verbosity.PROGRESS,
        "\n".join(
            [
                f"  No. of loci = {dset.n_loc}",
                f"  No. of individuals = {dset.n_indiv}",
                f"  No. of populations = {len(pop_counts)}",
                f"  Minimum {label}: {round(summary.min, 2)}",
                f"  Maximum {label}: {round(summary.max, 2)}",
                f"  Mean {label}: {round(summary.mean, 3)}",
            ]
        ),
    )
    log_at(
        verbose,
        Verbosity.FULL,
        "  Individuals per population:\n"
        + "\n".join(f"    {p}: {n}" for p, n in pop_counts.items()),
    )
    if summary.n < dset.n_loc:
        log_at(
            verbose,
            Verbosity.PROGRESS,
            f"  {dset.n_loc - summary.n} loci with missing {label}",
        )
    return kind, values, summary


def _log_table(rows: List[SweepRow], verbose: Verbosity) -> None:
    log_at(
        verbose,
        Verbosity.SUMMARY,
        "Loci retained and filtered at each threshold:\n"
        + pd.DataFrame(rows).to_string(index=False),
    )


def _render(draw: Callable[[], "plt.Figure"], out: Optional[str], verbose) -> None:
    """Draw a figure, save it to `out` if given; failures are logged, not raised."""
    try:
        fig = draw()
    except Exception as e:
        logger.warning(f"Plot could not be rendered: {e!r}")
        return
    if out is None:
        return
    try:
        fig.savefig(out, bbox_inches="tight", dpi=150)
        log_at(verbose, Verbosity.PROGRESS, f"  Plot saved to {out}")
    except Exception as e:
        logger.warning(f"Plot could not be saved to {out}: {e!r}")
    finally:
        plt.close(fig)


def by_metric(
    dset: Dataset,
    metric: str,
    sweep_range: Optional[Tuple[float, float]] = None,
    verbose: Union[int, str, Verbosity, None] = None,
) -> List[SweepRow]:
    """Summarize a locus metric and tabulate the loss of loci against thresholds

    Parameters
    ----------
    dset : Dataset
        input data set
    metric : str
        column of `dset.locus`
    sweep_range : Tuple[float, float], optional
        ends of the threshold range, by default (minimum of the metric, 1.0)
    verbose : int, str or Verbosity
        0 silent, 1 begin and end, 2 progress, 3 progress and summary, 5 full

    Returns
    -------
    List[SweepRow]
        21 rows ordered by decreasing threshold
    """
    funname = "dartqc.report.by_metric"
    verbose = check_verbosity(verbose)
    log_start(funname, verbose)

    _, values, summary = _overview(dset, metric, metric, verbose)
    if sweep_range is None:
        sweep_range = (summary.min, 1.0)
    rows = threshold_sweep(values, *sweep_range)
    _log_table(rows, verbose)

    log_end(funname, verbose)
    return rows


def rdepth(
    dset: Dataset,
    plot: bool = False,
    smearplot: bool = False,
    out: Optional[str] = None,
    verbose: Union[int, str, Verbosity, None] = None,
) -> List[SweepRow]:
    """Report the read depth of loci

    Read depth (`rdepth`) is the sum of AvgCountRef and AvgCountSnp reported by
    DArT. The threshold sweep runs from 1 to the maximum read depth + 1.

    Parameters
    ----------
    dset : Dataset
        input data set, `dset.locus` must contain `rdepth`
    plot : bool
        draw a histogram of read depth
    smearplot : bool
        draw the calls of individuals against loci; slow for large data sets
    out : str, optional
        save the figure to this path and close it
    verbose : int, str or Verbosity
        0 silent, 1 begin and end, 2 progress, 3 progress and summary, 5 full

    Returns
    -------
    List[SweepRow]
        retained and filtered loci at 21 thresholds, decreasing
    """
    funname = "dartqc.report.rdepth"
    verbose = check_verbosity(verbose)
    log_start(funname, verbose)

    _, values, summary = _overview(dset, "rdepth", "read depth", verbose)
    lower = float(np.round(summary.min - 1))
    upper = float(np.round(summary.max + 1))
    rows = threshold_sweep(values, 1.0, upper)
    _log_table(rows, verbose)

    if plot or smearplot:

        def draw():
            nrows = int(plot) + int(smearplot)
            fig, axes = plt.subplots(
                nrows=nrows, figsize=(6, 3 * nrows), squeeze=False
            )
            i_ax = 0
            if plot:
                _plot.hist(
                    values,
                    ax=axes[i_ax, 0],
                    xlim=(lower, upper),
                    title="Read Depth Profile",
                    xlabel="Read Depth",
                )
                i_ax += 1
            if smearplot:
                _plot.smearplot(dset, ax=axes[i_ax, 0])
            fig.tight_layout()
            return fig

        _render(draw, out, verbose)

    log_end(funname, verbose)
    return rows


def repeatability(
    dset: Dataset,
    plot: bool = False,
    boxplot: str = "adjusted",
    whis: float = 1.5,
    out: Optional[str] = None,
    verbose: Union[int, str, Verbosity, None] = None,
) -> List[SweepRow]:
    """Report the repeatability of loci

    RepAvg (SNP data) or Reproducibility (presence/absence data), chosen from
    the ploidy of `dset`. The threshold sweep runs from the minimum
    repeatability to 1.

    Parameters
    ----------
    dset : Dataset
        input data set
    plot : bool
        draw a box and whisker plot above a histogram
    boxplot : str
        "standard" box and whisker plot, or "adjusted" for skewed distributions
    whis : float
        range for delimiting outliers, in interquartile ranges (default 1.5)
    out : str, optional
        save the figure to this path and close it
    verbose : int, str or Verbosity
        0 silent, 1 begin and end, 2 progress, 3 progress and summary, 5 full

    Returns
    -------
    List[SweepRow]
        retained and filtered loci at 21 thresholds, decreasing; a single row
        when every locus has repeatability 1
    """
    funname = "dartqc.report.repeatability"
    verbose = check_verbosity(verbose)
    log_start(funname, verbose)

    if boxplot not in ["standard", "adjusted"]:
        logger.warning(
            f"Parameter 'boxplot' must be 'standard' or 'adjusted', "
            f"got {boxplot!r}, set to 'adjusted'"
        )
        boxplot = "adjusted"

    kind = check_dataset(dset)
    _, values, summary = _overview(
        dset, kind.repeatability_metric, "repeatability", verbose
    )
    rows = threshold_sweep(values, summary.min, 1.0)
    _log_table(rows, verbose)

    if plot:
        if boxplot == "standard":
            log_at(
                verbose,
                Verbosity.PROGRESS,
                "  Standard boxplot, no adjustment for skewness",
            )
        else:
            log_at(
                verbose,
                Verbosity.PROGRESS,
                "  Boxplot adjusted to account for skewness",
            )

        def draw():
            fig, _ = _plot.quality_profile(
                values,
                title=f"{kind.description}\nRepeatability by Locus",
                boxplot_method=boxplot,
                whis=whis,
                xlim=(summary.min, 1.0),
            )
            return fig

        _render(draw, out, verbose)

    log_end(funname, verbose)
    return rows
