import matplotlib.pyplot as plt
from matplotlib import cbook
import numpy as np
from statsmodels.stats.stattools import medcouple

from typing import Tuple


def _finite(values) -> np.ndarray:
    values = np.asarray(values, dtype=float)
    return values[~np.isnan(values)]


def _set_xlim(ax, xlim) -> None:
    if xlim is not None and xlim[0] < xlim[1]:
        ax.set_xlim(*xlim)


def hist(
    values,
    ax=None,
    bins: int = 100,
    xlim: Tuple[float, float] = None,
    title: str = None,
    xlabel: str = None,
    color: str = "red",
):
    """Histogram of a locus metric

    Parameters
    ----------
    values : np.ndarray
        metric values, missing values are dropped
    ax : matplotlib.axes, optional
        by default plt.gca()
    bins : int, optional
        number of bins, by default 100
    xlim : Tuple[float, float], optional
        x-axis limits, ignored if empty
    """
    if ax is None:
        ax = plt.gca()
    ax.hist(_finite(values), bins=bins, color=color, edgecolor="blue", linewidth=0.3)
    _set_xlim(ax, xlim)
    if title is not None:
        ax.set_title(title)
    if xlabel is not None:
        ax.set_xlabel(xlabel)
    ax.set_ylabel("Count")
    return ax


def adjusted_fences(values, whis: float = 1.5) -> Tuple[float, float]:
    """Outlier fences of the boxplot adjusted for skewed distributions

    Hubert and Vandervieren (2008): with medcouple MC and interquartile range IQR,
    for MC >= 0 the fences are
    [Q1 - whis * exp(-4 MC) * IQR, Q3 + whis * exp(3 MC) * IQR],
    and for MC < 0
    [Q1 - whis * exp(-3 MC) * IQR, Q3 + whis * exp(4 MC) * IQR].

    Parameters
    ----------
    values : np.ndarray
        metric values, missing values are dropped
    whis : float
        range in units of IQR, by default 1.5

    Returns
    -------
    Tuple[float, float]
        (lower fence, upper fence)
    """
    values = _finite(values)
    q1, q3 = np.percentile(values, [25, 75])
    iqr = q3 - q1
    mc = float(medcouple(values))
    if mc >= 0:
        lo, hi = np.exp(-4 * mc), np.exp(3 * mc)
    else:
        lo, hi = np.exp(-3 * mc), np.exp(4 * mc)
    return q1 - whis * lo * iqr, q3 + whis * hi * iqr


def boxplot(
    values,
    method: str = "adjusted",
    whis: float = 1.5,
    ax=None,
    xlim: Tuple[float, float] = None,
    title: str = None,
    color: str = "red",
):
    """Horizontal box and whisker plot of a locus metric

    Parameters
    ----------
    values : np.ndarray
        metric values, missing values are dropped
    method : str
        "standard" for Tukey whiskers, "adjusted" for whiskers adjusted for
        skewness using the medcouple
    whis : float
        range for delimiting outliers, in interquartile ranges
    ax : matplotlib.axes, optional
        by default plt.gca()
    """
    assert method in ["standard", "adjusted"], f"Unknown boxplot method: {method}"
    if ax is None:
        ax = plt.gca()

    values = _finite(values)
    stats = cbook.boxplot_stats(values, whis=whis)[0]
    if method == "adjusted":
        lo, hi = adjusted_fences(values, whis=whis)
        inside = values[(values >= lo) & (values <= hi)]
        stats["whislo"] = inside.min() if len(inside) > 0 else stats["q1"]
        stats["whishi"] = inside.max() if len(inside) > 0 else stats["q3"]
        stats["fliers"] = values[(values < lo) | (values > hi)]

    ax.bxp(
        [stats],
        vert=False,
        patch_artist=True,
        boxprops={"facecolor": color},
        flierprops={"marker": "o", "markersize": 3},
    )
    ax.set_yticks([])
    _set_xlim(ax, xlim)
    if title is not None:
        ax.set_title(title)
    return ax


def smearplot(dset, ax=None, cmap: str = "viridis"):
    """Image of calls with individuals in rows and loci in columns

    Missing calls are left blank. This requires the full call matrix in memory.

    Parameters
    ----------
    dset : dartqc.Dataset
        data set to draw
    ax : matplotlib.axes, optional
        by default plt.gca()
    """
    if ax is None:
        ax = plt.gca()
    geno = np.asarray(dset.geno.compute(), dtype=float).T
    im = ax.imshow(
        np.ma.masked_invalid(geno),
        aspect="auto",
        interpolation="nearest",
        cmap=cmap,
        vmin=0,
        vmax=max(int(np.max(dset.ploidy, initial=1)), 1),
    )
    ax.set_xlabel("Locus")
    ax.set_ylabel("Individual")
    plt.colorbar(im, ax=ax, label="Allele dosage")
    return ax


def quality_profile(
    values,
    title: str = None,
    boxplot_method: str = "adjusted",
    whis: float = 1.5,
    xlim: Tuple[float, float] = None,
    figsize=(6, 6),
):
    """Box and whisker plot above a histogram of the same metric

    Returns
    -------
    (fig, axes)
    """
    fig, axes = plt.subplots(figsize=figsize, nrows=2, sharex=True)
    boxplot(
        values, method=boxplot_method, whis=whis, ax=axes[0], xlim=xlim, title=title
    )
    hist(values, ax=axes[1], xlim=xlim)
    fig.tight_layout()
    return fig, axes
