"""
Filter loci on DArT locus metrics.

Each filter returns a new Dataset holding the retained loci (locus metrics kept
in sync) with a provenance record appended to its history; the input dataset
is left untouched.
"""
import numpy as np
from typing import Optional, Union
from .._config import (
    Verbosity,
    check_verbosity,
    log_at,
    log_start,
    log_end,
    DEFAULT_RDEPTH_LOWER,
    DEFAULT_RDEPTH_UPPER,
    DEFAULT_REPEATABILITY_THRESHOLD,
)
from .._logging import logger
from ..dataset import Dataset, HistoryRecord, check_dataset, get_metric
from ._threshold import keep_mask, describe_rule, apply_mask


def _check_bounds(lower, upper) -> None:
    if lower is not None and upper is not None and lower > upper:
        logger.warning(
            f"Lower bound {lower} is greater than upper bound {upper}, "
            "no loci will be retained"
        )


def by_metric(
    dset: Dataset,
    metric: str,
    lower: Optional[float] = None,
    upper: Optional[float] = None,
    verbose: Union[int, str, Verbosity, None] = None,
) -> Dataset:
    """Retain loci with `lower <= dset.locus[metric] <= upper`

    Parameters
    ----------
    dset : Dataset
        input data set
    metric : str
        column of `dset.locus`
    lower : float, optional
        inclusive lower bound, no bound if None
    upper : float, optional
        inclusive upper bound, no bound if None
    verbose : int, str or Verbosity
        0 silent, 1 begin and end, 2 progress, 3 progress and summary, 5 full

    Returns
    -------
    Dataset
        data set with the retained loci, in their original order

    Raises
    ------
    InvalidDatasetError
        `dset` is not a Dataset or ploidy is not uniformly 1 or 2
    MissingMetricError
        `metric` is not among the locus metrics
    """
    funname = "dartqc.filter.by_metric"
    verbose = check_verbosity(verbose)
    log_start(funname, verbose)

    kind = check_dataset(dset)
    log_at(verbose, Verbosity.PROGRESS, f"  Processing {kind.description}")
    values = get_metric(dset, metric)
    _check_bounds(lower, upper)

    rule = describe_rule(metric, lower, upper)
    log_at(verbose, Verbosity.PROGRESS, f"  Retaining loci with {rule}")
    record = HistoryRecord.create(
        funname, metric=metric, lower=lower, upper=upper, verbose=int(verbose)
    )
    dset_new = apply_mask(
        dset, keep_mask(values, lower, upper), record, rule, verbose
    )

    log_end(funname, verbose)
    return dset_new


def rdepth(
    dset: Dataset,
    lower: float = DEFAULT_RDEPTH_LOWER,
    upper: float = DEFAULT_RDEPTH_UPPER,
    verbose: Union[int, str, Verbosity, None] = None,
) -> Dataset:
    """Filter loci on read depth

    DArT reports AvgCountRef and AvgCountSnp as counts of sequence tags for the
    reference and alternate alleles; their sum is the read depth (`rdepth`).
    Loci with exceptionally low or exceptionally high counts can be removed.

    Parameters
    ----------
    dset : Dataset
        input data set, `dset.locus` must contain `rdepth`
    lower : float
        loci with read depth below this value are removed (default 5)
    upper : float
        loci with read depth above this value are removed (default 50)
    verbose : int, str or Verbosity
        0 silent, 1 begin and end, 2 progress, 3 progress and summary, 5 full

    Returns
    -------
    Dataset
        data set retaining loci with `lower <= rdepth <= upper`
    """
    funname = "dartqc.filter.rdepth"
    verbose = check_verbosity(verbose)
    log_start(funname, verbose)

    kind = check_dataset(dset)
    log_at(verbose, Verbosity.PROGRESS, f"  Processing {kind.description}")
    values = get_metric(dset, "rdepth")
    _check_bounds(lower, upper)

    log_at(
        verbose,
        Verbosity.PROGRESS,
        f"  Removing loci with rdepth < {lower} and > {upper}",
    )
    record = HistoryRecord.create(
        funname, lower=lower, upper=upper, verbose=int(verbose)
    )
    dset_new = apply_mask(
        dset,
        keep_mask(values, lower, upper),
        record,
        describe_rule("rdepth", lower, upper),
        verbose,
    )

    log_end(funname, verbose)
    return dset_new


def repeatability(
    dset: Dataset,
    threshold: float = DEFAULT_REPEATABILITY_THRESHOLD,
    verbose: Union[int, str, Verbosity, None] = None,
) -> Dataset:
    """Filter loci on the repeatability of their scores

    SNP data sets generated by DArT carry RepAvg, the proportion of alleles
    giving a repeatable result in technical replicates, averaged over both
    alleles of a locus. Presence/absence (SilicoDArT) data sets carry the
    analogous Reproducibility. The metric is picked from the ploidy of `dset`.

    Parameters
    ----------
    dset : Dataset
        input data set
    threshold : float
        loci with repeatability below this value are removed (default 0.99).
        Values outside [0, 1] are reset to the default with a warning.
    verbose : int, str or Verbosity
        0 silent, 1 begin and end, 2 progress, 3 progress and summary, 5 full

    Returns
    -------
    Dataset
        data set retaining loci with repeatability >= threshold
    """
    funname = "dartqc.filter.repeatability"
    verbose = check_verbosity(verbose)
    log_start(funname, verbose)

    kind = check_dataset(dset)
    log_at(verbose, Verbosity.PROGRESS, f"  Processing {kind.description}")

    if not (0 <= threshold <= 1):
        logger.warning(
            "Threshold value for repeatability measure must be between 0 and 1, "
            f"set to {DEFAULT_REPEATABILITY_THRESHOLD}"
        )
        threshold = DEFAULT_REPEATABILITY_THRESHOLD
    metric = kind.repeatability_metric
    values = get_metric(dset, metric)

    log_at(
        verbose,
        Verbosity.PROGRESS,
        f"  Identifying loci with repeatability below: {threshold}",
    )
    mask = keep_mask(values, lower=threshold)
    if np.all(mask):
        log_at(
            verbose,
            Verbosity.PROGRESS,
            f"  No loci with repeatability less than {threshold}",
        )
    else:
        log_at(
            verbose,
            Verbosity.PROGRESS,
            f"  Removing loci with repeatability less than {threshold}",
        )
    record = HistoryRecord.create(
        funname, threshold=threshold, metric=metric, verbose=int(verbose)
    )
    dset_new = apply_mask(
        dset, mask, record, describe_rule(metric, lower=threshold), verbose
    )

    log_end(funname, verbose)
    return dset_new
