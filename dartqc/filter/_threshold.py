import numpy as np
from typing import Optional
from .._config import Verbosity, log_at
from .._logging import logger
from ..dataset import Dataset, HistoryRecord


def keep_mask(
    values: np.ndarray, lower: Optional[float] = None, upper: Optional[float] = None
) -> np.ndarray:
    """Boolean mask of loci with `lower <= value <= upper`

    Parameters
    ----------
    values : np.ndarray
        per-locus metric
    lower : float, optional
        inclusive lower bound, open if None
    upper : float, optional
        inclusive upper bound, open if None

    Returns
    -------
    np.ndarray
        boolean array of the same length as `values`; missing values are never
        kept
    """
    values = np.asarray(values, dtype=float)
    mask = ~np.isnan(values)
    if lower is not None:
        mask &= values >= lower
    if upper is not None:
        mask &= values <= upper
    return mask


def describe_rule(metric: str, lower=None, upper=None) -> str:
    if lower is not None and upper is not None:
        return f"{metric} >= {lower} and {metric} <= {upper}"
    elif lower is not None:
        return f"{metric} >= {lower}"
    elif upper is not None:
        return f"{metric} <= {upper}"
    return f"any {metric}"


def apply_mask(
    dset: Dataset,
    mask: np.ndarray,
    record: HistoryRecord,
    rule: str,
    verbose: Verbosity,
) -> Dataset:
    """Subset `dset` to the loci in `mask`, appending `record` to the history,
    and log the counts."""
    assert len(mask) == dset.n_loc, "mask must have one entry per locus"
    n0 = dset.n_loc
    log_at(verbose, Verbosity.SUMMARY, f"Initial no. of loci = {n0}")

    dset_new = dset.subset(np.flatnonzero(mask), record=record)
    n_deleted = n0 - dset_new.n_loc
    log_at(verbose, Verbosity.SUMMARY, f"No. of loci deleted = {n_deleted}")

    if dset_new.n_loc == 0 and verbose >= Verbosity.MINIMAL:
        logger.warning(f"No loci retained with {rule}, returning an empty dataset")

    log_at(
        verbose,
        Verbosity.SUMMARY,
        "Summary of filtered dataset\n"
        + "\n".join(
            [
                f"  Retaining loci with {rule}",
                f"  Original no. of loci: {n0}",
                f"  No. of loci discarded: {n_deleted}",
                f"  No. of loci retained: {dset_new.n_loc}",
                f"  No. of individuals: {dset_new.n_indiv}",
                f"  No. of populations: {dset_new.n_pop}",
            ]
        ),
    )
    return dset_new
