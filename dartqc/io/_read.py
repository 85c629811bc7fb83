import os
import numpy as np
import pandas as pd
import pyreadr
from typing import Optional, Union, Sequence
from .._errors import InvalidDatasetError
from ..dataset import Dataset


def read_loc_metrics(path: str) -> pd.DataFrame:
    """Read a table of locus metrics

    `.rds` files hold a single data frame saved from R, e.g.
    `saveRDS(gl@other$loc.metrics, path)`. For text files the first column is
    used as index.

    Parameters
    ----------
    path : str
        `.rds` file or tab-separated file whose first column holds locus names

    Returns
    -------
    pd.DataFrame
    """
    path = str(path)
    if path.endswith(".rds"):
        result = pyreadr.read_r(path)
        if len(result) != 1:
            raise InvalidDatasetError(f"{path} must contain a single data frame")
        # loci are matched by position
        return next(iter(result.values())).reset_index(drop=True)
    return pd.read_csv(path, sep="\t", index_col=0)


def read_dataset(
    prefix: str,
    loc_metrics_file: Optional[str] = None,
    ind_metrics_file: Optional[str] = None,
    ploidy: Union[int, Sequence[int], None] = None,
) -> Dataset:
    """
    Read a dataset from tab-separated tables.

    Parameters
    ----------
    prefix: str
        `<prefix>.geno.tsv` holds calls with loci in rows and individuals in
        columns, first column locus names, `NA` for missing calls
    loc_metrics_file: str
        locus metrics, if not provided, `read_dataset` will use
        <prefix>.loc_metrics.tsv; `.rds` files are read with pyreadr
    ind_metrics_file: str
        individual metrics, if not provided, `read_dataset` will attempt to find
        it with <prefix>.ind_metrics.tsv; `ploidy` and `pop` columns are used
    ploidy: int or list of int
        ploidy of individuals, overrides the `ploidy` column; by default 2

    Returns
    -------
    Dataset
    """
    df_geno = pd.read_csv(f"{prefix}.geno.tsv", sep="\t", index_col=0)

    if loc_metrics_file is None:
        loc_metrics_file = f"{prefix}.loc_metrics.tsv"
    df_locus = read_loc_metrics(loc_metrics_file)
    if len(df_locus) != len(df_geno):
        raise InvalidDatasetError(
            f"{loc_metrics_file} has {len(df_locus)} rows for {len(df_geno)} loci"
        )
    if isinstance(df_locus.index, pd.RangeIndex):
        # no row names, match by position
        df_locus.index = df_geno.index
    elif not df_locus.index.equals(df_geno.index):
        raise InvalidDatasetError(
            f"Locus names in {loc_metrics_file} do not match {prefix}.geno.tsv"
        )

    if ind_metrics_file is None and os.path.exists(f"{prefix}.ind_metrics.tsv"):
        ind_metrics_file = f"{prefix}.ind_metrics.tsv"
    if ind_metrics_file is not None:
        df_indiv = pd.read_csv(ind_metrics_file, sep="\t", index_col=0)
        df_indiv.index = df_indiv.index.astype(str)
        missing = set(df_geno.columns) - set(df_indiv.index)
        if len(missing) > 0:
            raise InvalidDatasetError(
                f"{len(missing)} individuals in {prefix}.geno.tsv are missing "
                f"from {ind_metrics_file}"
            )
        df_indiv = df_indiv.reindex(df_geno.columns)
    else:
        df_indiv = pd.DataFrame(index=pd.Index(df_geno.columns, name="indiv"))

    if ploidy is None:
        if "ploidy" in df_indiv.columns:
            ploidy = df_indiv["ploidy"].to_numpy(dtype=int)
        else:
            ploidy = 2

    return Dataset(
        geno=df_geno.to_numpy(dtype=float),
        locus=df_locus,
        indiv=df_indiv,
        ploidy=np.asarray(ploidy),
    )
