import numpy as np
import pandas as pd
from ..dataset import Dataset


def write_dataset(dset: Dataset, prefix: str) -> None:
    """
    Write a dataset to <prefix>.geno.tsv, <prefix>.loc_metrics.tsv and
    <prefix>.ind_metrics.tsv, readable with `dartqc.io.read_dataset`.

    The history of the dataset is not written.
    """
    geno = np.asarray(dset.geno.compute(), dtype=float)
    pd.DataFrame(geno, index=dset.locus.index, columns=dset.indiv.index).to_csv(
        f"{prefix}.geno.tsv", sep="\t", na_rep="NA", float_format="%.8g"
    )
    dset.locus.to_csv(f"{prefix}.loc_metrics.tsv", sep="\t", float_format="%.8g")

    df_indiv = dset.indiv.copy()
    df_indiv["ploidy"] = dset.ploidy
    df_indiv.to_csv(f"{prefix}.ind_metrics.tsv", sep="\t")
