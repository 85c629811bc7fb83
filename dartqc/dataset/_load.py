"""
Simulated example data sets
"""
from typing import Union
import numpy as np
import pandas as pd
from ._dataset import Dataset, Kind


def make_toy(
    n_loc: int = 200,
    n_indiv: int = 30,
    kind: Union[Kind, str] = Kind.BIALLELIC,
    n_pop: int = 3,
    missing_rate: float = 0.05,
    seed: int = 1234,
) -> Dataset:
    """Simulate a small DArT-like data set

    Allele frequencies are drawn per locus and calls per individual. Locus
    metrics mimic a DArT report: `rdepth` is gamma distributed, repeatability
    (`RepAvg` for SNP data, `Reproducibility` for presence/absence data) is
    mostly close to 1 with a tail of poorly repeatable loci.

    Parameters
    ----------
    n_loc : int
        number of loci
    n_indiv : int
        number of individuals
    kind : Kind or str
        Kind.BIALLELIC (ploidy 2) or Kind.PRESENCE_ABSENCE (ploidy 1)
    n_pop : int
        number of populations, individuals are assigned round-robin; 0 leaves
        the individuals unlabelled
    missing_rate : float
        proportion of missing calls
    seed : int
        random seed

    Returns
    -------
    Dataset
    """
    if isinstance(kind, str):
        kind = Kind[kind.upper()]
    rng = np.random.default_rng(seed)
    ploidy = kind.value

    freq = rng.uniform(0.05, 0.95, size=n_loc)
    geno = rng.binomial(ploidy, freq[:, None], size=(n_loc, n_indiv)).astype(float)
    geno[rng.random(size=geno.shape) < missing_rate] = np.nan

    df_locus = pd.DataFrame(
        {"rdepth": np.round(rng.gamma(shape=2.0, scale=10.0, size=n_loc), 1)},
        index=pd.Index([f"locus{i + 1}" for i in range(n_loc)], name="locus"),
    )
    repeatability = np.clip(1 - rng.exponential(scale=0.03, size=n_loc), 0.0, 1.0)
    repeatability[rng.random(size=n_loc) < 0.3] = 1.0
    df_locus[kind.repeatability_metric] = np.round(repeatability, 3)

    df_indiv = pd.DataFrame(
        index=pd.Index([f"indiv{i + 1}" for i in range(n_indiv)], name="indiv")
    )
    if n_pop > 0:
        df_indiv["pop"] = [f"pop{i % n_pop + 1}" for i in range(n_indiv)]

    return Dataset(geno=geno, locus=df_locus, indiv=df_indiv, ploidy=ploidy)
