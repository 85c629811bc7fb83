import dartqc
from ._utils import log_params


def filter_rdepth(
    prefix: str,
    out: str,
    lower: float = 5,
    upper: float = 50,
    verbose: int = 2,
) -> None:
    """
    Retain loci with read depth between `lower` and `upper` (inclusive)

    Parameters
    ----------
    prefix : str
        input prefix, <prefix>.geno.tsv and <prefix>.loc_metrics.tsv are read
    out : str
        output prefix, <out>.geno.tsv, <out>.loc_metrics.tsv and
        <out>.ind_metrics.tsv will be written
    lower : float
        lower threshold of read depth (default 5)
    upper : float
        upper threshold of read depth (default 50)
    verbose : int
        verbosity, 0-5 (default 2)
    """
    log_params("filter-rdepth", locals())
    dset = dartqc.io.read_dataset(prefix)
    dset = dartqc.filter.rdepth(dset, lower=lower, upper=upper, verbose=verbose)
    dartqc.io.write_dataset(dset, out)
    dartqc.logger.info(f"{dset.n_loc} loci written to {out}.geno.tsv")


def filter_repeatability(
    prefix: str,
    out: str,
    threshold: float = 0.99,
    verbose: int = 2,
) -> None:
    """
    Retain loci with repeatability (RepAvg or Reproducibility) >= `threshold`

    Parameters
    ----------
    prefix : str
        input prefix, <prefix>.geno.tsv and <prefix>.loc_metrics.tsv are read
    out : str
        output prefix
    threshold : float
        repeatability threshold between 0 and 1 (default 0.99)
    verbose : int
        verbosity, 0-5 (default 2)
    """
    log_params("filter-repeatability", locals())
    dset = dartqc.io.read_dataset(prefix)
    dset = dartqc.filter.repeatability(dset, threshold=threshold, verbose=verbose)
    dartqc.io.write_dataset(dset, out)
    dartqc.logger.info(f"{dset.n_loc} loci written to {out}.geno.tsv")
