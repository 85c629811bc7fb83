import dartqc
import pandas as pd
from ._utils import log_params


def _write_sweep(rows, out: str) -> None:
    pd.DataFrame(rows).to_csv(f"{out}.sweep.tsv", sep="\t", index=False)
    dartqc.logger.info(f"Threshold sweep saved to {out}.sweep.tsv")


def report_rdepth(
    prefix: str,
    out: str,
    plot: bool = False,
    smearplot: bool = False,
    verbose: int = 2,
) -> None:
    """
    Tabulate loci retained against read depth thresholds

    Parameters
    ----------
    prefix : str
        input prefix
    out : str
        output prefix. <out>.sweep.tsv, and <out>.png if plotting, will be produced
    plot : bool
        plot a histogram of read depth
    smearplot : bool
        plot calls of individuals against loci
    verbose : int
        verbosity, 0-5 (default 2)
    """
    log_params("report-rdepth", locals())
    dset = dartqc.io.read_dataset(prefix)
    rows = dartqc.report.rdepth(
        dset,
        plot=plot,
        smearplot=smearplot,
        out=f"{out}.png" if (plot or smearplot) else None,
        verbose=verbose,
    )
    _write_sweep(rows, out)


def report_repeatability(
    prefix: str,
    out: str,
    plot: bool = False,
    boxplot: str = "adjusted",
    whis: float = 1.5,
    verbose: int = 2,
) -> None:
    """
    Tabulate loci retained against repeatability thresholds

    Parameters
    ----------
    prefix : str
        input prefix
    out : str
        output prefix. <out>.sweep.tsv, and <out>.png if plotting, will be produced
    plot : bool
        plot a box and whisker plot and a histogram of repeatability
    boxplot : str
        'standard' or 'adjusted' (for skewed distributions)
    whis : float
        range for delimiting outliers, in interquartile ranges
    verbose : int
        verbosity, 0-5 (default 2)
    """
    log_params("report-repeatability", locals())
    dset = dartqc.io.read_dataset(prefix)
    rows = dartqc.report.repeatability(
        dset,
        plot=plot,
        boxplot=boxplot,
        whis=whis,
        out=f"{out}.png" if plot else None,
        verbose=verbose,
    )
    _write_sweep(rows, out)
