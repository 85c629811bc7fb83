"""Explicit configuration shared by the filter and report functions.

Nothing here is global state: every function receives its own `verbose` value
and resolves it with `check_verbosity`.
"""
import numbers
from enum import IntEnum
from typing import Union
from ._logging import logger
from .version import __version__


class Verbosity(IntEnum):
    """Granularity of the progress log.

    0 silent (fatal errors only), 1 begin and end markers, 2 progress,
    3 progress and result summary, 5 full report.
    """

    SILENT = 0
    MINIMAL = 1
    PROGRESS = 2
    SUMMARY = 3
    FULL = 5


DEFAULT_VERBOSITY = Verbosity.PROGRESS
DEFAULT_RDEPTH_LOWER = 5
DEFAULT_RDEPTH_UPPER = 50
DEFAULT_REPEATABILITY_THRESHOLD = 0.99
N_SWEEP_STEP = 21


def check_verbosity(verbose: Union[int, str, Verbosity, None]) -> Verbosity:
    """Resolve a user supplied verbosity to a `Verbosity` level.

    Parameters
    ----------
    verbose : int, str, Verbosity or None
        0-5, a level name such as "summary", or None for the default.

    Returns
    -------
    Verbosity
        Level 4 maps to SUMMARY. Anything unrecognized is reset to the default
        with a warning.
    """
    if verbose is None:
        return DEFAULT_VERBOSITY
    if isinstance(verbose, Verbosity):
        return verbose
    if isinstance(verbose, str) and verbose.upper() in Verbosity.__members__:
        return Verbosity[verbose.upper()]
    if isinstance(verbose, numbers.Real) and not isinstance(verbose, bool):
        if 0 <= verbose <= 5 and int(verbose) == verbose:
            verbose = int(verbose)
            return Verbosity(verbose) if verbose != 4 else Verbosity.SUMMARY
    logger.warning(
        "Parameter 'verbose' must be an integer between 0 [silent] and "
        f"5 [full report], got {verbose!r}, set to {int(DEFAULT_VERBOSITY)}"
    )
    return DEFAULT_VERBOSITY


def log_at(verbose: Verbosity, level: Verbosity, msg: str, **kwargs) -> None:
    """Emit `msg` at info level when `verbose` reaches `level`."""
    if verbose >= level:
        logger.info(msg, **kwargs)


def log_start(funname: str, verbose: Verbosity) -> None:
    if verbose >= Verbosity.FULL:
        logger.info(f"Starting {funname} [ version = {__version__} ]")
    elif verbose >= Verbosity.MINIMAL:
        logger.info(f"Starting {funname}")


def log_end(funname: str, verbose: Verbosity) -> None:
    if verbose >= Verbosity.MINIMAL:
        logger.info(f"Completed: {funname}")
