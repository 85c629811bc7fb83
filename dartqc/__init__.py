from ._logging import logger
from ._errors import DartQCError, InvalidDatasetError, MissingMetricError
from ._config import Verbosity
from .dataset import Dataset, Kind
from . import dataset, plot, filter, report, io, cli
from .version import __version__

__all__ = [
    "dataset",
    "plot",
    "filter",
    "report",
    "io",
    "cli",
    "Dataset",
    "Kind",
    "Verbosity",
    "DartQCError",
    "InvalidDatasetError",
    "MissingMetricError",
]
