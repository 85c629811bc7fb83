from ._dataset import Dataset, Kind, HistoryRecord, check_dataset, get_metric
from ._load import make_toy

__all__ = [
    "Dataset",
    "Kind",
    "HistoryRecord",
    "check_dataset",
    "get_metric",
    "make_toy",
]
