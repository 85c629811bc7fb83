from ._read import read_dataset, read_loc_metrics
from ._write import write_dataset
