import pandas as pd
import numpy as np
from typing import Union, Tuple, Sequence


Indexer = Union[slice, int, np.ndarray]


def normalize_indices(
    index, locus_names: pd.Index, indiv_names: pd.Index
) -> Tuple[Indexer, Indexer]:
    """Normalize `dset[index]` to a (locus positions, individual positions) pair

    Parameters
    ----------
    index : int, str, slice, array-like or tuple of these
        First element selects loci, the optional second element individuals.
    locus_names : pd.Index
        dset.locus.index
    indiv_names : pd.Index
        dset.indiv.index

    Returns
    -------
    Tuple[Indexer, Indexer]
        slices, integers or integer arrays of positions
    """
    if isinstance(index, tuple):
        if len(index) == 1:
            locus_ax, indiv_ax = index[0], slice(None)
        elif len(index) == 2:
            locus_ax, indiv_ax = index
        else:
            raise IndexError(
                "data can only be sliced in loci (first dim) and individuals (second dim)"
            )
    else:
        locus_ax, indiv_ax = index, slice(None)

    return _normalize_index(locus_ax, locus_names), _normalize_index(
        indiv_ax, indiv_names
    )


# positions are resolved the same way anndata resolves obs / var indexers
def _normalize_index(indexer, index: pd.Index) -> Indexer:
    if isinstance(indexer, slice):
        start, stop = indexer.start, indexer.stop
        if isinstance(start, str):
            start = index.get_loc(start)
        if isinstance(stop, str):
            # name slices are inclusive
            stop = index.get_loc(stop) + 1
        return slice(start, stop, indexer.step)
    elif isinstance(indexer, (np.integer, int)) and not isinstance(indexer, bool):
        return int(indexer)
    elif isinstance(indexer, str):
        return index.get_loc(indexer)
    elif isinstance(indexer, (Sequence, np.ndarray, pd.Index, pd.Series)):
        indexer = np.asarray(indexer)
        if indexer.ndim != 1:
            indexer = np.ravel(indexer)
        if indexer.dtype == bool:
            if indexer.shape != index.shape:
                raise IndexError(
                    f"Boolean index does not match Dataset's shape along this "
                    f"dimension. Boolean index has shape {indexer.shape} while "
                    f"Dataset index has shape {index.shape}."
                )
            return np.where(indexer)[0]
        elif len(indexer) == 0 or issubclass(indexer.dtype.type, np.integer):
            return indexer.astype(int)
        else:
            positions = index.get_indexer(indexer)
            if np.any(positions < 0):
                not_found = indexer[positions < 0]
                raise KeyError(f"Values {list(not_found)} are not valid names.")
            return positions
    else:
        raise IndexError(f"Unknown indexer {indexer!r} of type {type(indexer)}")
