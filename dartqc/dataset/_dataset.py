import pandas as pd
import xarray as xr
import numpy as np
import dask.array as da
import dask
from enum import Enum
from types import MappingProxyType
from typing import (
    Hashable,
    Optional,
    Any,
    Dict,
    Mapping,
    NamedTuple,
    Sequence,
    Tuple,
    Union,
)
from .._errors import InvalidDatasetError, MissingMetricError
from ._index import normalize_indices


class Kind(Enum):
    """Type of calls held by a Dataset, resolved from its ploidy."""

    PRESENCE_ABSENCE = 1
    BIALLELIC = 2

    @property
    def repeatability_metric(self) -> str:
        """Locus metric holding repeatability for this kind of data."""
        if self is Kind.PRESENCE_ABSENCE:
            return "Reproducibility"
        return "RepAvg"

    @property
    def description(self) -> str:
        if self is Kind.PRESENCE_ABSENCE:
            return "Presence/Absence (SilicoDArT) data"
        return "SNP (DArTSeq) data"


class HistoryRecord(NamedTuple):
    """One provenance entry: operation name and a read-only parameter snapshot."""

    name: str
    params: Mapping[str, Any]

    @classmethod
    def create(cls, name: str, **params) -> "HistoryRecord":
        return cls(name, MappingProxyType(dict(params)))


class Dataset(object):
    """Data structure to contain calls of individuals at loci with locus and
    individual metadata.

    `geno` is stored as (n_loc, n_indiv). Rows of `locus` are aligned with the
    first dimension, rows of `indiv` and entries of `ploidy` with the second.
    """

    def __init__(
        self,
        geno=None,
        locus: Optional[pd.DataFrame] = None,
        indiv: Optional[pd.DataFrame] = None,
        ploidy: Union[int, Sequence[int], np.ndarray] = 2,
        history: Optional[Sequence[HistoryRecord]] = None,
        dset_ref: Optional["Dataset"] = None,
        locus_idx: Union[slice, int, np.ndarray] = None,
        indiv_idx: Union[slice, int, np.ndarray] = None,
        enforce_order: bool = True,
    ):
        if dset_ref is not None:
            # initialize from reference data set
            if locus_idx is None:
                locus_idx = slice(None)
            if indiv_idx is None:
                indiv_idx = slice(None)
            if isinstance(locus_idx, (int, np.integer)):
                assert (
                    0 <= locus_idx < dset_ref.n_loc
                ), f"Locus index `{locus_idx}` is out of range."
                locus_idx = slice(locus_idx, locus_idx + 1, 1)

            if isinstance(indiv_idx, (int, np.integer)):
                assert (
                    0 <= indiv_idx < dset_ref.n_indiv
                ), f"Individual index `{indiv_idx}` is out of range."
                indiv_idx = slice(indiv_idx, indiv_idx + 1, 1)

            for name, idx in zip(["locus", "indiv"], [locus_idx, indiv_idx]):
                if isinstance(idx, slice):
                    if idx.step is not None:
                        assert idx.step > 0, f"Slice `{idx}` is not ordered."
                elif isinstance(idx, np.ndarray):
                    if enforce_order:
                        assert np.all(
                            idx == np.sort(idx)
                        ), f"{name}_idx=`{idx}` is not ordered according to dset.{name}.index"
                else:
                    raise ValueError(
                        f"`{name}_idx` must be a slice or a numpy array of integers."
                    )

            self._locus = dset_ref.locus.iloc[locus_idx].copy()
            self._indiv = dset_ref.indiv.iloc[indiv_idx].copy()
            with dask.config.set(**{"array.slicing.split_large_chunks": False}):
                self._xr = dset_ref.xr.isel(locus=locus_idx, indiv=indiv_idx)
            if history is None:
                history = dset_ref.history
        else:
            # initialize from actual data set
            if geno is None:
                raise InvalidDatasetError("`geno` must not be None")
            if not isinstance(geno, da.Array):
                geno = da.from_array(np.asarray(geno))
            if geno.ndim != 2:
                raise InvalidDatasetError(
                    f"`geno` must be a (n_loc, n_indiv) matrix, got shape {geno.shape}"
                )
            n_loc, n_indiv = geno.shape

            self._locus = (
                pd.DataFrame(index=pd.RangeIndex(stop=n_loc))
                if locus is None
                else locus
            )
            self._indiv = (
                pd.DataFrame(index=pd.RangeIndex(stop=n_indiv))
                if indiv is None
                else indiv
            )
            self._check_dimensions(n_loc, n_indiv)

            ploidy = np.asarray(ploidy, dtype=int)
            if ploidy.ndim == 0:
                ploidy = np.full(n_indiv, int(ploidy))
            if ploidy.shape != (n_indiv,):
                raise InvalidDatasetError(
                    f"`ploidy` has {ploidy.size} entries for {n_indiv} individuals"
                )

            data_vars: Dict[Hashable, Any] = {
                "geno": (("locus", "indiv"), geno),
                "ploidy": (("indiv",), ploidy),
            }
            self._xr = xr.Dataset(
                data_vars=data_vars,
                coords={"locus": self._locus.index, "indiv": self._indiv.index},
            )

        self._history: Tuple[HistoryRecord, ...] = tuple(history or ())

    def _check_dimensions(self, n_loc: int, n_indiv: int) -> None:
        """
        Check that the metadata tables are aligned with the genotype matrix.
        """
        if len(self._locus) != n_loc:
            raise InvalidDatasetError(
                f"Locus metadata has {len(self._locus)} rows for {n_loc} loci"
            )
        if len(self._indiv) != n_indiv:
            raise InvalidDatasetError(
                f"Individual metadata has {len(self._indiv)} rows "
                f"for {n_indiv} individuals"
            )

    def __repr__(self) -> str:
        descr = (
            f"dartqc.Dataset object with n_loc x n_indiv = {self.n_loc} x {self.n_indiv}"
        )
        if len(self.locus.columns) > 0:
            descr += "\n\tlocus: " + ", ".join(
                [f"'{col}'" for col in self.locus.columns]
            )
        if len(self.indiv.columns) > 0:
            descr += "\n\tindiv: " + ", ".join(
                [f"'{col}'" for col in self.indiv.columns]
            )
        if len(self.history) > 0:
            descr += "\n\thistory: " + ", ".join(r.name for r in self.history)
        return descr

    @property
    def n_indiv(self) -> int:
        """Number of individuals."""
        return self._xr.sizes["indiv"]

    @property
    def n_loc(self) -> int:
        """Number of loci."""
        return self._xr.sizes["locus"]

    @property
    def locus(self) -> pd.DataFrame:
        """Per-locus metrics (`pd.DataFrame`), one row per locus."""
        return self._locus

    @property
    def indiv(self) -> pd.DataFrame:
        """Per-individual metrics (`pd.DataFrame`), one row per individual."""
        return self._indiv

    @property
    def geno(self) -> da.Array:
        """Call matrix (n_loc, n_indiv)"""
        return self._xr["geno"].data

    @property
    def ploidy(self) -> np.ndarray:
        """Ploidy of each individual"""
        return np.asarray(self._xr["ploidy"].values)

    @property
    def xr(self) -> xr.Dataset:
        """Return the xr.Dataset used internally"""
        return self._xr

    @property
    def history(self) -> Tuple[HistoryRecord, ...]:
        """Provenance records of the operations that produced this dataset."""
        return self._history

    @property
    def kind(self) -> Kind:
        """Presence/absence or biallelic SNP data.

        Raises
        ------
        InvalidDatasetError
            If ploidy is not uniformly 1 or uniformly 2.
        """
        values = np.unique(self.ploidy)
        if len(values) == 1 and values[0] in (1, 2):
            return Kind(int(values[0]))
        raise InvalidDatasetError(
            "Ploidy must be universally 1 (fragment P/A data) or 2 (SNP data), "
            f"found {list(values)}"
        )

    @property
    def pop(self) -> Optional[pd.Series]:
        """Population label of each individual, None if no labels are set."""
        if "pop" not in self._indiv.columns or self._indiv["pop"].isna().all():
            return None
        return self._indiv["pop"]

    @property
    def n_pop(self) -> int:
        """Number of populations."""
        pop = self.pop
        return 0 if pop is None else int(pop.nunique())

    def subset(
        self,
        locus_idx: Union[slice, np.ndarray],
        record: Optional[HistoryRecord] = None,
    ) -> "Dataset":
        """
        Return a new dataset holding only `locus_idx`, with `record` appended
        to a copy of the history.

        Parameters
        ----------
        locus_idx : slice or np.ndarray
            positions of the loci to keep, in increasing order
        record : HistoryRecord, optional
            provenance record of the operation producing the subset
        """
        history = self.history + ((record,) if record is not None else ())
        return Dataset(
            dset_ref=self,
            locus_idx=locus_idx,
            indiv_idx=slice(None),
            history=history,
        )

    def __getitem__(self, index) -> "Dataset":
        """Returns a sliced copy of the object."""
        locus_idx, indiv_idx = normalize_indices(
            index, self.locus.index, self.indiv.index
        )
        return Dataset(dset_ref=self, locus_idx=locus_idx, indiv_idx=indiv_idx)


def check_dataset(dset) -> Kind:
    """Check `dset` is a Dataset with uniform ploidy and return its kind.

    Raises
    ------
    InvalidDatasetError
    """
    if not isinstance(dset, Dataset):
        raise InvalidDatasetError(
            f"dartqc.Dataset object required, got {type(dset).__name__}"
        )
    return dset.kind


def get_metric(dset: Dataset, metric: str) -> np.ndarray:
    """Values of a locus metric as a float array.

    Raises
    ------
    MissingMetricError
        If `metric` is not a column of `dset.locus`.
    """
    if metric not in dset.locus.columns:
        raise MissingMetricError(metric, dset.locus.columns)
    return pd.to_numeric(dset.locus[metric], errors="coerce").to_numpy(dtype=float)
