import numpy as np
import pandas as pd
import pytest
import dartqc
from dartqc.dataset import Dataset, Kind, HistoryRecord


def _small_dset(ploidy=2):
    geno = np.array(
        [[0, 1, 2, np.nan], [1, 1, 0, 2], [2, 0, np.nan, 1]], dtype=float
    )
    df_locus = pd.DataFrame(
        {"rdepth": [3.0, 12.0, 40.0], "RepAvg": [0.95, 1.0, 0.99]},
        index=["L1", "L2", "L3"],
    )
    df_indiv = pd.DataFrame({"pop": ["A", "A", "B", "B"]}, index=["i1", "i2", "i3", "i4"])
    return Dataset(geno=geno, locus=df_locus, indiv=df_indiv, ploidy=ploidy)


def test_dataset():
    dset = _small_dset()
    assert dset.n_loc == 3
    assert dset.n_indiv == 4
    assert dset.geno.shape == (3, 4)
    assert dset.kind == Kind.BIALLELIC
    assert dset.kind.repeatability_metric == "RepAvg"
    assert dset.n_pop == 2
    assert dset.history == ()
    assert np.all(dset.ploidy == 2)


def test_subset():
    dset = _small_dset()

    dset_subset = dset[[0, 2]]
    assert list(dset_subset.locus.index) == ["L1", "L3"]
    assert dset_subset.n_indiv == 4
    assert np.allclose(
        dset_subset.geno.compute(), dset.geno.compute()[[0, 2]], equal_nan=True
    )

    # subset with names and boolean masks
    dset_subset = dset[["L2", "L3"], np.array([True, False, True, False])]
    assert list(dset_subset.locus.index) == ["L2", "L3"]
    assert list(dset_subset.indiv.index) == ["i1", "i3"]
    assert dset_subset.geno.shape == (2, 2)
    assert len(dset_subset.locus) == dset_subset.n_loc

    # metadata of the subset is a copy
    dset_subset.locus["rdepth"] = 0.0
    assert dset.locus["rdepth"].tolist() == [3.0, 12.0, 40.0]


def test_subset_history():
    dset = _small_dset()
    record = HistoryRecord.create("test.op", value=1)
    dset_new = dset.subset(np.array([1]), record=record)
    assert dset.history == ()
    assert dset_new.history == (record,)
    assert dset_new.history[0].params["value"] == 1
    with pytest.raises(TypeError):
        dset_new.history[0].params["value"] = 2

    # plain slicing carries the history over
    assert dset_new[0:1].history == (record,)


def test_kind():
    dset = _small_dset(ploidy=1)
    assert dset.kind == Kind.PRESENCE_ABSENCE
    assert dset.kind.repeatability_metric == "Reproducibility"

    dset = _small_dset(ploidy=[1, 2, 2, 2])
    with pytest.raises(dartqc.InvalidDatasetError):
        dset.kind

    dset = _small_dset(ploidy=3)
    with pytest.raises(dartqc.InvalidDatasetError):
        dartqc.dataset.check_dataset(dset)

    with pytest.raises(dartqc.InvalidDatasetError):
        dartqc.dataset.check_dataset(pd.DataFrame())


def test_alignment():
    geno = np.zeros((3, 2))
    with pytest.raises(dartqc.InvalidDatasetError):
        Dataset(geno=geno, locus=pd.DataFrame({"rdepth": [1.0, 2.0]}))
    with pytest.raises(dartqc.InvalidDatasetError):
        Dataset(geno=geno, indiv=pd.DataFrame(index=["a", "b", "c"]))
    with pytest.raises(dartqc.InvalidDatasetError):
        Dataset(geno=geno, ploidy=[2, 2, 2])


def test_pop():
    dset = dartqc.dataset.make_toy(n_loc=20, n_indiv=10, n_pop=0)
    assert dset.pop is None
    assert dset.n_pop == 0

    dset = dartqc.dataset.make_toy(n_loc=20, n_indiv=10, n_pop=3)
    assert dset.n_pop == 3


def test_get_metric():
    dset = _small_dset()
    assert np.allclose(dartqc.dataset.get_metric(dset, "rdepth"), [3.0, 12.0, 40.0])
    with pytest.raises(dartqc.MissingMetricError) as excinfo:
        dartqc.dataset.get_metric(dset, "Reproducibility")
    assert excinfo.value.metric == "Reproducibility"
    assert "RepAvg" in str(excinfo.value)


def test_make_toy():
    dset = dartqc.dataset.make_toy(n_loc=50, n_indiv=8, kind="presence_absence")
    assert dset.kind == Kind.PRESENCE_ABSENCE
    assert "Reproducibility" in dset.locus.columns
    assert "rdepth" in dset.locus.columns
    geno = dset.geno.compute()
    assert np.nanmax(geno) <= 1

    dset2 = dartqc.dataset.make_toy(n_loc=50, n_indiv=8, kind="presence_absence")
    assert dset.locus.equals(dset2.locus)
