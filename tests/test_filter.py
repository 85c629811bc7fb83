import numpy as np
import pandas as pd
import pytest
from structlog.testing import capture_logs
import dartqc


def _rdepth_dset():
    rdepth = [1, 4, 5, 6, 10, 50, 51, 60, 70, 80]
    df_locus = pd.DataFrame(
        {"rdepth": rdepth}, index=[f"L{i}" for i in range(len(rdepth))]
    )
    return dartqc.Dataset(geno=np.zeros((10, 3)), locus=df_locus, ploidy=2)


def _events(logs, level=None):
    return [e["event"] for e in logs if level is None or e["log_level"] == level]


def test_rdepth():
    dset = _rdepth_dset()
    with capture_logs() as logs:
        dset_new = dartqc.filter.rdepth(dset, lower=5, upper=50, verbose=3)

    assert dset_new.n_loc == 4
    assert sorted(dset_new.locus.rdepth) == [5, 6, 10, 50]
    assert list(dset_new.locus.index) == ["L2", "L3", "L4", "L5"]
    assert len(dset_new.locus) == dset_new.n_loc
    assert dset_new.geno.shape == (4, 3)
    assert any("No. of loci retained: 4" in e for e in _events(logs))

    # the input is left untouched
    assert dset.n_loc == 10
    assert dset.history == ()

    record = dset_new.history[-1]
    assert record.name == "dartqc.filter.rdepth"
    assert record.params["lower"] == 5
    assert record.params["upper"] == 50


def test_rdepth_idempotent():
    dset = dartqc.dataset.make_toy(n_loc=300, n_indiv=10)
    dset1 = dartqc.filter.rdepth(dset, lower=8, upper=40, verbose=0)
    dset2 = dartqc.filter.rdepth(dset1, lower=8, upper=40, verbose=0)
    assert dset1.n_loc == dset2.n_loc
    assert dset1.locus.index.equals(dset2.locus.index)
    assert len(dset2.history) == 2

    values = dset1.locus.rdepth.values
    assert np.all((values >= 8) & (values <= 40))
    dropped = dset.locus.loc[~dset.locus.index.isin(dset1.locus.index), "rdepth"]
    assert np.all((dropped < 8) | (dropped > 40))


def test_rdepth_empty():
    dset = _rdepth_dset()
    with capture_logs() as logs:
        dset_new = dartqc.filter.rdepth(dset, lower=1000, upper=2000)
    assert dset_new.n_loc == 0
    assert len(dset_new.locus) == 0
    assert dset_new.geno.shape == (0, 3)
    assert any("No loci retained" in e for e in _events(logs, "warning"))


def test_repeatability():
    dset = dartqc.dataset.make_toy(n_loc=200, n_indiv=10)
    dset_new = dartqc.filter.repeatability(dset, threshold=0.98, verbose=0)
    assert np.all(dset_new.locus.RepAvg >= 0.98)
    assert dset_new.n_loc == np.sum(dset.locus.RepAvg >= 0.98)
    assert dset_new.history[-1].params["metric"] == "RepAvg"


def test_repeatability_nothing_to_remove():
    dset = dartqc.Dataset(
        geno=np.ones((5, 4)),
        locus=pd.DataFrame({"RepAvg": np.ones(5)}),
        ploidy=2,
    )
    with capture_logs() as logs:
        dset_new = dartqc.filter.repeatability(dset, threshold=0.99)
    assert dset_new.n_loc == 5
    assert any(
        "No loci with repeatability less than 0.99" in e for e in _events(logs)
    )


def test_repeatability_presence_absence():
    dset = dartqc.dataset.make_toy(n_loc=100, n_indiv=10, kind="presence_absence")
    dset_new = dartqc.filter.repeatability(dset, threshold=0.99, verbose=0)
    assert np.all(dset_new.locus.Reproducibility >= 0.99)
    assert dset_new.history[-1].params["metric"] == "Reproducibility"

    # SNP metric is not consulted for presence/absence data
    dset.locus.drop(columns="Reproducibility", inplace=True)
    dset.locus["RepAvg"] = 1.0
    with pytest.raises(dartqc.MissingMetricError):
        dartqc.filter.repeatability(dset, verbose=0)


def test_repeatability_threshold_reset():
    dset = dartqc.dataset.make_toy(n_loc=100, n_indiv=10)
    with capture_logs() as logs:
        dset_new = dartqc.filter.repeatability(dset, threshold=1.5, verbose=0)
    assert any("must be between 0 and 1" in e for e in _events(logs, "warning"))
    assert dset_new.history[-1].params["threshold"] == 0.99
    assert np.all(dset_new.locus.RepAvg >= 0.99)


def test_by_metric():
    dset = dartqc.dataset.make_toy(n_loc=100, n_indiv=10)
    dset.locus.loc[dset.locus.index[0], "rdepth"] = np.nan
    dset_new = dartqc.filter.by_metric(dset, "rdepth", lower=10, verbose=0)
    assert np.all(dset_new.locus.rdepth >= 10)
    assert dset.locus.index[0] not in dset_new.locus.index

    dset_new = dartqc.filter.by_metric(dset, "rdepth", verbose=0)
    assert dset_new.n_loc == dset.n_loc - 1


def test_keep_mask():
    values = np.array([1.0, 5.0, np.nan, 50.0, 51.0])
    assert list(dartqc.filter.keep_mask(values, 5, 50)) == [
        False,
        True,
        False,
        True,
        False,
    ]
    assert list(dartqc.filter.keep_mask(values)) == [True, True, False, True, True]


def test_errors():
    dset = _rdepth_dset()
    with pytest.raises(dartqc.InvalidDatasetError):
        dartqc.filter.rdepth(dset.locus)

    dset_mixed = dartqc.Dataset(
        geno=np.zeros((10, 3)), locus=dset.locus, ploidy=[1, 2, 2]
    )
    with pytest.raises(dartqc.InvalidDatasetError):
        dartqc.filter.rdepth(dset_mixed)

    with pytest.raises(dartqc.MissingMetricError):
        dartqc.filter.repeatability(dset)
    with pytest.raises(KeyError):
        dartqc.filter.by_metric(dset, "AvgPIC")


def test_verbosity():
    dset = _rdepth_dset()
    with capture_logs() as logs:
        dartqc.filter.rdepth(dset, verbose=0)
    assert _events(logs, "info") == []

    with capture_logs() as logs:
        dartqc.filter.rdepth(dset, verbose=1)
    assert _events(logs, "info") == [
        "Starting dartqc.filter.rdepth",
        "Completed: dartqc.filter.rdepth",
    ]

    with capture_logs() as logs:
        dset_new = dartqc.filter.rdepth(dset, verbose=9)
    assert any("Parameter 'verbose'" in e for e in _events(logs, "warning"))
    assert dset_new.history[-1].params["verbose"] == 2

    with capture_logs() as logs:
        dartqc.filter.rdepth(dset, verbose="full")
    assert "version" in _events(logs, "info")[0]

    # numpy integers are accepted like python integers
    with capture_logs() as logs:
        dset_new = dartqc.filter.rdepth(dset, verbose=np.int64(0))
    assert logs == []
    assert dset_new.history[-1].params["verbose"] == 0

    with capture_logs() as logs:
        dartqc.filter.rdepth(dset, verbose=np.int32(1))
    assert _events(logs, "warning") == []
    assert len(_events(logs, "info")) == 2
