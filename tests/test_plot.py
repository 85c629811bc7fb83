"""
Check that the plotting functions run without error
"""
import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import dartqc


def test_adjusted_fences():
    # symmetric data: medcouple is 0 and the fences are Tukey's
    values = np.arange(1, 101, dtype=float)
    q1, q3 = np.percentile(values, [25, 75])
    lo, hi = dartqc.plot.adjusted_fences(values, whis=1.5)
    assert np.isclose(lo, q1 - 1.5 * (q3 - q1))
    assert np.isclose(hi, q3 + 1.5 * (q3 - q1))

    # right-skewed data: the upper fence moves out, the lower fence moves in
    values = np.random.default_rng(1).exponential(size=500)
    q1, q3 = np.percentile(values, [25, 75])
    lo, hi = dartqc.plot.adjusted_fences(values, whis=1.5)
    assert hi > q3 + 1.5 * (q3 - q1)
    assert lo > q1 - 1.5 * (q3 - q1)


def test_plots():
    dset = dartqc.dataset.make_toy(n_loc=60, n_indiv=8)
    values = dset.locus.RepAvg.values

    fig, axes = plt.subplots(nrows=4)
    dartqc.plot.hist(values, ax=axes[0], xlim=(values.min(), 1.0), title="RepAvg")
    dartqc.plot.boxplot(values, method="standard", ax=axes[1])
    dartqc.plot.boxplot(values, method="adjusted", ax=axes[2])
    dartqc.plot.smearplot(dset, ax=axes[3])
    plt.close(fig)

    fig, axes = dartqc.plot.quality_profile(values, title="SNP data")
    assert len(axes) == 2
    plt.close(fig)
