"""
test_plot.py — Smoke tests for the optional matrix heatmaps
"""

import pytest

matplotlib = pytest.importorskip("matplotlib")
pytest.importorskip("seaborn")
matplotlib.use("Agg")

from strnw import align  # noqa: E402
from strnw.plot import plot_alignment_matrices  # noqa: E402


def test_plot_alignment_matrices(scoring):
    import matplotlib.pyplot as plt

    result = align("GATTACA", "CCGATTACACC", scoring, return_data=True)
    fig = plot_alignment_matrices(result, "GATTACA", "CCGATTACACC")
    assert len(fig.axes) == 2
    assert fig.axes[0].get_title() == "M (match/mismatch)"
    plt.close(fig)


def test_plot_requires_tables(scoring):
    result = align("ACGT", "ACGT", scoring)
    with pytest.raises(ValueError):
        plot_alignment_matrices(result, "ACGT", "ACGT")
