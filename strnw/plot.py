"""
plot.py — DP matrix heatmaps for strnw

Requires the plot extra:  pip install "strnw[plot]"
"""

from typing import Dict, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from .dp_core import STATE_M, AlignmentResult

# Nucleotide colors for axis labels
NT_COLOR = {
    "A": "#74AB86",  # soft green
    "C": "#6E93C0",  # soft blue
    "G": "#C19A5A",  # soft warm ochre
    "T": "#C26F6F",  # soft red
    "": "#000000",
}

grid_color_map = "vlag"


def _color_ticks(ticks, labels, nt_color_map):
    for tick, lab in zip(ticks, labels):
        tick.set_rotation(0)
        tick.set_va("center")
        tick.set_color(nt_color_map.get(lab, "black"))
        tick.set_fontweight("bold")


def plot_alignment_matrices(
    result: AlignmentResult,
    seq_1: str,
    seq_2: str,
    nt_color_map: Optional[Dict[str, str]] = None,
    figsize: Tuple[int, int] = (12, 6),
    marker_size: int = 18,
    marker_color: str = "#00ff2f",
    marker_width: int = 2,
    show_bg_path: bool = True,
    marker_bg_color: str = "black",
    colormap: str = grid_color_map,
) -> plt.Figure:
    """
    Plot the M and I score layers as heatmaps with the traceback path
    overlaid.

    Parameters
    ----------
    result : AlignmentResult
        From align(..., return_data=True).
    seq_1 : str
        Query (columns).
    seq_2 : str
        Reference (rows).
    nt_color_map : dict, optional
        Mapping nucleotides to colors for axis labels.
    show_bg_path : bool
        Show faded path markers on both panels.

    Returns
    -------
    fig : matplotlib.Figure
    """
    if result.data is None:
        raise ValueError("result has no DP tables; call align(..., return_data=True)")
    if nt_color_map is None:
        nt_color_map = NT_COLOR

    matrices = [result.data.M, result.data.I]
    titles = ["M (match/mismatch)", "I (gap)"]

    values = np.concatenate([mat.ravel() for mat in matrices]).astype(float)
    vmin, vmax = values.min(), values.max()
    cmap = sns.color_palette(colormap, as_cmap=True)

    xticklabels = [""] + list(seq_1)
    yticklabels = [""] + list(seq_2)

    fig, axes = plt.subplots(1, 2, figsize=figsize, sharex=True, sharey=True)

    for ax, mat, title in zip(axes, matrices, titles):
        sns.heatmap(
            mat.astype(float),
            ax=ax,
            cmap=cmap,
            center=0,
            vmin=vmin,
            vmax=vmax,
            square=True,
            cbar=False,
            annot=True,
            fmt=".0f" if np.issubdtype(mat.dtype, np.integer) else ".1f",
            xticklabels=xticklabels,
            yticklabels=yticklabels,
        )
        ax.set_title(title)
        ax.set_xlabel("seq_1 (columns)")
        ax.tick_params(top=True, bottom=False, labeltop=True, labelbottom=False)
        ax.xaxis.set_label_position("top")
        _color_ticks(ax.get_xticklabels(), xticklabels, nt_color_map)

    axes[0].set_ylabel("seq_2 (rows)")
    _color_ticks(axes[0].get_yticklabels(), yticklabels, nt_color_map)

    for i, j, state in result.path:
        x, y = j + 0.5, i + 0.5
        if show_bg_path:
            for ax in axes:
                ax.plot(
                    x, y,
                    marker="s",
                    markersize=marker_size,
                    markeredgecolor=marker_bg_color,
                    markerfacecolor="none",
                    alpha=0.6,
                    markeredgewidth=marker_width,
                )
        axes[0 if state == STATE_M else 1].plot(
            x, y,
            marker="s",
            markersize=marker_size,
            markeredgecolor=marker_color,
            markerfacecolor="none",
            alpha=0.9,
            markeredgewidth=marker_width,
        )

    fig.tight_layout()
    return fig
