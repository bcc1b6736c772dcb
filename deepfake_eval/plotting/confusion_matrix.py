# deepfake_eval/plotting/confusion_matrix.py
from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Union

import numpy as np
import matplotlib.pyplot as plt

from ..evaluation.confusion import BinaryConfusion
from .style import PlotSettings, apply_plot_defaults, save_figure


PathLike = Union[str, Path]


def plot_binary_confusion(
    counts: BinaryConfusion,
    label_names: Optional[Dict[int, str]] = None,
    normalize: bool = False,
    title: Optional[str] = None,
    outpath_no_ext: Optional[PathLike] = None,
    cfg: PlotSettings = PlotSettings(figsize=(5, 4.5)),
    show: bool = False,
) -> plt.Figure:
    """
    Plot a 2x2 confusion matrix (rows = true, cols = predicted).

    Args:
        counts: confusion counts at the chosen threshold
        label_names: mapping id -> display name, default {0: "real", 1: "fake"}
        normalize: if True, show row-normalized rates instead of counts
    """
    apply_plot_defaults(cfg)

    label_names = label_names or {0: "real", 1: "fake"}
    names = [label_names.get(0, "0"), label_names.get(1, "1")]

    cm = counts.as_matrix().astype(float)
    if normalize:
        cm = cm / (cm.sum(axis=1, keepdims=True) + 1e-12)

    fig, ax = plt.subplots(figsize=cfg.figsize)
    im = ax.imshow(cm, interpolation="nearest", cmap="Blues")
    ax.set_xticks(np.arange(2))
    ax.set_yticks(np.arange(2))
    ax.set_xticklabels(names)
    ax.set_yticklabels(names)
    ax.set_xlabel("Predicted")
    ax.set_ylabel("True")
    if title:
        ax.set_title(title)

    for i in range(2):
        for j in range(2):
            text = f"{cm[i, j]:.2f}" if normalize else str(int(cm[i, j]))
            ax.text(j, i, text, ha="center", va="center")

    fig.colorbar(im, ax=ax, fraction=0.046, pad=0.04)
    fig.tight_layout()

    if outpath_no_ext is not None:
        save_figure(fig, outpath_no_ext)

    if show:
        plt.show()
    else:
        plt.close(fig)

    return fig
