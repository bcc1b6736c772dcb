# deepfake_eval/plotting/roc.py
from __future__ import annotations

from pathlib import Path
from typing import Mapping, Optional, Union

import matplotlib.pyplot as plt

from ..evaluation.predictions import PredictionSet
from ..evaluation.roc import roc_auc, roc_curve
from ..evaluation.thresholding import ThresholdResult
from .style import PlotSettings, apply_plot_defaults, save_figure


PathLike = Union[str, Path]


def plot_roc_overlay(
    curves: Mapping[str, PredictionSet],
    operating_points: Optional[Mapping[str, ThresholdResult]] = None,
    title: Optional[str] = None,
    outpath_no_ext: Optional[PathLike] = None,
    cfg: PlotSettings = PlotSettings(),
    show: bool = False,
) -> plt.Figure:
    """
    Overlay ROC curves of several models on one axis.

    Args:
        curves: model name -> PredictionSet (insertion order = legend order)
        operating_points: model name -> selected threshold; drawn as a marker
            at (FPR, TPR) of the tuned threshold
    """
    apply_plot_defaults(cfg)
    operating_points = operating_points or {}

    fig, ax = plt.subplots(figsize=cfg.figsize)
    ax.plot([0, 1], [0, 1], "--", color="gray", linewidth=1.0, label="chance")

    for name, preds in curves.items():
        fpr, tpr, _ = roc_curve(preds.probabilities, preds.labels)
        auc = roc_auc(preds.probabilities, preds.labels)
        (line,) = ax.plot(fpr, tpr, label=f"{name} (AUC={auc:.3f})")

        op = operating_points.get(name)
        if op is not None:
            c = op.report.counts
            ax.plot([c.fpr], [c.tpr], "o", color=line.get_color(), markersize=6)
            ax.annotate(f"t={op.threshold:.3f}", (c.fpr, c.tpr), textcoords="offset points",
                        xytext=(6, -12), fontsize=8)

    ax.set_xlim(0, 1)
    ax.set_ylim(0, 1.02)
    ax.set_xlabel("False Positive Rate")
    ax.set_ylabel("True Positive Rate")
    if title:
        ax.set_title(title)
    ax.legend(loc="lower right")
    fig.tight_layout()

    if outpath_no_ext is not None:
        save_figure(fig, outpath_no_ext)

    if show:
        plt.show()
    else:
        plt.close(fig)

    return fig
