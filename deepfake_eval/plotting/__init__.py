# deepfake_eval/plotting/__init__.py
"""
Plotting subpackage (matplotlib).

- style: shared PlotSettings, rcParams defaults, PDF/SVG saving
- roc: ROC overlay across models with tuned operating points
- confusion_matrix: 2x2 confusion matrix at a chosen threshold
"""

from .style import PlotSettings, apply_plot_defaults, save_figure
from .roc import plot_roc_overlay
from .confusion_matrix import plot_binary_confusion

__all__ = [
    "PlotSettings",
    "apply_plot_defaults",
    "save_figure",
    "plot_roc_overlay",
    "plot_binary_confusion",
]
