# deepfake_eval/plotting/style.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

import matplotlib as mpl
import matplotlib.pyplot as plt


PathLike = Union[str, Path]


@dataclass(frozen=True)
class PlotSettings:
    """
    Shared figure settings for ROC overlays and confusion matrices.
    """
    figsize: Tuple[float, float] = (7, 6)
    dpi: int = 300
    font_size: int = 12
    tick_size: int = 11
    legend_size: int = 10

    line_width: float = 1.4
    axis_line_width: float = 1.0

    grid: bool = False
    style: Optional[str] = None      # e.g. "seaborn-v0_8-whitegrid"


def apply_plot_defaults(cfg: PlotSettings = PlotSettings()) -> None:
    """Apply rcParams (fonts, line widths, output dpi), then the optional named style."""
    mpl.rcParams.update({
        "font.size": cfg.font_size,
        "axes.labelsize": cfg.font_size,
        "xtick.labelsize": cfg.tick_size,
        "ytick.labelsize": cfg.tick_size,
        "legend.fontsize": cfg.legend_size,

        "lines.linewidth": cfg.line_width,
        "axes.linewidth": cfg.axis_line_width,
        "xtick.major.width": cfg.axis_line_width,
        "ytick.major.width": cfg.axis_line_width,

        "axes.grid": cfg.grid,

        "savefig.dpi": cfg.dpi,
        "figure.dpi": cfg.dpi,
    })
    if cfg.style:
        plt.style.use(cfg.style)


def save_figure(
    fig: plt.Figure,
    outpath_no_ext: PathLike,
    save_pdf: bool = True,
    save_svg: bool = True,
    tight: bool = True,
) -> Tuple[Optional[Path], Optional[Path]]:
    """
    Save a figure as PDF and/or SVG from a single base path.

    Args:
        outpath_no_ext: e.g. "outputs/figures/roc_baseline"

    Returns:
        (pdf_path, svg_path)
    """
    # base names may contain dots (cm_test_baseline_vit_b.16), so suffixes are appended
    outpath_no_ext = Path(outpath_no_ext)
    outpath_no_ext.parent.mkdir(parents=True, exist_ok=True)

    bbox = "tight" if tight else None
    pdf_path = None
    svg_path = None

    if save_pdf:
        pdf_path = outpath_no_ext.parent / (outpath_no_ext.name + ".pdf")
        fig.savefig(pdf_path, format="pdf", bbox_inches=bbox)

    if save_svg:
        svg_path = outpath_no_ext.parent / (outpath_no_ext.name + ".svg")
        fig.savefig(svg_path, format="svg", bbox_inches=bbox)

    return pdf_path, svg_path
