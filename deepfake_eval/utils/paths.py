# deepfake_eval/utils/paths.py
from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Union


PathLike = Union[str, Path]

ROOT_MARKERS = ("pyproject.toml", ".git")


def ensure_dir(path: PathLike) -> Path:
    """Create a directory (parents ok). Returns the Path."""
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p


def find_repo_root(start: Optional[PathLike] = None) -> Path:
    """
    Walk upward from `start` (default: cwd) until pyproject.toml or .git is found.
    """
    p = Path.cwd() if start is None else Path(start).resolve()
    for candidate in (p, *p.parents):
        if any((candidate / m).exists() for m in ROOT_MARKERS):
            return candidate

    raise FileNotFoundError(
        f"Repository root not found above {p}. Expected one of: {', '.join(ROOT_MARKERS)}"
    )


def resolve_under_root(relative_path: PathLike, root: Optional[PathLike] = None) -> Path:
    """
    Resolve a path relative to the repository root. Absolute paths pass through.
    """
    rel = Path(relative_path)
    if rel.is_absolute():
        return rel
    base = find_repo_root() if root is None else Path(root)
    return (base / rel).resolve()


def default_experiment_dirs(experiment_dir: PathLike) -> Dict[str, Path]:
    """
    Standard output layout for an evaluation run, created on demand:

        <experiment_dir>/outputs/
            figures/   ROC overlays, confusion matrices
            metrics/   thresholds_<stage>.json, summary.csv, sweeps
            logs/      per-script log files, resolved config
    """
    out = Path(experiment_dir) / "outputs"
    return {
        "outputs": ensure_dir(out),
        "figures": ensure_dir(out / "figures"),
        "metrics": ensure_dir(out / "metrics"),
        "logs": ensure_dir(out / "logs"),
    }
