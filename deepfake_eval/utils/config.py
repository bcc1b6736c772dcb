# deepfake_eval/utils/config.py
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml


ON_ERROR_CHOICES = ("skip", "raise")


def load_yaml(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {p}")
    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a mapping/dict, got {type(data)}")
    return data


def get_section(cfg: Dict[str, Any], *keys: str) -> Dict[str, Any]:
    out: Dict[str, Any] = cfg
    for k in keys:
        v = out.get(k, {})
        if v is None:
            v = {}
        if not isinstance(v, dict):
            raise ValueError(f"Config section {'.'.join(keys)} must be a dict")
        out = v
    return out


@dataclass(frozen=True)
class EvaluationConfig:
    """
    Resolved settings for one evaluation run.

    Paths are kept as given; scripts resolve them under the repo root.
    """
    models: Tuple[str, ...]
    stages: Tuple[str, ...] = ("baseline", "finetuned")
    experiment_dir: str = "experiments/deepfake"
    predictions_dir: str = "experiments/deepfake/predictions"
    default_threshold: float = 0.5
    step: Optional[float] = None
    save_sweeps: bool = True
    on_error: str = "skip"
    plots_enabled: bool = True
    label_names: Dict[int, str] = field(default_factory=lambda: {0: "real", 1: "fake"})

    def __post_init__(self) -> None:
        if not self.models:
            raise ValueError("Config must list at least one model under 'models'.")
        if not self.stages:
            raise ValueError("Config must list at least one stage under 'stages'.")
        if not (0.0 <= self.default_threshold <= 1.0):
            raise ValueError(f"thresholds.default must lie in [0, 1], got {self.default_threshold}")
        if self.step is not None and not (0.0 < self.step <= 1.0):
            raise ValueError(f"thresholds.step must lie in (0, 1] or be null, got {self.step}")
        if self.on_error not in ON_ERROR_CHOICES:
            raise ValueError(f"evaluation.on_error must be one of {ON_ERROR_CHOICES}, got {self.on_error!r}")

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any]) -> "EvaluationConfig":
        thr = get_section(cfg, "thresholds")
        ev = get_section(cfg, "evaluation")
        plots = get_section(cfg, "plots")

        step = thr.get("step")
        stages = cfg.get("stages")
        if stages is None:
            stages = ["baseline", "finetuned"]
        kwargs: Dict[str, Any] = {
            "models": tuple(map(str, cfg.get("models") or [])),
            "stages": tuple(map(str, stages)),
            "default_threshold": float(thr.get("default", 0.5)),
            "step": None if step is None else float(step),
            "save_sweeps": bool(thr.get("save_sweeps", True)),
            "on_error": str(ev.get("on_error", "skip")),
            "plots_enabled": bool(plots.get("enabled", True)),
        }
        for key in ("experiment_dir", "predictions_dir"):
            if cfg.get(key):
                kwargs[key] = str(cfg[key])
        if cfg.get("label_names"):
            kwargs["label_names"] = {int(k): str(v) for k, v in cfg["label_names"].items()}
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["models"] = list(self.models)
        out["stages"] = list(self.stages)
        return out


def load_evaluation_config(path: str | Path) -> EvaluationConfig:
    return EvaluationConfig.from_dict(load_yaml(path))
