# deepfake_eval/pipeline.py
"""
Run-level orchestration: threshold selection on VAL, evaluation on TEST.

For every stage (e.g. baseline, finetuned) and model:

    VAL predictions  -> select_threshold (Youden's J) -> thresholds_<stage>.json
    TEST predictions -> evaluate @ default threshold  -> "<stage>/default" row
                     -> evaluate @ tuned threshold    -> "<stage>/tuned" row

All rows go into one SummaryTable written to outputs/metrics/summary.csv.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union

from .data.io import find_predictions_file, load_json, load_predictions, save_json
from .evaluation.confusion import format_confusion
from .evaluation.errors import EvaluationError
from .evaluation.predictions import PredictionSet, validate_threshold
from .evaluation.summary import EvaluationRow, SummaryTable, build_summary, format_summary
from .evaluation.thresholding import ThresholdResult, select_threshold, threshold_sweep
from .plotting.confusion_matrix import plot_binary_confusion
from .plotting.roc import plot_roc_overlay
from .utils.config import EvaluationConfig
from .utils.paths import default_experiment_dirs, resolve_under_root


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# stage -> model -> threshold
Thresholds = Dict[str, Dict[str, float]]


@dataclass(frozen=True)
class RunPaths:
    predictions_dir: Path
    outputs: Path
    figures: Path
    metrics: Path
    logs: Path

    @classmethod
    def from_config(cls, cfg: EvaluationConfig, root: Optional[PathLike] = None) -> "RunPaths":
        dirs = default_experiment_dirs(resolve_under_root(cfg.experiment_dir, root=root))
        return cls(
            predictions_dir=resolve_under_root(cfg.predictions_dir, root=root),
            outputs=dirs["outputs"],
            figures=dirs["figures"],
            metrics=dirs["metrics"],
            logs=dirs["logs"],
        )

    def thresholds_file(self, stage: str) -> Path:
        return self.metrics / f"thresholds_{stage}.json"


def _handle(cfg: EvaluationConfig, exc: Exception, what: str) -> None:
    if cfg.on_error == "raise":
        raise exc
    logger.warning(f"Skipping {what}: {type(exc).__name__}: {exc}")


def _load_split(paths: RunPaths, stage: str, model: str, split: str) -> PredictionSet:
    path = find_predictions_file(paths.predictions_dir, stage, model, split)
    preds = load_predictions(path)
    logger.info(
        f"[{stage}] {model} {split}: n={len(preds)} fake={preds.n_positive} real={preds.n_negative} ({path.name})"
    )
    return preds


def select_thresholds(cfg: EvaluationConfig, paths: RunPaths) -> Dict[str, Dict[str, ThresholdResult]]:
    """
    Select a Youden-optimal threshold per stage and model on the VAL split.

    Writes:
        metrics/thresholds_<stage>.json
        metrics/youden_sweep_<stage>_<model>.csv  (if cfg.save_sweeps)
    """
    results: Dict[str, Dict[str, ThresholdResult]] = {}

    for stage in cfg.stages:
        stage_results: Dict[str, ThresholdResult] = {}
        for model in cfg.models:
            try:
                preds = _load_split(paths, stage, model, "val")
                res = select_threshold(preds, step=cfg.step, model_name=f"[{stage}] {model}")
            except (FileNotFoundError, EvaluationError) as exc:
                _handle(cfg, exc, f"threshold selection for [{stage}] {model}")
                continue

            stage_results[model] = res
            if cfg.save_sweeps:
                sweep_path = paths.metrics / f"youden_sweep_{stage}_{model}.csv"
                threshold_sweep(preds, step=cfg.step).to_csv(sweep_path, index=False)

        payload = {
            model: {
                "threshold": res.threshold,
                "youden_j": res.report.counts.youden_j,
                "criterion": "youden_j",
                "step": cfg.step,
                "val": res.report.to_dict(),
            }
            for model, res in stage_results.items()
        }
        out_path = paths.thresholds_file(stage)
        save_json(out_path, payload)
        logger.info(f"[{stage}] saved {len(payload)} thresholds to: {out_path}")

        results[stage] = stage_results

    return results


def load_thresholds(cfg: EvaluationConfig, paths: RunPaths) -> Thresholds:
    """Read thresholds_<stage>.json for every configured stage; missing files give empty stages."""
    out: Thresholds = {}
    for stage in cfg.stages:
        path = paths.thresholds_file(stage)
        if not path.exists():
            logger.warning(f"[{stage}] no tuned thresholds at {path}; only default rows will be built.")
            out[stage] = {}
            continue
        out[stage] = {model: float(entry["threshold"]) for model, entry in load_json(path).items()}
    return out


def evaluate_models(cfg: EvaluationConfig, paths: RunPaths, thresholds: Thresholds) -> SummaryTable:
    """
    Evaluate every stage/model on TEST at the default and tuned thresholds.

    Writes:
        metrics/summary.csv, metrics/summary.json
        figures/roc_test_<stage>.{pdf,svg}, figures/cm_test_<stage>_<model>.{pdf,svg} (if plots enabled)
    """
    rows: List[EvaluationRow] = []
    test_sets: Dict[str, Dict[str, PredictionSet]] = {}

    for stage in cfg.stages:
        stage_tuned = thresholds.get(stage, {})
        test_sets[stage] = {}
        for model in cfg.models:
            try:
                preds = _load_split(paths, stage, model, "test")
                tuned = stage_tuned.get(model)
                if tuned is not None:
                    tuned = validate_threshold(tuned)
            except (FileNotFoundError, EvaluationError) as exc:
                _handle(cfg, exc, f"evaluation for [{stage}] {model}")
                continue

            test_sets[stage][model] = preds
            rows.append((model, preds, cfg.default_threshold, f"{stage}/default"))
            if tuned is None:
                logger.warning(f"[{stage}] {model}: no tuned threshold; tuned row omitted.")
            else:
                rows.append((model, preds, tuned, f"{stage}/tuned"))

    table = build_summary(rows)

    csv_path = table.to_csv(paths.metrics / "summary.csv")
    save_json(paths.metrics / "summary.json", [r.to_dict() for r in table])
    logger.info(f"Summary:\n{format_summary(table)}")
    for r in table:
        if r.stage is not None and r.stage.endswith("/tuned"):
            logger.info(f"[{r.stage}] {r.model_name} CM @ t={r.threshold:.4f}:\n"
                        f"{format_confusion(r.report.counts, cfg.label_names)}")
    logger.info(f"Saved: {csv_path}")

    if cfg.plots_enabled:
        _plot_stage_figures(cfg, paths, table, test_sets)

    return table


def _plot_stage_figures(
    cfg: EvaluationConfig,
    paths: RunPaths,
    table: SummaryTable,
    test_sets: Dict[str, Dict[str, PredictionSet]],
) -> None:
    for stage, curves in test_sets.items():
        if not curves:
            continue
        tuned_rows = {r.model_name: r for r in table if r.stage == f"{stage}/tuned"}
        operating_points = {
            name: ThresholdResult(threshold=r.threshold, report=r.report) for name, r in tuned_rows.items()
        }
        plot_roc_overlay(
            curves,
            operating_points=operating_points,
            title=f"ROC on TEST ({stage})",
            outpath_no_ext=paths.figures / f"roc_test_{stage}",
        )
        for name, r in tuned_rows.items():
            plot_binary_confusion(
                r.report.counts,
                label_names=cfg.label_names,
                title=f"{name} ({stage}, t={r.threshold:.3f})",
                outpath_no_ext=paths.figures / f"cm_test_{stage}_{name}",
            )
    logger.info(f"Saved figures to: {paths.figures}")


def run_pipeline(cfg: EvaluationConfig, paths: RunPaths) -> SummaryTable:
    """Threshold selection followed by evaluation, sharing the in-memory thresholds."""
    selected = select_thresholds(cfg, paths)
    thresholds: Thresholds = {
        stage: {model: res.threshold for model, res in per_model.items()}
        for stage, per_model in selected.items()
    }
    return evaluate_models(cfg, paths, thresholds)
