# experiments/deepfake/scripts/01_select_thresholds.py
"""
Step 01: Select a Youden-optimal decision threshold per model on VAL.

Inputs:
  - predictions/<stage>/<model>_val.{csv,npz}

Outputs:
  - outputs/metrics/thresholds_<stage>.json
  - outputs/metrics/youden_sweep_<stage>_<model>.csv
"""

from __future__ import annotations

import argparse
from dataclasses import replace

from deepfake_eval.pipeline import RunPaths, select_thresholds
from deepfake_eval.utils import (
    configure_logging,
    dump_config_text,
    find_repo_root,
    load_evaluation_config,
    log_experiment_header,
    resolve_under_root,
)


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--config", type=str, default="configs/deepfake.yaml")
    ap.add_argument("--step", type=float, default=None, help="fixed grid step; overrides the config")
    args = ap.parse_args()

    root = find_repo_root()
    cfg = load_evaluation_config(resolve_under_root(args.config, root=root))
    if args.step is not None:
        cfg = replace(cfg, step=args.step)

    paths = RunPaths.from_config(cfg, root=root)
    logger = configure_logging(log_file=paths.logs / "01_select_thresholds.log")
    log_experiment_header(logger, "Step 01: threshold selection (VAL)", extra={"models": list(cfg.models)})
    dump_config_text(cfg.to_dict(), paths.logs / "config_resolved_01.json", logger=logger)

    results = select_thresholds(cfg, paths)
    for stage, per_model in results.items():
        for model, res in per_model.items():
            logger.info(f"[{stage}] {model}: threshold={res.threshold:.4f} J={res.report.counts.youden_j:.4f}")
    logger.info("Done.")


if __name__ == "__main__":
    main()
