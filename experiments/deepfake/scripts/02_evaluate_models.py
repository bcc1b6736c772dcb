# experiments/deepfake/scripts/02_evaluate_models.py
"""
Step 02: Evaluate every model on TEST at the default and the tuned threshold.

Inputs:
  - predictions/<stage>/<model>_test.{csv,npz}
  - outputs/metrics/thresholds_<stage>.json   (from step 01)

Outputs:
  - outputs/metrics/summary.csv, summary.json
  - outputs/figures/roc_test_<stage>.{pdf,svg}
  - outputs/figures/cm_test_<stage>_<model>.{pdf,svg}
"""

from __future__ import annotations

import argparse

from deepfake_eval.pipeline import RunPaths, evaluate_models, load_thresholds
from deepfake_eval.utils import (
    configure_logging,
    find_repo_root,
    load_evaluation_config,
    log_experiment_header,
    resolve_under_root,
)


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--config", type=str, default="configs/deepfake.yaml")
    args = ap.parse_args()

    root = find_repo_root()
    cfg = load_evaluation_config(resolve_under_root(args.config, root=root))
    paths = RunPaths.from_config(cfg, root=root)

    logger = configure_logging(log_file=paths.logs / "02_evaluate_models.log")
    log_experiment_header(logger, "Step 02: evaluation (TEST)", extra={"stages": list(cfg.stages)})

    thresholds = load_thresholds(cfg, paths)
    table = evaluate_models(cfg, paths, thresholds)
    logger.info(f"{len(table)} summary rows.")
    logger.info("Done.")


if __name__ == "__main__":
    main()
