# experiments/deepfake/scripts/03_run_pipeline.py
"""
Step 03: Threshold selection on VAL followed by evaluation on TEST in one run.

Equivalent to running steps 01 and 02 back to back.
"""

from __future__ import annotations

import argparse
from dataclasses import replace

from deepfake_eval.pipeline import RunPaths, run_pipeline
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
    ap.add_argument("--on_error", type=str, choices=["skip", "raise"], default=None)
    args = ap.parse_args()

    root = find_repo_root()
    raw = load_evaluation_config(resolve_under_root(args.config, root=root))
    cfg = raw if args.on_error is None else replace(raw, on_error=args.on_error)
    paths = RunPaths.from_config(cfg, root=root)

    logger = configure_logging(log_file=paths.logs / "03_run_pipeline.log")
    log_experiment_header(logger, "Step 03: full evaluation pipeline", extra={"config": args.config})
    dump_config_text(cfg.to_dict(), paths.logs / "config_resolved_03.json", logger=logger)

    run_pipeline(cfg, paths)
    logger.info("Done.")


if __name__ == "__main__":
    main()
