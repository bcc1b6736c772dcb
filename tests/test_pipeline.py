# tests/test_pipeline.py
import logging
from dataclasses import replace

import pandas as pd
import pytest

from deepfake_eval.data import load_json, save_predictions
from deepfake_eval.evaluation import InsufficientDataError, PredictionSet
from deepfake_eval.pipeline import (
    RunPaths,
    evaluate_models,
    load_thresholds,
    run_pipeline,
    select_thresholds,
)
from deepfake_eval.utils import EvaluationConfig

from conftest import make_random_set

MODELS = ("vgg16", "resnet50")
STAGES = ("baseline", "finetuned")


@pytest.fixture
def cfg() -> EvaluationConfig:
    return EvaluationConfig(
        models=MODELS,
        stages=STAGES,
        experiment_dir="exp",
        predictions_dir="exp/predictions",
        plots_enabled=False,
    )


@pytest.fixture
def paths(tmp_path, cfg) -> RunPaths:
    seed = 0
    for stage in STAGES:
        for model in MODELS:
            for split in ("val", "test"):
                suffix = ".csv" if model == "vgg16" else ".npz"
                out = tmp_path / "exp" / "predictions" / stage / f"{model}_{split}{suffix}"
                save_predictions(out, make_random_set(seed, n=120))
                seed += 1
    return RunPaths.from_config(cfg, root=tmp_path)


def test_run_paths_layout(tmp_path, paths):
    assert paths.predictions_dir == (tmp_path / "exp" / "predictions").resolve()
    for d in (paths.outputs, paths.figures, paths.metrics, paths.logs):
        assert d.is_dir()
    assert paths.thresholds_file("baseline").name == "thresholds_baseline.json"


def test_select_thresholds_writes_json_and_sweeps(cfg, paths):
    results = select_thresholds(cfg, paths)
    assert set(results) == set(STAGES)
    for stage in STAGES:
        payload = load_json(paths.thresholds_file(stage))
        assert list(payload) == list(MODELS)
        for model in MODELS:
            assert payload[model]["threshold"] == pytest.approx(results[stage][model].threshold)
            assert payload[model]["criterion"] == "youden_j"
            assert (paths.metrics / f"youden_sweep_{stage}_{model}.csv").exists()


def test_load_thresholds_round_trip(cfg, paths):
    results = select_thresholds(cfg, paths)
    loaded = load_thresholds(cfg, paths)
    assert loaded == {
        stage: {m: pytest.approx(r.threshold) for m, r in per_model.items()}
        for stage, per_model in results.items()
    }


def test_load_thresholds_missing_stage_is_empty(cfg, paths):
    assert load_thresholds(cfg, paths) == {"baseline": {}, "finetuned": {}}


def test_run_pipeline_builds_default_and_tuned_rows(cfg, paths):
    table = run_pipeline(cfg, paths)
    assert len(table) == len(STAGES) * len(MODELS) * 2
    assert [(r.stage, r.model_name) for r in table][:4] == [
        ("baseline/default", "vgg16"),
        ("baseline/tuned", "vgg16"),
        ("baseline/default", "resnet50"),
        ("baseline/tuned", "resnet50"),
    ]
    assert all(r.threshold == 0.5 for r in table if r.stage.endswith("/default"))

    df = pd.read_csv(paths.metrics / "summary.csv")
    assert len(df) == len(table)
    assert list(df.columns[:3]) == ["stage", "model_name", "threshold"]
    assert len(load_json(paths.metrics / "summary.json")) == len(table)


def test_tuned_threshold_comes_from_validation(cfg, paths):
    selected = select_thresholds(cfg, paths)
    table = evaluate_models(cfg, paths, load_thresholds(cfg, paths))
    tuned = {(r.stage, r.model_name): r.threshold for r in table if r.stage.endswith("/tuned")}
    for stage in STAGES:
        for model in MODELS:
            assert tuned[(f"{stage}/tuned", model)] == pytest.approx(selected[stage][model].threshold)


def test_missing_tuned_threshold_keeps_default_row(cfg, paths):
    table = evaluate_models(cfg, paths, {"baseline": {"vgg16": 0.3}})
    assert [(r.stage, r.model_name) for r in table] == [
        ("baseline/default", "vgg16"),
        ("baseline/tuned", "vgg16"),
        ("baseline/default", "resnet50"),
        ("finetuned/default", "vgg16"),
        ("finetuned/default", "resnet50"),
    ]


def test_skip_policy_drops_failing_model(cfg, paths):
    (paths.predictions_dir / "baseline" / "resnet50_test.npz").unlink()
    save_predictions(
        paths.predictions_dir / "finetuned" / "vgg16_val.csv",
        PredictionSet([0.2, 0.7, 0.9], [1, 1, 1]),
    )

    selected = select_thresholds(cfg, paths)
    assert "vgg16" not in selected["finetuned"]

    table = run_pipeline(cfg, paths)
    keys = [(r.stage, r.model_name) for r in table]
    assert ("baseline/default", "resnet50") not in keys
    assert ("finetuned/default", "vgg16") in keys
    assert ("finetuned/tuned", "vgg16") not in keys


def test_raise_policy_propagates(cfg, paths):
    strict = replace(cfg, on_error="raise")
    save_predictions(
        paths.predictions_dir / "baseline" / "vgg16_val.csv",
        PredictionSet([0.2, 0.7], [0, 0]),
    )
    with pytest.raises(InsufficientDataError):
        select_thresholds(strict, paths)

    (paths.predictions_dir / "finetuned" / "resnet50_test.npz").unlink()
    with pytest.raises(FileNotFoundError):
        evaluate_models(strict, paths, {})


def test_plots_are_written(cfg, paths):
    run_pipeline(replace(cfg, plots_enabled=True, models=("vgg16",), stages=("baseline",)), paths)
    assert (paths.figures / "roc_test_baseline.pdf").exists()
    assert (paths.figures / "roc_test_baseline.svg").exists()
    assert (paths.figures / "cm_test_baseline_vgg16.pdf").exists()


@pytest.mark.parametrize(
    "content",
    ["probability,label\nabc,1\n0.4,0\n", "prob,label\n0.1,0\n0.9,1\n", ""],
    ids=["non_numeric", "missing_column", "empty_file"],
)
def test_skip_policy_survives_malformed_csv(cfg, paths, content):
    (paths.predictions_dir / "baseline" / "vgg16_val.csv").write_text(content, encoding="utf-8")

    selected = select_thresholds(cfg, paths)
    assert list(selected["baseline"]) == ["resnet50"]
    assert list(selected["finetuned"]) == list(MODELS)
    assert list(load_json(paths.thresholds_file("baseline"))) == ["resnet50"]


def test_single_class_test_split_writes_null_auc(cfg, paths):
    save_predictions(
        paths.predictions_dir / "baseline" / "vgg16_test.csv",
        PredictionSet([0.2, 0.7, 0.9], [1, 1, 1]),
    )
    evaluate_models(cfg, paths, {"baseline": {"vgg16": 0.5}})

    text = (paths.metrics / "summary.json").read_text(encoding="utf-8")
    assert "NaN" not in text
    rows = load_json(paths.metrics / "summary.json")
    vgg = [r for r in rows if r["model_name"] == "vgg16" and r["stage"].startswith("baseline/")]
    assert len(vgg) == 2
    assert all(r["auc"] is None for r in vgg)


def test_tuned_confusion_is_logged(cfg, paths, caplog):
    caplog.set_level(logging.INFO, logger="deepfake_eval.pipeline")
    evaluate_models(cfg, paths, {"baseline": {"vgg16": 0.5}})

    cm_logs = [r.getMessage() for r in caplog.records if " CM @ t=" in r.getMessage()]
    assert len(cm_logs) == 1
    assert cm_logs[0].startswith("[baseline/tuned] vgg16 CM @ t=0.5000:")
    assert "pred real" in cm_logs[0] and "pred fake" in cm_logs[0]
