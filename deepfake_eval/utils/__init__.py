# deepfake_eval/utils/__init__.py
"""
Utility subpackage.

Includes:
- logging: consistent logging to console and optionally to file
- config: YAML loading and the typed EvaluationConfig
- paths: repo-root aware path helpers and output directory conventions
"""

from .logging import get_logger, configure_logging, log_experiment_header, dump_config_text
from .config import EvaluationConfig, load_yaml, get_section, load_evaluation_config
from .paths import (
    find_repo_root,
    ensure_dir,
    resolve_under_root,
    default_experiment_dirs,
)

__all__ = [
    "get_logger",
    "configure_logging",
    "log_experiment_header",
    "dump_config_text",
    "EvaluationConfig",
    "load_yaml",
    "get_section",
    "load_evaluation_config",
    "find_repo_root",
    "ensure_dir",
    "resolve_under_root",
    "default_experiment_dirs",
]
