"""
config.py - Settings for the vector gallery.

The decode pipeline itself needs only three knobs (sample limit, thread
pool size, and what to do with a sample whose raster fails); the demo
scripts also need the dataset path and the reports folder.  All of
them live in an optional repo-root config.yaml, layered over the
defaults below, and are checked once at load time.
"""

import os
import yaml
from typing import Any

# config.yaml sits next to the package, so scripts launched from any
# directory see the same settings.
_REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
_CONFIG_PATH = os.path.join(_REPO_ROOT, "config.yaml")

_DEFAULTS: dict[str, Any] = {
    "paths": {
        "input_csv": "data/samples.csv",
        "reports_folder": "reports",
    },
    "gallery": {
        "limit": 5,
        "max_workers": None,
        "on_error": "placeholder",
    },
}

_ON_ERROR_CHOICES = ("placeholder", "omit")


def _deep_merge(base: dict, override: dict) -> dict:
    """Layer *override* sections onto *base* without mutating either."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _check_gallery(gallery: dict[str, Any]) -> None:
    """Reject gallery settings the pipeline cannot honour."""
    limit = gallery["limit"]
    if limit is not None and (not isinstance(limit, int) or limit < 0):
        raise ValueError(f"gallery.limit must be a non-negative integer or null, got {limit!r}.")

    workers = gallery["max_workers"]
    if workers is not None and (not isinstance(workers, int) or workers < 1):
        raise ValueError(f"gallery.max_workers must be a positive integer or null, got {workers!r}.")

    if gallery["on_error"] not in _ON_ERROR_CHOICES:
        raise ValueError(
            f"gallery.on_error must be one of {list(_ON_ERROR_CHOICES)}, "
            f"got {gallery['on_error']!r}."
        )


def load_config(config_path: str = _CONFIG_PATH) -> dict[str, Any]:
    """
    Read gallery settings from *config_path* over the built-in defaults.

    A missing or empty file yields the defaults unchanged.

    Parameters
    ----------
    config_path : str
        YAML file to read.  Defaults to the repo-root config.yaml.

    Returns
    -------
    dict
        Settings with "paths" and "gallery" sections.

    Raises
    ------
    ValueError
        If a gallery setting is out of range.
    """
    user_config: dict[str, Any] = {}
    if os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f) or {}

    config = _deep_merge(_DEFAULTS, user_config)
    _check_gallery(config["gallery"])
    return config


# Loaded once at import; pipeline.build_gallery falls back to these values.
CONFIG = load_config()
