"""
YAML → typed config loader.

Loads model constants from config.yaml (bundled with the package) and
optionally merges user overrides from ~/.rooted/config.yaml.

Usage:
    from rooted.core.engine.config_loader import progression_params_from_config
    params = progression_params_from_config()

If the user override file exists but cannot be parsed, a warning is logged
and the file is ignored.
"""

from __future__ import annotations

import importlib.resources
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from ..models import ProgressionParams

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file; return {} if it is unreadable or not a mapping."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Ignoring config file %s: %s", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_rooted_home() -> Path:
    """Data directory: $ROOTED_HOME if set, else ~/.rooted."""
    env = os.environ.get("ROOTED_HOME")
    if env:
        return Path(env).expanduser()
    return Path.home() / ".rooted"


def get_bundled_yaml_path() -> Path | None:
    """Return the path to the bundled config.yaml, or None if not found."""
    ref = importlib.resources.files("rooted").joinpath("config.yaml")
    if ref.is_file():
        return Path(str(ref))
    candidate = Path(__file__).parent.parent.parent / "config.yaml"
    return candidate if candidate.exists() else None


def get_user_yaml_path() -> Path | None:
    """Return <rooted home>/config.yaml if it exists, else None."""
    p = get_rooted_home() / "config.yaml"
    return p if p.exists() else None


def load_model_config() -> dict[str, Any]:
    """
    Load and merge model configuration from YAML sources.

    Load order (later overrides earlier):
    1. Bundled src/rooted/config.yaml
    2. User override at ~/.rooted/config.yaml

    Returns:
        Merged dict of config sections.  Empty dict if no YAML available.
    """
    config: dict[str, Any] = {}

    bundled = get_bundled_yaml_path()
    if bundled is not None:
        config = _deep_merge(config, _load_yaml_file(bundled))

    user = get_user_yaml_path()
    if user is not None:
        user_cfg = _load_yaml_file(user)
        if user_cfg:
            logger.debug("Applying user config overrides from %s", user)
            config = _deep_merge(config, user_cfg)

    return config


def progression_params_from_config(config: dict[str, Any] | None = None) -> ProgressionParams:
    """
    Build ProgressionParams from the ``progression`` config section.

    Keys missing from the section keep their Python defaults.

    Raises:
        ValueError: If a value cannot be converted or is out of range
    """
    if config is None:
        config = load_model_config()
    section = config.get("progression") or {}
    if not isinstance(section, dict):
        raise ValueError(f"progression config must be a mapping, got {section!r}")
    defaults = ProgressionParams()

    try:
        window_size = int(section.get("window_size", defaults.window_size))
        thresholds = {
            key: float(section.get(key, getattr(defaults, key)))
            for key in ("stretch_adherence", "stretch_mood", "build_adherence", "build_mood")
        }
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid progression config: {e}") from e

    return ProgressionParams(window_size=window_size, **thresholds)
