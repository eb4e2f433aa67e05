"""Configuration loading for the env auditor.

Reads config.toml, substitutes {env.VAR_NAME} placeholders in string values
with environment variables, and fills in defaults for anything not set.
"""

import copy
import os
import re
import tomllib
from pathlib import Path
from typing import Any

from scanner import DEFAULT_EXTENSIONS, DEFAULT_IGNORE_DIRS

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.toml"

DEFAULTS: dict = {
    "scan": {
        "extensions": list(DEFAULT_EXTENSIONS),
        "ignore_dirs": list(DEFAULT_IGNORE_DIRS),
    },
    "output": {
        "dir": ".",
        "json_report": "report.json",
        "html_report": "report.html",
        "env_example": ".env.example.generated",
    },
}


# Environment overrides applied on top of DEFAULTS whether or not a
# config.toml is found; a config file can still override them.
ENV_OVERRIDES: dict = {
    "output": {
        "dir": "{env.ENV_AUDITOR_OUTPUT_DIR}",
    },
}

# Matches {env.VAR_NAME} where VAR_NAME is a valid POSIX env var name.
_ENV_PATTERN = re.compile(r"\{env\.([A-Za-z_][A-Za-z0-9_]*)\}")


def substitute_env_vars(config: Any) -> Any:
    """Recursively substitute {env.VAR_NAME} placeholders in string values.

    Unset variables become empty strings.
    """
    if isinstance(config, dict):
        return {k: substitute_env_vars(v) for k, v in config.items()}
    if isinstance(config, list):
        return [substitute_env_vars(item) for item in config]
    if isinstance(config, str):
        return _ENV_PATTERN.sub(lambda m: os.environ.get(m.group(1), ""), config)
    return config


def _merge(base: dict, override: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        elif value != "":
            # Empty strings come from unset {env.X} placeholders; keep the default
            merged[key] = value
    return merged


def load_config(config_path: str | Path | None = None) -> dict:
    """Load configuration, falling back to defaults.

    An explicit config_path must exist. Without one, config.toml next to
    this module is used if present; an installed copy ships without it and
    runs on DEFAULTS plus ENV_OVERRIDES.
    """
    config = _merge(DEFAULTS, substitute_env_vars(ENV_OVERRIDES))

    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    if config_path is None and not path.exists():
        return config

    with open(path, "rb") as f:
        raw = tomllib.load(f)
    return _merge(config, substitute_env_vars(raw))
