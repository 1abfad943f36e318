"""
Build options from a JSON config file (.book_nav.json).

The file is found via env BOOK_NAV_CONFIG, else the current directory or one of
its parents. Missing file -> defaults. Unreadable or invalid file -> defaults and
a warning; a bad config never stops a build.

    {"slug_max_words": 5, "url_delimiter": "+", "label_words": ["chapter", "part"]}
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError

from book_nav.models import BuildConfig

log = logging.getLogger(__name__)

CONFIG_FILENAME = ".book_nav.json"
CONFIG_ENV = "BOOK_NAV_CONFIG"


def find_config_file() -> Path | None:
    """Return path to an existing config file, or None."""
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        p = Path(env_path).resolve()
        return p if p.is_file() else None
    for d in [Path.cwd(), *Path.cwd().parents]:
        cf = (d / CONFIG_FILENAME).resolve()
        if cf.is_file():
            return cf
    return None


def load_config_data(path: Path | None = None) -> Dict[str, Any]:
    """Raw config dict from path (or the discovered file). Empty dict if none or unreadable."""
    path = path or find_config_file()
    if path is None:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        log.warning("Ignoring config %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        log.warning("Ignoring config %s: expected a JSON object", path)
        return {}
    return data


def load_build_config(path: Path | None = None, **overrides: Any) -> BuildConfig:
    """BuildConfig from the config file, with non-None keyword overrides applied on top."""
    data = load_config_data(path)
    known = {k: v for k, v in data.items() if k in BuildConfig.model_fields}
    try:
        config = BuildConfig(**known)
    except ValidationError as e:
        log.warning("Invalid build config, using defaults: %s", e)
        config = BuildConfig()
    updates = {k: v for k, v in overrides.items() if v is not None}
    if updates:
        config = BuildConfig(**{**config.model_dump(), **updates})
    return config
