"""
Reading a TOC snapshot and writing the navigation bundle as JSON.
The build itself does no I/O; these helpers are for callers that want files.
"""

import json
from pathlib import Path
from typing import Any, Dict

from book_nav.models import BookMeta, TocStore

# Bump this when the bundle layout changes.
META_VERSION = 1


def load_toc(toc_path: Path) -> TocStore:
    """Load a TOC from JSON. Raises json.JSONDecodeError or pydantic ValidationError on a malformed file."""
    with open(Path(toc_path), "r", encoding="utf-8") as f:
        data = json.load(f)
    return TocStore.model_validate(data)


def meta_to_dict(meta: BookMeta) -> Dict[str, Any]:
    data = meta.model_dump(mode="json", exclude_none=True)
    data["meta_version"] = META_VERSION
    return data


def write_meta(meta: BookMeta, out_path: Path) -> None:
    """Write the bundle to JSON with meta_version set."""
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(meta_to_dict(meta), f, indent=2)
