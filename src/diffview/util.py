from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any


def hash_text(value: str) -> str:
    return hashlib.sha1(value.encode("utf-8")).hexdigest()


def element_id(prefix: str, value: str) -> str:
    """Return a stable DOM id such as ``diff-header-1a2b3c4d5e6f``."""
    return f"{prefix}-{hash_text(value)[:12]}"


def ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def write_text(path: Path, value: str) -> None:
    ensure_parent(path)
    path.write_text(value, encoding="utf-8")


def write_json(path: Path, payload: Any) -> None:
    write_text(path, json.dumps(payload, indent=2, sort_keys=True) + "\n")


def load_json(path: Path) -> Any:
    with path.open(encoding="utf-8") as handle:
        return json.load(handle)
