"""Fleet file discovery.

Walk-up finder locates ``officedev.toml``, the same way git finds ``.git/``.
``OFFICEDEV_CONFIG`` overrides the walk.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "officedev.toml"
CONFIG_ENV_VAR = "OFFICEDEV_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest ``officedev.toml`` at or above *start* (default: cwd)."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
