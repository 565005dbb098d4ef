"""Config file discovery.

Walk-up finder locates fmd.toml, similar to how git finds .git/.
The FMD_CONFIG env var pins a file explicitly.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "fmd.toml"
CONFIG_ENV_VAR = "FMD_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for fmd.toml.

    Returns the path to the config file, or None if not found.
    FMD_CONFIG, when set, wins over the walk-up even if it points nowhere.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        pinned = Path(env_path)
        return pinned if pinned.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
