"""Config file discovery.

Looks for ``ledgerctl.toml`` (or the hidden ``.ledgerctl.toml``) in the
start directory and each of its parents, the way git finds ``.git/``.
``LEDGERCTL_CONFIG`` pins an explicit file and disables the walk.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAMES = ("ledgerctl.toml", ".ledgerctl.toml")
CONFIG_ENV_VAR = "LEDGERCTL_CONFIG"


def _candidate_in(directory: Path) -> Path | None:
    for name in CONFIG_FILENAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest config file above *start* (default: cwd), or None.

    An env var pointing at a missing file yields None rather than falling
    back to the walk, so a typo never silently picks up another config.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        pinned = Path(env_path)
        return pinned if pinned.is_file() else None

    directory = (start or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        found = _candidate_in(candidate_dir)
        if found is not None:
            return found
    return None
