# laris/project.py
from __future__ import annotations
import os
from pathlib import Path
from typing import Optional

MARKER_FILE = "artisan"


class NotALaravelProject(RuntimeError):
    pass


def require_project_root(path: Optional[str] = None) -> Path:
    """Return the project root, or raise if `artisan` is missing from it."""
    root = Path(path or os.getcwd()).resolve()
    if not (root / MARKER_FILE).is_file():
        raise NotALaravelProject(f"No '{MARKER_FILE}' file in {root}; run this from a Laravel project directory.")
    return root
