# laris/collectors/application.py
from __future__ import annotations
from pathlib import Path
from typing import Dict, Optional

from dotenv import dotenv_values

from laris.artisan import ArtisanError, ArtisanRunner
from laris.facts import AppFacts

CONFIG_CACHE = "bootstrap/cache/config.php"
ROUTES_CACHE = "bootstrap/cache/routes-v7.php"
VIEWS_DIR = "storage/framework/views"

COUNTED_DIRS = {
    "controllers_count": "app/Http/Controllers",
    "models_count": "app/Models",
    "migrations_count": "database/migrations",
}


def count_files(directory: Path, pattern: str = "*.php") -> int:
    if not directory.is_dir():
        return 0
    return sum(1 for p in directory.glob(pattern) if p.is_file())


def read_env(root: Path) -> Optional[Dict[str, Optional[str]]]:
    env_file = root / ".env"
    if not env_file.is_file():
        return None
    return dotenv_values(env_file)


class ApplicationProvider:
    def __init__(self, runner: ArtisanRunner):
        self.runner = runner

    def fetch(self) -> AppFacts:
        root = self.runner.root
        error = None
        try:
            version = self.runner.artisan("--version").strip()
        except ArtisanError as e:
            version = ""
            error = f"Could not read Laravel version: {e}"

        environment = debug_mode = None
        env = read_env(root)
        if env is not None:
            environment = (env.get("APP_ENV") or "unknown").strip()
            debug_mode = (env.get("APP_DEBUG") or "false").strip().lower() == "true"

        counts = {key: count_files(root / rel) for key, rel in COUNTED_DIRS.items()}
        return AppFacts(
            laravel_version=version,
            environment=environment,
            debug_mode=debug_mode,
            config_cached=(root / CONFIG_CACHE).is_file(),
            routes_cached=(root / ROUTES_CACHE).is_file(),
            views_cached=count_files(root / VIEWS_DIR) > 0,
            error=error,
            **counts,
        )
