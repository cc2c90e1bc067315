# tests/conftest.py
from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, Tuple

import pytest

from laris.facts import IMPORTANT_EXTENSIONS


class FakeRunner:
    """Stands in for ArtisanRunner: canned stdout per artisan argument tuple."""

    def __init__(self, root: Path, artisan: Dict[Tuple[str, ...], Any] | None = None, probe: Any = None):
        self.root = Path(root)
        self.responses = artisan or {}
        self.probe = probe
        self.calls: list = []

    def artisan(self, *args: str, check: bool = True) -> str:
        self.calls.append(args)
        out = self.responses.get(args, "")
        if isinstance(out, Exception):
            raise out
        return out

    def php_eval(self, code: str) -> str:
        self.calls.append(("php -r",))
        if isinstance(self.probe, Exception):
            raise self.probe
        return self.probe if isinstance(self.probe, str) else json.dumps(self.probe)


def probe_output(**overrides: Any) -> Dict[str, Any]:
    data = {
        "php_version": "8.2.12",
        "memory_limit": "512M",
        "max_execution_time": "0",
        "opcache_enabled": True,
        "extensions": {ext: True for ext in IMPORTANT_EXTENSIONS},
        "memory": {"current": 524288, "peak": 1048576, "current_real": 2097152, "peak_real": 2097152},
    }
    data.update(overrides)
    return data


@pytest.fixture(autouse=True)
def _audit_log(tmp_path, monkeypatch):
    monkeypatch.setenv("LARIS_AUDIT_LOG", str(tmp_path / "audit" / "audit.log.jsonl"))


@pytest.fixture
def laravel_project(tmp_path) -> Path:
    root = tmp_path / "app"
    root.mkdir()
    (root / "artisan").write_text("#!/usr/bin/env php\n<?php\n", encoding="utf-8")
    return root


@pytest.fixture
def tuned_project(laravel_project) -> Path:
    """A project with caches warmed and a local .env."""
    cache = laravel_project / "bootstrap" / "cache"
    cache.mkdir(parents=True)
    (cache / "config.php").write_text("<?php return [];", encoding="utf-8")
    (cache / "routes-v7.php").write_text("<?php", encoding="utf-8")
    (laravel_project / ".env").write_text("APP_ENV=local\nAPP_DEBUG=true\n", encoding="utf-8")
    return laravel_project
