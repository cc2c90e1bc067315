# laris/collectors/database.py
from __future__ import annotations
import re

from laris.artisan import ArtisanError, ArtisanRunner
from laris.facts import DbFacts

SLOW_QUERY_ADVICE = "Check manually in database settings"

# Laravel >= 9 prints "Pending"; older releases print a "Ran?" column of Yes/No
_PENDING_RE = re.compile(r"\bPending\b|\|\s*No\s*\|")


def has_pending_migrations(status_output: str) -> bool:
    return bool(_PENDING_RE.search(status_output or ""))


class DatabaseProvider:
    def __init__(self, runner: ArtisanRunner):
        self.runner = runner

    def fetch(self) -> DbFacts:
        try:
            connection = self.runner.artisan("tinker", '--execute=echo config("database.default")').strip()
            # migrate:status exits non-zero when the migrations table is missing
            status = self.runner.artisan("migrate:status", check=False)
        except ArtisanError as e:
            return DbFacts(error=f"Could not analyze database: {e}")
        return DbFacts(
            default_connection=connection,
            slow_query_log_enabled=SLOW_QUERY_ADVICE,
            pending_migrations=has_pending_migrations(status),
        )
