# laris/collectors/collector.py
from __future__ import annotations

from laris.artisan import ArtisanRunner
from laris.collectors.application import ApplicationProvider
from laris.collectors.database import DatabaseProvider
from laris.collectors.php_runtime import PhpRuntimeProvider
from laris.collectors.routes import RouteProvider
from laris.facts import FactBag


class FactCollector:
    """Builds the fact bag for one run.

    System and application facts are always collected; database, memory and
    route facts only when asked for.
    """

    def __init__(self, runner: ArtisanRunner):
        self.php = PhpRuntimeProvider(runner)
        self.application = ApplicationProvider(runner)
        self.database = DatabaseProvider(runner)
        self.routes = RouteProvider(runner)

    def collect(self, *, database: bool = False, memory: bool = False, routes: bool = False) -> FactBag:
        return FactBag(
            system=self.php.system(),
            application=self.application.fetch(),
            database=self.database.fetch() if database else None,
            memory=self.php.memory() if memory else None,
            routes=self.routes.fetch() if routes else None,
        )
