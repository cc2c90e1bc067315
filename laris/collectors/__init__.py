"""Fact collectors (PHP runtime, application, database, routes)."""
from .collector import FactCollector
from .php_runtime import PhpRuntimeProvider
from .application import ApplicationProvider
from .database import DatabaseProvider
from .routes import RouteProvider

__all__ = ["FactCollector", "PhpRuntimeProvider", "ApplicationProvider", "DatabaseProvider", "RouteProvider"]
