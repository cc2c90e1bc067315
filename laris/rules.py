# laris/rules.py
from __future__ import annotations
from dataclasses import asdict, dataclass
from typing import Callable, Dict, Iterable, List, Sequence

from laris.facts import FactBag

CRITICAL = "critical"
WARNING = "warning"
INFO = "info"
SEVERITIES = (CRITICAL, WARNING, INFO)

# Extensions whose absence is worth an info-level hint
CACHE_EXTENSIONS = ("redis", "memcached")


@dataclass(frozen=True)
class Recommendation:
    severity: str   # "critical" | "warning" | "info"
    category: str
    message: str
    action: str

    def __post_init__(self):
        if self.severity not in SEVERITIES:
            raise ValueError(f"Unknown severity: {self.severity}")

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


Rule = Callable[[FactBag], Iterable[Recommendation]]


def opcache_rule(facts: FactBag) -> Iterable[Recommendation]:
    system = facts.system
    if system.error is None and not system.opcache_enabled:
        yield Recommendation(
            severity=CRITICAL,
            category="System",
            message="Enable OPcache for better PHP performance",
            action="Configure opcache.enable=1 in php.ini",
        )


def debug_in_production_rule(facts: FactBag) -> Iterable[Recommendation]:
    app = facts.application
    if app.debug_mode and app.environment == "production":
        yield Recommendation(
            severity=CRITICAL,
            category="Security",
            message="Debug mode is enabled in production",
            action="Set APP_DEBUG=false in .env file",
        )


def config_cache_rule(facts: FactBag) -> Iterable[Recommendation]:
    if not facts.application.config_cached:
        yield Recommendation(
            severity=WARNING,
            category="Performance",
            message="Configuration is not cached",
            action="Run: php artisan config:cache",
        )


def route_cache_rule(facts: FactBag) -> Iterable[Recommendation]:
    if not facts.application.routes_cached:
        yield Recommendation(
            severity=WARNING,
            category="Performance",
            message="Routes are not cached",
            action="Run: php artisan route:cache",
        )


def cache_extensions_rule(facts: FactBag) -> Iterable[Recommendation]:
    system = facts.system
    if system.error is not None:
        return
    for ext in CACHE_EXTENSIONS:
        if not system.extensions.get(ext, False):
            yield Recommendation(
                severity=INFO,
                category="Performance",
                message=f"Consider installing {ext} extension for better caching",
                action=f"Install {ext} PHP extension",
            )


DEFAULT_RULES: Sequence[Rule] = (
    opcache_rule,
    debug_in_production_rule,
    config_cache_rule,
    route_cache_rule,
    cache_extensions_rule,
)


def evaluate(facts: FactBag, rules: Sequence[Rule] = DEFAULT_RULES) -> List[Recommendation]:
    """Run every rule over the fact bag; results keep rule order."""
    out: List[Recommendation] = []
    for rule in rules:
        out.extend(rule(facts))
    return out
