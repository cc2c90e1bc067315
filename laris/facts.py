# laris/facts.py
from __future__ import annotations
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

# Extensions reported in the system section, in display order
IMPORTANT_EXTENSIONS = (
    "pdo",
    "mbstring",
    "openssl",
    "tokenizer",
    "xml",
    "ctype",
    "json",
    "bcmath",
    "fileinfo",
    "redis",
    "memcached",
)


def _compact(obj: Any) -> Dict[str, Any]:
    """Dataclass -> dict in field order, dropping fields left as None."""
    out: Dict[str, Any] = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if value is None:
            continue
        if isinstance(value, dict):
            value = dict(value)
        elif isinstance(value, (list, tuple)):
            value = list(value)
        out[f.name] = value
    return out


def _pick(cls, data: Dict[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in (data or {}).items() if k in names}


@dataclass(frozen=True)
class SystemFacts:
    php_version: str = ""
    memory_limit: str = ""
    max_execution_time: str = ""
    opcache_enabled: bool = False
    extensions: Dict[str, bool] = field(default_factory=dict)
    system_load: Optional[List[float]] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SystemFacts":
        return cls(**_pick(cls, data))


@dataclass(frozen=True)
class AppFacts:
    laravel_version: str = ""
    # environment and debug_mode stay None when the project has no .env file
    environment: Optional[str] = None
    debug_mode: Optional[bool] = None
    config_cached: bool = False
    routes_cached: bool = False
    views_cached: bool = False
    controllers_count: int = 0
    models_count: int = 0
    migrations_count: int = 0
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppFacts":
        return cls(**_pick(cls, data))


@dataclass(frozen=True)
class DbFacts:
    default_connection: Optional[str] = None
    slow_query_log_enabled: Optional[str] = None
    pending_migrations: Optional[bool] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DbFacts":
        return cls(**_pick(cls, data))


@dataclass(frozen=True)
class MemoryFacts:
    current_usage: str = ""
    peak_usage: str = ""
    current_real_usage: str = ""
    peak_real_usage: str = ""
    memory_limit: str = ""
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MemoryFacts":
        return cls(**_pick(cls, data))


@dataclass(frozen=True)
class RouteFacts:
    total_routes: Optional[int] = None
    methods: Optional[Dict[str, int]] = None
    middleware_usage: Optional[Dict[str, int]] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RouteFacts":
        return cls(**_pick(cls, data))


_CATEGORIES = {
    "system": SystemFacts,
    "application": AppFacts,
    "database": DbFacts,
    "memory": MemoryFacts,
    "routes": RouteFacts,
}


@dataclass(frozen=True)
class FactBag:
    """Snapshot of one run. Sections that were not requested stay None."""

    system: SystemFacts
    application: AppFacts
    database: Optional[DbFacts] = None
    memory: Optional[MemoryFacts] = None
    routes: Optional[RouteFacts] = None

    def categories(self) -> List[str]:
        return [name for name in _CATEGORIES if getattr(self, name) is not None]

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {name: getattr(self, name).to_dict() for name in self.categories()}

    @classmethod
    def from_dict(cls, data: Dict[str, Dict[str, Any]]) -> "FactBag":
        kwargs = {}
        for name, facts_cls in _CATEGORIES.items():
            if name in data:
                kwargs[name] = facts_cls.from_dict(data[name])
        kwargs.setdefault("system", SystemFacts())
        kwargs.setdefault("application", AppFacts())
        return cls(**kwargs)
