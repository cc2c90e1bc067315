# laris/collectors/routes.py
from __future__ import annotations
import json
from collections import Counter
from typing import Any, Dict, Iterable, List

from laris.artisan import ArtisanError, ArtisanRunner
from laris.facts import RouteFacts

TOP_MIDDLEWARE = 10


def _middleware_names(value: Any) -> Iterable[str]:
    # route:list --json gives a list on Laravel >= 9 and a comma string before that
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, list):
        return []
    return [str(v).strip() for v in value if str(v).strip()]


def analyze_middleware(routes: List[Dict[str, Any]], top: int = TOP_MIDDLEWARE) -> Dict[str, int]:
    counts: Counter = Counter()
    for route in routes:
        counts.update(_middleware_names(route.get("middleware")))
    ranked = sorted(counts.items(), key=lambda kv: -kv[1])
    return dict(ranked[:top])


def summarize_routes(routes: List[Dict[str, Any]]) -> RouteFacts:
    methods = Counter(str(r.get("method", "")) for r in routes)
    return RouteFacts(
        total_routes=len(routes),
        methods=dict(methods),
        middleware_usage=analyze_middleware(routes),
    )


class RouteProvider:
    def __init__(self, runner: ArtisanRunner):
        self.runner = runner

    def fetch(self) -> RouteFacts:
        try:
            out = self.runner.artisan("route:list", "--json")
        except ArtisanError as e:
            return RouteFacts(error=f"Could not analyze routes: {e}")
        try:
            routes = json.loads(out or "[]")
        except json.JSONDecodeError as e:
            return RouteFacts(error=f"Could not analyze routes: invalid route:list output ({e.msg})")
        if not isinstance(routes, list):
            return RouteFacts(error="Could not analyze routes: route:list did not return a list")
        return summarize_routes([r for r in routes if isinstance(r, dict)])
