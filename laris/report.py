# laris/report.py
from __future__ import annotations
from typing import Any, List, Optional, Sequence

from laris.facts import AppFacts, DbFacts, FactBag, MemoryFacts, RouteFacts, SystemFacts
from laris.rules import CRITICAL, INFO, WARNING, Recommendation

YES = "✅ Yes"
NO = "❌ No"
NO_ISSUES = "🎉 No performance issues detected! Your application looks great."

_ICONS = {CRITICAL: "🚨", WARNING: "⚠️", INFO: "ℹ️"}


def _yes_no(flag: Optional[bool]) -> str:
    if flag is None:
        return "Unknown"
    return YES if flag else NO


def format_table(headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> str:
    cells = [[str(c) for c in headers]] + [[str(c) for c in row] for row in rows]
    widths = [max(len(r[i]) for r in cells) for i in range(len(headers))]
    rule = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    def line(row: List[str]) -> str:
        return "| " + " | ".join(c.ljust(w) for c, w in zip(row, widths)) + " |"

    out = [rule, line(cells[0]), rule]
    out += [line(r) for r in cells[1:]]
    out.append(rule)
    return "\n".join(out)


def section(title: str) -> None:
    print()
    print(title)
    print("-" * len(title))


def table(headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> None:
    print(format_table(headers, rows))


def show_system(info: SystemFacts) -> None:
    section("🖥️  System Information")
    if info.error:
        print(f"! {info.error}")
    rows = [
        ["PHP Version", info.php_version or "Unknown"],
        ["Memory Limit", info.memory_limit or "Unknown"],
        ["Max Execution Time", f"{info.max_execution_time}s" if info.max_execution_time else "Unknown"],
        ["OPcache Enabled", _yes_no(info.opcache_enabled)],
    ]
    if info.system_load:
        rows.append(["System Load", ", ".join(f"{v:.2f}" for v in info.system_load[:3])])
    table(["Metric", "Value"], rows)

    print("📦 Important PHP Extensions:")
    table(
        ["Extension", "Status"],
        [[ext, "✅ Loaded" if loaded else "❌ Missing"] for ext, loaded in info.extensions.items()],
    )


def show_application(info: AppFacts) -> None:
    section("🚀 Laravel Application")
    if info.error:
        print(f"! {info.error}")
    if info.debug_mode is None:
        debug = "Unknown"
    else:
        debug = "⚠️  Enabled" if info.debug_mode else "✅ Disabled"
    table(
        ["Metric", "Value"],
        [
            ["Laravel Version", info.laravel_version or "Unknown"],
            ["Environment", info.environment or "Unknown"],
            ["Debug Mode", debug],
            ["Config Cached", _yes_no(info.config_cached)],
            ["Routes Cached", _yes_no(info.routes_cached)],
            ["Views Cached", _yes_no(info.views_cached)],
            ["Controllers", info.controllers_count],
            ["Models", info.models_count],
            ["Migrations", info.migrations_count],
        ],
    )


def show_database(info: DbFacts) -> None:
    section("🗄️  Database Information")
    if info.error:
        print(f"! {info.error}")
        return
    pending = "Unknown"
    if info.pending_migrations is not None:
        pending = "⚠️  Yes" if info.pending_migrations else "✅ No"
    table(
        ["Metric", "Value"],
        [
            ["Default Connection", info.default_connection or "Unknown"],
            ["Slow Query Log", info.slow_query_log_enabled or "Unknown"],
            ["Pending Migrations", pending],
        ],
    )


def show_memory(info: MemoryFacts) -> None:
    section("💾 Memory Usage")
    if info.error:
        print(f"! {info.error}")
        return
    table(
        ["Metric", "Value"],
        [
            ["Current Usage", info.current_usage],
            ["Peak Usage", info.peak_usage],
            ["Current Real Usage", info.current_real_usage],
            ["Peak Real Usage", info.peak_real_usage],
            ["Memory Limit", info.memory_limit],
        ],
    )


def show_routes(info: RouteFacts) -> None:
    section("🛣️  Route Analysis")
    if info.error:
        print(f"! {info.error}")
        return
    print(f"Total Routes: {info.total_routes or 0}")
    if info.methods:
        print("HTTP Methods:")
        for method, count in info.methods.items():
            print(f"  {method}: {count}")
    if info.middleware_usage:
        print("Top Middleware Usage:")
        for name, count in info.middleware_usage.items():
            print(f"  {name}: {count} routes")


def show_recommendations(recommendations: Sequence[Recommendation]) -> None:
    if not recommendations:
        print()
        print(NO_ISSUES)
        return
    section("💡 Performance Recommendations")
    for rec in recommendations:
        icon = _ICONS.get(rec.severity, "💡")
        print(f"{icon} [{rec.category}] {rec.message}")
        print(f"   Action: {rec.action}")
        print()


def show_facts(facts: FactBag) -> None:
    show_system(facts.system)
    show_application(facts.application)
    if facts.database is not None:
        show_database(facts.database)
    if facts.memory is not None:
        show_memory(facts.memory)
    if facts.routes is not None:
        show_routes(facts.routes)
