# laris/cli/performance.py
from __future__ import annotations
import argparse
import os
import sys
from typing import Optional

from laris import report
from laris.artisan import ArtisanRunner
from laris.collectors.collector import FactCollector
from laris.export import SUPPORTED_FORMATS, export_facts
from laris.observability import audit_log, new_run_id
from laris.project import NotALaravelProject, require_project_root
from laris.rules import evaluate


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="laris-performance",
        description="Monitor and analyze Laravel application performance",
    )
    p.add_argument("-d", "--detailed", action="store_true", help="Show every section (database, memory, routes)")
    p.add_argument("--database", action="store_true", help="Analyze the database connection and migrations")
    p.add_argument("-m", "--memory", action="store_true", help="Show PHP memory usage")
    p.add_argument("-r", "--routes", action="store_true", help="Analyze registered routes")
    p.add_argument(
        "-e", "--export",
        nargs="?",
        const="json",
        default=None,
        type=str.lower,
        choices=SUPPORTED_FORMATS,
        help="Export results to laris-performance-<timestamp>.<fmt> in the working directory (default: json)",
    )
    p.add_argument("--path", default=os.getenv("LARIS_PROJECT_PATH", ""),
                   help="Laravel project root (default: $LARIS_PROJECT_PATH or CWD)")
    return p


def main(argv: Optional[list] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        root = require_project_root(args.path or None)
    except NotALaravelProject as e:
        print(f"❌ {e}")
        return 1

    run_id = new_run_id()
    params = {
        "root": str(root),
        "detailed": args.detailed,
        "database": args.database,
        "memory": args.memory,
        "routes": args.routes,
        "export": args.export,
    }
    audit_log(run_id=run_id, action="performance", status="start", params=params)

    print("🚀 Laris Performance Monitor")
    print("Analyzing your Laravel application performance...")

    collector = FactCollector(ArtisanRunner(root))
    facts = collector.collect(
        database=args.database or args.detailed,
        memory=args.memory or args.detailed,
        routes=args.routes or args.detailed,
    )
    report.show_facts(facts)

    recommendations = evaluate(facts)
    report.show_recommendations(recommendations)

    failed = [name for name in facts.categories() if getattr(facts, name).error]
    if failed:
        audit_log(run_id=run_id, action="collect", status="error",
                  params={"sections": failed}, message="; ".join(getattr(facts, n).error for n in failed))

    if args.export:
        try:
            path = export_facts(facts, args.export)
        except OSError as e:
            print(f"❌ Failed to export results: {e}")
            audit_log(run_id=run_id, action="export", status="error", params={"format": args.export}, message=str(e))
        else:
            print(f"✅ Results exported to: {path.name}")
            audit_log(run_id=run_id, action="export", status="ok", params={"format": args.export, "file": str(path)})

    audit_log(run_id=run_id, action="performance", status="ok",
              params={"recommendations": len(recommendations)})
    print()
    print("✅ Performance analysis completed!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
