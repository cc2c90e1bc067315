# laris/cli/ai_make_event.py
from __future__ import annotations
import argparse
import os
import sys
from typing import Optional

from laris.ai.config import AIConfigError, load_ai_config
from laris.ai.generator import EventGenerator
from laris.ai.llm import LLMError, LLMTimeout
from laris.observability import audit_log, new_run_id
from laris.project import NotALaravelProject, require_project_root
from laris.scaffolds.laravel_event import DEFAULT_EVENT_NAME, validate_event_name, write_event


def _ask(question: str, default: str) -> str:
    answer = input(f"{question} [{default}]: ").strip()
    return answer or default


def _confirm(question: str, default: bool = True) -> bool:
    hint = "Y/n" if default else "y/N"
    answer = input(f"{question} ({hint}) ").strip().lower()
    if not answer:
        return default
    return answer in ("y", "yes")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="laris-ai-make-event", description="Generate a Laravel event using OpenRouter AI")
    p.add_argument("name", nargs="?", help="Event class name, e.g. OrderShipped (asked interactively if omitted)")
    p.add_argument("--yes", action="store_true", help="Save without asking for confirmation")
    p.add_argument("--force", action="store_true", help="Overwrite an existing event file")
    p.add_argument("--path", default=os.getenv("LARIS_PROJECT_PATH", ""),
                   help="Laravel project root (default: $LARIS_PROJECT_PATH or CWD)")
    return p


def main(argv: Optional[list] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        root = require_project_root(args.path or None)
        config = load_ai_config(root)
    except (NotALaravelProject, AIConfigError) as e:
        print(f"❌ {e}")
        return 1

    try:
        event_name = validate_event_name(args.name or _ask("What is the name of the event?", DEFAULT_EVENT_NAME))
    except EOFError:
        print("❌ No input available; pass the event name as an argument")
        return 1
    except ValueError as e:
        print(f"❌ {e}")
        return 1

    run_id = new_run_id()
    params = {"root": str(root), "event": event_name, "model": config.model}
    audit_log(run_id=run_id, action="ai_make_event", status="start", params=params)

    print("🧠 Generating event class...")
    try:
        code = EventGenerator(config).generate(event_name)
    except LLMTimeout as e:
        print(f"❌ {e}")
        audit_log(run_id=run_id, action="ai_make_event", status="error", params=params, message=str(e))
        return 1
    except LLMError as e:
        print(f"❌ Failed to get response from OpenRouter: {e}")
        audit_log(run_id=run_id, action="ai_make_event", status="error", params=params, message=str(e))
        return 1

    print(code)

    try:
        save = args.yes or _confirm("Save this event?", True)
    except EOFError:
        print("❌ No input available; rerun with --yes to save")
        audit_log(run_id=run_id, action="ai_make_event", status="error", params=params, message="no confirmation input")
        return 1
    if not save:
        audit_log(run_id=run_id, action="ai_make_event", status="skip", params=params, message="not saved")
        return 0

    try:
        path = write_event(root, event_name, code, force=args.force)
    except OSError as e:
        # EventExists included
        print(f"❌ {e}")
        audit_log(run_id=run_id, action="ai_make_event", status="error", params=params, message=str(e))
        return 1

    rel = path.relative_to(root)
    print(f"✅ Event saved to {rel}")
    audit_log(run_id=run_id, action="ai_make_event", status="ok", params={**params, "file": str(rel)})
    return 0


if __name__ == "__main__":
    sys.exit(main())
