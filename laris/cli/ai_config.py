# laris/cli/ai_config.py
from __future__ import annotations
import argparse
import os
import sys
from typing import Any, Dict, Optional

from laris.ai.config import CONFIG_FILE, AIConfigError, parse_ai_config, read_raw_config, save_ai_config
from laris.project import NotALaravelProject, require_project_root


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="laris-ai-config", description=f"Create or update {CONFIG_FILE}")
    p.add_argument("--api-key", help="OpenRouter API key (or set OPENROUTER_API_KEY)")
    p.add_argument("--model", help="Model id, e.g. deepseek/deepseek-r1-0528-qwen3-8b:free")
    p.add_argument("--max-tokens", type=int, help="Completion token limit")
    p.add_argument("--default-prompt", help="Text prepended to every generation prompt")
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

    current: Dict[str, Any] = {}
    if (root / CONFIG_FILE).exists():
        try:
            current = read_raw_config(root)
        except AIConfigError as e:
            print(f"! {e}; starting from an empty config")
        if not isinstance(current, dict):
            current = {}

    updates = {
        "provider": "openrouter",
        "api_key": args.api_key or os.getenv("OPENROUTER_API_KEY"),
        "model": args.model,
        "max_tokens": args.max_tokens,
        "default_prompt": args.default_prompt,
    }
    merged = {**current, **{k: v for k, v in updates.items() if v is not None}}

    try:
        config = parse_ai_config(merged)
    except AIConfigError as e:
        print(f"❌ {e}")
        return 1

    path = save_ai_config(root, config)
    print(f"✅ AI config written to {path.name} (model: {config.model})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
