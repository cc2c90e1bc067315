# laris/prompts/registry.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple
import json
import os
from pathlib import Path

from jinja2 import BaseLoader, Environment, StrictUndefined

PROMPT_DB = "prompt_db.jsonl"

_env = Environment(loader=BaseLoader(), undefined=StrictUndefined, trim_blocks=True, lstrip_blocks=True)


def render_template(template: str, data: Dict[str, Any]) -> str:
    return _env.from_string(template).render(**data)


@dataclass
class PromptTemplate:
    id: str
    version: str
    purpose: str
    template: str


def _version_key(version: str) -> Tuple[int, ...]:
    parts = []
    for p in version.split("."):
        parts.append(int(p) if p.isdigit() else 0)
    return tuple(parts)


class PromptRegistry:
    def __init__(self, base_dir: str | None = None):
        self.base_dir = Path(base_dir or os.getenv("LARIS_PROMPTS_DIR") or Path(__file__).resolve().parent)
        self._prompts: Optional[Dict[Tuple[str, str], PromptTemplate]] = None

    def _load_prompts(self) -> Dict[Tuple[str, str], PromptTemplate]:
        prompts = {}
        with open(self.base_dir / PROMPT_DB, "r", encoding="utf-8") as f:
            for line in f:
                if not line.strip():
                    continue
                obj = json.loads(line)
                key = (obj["id"], str(obj["version"]))
                prompts[key] = PromptTemplate(
                    id=obj["id"],
                    version=str(obj["version"]),
                    purpose=obj.get("purpose", ""),
                    template=obj["template"],
                )
        return prompts

    def get_prompt(self, prompt_id: str, version: str = "latest") -> PromptTemplate:
        if self._prompts is None:
            self._prompts = self._load_prompts()
        if version == "latest":
            versions = [v for (pid, v) in self._prompts if pid == prompt_id]
            if not versions:
                raise KeyError(f"Prompt not found: {prompt_id}")
            version = max(versions, key=_version_key)
        key = (prompt_id, version)
        if key not in self._prompts:
            raise KeyError(f"Prompt not found: {prompt_id}@{version}")
        return self._prompts[key]

    def render(self, prompt_id: str, data: Dict[str, Any], version: str = "latest") -> str:
        return render_template(self.get_prompt(prompt_id, version).template, data).strip()
