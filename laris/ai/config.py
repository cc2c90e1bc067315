# laris/ai/config.py
from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

CONFIG_FILE = ".laris-ai.json"
DEFAULT_MODEL = "deepseek/deepseek-r1-0528-qwen3-8b:free"


class AIConfigError(RuntimeError):
    pass


class AIConfig(BaseModel):
    """Contents of .laris-ai.json."""

    provider: Literal["openrouter"]
    api_key: str = Field(min_length=1)
    max_tokens: int = Field(default=1000, gt=0)
    model: str = Field(default=DEFAULT_MODEL, min_length=1)
    default_prompt: str = ""

    @field_validator("api_key", "model")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


def _describe(err: ValidationError) -> str:
    parts = []
    for e in err.errors():
        loc = ".".join(str(p) for p in e.get("loc", ())) or "config"
        parts.append(f"{loc}: {e.get('msg')}")
    return "; ".join(parts)


def parse_ai_config(data: Any) -> AIConfig:
    if not isinstance(data, dict):
        raise AIConfigError("AI config must be a JSON object")
    try:
        return AIConfig.model_validate(data)
    except ValidationError as e:
        raise AIConfigError(f"Invalid AI config: {_describe(e)}") from e


def read_raw_config(root: Path) -> Dict[str, Any]:
    path = root / CONFIG_FILE
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise AIConfigError(f"AI config file not found ({path}). Run `laris-ai-config` first.") from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise AIConfigError(f"AI config file is not valid JSON ({path}): {e.msg} at line {e.lineno}") from e


def load_ai_config(root: Path | str) -> AIConfig:
    return parse_ai_config(read_raw_config(Path(root)))


def save_ai_config(root: Path | str, config: AIConfig) -> Path:
    path = Path(root) / CONFIG_FILE
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.model_dump(), f, indent=4)
        f.write("\n")
    return path
