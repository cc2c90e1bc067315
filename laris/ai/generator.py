# laris/ai/generator.py
from __future__ import annotations
from typing import Optional

from laris.ai.config import AIConfig
from laris.ai.llm import OpenRouterClient
from laris.prompts.registry import PromptRegistry


class EventGenerator:
    """Renders the `make_event` prompt and asks the model for the class source."""

    prompt_id = "make_event"

    def __init__(self, config: AIConfig, client: Optional[OpenRouterClient] = None, registry: Optional[PromptRegistry] = None):
        self.config = config
        self.client = client or OpenRouterClient(config)
        self.registry = registry or PromptRegistry()

    def build_prompt(self, event_name: str) -> str:
        return self.registry.render(
            self.prompt_id,
            {"default_prompt": self.config.default_prompt, "event_name": event_name},
        )

    def generate(self, event_name: str) -> str:
        return self.client.complete(self.build_prompt(event_name))
