"""AI layer: typed config, OpenRouter client and the event generator."""
from .config import AIConfig, AIConfigError, load_ai_config
from .generator import EventGenerator
from .llm import LLMError, LLMTimeout, OpenRouterClient

__all__ = [
    "AIConfig",
    "AIConfigError",
    "load_ai_config",
    "EventGenerator",
    "LLMError",
    "LLMTimeout",
    "OpenRouterClient",
]
