"""Prompt templates shipped with the package."""
from .registry import PromptRegistry, PromptTemplate

__all__ = ["PromptRegistry", "PromptTemplate"]
