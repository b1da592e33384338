"""LLM 抽象层."""

from rin.llm.base import LLMConfig, LLMProvider, Message
from rin.llm.factory import PROVIDER_PRESETS, create_llm_provider
from rin.llm.ollama import OllamaProvider
from rin.llm.openai import OpenAIProvider

__all__ = [
    "PROVIDER_PRESETS",
    "LLMConfig",
    "LLMProvider",
    "Message",
    "OllamaProvider",
    "OpenAIProvider",
    "create_llm_provider",
]
