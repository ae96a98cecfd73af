"""
LLM provider abstraction layer.

Supports three upstream vendors through per-vendor adapters:
- OpenAI: chat completions, bearer auth
- Mistral: chat completions, bearer auth
- Anthropic: messages API, x-api-key auth
"""

from summarize_docs_ai.llm.anthropic_messages import AnthropicAdapter
from summarize_docs_ai.llm.base import ProviderAdapter, UpstreamRequest
from summarize_docs_ai.llm.chat_completions import (
    ChatCompletionsAdapter,
    MistralAdapter,
    OpenAIAdapter,
)
from summarize_docs_ai.llm.factory import (
    available_providers,
    create_adapter,
    get_adapter_class,
    register_adapter,
    unregister_adapter,
)

__all__ = [
    "ProviderAdapter",
    "UpstreamRequest",
    "ChatCompletionsAdapter",
    "OpenAIAdapter",
    "MistralAdapter",
    "AnthropicAdapter",
    "available_providers",
    "create_adapter",
    "get_adapter_class",
    "register_adapter",
    "unregister_adapter",
]
