"""
Provider adapter registry and factory.

Adapters are looked up by provider id. Adding a vendor means registering an
adapter class here (or from calling code); the router is never changed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from summarize_docs_ai.errors import UnsupportedProvider
from summarize_docs_ai.llm.anthropic_messages import AnthropicAdapter
from summarize_docs_ai.llm.base import ProviderAdapter
from summarize_docs_ai.llm.chat_completions import MistralAdapter, OpenAIAdapter
from summarize_docs_ai.models import ProviderType, normalize_provider_id

if TYPE_CHECKING:
    from summarize_docs_ai.config import ProvidersConfig

_REGISTRY: dict[str, type[ProviderAdapter]] = {}


def register_adapter(provider_id: str, adapter_cls: type[ProviderAdapter]) -> None:
    """
    Register an adapter class under a provider id.

    Args:
        provider_id: Identifier callers use to select the vendor.
        adapter_cls: ProviderAdapter subclass to instantiate for it.
    """
    if not (isinstance(adapter_cls, type) and issubclass(adapter_cls, ProviderAdapter)):
        raise TypeError(f"{adapter_cls!r} is not a ProviderAdapter subclass")
    _REGISTRY[normalize_provider_id(provider_id)] = adapter_cls


def unregister_adapter(provider_id: str) -> None:
    _REGISTRY.pop(normalize_provider_id(provider_id), None)


def available_providers() -> list[str]:
    """Registered provider ids in registration order."""
    return list(_REGISTRY)


def get_adapter_class(provider: ProviderType | str) -> type[ProviderAdapter]:
    """
    Resolve the adapter class for a provider id.

    Raises:
        UnsupportedProvider: If no adapter is registered under the id.
    """
    if isinstance(provider, ProviderType):
        key = provider.value
    elif isinstance(provider, str):
        key = normalize_provider_id(provider)
    else:
        raise UnsupportedProvider(provider)

    try:
        return _REGISTRY[key]
    except KeyError:
        raise UnsupportedProvider(provider) from None


def create_adapter(
    provider: ProviderType | str,
    api_key: str,
    providers_config: ProvidersConfig | None = None,
) -> ProviderAdapter:
    """
    Create an adapter instance.

    Args:
        provider: Provider id (openai, mistral, anthropic or any registered id).
        api_key: Caller-supplied API key.
        providers_config: Optional per-vendor model/endpoint overrides.

    Returns:
        ProviderAdapter instance.

    Raises:
        UnsupportedProvider: If the provider id is not registered.

    Examples:
        adapter = create_adapter("anthropic", api_key="sk-ant-...")
        request = adapter.build_request(prompt, system=system, max_tokens=256)
    """
    adapter_cls = get_adapter_class(provider)
    vendor = None
    if providers_config is not None:
        key = provider.value if isinstance(provider, ProviderType) else normalize_provider_id(provider)
        vendor = providers_config.for_provider(key)

    if vendor is None:
        return adapter_cls(api_key)

    return adapter_cls(
        api_key,
        model=vendor.model,
        base_url=vendor.base_url,
        temperature=vendor.temperature,
        api_version=vendor.api_version,
    )


register_adapter(ProviderType.OPENAI.value, OpenAIAdapter)
register_adapter(ProviderType.MISTRAL.value, MistralAdapter)
register_adapter(ProviderType.ANTHROPIC.value, AnthropicAdapter)
