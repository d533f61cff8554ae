# src/llm/client_factory.py — v2
"""Factory: instantiate LLM client from provider name.

Called by the AI backend with the assignment resolved for an operation
(see llm/config.py cascade). Provider SDKs are imported lazily, so only the
configured provider's package has to be installed.
"""

from __future__ import annotations

import logging

from aigate.config.settings import Settings
from aigate.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)

# Registry of provider name → adapter class path (lazy import).
_PROVIDER_REGISTRY: dict[str, str] = {
    "google": "aigate.llm.adapters.google_adapter.GoogleAdapter",
    "openai": "aigate.llm.adapters.openai_adapter.OpenAIAdapter",
    "anthropic": "aigate.llm.adapters.anthropic_adapter.AnthropicAdapter",
    "ollama": "aigate.llm.adapters.ollama_adapter.OllamaAdapter",
}

# Providers that run without a credential.
_KEYLESS_PROVIDERS = frozenset({"ollama"})


class UnsupportedProviderError(ValueError):
    """Raised when a provider is not registered."""


def provider_credential(provider: str, settings: Settings) -> str:
    """API key configured for ``provider`` ("" when none)."""
    return {
        "google": settings.google_api_key,
        "openai": settings.openai_api_key,
        "anthropic": settings.anthropic_api_key,
    }.get(provider, "")


def requires_credential(provider: str) -> bool:
    return provider not in _KEYLESS_PROVIDERS


def create_llm_client(
    provider: str,
    model: str,
    settings: Settings | None = None,
    **kwargs: object,
) -> BaseLLMClient:
    """Instantiate the correct adapter from provider name.

    Args:
        provider: Provider identifier (google, openai, anthropic, ollama).
        model: Model name (e.g. gemini-2.0-flash-exp).
        settings: Application settings (for API keys).
        **kwargs: Additional provider-specific arguments.

    Returns:
        Configured BaseLLMClient instance.

    Raises:
        UnsupportedProviderError: If provider is not registered.
    """
    if provider not in _PROVIDER_REGISTRY:
        raise UnsupportedProviderError(
            f"Unsupported LLM provider: {provider!r}. "
            f"Available: {', '.join(sorted(_PROVIDER_REGISTRY))}"
        )

    adapter_cls = _import_class(_PROVIDER_REGISTRY[provider])

    init_kwargs = dict(kwargs)
    init_kwargs["model"] = model
    if settings is not None:
        if provider == "ollama":
            init_kwargs.setdefault("base_url", settings.ollama_base_url)
        else:
            init_kwargs.setdefault("api_key", provider_credential(provider, settings))

    logger.debug("Creating LLM client: provider=%s, model=%s", provider, model)
    return adapter_cls(**init_kwargs)


def register_provider(name: str, class_path: str) -> None:
    """Register a custom provider adapter.

    Args:
        name: Provider identifier.
        class_path: Fully qualified class path implementing BaseLLMClient.
    """
    _PROVIDER_REGISTRY[name] = class_path
    logger.info("Registered LLM provider: %s → %s", name, class_path)


def _import_class(class_path: str) -> type:
    """Dynamically import a class from its fully qualified path."""
    module_path, class_name = class_path.rsplit(".", 1)
    import importlib

    module = importlib.import_module(module_path)
    return getattr(module, class_name)
