"""
dialogue.llm
============

Provider-agnostic entry point for chat transports.

Example
-------
from dialogue.llm import get_transport
transport = get_transport()  # uses settings.LLM_PROVIDER (default "openai")
"""

from typing import Optional

from dialogue.llm.base import BaseChatTransport

# Import provider implementations so they register themselves
from dialogue.llm.providers import OpenAIChatTransport

from dialogue.config.settings import settings
from dialogue.utils.component_registry import available, create_component_instance


def get_transport(name: Optional[str] = None, **kwargs) -> BaseChatTransport:
    """
    Return a transport for the specified provider.

    Parameters
    ----------
    name : str, optional
        Provider name (defaults to settings.LLM_PROVIDER or "openai")
    **kwargs
        Forwarded to the provider constructor

    Returns
    -------
    BaseChatTransport
        Transport instance
    """
    provider = name or getattr(settings, "llm_provider", "openai")
    return create_component_instance(BaseChatTransport.CATEGORY, provider, **kwargs)


def available_providers():
    """Names of all registered transports."""
    return available(BaseChatTransport.CATEGORY)


__all__ = [
    "get_transport",
    "available_providers",
    "BaseChatTransport",
    "OpenAIChatTransport",
]
