"""
dialogue.llm.providers
======================

Provider-specific chat transports.

Importing this package registers every transport with the component registry.
"""

from dialogue.llm.providers.openai import OpenAIChatTransport

__all__ = [
    "OpenAIChatTransport"
]
