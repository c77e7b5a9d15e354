"""
dialogue.utils.component_registry
=================================

Single authoritative plugin registry.

* Register:   ``@register("llm", "openai")``
* Discover:   ``cls = get("llm", "openai")``
* Enumerate:  ``available("llm")  ->  ("openai",)``
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, Tuple

logger = logging.getLogger(__name__)

# {category: {name: factory}}
_REGISTRY: Dict[str, Dict[str, Callable[..., Any]]] = defaultdict(dict)


# --------------------------------------------------------------------------- #
# Public API                                                                  #
# --------------------------------------------------------------------------- #
def register(category: str, name: str):
    """
    Decorator for registering a factory under *category* / *name*.

    Example
    -------
    ```python
    @register("llm", "openai")
    class OpenAIChatTransport(BaseChatTransport):
        ...
    ```
    """

    def decorator(factory: Callable[..., Any]):
        _REGISTRY[category][name] = factory
        logger.debug("Registered %s:%s", category, name)
        return factory

    return decorator


def get(category: str, name: str):
    """Return a **class or factory** registered as *category:name*."""
    if category not in _REGISTRY:
        raise KeyError(f"No such category registered: {category!r}")
    if name not in _REGISTRY[category]:
        raise KeyError(f"No {category!r} named {name!r} available.")
    return _REGISTRY[category][name]


def available(category: str) -> Tuple[str, ...]:
    """Return the sorted, frozen list of available names for *category*."""
    return tuple(sorted(_REGISTRY.get(category, {}).keys()))


def create_component_instance(category: str, name: str, **kwargs):
    """
    Retrieve and instantiate a component from the registry.
    Raises informative error if not found.
    """
    try:
        cls = get(category, name)
    except KeyError:
        raise ValueError(
            f"No {category!r} named {name!r} registered. "
            f"Available: {available(category)}"
        )
    return cls(**kwargs)
