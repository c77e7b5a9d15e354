# dialogue/config/settings.py
"""
Typed configuration for the dialogue client.

* Loads defaults from `dialogue.config.defaults.DEFAULT_CONFIG`
* Overrides with values read from the project-root `config.yaml`
* Overrides with environment variables (shell or `.env`)
* Allows optional in-memory overrides (useful for tests)
* Exposes values through a Pydantic model called `AppConfig`
* Provides a global singleton `settings`
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from dialogue.config.defaults import DEFAULT_CONFIG

PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Load environment variables from .env file
load_dotenv(PROJECT_ROOT / ".env")

# --------------------------------------------------------------------------- #
# Helpers                                                                     #
# --------------------------------------------------------------------------- #

_CONFIG_FILE = PROJECT_ROOT / "config.yaml"


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML file; return an empty dict if the file is missing/empty."""
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge *override* into *base* (override wins)."""
    result: Dict[str, Any] = {**base}
    for k, v in override.items():
        if (
            k in result
            and isinstance(result[k], dict)
            and isinstance(v, dict)
        ):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _upper_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    """Normalise top-level keys so `model` and `MODEL` address the same value."""
    return {str(k).upper(): v for k, v in data.items()}


_STRUCTURED_KEYS = {"CONTEXT", "CONTEXTS"}


def _env_to_dict() -> Dict[str, Any]:
    """Environment variables that name a known scalar configuration key."""
    return {
        k: v for k, v in os.environ.items()
        if k in DEFAULT_CONFIG and k not in _STRUCTURED_KEYS
    }


# --------------------------------------------------------------------------- #
# Pydantic model                                                              #
# --------------------------------------------------------------------------- #


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    # ---- API configuration ------------------------------------------------ #
    openai_api_key: str = Field(default="", description="Bearer token for the completions endpoint")
    api_url: str = Field(default=DEFAULT_CONFIG["API_URL"])
    llm_provider: str = Field(default=DEFAULT_CONFIG["LLM_PROVIDER"])
    request_timeout: float = Field(default=DEFAULT_CONFIG["REQUEST_TIMEOUT"], gt=0)

    # ---- model ------------------------------------------------------------ #
    model: str = Field(default=DEFAULT_CONFIG["MODEL"])

    # ---- persona context -------------------------------------------------- #
    context_locale: str = Field(default=DEFAULT_CONFIG["CONTEXT_LOCALE"])
    contexts: Dict[str, List[Dict[str, str]]] = Field(
        default_factory=lambda: copy.deepcopy(DEFAULT_CONFIG["CONTEXTS"])
    )
    context: Optional[List[Dict[str, str]]] = None

    # ---- CLI / logging ---------------------------------------------------- #
    default_language: str = Field(default=DEFAULT_CONFIG["DEFAULT_LANGUAGE"])
    log_level: str = Field(default=DEFAULT_CONFIG["LOG_LEVEL"])

    # ---- dict-like helpers ------------------------------------------------ #
    def __getitem__(self, item: str) -> Any:  # noqa: Dunder
        return getattr(self, item.lower())

    def get(self, item: str, default: Any | None = None) -> Any:  # noqa: A003
        return getattr(self, item.lower(), default)

    def __contains__(self, item: object) -> bool:  # noqa: Dunder
        return hasattr(self, str(item).lower())

    def default_context(self, locale: Optional[str] = None) -> List[Dict[str, str]]:
        """
        Resolve the persona context prepended to every request.

        An explicit ``CONTEXT`` list wins; otherwise the entry of ``CONTEXTS``
        for *locale* (or ``CONTEXT_LOCALE``), falling back to Japanese.
        """
        if self.context and locale is None:
            return copy.deepcopy(self.context)
        locale = locale or self.context_locale
        if locale in self.contexts:
            return copy.deepcopy(self.contexts[locale])
        return copy.deepcopy(self.contexts.get("ja", DEFAULT_CONFIG["CONTEXTS"]["ja"]))


# --------------------------------------------------------------------------- #
# Public loader                                                               #
# --------------------------------------------------------------------------- #


def load_settings(
    overrides: Optional[Dict[str, Any]] = None,
    config_file: Optional[Path] = None,
) -> AppConfig:
    """
    Build an ``AppConfig`` by merging:

    1.  ``DEFAULT_CONFIG``                         (hard-coded defaults)
    2.  Values from ``config.yaml``                (project-wide overrides)
    3.  Environment variables (.env, shell)
    4.  *overrides* dict passed in programmatically (tests / cli flags)

    Later items win on conflict.
    """
    yaml_cfg = _upper_keys(_load_yaml(config_file or _CONFIG_FILE))
    # Flatten 'settings' key if present
    if "SETTINGS" in yaml_cfg:
        nested = yaml_cfg.pop("SETTINGS") or {}
        yaml_cfg = {**yaml_cfg, **_upper_keys(nested)}
    merged = _deep_merge(DEFAULT_CONFIG, yaml_cfg)
    merged = _deep_merge(merged, _env_to_dict())
    if overrides:
        merged = _deep_merge(merged, _upper_keys(overrides))
    return AppConfig(**{k.lower(): v for k, v in merged.items()})


# --------------------------------------------------------------------------- #
# Global singleton, initialized immediately                                   #
# --------------------------------------------------------------------------- #

settings: AppConfig = load_settings()
