"""
Configuration handling for the dialogue client.

Settings hierarchy: defaults → config.yaml → environment → overrides.
"""

from dialogue.config.settings import settings, load_settings, AppConfig, PROJECT_ROOT
from dialogue.config.defaults import DEFAULT_CONFIG, DEFAULT_CONTEXTS

__all__ = [
    'settings',
    'load_settings',
    'AppConfig',
    'PROJECT_ROOT',
    'DEFAULT_CONFIG',
    'DEFAULT_CONTEXTS',
]
