"""Configuration for sass-hints.

The engine never reads ambient globals: a ConfigStore is created by the host
(or the CLI) and passed into the provider, which reads the current snapshot
at the start of each operation.
"""

from sass_hints.core.config.loader import MAX_CONFIG_SIZE, load_config
from sass_hints.core.config.models import HintsConfig
from sass_hints.core.config.store import ConfigListener, ConfigStore

__all__ = [
    "MAX_CONFIG_SIZE",
    "ConfigListener",
    "ConfigStore",
    "HintsConfig",
    "load_config",
]
