"""Live configuration snapshot with change notification."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from sass_hints.core.config.models import HintsConfig
from sass_hints.core.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)

ConfigListener = Callable[[HintsConfig, HintsConfig], None]


class ConfigStore:
    """Owns the current HintsConfig and notifies listeners on change.

    Snapshots are immutable; an update validates a complete new snapshot
    and swaps it in, so readers always see a consistent configuration.

    """

    def __init__(self, config: HintsConfig | None = None) -> None:  # noqa: D107
        self._current = config or HintsConfig()
        self._listeners: list[ConfigListener] = []

    @property
    def current(self) -> HintsConfig:
        """Return the active configuration snapshot."""
        return self._current

    def subscribe(self, listener: ConfigListener) -> Callable[[], None]:
        """Register a listener called with (old, new) after each change.

        Returns:
            Callable that removes the listener.

        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def update(self, **changes: Any) -> HintsConfig:
        """Apply option changes and notify listeners.

        Accepts field names or their aliases.

        Raises:
            ConfigValidationError: If the resulting configuration is invalid.

        """
        aliases = {
            field.alias: name
            for name, field in HintsConfig.model_fields.items()
            if field.alias
        }
        data = self._current.model_dump()
        data.update({aliases.get(key, key): value for key, value in changes.items()})
        try:
            new = HintsConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigValidationError(
                "Invalid configuration update",
                [dict(err) for err in e.errors()],
            ) from e

        if new == self._current:
            return new

        old, self._current = self._current, new
        logger.debug("Configuration changed: %s", changes)
        for listener in list(self._listeners):
            listener(old, new)
        return new

    def replace(self, config: HintsConfig) -> None:
        """Swap in a whole snapshot (e.g. after reloading the config file)."""
        if config == self._current:
            return
        old, self._current = self._current, config
        for listener in list(self._listeners):
            listener(old, config)
