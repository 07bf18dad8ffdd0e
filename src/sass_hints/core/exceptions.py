"""Custom exception hierarchy for sass-hints.

All custom exceptions inherit from SassHintsError to enable:
- Unified exception handling at the host boundary
- Clear distinction from built-in exceptions
- Per-import failure reporting without aborting sibling imports
"""

from typing import Any

__all__ = [
    "SassHintsError",
    "ConfigError",
    "ConfigValidationError",
    "ImportScanError",
    "ImportResolutionError",
    "ImportFetchError",
]


class SassHintsError(Exception):
    """Base exception for all sass-hints errors."""

    pass


class ConfigError(SassHintsError):
    """Configuration loading or validation error.

    Raised when:
    - Configuration file is missing or unreadable
    - Configuration is not valid YAML or not a mapping
    - Configuration values fail validation
    """

    pass


class ConfigValidationError(ConfigError):
    """Validation error with structured Pydantic details.

    Attributes:
        errors: List of error dicts with 'loc', 'msg', and 'type' fields,
            as produced by pydantic's ValidationError.errors().

    Example:
        >>> try:
        ...     store.update(max_hints=0)
        ... except ConfigValidationError as e:
        ...     for err in e.errors:
        ...         print(err["loc"], err["msg"])

    """

    def __init__(self, message: str, errors: list[dict[str, Any]]) -> None:
        """Initialize ConfigValidationError with message and structured errors.

        Args:
            message: Human-readable error message.
            errors: List of error dicts from Pydantic ValidationError.

        """
        super().__init__(message)
        self.errors = errors


class ImportScanError(SassHintsError):
    """Base class for failures of a single @import target.

    These never abort a rescan: the failing import contributes no symbols
    and the remaining imports are still processed.

    Attributes:
        import_path: The import path as written (after extension expansion).

    """

    def __init__(self, message: str, import_path: str) -> None:
        """Initialize with message and the failing import path.

        Args:
            message: Human-readable error message.
            import_path: Import path that failed.

        """
        super().__init__(message)
        self.import_path = import_path


class ImportResolutionError(ImportScanError):
    """Import path resolved to nothing in the document directory or library root."""

    pass


class ImportFetchError(ImportScanError):
    """Import path resolved to a file whose text could not be read."""

    pass
