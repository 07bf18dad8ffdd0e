"""Configuration model for the completion engine."""

from pydantic import BaseModel, ConfigDict, Field


class HintsConfig(BaseModel):
    """Completion engine configuration.

    Field aliases accept the preference names used by editor settings files
    (``maxHints``, ``commonLibs``, ``showBuiltFns``, ``enabled``).

    Attributes:
        max_hints: Maximum number of candidates returned per query.
        common_library_path: Fallback root for @import resolution.
            Empty string disables the fallback.
        show_builtin_functions: Include built-in Sass functions in
            function-mode candidates.
        enabled: Feature kill switch.

    Example:
        >>> HintsConfig.model_validate({"maxHints": 20}).max_hints
        20

    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    max_hints: int = Field(
        default=50,
        ge=1,
        alias="maxHints",
        description="Candidate cap applied after ranking",
    )
    common_library_path: str = Field(
        default="",
        alias="commonLibs",
        description="Fallback import root (empty = disabled)",
    )
    show_builtin_functions: bool = Field(
        default=True,
        alias="showBuiltFns",
        description="Offer built-in Sass functions in function mode",
    )
    enabled: bool = Field(
        default=True,
        description="Enable or disable hinting entirely",
    )
