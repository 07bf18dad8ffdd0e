"""Completion sessions, ranking and the host-facing provider."""

from sass_hints.hints.controller import HintsController
from sass_hints.hints.matcher import match_name, rank
from sass_hints.hints.provider import HintResponse, SassHintProvider
from sass_hints.hints.session import HintMode, HintSession, detect_explicit

__all__ = [
    "HintMode",
    "HintResponse",
    "HintSession",
    "HintsController",
    "SassHintProvider",
    "detect_explicit",
    "match_name",
    "rank",
]
