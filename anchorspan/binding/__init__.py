"""
Anchor binding module.

Maps LLM-produced snippets to character spans in the source text.
"""

from .anchor_resolver import (
    LOOKBACK_WINDOW,
    AnchorMatch,
    HighlightResolution,
    MatchResult,
    MatchTier,
    partition,
    resolve,
    resolve_highlights,
)

__all__ = [
    "LOOKBACK_WINDOW",
    "AnchorMatch",
    "HighlightResolution",
    "MatchResult",
    "MatchTier",
    "partition",
    "resolve",
    "resolve_highlights",
]
