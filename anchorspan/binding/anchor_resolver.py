"""Anchor resolution: maps a highlight snippet to a character span in the source text.

The snippet usually comes from an LLM, so it may differ from the document in
whitespace, casing or exact wording. Resolution runs a fixed cascade of
strategies and stops at the first one that succeeds:

1. Anchored exact match (pre_anchor + snippet + post_anchor)
2. Exact substring match
3. Case-insensitive match
4. Whitespace-normalized match, back-mapped to the original text

The resolved span is handed to a renderer as a prefix/match/suffix partition.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from ..schema.highlights import Highlight

# Tolerance for the offset drift that whitespace collapsing introduces
LOOKBACK_WINDOW = 50

_WHITESPACE_RE = re.compile(r"\s+")


class MatchTier(str, Enum):
    """Strategy that produced a match, in evaluation order."""

    ANCHORED_EXACT = "anchored_exact"
    EXACT_SUBSTRING = "exact_substring"
    CASE_INSENSITIVE = "case_insensitive"
    WHITESPACE_NORMALIZED = "whitespace_normalized"

    @property
    def rank(self) -> int:
        return list(MatchTier).index(self) + 1


@dataclass(frozen=True)
class AnchorMatch:
    """A resolved snippet with its position in the source text."""

    start_offset: int
    length: int
    matched_text: str
    tier: MatchTier

    @property
    def end_offset(self) -> int:
        return self.start_offset + self.length

    def to_dict(self) -> dict:
        return {
            "start_offset": self.start_offset,
            "length": self.length,
            "end_offset": self.end_offset,
            "matched_text": self.matched_text,
            "tier": self.tier.value,
        }


MatchResult = Optional[AnchorMatch]


@dataclass
class HighlightResolution:
    """Outcome of resolving one highlight from an analysis."""

    highlight_id: str
    snippet: str
    anchored: bool
    match: MatchResult

    @property
    def found(self) -> bool:
        return self.match is not None


def resolve(
    text: str,
    snippet: str,
    pre_anchor: Optional[str] = None,
    post_anchor: Optional[str] = None,
    *,
    window: int = LOOKBACK_WINDOW,
) -> MatchResult:
    """Locate the best-matching span for a snippet inside text.

    Args:
        text: Source text to search (already extracted plain text)
        snippet: Fragment to locate; leading/trailing whitespace is ignored
        pre_anchor: Text expected immediately before the snippet (optional)
        post_anchor: Text expected immediately after the snippet (optional)
        window: Back-mapping window for the whitespace-normalized tier

    Returns:
        AnchorMatch for the first tier that succeeds, or None.
    """
    if not isinstance(text, str) or not text:
        return None
    if not isinstance(snippet, str):
        return None

    clean = snippet.strip()
    if not clean:
        return None

    pre = pre_anchor if isinstance(pre_anchor, str) else ""
    post = post_anchor if isinstance(post_anchor, str) else ""

    if pre or post:
        pos = _try_anchored(text, clean, pre, post)
        if pos is not None:
            return _build(text, pos, len(clean), MatchTier.ANCHORED_EXACT)

    pos = _try_exact(text, clean)
    if pos is not None:
        return _build(text, pos, len(clean), MatchTier.EXACT_SUBSTRING)

    text_folded = _fold_case(text)

    pos = _try_case_insensitive(text_folded, clean)
    if pos is not None:
        return _build(text, pos, len(clean), MatchTier.CASE_INSENSITIVE)

    span = _try_normalized(text, text_folded, clean, window)
    if span is not None:
        return _build(text, span[0], span[1], MatchTier.WHITESPACE_NORMALIZED)

    return None


def _build(text: str, start: int, length: int, tier: MatchTier) -> AnchorMatch:
    return AnchorMatch(
        start_offset=start,
        length=length,
        matched_text=text[start:start + length],
        tier=tier,
    )


def _try_anchored(text: str, snippet: str, pre: str, post: str) -> Optional[int]:
    """Exact match of the snippet together with its anchors."""
    pos = text.find(f"{pre}{snippet}{post}")
    if pos >= 0:
        return pos + len(pre)
    return None


def _try_exact(text: str, snippet: str) -> Optional[int]:
    """Exact substring match."""
    pos = text.find(snippet)
    if pos >= 0:
        return pos
    return None


def _try_case_insensitive(text_folded: str, snippet: str) -> Optional[int]:
    """Case-insensitive match against pre-folded text."""
    pos = text_folded.find(_fold_case(snippet))
    if pos >= 0:
        return pos
    return None


def _fold_case(text: str) -> str:
    """Lower-case text without changing its length.

    str.lower() may expand some characters (e.g. 'İ' -> 'i̇'); those keep
    their original form so offsets in the folded text stay valid.
    """
    lowered = text.lower()
    if len(lowered) == len(text):
        return lowered
    return "".join(
        low if len(low) == 1 else ch
        for ch, low in ((ch, ch.lower()) for ch in text)
    )


def _normalize_whitespace(text: str) -> str:
    """Collapse all whitespace runs to single spaces and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def _try_normalized(
    text: str,
    text_folded: str,
    snippet: str,
    window: int,
) -> Optional[tuple[int, int]]:
    """Match after normalizing whitespace, then map back to the original text.

    The normalized position only approximates the original one, so the first
    and last words are searched for near where normalization puts them.
    """
    norm_text = _normalize_whitespace(text)
    norm_snippet = _normalize_whitespace(snippet)

    norm_index = norm_text.find(norm_snippet)
    if norm_index < 0:
        return None

    words = norm_snippet.split(" ")
    if not words or not words[0]:
        return None

    first_word = _fold_case(words[0])
    last_word = _fold_case(words[-1])

    start_idx = text_folded.find(first_word, max(0, norm_index - window))
    if start_idx < 0:
        return None

    # Collapsing only shrinks text, so the last word starts no earlier than
    # start_idx + len(norm_snippet) - len(last_word); never search before
    # that point minus the window, nor before the first word.
    lookahead = max(window, len(last_word))
    search_from = max(start_idx, start_idx + len(norm_snippet) - lookahead)
    end_idx = text_folded.find(last_word, search_from)
    if end_idx < 0:
        return None

    return (start_idx, end_idx + len(last_word) - start_idx)


def partition(text: str, match: MatchResult) -> tuple[str, str, str]:
    """Split text into (prefix, match, suffix) for rendering.

    With no match the whole text is the prefix and the other parts are empty.
    """
    if match is None:
        return (text, "", "")
    return (
        text[:match.start_offset],
        match.matched_text,
        text[match.end_offset:],
    )


def resolve_highlights(
    document_text: str,
    highlights: list[Union[Highlight, dict[str, Any]]],
    *,
    window: int = LOOKBACK_WINDOW,
) -> list[HighlightResolution]:
    """Resolve every highlight of an analysis against the same document.

    Accepts Highlight models or raw dicts using the wire keys
    (id, highlight, preAnchor, postAnchor).

    Returns list of HighlightResolution, one per highlight (in input order).
    """
    results: list[HighlightResolution] = []

    for i, item in enumerate(highlights):
        if isinstance(item, Highlight):
            hl_id = item.id
            snippet = item.highlight
            pre, post = item.pre_anchor, item.post_anchor
        else:
            hl_id = str(item.get("id", f"highlight_{i:03d}"))
            snippet = item.get("highlight") or ""
            pre = item.get("preAnchor") or item.get("pre_anchor")
            post = item.get("postAnchor") or item.get("post_anchor")

        match = resolve(document_text, snippet, pre, post, window=window)
        results.append(HighlightResolution(
            highlight_id=hl_id,
            snippet=snippet if isinstance(snippet, str) else "",
            anchored=bool(
                (isinstance(pre, str) and pre) or (isinstance(post, str) and post)
            ),
            match=match,
        ))

    return results
