"""Validate an audit analysis against the actual document text.

The analysis is LLM output: every risk names a verbatim highlight and its
surrounding anchors. This validator checks that the highlights can be placed
in the document before the result reaches a reader, and flags highlights
that were only placed by a fuzzy strategy.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Union

from ..binding.anchor_resolver import MatchTier, resolve_highlights
from ..config import ResolverConfig
from ..schema.extraction import ExtractionResult
from ..schema.highlights import Highlight

FUZZY_TIERS = (MatchTier.CASE_INSENSITIVE, MatchTier.WHITESPACE_NORMALIZED)


@dataclass
class ResolvedHighlight:
    """A highlight mapped to an actual character range."""

    highlight_id: str
    start: int
    end: int
    text: str
    tier: MatchTier


@dataclass
class ValidationIssue:
    """A single issue found during validation."""

    severity: str  # "error" | "warning"
    highlight_id: str | None
    message: str


@dataclass
class ValidationResult:
    """Result of validating the highlights of an analysis."""

    valid: bool
    issues: list[ValidationIssue] = field(default_factory=list)
    resolved: list[ResolvedHighlight] = field(default_factory=list)
    tier_counts: dict[str, int] = field(default_factory=dict)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == "error"]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == "warning"]

    def summary(self) -> str:
        lines = []
        status = "PASS" if self.valid else "FAIL"
        lines.append(f"Highlight Validation: {status}")
        lines.append(f"  Highlights resolved: {len(self.resolved)}")
        if self.tier_counts:
            lines.append("  By tier:")
            for tier in MatchTier:
                count = self.tier_counts.get(tier.value, 0)
                if count:
                    lines.append(f"    {tier.value}: {count}")
        if self.errors:
            lines.append(f"  Errors: {len(self.errors)}")
            for e in self.errors:
                hl_str = f" (highlight {e.highlight_id})" if e.highlight_id is not None else ""
                lines.append(f"    - {e.message}{hl_str}")
        if self.warnings:
            lines.append(f"  Warnings: {len(self.warnings)}")
            for w in self.warnings:
                hl_str = f" (highlight {w.highlight_id})" if w.highlight_id is not None else ""
                lines.append(f"    - {w.message}{hl_str}")
        return "\n".join(lines)


def validate_highlights(
    document_text: str,
    highlights: list[Union[Highlight, dict[str, Any]]],
    *,
    config: ResolverConfig | None = None,
    extraction: ExtractionResult | None = None,
) -> ValidationResult:
    """Validate that every highlight of an analysis resolves in the document.

    Args:
        document_text: The full document text (from the extraction step).
        highlights: Highlight models or raw risk dicts from the analysis.
        config: Resolver settings; defaults are used when omitted.
        extraction: Extraction result for the document, if known. An
            uncertain extraction is reported as a warning.

    Returns:
        ValidationResult with resolved highlights and any issues.
    """
    config = config or ResolverConfig()
    issues: list[ValidationIssue] = []
    resolved: list[ResolvedHighlight] = []

    if extraction is not None and extraction.is_uncertain:
        issues.append(ValidationIssue(
            "warning", None,
            f"Document text extraction is uncertain ({extraction.reason.value})"
        ))

    if not highlights:
        issues.append(ValidationIssue("error", None, "Analysis has no highlights"))
        return ValidationResult(valid=False, issues=issues)

    resolutions = resolve_highlights(document_text, highlights, window=config.window)

    # --- Duplicate ids ---
    id_counts = Counter(r.highlight_id for r in resolutions)
    for hl_id, count in id_counts.items():
        if count > 1:
            issues.append(ValidationIssue(
                "warning", hl_id, f"Highlight id used {count} times"
            ))

    # --- Per-highlight checks ---
    tier_counts: Counter[str] = Counter()
    for res in resolutions:
        if not res.snippet.strip():
            issues.append(ValidationIssue("error", res.highlight_id, "Missing highlight text"))
            continue

        if res.match is None:
            shown = res.snippet[:60] + ("..." if len(res.snippet) > 60 else "")
            issues.append(ValidationIssue(
                "error", res.highlight_id,
                f"highlight not found in document: \"{shown}\""
            ))
            continue

        match = res.match
        tier_counts[match.tier.value] += 1
        resolved.append(ResolvedHighlight(
            highlight_id=res.highlight_id,
            start=match.start_offset,
            end=match.end_offset,
            text=match.matched_text,
            tier=match.tier,
        ))

        if res.anchored and match.tier is not MatchTier.ANCHORED_EXACT:
            issues.append(ValidationIssue(
                "warning", res.highlight_id,
                f"Anchors did not match; fell back to {match.tier.value} "
                f"(occurrence may be ambiguous)"
            ))

        if config.warn_on_fuzzy and match.tier in FUZZY_TIERS:
            issues.append(ValidationIssue(
                "warning", res.highlight_id,
                f"Highlight is not verbatim; placed by {match.tier.value} "
                f"at [{match.start_offset}, {match.end_offset})"
            ))

    valid = not any(i.severity == "error" for i in issues)

    return ValidationResult(
        valid=valid,
        issues=issues,
        resolved=resolved,
        tier_counts=dict(tier_counts),
    )
