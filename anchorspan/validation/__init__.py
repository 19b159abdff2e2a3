"""
Validation of LLM-produced highlights against document text.
"""

from .highlight_validator import (
    ResolvedHighlight,
    ValidationIssue,
    ValidationResult,
    validate_highlights,
)

__all__ = [
    "ResolvedHighlight",
    "ValidationIssue",
    "ValidationResult",
    "validate_highlights",
]
