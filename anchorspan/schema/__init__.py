"""
Schema definitions for analysis payloads and extracted documents.
"""

from .highlights import AuditAnalysis, Highlight, RiskSeverity, parse_analysis
from .extraction import ExtractionReason, ExtractionResult

__all__ = [
    "AuditAnalysis",
    "Highlight",
    "RiskSeverity",
    "parse_analysis",
    "ExtractionReason",
    "ExtractionResult",
]
