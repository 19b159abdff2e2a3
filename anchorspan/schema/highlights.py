"""
Highlight schema definitions.

An audit analysis lists risks; each risk carries a verbatim highlight plus
the words immediately around it (preAnchor / postAnchor) so the highlight
can be located even when its text recurs in the document.
"""

import json
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RiskSeverity(str, Enum):
    """Severity assigned to a risk by the analysis."""

    CRITICAL = "Critical"
    MODERATE = "Moderate"
    LOW = "Low"


class Highlight(BaseModel):
    """
    A snippet to emphasize in the source document.

    Field names follow Python style; the camelCase wire keys are accepted
    as aliases.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    highlight: str = ""
    pre_anchor: Optional[str] = Field(None, alias="preAnchor")
    post_anchor: Optional[str] = Field(None, alias="postAnchor")
    title: Optional[str] = None
    desc: Optional[str] = None
    risk: Optional[RiskSeverity] = None

    @property
    def has_anchors(self) -> bool:
        return bool(self.pre_anchor or self.post_anchor)


class AuditAnalysis(BaseModel):
    """Structured result of a document audit."""

    model_config = ConfigDict(populate_by_name=True)

    risks: list[Highlight] = Field(default_factory=list)
    safety_index: Optional[str] = Field(
        None, alias="safetyIndex", pattern=r"^[A-F][+-]?$"
    )
    score: Optional[float] = Field(None, ge=0, le=100)
    summary: str = ""
    draft: Optional[str] = None


def parse_analysis(raw: str) -> AuditAnalysis:
    """
    Parse an audit analysis from a raw LLM response.

    The response may wrap the JSON object in prose or a markdown fence;
    everything from the first '{' to the last '}' is taken as the payload.

    Args:
        raw: Raw response text

    Returns:
        AuditAnalysis

    Raises:
        ValueError: If no JSON object can be decoded
        pydantic.ValidationError: If the object does not match the schema
    """
    start = raw.find("{")
    end = raw.rfind("}") + 1
    if start == -1 or end <= start:
        raise ValueError("No JSON object found in analysis response")

    try:
        data = json.loads(raw[start:end])
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid analysis JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValueError("Analysis payload must be a JSON object")

    return AuditAnalysis.model_validate(data)
