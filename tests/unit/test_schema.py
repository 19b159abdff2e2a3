"""
Tests for schema definitions.
"""

import pytest
from pydantic import ValidationError

from anchorspan.schema.highlights import (
    AuditAnalysis,
    Highlight,
    RiskSeverity,
    parse_analysis,
)
from anchorspan.schema.extraction import ExtractionReason, ExtractionResult


class TestHighlight:
    """Tests for Highlight schema."""

    def test_create_from_wire_keys(self):
        """Test camelCase anchor keys are accepted."""
        hl = Highlight.model_validate({
            "id": "risk_1",
            "risk": "Critical",
            "title": "Unilateral termination",
            "highlight": "may terminate",
            "preAnchor": "The Landlord ",
            "postAnchor": " this agreement",
        })

        assert hl.pre_anchor == "The Landlord "
        assert hl.post_anchor == " this agreement"
        assert hl.risk == RiskSeverity.CRITICAL
        assert hl.has_anchors

    def test_create_by_field_name(self):
        """Test snake_case field names are accepted."""
        hl = Highlight(id="risk_2", highlight="rent", pre_anchor="pay ")
        assert hl.pre_anchor == "pay "
        assert hl.post_anchor is None

    def test_without_anchors(self):
        """Test a highlight with no anchors."""
        hl = Highlight(id="risk_3", highlight="rent", pre_anchor="")
        assert not hl.has_anchors

    def test_invalid_severity(self):
        """Test unknown severities are rejected."""
        with pytest.raises(ValidationError):
            Highlight(id="risk_4", highlight="rent", risk="Apocalyptic")


class TestAuditAnalysis:
    """Tests for AuditAnalysis parsing."""

    RAW = """Here is the audit you requested:
```json
{
  "risks": [
    {"id": "1", "risk": "Moderate", "title": "Sublet ban", "desc": "No subletting.",
     "highlight": "shall not sublet", "preAnchor": "Tenant ", "postAnchor": " the premises"}
  ],
  "safetyIndex": "B",
  "score": 72,
  "summary": "Mostly balanced lease."
}
```"""

    def test_parse_fenced_response(self):
        """Test JSON is extracted from surrounding prose."""
        analysis = parse_analysis(self.RAW)

        assert len(analysis.risks) == 1
        assert analysis.risks[0].highlight == "shall not sublet"
        assert analysis.risks[0].risk == RiskSeverity.MODERATE
        assert analysis.safety_index == "B"
        assert analysis.score == 72
        assert analysis.draft is None

    def test_no_json(self):
        """Test responses without a JSON object."""
        with pytest.raises(ValueError, match="No JSON object"):
            parse_analysis("I could not analyze this document.")

    def test_invalid_json(self):
        """Test malformed JSON."""
        with pytest.raises(ValueError, match="Invalid analysis JSON"):
            parse_analysis('{"risks": [,]}')

    def test_score_out_of_range(self):
        """Test score bounds."""
        with pytest.raises(ValidationError):
            parse_analysis('{"risks": [], "score": 140}')

    def test_invalid_safety_index(self):
        """Test safety index must be a letter grade."""
        with pytest.raises(ValidationError):
            AuditAnalysis(safetyIndex="Z")

    def test_defaults(self):
        """Test an empty object is a valid analysis."""
        analysis = parse_analysis("{}")
        assert analysis.risks == []
        assert analysis.summary == ""


class TestExtractionResult:
    """Tests for ExtractionResult schema."""

    def test_defaults(self):
        """Test a certain extraction."""
        result = ExtractionResult(text="hello")
        assert not result.is_uncertain
        assert result.reason == ExtractionReason.NONE

    def test_wire_keys(self):
        """Test camelCase keys from the extraction collaborator."""
        result = ExtractionResult.model_validate({
            "text": "",
            "isUncertain": True,
            "reason": "complex_layout",
        })
        assert result.is_uncertain
        assert result.reason == ExtractionReason.COMPLEX_LAYOUT
