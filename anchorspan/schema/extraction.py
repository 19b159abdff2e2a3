"""
Contract of the document-extraction collaborator.

Extraction itself (format detection, PDF/DOCX conversion) happens upstream;
only its result is modelled here.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ExtractionReason(str, Enum):
    """Why extracted text may be unreliable."""

    LOW_CONFIDENCE = "low_confidence"
    IMAGE_DETECTED = "image_detected"
    COMPLEX_LAYOUT = "complex_layout"
    NONE = "none"


class ExtractionResult(BaseModel):
    """Plain text produced from an uploaded file."""

    model_config = ConfigDict(populate_by_name=True)

    text: str
    is_uncertain: bool = Field(False, alias="isUncertain")
    reason: ExtractionReason = ExtractionReason.NONE
