"""
Example: Place audit highlights in a document.

This example demonstrates resolving LLM-produced highlights against
extracted document text and checking the whole analysis.
"""

from anchorspan.binding import partition, resolve
from anchorspan.schema import parse_analysis
from anchorspan.validation import validate_highlights


def main():
    """Run example resolution."""

    # Sample text as it might come out of PDF extraction (hard line breaks)
    document_text = """RESIDENTIAL LEASE AGREEMENT

1. Rent. The Tenant shall pay rent of Rs. 25,000 on or before the fifth
day of each month. Late payment attracts a penalty of two percent.

2. Termination. The Landlord may terminate this agreement at any time
without notice. The Tenant may terminate this agreement with ninety
days notice.

3. Subletting. The Tenant shall not sublet the premises."""

    # Raw model response, with the JSON wrapped in prose
    raw_response = """Audit complete.
{
  "risks": [
    {"id": "r1", "risk": "Critical", "title": "One-sided termination",
     "desc": "Landlord can terminate without notice.",
     "highlight": "may terminate this agreement",
     "preAnchor": "The Landlord ", "postAnchor": " at any time"},
    {"id": "r2", "risk": "Moderate", "title": "Long notice for Tenant",
     "desc": "Tenant needs ninety days notice.",
     "highlight": "with ninety days notice"},
    {"id": "r3", "risk": "Low", "title": "Late penalty",
     "desc": "Two percent penalty on late rent.",
     "highlight": "late payment attracts a penalty"}
  ],
  "safetyIndex": "D",
  "score": 38,
  "summary": "Termination terms favour the Landlord."
}"""

    analysis = parse_analysis(raw_response)

    print("## Highlights")
    for risk in analysis.risks:
        match = resolve(document_text, risk.highlight, risk.pre_anchor, risk.post_anchor)
        if match is None:
            print(f"  - [{risk.id}] not found: {risk.highlight!r}")
            continue
        prefix, matched, suffix = partition(document_text, match)
        print(f"  - [{risk.id}] {match.tier.value} at {match.start_offset}: {matched!r}")
        print(f"    ...{prefix[-30:]!r} | {suffix[:30]!r}...")

    print()
    print(validate_highlights(document_text, analysis.risks).summary())


if __name__ == "__main__":
    main()
