"""Command-line entry point.

Usage:
    anchorspan resolve document.txt "quick brown" --pre "The " --json
    anchorspan check document.txt analysis.json --extraction extraction.json
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .binding.anchor_resolver import partition, resolve
from .config import load_config
from .schema.extraction import ExtractionResult
from .schema.highlights import parse_analysis
from .validation.highlight_validator import validate_highlights

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_ERROR = 2

# Context shown around a match in the human-readable output
PREVIEW_CHARS = 40


def _preview(text: str, match) -> str:
    prefix, matched, suffix = partition(text, match)
    head = prefix[-PREVIEW_CHARS:]
    tail = suffix[:PREVIEW_CHARS]
    lead = "…" if len(prefix) > PREVIEW_CHARS else ""
    trail = "…" if len(suffix) > PREVIEW_CHARS else ""
    return f"{lead}{head}[[{matched}]]{tail}{trail}".replace("\n", "\\n")


def cmd_resolve(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    text = Path(args.text_file).read_text(encoding="utf-8")

    match = resolve(text, args.snippet, args.pre, args.post, window=config.window)

    if args.json:
        print(json.dumps(match.to_dict() if match else None, ensure_ascii=False, indent=2))
    elif match is None:
        print("[anchorspan] not found")
    else:
        print(
            f"[anchorspan] {match.tier.value} at "
            f"[{match.start_offset}, {match.end_offset}): {_preview(text, match)}"
        )

    return EXIT_OK if match else EXIT_NOT_FOUND


def cmd_check(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    text = Path(args.text_file).read_text(encoding="utf-8")
    analysis = parse_analysis(Path(args.analysis).read_text(encoding="utf-8"))

    extraction = None
    if args.extraction:
        with open(args.extraction, encoding="utf-8") as f:
            extraction = ExtractionResult.model_validate(json.load(f))

    result = validate_highlights(text, analysis.risks, config=config, extraction=extraction)
    print(result.summary())

    return EXIT_OK if result.valid else EXIT_NOT_FOUND


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="anchorspan",
        description="Locate LLM-produced highlight snippets in document text.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_resolve = sub.add_parser("resolve", help="Resolve one snippet")
    p_resolve.add_argument("text_file", help="Path to the document text (UTF-8)")
    p_resolve.add_argument("snippet", help="Snippet to locate")
    p_resolve.add_argument("--pre", default=None, help="Text expected before the snippet")
    p_resolve.add_argument("--post", default=None, help="Text expected after the snippet")
    p_resolve.add_argument("--config", default=None, help="YAML config file")
    p_resolve.add_argument("--json", action="store_true", help="Print the match as JSON")
    p_resolve.set_defaults(func=cmd_resolve)

    p_check = sub.add_parser("check", help="Validate every highlight of an analysis")
    p_check.add_argument("text_file", help="Path to the document text (UTF-8)")
    p_check.add_argument("analysis", help="Analysis JSON (raw LLM output accepted)")
    p_check.add_argument("--extraction", default=None, help="Extraction result JSON")
    p_check.add_argument("--config", default=None, help="YAML config file")
    p_check.set_defaults(func=cmd_check)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except (OSError, ValueError, ValidationError) as e:
        print(f"[anchorspan] ERROR: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
