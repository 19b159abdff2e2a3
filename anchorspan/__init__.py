"""
Anchorspan - locate LLM-produced highlight snippets in document text.

Core modules:
- binding: Snippet/anchor resolution to character spans
- schema: Analysis payload and extraction result models
- validation: Checks that an analysis' highlights resolve in its document
- config: YAML/.env backed settings
- cli: Command-line entry point
"""

__version__ = "0.1.0"
