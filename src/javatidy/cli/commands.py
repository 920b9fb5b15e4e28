"""
CLI Command Handlers Facade.

This module re-exports handlers from `javatidy.cli.handlers` so that the
dispatcher and tests patch a single location.
"""

from javatidy.cli.handlers.fix import handle_fix, _fix_single_file, _print_batch_summary
from javatidy.cli.handlers.preview import handle_preview
from javatidy.cli.handlers.rules import handle_rules

__all__ = [
  "_fix_single_file",
  "_print_batch_summary",
  "handle_fix",
  "handle_preview",
  "handle_rules",
]
