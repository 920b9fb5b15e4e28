from .fix import handle_fix, _fix_single_file, _print_batch_summary
from .preview import handle_preview
from .rules import handle_rules

__all__ = [
  "_fix_single_file",
  "_print_batch_summary",
  "handle_fix",
  "handle_preview",
  "handle_rules",
]
