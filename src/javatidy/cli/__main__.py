"""
Main Entry Point for javatidy CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `javatidy.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from javatidy import __version__
from javatidy.cli import commands
from javatidy.utils.console import set_verbosity


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Parses arguments via argparse and calls the appropriate handler function.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="javatidy: Java modifier clean-up")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
  parser.add_argument("-v", "--verbose", action="store_true", help="Log every staged edit")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: FIX ---
  cmd_fix = subparsers.add_parser("fix", help="Refactor a Java file or directory")
  cmd_fix.add_argument("path", type=Path, help="Input .java file or directory")
  cmd_fix.add_argument("--out", type=Path, default=None, help="Output destination (file or dir). Default: in place")
  cmd_fix.add_argument("--check", action="store_true", help="Write nothing; exit 1 if any file would change")
  cmd_fix.add_argument("--diff", action="store_true", help="Print a unified diff for every changed file")
  cmd_fix.add_argument("--rules", nargs="+", default=None, help="Rules to run (default: from toml, else all)")
  cmd_fix.add_argument("--max-passes", type=int, default=None, help="Pass limit per file (default: from toml)")
  cmd_fix.add_argument(
    "--fail-fast",
    action="store_true",
    default=None,
    help="Stop a directory batch at the first failed file (Overrides config)",
  )
  cmd_fix.add_argument(
    "--json-trace", type=Path, default=None, help="Dump the execution trace of a single file to a JSON file."
  )

  # --- Command: PREVIEW ---
  cmd_prev = subparsers.add_parser("preview", help="Show the refactorings that would be applied")
  cmd_prev.add_argument("path", type=Path, help="Input .java file or directory")
  cmd_prev.add_argument("--select", default=None, help="Only report units matching this element name")
  cmd_prev.add_argument("--rules", nargs="+", default=None, help="Rules to run (default: from toml, else all)")

  # --- Command: RULES ---
  subparsers.add_parser("rules", help="List available rules")

  args = parser.parse_args(argv)
  set_verbosity(args.verbose)

  if args.command == "fix":
    return commands.handle_fix(
      args.path,
      args.out,
      args.check,
      args.diff,
      args.rules,
      args.max_passes,
      args.fail_fast,
      args.json_trace,
    )

  elif args.command == "preview":
    return commands.handle_preview(args.path, args.select, args.rules)

  elif args.command == "rules":
    return commands.handle_rules()

  return 0


if __name__ == "__main__":
  sys.exit(main())
