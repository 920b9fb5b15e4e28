"""
Preview Command Handler.

Runs the engine without writing anything and shows, per compilation unit, the
refactorings that would be applied.
"""

from pathlib import Path
from typing import List, Optional

from rich.markup import escape

from javatidy.config import RuntimeConfig
from javatidy.core.engine import RefactoringEngine
from javatidy.core.preview import build_preview_panel
from javatidy.utils.console import console, log_error, log_warning


def handle_preview(input_path: Path, selected_element: Optional[str] = None, rules: Optional[List[str]] = None) -> int:
  """
  Handles the 'preview' command execution.

  Args:
      input_path: Java file or directory to inspect.
      selected_element: Element name the report is filtered by.
      rules: Override for the enabled rules.

  Returns:
      int: Exit code (0 for success, 1 if any unit failed).
  """
  if not input_path.exists():
    log_error(f"Input not found: {input_path}")
    return 1

  try:
    config = RuntimeConfig.load(
      enabled_rules=rules,
      selected_element=selected_element,
      search_path=input_path if input_path.is_dir() else input_path.parent,
    )
  except ValueError as e:
    log_error(f"Invalid configuration: {escape(str(e))}")
    return 1

  files = [input_path] if input_path.is_file() else sorted(input_path.rglob("*.java"))
  if not files:
    log_warning(f"No .java files found in {input_path}")
    return 0

  engine = RefactoringEngine(config=config)
  exit_code = 0
  for src_file in files:
    try:
      code = src_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
      log_error(f"Failed to read {src_file}: {escape(str(e))}")
      exit_code = 1
      continue

    result = engine.run(code, unit_name=src_file.name)
    if not result.success:
      log_error(f"Failed to analyse {src_file}: {escape('; '.join(result.errors))}")
      exit_code = 1
      continue
    console.print(build_preview_panel(result, config.selected_element))

  return exit_code
