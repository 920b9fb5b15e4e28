"""
Fix Command Handler.

This module implements the logic for the `javatidy fix` command.
It orchestrates:
1. Configuration loading (TOML + CLI overrides).
2. Refactoring of each file via the Engine.
3. Output writing, diff printing or change checking.
4. Trace logging and the batch summary.
"""

import json
from pathlib import Path
from typing import Dict, List, Optional

from rich.markup import escape
from rich.table import Table

from javatidy.config import RuntimeConfig
from javatidy.core.applier import unified_diff
from javatidy.core.engine import RefactoringEngine
from javatidy.core.refactoring_result import RefactoringResult
from javatidy.utils.console import (
  console,
  log_error,
  log_info,
  log_success,
  log_warning,
)


def handle_fix(
  input_path: Path,
  output_path: Optional[Path] = None,
  check: bool = False,
  diff: bool = False,
  rules: Optional[List[str]] = None,
  max_passes: Optional[int] = None,
  fail_fast: Optional[bool] = None,
  json_trace_path: Optional[Path] = None,
) -> int:
  """
  Handles the 'fix' command execution.

  Args:
      input_path: Path to the Java file or directory to refactor.
      output_path: Where rewritten code is saved. Files are rewritten in place if None.
      check: If True, nothing is written and the exit code reports pending changes.
      diff: If True, prints a unified diff for every changed file.
      rules: Override for the enabled rules.
      max_passes: Override for the pass limit.
      fail_fast: Override for stopping a batch at the first failure.
      json_trace_path: Optional path to dump the execution trace JSON (single file only).

  Returns:
      int: Exit code. 0 for success, 1 for failures or, with ``check``, pending changes.
  """
  if not input_path.exists():
    log_error(f"Input not found: {input_path}")
    return 1

  try:
    config = RuntimeConfig.load(
      enabled_rules=rules,
      max_passes=max_passes,
      fail_fast=fail_fast,
      search_path=input_path if input_path.is_dir() else input_path.parent,
    )
  except ValueError as e:
    log_error(f"Invalid configuration: {escape(str(e))}")
    return 1

  engine = RefactoringEngine(config=config)
  batch_results: Dict[str, RefactoringResult] = {}

  if input_path.is_file():
    result = _fix_single_file(input_path, output_path, engine, check, diff, json_trace_path)
    batch_results[input_path.name] = result

  else:
    java_files = sorted(input_path.rglob("*.java"))
    if not java_files:
      log_warning(f"No .java files found in {input_path}")
      return 0

    log_info(f"Processing {len(java_files)} files from {input_path}...")

    for src_file in java_files:
      rel_path = src_file.relative_to(input_path)
      dest_file = output_path / rel_path if output_path else None
      result = _fix_single_file(src_file, dest_file, engine, check, diff)
      batch_results[str(rel_path)] = result
      if not result.success and config.fail_fast:
        log_error(f"Stopping at first failure: {rel_path}")
        break

  _print_batch_summary(batch_results, check)

  if any(not r.success for r in batch_results.values()):
    return 1
  if check and any(r.changed for r in batch_results.values()):
    return 1
  return 0


def _fix_single_file(
  input_path: Path,
  output_path: Optional[Path],
  engine: RefactoringEngine,
  check: bool = False,
  diff: bool = False,
  json_trace_path: Optional[Path] = None,
) -> RefactoringResult:
  """
  Helper to execute refactoring logic on a single file.

  Args:
      input_path: Source file path.
      output_path: Destination file path. Defaults to ``input_path``.
      engine: Configured engine.
      check: If True, do not write anything.
      diff: If True, print the unified diff of changes.
      json_trace_path: Path to save trace event logs.

  Returns:
      RefactoringResult: Result object containing status and code.
  """
  try:
    with open(input_path, "rt", encoding="utf-8") as f:
      code = f.read()
  except (OSError, UnicodeDecodeError) as e:
    log_error(f"Failed to read {input_path}: {escape(str(e))}")
    return RefactoringResult(unit_name=input_path.name, success=False, errors=[str(e)])

  result = engine.run(code, unit_name=input_path.name)

  if json_trace_path and result.trace_events:
    try:
      json_trace_path.parent.mkdir(parents=True, exist_ok=True)
      with open(json_trace_path, "wt", encoding="utf-8") as f:
        json.dump(result.trace_events, f, indent=2)
      log_info(f"Trace saved to [path]{json_trace_path}[/path]")
    except OSError as e:
      log_error(f"Failed to write trace: {escape(str(e))}")

  if not result.success:
    log_error(f"Failed to refactor {input_path}: {escape('; '.join(result.errors))}")
    return result

  if diff and result.changed:
    console.print(unified_diff(result.original_code, result.code, str(input_path)), markup=False, highlight=False)

  if check:
    if result.changed:
      log_warning(f"Would refactor [path]{input_path}[/path] ({len(result.applied_refactorings)} changes)")
    return result

  destination = output_path or input_path
  if not result.changed and destination == input_path:
    return result

  try:
    destination.parent.mkdir(parents=True, exist_ok=True)
    with open(destination, "wt", encoding="utf-8") as f:
      f.write(result.code)
  except OSError as e:
    log_error(f"Failed to write {destination}: {escape(str(e))}")
    result.success = False
    result.errors.append(str(e))
    return result

  if result.changed:
    log_success(f"Refactored: [path]{input_path}[/path] -> [path]{destination}[/path]")
  return result


def _print_batch_summary(results: Dict[str, RefactoringResult], check: bool = False) -> None:
  """
  Renders a summary table of refactoring results to the console.

  Args:
      results: Dictionary mapping filenames to refactoring results.
      check: Whether the batch ran in check mode (nothing written).
  """
  total = len(results)
  failures = sum(1 for r in results.values() if not r.success)
  changed = sum(1 for r in results.values() if r.success and r.changed)

  if failures == 0 and changed == 0:
    log_success(f"Batch Complete: {total}/{total} files already tidy.")
    return

  table = Table(title="Refactoring Report")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Details")

  for filename, res in results.items():
    if not res.success:
      table.add_row(filename, "❌ Failed", escape("; ".join(res.errors)) or "Unknown Error", style="red")
    elif res.changed:
      status = "⚠️ Would change" if check else "✅ Changed"
      table.add_row(filename, status, f"{len(res.applied_refactorings)} refactorings")

  console.print(table)
  verb = "would change" if check else "changed"
  console.print(f"\n[bold]Summary:[/bold] {changed} {verb}, {total - changed - failures} untouched, {failures} failed.")
