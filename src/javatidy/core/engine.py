"""
Orchestration Engine for Java Source Refactoring.

This module provides the `RefactoringEngine`, the driver that runs rules over
one compilation unit until it reaches a fixed point.

Each pass consists of:

1.  **Parsing**: The current text is parsed into a declaration tree.
2.  **Traversal**: Every enabled rule walks the tree with a fresh
    `RefactoringContext` and stages edits into its `EditStore`.
3.  **Application**: The `EditApplier` commits the staged edits of one rule to
    the text. The next rule (and the next pass) works on the re-parsed result.

The loop stops when a full pass stages nothing or when ``max_passes`` is
reached. Any fatal error discards the work done so far and returns the input
unchanged.
"""

import logging
from typing import List, Optional, Tuple

from javatidy.config import RuntimeConfig
from javatidy.core.applier import EditApplier
from javatidy.core.context import RefactoringContext
from javatidy.core.errors import JavaTidyError
from javatidy.core.java.nodes import CompilationUnit
from javatidy.core.java.parser import parse_compilation_unit
from javatidy.core.refactoring_result import RefactoringResult
from javatidy.core.rules import RefactoringRule, create_rules
from javatidy.core.tracer import get_tracer, reset_tracer
from javatidy.utils.console import log_warning

logger = logging.getLogger(__name__)


class RefactoringEngine:
  """
  Runs the configured rules over single compilation units.
  """

  def __init__(self, config: Optional[RuntimeConfig] = None, rules: Optional[List[RefactoringRule]] = None):
    """
    Initializes the Engine.

    Args:
        config (RuntimeConfig, optional): Runtime settings. Defaults are used if None.
        rules (List[RefactoringRule], optional): Explicit rule instances.
            Built from ``config.enabled_rules`` when omitted.
    """
    self.config = config or RuntimeConfig()
    self.rules = rules if rules is not None else create_rules(self.config.enabled_rules)
    self.applier = EditApplier()

  def parse(self, code: str, name: str = "") -> CompilationUnit:
    """
    Parses Java source into a declaration tree.

    Raises:
        JavaSyntaxError: If the declarations cannot be parsed.
    """
    return parse_compilation_unit(code, name)

  def run(self, code: str, unit_name: str = "") -> RefactoringResult:
    """
    Refactors one compilation unit to a fixed point.

    Args:
        code (str): Java source text.
        unit_name (str): Identifying name of the unit, used in reports.

    Returns:
        RefactoringResult: The rewritten code and the list of applied changes.
            On failure ``code`` equals the input and ``success`` is False.
    """
    reset_tracer()
    tracer = get_tracer()
    tracer.start_phase("Refactoring", unit_name or "<unit>")

    current = code
    applied: List[str] = []
    passes = 0

    try:
      while passes < self.config.max_passes:
        passes += 1
        tracer.start_phase(f"Pass {passes}")
        current, changes, staged = self._run_pass(current, unit_name)
        tracer.end_phase()
        applied.extend(changes)
        if not staged:
          break
      else:
        message = f"Stopped after {self.config.max_passes} passes without reaching a fixed point"
        tracer.log_warning(message)
        log_warning(f"{unit_name or '<unit>'}: {message}")
    except JavaTidyError as e:
      logger.debug("Refactoring of '%s' failed", unit_name, exc_info=True)
      tracer.end_all_phases()
      return RefactoringResult(
        unit_name=unit_name,
        original_code=code,
        code=code,
        errors=[f"{type(e).__name__}: {e}"],
        success=False,
        passes=passes,
        trace_events=tracer.export(),
      )

    tracer.end_all_phases()
    return RefactoringResult(
      unit_name=unit_name,
      original_code=code,
      code=current,
      applied_refactorings=applied,
      passes=passes,
      trace_events=tracer.export(),
    )

  def _run_pass(self, code: str, unit_name: str) -> Tuple[str, List[str], bool]:
    """
    Runs every rule once, committing each rule's edits before the next rule.

    Returns:
        Tuple[str, List[str], bool]: The new text, the change descriptions and
            whether any rule staged edits.
    """
    tracer = get_tracer()
    staged = False
    descriptions: List[str] = []

    for rule in self.rules:
      unit = self.parse(code, unit_name)
      rule.set_refactoring_context(RefactoringContext(unit))
      store = rule.get_refactorings(unit)
      if store.is_empty:
        continue

      staged = True
      tracer.log_staged(rule.name, [edit.describe() for edit in store])
      result = self.applier.apply(unit, store)
      for description in result.descriptions:
        tracer.log_change(description, unit_name)
        logger.debug("%s: %s", unit_name or "<unit>", description)
      descriptions.extend(result.descriptions)
      code = result.code

    return code, descriptions, staged
