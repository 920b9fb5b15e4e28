"""
Interface definition for Refactoring Rules.

This module defines the abstract base class that all rules must implement to
be run by the ``RefactoringEngine``.
"""

from abc import ABC
from typing import Optional

from javatidy.core.context import RefactoringContext
from javatidy.core.edits import EditStore
from javatidy.core.java.nodes import CompilationUnit
from javatidy.core.visitor import RefactoringVisitor, walk


class RefactoringRule(RefactoringVisitor, ABC):
  """
  Abstract contract for a rule.

  A rule is a visitor that reads the tree and stages edits into the store of
  its ``RefactoringContext``. One instance processes one file at a time.

  Attributes:
      name (str): Registry key of the rule.
      description (str): One-line summary shown to users.
  """

  name: str = ""
  description: str = ""

  def __init__(self) -> None:
    self.ctx: Optional[RefactoringContext] = None

  def set_refactoring_context(self, ctx: RefactoringContext) -> None:
    self.ctx = ctx

  def get_refactorings(self, unit: CompilationUnit) -> EditStore:
    """
    Traverses the unit and returns the edits staged by this pass.

    A context is created for the unit if none was set or if the one set
    belongs to another unit. The engine sets a fresh context before every
    pass.

    Args:
        unit (CompilationUnit): The tree to inspect.

    Returns:
        EditStore: The staged edits.

    Raises:
        UnorderableModifierError: Propagated from ordering rules.
    """
    if self.ctx is None or self.ctx.unit is not unit:
      self.ctx = RefactoringContext(unit)
    walk(unit, self)
    return self.ctx.refactorings
