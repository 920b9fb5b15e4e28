"""
Refactoring Context Module.

This module provides the `RefactoringContext` container, which holds the shared
state a rule needs during one pass: the tree-construction facility used to
build detached copies of nodes, and the active `EditStore` for the file under
transformation.
"""

from typing import Optional

from javatidy.core.edits import EditStore
from javatidy.core.java.nodes import CompilationUnit, ExtendedModifier


class TreeFactory:
  """Builds nodes that are not yet part of any tree."""

  def copy_subtree(self, node: ExtendedModifier) -> ExtendedModifier:
    """
    Returns a detached, structurally equal copy of ``node``.

    Args:
        node (ExtendedModifier): Original-tree node.

    Returns:
        ExtendedModifier: Copy with no parent.
    """
    return node.detached_copy()


class RefactoringContext:
  """
  Shared state container for one rule pass over one file.

  Attributes:
      unit (Optional[CompilationUnit]): Tree the pass runs over.
      factory (TreeFactory): Facility for detached node copies.
      refactorings (EditStore): Log receiving staged edits.
  """

  def __init__(self, unit: Optional[CompilationUnit] = None, refactorings: Optional[EditStore] = None) -> None:
    self.unit = unit
    self.factory = TreeFactory()
    self.refactorings = refactorings if refactorings is not None else EditStore()
