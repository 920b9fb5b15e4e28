"""
Data structures representing the output of the refactoring engine.

This module defines the `RefactoringResult` Pydantic model, which encapsulates
the rewritten code, the changes applied, any errors encountered, and the
execution trace logs.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class RefactoringResult(BaseModel):
  """
  Container for the results of refactoring one compilation unit.
  """

  unit_name: str = Field(default="", description="Identifying name of the compilation unit.")
  original_code: str = Field(default="", description="The input source code.")
  code: str = Field(default="", description="The rewritten source code.")
  applied_refactorings: List[str] = Field(
    default_factory=list,
    description="Human readable descriptions of every committed change, in order.",
  )
  errors: List[str] = Field(default_factory=list, description="List of error messages encountered.")
  success: bool = Field(
    default=True,
    description="True if every pass completed. False means no change was kept.",
  )
  passes: int = Field(default=0, description="Number of passes executed.")
  trace_events: List[Dict[str, Any]] = Field(default_factory=list, description="Execution trace log data.")

  @property
  def has_errors(self) -> bool:
    """
    Check if the result contains any error messages.

    Returns:
        True if one or more errors are present.
    """
    return len(self.errors) > 0

  @property
  def changed(self) -> bool:
    """True if the rewritten code differs from the input."""
    return self.code != self.original_code
