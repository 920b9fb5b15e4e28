"""
Refactoring Preview.

Builds the read-only report of refactorings applied to one compilation unit.
The report is filtered by the element the user selected: a unit that does not
match the selection, or that had nothing applied, shows a single
"No refactoring applied" line.
"""

from typing import Iterable, List, Optional

from rich.panel import Panel
from rich.text import Text

from javatidy.core.refactoring_result import RefactoringResult

PREVIEW_TITLE = "View Refactorings Applied..."
NO_REFACTORING_MESSAGE = "No refactoring applied"


def matches_selection(unit_name: str, selected_element: Optional[str]) -> bool:
  """
  Checks whether a unit belongs to the selected element.

  No selection matches every unit. Otherwise the unit matches when its name
  occurs in the selection (a package or file path containing it) or when its
  stem is the last segment of a dotted selection.

  Args:
      unit_name (str): File name of the unit, e.g. ``Foo.java``.
      selected_element (Optional[str]): Name of the selected element.

  Returns:
      bool: True if the unit should be reported.
  """
  if not selected_element:
    return True
  if not unit_name:
    return False
  if unit_name in f"{selected_element} ":
    return True
  stem = unit_name.rsplit("/", 1)[-1]
  if stem.endswith(".java"):
    stem = stem[: -len(".java")]
  return selected_element.rsplit(".", 1)[-1] == stem


def preview_entries(result: RefactoringResult, selected_element: Optional[str] = None) -> List[str]:
  """
  Lists the refactorings to show for a unit.

  Duplicate descriptions are collapsed, keeping first-seen order.

  Returns:
      List[str]: Entries to display, empty when nothing applies.
  """
  if not matches_selection(result.unit_name, selected_element):
    return []
  return list(dict.fromkeys(entry for entry in result.applied_refactorings if entry))


def render_entries(entries: Iterable[str]) -> str:
  """
  Joins entries one per line.

  Returns:
      str: The report body, or the placeholder message when there are no entries.
  """
  lines = [entry for entry in entries if entry]
  if not lines:
    return NO_REFACTORING_MESSAGE
  return "\n".join(lines)


def render_preview(result: RefactoringResult, selected_element: Optional[str] = None) -> str:
  """Plain-text preview of a unit."""
  return render_entries(preview_entries(result, selected_element))


def build_preview_panel(result: RefactoringResult, selected_element: Optional[str] = None) -> Panel:
  """
  Wraps the preview in a Rich panel for terminal display.

  Args:
      result (RefactoringResult): Outcome of refactoring a unit.
      selected_element (Optional[str]): Filter applied to the unit name.

  Returns:
      Panel: Titled panel whose subtitle names the unit.
  """
  body = Text(render_preview(result, selected_element))
  return Panel(body, title=PREVIEW_TITLE, subtitle=result.unit_name or None, expand=False)
