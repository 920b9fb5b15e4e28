"""
Rules Command Handler.

Lists the registered rules.
"""

from rich.table import Table

from javatidy.core.rules import available_rules, get_rule
from javatidy.utils.console import console


def handle_rules() -> int:
  """
  Prints a table of registered rules and their descriptions.

  Returns:
      int: Exit code (always 0).
  """
  table = Table(title="Available Rules")
  table.add_column("Name", style="cyan")
  table.add_column("Description")

  for name in available_rules():
    table.add_row(name, get_rule(name).description)

  console.print(table)
  return 0
