"""
Rules Package.

Importing this package registers the built-in rules:
- ``remove_useless_modifiers``: drops modifiers implied by the enclosing
  interface and puts the remaining modifiers in canonical order.
"""

from javatidy.core.rules.base import RefactoringRule
from javatidy.core.rules.registry import available_rules, create_rules, get_rule, register_rule
from javatidy.core.rules.modifiers import RemoveUselessModifiersRule

__all__ = [
  "RefactoringRule",
  "RemoveUselessModifiersRule",
  "available_rules",
  "create_rules",
  "get_rule",
  "register_rule",
]
