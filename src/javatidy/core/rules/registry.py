"""
Rule Registry.

Rules register themselves with the ``register_rule`` decorator under their
``name``. The engine and the configuration layer resolve rule names through
this registry.
"""

from typing import Dict, Iterable, List, Optional, Type

from javatidy.core.rules.base import RefactoringRule

# Global Registry
_RULES: Dict[str, Type[RefactoringRule]] = {}


def register_rule(cls: Type[RefactoringRule]) -> Type[RefactoringRule]:
  """
  Class decorator registering a rule under its ``name``.

  Raises:
      ValueError: If the rule has no name or the name is taken by another class.
  """
  if not cls.name:
    raise ValueError(f"Rule {cls.__name__} must define a name")
  existing = _RULES.get(cls.name)
  if existing is not None and existing is not cls:
    raise ValueError(f"Rule name '{cls.name}' already registered by {existing.__name__}")
  _RULES[cls.name] = cls
  return cls


def get_rule(name: str) -> Optional[Type[RefactoringRule]]:
  """Returns the rule class registered under ``name``, if any."""
  return _RULES.get(name)


def available_rules() -> List[str]:
  """Returns registered rule names in registration order."""
  return list(_RULES)


def create_rules(names: Iterable[str]) -> List[RefactoringRule]:
  """
  Instantiates rules by name, preserving order.

  Raises:
      KeyError: If a name is not registered.
  """
  rules = []
  for name in names:
    cls = _RULES.get(name)
    if cls is None:
      raise KeyError(f"Unknown rule: '{name}'. Available rules: {available_rules()}")
    rules.append(cls())
  return rules
