"""
javatidy Package.

A source-to-source refactoring tool for Java that removes modifiers implied by
their context (e.g. ``public`` on interface methods) and rewrites modifier
lists into the canonical order.

Usage
-----

Simple String Refactoring
^^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import javatidy
    code = "interface I { public abstract void m(); }"
    print(javatidy.tidy(code))
    # interface I { void m(); }

Advanced Usage (Engine)
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from javatidy import RefactoringEngine, RuntimeConfig

    engine = RefactoringEngine(config=RuntimeConfig(max_passes=3))
    res = engine.run("class A { final static int X = 1; }", unit_name="A.java")

    if res.success:
        print(res.code)
        print(res.applied_refactorings)
    else:
        print(f"Errors: {res.errors}")
"""

from typing import List, Optional

from javatidy.config import RuntimeConfig
from javatidy.core.engine import RefactoringEngine
from javatidy.core.refactoring_result import RefactoringResult

__version__ = "0.1.0"


def tidy(code: str, rules: Optional[List[str]] = None, max_passes: Optional[int] = None) -> str:
  """
  Refactors a string of Java code.

  This is a high-level convenience wrapper around the `RefactoringEngine`.
  Configuration files are not consulted.

  Args:
      code (str): The Java source to refactor.
      rules (List[str], optional): Rule names to run. Defaults to all registered rules.
      max_passes (int, optional): Pass limit. Defaults to the engine default.

  Returns:
      str: The refactored source code.

  Raises:
      ValueError: If the code cannot be refactored (e.g. it does not parse).
  """
  values = {}
  if rules is not None:
    values["enabled_rules"] = rules
  if max_passes is not None:
    values["max_passes"] = max_passes

  engine = RefactoringEngine(config=RuntimeConfig(**values))
  result = engine.run(code)

  if not result.success:
    raise ValueError(f"Refactoring failed: {result.errors}")

  return result.code


__all__ = [
  "RefactoringEngine",
  "RefactoringResult",
  "RuntimeConfig",
  "tidy",
  "__version__",
]
