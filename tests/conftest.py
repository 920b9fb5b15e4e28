"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Global rule registry isolation so tests registering custom rules do not leak.
- A captured Rich console for asserting CLI output.
"""

import io
import sys
from pathlib import Path

import pytest
from rich.console import Console

# Add src to path so we can import 'javatidy' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

import javatidy.core.rules  # noqa: E402  (registers the built-in rules)
from javatidy.core.rules.registry import _RULES  # noqa: E402
from javatidy.utils.console import reset_console, set_console  # noqa: E402


@pytest.fixture(autouse=True)
def isolate_rule_registry():
  """
  Ensures that rules registered by a test do not leak into other tests.
  """
  original_registry = _RULES.copy()
  yield
  _RULES.clear()
  _RULES.update(original_registry)


@pytest.fixture
def captured_console():
  """
  Routes console printing and logging into a string buffer.

  Yields:
      io.StringIO: The buffer receiving all output.
  """
  buf = io.StringIO()
  set_console(Console(file=buf, force_terminal=False, width=200, color_system=None))
  yield buf
  reset_console()
