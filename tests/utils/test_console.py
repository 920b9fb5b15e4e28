"""
Tests for the console proxy and logging helpers.
"""

import io
import logging

from rich.console import Console

from javatidy.utils.console import (
  console,
  log_error,
  log_info,
  log_success,
  log_warning,
  reset_console,
  set_console,
  set_verbosity,
)


def test_log_helpers_follow_injected_console(captured_console):
  log_info("plain info")
  log_success("all good")
  log_warning("careful")
  log_error("broken")

  out = captured_console.getvalue()
  assert "plain info" in out
  assert "✅ all good" in out
  assert "careful" in out
  assert "❌ broken" in out
  assert "SUCCESS" in out


def test_print_goes_to_backend(captured_console):
  console.print("hello table")
  assert "hello table" in captured_console.getvalue()


def test_reset_restores_fresh_backend():
  buf = io.StringIO()
  injected = Console(file=buf)
  set_console(injected)
  assert console.backend is injected
  reset_console()
  assert console.backend is not injected

  handlers = logging.getLogger("javatidy").handlers
  assert len(handlers) == 1


def test_verbosity_toggles_debug(captured_console):
  logger = logging.getLogger("javatidy.core.engine")
  try:
    set_verbosity(True)
    logger.debug("debug detail")
    assert "debug detail" in captured_console.getvalue()
  finally:
    set_verbosity(False)

  logger.debug("hidden detail")
  assert "hidden detail" not in captured_console.getvalue()
