"""
Central Logging and Console Utilities.

All user-facing output goes through the standard `logging` library rendered by
`rich`. The module keeps one swappable Rich console so that tests and
embedding applications can capture output (e.g. into an ``io.StringIO``)
without re-importing anything.

Attributes:
    console (_ConsoleProxy): Stable reference to the active Rich Console.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

# Custom logging level for Success (between INFO and WARNING)
SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

_THEME = Theme(
  {
    "logging.level.success": "green",
    "info": "dim cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "green",
    "path": "bold blue",
    "code": "bold magenta",
  }
)

_LOGGER_NAME = "javatidy"


class _ConsoleProxy:
  """
  Forwards printing to a replaceable ``rich.console.Console``.

  Replacing the backend also re-points the package logger's ``RichHandler``
  so log records follow the console.
  """

  def __init__(self) -> None:
    self._backend: Console = Console(theme=_THEME)
    self._configure_logging()

  @property
  def backend(self) -> Console:
    return self._backend

  def set_backend(self, new_console: Console) -> None:
    self._backend = new_console
    self._configure_logging()

  def reset(self) -> None:
    self._backend = Console(theme=_THEME)
    self._configure_logging()

  def _configure_logging(self) -> None:
    logger = logging.getLogger(_LOGGER_NAME)
    for handler in list(logger.handlers):
      if isinstance(handler, RichHandler):
        logger.removeHandler(handler)

    rich_handler = RichHandler(
      console=self._backend,
      show_time=False,
      show_path=False,
      markup=True,
      rich_tracebacks=True,
    )
    if logger.level == logging.NOTSET:
      logger.setLevel(logging.INFO)
    logger.addHandler(rich_handler)
    logger.propagate = False

  def print(self, *args: Any, **kwargs: Any) -> None:
    self._backend.print(*args, **kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Injects a specific console instance for printing and logging.

  Args:
      new_console (Console): The configured Rich console to use globally.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  """Resets printing and logging to standard output."""
  console.reset()


def set_verbosity(verbose: bool) -> None:
  """Switches the package logger between INFO and DEBUG."""
  logging.getLogger(_LOGGER_NAME).setLevel(logging.DEBUG if verbose else logging.INFO)


def log_info(msg: str) -> None:
  """
  Logs an informational message.

  Args:
      msg (str): The message content. Can include rich markup like [bold].
  """
  logging.getLogger(_LOGGER_NAME).info(msg, extra={"markup": True})


def log_success(msg: str) -> None:
  """Logs a success message at the custom SUCCESS level."""
  logging.getLogger(_LOGGER_NAME).log(SUCCESS_LEVEL_NUM, f"✅ {msg}", extra={"markup": True})


def log_warning(msg: str) -> None:
  """Logs a warning message."""
  logging.getLogger(_LOGGER_NAME).warning(f"⚠️  {msg}", extra={"markup": True})


def log_error(msg: str) -> None:
  """Logs an error message."""
  logging.getLogger(_LOGGER_NAME).error(f"❌ {msg}", extra={"markup": True})
