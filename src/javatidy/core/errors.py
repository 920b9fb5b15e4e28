"""
Exception hierarchy for javatidy.

Every failure raised by the parser, the rules and the applier derives from
``JavaTidyError`` so callers can handle the whole family with one clause.
"""


class JavaTidyError(Exception):
  """Base class for all javatidy failures."""


class JavaSyntaxError(JavaTidyError):
  """
  Raised when the declaration parser cannot make sense of the source.

  Attributes:
      line (int): 1-based line of the offending token.
      col (int): 0-based column of the offending token.
  """

  def __init__(self, message: str, line: int = 0, col: int = 0) -> None:
    super().__init__(f"{message} (line {line}:{col})" if line else message)
    self.line = line
    self.col = col


class UnknownModifierError(JavaTidyError, ValueError):
  """
  Raised when text outside the modifier enumeration is treated as a modifier.

  Signals a parser/engine version mismatch rather than bad user input.
  """


class UnorderableModifierError(JavaTidyError):
  """
  Raised when a modifier keyword has no slot in the canonical order table.

  Fatal for the current file: a partial ordering would stage inconsistent edits.
  """


class EditApplicationError(JavaTidyError):
  """Raised when staged edits cannot be committed."""


class ConflictingEditError(EditApplicationError):
  """Raised when two staged edits of one pass target the same node or position."""
