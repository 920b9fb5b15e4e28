"""
Java Token Definitions.

Defines the enumerations for Token Kinds and Symbols used by the Lexer and Parser.
"""

from enum import Enum


class TokenKind(str, Enum):
  """Enumeration of Lexer Token Types."""

  COMMENT = "COMMENT"
  TEXT_BLOCK = "TEXT_BLOCK"
  STRING = "STRING"
  CHAR = "CHAR"
  NON_SEALED = "NON_SEALED"
  IDENTIFIER = "IDENTIFIER"
  NUMBER = "NUMBER"
  ELLIPSIS = "ELLIPSIS"
  AT = "AT"
  SYMBOL = "SYMBOL"
  WHITESPACE = "WHITESPACE"
  MISMATCH = "MISMATCH"
  EOF = "EOF"


class Symbol(str, Enum):
  """Enumeration of Punctuation Symbols the parser inspects."""

  LBRACE = "{"
  RBRACE = "}"
  LPAREN = "("
  RPAREN = ")"
  LBRACKET = "["
  RBRACKET = "]"
  LT = "<"
  GT = ">"
  SEMI = ";"
  COMMA = ","
  DOT = "."


# Keywords that introduce a type declaration.
TYPE_KEYWORDS = frozenset({"class", "interface", "enum"})
