"""
Enumerations for javatidy.

This module defines the closed vocabularies shared by the parser, the rule
engine and the applier: modifier keywords, declaration kinds and the child
slots a node can occupy inside its parent.
"""

from enum import Enum

from javatidy.core.errors import UnknownModifierError


class ModifierKeyword(str, Enum):
  """
  Modifier keywords recognised by the Java declaration parser.

  The first eleven members participate in canonical ordering. ``DEFAULT``,
  ``SEALED`` and ``NON_SEALED`` are valid Java modifiers that the ordering
  table does not know about.
  """

  PUBLIC = "public"
  PROTECTED = "protected"
  PRIVATE = "private"
  STATIC = "static"
  ABSTRACT = "abstract"
  FINAL = "final"
  TRANSIENT = "transient"
  VOLATILE = "volatile"
  SYNCHRONIZED = "synchronized"
  NATIVE = "native"
  STRICTFP = "strictfp"
  DEFAULT = "default"
  SEALED = "sealed"
  NON_SEALED = "non-sealed"

  @classmethod
  def from_token(cls, text: str) -> "ModifierKeyword":
    """
    Resolves source text to a keyword.

    Args:
        text (str): The raw token text (e.g. ``"static"``).

    Returns:
        ModifierKeyword: The matching keyword.

    Raises:
        UnknownModifierError: If the text is not a modifier keyword.
    """
    try:
      return cls(text)
    except ValueError:
      raise UnknownModifierError(f"'{text}' is not a modifier keyword") from None


class DeclarationKind(str, Enum):
  """Closed set of declaration kinds dispatched by the rule engine."""

  FIELD = "field"
  METHOD = "method"
  TYPE = "type"
  ENUM = "enum"
  ANNOTATION_TYPE = "annotation_type"
  ANNOTATION_TYPE_MEMBER = "annotation_type_member"
  PARAMETER = "parameter"


class ChildSlot(str, Enum):
  """
  Named child lists of a node.

  Together with a position, a slot identifies a node's location in its parent.
  """

  MODIFIERS = "modifiers"
  TYPES = "types"
  BODY_DECLARATIONS = "body_declarations"
  PARAMETERS = "parameters"
  INNER_CLASSES = "inner_classes"
