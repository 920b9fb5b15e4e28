"""
Modifier Model.

Defines the canonical total order over modifier keywords and the helpers rules
use to compare and sort modifiers:

    public protected private static abstract final
    transient volatile synchronized native strictfp

The order table is built once at import time and exposed read-only.
"""

import functools
from types import MappingProxyType
from typing import Iterable, List, Mapping, Sequence

from javatidy.core.errors import UnorderableModifierError
from javatidy.core.java.nodes import Modifier
from javatidy.enums import ModifierKeyword

CANONICAL_ORDER: Mapping[ModifierKeyword, int] = MappingProxyType(
  {
    keyword: index
    for index, keyword in enumerate(
      (
        ModifierKeyword.PUBLIC,
        ModifierKeyword.PROTECTED,
        ModifierKeyword.PRIVATE,
        ModifierKeyword.STATIC,
        ModifierKeyword.ABSTRACT,
        ModifierKeyword.FINAL,
        ModifierKeyword.TRANSIENT,
        ModifierKeyword.VOLATILE,
        ModifierKeyword.SYNCHRONIZED,
        ModifierKeyword.NATIVE,
        ModifierKeyword.STRICTFP,
      )
    )
  }
)


def keyword_of(modifier: Modifier) -> ModifierKeyword:
  """Returns the keyword of a modifier node."""
  return modifier.keyword


def canonical_index(keyword: ModifierKeyword) -> int:
  """
  Looks up the position of a keyword in the canonical order.

  Args:
      keyword (ModifierKeyword): The keyword to rank.

  Returns:
      int: Zero-based rank; lower ranks come first.

  Raises:
      UnorderableModifierError: If the keyword has no rank in the table.
  """
  try:
    return CANONICAL_ORDER[keyword]
  except KeyError:
    raise UnorderableModifierError(f"cannot determine order for modifier '{keyword.value}'") from None


def compare_modifiers(a: Modifier, b: Modifier) -> int:
  """
  Three-way comparison of two modifiers by canonical rank.

  Returns:
      int: Negative if ``a`` sorts first, positive if ``b`` does, zero for equal keywords.

  Raises:
      UnorderableModifierError: If either keyword has no rank.
  """
  return canonical_index(keyword_of(a)) - canonical_index(keyword_of(b))


def sort_modifiers(modifiers: Iterable[Modifier]) -> List[Modifier]:
  """
  Stable sort of modifiers into canonical order using ``compare_modifiers``.

  A lone modifier is never compared, so it cannot fail. With two or more,
  every modifier takes part in at least one comparison and an unorderable
  keyword fails the whole sort.

  Raises:
      UnorderableModifierError: If a compared keyword has no rank.
  """
  return sorted(modifiers, key=functools.cmp_to_key(compare_modifiers))


def is_canonically_ordered(modifiers: Sequence[Modifier]) -> bool:
  """Returns True if the modifiers already appear in canonical order."""
  return all(compare_modifiers(a, b) <= 0 for a, b in zip(modifiers, modifiers[1:]))
