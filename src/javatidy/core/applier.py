"""
Edit Applier.

Commits the contents of an ``EditStore`` to the source text of the unit the
edits were staged against. Application is all-or-nothing: every edit is
validated and every replacement computed before any text is produced.

Each touched modifier list is rebuilt (removed nodes dropped, inserted copies
placed at their final indices in ascending order). Pure deletions cut each
removed node together with the whitespace after it; reorderings rewrite the
list span, reusing the original separators so annotations on their own lines
stay there.
"""

import difflib
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Set, Tuple

from javatidy.core.edits import EditStore, InsertAtEdit, RemoveEdit
from javatidy.core.errors import ConflictingEditError
from javatidy.core.java.nodes import CompilationUnit, Declaration, ExtendedModifier
from javatidy.enums import ChildSlot

logger = logging.getLogger(__name__)

_TRAILING_WS = re.compile(r"\s*")


@dataclass
class AppliedEdits:
  """
  Outcome of committing one edit store.

  Attributes:
      code (str): The rewritten source text.
      descriptions (List[str]): Human readable change descriptions, in source order.
  """

  code: str
  descriptions: List[str] = field(default_factory=list)


@dataclass
class _ListRewrite:
  removed: List[ExtendedModifier] = field(default_factory=list)
  inserted: List[Tuple[int, ExtendedModifier]] = field(default_factory=list)


class EditApplier:
  """
  Translates staged edits into rewritten text and change descriptions.
  """

  def apply(self, unit: CompilationUnit, store: EditStore) -> AppliedEdits:
    """
    Commits every edit of ``store`` against ``unit.source``.

    Args:
        unit (CompilationUnit): The tree the edits were staged against.
        store (EditStore): The staged edits.

    Returns:
        AppliedEdits: New text and descriptions. The input is returned
            unchanged when the store is empty.

    Raises:
        ConflictingEditError: If edits overlap or reference foreign nodes.
    """
    if store.is_empty:
      return AppliedEdits(code=unit.source)

    rewrites = self._group(unit, store)
    replacements: List[Tuple[int, int, str]] = []
    descriptions: List[str] = []
    for parent, rewrite in sorted(rewrites.items(), key=lambda item: item[0].start):
      new_items = self._rebuild(parent, rewrite)
      replacements.extend(self._replacements(unit.source, parent, rewrite, new_items))
      descriptions.extend(self._describe(parent, rewrite, new_items))

    code = self._splice(unit.source, replacements)
    logger.debug("Committed %d edits to '%s'", len(store), unit.name or "<unit>")
    return AppliedEdits(code=code, descriptions=descriptions)

  def _group(self, unit: CompilationUnit, store: EditStore) -> Dict[Declaration, _ListRewrite]:
    known: Set[int] = {id(decl) for decl in unit.iter_declarations()}
    removed: Set[int] = set()
    targets: Set[Tuple[int, int]] = set()
    rewrites: Dict[Declaration, _ListRewrite] = {}

    for edit in store:
      if isinstance(edit, RemoveEdit):
        node = edit.node
        parent = node.parent
        if parent is None or id(parent) not in known or not any(item is node for item in parent.modifiers):
          raise ConflictingEditError(f"Cannot remove `{node.text}`: node is not part of this tree")
        if id(node) in removed:
          raise ConflictingEditError(f"`{node.text}` removed twice in one pass")
        removed.add(id(node))
        rewrites.setdefault(parent, _ListRewrite()).removed.append(node)
      elif isinstance(edit, InsertAtEdit):
        if edit.slot != ChildSlot.MODIFIERS:
          raise ConflictingEditError(f"Insertion into '{edit.slot.value}' is not supported")
        if id(edit.parent) not in known:
          raise ConflictingEditError(f"Cannot insert `{edit.new_node.text}`: parent is not part of this tree")
        if edit.new_node.parent is not None:
          raise ConflictingEditError(f"Cannot insert `{edit.new_node.text}`: node is still attached")
        key = (id(edit.parent), edit.index)
        if key in targets:
          raise ConflictingEditError(f"Two insertions at index {edit.index} of '{edit.parent.name}'")
        targets.add(key)
        rewrites.setdefault(edit.parent, _ListRewrite()).inserted.append((edit.index, edit.new_node))
    return rewrites

  def _rebuild(self, parent: Declaration, rewrite: _ListRewrite) -> List[ExtendedModifier]:
    items = [item for item in parent.modifiers if not any(item is r for r in rewrite.removed)]
    for index, node in sorted(rewrite.inserted, key=lambda pair: pair[0]):
      if index > len(items):
        raise ConflictingEditError(f"Insertion index {index} out of range for '{parent.name}'")
      items.insert(index, node)
    return items

  def _replacements(
    self, source: str, parent: Declaration, rewrite: _ListRewrite, new_items: List[ExtendedModifier]
  ) -> List[Tuple[int, int, str]]:
    old_items = parent.modifiers
    if not rewrite.inserted:
      # Pure deletions: drop each node with the whitespace that follows it.
      return [(node.start, _TRAILING_WS.match(source, node.end).end(), "") for node in rewrite.removed]

    if not old_items:
      # Insertion into an empty list: place before the declaration.
      text = " ".join(item.text for item in new_items)
      return [(parent.start, parent.start, f"{text} ")]

    start, end = old_items[0].start, old_items[-1].end
    separators = [source[a.end : b.start] for a, b in zip(old_items, old_items[1:])]

    parts = [new_items[0].text]
    for i, item in enumerate(new_items[1:]):
      parts.append(separators[i] if i < len(separators) else " ")
      parts.append(item.text)
    return [(start, end, "".join(parts))]

  def _describe(self, parent: Declaration, rewrite: _ListRewrite, new_items: List[ExtendedModifier]) -> List[str]:
    inserted_texts = [node.text for _, node in rewrite.inserted]
    descriptions = []
    for node in rewrite.removed:
      if node.text in inserted_texts:
        inserted_texts.remove(node.text)
      else:
        descriptions.append(f"removed redundant `{node.text}`")
    if rewrite.inserted:
      before = " ".join(item.text for item in parent.modifiers if item.is_modifier)
      after = " ".join(item.text for item in new_items if item.is_modifier)
      if before != after:
        descriptions.append(f"reordered `{before}` to `{after}`")
    return descriptions

  @staticmethod
  def _splice(source: str, replacements: List[Tuple[int, int, str]]) -> str:
    ordered = sorted(replacements)
    for (_, prev_end, _), (next_start, _, _) in zip(ordered, ordered[1:]):
      if next_start < prev_end:
        raise ConflictingEditError("Staged edits produce overlapping text ranges")

    out = []
    cursor = 0
    for start, end, text in ordered:
      out.append(source[cursor:start])
      out.append(text)
      cursor = end
    out.append(source[cursor:])
    return "".join(out)


def unified_diff(before: str, after: str, filename: str = "<unit>") -> str:
  """
  Renders a unified diff between two versions of a file.

  Args:
      before (str): Original text.
      after (str): Rewritten text.
      filename (str): Name used in the diff headers.

  Returns:
      str: The diff, empty when the texts are equal.
  """
  lines = difflib.unified_diff(
    before.splitlines(keepends=True),
    after.splitlines(keepends=True),
    fromfile=f"a/{filename}",
    tofile=f"b/{filename}",
  )
  return "".join(lines)
