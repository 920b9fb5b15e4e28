"""
Edit Descriptor Store.

Rules never mutate the tree they traverse. Instead they append edit
descriptors to an ``EditStore``, an ordered log scoped to one file pass that is
committed exactly once by the applier after traversal completes.

Edits reference original-tree nodes only. The store performs no cross-edit
validation; rules avoid conflicts by halting descent into nodes they edited.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence, Union

from javatidy.core.java.nodes import Declaration, ExtendedModifier
from javatidy.enums import ChildSlot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemoveEdit:
  """
  Deletes a node from its parent's child list.

  Attributes:
      node (ExtendedModifier): Original-tree node to delete.
  """

  node: ExtendedModifier

  def describe(self) -> str:
    return f"remove `{self.node.text}`"


@dataclass(frozen=True)
class InsertAtEdit:
  """
  Inserts a detached copy into a child list of an original-tree node.

  Attributes:
      new_node (ExtendedModifier): Detached copy to insert.
      index (int): Position of the copy in the resulting child list.
      slot (ChildSlot): Child list of ``parent`` receiving the copy.
      parent (Declaration): Original-tree owner of the child list.
  """

  new_node: ExtendedModifier
  index: int
  slot: ChildSlot
  parent: Declaration

  def describe(self) -> str:
    return f"insert `{self.new_node.text}` at {self.slot.value}[{self.index}] of '{self.parent.name}'"


Edit = Union[RemoveEdit, InsertAtEdit]


class EditStore:
  """
  Append-only log of staged edits for one file transformation session.
  """

  def __init__(self) -> None:
    self._edits: List[Edit] = []

  def remove(self, node: ExtendedModifier) -> None:
    """
    Stages deletion of a node.

    Args:
        node (ExtendedModifier): The original-tree node to delete.
    """
    edit = RemoveEdit(node)
    logger.debug("Staged %s", edit.describe())
    self._edits.append(edit)

  def insert_at(self, new_node: ExtendedModifier, index: int, slot: ChildSlot, parent: Declaration) -> None:
    """
    Stages insertion of a detached copy.

    Args:
        new_node (ExtendedModifier): Detached copy to insert.
        index (int): Position in the resulting child list.
        slot (ChildSlot): Target child list.
        parent (Declaration): Original-tree owner of the list.
    """
    edit = InsertAtEdit(new_node, index, slot, parent)
    logger.debug("Staged %s", edit.describe())
    self._edits.append(edit)

  @property
  def edits(self) -> Sequence[Edit]:
    """Staged edits in staging order."""
    return tuple(self._edits)

  @property
  def is_empty(self) -> bool:
    return not self._edits

  def __len__(self) -> int:
    return len(self._edits)

  def __iter__(self):
    return iter(tuple(self._edits))
