"""
Modifier Normalization Rule.

Removes modifiers implied by the context:
- ``public``, ``static`` and ``final`` on interface fields;
- ``public`` and ``abstract`` on interface methods and annotation type members;
- ``final`` on parameters of interface methods.

Members of interface-like types are only checked for implied modifiers.
Every other declaration gets its modifiers put in canonical order. A node
that received edits is not descended into during the same pass; the engine
re-parses and runs another pass after the edits commit.
"""

import logging
from typing import FrozenSet, Optional

from javatidy.core.java.nodes import (
  AnnotationTypeDeclaration,
  AnnotationTypeMemberDeclaration,
  Declaration,
  EnumDeclaration,
  FieldDeclaration,
  JavaNode,
  MethodDeclaration,
  Modifier,
  ParameterDeclaration,
  TypeDeclaration,
)
from javatidy.core.modifiers import sort_modifiers
from javatidy.core.rules.base import RefactoringRule
from javatidy.core.rules.registry import register_rule
from javatidy.core.visitor import DO_NOT_VISIT_SUBTREE, VISIT_SUBTREE
from javatidy.enums import ModifierKeyword

logger = logging.getLogger(__name__)

_IMPLIED_ON_INTERFACE_FIELD = frozenset({ModifierKeyword.PUBLIC, ModifierKeyword.STATIC, ModifierKeyword.FINAL})
_IMPLIED_ON_INTERFACE_METHOD = frozenset({ModifierKeyword.PUBLIC, ModifierKeyword.ABSTRACT})
_IMPLIED_ON_INTERFACE_PARAMETER = frozenset({ModifierKeyword.FINAL})


def is_interface_like(node: Optional[JavaNode]) -> bool:
  """True for interface declarations and annotation type declarations."""
  if isinstance(node, TypeDeclaration):
    return node.is_interface
  return isinstance(node, AnnotationTypeDeclaration)


@register_rule
class RemoveUselessModifiersRule(RefactoringRule):
  """
  Removes context-implied modifiers and fixes modifier order.
  """

  name = "remove_useless_modifiers"
  description = "Remove modifiers implied by the context and fix modifiers order"

  def visit_field(self, node: FieldDeclaration) -> bool:
    if is_interface_like(node.parent):
      return self._remove_implied(node, _IMPLIED_ON_INTERFACE_FIELD)
    return self._ensure_modifiers_order(node)

  def visit_method(self, node: MethodDeclaration) -> bool:
    if is_interface_like(node.parent):
      return self._remove_implied(node, _IMPLIED_ON_INTERFACE_METHOD)
    return self._ensure_modifiers_order(node)

  def visit_annotation_type_member(self, node: AnnotationTypeMemberDeclaration) -> bool:
    return self._remove_implied(node, _IMPLIED_ON_INTERFACE_METHOD)

  def visit_parameter(self, node: ParameterDeclaration) -> bool:
    # An unresolvable enclosing chain counts as "not an interface".
    method = node.parent
    if isinstance(method, MethodDeclaration) and is_interface_like(method.parent):
      return self._remove_implied(node, _IMPLIED_ON_INTERFACE_PARAMETER)
    return self._ensure_modifiers_order(node)

  def visit_type(self, node: TypeDeclaration) -> bool:
    return self._ensure_modifiers_order(node)

  def visit_enum(self, node: EnumDeclaration) -> bool:
    return self._ensure_modifiers_order(node)

  def visit_annotation_type(self, node: AnnotationTypeDeclaration) -> bool:
    return self._ensure_modifiers_order(node)

  def _remove_implied(self, node: Declaration, implied: FrozenSet[ModifierKeyword]) -> bool:
    """
    Stages removal of every modifier in ``implied``.

    Members of interface-like types are never reordered, so modifiers with no
    canonical rank such as ``default`` are accepted there.
    """
    result = VISIT_SUBTREE
    for modifier in node.modifiers_only():
      if modifier.keyword in implied:
        logger.debug("Removing redundant '%s' from '%s'", modifier.text, node.name)
        self.ctx.refactorings.remove(modifier)
        result = DO_NOT_VISIT_SUBTREE
    return result

  def _ensure_modifiers_order(self, node: Declaration) -> bool:
    """
    Stages a reordering of the true modifiers into canonical order.

    Sorted modifiers are re-threaded into the positions true modifiers held in
    the full extended modifier list, so annotations keep their places. Each
    position from the first out-of-order modifier onwards receives a copy of
    its canonical occupant, and the original occupant is removed.

    Raises:
        UnorderableModifierError: If a modifier has no canonical rank. Nothing
            is staged for the node in that case.
    """
    modifiers = node.modifiers_only()
    reordered = sort_modifiers(modifiers)
    if reordered == modifiers:
      return VISIT_SUBTREE

    slots = [index for index, item in enumerate(node.modifiers) if item.is_modifier]
    first = next(i for i, (current, wanted) in enumerate(zip(modifiers, reordered)) if current is not wanted)
    logger.debug(
      "Reordering modifiers of '%s': %s -> %s",
      node.name,
      " ".join(m.text for m in modifiers),
      " ".join(m.text for m in reordered),
    )
    for index, modifier in zip(slots[first:], reordered[first:]):
      self._insert_at(modifier, index)
    return DO_NOT_VISIT_SUBTREE

  def _insert_at(self, modifier: Modifier, index: int) -> None:
    copy = self.ctx.factory.copy_subtree(modifier)
    self.ctx.refactorings.insert_at(copy, index, modifier.location_in_parent, modifier.parent)
    self.ctx.refactorings.remove(modifier)
