"""
Rule Engine Visitor Contract.

A rule is a ``RefactoringVisitor`` overriding the hooks for the declaration
kinds it cares about. ``walk`` performs a single pre-order depth-first
traversal of a ``CompilationUnit`` and dispatches each declaration to the hook
matching its ``DeclarationKind``. A hook returns ``VISIT_SUBTREE`` to continue
into the node's children or ``DO_NOT_VISIT_SUBTREE`` to skip them for this
pass.
"""

from typing import Callable, Dict, List

from javatidy.core.java.nodes import (
  AnnotationTypeDeclaration,
  AnnotationTypeMemberDeclaration,
  Declaration,
  EnumDeclaration,
  FieldDeclaration,
  JavaNode,
  MethodDeclaration,
  ParameterDeclaration,
  TypeDeclaration,
)
from javatidy.enums import DeclarationKind

VISIT_SUBTREE = True
DO_NOT_VISIT_SUBTREE = False


class RefactoringVisitor:
  """
  Base visitor. Every hook defaults to ``VISIT_SUBTREE``.
  """

  def visit_field(self, node: FieldDeclaration) -> bool:
    return VISIT_SUBTREE

  def visit_method(self, node: MethodDeclaration) -> bool:
    return VISIT_SUBTREE

  def visit_type(self, node: TypeDeclaration) -> bool:
    return VISIT_SUBTREE

  def visit_enum(self, node: EnumDeclaration) -> bool:
    return VISIT_SUBTREE

  def visit_annotation_type(self, node: AnnotationTypeDeclaration) -> bool:
    return VISIT_SUBTREE

  def visit_annotation_type_member(self, node: AnnotationTypeMemberDeclaration) -> bool:
    return VISIT_SUBTREE

  def visit_parameter(self, node: ParameterDeclaration) -> bool:
    return VISIT_SUBTREE


_DISPATCH: Dict[DeclarationKind, Callable[[RefactoringVisitor, Declaration], bool]] = {
  DeclarationKind.FIELD: RefactoringVisitor.visit_field,
  DeclarationKind.METHOD: RefactoringVisitor.visit_method,
  DeclarationKind.TYPE: RefactoringVisitor.visit_type,
  DeclarationKind.ENUM: RefactoringVisitor.visit_enum,
  DeclarationKind.ANNOTATION_TYPE: RefactoringVisitor.visit_annotation_type,
  DeclarationKind.ANNOTATION_TYPE_MEMBER: RefactoringVisitor.visit_annotation_type_member,
  DeclarationKind.PARAMETER: RefactoringVisitor.visit_parameter,
}

_missing = set(DeclarationKind) - set(_DISPATCH)
if _missing:
  raise RuntimeError(f"No visitor hook for declaration kinds: {sorted(k.value for k in _missing)}")


def dispatch(visitor: RefactoringVisitor, node: Declaration) -> bool:
  """
  Invokes the visitor hook matching the node's kind.

  The hook is looked up on the visitor instance so that overrides apply.

  Returns:
      bool: The hook's visit-control signal.
  """
  hook = _DISPATCH[node.kind]
  return getattr(visitor, hook.__name__)(node)


def walk(root: JavaNode, visitor: RefactoringVisitor) -> None:
  """
  Pre-order depth-first traversal of ``root``.

  Children of a declaration whose hook returned ``DO_NOT_VISIT_SUBTREE`` are
  skipped. The tree is never modified.

  Args:
      root (JavaNode): Node to start from, usually a ``CompilationUnit``.
      visitor (RefactoringVisitor): The rule to run.
  """
  stack: List[JavaNode] = [root]
  while stack:
    node = stack.pop()
    if isinstance(node, Declaration) and not dispatch(visitor, node):
      continue
    stack.extend(reversed(list(node.children())))
