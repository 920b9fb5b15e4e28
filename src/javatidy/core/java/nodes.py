"""
Java Declaration Tree Nodes.

This module defines the data structures for the declaration skeleton of a
Java compilation unit. It ensures structural hierarchy
(CompilationUnit -> Type -> Member -> Parameter) and keeps the source span of
every extended modifier, so that rewrites can be expressed as precise text
replacements.

Nodes are owned by the tree produced by the parser. Rules only read them;
changes are requested through an ``EditStore``.
"""

import dataclasses
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar, Iterator, List, Optional, Union

from javatidy.enums import ChildSlot, DeclarationKind, ModifierKeyword


@dataclass(eq=False)
class JavaNode(ABC):
  """
  Abstract base class for all Java tree nodes.

  Nodes compare by identity: two structurally equal modifiers at different
  positions are different nodes.
  """

  @abstractmethod
  def children(self) -> Iterator["JavaNode"]:
    """
    Yields the direct child declarations, in source order.

    Returns:
        Iterator[JavaNode]: Child nodes visited by the rule engine.
    """


@dataclass(eq=False)
class ExtendedModifier(JavaNode):
  """
  A member of a declaration's modifier list: a modifier keyword or an annotation.

  Attributes:
      text (str): Exact source text of the item.
      start (int): Offset of the first character in the source.
      end (int): Offset one past the last character in the source.
      parent (Optional[Declaration]): Owning declaration, None for detached copies.
      location_in_parent (Optional[ChildSlot]): Slot the item lives in.
  """

  text: str
  start: int
  end: int
  parent: Optional["Declaration"] = field(default=None, repr=False)
  location_in_parent: Optional[ChildSlot] = field(default=None, repr=False)

  @property
  def is_modifier(self) -> bool:
    return False

  @property
  def is_annotation(self) -> bool:
    return False

  def children(self) -> Iterator[JavaNode]:
    return iter(())

  def detached_copy(self) -> "ExtendedModifier":
    """
    Builds a structurally equal copy with no parent.

    Returns:
        ExtendedModifier: The detached copy.
    """
    return dataclasses.replace(self, parent=None, location_in_parent=None)


@dataclass(eq=False)
class Modifier(ExtendedModifier):
  """A true modifier keyword such as ``public`` or ``static``."""

  keyword: ModifierKeyword = ModifierKeyword.PUBLIC

  @property
  def is_modifier(self) -> bool:
    return True


@dataclass(eq=False)
class Annotation(ExtendedModifier):
  """An annotation in modifier position, e.g. ``@Override``. Never reordered."""

  name: str = ""

  @property
  def is_annotation(self) -> bool:
    return True


@dataclass(eq=False)
class Declaration(JavaNode):
  """
  Base for every node that owns an extended modifier list.

  Attributes:
      name (str): Declared identifier.
      start (int): Offset where the declaration begins (first modifier included).
      end (int): Offset one past the declaration's last character.
      modifiers (List[ExtendedModifier]): Annotations and modifiers in source order.
      parent (Optional[JavaNode]): Enclosing node.
      location_in_parent (Optional[ChildSlot]): Slot the declaration lives in.
      inner_classes (List[JavaNode]): Classes declared inside code this
          declaration owns (method bodies, initializers, enum constants):
          local types and anonymous class bodies.
  """

  kind: ClassVar[DeclarationKind]

  name: str
  start: int
  end: int
  modifiers: List[ExtendedModifier] = field(default_factory=list)
  parent: Optional[JavaNode] = field(default=None, repr=False)
  location_in_parent: Optional[ChildSlot] = field(default=None, repr=False)
  inner_classes: List[JavaNode] = field(default_factory=list, repr=False)

  def modifiers_only(self) -> List[Modifier]:
    """
    Extracts the true modifiers, ignoring annotations.

    Returns:
        List[Modifier]: Modifiers in source order.
    """
    return [m for m in self.modifiers if m.is_modifier]

  def children(self) -> Iterator[JavaNode]:
    return iter(self.inner_classes)


@dataclass(eq=False)
class BodyDeclarationContainer(Declaration):
  """A declaration whose body holds member declarations."""

  members: List[Declaration] = field(default_factory=list)

  def children(self) -> Iterator[JavaNode]:
    yield from self.members
    yield from self.inner_classes


@dataclass(eq=False)
class TypeDeclaration(BodyDeclarationContainer):
  """A ``class``, ``interface`` or ``record`` declaration."""

  kind: ClassVar[DeclarationKind] = DeclarationKind.TYPE

  is_interface: bool = False


@dataclass(eq=False)
class EnumDeclaration(BodyDeclarationContainer):
  """
  An ``enum`` declaration.

  Enum constants are not modelled, but the class bodies of constants such as
  ``A { ... }`` are kept in ``inner_classes``.
  """

  kind: ClassVar[DeclarationKind] = DeclarationKind.ENUM


@dataclass(eq=False)
class AnnotationTypeDeclaration(BodyDeclarationContainer):
  """An ``@interface`` declaration."""

  kind: ClassVar[DeclarationKind] = DeclarationKind.ANNOTATION_TYPE


@dataclass(eq=False)
class AnonymousClassDeclaration(JavaNode):
  """
  The body of an anonymous class or of an enum constant.

  It owns no modifiers, so the rule engine only walks through it to reach
  its members. It is never interface-like, even when it implements an
  interface.

  Attributes:
      name (str): Instantiated type (``Runnable``) or enum constant name.
      start (int): Offset of the opening brace.
      end (int): Offset one past the closing brace.
  """

  name: str
  start: int
  end: int
  members: List[Declaration] = field(default_factory=list)
  parent: Optional[JavaNode] = field(default=None, repr=False)
  location_in_parent: Optional[ChildSlot] = field(default=None, repr=False)
  inner_classes: List[JavaNode] = field(default_factory=list, repr=False)

  def children(self) -> Iterator[JavaNode]:
    yield from self.members
    yield from self.inner_classes


ClassBody = Union[BodyDeclarationContainer, AnonymousClassDeclaration]


@dataclass(eq=False)
class FieldDeclaration(Declaration):
  """
  A field declaration. ``name`` holds the first declared variable.

  Attributes:
      type_text (str): Source text of the declared type.
  """

  kind: ClassVar[DeclarationKind] = DeclarationKind.FIELD

  type_text: str = ""


@dataclass(eq=False)
class ParameterDeclaration(Declaration):
  """A formal parameter of a method or constructor."""

  kind: ClassVar[DeclarationKind] = DeclarationKind.PARAMETER

  type_text: str = ""
  is_varargs: bool = False


@dataclass(eq=False)
class MethodDeclaration(Declaration):
  """A method or constructor declaration."""

  kind: ClassVar[DeclarationKind] = DeclarationKind.METHOD

  parameters: List[ParameterDeclaration] = field(default_factory=list)
  is_constructor: bool = False

  def children(self) -> Iterator[JavaNode]:
    yield from self.parameters
    yield from self.inner_classes


@dataclass(eq=False)
class AnnotationTypeMemberDeclaration(Declaration):
  """An element of an annotation type, e.g. ``String value() default "";``."""

  kind: ClassVar[DeclarationKind] = DeclarationKind.ANNOTATION_TYPE_MEMBER

  type_text: str = ""


@dataclass(eq=False)
class CompilationUnit(JavaNode):
  """
  Top-level container for one source file.

  Attributes:
      source (str): The text the tree was parsed from.
      types (List[Declaration]): Top-level type declarations.
      name (str): Identifying name of the unit (usually the file name).
  """

  source: str
  types: List[Declaration] = field(default_factory=list)
  name: str = ""

  def children(self) -> Iterator[JavaNode]:
    return iter(self.types)

  def iter_declarations(self) -> Iterator[Declaration]:
    """
    Walks every declaration in pre-order, including parameters.

    Returns:
        Iterator[Declaration]: All declarations of the unit.
    """
    stack: List[JavaNode] = list(reversed(self.types))
    while stack:
      node = stack.pop()
      if isinstance(node, Declaration):
        yield node
      stack.extend(reversed(list(node.children())))
