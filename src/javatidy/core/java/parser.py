"""
Java Declaration Parser.

This module parses Java source text into the declaration tree defined in
`nodes.py`. It is a recursive descent parser over the declaration skeleton:
method bodies, initializers, field initializers and enum constant arguments
are scanned by bracket matching. While scanning, classes declared inside the
code are parsed as class bodies:
- local classes, interfaces, enums and records;
- anonymous class bodies, ``new T(...) { ... }``;
- enum constant bodies, ``A { ... }``.

Comments, string literals, character literals and text blocks are lexed as
opaque tokens so that braces inside them never confuse the bracket matcher.
"""

import re
from dataclasses import dataclass
from typing import Generator, List, Optional, Type, Union

from javatidy.core.errors import JavaSyntaxError
from javatidy.core.java.nodes import (
  Annotation,
  AnnotationTypeDeclaration,
  AnnotationTypeMemberDeclaration,
  AnonymousClassDeclaration,
  BodyDeclarationContainer,
  ClassBody,
  CompilationUnit,
  Declaration,
  EnumDeclaration,
  ExtendedModifier,
  FieldDeclaration,
  JavaNode,
  MethodDeclaration,
  Modifier,
  ParameterDeclaration,
  TypeDeclaration,
)
from javatidy.core.java.tokens import TYPE_KEYWORDS, Symbol, TokenKind
from javatidy.enums import ChildSlot, ModifierKeyword

_MODIFIER_WORDS = frozenset(k.value for k in ModifierKeyword)
_OPENERS = {
  Symbol.LPAREN.value: Symbol.RPAREN.value,
  Symbol.LBRACE.value: Symbol.RBRACE.value,
  Symbol.LBRACKET.value: Symbol.RBRACKET.value,
}
_CLOSERS = frozenset(_OPENERS.values())


@dataclass
class Token:
  kind: TokenKind
  text: str
  start: int
  end: int
  line: int
  col: int


class Tokenizer:
  PATTERN_DEFS = [
    (TokenKind.COMMENT, r"//[^\n]*|/\*[\s\S]*?\*/"),
    (TokenKind.TEXT_BLOCK, r'"""[\s\S]*?"""'),
    (TokenKind.STRING, r'"(?:[^"\\\n]|\\.)*"'),
    (TokenKind.CHAR, r"'(?:[^'\\\n]|\\.)*'"),
    (TokenKind.NON_SEALED, r"non-sealed\b"),
    (TokenKind.IDENTIFIER, r"(?:[^\W\d]|\$)[\w$]*"),
    (TokenKind.NUMBER, r"\.?\d(?:[eEpP][+-]|[\w.])*"),
    (TokenKind.ELLIPSIS, r"\.\.\."),
    (TokenKind.AT, r"@"),
    (TokenKind.SYMBOL, r"[{}()\[\];,.<>?:=+\-*/%&|^!~]"),
    (TokenKind.WHITESPACE, r"\s+"),
    (TokenKind.MISMATCH, r"."),
  ]

  _REGEX = re.compile("|".join(f"(?P<{kind.value}>{pattern})" for kind, pattern in PATTERN_DEFS))

  def __init__(self, text: str):
    self.text = text

  def tokenize(self) -> Generator[Token, None, None]:
    line_num = 1
    line_start = 0
    for mo in self._REGEX.finditer(self.text):
      kind = TokenKind(mo.lastgroup)
      value = mo.group()
      col = mo.start() - line_start

      if kind == TokenKind.MISMATCH:
        raise JavaSyntaxError(f"Unexpected character {value!r}", line_num, col)

      yield Token(kind, value, mo.start(), mo.end(), line_num, col)

      newlines = value.count("\n")
      if newlines:
        line_num += newlines
        line_start = mo.start() + value.rfind("\n") + 1
    end = len(self.text)
    yield Token(TokenKind.EOF, "", end, end, line_num, end - line_start)


class JavaParser:
  """
  Recursive descent parser producing a ``CompilationUnit``.

  Args:
      text (str): Java source code.
      name (str): Identifying name for the unit (e.g. ``"Foo.java"``).
  """

  def __init__(self, text: str, name: str = ""):
    self.text = text
    self.name = name
    self.tokens = [t for t in Tokenizer(text).tokenize() if t.kind not in (TokenKind.WHITESPACE, TokenKind.COMMENT)]
    self.pos = 0

  # --- Token Stream ---

  def peek(self, offset: int = 0) -> Token:
    idx = self.pos + offset
    if idx >= len(self.tokens):
      return self.tokens[-1]
    return self.tokens[idx]

  def consume(self) -> Token:
    token = self.peek()
    if token.kind != TokenKind.EOF:
      self.pos += 1
    return token

  def match(self, text: str, offset: int = 0) -> bool:
    tk = self.peek(offset)
    return tk.kind in (TokenKind.SYMBOL, TokenKind.IDENTIFIER) and tk.text == text

  def match_kind(self, kind: TokenKind, offset: int = 0) -> bool:
    return self.peek(offset).kind == kind

  def expect(self, text: str) -> Token:
    if not self.match(text):
      raise self._error(f"Expected '{text}'")
    return self.consume()

  def expect_identifier(self) -> Token:
    if not self.match_kind(TokenKind.IDENTIFIER):
      raise self._error("Expected identifier")
    return self.consume()

  def _error(self, message: str) -> JavaSyntaxError:
    cur = self.peek()
    found = cur.text if cur.kind != TokenKind.EOF else "end of file"
    return JavaSyntaxError(f"{message}, got '{found}'", cur.line, cur.col)

  @property
  def _last_end(self) -> int:
    return self.tokens[self.pos - 1].end if self.pos else 0

  # --- Skipping ---

  def _skip_balanced(self) -> Token:
    """Consumes a bracketed group starting at the current opener. Returns the closer."""
    depth = 0
    while True:
      tk = self.peek()
      if tk.kind == TokenKind.EOF:
        raise self._error("Unbalanced brackets")
      self.consume()
      if tk.kind != TokenKind.SYMBOL:
        continue
      if tk.text in _OPENERS:
        depth += 1
      elif tk.text in _CLOSERS:
        depth -= 1
        if depth == 0:
          return tk

  def _skip_past(self, text: str) -> Token:
    """Consumes tokens up to and including ``text`` found outside brackets."""
    while not self.match(text):
      tk = self.peek()
      if tk.kind == TokenKind.EOF:
        raise self._error(f"Expected '{text}'")
      if tk.kind == TokenKind.SYMBOL and tk.text in _OPENERS:
        self._skip_balanced()
      elif tk.kind == TokenKind.SYMBOL and tk.text in _CLOSERS:
        raise self._error(f"Expected '{text}'")
      else:
        self.consume()
    return self.consume()

  def _skip_type_arguments(self) -> None:
    depth = 0
    while True:
      tk = self.consume()
      if tk.kind == TokenKind.EOF:
        raise self._error("Unterminated type arguments")
      if tk.text == Symbol.LT.value:
        depth += 1
      elif tk.text == Symbol.GT.value:
        depth -= 1
        if depth == 0:
          return

  def _skip_method_rest(self, found: List[JavaNode]) -> int:
    """Skips dimensions, ``throws`` clause and body (or ``;``). Returns the end offset."""
    while True:
      if self.match(Symbol.SEMI.value):
        return self.consume().end
      if self.match(Symbol.LBRACE.value):
        return self._scan_code(found).end
      if self.match_kind(TokenKind.EOF):
        raise self._error("Expected method body")
      if self.match(Symbol.LPAREN.value):
        self._skip_balanced()
      else:
        self.consume()

  # --- Code Scanning ---

  def _scan_code(self, found: List[JavaNode], stop: Optional[str] = None) -> Token:
    """
    Consumes code, parsing every class declared inside it into ``found``.

    Without ``stop``, consumes the bracketed group starting at the current
    opener and returns its closer. With ``stop``, consumes up to and including
    ``stop`` found outside brackets.
    """
    depth = 0
    while True:
      tk = self.peek()
      if tk.kind == TokenKind.EOF:
        raise self._error(f"Expected '{stop}'" if stop else "Unbalanced brackets")
      if stop is not None and depth == 0:
        if self.match(stop):
          return self.consume()
        if tk.kind == TokenKind.SYMBOL and tk.text in _CLOSERS:
          raise self._error(f"Expected '{stop}'")
      if self._try_inner_class(found):
        continue
      self.consume()
      if tk.kind != TokenKind.SYMBOL:
        continue
      if tk.text in _OPENERS:
        depth += 1
      elif tk.text in _CLOSERS:
        depth -= 1
        if depth == 0 and stop is None:
          return tk

  def _try_inner_class(self, found: List[JavaNode]) -> bool:
    """
    Parses an instance creation or a local type declaration starting here.

    Returns:
        bool: False, with nothing consumed, if neither starts at this position.
    """
    if self.match("new"):
      self._parse_instance_creation(found)
      return True
    previous = self.tokens[self.pos - 1] if self.pos else None
    if previous is not None and previous.kind == TokenKind.SYMBOL and previous.text == Symbol.DOT.value:
      # class literal, e.g. Foo.class
      return False

    mark = self.pos
    modifiers = self.parse_modifiers()
    if self._at_type_declaration():
      found.append(self.parse_type_declaration(modifiers))
      return True
    self.pos = mark
    return False

  def _parse_instance_creation(self, found: List[JavaNode]) -> None:
    """Consumes ``new T(...)`` and the anonymous class body following it, if any."""
    self.expect("new")
    type_start = self.peek().start
    while True:
      if self.match_kind(TokenKind.AT):
        self.parse_annotation()
      elif self.match(Symbol.LT.value):
        self._skip_type_arguments()
      elif self.match_kind(TokenKind.IDENTIFIER) or self.match(Symbol.DOT.value):
        self.consume()
      else:
        break
    type_name = self.text[type_start : self._last_end]

    if not self.match(Symbol.LPAREN.value):
      # array creation, left to the caller
      return
    self._scan_code(found)
    if self.match(Symbol.LBRACE.value):
      found.append(self._parse_anonymous_body(type_name))

  def _parse_anonymous_body(self, name: str) -> AnonymousClassDeclaration:
    start = self.expect(Symbol.LBRACE.value).start
    body = AnonymousClassDeclaration(name=name, start=start, end=start)
    self.parse_class_body(body)
    body.end = self.expect(Symbol.RBRACE.value).end
    return body

  # --- Grammar ---

  def parse(self) -> CompilationUnit:
    """
    Parses the whole text.

    Returns:
        CompilationUnit: The declaration tree.

    Raises:
        JavaSyntaxError: If the declaration skeleton is malformed.
    """
    unit = CompilationUnit(source=self.text, name=self.name)
    while not self.match_kind(TokenKind.EOF):
      if self.match(Symbol.SEMI.value):
        self.consume()
        continue
      if self.match("import"):
        self._skip_past(Symbol.SEMI.value)
        continue

      modifiers = self.parse_modifiers()
      if self.match("package"):
        self._skip_past(Symbol.SEMI.value)
        continue
      if self._at_module_declaration():
        # module-info.java declares no types
        break
      if not self._at_type_declaration():
        raise self._error("Expected a type declaration")

      decl = self.parse_type_declaration(modifiers)
      _attach(decl, unit, ChildSlot.TYPES)
      unit.types.append(decl)
    return unit

  def parse_modifiers(self) -> List[ExtendedModifier]:
    items: List[ExtendedModifier] = []
    while True:
      tk = self.peek()
      if tk.kind == TokenKind.AT and not self.match("interface", 1):
        items.append(self.parse_annotation())
      elif tk.kind == TokenKind.NON_SEALED or (tk.kind == TokenKind.IDENTIFIER and tk.text in _MODIFIER_WORDS):
        if tk.text == ModifierKeyword.SEALED.value and not self.match_kind(TokenKind.IDENTIFIER, 1):
          break
        self.consume()
        items.append(Modifier(text=tk.text, start=tk.start, end=tk.end, keyword=ModifierKeyword.from_token(tk.text)))
      else:
        break
    return items

  def parse_annotation(self) -> Annotation:
    at = self.consume()
    parts = [self.expect_identifier().text]
    while self.match(Symbol.DOT.value) and self.match_kind(TokenKind.IDENTIFIER, 1):
      self.consume()
      parts.append(self.consume().text)
    end = self._last_end
    if self.match(Symbol.LPAREN.value):
      end = self._skip_balanced().end
    return Annotation(text=self.text[at.start : end], start=at.start, end=end, name=".".join(parts))

  def parse_type(self) -> str:
    start = self.peek().start
    while self.match_kind(TokenKind.AT):
      self.parse_annotation()
    self.expect_identifier()
    while True:
      if self.match(Symbol.LT.value):
        self._skip_type_arguments()
      elif self.match(Symbol.DOT.value) and (self.match_kind(TokenKind.IDENTIFIER, 1) or self.match_kind(TokenKind.AT, 1)):
        self.consume()
        while self.match_kind(TokenKind.AT):
          self.parse_annotation()
        self.expect_identifier()
      elif self.match(Symbol.LBRACKET.value) and self.match(Symbol.RBRACKET.value, 1):
        self.consume()
        self.consume()
      elif self.match_kind(TokenKind.AT):
        self.parse_annotation()
      else:
        break
    return self.text[start : self._last_end]

  def _at_type_declaration(self) -> bool:
    tk = self.peek()
    if tk.kind == TokenKind.IDENTIFIER and tk.text in TYPE_KEYWORDS:
      return True
    if tk.kind == TokenKind.AT and self.match("interface", 1):
      return True
    return self.match("record") and self.match_kind(TokenKind.IDENTIFIER, 1) and (self.match("(", 2) or self.match("<", 2))

  def _at_module_declaration(self) -> bool:
    if self.match("open") and self.match("module", 1):
      return True
    return self.match("module") and self.match_kind(TokenKind.IDENTIFIER, 1)

  def parse_type_declaration(self, modifiers: List[ExtendedModifier]) -> BodyDeclarationContainer:
    start = modifiers[0].start if modifiers else self.peek().start
    decl_cls: Type[BodyDeclarationContainer]
    is_interface = False

    if self.match_kind(TokenKind.AT):
      self.consume()
      self.expect("interface")
      decl_cls = AnnotationTypeDeclaration
    else:
      keyword = self.consume().text
      if keyword == "enum":
        decl_cls = EnumDeclaration
      else:
        decl_cls = TypeDeclaration
        is_interface = keyword == "interface"

    name = self.expect_identifier().text

    # Header: type parameters, record components, extends/implements/permits
    while not self.match(Symbol.LBRACE.value):
      if self.match_kind(TokenKind.EOF):
        raise self._error(f"Expected body of '{name}'")
      if self.match(Symbol.LPAREN.value):
        self._skip_balanced()
      else:
        self.consume()

    if decl_cls is TypeDeclaration:
      decl = TypeDeclaration(name=name, start=start, end=start, modifiers=modifiers, is_interface=is_interface)
    else:
      decl = decl_cls(name=name, start=start, end=start, modifiers=modifiers)
    _adopt_modifiers(decl)

    self.expect(Symbol.LBRACE.value)
    if isinstance(decl, EnumDeclaration):
      self._parse_enum_constants(decl)
    self.parse_class_body(decl)
    decl.end = self.expect(Symbol.RBRACE.value).end
    return decl

  def _parse_enum_constants(self, enum: EnumDeclaration) -> None:
    found: List[JavaNode] = []
    constant = ""
    while not self.match(Symbol.SEMI.value) and not self.match(Symbol.RBRACE.value):
      if self.match_kind(TokenKind.EOF):
        raise self._error("Unterminated enum body")
      if self.match_kind(TokenKind.AT):
        self.parse_annotation()
      elif self.match(Symbol.LPAREN.value):
        self._scan_code(found)
      elif self.match(Symbol.LBRACE.value):
        found.append(self._parse_anonymous_body(constant))
      else:
        tk = self.consume()
        if tk.kind == TokenKind.IDENTIFIER:
          constant = tk.text
    if self.match(Symbol.SEMI.value):
      self.consume()
    _adopt_inner_classes(enum, found)

  def parse_class_body(self, owner: ClassBody) -> None:
    while not self.match(Symbol.RBRACE.value):
      if self.match_kind(TokenKind.EOF):
        raise self._error(f"Unterminated body of '{owner.name}'")
      if self.match(Symbol.SEMI.value):
        self.consume()
        continue

      modifiers = self.parse_modifiers()
      if self.match(Symbol.LBRACE.value):
        # instance or static initializer
        found: List[JavaNode] = []
        self._scan_code(found)
        _adopt_inner_classes(owner, found)
        continue

      member: Declaration
      if self._at_type_declaration():
        member = self.parse_type_declaration(modifiers)
      else:
        member = self.parse_member(modifiers, owner)
      _attach(member, owner, ChildSlot.BODY_DECLARATIONS)
      owner.members.append(member)

  def parse_member(self, modifiers: List[ExtendedModifier], owner: ClassBody) -> Declaration:
    start = modifiers[0].start if modifiers else self.peek().start
    if self.match(Symbol.LT.value):
      self._skip_type_arguments()

    decl: Declaration
    found: List[JavaNode] = []
    if self.match_kind(TokenKind.IDENTIFIER) and (self.match(Symbol.LPAREN.value, 1) or self.match(Symbol.LBRACE.value, 1)):
      # constructor, or compact canonical constructor of a record
      name = self.consume().text
      params = self.parse_parameters() if self.match(Symbol.LPAREN.value) else []
      end = self._skip_method_rest(found)
      decl = MethodDeclaration(name=name, start=start, end=end, modifiers=modifiers, parameters=params, is_constructor=True)
      _adopt_parameters(decl)
    else:
      type_text = self.parse_type()
      name = self.expect_identifier().text
      if self.match(Symbol.LPAREN.value):
        params = self.parse_parameters()
        if isinstance(owner, AnnotationTypeDeclaration):
          end = self._skip_past(Symbol.SEMI.value).end
          decl = AnnotationTypeMemberDeclaration(name=name, start=start, end=end, modifiers=modifiers, type_text=type_text)
        else:
          end = self._skip_method_rest(found)
          decl = MethodDeclaration(name=name, start=start, end=end, modifiers=modifiers, parameters=params)
          _adopt_parameters(decl)
      else:
        end = self._scan_code(found, Symbol.SEMI.value).end
        decl = FieldDeclaration(name=name, start=start, end=end, modifiers=modifiers, type_text=type_text)

    _adopt_modifiers(decl)
    _adopt_inner_classes(decl, found)
    return decl

  def parse_parameters(self) -> List[ParameterDeclaration]:
    self.expect(Symbol.LPAREN.value)
    params: List[ParameterDeclaration] = []
    while not self.match(Symbol.RPAREN.value):
      modifiers = self.parse_modifiers()
      start = modifiers[0].start if modifiers else self.peek().start
      type_text = self.parse_type()

      is_varargs = False
      while self.match_kind(TokenKind.AT):
        self.parse_annotation()
      if self.match_kind(TokenKind.ELLIPSIS):
        self.consume()
        is_varargs = True

      name = self.expect_identifier().text
      # receiver parameter of an inner class constructor: Outer.this
      if self.match(Symbol.DOT.value) and self.match("this", 1):
        self.consume()
        name = f"{name}.{self.consume().text}"
      while self.match(Symbol.LBRACKET.value):
        self.consume()
        self.expect(Symbol.RBRACKET.value)

      param = ParameterDeclaration(
        name=name,
        start=start,
        end=self._last_end,
        modifiers=modifiers,
        type_text=type_text,
        is_varargs=is_varargs,
      )
      _adopt_modifiers(param)
      params.append(param)

      if not self.match(Symbol.RPAREN.value):
        self.expect(Symbol.COMMA.value)
    self.expect(Symbol.RPAREN.value)
    return params


def _attach(child: Declaration, parent: JavaNode, slot: ChildSlot) -> None:
  child.parent = parent
  child.location_in_parent = slot


def _adopt_modifiers(decl: Declaration) -> None:
  for item in decl.modifiers:
    item.parent = decl
    item.location_in_parent = ChildSlot.MODIFIERS


def _adopt_parameters(method: MethodDeclaration) -> None:
  for param in method.parameters:
    _attach(param, method, ChildSlot.PARAMETERS)


def _adopt_inner_classes(owner: Union[Declaration, AnonymousClassDeclaration], found: List[JavaNode]) -> None:
  for node in found:
    node.parent = owner
    node.location_in_parent = ChildSlot.INNER_CLASSES
  owner.inner_classes.extend(found)


def parse_compilation_unit(text: str, name: Optional[str] = None) -> CompilationUnit:
  """
  Parses Java source into a declaration tree.

  Args:
      text (str): Java source code.
      name (Optional[str]): Identifying name of the unit.

  Returns:
      CompilationUnit: The parsed tree.

  Raises:
      JavaSyntaxError: If the source cannot be parsed.
  """
  return JavaParser(text, name or "").parse()
