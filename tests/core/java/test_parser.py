"""
Tests for the Java Declaration Parser.

Verifies:
1. Tokenizer handling of comments, literals and `non-sealed`.
2. Declaration skeleton structure (types, members, parameters).
3. Source spans of extended modifiers and parent links.
"""

import pytest

from javatidy.core.errors import JavaSyntaxError
from javatidy.core.java.nodes import (
  Annotation,
  AnnotationTypeDeclaration,
  AnnotationTypeMemberDeclaration,
  AnonymousClassDeclaration,
  EnumDeclaration,
  FieldDeclaration,
  MethodDeclaration,
  Modifier,
  ParameterDeclaration,
  TypeDeclaration,
)
from javatidy.core.java.parser import Tokenizer, parse_compilation_unit
from javatidy.core.java.tokens import TokenKind
from javatidy.enums import ChildSlot, ModifierKeyword


def test_tokenizer_opaque_trivia():
  text = 'a /* { */ "}" // {\n\'{\' non-sealed'
  kinds = [t.kind for t in Tokenizer(text).tokenize()]

  assert TokenKind.COMMENT in kinds
  assert TokenKind.STRING in kinds
  assert TokenKind.CHAR in kinds
  assert TokenKind.NON_SEALED in kinds
  assert kinds[-1] == TokenKind.EOF
  assert TokenKind.SYMBOL not in kinds


def test_tokenizer_tracks_lines():
  tokens = [t for t in Tokenizer("class\n  A").tokenize() if t.kind == TokenKind.IDENTIFIER]
  assert (tokens[1].line, tokens[1].col) == (2, 2)


def test_parse_class_members():
  code = """package a.b;
import java.util.List;

public class Foo {
  private static final int X = 1, Y = 2;
  protected List<String> names;

  public Foo(int a) { this.a = a; }

  static { init(); }

  public <T> T get(final T value, String... rest) throws Exception {
    return value;
  }
}
"""
  unit = parse_compilation_unit(code, "Foo.java")

  assert unit.name == "Foo.java"
  assert len(unit.types) == 1
  foo = unit.types[0]
  assert isinstance(foo, TypeDeclaration)
  assert not foo.is_interface
  assert foo.name == "Foo"

  field_x, field_names, ctor, method = foo.members
  assert isinstance(field_x, FieldDeclaration)
  assert field_x.name == "X"
  assert [m.text for m in field_x.modifiers] == ["private", "static", "final"]
  assert field_names.type_text == "List<String>"

  assert isinstance(ctor, MethodDeclaration)
  assert ctor.is_constructor

  assert method.name == "get"
  assert [p.name for p in method.parameters] == ["value", "rest"]
  assert method.parameters[1].is_varargs
  assert [m.keyword for m in method.parameters[0].modifiers] == [ModifierKeyword.FINAL]


def test_modifier_spans_match_source():
  code = "class A { @Deprecated final static int X = 1; }"
  unit = parse_compilation_unit(code)
  field = unit.types[0].members[0]

  for item in field.modifiers:
    assert code[item.start : item.end] == item.text
    assert item.parent is field
    assert item.location_in_parent == ChildSlot.MODIFIERS

  annotation, final, static = field.modifiers
  assert isinstance(annotation, Annotation)
  assert annotation.is_annotation and not annotation.is_modifier
  assert annotation.name == "Deprecated"
  assert isinstance(final, Modifier) and final.keyword == ModifierKeyword.FINAL
  assert static.keyword == ModifierKeyword.STATIC
  assert field.start == annotation.start


def test_parent_links():
  code = "interface I { void m(int a); }"
  unit = parse_compilation_unit(code)
  iface = unit.types[0]
  method = iface.members[0]
  param = method.parameters[0]

  assert iface.parent is unit
  assert method.parent is iface
  assert method.location_in_parent == ChildSlot.BODY_DECLARATIONS
  assert param.parent is method
  assert param.location_in_parent == ChildSlot.PARAMETERS


def test_parse_interface_and_nested_types():
  code = """
@FunctionalInterface
public interface Shape {
  double PI = 3.14;
  double area();
  default String label() { return "{shape}"; }
  enum Kind { ROUND, SQUARE { @Override public String toString() { return "sq"; } }; int weight; }
  class Impl implements Shape { public double area() { return 0; } }
}
"""
  unit = parse_compilation_unit(code)
  shape = unit.types[0]

  assert shape.is_interface
  assert isinstance(shape.modifiers[0], Annotation)
  pi, area, label, kind, impl = shape.members
  assert isinstance(pi, FieldDeclaration)
  assert isinstance(area, MethodDeclaration)
  assert [m.keyword for m in label.modifiers] == [ModifierKeyword.DEFAULT]
  assert isinstance(kind, EnumDeclaration)
  assert [m.name for m in kind.members] == ["weight"]
  assert isinstance(impl, TypeDeclaration)
  assert impl.members[0].name == "area"


def test_parse_annotation_type():
  code = """
public @interface Marker {
  public abstract String value() default "";
  String[] tags() default {"a", "b"};
  int LIMIT = 3;
}
"""
  unit = parse_compilation_unit(code)
  marker = unit.types[0]

  assert isinstance(marker, AnnotationTypeDeclaration)
  value, tags, limit = marker.members
  assert isinstance(value, AnnotationTypeMemberDeclaration)
  assert [m.text for m in value.modifiers] == ["public", "abstract"]
  assert tags.type_text == "String[]"
  assert isinstance(limit, FieldDeclaration)


def test_parse_record_and_sealed():
  code = """
public sealed interface Expr permits Num {}
public record Num(int value) implements Expr {
  public Num { if (value < 0) throw new IllegalArgumentException(); }
}
non-sealed class Open extends Base {}
"""
  unit = parse_compilation_unit(code)
  expr, num, open_cls = unit.types

  assert [m.keyword for m in expr.modifiers] == [ModifierKeyword.PUBLIC, ModifierKeyword.SEALED]
  assert num.name == "Num"
  assert num.members[0].is_constructor
  assert num.members[0].parameters == []
  assert open_cls.modifiers[0].keyword == ModifierKeyword.NON_SEALED


def test_parse_receiver_parameter():
  code = "class Outer { class Inner { Inner(Outer Outer.this, int x) {} } }"
  unit = parse_compilation_unit(code)
  ctor = unit.types[0].members[0].members[0]
  assert [p.name for p in ctor.parameters] == ["Outer.this", "x"]
  assert all(isinstance(p, ParameterDeclaration) for p in ctor.parameters)


def test_parse_classes_declared_inside_code():
  code = """
class A {
  Runnable r = new Runnable() { public void run() {} };
  static { new Thread(new Runnable() { public void run() {} }).start(); }
  void m() {
    Class<?> k = A.class;
    final class L { static final int X = 1; }
    int[] xs = new int[] { 1, 2 };
    record P(int x) {}
  }
}
enum E { ONE, TWO(new Object() { int y; }) { void f() {} }; }
"""
  unit = parse_compilation_unit(code)
  a, e = unit.types
  field_r, method_m = a.members

  anonymous = field_r.inner_classes[0]
  assert isinstance(anonymous, AnonymousClassDeclaration)
  assert anonymous.name == "Runnable"
  assert anonymous.parent is field_r
  assert anonymous.location_in_parent == ChildSlot.INNER_CLASSES
  assert [m.name for m in anonymous.members] == ["run"]
  assert anonymous.members[0].parent is anonymous

  # initializer blocks have no declaration, so their classes belong to the type
  assert [c.name for c in a.inner_classes] == ["Runnable"]

  local, record = method_m.inner_classes
  assert isinstance(local, TypeDeclaration)
  assert [m.text for m in local.modifiers] == ["final"]
  assert local.parent is method_m
  assert record.name == "P"

  assert [c.name for c in e.inner_classes] == ["Object", "TWO"]
  assert [m.name for m in e.inner_classes[1].members] == ["f"]

  names = [d.name for d in unit.iter_declarations()]
  assert names == ["A", "r", "run", "m", "L", "X", "P", "run", "E", "y", "f"]


def test_iter_declarations_preorder():
  code = "class A { int f; void m(int p) {} class B { int g; } }"
  unit = parse_compilation_unit(code)
  assert [d.name for d in unit.iter_declarations()] == ["A", "f", "m", "p", "B", "g"]


def test_module_info_has_no_types():
  unit = parse_compilation_unit("module com.example { requires java.base; }")
  assert unit.types == []


@pytest.mark.parametrize(
  "code",
  [
    "class A {",
    "class A { int x }",
    "class A { void m( { } }",
    "int x;",
    "class A { # }",
  ],
)
def test_malformed_source_raises(code):
  with pytest.raises(JavaSyntaxError):
    parse_compilation_unit(code)


def test_syntax_error_reports_position():
  with pytest.raises(JavaSyntaxError) as exc:
    parse_compilation_unit("class A {\n  # }")
  assert exc.value.line == 2
  assert exc.value.col == 2
