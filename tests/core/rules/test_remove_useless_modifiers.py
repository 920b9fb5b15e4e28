"""
Tests for the Modifier Normalization Rule.

Verifies:
1. Removal of modifiers implied by interfaces and annotation types.
2. Canonical reordering, with annotations left in place.
3. Visit control after staging edits.
4. Failure on modifiers absent from the order table.
5. Classes declared inside code: local, anonymous and enum constant bodies.
"""

import itertools

import pytest

from javatidy.core.applier import EditApplier
from javatidy.core.context import RefactoringContext
from javatidy.core.edits import InsertAtEdit, RemoveEdit
from javatidy.core.errors import UnorderableModifierError
from javatidy.core.java.nodes import Modifier, ParameterDeclaration
from javatidy.core.java.parser import parse_compilation_unit
from javatidy.core.modifiers import is_canonically_ordered
from javatidy.core.rules.modifiers import RemoveUselessModifiersRule, is_interface_like
from javatidy.core.visitor import DO_NOT_VISIT_SUBTREE, VISIT_SUBTREE
from javatidy.enums import ChildSlot, ModifierKeyword


def staged(code: str):
  unit = parse_compilation_unit(code)
  rule = RemoveUselessModifiersRule()
  rule.set_refactoring_context(RefactoringContext(unit))
  return unit, rule.get_refactorings(unit)


def one_pass(code: str) -> str:
  unit, store = staged(code)
  return EditApplier().apply(unit, store).code


def removed_texts(store):
  return [e.node.text for e in store if isinstance(e, RemoveEdit)]


def test_interface_field_drops_public_static_final():
  unit = parse_compilation_unit("interface I { public static final int X = 1; }")
  field = unit.types[0].members[0]
  rule = RemoveUselessModifiersRule()
  ctx = RefactoringContext(unit)
  rule.set_refactoring_context(ctx)

  assert rule.visit_field(field) == DO_NOT_VISIT_SUBTREE
  assert removed_texts(ctx.refactorings) == ["public", "static", "final"]
  assert all(isinstance(e, RemoveEdit) for e in ctx.refactorings)


def test_interface_method_drops_public_abstract():
  _, store = staged("interface I { public abstract void m(); }")
  assert removed_texts(store) == ["public", "abstract"]
  assert one_pass("interface I { public abstract void m(); }") == "interface I { void m(); }"


def test_interface_method_parameter_drops_final():
  _, store = staged("interface I { void m(final int x); }")
  assert removed_texts(store) == ["final"]
  assert one_pass("interface I { void m(final int x); }") == "interface I { void m(int x); }"


def test_parameter_skipped_when_method_edited():
  # Method edits halt descent; the parameter is handled in the next pass.
  _, store = staged("interface I { public void m(final int x); }")
  assert removed_texts(store) == ["public"]


def test_annotation_type_member_and_constant():
  code = "@interface A { public abstract String value(); public static final int N = 1; }"
  _, store = staged(code)
  assert removed_texts(store) == ["public", "abstract", "public", "static", "final"]
  assert one_pass(code) == "@interface A { String value(); int N = 1; }"


def test_interface_keeps_non_implied_modifiers():
  code = "interface I { public default void m() {} public static void s() {} }"
  assert one_pass(code) == "interface I { default void m() {} static void s() {} }"


@pytest.mark.parametrize(
  "code",
  [
    "interface I { default strictfp void m() {} }",
    "interface I { strictfp static void s() {} }",
    "interface I { static private void p() {} }",
  ],
)
def test_interface_members_are_not_reordered(code):
  _, store = staged(code)
  assert store.is_empty


def test_class_members_keep_implied_modifiers():
  code = "class C { public static final int X = 1; public abstract void m(final int x); }"
  _, store = staged(code)
  assert store.is_empty


def test_class_field_reorder_final_static():
  unit, store = staged("class C { final static int X = 1; }")
  field = unit.types[0].members[0]
  final, static = field.modifiers

  inserts = [e for e in store if isinstance(e, InsertAtEdit)]
  assert inserts[0].index == 0
  assert inserts[0].new_node.text == "static"
  assert inserts[0].new_node is not static
  assert inserts[0].slot == ChildSlot.MODIFIERS
  assert inserts[0].parent is field
  assert [e.node for e in store if isinstance(e, RemoveEdit)] == [static, final]

  assert one_pass("class C { final static int X = 1; }") == "class C { static final int X = 1; }"


def test_reorder_stages_insert_then_remove_pairs():
  _, store = staged("class C { final static int X = 1; }")
  kinds = [type(e) for e in store]
  assert kinds == [InsertAtEdit, RemoveEdit, InsertAtEdit, RemoveEdit]


def test_reorder_signals_do_not_visit_subtree():
  unit = parse_compilation_unit("class C { void m(final int x) {} }")
  method = unit.types[0].members[0]
  rule = RemoveUselessModifiersRule()
  rule.set_refactoring_context(RefactoringContext(unit))
  assert rule.visit_method(method) == VISIT_SUBTREE

  unit = parse_compilation_unit("class C { static public void m() {} }")
  method = unit.types[0].members[0]
  rule.set_refactoring_context(RefactoringContext(unit))
  assert rule.visit_method(method) == DO_NOT_VISIT_SUBTREE


def test_reorder_only_touches_tail_after_first_mismatch():
  _, store = staged("class C { public final static int X = 1; }")
  inserts = [e for e in store if isinstance(e, InsertAtEdit)]
  assert [(e.index, e.new_node.text) for e in inserts] == [(1, "static"), (2, "final")]
  assert "public" not in removed_texts(store)


def test_reorder_preserves_interleaved_annotations():
  code = "class C { @A final @B public static int x; }"
  assert one_pass(code) == "class C { @A public @B static final int x; }"


def test_reorder_with_leading_annotations_on_own_line():
  code = "class C {\n  @Deprecated\n  final static int X = 1;\n}"
  assert one_pass(code) == "class C {\n  @Deprecated\n  static final int X = 1;\n}"


@pytest.mark.parametrize(
  "code, expected",
  [
    ("abstract public class A {}", "public abstract class A {}"),
    ("final public enum E { A }", "public final enum E { A }"),
    ("class C { void m(final @X int a) {} }", "class C { void m(final @X int a) {} }"),
    ("enum E { A; final static int X = 1; }", "enum E { A; static final int X = 1; }"),
    ("class C { synchronized public static void m() {} }", "class C { public static synchronized void m() {} }"),
  ],
)
def test_reorder_declaration_kinds(code, expected):
  assert one_pass(code) == expected


def test_type_edit_halts_descent_into_members():
  unit, store = staged("final public class A { final static int X = 1; }")
  owner = unit.types[0]
  assert all(e.parent is owner for e in store if isinstance(e, InsertAtEdit))
  assert all(e.node.parent is owner for e in store if isinstance(e, RemoveEdit))


@pytest.mark.parametrize("order", list(itertools.permutations(["private", "static", "final", "transient"])))
def test_reorder_sorts_and_keeps_multiset(order):
  code = f"class C {{ {' '.join(order)} int x; }}"
  result = parse_compilation_unit(one_pass(code))
  modifiers = result.types[0].members[0].modifiers_only()

  assert sorted(m.text for m in modifiers) == sorted(order)
  assert is_canonically_ordered(modifiers)


def test_canonical_input_is_a_fixed_point():
  code = "public abstract class A { private static final int X = 1; protected abstract void m(int a); }"
  _, store = staged(code)
  assert store.is_empty


def test_unorderable_modifier_raises_and_stages_nothing():
  unit = parse_compilation_unit("public sealed interface S permits A {}")
  rule = RemoveUselessModifiersRule()
  ctx = RefactoringContext(unit)
  rule.set_refactoring_context(ctx)

  with pytest.raises(UnorderableModifierError):
    rule.visit_type(unit.types[0])
  assert ctx.refactorings.is_empty


def test_lone_unorderable_modifier_is_left_alone():
  _, store = staged("sealed interface S permits A {}")
  assert store.is_empty


def test_unresolved_parameter_context_is_not_interface():
  param = ParameterDeclaration(name="x", start=0, end=11, type_text="int")
  final = Modifier(text="final", start=0, end=5, parent=param, keyword=ModifierKeyword.FINAL)
  param.modifiers.append(final)

  rule = RemoveUselessModifiersRule()
  ctx = RefactoringContext()
  rule.set_refactoring_context(ctx)

  assert rule.visit_parameter(param) == VISIT_SUBTREE
  assert ctx.refactorings.is_empty


def test_is_interface_like():
  unit = parse_compilation_unit("interface I {} class C {} @interface A {} enum E {}")
  assert [is_interface_like(t) for t in unit.types] == [True, False, True, False]
  assert not is_interface_like(None)


def test_get_refactorings_creates_context_when_missing():
  unit = parse_compilation_unit("interface I { public void m(); }")
  rule = RemoveUselessModifiersRule()
  store = rule.get_refactorings(unit)
  assert removed_texts(store) == ["public"]
  assert rule.ctx.unit is unit


def test_get_refactorings_replaces_context_of_another_unit():
  rule = RemoveUselessModifiersRule()
  rule.set_refactoring_context(RefactoringContext(parse_compilation_unit("class C {}")))
  unit = parse_compilation_unit("interface I { public void m(); }")

  assert removed_texts(rule.get_refactorings(unit)) == ["public"]
  assert rule.ctx.unit is unit


@pytest.mark.parametrize(
  "code, expected",
  [
    (
      "class A { void m() { class L { final static int X = 1; } } }",
      "class A { void m() { class L { static final int X = 1; } } }",
    ),
    (
      "class A { Runnable r = new Runnable() { synchronized public void run() {} }; }",
      "class A { Runnable r = new Runnable() { public synchronized void run() {} }; }",
    ),
    (
      "enum E { A { final static int X = 1; }; }",
      "enum E { A { static final int X = 1; }; }",
    ),
    (
      "class A { static { new Thread() { final public void run() {} }.start(); } }",
      "class A { static { new Thread() { public final void run() {} }.start(); } }",
    ),
  ],
)
def test_classes_declared_inside_code_are_reordered(code, expected):
  assert one_pass(code) == expected


def test_local_interface_drops_implied_modifiers():
  code = "class A { void m() { interface L { public abstract void f(); } } }"
  assert one_pass(code) == "class A { void m() { interface L { void f(); } } }"


def test_anonymous_class_is_not_interface_like():
  _, store = staged("interface I { Runnable R = new Runnable() { public void run() {} }; }")
  assert store.is_empty
