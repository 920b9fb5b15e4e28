"""
Tests for the 'preview' and 'rules' command handlers.
"""

from javatidy.cli.handlers.preview import handle_preview
from javatidy.cli.handlers.rules import handle_rules

MESSY = "class Foo { final static int X = 1; }\n"


def test_preview_lists_changes_without_writing(tmp_path, captured_console):
  src = tmp_path / "Foo.java"
  src.write_text(MESSY, encoding="utf-8")

  assert handle_preview(src) == 0

  out = captured_console.getvalue()
  assert "View Refactorings Applied..." in out
  assert "reordered `final static` to `static final`" in out
  assert src.read_text(encoding="utf-8") == MESSY


def test_preview_selection_mismatch(tmp_path, captured_console):
  src = tmp_path / "Foo.java"
  src.write_text(MESSY, encoding="utf-8")

  assert handle_preview(src, "com.acme.Bar") == 0
  assert "No refactoring applied" in captured_console.getvalue()


def test_preview_directory_with_failure(tmp_path, captured_console):
  (tmp_path / "Foo.java").write_text(MESSY, encoding="utf-8")
  (tmp_path / "Bad.java").write_text("class {", encoding="utf-8")

  assert handle_preview(tmp_path, "com.acme.Foo") == 1

  out = captured_console.getvalue()
  assert "Failed to analyse" in out
  assert "static final" in out


def test_rules_table(captured_console):
  assert handle_rules() == 0
  out = captured_console.getvalue()
  assert "remove_useless_modifiers" in out
  assert "Remove modifiers implied by the context" in out
