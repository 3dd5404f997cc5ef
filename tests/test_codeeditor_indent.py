from PyQt5.QtCore import QEvent, Qt
from PyQt5.QtGui import QKeyEvent, QTextCursor

from CodeEditor import CodeEditor
from DatalogHighlighter import DatalogHighlighter
from Theme import EditorPalette


def _editor(text: str) -> CodeEditor:
    editor = CodeEditor(EditorPalette())
    editor.setPlainText(text)
    editor.moveCursor(QTextCursor.MoveOperation.End)
    return editor


def _press(editor: CodeEditor, key, text: str) -> None:
    editor.keyPressEvent(QKeyEvent(QEvent.Type.KeyPress, key, Qt.KeyboardModifier.NoModifier, text))


def test_editor_uses_scallop_mode_by_default() -> None:
    editor = _editor("")
    assert editor.mode.name == "Scallop"
    assert isinstance(editor.highlighter, DatalogHighlighter)


def test_enter_after_rule_marker_indents_body() -> None:
    editor = _editor("path(x, y) :-")
    editor.insert_newline_and_indent()
    assert editor.toPlainText() == "path(x, y) :-\n    "
    assert editor.textCursor().positionInBlock() == 4


def test_enter_key_goes_through_indentation_engine() -> None:
    editor = _editor("edge(x,")
    _press(editor, Qt.Key.Key_Return, "\r")
    assert editor.toPlainText() == "edge(x,\n      "


def test_reindent_keeps_cursor_relative_to_line_end() -> None:
    editor = _editor("foo(\n      bar")
    cursor = editor.textCursor()
    block = editor.document().findBlockByNumber(1)
    cursor.setPosition(block.position() + 8)
    editor.setTextCursor(cursor)

    editor.reindent_current_line()

    assert editor.toPlainText() == "foo(\n  bar"
    assert editor.textCursor().positionInBlock() == 4


def test_reindent_without_change_leaves_no_undo_step() -> None:
    editor = _editor("foo(\n  bar")
    editor.reindent_current_line()
    assert editor.toPlainText() == "foo(\n  bar"
    assert editor.document().availableUndoSteps() == 0
    assert not editor.document().isModified()


def test_reindent_twice_is_stable() -> None:
    editor = _editor("a :-\nb")
    editor.reindent_current_line()
    first = (editor.toPlainText(), editor.textCursor().position())
    editor.reindent_current_line()
    assert (editor.toPlainText(), editor.textCursor().position()) == first


def test_typing_closing_paren_outdents_line() -> None:
    editor = _editor("foo(\n    ")
    _press(editor, Qt.Key.Key_ParenRight, ")")
    assert editor.toPlainText() == "foo(\n)"


def test_reindent_document_is_one_undo_step() -> None:
    messy = "p(x) :-\nq(x),\n      r(x).\n   \nfoo(\nbar)"
    editor = _editor(messy)

    changed = editor.reindent_document()

    assert editor.toPlainText() == "p(x) :-\n    q(x),\n    r(x).\n\nfoo(\n  bar)"
    assert changed == 4
    steps = editor.document().availableUndoSteps()
    assert editor.reindent_document() == 0
    assert editor.document().availableUndoSteps() == steps

    # Одного undo() достаточно, чтобы вернуть исходный текст
    editor.undo()
    assert editor.toPlainText() == messy


def test_edit_between_reindents_refreshes_depth_cache() -> None:
    editor = _editor("a\nb")
    editor.reindent_current_line()
    assert editor.toPlainText() == "a\nb"

    cursor = QTextCursor(editor.document().firstBlock())
    cursor.movePosition(QTextCursor.MoveOperation.EndOfBlock)
    cursor.insertText("(")
    editor.moveCursor(QTextCursor.MoveOperation.End)
    editor.reindent_current_line()

    assert editor.toPlainText() == "a(\n  b"


def test_indent_width_setting_changes_unit() -> None:
    editor = _editor("p :-")
    editor.set_indent_width(4)
    editor.insert_newline_and_indent()
    assert editor.toPlainText() == "p :-\n        "


def test_toggle_comment_round_trip() -> None:
    editor = _editor("a.\n  b.")
    editor.selectAll()
    editor.toggle_comment()
    assert editor.toPlainText() == "// a.\n//   b."

    editor.selectAll()
    editor.toggle_comment()
    assert editor.toPlainText() == "a.\n  b."
