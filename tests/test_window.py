import json

from PyQt5.QtCore import QEvent, Qt
from PyQt5.QtGui import QKeyEvent, QKeySequence, QTextCursor

from DatalogPadWindow import DatalogPadWindow
from Theme import LIGHT_PALETTE


def test_window_loads_file_and_sets_title(tmp_path) -> None:
    source = tmp_path / "rules.scl"
    source.write_text("rel p(x) :-\nq(x)", encoding="utf-8")
    window = DatalogPadWindow(settings_path=tmp_path / "settings.json")

    assert window.load_path(source) is True
    assert window.editor.toPlainText() == "rel p(x) :-\nq(x)"
    assert window.windowTitle() == "DatalogPad — rules.scl"

    window.reindent_buffer()
    assert window.editor.toPlainText() == "rel p(x) :-\n    q(x)"


def test_missing_file_is_reported_not_loaded(tmp_path, monkeypatch) -> None:
    shown = []
    monkeypatch.setattr("DatalogPadWindow.QMessageBox.critical", lambda *args: shown.append(args[1]))
    window = DatalogPadWindow(settings_path=tmp_path / "settings.json")

    assert window.load_path(tmp_path / "absent.scl") is False
    assert shown == ["Open Failed"]
    assert window.windowTitle() == "DatalogPad"


def test_indent_width_choice_is_persisted(tmp_path) -> None:
    settings_path = tmp_path / "settings.json"
    window = DatalogPadWindow(settings_path=settings_path)

    window.indent_width_actions[4].trigger()

    assert window.editor.indent_config.indent_unit == 4
    assert json.loads(settings_path.read_text(encoding="utf-8"))["indent_width"] == 4


def test_theme_and_font_changes_are_persisted(tmp_path) -> None:
    settings_path = tmp_path / "settings.json"
    window = DatalogPadWindow(settings_path=settings_path)

    window.theme_actions["light"].trigger()
    increase_font = window.font_actions[0]
    increase_font.trigger()

    saved = json.loads(settings_path.read_text(encoding="utf-8"))
    assert saved["theme"] == "light"
    assert saved["font_size"] == window.editor.font().pointSize()
    assert window.editor.highlighter.palette is LIGHT_PALETTE


def test_window_applies_saved_settings(tmp_path) -> None:
    settings_path = tmp_path / "settings.json"
    settings_path.write_text(json.dumps({"indent_width": 8, "word_wrap": False}), encoding="utf-8")

    window = DatalogPadWindow(settings_path=settings_path)

    assert window.editor.indent_config.indent_unit == 8
    assert window.indent_width_actions[8].isChecked()
    assert not window.word_wrap_action.isChecked()


def test_comment_shortcut_belongs_to_window_action(tmp_path) -> None:
    window = DatalogPadWindow(settings_path=tmp_path / "settings.json")
    window.editor.setPlainText("a.")

    assert window.comment_action.shortcut() == QKeySequence("Ctrl+/")
    window.comment_action.trigger()
    assert window.editor.toPlainText() == "// a."

    # Сам редактор Ctrl+/ не обрабатывает, иначе строка закомментировалась бы дважды
    window.editor.moveCursor(QTextCursor.MoveOperation.End)
    event = QKeyEvent(QEvent.Type.KeyPress, Qt.Key.Key_Slash, Qt.KeyboardModifier.ControlModifier, "/")
    window.editor.keyPressEvent(event)
    assert not window.editor.toPlainText().startswith("// //")
    assert window.editor.toPlainText().startswith("// a.")
