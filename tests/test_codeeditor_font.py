from PyQt5.QtWidgets import QApplication

from CodeEditor import CodeEditor
from Theme import DARK_PALETTE, LIGHT_PALETTE


def test_widgets_share_the_session_application(qapp) -> None:
    editor = CodeEditor(DARK_PALETTE)
    assert QApplication.instance() is qapp
    # Второй виджет создаётся без повторного QApplication
    assert CodeEditor(DARK_PALETTE).document() is not editor.document()


def test_larger_font_widens_gutter() -> None:
    editor = CodeEditor(DARK_PALETTE)
    width = editor.lineNumberAreaWidth()
    editor.adjust_font_size(6)
    assert editor.lineNumberAreaWidth() > width


def test_font_size_is_clamped_and_resettable() -> None:
    """Размер шрифта ограничен диапазоном 6..72 и сбрасывается к исходному."""
    editor = CodeEditor(DARK_PALETTE)
    default_size = editor.font().pointSize()

    editor.set_font_size(500)
    assert editor.font().pointSize() == 72
    editor.set_font_size(1)
    assert editor.font().pointSize() == 6

    editor.reset_font_size()
    assert editor.font().pointSize() == default_size


def test_palette_switch_reaches_highlighter() -> None:
    editor = CodeEditor(DARK_PALETTE)
    editor.set_palette(LIGHT_PALETTE)
    assert editor.highlighter.palette is LIGHT_PALETTE
    assert LIGHT_PALETTE.background.name() in editor.styleSheet()
