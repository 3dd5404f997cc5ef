from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, Optional

from PyQt5.QtGui import QKeySequence
from PyQt5.QtWidgets import (
	QAction,
	QFileDialog,
	QMainWindow,
	QMessageBox,
	QStatusBar,
	QActionGroup,
)

from CodeEditor import CodeEditor
from Modes import default_mode, file_dialog_filter, mode_for_path
from Settings import INDENT_WIDTH_CHOICES, SETTINGS_PATH, load_settings, save_settings
from Theme import EditorPalette, Theme, palette_for

logger = logging.getLogger(__name__)


class DatalogPadWindow(QMainWindow):
	"""Main application window wrapping the code editor."""

	def __init__(self, settings_path: Path = SETTINGS_PATH) -> None:
		super().__init__()
		self.setWindowTitle("DatalogPad")
		self.resize(900, 650)
		self._settings_path = settings_path
		self._settings = load_settings(self._settings_path)
		palette = palette_for(self._settings["theme"])

		self.editor = CodeEditor(palette)
		# Apply persisted font size and indent width
		self.editor.set_font_size(self._settings["font_size"])
		self.editor.set_indent_width(self._settings["indent_width"])
		self.setCentralWidget(self.editor)

		self.status_bar = QStatusBar()
		self.setStatusBar(self.status_bar)

		self._current_file: Optional[Path] = None
		self._create_actions()
		self._create_menu_bar()
		self._create_settings_menu()
		self._apply_global_theme(palette)

		# Применяем сохранённое состояние переноса строк
		wrap_enabled = bool(self._settings["word_wrap"])
		self.editor.set_word_wrap_enabled(wrap_enabled)
		self.word_wrap_action.setChecked(wrap_enabled)

	def _create_actions(self) -> None:
		self.new_action = QAction("&New", self)
		self.new_action.setShortcut("Ctrl+N")
		self.new_action.triggered.connect(self.new_file)

		self.open_action = QAction("&Open…", self)
		self.open_action.setShortcut("Ctrl+O")
		self.open_action.triggered.connect(self.open_file)

		self.save_action = QAction("&Save", self)
		self.save_action.setShortcut("Ctrl+S")
		self.save_action.triggered.connect(self.save_file)

		self.save_as_action = QAction("Save &As…", self)
		self.save_as_action.setShortcut("Ctrl+Shift+S")
		self.save_as_action.triggered.connect(self.save_file_as)

		self.exit_action = QAction("E&xit", self)
		self.exit_action.setShortcut("Ctrl+Q")
		self.exit_action.triggered.connect(self.close)

		self.reindent_action = QAction("&Reindent Buffer", self)
		self.reindent_action.setShortcut(QKeySequence("Ctrl+Shift+I"))
		self.reindent_action.triggered.connect(self.reindent_buffer)

		self.comment_action = QAction("Toggle &Comment", self)
		self.comment_action.setShortcut(QKeySequence("Ctrl+/"))
		self.comment_action.triggered.connect(self.editor.toggle_comment)

		# Размер шрифта: (текст, сочетания клавиш, действие)
		font_steps = (
			("Increase Font", ("Ctrl++", "Ctrl+="), lambda: self.editor.adjust_font_size(1)),
			("Decrease Font", ("Ctrl+-",), lambda: self.editor.adjust_font_size(-1)),
			("Reset Font Size", ("Ctrl+0",), self.editor.reset_font_size),
		)
		self.font_actions = []
		for label, keys, change in font_steps:
			action = QAction(label, self)
			action.setShortcuts([QKeySequence(k) for k in keys])
			action.triggered.connect(lambda _checked=False, change=change: self._change_font(change))
			self.font_actions.append(action)

		self.word_wrap_action = QAction("Word Wrap", self, checkable=True)
		self.word_wrap_action.triggered.connect(self._toggle_word_wrap)

	def _create_menu_bar(self) -> None:
		menu_bar = self.menuBar()
		file_menu = menu_bar.addMenu("&File")
		file_menu.addAction(self.new_action)
		file_menu.addAction(self.open_action)
		file_menu.addSeparator()
		file_menu.addAction(self.save_action)
		file_menu.addAction(self.save_as_action)
		file_menu.addSeparator()
		file_menu.addAction(self.exit_action)

		edit_menu = menu_bar.addMenu("&Edit")
		edit_menu.addAction(self.reindent_action)
		edit_menu.addAction(self.comment_action)

		view_menu = menu_bar.addMenu("&View")
		for action in self.font_actions:
			view_menu.addAction(action)
		view_menu.addSeparator()
		view_menu.addAction(self.word_wrap_action)

	def _create_settings_menu(self) -> None:
		settings_menu = self.menuBar().addMenu("&Settings")
		self.theme_actions = self._add_choice_menu(
			settings_menu,
			"Theme",
			[(theme.value, theme.value.title()) for theme in Theme],
			self._settings["theme"],
			self._set_theme,
		)
		self.indent_width_actions = self._add_choice_menu(
			settings_menu,
			"Indent Width",
			[(w, str(w)) for w in INDENT_WIDTH_CHOICES],
			self._settings["indent_width"],
			self._set_indent_width,
		)

	def _add_choice_menu(self, parent, title: str, choices, current, on_choose) -> Dict:
		"""Submenu of mutually exclusive checkable actions, keyed by value."""
		menu = parent.addMenu(title)
		group = QActionGroup(self)
		group.setExclusive(True)
		actions = {}
		for value, label in choices:
			action = QAction(label, self, checkable=True)
			action.setChecked(value == current)
			action.triggered.connect(lambda _checked, v=value: on_choose(v))
			group.addAction(action)
			menu.addAction(action)
			actions[value] = action
		return actions

	def _persist(self, **changes) -> None:
		self._settings.update(changes)
		save_settings(self._settings, self._settings_path)

	def _set_theme(self, theme_value: str) -> None:
		palette = palette_for(theme_value)
		self.editor.set_palette(palette)
		self._apply_global_theme(palette)
		self._persist(theme=theme_value)

	def _set_indent_width(self, width: int) -> None:
		self.editor.set_indent_width(width)
		self._persist(indent_width=width)
		self.status_bar.showMessage(f"Indent width: {width}", 2000)

	def _apply_global_theme(self, palette: EditorPalette) -> None:
		bg, fg, accent = palette.background.name(), palette.foreground.name(), palette.keyword.name()
		rules = [
			f"{widget} {{ background-color: {bg}; color: {fg}; }}"
			for widget in ("QMainWindow", "QMenuBar", "QMenu", "QStatusBar")
		]
		rules += [f"{widget}::item:selected {{ background: {accent}; }}" for widget in ("QMenuBar", "QMenu")]
		self.setStyleSheet("\n".join(rules))

	def _change_font(self, change: Callable[[], None]) -> None:
		change()
		self._persist(font_size=self.editor.font().pointSize())

	def _toggle_word_wrap(self, checked: bool) -> None:
		self.editor.set_word_wrap_enabled(bool(checked))
		self._persist(word_wrap=bool(checked))

	def reindent_buffer(self) -> None:
		changed = self.editor.reindent_document()
		self.status_bar.showMessage(f"Reindented {changed} line(s)", 3000)

	def new_file(self) -> None:
		if not self._maybe_discard_changes():
			return
		self.editor.clear()
		self.editor.set_mode(default_mode())
		self._current_file = None
		self._update_window_title()

	def open_file(self) -> None:
		if not self._maybe_discard_changes():
			return
		file_path, _ = QFileDialog.getOpenFileName(self, "Open File", str(Path.home()), file_dialog_filter())
		if file_path:
			self.load_path(Path(file_path))

	def load_path(self, path: Path) -> bool:
		"""Read ``path`` into the editor and pick its language mode."""
		logger.info("Loading '%s'", path)
		try:
			with open(path, "r", encoding="utf-8") as fh:
				text = fh.read()
		except (OSError, UnicodeDecodeError) as e:
			logger.exception("Could not open '%s'", path)
			QMessageBox.critical(self, "Open Failed", f"Could not open {path}:\n{e}")
			return False

		mode = mode_for_path(path)
		if mode is None:
			logger.info("No language mode for '%s', using %s", path.name, default_mode().name)
			mode = default_mode()
		self.editor.set_mode(mode)
		self.editor.setPlainText(text)
		self._current_file = path
		self._update_window_title()
		return True

	def save_file(self) -> None:
		if self._current_file is None:
			self.save_file_as()
			return
		self._write_to_path(self._current_file)

	def save_file_as(self) -> None:
		file_path, _ = QFileDialog.getSaveFileName(self, "Save File As", str(Path.home()), file_dialog_filter())
		if file_path:
			if self._write_to_path(Path(file_path)):
				self._current_file = Path(file_path)
				self._update_window_title()

	def closeEvent(self, event):
		if self._maybe_discard_changes():
			event.accept()
		else:
			event.ignore()

	def update_status(self, line: int, column: int) -> None:
		path = str(self._current_file) if self._current_file else "Untitled"
		self.status_bar.showMessage(f"{path} — Line {line}, Column {column}")

	def _maybe_discard_changes(self) -> bool:
		if not self.editor.document().isModified():
			return True
		response = QMessageBox.warning(
			self,
			"Unsaved Changes",
			"The document has unsaved changes. Do you want to continue without saving?",
			QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
			QMessageBox.StandardButton.No,
		)
		return response == QMessageBox.StandardButton.Yes

	def _write_to_path(self, path: Path) -> bool:
		logger.info("Saving '%s'", path)
		try:
			with open(path, "w", encoding="utf-8") as fh:
				fh.write(self.editor.toPlainText())
		except OSError as e:
			logger.exception("Could not save '%s'", path)
			QMessageBox.critical(self, "Save Failed", f"Could not save {path}:\n{e}")
			return False
		self.editor.document().setModified(False)
		return True

	def _update_window_title(self) -> None:
		suffix = f" — {self._current_file.name}" if self._current_file else ""
		self.setWindowTitle(f"DatalogPad{suffix}")
