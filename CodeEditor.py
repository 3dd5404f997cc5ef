from collections import abc
from typing import Optional, Sequence

from PyQt5.QtCore import Qt, QRect, QSize
from PyQt5.QtGui import QFont, QTextBlock, QTextCursor, QPainter, QWheelEvent, QTextDocument
from PyQt5.QtWidgets import QPlainTextEdit, QWidget

from EditorLogic import (
	DepthCache,
	IndentConfig,
	compute_indent,
	reindent_line,
	toggle_line_comment,
	unindent_line,
)
from Modes import LanguageMode, default_mode
from Theme import EditorPalette


class _DocumentLines(abc.Sequence):
	"""Read-only view of a QTextDocument as a sequence of line strings."""

	def __init__(self, document: QTextDocument) -> None:
		self._document = document

	def __len__(self) -> int:
		return self._document.blockCount()

	def __getitem__(self, index):
		if isinstance(index, slice):
			return [self[i] for i in range(*index.indices(len(self)))]
		if index < 0:
			index += len(self)
		if not 0 <= index < len(self):
			raise IndexError(index)
		return self._document.findBlockByNumber(index).text()


class CodeEditor(QPlainTextEdit):
	"""QPlainTextEdit with Datalog helpers."""

	BRACKETS = {"(": ")", "[": "]", "{": "}"}
	ELECTRIC_CHARS = ")}"

	def __init__(self, palette: Optional[EditorPalette] = None, mode: Optional[LanguageMode] = None) -> None:
		super().__init__()
		font = QFont("Consolas", 11)
		font.setStyleHint(QFont.StyleHint.Monospace)
		self.setFont(font)
		self._default_font_size = font.pointSize()
		self._palette = palette or EditorPalette()
		self._apply_palette()
		self.mode = mode or default_mode()
		self.highlighter = self.mode.highlighter_factory(self.document(), self._palette)
		self.indent_config = IndentConfig(indent_unit=self.mode.indent_unit)
		self._depth_cache = DepthCache()
		self.document().contentsChange.connect(self._invalidate_depth_cache)
		self.cursorPositionChanged.connect(self._handle_cursor_change)

		# Line number area setup
		self._lineNumberArea = _LineNumberArea(self)
		self.blockCountChanged.connect(self._update_line_number_area_width)
		self.updateRequest.connect(self._update_line_number_area)
		self._update_line_number_area_width(0)

		# По умолчанию перенос строк включён; состояние может переопределяться окном
		self.setLineWrapMode(QPlainTextEdit.LineWrapMode.WidgetWidth)

	@property
	def indent_string(self) -> str:
		return " " * self.indent_config.indent_unit

	def _apply_palette(self) -> None:
		p = self._palette
		self.setStyleSheet(
			f"QPlainTextEdit {{ background-color: {p.background.name()}; color: {p.foreground.name()}; }}"
		)
		if hasattr(self, "_lineNumberArea"):
			self._lineNumberArea.update()

	def set_mode(self, mode: LanguageMode) -> None:
		"""Switch language mode; the highlighter is replaced, the indent width is kept."""
		if mode is self.mode:
			return
		self.highlighter.setDocument(None)
		self.mode = mode
		self.highlighter = mode.highlighter_factory(self.document(), self._palette)

	def set_indent_width(self, width: int) -> None:
		self.indent_config = IndentConfig(indent_unit=max(1, int(width)), tab_width=self.indent_config.tab_width)

	def set_font_size(self, size: int) -> None:
		"""Set absolute font size (clamped)."""
		size = max(6, min(72, int(size)))
		font = self.font()
		if font.pointSize() == size:
			return
		font.setPointSize(size)
		self.setFont(font)
		self._update_line_number_area_width(0)

	def adjust_font_size(self, delta: int) -> None:
		"""Adjust current font size by delta."""
		self.set_font_size(self.font().pointSize() + delta)

	def reset_font_size(self) -> None:
		"""Reset font size to default captured at init."""
		self.set_font_size(self._default_font_size)

	def set_palette(self, palette: EditorPalette) -> None:
		self._palette = palette
		self._apply_palette()
		if hasattr(self, "highlighter"):
			self.highlighter.set_palette(palette)
		self._update_line_number_area_width(0)

	def lineNumberAreaWidth(self) -> int:
		"""Return width of line number area in pixels.

		Используем метрики шрифта редактора и небольшой запас,
		чтобы при увеличении шрифта цифры не налезали на текст.
		"""
		digits = len(str(max(1, self.blockCount())))
		fm = self.fontMetrics()
		char_width = fm.horizontalAdvance('9')
		padding = 8  # слева/справа
		return padding + char_width * digits

	def _update_line_number_area_width(self, _):
		self.setViewportMargins(self.lineNumberAreaWidth(), 0, 0, 0)

	def _update_line_number_area(self, rect, dy):
		if dy:
			self._lineNumberArea.scroll(0, dy)
		else:
			self._lineNumberArea.update(0, rect.y(), self._lineNumberArea.width(), rect.height())
		if rect.contains(self.viewport().rect()):
			self._update_line_number_area_width(0)

	def resizeEvent(self, event):  # type: ignore[override]
		super().resizeEvent(event)
		r = QRect(0, 0, self.lineNumberAreaWidth(), self.height())
		self._lineNumberArea.setGeometry(r)

	def wheelEvent(self, event: QWheelEvent):  # type: ignore[override]
		# Ctrl + колёсико — масштаб шрифта
		if event.modifiers() & Qt.KeyboardModifier.ControlModifier:
			angle = event.angleDelta().y()
			if angle == 0:
				return
			step = 1 if angle > 0 else -1
			self.adjust_font_size(step)
			event.accept()
			return

		# Обычная прокрутка
		super().wheelEvent(event)

	def _lineNumberAreaPaintEvent(self, event) -> None:
		painter = QPainter(self._lineNumberArea)
		painter.setFont(self.font())
		# Background
		bg = self._palette.background
		painter.fillRect(event.rect(), bg)
		# Правая граница между гаттером и текстом
		painter.setPen(self._palette.comment)
		x = self._lineNumberArea.width() - 1
		painter.drawLine(x, event.rect().top(), x, event.rect().bottom())

		block = self.firstVisibleBlock()
		block_number = block.blockNumber()
		top = int(self.blockBoundingGeometry(block).translated(self.contentOffset()).top())
		bottom = top + int(self.blockBoundingRect(block).height())

		painter.setPen(self._palette.comment)

		while block.isValid() and top <= event.rect().bottom():
			if block.isVisible() and bottom >= event.rect().top():
				num = str(block_number + 1)
				painter.drawText(0, top, self._lineNumberArea.width() - 4, self.fontMetrics().height(),
							   Qt.AlignmentFlag.AlignRight, num)
			block = block.next()
			block_number += 1
			top = bottom
			bottom = top + int(self.blockBoundingRect(block).height())

	def keyPressEvent(self, event):
		text = event.text()
		key = event.key()

		# Приоритет 1: Enter / Return — перенос строки с автоотступом
		if key in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
			self.insert_newline_and_indent()
			return

		# Приоритет 2: Tab / Shift+Tab — управление отступами
		if key == Qt.Key.Key_Tab:
			if self.textCursor().hasSelection():
				self.reindent_selection()
			else:
				self.reindent_current_line()
			return
		elif key == Qt.Key.Key_Backtab:
			self._unindent_selection()
			return

		# Приоритет 3: автодобавление парных скобок
		if text and text in self.BRACKETS:
			closing = self.BRACKETS[text]
			super().keyPressEvent(event)
			cursor = self.textCursor()
			cursor.insertText(closing)
			cursor.movePosition(QTextCursor.MoveOperation.PreviousCharacter)
			self.setTextCursor(cursor)
			return

		# Приоритет 4: «перепрыгивание» через уже существующую закрывающую скобку
		if text and text in self.BRACKETS.values():
			cursor = self.textCursor()
			if not cursor.hasSelection() and self.document().characterAt(cursor.position()) == text:
				cursor.movePosition(QTextCursor.MoveOperation.NextCharacter)
				self.setTextCursor(cursor)
			else:
				super().keyPressEvent(event)
			if text in self.ELECTRIC_CHARS:
				self._reindent_if_first_char()
			return

		# Остальные клавиши — стандартное поведение
		super().keyPressEvent(event)

	def _lines(self) -> Sequence[str]:
		return _DocumentLines(self.document())

	def _invalidate_depth_cache(self, position: int, removed: int, added: int) -> None:
		self._depth_cache.invalidate(self.document().findBlock(position).blockNumber())

	def _reindent_block(self, block: QTextBlock, column: int = 0) -> int:
		"""Rewrite the leading whitespace of ``block``; return the new cursor column.

		No edit is made when the block already has the computed indentation.
		"""
		target = compute_indent(self._lines(), block.blockNumber(), self.indent_config, self._depth_cache)
		text = block.text()
		new_text, new_column = reindent_line(text, column, target, self.indent_config)
		if new_text == text:
			return new_column
		old_leading = len(text) - len(text.lstrip(" \t"))
		new_leading = len(new_text) - len(new_text.lstrip(" \t"))
		edit = QTextCursor(block)
		edit.setPosition(block.position() + old_leading, QTextCursor.MoveMode.KeepAnchor)
		edit.insertText(new_text[:new_leading])
		return new_column

	def reindent_current_line(self) -> None:
		cursor = self.textCursor()
		block = cursor.block()
		cursor.beginEditBlock()
		new_column = self._reindent_block(block, cursor.positionInBlock())
		cursor.endEditBlock()
		cursor.setPosition(block.position() + new_column)
		self.setTextCursor(cursor)

	def reindent_selection(self) -> None:
		cursor = self.textCursor()
		first = self.document().findBlock(cursor.selectionStart())
		last = self.document().findBlock(cursor.selectionEnd())
		cursor.beginEditBlock()
		block = first
		while block.isValid():
			if block.text().strip():
				self._reindent_block(block)
			if block == last:
				break
			block = block.next()
		cursor.endEditBlock()

	def reindent_document(self) -> int:
		"""Reindent the whole buffer as one undo step. Returns the number of changed lines."""
		changed = 0
		cursor = self.textCursor()
		cursor.beginEditBlock()
		block = self.document().firstBlock()
		while block.isValid():
			text = block.text()
			if not text.strip():
				if text:
					edit = QTextCursor(block)
					edit.movePosition(QTextCursor.MoveOperation.EndOfBlock, QTextCursor.MoveMode.KeepAnchor)
					edit.removeSelectedText()
					changed += 1
			else:
				self._reindent_block(block)
				if block.text() != text:
					changed += 1
			block = block.next()
		cursor.endEditBlock()
		return changed

	def insert_newline_and_indent(self) -> None:
		cursor = self.textCursor()
		cursor.beginEditBlock()
		cursor.removeSelectedText()
		cursor.insertText("\n")
		block = cursor.block()
		new_column = self._reindent_block(block, cursor.positionInBlock())
		cursor.endEditBlock()
		cursor.setPosition(block.position() + new_column)
		self.setTextCursor(cursor)

	def _reindent_if_first_char(self) -> None:
		cursor = self.textCursor()
		before = cursor.block().text()[: cursor.positionInBlock()]
		# Закрывающая скобка — первый непробельный символ строки
		if before.strip() in tuple(self.ELECTRIC_CHARS):
			self.reindent_current_line()

	def toggle_comment(self) -> None:
		cursor = self.textCursor()
		first = self.document().findBlock(cursor.selectionStart())
		last = self.document().findBlock(cursor.selectionEnd())
		if cursor.hasSelection() and last.blockNumber() > first.blockNumber() and cursor.selectionEnd() == last.position():
			# Выделение заканчивается в начале строки — эту строку не трогаем
			last = last.previous()

		blocks = []
		block = first
		while block.isValid():
			blocks.append(block)
			if block == last:
				break
			block = block.next()

		old_lines = [b.text() for b in blocks]
		new_lines = toggle_line_comment(old_lines, self.mode.line_comment)
		cursor.beginEditBlock()
		for block, old, new in zip(blocks, old_lines, new_lines):
			if old == new:
				continue
			edit = QTextCursor(block)
			edit.movePosition(QTextCursor.MoveOperation.EndOfBlock, QTextCursor.MoveMode.KeepAnchor)
			edit.insertText(new)
		cursor.endEditBlock()

	def _unindent_selection(self) -> None:
		cursor = self.textCursor()
		first = self.document().findBlock(cursor.selectionStart())
		last = self.document().findBlock(cursor.selectionEnd())
		cursor.beginEditBlock()
		block = first
		while block.isValid():
			block_text = block.text()
			new_text = unindent_line(block_text, self.indent_string)
			if new_text != block_text:
				edit = QTextCursor(block)
				edit.setPosition(block.position() + len(block_text) - len(new_text), QTextCursor.MoveMode.KeepAnchor)
				edit.removeSelectedText()
			if block == last:
				break
			block = block.next()
		cursor.endEditBlock()

	def _handle_cursor_change(self) -> None:
		cursor = self.textCursor()
		block = cursor.blockNumber() + 1
		column = cursor.positionInBlock() + 1
		parent = self.parent()
		if parent is not None and hasattr(parent, "update_status"):
			parent.update_status(block, column)
		# Гаттер перерисовываем при каждом перемещении курсора
		self._lineNumberArea.update()

	def set_word_wrap_enabled(self, enabled: bool) -> None:
		"""Включить/выключить перенос строк по ширине виджета."""
		mode = QPlainTextEdit.LineWrapMode.WidgetWidth if enabled else QPlainTextEdit.LineWrapMode.NoWrap
		self.setLineWrapMode(mode)


class _LineNumberArea(QWidget):
	def __init__(self, editor: CodeEditor) -> None:
		super().__init__(editor)
		self._editor = editor

	def sizeHint(self):
		return QSize(self._editor.lineNumberAreaWidth(), 0)

	def paintEvent(self, event):  # type: ignore[override]
		self._editor._lineNumberAreaPaintEvent(event)
