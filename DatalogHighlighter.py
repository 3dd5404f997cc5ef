import re
from typing import List, Optional, Sequence, Tuple

from PyQt5.QtCore import QRegularExpression
from PyQt5.QtGui import QColor, QFont, QTextCharFormat, QSyntaxHighlighter

from Keywords import (
	AGGREGATORS,
	BLOCK_COMMENT_END,
	BLOCK_COMMENT_START,
	CONSTANTS,
	DECLARATIONS,
	KEYWORDS,
	LINE_COMMENT,
	OPERATORS,
	RELATION_DECLARATIONS,
	TYPE_DECLARATION,
	TYPES,
)
from Theme import EditorPalette

STATE_DEFAULT = -1
STATE_BLOCK_COMMENT = 1


def _words(words: Sequence[str]) -> str:
	return "|".join(re.escape(word) for word in words)


class DatalogHighlighter(QSyntaxHighlighter):
	"""Regex-based syntax highlighter for Scallop sources."""

	def __init__(self, document, palette: Optional[EditorPalette] = None) -> None:
		super().__init__(document)
		self.palette = palette or EditorPalette()
		self._rules: List[Tuple[QRegularExpression, QTextCharFormat, int]] = []
		self._literal_pattern = QRegularExpression(
			r'"(?:[^"\\]|\\.)*"?|' + re.escape(LINE_COMMENT) + "|" + re.escape(BLOCK_COMMENT_START)
		)
		self._init_rules()

	def set_palette(self, palette: EditorPalette) -> None:
		self.palette = palette
		self._init_rules()
		self.rehighlight()

	def _init_rules(self) -> None:
		def fmt(color: QColor, bold: bool = False, italic: bool = False) -> QTextCharFormat:
			char_format = QTextCharFormat()
			char_format.setForeground(color)
			if bold:
				char_format.setFontWeight(QFont.Weight.Bold)
			if italic:
				char_format.setFontItalic(True)
			return char_format

		p = self.palette
		self._rules = []

		# Later rules override earlier ones, operators go first
		operator_pattern = QRegularExpression(_words(OPERATORS))
		self._rules.append((operator_pattern, fmt(p.operator), 0))

		keyword_pattern = QRegularExpression(r"\b(" + _words(sorted(set(DECLARATIONS + KEYWORDS))) + r")\b")
		self._rules.append((keyword_pattern, fmt(p.keyword, bold=True), 0))

		aggregator_pattern = QRegularExpression(r"\b(" + _words(sorted(AGGREGATORS)) + r")\b")
		self._rules.append((aggregator_pattern, fmt(p.keyword), 0))

		# Атрибуты вида @demand("bf") или @file("edge.csv")
		attribute_pattern = QRegularExpression(r"@[A-Za-z_][A-Za-z0-9_]*")
		self._rules.append((attribute_pattern, fmt(p.keyword, italic=True), 0))

		type_pattern = QRegularExpression(r"\b(" + _words(TYPES) + r")\b")
		self._rules.append((type_pattern, fmt(p.type), 0))

		constant_pattern = QRegularExpression(r"\b(" + _words(CONSTANTS) + r")\b")
		self._rules.append((constant_pattern, fmt(p.constant), 0))

		number_pattern = QRegularExpression(r"\b(0x[0-9a-fA-F]+|0b[01]+|\d+(\.\d+)?)\b")
		self._rules.append((number_pattern, fmt(p.number), 0))

		# Имена объявленных отношений и типов: подсвечиваем только группу 1
		relation_pattern = QRegularExpression(r"\b(?:" + _words(RELATION_DECLARATIONS) + r")\s+([A-Za-z_][A-Za-z0-9_]*)")
		declaration_format = fmt(p.declaration)
		declaration_format.setFontUnderline(True)
		self._rules.append((relation_pattern, declaration_format, 1))

		type_name_pattern = QRegularExpression(r"\b" + TYPE_DECLARATION + r"\s+([A-Za-z_][A-Za-z0-9_]*)")
		self._rules.append((type_name_pattern, fmt(p.declaration, bold=True), 1))

		self._string_format = fmt(p.string)
		self._comment_format = fmt(p.comment, italic=True)

	def highlightBlock(self, text: str) -> None:  # noqa: N802 (Qt API)
		for pattern, text_format, group in self._rules:
			match_iterator = pattern.globalMatch(text)
			while match_iterator.hasNext():
				match = match_iterator.next()
				self.setFormat(match.capturedStart(group), match.capturedLength(group), text_format)
		self._highlight_literals(text)

	def _highlight_literals(self, text: str) -> None:
		"""Strings and comments, scanned left to right so the first opener wins."""
		self.setCurrentBlockState(STATE_DEFAULT)
		pos = 0
		if self.previousBlockState() == STATE_BLOCK_COMMENT:
			end = text.find(BLOCK_COMMENT_END)
			if end == -1:
				self.setFormat(0, len(text), self._comment_format)
				self.setCurrentBlockState(STATE_BLOCK_COMMENT)
				return
			pos = end + len(BLOCK_COMMENT_END)
			self.setFormat(0, pos, self._comment_format)

		while pos < len(text):
			match = self._literal_pattern.match(text, pos)
			if not match.hasMatch():
				return
			start = match.capturedStart()
			token = match.captured()
			if token == LINE_COMMENT:
				self.setFormat(start, len(text) - start, self._comment_format)
				return
			if token == BLOCK_COMMENT_START:
				end = text.find(BLOCK_COMMENT_END, start + len(BLOCK_COMMENT_START))
				if end == -1:
					self.setFormat(start, len(text) - start, self._comment_format)
					self.setCurrentBlockState(STATE_BLOCK_COMMENT)
					return
				pos = end + len(BLOCK_COMMENT_END)
				self.setFormat(start, pos - start, self._comment_format)
				continue
			self.setFormat(start, len(token), self._string_format)
			pos = start + max(1, len(token))
