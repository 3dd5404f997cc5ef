from dataclasses import dataclass, field
from enum import Enum
from PyQt5.QtGui import QColor

@dataclass
class EditorPalette:
	# Базовые цвета по умолчанию (мягкая тёмная схема, One Dark-подобная)
	background: QColor = field(default_factory=lambda: QColor("#282c34"))
	foreground: QColor = field(default_factory=lambda: QColor("#abb2bf"))
	keyword: QColor = field(default_factory=lambda: QColor("#c678dd"))
	constant: QColor = field(default_factory=lambda: QColor("#d19a66"))
	operator: QColor = field(default_factory=lambda: QColor("#56b6c2"))
	type: QColor = field(default_factory=lambda: QColor("#61afef"))
	declaration: QColor = field(default_factory=lambda: QColor("#e5c07b"))
	comment: QColor = field(default_factory=lambda: QColor("#5c6370"))
	string: QColor = field(default_factory=lambda: QColor("#98c379"))
	number: QColor = field(default_factory=lambda: QColor("#d19a66"))


class Theme(str, Enum):
	DARK = "dark"
	LIGHT = "light"


# Мягкая светлая палитра
LIGHT_PALETTE = EditorPalette(
	background=QColor("#fafafa"),
	foreground=QColor("#383a42"),
	keyword=QColor("#a626a4"),
	constant=QColor("#c18401"),
	operator=QColor("#0997b3"),
	type=QColor("#0184bc"),
	declaration=QColor("#795da3"),
	comment=QColor("#6a737d"),
	string=QColor("#50a14f"),
	number=QColor("#986801"),
)

# Тёмная палитра по умолчанию (см. значения в EditorPalette)
DARK_PALETTE = EditorPalette()


def palette_for(theme_value: str) -> EditorPalette:
	"""Палитра по значению темы из настроек; неизвестное значение — тёмная."""
	return LIGHT_PALETTE if theme_value == Theme.LIGHT.value else DARK_PALETTE
