"""Language modes: which highlighter, comment prefix and indent unit a file gets."""

import fnmatch
import logging
from dataclasses import dataclass
from pathlib import PurePath
from typing import Callable, Dict, Optional, Tuple, Union

from DatalogHighlighter import DatalogHighlighter
from EditorLogic import DEFAULT_INDENT_UNIT
from Keywords import FILE_PATTERNS, LANGUAGE_NAME, LINE_COMMENT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LanguageMode:
	name: str
	file_patterns: Tuple[str, ...]
	line_comment: str
	indent_unit: int
	highlighter_factory: Callable


_MODES: Dict[str, LanguageMode] = {}


def register_mode(mode: LanguageMode) -> None:
	"""Register (or replace) a mode under its name."""
	if mode.name in _MODES:
		logger.debug("Replacing language mode %s", mode.name)
	_MODES[mode.name] = mode


def registered_modes() -> Tuple[LanguageMode, ...]:
	return tuple(_MODES.values())


def mode_for_path(path: Union[str, PurePath]) -> Optional[LanguageMode]:
	"""Первый зарегистрированный режим, чей шаблон совпадает с именем файла."""
	name = PurePath(path).name.lower()
	for mode in _MODES.values():
		if any(fnmatch.fnmatch(name, pattern.lower()) for pattern in mode.file_patterns):
			return mode
	return None


def default_mode() -> LanguageMode:
	return _MODES[LANGUAGE_NAME]


def file_dialog_filter() -> str:
	"""Filter string for QFileDialog, one entry per mode plus "All Files"."""
	entries = [f"{mode.name} Files ({' '.join(mode.file_patterns)})" for mode in _MODES.values()]
	entries.append("All Files (*.*)")
	return ";;".join(entries)


SCALLOP_MODE = LanguageMode(
	name=LANGUAGE_NAME,
	file_patterns=FILE_PATTERNS,
	line_comment=LINE_COMMENT,
	indent_unit=DEFAULT_INDENT_UNIT,
	highlighter_factory=DatalogHighlighter,
)

register_mode(SCALLOP_MODE)
