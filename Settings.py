"""Persistent user settings stored as JSON in the home directory."""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from EditorLogic import DEFAULT_INDENT_UNIT
from Theme import Theme

logger = logging.getLogger(__name__)

SETTINGS_PATH = Path.home() / ".datalogpad.json"

INDENT_WIDTH_CHOICES = (2, 4, 8)

DEFAULTS: Dict[str, Any] = {
	"theme": Theme.DARK.value,
	"font_size": 13,
	"word_wrap": True,
	"indent_width": DEFAULT_INDENT_UNIT,
}


def _validated(data: Dict[str, Any]) -> Dict[str, Any]:
	if data.get("theme") not in (Theme.DARK.value, Theme.LIGHT.value):
		data["theme"] = DEFAULTS["theme"]
	for key in ("font_size", "indent_width"):
		value = data.get(key)
		if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
			logger.warning("Invalid setting %s=%r, using %r", key, value, DEFAULTS[key])
			data[key] = DEFAULTS[key]
	if not isinstance(data.get("word_wrap"), bool):
		logger.warning("Invalid setting word_wrap=%r, using %r", data.get("word_wrap"), DEFAULTS["word_wrap"])
		data["word_wrap"] = DEFAULTS["word_wrap"]
	return data


def load_settings(path: Path = SETTINGS_PATH) -> Dict[str, Any]:
	"""Load settings from disk. Returns a dict with every key of DEFAULTS."""
	if not path.exists():
		return dict(DEFAULTS)
	try:
		with open(path, "r", encoding="utf-8") as fh:
			data = json.load(fh)
	except (OSError, json.JSONDecodeError) as e:
		logger.warning("Could not read settings from %s: %s", path, e)
		return dict(DEFAULTS)
	if not isinstance(data, dict):
		logger.warning("Settings file %s does not hold an object, ignoring it", path)
		return dict(DEFAULTS)
	for k, v in DEFAULTS.items():
		data.setdefault(k, v)
	return _validated(data)


def save_settings(settings: Dict[str, Any], path: Path = SETTINGS_PATH) -> bool:
	try:
		with open(path, "w", encoding="utf-8") as fh:
			json.dump(settings, fh, indent=2)
	except OSError:
		logger.exception("Could not save settings to %s", path)
		return False
	return True
