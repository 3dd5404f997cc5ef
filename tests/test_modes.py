from pathlib import Path

import Modes
from DatalogHighlighter import DatalogHighlighter
from Modes import SCALLOP_MODE, LanguageMode, default_mode, file_dialog_filter, mode_for_path, register_mode


def test_scallop_mode_is_default_and_configured() -> None:
    mode = default_mode()
    assert mode is SCALLOP_MODE
    assert mode.line_comment == "//"
    assert mode.indent_unit == 2
    assert mode.highlighter_factory is DatalogHighlighter


def test_mode_for_path_matches_extensions_case_insensitively() -> None:
    assert mode_for_path("rules.scl") is SCALLOP_MODE
    assert mode_for_path(Path("/tmp/project/RULES.SCL")) is SCALLOP_MODE


def test_mode_for_path_unknown_extension() -> None:
    assert mode_for_path("script.py") is None
    assert mode_for_path("scl") is None
    assert mode_for_path("rules.dl") is None


def test_file_dialog_filter_lists_modes_and_all_files() -> None:
    filters = file_dialog_filter().split(";;")
    assert "Scallop Files (*.scl)" in filters
    assert filters[-1] == "All Files (*.*)"


def test_registered_mode_is_selected_by_pattern(monkeypatch) -> None:
    monkeypatch.setattr(Modes, "_MODES", dict(Modes._MODES))
    toy = LanguageMode(
        name="Toy",
        file_patterns=("*.toy",),
        line_comment="%",
        indent_unit=4,
        highlighter_factory=DatalogHighlighter,
    )
    register_mode(toy)
    assert mode_for_path("a.toy") is toy
    assert mode_for_path("a.scl") is SCALLOP_MODE
    assert "Toy Files (*.toy)" in file_dialog_filter()
