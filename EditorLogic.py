from __future__ import annotations

"""
Эти функции не зависят от Qt и могут использоваться и
тестироваться отдельно от GUI. CodeEditor делегирует им
вычисление отступов и комментирование строк.

Indentation works in two steps: a lexical scan gives the bracket
nesting depth at the start of a line, then the first matching rule
from INDENT_RULES shifts that base by a number of indent units.
"""

import re
from dataclasses import dataclass
from typing import Callable, Final, List, NamedTuple, Optional, Sequence, Tuple

from Keywords import (
    BLOCK_COMMENT_END,
    BLOCK_COMMENT_START,
    CLOSE_BRACKETS,
    CONNECTIVES,
    LINE_COMMENT,
    OPEN_BRACKETS,
    RULE_MARKERS,
    SUBTYPE_MARKER,
)

DEFAULT_INDENT_UNIT: Final[int] = 2
DEFAULT_TAB_WIDTH: Final[int] = 8


@dataclass(frozen=True)
class IndentConfig:
    """Columns per nesting level and the width used to measure tabs."""

    indent_unit: int = DEFAULT_INDENT_UNIT
    tab_width: int = DEFAULT_TAB_WIDTH


DEFAULT_CONFIG: Final[IndentConfig] = IndentConfig()


# --- Lexical scan -----------------------------------------------------------


class ScanState(NamedTuple):
    """Lexical state at a line boundary."""

    depth: int = 0
    in_block_comment: bool = False


INITIAL_STATE: Final[ScanState] = ScanState()


def scan_line(line: str, state: ScanState = INITIAL_STATE) -> Tuple[ScanState, str]:
    """Scan one line starting from ``state``.

    Returns the state at the end of the line and the line's code text:
    comment text is dropped and string bodies are blanked, so brackets
    and markers inside them are never seen by the caller. Positions in
    the code text match positions in ``line`` up to the first line comment.
    """
    depth = state.depth
    in_comment = state.in_block_comment
    code: List[str] = []
    i = 0
    n = len(line)
    while i < n:
        if in_comment:
            if line.startswith(BLOCK_COMMENT_END, i):
                in_comment = False
                code.append(" " * len(BLOCK_COMMENT_END))
                i += len(BLOCK_COMMENT_END)
            else:
                code.append(" ")
                i += 1
            continue

        if line.startswith(LINE_COMMENT, i):
            break
        if line.startswith(BLOCK_COMMENT_START, i):
            in_comment = True
            code.append(" " * len(BLOCK_COMMENT_START))
            i += len(BLOCK_COMMENT_START)
            continue

        ch = line[i]
        if ch == '"':
            # Строки не переносятся: незакрытая строка заканчивается в конце строки
            j = i + 1
            while j < n and line[j] != '"':
                j += 2 if line[j] == "\\" else 1
            if j < n:
                code.append('"' + " " * (j - i - 1) + '"')
                i = j + 1
            else:
                code.append('"' + " " * (n - i - 1))
                i = n
            continue

        if ch in OPEN_BRACKETS:
            depth += 1
        elif ch in CLOSE_BRACKETS and depth > 0:
            depth -= 1
        code.append(ch)
        i += 1

    return ScanState(depth, in_comment), "".join(code)


class DepthCache:
    """End-of-line scan states, filled lazily from the top of the document.

    The editor calls ``invalidate`` with the first changed line after every
    edit; states above it stay valid and act as the resume point.
    """

    def __init__(self) -> None:
        self._states: List[ScanState] = []

    def __len__(self) -> int:
        return len(self._states)

    def invalidate(self, from_line: int = 0) -> None:
        del self._states[max(0, from_line):]

    def state_before(self, lines: Sequence[str], index: int) -> ScanState:
        """Return the scan state at the start of line ``index``."""
        index = max(0, min(index, len(lines)))
        while len(self._states) < index:
            k = len(self._states)
            previous = self._states[-1] if self._states else INITIAL_STATE
            state, _ = scan_line(lines[k], previous)
            self._states.append(state)
        return self._states[index - 1] if index > 0 else INITIAL_STATE

    def code_text(self, lines: Sequence[str], index: int) -> str:
        """Code text of line ``index`` (comments removed, strings blanked)."""
        if index < 0 or index >= len(lines):
            return ""
        _, code = scan_line(lines[index], self.state_before(lines, index))
        return code


def nesting_depth(lines: Sequence[str], index: int, cache: Optional[DepthCache] = None) -> int:
    """Number of unmatched open brackets enclosing the start of line ``index``."""
    cache = cache if cache is not None else DepthCache()
    return cache.state_before(lines, index).depth


# --- Line classification ----------------------------------------------------


class LineContext(NamedTuple):
    text: str
    previous: str


@dataclass(frozen=True)
class IndentRule:
    """One classification rule: ``delta`` indent units added to the base."""

    name: str
    matches: Callable[[LineContext], bool]
    delta: int


def _alternatives(tokens: Sequence[str]) -> str:
    return "|".join(re.escape(token) for token in tokens)


_RULE_MARKER = _alternatives(RULE_MARKERS)
_CONNECTIVE = r"\b(?:" + _alternatives(CONNECTIVES) + r")"

_STARTS_WITH_CLOSING = re.compile(r"^[)}]")
_STARTS_WITH_SUBTYPE = re.compile("^" + re.escape(SUBTYPE_MARKER))
_STARTS_WITH_RULE_DEFINITION = re.compile("^" + re.escape(RULE_MARKERS[0]))
_ENDS_WITH_CONTINUATION = re.compile(r"(?:" + _RULE_MARKER + "|" + _CONNECTIVE + r"|,)$")
_STARTS_WITH_CONTINUATION = re.compile(r"^(?:" + _RULE_MARKER + "|" + _CONNECTIVE + r"\b)")


# Порядок важен: срабатывает первое подходящее правило
INDENT_RULES: Final[Tuple[IndentRule, ...]] = (
    IndentRule("closing-bracket", lambda ctx: bool(_STARTS_WITH_CLOSING.match(ctx.text)), -1),
    IndentRule("subtype", lambda ctx: bool(_STARTS_WITH_SUBTYPE.match(ctx.text)), 2),
    IndentRule("rule-definition", lambda ctx: bool(_STARTS_WITH_RULE_DEFINITION.match(ctx.text)), 2),
    IndentRule("after-continuation", lambda ctx: bool(_ENDS_WITH_CONTINUATION.search(ctx.previous)), 2),
    IndentRule("continuation", lambda ctx: bool(_STARTS_WITH_CONTINUATION.match(ctx.text)), 2),
    IndentRule("base", lambda ctx: True, 0),
)


def _previous_code(lines: Sequence[str], index: int, cache: DepthCache) -> str:
    # Пустые строки и строки из одних комментариев пропускаем
    for k in range(min(index, len(lines)) - 1, -1, -1):
        code = cache.code_text(lines, k).strip()
        if code:
            return code
    return ""


def line_context(lines: Sequence[str], index: int, cache: Optional[DepthCache] = None) -> LineContext:
    cache = cache if cache is not None else DepthCache()
    return LineContext(cache.code_text(lines, index).strip(), _previous_code(lines, index, cache))


def classify_line(lines: Sequence[str], index: int, cache: Optional[DepthCache] = None) -> IndentRule:
    """Return the first rule of INDENT_RULES that matches line ``index``."""
    ctx = line_context(lines, index, cache)
    return next(rule for rule in INDENT_RULES if rule.matches(ctx))


def compute_indent(
    lines: Sequence[str],
    index: int,
    config: IndentConfig = DEFAULT_CONFIG,
    cache: Optional[DepthCache] = None,
) -> int:
    """Target indentation column for line ``index``.

    Only lines up to ``index`` are read. Never fails and never returns a
    negative column: unbalanced or half-typed input falls back to the
    nesting-depth base.
    """
    cache = cache if cache is not None else DepthCache()
    base = nesting_depth(lines, index, cache) * config.indent_unit
    rule = classify_line(lines, index, cache)
    return max(0, base + rule.delta * config.indent_unit)


# --- Applying an indent -----------------------------------------------------


def indent_column(line: str, tab_width: int = DEFAULT_TAB_WIDTH) -> int:
    """Visual width of the line's leading whitespace."""
    column = 0
    for ch in line:
        if ch == " ":
            column += 1
        elif ch == "\t":
            column = (column // tab_width + 1) * tab_width
        else:
            break
    return column


def reindent_line(line: str, column: int, target: int, config: IndentConfig = DEFAULT_CONFIG) -> Tuple[str, int]:
    """Replace the leading whitespace of ``line`` so it starts at ``target``.

    Returns the new line and the new cursor column. A cursor inside the
    text keeps its distance from the end of the line; a cursor inside the
    old indentation lands right after the new one. When the line already
    sits at ``target`` both values are returned unchanged.
    """
    target = max(0, target)
    column = max(0, min(column, len(line)))
    if indent_column(line, config.tab_width) == target:
        return line, column

    content = line.lstrip(" \t")
    leading = len(line) - len(content)
    new_line = " " * target + content
    if column <= leading:
        return new_line, target
    return new_line, len(new_line) - (len(line) - column)


def reindent_text(text: str, config: IndentConfig = DEFAULT_CONFIG) -> str:
    """Reindent every line from top to bottom. Whitespace-only lines are emptied."""
    lines = text.split("\n")
    cache = DepthCache()
    for index, line in enumerate(lines):
        if not line.strip():
            # CRLF: "\r" остаётся, чтобы не смешивать окончания строк
            lines[index] = "\r" if line.endswith("\r") else ""
            continue
        # Отступ не влияет на лексическое состояние, кэш остаётся верным
        target = compute_indent(lines, index, config, cache)
        lines[index], _ = reindent_line(line, 0, target, config)
    return "\n".join(lines)


# --- Other editing helpers --------------------------------------------------


def unindent_line(line: str, indent_unit: str = " " * DEFAULT_INDENT_UNIT) -> str:
    """Вернуть строку без одного уровня indent_unit в начале (если он есть)."""
    if line.startswith(indent_unit):
        return line[len(indent_unit) :]
    if line.startswith("\t"):
        return line[1:]
    return line


def toggle_line_comment(lines: Sequence[str], prefix: str = LINE_COMMENT) -> List[str]:
    """Comment out ``lines`` or, if all of them are commented already, uncomment them.

    Blank lines are left alone. The prefix is inserted at the smallest
    indentation among the non-blank lines, followed by one space.
    """
    non_blank = [line for line in lines if line.strip()]
    if not non_blank:
        return list(lines)

    if all(line.lstrip().startswith(prefix) for line in non_blank):
        result = []
        for line in lines:
            if not line.strip():
                result.append(line)
                continue
            start = line.index(prefix)
            rest = line[start + len(prefix) :]
            if rest.startswith(" "):
                rest = rest[1:]
            result.append(line[:start] + rest)
        return result

    column = min(len(line) - len(line.lstrip()) for line in non_blank)
    return [line[:column] + prefix + " " + line[column:] if line.strip() else line for line in lines]
