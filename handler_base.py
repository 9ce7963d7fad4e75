# handler_base.py – common helpers, value types + handler factory (char-accurate)

import sys
from pathlib import Path
from typing import Dict, Optional, Tuple

STYLESHEET_SUFFIXES = (".css", ".scss", ".sass", ".pcss")
SOURCE_LANGUAGES = {
    ".tsx": "tsx",
    ".jsx": "javascript",
    ".js": "javascript",
}


# ----- helpers ---------------------------------------------------------------
def error(msg: str):
    print(msg, file=sys.stderr, flush=True)


def read_text(fpath: Path) -> str:
    return Path(fpath).read_text(encoding="utf-8", errors="replace")


def line_at(text: str, line: int) -> Optional[str]:
    """Text of a 0-based line without its terminator, or None past EOF."""
    lines = text.split("\n")
    if line < 0 or line >= len(lines):
        return None
    return lines[line].removesuffix("\r")


# ----- value types -----------------------------------------------------------
class ImportReference:
    def __init__(self, path: str, position: int):
        self.path = path  # raw, as written in source
        self.position = position  # offset of the import keyword

    def to_dict(self):
        return {"path": self.path, "position": self.position}


class StyleNameOccurrence:
    def __init__(self, style_name: str, position: int):
        self.style_name = style_name
        self.position = position  # offset of the identifier, after the '.'

    def to_dict(self):
        return {"styleName": self.style_name, "position": self.position}


class ResolvedDefinition:
    def __init__(self, path: str, style_name: str, position: int):
        self.path = path  # absolute
        self.style_name = style_name
        self.position = position

    def to_dict(self):
        return {
            "path": self.path,
            "styleName": self.style_name,
            "position": self.position,
        }


class TextPosition:
    def __init__(self, line: int, column: int):
        self.line = line  # 0-based
        self.column = column  # 0-based

    def __eq__(self, other):
        if not isinstance(other, TextPosition):
            return NotImplemented
        return (self.line, self.column) == (other.line, other.column)

    def __repr__(self):
        return f"TextPosition(line={self.line}, column={self.column})"

    def to_dict(self):
        return {"line": self.line, "column": self.column}


class Location:
    def __init__(self, path: str, position: TextPosition):
        self.path = path
        self.position = position

    def to_dict(self):
        return {"path": self.path, **self.position.to_dict()}


# ----- position mapping ------------------------------------------------------
def find_position(haystack: str, needle: str) -> TextPosition:
    """Line/column of the first ``needle`` in ``haystack``.

    Falls back to (0, 0) when the needle is absent, so callers cannot tell a
    miss from a real hit at the origin. Only ``\\n`` breaks lines.
    """
    index = haystack.find(needle)
    if index == -1:
        return TextPosition(0, 0)
    line = 0
    line_start = 0
    while True:
        brk = haystack.find("\n", line_start)
        if brk == -1 or index <= brk:
            break
        line_start = brk + 1
        line += 1
    return TextPosition(line, index - line_start)


# ----- core node -------------------------------------------------------------
class Thing:
    def __init__(self, name: str, span: Tuple[int, int]):
        self.name = name  # style name, import path or usage
        self.span = span  # (start_char, end_char)
        self.children: Dict[str, "Thing"] = {}

    def to_dict(self):
        return {
            "name": self.name,
            "span": self.span,
            "children": {k: v.to_dict() for k, v in self.children.items()},
        }


# ----- abstract handler ------------------------------------------------------
class BaseHandler:
    kind = "generic"

    # text comes from an open buffer when given, else from disk
    def __init__(self, fpath: Path, text: Optional[str] = None):
        self.file_path = Path(fpath)
        self.text: str = read_text(self.file_path) if text is None else text
        self.structure: Thing = Thing(".", (0, len(self.text)))

    def outline(self) -> dict:
        return {"kind": self.kind, "structure": self.structure.to_dict()}

    # subclasses must implement parse -----------------------------------------
    @classmethod
    def parse(cls, fpath: Path, text: Optional[str] = None) -> "BaseHandler":
        raise NotImplementedError


# ----- generic fallback ------------------------------------------------------
class GenericHandler(BaseHandler):
    @classmethod
    def parse(cls, fpath: Path, text: Optional[str] = None):
        return cls(fpath, text)


# ----- factory ---------------------------------------------------------------
def get_handler_for(fpath: Path, text: Optional[str] = None) -> BaseHandler:
    from handler_css import StylesheetHandler
    from handler_js import SourceHandler

    fpath = Path(fpath)
    ext = fpath.suffix.lower()
    try:
        if ext in STYLESHEET_SUFFIXES:
            return StylesheetHandler.parse(fpath, text)
        if ext in SOURCE_LANGUAGES:
            return SourceHandler.parse(fpath, text)
    except Exception as exc:  # ← swallow parser failures
        error(f"Parser failed for {fpath}: {exc}")

    return GenericHandler.parse(fpath, text)
