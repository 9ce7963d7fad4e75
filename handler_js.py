# handler_js.py – stylesheet imports + Tree-sitter styleName usages for JS / JSX / TSX

import re
from pathlib import Path
from typing import Dict, List, Optional

from tree_sitter import Parser
from tree_sitter_language_pack import get_language

from handler_base import SOURCE_LANGUAGES, BaseHandler, ImportReference, Thing

# import './a.css' | from "./a.scss" | require(`./a.sass`)
_import = re.compile(
    r"(import\s+|from\s+|require\(\s*)[\"'`](.*?\.(?:(?:s|p)?css|sass))[\"'`]"
)


def scan_imports(source: str) -> List[ImportReference]:
    return [ImportReference(m.group(2), m.start()) for m in _import.finditer(source)]


# --------------------------------------------------------------------------- #
#  One parser per grammar, created on first use
# --------------------------------------------------------------------------- #
_PARSERS: Dict[str, Parser] = {}


def _parser(lang: str) -> Parser:
    if lang not in _PARSERS:
        _PARSERS[lang] = Parser(get_language(lang))
    return _PARSERS[lang]


# --------------------------------------------------------------------------- #
#  DFS walk
# --------------------------------------------------------------------------- #
def _walk(node):
    yield node
    for child in node.children:
        yield from _walk(child)


def _style_name_values(root_node):
    """Yield the quoted value node of every ``styleName="..."`` attribute."""
    for node in _walk(root_node):
        if node.type != "jsx_attribute" or not node.named_children:
            continue
        name_node = node.named_children[0]
        if name_node.text != b"styleName":
            continue
        for value in node.named_children[1:]:
            if value.type == "string":
                yield value


def import_nodes(source: str) -> Dict[str, Thing]:
    """Outline nodes spanning each import path, keyed by path and offset."""
    nodes: Dict[str, Thing] = {}
    for m in _import.finditer(source):
        path = m.group(2)
        nodes[f"{path}@{m.start(2)}"] = Thing(path, (m.start(2), m.end(2)))
    return nodes


def _char_column(text_bytes: bytes, byte_offset: int) -> int:
    before = text_bytes[:byte_offset].decode("utf8", errors="replace")
    return len(before) - (before.rfind("\n") + 1)


# --------------------------------------------------------------------------- #
#  Concrete handler
# --------------------------------------------------------------------------- #
class SourceHandler(BaseHandler):
    kind = "source"

    @classmethod
    def parse(cls, fpath: Path, text: Optional[str] = None):
        h = cls(fpath, text)
        h.imports = scan_imports(h.text)
        h.usages = []
        h.structure.children.update(import_nodes(h.text))

        lang = SOURCE_LANGUAGES[h.file_path.suffix.lower()]
        text_bytes = h.text.encode("utf8")
        tree = _parser(lang).parse(text_bytes)

        for value in _style_name_values(tree.root_node):
            row = value.start_point[0]
            # character column just past the opening quote
            col = _char_column(text_bytes, value.start_byte) + 1
            inner = value.text[1:-1].decode("utf8", errors="replace")
            for m in re.finditer(r"\S+", inner):
                h.usages.append(
                    {"styleName": m.group(0), "line": row, "column": col + m.start()}
                )
        return h

    def outline(self) -> dict:
        return {
            **super().outline(),
            "imports": [ref.to_dict() for ref in self.imports],
            "usages": self.usages,
        }
