# test_handler_js.py – stylesheet imports + styleName usages

import unittest
from pathlib import Path

from handler_js import SourceHandler, _char_column, import_nodes, scan_imports


class ScanImportsTest(unittest.TestCase):
    def test_import_and_require(self):
        refs = scan_imports("import s from './a.scss'; require(\"./b.css\")")
        self.assertEqual([r.path for r in refs], ["./a.scss", "./b.css"])
        self.assertEqual([r.position for r in refs], [9, 26])

    def test_supported_extensions(self):
        src = "\n".join(
            [
                "import './a.css'",
                "import './b.pcss'",
                "import x from '../c.sass'",
                "const d = require(`./d.scss`)",
                "import e from './e.less'",
                "import f from './f.js'",
            ]
        )
        self.assertEqual(
            [r.path for r in scan_imports(src)],
            ["./a.css", "./b.pcss", "../c.sass", "./d.scss"],
        )

    def test_duplicates_are_kept(self):
        src = "import './a.css';\nimport './a.css';\n"
        self.assertEqual([r.path for r in scan_imports(src)], ["./a.css", "./a.css"])

    def test_no_imports(self):
        self.assertEqual(scan_imports("const x = 1;"), [])


class SourceHandlerTest(unittest.TestCase):
    SOURCE = (
        "import './s.css';\n"
        'export const A = () => <div styleName="btn btn-lg">x</div>;\n'
    )

    def test_outline(self):
        h = SourceHandler.parse(Path("/x/App.jsx"), self.SOURCE)
        out = h.outline()
        self.assertEqual(out["kind"], "source")
        self.assertEqual(out["imports"], [{"path": "./s.css", "position": 0}])
        self.assertEqual([u["styleName"] for u in out["usages"]], ["btn", "btn-lg"])
        self.assertEqual(out["usages"][0]["line"], 1)
        self.assertEqual(out["usages"][0]["column"], 39)

    def test_tsx_and_other_attributes(self):
        src = 'const B = (p: P) => <span className="a" styleName="b" />;\n'
        h = SourceHandler.parse(Path("/x/B.tsx"), src)
        self.assertEqual([u["styleName"] for u in h.usages], ["b"])

    def test_non_ascii_columns_are_characters(self):
        src = '<p title="é" styleName="a b" />\n'
        h = SourceHandler.parse(Path("/x/C.jsx"), src)
        self.assertEqual([(u["styleName"], u["column"]) for u in h.usages], [("a", 24), ("b", 26)])
        self.assertEqual(src[24], "a")


class ImportNodesTest(unittest.TestCase):
    def test_span_covers_the_path(self):
        src = "import s from './a.scss';\nrequire(\"./b.css\");\n"
        nodes = list(import_nodes(src).values())
        self.assertEqual([n.name for n in nodes], ["./a.scss", "./b.css"])
        for n in nodes:
            self.assertEqual(src[n.span[0] : n.span[1]], n.name)

    def test_duplicate_imports_keep_both_nodes(self):
        src = "import './a.css';\nimport './a.css';\n"
        nodes = list(import_nodes(src).values())
        self.assertEqual([n.span for n in nodes], [(8, 15), (26, 33)])


class CharColumnTest(unittest.TestCase):
    def test_counts_characters_on_current_line(self):
        text = "ab\nxé=y".encode("utf8")
        self.assertEqual(_char_column(text, text.index(b"=")), 2)
        self.assertEqual(_char_column(text, 0), 0)
