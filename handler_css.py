# handler_css.py – char-offset class-selector finder (heuristic, not a parser)

import re
from pathlib import Path
from typing import List, Optional

from handler_base import BaseHandler, StyleNameOccurrence, Thing, find_position

# '.' + identifier, then an optional call-like tail ending in ')'. A present
# tail marks a CSS function argument (`:not(.x)`, `url(a.png)`), not a class.
_selector = re.compile(
    r"\.(-?[_a-zA-Z]+[_a-zA-Z0-9\-]*)([\w/:%#$&?()~.=+\-]*[\s\"']*?\))?",
    re.ASCII,
)


def scan_selectors(css: str) -> List[StyleNameOccurrence]:
    results: List[StyleNameOccurrence] = []
    seen = set()
    for m in _selector.finditer(css):
        name = m.group(1)
        if m.group(2) or name in seen:
            continue
        seen.add(name)
        results.append(StyleNameOccurrence(name, m.start(1)))
    return results


class StylesheetHandler(BaseHandler):
    kind = "stylesheet"

    @classmethod
    def parse(cls, fpath: Path, text: Optional[str] = None):
        h = cls(fpath, text)
        h.occurrences = scan_selectors(h.text)
        for occ in h.occurrences:
            end = occ.position + len(occ.style_name)
            h.structure.children[occ.style_name] = Thing(
                occ.style_name, (occ.position, end)
            )
        return h

    def outline(self) -> dict:
        names = []
        for occ in self.occurrences:
            pos = find_position(self.text, f".{occ.style_name}")
            names.append({**occ.to_dict(), **pos.to_dict()})
        return {**super().outline(), "styleNames": names}
