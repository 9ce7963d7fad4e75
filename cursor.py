# cursor.py – is the cursor inside a styleName="..." value?

import re
from typing import Optional

QUOTES = ('"', "'", "`")
PROP_NAME = "styleName"

_identifier = re.compile(r"-?[_a-zA-Z]+[_a-zA-Z0-9\-]*")


# `target` is the line text strictly before the cursor
def is_style_name_value(target: str) -> bool:
    eq = target.rfind("=")
    if eq < len(PROP_NAME):
        return False
    return target[eq - len(PROP_NAME) : eq] == PROP_NAME


def get_nearest_beginning_quote(target: str) -> Optional[str]:
    position, quote = max((target.rfind(q), q) for q in QUOTES)
    return quote if position != -1 else None


def is_inside_string(target: str, char: Optional[str] = None) -> bool:
    eq = target.rfind("=")
    if eq == -1:
        return False
    test = target[eq:]
    quote = char or get_nearest_beginning_quote(test)
    if not quote:
        return False
    # odd number of quotes since '=' → an unclosed string is open
    hits = len(test.split(quote))
    return hits >= 2 and hits % 2 == 0


def get_style_name_at_point(target: str, point: int) -> Optional[str]:
    for m in _identifier.finditer(target):
        if m.start() <= point <= m.end():
            return m.group(0)
    return None
