# resolver.py – style names of every directly imported stylesheet (async fan-out)

import asyncio
import os
from typing import List, MutableMapping, Optional

import anyio

from cursor import (
    QUOTES,
    get_style_name_at_point,
    is_inside_string,
    is_style_name_value,
)
from handler_base import (
    Location,
    ResolvedDefinition,
    error,
    find_position,
    line_at,
)
from handler_css import scan_selectors
from handler_js import scan_imports

TRIGGER_CHARACTERS = QUOTES + (" ",)


def normalise(path: str) -> str:
    return os.path.abspath(os.path.expanduser(path))


async def read_text_async(path: str) -> str:
    return await anyio.Path(path).read_text(encoding="utf-8", errors="replace")


class DefinitionResolver:
    """Resolves style names against the stylesheets a source file imports.

    ``open_buffers`` maps absolute paths to live (possibly unsaved) text. It
    belongs to the host; the resolver only reads it. Nothing is cached: each
    call rescans every imported stylesheet.
    """

    def __init__(self, open_buffers: Optional[MutableMapping[str, str]] = None):
        self.open_buffers = open_buffers if open_buffers is not None else {}

    async def load_text(self, path: str) -> str:
        path = normalise(path)
        if path in self.open_buffers:
            return self.open_buffers[path]
        return await read_text_async(path)

    async def _definitions_for(self, fullpath: str) -> List[ResolvedDefinition]:
        try:
            css = await self.load_text(fullpath)
        except OSError as exc:
            error(f"Cannot read stylesheet {fullpath}: {exc}")
            return []
        return [
            ResolvedDefinition(fullpath, occ.style_name, occ.position)
            for occ in scan_selectors(css)
        ]

    async def resolve_definitions(
        self, source: str, source_path: str
    ) -> List[ResolvedDefinition]:
        base = os.path.dirname(normalise(source_path))
        results = await asyncio.gather(
            *(
                self._definitions_for(normalise(os.path.join(base, ref.path)))
                for ref in scan_imports(source)
            )
        )
        return [d for per_file in results for d in per_file]

    # ------------------------------------------------ completion
    async def complete(
        self, source: str, source_path: str, line: int, character: int
    ) -> List[str]:
        text = line_at(source, line)
        if text is None or character < 1 or character > len(text):
            return []
        if text[character - 1] not in TRIGGER_CHARACTERS:
            return []
        target = text[:character]
        if not is_style_name_value(target) or not is_inside_string(target):
            return []
        definitions = await self.resolve_definitions(source, source_path)
        return [d.style_name for d in definitions]

    # ------------------------------------------------ definition jump
    async def find_definition(
        self, source: str, source_path: str, line: int, character: int
    ) -> Optional[Location]:
        text = line_at(source, line)
        if text is None or not is_style_name_value(text[:character]):
            return None
        style_name = get_style_name_at_point(text, character)
        if style_name is None:
            return None
        definitions = await self.resolve_definitions(source, source_path)
        definition = next(
            (d for d in definitions if d.style_name == style_name), None
        )
        if definition is None:
            return None
        # position comes from the file on disk, not the open buffer
        try:
            raw = await read_text_async(definition.path)
        except OSError as exc:
            error(f"Cannot read stylesheet {definition.path}: {exc}")
            return None
        return Location(
            definition.path, find_position(raw, f".{definition.style_name}")
        )
