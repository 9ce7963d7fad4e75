#!/usr/bin/env python3
# stylename_mcp.py
#
# THIS MCP EXPOSES *ONLY* stylename_* TOOLS — DO NOT STRIP THE PREFIX.
#
# ─────────────────────────────────────────────────────────────────────────────
#  WORKFLOW
# ─────────────────────────────────────────────────────────────────────────────
# 1.  stylename_open_document    →   push the live text of an edited file.
# 2.  stylename_complete         →   candidates inside styleName="…".
# 3.  stylename_definition       →   where the class under the cursor lives.
# 4.  stylename_close_document   →   fall back to the file on disk.
# ─────────────────────────────────────────────────────────────────────────────

import asyncio
import json
import textwrap
import traceback
from pathlib import Path
from typing import Any, Dict, List, Optional

import mcp.server.stdio
import mcp.types as types
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions

from handler_base import SOURCE_LANGUAGES, error, get_handler_for
from resolver import DefinitionResolver, normalise

DEFAULT_CONFIG = {
    "server_name": "stylename-navigator",
    "source_extensions": tuple(SOURCE_LANGUAGES),
}


# --------------------------------------------------------------------------- #
#  MCP server
# --------------------------------------------------------------------------- #
class StyleNameMCPServer:
    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or Path(__file__).with_name("config.json")
        self.config: Dict[str, Any] = dict(DEFAULT_CONFIG)
        self.open_documents: Dict[str, str] = {}
        self.resolver = DefinitionResolver(self.open_documents)
        self.server = Server(self.config["server_name"])
        self._register_handlers()

    # ------------------------------------------------ configuration
    def _load_config(self):
        if not self.config_path.exists():
            return
        loaded = json.loads(self.config_path.read_text())
        if "server_name" in loaded:
            self.config["server_name"] = str(loaded["server_name"])
        if "source_extensions" in loaded:
            self.config["source_extensions"] = tuple(
                ext.lower() for ext in loaded["source_extensions"]
            )

    def _is_source(self, path: str) -> bool:
        return Path(path).suffix.lower() in self.config["source_extensions"]

    # ------------------------------------------------ open documents
    def _open_document(self, path: str, text: str):
        path = normalise(path)
        self.open_documents[path] = text
        return {"opened": path}

    def _close_document(self, path: str):
        path = normalise(path)
        self.open_documents.pop(path, None)
        return {"closed": path}

    def _list_documents(self):
        return {"documents": sorted(self.open_documents)}

    # ------------------------------------------------ requests
    async def _complete(self, path: str, line: int, character: int):
        if not self._is_source(path):
            return {"items": []}
        source = await self.resolver.load_text(path)
        names = await self.resolver.complete(source, path, line, character)
        return {"items": [{"label": n, "kind": "variable"} for n in names]}

    async def _definition(self, path: str, line: int, character: int):
        if not self._is_source(path):
            return {"definition": None}
        source = await self.resolver.load_text(path)
        loc = await self.resolver.find_definition(source, path, line, character)
        return {"definition": loc.to_dict() if loc else None}

    async def _outline(self, path: str):
        path = normalise(path)
        text = self.open_documents.get(path)
        handler = get_handler_for(Path(path), text)
        return {"path": path, "outline": handler.outline()}

    # ------------------------------------------------ dispatch
    async def _dispatch(self, name: str, args: Dict[str, Any]):
        cmd = name.removeprefix("stylename_")
        if cmd == "guidelines":
            return {"guidelines": GUIDELINES}
        if cmd == "open_document":
            return self._open_document(args["path"], args["text"])
        if cmd == "close_document":
            return self._close_document(args["path"])
        if cmd == "list_documents":
            return self._list_documents()
        if cmd == "complete":
            return await self._complete(
                args["path"], int(args["line"]), int(args["character"])
            )
        if cmd == "definition":
            return await self._definition(
                args["path"], int(args["line"]), int(args["character"])
            )
        if cmd == "outline":
            return await self._outline(args["path"])
        return {"error": f"Unknown tool {name}"}

    async def _call(self, name: str, args: Any) -> List[types.TextContent]:
        try:
            res = await self._dispatch(name, args or {})
            return [types.TextContent(type="text", text=json.dumps(res, indent=2))]
        except Exception as exc:
            error(f"{name} failed: {exc}")
            return [
                types.TextContent(
                    type="text",
                    text=json.dumps(
                        {"error": str(exc), "trace": traceback.format_exc()},
                        indent=2,
                    ),
                )
            ]

    # ------------------------------------------------ tool registration
    def _register_handlers(self):
        def schema(*required, **props):
            return {"type": "object", "properties": props, "required": list(required)}

        path = {"type": "string", "description": "Absolute file path."}
        line = {"type": "integer", "description": "0-based line."}
        character = {"type": "integer", "description": "0-based column."}

        tools: Dict[str, tuple] = {
            "guidelines": (schema(), GUIDELINES),
            "open_document": (
                schema("path", "text", path=path, text={"type": "string"}),
                "Register the live, possibly unsaved, text of a file.",
            ),
            "close_document": (
                schema("path", path=path),
                "Forget live text; the file on disk is used again.",
            ),
            "list_documents": (schema(), "List files with live text."),
            "complete": (
                schema("path", "line", "character", path=path, line=line, character=character),
                "Style names offered inside a styleName=\"…\" value.",
            ),
            "definition": (
                schema("path", "line", "character", path=path, line=line, character=character),
                "Stylesheet location of the style name under the cursor.",
            ),
            "outline": (
                schema("path", path=path),
                "Style names of a stylesheet, or imports and styleName usages of a source file.",
            ),
        }

        @self.server.list_tools()
        async def list_tools():
            return [
                types.Tool(
                    name=f"stylename_{n}",
                    description=desc,
                    inputSchema=sch,
                )
                for n, (sch, desc) in tools.items()
            ]

        @self.server.call_tool()
        async def call_tool(name: str, args: Any):
            return await self._call(name, args)

    # ------------------------------------------------ run loop
    async def run(self):
        try:
            self._load_config()
        except (OSError, ValueError) as exc:
            error(f"Cannot load {self.config_path}: {exc}")
            return
        name = self.config["server_name"]
        self.server.name = name
        async with mcp.server.stdio.stdio_server() as (r, w):
            await self.server.run(
                r,
                w,
                InitializationOptions(
                    server_name=name,
                    server_version="1.0.0",
                    capabilities=self.server.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={},
                    ),
                ),
            )


GUIDELINES = textwrap.dedent(
    """
    ### stylename Guidelines

    • Paths are absolute; relative stylesheet imports resolve against the
      importing file's directory.
    • Call `stylename_open_document` whenever a buffer changes; open text wins
      over the file on disk for imported stylesheets and for the source.
    • Completion only fires right after `"`, `'`, `` ` `` or a space inside a
      `styleName` value of a .tsx/.jsx/.js file.
    • A definition whose class text cannot be found points at line 0, column 0.
    """
).strip()


async def main():
    await StyleNameMCPServer().run()


def cli():
    asyncio.run(main())


if __name__ == "__main__":
    cli()
