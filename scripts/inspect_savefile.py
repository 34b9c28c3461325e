#!/usr/bin/env python3
"""Inspect a pyretain save file.

Loads the save file the same way the window manager would and prints, per
screen, the tag names and the layouts they resolve to. Layout names that
are not in the known layout list are flagged.

Usage
-----
::

    python scripts/inspect_savefile.py                     # default save file
    python scripts/inspect_savefile.py ~/.config/awesome/.retained
    python scripts/inspect_savefile.py --layouts tile,max --json

Options::

    --layouts a,b,c     Registered layout names (default: awesome's suits)
    --json              Output as machine-readable JSON
    --verbose, -v       Enable debug logging
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyretain import Notification, RetainConfig, SequenceLayoutRegistry, StateStore  # noqa: E402

AWESOME_LAYOUTS: tuple[str, ...] = (
    "floating",
    "tile",
    "tileleft",
    "tilebottom",
    "tiletop",
    "fairv",
    "fairh",
    "spiral",
    "dwindle",
    "max",
    "fullscreen",
    "magnifier",
    "cornernw",
)


@dataclass(frozen=True)
class NamedLayout:
    name: str


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def inspect(path: Path, layout_names: list[str]) -> tuple[dict[str, Any], list[str]]:
    """Load *path* and return ``(report, notifications)``."""
    messages: list[str] = []

    def _collect(notification: Notification) -> None:
        messages.append(notification.text)

    registry = SequenceLayoutRegistry(NamedLayout(name) for name in layout_names)
    store = StateStore(registry, config=RetainConfig(savefile=path), notifier=_collect)
    store.load()

    persisted = store.persisted
    screens: dict[str, Any] = {}
    for sid in store.screen_ids():
        record = persisted.get(sid)
        saved = [tag.layout_name for _, tag in record.ordered()] if record is not None else []
        layouts = store.get_layouts(sid)
        screens[str(sid)] = {
            "names": store.get_names(sid),
            "layouts": [layout.name if layout is not None else None for layout in layouts],
            "unresolved": [name for name, layout in zip(saved, layouts, strict=False) if layout is None],
        }
    return {"savefile": str(path), "screens": screens}, messages


def main() -> int:
    parser = argparse.ArgumentParser(description="Print the tags stored in a pyretain save file.")
    parser.add_argument("savefile", nargs="?", help="Save file (default: from RETAIN_SAVEFILE or config dir)")
    parser.add_argument(
        "--layouts",
        default=",".join(AWESOME_LAYOUTS),
        help="Comma separated registered layout names",
    )
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    path = Path(args.savefile).expanduser() if args.savefile else RetainConfig.from_env().savefile
    layout_names = [name.strip() for name in args.layouts.split(",") if name.strip()]
    report, messages = inspect(path, layout_names)

    if args.json_mode:
        report["notifications"] = messages
        print(json.dumps(report, indent=2, ensure_ascii=False))
    else:
        out = [_section(f"pyretain save file  {path}")]
        out.extend(f"  !! {message}" for message in messages)
        for sid, screen in report["screens"].items():
            out.append(f"\n  screen {sid}")
            for position, (name, layout) in enumerate(zip(screen["names"], screen["layouts"], strict=False), start=1):
                out.append(f"    {position:>2}. {name:<16} {layout or '<unresolved>'}")
        print("\n".join(out))

    return 1 if messages else 0


if __name__ == "__main__":
    sys.exit(main())
