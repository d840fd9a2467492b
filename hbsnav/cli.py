from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List

from .errors import HbsUserError
from .navigator import PartialNavigator
from .template import PathParser, split_segments
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="hbsnav",
        description="Handlebars partial-path navigator (diagnostics)",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_root(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--root",
            type=Path,
            default=None,
            help="project base directory (default: current directory)",
        )

    sp_roots = sub.add_parser("roots", help="resolution roots in priority order (JSON)")
    add_root(sp_roots)

    sp_resolve = sub.add_parser("resolve", help="resolve every segment of a partial path (JSON)")
    sp_resolve.add_argument("path", help="partial path as written after {{>, e.g. components/header")
    add_root(sp_resolve)

    sp_complete = sub.add_parser("complete", help="completion candidates for a path typed so far (JSON)")
    sp_complete.add_argument("typed", nargs="?", default="", help="e.g. 'components/he' or 'components/'")
    add_root(sp_complete)

    sp_segments = sub.add_parser("segments", help="all known segment paths under the roots (JSON)")
    sp_segments.add_argument("--max-depth", type=int, default=None, help="directory depth limit")
    add_root(sp_segments)

    return p


def _setup_logging() -> None:
    level = logging.DEBUG if os.environ.get("HBSNAV_DEBUG") else logging.WARNING
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _posix(path: Path) -> str:
    return path.as_posix()


def _resolve_report(nav: PartialNavigator, raw: str) -> Dict[str, Any]:
    segments = split_segments(raw)
    rows: List[Dict[str, Any]] = []
    for idx, seg in enumerate(segments):
        terminal = idx == len(segments) - 1
        entry = nav.resolve_segment(segments, idx, terminal)
        rows.append({
            "segment": seg,
            "terminal": terminal,
            "target": _posix(entry.path) if entry else None,
            "directory": entry.is_directory if entry else None,
        })
    return {"path": raw, "segments": rows}


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging()

    root = (ns.root or Path.cwd())
    try:
        with PartialNavigator.open(root) as nav:
            data: Dict[str, Any]
            if ns.cmd == "roots":
                data = {"roots": [_posix(r.path) for r in nav.roots()]}
            elif ns.cmd == "resolve":
                data = _resolve_report(nav, ns.path)
            elif ns.cmd == "complete":
                traverse, fragment = PathParser.split_for_completion(ns.typed)
                data = {
                    "traverse": list(traverse),
                    "fragment": fragment,
                    "candidates": [
                        {"name": c.name, "kind": c.kind.value, "path": _posix(c.path)}
                        for c in nav.complete(traverse, fragment)
                    ],
                }
            elif ns.cmd == "segments":
                data = {"segments": nav.collect_all_segments_under_roots(ns.max_depth)}
            else:
                raise ValueError(f"Unknown command: {ns.cmd}")
    except HbsUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    sys.stdout.write(json.dumps(data, ensure_ascii=False, indent=2) + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
