#!/usr/bin/env python3
"""sheetmap command line.

Usage:
    sheetmap build [--points-url URL] [--shapes-url URL] [-o map.html]
    sheetmap serve [--host HOST] [--port PORT]

Options not given on the command line come from SHEETMAP_* environment
variables or .env (see app.config.Settings).
"""
from __future__ import annotations

import argparse
import asyncio
import sys

from loguru import logger

from sheetmap.errors import SheetSourceError


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="sheetmap", description=__doc__.splitlines()[0])
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="write the map as a standalone HTML file")
    build.add_argument("--points-url", help="published CSV of points")
    build.add_argument("--shapes-url", help="published CSV of shapes")
    build.add_argument("--marker-type", choices=["marker", "circleMarker", "circle"])
    build.add_argument("--marker-radius", type=float)
    build.add_argument("-o", "--output", default="map.html", help="output file (default: map.html)")

    serve = sub.add_parser("serve", help="run the web app")
    serve.add_argument("--host")
    serve.add_argument("--port", type=int)
    serve.add_argument("--reload", action="store_true", help="auto-reload on code changes")
    return p.parse_args(argv)


def _settings(args: argparse.Namespace):
    from app.config import Settings

    overrides = {}
    for key in ("points_url", "shapes_url", "marker_type", "marker_radius", "host", "port"):
        value = getattr(args, key, None)
        if value is not None:
            overrides[key] = value
    return Settings(**overrides)


def build(args: argparse.Namespace) -> int:
    from sheetmap.options import MapSettings
    from sheetmap.render import save_html
    from sheetmap.source import SheetSource, load_view

    cfg = _settings(args)
    source = SheetSource(cfg.points_url, shapes_url=cfg.shapes_url, timeout=cfg.fetch_timeout)
    try:
        view = asyncio.run(load_view(source, MapSettings.from_settings(cfg)))
    except SheetSourceError as e:
        logger.error(f"Could not load sheet: {e}")
        return 1
    save_html(view, args.output)
    return 0


def serve(args: argparse.Namespace) -> int:
    import uvicorn

    cfg = _settings(args)
    uvicorn.run("app.main:app", host=cfg.host, port=cfg.port, reload=args.reload)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "INFO")
    if args.command == "build":
        return build(args)
    return serve(args)


if __name__ == "__main__":
    sys.exit(main())
