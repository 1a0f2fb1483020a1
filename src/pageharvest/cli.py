# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Page Harvest CLI: capture and config commands.

Usage:
    python -m pageharvest.cli capture PAGE.html --url URL [--limit N] [--export-dir DIR] [--compact]
    python -m pageharvest.cli capture - --url URL < page.html
    python -m pageharvest.cli config [--limit N]

The HTML is read from a file or stdin; nothing is fetched over the network.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pageharvest.config import SettingsStore
from pageharvest.errors import HarvestError
from pageharvest.logging_config import configure
from pageharvest.session import CaptureSession
from pageharvest.snapshot import PageSnapshot


def _read_html(source: str) -> bytes:
    """Raw bytes so lxml can honour the document's own charset declaration."""
    if source == "-":
        return sys.stdin.buffer.read()
    path = Path(source)
    if not path.is_file():
        print(f"Error: no such file: {source}", file=sys.stderr)
        sys.exit(1)
    return path.read_bytes()


def cmd_capture(args: argparse.Namespace) -> None:
    """Capture one page and print the bounded JSON record."""
    store = SettingsStore(args.profile_dir)
    session = CaptureSession(store)
    if args.limit is not None:
        session.update_limit(args.limit)

    snapshot = PageSnapshot.from_html(_read_html(args.html), args.url)
    record = session.capture(snapshot)

    print(record.to_json() if args.compact else session.output)

    if args.export_dir:
        path = session.export(args.export_dir)
        print(f"Exported {path}", file=sys.stderr)


def cmd_config(args: argparse.Namespace) -> None:
    """Show or set the persisted size limit."""
    store = SettingsStore(args.profile_dir)
    if args.limit is not None:
        settings = store.set_limit(args.limit)
    else:
        settings = store.load()
    print(f"limit_chars = {settings.limit_chars}  ({store.path})")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Export a page's public metadata as bounded-size JSON",
        prog="python -m pageharvest.cli",
    )
    parser.add_argument("--log-json", action="store_true", help="Emit logs as JSON lines on stderr")
    parser.add_argument("--log-level", type=str, default="WARNING", metavar="LEVEL", help="Log level (default: WARNING)")
    parser.add_argument(
        "--profile-dir",
        type=str,
        metavar="DIR",
        default=None,
        help="Settings directory (default: ~/.pageharvest)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_capture = subparsers.add_parser(
        "capture",
        help="Capture a saved HTML page",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
examples:
  %(prog)s page.html --url https://www.reddit.com/r/python/comments/abc/
  %(prog)s - --url https://example.org/ < page.html
  %(prog)s page.html --url https://example.org/ --limit 2000 --export-dir out/""",
    )
    p_capture.add_argument("html", type=str, metavar="HTML", help="HTML file, or - for stdin")
    p_capture.add_argument("--url", type=str, required=True, metavar="URL", help="URL the page was loaded from")
    p_capture.add_argument("--limit", type=int, metavar="N", help="Max JSON size in chars (persisted)")
    p_capture.add_argument("--export-dir", type=str, metavar="DIR", help="Also write harvest_<host>_<ms>.json here")
    p_capture.add_argument("--compact", action="store_true", help="Print compact JSON instead of indented")

    p_config = subparsers.add_parser("config", help="Show or set the persisted size limit")
    p_config.add_argument("--limit", type=int, metavar="N", help="New max JSON size in chars")

    return parser


_COMMANDS = {"capture": cmd_capture, "config": cmd_config}


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure(json_output=args.log_json, level=args.log_level)

    try:
        _COMMANDS[args.command](args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(130)
    except HarvestError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
