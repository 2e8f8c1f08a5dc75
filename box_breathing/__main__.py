#!/usr/bin/env python3
"""
Box Breathing — guided breathing exercise
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

Usage:
    python -m box_breathing
    python -m box_breathing --background beach --theme dark
    python -m box_breathing --make-icon .    (write icon.ico / icon.png and exit)
"""
from __future__ import annotations

import argparse
import sys
from typing import Optional

from box_breathing import __version__
from box_breathing.backgrounds import BACKGROUNDS
from box_breathing.config import THEMES, load_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="box-breathing",
                                     description="Guided box breathing program")
    parser.add_argument("--config", metavar="PATH", help="Settings file to read and write")
    parser.add_argument("--background", choices=[b["id"] for b in BACKGROUNDS],
                        help="Pre-select a background scene")
    parser.add_argument("--theme", choices=sorted(THEMES), help="Colour theme")
    parser.add_argument("--no-tray", action="store_true", help="Don't show a tray icon")
    parser.add_argument("--make-icon", metavar="DIR", help="Write icon.ico and icon.png to DIR and exit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def cli_overrides(args: argparse.Namespace) -> dict[str, Optional[str]]:
    """Settings chosen on the command line; used for this run only, never saved."""
    return {"background": args.background, "theme": args.theme}


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.make_icon:
        from box_breathing.icon import generate_icon
        try:
            paths = generate_icon(args.make_icon)
        except OSError as e:
            print(f"  [X] Could not write icons: {e}")
            return 1
        print(f"  [OK] Generated {', '.join(paths)}")
        return 0

    config = load_config(args.config)

    try:
        from box_breathing.app import BoxBreathingApp
    except ImportError:
        print("Error: tkinter is required.")
        print("  sudo apt install python3-tk  (or use the python.org installer)")
        return 1

    BoxBreathingApp(config, config_path=args.config, use_tray=not args.no_tray,
                    overrides=cli_overrides(args)).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
