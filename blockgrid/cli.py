import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .diagram_components.config import RenderConfig
from .diagram_components.renderer import render
from .errors import DiagramError
from .formats import DECODERS, load, loads

EXIT_OK = 0
EXIT_DIAGRAM_ERROR = 1
EXIT_INPUT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blockgrid",
        description="Render a block diagram description (JSON or TOML) as ASCII text.",
    )
    parser.add_argument("path", help="diagram file, or '-' to read from stdin")
    parser.add_argument("--format", dest="fmt", choices=sorted(DECODERS), help="input format (default: from suffix)")
    parser.add_argument("--hmargin", type=int, default=5, help="gutter between columns")
    parser.add_argument("--vmargin", type=int, default=3, help="gutter between rows")
    parser.add_argument("--padding", type=int, default=0, help="padding around block text")
    parser.add_argument("--sparse", action="store_true", help="keep empty grid ranks as routing space")
    parser.add_argument("--style", default="ascii", choices=["ascii", "rounded"], help="box style")
    parser.add_argument("--no-labels", action="store_true", help="do not draw edge labels")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def _configure_logging(console: Console, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)],
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    console = Console(stderr=True)
    _configure_logging(console, args.verbose)

    try:
        if args.path == "-":
            diagram = loads(sys.stdin.read(), args.fmt or "json")
        else:
            diagram = load(args.path, args.fmt)
    except OSError as exc:
        console.print(f"[bold red]error:[/] cannot read {escape(args.path)}: {escape(str(exc))}")
        return EXIT_INPUT_ERROR
    except DiagramError as exc:
        console.print(f"[bold red]error:[/] {escape(str(exc))}")
        return EXIT_DIAGRAM_ERROR

    try:
        config = RenderConfig(
            hmargin=args.hmargin,
            vmargin=args.vmargin,
            padding=args.padding,
            compact=not args.sparse,
            box_style=args.style,
            draw_labels=not args.no_labels,
        )
        result = render(diagram, config)
    except DiagramError as exc:
        console.print(f"[bold red]error:[/] {escape(str(exc))}")
        return EXIT_DIAGRAM_ERROR

    sys.stdout.write(result.text + "\n")
    for warning in result.warnings:
        console.print(f"[yellow]warning:[/] {escape(str(warning))}")
    return EXIT_OK
