"""Command-line interface for blockdoc."""

import argparse
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console

from . import __version__
from .errors import BlockdocError
from .logging_config import setup_logging
from .models.config import BlockdocConfig
from .serializer import ArticleSerializer


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        metavar="FILE",
        help="YAML configuration file",
    )
    common.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    common.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress status output",
    )

    parser = argparse.ArgumentParser(
        prog="blockdoc",
        description="Convert article HTML to JSON block documents and back",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # HTML to block document
  blockdoc serialize article.html -o article.json

  # Compact JSON from stdin
  cat article.html | blockdoc serialize --compact

  # Block document back to HTML
  blockdoc unserialize article.json

  # Check a stored document
  blockdoc verify article.json
        """,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    serialize_parser = subparsers.add_parser(
        "serialize",
        parents=[common],
        help="Convert HTML to a block document",
    )
    serialize_parser.add_argument("input", nargs="?", default="-", help="HTML file (default: stdin)")
    serialize_parser.add_argument("--output", "-o", type=Path, default=None, help="Output file")
    serialize_parser.add_argument(
        "--compact",
        action="store_true",
        help="Write compact JSON instead of pretty-printed",
    )
    serialize_parser.add_argument(
        "--indent",
        type=int,
        default=None,
        metavar="N",
        help="Indentation width for pretty JSON",
    )

    unserialize_parser = subparsers.add_parser(
        "unserialize",
        parents=[common],
        help="Convert a block document to HTML",
    )
    unserialize_parser.add_argument("input", nargs="?", default="-", help="JSON file (default: stdin)")
    unserialize_parser.add_argument("--output", "-o", type=Path, default=None, help="Output file")

    verify_parser = subparsers.add_parser(
        "verify",
        parents=[common],
        help="Check the checksum of a block document",
    )
    verify_parser.add_argument("input", nargs="?", default="-", help="JSON file (default: stdin)")

    roundtrip_parser = subparsers.add_parser(
        "roundtrip",
        parents=[common],
        help="Show HTML -> JSON -> HTML -> JSON for an input",
    )
    roundtrip_parser.add_argument("input", nargs="?", default="-", help="HTML file (default: stdin)")

    return parser


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _write_output(text: str, output: Optional[Path]) -> None:
    if output is None:
        sys.stdout.write(text + "\n")
    else:
        output.write_text(text + "\n", encoding="utf-8")


def load_config(args: argparse.Namespace) -> BlockdocConfig:
    """Build configuration from an optional YAML file and CLI overrides."""
    config = BlockdocConfig.from_yaml_file(args.config) if args.config else BlockdocConfig()

    updates: dict = {}
    if args.verbose:
        updates["log_level"] = "DEBUG"
    elif args.quiet:
        updates["log_level"] = "ERROR"

    serialize_updates: dict = {}
    if getattr(args, "compact", False):
        serialize_updates["pretty_print"] = False
    if getattr(args, "indent", None) is not None:
        serialize_updates["indent"] = args.indent
    if serialize_updates:
        updates["serialize"] = {**config.serialize.model_dump(), **serialize_updates}

    if not updates:
        return config
    # Overrides obey the same field constraints as config files
    return BlockdocConfig.model_validate({**config.model_dump(), **updates})


def run_command(args: argparse.Namespace, config: BlockdocConfig, console: Console) -> int:
    """Run the selected subcommand."""
    serializer = ArticleSerializer(config.serialize)
    text = _read_input(args.input)

    if args.command == "serialize":
        _write_output(serializer.serialize(text), args.output)
        if args.output and not args.quiet:
            console.print(f"[green]Wrote[/green] {args.output}")
        return 0

    if args.command == "unserialize":
        _write_output(serializer.unserialize(text), args.output)
        if args.output and not args.quiet:
            console.print(f"[green]Wrote[/green] {args.output}")
        return 0

    if args.command == "verify":
        if serializer.verify(text):
            if not args.quiet:
                console.print("[green]Checksum OK[/green]")
            return 0
        if not args.quiet:
            console.print("[red]Checksum mismatch[/red]")
        return 1

    # roundtrip
    payload = serializer.serialize(text)
    html = serializer.unserialize(payload)
    stages = [("Block document", payload), ("Rendered HTML", html), ("Re-serialized", serializer.serialize(html))]
    for title, body in stages:
        if not args.quiet:
            console.rule(title)
        _write_output(body, None)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    console = Console(stderr=True)

    try:
        config = load_config(args)
    except Exception as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        return 1

    setup_logging(
        level=config.log_level,
        log_file=str(config.log_file) if config.log_file else None,
        force=True,
    )

    try:
        return run_command(args, config, console)
    except (BlockdocError, OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error:[/red] {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
