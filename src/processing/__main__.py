"""
Main entry point for processing module.

Splits a reply on chunk markers and shows the resulting messages.

Run with: python -m src.processing "Hey![MSG]Long time no see." --enable
"""

import argparse
import logging
from dataclasses import replace
from pathlib import Path
import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from src.processing import (
    ChunkingConfig,
    ChunkingError,
    MarkerChunker,
    load_chunking_config_from_env,
    load_chunking_config_from_yaml
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m src.processing",
        description="Split an LLM reply into separate messages on chunk markers.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m src.processing "Hi.[MSG]How are you?" --enable
  python -m src.processing --file reply.txt --config config/chunking.yaml
  echo "One<nl>Two" | python -m src.processing --markers "<nl>"
        """
    )
    parser.add_argument("text", nargs="?", help="Reply text (reads stdin when omitted)")
    parser.add_argument("--file", type=Path, help="Read reply text from a file")
    parser.add_argument("--config", type=Path, help="YAML file with a 'chunking' section")
    parser.add_argument("--markers", nargs="+", help="Custom markers (implies --enable)")
    parser.add_argument("--min-chunk-size", type=int, help="Merge threshold in characters")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--enable", action="store_true", help="Force chunking on")
    group.add_argument("--disable", action="store_true", help="Force chunking off")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def resolve_config(args: argparse.Namespace) -> ChunkingConfig:
    """Load config from YAML (or environment) and apply flag overrides."""
    if args.config:
        config = load_chunking_config_from_yaml(args.config)
    else:
        config = load_chunking_config_from_env()

    if args.markers:
        config = replace(config, enabled=True, markers=tuple(args.markers))
    if args.min_chunk_size is not None:
        config = replace(config, min_chunk_size=args.min_chunk_size)
    if args.enable:
        config = replace(config, enabled=True)
    if args.disable:
        config = replace(config, enabled=False)
    return config


def read_text(args: argparse.Namespace) -> str:
    if args.text is not None:
        return args.text
    if args.file:
        return args.file.read_text(encoding="utf-8")
    return sys.stdin.read()


def display_chunks(console: Console, chunker: MarkerChunker, chunks: List[str]) -> None:
    info = chunker.get_strategy_info()
    console.print(Panel(
        f"[bold]Markers:[/bold] {escape(', '.join(info['markers'])) or '(chunking disabled)'}\n"
        f"[bold]Min chunk size:[/bold] {info['min_chunk_size']}",
        title="[bold green]Chunk Markers[/bold green]",
        border_style="green"
    ))

    table = Table(title=f"{len(chunks)} message(s)", show_header=True, header_style="bold")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Size", style="yellow", justify="right")
    table.add_column("Message", style="green")
    for index, chunk in enumerate(chunks, 1):
        table.add_row(str(index), str(len(chunk)), escape(chunk))
    console.print(table)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the splitter from the command line."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    console = Console()

    try:
        chunker = MarkerChunker(resolve_config(args))
        text = read_text(args)
    except ChunkingError as e:
        console.print(f"[red]Invalid chunking configuration: {escape(str(e))}[/red]")
        return 2
    except OSError as e:
        console.print(f"[red]Could not read input: {escape(str(e))}[/red]")
        return 2

    display_chunks(console, chunker, chunker.split(text))
    return 0


if __name__ == "__main__":
    sys.exit(main())
