"""Command-line interface for copypage."""

import argparse
import sys
from pathlib import Path
from typing import Optional, Union

import requests
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from . import __version__
from .errors import PageLoadError
from .export import CopyPageAction, PageExporter
from .logging_config import setup_logging
from .models.config import CopyPageConfig
from .models.results import ExportStatus


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="copypage",
        description="Copy a rendered documentation page to the clipboard as Markdown",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Copy a saved page to the clipboard
  copypage build/docs/intro/index.html

  # Fetch a live page and print the Markdown instead
  copypage https://docs.example.com/intro --stdout

  # Use a different content root
  copypage page.html --selector article
        """,
    )

    parser.add_argument(
        "page",
        help="HTML file, '-' for stdin, or an http(s) URL",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="YAML configuration file",
    )

    # Content
    content_group = parser.add_argument_group("content")
    content_group.add_argument(
        "--selector",
        "-s",
        type=str,
        default=None,
        help="CSS selector of the content root (default: .theme-doc-markdown.markdown)",
    )
    content_group.add_argument(
        "--remove",
        nargs="+",
        metavar="SELECTOR",
        help="Extra CSS selectors to drop before conversion",
    )

    # Output
    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "--converter",
        choices=["rules", "html2text"],
        default=None,
        help="Conversion backend (default: rules)",
    )
    output_group.add_argument(
        "--base-url",
        type=str,
        metavar="URL",
        help="Resolve relative links against this URL (defaults to PAGE if it is a URL)",
    )
    output_group.add_argument(
        "--no-title",
        action="store_true",
        help="Do not prepend a '# Title' line",
    )
    output_group.add_argument(
        "--stdout",
        action="store_true",
        help="Print the Markdown instead of copying it",
    )
    output_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    output_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress output",
    )

    return parser


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def load_page(source: str, timeout: float = 30.0) -> Union[str, bytes]:
    """
    Read page HTML from a file, stdin, or a URL.

    Raises:
        PageLoadError: If the page cannot be read or fetched
    """
    if source == "-":
        return sys.stdin.buffer.read()

    if _is_url(source):
        try:
            response = requests.get(
                source,
                timeout=timeout,
                headers={"User-Agent": f"copypage/{__version__}"},
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise PageLoadError(f"Failed to fetch {source}: {e}") from e
        return response.content

    try:
        return Path(source).read_bytes()
    except OSError as e:
        raise PageLoadError(f"Failed to read {source}: {e}") from e


def build_config(args: argparse.Namespace) -> CopyPageConfig:
    """Merge the optional config file with command-line overrides."""
    config = CopyPageConfig.from_yaml_file(args.config) if args.config else CopyPageConfig()

    content = config.content.model_copy()
    if args.selector:
        content.selector = args.selector
    if args.remove:
        content.remove_selectors = [*content.remove_selectors, *args.remove]

    output = config.output.model_copy()
    if args.converter:
        output.converter = args.converter
    if args.base_url:
        output.base_url = args.base_url
    elif output.base_url is None and _is_url(args.page):
        output.base_url = args.page
    if args.no_title:
        output.include_title = False

    log_level = config.log_level
    if args.verbose:
        log_level = "DEBUG"
    elif args.quiet:
        log_level = "ERROR"

    return config.model_copy(update={"content": content, "output": output, "log_level": log_level})


def run_export(args: argparse.Namespace) -> int:
    """Run one export with given arguments."""
    console = Console(stderr=True)

    try:
        config = build_config(args)
    except (ValidationError, yaml.YAMLError, OSError) as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        return 1

    setup_logging(
        level=config.log_level,
        log_file=str(config.log_file) if config.log_file else None,
        force=True,
    )

    try:
        page = load_page(args.page)
    except PageLoadError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        return 1

    no_content = f"[yellow]No content found[/yellow] for selector {escape(repr(config.content.selector))}"

    if args.stdout:
        result = PageExporter(config).export(page)
        if result.markdown is None:
            if not args.quiet:
                console.print(no_content)
            return 1
        sys.stdout.write(result.markdown + "\n")
        return 0

    result = CopyPageAction(config).copy(page)
    if result.status is ExportStatus.NO_CONTENT:
        if not args.quiet:
            console.print(no_content)
        return 1
    if result.status is ExportStatus.CLIPBOARD_FAILED:
        if not args.quiet:
            console.print("[red]Could not access the clipboard.[/red] Try --stdout instead.")
        return 1

    if not args.quiet:
        title = f" ({result.title})" if result.title else ""
        console.print(f"[green]Copied![/green] {len(result.markdown or '')} characters{escape(title)}")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    return run_export(args)


if __name__ == "__main__":
    sys.exit(main())
