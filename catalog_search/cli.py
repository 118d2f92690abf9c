"""Command-line interface for the catalog search engine."""

import argparse
import json
import sys
from typing import Any, Dict, List, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import ConfigManager
from .engine import SearchEngine
from .errors import SearchEngineError
from .logging_config import get_logger, setup_logging
from .models import QueryResponse, Record
from .sample_catalog import write_sample_catalog

console = Console()
logger = get_logger(__name__)


def load_catalog(path: str) -> List[Record]:
    """Load a JSON catalog: an array of records, or an object with a ``documents`` array."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("documents")
    if not isinstance(data, list):
        raise ValueError(f"Catalog {path} must contain a JSON array of records")

    logger.debug("Loaded catalog", extra={"path": path, "records": len(data)})
    return data


def _parse_value(raw: str) -> Any:
    """Read numbers, booleans and null as JSON; anything else stays text."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def _split_assignment(raw: str, option: str) -> List[str]:
    field_name, sep, value = raw.partition("=")
    if not sep or not field_name:
        raise argparse.ArgumentTypeError(f"{option} expects FIELD=VALUE, got {raw!r}")
    return [field_name, value]


def build_options(args: argparse.Namespace) -> Dict[str, Any]:
    """Translate search arguments into a search options mapping."""
    filters: Dict[str, Any] = {}

    for raw in args.filter or []:
        field_name, value = _split_assignment(raw, "--filter")
        value = _parse_value(value)
        if field_name in filters:
            # Repeating a field widens it to "any of".
            existing = filters[field_name]
            if not isinstance(existing, list):
                existing = [existing]
            filters[field_name] = existing + [value]
        else:
            filters[field_name] = value

    for bound, assignments in (("min", args.min), ("max", args.max)):
        for raw in assignments or []:
            field_name, value = _split_assignment(raw, f"--{bound}")
            current = filters.get(field_name)
            if not isinstance(current, dict):
                current = {}
            current[bound] = _parse_value(value)
            filters[field_name] = current

    options: Dict[str, Any] = {"filters": filters, "page": args.page}
    if args.page_size is not None:
        options["page_size"] = args.page_size

    if args.sort:
        field_name, _, direction = args.sort.partition(":")
        options["sort"] = {"field": field_name, "direction": direction or "asc"}

    return options


def _load_engine(args: argparse.Namespace) -> SearchEngine:
    config = ConfigManager(args.config).load()
    engine = SearchEngine(config)
    engine.index_documents(load_catalog(args.catalog))
    return engine


def render_response(response: QueryResponse, query: str) -> None:
    """Print one page of results as a table."""
    table = Table(
        title=f"Results for '{escape(query)}' (page {response.page}/{max(response.total_pages, 1)})",
        show_header=True,
        padding=(0, 1)
    )
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="white")
    table.add_column("Score", style="green", justify="right")

    for result in response.results:
        name = result.document.get("nome") or result.document.get("name") or ""
        table.add_row(str(result.id), str(name), f"{result.score:.3f}")

    console.print(table)
    console.print(
        f"{response.total} match(es), tokens: {', '.join(response.query_tokens) or '-'}, "
        f"{response.execution_time_ms:.2f} ms"
    )

    if response.has_previous_page:
        console.print(f"[dim]Previous page: --page {response.page - 1}[/dim]")
    if response.has_next_page:
        console.print(f"[dim]Next page: --page {response.page + 1}[/dim]")

    if response.suggestions:
        console.print("[yellow]Did you mean:[/yellow] " + escape(" | ".join(response.suggestions)))


def search_command(args: argparse.Namespace) -> int:
    """Run a query against a catalog file."""
    options = build_options(args)
    engine = _load_engine(args)
    response = engine.search(args.query, options)
    render_response(response, args.query)
    return 0


def stats_command(args: argparse.Namespace) -> int:
    """Show index statistics for a catalog file."""
    engine = _load_engine(args)
    stats = engine.get_statistics()

    table = Table(show_header=False, padding=(0, 1))
    table.add_column("Stat", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Documents", str(stats.document_count))
    table.add_row("Unique terms", str(stats.unique_term_count))
    table.add_row("Avg. postings per document", f"{stats.average_document_size:.2f}")
    table.add_row("Indexed fields", ", ".join(stats.indexed_fields))
    table.add_row("Cache TTL (s)", f"{stats.cache_ttl:g}")

    console.print(table)
    return 0


def sample_command(args: argparse.Namespace) -> int:
    """Write the demo catalog."""
    path = write_sample_catalog(args.output)
    console.print(f"[green]Sample catalog saved to: {escape(str(path))}[/green]")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="catalog-search",
        description="Full-text search over a JSON product catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Write the demo catalog
  catalog-search sample catalog.json

  # Search it
  catalog-search search catalog.json "bolo de chocolate" --max preco=100

  # Show index statistics
  catalog-search stats catalog.json
""",
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)"
    )
    parser.add_argument(
        "--log-format", default="json", choices=["json", "text"],
        help="Log output format (default: json)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    search_parser = subparsers.add_parser("search", help="Search a catalog")
    search_parser.add_argument("catalog", help="Path to a JSON catalog")
    search_parser.add_argument("query", help="Query text")
    search_parser.add_argument(
        "--filter", action="append", metavar="FIELD=VALUE",
        help="Attribute filter; repeat a field to match any of several values"
    )
    search_parser.add_argument("--min", action="append", metavar="FIELD=N", help="Lower bound")
    search_parser.add_argument("--max", action="append", metavar="FIELD=N", help="Upper bound")
    search_parser.add_argument(
        "--sort", metavar="FIELD[:asc|desc]", help="Secondary sort among similar scores"
    )
    search_parser.add_argument("--page", type=int, default=1, help="Page number")
    search_parser.add_argument("--page-size", type=int, help="Results per page")
    search_parser.add_argument("-c", "--config", help="Path to configuration file")

    stats_parser = subparsers.add_parser("stats", help="Show index statistics")
    stats_parser.add_argument("catalog", help="Path to a JSON catalog")
    stats_parser.add_argument("-c", "--config", help="Path to configuration file")

    sample_parser = subparsers.add_parser("sample", help="Write the demo catalog")
    sample_parser.add_argument("output", help="Destination JSON file")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(format=args.log_format, level=args.log_level)

    commands = {
        "search": search_command,
        "stats": stats_command,
        "sample": sample_command,
    }

    try:
        return commands[args.command](args)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        return 1
    except argparse.ArgumentTypeError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1
    except (OSError, ValueError) as e:
        console.print(f"[red]Could not read input: {escape(str(e))}[/red]")
        return 1
    except SearchEngineError as e:
        console.print(f"[red]Error: {escape(e.message)}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
