"""
CLI script to search the paper library.

Usage:
    python scripts/run_search.py attn                  # Fuzzy title search
    python scripts/run_search.py transformer --pdf     # Search inside PDFs
    python scripts/run_search.py "graph" --notes       # Search notes
    python scripts/run_search.py gnn --tags survey,2021
    python scripts/run_search.py query --config path/to/config.json
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from papr.core import get_config, ConfigurationError, PaprError
from papr.core.config_loader import reload_config
from papr.database import init_schema
from papr.search import LibrarySearch, MatcherConfig, SearchMode, render_match
from papr.utils import split_comma_list


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Search papers by title, PDF content or notes"
    )

    parser.add_argument("query", help="Fuzzy query; may be empty to list everything")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--pdf",
        action="store_true",
        help="Search inside the papers' PDF pages"
    )
    mode.add_argument(
        "--notes",
        action="store_true",
        help="Search inside the papers' notes"
    )

    parser.add_argument(
        "--tags",
        type=str,
        default="",
        help="Comma-separated tags every result must carry"
    )

    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of results"
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Abort when a PDF cannot be extracted instead of skipping it"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to custom config.json file"
    )

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point for the search CLI."""
    args = parse_args(argv)

    try:
        config = reload_config(Path(args.config)) if args.config else get_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        return 1

    if args.pdf:
        mode = SearchMode.FULLTEXT
    elif args.notes:
        mode = SearchMode.NOTES
    else:
        mode = SearchMode.TITLE

    limit = args.limit if args.limit is not None else config.search.default_limit

    try:
        init_schema()
        search = LibrarySearch(config=MatcherConfig.from_config(config))
        report = search.search(
            args.query,
            mode=mode,
            tags=split_comma_list(args.tags),
            limit=limit,
            strict=True if args.strict else None
        )
    except PaprError as e:
        print(f"Search failed: {e.message}", file=sys.stderr)
        return 1

    for result in report.results:
        print(render_match(result))
        print()

    for warning in report.warnings:
        print(f"Warning: {warning.path}: {warning.message}", file=sys.stderr)

    if not report.results:
        print(f"No papers found matching '{args.query}'", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
