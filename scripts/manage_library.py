"""
CLI script to maintain the paper library records.

Usage:
    python scripts/manage_library.py new "Attention Is All You Need" --url https://arxiv.org/pdf/1706.03762
    python scripts/manage_library.py add ./attention_is_all_you_need --url https://arxiv.org/pdf/1706.03762
    python scripts/manage_library.py retag 3 --tags transformer,nlp
    python scripts/manage_library.py remove 3
    python scripts/manage_library.py tags
    python scripts/manage_library.py cite 3 --set "Vaswani et al., 2017"
    python scripts/manage_library.py pages 3
    python scripts/manage_library.py stats
    python scripts/manage_library.py reset --yes
"""

import argparse
import sys
from pathlib import Path
from typing import List

sys.path.insert(0, str(Path(__file__).parent.parent))

from papr.core import get_config, ConfigurationError, PaprError
from papr.core.config_loader import reload_config
from papr.database import (
    ExistingTag,
    NewTagEntry,
    PaperRepository,
    build_tag_choices,
    get_statistics,
    init_schema,
    render_tag_choice,
    reset_schema,
    resolve_tag_selection,
)
from papr.extraction import PDFExtractor
from papr.utils import directory_name_for_title, ensure_directory, normalize_tag_names, split_comma_list

NOTES_STUB = "= Notes on: {title}\n\nLink: {url}\n"


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Maintain paper records and tags")
    parser.add_argument("--config", type=str, help="Path to custom config.json file")

    commands = parser.add_subparsers(dest="command", required=True)

    new = commands.add_parser("new", help="Create and register a paper directory for a title")
    new.add_argument("title", help="Paper title")
    new.add_argument("--url", required=True, help="Where the PDF comes from")
    new.add_argument("--citation", default="", help="Citation text")
    new.add_argument("--tags", default="", help="Comma-separated tags, existing or new")

    add = commands.add_parser("add", help="Register an existing paper directory")
    add.add_argument("directory", help="Paper directory holding the PDF")
    add.add_argument("--url", required=True, help="Where the PDF came from")
    add.add_argument("--citation", default="", help="Citation text")
    add.add_argument("--tags", default="", help="Comma-separated tags, existing or new")

    retag = commands.add_parser("retag", help="Replace the tags of a paper")
    retag.add_argument("id", type=int)
    retag.add_argument("--tags", default="", help="Comma-separated tags, existing or new")

    remove = commands.add_parser("remove", help="Remove a paper record")
    remove.add_argument("id", type=int)

    commands.add_parser("tags", help="List tags with usage counts")

    cite = commands.add_parser("cite", help="Show or replace a citation")
    cite.add_argument("id", type=int)
    cite.add_argument("--set", dest="citation", default=None, help="New citation text")

    pages = commands.add_parser("pages", help="Show how much text each PDF page yields")
    pages.add_argument("id", type=int)

    commands.add_parser("stats", help="Count papers, tags and tag links")

    reset = commands.add_parser("reset", help="Delete every record and tag")
    reset.add_argument("--yes", action="store_true", help="Confirm the reset")

    return parser.parse_args(argv)


def select_tags(repo: PaperRepository, tags_input: str) -> List[str]:
    """
    Turn a comma-separated tag list into tag choices and resolve them.

    Names already in the library select their existing tag; the rest go
    through the new-tag entry.
    """
    requested = normalize_tag_names(split_comma_list(tags_input))

    selected = [
        choice for choice in build_tag_choices(repo.list_tags())
        if isinstance(choice, ExistingTag) and choice.name in requested
    ]
    known = {choice.name for choice in selected}
    new_names = [name for name in requested if name not in known]
    if new_names:
        selected.append(NewTagEntry())
        print(f"New tags: {', '.join(new_names)}")

    return resolve_tag_selection(selected, ",".join(new_names))


def run(args, repo: PaperRepository) -> int:
    """Execute one subcommand against the repository."""
    if args.command == "new":
        directory_name = directory_name_for_title(args.title)
        if not directory_name:
            print("Error: title is empty", file=sys.stderr)
            return 1
        config = get_config()
        directory = ensure_directory(config.paths.library_directory / directory_name)
        notes_dir = ensure_directory(directory / config.library.notes_directory)
        stub = notes_dir / f"main{config.library.notes_extension}"
        if not stub.exists():
            stub.write_text(NOTES_STUB.format(title=args.title.strip(), url=args.url), encoding="utf-8")
        paper_id = repo.add_paper(str(directory.resolve()), args.url, args.citation)
        repo.tag_paper(paper_id, select_tags(repo, args.tags))
        print(f"Created {directory}")
        print(f"Place the PDF at {directory / config.library.pdf_filename} (ID: {paper_id})")

    elif args.command == "add":
        directory = Path(args.directory).resolve()
        if not directory.is_dir():
            print(f"Error: not a directory: {directory}", file=sys.stderr)
            return 1
        paper_id = repo.add_paper(str(directory), args.url, args.citation)
        repo.tag_paper(paper_id, select_tags(repo, args.tags))
        print(f"Successfully added '{directory.name}' to your library! (ID: {paper_id})")

    elif args.command == "retag":
        if repo.get_by_id(args.id) is None:
            print(f"Error: paper ID {args.id} not found", file=sys.stderr)
            return 1
        names = repo.retag_paper(args.id, select_tags(repo, args.tags))
        print(f"Tags: {', '.join(names) or '(none)'}")

    elif args.command == "remove":
        if not repo.remove_paper(args.id):
            print(f"Error: paper ID {args.id} not found", file=sys.stderr)
            return 1
        print(f"Removed paper {args.id}")

    elif args.command == "tags":
        for choice in build_tag_choices(repo.list_tags()):
            if isinstance(choice, ExistingTag):
                print(render_tag_choice(choice))

    elif args.command == "cite":
        current = repo.get_citation(args.id)
        if current is None:
            print(f"Error: paper ID {args.id} not found", file=sys.stderr)
            return 1
        if args.citation is None:
            print(current)
        elif repo.update_citation(args.id, args.citation):
            print("Citation updated successfully!")
        else:
            print("No changes made.")

    elif args.command == "pages":
        record = repo.get_by_id(args.id)
        if record is None:
            print(f"Error: paper ID {args.id} not found", file=sys.stderr)
            return 1
        pdf_path = Path(record.canonical_base_path) / get_config().library.pdf_filename
        texts = PDFExtractor().extract_file(pdf_path)
        print(f"{pdf_path}: {len(texts)} pages")
        for index, text in enumerate(texts, start=1):
            chars = len(text.strip())
            print(f"  Page {index}: {chars:,} chars" + ("" if chars else " (blank)"))

    elif args.command == "stats":
        stats = get_statistics(repo.manager)
        print(f"Papers:    {stats['total_papers']:,}")
        print(f"Tags:      {stats['total_tags']:,}")
        print(f"Tag links: {stats['total_links']:,}")

    elif args.command == "reset":
        if not args.yes:
            print("Error: reset deletes every record, pass --yes to confirm", file=sys.stderr)
            return 1
        reset_schema(repo.manager)
        print("Library records deleted.")

    return 0


def main(argv=None) -> int:
    """Main entry point for the library maintenance CLI."""
    args = parse_args(argv)

    try:
        if args.config:
            reload_config(Path(args.config))
        else:
            get_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        return 1

    try:
        init_schema()
        return run(args, PaperRepository())
    except PaprError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
