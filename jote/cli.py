import argparse
import logging
from collections.abc import Callable

from jote import __version__
from jote.config import (
    Settings,
    get_store_root,
    load_settings,
    resolve_editor_command,
    resolve_store_base,
)
from jote.editor import SubprocessEditor
from jote.errors import JoteError
from jote.fs import list_notes, sorted_for_selection
from jote.git import VersionedStore
from jote.lifecycle import NoteLifecycle
from jote.log import configure_logging
from jote.tags import build as build_tag_index
from jote.tags import describe_tag

logger = logging.getLogger(__name__)

# Given a list of labels, return the chosen index or None when cancelled.
Selector = Callable[[list[str], str], int | None]


def prompt_select(items: list[str], prompt: str) -> int | None:
    """Numbered-list picker on stdin/stdout.

    An empty answer or end of input cancels.
    """
    if not items:
        return None
    for number, item in enumerate(items, start=1):
        print(f"{number:>4}  {item}")
    while True:
        try:
            answer = input(f"{prompt} [1-{len(items)}]: ").strip()
        except EOFError:
            print()
            return None
        if not answer:
            return None
        if answer.isdigit() and 1 <= int(answer) <= len(items):
            return int(answer) - 1
        print(f"Please enter a number between 1 and {len(items)}.")


def _settings(args) -> Settings:
    settings = getattr(args, "settings", None)
    return settings if settings is not None else Settings()


def open_lifecycle(args) -> NoteLifecycle:
    """Open (or create) the store and wire it to the configured editor."""
    settings = _settings(args)
    root = get_store_root(resolve_store_base(args.store_path, settings))
    logger.debug(f"Note store: {root}")
    store = VersionedStore.open_or_init(root)
    editor = SubprocessEditor(resolve_editor_command(settings))
    return NoteLifecycle(store, editor)


def run_new(args):
    """Jot down a new note."""
    open_lifecycle(args).add()


def run_ls(args, select: Selector = prompt_select):
    """List existing notes, pick one, and open it."""
    lifecycle = open_lifecycle(args)
    notes = sorted_for_selection(list_notes(lifecycle.root))
    if not notes:
        logger.info("No notes yet. Run 'jote new' to write one.")
        return
    chosen = select(notes, "Note")
    if chosen is None:
        return
    lifecycle.open(notes[chosen])


def run_tags(args, select: Selector = prompt_select):
    """Pick a tag, then a note carrying it, and open that note."""
    lifecycle = open_lifecycle(args)
    index = build_tag_index(lifecycle.root)
    if not index:
        logger.info("No tagged notes found.")
        return
    tags = sorted_for_selection(list(index))
    chosen_tag = select(tags, "Tag")
    if chosen_tag is None:
        return
    tag = tags[chosen_tag]
    logger.debug(describe_tag(tag, index[tag]))
    notes = sorted_for_selection(index[tag])
    chosen = select(notes, "Note")
    if chosen is None:
        return
    lifecycle.open(notes[chosen])


def run_log(args):
    """Print the store's commit messages, newest first."""
    settings = _settings(args)
    root = get_store_root(resolve_store_base(args.store_path, settings))
    store = VersionedStore.open_or_init(root)
    for message in store.log(limit=args.max_count):
        print(message)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jote",
        description="jote jots down notes",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--store-path",
        help="Base directory holding the 'jote' store (default: ~/.local/share)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.set_defaults(handler=run_new)

    subparsers = parser.add_subparsers(dest="command", required=False)

    new_parser = subparsers.add_parser("new", help="jot down a new note")
    new_parser.set_defaults(handler=run_new)

    ls_parser = subparsers.add_parser("ls", help="list existing notes")
    ls_parser.set_defaults(handler=run_ls)

    tags_parser = subparsers.add_parser("tags", help="search notes by tags")
    tags_parser.set_defaults(handler=run_tags)

    log_parser = subparsers.add_parser("log", help="show the note history")
    log_parser.add_argument(
        "--max-count",
        "-n",
        type=int,
        default=None,
        help="Show at most this many commits",
    )
    log_parser.set_defaults(handler=run_log)

    return parser


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    log_level = logging.DEBUG if args.debug else logging.INFO
    configure_logging(stream_level=log_level)

    try:
        args.settings = load_settings()
        args.handler(args)
    except (JoteError, OSError) as e:
        logger.error(str(e))
        raise SystemExit(1)


if __name__ == "__main__":
    main()
