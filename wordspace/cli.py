"""Command-line interface for word-space queries."""

import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from wordspace import __version__
from wordspace.core.config import Config
from wordspace.core.exceptions import StoreUnavailableError, WordSpaceError
from wordspace.core.results import Ok, WordNotFound
from wordspace.similarity.engine import SimilarityEngine
from wordspace.store.base import BaseWordSpaceStore
from wordspace.store.factory import open_store

logger = logging.getLogger(__name__)

NOT_IN_INDEX = "Error: Word not found in index."


class UsageError(Exception):
    """Raised instead of exiting when the command line is incomplete."""
    pass


class _UsageParser(argparse.ArgumentParser):
    """ArgumentParser that prints usage and hands control back to main()."""

    def error(self, message):
        print(f"Error: {message}")
        self.print_help(sys.stdout)
        raise UsageError(message)


def setup_logging(verbose: bool = False, level: Optional[str] = None):
    """Configure logging."""
    if verbose:
        resolved = logging.DEBUG
    else:
        resolved = getattr(logging, str(level or "WARNING").upper(), logging.WARNING)
    logging.basicConfig(
        level=resolved,
        format="%(levelname)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = _UsageParser(
        prog="wordspace",
        description="Query a word space for frequencies, similar words and collocations",
    )
    parser.add_argument("store_path", help="Word-space directory or .jsonl file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    commands = parser.add_mutually_exclusive_group(required=True)
    commands.add_argument("-f", dest="frequency", nargs=1, metavar="W",
                          help="return corpus frequency of word W")
    commands.add_argument("-s", dest="first_order", nargs=2, metavar=("W1", "W2"),
                          help="return first order similarity between W1 and W2")
    commands.add_argument("-s2", dest="second_order", nargs=2, metavar=("W1", "W2"),
                          help="return second order similarity between W1 and W2")
    commands.add_argument("-bn", dest="best_n", nargs=2, metavar=("W", "N"),
                          help="return the N most similar words for W")
    commands.add_argument("-bs", dest="best_s", nargs=2, metavar=("W", "S"),
                          help="return all words that are at least S similar to W")
    commands.add_argument("-bc", dest="best_collocations", nargs=2, metavar=("W", "N"),
                          help="return the N best collocations for W")
    commands.add_argument("-cc", dest="common_context", nargs=2, metavar=("W1", "W2"),
                          help="return the common context for W1 and W2")
    commands.add_argument("-n", dest="count", action="store_true",
                          help="return the number of words in the word space")
    commands.add_argument("-wl", dest="word_list", nargs=1, metavar="FILE",
                          help="write word frequency list to FILE")

    parser.add_argument("--ram", action="store_true",
                        help="load the whole word space into memory")
    parser.add_argument("--config", "-c", type=Path,
                        help="YAML configuration file")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="enable debug logging")
    return parser


def write_frequency_list(store: BaseWordSpaceStore, output_path: str) -> int:
    """
    Write "word<TAB>frequency" for every readable record.

    Returns:
        Number of words written
    """
    written = 0
    with open(output_path, "w", encoding="utf-8") as f:
        for record in store.iterate_all():
            f.write(f"{record.word}\t{record.freq}\n")
            written += 1
    return written


def _print_similarity(result) -> None:
    if isinstance(result, Ok):
        print(result.score)
    elif isinstance(result, WordNotFound):
        print(NOT_IN_INDEX)
    else:
        print(f"Error: similarity is undefined ({getattr(result, 'reason', result)}).")


def _run(args: argparse.Namespace, store: BaseWordSpaceStore) -> None:
    engine = SimilarityEngine(store)

    if args.frequency:
        print(engine.frequency(args.frequency[0]))

    elif args.first_order:
        _print_similarity(engine.first_order_similarity(*args.first_order))

    elif args.second_order:
        _print_similarity(engine.second_order_similarity(*args.second_order))

    elif args.best_n or args.best_s:
        word, limit = args.best_n or args.best_s
        if args.best_n:
            neighbors = engine.similar_words(word, top_n=int(limit))
        else:
            neighbors = engine.similar_words(word, min_similarity=float(limit))
        if neighbors is None:
            print(f'The word "{word}" was not found.')
            return
        for neighbor in neighbors:
            print(f"{neighbor.word}\t{neighbor.similarity}")

    elif args.best_collocations:
        word, n = args.best_collocations
        result = engine.collocations(word, top_n=int(n))
        if result is None:
            print(f'The word "{word}" was not found.')
            return
        for collocation in result:
            print(f"{collocation.word}\t{collocation.value}")

    elif args.common_context:
        result = engine.common_context(*args.common_context)
        if result is None:
            print("One of the input words was not found.")
            return
        if not result:
            print("No common context.")
            return
        for entry in result:
            print(f"{entry.word}\t{entry.relation}\t{entry.value_w1}\t{entry.value_w2}")

    elif args.count:
        print(engine.number_of_words())

    elif args.word_list:
        written = write_frequency_list(store, args.word_list[0])
        total = store.count()
        skipped = store.skipped_entries
        if skipped:
            print("*** WARNING! ***")
            print(f'The word space "{args.store_path}" has {skipped} defect entries')
            print(f"All functioning words have been written to {args.word_list[0]}")
        print(f"{written} of {total} words were written.")


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError:
        return 1

    load_into_memory = args.ram
    log_level = None
    if args.config:
        config = Config.load(str(args.config))
        load_into_memory = load_into_memory or bool(config.get("store.load_into_memory", False))
        log_level = config.get("logging.level")
    setup_logging(args.verbose, log_level)

    try:
        store = open_store(args.store_path, load_into_memory=load_into_memory)
    except StoreUnavailableError as e:
        logger.debug(f"Store open failed: {e}")
        print(f"Error: can't open word space {args.store_path}")
        parser.print_help(sys.stdout)
        return 1

    try:
        with store:
            _run(args, store)
    except ValueError as e:
        print(f"Error: invalid number: {e}")
        parser.print_help(sys.stdout)
        return 1
    except WordSpaceError as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
