"""Command line entry point: parse a memo file and print its render IR."""

import argparse
import logging
import sys
from typing import List

from memomark.markdown_ast_printer import MarkdownASTPrinter
from memomark.markdown_engine import MarkdownEngine
from memomark.markdown_error import MemomarkError
from memomark.markdown_settings import MemomarkSettings
from memomark.memo_title import extract_title


def setup_logging(verbose: bool) -> None:
    """Configure logging to stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )


def main(argv: List[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="memomark",
        description="Parse a markdown memo and print its render tree"
    )
    parser.add_argument('file', help='Memo file to parse, or - for stdin')
    parser.add_argument('--settings', '-s', help='JSON settings file')
    parser.add_argument('--title', action='store_true', help='Print only the memo title')
    parser.add_argument('--verbose', '-v', action='store_true', help='Verbose logging')

    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    logger = logging.getLogger("memomark")

    try:
        settings = MemomarkSettings.load(args.settings) if args.settings else MemomarkSettings()

    except MemomarkError as e:
        logger.error("%s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        if args.file == '-':
            text = sys.stdin.read()

        else:
            with open(args.file, 'r', encoding='utf-8') as f:
                text = f.read()

    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read {args.file}: {e}", file=sys.stderr)
        return 1

    if args.title:
        print(extract_title(text))
        return 0

    engine = MarkdownEngine(settings)
    MarkdownASTPrinter(sys.stdout).visit(engine.render_ir(text))
    return 0


if __name__ == '__main__':
    sys.exit(main())
