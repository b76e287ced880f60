"""
Command-Line Interface for the punch card deck tools.

Usage:
    punchcard encode program.txt -o program.deck
    punchcard decode program.deck
    punchcard list program.deck --show-overflow
    punchcard validate decks/
"""

import argparse
import sys
import traceback
from pathlib import Path
from typing import List, Optional

from punchcard import __version__
from punchcard.config import Config, create_default_config, merge_configs
from punchcard.exceptions import PunchCardError
from punchcard.logging_config import setup_logging
from punchcard.main import ConversionResult, decode_deck_file, encode_text_file
from punchcard.storage.deck_file import read_deck
from punchcard.storage.listing import format_listing
from punchcard.storage.validator import DeckValidator, ValidatorConfig


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="punchcard",
        description="Convert between text and IBM 1130 binary punch card decks.",
        epilog="Deck files hold 108 bytes per card; columns 73-80 are not stored.",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="Configuration file (JSON)",
        metavar="FILE",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress normal output",
    )

    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )

    parser.add_argument(
        "--encoding",
        default="utf-8",
        help="Text file encoding (default: utf-8)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    encode = subparsers.add_parser("encode", help="Punch a text file into a deck file")
    encode.add_argument("input", type=Path, help="Text file, one card per line")
    encode.add_argument(
        "-o", "--output",
        type=Path,
        help="Deck file to write (default: input name with .deck)",
        metavar="FILE",
    )
    encode.add_argument("--name", help="Deck name (default: input file name)")
    encode.add_argument(
        "--overwrite",
        action="store_true",
        help="Overwrite an existing output file",
    )

    decode = subparsers.add_parser("decode", help="Read a deck file back as text")
    decode.add_argument("input", type=Path, help="Deck file")
    decode.add_argument(
        "-o", "--output",
        type=Path,
        help="Text file to write (default: standard output)",
        metavar="FILE",
    )
    decode.add_argument(
        "--keep-trailing",
        action="store_true",
        help="Keep trailing blanks so every line is 80 characters",
    )
    decode.add_argument(
        "--overwrite",
        action="store_true",
        help="Overwrite an existing output file",
    )

    listing = subparsers.add_parser("list", help="Print a numbered listing of a deck")
    listing.add_argument("input", type=Path, help="Deck file")
    listing.add_argument(
        "--no-numbers",
        action="store_true",
        help="Don't number the cards",
    )
    listing.add_argument(
        "--show-overflow",
        action="store_true",
        help="Show columns 73-80 separately",
    )

    validate = subparsers.add_parser("validate", help="Check deck files")
    validate.add_argument("path", type=Path, help="Deck file or directory of deck files")

    return parser


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = create_parser()
    return parser.parse_args(args)


def args_to_config(args: argparse.Namespace) -> Config:
    """Convert parsed arguments to Config object."""
    config = create_default_config()

    config.encoding = args.encoding
    config.verbose = args.verbose
    config.quiet = args.quiet
    config.log_level = args.log_level
    config.overwrite = getattr(args, "overwrite", False)
    config.strip_trailing = not getattr(args, "keep_trailing", False)

    # Command-line args override file config
    if args.config:
        file_config = Config.load_from_file(args.config)
        config = merge_configs(file_config, config)

    return config


def _report_conversion(result: ConversionResult, config: Config, verb: str) -> int:
    """Print the outcome of a conversion and return the exit code."""
    if not result.success:
        for error in result.errors:
            print(f"Error: {error}", file=sys.stderr)
        return 1

    if not config.quiet and result.output_path is not None:
        print(f"{verb} {result.cards} cards: {result.input_path} -> {result.output_path}")
        if config.verbose and result.warnings:
            print(f"Warnings ({len(result.warnings)}):")
            for warning in result.warnings:
                print(f"  {warning}")
    return 0


def run_encode(args: argparse.Namespace, config: Config) -> int:
    """Run the encode command."""
    result = encode_text_file(args.input, args.output, config, name=args.name)
    return _report_conversion(result, config, "Punched")


def run_decode(args: argparse.Namespace, config: Config) -> int:
    """Run the decode command."""
    result = decode_deck_file(args.input, args.output, config)
    if result.success and args.output is None:
        for line in result.lines:
            print(line)
        return 0
    return _report_conversion(result, config, "Read")


def run_list(args: argparse.Namespace, config: Config) -> int:
    """Run the list command."""
    deck = read_deck(args.input, extensions=config.accepted_extensions)
    print(
        format_listing(
            deck,
            numbered=not args.no_numbers,
            show_overflow=args.show_overflow,
        ),
        end="",
    )
    return 0


def run_validation(args: argparse.Namespace, config: Config) -> int:
    """
    Run validation only.

    Returns:
        Exit code (0 for success, 1 for errors)
    """
    validator = DeckValidator(ValidatorConfig(extensions=tuple(config.accepted_extensions)))
    if args.path.is_dir():
        result = validator.validate_directory(args.path)
    else:
        result = validator.validate_file(args.path)

    if not config.quiet:
        print(f"Validated {result.files_validated} files, {result.cards_validated} cards")
        if result.errors:
            print(f"\nErrors ({len(result.errors)}):")
            for error in result.errors:
                print(f"  {error}")
        if result.warnings:
            print(f"\nWarnings ({len(result.warnings)}):")
            for warning in result.warnings[:10]:
                print(f"  {warning}")
            if len(result.warnings) > 10:
                print(f"  ... and {len(result.warnings) - 10} more")

    return 0 if result.is_valid else 1


COMMANDS = {
    "encode": run_encode,
    "decode": run_decode,
    "list": run_list,
    "validate": run_validation,
}


def main(args: Optional[List[str]] = None) -> int:
    """
    Main entry point for CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code
    """
    parsed = parse_args(args)

    try:
        config = args_to_config(parsed)
    except PunchCardError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    errors = config.validate()
    if errors:
        for error in errors:
            print(f"Configuration error: {error}", file=sys.stderr)
        return 1

    if config.verbose:
        level = "DEBUG"
    elif config.quiet:
        level = "ERROR"
    else:
        level = config.log_level
    setup_logging(level=level, verbose=config.verbose)

    try:
        return COMMANDS[parsed.command](parsed, config)
    except (PunchCardError, OSError) as e:
        if config.verbose:
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
