"""
Main entry point for the punch card deck tools.

This module converts between text files and binary deck files and
provides a programmatic API for both directions.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from punchcard.config import Config, create_default_config
from punchcard.core.card import BINARY_COLUMNS, CARD_COLUMNS, Card
from punchcard.core.deck import Deck
from punchcard.core.hollerith import HOLLERITH_ENCODING, decode, encode
from punchcard.exceptions import PunchCardError
from punchcard.logging_config import get_logger
from punchcard.storage.deck_file import (
    DeckWriter,
    WriterConfig,
    deck_name_from_path,
    read_deck,
)
from punchcard.storage.listing import deck_to_lines

logger = get_logger("main")


@dataclass
class ConversionResult:
    """Result of converting a text file or a deck file."""
    success: bool
    input_path: Optional[Path] = None
    output_path: Optional[Path] = None
    deck: Optional[Deck] = None
    lines: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    processing_time: float = 0.0

    @property
    def cards(self) -> int:
        """Number of cards converted."""
        return len(self.deck) if self.deck is not None else 0


def text_to_deck(lines: Iterable[str], name: str) -> Deck:
    """
    Punch one card per line of text.

    Args:
        lines: Card texts; no lines gives a deck with one blank card
        name: Deck name

    Returns:
        The punched Deck
    """
    deck = Deck(name)
    for index, line in enumerate(lines):
        if index == 0:
            deck.update_card(0, line)
        else:
            deck.add_card(Card.from_text(line))
    return deck


def split_card_lines(text: str) -> list[str]:
    """
    Split text into card lines on newlines only.

    Other line-break characters such as form feeds stay on their card.
    A final newline does not start an extra card.
    """
    lines = text.replace("\r\n", "\n").split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def check_card_text(line: str, line_number: int) -> list[str]:
    """
    Describe what punching a line will lose.

    Args:
        line: Card text
        line_number: 1-based line number for messages

    Returns:
        Warning messages (empty if the line survives a deck round trip)
    """
    warnings = []

    if len(line) > CARD_COLUMNS:
        warnings.append(
            f"Line {line_number}: truncated to {CARD_COLUMNS} columns "
            f"({len(line)} chars)"
        )

    punched = line[:CARD_COLUMNS]
    unsupported = sorted({c for c in punched if c.upper() not in HOLLERITH_ENCODING})
    if unsupported:
        shown = ", ".join(repr(c) for c in unsupported)
        warnings.append(
            f"Line {line_number}: characters without a punch code left blank: {shown}"
        )

    changed = sorted(
        {
            c.upper()
            for c in punched
            if c.upper() in HOLLERITH_ENCODING and decode(encode(c)) != c.upper()
        }
    )
    if changed:
        shown = ", ".join(f"{c!r} as {decode(encode(c))!r}" for c in changed)
        warnings.append(f"Line {line_number}: characters read back differently: {shown}")

    if punched[BINARY_COLUMNS:].strip():
        warnings.append(
            f"Line {line_number}: columns {BINARY_COLUMNS + 1}-{CARD_COLUMNS} "
            f"are not stored in deck files"
        )

    return warnings


def encode_text_file(
    input_path: Path,
    output_path: Optional[Path] = None,
    config: Optional[Config] = None,
    name: Optional[str] = None,
) -> ConversionResult:
    """
    Punch a text file into a binary deck file, one card per line.

    Args:
        input_path: Text file to read
        output_path: Deck file to write (input name with the deck extension
            if not provided)
        config: Configuration (uses defaults if not provided)
        name: Deck name (input file stem if not provided)

    Returns:
        ConversionResult with details
    """
    config = config or create_default_config()
    start_time = time.time()
    output_path = output_path or input_path.with_suffix(config.deck_extension)
    result = ConversionResult(success=True, input_path=input_path, output_path=output_path)

    if output_path.resolve() == input_path.resolve():
        result.success = False
        result.errors.append(f"Output file would replace the input: {output_path}")
        return result

    try:
        lines = split_card_lines(input_path.read_text(encoding=config.encoding))

        for line_number, line in enumerate(lines, 1):
            for warning in check_card_text(line, line_number):
                logger.warning(warning)
                result.warnings.append(warning)

        result.deck = text_to_deck(
            lines, name or input_path.stem or config.default_deck_name
        )

        writer = DeckWriter(WriterConfig(overwrite_existing=config.overwrite))
        write_result = writer.write_deck(result.deck, output_path)
        if not write_result.success:
            result.success = False
            result.errors.append(write_result.error_message)

    except (OSError, UnicodeDecodeError, PunchCardError) as e:
        result.success = False
        result.errors.append(f"Cannot encode {input_path}: {e}")

    result.processing_time = time.time() - start_time
    return result


def decode_deck_file(
    input_path: Path,
    output_path: Optional[Path] = None,
    config: Optional[Config] = None,
) -> ConversionResult:
    """
    Read a binary deck file back as text, one line per card.

    Args:
        input_path: Deck file to read
        output_path: Text file to write (lines only kept in the result
            if not provided)
        config: Configuration (uses defaults if not provided)

    Returns:
        ConversionResult with details
    """
    config = config or create_default_config()
    start_time = time.time()
    result = ConversionResult(success=True, input_path=input_path, output_path=output_path)

    try:
        name = deck_name_from_path(
            input_path, config.accepted_extensions, default=config.loaded_deck_name
        )
        result.deck = read_deck(input_path, name=name)
        result.lines = deck_to_lines(result.deck, strip_trailing=config.strip_trailing)

        if output_path is not None and output_path.resolve() == input_path.resolve():
            result.success = False
            result.errors.append(f"Output file would replace the input: {output_path}")
        elif output_path is not None:
            if output_path.exists() and not config.overwrite:
                result.success = False
                result.errors.append(f"Output file already exists: {output_path}")
            else:
                text = "".join(line + "\n" for line in result.lines)
                output_path.write_text(text, encoding=config.encoding)

    except (OSError, UnicodeEncodeError, PunchCardError) as e:
        result.success = False
        result.errors.append(f"Cannot decode {input_path}: {e}")

    result.processing_time = time.time() - start_time
    return result
