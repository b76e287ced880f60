"""
Deck Files - Reads and writes binary deck files.

This module handles:
- Loading decks from .deck/.bin files, naming them after the file
- Generating timestamped file names for saved decks
- Writing deck images without clobbering existing files
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional, Union

from punchcard.core.card import CARD_BYTES
from punchcard.core.deck import LOADED_DECK_NAME, Deck
from punchcard.exceptions import BinaryFormatError, DeckFileError
from punchcard.logging_config import get_logger

logger = get_logger("storage")

DECK_EXTENSION = ".deck"
ACCEPTED_EXTENSIONS = (".deck", ".bin")


def deck_name_from_path(
    path: Union[str, Path],
    extensions: Iterable[str] = ACCEPTED_EXTENSIONS,
    default: str = LOADED_DECK_NAME,
) -> str:
    """
    Derive a deck name from a file name.

    A recognised deck extension is stripped; other names are kept whole.

    Args:
        path: Deck file path
        extensions: Extensions to strip
        default: Name used when the path has no usable file name

    Returns:
        The deck name, e.g. "PAYROLL" for "decks/PAYROLL.deck"
    """
    name = Path(path).name
    for ext in extensions:
        if name.lower().endswith(ext.lower()):
            name = name[: -len(ext)]
            break
    return name or default


def default_deck_filename(now: Optional[datetime] = None) -> str:
    """
    Build a timestamped deck file name.

    Args:
        now: Timestamp to use (current time if not provided)

    Returns:
        A name like "deck-2024-05-01-134502.deck"
    """
    now = now or datetime.now()
    return f"deck-{now:%Y-%m-%d}-{now:%H%M%S}{DECK_EXTENSION}"


def read_deck(
    path: Union[str, Path],
    name: Optional[str] = None,
    extensions: Iterable[str] = ACCEPTED_EXTENSIONS,
) -> Deck:
    """
    Load a deck from a binary deck file.

    Args:
        path: Deck file to read
        name: Deck name (derived from the file name if not provided)
        extensions: Extensions stripped when deriving the name

    Returns:
        The loaded Deck

    Raises:
        DeckFileError: If the file cannot be read or has an invalid size
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise DeckFileError(
            path, f"Cannot read deck file: {e}", expected="a readable deck file"
        ) from e

    deck_name = name if name is not None else deck_name_from_path(path, extensions)
    try:
        deck = Deck.from_binary(data, deck_name)
    except BinaryFormatError as e:
        raise DeckFileError(path, str(e), actual_length=len(data)) from e

    logger.info("Loaded %s: %d cards", path.name, len(deck))
    return deck


@dataclass
class WriteResult:
    """Result of writing a deck file."""
    output_path: Path
    deck_name: str
    cards_written: int = 0
    bytes_written: int = 0
    success: bool = True
    error_message: Optional[str] = None


@dataclass
class WriterConfig:
    """Configuration for the deck writer."""
    output_directory: Optional[Path] = None
    create_directories: bool = True
    overwrite_existing: bool = False


class DeckWriter:
    """
    Writes decks as binary deck files.

    Usage:
        writer = DeckWriter(WriterConfig(output_directory=Path("decks")))
        result = writer.write_deck(deck)
    """

    def __init__(self, config: Optional[WriterConfig] = None):
        """
        Initialize the deck writer.

        Args:
            config: Writer configuration (uses defaults if not provided)
        """
        self.config = config or WriterConfig()
        self._write_results: list[WriteResult] = []

    def resolve_path(self, filename: Optional[Union[str, Path]] = None) -> Path:
        """
        Work out where a deck file goes.

        Relative names are placed in the configured output directory; a
        missing name gets a timestamped default.
        """
        path = Path(filename) if filename else Path(default_deck_filename())
        if not path.is_absolute() and self.config.output_directory is not None:
            path = self.config.output_directory / path
        return path

    def write_deck(
        self,
        deck: Deck,
        filename: Optional[Union[str, Path]] = None,
    ) -> WriteResult:
        """
        Write a deck to a file.

        Args:
            deck: Deck to save
            filename: Target file (timestamped name if not provided)

        Returns:
            WriteResult with details of the operation
        """
        output_path = self.resolve_path(filename)
        result = WriteResult(output_path=output_path, deck_name=deck.name)

        try:
            out_dir = output_path.parent
            if self.config.create_directories and not out_dir.exists():
                out_dir.mkdir(parents=True, exist_ok=True)

            if output_path.exists() and not self.config.overwrite_existing:
                result.success = False
                result.error_message = f"Output file already exists: {output_path}"
                return result

            data = deck.to_binary()
            output_path.write_bytes(data)

            result.cards_written = len(data) // CARD_BYTES
            result.bytes_written = len(data)
            self._write_results.append(result)
            logger.info("Saved %s: %d cards", output_path.name, result.cards_written)
            return result

        except OSError as e:
            result.success = False
            result.error_message = f"IO error: {e}"
            return result

    def get_results(self) -> list[WriteResult]:
        """Get all successful write results."""
        return list(self._write_results)


def write_deck(
    deck: Deck,
    path: Union[str, Path],
    overwrite: bool = False,
) -> WriteResult:
    """
    Convenience function to write a single deck file.

    Args:
        deck: Deck to save
        path: Target file
        overwrite: Replace an existing file

    Returns:
        WriteResult with details of the operation
    """
    path = Path(path)
    config = WriterConfig(
        output_directory=path.parent,
        overwrite_existing=overwrite,
    )
    return DeckWriter(config).write_deck(deck, path.name)
