"""
Exception classes for the punch card codec.

This module defines all custom exceptions used throughout the package,
organized in a hierarchy for easy handling.

Only structural problems raise: bad binary lengths, out-of-range indices,
and removing the last card of a deck. Unsupported characters and
unrecognised punch patterns never raise; they degrade to a blank column.
"""

from pathlib import Path
from typing import Optional, Union


class PunchCardError(Exception):
    """Base exception for all punch card errors."""

    pass


class BinaryFormatError(PunchCardError, ValueError):
    """Binary card or deck data has an invalid length.

    Attributes:
        actual_length: Length of the rejected data in bytes
        expected: Human readable description of the accepted lengths
    """

    def __init__(
        self,
        actual_length: int,
        expected: str,
        message: Optional[str] = None,
    ):
        self.actual_length = actual_length
        self.expected = expected
        if message is None:
            message = (
                f"Invalid binary data: {actual_length} bytes "
                f"(expected {expected})"
            )
        super().__init__(message)


class DeckFileError(BinaryFormatError):
    """A deck file could not be read or is not a valid deck.

    Attributes:
        path: The offending file
        actual_length: File size in bytes (0 when the file could not be read)
        expected: "a readable deck file" for read failures, otherwise the
            accepted sizes
    """

    def __init__(
        self,
        path: Union[str, Path],
        message: str,
        actual_length: int = 0,
        expected: str = "a multiple of 108 bytes",
    ):
        self.path = Path(path)
        super().__init__(
            actual_length=actual_length,
            expected=expected,
            message=f"{self.path}: {message}",
        )


class ColumnIndexError(PunchCardError, IndexError):
    """Column index outside 0-79.

    Attributes:
        index: The rejected index
        limit: Number of columns on the card
    """

    def __init__(self, index: int, limit: int = 80):
        self.index = index
        self.limit = limit
        super().__init__(
            f"Column index out of range: {index} (valid 0-{limit - 1})"
        )


class CardIndexError(PunchCardError, IndexError):
    """Card index outside the deck.

    Attributes:
        index: The rejected index
        limit: Number of cards in the deck
    """

    def __init__(self, index: int, limit: int):
        self.index = index
        self.limit = limit
        super().__init__(
            f"Card index out of range: {index} (deck has {limit} cards)"
        )


class LastCardError(PunchCardError):
    """Attempt to remove the only card left in a deck."""

    def __init__(self, message: str = "Cannot delete last card"):
        super().__init__(message)


class ConfigError(PunchCardError):
    """Configuration error.

    Raised when a configuration file cannot be loaded or holds
    invalid values.
    """

    pass
