"""
Punch Card - an 80-column card and its IBM 1130 binary image.

Card layout:
- Columns 1-72:  Stored in the binary image
- Columns 73-80: Identification/sequence area, never stored

IBM 1130 binary format (108 bytes per card):
- 72 columns x 12 rows = 864 bits
- Bit b = column * 12 + row_slot, rows in slot order 12, 11, 0, 1 ... 9
- Bits are packed least-significant first: bit b lives in byte b // 8
  at mask 1 << (b % 8)

A card read back from binary always has blank columns 73-80.
"""

from enum import Enum
from typing import Iterator, Optional, Sequence, Union

from punchcard.core.column import Column
from punchcard.core.hollerith import ROWS_PER_COLUMN, PunchPattern
from punchcard.exceptions import BinaryFormatError, ColumnIndexError
from punchcard.logging_config import get_logger

logger = get_logger("card")

# Card geometry constants
CARD_COLUMNS = 80  # Columns on a card
BINARY_COLUMNS = 72  # Columns 1-72 are stored in the binary image
CARD_BITS = BINARY_COLUMNS * ROWS_PER_COLUMN  # 864
CARD_BYTES = CARD_BITS // 8  # 108

BytesLike = Union[bytes, bytearray, memoryview]


class CardOrigin(Enum):
    """How a card was built."""

    TEXT = "text"  # Punched from characters
    BINARY = "binary"  # Decoded from a binary image


def _blank_columns() -> tuple[Column, ...]:
    blank = Column.blank()
    return (blank,) * CARD_COLUMNS


def pack_patterns(patterns: Sequence[PunchPattern]) -> bytes:
    """
    Pack the first 72 column patterns into a 108-byte card image.

    Args:
        patterns: Column patterns in card order; entries past 72 are ignored

    Returns:
        The packed 108 bytes
    """
    data = bytearray(CARD_BYTES)
    bit_index = 0
    for pattern in patterns[:BINARY_COLUMNS]:
        for punched in pattern:
            if punched:
                data[bit_index // 8] |= 1 << (bit_index % 8)
            bit_index += 1
    return bytes(data)


def unpack_patterns(data: BytesLike) -> list[PunchPattern]:
    """
    Unpack a 108-byte card image into 72 column patterns.

    Args:
        data: Exactly 108 bytes

    Returns:
        72 PunchPatterns in card order

    Raises:
        BinaryFormatError: If data is not exactly 108 bytes
    """
    if len(data) != CARD_BYTES:
        raise BinaryFormatError(
            actual_length=len(data),
            expected=f"exactly {CARD_BYTES} bytes",
            message=f"Binary data must be exactly {CARD_BYTES} bytes, got {len(data)}",
        )

    patterns = []
    bit_index = 0
    for _ in range(BINARY_COLUMNS):
        punches = []
        for _ in range(ROWS_PER_COLUMN):
            punches.append(bool(data[bit_index // 8] & (1 << (bit_index % 8))))
            bit_index += 1
        patterns.append(PunchPattern(tuple(punches)))
    return patterns


def _check_index(index: int) -> None:
    if not 0 <= index < CARD_COLUMNS:
        raise ColumnIndexError(index, CARD_COLUMNS)


class Card:
    """
    An 80-column punch card.

    The column sequence is an immutable tuple. Every change installs a new
    tuple, so a `columns` snapshot taken earlier never changes under the
    caller.

    Usage:
        card = Card.from_text("HELLO")
        data = card.to_binary()
        same = Card.from_binary(data)
    """

    def __init__(
        self,
        columns: Optional[Sequence[Column]] = None,
        origin: CardOrigin = CardOrigin.TEXT,
    ):
        """
        Create a card.

        Args:
            columns: Exactly 80 columns; a blank card if omitted
            origin: How the card was built

        Raises:
            ValueError: If columns does not hold exactly 80 entries
        """
        if columns is None:
            self._columns = _blank_columns()
        else:
            columns = tuple(columns)
            if len(columns) != CARD_COLUMNS:
                raise ValueError(
                    f"A card has {CARD_COLUMNS} columns, got {len(columns)}"
                )
            self._columns = columns
        self.origin = origin

    @classmethod
    def blank(cls) -> "Card":
        """Create a blank text card."""
        return cls()

    @classmethod
    def from_text(cls, text: str) -> "Card":
        """
        Punch a card from text.

        Only the first 80 characters are used; shorter text leaves the
        remaining columns blank.
        """
        chars = text[:CARD_COLUMNS]
        columns = [Column.from_char(char) for char in chars]
        columns.extend(Column.blank() for _ in range(CARD_COLUMNS - len(columns)))
        if len(text) > CARD_COLUMNS:
            logger.debug(
                "Text truncated to %d columns (%d chars given)",
                CARD_COLUMNS,
                len(text),
            )
        return cls(columns, CardOrigin.TEXT)

    @classmethod
    def from_binary(cls, data: BytesLike) -> "Card":
        """
        Decode a card from its 108-byte IBM 1130 image.

        Columns 73-80 are blank on the returned card.

        Raises:
            BinaryFormatError: If data is not exactly 108 bytes
        """
        columns = [Column.from_pattern(p) for p in unpack_patterns(data)]
        columns.extend(Column.blank() for _ in range(CARD_COLUMNS - BINARY_COLUMNS))
        return cls(columns, CardOrigin.BINARY)

    @property
    def columns(self) -> tuple[Column, ...]:
        """All 80 columns in card order."""
        return self._columns

    def to_text(self) -> str:
        """Read the card as exactly 80 characters (trailing blanks kept)."""
        return "".join(column.to_char() for column in self._columns)

    def to_binary(self) -> bytes:
        """Encode columns 1-72 as the 108-byte IBM 1130 image."""
        return pack_patterns([column.pattern for column in self._columns])

    def overflow_text(self) -> str:
        """Text of columns 73-80, which the binary image does not keep."""
        return "".join(column.to_char() for column in self._columns[BINARY_COLUMNS:])

    def get_column(self, index: int) -> Column:
        """
        Get the column at a 0-based index.

        Raises:
            ColumnIndexError: If index is outside 0-79
        """
        _check_index(index)
        return self._columns[index]

    def set_column(self, index: int, char: str) -> None:
        """
        Punch a character into one column.

        Raises:
            ColumnIndexError: If index is outside 0-79
        """
        _check_index(index)
        self._replace_column(index, Column.from_char(char))

    def clear_column(self, index: int) -> None:
        """
        Blank one column.

        Raises:
            ColumnIndexError: If index is outside 0-79
        """
        _check_index(index)
        self._replace_column(index, Column.blank())

    def clear(self) -> None:
        """Blank every column."""
        self._columns = _blank_columns()

    def copy(self) -> "Card":
        """Return an independent card with the same columns and origin."""
        return Card(self._columns, self.origin)

    def _replace_column(self, index: int, column: Column) -> None:
        columns = list(self._columns)
        columns[index] = column
        self._columns = tuple(columns)

    def __len__(self) -> int:
        return CARD_COLUMNS

    def __iter__(self) -> Iterator[Column]:
        return iter(self._columns)

    def __repr__(self) -> str:
        return f"Card({self.origin.value}, {self.to_text().rstrip()!r})"
