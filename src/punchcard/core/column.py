"""
Card Column - one of the 80 character positions on a punch card.

Columns are immutable. Changing a character on a card installs a new
Column rather than editing the existing one.
"""

from dataclasses import dataclass, field
from typing import Optional

from punchcard.core.hollerith import (
    HOLLERITH_ENCODING,
    PunchPattern,
    decode_pattern,
    encode_pattern,
)


@dataclass(frozen=True)
class Column:
    """
    A single punch card column.

    Attributes:
        pattern: The punches in this column
        source_char: The upper-cased character the column was punched from.
            Only set for columns created from a character in the punch table;
            None for blank columns and columns decoded from binary data.
    """

    pattern: PunchPattern = field(default_factory=PunchPattern.empty)
    source_char: Optional[str] = None

    @classmethod
    def blank(cls) -> "Column":
        """Create a column with no punches."""
        return cls()

    @classmethod
    def from_char(cls, char: str) -> "Column":
        """
        Punch a column from a character (text mode).

        Lower-case letters fold to upper case. Characters without a punch
        code give a blank column with no source character.

        Args:
            char: Character to punch; only the first character is used

        Returns:
            The punched Column
        """
        upper_char = char[:1].upper()
        if upper_char not in HOLLERITH_ENCODING:
            return cls()
        return cls(pattern=encode_pattern(upper_char), source_char=upper_char)

    @classmethod
    def from_pattern(cls, pattern: PunchPattern) -> "Column":
        """Create a column from raw punches (binary mode)."""
        return cls(pattern=pattern, source_char=None)

    def to_char(self) -> str:
        """Read the column back as a character."""
        return decode_pattern(self.pattern)

    def is_blank(self) -> bool:
        """Check if the column has no punches."""
        return self.pattern.is_empty()
