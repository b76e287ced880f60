"""
Hollerith Code - IBM 029 character <-> punch pattern table.

A card column has 12 punch rows. Physically, from top to bottom:

- Row 12: Zone punch (A-I, &)
- Row 11: Zone punch (J-R, -)
- Row 0:  Zone punch (S-Z, /) or the digit 0
- Rows 1-9: Digit punches

A punch pattern is stored as 12 booleans indexed by row slot, in the
physical order above:

    Row:   12  11   0   1   2   3   4   5   6   7   8   9
    Slot:   0   1   2   3   4   5   6   7   8   9  10  11

Characters outside the table encode to the blank pattern, and patterns
that match no table entry decode to a space.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from punchcard.logging_config import get_logger

logger = get_logger("hollerith")

# Physical row number for each row slot
ROW_ORDER: tuple[int, ...] = (12, 11, 0, 1, 2, 3, 4, 5, 6, 7, 8, 9)

# Physical row number -> row slot
ROW_TO_SLOT: dict[int, int] = {row: slot for slot, row in enumerate(ROW_ORDER)}

ROWS_PER_COLUMN = len(ROW_ORDER)

BLANK_CHAR = " "

# IBM 029 keypunch encoding, character -> punched rows
HOLLERITH_ENCODING: dict[str, tuple[int, ...]] = {
    # Space
    " ": (),
    # Digits (single punches)
    "0": (0,),
    "1": (1,),
    "2": (2,),
    "3": (3,),
    "4": (4,),
    "5": (5,),
    "6": (6,),
    "7": (7,),
    "8": (8,),
    "9": (9,),
    # Letters A-I (12-zone + digit)
    "A": (12, 1),
    "B": (12, 2),
    "C": (12, 3),
    "D": (12, 4),
    "E": (12, 5),
    "F": (12, 6),
    "G": (12, 7),
    "H": (12, 8),
    "I": (12, 9),
    # Letters J-R (11-zone + digit)
    "J": (11, 1),
    "K": (11, 2),
    "L": (11, 3),
    "M": (11, 4),
    "N": (11, 5),
    "O": (11, 6),
    "P": (11, 7),
    "Q": (11, 8),
    "R": (11, 9),
    # Letters S-Z (0-zone + digit)
    "S": (0, 2),
    "T": (0, 3),
    "U": (0, 4),
    "V": (0, 5),
    "W": (0, 6),
    "X": (0, 7),
    "Y": (0, 8),
    "Z": (0, 9),
    # Special characters
    "&": (12,),
    "-": (11,),
    "/": (0, 1),
    ".": (12, 3, 8),
    ",": (0, 3, 8),
    "(": (12, 5, 8),
    ")": (11, 5, 8),
    "+": (12, 6, 8),
    "*": (11, 4, 8),
    "$": (11, 3, 8),
    "=": (3, 8),
    "<": (12, 4, 8),
    ">": (0, 6, 8),
    "%": (0, 4, 8),
    "@": (4, 8),
    "#": (3, 8),  # Same punches as "=", reads back as "="
    "!": (12, 2, 8),
    ":": (2, 8),
    ";": (11, 6, 8),
    "?": (0, 7, 8),
    '"': (7, 8),
    "'": (5, 8),
    "_": (11, 7, 8),
    "|": (12, 7, 8),
}

# Inverse table, punched rows -> character (first entry wins)
HOLLERITH_DECODING: dict[frozenset[int], str] = {}
for _char, _rows in HOLLERITH_ENCODING.items():
    HOLLERITH_DECODING.setdefault(frozenset(_rows), _char)
del _char, _rows

SUPPORTED_CHARACTERS = "".join(HOLLERITH_ENCODING)

EMPTY_ROWS: frozenset[int] = frozenset()


@dataclass(frozen=True)
class PunchPattern:
    """
    The punches of one card column.

    Attributes:
        punches: 12 booleans in row-slot order (12, 11, 0, 1 ... 9)
    """

    punches: tuple[bool, ...] = (False,) * ROWS_PER_COLUMN

    def __post_init__(self):
        if len(self.punches) != ROWS_PER_COLUMN:
            raise ValueError(
                f"Punch pattern needs {ROWS_PER_COLUMN} rows, got {len(self.punches)}"
            )
        # Normalise truthy values so equality compares plain booleans
        object.__setattr__(self, "punches", tuple(bool(p) for p in self.punches))

    @classmethod
    def from_rows(cls, rows: Iterable[int]) -> "PunchPattern":
        """
        Build a pattern from physical row numbers.

        Row numbers that are not on the card are ignored.

        Args:
            rows: Punched rows, e.g. (12, 1) for 'A'

        Returns:
            The corresponding PunchPattern
        """
        punches = [False] * ROWS_PER_COLUMN
        for row in rows:
            slot = ROW_TO_SLOT.get(row)
            if slot is not None:
                punches[slot] = True
        return cls(tuple(punches))

    @classmethod
    def empty(cls) -> "PunchPattern":
        """Create a pattern with no punches (a space)."""
        return cls()

    @property
    def rows(self) -> frozenset[int]:
        """Punched physical row numbers."""
        return frozenset(
            ROW_ORDER[slot] for slot, punched in enumerate(self.punches) if punched
        )

    def is_empty(self) -> bool:
        """Check if no row is punched."""
        return not any(self.punches)

    def as_list(self) -> list[bool]:
        """Get a mutable copy of the punches in row-slot order."""
        return list(self.punches)

    def __len__(self) -> int:
        return ROWS_PER_COLUMN

    def __iter__(self) -> Iterator[bool]:
        return iter(self.punches)

    def __getitem__(self, slot: int) -> bool:
        return self.punches[slot]

    def __str__(self) -> str:
        """IBM notation, zone rows first: '12-1' for A, '0-3-8' for ','."""
        return "-".join(
            str(ROW_ORDER[slot]) for slot, punched in enumerate(self.punches) if punched
        )


def _normalize_char(char: Optional[str]) -> str:
    """Return the upper-cased first character, or '' for empty input."""
    if not char:
        return ""
    return char[0].upper()


def is_supported(char: Optional[str]) -> bool:
    """
    Check if a character has a punch code.

    Lower-case letters count as supported since they fold to upper case.
    Only the first character of a longer string is considered.
    """
    normalized = _normalize_char(char)
    return normalized != "" and normalized in HOLLERITH_ENCODING


def encode(char: Optional[str]) -> frozenset[int]:
    """
    Get the rows punched for a character.

    Args:
        char: A character; only the first one of a longer string is used

    Returns:
        Set of physical row numbers. Empty for space, empty input, and
        characters outside the table.
    """
    normalized = _normalize_char(char)
    if not normalized:
        return EMPTY_ROWS

    rows = HOLLERITH_ENCODING.get(normalized)
    if rows is None:
        logger.debug("No punch code for %r, punching blank", normalized)
        return EMPTY_ROWS

    return frozenset(rows)


def decode(rows: Iterable[int]) -> str:
    """
    Get the character for a set of punched rows.

    Args:
        rows: Physical row numbers, in any order

    Returns:
        The matching character, or a space if nothing matches
    """
    key = frozenset(rows)
    if not key:
        return BLANK_CHAR

    char = HOLLERITH_DECODING.get(key)
    if char is None:
        logger.debug("Unknown punch combination %s, reading as space", sorted(key))
        return BLANK_CHAR
    return char


def encode_pattern(char: Optional[str]) -> PunchPattern:
    """Encode a character straight to a PunchPattern."""
    return PunchPattern.from_rows(encode(char))


def decode_pattern(pattern: PunchPattern) -> str:
    """Decode a PunchPattern to its character."""
    return decode(pattern.rows)
