"""
Core punch card codec.

This package contains the card model and its binary format:
- hollerith: Character <-> punch pattern table
- column: Single card column
- card: 80-column card and its 108-byte binary image
- deck: Ordered card collection and its binary form
"""

from punchcard.core.card import (
    BINARY_COLUMNS,
    CARD_BYTES,
    CARD_COLUMNS,
    Card,
    CardOrigin,
)
from punchcard.core.column import Column
from punchcard.core.deck import Deck, DeckMetadata
from punchcard.core.hollerith import PunchPattern, decode, encode

__all__ = [
    "BINARY_COLUMNS",
    "CARD_BYTES",
    "CARD_COLUMNS",
    "Card",
    "CardOrigin",
    "Column",
    "Deck",
    "DeckMetadata",
    "PunchPattern",
    "decode",
    "encode",
]
