"""
Punch Card Deck - IBM 80-column punch cards and IBM 1130 deck files.

This package models punch cards punched with the IBM 029 character set
and stores decks of them in the IBM 1130 binary layout: 108 bytes per
card, holding columns 1-72.

Basic Usage:
    from punchcard import Card, Deck

    card = Card.from_text("HELLO")
    card.to_text()            # "HELLO" + 75 spaces
    len(card.to_binary())     # 108

    deck = Deck("SAMPLE")
    deck.update_card(0, "FIRST CARD")
    deck.add_card(Card.from_text("SECOND CARD"))
    loaded = Deck.from_binary(deck.to_binary(), "SAMPLE")

Command-Line Usage:
    punchcard encode program.txt -o program.deck
    punchcard decode program.deck
    punchcard list program.deck
    punchcard validate decks/
"""

__version__ = "1.0.0"

from punchcard.exceptions import (
    BinaryFormatError,
    CardIndexError,
    ColumnIndexError,
    ConfigError,
    DeckFileError,
    LastCardError,
    PunchCardError,
)

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
from punchcard.config import Config, create_default_config
from punchcard.storage.deck_file import read_deck, write_deck
from punchcard.main import decode_deck_file, encode_text_file, text_to_deck

__all__ = [
    # Version
    "__version__",
    # Codec
    "encode",
    "decode",
    "PunchPattern",
    "Column",
    "Card",
    "CardOrigin",
    "Deck",
    "DeckMetadata",
    "CARD_COLUMNS",
    "BINARY_COLUMNS",
    "CARD_BYTES",
    # Files
    "read_deck",
    "write_deck",
    "encode_text_file",
    "decode_deck_file",
    "text_to_deck",
    # Configuration
    "Config",
    "create_default_config",
    # Exceptions
    "PunchCardError",
    "BinaryFormatError",
    "DeckFileError",
    "ColumnIndexError",
    "CardIndexError",
    "LastCardError",
    "ConfigError",
]
