"""
Card Deck - an ordered collection of punch cards.

A deck always holds at least one card. Its binary form is the plain
concatenation of the 108-byte card images, with no header or footer; the
deck name is not part of the binary data.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator, Optional

from punchcard.core.card import CARD_BYTES, BytesLike, Card
from punchcard.exceptions import BinaryFormatError, CardIndexError, LastCardError
from punchcard.logging_config import get_logger

logger = get_logger("deck")

DEFAULT_DECK_NAME = "Untitled Deck"
LOADED_DECK_NAME = "Loaded Deck"


@dataclass
class DeckMetadata:
    """Deck timestamps."""

    created: datetime = field(default_factory=datetime.now)
    modified: datetime = field(default_factory=datetime.now)

    def touch(self) -> None:
        """Record a modification."""
        self.modified = datetime.now()


class Deck:
    """
    A deck of punch cards.

    The card sequence is an immutable tuple that every change replaces,
    so readers holding an earlier `cards` snapshot keep a consistent view.
    Failed operations leave the deck untouched.

    Usage:
        deck = Deck("PAYROLL")
        deck.update_card(0, "       IDENTIFICATION DIVISION.")
        deck.add_card(Card.from_text("       PROGRAM-ID. PAYROLL."))
        data = deck.to_binary()
    """

    def __init__(self, name: str = DEFAULT_DECK_NAME):
        """
        Create a deck holding one blank card.

        Args:
            name: Display name of the deck
        """
        self.name = name
        now = datetime.now()
        self.metadata = DeckMetadata(created=now, modified=now)
        self._cards: tuple[Card, ...] = (Card(),)

    @classmethod
    def create(cls, name: str = DEFAULT_DECK_NAME) -> "Deck":
        """Create a deck holding one blank card."""
        return cls(name)

    @property
    def cards(self) -> tuple[Card, ...]:
        """The cards in deck order."""
        return self._cards

    def add_card(self, card: Optional[Card] = None) -> None:
        """
        Append a card to the deck.

        Args:
            card: Card to add; a blank card if omitted
        """
        self._cards = self._cards + (card if card is not None else Card(),)
        self.metadata.touch()

    def remove_card(self, index: int) -> None:
        """
        Remove the card at an index.

        Raises:
            LastCardError: If this is the only card in the deck
            CardIndexError: If index is out of range
        """
        if len(self._cards) <= 1:
            raise LastCardError()
        self._check_index(index)
        self._cards = self._cards[:index] + self._cards[index + 1 :]
        self.metadata.touch()

    def get_card(self, index: int) -> Card:
        """
        Get the card at an index.

        The card belongs to the deck. To change it, build a new card and
        install it with update_card or a new deck.

        Raises:
            CardIndexError: If index is out of range
        """
        self._check_index(index)
        return self._cards[index]

    def update_card(self, index: int, text: str) -> None:
        """
        Replace the card at an index with one punched from text.

        Raises:
            CardIndexError: If index is out of range
        """
        self._check_index(index)
        cards = list(self._cards)
        cards[index] = Card.from_text(text)
        self._cards = tuple(cards)
        self.metadata.touch()

    def copy(self, name: Optional[str] = None) -> "Deck":
        """
        Return a new deck with the same cards.

        Cards are copied so the two decks share nothing mutable.

        Args:
            name: Name of the copy; defaults to this deck's name
        """
        duplicate = Deck(self.name if name is None else name)
        duplicate._cards = tuple(card.copy() for card in self._cards)
        duplicate.metadata = DeckMetadata(
            created=self.metadata.created,
            modified=self.metadata.modified,
        )
        return duplicate

    def to_binary(self) -> bytes:
        """Concatenate the 108-byte images of all cards in deck order."""
        return b"".join(card.to_binary() for card in self._cards)

    @classmethod
    def from_binary(cls, data: BytesLike, name: str = LOADED_DECK_NAME) -> "Deck":
        """
        Decode a deck from concatenated 108-byte card images.

        Args:
            data: Binary deck data
            name: Name for the loaded deck

        Returns:
            A deck with one card per 108-byte block

        Raises:
            BinaryFormatError: If data is empty or not a multiple of 108 bytes
        """
        data = bytes(data)
        if len(data) == 0:
            raise BinaryFormatError(
                actual_length=0,
                expected=f"a non-zero multiple of {CARD_BYTES} bytes",
                message="Binary data is empty",
            )
        if len(data) % CARD_BYTES != 0:
            raise BinaryFormatError(
                actual_length=len(data),
                expected=f"a multiple of {CARD_BYTES} bytes",
                message=(
                    f"Invalid deck file: size must be multiple of {CARD_BYTES} "
                    f"bytes, got {len(data)}"
                ),
            )

        card_count = len(data) // CARD_BYTES
        deck = cls(name)
        deck._cards = tuple(
            Card.from_binary(data[i * CARD_BYTES : (i + 1) * CARD_BYTES])
            for i in range(card_count)
        )
        logger.debug("Decoded deck %r with %d cards", name, card_count)
        return deck

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._cards):
            raise CardIndexError(index, len(self._cards))

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def __repr__(self) -> str:
        return f"Deck({self.name!r}, {len(self._cards)} cards)"
