"""
Deck Listing - Renders decks as text.

Produces an 80-80 style listing: one line per card, optionally numbered,
with the card text between bars so trailing blanks stay visible.
"""

from punchcard.core.card import BINARY_COLUMNS
from punchcard.core.deck import Deck


def deck_to_lines(deck: Deck, strip_trailing: bool = True) -> list[str]:
    """
    Read every card of a deck as a line of text.

    Args:
        deck: Deck to read
        strip_trailing: Remove trailing blanks from each line

    Returns:
        One string per card, in deck order
    """
    lines = [card.to_text() for card in deck.cards]
    if strip_trailing:
        lines = [line.rstrip() for line in lines]
    return lines


def format_listing(
    deck: Deck,
    numbered: bool = True,
    show_overflow: bool = False,
) -> str:
    """
    Format a printable listing of a deck.

    Args:
        deck: Deck to list
        numbered: Prefix each card with its 1-based number
        show_overflow: Print columns 73-80 apart from the stored columns

    Returns:
        The listing, ending with a newline
    """
    card_word = "card" if len(deck) == 1 else "cards"
    out = [f"{deck.name} ({len(deck)} {card_word})"]

    for number, card in enumerate(deck.cards, 1):
        text = card.to_text()
        if show_overflow:
            body = f"|{text[:BINARY_COLUMNS]}|{text[BINARY_COLUMNS:]}|"
        else:
            body = f"|{text}|"
        out.append(f"{number:04d} {body}" if numbered else body)

    return "\n".join(out) + "\n"
