"""
Pytest configuration and fixtures for punch card tests.
"""

import logging

import pytest

from punchcard.core.card import Card
from punchcard.core.deck import Deck
from punchcard.logging_config import ROOT_LOGGER


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo CLI logging setup so caplog sees package records."""
    yield
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def sample_card_text():
    """A typical 80-column COBOL card with a sequence tag in 73-80."""
    return "       MOVE WS-INPUT TO WS-OUTPUT.".ljust(72) + "PAYR0010"


@pytest.fixture
def sample_lines():
    """A short program, one card per line."""
    return [
        "       IDENTIFICATION DIVISION.",
        "       PROGRAM-ID. HELLO.",
        "       PROCEDURE DIVISION.",
        "           DISPLAY 'HELLO, WORLD'.",
        "           STOP RUN.",
    ]


@pytest.fixture
def sample_deck(sample_lines):
    """A deck punched from sample_lines."""
    deck = Deck("HELLO")
    deck.update_card(0, sample_lines[0])
    for line in sample_lines[1:]:
        deck.add_card(Card.from_text(line))
    return deck


@pytest.fixture
def deck_dir(tmp_path):
    """Create a temporary directory for deck files."""
    decks = tmp_path / "decks"
    decks.mkdir()
    return decks


@pytest.fixture
def sample_deck_file(deck_dir, sample_deck):
    """Write sample_deck to a .deck file."""
    path = deck_dir / "HELLO.deck"
    path.write_bytes(sample_deck.to_binary())
    return path


@pytest.fixture
def sample_text_file(tmp_path, sample_lines):
    """Write sample_lines to a text file."""
    path = tmp_path / "hello.txt"
    path.write_text("\n".join(sample_lines) + "\n", encoding="utf-8")
    return path
