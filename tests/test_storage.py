"""
Tests for deck files: reading, writing, validation and listings.
"""

from datetime import datetime
from pathlib import Path

import pytest

from punchcard.core.card import Card
from punchcard.core.deck import Deck
from punchcard.exceptions import BinaryFormatError, DeckFileError
from punchcard.storage.deck_file import (
    DeckWriter,
    WriterConfig,
    deck_name_from_path,
    default_deck_filename,
    read_deck,
    write_deck,
)
from punchcard.storage.listing import deck_to_lines, format_listing
from punchcard.storage.validator import (
    DeckValidator,
    ValidationIssue,
    ValidationResult,
    ValidationSeverity,
    ValidatorConfig,
)


class TestDeckNames:
    """Tests for deck names and file names."""

    def test_name_strips_deck_extension(self):
        assert deck_name_from_path("decks/PAYROLL.deck") == "PAYROLL"

    def test_name_strips_bin_extension(self):
        assert deck_name_from_path(Path("sample.BIN")) == "sample"

    def test_name_keeps_other_extensions(self):
        assert deck_name_from_path("program.txt") == "program.txt"

    def test_name_custom_extensions(self):
        assert deck_name_from_path("x.crd", extensions=[".crd"]) == "x"

    def test_name_fallback(self):
        assert deck_name_from_path(".deck", default="Recovered") == "Recovered"

    def test_default_filename(self):
        now = datetime(2024, 5, 1, 13, 45, 2)
        assert default_deck_filename(now) == "deck-2024-05-01-134502.deck"

    def test_default_filename_now(self):
        name = default_deck_filename()
        assert name.startswith("deck-")
        assert name.endswith(".deck")


class TestReadDeck:
    """Tests for loading deck files."""

    def test_read_deck(self, sample_deck_file, sample_lines):
        deck = read_deck(sample_deck_file)
        assert deck.name == "HELLO"
        assert len(deck) == 5
        assert deck.get_card(1).to_text().rstrip() == sample_lines[1]

    def test_read_deck_name_override(self, sample_deck_file):
        assert read_deck(sample_deck_file, name="Sample Program").name == "Sample Program"

    def test_read_missing_file(self, deck_dir):
        with pytest.raises(DeckFileError) as exc_info:
            read_deck(deck_dir / "missing.deck")
        assert exc_info.value.path == deck_dir / "missing.deck"
        assert exc_info.value.expected == "a readable deck file"

    def test_read_empty_file(self, deck_dir):
        path = deck_dir / "empty.deck"
        path.write_bytes(b"")
        with pytest.raises(DeckFileError, match="empty"):
            read_deck(path)

    def test_read_bad_size(self, deck_dir):
        path = deck_dir / "bad.deck"
        path.write_bytes(bytes(100))
        with pytest.raises(BinaryFormatError) as exc_info:
            read_deck(path)
        assert exc_info.value.actual_length == 100
        assert exc_info.value.expected == "a multiple of 108 bytes"
        assert "bad.deck" in str(exc_info.value)

    def test_read_six_card_file(self, deck_dir):
        """A 648-byte file holds six cards."""
        path = deck_dir / "six.deck"
        path.write_bytes(bytes(648))
        deck = read_deck(path)
        assert len(deck) == 6
        assert all(len(card.to_text()) == 80 for card in deck)


class TestDeckWriter:
    """Tests for saving deck files."""

    def test_write_deck(self, deck_dir, sample_deck):
        result = write_deck(sample_deck, deck_dir / "out.deck")
        assert result.success
        assert result.cards_written == 5
        assert result.bytes_written == 540
        assert (deck_dir / "out.deck").read_bytes() == sample_deck.to_binary()

    def test_refuses_overwrite(self, sample_deck_file, sample_deck):
        sample_deck_file.write_bytes(b"keep")
        result = write_deck(sample_deck, sample_deck_file)
        assert not result.success
        assert "already exists" in result.error_message
        assert sample_deck_file.read_bytes() == b"keep"

    def test_overwrite(self, sample_deck_file, sample_deck):
        sample_deck_file.write_bytes(b"old")
        result = write_deck(sample_deck, sample_deck_file, overwrite=True)
        assert result.success
        assert len(sample_deck_file.read_bytes()) == 540

    def test_default_name_in_output_directory(self, deck_dir):
        writer = DeckWriter(WriterConfig(output_directory=deck_dir))
        result = writer.write_deck(Deck())
        assert result.success
        assert result.output_path.parent == deck_dir
        assert result.output_path.name.startswith("deck-")
        assert writer.get_results() == [result]

    def test_creates_directories(self, tmp_path):
        writer = DeckWriter(WriterConfig(output_directory=tmp_path / "a" / "b"))
        result = writer.write_deck(Deck(), "x.deck")
        assert result.success
        assert (tmp_path / "a" / "b" / "x.deck").exists()

    def test_write_then_read(self, deck_dir, sample_deck):
        write_deck(sample_deck, deck_dir / "again.deck")
        loaded = read_deck(deck_dir / "again.deck")
        assert loaded.name == "again"
        assert deck_to_lines(loaded) == deck_to_lines(sample_deck)


class TestValidationResult:
    """Tests for ValidationResult bookkeeping."""

    def test_empty_result_is_valid(self):
        assert ValidationResult().is_valid

    def test_error_makes_invalid(self):
        result = ValidationResult()
        result.add_warning("just a warning")
        assert result.is_valid
        result.add_error("broken")
        assert not result.is_valid
        assert len(result.errors) == 1
        assert len(result.warnings) == 1

    def test_issue_str(self):
        issue = ValidationIssue(
            severity=ValidationSeverity.WARNING,
            message="odd punch",
            file_path=Path("x.deck"),
            card_number=2,
            column_number=7,
        )
        assert str(issue) == "[WARNING] x.deck card 2 column 7 odd punch"


class TestDeckValidator:
    """Tests for deck file validation."""

    def test_valid_file(self, sample_deck_file):
        result = DeckValidator().validate_file(sample_deck_file)
        assert result.is_valid
        assert result.files_validated == 1
        assert result.cards_validated == 5
        assert not result.warnings

    def test_missing_file(self, deck_dir):
        result = DeckValidator().validate_file(deck_dir / "none.deck")
        assert not result.is_valid
        assert "does not exist" in result.errors[0].message

    def test_empty_file(self, deck_dir):
        path = deck_dir / "empty.deck"
        path.write_bytes(b"")
        result = DeckValidator().validate_file(path)
        assert not result.is_valid

    def test_bad_size(self, deck_dir):
        path = deck_dir / "bad.deck"
        path.write_bytes(bytes(109))
        result = DeckValidator().validate_file(path)
        assert not result.is_valid
        assert "109" in result.errors[0].message

    def test_unknown_punches_warned(self, deck_dir):
        data = bytearray(108)
        data[0] = 0b00000111  # rows 12, 11 and 0 in column 1
        path = deck_dir / "odd.deck"
        path.write_bytes(bytes(data))
        result = DeckValidator().validate_file(path)
        assert result.is_valid
        assert len(result.warnings) == 1
        assert result.warnings[0].card_number == 1
        assert result.warnings[0].column_number == 1
        assert "12-11-0" in result.warnings[0].message

    def test_punch_check_disabled(self, deck_dir):
        path = deck_dir / "odd.deck"
        path.write_bytes(b"\xff" * 108)
        result = DeckValidator(ValidatorConfig(check_punch_codes=False)).validate_file(path)
        assert not result.issues

    def test_validate_directory(self, deck_dir, sample_deck_file):
        (deck_dir / "bad.bin").write_bytes(bytes(10))
        (deck_dir / "notes.txt").write_text("not a deck")
        result = DeckValidator().validate_directory(deck_dir)
        assert result.files_validated == 2
        assert result.cards_validated == 5
        assert len(result.errors) == 1

    def test_validate_empty_directory(self, tmp_path):
        result = DeckValidator().validate_directory(tmp_path)
        assert result.is_valid
        assert result.files_validated == 0
        assert result.issues[0].severity == ValidationSeverity.INFO


class TestListing:
    """Tests for deck listings."""

    def test_deck_to_lines(self, sample_deck, sample_lines):
        assert deck_to_lines(sample_deck) == sample_lines

    def test_deck_to_lines_keep_trailing(self, sample_deck):
        lines = deck_to_lines(sample_deck, strip_trailing=False)
        assert all(len(line) == 80 for line in lines)

    def test_format_listing(self, sample_deck):
        listing = format_listing(sample_deck)
        lines = listing.splitlines()
        assert lines[0] == "HELLO (5 cards)"
        assert lines[1].startswith("0001 |       IDENTIFICATION DIVISION.")
        assert lines[1].endswith("|")
        assert len(lines[1]) == len("0001 |") + 80 + 1
        assert listing.endswith("\n")

    def test_format_listing_single_card(self):
        assert format_listing(Deck("ONE")).startswith("ONE (1 card)\n")

    def test_format_listing_unnumbered(self):
        deck = Deck("X")
        deck.update_card(0, "ABC")
        assert format_listing(deck, numbered=False).splitlines()[1] == "|" + "ABC".ljust(80) + "|"

    def test_format_listing_overflow(self, sample_card_text):
        deck = Deck("X")
        deck.add_card(Card.from_text(sample_card_text))
        line = format_listing(deck, show_overflow=True).splitlines()[2]
        assert line.endswith("|PAYR0010|")
