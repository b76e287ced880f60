"""
Deck Validator - Validates binary deck files.

This module handles:
- Checking deck files exist and can be read
- Checking file sizes are a non-zero multiple of 108 bytes
- Warning about punch combinations no character maps to
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional

from punchcard.core.card import BINARY_COLUMNS, CARD_BYTES, Card
from punchcard.core.hollerith import HOLLERITH_DECODING
from punchcard.storage.deck_file import ACCEPTED_EXTENSIONS


class ValidationSeverity(Enum):
    """Severity levels for validation issues."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class ValidationIssue:
    """A single validation issue."""
    severity: ValidationSeverity
    message: str
    file_path: Optional[Path] = None
    card_number: Optional[int] = None
    column_number: Optional[int] = None

    def __str__(self):
        parts = [f"[{self.severity.value.upper()}]"]
        if self.file_path:
            parts.append(f"{self.file_path.name}")
        if self.card_number:
            parts.append(f"card {self.card_number}")
        if self.column_number:
            parts.append(f"column {self.column_number}")
        parts.append(self.message)
        return " ".join(parts)


@dataclass
class ValidationResult:
    """Result of validation."""
    issues: list[ValidationIssue] = field(default_factory=list)
    files_validated: int = 0
    cards_validated: int = 0

    @property
    def is_valid(self) -> bool:
        """Check if validation passed (no errors)."""
        return not any(
            issue.severity == ValidationSeverity.ERROR for issue in self.issues
        )

    @property
    def errors(self) -> list[ValidationIssue]:
        """Get all error issues."""
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        """Get all warning issues."""
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    def add_error(self, message: str, **kwargs) -> None:
        """Add an error issue."""
        self.issues.append(ValidationIssue(
            severity=ValidationSeverity.ERROR,
            message=message,
            **kwargs
        ))

    def add_warning(self, message: str, **kwargs) -> None:
        """Add a warning issue."""
        self.issues.append(ValidationIssue(
            severity=ValidationSeverity.WARNING,
            message=message,
            **kwargs
        ))

    def add_info(self, message: str, **kwargs) -> None:
        """Add an info issue."""
        self.issues.append(ValidationIssue(
            severity=ValidationSeverity.INFO,
            message=message,
            **kwargs
        ))

    def merge(self, other: "ValidationResult") -> None:
        """Fold another result into this one."""
        self.issues.extend(other.issues)
        self.files_validated += other.files_validated
        self.cards_validated += other.cards_validated


@dataclass
class ValidatorConfig:
    """Configuration for validator."""
    check_punch_codes: bool = True
    extensions: tuple[str, ...] = ACCEPTED_EXTENSIONS


class DeckValidator:
    """
    Validates binary deck files.

    Usage:
        validator = DeckValidator()
        result = validator.validate_directory(Path("decks"))
    """

    def __init__(self, config: Optional[ValidatorConfig] = None):
        """
        Initialize the validator.

        Args:
            config: Validator configuration
        """
        self.config = config or ValidatorConfig()

    def validate_file(self, file_path: Path) -> ValidationResult:
        """
        Validate a single deck file.

        Args:
            file_path: Path to file to validate

        Returns:
            ValidationResult with any issues found
        """
        result = ValidationResult()

        if not file_path.exists():
            result.add_error("File does not exist", file_path=file_path)
            return result

        try:
            data = file_path.read_bytes()
        except OSError as e:
            result.add_error(f"Cannot read file: {e}", file_path=file_path)
            return result

        result.files_validated = 1

        if len(data) == 0:
            result.add_error("Deck file is empty", file_path=file_path)
            return result

        if len(data) % CARD_BYTES != 0:
            result.add_error(
                f"Size {len(data)} bytes is not a multiple of {CARD_BYTES}",
                file_path=file_path,
            )
            return result

        card_count = len(data) // CARD_BYTES
        result.cards_validated = card_count

        if self.config.check_punch_codes:
            for number in range(1, card_count + 1):
                block = data[(number - 1) * CARD_BYTES : number * CARD_BYTES]
                self._validate_punch_codes(file_path, number, Card.from_binary(block), result)

        return result

    def validate_files(self, files: Iterable[Path]) -> ValidationResult:
        """
        Validate multiple deck files.

        Args:
            files: Paths of the files to validate

        Returns:
            Combined ValidationResult
        """
        combined = ValidationResult()
        for file_path in files:
            combined.merge(self.validate_file(file_path))
        return combined

    def validate_directory(self, directory: Path) -> ValidationResult:
        """
        Validate all deck files in a directory.

        Args:
            directory: Directory to validate

        Returns:
            ValidationResult for all files
        """
        files = []
        for ext in self.config.extensions:
            files.extend(directory.glob(f"*{ext}"))
        result = self.validate_files(sorted(files))
        if not files:
            result.add_info(f"No deck files found in {directory}")
        return result

    def _validate_punch_codes(
        self,
        file_path: Path,
        card_number: int,
        card: Card,
        result: ValidationResult,
    ) -> None:
        """Warn about columns whose punches match no character."""
        for index, column in enumerate(card.columns[:BINARY_COLUMNS]):
            if column.is_blank():
                continue
            if column.pattern.rows not in HOLLERITH_DECODING:
                result.add_warning(
                    f"Unknown punch combination {column.pattern} reads as space",
                    file_path=file_path,
                    card_number=card_number,
                    column_number=index + 1,
                )
