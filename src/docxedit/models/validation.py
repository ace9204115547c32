"""Validation result models returned by the XML checker."""

from dataclasses import dataclass, field
from typing import Literal

Severity = Literal["error", "warning"]


@dataclass(frozen=True)
class ValidationError:
    """A single well-formedness problem, positioned 1-based."""

    line: int
    column: int
    message: str
    severity: Severity = "error"

    def to_dict(self) -> dict:
        return {
            "line": self.line,
            "column": self.column,
            "message": self.message,
            "severity": self.severity,
        }


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one validation run.

    Results are never updated in place; every run produces a new one.
    """

    is_valid: bool
    errors: tuple[ValidationError, ...] = field(default_factory=tuple)

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(is_valid=True, errors=())

    @classmethod
    def failed(cls, error: ValidationError) -> "ValidationResult":
        return cls(is_valid=False, errors=(error,))

    def to_dict(self) -> dict:
        """Render the camelCase shape used by editor front-ends."""
        return {
            "isValid": self.is_valid,
            "errors": [e.to_dict() for e in self.errors],
        }
