"""Rename session data models."""

from enum import Enum

from pydantic import BaseModel, Field


class ValidationReason(str, Enum):
    """Outcome of validating a single proposed IED name.

    Rules are evaluated in declaration order (after VALID) and the first failing
    rule decides the reason.
    """

    VALID = "VALID"
    EMPTY = "EMPTY"
    PATTERN_MISMATCH = "PATTERN_MISMATCH"
    LENGTH_OUT_OF_RANGE = "LENGTH_OUT_OF_RANGE"
    DUPLICATE = "DUPLICATE"

    @property
    def message(self) -> str:
        """User-facing explanation of the reason."""
        return _REASON_MESSAGES[self]


_REASON_MESSAGES = {
    ValidationReason.VALID: "",
    ValidationReason.EMPTY: "You must fill in this field.",
    ValidationReason.PATTERN_MISMATCH: "Please use A-Z, 0-9 and _ and start with a letter.",
    ValidationReason.LENGTH_OUT_OF_RANGE: "IED name must be between 1 and 63 characters.",
    ValidationReason.DUPLICATE: "IED name must be unique.",
}


class RenameOp(BaseModel):
    """A single IED rename operation."""

    old_name: str = Field(description="Current name of the IED in the source document")
    new_name: str = Field(description="Name the IED should be renamed to")

    def __str__(self) -> str:
        return f"RenameOp('{self.old_name}' -> '{self.new_name}')"

    def as_tuple(self) -> tuple[str, str]:
        return (self.old_name, self.new_name)


class ValidationResult(BaseModel):
    """Result of editing one item of a rename session."""

    identity: str = Field(description="Original name of the edited IED")
    value: str = Field(description="Proposed name after the edit")
    reason: ValidationReason = Field(description="Validation outcome for the edited IED")
    is_dirty: bool = Field(description="Whether the proposed name differs from the original name")
    all_valid: bool = Field(description="Whether every IED in the session is valid after the edit")

    @property
    def is_valid(self) -> bool:
        return self.reason is ValidationReason.VALID


class ItemView(BaseModel):
    """Read-only projection of a session item for display surfaces."""

    identity: str
    current_value: str
    reason: ValidationReason
    is_dirty: bool
    visible: bool = True
    first_line: str = ""
    second_line: str = ""

    @property
    def is_valid(self) -> bool:
        return self.reason is ValidationReason.VALID
