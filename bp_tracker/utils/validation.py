from abc import ABC, abstractmethod
import re
from typing import Any, Dict, List, Mapping, Optional, Tuple

from bp_tracker.models.reading import READING_INPUT_FIELDS, ReadingInput

WHOLE_NUMBER_MESSAGE = "Please enter valid whole numbers for all fields."


class FormValidationError(ValueError):
    """Raised when entry-form text cannot be turned into a ReadingInput."""
    def __init__(self, message: str, errors: Optional[List[Tuple[str, str]]] = None):
        self.message = message
        self.errors = errors or []
        super().__init__(message)

    @property
    def fields(self) -> List[str]:
        return [field for field, _ in self.errors]


class ValidationRule(ABC):
    """Abstract base class for validation rules."""
    @abstractmethod
    def validate(self, data: Mapping[str, Any], context: 'ValidationContext') -> None:
        pass


class RequiredFieldRule(ValidationRule):
    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        self.message = message or f"Field '{field}' is required."
    def validate(self, data: Mapping[str, Any], context: 'ValidationContext') -> None:
        value = data.get(self.field)
        if value is None or (isinstance(value, str) and value == ""):
            context.add_error(self.field, self.message)


class WholeNumberRule(ValidationRule):
    """Accepts an optional sign followed by digits, nothing else."""
    PATTERN = re.compile(r"[+-]?\d+")

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        self.message = message or f"Field '{field}' must be a whole number."
    def validate(self, data: Mapping[str, Any], context: 'ValidationContext') -> None:
        value = data.get(self.field)
        if value is None or value == "":
            return
        if isinstance(value, bool):
            context.add_error(self.field, self.message)
        elif isinstance(value, int):
            return
        elif not self.PATTERN.fullmatch(str(value)):
            context.add_error(self.field, self.message)


class ValidationContext:
    """Stores validation errors and state."""
    def __init__(self):
        self.errors: List[Tuple[str, str]] = []
    def add_error(self, field: str, message: str):
        self.errors.append((field, message))
    def has_errors(self) -> bool:
        return len(self.errors) > 0
    def get_errors(self) -> List[Tuple[str, str]]:
        return self.errors


class ValidationEngine:
    """Runs multiple validation rules against data."""
    def __init__(self, rules: List[ValidationRule]):
        self.rules = rules
    def validate(self, data: Mapping[str, Any]) -> ValidationContext:
        context = ValidationContext()
        for rule in self.rules:
            rule.validate(data, context)
        return context


def reading_form_engine() -> ValidationEngine:
    rules: List[ValidationRule] = []
    for field in READING_INPUT_FIELDS:
        rules.append(RequiredFieldRule(field))
        rules.append(WholeNumberRule(field))
    return ValidationEngine(rules)


def parse_reading_form(fields: Mapping[str, Any]) -> ReadingInput:
    """
    Turn the nine entry-form values into a ReadingInput.

    Raises FormValidationError listing every offending field when any value
    is missing or is not a whole number.
    """
    context = reading_form_engine().validate(fields)
    if context.has_errors():
        raise FormValidationError(WHOLE_NUMBER_MESSAGE, context.get_errors())
    values: Dict[str, int] = {field: int(fields[field]) for field in READING_INPUT_FIELDS}
    return ReadingInput(**values)
