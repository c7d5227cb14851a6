"""
Validation-related domain exceptions.
"""

from typing import Dict, Optional


class ValidationError(Exception):
    """Base exception for validation errors."""

    def __init__(self, message: str, errors: Optional[Dict[str, str]] = None):
        self.errors = errors or {}
        super().__init__(message)


class RequiredFieldError(ValidationError):
    """Raised when required field is missing."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(
            f"Required field '{field_name}' is missing",
            {field_name: f"{field_name} is required"},
        )


class InvalidFormatError(ValidationError):
    """Raised when field format is invalid."""

    def __init__(self, field_name: str, expected_format: str):
        self.field_name = field_name
        self.expected_format = expected_format
        super().__init__(
            f"Field '{field_name}' has invalid format, expected: {expected_format}",
            {field_name: f"Expected {expected_format}"},
        )


class MutuallyExclusiveFieldsError(ValidationError):
    """Raised when two fields that exclude each other are both set."""

    def __init__(self, first_field: str, second_field: str, error_key: str):
        self.first_field = first_field
        self.second_field = second_field
        message = f"Fields '{first_field}' and '{second_field}' cannot both be set"
        super().__init__(message, {error_key: message})
