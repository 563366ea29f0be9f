"""
Custom exceptions for pyforestry.
Provides domain-specific error handling with informative messages.
"""
from typing import Any


class ForestryError(Exception):
    """Base exception for all pyforestry errors."""
    pass


class ConfigurationError(ForestryError):
    """Raised when there are configuration-related issues."""
    pass


class ParameterError(ForestryError):
    """Raised when parameters are invalid or out of bounds."""
    pass


class InvalidParameterError(ParameterError):
    """Raised when a parameter value is invalid."""
    def __init__(self, param_name: str, value: Any, reason: str = ""):
        self.param_name = param_name
        self.value = value
        self.reason = reason
        message = f"Invalid value for parameter '{param_name}': {value}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class ForestError(ForestryError):
    """Raised when forest-level operations fail."""
    pass


class InvalidIndexError(ForestError):
    """Raised when a tree index falls outside the forest."""
    def __init__(self, index: Any, size: int):
        self.index = index
        self.size = size
        if size:
            bounds = f"valid indices are 0 to {size - 1}"
        else:
            bounds = "the forest is empty"
        super().__init__(f"Invalid tree index {index}: {bounds}")


class NoCurrentForestError(ForestError):
    """Raised when a command needs a forest but none is loaded."""
    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot perform '{operation}' without a current forest. "
                         f"Load a forest first.")


class DataError(ForestryError):
    """Raised when there are data-related issues."""
    pass


class ForestNotFoundError(DataError):
    """Raised when a saved forest file does not exist."""
    def __init__(self, file_path: str):
        self.file_path = file_path
        super().__init__(f"Forest file not found: {file_path}")


class ForestParseError(DataError):
    """Raised when a forest file exists but does not hold forest records."""
    def __init__(self, file_path: str, reason: str):
        self.file_path = file_path
        self.reason = reason
        super().__init__(f"Could not parse forest file {file_path}: {reason}")


class ForestIOError(DataError):
    """Raised when reading or writing a forest file fails."""
    def __init__(self, file_path: str, operation: str, reason: str):
        self.file_path = file_path
        self.operation = operation
        self.reason = reason
        super().__init__(f"Failed to {operation} forest file {file_path}: {reason}")


class InvalidDataError(DataError):
    """Raised when data is malformed or invalid."""
    def __init__(self, data_description: str, reason: str):
        self.data_description = data_description
        self.reason = reason
        super().__init__(f"Invalid {data_description}: {reason}")


# Validation utilities
def validate_non_negative(value: float, param_name: str) -> float:
    """Validate that a value is zero or greater.

    Args:
        value: Value to validate
        param_name: Parameter name for error message

    Returns:
        The validated value

    Raises:
        InvalidParameterError: If value is negative or not a number
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidParameterError(param_name, value, "must be a number")
    if value < 0:
        raise InvalidParameterError(param_name, value, "must not be negative")
    return value

