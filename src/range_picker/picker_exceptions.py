"""
Range Picker Exception Classes

Exception hierarchy for the range picker. The selection core itself never
raises: malformed dates degrade to "absent" and rejected interactions are
silent no-ops. These exceptions cover explicit construction, configuration
and API misuse.
"""

from typing import Optional, Dict, Any


class RangePickerException(Exception):
    """
    Base exception for all range picker errors.

    Provides error code support and structured error messages.
    """

    def __init__(self, message: str, error_code: Optional[str] = None):
        """
        Initialize range picker exception.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
        """
        self.message = message
        self.error_code = error_code
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with optional error code."""
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class InvalidDateException(RangePickerException):
    """
    Exception raised when a Day is constructed from impossible components.

    Parsing loose input never raises this; see date_models.parse_day.
    """

    def __init__(self, year: Optional[int] = None, month: Optional[int] = None,
                 day: Optional[int] = None, date_string: Optional[str] = None):
        self.year = year
        self.month = month
        self.day = day
        self.date_string = date_string

        if date_string:
            message = f"Invalid date string: '{date_string}'"
        elif year is not None and month is not None and day is not None:
            message = f"Invalid date: {year}-{month:02d}-{day:02d}"
        else:
            message = "Invalid date provided"

        super().__init__(message, "INVALID_DATE")

    @property
    def date_components(self) -> tuple:
        """Get the date components as a tuple."""
        return (self.year, self.month, self.day)


class PickerConfigurationException(RangePickerException):
    """
    Exception raised when picker configuration is invalid.
    """

    def __init__(self, message: str, config_key: Optional[str] = None,
                 config_value: Optional[Any] = None):
        """
        Initialize picker configuration exception.

        Args:
            message: Description of the configuration problem
            config_key: The configuration key that caused the error
            config_value: The invalid configuration value
        """
        self.config_key = config_key
        self.config_value = config_value

        full_message = f"Picker configuration error: {message}"
        if config_key:
            full_message += f". Key: '{config_key}'"
        if config_value is not None:
            full_message += f". Value: {config_value!r}"

        super().__init__(full_message, "INVALID_CONFIG")


class PickerStateException(RangePickerException):
    """
    Exception raised when the picker API is used against its current state.
    """

    def __init__(self, message: str, state_info: Optional[Dict[str, Any]] = None):
        self.state_info = state_info or {}

        full_message = f"Picker state error: {message}"
        if self.state_info:
            state_details = ", ".join(f"{k}={v}" for k, v in self.state_info.items())
            full_message += f". Current state: {state_details}"

        super().__init__(full_message, "INVALID_STATE")


# Exception Handling Utilities

def handle_picker_exception(exception: RangePickerException) -> str:
    """
    Handle range picker exceptions with user-friendly recovery suggestions.

    Args:
        exception: The range picker exception to handle

    Returns:
        User-friendly error message with recovery suggestions
    """
    base_message = str(exception)

    if isinstance(exception, InvalidDateException):
        recovery_msg = "Please check that the date exists and is properly formatted."
    elif isinstance(exception, PickerConfigurationException):
        recovery_msg = "Please check the picker configuration settings."
    elif isinstance(exception, PickerStateException):
        recovery_msg = "Please check the number of displayed months."
    else:
        recovery_msg = "Please try the operation again."

    return f"{base_message} {recovery_msg}"
