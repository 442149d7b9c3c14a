from datetime import datetime
from typing import Any


def _repr_str(value: Any) -> str:
    """
    Return a string wrapped in single quotes, or the literal 'None' if value
    is None.
    """
    return "None" if value is None else f"'{value}'"


def format_type_error(name: str, value: Any, expected: type | tuple[type, ...]) -> str:
    """Return a standardized type error message."""
    if isinstance(expected, tuple):
        expected_names = ", ".join(t.__name__ for t in expected)
    else:
        expected_names = expected.__name__
    return f"{name} must be {expected_names}, got {type(value).__name__}"


def assert_type(
    name: str,
    value: Any,
    expected: type | tuple[type, ...],
    exc_type: type[Exception] = TypeError,
) -> None:
    """Raise an exception if ``value`` is not an instance of ``expected``."""
    if not isinstance(value, expected):
        raise exc_type(format_type_error(name, value, expected))


def assert_valid_customer_id(customer_id: Any) -> None:
    """
    Assert that the customer ID is a non-empty string.
    """
    if not isinstance(customer_id, str):
        raise ValueError("customer_id must be a string")
    if not customer_id.strip():
        raise ValueError("customer_id cannot be empty")


def assert_aware_datetime(name: str, value: Any) -> None:
    """
    Assert that the value is a timezone-aware datetime.
    """
    if not isinstance(value, datetime):
        raise ValueError(f"{name} must be a datetime")
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"{name} must be timezone-aware")
