"""
Conversion between timezone-aware datetimes and the text stored in the
``purchaseDate`` attribute.

The same text form is used for persisted values, for filter expression
literals and for exclusive start keys, so a string comparison made by
DynamoDB has to agree with chronological order. Every datetime is therefore
normalized to UTC and written with a fixed width::

    YYYY-MM-DDTHH:MM:SS.ffffffZ

Zero padding on every field and a single fixed offset make lexical order
equal chronological order for every year from 0001 to 9999.
"""

from datetime import datetime, timezone

PURCHASE_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def format_purchase_date(value: datetime) -> str:
    """Converts a timezone-aware datetime to its sortable text form.

    Args:
        value (datetime): The datetime to convert. Must carry a tzinfo.

    Returns:
        str: The UTC timestamp, e.g. ``2024-03-01T17:05:09.000123Z``.

    Raises:
        ValueError: When the datetime is naive or not a datetime.
    """
    if not isinstance(value, datetime):
        raise ValueError("purchase_date must be a datetime")
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError("purchase_date must be timezone-aware")
    utc = value.astimezone(timezone.utc)
    # strftime does not zero pad years below 1000 on every platform
    return (
        f"{utc.year:04d}-{utc.month:02d}-{utc.day:02d}T"
        f"{utc.hour:02d}:{utc.minute:02d}:{utc.second:02d}."
        f"{utc.microsecond:06d}Z"
    )


def parse_purchase_date(text: str) -> datetime:
    """Converts stored text back to a UTC datetime.

    Raises:
        ValueError: When the text is not in the stored format.
    """
    if not isinstance(text, str):
        raise ValueError("purchase_date text must be a string")
    try:
        parsed = datetime.strptime(text, PURCHASE_DATE_FORMAT)
    except ValueError as e:
        raise ValueError(
            f"purchase_date must match {PURCHASE_DATE_FORMAT}, got {text!r}"
        ) from e
    return parsed.replace(tzinfo=timezone.utc)
