"""
Serialization of a receipt's sundaes into the single ``sundaes`` string
attribute.

The stored form is a JSON array with one object per sundae::

    [{"name": "Banana Split", "price": "6.25",
      "flavors": ["vanilla"], "toppings": ["fudge"]}]

Prices are written as decimal strings so precision survives the round trip.
``None`` encodes to ``""`` while an empty list encodes to ``"[]"``; both
decode back to an empty list.
"""

import json
from decimal import Decimal
from typing import Any, List, Optional, Sequence

from sundae_dynamo.data.shared_exceptions import SerializationError
from sundae_dynamo.entities.sundae import Sundae


def encode_sundaes(sundaes: Optional[Sequence[Sundae]]) -> str:
    """Converts a list of sundaes to the string stored in DynamoDB.

    Args:
        sundaes (Sequence[Sundae] | None): The sundaes to serialize.

    Returns:
        str: The JSON text, or ``""`` when ``sundaes`` is None.

    Raises:
        SerializationError: When an element is not a Sundae or holds a value
            JSON cannot represent.
    """
    if sundaes is None:
        return ""

    try:
        payload = [_sundae_to_json(sundae) for sundae in sundaes]
        return json.dumps(payload, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(str(e)) from e


def decode_sundaes(blob: Optional[str]) -> List[Sundae]:
    """Converts the stored string back to a list of sundaes.

    Args:
        blob (str | None): The stored JSON text.

    Returns:
        list[Sundae]: The sundaes in stored order; empty for ``None``, empty
            or whitespace-only text.

    Raises:
        SerializationError: When the text is not valid JSON or does not
            describe a list of sundaes.
    """
    if blob is None or not blob.strip():
        return []

    try:
        payload = json.loads(blob, parse_float=Decimal)
        if not isinstance(payload, list):
            raise ValueError(
                f"expected a JSON array, got {type(payload).__name__}"
            )
        return [_json_to_sundae(element) for element in payload]
    except (TypeError, ValueError, KeyError) as e:
        # json.JSONDecodeError is a ValueError
        raise SerializationError(str(e)) from e


def _sundae_to_json(sundae: Any) -> dict:
    if not isinstance(sundae, Sundae):
        raise TypeError(
            f"cannot serialize {type(sundae).__name__}, expected Sundae"
        )
    if not isinstance(sundae.price, Decimal) or not sundae.price.is_finite():
        raise ValueError(f"price of {sundae.name!r} is not a finite decimal")
    return sundae.to_dict()


def _json_to_sundae(element: Any) -> Sundae:
    if not isinstance(element, dict):
        raise ValueError(
            f"expected a JSON object, got {type(element).__name__}"
        )
    price = element["price"]
    if isinstance(price, int) and not isinstance(price, bool):
        price = Decimal(price)
    return Sundae(
        name=element["name"],
        price=price,
        flavors=element.get("flavors", []),
        toppings=element.get("toppings", []),
    )
