"""
Immutable sundae value object.

A receipt owns an ordered list of these. They are never stored as their own
items; the whole list is serialized into the receipt's ``sundaes`` attribute
by :mod:`sundae_dynamo.utils.sundae_converter`.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Tuple

from sundae_dynamo.entities.util import _repr_str, assert_type


def _to_price(value: Any) -> Decimal:
    """Normalizes a price to a finite, non-negative Decimal."""
    # bool is an int subclass; float is binary and would drift
    if isinstance(value, (bool, float)):
        raise ValueError(
            f"price must be a Decimal, int or str, got {type(value).__name__}"
        )
    if not isinstance(value, Decimal):
        if not isinstance(value, (int, str)):
            raise ValueError(
                "price must be a Decimal, int or str, "
                f"got {type(value).__name__}"
            )
        try:
            value = Decimal(value)
        except InvalidOperation as e:
            raise ValueError(f"price is not a decimal number: {value!r}") from e
    if not value.is_finite():
        raise ValueError("price must be finite")
    if value < 0:
        raise ValueError("price must be non-negative")
    return value


def _to_descriptors(name: str, values: Any) -> Tuple[str, ...]:
    if isinstance(values, str) or not isinstance(values, (list, tuple)):
        raise ValueError(f"{name} must be a list or tuple of strings")
    for value in values:
        assert_type(name, value, str, ValueError)
    return tuple(values)


@dataclass(frozen=True)
class Sundae:
    """
    A sundae bought by a customer.

    Attributes:
        name (str): Menu name of the sundae.
        price (Decimal): Price charged, finite and non-negative.
        flavors (tuple[str, ...]): Ice cream flavors, in scoop order.
        toppings (tuple[str, ...]): Toppings, in the order they were added.
    """

    name: str
    price: Decimal
    flavors: Tuple[str, ...] = field(default_factory=tuple)
    toppings: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate and normalize (frozen dataclass workaround)."""
        assert_type("name", self.name, str, ValueError)
        if not self.name:
            raise ValueError("name cannot be empty")
        object.__setattr__(self, "price", _to_price(self.price))
        object.__setattr__(
            self, "flavors", _to_descriptors("flavors", self.flavors)
        )
        object.__setattr__(
            self, "toppings", _to_descriptors("toppings", self.toppings)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Returns the JSON-ready form; price is kept as a decimal string."""
        return {
            "name": self.name,
            "price": str(self.price),
            "flavors": list(self.flavors),
            "toppings": list(self.toppings),
        }

    def __repr__(self) -> str:
        return (
            "Sundae("
            f"name={_repr_str(self.name)}, "
            f"price={_repr_str(self.price)}, "
            f"flavors={list(self.flavors)}, "
            f"toppings={list(self.toppings)}"
            ")"
        )
